"""Tests for agent_installer.policy module."""

from unittest.mock import patch

import pytest

from agent_installer.models import BatchState, Decision, Mode
from agent_installer.policy import (
    ConsolePrompter,
    format_file_diff,
    prompt_user_collision,
    resolve,
    show_file_diff,
)

from conftest import ScriptedPrompter

INTERACTIVE = Mode(interactive=True)
BATCH = Mode(interactive=True, batch_mode=True)


class TestResolvePriority:
    """Tests for the flag precedence in resolve."""

    @pytest.mark.parametrize("mode, expected", [
        (Mode(dry_run=True, skip_existing=True, backup=True), Decision.OVERWRITE),
        (Mode(force=True, skip_existing=True, backup=True), Decision.OVERWRITE),
        (Mode(skip_existing=True, backup=True), Decision.SKIP),
        (Mode(backup=True), Decision.BACKUP),
        (Mode(interactive=False), Decision.SKIP),
    ])
    def test_flag_modes_never_prompt(self, entry, console, mode, expected):
        prompter = ScriptedPrompter([])

        assert resolve(entry, mode, BatchState(), prompter, console) is expected
        assert prompter.prompts == []

    def test_verbose_reports_reason(self, entry, verbose_console, capsys):
        resolve(entry, Mode(force=True), BatchState(), ScriptedPrompter([]), verbose_console)
        assert "FORCE mode" in capsys.readouterr().out

    def test_does_not_touch_files(self, entry, console):
        resolve(entry, BATCH, BatchState(), ScriptedPrompter(["o"]), console)
        assert entry.dest_path.read_text() == "old line\nshared\n"


class TestInteractiveChoices:
    """Tests for prompt answers in interactive mode."""

    @pytest.mark.parametrize("answer, expected", [
        ("s", Decision.SKIP),
        ("o", Decision.OVERWRITE),
        ("b", Decision.BACKUP),
        ("q", Decision.QUIT),
        ("O", Decision.OVERWRITE),
        (" b \n", Decision.BACKUP),
    ])
    def test_single_answer(self, entry, console, answer, expected):
        prompter = ScriptedPrompter([answer])
        assert resolve(entry, INTERACTIVE, BatchState(), prompter, console) is expected
        assert len(prompter.prompts) == 1

    def test_invalid_then_valid(self, entry, console, capsys):
        prompter = ScriptedPrompter(["x", "", "s"])

        decision = resolve(entry, INTERACTIVE, BatchState(), prompter, console)

        assert decision is Decision.SKIP
        assert len(prompter.prompts) == 3
        assert "Invalid choice" in capsys.readouterr().err

    def test_apply_to_all_unavailable_outside_batch_mode(self, entry, console):
        prompter = ScriptedPrompter(["a", "o"])
        state = BatchState()

        assert resolve(entry, INTERACTIVE, state, prompter, console) is Decision.OVERWRITE
        assert state.choice is None

    def test_prompt_lists_batch_option_only_in_batch_mode(self, entry, console, capsys):
        resolve(entry, INTERACTIVE, BatchState(), ScriptedPrompter(["s"]), console)
        assert "Apply choice to all" not in capsys.readouterr().out

        prompter = ScriptedPrompter(["s"])
        resolve(entry, BATCH, BatchState(), prompter, console)
        assert "Apply choice to all" in capsys.readouterr().out
        assert prompter.prompts == ["Choice [s/o/b/d/q/a]: "]

    def test_diff_then_choice(self, entry, console, capsys):
        prompter = ScriptedPrompter(["d", "o"])

        decision = resolve(entry, INTERACTIVE, BatchState(), prompter, console)

        assert decision is Decision.OVERWRITE
        out = capsys.readouterr().out
        assert "-old line" in out
        assert "+new line" in out

    def test_plain_answer_in_batch_mode_is_not_remembered(self, entry, console):
        state = BatchState()
        resolve(entry, BATCH, state, ScriptedPrompter(["o"]), console)
        assert state.choice is None


class TestBatchMode:
    """Tests for the apply-to-all flow."""

    def test_apply_to_all_records_choice(self, entry, console):
        state = BatchState()
        prompter = ScriptedPrompter(["a", "b"])

        assert resolve(entry, BATCH, state, prompter, console) is Decision.BACKUP
        assert state.choice is Decision.BACKUP
        assert prompter.prompts[1] == "Choice for all [s/o/b/q]: "

    def test_remembered_choice_skips_prompt(self, entry, console):
        state = BatchState(choice=Decision.SKIP)
        prompter = ScriptedPrompter([])

        for _ in range(3):
            assert resolve(entry, BATCH, state, prompter, console) is Decision.SKIP
        assert prompter.prompts == []

    def test_invalid_sub_choice_reprompts_sub_prompt_only(self, entry, console, capsys):
        state = BatchState()
        prompter = ScriptedPrompter(["a", "x", "d", "o"])

        assert resolve(entry, BATCH, state, prompter, console) is Decision.OVERWRITE
        assert prompter.prompts == [
            "Choice [s/o/b/d/q/a]: ",
            "Choice for all [s/o/b/q]: ",
            "Choice for all [s/o/b/q]: ",
            "Choice for all [s/o/b/q]: ",
        ]
        assert state.choice is Decision.OVERWRITE
        assert "Invalid choice" in capsys.readouterr().err

    def test_quit_at_sub_prompt_is_not_remembered(self, entry, console):
        state = BatchState()
        prompter = ScriptedPrompter(["a", "q"])

        assert resolve(entry, BATCH, state, prompter, console) is Decision.QUIT
        assert state.choice is None

    def test_remembered_choice_ignored_without_batch_mode(self, entry, console):
        state = BatchState(choice=Decision.SKIP)
        prompter = ScriptedPrompter(["o"])

        assert resolve(entry, INTERACTIVE, state, prompter, console) is Decision.OVERWRITE


class TestPromptUserCollision:
    """Tests for prompt_user_collision function."""

    def test_shows_filename(self, entry, console, capsys):
        prompt_user_collision(entry, False, BatchState(), ScriptedPrompter(["s"]), console)
        assert "File collision detected: c.md" in capsys.readouterr().out


class TestDiff:
    """Tests for diff display."""

    def test_format_file_diff(self, entry):
        diff = format_file_diff(entry.dest_path, entry.source_path)
        assert diff.startswith(f"--- {entry.dest_path}")
        assert f"+++ {entry.source_path}" in diff
        assert "-old line" in diff
        assert "+new line" in diff
        assert " shared" in diff

    def test_identical_files(self, entry, console, capsys):
        entry.dest_path.write_text(entry.source_path.read_text())
        show_file_diff(entry, console)
        assert "Files are identical" in capsys.readouterr().out

    def test_unreadable_destination(self, entry, console, capsys):
        entry.dest_path.unlink()
        show_file_diff(entry, console)
        assert "Cannot show differences" in capsys.readouterr().out


class TestConsolePrompter:
    """Tests for ConsolePrompter."""

    def test_reads_input(self):
        with patch("builtins.input", return_value="o") as mock_input:
            assert ConsolePrompter().ask("Choice: ") == "o"
        mock_input.assert_called_once_with("Choice: ")

    def test_eof_quits(self):
        with patch("builtins.input", side_effect=EOFError):
            assert ConsolePrompter().ask("Choice: ") == "q"

    def test_eof_at_apply_to_all_sub_prompt_quits(self, entry, console):
        state = BatchState()

        with patch("builtins.input", side_effect=["a", EOFError]) as mock_input:
            decision = resolve(entry, BATCH, state, ConsolePrompter(), console)

        assert decision is Decision.QUIT
        assert mock_input.call_count == 2
        assert state.choice is None
