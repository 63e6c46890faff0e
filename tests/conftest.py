"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from agent_installer.console import Console
from agent_installer.models import FileEntry


class ScriptedPrompter:
    """Prompter that replays predetermined answers."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def ask(self, message: str) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def console():
    """A colorless console writing to the captured stdout/stderr."""
    return Console(use_color=False)


@pytest.fixture
def verbose_console():
    return Console(verbose=True, use_color=False)


@pytest.fixture
def repo_layout(temp_dir):
    """Create a repository with .opencode/agent/ and an empty destination."""
    repo = temp_dir / "repo"
    source = repo / ".opencode" / "agent"
    dest = temp_dir / "home" / ".config" / "opencode" / "agent"
    source.mkdir(parents=True)
    dest.mkdir(parents=True)
    return repo, source, dest


@pytest.fixture
def sample_agents(repo_layout):
    """
    Source has a.md (new) and b.md (collides with different content).
    Also drops a non-agent file and a subdirectory that must be ignored.
    """
    repo, source, dest = repo_layout
    (source / "a.md").write_text("agent a\n")
    (source / "b.md").write_text("agent b v2\n")
    (source / "notes.txt").write_text("not an agent")
    (source / "nested").mkdir()
    (source / "nested" / "deep.md").write_text("ignored")
    (dest / "b.md").write_text("agent b v1\n")
    return repo, source, dest


@pytest.fixture
def entry(repo_layout):
    """A colliding FileEntry for c.md."""
    _, source, dest = repo_layout
    (source / "c.md").write_text("new line\nshared\n")
    (dest / "c.md").write_text("old line\nshared\n")
    return FileEntry.for_file("c.md", source, dest)
