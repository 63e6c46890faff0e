"""Source enumeration and collision detection."""

import os
from pathlib import Path

import xxhash
from tqdm import tqdm

from .config import AGENT_EXTENSION
from .models import FileEntry, ScannedFile


def compute_file_hash(file_path: Path, chunk_size: int = 65536) -> str:
    """Compute hash of a file using xxhash (fast hashing algorithm)."""
    hasher = xxhash.xxh64()
    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest()


def list_installable_files(source_dir: Path, extension: str = AGENT_EXTENSION) -> list[str]:
    """
    List installable filenames in source_dir.

    Only regular, non-hidden files directly inside source_dir with the
    given extension are returned, in directory enumeration order.
    """
    names = []
    with os.scandir(source_dir) as it:
        for dirent in it:
            if (not dirent.name.startswith(".") and dirent.name.endswith(extension)
                    and dirent.is_file()):
                names.append(dirent.name)
    return names


def files_identical(first: Path, second: Path) -> bool:
    """Return True when both files exist and have the same content."""
    try:
        if first.stat().st_size != second.stat().st_size:
            return False
        return compute_file_hash(first) == compute_file_hash(second)
    except OSError:
        return False


def detect_collisions(
    source_dir: Path,
    dest_dir: Path,
    extension: str = AGENT_EXTENSION,
    show_progress: bool = False,
) -> list[ScannedFile]:
    """
    Pair every installable source file with whether it already exists in dest_dir.

    Args:
        source_dir: Directory holding the agent files to install
        dest_dir: Directory the files will be installed into
        extension: Filename suffix of installable files
        show_progress: Display a progress bar while scanning

    Returns:
        List of ScannedFile in source enumeration order
    """
    scanned = []
    filenames = list_installable_files(source_dir, extension)

    for filename in tqdm(filenames, desc="Scanning agents", unit="file",
                         disable=not show_progress, leave=False):
        entry = FileEntry.for_file(filename, source_dir, dest_dir)
        collides = entry.dest_path.is_file()
        identical = collides and files_identical(entry.source_path, entry.dest_path)
        scanned.append(ScannedFile(entry, collides=collides, identical=identical))

    return scanned


def collision_names(scanned: list[ScannedFile]) -> list[str]:
    """Return the filenames of all colliding files."""
    return [item.filename for item in scanned if item.collides]
