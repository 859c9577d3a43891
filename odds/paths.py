"""Filesystem locations used for searching and for persisted state."""

from __future__ import annotations

import os
import sys
from pathlib import Path

STORAGE_PATH = ".local/share/odds/"


def detect_explicit_path(text: str) -> Path | None:
    """Return the path if ``text`` names an existing directory."""
    path = Path(text)
    if path.is_dir():
        return path
    return None


def search_roots() -> list[Path]:
    """Return the roots searched for candidates.

    These are the current working directory, the enclosing git repository
    (a directory holding ``.git``) if it differs, and the home directory.
    """
    roots: list[Path] = []

    try:
        cwd = Path.cwd()
    except OSError:
        cwd = None

    if cwd is not None:
        roots.append(cwd)
        git_root = _find_git_root(cwd)
        if git_root is not None and git_root != cwd:
            roots.append(git_root)

    home = os.environ.get("HOME")
    if home is not None:
        roots.append(Path(home))

    return sorted(set(roots))


def normalize(path: str | os.PathLike[str]) -> Path:
    """Canonicalise ``path``, or return it unchanged if that fails."""
    original = Path(path)
    try:
        return original.resolve(strict=True)
    except (OSError, RuntimeError):
        return original


def persistence_path(file: str) -> Path:
    """Return ``~/.local/share/odds/<file>``."""
    return home_dir() / STORAGE_PATH / file


def home_dir() -> Path:
    """Return ``$HOME``, falling back to the current directory with a warning."""
    home = os.environ.get("HOME")
    if home is None:
        print(
            "Warning: $HOME is not set, falling back to current directory.",
            file=sys.stderr,
        )
        return Path(".")
    return Path(home)


def _find_git_root(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        if (directory / ".git").exists():
            return directory
    return None