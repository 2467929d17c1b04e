"""Target directory guard.

The scaffolder only ever writes into a directory that is either missing or
empty, so it can never merge into someone else's files.
"""

from __future__ import annotations

from pathlib import Path

from .errors import DirectoryNotEmpty


def ensure_usable_root(path: str | Path) -> Path:
    """Make sure *path* is an empty directory, creating it when missing.

    Args:
        path: Target project root.

    Returns:
        The root as a ``Path``.

    Raises:
        DirectoryNotEmpty: If *path* exists and has at least one entry, or is
            not a directory at all.  Nothing is modified in that case.
    """
    root = Path(path)
    if not root.exists():
        root.mkdir(parents=True)
        return root

    if not root.is_dir():
        raise DirectoryNotEmpty(root)

    # any() stops at the first entry
    if any(root.iterdir()):
        raise DirectoryNotEmpty(root)

    return root
