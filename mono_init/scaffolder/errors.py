"""Errors raised while materializing a project.

Every condition is fatal for the run: the scaffolder never retries and never
rolls back files it already wrote.  Each exception keeps the context a user
needs to act on it (path, command, exit code) as attributes.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every scaffold failure reported to the user."""


class DirectoryNotEmpty(ScaffoldError):
    """Raised when the target root already exists and has entries."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Target directory already exists and is not empty: {self.path}"
        )


class GeneratorFailed(ScaffoldError):
    """Raised when an external command exits nonzero or cannot be spawned."""

    def __init__(self, name: str, exit_code: int | None, detail: str = "") -> None:
        self.name = name
        self.exit_code = exit_code
        self.detail = detail
        if exit_code is None:
            message = f"Failed to start {name}"
        else:
            message = f"{name} exited with code {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TemplateTreeNotFound(ScaffoldError):
    """Raised when the bundled template directory cannot be located."""

    def __init__(self, search_root: str | Path) -> None:
        self.search_root = Path(search_root)
        super().__init__(
            f"Could not locate templates/. Searched upwards from: {self.search_root}"
        )


class ManifestReadWriteFailure(ScaffoldError):
    """Raised when a JSON/YAML manifest cannot be read or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read/write manifest {self.path}: {reason}")
