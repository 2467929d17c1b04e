"""Workspace descriptor and root manifest writing.

``pnpm-workspace.yaml`` is always written from scratch; it is the single
source of truth for which members exist.  The root ``package.json`` is either
built from scratch (``ManifestMode.FRESH``) or patched with "add if absent"
semantics (``ManifestMode.MERGE``).  A run picks one mode and sticks to it.
"""

from __future__ import annotations

import copy
from enum import Enum
from pathlib import Path
from typing import Any

from mono_init.utils import load_json, save_json

from .errors import ManifestReadWriteFailure
from .plan import ScaffoldPlan

WORKSPACE_FILENAME = "pnpm-workspace.yaml"
ROOT_MANIFEST_FILENAME = "package.json"
AUXILIARY_PACKAGES_GLOB = "packages/*"

LINT_TOOL = "@biomejs/biome"
LINT_SCRIPTS: dict[str, str] = {
    "check": "biome check .",
    "format": "biome check . --write",
}


class ManifestMode(str, Enum):
    """How the root ``package.json`` is produced."""

    MERGE = "merge"
    FRESH = "fresh"


# ---------------------------------------------------------------------------
# pnpm-workspace.yaml
# ---------------------------------------------------------------------------


def workspace_globs(members: list[str]) -> list[str]:
    """Member paths followed by the auxiliary packages wildcard."""
    return [*members, AUXILIARY_PACKAGES_GLOB]


def render_workspace_manifest(members: list[str]) -> str:
    """Serialize *members* into ``pnpm-workspace.yaml`` syntax.

    One double-quoted entry per line, in member order, then the wildcard::

        packages:
          - "api"
          - "web"
          - "packages/*"
    """
    lines = ["packages:"]
    lines.extend(f'  - "{glob}"' for glob in workspace_globs(members))
    return "\n".join(lines) + "\n"


def write_workspace_manifest(root: str | Path, members: list[str]) -> Path:
    """Write ``pnpm-workspace.yaml`` at *root*, replacing any prior content."""
    path = Path(root) / WORKSPACE_FILENAME
    try:
        path.write_text(render_workspace_manifest(members), encoding="utf-8")
    except OSError as exc:
        raise ManifestReadWriteFailure(path, str(exc)) from exc
    return path


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def build_root_manifest(plan: ScaffoldPlan, *, tool_version: str) -> dict[str, Any]:
    """Build the complete root ``package.json`` for *plan*.

    ``dev`` runs every member's ``dev`` script in parallel; ``dev:<member>``
    runs a single one.
    """
    members = plan.workspace_members()
    filters = " ".join(f"--filter {member}" for member in members)

    scripts: dict[str, str] = {"dev": f"pnpm --parallel {filters} dev"}
    for member in members:
        scripts[f"dev:{member}"] = f"pnpm --filter {member} dev"
    scripts.update(LINT_SCRIPTS)

    return {
        "name": plan.project_name,
        "private": True,
        "version": "0.0.0",
        "scripts": scripts,
        "devDependencies": {LINT_TOOL: tool_version},
    }


def merge_absent(manifest_path: str | Path, additions: dict[str, Any]) -> dict[str, Any]:
    """Add *additions* to a JSON manifest without replacing existing values.

    Nested mappings are merged key by key; a key that already has a value is
    left untouched, whatever that value is.

    Returns:
        The manifest as written.

    Raises:
        ManifestReadWriteFailure: If the file cannot be read, parsed or written.
    """
    path = Path(manifest_path)
    manifest = read_manifest(path)
    _merge_into(manifest, additions)
    write_manifest(path, manifest)
    return manifest


def patch_or_write_root_manifest(
    root: str | Path,
    plan: ScaffoldPlan,
    mode: ManifestMode = ManifestMode.FRESH,
    *,
    tool_version: str,
) -> dict[str, Any]:
    """Produce the root ``package.json`` for *plan* in the given *mode*.

    * ``MERGE``: the manifest must already exist (e.g. created by a bootstrap
      generator); the lint/format scripts and tool dependency are added only
      where absent.
    * ``FRESH``: the manifest is built entirely from *plan* and replaces
      whatever was there.
    """
    path = Path(root) / ROOT_MANIFEST_FILENAME
    if mode is ManifestMode.MERGE:
        return merge_absent(
            path,
            {"scripts": dict(LINT_SCRIPTS), "devDependencies": {LINT_TOOL: tool_version}},
        )

    manifest = build_root_manifest(plan, tool_version=tool_version)
    write_manifest(path, manifest)
    return manifest


# ---------------------------------------------------------------------------
# Manifest I/O
# ---------------------------------------------------------------------------


def read_manifest(path: str | Path) -> dict[str, Any]:
    """Load a JSON manifest, mapping I/O and parse errors to ``ManifestReadWriteFailure``."""
    try:
        return load_json(path)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        raise ManifestReadWriteFailure(path, str(exc)) from exc


def write_manifest(path: str | Path, data: dict[str, Any]) -> Path:
    """Write a JSON manifest, mapping I/O errors to ``ManifestReadWriteFailure``."""
    try:
        return save_json(data, path)
    except (OSError, TypeError) as exc:
        raise ManifestReadWriteFailure(path, str(exc)) from exc


def _merge_into(target: dict[str, Any], additions: dict[str, Any]) -> None:
    for key, value in additions.items():
        if key not in target:
            target[key] = copy.deepcopy(value)
        elif isinstance(target[key], dict) and isinstance(value, dict):
            _merge_into(target[key], value)
