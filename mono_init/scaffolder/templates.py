"""Template tree materialization for project scaffolding.

Provides the TemplateRenderer class which locates the bundled ``templates/``
directory and copies named trees (``root``, ``api``, ``web``, ``app``,
``nativewind``) into a new project.  Files ending in ``.j2`` are rendered
with Jinja2 and written without the suffix; everything else is copied
verbatim.  Existing files at the destination are replaced, never merged, so
materializing the same tree twice yields the same bytes.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .errors import TemplateTreeNotFound

TEMPLATE_DIR_NAME = "templates"
TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------


def locate_templates_dir(start: str | Path | None = None, max_levels: int = 6) -> Path:
    """Walk upward from *start* looking for a ``templates/`` directory.

    The module's own location moves around between a source checkout, an
    installed wheel and a frozen bundle, so no fixed relative depth is
    assumed.

    Args:
        start: Directory to begin from.  Defaults to this module's directory.
        max_levels: How many directories (including *start*) to inspect.

    Raises:
        TemplateTreeNotFound: If no candidate is found within *max_levels*.
    """
    start_dir = Path(start) if start is not None else Path(__file__).resolve().parent
    current = start_dir
    for _ in range(max_levels):
        candidate = current / TEMPLATE_DIR_NAME
        if candidate.is_dir():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    raise TemplateTreeNotFound(start_dir)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Materializes bundled template trees into a project directory.

    The template root is resolved once, at construction time, and reused for
    every tree of the run.
    """

    def __init__(self, template_dir: str | Path | None = None, *, search_depth: int = 6) -> None:
        if template_dir is None:
            template_dir = locate_templates_dir(max_levels=search_depth)
        self.template_dir = Path(template_dir)
        if not self.template_dir.is_dir():
            raise TemplateTreeNotFound(self.template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = _slugify_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"api/src/index.ts.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Trees -------------------------------------------------------------

    def tree_path(self, tree_id: str) -> Path:
        """Return the source directory of *tree_id*.

        Raises:
            TemplateTreeNotFound: If the tree is not bundled.
        """
        path = self.template_dir / tree_id
        if not path.is_dir():
            raise TemplateTreeNotFound(path)
        return path

    async def materialize(
        self,
        tree_id: str,
        destination: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Copy *tree_id* onto *destination*, replacing conflicting files.

        Missing directories (including empty ones in the tree) are created.

        Returns:
            List of written file paths, in sorted source order.
        """
        source_root = self.tree_path(tree_id)
        return await asyncio.to_thread(
            self._materialize_sync, tree_id, source_root, Path(destination), context
        )

    def _materialize_sync(
        self,
        tree_id: str,
        source_root: Path,
        destination: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        destination.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        for source in sorted(source_root.rglob("*")):
            rel = source.relative_to(source_root)
            if source.is_dir():
                (destination / rel).mkdir(parents=True, exist_ok=True)
                continue

            output_file = destination / _output_name(rel)
            if source.name.endswith(TEMPLATE_SUFFIX):
                content = self.render(f"{tree_id}/{rel.as_posix()}", context)
                _write_file(output_file, content)
            else:
                output_file.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy(source, output_file)
            written.append(output_file)

        return written


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _output_name(rel: Path) -> Path:
    """Strip the ``.j2`` suffix from a template-relative path."""
    if rel.name.endswith(TEMPLATE_SUFFIX):
        return rel.with_name(rel.name[: -len(TEMPLATE_SUFFIX)])
    return rel


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
