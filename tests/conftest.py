"""Shared pytest fixtures for the create-mono-init test suite.

Provides reusable fixtures for:
- Run configuration rooted in a temporary directory
- The bundled template renderer
- A recording invoker that stands in for create-next-app / create-expo-app,
  pnpm and git
- Scaffold plans for each project kind
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from mono_init.config import Config
from mono_init.scaffolder.errors import GeneratorFailed
from mono_init.scaffolder.invoker import GENERATORS, GeneratorInvoker
from mono_init.scaffolder.plan import ProjectKind, ScaffoldPlan
from mono_init.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def offline_config(tmp_path: Path) -> Config:
    """Config rooted at ``tmp_path`` that uses bundled templates for web/app."""
    return Config(cwd=tmp_path, use_generators=False)


@pytest.fixture
def generator_config(tmp_path: Path) -> Config:
    """Config rooted at ``tmp_path`` that calls the external generators."""
    return Config(cwd=tmp_path, use_generators=True)


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the templates shipped with the package."""
    return TemplateRenderer()


@pytest.fixture
def template_context() -> dict[str, Any]:
    """Basic template rendering context."""
    return {
        "project_name": "demo",
        "has_web": True,
        "has_app": True,
        "api_port": 4000,
        "web_port": 3000,
    }


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

@pytest.fixture
def make_plan():
    """Factory for ``ScaffoldPlan`` with install/git off by default."""

    def factory(
        kind: ProjectKind | str = ProjectKind.WEB,
        name: str = "demo",
        install: bool = False,
        git: bool = False,
    ) -> ScaffoldPlan:
        return ScaffoldPlan(project_name=name, kind=ProjectKind(kind), install=install, git=git)

    return factory


# ---------------------------------------------------------------------------
# Recording invoker
# ---------------------------------------------------------------------------

class RecordingInvoker(GeneratorInvoker):
    """Invoker that records commands instead of spawning them.

    Registered generators leave behind a minimal project like the real tool
    would, so the steps that follow have something to work on.

    Attributes:
        calls: ``(name, argv, cwd)`` for every command, in order.
        workspace_seen: For each call, whether ``pnpm-workspace.yaml`` existed
            in the working directory at the time.
    """

    def __init__(self, config: Config, *, fail_on: str | None = None, exit_code: int = 1) -> None:
        super().__init__(config)
        self.fail_on = fail_on
        self.exit_code = exit_code
        self.calls: list[tuple[str, list[str], Path]] = []
        self.workspace_seen: list[bool] = []

    @property
    def names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    async def run(self, name: str, argv: list[str], cwd: str | Path) -> None:
        cwd = Path(cwd)
        self.calls.append((name, list(argv), cwd))
        self.workspace_seen.append((cwd / "pnpm-workspace.yaml").exists())

        if name == self.fail_on:
            raise GeneratorFailed(name, self.exit_code)

        if name in GENERATORS:
            _fake_generator_output(name, cwd / GENERATORS[name].target)


def _fake_generator_output(name: str, target: Path) -> None:
    target.mkdir(parents=True, exist_ok=True)
    if name == "create-next-app":
        manifest = {"name": "web", "scripts": {"dev": "next dev --turbopack"}}
        (target / "app").mkdir(exist_ok=True)
        (target / "app" / "page.tsx").write_text("export default function Home() {}\n", encoding="utf-8")
    else:
        manifest = {
            "name": "app",
            "main": "index.ts",
            "dependencies": {"expo": "~53.0.0", "nativewind": "^4.1.23"},
        }
        (target / "App.tsx").write_text("export default function App() {}\n", encoding="utf-8")
        (target / "app.json").write_text(
            json.dumps({"expo": {"name": "app", "slug": "app"}}, indent=2) + "\n",
            encoding="utf-8",
        )
    (target / "package.json").write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")


@pytest.fixture
def recording_invoker(generator_config: Config) -> RecordingInvoker:
    """A RecordingInvoker bound to ``generator_config``."""
    return RecordingInvoker(generator_config)


@pytest.fixture
def make_invoker():
    """Factory for ``RecordingInvoker`` with custom config or failure."""

    def factory(config: Config, **kwargs: Any) -> RecordingInvoker:
        return RecordingInvoker(config, **kwargs)

    return factory


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative posix path) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    """Expose ``snapshot_tree`` to tests."""
    return snapshot_tree
