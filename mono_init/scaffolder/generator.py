"""Main scaffolding orchestrator.

Takes a ``ScaffoldPlan`` and materializes a pnpm monorepo at
``<cwd>/<project_name>``:

    api/        Express API (always)
    web/        Next.js app (kind web/full)
    app/        Expo app with NativeWind (kind app/full)
    packages/   auxiliary workspace packages (empty)
    pnpm-workspace.yaml, package.json, biome.json, .npmrc, ...

The steps run strictly one after another because they write into
overlapping parts of the same tree.  Any failure stops the run; files that
were already written are left for the user to inspect.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Any

from mono_init.config import Config
from mono_init.utils import console

from .expo import setup_nativewind
from .fs_guard import ensure_usable_root
from .invoker import GeneratorInvoker
from .plan import ScaffoldPlan
from .templates import TemplateRenderer
from .workspace import (
    ManifestMode,
    patch_or_write_root_manifest,
    write_workspace_manifest,
)


class ScaffoldStep(str, Enum):
    """States of a scaffold run, in execution order."""

    GUARD_ROOT = "guard_root"
    CREATE_DIRS = "create_dirs"
    MATERIALIZE_TEMPLATES = "materialize_templates"
    GENERATE_WEB = "generate_web"
    GENERATE_OR_TEMPLATE_APP = "generate_or_template_app"
    WRITE_WORKSPACE_MANIFEST = "write_workspace_manifest"
    WRITE_ROOT_MANIFEST = "write_root_manifest"


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Collaborators can be injected for testing; by default the renderer
    resolves the bundled templates once and the invoker spawns real
    processes.

    Attributes:
        plan: The user's choices for this run.
        config: Run configuration (working directory, ports, pins).
        completed_steps: Steps finished so far, in order.
    """

    def __init__(
        self,
        plan: ScaffoldPlan,
        config: Config,
        *,
        renderer: TemplateRenderer | None = None,
        invoker: GeneratorInvoker | None = None,
    ) -> None:
        self.plan = plan
        self.config = config
        self.renderer = renderer or TemplateRenderer(
            config.templates_dir, search_depth=config.template_search_depth
        )
        self.invoker = invoker or GeneratorInvoker(config)
        self.completed_steps: list[ScaffoldStep] = []

    @property
    def project_root(self) -> Path:
        return self.config.project_root(self.plan.project_name)

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Materialize the project described by the plan.

        Returns:
            Path to the generated project root.

        Raises:
            DirectoryNotEmpty: The target exists and has entries.
            GeneratorFailed: ``create-next-app``/``create-expo-app`` failed.
            TemplateTreeNotFound: A bundled template tree is missing.
            ManifestReadWriteFailure: A manifest could not be read or written.
        """
        root = self.project_root
        context = self._build_context()

        # 1. Refuse to touch a non-empty directory
        await asyncio.to_thread(ensure_usable_root, root)
        self._complete(ScaffoldStep.GUARD_ROOT)

        # 2. Skeleton directories
        await self._create_directory_structure(root)
        self._complete(ScaffoldStep.CREATE_DIRS)

        # 3. Root config files and the API
        await self._materialize_base(root, context)
        self._complete(ScaffoldStep.MATERIALIZE_TEMPLATES)

        # 4. Next.js web app
        if self.plan.kind.has_web:
            await self._generate_web(root, context)
            self._complete(ScaffoldStep.GENERATE_WEB)

        # 5. Expo app + NativeWind
        if self.plan.kind.has_app:
            await self._generate_app(root, context)
            self._complete(ScaffoldStep.GENERATE_OR_TEMPLATE_APP)

        # 6. Workspace descriptor
        await asyncio.to_thread(
            write_workspace_manifest, root, self.plan.workspace_members()
        )
        self._complete(ScaffoldStep.WRITE_WORKSPACE_MANIFEST)

        # 7. Root package.json
        await asyncio.to_thread(
            patch_or_write_root_manifest,
            root,
            self.plan,
            ManifestMode.FRESH,
            tool_version=self.config.biome_version,
        )
        self._complete(ScaffoldStep.WRITE_ROOT_MANIFEST)

        return root

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the plan and config."""
        return {
            "project_name": self.plan.project_name,
            "has_web": self.plan.kind.has_web,
            "has_app": self.plan.kind.has_app,
            "api_port": self.config.ports.api,
            "web_port": self.config.ports.web,
        }

    # -- Steps -------------------------------------------------------------

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the member directories every project has."""
        for name in ("api", "packages"):
            await asyncio.to_thread((root / name).mkdir, parents=True, exist_ok=True)

    async def _materialize_base(self, root: Path, ctx: dict[str, Any]) -> None:
        """Copy root-level config (Biome, .npmrc, ...) and the API template."""
        console.print("[cyan]Writing[/cyan] root config and [bold]api/[/bold]")
        await self.renderer.materialize("root", root, ctx)
        await self.renderer.materialize("api", root / "api", ctx)

    async def _generate_web(self, root: Path, ctx: dict[str, Any]) -> None:
        """Create ``web/`` with create-next-app, or from the bundled template."""
        if self.config.use_generators:
            await self.invoker.invoke_registered("create-next-app", root)
        else:
            console.print("[cyan]Writing[/cyan] [bold]web/[/bold] from template")
            await self.renderer.materialize("web", root / "web", ctx)

    async def _generate_app(self, root: Path, ctx: dict[str, Any]) -> None:
        """Create ``app/`` with create-expo-app (or the template), then add NativeWind."""
        if self.config.use_generators:
            app_dir = await self.invoker.invoke_registered("create-expo-app", root)
        else:
            console.print("[cyan]Writing[/cyan] [bold]app/[/bold] from template")
            app_dir = root / "app"
            await self.renderer.materialize("app", app_dir, ctx)

        console.print("[cyan]Configuring[/cyan] NativeWind in [bold]app/[/bold]")
        await setup_nativewind(app_dir, self.renderer, ctx)

    def _complete(self, step: ScaffoldStep) -> None:
        self.completed_steps.append(step)
