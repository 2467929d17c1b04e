"""create-mono-init scaffolder -- materializes pnpm monorepo skeletons.

This package turns a ``ScaffoldPlan`` into a project directory with an
Express API plus a Next.js web app, an Expo mobile app, or both, wired
together by ``pnpm-workspace.yaml``.

Quick usage::

    from mono_init.config import Config
    from mono_init.scaffolder import ProjectGenerator, ProjectKind, ScaffoldPlan

    plan = ScaffoldPlan(project_name="demo", kind=ProjectKind.FULL)
    generator = ProjectGenerator(plan, Config())
    project_path = await generator.generate()
"""

from mono_init.scaffolder.errors import (
    DirectoryNotEmpty,
    GeneratorFailed,
    ManifestReadWriteFailure,
    ScaffoldError,
    TemplateTreeNotFound,
)
from mono_init.scaffolder.generator import ProjectGenerator, ScaffoldStep
from mono_init.scaffolder.invoker import GeneratorInvoker
from mono_init.scaffolder.plan import ProjectKind, ScaffoldPlan, workspace_members
from mono_init.scaffolder.post_create import run_post_create
from mono_init.scaffolder.templates import TemplateRenderer

__all__ = [
    "DirectoryNotEmpty",
    "GeneratorFailed",
    "GeneratorInvoker",
    "ManifestReadWriteFailure",
    "ProjectGenerator",
    "ProjectKind",
    "ScaffoldError",
    "ScaffoldPlan",
    "ScaffoldStep",
    "TemplateRenderer",
    "TemplateTreeNotFound",
    "run_post_create",
    "workspace_members",
]
