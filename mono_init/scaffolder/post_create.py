"""Optional actions run after the project files are in place."""

from __future__ import annotations

from pathlib import Path

from mono_init.config import Config

from .invoker import GeneratorInvoker
from .plan import ScaffoldPlan


async def run_post_create(
    root: str | Path,
    plan: ScaffoldPlan,
    invoker: GeneratorInvoker,
    config: Config,
) -> list[str]:
    """Install dependencies and/or initialise git, as the plan asks.

    Install always runs before ``git init``.  Must only be called once
    ``ProjectGenerator.generate`` has succeeded.

    Returns:
        The commands that were run, e.g. ``["pnpm install", "git init"]``.
    """
    commands: list[list[str]] = []
    if plan.install:
        commands.append([config.package_manager, "install"])
    if plan.git:
        commands.append(["git", "init"])

    ran: list[str] = []
    for argv in commands:
        name = " ".join(argv)
        await invoker.run(name, argv, root)
        ran.append(name)
    return ran
