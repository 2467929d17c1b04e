"""create-mono-init command-line entry point.

Prompt -> plan -> scaffold -> post-create, then print the next steps.

Usage::

    create-mono-init
    create-mono-init my-app --kind full --no-install
    python -m mono_init.cli my-app --kind web --offline --yes
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

from pydantic import ValidationError
from rich.panel import Panel

from mono_init.config import Config
from mono_init.prompts import collect_plan
from mono_init.scaffolder import (
    GeneratorInvoker,
    ProjectGenerator,
    ProjectKind,
    ScaffoldError,
    ScaffoldPlan,
    run_post_create,
)
from mono_init.utils import (
    console,
    format_duration,
    print_error,
    print_step,
    print_success,
    print_summary_table,
)


async def scaffold(
    plan: ScaffoldPlan,
    config: Config,
    invoker: GeneratorInvoker | None = None,
) -> tuple[Path, list[str]]:
    """Generate the project, then run the post-create commands.

    Returns:
        ``(project_root, commands_run)``.
    """
    invoker = invoker or GeneratorInvoker(config)
    generator = ProjectGenerator(plan, config, invoker=invoker)

    print_step("Scaffold")
    root = await generator.generate()

    ran: list[str] = []
    if plan.install or plan.git:
        print_step("Post-create")
        ran = await run_post_create(root, plan, invoker, config)
    return root, ran


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-mono-init",
        description="Scaffold a pnpm monorepo: Express API + Next.js web and/or Expo app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-mono-init\n"
            "  create-mono-init my-app --kind full\n"
            "  create-mono-init my-app --kind web --offline --no-install --no-git\n"
        ),
    )
    parser.add_argument("name", nargs="?", default=None, help="Project folder name")
    parser.add_argument(
        "--kind",
        choices=[k.value for k in ProjectKind],
        default=None,
        help="web (API+web), app (API+mobile) or full (API+web+mobile)",
    )
    parser.add_argument(
        "--install",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run pnpm install after scaffolding",
    )
    parser.add_argument(
        "--git",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run git init after scaffolding",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept defaults for any question not answered by a flag",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the bundled web/app templates instead of create-next-app/create-expo-app",
    )
    parser.add_argument("--cwd", type=Path, default=None, help="Parent directory (default: current)")
    parser.add_argument("--api-port", type=int, default=None, help="Default API port (default: 4000)")
    parser.add_argument("--web-port", type=int, default=None, help="Default web port (default: 3000)")
    parser.add_argument(
        "--templates-dir",
        type=Path,
        default=None,
        help="Use templates from this directory instead of the bundled ones",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-mono-init``."""
    args = _build_parser().parse_args(argv)

    console.print(
        Panel(
            "[bold bright_cyan]create-mono-init[/bold bright_cyan]\n"
            "pnpm monorepo: Express API + Next.js web / Expo app",
            border_style="bright_cyan",
        )
    )

    try:
        plan = collect_plan(
            name=args.name,
            kind=args.kind,
            install=args.install,
            git=args.git,
            assume_defaults=args.yes,
        )
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(1)
    except ValidationError as exc:
        print_error(f"Error: invalid project name: {exc.errors()[0]['msg']}")
        sys.exit(1)

    try:
        config = Config.from_env(
            cwd=args.cwd,
            use_generators=False if args.offline else None,
            templates_dir=args.templates_dir,
            api_port=args.api_port,
            web_port=args.web_port,
        )
    except ValidationError as exc:
        print_error(f"Error: invalid configuration: {exc.errors()[0]['msg']}")
        sys.exit(1)
    except ValueError as exc:
        # non-integer MONO_INIT_*_PORT
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    started = time.monotonic()
    try:
        root, ran = asyncio.run(scaffold(plan, config))
    except (ScaffoldError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_success(f"Created project at: {root}")
    print_summary_table(
        {
            "Project": plan.project_name,
            "Kind": plan.kind.label,
            "Members": ", ".join(plan.workspace_members()),
            "Post-create": ", ".join(ran) or "(none)",
            "Duration": format_duration(time.monotonic() - started),
        },
        title="Scaffold Summary",
    )

    console.print("[bold cyan]Next:[/bold cyan]")
    console.print(f"  cd {plan.project_name}")
    if not plan.install:
        console.print(f"  {config.package_manager} install")
    console.print(f"  {config.package_manager} dev")


if __name__ == "__main__":
    main()
