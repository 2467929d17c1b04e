"""External generator and command invocation.

Generators (``create-next-app``, ``create-expo-app``) are fetched and run
through the package manager's ``dlx`` runner so nothing has to be installed
globally.  Every child process inherits the terminal so the user sees its
prompts and progress output as it happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mono_init.config import Config
from mono_init.utils import console, run_command

from .errors import GeneratorFailed


@dataclass(frozen=True)
class GeneratorSpec:
    """A registered generator: the member it creates and its fixed flags."""

    name: str
    target: str
    args: tuple[str, ...]


GENERATORS: dict[str, GeneratorSpec] = {
    "create-next-app": GeneratorSpec(
        name="create-next-app",
        target="web",
        args=(
            "--ts",
            "--tailwind",
            "--app",
            "--use-pnpm",
            "--skip-install",
            "--disable-git",
            "--no-linter",
            "--yes",
        ),
    ),
    "create-expo-app": GeneratorSpec(
        name="create-expo-app",
        target="app",
        args=(
            "--yes",
            "--no-install",
            "--template",
            "blank-typescript",
        ),
    ),
}


class GeneratorInvoker:
    """Runs external generators and plain commands, failing loudly.

    Any nonzero exit or spawn failure raises ``GeneratorFailed``; the working
    directory is left exactly as the failed command left it.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    def command_for(self, generator_name: str, args: list[str]) -> list[str]:
        """Build the full argv for *generator_name* with extra *args*."""
        package_spec = self.config.generators.package_spec(generator_name)
        return [*self.config.generators.runner, package_spec, *args]

    async def invoke(self, generator_name: str, args: list[str], cwd: str | Path) -> None:
        """Run a pinned generator package with *args* inside *cwd*."""
        await self.run(generator_name, self.command_for(generator_name, args), cwd)

    async def invoke_registered(self, generator_name: str, cwd: str | Path) -> Path:
        """Run a generator from ``GENERATORS`` and return the member it created."""
        spec = GENERATORS[generator_name]
        await self.invoke(spec.name, [spec.target, *spec.args], cwd)
        return Path(cwd) / spec.target

    async def run(self, name: str, argv: list[str], cwd: str | Path) -> None:
        """Run *argv* in *cwd* with inherited stdio.

        Raises:
            GeneratorFailed: On spawn failure (``exit_code=None``) or nonzero exit.
        """
        console.print(f"[cyan]Running[/cyan] [bold]{' '.join(argv)}[/bold] in {cwd}")
        try:
            returncode, _, _ = await run_command(argv, cwd=cwd)
        except OSError as exc:
            raise GeneratorFailed(name, None, str(exc)) from exc

        if returncode != 0:
            raise GeneratorFailed(name, returncode)
