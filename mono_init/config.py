"""create-mono-init configuration.

Centralised, typed configuration for a scaffold run. All settings use
Pydantic v2 models so they can be validated at construction time and built
from the CLI or environment variables without boiler-plate.

Process-level state (working directory, ports baked into generated code) is
captured here once and threaded through the scaffolder explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class PortConfig(BaseModel):
    """Default ports written into the generated applications."""

    api: int = Field(default=4000, ge=1, le=65535)
    web: int = Field(default=3000, ge=1, le=65535)


class GeneratorConfig(BaseModel):
    """How external generators are launched and which versions are pinned."""

    runner: list[str] = Field(
        default_factory=lambda: ["pnpm", "dlx"],
        description="Command prefix used to fetch-and-run a generator package",
    )
    create_next_app: str = Field(default="create-next-app@15.1.6")
    create_expo_app: str = Field(default="create-expo-app@3.2.0")

    def package_spec(self, generator_name: str) -> str:
        """Return the pinned ``name@version`` for *generator_name*."""
        specs = {
            "create-next-app": self.create_next_app,
            "create-expo-app": self.create_expo_app,
        }
        return specs[generator_name]


class Config(BaseModel):
    """Global create-mono-init configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``ProjectGenerator`` and the post-create steps.
    """

    cwd: Path = Field(default_factory=Path.cwd)
    package_manager: str = Field(default="pnpm")
    use_generators: bool = Field(
        default=True,
        description="Run create-next-app/create-expo-app; when False the bundled templates are used",
    )
    templates_dir: Path | None = Field(
        default=None,
        description="Explicit template root; skips the upward directory search",
    )
    template_search_depth: int = Field(default=6, ge=1)
    biome_version: str = Field(default="^2.3.10")
    ports: PortConfig = Field(default_factory=PortConfig)
    generators: GeneratorConfig = Field(default_factory=GeneratorConfig)

    def project_root(self, project_name: str) -> Path:
        """Target directory for a project: ``<cwd>/<project_name>``."""
        return (self.cwd / project_name).resolve()

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MONO_INIT_CWD, MONO_INIT_PACKAGE_MANAGER, MONO_INIT_OFFLINE,
            MONO_INIT_TEMPLATES_DIR, MONO_INIT_API_PORT, MONO_INIT_WEB_PORT.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so CLI flags that were not given fall through.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MONO_INIT_CWD"):
            kwargs["cwd"] = Path(os.environ["MONO_INIT_CWD"])
        if os.environ.get("MONO_INIT_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["MONO_INIT_PACKAGE_MANAGER"]
        if os.environ.get("MONO_INIT_OFFLINE"):
            kwargs["use_generators"] = os.environ["MONO_INIT_OFFLINE"].lower() not in (
                "1",
                "true",
                "yes",
            )
        if os.environ.get("MONO_INIT_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["MONO_INIT_TEMPLATES_DIR"])

        port_kwargs: dict[str, Any] = {}
        if os.environ.get("MONO_INIT_API_PORT"):
            port_kwargs["api"] = int(os.environ["MONO_INIT_API_PORT"])
        if os.environ.get("MONO_INIT_WEB_PORT"):
            port_kwargs["web"] = int(os.environ["MONO_INIT_WEB_PORT"])

        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("api_port", "web_port"):
                port_kwargs[key.removesuffix("_port")] = value
            else:
                kwargs[key] = value

        return cls(ports=PortConfig(**port_kwargs), **kwargs)
