"""Unit tests for Config and related Pydantic models (mono_init.config).

Tests cover:
- PortConfig defaults and validation
- GeneratorConfig pins and package_spec
- Config defaults, project_root, from_env and overrides
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mono_init.config import Config, GeneratorConfig, PortConfig


# ---------------------------------------------------------------------------
# PortConfig
# ---------------------------------------------------------------------------


class TestPortConfig:
    @pytest.mark.unit
    def test_default_ports(self):
        ports = PortConfig()
        assert ports.api == 4000
        assert ports.web == 3000

    @pytest.mark.unit
    def test_rejects_out_of_range_port(self):
        with pytest.raises(ValidationError):
            PortConfig(api=70000)


# ---------------------------------------------------------------------------
# GeneratorConfig
# ---------------------------------------------------------------------------


class TestGeneratorConfig:
    @pytest.mark.unit
    def test_default_runner_is_pnpm_dlx(self):
        assert GeneratorConfig().runner == ["pnpm", "dlx"]

    @pytest.mark.unit
    def test_package_spec_is_pinned(self):
        gen = GeneratorConfig()
        assert gen.package_spec("create-next-app").startswith("create-next-app@")
        assert gen.package_spec("create-expo-app").startswith("create-expo-app@")
        assert "latest" not in gen.package_spec("create-next-app")

    @pytest.mark.unit
    def test_package_spec_override(self):
        gen = GeneratorConfig(create_next_app="create-next-app@14.2.0")
        assert gen.package_spec("create-next-app") == "create-next-app@14.2.0"

    @pytest.mark.unit
    def test_unknown_generator(self):
        with pytest.raises(KeyError):
            GeneratorConfig().package_spec("create-turbo")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.cwd == Path.cwd()
        assert config.package_manager == "pnpm"
        assert config.use_generators is True
        assert config.templates_dir is None
        assert config.template_search_depth == 6
        assert config.biome_version == "^2.3.10"

    @pytest.mark.unit
    def test_project_root(self, tmp_path: Path):
        config = Config(cwd=tmp_path)
        assert config.project_root("demo") == (tmp_path / "demo").resolve()

    @pytest.mark.unit
    def test_search_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(template_search_depth=0)


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_no_env_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config.use_generators is True
        assert config.ports.api == 4000

    @pytest.mark.unit
    def test_reads_variables(self, tmp_path: Path):
        env = {
            "MONO_INIT_CWD": str(tmp_path),
            "MONO_INIT_PACKAGE_MANAGER": "pnpm@9",
            "MONO_INIT_OFFLINE": "1",
            "MONO_INIT_TEMPLATES_DIR": str(tmp_path / "tpl"),
            "MONO_INIT_API_PORT": "8081",
            "MONO_INIT_WEB_PORT": "8082",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.cwd == tmp_path
        assert config.package_manager == "pnpm@9"
        assert config.use_generators is False
        assert config.templates_dir == tmp_path / "tpl"
        assert config.ports.api == 8081
        assert config.ports.web == 8082

    @pytest.mark.unit
    def test_offline_false_keeps_generators(self):
        with patch.dict(os.environ, {"MONO_INIT_OFFLINE": "no"}, clear=True):
            assert Config.from_env().use_generators is True

    @pytest.mark.unit
    def test_overrides_win_over_env(self, tmp_path: Path):
        with patch.dict(os.environ, {"MONO_INIT_API_PORT": "8081"}, clear=True):
            config = Config.from_env(cwd=tmp_path, api_port=9000, use_generators=False)
        assert config.cwd == tmp_path
        assert config.ports.api == 9000
        assert config.use_generators is False

    @pytest.mark.unit
    def test_none_overrides_are_ignored(self):
        with patch.dict(os.environ, {"MONO_INIT_WEB_PORT": "8082"}, clear=True):
            config = Config.from_env(web_port=None, templates_dir=None)
        assert config.ports.web == 8082
        assert config.templates_dir is None
