"""Unit tests for Config (phasegen.config).

Tests cover:
- Defaults and derived paths
- save/load round trip
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from phasegen.codegen.templates import DEFAULT_TEMPLATE_DIR
from phasegen.config import Config


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.template_dir == DEFAULT_TEMPLATE_DIR
        assert config.output_dir == Path(".")
        assert config.module_root is None
        assert config.deploy_manifest is False

    @pytest.mark.unit
    def test_deployment_path(self, tmp_path: Path):
        config = Config(output_dir=tmp_path)
        assert config.deployment_path == tmp_path / "deploy" / "deployment.yaml"


class TestConfigPersistence:
    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = Config(output_dir=tmp_path / "out", module_root="widget_operator")
        path = config.save(tmp_path / "settings" / "phasegen.json")
        assert path.exists()
        loaded = Config.load(path)
        assert loaded == config


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_empty_env(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_all_variables(self, tmp_path: Path):
        env = {
            "PHASEGEN_TEMPLATE_DIR": str(tmp_path / "templates"),
            "PHASEGEN_OUTPUT_DIR": str(tmp_path / "out"),
            "PHASEGEN_MODULE_ROOT": "acme_widgets",
            "PHASEGEN_DEPLOY_MANIFEST": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.template_dir == tmp_path / "templates"
        assert config.output_dir == tmp_path / "out"
        assert config.module_root == "acme_widgets"
        assert config.deploy_manifest is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["0", "false", "no"])
    def test_deploy_manifest_falsy(self, value):
        with patch.dict(os.environ, {"PHASEGEN_DEPLOY_MANIFEST": value}, clear=True):
            assert Config.from_env().deploy_manifest is False
