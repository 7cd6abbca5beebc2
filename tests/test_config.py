"""Tests for TOML configuration loading."""

from __future__ import annotations

import pytest

import shared.config as config_module
from shared.config import ForgeConfig


def test_defaults():
    config = ForgeConfig()
    assert config.generator.default_length == 16
    assert config.generator.bulk_min == 2
    assert config.generator.bulk_max == 50
    assert config.generator.bulk_default == 10
    assert config.generator.symbols is None
    assert config.digest.default_algorithm == "all"
    assert config.digest.trim_input is True
    assert config.global_settings.log_level == "WARNING"


def test_load_file_ignores_unknown_keys(tmp_path):
    path = tmp_path / "keyforge.toml"
    path.write_text(
        "[generator]\n"
        "default_length = 24\n"
        "symbols = \"!@#\"\n"
        "colour = \"blue\"\n"
        "\n"
        "[digest]\n"
        "default_algorithm = \"sha256\"\n"
        "\n"
        "[unknown_section]\n"
        "x = 1\n",
        encoding="utf-8",
    )
    config = ForgeConfig.load(path)
    assert config.generator.default_length == 24
    assert config.generator.symbols == "!@#"
    assert config.generator.max_length == 4096
    assert config.digest.default_algorithm == "sha256"
    assert config.selftest.uniformity_draws == 100_000


def test_explicit_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        ForgeConfig.load(tmp_path / "absent.toml")


def test_missing_default_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "_DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    assert ForgeConfig.load() == ForgeConfig()
