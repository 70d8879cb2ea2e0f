"""Tests for treesink.config -- runtime config resolution and validation.

NOT to be confused with test_config_loader.py (YAML file discovery) or
test_config_schema.py (Pydantic models).  This tests the Config dataclass,
load_config() precedence and validate_config().
"""

import logging
from pathlib import Path

import pytest

from treesink.config import (
    TOGGLE_DEFAULTS,
    Config,
    load_config,
    make_start_time,
    parse_bool,
    validate_config,
)

_ENV_VARS = [
    "TREESINK_SOURCE",
    "TREESINK_TARGET",
    *(f"TREESINK_{name.upper()}" for name in TOGGLE_DEFAULTS),
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


# -------------------------------------------------------------------------
# Config dataclass
# -------------------------------------------------------------------------


class TestConfig:
    def test_defaults(self, source, target):
        config = Config(source=source, target=target)
        assert config.move_folders is True
        assert config.sync_files is True
        assert config.delete is False
        assert config.keep_versions is True
        assert config.checksum is True
        assert config.dry_run is False
        assert config.verbose is False

    def test_artifact_paths(self, target):
        config = Config(source=Path("/src"), target=target, start_time="20240102T030405")
        assert config.lost_and_found_path() == (
            target / "TREESINK_LOST_AND_FOUND_20240102T030405"
        )
        assert config.log_file_path() == target / "treesink_20240102T030405.log"

    def test_start_time_format(self):
        stamp = make_start_time()
        assert len(stamp) == 15
        assert stamp[8] == "T"
        assert stamp.replace("T", "").isdigit()


# -------------------------------------------------------------------------
# parse_bool()
# -------------------------------------------------------------------------


class TestParseBool:
    @pytest.mark.parametrize("value", ["true", "YES", " on ", "1"])
    def test_truthy(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "No", "OFF", "0"])
    def test_falsy(self, value):
        assert parse_bool(value) is False

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid boolean value maybe"):
            parse_bool("maybe")


# -------------------------------------------------------------------------
# validate_config()
# -------------------------------------------------------------------------


class TestValidateConfig:
    """Tests for validate_config() -- root existence and overlap checks."""

    def test_valid_config(self, source, target):
        validate_config(Config(source=source, target=target))

    def test_missing_source(self, tmp_path, target):
        config = Config(source=tmp_path / "nope", target=target)
        with pytest.raises(ValueError, match="Source folder not found"):
            validate_config(config)

    def test_missing_target(self, source, tmp_path):
        config = Config(source=source, target=tmp_path / "nope")
        with pytest.raises(ValueError, match="Target folder not found"):
            validate_config(config)

    def test_source_is_a_file(self, tmp_path, target):
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(ValueError, match="Source folder not found"):
            validate_config(Config(source=path, target=target))

    def test_same_folder(self, source):
        with pytest.raises(ValueError, match="same as the source"):
            validate_config(Config(source=source, target=source))

    def test_target_inside_source(self, source):
        inner = source / "backup"
        inner.mkdir()
        with pytest.raises(ValueError, match="inside the source"):
            validate_config(Config(source=source, target=inner))

    def test_dry_run_logged(self, source, target, caplog):
        with caplog.at_level(logging.INFO):
            validate_config(Config(source=source, target=target, dry_run=True))
        assert "Dry run" in caplog.text


# -------------------------------------------------------------------------
# load_config()
# -------------------------------------------------------------------------


class TestLoadConfig:
    """Tests for load_config() -- CLI > env > YAML > default."""

    def test_cli_roots(self, source, target):
        config = load_config(source=str(source), target=str(target))
        assert config.source == source
        assert config.target == target
        assert config.move_folders is True
        assert config.delete is False

    def test_env_roots(self, monkeypatch, source, target):
        monkeypatch.setenv("TREESINK_SOURCE", str(source))
        monkeypatch.setenv("TREESINK_TARGET", str(target))
        config = load_config()
        assert config.source == source

    def test_yaml_roots(self, source, target):
        config = load_config(
            yaml_fallbacks={"source": str(source), "target": str(target)}
        )
        assert config.target == target

    def test_cli_beats_env(self, monkeypatch, tmp_path, source, target):
        monkeypatch.setenv("TREESINK_SOURCE", str(tmp_path / "elsewhere"))
        config = load_config(source=str(source), target=str(target))
        assert config.source == source

    def test_missing_source_message(self, target):
        with pytest.raises(ValueError, match="Source folder not specified"):
            load_config(target=str(target))

    def test_missing_target_message(self, source):
        with pytest.raises(ValueError, match="TREESINK_TARGET"):
            load_config(source=str(source))

    def test_roots_stripped(self, source, target):
        config = load_config(source=f"  {source}  ", target=str(target))
        assert config.source == source

    def test_toggle_precedence(self, monkeypatch, source, target):
        monkeypatch.setenv("TREESINK_DELETE", "yes")
        monkeypatch.setenv("TREESINK_CHECKSUM", "off")
        config = load_config(
            source=str(source),
            target=str(target),
            toggles={"checksum": True, "delete": None},
            yaml_fallbacks={"delete": False, "keep_versions": False},
        )
        assert config.checksum is True  # CLI over env
        assert config.delete is True  # env over YAML
        assert config.keep_versions is False  # YAML over default
        assert config.sync_files is True  # default

    def test_invalid_env_bool(self, monkeypatch, source, target):
        monkeypatch.setenv("TREESINK_DRY_RUN", "sometimes")
        with pytest.raises(ValueError, match="Invalid boolean value"):
            load_config(source=str(source), target=str(target))

    def test_validation_runs(self, tmp_path, target):
        with pytest.raises(ValueError, match="not found"):
            load_config(source=str(tmp_path / "missing"), target=str(target))
