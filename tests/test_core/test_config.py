"""Tests for configuration system."""

from zoneinfo import ZoneInfo

import pytest

from logstamp.core.config import (
    LogstampConfig,
    find_config_file,
    get_config,
    load_config,
    reload_config,
    resolve_timezone,
)
from logstamp.core.exceptions import ConfigError, ConfigNotFoundError


class TestLogstampConfig:
    """Tests for LogstampConfig class."""

    def test_empty_config(self):
        """Test empty configuration."""
        config = LogstampConfig()
        assert config.precision == 2
        assert config.format is None
        assert config.relative is False
        assert config.monotonic is False

    def test_validate_precision_range(self):
        with pytest.raises(ConfigError, match="out of range"):
            LogstampConfig(precision=5).validate()
        with pytest.raises(ConfigError, match="out of range"):
            LogstampConfig(precision=0).validate()

    def test_validate_precision_type(self):
        with pytest.raises(ConfigError, match="integer"):
            LogstampConfig(precision="2").validate()  # type: ignore[arg-type]

    def test_validate_unknown_timezone(self):
        with pytest.raises(ConfigError, match="Unknown timezone"):
            LogstampConfig(timezone="Mars/Olympus_Mons").validate()

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys"):
            LogstampConfig.from_dict({"precison": 3})


class TestResolveTimezone:
    """Tests for resolve_timezone()."""

    def test_default_utc(self, clean_env):
        assert resolve_timezone() == ZoneInfo("UTC")

    def test_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("TZ", "Europe/Paris")
        assert resolve_timezone() == ZoneInfo("Europe/Paris")

    def test_leading_colon(self, clean_env, monkeypatch):
        monkeypatch.setenv("TZ", ":Europe/Paris")
        assert resolve_timezone() == ZoneInfo("Europe/Paris")

    def test_explicit_name_wins(self, clean_env, monkeypatch):
        monkeypatch.setenv("TZ", "Europe/Paris")
        assert resolve_timezone("Asia/Tokyo") == ZoneInfo("Asia/Tokyo")


class TestLoadConfig:
    """Tests for config loading."""

    def test_load_config_from_file(self, sample_config):
        """Test loading config from a file."""
        config = load_config(sample_config)

        assert config.precision == 3
        assert config.format == "%F %T"
        assert config.relative is True
        assert config.get_timezone() == ZoneInfo("Europe/London")

    def test_load_config_without_file(self, in_temp_dir):
        """Test that loading falls back to defaults when no config found."""
        config = load_config()
        assert config == LogstampConfig()

    def test_missing_explicit_path(self, temp_dir):
        with pytest.raises(ConfigNotFoundError):
            load_config(temp_dir / "missing.toml")

    def test_invalid_toml(self, temp_dir):
        path = temp_dir / "logstamp.toml"
        path.write_text("precision = \n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_values(self, temp_dir):
        path = temp_dir / "logstamp.toml"
        path.write_text("precision = 9\n")
        with pytest.raises(ConfigError, match="out of range"):
            load_config(path)

    def test_load_from_pyproject(self, temp_dir):
        pyproject = temp_dir / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n\n[tool.logstamp]\nprecision = 1\n')

        config = load_config(pyproject)
        assert config.precision == 1

    def test_get_config_cached(self, in_temp_dir):
        first = get_config()
        assert get_config() is first

    def test_reload_config(self, in_temp_dir, sample_config):
        get_config()
        config = reload_config(sample_config)
        assert config.precision == 3
        assert get_config() is config


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_find_config_in_current_dir(self, in_temp_dir):
        """Test finding config in current directory."""
        config_file = in_temp_dir / "logstamp.toml"
        config_file.write_text("precision = 1\n")

        assert find_config_file() == config_file

    def test_find_config_in_pyproject(self, in_temp_dir):
        """Test finding config in pyproject.toml."""
        pyproject = in_temp_dir / "pyproject.toml"
        pyproject.write_text("[tool.logstamp]\nprecision = 1\n")

        assert find_config_file() == pyproject

    def test_pyproject_without_section_ignored(self, in_temp_dir):
        (in_temp_dir / "pyproject.toml").write_text('[project]\nname = "x"\n')

        assert find_config_file() is None

    def test_find_user_config(self, in_temp_dir):
        user_dir = in_temp_dir / ".config" / "logstamp"
        user_dir.mkdir(parents=True)
        user_config = user_dir / "config.toml"
        user_config.write_text("precision = 4\n")

        assert find_config_file() == user_config

    def test_find_git_root_config(self, in_temp_dir, monkeypatch):
        (in_temp_dir / ".git").mkdir()
        (in_temp_dir / "logstamp.toml").write_text("precision = 1\n")
        sub = in_temp_dir / "src" / "pkg"
        sub.mkdir(parents=True)
        monkeypatch.chdir(sub)

        assert find_config_file() == (in_temp_dir / "logstamp.toml").resolve()
