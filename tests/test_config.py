"""
tests/test_config.py

Relaxed / Strict configuration, YAML loading and environment overrides.

Run:
    pytest tests/test_config.py -v
"""

import pytest

from cycleguard import (
    DEFAULT_ACTION,
    GuardConfig,
    GuardConfigError,
    GuardMode,
    get_global_config,
    init_mode_from_env,
    init_relaxed_mode,
    init_strict_mode,
    reset_global_config,
    set_global_config,
)
from cycleguard.core.config import ENV_CONFIG_PATH, ENV_DEFAULT_ACTION, ENV_MODE


@pytest.fixture
def yaml_config(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(text: str):
        path = tmp_path / "guard.yaml"
        path.write_text(text)
        return path
    return _write


class TestPresets:

    def test_relaxed(self):
        config = init_relaxed_mode()
        assert config.mode is GuardMode.RELAXED
        assert config.default_action == DEFAULT_ACTION == "finalize"
        assert config.warns_on_implicit_release is False

    def test_strict(self):
        config = init_strict_mode()
        assert config.mode is GuardMode.STRICT
        assert config.warns_on_implicit_release is True

    def test_strict_mode_alone_enables_warning(self):
        config = GuardConfig(mode=GuardMode.STRICT, warn_on_implicit_release=False)
        assert config.warns_on_implicit_release is True

    def test_invalid_default_action(self):
        with pytest.raises(GuardConfigError):
            GuardConfig(default_action="not a name")
        with pytest.raises(GuardConfigError):
            GuardConfig(default_action="")

    def test_config_is_immutable(self):
        config = init_relaxed_mode()
        with pytest.raises(AttributeError):
            config.default_action = "close"

    def test_mode_string_is_normalised(self):
        config = GuardConfig(mode=" Strict ")
        assert config.mode is GuardMode.STRICT
        assert config.warns_on_implicit_release is True
        assert config.to_dict()["mode"] == "strict"
        assert config == init_strict_mode()

    def test_unknown_mode_string(self):
        with pytest.raises(GuardConfigError, match="Unknown guard mode"):
            GuardConfig(mode="loose")


class TestYaml:

    def test_full_file(self, yaml_config):
        path = yaml_config(
            "mode: strict\n"
            "default_action: close\n"
            "warn_on_implicit_release: true\n"
        )
        config = GuardConfig.from_yaml(path)
        assert config.mode is GuardMode.STRICT
        assert config.default_action == "close"
        assert config.warn_on_implicit_release is True

    def test_empty_file_is_defaults(self, yaml_config):
        assert GuardConfig.from_yaml(yaml_config("")) == GuardConfig()

    def test_mode_is_case_insensitive(self, yaml_config):
        config = GuardConfig.from_yaml(yaml_config("mode: STRICT\n"))
        assert config.mode is GuardMode.STRICT

    def test_unknown_key(self, yaml_config):
        with pytest.raises(GuardConfigError, match="Unknown guard config keys"):
            GuardConfig.from_yaml(yaml_config("colour: red\n"))

    def test_unknown_mode(self, yaml_config):
        with pytest.raises(GuardConfigError, match="Unknown guard mode"):
            GuardConfig.from_yaml(yaml_config("mode: ghost\n"))

    def test_non_boolean_warning_flag(self, yaml_config):
        with pytest.raises(GuardConfigError):
            GuardConfig.from_yaml(yaml_config("warn_on_implicit_release: sometimes\n"))

    def test_not_a_mapping(self, yaml_config):
        with pytest.raises(GuardConfigError, match="mapping"):
            GuardConfig.from_yaml(yaml_config("- strict\n"))

    def test_malformed_yaml(self, yaml_config):
        with pytest.raises(GuardConfigError, match="Malformed"):
            GuardConfig.from_yaml(yaml_config("mode: [strict\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(GuardConfigError, match="Cannot read"):
            GuardConfig.from_yaml(tmp_path / "absent.yaml")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "guard.yaml"
        path.write_bytes(b"mode: \xff\xfe strict\n")
        with pytest.raises(GuardConfigError, match="UTF-8"):
            GuardConfig.from_yaml(path)

    def test_round_trip_through_dict(self):
        config = init_strict_mode()
        assert GuardConfig.from_dict(config.to_dict()) == config


class TestEnvironment:

    def test_defaults_to_relaxed(self):
        assert init_mode_from_env() == init_relaxed_mode()

    def test_strict_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_MODE, "strict")
        assert init_mode_from_env() == init_strict_mode()

    def test_default_action_override(self, monkeypatch):
        monkeypatch.setenv(ENV_DEFAULT_ACTION, "dispose")
        assert init_mode_from_env().default_action == "dispose"

    def test_yaml_file_from_env(self, monkeypatch, yaml_config):
        monkeypatch.setenv(ENV_CONFIG_PATH, str(yaml_config("default_action: close\n")))
        config = init_mode_from_env()
        assert config.default_action == "close"
        assert config.mode is GuardMode.RELAXED

    def test_env_mode_overrides_yaml(self, monkeypatch, yaml_config):
        monkeypatch.setenv(ENV_CONFIG_PATH, str(yaml_config("mode: relaxed\n")))
        monkeypatch.setenv(ENV_MODE, "strict")
        assert init_mode_from_env().mode is GuardMode.STRICT

    def test_bad_env_mode(self, monkeypatch):
        monkeypatch.setenv(ENV_MODE, "loose")
        with pytest.raises(GuardConfigError):
            init_mode_from_env()

    def test_non_utf8_yaml_from_env(self, monkeypatch, tmp_path):
        path = tmp_path / "guard.yaml"
        path.write_bytes(b"default_action: \xe9\n")
        monkeypatch.setenv(ENV_CONFIG_PATH, str(path))
        with pytest.raises(GuardConfigError, match="UTF-8"):
            init_mode_from_env()


class TestGlobalConfig:

    def test_lazily_read_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_MODE, "strict")
        assert get_global_config().mode is GuardMode.STRICT

    def test_cached_until_reset(self, monkeypatch):
        first = get_global_config()
        monkeypatch.setenv(ENV_MODE, "strict")
        assert get_global_config() is first
        reset_global_config()
        assert get_global_config().mode is GuardMode.STRICT

    def test_set_global_config(self):
        config = GuardConfig(default_action="close")
        assert set_global_config(config) is config
        assert get_global_config() is config

    def test_set_global_config_rejects_other_types(self):
        with pytest.raises(GuardConfigError):
            set_global_config({"mode": "strict"})
