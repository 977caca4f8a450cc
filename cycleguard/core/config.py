"""
cycleguard configuration: Relaxed and Strict modes.

Relaxed Mode: Guards reclaimed without an explicit release stay silent.
Strict Mode:  Every guard released by garbage collection instead of
              release() or a with-block emits a ResourceWarning.

init_mode_from_env() builds the process default from CYCLEGUARD_MODE,
CYCLEGUARD_DEFAULT_ACTION and an optional YAML file at CYCLEGUARD_CONFIG.
"""

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cycleguard.core.exceptions import GuardConfigError


DEFAULT_ACTION = "finalize"

ENV_MODE           = "CYCLEGUARD_MODE"
ENV_DEFAULT_ACTION = "CYCLEGUARD_DEFAULT_ACTION"
ENV_CONFIG_PATH    = "CYCLEGUARD_CONFIG"


class GuardMode(Enum):
    RELAXED = "relaxed"
    STRICT  = "strict"

    @classmethod
    def parse(cls, value: Any) -> "GuardMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise GuardConfigError(
                f"Unknown guard mode: {value!r}",
                {"expected": choices},
            ) from None


@dataclass(frozen=True)
class GuardConfig:
    mode:                     GuardMode = GuardMode.RELAXED
    default_action:           str       = DEFAULT_ACTION
    warn_on_implicit_release: bool      = False

    def __post_init__(self) -> None:
        # Frozen: normalise mode strings such as "strict" in place
        object.__setattr__(self, "mode", GuardMode.parse(self.mode))
        if not isinstance(self.default_action, str) or not self.default_action.isidentifier():
            raise GuardConfigError(
                "default_action must be a valid attribute name",
                {"default_action": repr(self.default_action)},
            )

    @property
    def warns_on_implicit_release(self) -> bool:
        """True when a guard reclaimed without release() should warn."""
        return self.mode is GuardMode.STRICT or self.warn_on_implicit_release

    # ── Serialisation ─────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuardConfig":
        """Build a config from a plain mapping (as loaded from YAML)."""
        if not isinstance(data, dict):
            raise GuardConfigError(
                "Guard config must be a mapping",
                {"got": type(data).__name__},
            )

        known = {"mode", "default_action", "warn_on_implicit_release"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise GuardConfigError(
                "Unknown guard config keys",
                {"keys": ", ".join(unknown)},
            )

        warn = data.get("warn_on_implicit_release", False)
        if not isinstance(warn, bool):
            raise GuardConfigError(
                "warn_on_implicit_release must be a boolean",
                {"got": repr(warn)},
            )

        return cls(
            mode=GuardMode.parse(data.get("mode", GuardMode.RELAXED)),
            default_action=data.get("default_action", DEFAULT_ACTION),
            warn_on_implicit_release=warn,
        )

    @classmethod
    def from_yaml(cls, config_file: Path) -> "GuardConfig":
        """Load guard config from a YAML file."""
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise GuardConfigError(
                f"Cannot read guard config: {config_file}",
                {"error": e.strerror or str(e)},
            ) from e
        except UnicodeDecodeError as e:
            raise GuardConfigError(
                f"Guard config is not valid UTF-8: {config_file}",
                {"error": e.reason, "offset": e.start},
            ) from e
        except yaml.YAMLError as e:
            raise GuardConfigError(
                f"Malformed guard config: {config_file}",
                {"error": str(e).splitlines()[0]},
            ) from e

        # An empty file is a valid, all-defaults config
        return cls.from_dict(data or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode":                     self.mode.value,
            "default_action":           self.default_action,
            "warn_on_implicit_release": self.warn_on_implicit_release,
        }


# ─────────────────────────────────────────────────────────────
# Factory Functions
# ─────────────────────────────────────────────────────────────

def init_relaxed_mode() -> GuardConfig:
    return GuardConfig(
        mode=GuardMode.RELAXED,
        default_action=DEFAULT_ACTION,
        warn_on_implicit_release=False,
    )


def init_strict_mode() -> GuardConfig:
    return GuardConfig(
        mode=GuardMode.STRICT,
        default_action=DEFAULT_ACTION,
        warn_on_implicit_release=True,
    )


def init_mode_from_env() -> GuardConfig:
    """
    Read CYCLEGUARD_CONFIG, CYCLEGUARD_MODE and CYCLEGUARD_DEFAULT_ACTION.

    The YAML file (if any) is the base; the two scalar variables
    override its values. Defaults to relaxed mode.
    """
    config_path = os.environ.get(ENV_CONFIG_PATH)
    if config_path:
        config = GuardConfig.from_yaml(Path(config_path))
    elif os.environ.get(ENV_MODE, "relaxed").strip().lower() == "strict":
        config = init_strict_mode()
    else:
        config = init_relaxed_mode()

    mode = os.environ.get(ENV_MODE)
    if mode:
        config = replace(config, mode=GuardMode.parse(mode))

    action = os.environ.get(ENV_DEFAULT_ACTION)
    if action:
        config = replace(config, default_action=action.strip())

    return config


# ─────────────────────────────────────────────────────────────
# Process-wide config
# ─────────────────────────────────────────────────────────────

_global_config: Optional[GuardConfig] = None


def set_global_config(config: GuardConfig) -> GuardConfig:
    """
    Install the config used by guards constructed without one.
    Existing guards keep the config they were built with.
    """
    global _global_config
    if not isinstance(config, GuardConfig):
        raise GuardConfigError(
            "set_global_config() expects a GuardConfig",
            {"got": type(config).__name__},
        )
    _global_config = config
    return _global_config


def get_global_config() -> GuardConfig:
    """Return the process-wide config, reading the environment on first use."""
    global _global_config
    if _global_config is None:
        _global_config = init_mode_from_env()
    return _global_config


def reset_global_config() -> None:
    """Forget the process-wide config; the next lookup re-reads the environment."""
    global _global_config
    _global_config = None
