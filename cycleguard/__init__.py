"""
cycleguard/__init__.py

cycleguard: Deterministic release for reference cycles.

A Guard is an acyclic handle on a cyclic structure. When the guard's own
scope ends (release(), a with-block, or its last reference going away)
it calls the structure's cleanup operation exactly once. Until then it
forwards attribute access and calls to the structure it guards.
"""

__version__ = "1.0.0"

from cycleguard.core.guard import (
    Guard,
    GUARD_OPERATIONS,
    GuardState,
    guard_isa,
    guard_can,
    guard_state,
)
from cycleguard.core.exceptions import (
    CycleGuardError,
    InvalidTarget,
    MissingCapability,
    UnsupportedForward,
    GuardConfigError,
)
from cycleguard.core.config import (
    DEFAULT_ACTION,
    GuardConfig,
    GuardMode,
    init_relaxed_mode,
    init_strict_mode,
    init_mode_from_env,
    set_global_config,
    get_global_config,
    reset_global_config,
)

__all__ = [
    # Core types
    "Guard",
    "GuardState",
    "GuardConfig",
    "GuardMode",
    # Errors
    "CycleGuardError",
    "InvalidTarget",
    "MissingCapability",
    "UnsupportedForward",
    "GuardConfigError",
    # Queries on the guard itself
    "guard_isa",
    "guard_can",
    "guard_state",
    # Config helpers
    "init_relaxed_mode",
    "init_strict_mode",
    "init_mode_from_env",
    "set_global_config",
    "get_global_config",
    "reset_global_config",
    # Constants
    "DEFAULT_ACTION",
    "GUARD_OPERATIONS",
]
