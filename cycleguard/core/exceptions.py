"""
cycleguard Exception Hierarchy

All exceptions inherit from CycleGuardError for easy catching.
Each one also inherits the builtin it specialises, so callers that
already catch TypeError / AttributeError / ValueError keep working.
"""

from typing import Any, Dict, Optional


class CycleGuardError(Exception):
    """Base exception for all cycleguard errors.

    `details` carries the offending values (target type, action name,
    config key) and is appended to the message when printed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class InvalidTarget(CycleGuardError, TypeError):
    """Raised when a guard is built around something that is neither an object nor a callable"""
    pass


class MissingCapability(CycleGuardError, AttributeError):
    """Raised when the target does not expose the named release operation"""
    pass


class UnsupportedForward(CycleGuardError, AttributeError):
    """Raised when forwarding is attempted through a guard around a bare callable"""
    pass


class GuardConfigError(CycleGuardError, ValueError):
    """Raised when guard configuration cannot be loaded or is invalid"""
    pass
