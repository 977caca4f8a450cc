"""
cycleguard Guard - scope-bound release for cyclic structures.

A parent/child tree whose children point back at their parent is never
freed by reference counting alone. A Guard is an acyclic handle on such a
structure: when the guard itself goes away (release(), end of a with-block,
or its last reference being dropped) it calls the structure's cleanup
operation exactly once, which breaks the cycle.

    tree = build_tree()
    guard = Guard(tree)            # tree.finalize() when guard goes away
    guard.children[0].name         # forwarded to tree
    del guard                      # tree.finalize() runs here

    with Guard(conn, "close") as c:
        c.execute(...)             # conn.close() on block exit

    Guard(lambda: registry.clear())   # callable form

INVARIANTS:
    - The action runs at most once per guard.
    - A dismissed guard never runs its action.
    - released is set only after the action returns. If the action
      raises, the error propagates unchanged and release() may be retried.
"""

import inspect
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from cycleguard.core.config import GuardConfig, get_global_config
from cycleguard.core.exceptions import (
    InvalidTarget,
    MissingCapability,
    UnsupportedForward,
)
from cycleguard.core.forwarding import ForwardingProxy


# Values that cannot take part in a reference cycle
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex)

# The guard's own operations, as answered by guard_can()
GUARD_OPERATIONS = frozenset({"release", "dismiss", "isa", "can", "as_target"})


class Guard(ForwardingProxy):
    """
    Release a target exactly once when this guard's scope ends.

    Two forms:
        Guard(obj, action=None)  object form: calls getattr(obj, action)()
                                 on release; action defaults to the
                                 configured default ("finalize").
        Guard(func)              callable form: calls func() on release.

    A callable is taken as the callable form only when no action is given
    and it does not itself expose the default action.

    Everything that is not one of the guard's own names is forwarded to
    the target in object form. In callable form there is nothing to
    forward to and every forwarded operation raises UnsupportedForward.

    Capability queries come in two flavours and they answer different
    questions:

        guard.isa(kind) / guard.can(name)
            answer for the TARGET. This is what transparent-wrapper code
            normally wants.
        guard_isa(guard, kind) / guard_can(guard, name)
            answer for the GUARD itself and bypass forwarding:
            guard_can() is only true for the guard's own operations.

    The builtins split the same way: isinstance(guard, K) answers for the
    guard, while hasattr(guard, name) goes through forwarding and answers
    for the target.

    Only release, dismiss, isa, can and as_target belong to the guard;
    a target attribute with one of those names is reached through
    as_target(). The guard's own flags are read with guard_state(guard).

    Named attributes and methods are forwarded without a guard frame on
    the stack. Operators and builtins (len(), [], in, iter(), str(),
    bool(), calling the guard) are looked up on the type by Python and
    each run through one guard frame.
    """

    __slots__ = (
        "_target",
        "_action",
        "_dismissed",
        "_released",
        "_releasing",
        "_config",
        "__weakref__",
    )

    _PROXY_SLOTS = frozenset(__slots__)
    _RESERVED = GUARD_OPERATIONS

    def __init__(
        self,
        target: Union[object, Callable[[], Any]],
        action: Optional[str] = None,
        *,
        config: Optional[GuardConfig] = None,
    ):
        """
        Args:
            target: Object to release, or a zero-argument callable
            action: Name of the release operation on target (object form)
            config: Guard config; the process-wide config when omitted

        Raises:
            InvalidTarget: target is None or a scalar, or action is not a name
            MissingCapability: target has no callable attribute named action
        """
        if target is None or isinstance(target, _SCALAR_TYPES):
            raise InvalidTarget(
                "Guard target must be an object or a callable",
                {"got": type(target).__name__},
            )
        if action is not None and (not isinstance(action, str) or not action):
            raise InvalidTarget(
                "Guard action must be a non-empty attribute name",
                {"action": repr(action)},
            )

        config = config or get_global_config()

        if action is None and _is_action(target) and not _exposes(target, config.default_action):
            resolved = None
        else:
            resolved = action or config.default_action
            if not _exposes(target, resolved):
                raise MissingCapability(
                    f"{type(target).__name__} has no release operation {resolved!r}",
                    {"target": type(target).__name__, "action": resolved},
                )
            if isinstance(target, type) and inspect.isfunction(
                inspect.getattr_static(target, resolved, None)
            ):
                raise MissingCapability(
                    f"{target.__qualname__}.{resolved} needs an instance; guard an instance, not the class",
                    {"target": target.__qualname__, "action": resolved},
                )

        if isinstance(target, Guard):
            warnings.warn(
                f"Guarding another guard; the inner {target!r} will also release on its own",
                RuntimeWarning,
                stacklevel=2,
            )

        self._target    = target
        self._action    = resolved
        self._dismissed = False
        self._released  = False
        self._releasing = False
        # Assigned last: __del__ treats a missing _config as "never armed"
        self._config    = config

    # ── Guard operations ──────────────────────────────────────

    def release(self) -> bool:
        """
        Run the release action, at most once.

        Returns True if this call ran the action. Dismissed guards are
        marked released without running anything. Errors raised by the
        action propagate unchanged and leave the guard unreleased.
        """
        if self._released or self._releasing:
            return False
        if self._dismissed:
            self._released = True
            return False

        self._releasing = True
        try:
            if self._action is None:
                self._target()
            else:
                getattr(self._target, self._action)()
        finally:
            self._releasing = False

        self._released = True
        return True

    def dismiss(self) -> None:
        """Cancel the release action for good. Forwarding keeps working."""
        self._dismissed = True

    def isa(self, kind: Union[type, tuple]) -> bool:
        """isinstance() answered for the target."""
        return isinstance(self._target, kind)

    def can(self, name: str) -> bool:
        """True if the target exposes a callable attribute called name."""
        return _exposes(self._target, name)

    def as_target(self) -> Any:
        """The wrapped object, or the action in callable form."""
        return self._target

    # ── Forwarding hooks ──────────────────────────────────────

    def _forward_target(self, name: str) -> Any:
        if self._action is None:
            raise UnsupportedForward(
                f"Cannot forward {name!r}: guard wraps a bare callable",
                {"target": _describe(self._target)},
            )
        return self._target

    def _forwards(self) -> bool:
        return self._action is not None

    # ── Scope protocol ────────────────────────────────────────

    def __enter__(self) -> "Guard":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def __del__(self):
        try:
            config = object.__getattribute__(self, "_config")
        except AttributeError:
            return  # construction failed before the guard was armed

        if self._released or self._dismissed or self._releasing:
            return

        if config.warns_on_implicit_release:
            warnings.warn(
                f"{self!r} was released by garbage collection; "
                f"call release() or use a with-block",
                ResourceWarning,
                source=self,
            )
        self.release()

    # ── Identity ──────────────────────────────────────────────

    def __copy__(self):
        raise TypeError("Guard objects cannot be copied; a copy would release twice")

    def __deepcopy__(self, memo):
        raise TypeError("Guard objects cannot be copied; a copy would release twice")

    def __reduce_ex__(self, protocol):
        raise TypeError("Guard objects cannot be pickled")

    def __repr__(self) -> str:
        if self._released:
            state = "released"
        elif self._dismissed:
            state = "dismissed"
        else:
            state = "armed"

        if self._action is None:
            return f"<Guard callable={_describe(self._target)} {state}>"
        return f"<Guard target={_describe(self._target)} action={self._action!r} {state}>"


# ─────────────────────────────────────────────────────────────
# Guard-side capability queries
# ─────────────────────────────────────────────────────────────

def guard_isa(obj: Any, kind: Union[type, tuple]) -> bool:
    """
    isinstance() answered for obj's own type, never for a guard's target.

    Unlike Guard.isa(), guard_isa(guard, Node) is False even when the
    guard wraps a Node.
    """
    return issubclass(type(obj), kind)


def guard_can(obj: Any, name: str) -> bool:
    """
    Does obj itself support operation name, bypassing any forwarding?

    For a Guard only its own operations count (release, dismiss, isa,
    can, as_target). Anything else is looked up statically on obj.
    """
    if isinstance(obj, Guard):
        return name in GUARD_OPERATIONS
    return callable(inspect.getattr_static(obj, name, None))


@dataclass(frozen=True)
class GuardState:
    """Snapshot of a guard's own state, read without forwarding."""

    action:        Optional[str]
    dismissed:     bool
    released:      bool
    callable_form: bool


def guard_state(guard: Guard) -> GuardState:
    """
    Read a guard's action and flags.

    These live off the instance namespace so that guard.action or
    guard.released still reach the target's attributes of those names.
    """
    if not isinstance(guard, Guard):
        raise TypeError(f"guard_state() expects a Guard, got {type(guard).__name__}")
    action = object.__getattribute__(guard, "_action")
    return GuardState(
        action=action,
        dismissed=object.__getattribute__(guard, "_dismissed"),
        released=object.__getattribute__(guard, "_released"),
        callable_form=action is None,
    )


def _is_action(target: Any) -> bool:
    # Every Guard is callable at class level; ask what it would forward to
    if isinstance(target, Guard):
        return target._forwards() and callable(target.as_target())
    return callable(target)


def _exposes(target: Any, name: str) -> bool:
    return callable(getattr(target, name, None))


def _describe(target: Any) -> str:
    qualname = getattr(target, "__qualname__", None)
    if callable(target) and isinstance(qualname, str):
        return qualname
    return type(target).__name__
