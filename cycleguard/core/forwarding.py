"""
Forwarding Dispatcher - makes a guard stand in for its target.

Attribute reads that miss on the proxy fall through __getattr__ to the
target, and the target's own attribute is handed back as-is. A forwarded
method call therefore runs as a plain call on the target's bound method:
no proxy frame appears in tracebacks or in inspect.stack().

Implicit special-method lookup bypasses __getattr__, so the container
and call protocols are forwarded explicitly below. Those do run through
one proxy frame each.

Subclasses provide:
    _PROXY_SLOTS       names stored on the proxy itself
    _RESERVED          public names that belong to the proxy
    _forward_target()  the object to forward to (or raise)
    _forwards()        whether forwarding is possible at all
"""

from typing import Any, FrozenSet, Iterator


class ForwardingProxy:
    """Base class routing non-reserved operations to a wrapped object."""

    __slots__ = ()

    _PROXY_SLOTS: FrozenSet[str] = frozenset()
    _RESERVED:    FrozenSet[str] = frozenset()

    def _forward_target(self, name: str) -> Any:
        raise NotImplementedError

    def _forwards(self) -> bool:
        raise NotImplementedError

    # ── Attribute protocol ────────────────────────────────────

    def __getattr__(self, name: str) -> Any:
        # Only reached on a miss: an unset slot must not recurse into the target
        if name in type(self)._PROXY_SLOTS:
            raise AttributeError(name)
        return getattr(self._forward_target(name), name)

    def __setattr__(self, name: str, value: Any) -> None:
        cls = type(self)
        if name in cls._PROXY_SLOTS:
            object.__setattr__(self, name, value)
        elif name in cls._RESERVED:
            raise AttributeError(f"{cls.__name__}.{name} is reserved and read-only")
        else:
            setattr(self._forward_target(name), name, value)

    def __delattr__(self, name: str) -> None:
        cls = type(self)
        if name in cls._PROXY_SLOTS or name in cls._RESERVED:
            raise AttributeError(f"{cls.__name__}.{name} cannot be deleted")
        delattr(self._forward_target(name), name)

    # ── Protocol forwarding ───────────────────────────────────

    def __str__(self) -> str:
        if not self._forwards():
            return repr(self)
        return str(self._forward_target("__str__"))

    def __bool__(self) -> bool:
        if not self._forwards():
            return True
        return bool(self._forward_target("__bool__"))

    def __len__(self) -> int:
        return len(self._forward_target("__len__"))

    def __iter__(self) -> Iterator[Any]:
        return iter(self._forward_target("__iter__"))

    def __contains__(self, item: Any) -> bool:
        return item in self._forward_target("__contains__")

    def __getitem__(self, key: Any) -> Any:
        return self._forward_target("__getitem__")[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._forward_target("__setitem__")[key] = value

    def __delitem__(self, key: Any) -> None:
        del self._forward_target("__delitem__")[key]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._forward_target("__call__")(*args, **kwargs)
