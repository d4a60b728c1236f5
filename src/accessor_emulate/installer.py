# File: src/accessor_emulate/installer.py
"""
Symbol installation on live classes.

A class's method table is its own `__dict__`. This module is the only code
in the package that writes methods into it, in one of three modes:

- IF_ABSENT: install only when the class itself does not define the name.
  Inherited definitions do not count. Hand-written methods always win.
- FRESH: install unconditionally, replacing whatever the class defines.
- AROUND: wrap the current implementation (own or inherited). The wrapper is
  called as `wrapper(orig, self, *args, **kwargs)`.

Every argument is validated before the class is touched, so a failed call
leaves the method table unchanged.
"""

from __future__ import annotations

import enum
import functools
import types
from collections.abc import Callable
from typing import Any

from accessor_emulate.errors import InstallationError
from accessor_emulate.xlogging.logger_factory import create_logger


__all__ = [
    "InstallMode",
    "defines_method",
    "install",
    "install_modifier",
]

LOG = create_logger(__name__)


class InstallMode(enum.Enum):
    IF_ABSENT = "if_absent"
    FRESH = "fresh"
    AROUND = "around"


def defines_method(cls: type, name: str) -> bool:
    """Return True if `cls` itself (not a base class) defines `name`."""
    return name in vars(cls)


def _unwrap_callable(function: Any) -> Callable[..., Any] | None:
    if isinstance(function, (classmethod, staticmethod)):
        function = function.__func__
    return function if callable(function) else None


def _validate(cls: Any, name: Any, function: Any) -> Callable[..., Any]:
    if not isinstance(cls, type):
        raise InstallationError(f"cannot install {name!r} on non-class {cls!r}")
    if not isinstance(name, str) or not name.isidentifier():
        raise InstallationError(f"invalid method name {name!r} for {cls.__qualname__}")
    inner = _unwrap_callable(function)
    if inner is None:
        raise InstallationError(
            f"cannot install {cls.__qualname__}.{name}: {type(function).__name__} is not callable"
        )
    return inner


def install(
    cls: type,
    name: str,
    function: Callable[..., Any] | classmethod[Any, Any, Any] | staticmethod[Any, Any],
    mode: InstallMode = InstallMode.IF_ABSENT,
) -> bool:
    """
    Install `function` as `cls.<name>` following `mode`.

    Plain functions are named after the slot they fill so tracebacks and
    `help()` show `Class.name`.

    :return: True if the method table changed, False if IF_ABSENT found the
        name already defined.
    :raises InstallationError: If `function` is not callable, `name` is not an
        identifier, or AROUND has nothing to wrap.
    """
    if mode is InstallMode.AROUND:
        install_modifier(cls, "around", name, function)  # type: ignore[arg-type]
        return True

    inner = _validate(cls, name, function)
    if mode is InstallMode.IF_ABSENT and defines_method(cls, name):
        LOG.debug("skip %s.%s: already defined", cls.__qualname__, name)
        return False

    _rename(inner, cls, name)
    setattr(cls, name, function)
    LOG.trace("installed %s.%s (%s)", cls.__qualname__, name, mode.value)
    return True


def install_modifier(
    cls: type,
    kind: str,
    name: str,
    function: Callable[..., Any],
) -> Callable[..., Any]:
    """
    Wrap the method `name` of `cls` with a modifier and install the result.

    Kinds:
    - "around": `function(orig, self, *args, **kwargs)`, its result is returned.
    - "before" / "after": `function(self, *args, **kwargs)` runs before/after
      the original, whose result is returned.

    The original is looked up through the MRO, so a base class method can be
    wrapped on a subclass without touching the base.

    :return: The installed wrapper.
    """
    inner = _validate(cls, name, function)
    if kind not in {"around", "before", "after"}:
        raise InstallationError(f"unknown modifier kind {kind!r}")
    if not hasattr(cls, name):
        raise InstallationError(f"cannot wrap {cls.__qualname__}.{name}: no such method")

    raw_orig = _raw_lookup(cls, name)
    if isinstance(raw_orig, (classmethod, staticmethod)) or not callable(raw_orig):
        raise InstallationError(f"cannot wrap {cls.__qualname__}.{name}: not an instance method")
    orig: Callable[..., Any] = raw_orig

    if kind == "around":

        @functools.wraps(orig)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            return inner(orig, self, *args, **kwargs)

    elif kind == "before":

        @functools.wraps(orig)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            inner(self, *args, **kwargs)
            return orig(self, *args, **kwargs)

    else:

        @functools.wraps(orig)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            result = orig(self, *args, **kwargs)
            inner(self, *args, **kwargs)
            return result

    _rename(wrapper, cls, name)
    setattr(cls, name, wrapper)
    LOG.trace("installed %s modifier on %s.%s", kind, cls.__qualname__, name)
    return wrapper


def _raw_lookup(cls: type, name: str) -> Any:
    """Return the first `name` in the MRO without invoking descriptors."""
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return getattr(cls, name)


def _rename(function: Callable[..., Any], cls: type, name: str) -> None:
    # Only generated closures are renamed; module-level functions may be shared.
    if isinstance(function, types.FunctionType) and "<locals>" in function.__qualname__:
        function.__name__ = name
        function.__qualname__ = f"{cls.__qualname__}.{name}"


# End of file: src/accessor_emulate/installer.py
