# File: src/accessor_emulate/construction.py
"""
Capture of undeclared constructor arguments.

After the host framework has populated the declared fields, every argument
key that is still missing from the instance store is written into it as is.
Construction therefore never fails because of an unknown key, and every key
passed to the constructor can be read back with `get_raw()`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from accessor_emulate.host import HostObject, install_construction_hook
from accessor_emulate.xlogging.logger_factory import create_logger


__all__ = [
    "absorb_extra_args",
    "captures_extra_args",
    "enable_construction_capture",
]

LOG = create_logger(__name__)

_CAPTURE_ATTR = "__captures_extra_args__"


def absorb_extra_args(
    orig: Callable[[HostObject, dict[str, Any]], Any],
    self: HostObject,
    args: dict[str, Any],
) -> HostObject:
    """AROUND modifier for BUILD: run the original hook, then store unknown keys."""
    args = dict(args)
    orig(self, args)

    extra = [key for key in args if not self.has_raw(key)]
    for key in extra:
        self.set_raw(key, args[key])
    if extra:
        LOG.construct(type(self), "absorbed", extra)
    return self


def captures_extra_args(cls: type) -> bool:
    """Return True if `cls` or a base already absorbs unknown constructor keys."""
    return bool(getattr(cls, _CAPTURE_ATTR, False))


def enable_construction_capture(cls: type) -> bool:
    """
    Install absorb_extra_args() around the BUILD hook of `cls`, once per hierarchy.

    :return: True if the hook was installed by this call.
    :raises HostFrameworkError: If `cls` is not a HostObject subclass.
    """
    if captures_extra_args(cls):
        return False
    install_construction_hook(cls, absorb_extra_args)
    setattr(cls, _CAPTURE_ATTR, True)
    LOG.trace("%s captures undeclared constructor arguments", cls.__qualname__)
    return True


# End of file: src/accessor_emulate/construction.py
