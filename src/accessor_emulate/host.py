# File: src/accessor_emulate/host.py
"""
Minimal host object framework.

Provides the three services the accessor engine builds on:

- `declare_field()`: declare a named instance field and generate its
  reader/writer/accessor methods.
- `install_construction_hook()`: wrap a class's `BUILD` hook.
- A per-instance key/value store: `has_raw()`, `get_raw()`, `set_raw()`.

Construction is two-phase. `HostObject.__init__` normalizes its arguments
into one mapping (`BUILDARGS`), stores the values of declared fields found in
it, then calls `BUILD(args)` on every class of the MRO that defines one, base
classes first (`BUILDALL`).

Example:
    >>> class Point(HostObject):
    ...     pass
    >>> _ = declare_field(Point, "x", mode="rw")
    >>> Point(x=3).x()
    3
    >>> Point({"x": 4}).x()
    4
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Literal

from accessor_emulate.errors import HostFrameworkError
from accessor_emulate.installer import InstallMode, install
from accessor_emulate.xlogging.logger_factory import create_logger


__all__ = [
    "HostField",
    "HostObject",
    "declare_field",
    "declared_fields",
    "install_construction_hook",
]

LOG = create_logger(__name__)

FieldMode = Literal["rw", "ro"]

_FIELDS_ATTR = "__host_fields__"
_BUILD = "BUILD"


@dataclasses.dataclass(frozen=True, slots=True)
class HostField:
    """A field declared on a HostObject subclass."""

    name: str
    mode: FieldMode = "rw"
    init_arg: str | None = None
    reader: str | None = None
    writer: str | None = None
    accessor: str | None = None
    default: Callable[[], Any] | None = None


class HostObject:
    """
    Base class for objects whose fields live in a per-instance store.

    The store is a plain dict kept apart from `__dict__`, so a field called
    `x` never shadows a method called `x`.
    """

    __host_fields__: ClassVar[dict[str, HostField]] = {}
    _host_store: dict[str, Any]

    def __new__(cls, *args: Any, **kwargs: Any) -> HostObject:
        self = super().__new__(cls)
        self._host_store = {}
        return self

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        build_args = type(self).BUILDARGS(*args, **kwargs)
        for field in declared_fields(type(self)).values():
            if field.init_arg is not None and field.init_arg in build_args:
                self._host_store[field.name] = build_args[field.init_arg]
            elif field.default is not None:
                self._host_store[field.name] = field.default()
        self.BUILDALL(build_args)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self._host_store.items())
        return f"{type(self).__name__}({items})"

    @classmethod
    def BUILDARGS(cls, *args: Any, **kwargs: Any) -> dict[str, Any]:
        """
        Normalize constructor arguments into one mapping.

        Accepts keyword arguments, or a single positional mapping.
        """
        if not args:
            return dict(kwargs)
        if len(args) == 1 and isinstance(args[0], Mapping) and not kwargs:
            return dict(args[0])
        raise HostFrameworkError(
            f"{cls.__name__}() takes keyword arguments or a single mapping, "
            f"got {len(args)} positional argument(s)"
        )

    def BUILDALL(self, args: dict[str, Any]) -> None:
        """Call each class's own BUILD, base classes first."""
        for klass in reversed(type(self).__mro__):
            build = vars(klass).get(_BUILD)
            if build is not None:
                build(self, args)

    def has_raw(self, key: str) -> bool:
        return key in self._host_store

    def get_raw(self, key: str, default: Any = None) -> Any:
        return self._host_store.get(key, default)

    def set_raw(self, key: str, value: Any) -> None:
        self._host_store[key] = value


def declared_fields(cls: type) -> dict[str, HostField]:
    """Return the fields declared on `cls` and its bases, base classes first."""
    fields: dict[str, HostField] = {}
    for klass in reversed(cls.__mro__):
        fields.update(vars(klass).get(_FIELDS_ATTR, {}))
    return fields


def declare_field(
    cls: type,
    name: str,
    *,
    mode: FieldMode = "rw",
    reader: str | None = None,
    writer: str | None = None,
    accessor: str | None = None,
    init_arg: str | None = "",
    default: Callable[[], Any] | None = None,
) -> HostField:
    """
    Declare field `name` on `cls` and generate its methods.

    Without explicit method names an "rw" field gets an accessor and an "ro"
    field gets a reader, both named after the field. Generated methods replace
    any existing method of the same name on `cls`.

    :param init_arg: Constructor key for the field; "" means `name`, None
        means the field cannot be set from the constructor.
    :param default: Zero-argument factory for the value when the constructor
        does not supply one.
    :raises HostFrameworkError: If `cls` is not a HostObject subclass, `name`
        is not an identifier, or the mode is unknown.
    """
    if not (isinstance(cls, type) and issubclass(cls, HostObject)):
        LOG.debug("declare_field(%r, %r) rejected: not a HostObject class", cls, name)
        raise HostFrameworkError(f"{cls!r} is not a HostObject subclass; cannot declare {name!r}")
    if not isinstance(name, str) or not name.isidentifier():
        raise HostFrameworkError(f"invalid field name {name!r} for {cls.__qualname__}")
    if mode not in ("rw", "ro"):
        raise HostFrameworkError(f"unknown field mode {mode!r} for {cls.__qualname__}.{name}")
    if mode == "ro" and (writer or accessor):
        raise HostFrameworkError(f"read-only field {cls.__qualname__}.{name} cannot have a writer")

    if not (reader or writer or accessor):
        if mode == "rw":
            accessor = name
        else:
            reader = name

    field = HostField(
        name=name,
        mode=mode,
        init_arg=name if init_arg == "" else init_arg,
        reader=reader,
        writer=writer,
        accessor=accessor,
        default=default,
    )

    # Generate every method before touching the class.
    methods: dict[str, Callable[..., Any]] = {}
    if reader:
        methods[reader] = _make_reader(name)
    if writer:
        methods[writer] = _make_writer(name)
    if accessor:
        methods[accessor] = _make_accessor(name)

    own_fields = dict(vars(cls).get(_FIELDS_ATTR, {}))
    own_fields[name] = field
    setattr(cls, _FIELDS_ATTR, own_fields)
    for method_name, method in methods.items():
        install(cls, method_name, method, InstallMode.FRESH)

    LOG.trace("declared %s.%s %s", cls.__qualname__, name, field)
    return field


def install_construction_hook(
    cls: type,
    hook: Callable[..., Any],
) -> None:
    """
    Wrap `cls.BUILD` with `hook(orig, self, args)`.

    `cls` first receives its own empty BUILD if it has none, so the hook runs
    once per construction and never re-runs an inherited BUILD.
    """
    if not (isinstance(cls, type) and issubclass(cls, HostObject)):
        raise HostFrameworkError(f"{cls!r} is not a HostObject subclass; cannot hook BUILD")
    install(cls, _BUILD, _empty_build, InstallMode.IF_ABSENT)
    install(cls, _BUILD, hook, InstallMode.AROUND)


def _empty_build(self: HostObject, args: dict[str, Any]) -> None:
    return None


def _make_reader(name: str) -> Callable[[HostObject], Any]:
    def reader(self: HostObject) -> Any:
        return self._host_store.get(name)

    return reader


def _make_writer(name: str) -> Callable[[HostObject, Any], Any]:
    def writer(self: HostObject, value: Any) -> Any:
        self._host_store[name] = value
        return value

    return writer


def _make_accessor(name: str) -> Callable[..., Any]:
    def accessor(self: HostObject, *args: Any) -> Any:
        if args:
            self._host_store[name] = args[0]
        return self._host_store.get(name)

    return accessor


# End of file: src/accessor_emulate/host.py
