# File: src/accessor_emulate/synthesizer.py
"""
Accessor synthesis: the methods generated for each field.

For a field `f` on class `C` the synthesizer

1. resolves the public reader and writer names from C's naming policy and
   drops the writer for read-only fields, the reader for write-only fields;
2. declares the private slot `f` through the host framework, once per
   hierarchy, with the delegates `<prefix>_get_f` / `<prefix>_set_f`;
3. wraps the private writer so that it packs its arguments into one value,
   returns the instance, and reads the current value when called bare;
4. installs one combined method when reader and writer share a name, or the
   reader and writer separately otherwise, never replacing a method C
   already defines.

Write-only fields get a private reader that raises AccessDeniedError.

Example:
    >>> class Account(HostObject):
    ...     pass
    >>> mk_accessors(Account, "owner")
    >>> acct = Account(owner="ada", plan="pro")
    >>> acct.owner()
    'ada'
    >>> acct.owner("grace", "ada").owner()
    ['grace', 'ada']
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable, Iterable
from typing import Any

from accessor_emulate.base.config import get_settings
from accessor_emulate.construction import enable_construction_capture
from accessor_emulate.errors import AccessDeniedError, HostFrameworkError, InstallationError
from accessor_emulate.host import HostObject, declare_field
from accessor_emulate.installer import InstallMode, install
from accessor_emulate.naming import accessor_name_for, mutator_name_for
from accessor_emulate.packing import READ, pack
from accessor_emulate.xlogging.logger_factory import create_logger


__all__ = [
    "AccessorMode",
    "FieldSpec",
    "field_specs",
    "lookup_field",
    "make_accessor",
    "make_ro_accessor",
    "make_wo_accessor",
    "mk_accessors",
    "mk_ro_accessors",
    "mk_wo_accessors",
    "private_reader_name",
    "private_writer_name",
]

LOG = create_logger(__name__)

_SPECS_ATTR = "__accessor_fields__"


class AccessorMode(enum.Enum):
    READ_WRITE = "rw"
    READ_ONLY = "ro"
    WRITE_ONLY = "wo"


@dataclasses.dataclass(frozen=True, slots=True)
class FieldSpec:
    """
    A field, the access mode its public methods were generated for, and the
    private delegates its slot was declared with.

    Delegate names are fixed when the slot is first declared; a later change
    of the private prefix does not affect classes built before it.
    """

    name: str
    mode: AccessorMode
    private_reader: str
    private_writer: str


def private_reader_name(field: str) -> str:
    """Private reader name a new slot for `field` is declared with."""
    return f"{get_settings().private_prefix}_get_{field}"


def private_writer_name(field: str) -> str:
    return f"{get_settings().private_prefix}_set_{field}"


def field_specs(cls: type) -> dict[str, FieldSpec]:
    """Return the FieldSpecs of `cls` and its bases; a subclass entry wins."""
    specs: dict[str, FieldSpec] = {}
    for klass in reversed(cls.__mro__):
        specs.update(vars(klass).get(_SPECS_ATTR, {}))
    return specs


def lookup_field(cls: type, field: str) -> FieldSpec:
    """
    Return the FieldSpec of `field` on `cls` or a base.

    :raises AttributeError: If no accessor was generated for `field`.
    """
    spec = field_specs(cls).get(field)
    if spec is None:
        raise AttributeError(f"{cls.__name__} has no accessor field {field!r}")
    return spec


def mk_accessors(cls: type, *fields: str) -> None:
    """Generate read-write accessors for each of `fields`."""
    _make_all(cls, fields, AccessorMode.READ_WRITE)


def mk_ro_accessors(cls: type, *fields: str) -> None:
    """Generate read-only accessors for each of `fields`."""
    _make_all(cls, fields, AccessorMode.READ_ONLY)


def mk_wo_accessors(cls: type, *fields: str) -> None:
    """Generate write-only accessors for each of `fields`."""
    _make_all(cls, fields, AccessorMode.WRITE_ONLY)


def make_accessor(cls: type, field: str) -> Callable[..., Any]:
    return synthesize(cls, field, AccessorMode.READ_WRITE)


def make_ro_accessor(cls: type, field: str) -> Callable[..., Any]:
    return synthesize(cls, field, AccessorMode.READ_ONLY)


def make_wo_accessor(cls: type, field: str) -> Callable[..., Any]:
    return synthesize(cls, field, AccessorMode.WRITE_ONLY)


def _make_all(cls: type, fields: Iterable[str], mode: AccessorMode) -> None:
    for field in fields:
        synthesize(cls, field, mode)


def synthesize(cls: type, field: str, mode: AccessorMode | str) -> Callable[..., Any]:
    """
    Generate and install the methods of one field.

    A resolver that returns None or "" means no method for that side.
    Every name is resolved and checked before the class is touched.

    :return: A standalone accessor `(self, *args)`; called bare it reads,
        with arguments it writes. It is not installed anywhere.
    :raises HostFrameworkError: If `cls` is not a HostObject subclass or
        `field` is not a valid identifier.
    :raises InstallationError: If a resolver returns an invalid method name.
    """
    mode = AccessorMode(mode)
    if not (isinstance(cls, type) and issubclass(cls, HostObject)):
        raise HostFrameworkError(f"cannot generate accessors on {cls!r}: not a HostObject subclass")
    if not isinstance(field, str) or not field.isidentifier():
        raise HostFrameworkError(f"invalid field name {field!r} for {cls.__qualname__}")

    reader = None if mode is AccessorMode.WRITE_ONLY else accessor_name_for(cls, field)
    writer = None if mode is AccessorMode.READ_ONLY else mutator_name_for(cls, field)
    reader = _checked_name(cls, field, reader)
    writer = _checked_name(cls, field, writer)

    inherited = field_specs(cls).get(field)
    if inherited is not None:
        private_reader, private_writer = inherited.private_reader, inherited.private_writer
    else:
        private_reader, private_writer = private_reader_name(field), private_writer_name(field)

    with LOG.prefix_with(f"{cls.__qualname__}.{field}"):
        LOG.trace("mode=%s reader=%s writer=%s", mode.value, reader, writer)
        enable_construction_capture(cls)

        if inherited is None and not hasattr(cls, private_reader):
            declare_field(cls, field, mode="rw", reader=private_reader, writer=private_writer)
            install(cls, private_writer, _packing_writer(field, private_reader), InstallMode.AROUND)
            if mode is AccessorMode.WRITE_ONLY:
                install(cls, private_reader, _denied_reader(field), InstallMode.FRESH)

        if reader and writer and reader == writer:
            install(cls, reader, _combined(private_reader, private_writer), InstallMode.IF_ABSENT)
        else:
            if reader:
                install(cls, reader, _delegate(private_reader), InstallMode.IF_ABSENT)
            if writer:
                install(cls, writer, _delegate(private_writer), InstallMode.IF_ABSENT)

        specs = dict(vars(cls).get(_SPECS_ATTR, {}))
        specs[field] = FieldSpec(field, mode, private_reader, private_writer)
        setattr(cls, _SPECS_ATTR, specs)

    return _standalone(cls, field, mode, private_reader, private_writer)


def _checked_name(cls: type, field: str, name: Any) -> str | None:
    if name is None or name == "":
        return None
    if not isinstance(name, str) or not name.isidentifier():
        LOG.debug("%s.%s: resolver returned invalid method name %r", cls.__qualname__, field, name)
        raise InstallationError(
            f"invalid method name {name!r} for field {cls.__qualname__}.{field}"
        )
    return name


def _packing_writer(field: str, private_reader: str) -> Callable[..., Any]:
    """AROUND modifier for the private writer."""

    def packing_writer(orig: Callable[..., Any], self: HostObject, *args: Any) -> Any:
        packed = pack(args, strict=False, field=field)
        if packed is READ:
            return getattr(self, private_reader)()
        orig(self, packed.unwrap())
        return self

    return packing_writer


def _denied_reader(field: str) -> Callable[[HostObject], Any]:
    def denied_reader(self: HostObject) -> Any:
        raise AccessDeniedError(field, type(self).__name__)

    return denied_reader


def _combined(private_reader: str, private_writer: str) -> Callable[..., Any]:
    def combined(self: HostObject, *args: Any) -> Any:
        if not args:
            return getattr(self, private_reader)()
        return getattr(self, private_writer)(*args)

    return combined


def _delegate(target: str) -> Callable[..., Any]:
    # resolved per call, not at install time
    def delegate(self: HostObject, *args: Any) -> Any:
        return getattr(self, target)(*args)

    return delegate


def _standalone(
    cls: type,
    field: str,
    mode: AccessorMode,
    private_reader: str,
    private_writer: str,
) -> Callable[..., Any]:
    def accessor(self: HostObject, *args: Any) -> Any:
        if not args:
            return getattr(self, private_reader)()
        if mode is AccessorMode.READ_ONLY:
            raise AccessDeniedError(field, type(self).__name__, operation="write")
        return getattr(self, private_writer)(*args)

    accessor.__name__ = field
    accessor.__qualname__ = f"{cls.__qualname__}.{field}"
    return accessor


# End of file: src/accessor_emulate/synthesizer.py
