# File: src/accessor_emulate/emulate.py
"""
Drop-in base class with the public API of a Class::Accessor::Fast class.

Example:
    >>> class Person(ClassAccessorFast):
    ...     pass
    >>> Person.mk_accessors("name", "email")
    >>> Person.mk_ro_accessors("id")
    >>> Person.mk_wo_accessors("password")
    >>> p = Person(name="Ada", id=7, nickname="countess")
    >>> p.name(), p.id(), p.get_raw("nickname")
    ('Ada', 7, 'countess')
    >>> p.email("a@example.org", "ada@example.org").email()
    ['a@example.org', 'ada@example.org']
    >>> p.set("name", "Ada Lovelace").get("name", "id")
    ['Ada Lovelace', 7]

Best-practice naming must be switched on before the accessors it applies to:

    >>> class Car(ClassAccessorFast):
    ...     pass
    >>> Car.follow_best_practice()
    >>> Car.mk_accessors("make")
    >>> Car().set_make("Volvo").get_make()
    'Volvo'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from accessor_emulate import naming, synthesizer
from accessor_emulate.construction import enable_construction_capture
from accessor_emulate.errors import ArityError
from accessor_emulate.host import HostObject


__all__ = ["ClassAccessorFast"]


class ClassAccessorFast(HostObject):
    """
    Base class exposing accessor generation as classmethods.

    Constructor arguments that match no declared field are kept in the
    instance store instead of being rejected.
    """

    @classmethod
    def mk_accessors(cls, *fields: str) -> None:
        """Create read-write accessors."""
        synthesizer.mk_accessors(cls, *fields)

    @classmethod
    def mk_ro_accessors(cls, *fields: str) -> None:
        """Create read-only accessors."""
        synthesizer.mk_ro_accessors(cls, *fields)

    @classmethod
    def mk_wo_accessors(cls, *fields: str) -> None:
        """Create write-only accessors."""
        synthesizer.mk_wo_accessors(cls, *fields)

    @classmethod
    def make_accessor(cls, field: str) -> Callable[..., Any]:
        return synthesizer.make_accessor(cls, field)

    @classmethod
    def make_ro_accessor(cls, field: str) -> Callable[..., Any]:
        return synthesizer.make_ro_accessor(cls, field)

    @classmethod
    def make_wo_accessor(cls, field: str) -> Callable[..., Any]:
        return synthesizer.make_wo_accessor(cls, field)

    @classmethod
    def follow_best_practice(cls) -> None:
        """Prefix readers with `get_` and writers with `set_`."""
        naming.follow_best_practice(cls)

    @classmethod
    def accessor_name_for(cls, field: str) -> str:
        return naming.naming_policy_of(cls).accessor_name_for(cls, field)

    @classmethod
    def mutator_name_for(cls, field: str) -> str:
        return naming.naming_policy_of(cls).mutator_name_for(cls, field)

    def set(self, field: str, *values: Any) -> Any:
        """
        Store `values` in `field` using the writer packing rule.

        :raises ArityError: If no value is given.
        :raises AttributeError: If `field` has no generated accessors.
        """
        if not values:
            raise ArityError(field)
        spec = synthesizer.lookup_field(type(self), field)
        return getattr(self, spec.private_writer)(*values)

    def get(self, *fields: str) -> Any:
        """Return the value of one field, or a list of values for several."""
        specs = [synthesizer.lookup_field(type(self), f) for f in fields]
        values = [getattr(self, spec.private_reader)() for spec in specs]
        if len(values) == 1:
            return values[0]
        return values


enable_construction_capture(ClassAccessorFast)


# End of file: src/accessor_emulate/emulate.py
