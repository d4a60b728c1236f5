# File: src/accessor_emulate/packing.py
"""
Packing of writer arguments into the single value a field stores.

    ()         -> ArityError (strict) or READ (permissive)
    (a,)       -> Scalar(a)      stores a
    (a, b, c)  -> Sequence(...)  stores [a, b, c]

Values are never coerced or copied.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Sequence as SequenceABC
from typing import Any, Final, Literal, overload

from accessor_emulate.errors import ArityError


__all__ = [
    "READ",
    "Packed",
    "Scalar",
    "Sequence",
    "pack",
    "pack_value",
]


class _ReadMarker(enum.Enum):
    READ = "read"


READ: Final = _ReadMarker.READ
"""Returned by a permissive pack() of zero arguments: read instead of write."""


@dataclasses.dataclass(frozen=True, slots=True)
class Scalar:
    value: Any

    def unwrap(self) -> Any:
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class Sequence:
    values: tuple[Any, ...]

    def unwrap(self) -> list[Any]:
        # fresh list per call
        return list(self.values)


Packed = Scalar | Sequence


@overload
def pack(args: SequenceABC[Any], *, strict: Literal[True] = ..., field: str | None = ...) -> Packed: ...
@overload
def pack(
    args: SequenceABC[Any], *, strict: bool, field: str | None = ...
) -> Packed | _ReadMarker: ...
def pack(
    args: SequenceABC[Any], *, strict: bool = True, field: str | None = None
) -> Packed | _ReadMarker:
    """
    Classify writer arguments.

    :param args: Positional arguments given to the writer, in call order.
    :param strict: When True zero arguments raise; when False they yield READ.
    :param field: Field name, only used in the error message.
    :raises ArityError: On zero arguments in strict mode.
    """
    if not args:
        if strict:
            raise ArityError(field)
        return READ
    if len(args) == 1:
        return Scalar(args[0])
    return Sequence(tuple(args))


def pack_value(args: SequenceABC[Any], *, field: str | None = None) -> Any:
    """Strictly pack `args` and return the value to store."""
    return pack(args, strict=True, field=field).unwrap()


# End of file: src/accessor_emulate/packing.py
