# File: src/accessor_emulate/errors.py
"""
Exception hierarchy for accessor generation.

Each error also derives from the builtin exception a caller would expect for
the same mistake, so `except TypeError` keeps working around a bad writer call.
"""

__all__ = [
    "AccessDeniedError",
    "AccessorEmulateError",
    "ArityError",
    "HostFrameworkError",
    "InstallationError",
]


class AccessorEmulateError(Exception):
    """Base class for every error raised by this package."""


class ArityError(AccessorEmulateError, TypeError):
    """A strict writer or `set()` was called without a value."""

    def __init__(self, field: str | None = None, message: str = "wrong number of arguments") -> None:
        self.field = field
        super().__init__(f"{message} (field {field!r})" if field else message)


class AccessDeniedError(AccessorEmulateError, AttributeError):
    """A write-only field was read, or a read-only field was written."""

    def __init__(self, field: str, owner: str = "", operation: str = "read") -> None:
        self.field = field
        self.operation = operation
        where = f"{owner}." if owner else ""
        kind = "write-only" if operation == "read" else "read-only"
        super().__init__(f"cannot {operation} {kind} field {where}{field}")


class InstallationError(AccessorEmulateError, TypeError):
    """The symbol installer was handed something it cannot install."""


class HostFrameworkError(AccessorEmulateError, RuntimeError):
    """The host object framework rejected a declaration or a constructor call."""


# End of file: src/accessor_emulate/errors.py
