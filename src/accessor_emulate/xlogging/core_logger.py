# File: src/accessor_emulate/xlogging/core_logger.py
"""
Structured logging with environment-driven configuration.

Example:
    >>> from accessor_emulate.xlogging.logger_factory import create_logger
    >>> LOG = create_logger(__name__)
    >>> with LOG.prefix_with("[Point]"):
    ...     LOG.trace("installing %s", "x")

Features:
- Custom levels: TRACE, CONSTRUCT, SUPPRESS
- Caller class resolution (`self` / `cls` of the calling frame)
- Context-local prefix manager
- Safe rendering of non-primitive args

Design:
- Only the root logger owns handlers; CoreLogger instances propagate.
- Per-logger levels come from LogLevelConfig (environment).
- initialize_root() is the only entry point for root setup and is idempotent.
"""

from __future__ import annotations

import contextvars
import inspect
import logging
import os
import reprlib
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from fractions import Fraction
from types import FrameType
from typing import Any, ClassVar, Final, TextIO

from accessor_emulate.base import config as cfg

from .logger_constants import CONSTRUCT, K_KLASS_NAME, TRACE, initialize_logger_constants
from .logger_formatter import CoreFormatter
from .logger_util import LogLevelConfig


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

PRIMITIVE_TYPES: Final[tuple[type, ...]] = (
    int,
    float,
    complex,
    bool,
    Decimal,
    Fraction,
    type(None),
    str,
)

_LOG_KWARGS_FORBIDDEN: set[str] = {"filename", "lineno", "msg", "args", "levelname", "levelno"}
_LOG_KWARGS_STANDARD: set[str] = {"exc_info", "stack_info", "stacklevel", "extra"}
_LOG_ROOT_ATTR_NAME = "_accessor_emulate_corelogger_initialized"

_log_prefix: contextvars.ContextVar[str] = contextvars.ContextVar("log_prefix", default="")
_arg_repr = reprlib.Repr()
_arg_repr.maxstring = 120
_arg_repr.maxother = 120


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - Custom levels: TRACE, CONSTRUCT.
    - Class-aware caller info in the `klass_name` record field.
    - Safe rendering of non-primitive args.
    - A prefix context manager for scoped message prefixes.
    """

    _INTERNAL_FRAME_OFFSET: ClassVar[int] = 2  # log() + the level method (debug/trace/...)

    def __init__(self, name: str, level: int | str = logging.NOTSET) -> None:
        initialize_logger_constants()
        if level in {logging.NOTSET, "NOTSET", ""}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{type(self).__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def log(self, level: int, *args: Any, **kwargs: Any) -> None:
        """Emit a log record, resolving the caller's class and applying the prefix."""
        initialize_root()
        if cfg.in_analysis_mode() or not self.isEnabledFor(level):
            return

        _move_nonstandard_kwargs_to_extra(kwargs)
        stacklevel: int = kwargs.pop("stacklevel", 1) + self._INTERNAL_FRAME_OFFSET
        extra: dict[str, Any] = kwargs.setdefault("extra", {})
        klass_name = _caller_class_name(stacklevel)
        if klass_name:
            extra.setdefault(K_KLASS_NAME, klass_name)

        msg: Any = args[0] if args else ""
        log_args = _normalize_unsupported_args(args[1:])
        prefix = _log_prefix.get()
        if prefix:
            msg = f"{prefix}{msg}"

        super().log(
            level,
            msg,
            *log_args,
            exc_info=kwargs.get("exc_info"),
            stack_info=kwargs.get("stack_info", False),
            stacklevel=stacklevel,
            extra=extra,
        )

    def trace(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        self.log(TRACE, *args, **kwargs)

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, *args, **kwargs)

    def construct(self, type_: type | str, id: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a construction event at CONSTRUCT level.

        The message is the short type name and `id`, followed by the rendered
        args. The first arg is not treated as a format string.
        """
        type_name = type_ if isinstance(type_, str) else getattr(type_, "__name__", repr(type_))
        msg = f"{type_name.rsplit('.', 1)[-1]}: {id}"
        for a in args:
            msg += f", {a if isinstance(a, PRIMITIVE_TYPES) else _arg_repr.repr(a)}"
        self.log(CONSTRUCT, msg, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, *args, **kwargs)

    def critical(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stack_info", True)
        self.log(logging.CRITICAL, *args, **kwargs)

    def exception(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, *args, **kwargs)

    @contextmanager
    def prefix_with(self, prefix: str) -> Iterator[None]:
        """
        Prefix every message logged in the current context with `prefix`.

        Nested prefixes accumulate. State lives in a contextvar, not on the logger.
        """
        current = _log_prefix.get()
        token = _log_prefix.set(f"{current}{prefix} > ")
        try:
            yield
        finally:
            _log_prefix.reset(token)


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    - Ensures exactly one stderr StreamHandler with CoreFormatter exists.
    - `force=True` removes and recreates the stderr handler.
    - Sets the root level to `level` if given, otherwise WARNING if NOTSET.
    - Never touches handlers that do not write to stderr.

    :param fmt: Format string. Defaults to LOG_FORMAT or the package default.
    :param datefmt: Date format. Defaults to LOG_DATEFMT. Without any `%`
        directive, timestamps are dropped from the format.
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)
    initialize_logger_constants()

    if force:
        root.handlers = [
            h
            for h in root.handlers
            if not (isinstance(h, logging.StreamHandler) and h.stream is sys.stderr)
        ]

    fmt = fmt or os.environ.get(
        "LOG_FORMAT", "%(levelName)s %(asctime)s %(fileAndLine)s %(klassAndMethod)s %(message)s"
    )
    datefmt = os.environ.get("LOG_DATEFMT", "%-I:%M:%S%p") if datefmt is None else datefmt
    if "%" not in datefmt:
        fmt = fmt.replace("%(asctime)s ", "").replace(" %(asctime)s", "")
        datefmt = None

    stderr_handlers: list[logging.StreamHandler[TextIO]] = [
        h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    if not stderr_handlers:
        handler: logging.StreamHandler[TextIO] = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CoreFormatter(fmt, datefmt))
        root.addHandler(handler)
    elif not any(isinstance(h.formatter, CoreFormatter) for h in stderr_handlers):
        stderr_handlers[0].setFormatter(CoreFormatter(fmt, datefmt))

    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        root.setLevel(level)
    elif root.getEffectiveLevel() == logging.NOTSET:
        root.setLevel(logging.WARNING)


def _caller_class_name(stacklevel: int) -> str:
    """Return the class of `self` or `cls` in the frame `stacklevel` frames above log()."""
    frame: FrameType | None = inspect.currentframe()
    try:
        # currentframe() is this helper, its parent is log()
        for _ in range(stacklevel):
            if frame is None:
                return ""
            frame = frame.f_back
        if frame is None:
            return ""
        f_locals = frame.f_locals
        if (zelf := f_locals.get("self")) is not None:
            return type(zelf).__name__
        if isinstance(cls := f_locals.get("cls"), type):
            return cls.__name__
        return ""
    finally:
        del frame


def _move_nonstandard_kwargs_to_extra(kwargs: dict[str, Any]) -> None:
    """
    Move non-standard keyword arguments into the `extra` dict.

    :raises ValueError: If a key would overwrite a LogRecord attribute.
    """
    for key in list(kwargs):
        if key in _LOG_KWARGS_FORBIDDEN:
            raise ValueError(f"Invalid keyword argument {key!r}")
        if key not in _LOG_KWARGS_STANDARD:
            kwargs.setdefault("extra", {})[key] = kwargs.pop(key)


def _normalize_unsupported_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Render non-primitive format args with a size-limited repr."""
    return tuple(a if isinstance(a, PRIMITIVE_TYPES) else _arg_repr.repr(a) for a in args)


# End of file: src/accessor_emulate/xlogging/core_logger.py
