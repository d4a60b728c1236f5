# File: src/accessor_emulate/xlogging/logger_factory.py
"""
Factory for CoreLogger instances registered in the logging hierarchy.

Every module of the engine creates its logger once at import time:

    LOG = create_logger(__name__)
"""

import inspect
import logging

from accessor_emulate.xlogging.core_logger import CoreLogger


__all__ = ["create_logger"]


def create_logger(name: str | None = None, *, level: int | str | None = None) -> CoreLogger:
    """
    Return the CoreLogger called `name`, creating it through logging.getLogger().

    :param name: Logger name. Defaults to the calling module's `__name__`.
    :param level: Optional explicit level; otherwise LogLevelConfig decides.
    :raises TypeError: If a plain Logger was already registered under `name`.
    """
    if not name:
        frame = inspect.currentframe()
        try:
            caller = frame.f_back if frame else None
            name = caller.f_globals.get("__name__", "") if caller else ""
        finally:
            del frame
        name = name or "accessor_emulate"

    existing = logging.Logger.manager.loggerDict.get(name)
    if existing is not None and not isinstance(existing, (CoreLogger, logging.PlaceHolder)):
        raise TypeError(f"Logger {name!r} already exists as {type(existing).__name__}")

    # Temporarily set the logger class so parent/propagation wiring matches getLogger()
    logging_class = logging.getLoggerClass()
    logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(logging_class)

    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    if level is not None:
        logger.setLevel(level)
    return logger


# End of file: src/accessor_emulate/xlogging/logger_factory.py
