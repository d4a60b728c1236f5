# File: src/accessor_emulate/xlogging/logger_formatter.py

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

import pytz
from colorama import Fore

from accessor_emulate.base import config as cfg

from .logger_constants import K_COLOR, K_KLASS_NAME


__all__ = ["CoreFormatter", "get_color_code", "rgb_code"]


FormatStyle = Literal["%", "{", "$"]


def rgb_code(r: int, g: int, b: int) -> str:
    """
    Convert RGB values to an ANSI escape code for terminal color output.

    Components are clamped to 0-255.
    """
    return f"\033[38;2;{max(0, min(255, r))};{max(0, min(255, g))};{max(0, min(255, b))}m"


COLOR_MAP: dict[Any, str] = {
    "fileAndLine": rgb_code(64, 128, 160),
    "klassAndMethod": rgb_code(48, 192, 160),
    "TRACE": rgb_code(96, 0, 64),
    "DEBUG": rgb_code(128, 128, 128),
    "INFO": rgb_code(184, 184, 216),
    "WARNING": rgb_code(192, 176, 0),
    "ERROR": rgb_code(224, 128, 0),
    "CRITICAL": rgb_code(255, 64, 64),
    "CONSTRUCT": rgb_code(176, 176, 224),
    "SUPPRESS": rgb_code(0, 0, 128),
    None: Fore.RESET,
}


def get_color_code(key: Any = None) -> str:
    """
    Return the ANSI code for a COLOR_MAP key, a "#rrggbb" string or a colorama
    Fore name ("red", "lightblue"). Empty outside desktop mode.
    """
    if not cfg.in_desktop_mode():
        return ""
    if key in {"", "RESET"} or key is None:
        return Fore.RESET
    if key in COLOR_MAP:
        return COLOR_MAP[key]
    if isinstance(key, str) and key.startswith("#") and len(key) == 7:
        return rgb_code(*[int(key[i : i + 2], 16) for i in (1, 3, 5)])

    clean_key = str(key).upper().replace("BRIGHT", "LIGHT")
    if "LIGHT" in clean_key and not clean_key.endswith("_EX"):
        clean_key += "_EX"
    return getattr(Fore, clean_key, Fore.RESET)


class CoreFormatter(logging.Formatter):
    """
    Formatter for CoreLogger records.

    Adds these record fields for use in format strings:
    `fileAndLine`, `klassAndMethod` and `levelName` (colored level name).
    Timestamps are rendered in the timezone from AccessorSettings.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        timezone: str | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate)
        tz_name = timezone or cfg.get_settings().log_timezone
        try:
            self.tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            self.tz = pytz.utc

    def format(self, record: logging.LogRecord) -> str:
        record.fileAndLine = self.format_fileAndLine(record.pathname, record.lineno)
        record.klassAndMethod = self.format_klassAndMethod(record)
        record.levelName = get_color_code(record.levelname) + record.levelname + get_color_code()

        message = super().format(record)
        color_key = getattr(record, K_COLOR, record.levelname)
        return get_color_code(color_key) + message + get_color_code()

    @staticmethod
    def format_fileAndLine(pathname: str, lineno: int) -> str:
        if not pathname:
            return "<unknown file>"
        path = Path(pathname)
        try:
            shown = path.relative_to(Path.cwd()).as_posix()
        except ValueError:
            shown = path.as_posix()
        return get_color_code("fileAndLine") + f"{shown}:{lineno}" + get_color_code()

    @staticmethod
    def format_klassAndMethod(record: logging.LogRecord) -> str:
        klass_name: str = getattr(record, K_KLASS_NAME, "")
        if not klass_name:
            text = record.funcName if record.funcName == "<module>" else f"{record.funcName}()"
        elif record.funcName == "__init__":
            text = f"{klass_name}()"
        else:
            text = f"{klass_name}.{record.funcName}()"
        return get_color_code("klassAndMethod") + text + get_color_code()

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created, self.tz)
        if datefmt:
            try:
                return stamp.strftime(datefmt.replace("%-", "%")).lstrip("0")
            except ValueError:
                pass
        return stamp.isoformat(timespec="seconds")


# End of file: src/accessor_emulate/xlogging/logger_formatter.py
