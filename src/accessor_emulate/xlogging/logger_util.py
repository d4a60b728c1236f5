# File: src/accessor_emulate/xlogging/logger_util.py
"""
Environment variable-driven log level configuration.

Sources, read after the nearest `.env` file is merged into the environment:
- LOG_LEVEL / LOG_LEVELS: a DSL of `pattern:LEVEL` or `pattern=LEVEL`
  fragments separated by `;`, `,` or spaces. A bare level sets the default.
- LOG_LEVEL_<NAME>: a level for one logger. `_` in NAME becomes `.` and
  `__` becomes a literal `_`, so LOG_LEVEL_ACCESSOR__EMULATE_INSTALLER targets
  `accessor_emulate.installer`.

Resolution for a logger name: exact > nearest ancestor > most specific glob >
default > fallback (WARNING).
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final, NamedTuple

from accessor_emulate.base import config as cfg
from accessor_emulate.xlogging.logger_constants import initialize_logger_constants


__all__ = ["LogLevelConfig", "LogPatternLevel", "env_var_to_logger_name"]

_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_ASSIGNMENT_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")
_ENV_NAME_RX: Final[re.Pattern[str]] = re.compile(r"^LOG_LEVELS?(?P<suffix>(?:_[A-Z][A-Z0-9_]*)*)$")

_log_level_config_instance: LogLevelConfig | None = None


class LogPatternLevel(NamedTuple):
    """Mapping from a logger name pattern to an integer log level."""

    pattern: str
    level: int


def env_var_to_logger_name(name: str) -> str | None:
    """
    Return the logger name targeted by a LOG_LEVEL* variable.

    "" means the default; None means the variable is not a log-level variable.
    """
    match = _ENV_NAME_RX.match(name)
    if match is None:
        return None
    suffix = match["suffix"].lstrip("_")
    if not suffix or suffix == "ROOT":
        return ""
    return suffix.replace("__", "\0").replace("_", ".").replace("\0", "_").lower()


@dataclass(slots=True)
class LogLevelConfig:
    """Resolve per-logger levels from environment variables."""

    pattern_to_level: dict[str, int] = field(default_factory=dict)
    _level_names: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.pattern_to_level:
            self.update_from_environment()

    @classmethod
    def get_instance(cls) -> LogLevelConfig:
        """Return the process-wide instance, creating it on first use."""
        global _log_level_config_instance
        if _log_level_config_instance is None:
            initialize_logger_constants()
            _log_level_config_instance = cls()
        return _log_level_config_instance

    def update_from_environment(self) -> None:
        """Rebuild the pattern->level mapping from the current environment."""
        cfg.load_dotenv()
        self._level_names.clear()
        self.pattern_to_level.clear()
        # Reverse order: LOG_LEVEL is applied last, so its default beats LOG_LEVELS.
        for name, value in sorted(os.environ.items(), reverse=True):
            module = env_var_to_logger_name(name)
            if module is None:
                continue
            for entry in self.parse(value, module=module):
                self.pattern_to_level[entry.pattern] = entry.level

    def parse(self, value: str, *, module: str = "") -> Iterator[LogPatternLevel]:
        """Parse one variable value into pattern->level entries."""
        for fragment in _FRAGMENT_SEPARATOR_RX.split(value):
            fragment = fragment.strip()
            if not fragment:
                continue
            parts = [p.strip().strip("'\"") for p in _ASSIGNMENT_RX.split(fragment, maxsplit=1)]
            pattern, level_name = (parts[0], parts[1]) if len(parts) == 2 else ("", parts[0])

            if module:
                pattern = module if pattern in {"", "root"} else f"{module}.{pattern}"
            if pattern.lower() == "root":
                pattern = ""

            level = self._level_from_text(level_name)
            if level is not None:
                yield LogPatternLevel(pattern, level)

    def get_effective_level(self, logger_name: str, *, default: int = logging.WARNING) -> int:
        """Return the configured level for `logger_name`."""
        name_lc = logger_name.lower()
        named = {k.lower(): v for k, v in self.pattern_to_level.items() if k}

        if name_lc in named:
            return named[name_lc]

        parts = name_lc.split(".")
        for i in range(len(parts) - 1, 0, -1):
            ancestor = ".".join(parts[:i])
            if ancestor in named:
                return named[ancestor]

        best: tuple[int, int] | None = None
        for pattern, level in named.items():
            if not any(ch in pattern for ch in "*?[") or not fnmatch.fnmatch(name_lc, pattern):
                continue
            score = min((i for i, ch in enumerate(pattern) if ch in "*?["), default=len(pattern))
            if best is None or score > best[0]:
                best = (score, level)
        if best is not None:
            return best[1]

        return self.pattern_to_level.get("", default)

    def _level_from_text(self, text: str) -> int | None:
        if text.isdigit():
            return int(text, 10)
        if not self._level_names:
            self._level_names = {
                k.upper(): v
                for k, v in logging.getLevelNamesMapping().items()
                if isinstance(k, str) and isinstance(v, int)
            }
        level = self._level_names.get(text.upper())
        return level if level not in (None, logging.NOTSET) else None


# End of file: src/accessor_emulate/xlogging/logger_util.py
