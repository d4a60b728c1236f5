# File: src/accessor_emulate/base/config.py
"""
Execution context detection and environment-driven settings.

Context flags are thread-local so overrides made by one thread (typically a
test) never leak into another. Settings are read from the process
environment after an optional `.env` file has been merged into it.

Exports:
- analysis_mode_context(): context manager for analysis mode.
- in_analysis_mode(): check if analysis mode is active.
- in_test_mode(): check or override whether code is in test mode.
- in_desktop_mode(): check or override whether output is interactive.
- AccessorSettings / get_settings() / reload_settings(): engine settings.

Environment variables:
- ACCESSOR_EMULATE_PRIVATE_PREFIX: prefix of the private delegate methods
  generated for each field (default "_caf").
- ACCESSOR_EMULATE_LOG_TZ: timezone used for log timestamps (default "UTC").
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import dotenv


__all__ = [
    "AccessorSettings",
    "analysis_mode_context",
    "get_settings",
    "in_analysis_mode",
    "in_desktop_mode",
    "in_test_mode",
    "load_dotenv",
    "reload_settings",
]

ENV_PRIVATE_PREFIX = "ACCESSOR_EMULATE_PRIVATE_PREFIX"
ENV_LOG_TZ = "ACCESSOR_EMULATE_LOG_TZ"
DEFAULT_PRIVATE_PREFIX = "_caf"
DEFAULT_LOG_TZ = "UTC"

_tls = threading.local()
_settings: AccessorSettings | None = None


@dataclass
class TLSAttrs:
    """Thread-local flags for environment context."""

    in_code_analyzer: bool = False
    in_test_mode_override: bool | None = None
    in_desktop_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


@contextmanager
def analysis_mode_context() -> Iterator[None]:
    """
    Context manager to enable code analysis mode temporarily.

    Logging is silenced while analysis mode is active. Restores the previous
    value on exit; nested contexts are supported.
    """
    tls = _get_tls()
    previous_state = tls.in_code_analyzer
    tls.in_code_analyzer = True
    try:
        yield
    finally:
        tls.in_code_analyzer = previous_state


def in_analysis_mode() -> bool:
    """Check if code analysis mode is active on this thread."""
    return _get_tls().in_code_analyzer


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if running in test mode, with optional override.

    Detection order:
      1. Analysis mode check (always False).
      2. Explicit override (thread-local).
      3. Presence of pytest/unittest in sys.modules.
      4. Known environment variables (PYTEST_CURRENT_TEST, CI).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if test mode is active, False otherwise.
    """
    if in_analysis_mode():
        return False

    tls = _get_tls()
    if unset_override:
        tls.in_test_mode_override = None
    if override is not None:
        tls.in_test_mode_override = override
        return override
    if tls.in_test_mode_override is not None:
        return tls.in_test_mode_override
    if "pytest" in sys.modules or "unittest" in sys.modules:
        return True

    env = os.environ
    return bool(env.get("PYTEST_CURRENT_TEST")) or env.get("CI") == "true"


def in_desktop_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Determine if log output should carry terminal colors.

    Explicit override wins, then test mode (True), then analysis mode (False),
    then whether stderr is attached to a terminal.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_desktop_mode_override = None
    if override is not None:
        tls.in_desktop_mode_override = override
        return override
    if tls.in_desktop_mode_override is not None:
        return tls.in_desktop_mode_override

    if in_test_mode():
        return True
    if in_analysis_mode():
        return False
    return bool(getattr(sys.stderr, "isatty", lambda: False)())


def load_dotenv(*, override: bool = False) -> bool:
    """
    Merge the nearest `.env` file into os.environ.

    :param override: Whether `.env` values replace variables already set.
    :return: True if at least one variable was set.
    """
    return dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True), override=override)


@dataclass(frozen=True, slots=True)
class AccessorSettings:
    """Engine settings resolved from the environment."""

    private_prefix: str = DEFAULT_PRIVATE_PREFIX
    """Prefix for the generated private reader/writer (`<prefix>_get_<field>`)."""

    log_timezone: str = DEFAULT_LOG_TZ
    """pytz timezone name used by CoreFormatter timestamps."""

    @classmethod
    def from_environ(cls) -> AccessorSettings:
        load_dotenv()
        env = os.environ
        prefix = env.get(ENV_PRIVATE_PREFIX, "").strip() or DEFAULT_PRIVATE_PREFIX
        if not prefix.startswith("_"):
            prefix = "_" + prefix
        return cls(
            private_prefix=prefix,
            log_timezone=env.get(ENV_LOG_TZ, "").strip() or DEFAULT_LOG_TZ,
        )


def get_settings() -> AccessorSettings:
    """Return the cached settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = AccessorSettings.from_environ()
    return _settings


def reload_settings() -> AccessorSettings:
    """Discard cached settings and read the environment again."""
    global _settings
    _settings = None
    return get_settings()


# End of file: src/accessor_emulate/base/config.py
