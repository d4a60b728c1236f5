# File: src/accessor_emulate/xlogging/logger_constants.py

import logging


K_KLASS_NAME = "klass_name"
K_COLOR = "color"

CONSTRUCT = logging.INFO - 1  # (19) absorbed constructor arguments, hidden at INFO
TRACE = logging.DEBUG - 1  # (9) every install decision, hidden at DEBUG
SUPPRESS = -1  # never shown


_logging_constants_initialized = False


def initialize_logger_constants() -> None:
    """Register the custom level names with the logging module once."""
    global _logging_constants_initialized
    if _logging_constants_initialized:
        return
    _logging_constants_initialized = True
    for key, value in {
        "TRACE": TRACE,
        "SUPPRESS": SUPPRESS,
        "CONSTRUCT": CONSTRUCT,
    }.items():
        if key not in logging.getLevelNamesMapping():
            logging.addLevelName(value, key)


# End of file: src/accessor_emulate/xlogging/logger_constants.py
