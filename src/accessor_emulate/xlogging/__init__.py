"""
package: accessor_emulate.xlogging
"""

# <AUTOGEN_INIT>
from accessor_emulate.xlogging import (
    core_logger,
    logger_constants,
    logger_factory,
    logger_formatter,
    logger_util,
)


__all__ = [
    "core_logger",
    "logger_constants",
    "logger_factory",
    "logger_formatter",
    "logger_util",
]
# </AUTOGEN_INIT>
