"""
package: accessor_emulate
"""

# <AUTOGEN_INIT>
from accessor_emulate import (
    base,
    construction,
    emulate,
    errors,
    host,
    installer,
    naming,
    packing,
    synthesizer,
    xlogging,
)


__all__ = [
    "base",
    "construction",
    "emulate",
    "errors",
    "host",
    "installer",
    "naming",
    "packing",
    "synthesizer",
    "xlogging",
]
# </AUTOGEN_INIT>

from accessor_emulate.emulate import ClassAccessorFast
from accessor_emulate.errors import (
    AccessDeniedError,
    AccessorEmulateError,
    ArityError,
    HostFrameworkError,
    InstallationError,
)
from accessor_emulate.host import HostObject
from accessor_emulate.naming import follow_best_practice
from accessor_emulate.synthesizer import mk_accessors, mk_ro_accessors, mk_wo_accessors


__all__ += [
    "AccessDeniedError",
    "AccessorEmulateError",
    "ArityError",
    "ClassAccessorFast",
    "HostFrameworkError",
    "HostObject",
    "InstallationError",
    "follow_best_practice",
    "mk_accessors",
    "mk_ro_accessors",
    "mk_wo_accessors",
]

__version__ = "0.1.0"
