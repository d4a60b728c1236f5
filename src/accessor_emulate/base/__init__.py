"""
package: accessor_emulate.base
"""

# <AUTOGEN_INIT>
from accessor_emulate.base import config


__all__ = [
    "config",
]
# </AUTOGEN_INIT>
