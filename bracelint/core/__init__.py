"""bracelint Core - Shared constants and validators.

Import specific functions from submodules:
    from bracelint.core import constants
    from bracelint.core import validators
"""

from bracelint.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
