"""bracelint - style-sheet lint rules for block formatting."""

from bracelint.core.constants import BRACELINT_VERSION

__version__ = BRACELINT_VERSION
