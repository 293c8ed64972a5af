"""typeclosure package root."""

from typeclosure.exceptions import NeverRaise, NeverThrown
from typeclosure.invariants import never

__all__ = ["__version__", "NeverRaise", "NeverThrown", "never"]

__version__ = "0.1.0"
