"""json-dts package root."""

from jsondts.exceptions import MalformedDocumentError, NeverRaise, NeverThrown
from jsondts.invariants import never

__all__ = [
    "__version__",
    "MalformedDocumentError",
    "NeverRaise",
    "NeverThrown",
    "never",
]

__version__ = "0.1.0"
