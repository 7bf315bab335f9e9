"""Exception types raised by json-dts."""

from __future__ import annotations

from pathlib import Path


class NeverRaise(RuntimeError):
    """Sentinel exception for code paths that should be unreachable.

    Raising this exception means an internal invariant of the inference engine
    was violated (a dangling declaration reference, a non-JSON value handed to
    the converter, an unknown configuration value). The ``env`` payload carries
    the values that were in scope so the failure can be diagnosed.
    """

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env: dict[str, object] = dict(env or {})


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""


class MalformedDocumentError(ValueError):
    """An input file could not be parsed as JSON."""

    def __init__(self, path: Path, detail: str):
        super().__init__(f"{path}: {detail}")
        self.path = path
        self.detail = detail
