"""Exception markers for typeclosure."""

from __future__ import annotations


class NeverRaise(RuntimeError):
    """Sentinel exception for input that should never reach the registry.

    Raised at construction boundaries when caller-supplied data violates the
    shape the closure engine relies on. Query paths never raise it.
    """

    def __init__(self, message: str, *, marker_env: dict[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.marker_env = dict(marker_env or {})

    @property
    def marker_payload_dict(self) -> dict[str, object]:
        return {
            "reason": self.reason,
            "env": {str(key): repr(value) for key, value in self.marker_env.items()},
        }


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""
