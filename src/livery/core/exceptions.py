from __future__ import annotations

from typing import Any, Dict, Mapping


class LiveryError(Exception):
    """Base exception for Livery."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(LiveryError, ValueError):
    """Raised when Livery configuration is invalid or cannot be loaded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LiveryError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class BridgeIdError(LiveryError, ValueError):
    """Raised when a style bridge module id cannot be decoded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LiveryError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class EngineNotConfiguredError(LiveryError, RuntimeError):
    """Raised when a resolution hook runs before the project root is known."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LiveryError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ProjectRootError(LiveryError, RuntimeError):
    """Raised when the project root cannot be resolved."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LiveryError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "LiveryError",
    "ConfigurationError",
    "BridgeIdError",
    "EngineNotConfiguredError",
    "ProjectRootError",
]
