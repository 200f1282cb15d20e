"""Publishing error taxonomy."""

from __future__ import annotations

from pathlib import Path


class PublishError(Exception):
    """Base class for errors that abort a publish run."""

    kind = "publish"

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def describe(self) -> str:
        """Human-readable one-liner naming the error kind and offending file."""
        if self.path is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.path}: {self.message}"


class RenderingError(PublishError):
    """Raised when a source document cannot be turned into HTML."""

    kind = "rendering"


class TemplateError(PublishError):
    """Raised when a layout cannot be located or fails to apply."""

    kind = "template"


class PublishIOError(PublishError):
    """Raised when a source is unreadable or a destination is unwritable."""

    kind = "io"


class ConfigError(PublishError):
    """Raised when the publish configuration is invalid."""

    kind = "config"
