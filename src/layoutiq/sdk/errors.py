"""SDK error types."""

from __future__ import annotations


class SceneValidationError(Exception):
    """Raised when a scene YAML fails parsing or validation."""
