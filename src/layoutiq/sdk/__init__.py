"""layoutiq SDK: programmatic interface for loading and running scenes."""

from layoutiq.sdk.errors import SceneValidationError
from layoutiq.sdk.models import ElementSpec, SceneSpec, TelemetrySettings, ViewportSpec
from layoutiq.sdk.scene import SceneLoader, SceneRunner, parse_scene

__all__ = [
    "ElementSpec",
    "SceneLoader",
    "SceneRunner",
    "SceneSpec",
    "SceneValidationError",
    "TelemetrySettings",
    "ViewportSpec",
    "parse_scene",
]
