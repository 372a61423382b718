"""Scene loading and execution for the layoutiq SDK."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from layoutiq.core.agents.handles import SceneElement
from layoutiq.core.executor import LayoutExecutor
from layoutiq.sdk.errors import SceneValidationError
from layoutiq.sdk.models import ElementSpec, SceneSpec
from layoutiq.utils.telemetry import configure_telemetry

if TYPE_CHECKING:
    from layoutiq.core.analysis.models import GlobalAnalysis
    from layoutiq.core.execution.models import ExecutionResult


class SceneLoader:
    """Load and validate a scene YAML file into a :class:`SceneSpec`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> SceneSpec:
        """Read the scene file and return the validated spec.

        ``$VAR`` / ``${VAR}`` references are expanded from the environment
        first, so viewport sizes can come from the host, e.g.
        ``width: ${SCREEN_WIDTH}``.

        Raises:
            SceneValidationError: If the file is unreadable or invalid.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SceneValidationError(f"Cannot read {self._path}: {exc}") from exc

        return parse_scene(os.path.expandvars(raw))


def parse_scene(raw: str) -> SceneSpec:
    """Parse YAML text into a validated :class:`SceneSpec`."""
    try:
        data: Any = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise SceneValidationError(f"YAML parse error: {exc}") from exc

    if not isinstance(data, dict):
        raise SceneValidationError("Scene YAML must be a mapping")

    try:
        return SceneSpec.model_validate(data)
    except ValidationError as exc:
        raise SceneValidationError(str(exc)) from exc


class SceneRunner:
    """Build an in-memory scene from a :class:`SceneSpec` and run passes on it."""

    def __init__(self, spec: SceneSpec) -> None:
        self.spec = spec
        self.elements: dict[str, SceneElement] = {}
        self.executor = LayoutExecutor(spec.settings)

        for element in spec.elements:
            handle = SceneElement(
                element.x,
                element.y,
                element.width,
                element.height,
                scale=element.scale,
                rotation=element.rotation,
                visible=element.visible,
                alpha=element.alpha,
                movable=element.movable,
            )
            self.elements[element.id] = handle
            self.executor.register(element.id, handle, element.role)

        self.executor.set_viewport(spec.viewport.width, spec.viewport.height)

        if spec.telemetry and spec.telemetry.enabled:
            configure_telemetry(
                console=spec.telemetry.console, otlp_endpoint=spec.telemetry.otlp_endpoint
            )

    @classmethod
    def from_yaml(cls, path: str | Path) -> SceneRunner:
        """Load a scene YAML and return a ready-to-run runner."""
        return cls(SceneLoader(Path(path)).load())

    def analyze(self) -> GlobalAnalysis:
        return self.executor.analyze()

    def run(self, passes: int = 1) -> list[ExecutionResult]:
        """Run *passes* layout passes and return each pass's result."""
        if passes < 1:
            msg = f"passes must be at least 1, got {passes}"
            raise ValueError(msg)
        return [self.executor.execute_intelligent_layout() for _ in range(passes)]

    def to_spec(self) -> SceneSpec:
        """Return the scene as a :class:`SceneSpec` with current positions."""
        updated: list[ElementSpec] = []
        for element in self.spec.elements:
            handle = self.elements[element.id]
            updated.append(element.model_copy(update={"x": handle.x, "y": handle.y}))
        return self.spec.model_copy(update={"elements": updated})

    def dump_yaml(self) -> str:
        """Serialise the current scene back to YAML.

        Unset optional fields (element roles, telemetry endpoint) are
        omitted; settings are written in full since ``None`` is a real
        value there (``history_capacity: null`` means unbounded).
        """
        spec = self.to_spec()
        data = spec.model_dump(mode="json", exclude_none=True)
        data["settings"] = spec.settings.model_dump(mode="json")
        return yaml.safe_dump(data, sort_keys=False)
