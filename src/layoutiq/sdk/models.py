"""Pydantic models for the scene YAML schema consumed by ``layoutiq run``."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from layoutiq.core.agents.models import ElementRole
from layoutiq.core.config import LayoutSettings


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = True
    otlp_endpoint: str | None = None


class ViewportSpec(BaseModel):
    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)


class ElementSpec(BaseModel):
    """One element of a scene: id, local rectangle, and display flags."""

    id: str = Field(min_length=1)
    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    role: ElementRole | None = None
    scale: float = Field(default=1.0, gt=0)
    rotation: float = 0.0
    visible: bool = True
    alpha: float = Field(default=1.0, ge=0, le=1)
    movable: bool = True


class SceneSpec(BaseModel):
    """Top-level scene specification parsed from YAML.

    Example YAML::

        name: title-screen
        viewport: { width: 1000, height: 800 }
        settings:
          cluster_radius: 60
        elements:
          - { id: play_button, x: 420, y: 380, width: 160, height: 48 }
          - { id: settings_button, x: 430, y: 390, width: 140, height: 48 }
          - { id: debug_info, x: 950, y: 20, width: 200, height: 80 }
    """

    version: str = "1"
    name: str = ""
    viewport: ViewportSpec
    settings: LayoutSettings = Field(default_factory=LayoutSettings)
    elements: list[ElementSpec] = []
    telemetry: TelemetrySettings | None = None

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> SceneSpec:
        seen: set[str] = set()
        for element in self.elements:
            if element.id in seen:
                msg = f"duplicate element id '{element.id}'"
                raise ValueError(msg)
            seen.add(element.id)
        return self
