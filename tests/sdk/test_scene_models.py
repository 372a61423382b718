"""Tests for the scene YAML schema."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from layoutiq.core.agents.models import ElementRole
from layoutiq.sdk.models import ElementSpec, SceneSpec


class TestElementSpec:
    def test_defaults(self) -> None:
        spec = ElementSpec(id="a", x=1, y=2, width=3, height=4)
        assert spec.role is None
        assert spec.scale == 1.0
        assert spec.visible is True
        assert spec.movable is True

    def test_role_from_string(self) -> None:
        spec = ElementSpec(id="a", x=0, y=0, width=1, height=1, role="anchor")
        assert spec.role == ElementRole.ANCHOR

    def test_unknown_role_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ElementSpec(id="a", x=0, y=0, width=1, height=1, role="wizard")

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ElementSpec(id="a", x=0, y=0, width=-1, height=1)


class TestSceneSpec:
    def test_minimal(self) -> None:
        spec = SceneSpec.model_validate({"viewport": {"width": 800, "height": 600}})
        assert spec.elements == []
        assert spec.settings.margin == 50.0
        assert spec.telemetry is None

    def test_settings_override(self) -> None:
        spec = SceneSpec.model_validate(
            {
                "viewport": {"width": 800, "height": 600},
                "settings": {"cluster_radius": 40, "history_capacity": None},
            }
        )
        assert spec.settings.cluster_radius == 40
        assert spec.settings.history_capacity is None

    @pytest.mark.parametrize("width", [0, -10, float("inf")])
    def test_bad_viewport_rejected(self, width: float) -> None:
        with pytest.raises(ValidationError):
            SceneSpec.model_validate({"viewport": {"width": width, "height": 600}})

    def test_duplicate_ids_rejected(self) -> None:
        element = {"id": "a", "x": 0, "y": 0, "width": 1, "height": 1}
        with pytest.raises(ValidationError, match="duplicate element id 'a'"):
            SceneSpec.model_validate(
                {"viewport": {"width": 800, "height": 600}, "elements": [element, element]}
            )
