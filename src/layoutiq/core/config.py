"""Layout settings: margins, thresholds, policy priorities, retention."""

from pydantic import BaseModel, Field


class LayoutSettings(BaseModel):
    """Tunable constants for one :class:`~layoutiq.core.executor.LayoutExecutor`.

    Defaults reproduce the stock heuristics; scene files may override any of
    them under a ``settings:`` key.
    """

    margin: float = Field(default=50.0, ge=0)
    safe_inset: float = Field(default=50.0, ge=0)
    separation_offset: float = Field(default=100.0, ge=0)
    visibility_threshold: float = Field(default=0.5, ge=0, le=1)

    cluster_radius: float = Field(default=80.0, ge=0)
    neighbor_radius: float = Field(default=100.0, ge=0)
    crowding_threshold: int = Field(default=3, ge=0)
    competition_radius: float = Field(default=200.0, ge=0)

    cluster_priority: float = Field(default=0.8, ge=0, le=1)
    visibility_priority: float = Field(default=0.9, ge=0, le=1)
    conflict_priority: float = Field(default=0.7, ge=0, le=1)

    success_threshold: float = Field(default=0.8, ge=0, le=1)
    history_capacity: int | None = Field(default=100, ge=1)
