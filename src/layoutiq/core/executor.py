"""LayoutExecutor: host-facing facade over the analyse → plan → apply pipeline.

The executor owns the viewport snapshot, the agent registry, and the
execution history.  Each :meth:`LayoutExecutor.execute_intelligent_layout`
call is one pass::

    Idle → Analyzing → Planning → Applying → Idle

Passes are synchronous and must not overlap; re-entering while a pass runs
raises :class:`~layoutiq.core.errors.ReentrantExecutionError`.  Hosts that
drive the executor from several threads must serialise calls themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from layoutiq.core.agents.registry import AgentRegistry, HandleGeometryProvider, RegistryMover
from layoutiq.core.analysis.engine import GlobalAnalysisEngine
from layoutiq.core.analysis.models import AgentSnapshot
from layoutiq.core.analysis.report import format_intelligence_report
from layoutiq.core.config import LayoutSettings
from layoutiq.core.errors import (
    ElementGeometryError,
    InvalidViewportError,
    ReentrantExecutionError,
)
from layoutiq.core.execution.applier import ExecutionApplier
from layoutiq.core.execution.history import ExecutionHistory
from layoutiq.core.execution.planner import ExecutionPlanner
from layoutiq.core.geometry.models import Viewport
from layoutiq.utils.telemetry import ATTR_AGENT_COUNT, get_tracer

if TYPE_CHECKING:
    from layoutiq.core.agents.models import ElementRole, TrackedElement
    from layoutiq.core.agents.registry import ElementMover, GeometryProvider
    from layoutiq.core.analysis.models import GlobalAnalysis
    from layoutiq.core.execution.models import ExecutionRecord, ExecutionResult

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LayoutExecutor:
    """Runs layout intelligence passes over a set of registered elements.

    Usage::

        executor = LayoutExecutor()
        executor.register("play_button", SceneElement(10, 10, 120, 40))
        executor.set_viewport(1280, 720)
        result = executor.execute_intelligent_layout()
        print(executor.get_execution_summary())

    *mover* and *geometry_provider* default to implementations that talk to
    the registered handles directly (see
    :class:`~layoutiq.core.agents.handles.LayoutHandle`).
    """

    def __init__(
        self,
        settings: LayoutSettings | None = None,
        *,
        registry: AgentRegistry | None = None,
        mover: ElementMover | None = None,
        geometry_provider: GeometryProvider | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or LayoutSettings()
        self.registry = registry if registry is not None else AgentRegistry()
        self.mover: ElementMover = mover or RegistryMover(self.registry)
        self.geometry_provider: GeometryProvider = geometry_provider or HandleGeometryProvider()

        clock = clock or _utcnow
        self._engine = GlobalAnalysisEngine(self.settings, clock=clock)
        self._planner = ExecutionPlanner(self.settings)
        self._applier = ExecutionApplier(
            ExecutionHistory(self.settings.history_capacity),
            success_threshold=self.settings.success_threshold,
            clock=clock,
        )
        self._viewport: Viewport | None = None
        self._running = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self, element_id: str, handle: Any, role: ElementRole | str | None = None
    ) -> TrackedElement:
        """Track *handle* under *element_id* (see :meth:`AgentRegistry.register`)."""
        return self.registry.register(element_id, handle, role)

    def unregister(self, element_id: str) -> TrackedElement:
        return self.registry.unregister(element_id)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    @property
    def viewport(self) -> Viewport | None:
        return self._viewport

    def set_viewport(self, width: float, height: float) -> None:
        """Replace the viewport used by subsequent passes.

        Raises:
            InvalidViewportError: If either dimension is non-positive or not finite.
        """
        self._viewport = Viewport.of(width, height)
        logger.debug("Viewport set to %gx%g", width, height)

    def _require_viewport(self) -> Viewport:
        if self._viewport is None:
            raise InvalidViewportError("viewport has not been set")
        return self._viewport

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def snapshot(self) -> list[AgentSnapshot]:
        """Read every tracked element's geometry once, in registration order.

        Raises:
            ElementGeometryError: If the provider fails for any element.
        """
        snapshots: list[AgentSnapshot] = []
        for element in self.registry:
            try:
                geometry = self.geometry_provider.geometry(element.id, element.handle)
            except Exception as exc:
                raise ElementGeometryError(element.id, f"{type(exc).__name__}: {exc}") from exc
            snapshots.append(
                AgentSnapshot(agent_id=element.id, role=element.role, geometry=geometry)
            )
        return snapshots

    def analyze(self) -> GlobalAnalysis:
        """Run the analysis stage only."""
        viewport = self._require_viewport()
        return self._engine.analyze(self.snapshot(), viewport)

    def execute_intelligent_layout(self) -> ExecutionResult:
        """Run one full analyse → plan → apply pass.

        Raises:
            InvalidViewportError: If no usable viewport has been set.
            ReentrantExecutionError: If a pass is already running.
            ElementGeometryError: If an element's geometry cannot be read.
        """
        if self._running:
            raise ReentrantExecutionError()

        self._running = True
        try:
            with _tracer.start_as_current_span("layout.execute") as span:
                viewport = self._require_viewport()
                span.set_attribute(ATTR_AGENT_COUNT, len(self.registry))

                analysis = self._engine.analyze(self.snapshot(), viewport)
                plan = self._planner.plan(analysis)
                return self._applier.apply(plan, self.mover)
        finally:
            self._running = False

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def history(self) -> tuple[ExecutionRecord, ...]:
        return self._applier.history.records()

    def get_execution_summary(self) -> str:
        """Render the most recent execution record as text."""
        return self._applier.summary()

    def get_intelligence_report(self) -> str:
        """Run an analysis pass and render it as text."""
        return format_intelligence_report(self.analyze())
