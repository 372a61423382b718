"""OpenTelemetry tracing helpers for layoutiq.

Every pipeline stage opens one span (``layout.execute``, ``layout.analyze``,
``layout.plan``, ``layout.apply``) through :func:`get_tracer`.  Only the
OpenTelemetry API is a hard dependency, so until :func:`configure_telemetry`
installs an SDK provider those spans are no-ops.

Usage::

    from layoutiq.utils.telemetry import ATTR_AGENT_COUNT, get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("layout.analyze") as span:
        span.set_attribute(ATTR_AGENT_COUNT, 3)

Exporting spans needs the ``otel`` extra: ``pip install layoutiq[otel]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from collections.abc import Mapping

    from opentelemetry.util.types import AttributeValue

# Span attribute keys
ATTR_VIEWPORT_WIDTH = "layoutiq.viewport.width"
ATTR_VIEWPORT_HEIGHT = "layoutiq.viewport.height"
ATTR_AGENT_COUNT = "layoutiq.agent.count"
ATTR_CLUSTER_COUNT = "layoutiq.cluster.count"
ATTR_OVERALL_HEALTH = "layoutiq.overall_health"
ATTR_PLAN_STRATEGY = "layoutiq.plan.strategy"
ATTR_MOVES_TOTAL = "layoutiq.moves.total"
ATTR_MOVES_SUCCESSFUL = "layoutiq.moves.successful"
ATTR_MOVES_FAILED = "layoutiq.moves.failed"
ATTR_EXECUTION_SUCCESS = "layoutiq.execution.success"

_INSTRUMENTATION_NAME = "layoutiq"
_SDK_HINT = "Install it with: pip install layoutiq[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a tracer for *name*, a no-op one while no SDK is configured."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def set_span_attributes(span: trace.Span, attributes: Mapping[str, AttributeValue]) -> None:
    """Set several attributes on *span* at once."""
    for key, value in attributes.items():
        span.set_attribute(key, value)


def configure_telemetry(
    *,
    service_name: str = "layoutiq",
    console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for the whole process.

    Args:
        service_name: Value of the ``service.name`` resource attribute.
        console: Print finished spans to stdout as JSON.
        otlp_endpoint: Also ship spans over OTLP/gRPC to this endpoint.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, when *otlp_endpoint* is
            given, ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_SDK_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(console=console, otlp_endpoint=otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_processors(*, console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
