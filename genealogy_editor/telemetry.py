"""Telemetry setup for Arize Phoenix tracing.

This module provides OpenTelemetry instrumentation for the family editor
server, sending traces of model queries and edits to Arize Phoenix.

Environment Variables:
    PHOENIX_ENABLED: Set to 'true' to enable tracing (default: false)
    PHOENIX_ENDPOINT: Phoenix collector URL (default: http://localhost:6006)
    PHOENIX_PROJECT_NAME: Project name in Phoenix UI (default: genealogy-editor)
    OTEL_EXPORTER_OTLP_ENDPOINT: Set from PHOENIX_ENDPOINT when missing
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

# OpenInference semantic conventions for Phoenix
OPENINFERENCE_SPAN_KIND = "openinference.span.kind"

# Span name prefixes used by core.py
MUTATION_SPAN_PREFIX = "family.edit."
QUERY_SPAN_PREFIX = "family.query."


def is_tracing_enabled() -> bool:
    """Check if tracing is enabled via environment variable."""
    return os.getenv("PHOENIX_ENABLED", "false").lower() == "true"


def get_phoenix_endpoint() -> str:
    """Get the Phoenix collector endpoint."""
    return os.getenv("PHOENIX_ENDPOINT", "http://localhost:6006")


def get_project_name() -> str:
    """Get the project name for Phoenix."""
    return os.getenv("PHOENIX_PROJECT_NAME", "genealogy-editor")


class FamilySpanKindProcessor(SpanProcessor):
    """Span processor that tags family spans with an OpenInference kind.

    Mappings:
        - 'family.edit.*' spans -> TOOL kind
        - 'family.query.*' spans -> RETRIEVER kind
        - anything else -> CHAIN kind
    """

    def on_start(self, span: Any, parent_context: Any = None) -> None:
        """Called when a span starts. Sets OpenInference span kind."""
        if not hasattr(span, "name") or not hasattr(span, "set_attribute"):
            return

        if span.name.startswith(MUTATION_SPAN_PREFIX):
            span.set_attribute(OPENINFERENCE_SPAN_KIND, "TOOL")
        elif span.name.startswith(QUERY_SPAN_PREFIX):
            span.set_attribute(OPENINFERENCE_SPAN_KIND, "RETRIEVER")
        else:
            span.set_attribute(OPENINFERENCE_SPAN_KIND, "CHAIN")

    def on_end(self, span: ReadableSpan) -> None:
        """Called when a span ends. No-op for this processor."""
        pass

    def shutdown(self) -> None:
        """Shutdown the processor."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush any buffered spans."""
        return True


_tracer_provider: TracerProvider | None = None


def initialize_tracing() -> TracerProvider | None:
    """Initialize OpenTelemetry tracing for Phoenix.

    Returns:
        TracerProvider if tracing is enabled, None otherwise.
    """
    global _tracer_provider

    if not is_tracing_enabled():
        return None

    if _tracer_provider is not None:
        return _tracer_provider

    endpoint = f"{get_phoenix_endpoint()}/v1/traces"
    exporter = OTLPSpanExporter(endpoint=endpoint)

    _tracer_provider = TracerProvider(
        resource=Resource.create({"openinference.project.name": get_project_name()})
    )

    # Kind tagging must run before the exporter sees the span
    _tracer_provider.add_span_processor(FamilySpanKindProcessor())
    _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(_tracer_provider)

    if not os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT"):
        os.environ["OTEL_EXPORTER_OTLP_ENDPOINT"] = get_phoenix_endpoint()

    return _tracer_provider


def get_tracer(name: str = "genealogy-editor") -> trace.Tracer:
    """Get a tracer instance for manual instrumentation.

    Returns:
        A Tracer instance (no-op if tracing disabled)
    """
    return trace.get_tracer(name)
