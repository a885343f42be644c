"""
Tracing helpers built on the OpenTelemetry API.

Exporter configuration belongs to the process that embeds the database layer.
Components only receive a TracerProvider and default to a no-op one.
"""

from typing import Optional

from opentelemetry import trace

from ..constants import TRACING_INSTRUMENTATION_NAME


def resolve_tracer_provider(
    tracer_provider: Optional[trace.TracerProvider] = None,
) -> trace.TracerProvider:
    """Return the given provider, or a no-op provider when None."""
    if tracer_provider is None:
        return trace.NoOpTracerProvider()
    return tracer_provider


def get_tracer(tracer_provider: Optional[trace.TracerProvider] = None) -> trace.Tracer:
    """Tracer for database instrumentation from the given provider."""
    return resolve_tracer_provider(tracer_provider).get_tracer(TRACING_INSTRUMENTATION_NAME)
