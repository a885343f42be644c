"""
Observability package for the artist database.

Metrics are collected with prometheus_client into an explicit registry and
spans are created through an injected OpenTelemetry TracerProvider.
"""

from .metrics import Metrics
from .tracing import get_tracer, resolve_tracer_provider

__all__ = [
    "Metrics",
    "get_tracer",
    "resolve_tracer_provider",
]
