"""OpenTelemetry utilities for tracing outbound calls."""

from .otel import get_tracer, init_tracing

__all__ = [
    "init_tracing",
    "get_tracer",
]
