import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def init_tracing(
    service_name: str,
    service_version: str = "1.0.0",
    endpoint: str | None = None,
    resource_attributes: dict | None = None,
) -> trace.TracerProvider:
    """
    Initialize OpenTelemetry tracing

    Args:
        service_name: Name of the service
        service_version: Version of the service
        endpoint: OTLP endpoint URL
        resource_attributes: Additional resource attributes

    Returns:
        The tracer provider that was installed globally
    """

    if not endpoint:
        endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

    if not endpoint:
        # No endpoint configured, use no-op tracer
        provider = trace.NoOpTracerProvider()
        trace.set_tracer_provider(provider)
        return provider

    resource_attrs = {
        SERVICE_NAME: service_name,
        SERVICE_VERSION: service_version,
        "deployment.environment": os.getenv("ENV", "development"),
    }

    if resource_attributes:
        resource_attrs.update(resource_attributes)

    tracer_provider = TracerProvider(resource=Resource.create(resource_attrs))

    otlp_exporter = OTLPSpanExporter(
        endpoint=endpoint,
        insecure=endpoint.startswith("http://"),
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(tracer_provider)
    return tracer_provider


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Get a tracer instance"""
    return trace.get_tracer(name or __name__)
