"""OpenTelemetry setup helpers for the client and CLI."""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


tracer = trace.get_tracer("snailpay")


def setup_tracing(service_name: str, endpoint: str | None) -> bool:
    """Register a tracer provider exporting over OTLP HTTP.

    Does nothing when no endpoint is configured; spans then go to the
    no-op provider. Returns whether a provider was installed.
    """

    if not endpoint:
        return False
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(endpoint=endpoint)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return True
