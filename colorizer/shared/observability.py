# colorizer/shared/observability.py
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from colorizer.shared.config import settings

def setup_observability() -> TracerProvider:
    """
    Configures OpenTelemetry for the host process.

    1. Sets the Global Tracer Provider.
    2. Prints spans to the console when DEBUG is on.

    Spans are only emitted around color settings I/O, which is the one
    blocking path in the colorizer.
    """
    resource = Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "service.environment": settings.APP_ENV.value,
    })

    provider = TracerProvider(resource=resource)

    if settings.DEBUG:
        # Prints trace details to console (noisy but good for debugging)
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider

def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("colorizer.load_color_settings"):
            ...
    """
    return trace.get_tracer(name)
