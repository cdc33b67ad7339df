"""
OpenTelemetry tracing for the booking service.

Spans come from two places:
- FastAPI auto-instrumentation, one server span per request
- ``trace.get_tracer(__name__)`` in the checkout and hold use cases, with
  ``package_id`` / ``booking_id`` attributes

Export is OTLP/gRPC when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set, console when
``OTEL_CONSOLE_EXPORT=true``; with neither, spans are still created so log
lines carry a trace id.
"""

import os

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from src.platform.config.core_setting import settings


def default_service_name() -> str:
    return os.getenv('SERVICE_NAME', 'tour-booking')


class TracingConfig:
    """
    Usage:
        tracing = TracingConfig()
        tracing.setup()        # lifespan startup
        ...
        tracing.shutdown()     # lifespan shutdown
    """

    def __init__(
        self,
        *,
        service_name: str | None = None,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name or default_service_name()
        self.otlp_endpoint = otlp_endpoint or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )
        self._provider: TracerProvider | None = None

    def setup(self) -> None:
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: settings.VERSION,
                DEPLOYMENT_ENVIRONMENT: os.getenv('DEPLOY_ENV', 'local_dev'),
            }
        )
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.otlp_endpoint:
            self._provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )
        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    @staticmethod
    def instrument_fastapi(app: FastAPI, *, excluded_urls: str = 'health') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()
