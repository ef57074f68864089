"""
OpenTelemetry tracing configuration.

Provides:
- Tracer provider with OTLP export when OTEL_EXPORTER_OTLP_ENDPOINT is set
- Auto-instrumentation for FastAPI and Redis (Kvrocks store backend)
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


class TracingConfig:
    """
    Usage:
        tracing = TracingConfig(service_name="seating-service")
        tracing.setup()
    """

    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )

        self._provider: TracerProvider | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.otlp_endpoint or self.enable_console)

    def setup(self) -> None:
        """Install the global tracer provider; spans stay no-op when no exporter is configured"""
        if not self.enabled:
            return

        resource = Resource(attributes={SERVICE_NAME: self.service_name})
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.otlp_endpoint:
            self._provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint))
            )

        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: Any, excluded_urls: str = 'health,metrics') -> None:
        if self.enabled:
            FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def instrument_redis(self) -> None:
        if self.enabled:
            RedisInstrumentor().instrument()

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()
