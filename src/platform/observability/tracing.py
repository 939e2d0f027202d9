"""
OpenTelemetry tracing.

Spans are opened by the FastAPI instrumentation for every request and by the
reservation use case around each batch. A real provider is installed only when
the settings ask for an exporter; otherwise the API's no-op tracer stays in place.
"""

from typing import Self

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

from src.platform.config.core_setting import Settings


# Probes and scrapes would otherwise dominate the trace backend
UNTRACED_URLS = 'health,metrics'


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint
        self.enable_console = enable_console
        self._provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, *, config: Settings) -> Self:
        return cls(
            service_name=config.SERVICE_NAME,
            otlp_endpoint=config.OTEL_EXPORTER_OTLP_ENDPOINT,
            enable_console=config.OTEL_CONSOLE_EXPORT,
        )

    def _exporters(self) -> list[SpanExporter]:
        exporters: list[SpanExporter] = []
        if self.otlp_endpoint:
            exporters.append(OTLPSpanExporter(endpoint=self.otlp_endpoint))
        if self.enable_console:
            exporters.append(ConsoleSpanExporter())
        return exporters

    @property
    def is_exporting(self) -> bool:
        return self._provider is not None

    def setup(self) -> None:
        """Install the global tracer provider, if any exporter is configured."""
        exporters = self._exporters()
        if not exporters:
            return

        self._provider = TracerProvider(
            resource=Resource(attributes={SERVICE_NAME: self.service_name})
        )
        for exporter in exporters:
            self._provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(self._provider)

    @staticmethod
    def instrument_fastapi(*, app: FastAPI) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)

    def shutdown(self) -> None:
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
