"""OpenTelemetry distributed tracing configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_share.core.config import Settings

logger = get_logger(__name__)


def setup_tracing(app: FastAPI, settings: Settings) -> None:
    """Install a tracer provider and instrument the FastAPI app.

    Spans are exported over OTLP/gRPC when an endpoint is configured;
    otherwise spans are created for context propagation only.
    """
    if not settings.observability.tracing.enabled:
        logger.info("Tracing disabled")
        return

    resource = Resource.create(
        {
            "service.name": settings.app.name.lower().replace(" ", "-"),
            "service.version": settings.app.version,
            "deployment.environment": settings.APP_ENV,
        }
    )
    provider = TracerProvider(resource=resource)

    endpoint = settings.observability.tracing.otlp_endpoint
    if endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
        )
        logger.info("OTLP trace exporter configured", endpoint=endpoint)

    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls="health,ready,metrics,docs,redoc,openapi.json",
    )
    logger.info("OpenTelemetry tracing configured")


def shutdown_tracing() -> None:
    """Flush pending spans before the process exits."""
    provider = trace.get_tracer_provider()
    if isinstance(provider, TracerProvider):
        provider.shutdown()
        logger.info("Tracing shutdown complete")


__all__ = [
    "setup_tracing",
    "shutdown_tracing",
]
