"""Prometheus metrics instrumentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_share.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "recipe_share"


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator | None:
    """Instrument HTTP handlers and expose ``{v1_prefix}/metrics``.

    Collects request counts and latency histograms grouped by handler
    template and status class, plus response sizes.

    Returns:
        The configured Instrumentator, or None when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return None

    prefix = settings.api.v1_prefix
    metrics_endpoint = f"{prefix}/metrics"

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            metrics_endpoint,
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.add(
        metrics.response_size(
            should_include_handler=True,
            should_include_method=True,
            should_include_status=True,
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )

    instrumentator.instrument(app)
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=False,
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)
    return instrumentator


__all__ = ["setup_metrics"]
