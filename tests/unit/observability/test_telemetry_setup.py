"""Unit tests for metrics and tracing setup."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from recipe_share.observability.metrics import setup_metrics
from recipe_share.observability.tracing import setup_tracing, shutdown_tracing


pytestmark = pytest.mark.unit


def _with_observability(settings, *, metrics: bool, tracing: bool, endpoint=None):
    observability = settings.observability.model_copy(
        update={
            "metrics": settings.observability.metrics.model_copy(
                update={"enabled": metrics}
            ),
            "tracing": settings.observability.tracing.model_copy(
                update={"enabled": tracing, "otlp_endpoint": endpoint}
            ),
        }
    )
    return settings.model_copy(update={"observability": observability})


class TestSetupMetrics:
    """Tests for setup_metrics."""

    def test_disabled(self, test_settings) -> None:
        """Should do nothing when metrics are off."""
        with patch("recipe_share.observability.metrics.Instrumentator") as inst:
            assert setup_metrics(MagicMock(), test_settings) is None

        inst.assert_not_called()

    def test_instruments_and_exposes(self, test_settings) -> None:
        """Should expose metrics under the API prefix and skip probes."""
        settings = _with_observability(test_settings, metrics=True, tracing=False)
        app = MagicMock()

        with (
            patch("recipe_share.observability.metrics.Instrumentator") as inst,
            patch("recipe_share.observability.metrics.metrics") as metric_fns,
        ):
            result = setup_metrics(app, settings)

        assert inst.return_value.add.call_count == 2
        metric_fns.default.assert_called_once()

        assert result is inst.return_value
        excluded = inst.call_args.kwargs["excluded_handlers"]
        assert "/api/v1/health" in excluded
        assert "/api/v1/metrics" in excluded
        inst.return_value.instrument.assert_called_once_with(app)
        inst.return_value.expose.assert_called_once_with(
            app, endpoint="/api/v1/metrics", include_in_schema=False
        )


class TestSetupTracing:
    """Tests for setup_tracing."""

    def test_disabled(self, test_settings) -> None:
        """Should not touch the global provider when disabled."""
        with patch("recipe_share.observability.tracing.trace") as trace:
            setup_tracing(MagicMock(), test_settings)

        trace.set_tracer_provider.assert_not_called()

    def test_with_exporter(self, test_settings) -> None:
        """Should export over OTLP when an endpoint is set."""
        settings = _with_observability(
            test_settings, metrics=False, tracing=True, endpoint="http://otel:4317"
        )
        module = "recipe_share.observability.tracing"

        with (
            patch(f"{module}.trace") as trace,
            patch(f"{module}.TracerProvider") as provider_cls,
            patch(f"{module}.OTLPSpanExporter") as exporter_cls,
            patch(f"{module}.BatchSpanProcessor"),
            patch(f"{module}.FastAPIInstrumentor") as instrumentor,
        ):
            setup_tracing(MagicMock(), settings)

        exporter_cls.assert_called_once_with(endpoint="http://otel:4317", insecure=True)
        provider_cls.return_value.add_span_processor.assert_called_once()
        trace.set_tracer_provider.assert_called_once_with(provider_cls.return_value)
        instrumentor.instrument_app.assert_called_once()

    def test_shutdown_ignores_default_provider(self) -> None:
        """Should only shut down an SDK provider."""
        with patch("recipe_share.observability.tracing.trace") as trace:
            trace.get_tracer_provider.return_value = object()
            shutdown_tracing()
