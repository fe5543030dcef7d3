"""OpenTelemetry metrics for cross-validation runs."""

import logging

from opentelemetry import metrics

logger = logging.getLogger(__name__)

# Global metrics registry
_metrics_registry: "MetricsRegistry | None" = None


class MetricsRegistry:
    """
    Registry for cross-validation metrics.

    Provides:
    - Run count and duration (by language and status)
    - Engine prediction count
    - Intents excluded for insufficient data
    """

    def __init__(self, meter_name: str = "nlu_crossval") -> None:
        self._meter = metrics.get_meter(meter_name)

        self.runs_total = self._meter.create_counter(
            name="crossval_runs_total",
            description="Total number of cross-validation runs",
            unit="1",
        )
        self.run_duration = self._meter.create_histogram(
            name="crossval_run_duration_seconds",
            description="Duration of cross-validation runs in seconds",
            unit="s",
        )
        self.predictions_total = self._meter.create_counter(
            name="crossval_predictions_total",
            description="Total engine predictions issued during evaluation",
            unit="1",
        )
        self.excluded_intents_total = self._meter.create_counter(
            name="crossval_excluded_intents_total",
            description="Intents excluded from training for lack of data",
            unit="1",
        )
        logger.debug("Metrics registry initialized")

    def record_run(
        self,
        language: str,
        duration_seconds: float,
        status: str = "success",
    ) -> None:
        """
        Record a finished cross-validation run.

        Args:
            language: Language evaluated.
            duration_seconds: Wall-clock duration of the run.
            status: success or error.
        """
        labels = {"language": language, "status": status}
        self.runs_total.add(1, labels)
        self.run_duration.record(duration_seconds, labels)

    def record_predictions(self, language: str, count: int) -> None:
        """Record engine predictions made for one test example."""
        self.predictions_total.add(count, {"language": language})

    def record_excluded_intents(self, language: str, count: int) -> None:
        """Record intents dropped from training."""
        if count:
            self.excluded_intents_total.add(count, {"language": language})


def get_metrics_registry() -> MetricsRegistry:
    """
    Get the global metrics registry.

    Creates one if it doesn't exist.
    """
    global _metrics_registry
    if _metrics_registry is None:
        _metrics_registry = MetricsRegistry()
    return _metrics_registry
