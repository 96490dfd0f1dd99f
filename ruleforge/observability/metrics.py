"""
Prometheus metrics collection for ruleforge

This module provides metrics instrumentation for monitoring validation
volume, outcomes and latency.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from ..core.models import ValidationOutcome

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

# Validations counter
validations_total = Counter(
    name="ruleforge_validations_total",
    documentation="Total number of validate calls",
    labelnames=["validator", "mode", "outcome"],  # mode: sync, async; outcome: valid, invalid
    registry=REGISTRY,
)

# Validation failures counter
validation_failures_total = Counter(
    name="ruleforge_validation_failures_total",
    documentation="Total number of validation failures reported",
    labelnames=["validator", "severity"],
    registry=REGISTRY,
)

# Validation duration histogram
validation_duration_seconds = Histogram(
    name="ruleforge_validation_duration_seconds",
    documentation="Time spent validating one instance in seconds",
    labelnames=["validator", "mode"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)

# =======================
# CONFIGURATION METRICS
# =======================

# Rule config loads counter
rule_config_loads_total = Counter(
    name="ruleforge_rule_config_loads_total",
    documentation="Total number of declarative rule configurations loaded",
    labelnames=["status"],  # status: success, failure
    registry=REGISTRY,
)

# Rule config load duration
rule_config_load_duration_seconds = Histogram(
    name="ruleforge_rule_config_load_duration_seconds",
    documentation="Time spent loading and building a rule configuration",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """
    Get content type for Prometheus metrics

    Returns:
        Content type string
    """
    return CONTENT_TYPE_LATEST


# =======================
# CONTEXT MANAGERS
# =======================

class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(rule_config_load_duration_seconds):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        """
        Initialize duration tracker

        Args:
            histogram: Prometheus Histogram metric
            **labels: Label values for the metric (omit for unlabeled histograms)
        """
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        metric = self.histogram.labels(**self.labels) if self.labels else self.histogram
        self.timer = metric.time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    histogram.labels(**labels).observe(value)


# =======================
# VALIDATION HELPERS
# =======================

def record_validation(
    validator: str,
    mode: str,
    outcome: ValidationOutcome,
    duration_seconds: float,
) -> None:
    """
    Record one completed validate call.

    Args:
        validator: Validator name
        mode: "sync" or "async"
        outcome: The returned outcome
        duration_seconds: Time spent in the call
    """
    status = "valid" if outcome.is_valid else "invalid"
    increment_counter(validations_total, 1, validator=validator, mode=mode, outcome=status)
    observe_histogram(validation_duration_seconds, duration_seconds, validator=validator, mode=mode)

    for failure in outcome.failures:
        increment_counter(validation_failures_total, 1, validator=validator, severity=failure.severity.value)


def record_rule_config_load(success: bool) -> None:
    """
    Record a rule configuration load attempt.

    Args:
        success: Whether the configuration produced a validator
    """
    increment_counter(rule_config_loads_total, 1, status="success" if success else "failure")
