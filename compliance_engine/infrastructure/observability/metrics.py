"""Prometheus metrics for monitoring evaluation volume, rejections and warnings"""

from prometheus_client import Counter, Histogram

# Evaluation metrics
evaluation_counter = Counter(
    "engine_evaluation_total",
    "Total rule evaluations",
    ["operation", "outcome"],  # outcome: ok | invalid
)

warning_counter = Counter(
    "engine_warnings_total",
    "Advisory warnings attached to successful evaluations",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(operation: str, outcome: str, warning_count: int = 0) -> None:
    """Record one evaluation and the warnings it produced"""
    evaluation_counter.labels(operation=operation, outcome=outcome).inc()

    if warning_count:
        warning_counter.labels(operation=operation).inc(warning_count)
