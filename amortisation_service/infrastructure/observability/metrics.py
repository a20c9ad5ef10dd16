"""Prometheus metrics for calculation volume, latency and schedule cache usage"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "amortisation_calculation_total",
    "Total amortisation calculations",
    ["method", "outcome"],  # outcome: success | validation_error | calculation_error
)

calculation_duration_histogram = Histogram(
    "amortisation_calculation_duration_seconds",
    "Time spent computing a schedule",
    ["method"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Cache metrics
schedule_cache_counter = Counter(
    "amortisation_schedule_cache_total",
    "Schedule cache lookups",
    ["result"],  # hit | miss
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(method: str, outcome: str, duration_seconds: float) -> None:
    """Record outcome and latency of one calculation"""
    calculation_counter.labels(method=method, outcome=outcome).inc()
    calculation_duration_histogram.labels(method=method).observe(duration_seconds)


def record_cache_lookup(hit: bool) -> None:
    schedule_cache_counter.labels(result="hit" if hit else "miss").inc()
