"""Prometheus metrics for monitoring statement runs, interest carry-over and store conflicts"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Statement metrics
statement_counter = Counter(
    "statement_runs_total",
    "Statement computations by outcome",
    ["outcome"],  # created | recomputed | existing | skipped | preview
)

carry_over_counter = Counter(
    "statement_interest_carry_over_total",
    "Statements that carried unpaid forgivable interest into the cycle",
)

statement_compute_histogram = Histogram(
    "statement_compute_seconds",
    "Time to resolve, compute and record one statement",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Store metrics
store_conflict_counter = Counter(
    "statement_store_conflicts_total",
    "Statement writes that lost an insert-if-absent race",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_statement(status: str, carry_over: Decimal | None = None) -> None:
    """Record statement outcome, and whether unpaid grace interest was carried"""
    statement_counter.labels(outcome=status).inc()

    if carry_over is not None and carry_over > 0:
        carry_over_counter.inc()
