"""Prometheus metrics for botadmin.

Counts configuration mutations and rejected update batches per merchant.
"""

from prometheus_client import Counter, Histogram

CONFIG_MUTATIONS = Counter(
    "botadmin_config_mutations_total",
    "Total number of configuration document mutations",
    labelnames=["merchant_id", "operation"],
)

FIELDS_CHANGED = Histogram(
    "botadmin_fields_changed",
    "Number of fields touched per mutation",
    labelnames=["operation"],
    buckets=(0, 1, 2, 3, 5, 10, 20, 50),
)

VALIDATION_FAILURES = Counter(
    "botadmin_validation_failures_total",
    "Total number of rejected update batches",
    labelnames=["merchant_id"],
)

STORE_CONFLICTS = Counter(
    "botadmin_store_conflicts_total",
    "Total number of optimistic concurrency conflicts on save",
    labelnames=["merchant_id"],
)


def record_mutation(merchant_id: str, operation: str, field_count: int) -> None:
    """Record a successful mutation and how many fields it touched."""
    CONFIG_MUTATIONS.labels(merchant_id=merchant_id, operation=operation).inc()
    FIELDS_CHANGED.labels(operation=operation).observe(field_count)
