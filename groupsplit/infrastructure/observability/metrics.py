"""Prometheus metrics for monitoring settlement plans and input quality"""

from prometheus_client import Counter, Histogram

# Settlement plan metrics
settlement_plan_counter = Counter(
    "groupsplit_settlement_plan_total",
    "Total settlement plans computed",
    ["outcome"],  # settled | outstanding
)

suggested_transactions_histogram = Histogram(
    "groupsplit_suggested_transactions",
    "Suggested payments per settlement plan",
    buckets=[0, 1, 2, 3, 5, 8, 13, 21],
)

# Input quality metrics
unknown_reference_counter = Counter(
    "groupsplit_unknown_member_references_total",
    "Expense or settlement references to ids outside the group",
    ["source"],  # payer | split | settlement_from | settlement_to
)

rejected_expense_counter = Counter(
    "groupsplit_rejected_expenses_total",
    "Expenses rejected at the boundary",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_settlement_plan(transaction_count: int) -> None:
    """Record plan metrics for monitoring how often groups are already settled"""
    outcome = "settled" if transaction_count == 0 else "outstanding"
    settlement_plan_counter.labels(outcome=outcome).inc()
    suggested_transactions_histogram.observe(transaction_count)
