"""Prometheus metrics for invoice resolution, reports and request latency"""

from prometheus_client import Counter, Histogram

# Invoice metrics
bill_resolution_counter = Counter(
    "finance_bill_resolutions_total",
    "Bill periods resolved for invoice views",
    ["mode"],  # explicit | current
)

invoice_total_histogram = Histogram(
    "finance_invoice_total_cents",
    "Invoice totals returned by the bill endpoint",
    buckets=[10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000, 5_000_000],
)

# Report metrics
report_counter = Counter(
    "finance_reports_total",
    "Reimbursement reports generated",
    ["kind"],  # by_person | person_detail
)

reimbursed_transactions_counter = Counter(
    "finance_reimbursed_transactions_total",
    "Transactions flagged as reimbursed",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_bill_resolution(explicit_month: bool, total_cents: int) -> None:
    """Record whether the invoice was picked by the user or resolved from today"""
    mode = "explicit" if explicit_month else "current"
    bill_resolution_counter.labels(mode=mode).inc()
    invoice_total_histogram.observe(total_cents)
