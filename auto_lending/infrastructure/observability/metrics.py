"""Prometheus metrics for command outcomes, finality latency and ledger reads"""

from prometheus_client import Counter, Histogram

# Command metrics
command_counter = Counter(
    "auto_lending_commands_total",
    "Ledger commands submitted through the pipeline",
    ["command", "outcome"],  # outcome: finalized | <error kind>
)

finality_latency_histogram = Histogram(
    "finality_latency_seconds",
    "Time from first finality poll to committed transaction",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0],
)

# Signing agent metrics
agent_failure_counter = Counter(
    "signing_agent_failures_total",
    "Failed signing agent calls",
    ["kind"],  # unavailable | timeout | rejected | error
)

# Ledger read metrics
vehicle_fetch_counter = Counter(
    "vehicle_fetch_total",
    "Vehicle resource lookups",
    ["result"],  # found | not_found
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_command(command: str, error_kind: str | None) -> None:
    """Count one pipeline pass by command name and outcome"""
    command_counter.labels(command=command, outcome=error_kind or "finalized").inc()
