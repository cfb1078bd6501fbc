"""Prometheus metrics for upstream wallet calls and gateway operations"""

from prometheus_client import Counter, Histogram

# Upstream HTTP metrics
provider_request_counter = Counter(
    "wallet_provider_requests_total",
    "HTTP requests sent to wallet providers",
    ["provider", "endpoint", "outcome"],  # success | http_error | transport_error
)

provider_latency_histogram = Histogram(
    "wallet_provider_request_seconds",
    "Wallet provider response time",
    ["provider"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Gateway metrics
gateway_operation_counter = Counter(
    "wallet_gateway_operations_total",
    "Gateway operations by outcome",
    ["provider", "operation", "outcome"],  # success | failure
)


def record_operation(provider: str, operation: str, succeeded: bool) -> None:
    """Count one gateway operation"""
    outcome = "success" if succeeded else "failure"
    gateway_operation_counter.labels(provider=provider, operation=operation, outcome=outcome).inc()
