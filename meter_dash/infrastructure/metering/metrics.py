from shared.metrics import get_counter, get_histogram

SERVICE = "dashboard"

FETCH_REQUESTS_TOTAL = get_counter(
    "fetch_requests_total",
    "Metering requests issued, by endpoint.",
    SERVICE,
    labelnames=("endpoint",),
)
FETCH_LATENCY_SECONDS = get_histogram(
    "fetch_latency_seconds",
    "Latency of metering requests.",
    SERVICE,
    labelnames=("endpoint",),
)
