from shared.metrics import get_counter, get_gauge

SERVICE = "dashboard"

FETCH_ERRORS_TOTAL = get_counter(
    "fetch_errors_total",
    "Failed metering fetches, by view and error kind.",
    SERVICE,
    labelnames=("view", "kind"),
)
COMMITS_TOTAL = get_counter(
    "commits_total",
    "Fetch results written to view state.",
    SERVICE,
    labelnames=("view",),
)
STALE_RESPONSES_TOTAL = get_counter(
    "stale_responses_total",
    "Fetch results discarded because the view's period changed in flight.",
    SERVICE,
    labelnames=("view",),
)
WINDOW_SIZE = get_gauge(
    "realtime_window_size", "Current number of samples in the realtime window.", SERVICE
)
WINDOW_EVICTIONS_TOTAL = get_counter(
    "realtime_window_evictions_total",
    "Samples dropped from the front of the realtime window.",
    SERVICE,
)
