from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "assistant_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "assistant_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

COMMANDS_TOTAL = get_or_create_metric(
    "assistant_commands_total",
    "Parsed commands by kind",
    Counter,
    labelnames=["kind"],
)

DISPATCH_TOTAL = get_or_create_metric(
    "assistant_dispatch_total",
    "Model dispatches by provider and outcome",
    Counter,
    labelnames=["provider", "outcome"],
)

TRANSCRIPT_MESSAGES = get_or_create_metric(
    "assistant_transcript_messages", "Messages currently held in the transcript", Gauge
)
