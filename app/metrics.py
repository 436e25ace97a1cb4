import logging
import threading
import time

from prometheus_client import Counter, Histogram, start_http_server


_server_started = False
_server_lock = threading.Lock()


def start_metrics_server(port: int) -> None:
    global _server_started
    if _server_started:
        return
    with _server_lock:
        if _server_started:
            return
        try:
            start_http_server(port)
        except OSError as e:
            # Metrics are optional; a busy port must not stop the API
            logging.warning(f"Metrics server not started on :{port}: {e}")
        _server_started = True


REQUEST_MS = Histogram(
    "ixserver_request_latency_ms",
    "Request handling latency (ms)",
    ["route"],
    buckets=(0.5, 1, 2, 5, 10, 20, 50, 100, 250, 500, 1000),
)

REQUESTS = Counter(
    "ixserver_requests_total",
    "Requests handled, by route and outcome",
    ["route", "outcome"],
)

KEYPAIRS_GENERATED = Counter("ixserver_keypairs_generated_total", "Keypairs generated")
MESSAGES_SIGNED = Counter("ixserver_messages_signed_total", "Messages signed")
SIGNATURES_VERIFIED = Counter(
    "ixserver_signatures_verified_total",
    "Signature verifications, by result",
    ["valid"],
)
INSTRUCTIONS_BUILT = Counter(
    "ixserver_instructions_built_total",
    "Instruction descriptors built, by kind",
    ["kind"],
)


class RequestTimer:
    """Observes one request's latency and outcome."""

    def __init__(self, route: str) -> None:
        self.route = route
        self._start = time.perf_counter()

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000.0

    def finish(self, outcome: str) -> None:
        REQUEST_MS.labels(route=self.route).observe(self.elapsed_ms())
        REQUESTS.labels(route=self.route, outcome=outcome).inc()
