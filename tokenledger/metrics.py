"""
Prometheus metrics for the token actor.

Exposes operational metrics via HTTP /metrics endpoint for Prometheus scraping.

Environment Variables (read by the CLI):
    METRICS_ENABLED: Enable metrics server (true/false) - default: false
    METRICS_PORT: HTTP port for /metrics endpoint - default: 8080

Usage:
    from tokenledger.metrics import start_metrics_server, track_operation

    start_metrics_server(enabled=True, port=8080)
    track_operation("Transfer", "ok")

Until init_metrics() runs, every tracking helper is a no-op.
"""

import logging
import os
import threading
from contextlib import contextmanager
from typing import Generator, Optional, Tuple

from prometheus_client import Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger(__name__)

OPERATIONS_TOTAL: Optional[Counter] = None
OPERATION_DURATION: Optional[Histogram] = None
CURRENT_SUPPLY: Optional[Gauge] = None

_metrics_initialized = False
_metrics_lock = threading.Lock()


def init_metrics() -> None:
    """
    Initialize Prometheus metrics (call once at startup).

    Thread-safe via module-level lock; repeated calls are ignored.
    """
    global OPERATIONS_TOTAL, OPERATION_DURATION, CURRENT_SUPPLY
    global _metrics_initialized

    with _metrics_lock:
        if _metrics_initialized:
            return

        # Operation counter (labels: action, outcome)
        OPERATIONS_TOTAL = Counter(
            "tokenledger_operations_total",
            "Total number of operations handled by the token actor",
            labelnames=["action", "outcome"],
        )

        OPERATION_DURATION = Histogram(
            "tokenledger_operation_duration_seconds",
            "Duration of operation handling in seconds",
            labelnames=["action"],
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1),
        )

        CURRENT_SUPPLY = Gauge(
            "tokenledger_current_supply",
            "Current token supply",
        )

        _metrics_initialized = True
        logger.info("Prometheus metrics initialized")


def metrics_settings_from_env() -> Tuple[bool, int]:
    """Return (enabled, port) from METRICS_ENABLED / METRICS_PORT."""
    enabled = os.getenv("METRICS_ENABLED", "false").strip().lower() in ("1", "true", "yes")
    try:
        port = int(os.getenv("METRICS_PORT", "8080"))
    except ValueError:
        port = 8080
    return enabled, port


def start_metrics_server(enabled: bool, port: int) -> None:
    """
    Start Prometheus metrics HTTP server in background thread.

    Side Effects:
        - Starts HTTP server in daemon thread (does not block)
        - Initializes metrics registry if not already initialized
    """
    if not enabled:
        logger.info("Metrics server disabled (METRICS_ENABLED=false)")
        return

    init_metrics()

    try:
        start_http_server(port, addr="0.0.0.0")
        logger.info(f"Metrics server started on http://0.0.0.0:{port}/metrics")
    except OSError as e:
        logger.error(f"Failed to start metrics server: {e}")


@contextmanager
def track_duration(action: str) -> Generator[None, None, None]:
    """
    Context manager for tracking how long one operation takes.

    Usage:
        with track_duration("Transfer"):
            ...
    """
    if OPERATION_DURATION is None:
        yield
        return

    with OPERATION_DURATION.labels(action=action).time():
        yield


def track_operation(action: str, outcome: str) -> None:
    """
    Count one handled operation.

    Args:
        action: Action type (e.g., "Transfer", "Mint")
        outcome: "ok" or the error kind (e.g., "NotEnoughBalance")
    """
    if OPERATIONS_TOTAL is not None:
        OPERATIONS_TOTAL.labels(action=action, outcome=outcome).inc()


def set_current_supply(supply: int) -> None:
    if CURRENT_SUPPLY is not None:
        CURRENT_SUPPLY.set(supply)
