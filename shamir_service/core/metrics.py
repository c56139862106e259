"""Prometheus metrics for secret sharing operations.

Tracks:
- Operation counts by outcome
- Error counts by type
- Operation latency
- Share counts per split / reconstruction
- Field configuration
"""

import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram, Info, REGISTRY


# ==================== Operation Counters ====================

SSS_OPERATIONS_TOTAL = Counter(
    "sss_operations_total",
    "Total number of secret sharing operations",
    ["operation", "status"],
)

SSS_ERRORS_TOTAL = Counter(
    "sss_errors_total",
    "Total number of secret sharing operation errors",
    ["operation", "error_type"],
)


# ==================== Histograms ====================

SSS_LATENCY_BUCKETS = (
    0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0
)

SSS_OPERATION_LATENCY = Histogram(
    "sss_operation_latency_seconds",
    "Latency of secret sharing operations in seconds",
    ["operation"],
    buckets=SSS_LATENCY_BUCKETS,
)

SSS_SHARE_COUNT = Histogram(
    "sss_share_count",
    "Number of shares produced by a split or consumed by a reconstruction",
    ["operation"],
    buckets=(2, 3, 5, 10, 20, 50, 100, 255),
)


# ==================== Info Metrics ====================

SSS_FIELD_INFO = Info(
    "sss_field",
    "Finite field configuration",
)


# ==================== Helper Classes ====================

class MetricsRecorder:
    """Helper for recording secret sharing metrics."""

    def __init__(self):
        self._initialized = False

    def initialize(self, modulus: int, version: str):
        """Publish field information once."""
        if self._initialized:
            return

        SSS_FIELD_INFO.info({
            "version": version,
            "modulus_bits": str(modulus.bit_length()),
        })
        self._initialized = True

    @contextmanager
    def track_operation(self, operation: str, share_count: int | None = None):
        """Context manager to track an operation's metrics.

        Usage:
            with metrics.track_operation("split", share_count=n):
                shares = generate_shares(...)
        """
        start_time = time.perf_counter()
        status = "success"

        try:
            yield
        except Exception as e:
            status = "error"
            SSS_ERRORS_TOTAL.labels(operation=operation, error_type=type(e).__name__).inc()
            raise
        finally:
            duration = time.perf_counter() - start_time
            SSS_OPERATIONS_TOTAL.labels(operation=operation, status=status).inc()
            SSS_OPERATION_LATENCY.labels(operation=operation).observe(duration)

            if share_count is not None and status == "success":
                SSS_SHARE_COUNT.labels(operation=operation).observe(share_count)


metrics = MetricsRecorder()


# ==================== FastAPI Integration ====================

def setup_metrics(app):
    """Set up metrics endpoint on FastAPI app.

    Usage:
        from shamir_service.core.metrics import setup_metrics
        setup_metrics(app)
    """
    from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
    from fastapi import Response

    @app.get("/metrics", include_in_schema=False)
    async def metrics_endpoint():
        return Response(
            content=generate_latest(REGISTRY),
            media_type=CONTENT_TYPE_LATEST,
        )
