"""Telemetry helpers and metrics."""

from .metrics import (
    ERROR_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    UPSTREAM_LATENCY,
    UPSTREAM_REQUESTS,
    observe_request,
    observe_upstream,
)

__all__ = [
    "ERROR_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "UPSTREAM_LATENCY",
    "UPSTREAM_REQUESTS",
    "observe_request",
    "observe_upstream",
]
