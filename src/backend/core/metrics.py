"""
Prometheus metrics for the notification channel and the request lifecycle.

This module defines metrics for:
- WebSocket connection tracking (active, total)
- Broadcast throughput and per-subscriber delivery outcomes
- Claim attempts by outcome (won, conflict, ...)

Usage:
    from core.metrics import track_connection, record_claim_attempt

    async with track_connection(endpoint="/ws"):
        # Connection logic
        pass

    record_claim_attempt("won")
"""

from contextlib import asynccontextmanager
from time import time

from prometheus_client import Counter, Gauge, Histogram

# ==============================================================================
# Connection Metrics
# ==============================================================================

websocket_connections = Counter(
    'groundops_websocket_connections_total',
    'Total WebSocket connections established',
    ['endpoint', 'status']
)

websocket_active_connections = Gauge(
    'groundops_websocket_active_connections',
    'Current number of registered WebSocket subscribers',
    ['endpoint']
)

websocket_connection_duration = Histogram(
    'groundops_websocket_connection_duration_seconds',
    'Duration of WebSocket connections in seconds',
    ['endpoint'],
    buckets=(10, 30, 60, 120, 300, 600, 1800, 3600, 7200, float('inf'))
)

# ==============================================================================
# Broadcast Metrics
# ==============================================================================

events_published = Counter(
    'groundops_events_published_total',
    'Events handed to the broadcaster',
    ['event_type']
)

event_deliveries = Counter(
    'groundops_event_deliveries_total',
    'Per-subscriber event deliveries',
    ['event_type', 'outcome']
)

# ==============================================================================
# Lifecycle Metrics
# ==============================================================================

claim_attempts = Counter(
    'groundops_claim_attempts_total',
    'Claim attempts on service requests',
    ['outcome']
)

status_transitions = Counter(
    'groundops_status_transitions_total',
    'Applied service request status transitions',
    ['from_status', 'to_status']
)


@asynccontextmanager
async def track_connection(endpoint: str):
    """
    Track a WebSocket connection for its whole lifetime.

    Args:
        endpoint: Endpoint path (e.g. "/ws")
    """
    start = time()
    websocket_connections.labels(endpoint=endpoint, status='success').inc()
    websocket_active_connections.labels(endpoint=endpoint).inc()
    try:
        yield
    except Exception:
        websocket_connections.labels(endpoint=endpoint, status='error').inc()
        raise
    finally:
        websocket_active_connections.labels(endpoint=endpoint).dec()
        websocket_connection_duration.labels(endpoint=endpoint).observe(time() - start)


def record_delivery(event_type: str, delivered: int, failed: int) -> None:
    """Record the outcome of one broadcast."""
    events_published.labels(event_type=event_type).inc()
    if delivered:
        event_deliveries.labels(event_type=event_type, outcome='delivered').inc(delivered)
    if failed:
        event_deliveries.labels(event_type=event_type, outcome='failed').inc(failed)


def record_claim_attempt(outcome: str) -> None:
    claim_attempts.labels(outcome=outcome).inc()


def record_transition(from_status: str, to_status: str) -> None:
    status_transitions.labels(from_status=from_status, to_status=to_status).inc()
