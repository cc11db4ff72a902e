"""
In-process publisher for real-time event transport.

Keeps the set of live WebSocket subscribers and fans every event out to all
of them. Delivery is best effort: no replay, no backlog, a subscriber that
fails or stalls is dropped.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Union

from core.config import settings
from core.metrics import record_delivery
from api.services.event_models import ServerEvent
from api.services.event_types import EventType

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    """The part of a WebSocket connection the broadcaster uses."""

    async def send_text(self, data: str) -> None: ...

    async def close(self, code: int = 1000, reason: Optional[str] = None) -> None: ...


class ConnectionRegistry:
    """Set of live subscribers, guarded by an asyncio lock."""

    def __init__(self):
        self._subscribers: set = set()
        self._lock = asyncio.Lock()

    async def register(self, subscriber: Subscriber) -> None:
        async with self._lock:
            self._subscribers.add(subscriber)
            count = len(self._subscribers)
        logger.info(f"Subscriber registered ({count} connected)")

    async def unregister(self, subscriber: Subscriber) -> bool:
        """Remove a subscriber. Returns False if it was already gone."""
        async with self._lock:
            if subscriber not in self._subscribers:
                return False
            self._subscribers.discard(subscriber)
            count = len(self._subscribers)
        logger.info(f"Subscriber unregistered ({count} connected)")
        return True

    async def snapshot(self) -> List[Subscriber]:
        """Copy of the current subscribers, safe to iterate while others register."""
        async with self._lock:
            return list(self._subscribers)

    async def clear(self) -> List[Subscriber]:
        """Drop every subscriber and return the ones that were registered."""
        async with self._lock:
            subscribers = list(self._subscribers)
            self._subscribers.clear()
        return subscribers

    def __len__(self) -> int:
        return len(self._subscribers)


class EventBroadcaster:
    """Fans events out to every registered subscriber.

    Each send is bounded by ``send_timeout``. Failures are isolated per
    subscriber: the failing connection is unregistered and logged, the
    others still receive the frame.
    """

    def __init__(self, registry: ConnectionRegistry, send_timeout: Optional[float] = None):
        self.registry = registry
        self.send_timeout = (
            send_timeout if send_timeout is not None else settings.websocket.send_timeout_seconds
        )

    async def _send(self, subscriber: Subscriber, frame: str) -> bool:
        try:
            await asyncio.wait_for(subscriber.send_text(frame), timeout=self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(
                f"EventBroadcaster: send timed out after {self.send_timeout}s, dropping subscriber"
            )
        except Exception as e:
            logger.warning(
                f"EventBroadcaster: send failed, dropping subscriber - {type(e).__name__}: {e}"
            )
        await self.registry.unregister(subscriber)
        # Closing tells the client to reconnect and re-query
        try:
            await asyncio.wait_for(subscriber.close(code=1011), timeout=self.send_timeout)
        except Exception as e:
            logger.debug(f"EventBroadcaster: close failed - {type(e).__name__}: {e}")
        return False

    async def publish(self, event_type: Union[EventType, str], data: Dict[str, Any]) -> int:
        """
        Deliver one event to all current subscribers.

        Args:
            event_type: Event type (e.g. EventType.NEW_REQUEST)
            data: JSON-compatible payload

        Returns:
            Number of subscribers the frame was delivered to
        """
        type_value = event_type.value if isinstance(event_type, EventType) else str(event_type)
        event = ServerEvent(event_type=type_value, data=data)
        frame = event.to_json()

        subscribers = await self.registry.snapshot()
        if not subscribers:
            logger.debug(f"EventBroadcaster: no subscribers for {type_value}")
            record_delivery(type_value, 0, 0)
            return 0

        results = await asyncio.gather(*(self._send(s, frame) for s in subscribers))
        delivered = sum(1 for ok in results if ok)
        failed = len(results) - delivered
        record_delivery(type_value, delivered, failed)

        logger.debug(
            f"EventBroadcaster: {type_value} delivered to {delivered}/{len(subscribers)} subscribers"
        )
        return delivered

    async def close_all(self) -> None:
        """Close and drop every subscriber without flushing."""
        subscribers = await self.registry.clear()
        for subscriber in subscribers:
            try:
                await subscriber.close(code=1001)
            except Exception as e:
                logger.debug(f"EventBroadcaster: close failed - {type(e).__name__}: {e}")
        if subscribers:
            logger.info(f"EventBroadcaster: closed {len(subscribers)} subscribers")
