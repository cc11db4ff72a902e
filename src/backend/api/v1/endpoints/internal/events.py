"""
Real-time event channel.

Clients open a WebSocket and receive every lifecycle and chat event as a
``{"type": ..., "data": ...}`` JSON frame. Frames sent by clients are read
and ignored. There is no replay: a client that connects late re-queries the
HTTP API.
"""

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from core.config import settings
from core.dependencies import get_connection_registry
from core.metrics import track_connection
from api.services.event_publisher import ConnectionRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket(settings.websocket.path)
async def events_websocket(
    websocket: WebSocket,
    registry: ConnectionRegistry = Depends(get_connection_registry),
):
    await websocket.accept()
    await registry.register(websocket)

    try:
        async with track_connection(endpoint=settings.websocket.path):
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logger.debug(f"WebSocket disconnected (code={message.get('code')})")
                    break
    except WebSocketDisconnect as e:
        logger.debug(f"WebSocket disconnected (code={e.code})")
    except Exception as e:
        logger.warning(f"WebSocket transport error: {type(e).__name__}: {e}")
    finally:
        await registry.unregister(websocket)
