"""
Event type definitions for the real-time notification channel.

Defines the EventType enum which classifies every frame pushed to
WebSocket subscribers.
"""

from enum import Enum


class EventType(str, Enum):
    """Event type discriminator, sent as the frame's ``type`` field.

    Each event type maps to a specific ``data`` payload:
    a serialized service request, or ``{requestId, message}`` for chat.
    """

    NEW_REQUEST = "new_request"  # Request created by a pilot
    REQUEST_CLAIMED = "request_claimed"  # Request claimed by ground crew
    REQUEST_STATUS_UPDATED = "request_status_updated"  # Progress, completion or cancellation
    NEW_MESSAGE = "new_message"  # Chat message posted on a request
