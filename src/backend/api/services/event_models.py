"""
Event data models for the real-time notification channel.

Defines the ServerEvent dataclass, the envelope every subscriber receives.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass
class ServerEvent:
    """Envelope for an event pushed to WebSocket subscribers.

    Attributes:
        event_type: Type discriminator (see EventType enum)
        data: Event-specific JSON-compatible payload
        created_at: Event creation time, for logging only
    """

    event_type: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_frame(self) -> Dict[str, Any]:
        """Wire format: ``{"type": ..., "data": ...}``."""
        return {"type": self.event_type, "data": self.data}

    def to_json(self) -> str:
        """Serialize the wire frame once for all subscribers."""
        return json.dumps(self.to_frame(), separators=(",", ":"))
