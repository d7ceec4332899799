"""Message envelope for the stamp's message producer."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class Message:
    """Immutable message handed to a background processor."""

    action: str  # e.g. "AddCatalogItem", "DeleteObject"
    payload: Mapping[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json(self) -> str:
        return json.dumps(
            {
                "action": self.action,
                "payload": dict(self.payload),
                "timestamp": self.timestamp.isoformat(),
            },
            default=str,
        )


class MessageProducer(Protocol):
    """Protocol for message producers (Redis streams now)."""

    async def send(self, message: Message) -> str:
        """Publish message, returning its broker-assigned id."""
        ...

    async def is_healthy(self) -> bool:
        """True when the broker can be reached."""
        ...
