"""Realtime invalidation token.

Carries no diff payload: consumers only learn that a collection changed and
must re-run their full load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from mrcars_admin.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class InvalidationToken:
    collection: str
    event: str = "*"
    received_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON publish."""
        return {
            "collection": self.collection,
            "event": self.event,
            "received_at": self.received_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InvalidationToken:
        """Deserialize from a pub/sub message; received_at is reset to now."""
        return cls(collection=str(data["collection"]), event=str(data.get("event") or "*"))
