"""Activity feed entities.

ActivityEvent is the common shape of the dashboard's recent activity feed.
Each source collection has its own variant carrying exactly the fields its
display template needs; ``to_event()`` applies the template.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar

from mrcars_admin.domain.enums import ActivitySource
from mrcars_admin.shared.utils.datetime import parse_iso_utc

NEW_USER_PLACEHOLDER = "New User"
UNKNOWN_USER_PLACEHOLDER = "Unknown User"


@dataclass(frozen=True)
class ActivityEvent:
    """Normalized feed entry.

    ``id`` is the source prefix plus the source row id, unique across sources.
    """

    id: str
    source: ActivitySource
    user_name: str
    user_email: str
    action: str
    target: str
    created_at: datetime

    def sort_key(self) -> tuple[int, str]:
        """Secondary ordering for equal timestamps: source priority, then id."""
        return (self.source.priority, self.id)


def format_currency(amount: Any) -> str:
    """Format an order amount as '$1,234.50'; missing or invalid amounts render as $0.00."""
    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        value = Decimal(0)
    return f"${value:,.2f}"


def _joined_actor(row: dict[str, Any], relation: str = "users") -> tuple[str, str]:
    """Return (name, email) from an embedded relation (object or single-item list)."""
    joined = row.get(relation)
    if isinstance(joined, list):
        joined = joined[0] if joined else None
    if not isinstance(joined, dict):
        return UNKNOWN_USER_PLACEHOLDER, ""
    return joined.get("username") or UNKNOWN_USER_PLACEHOLDER, joined.get("email") or ""


@dataclass(frozen=True)
class _ActivityVariant:
    source: ClassVar[ActivitySource]
    action: ClassVar[str]

    row_id: str
    user_name: str
    user_email: str
    created_at: datetime

    @property
    def target(self) -> str:
        return ""

    def to_event(self) -> ActivityEvent:
        return ActivityEvent(
            id=f"{self.source.value}_{self.row_id}",
            source=self.source,
            user_name=self.user_name,
            user_email=self.user_email,
            action=self.action,
            target=self.target,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class UserRegistered(_ActivityVariant):
    source: ClassVar[ActivitySource] = ActivitySource.USER
    action: ClassVar[str] = "registered as a new user"

    @classmethod
    def from_row(cls, row: dict[str, Any], created_at: datetime) -> UserRegistered:
        return cls(
            row_id=str(row["id"]),
            user_name=row.get("username") or NEW_USER_PLACEHOLDER,
            user_email=row.get("email") or "",
            created_at=created_at,
        )


@dataclass(frozen=True)
class ListingCreated(_ActivityVariant):
    source: ClassVar[ActivitySource] = ActivitySource.LISTING
    action: ClassVar[str] = "created a new listing"

    make: str = ""
    model: str = ""

    @property
    def target(self) -> str:
        return f"{self.make} {self.model}".strip()

    @classmethod
    def from_row(cls, row: dict[str, Any], created_at: datetime) -> ListingCreated:
        name, email = _joined_actor(row)
        return cls(
            row_id=str(row["id"]),
            user_name=name,
            user_email=email,
            created_at=created_at,
            make=row.get("make") or "",
            model=row.get("model") or "",
        )


@dataclass(frozen=True)
class InquirySubmitted(_ActivityVariant):
    source: ClassVar[ActivitySource] = ActivitySource.INQUIRY
    action: ClassVar[str] = "submitted an inquiry"

    @classmethod
    def from_row(cls, row: dict[str, Any], created_at: datetime) -> InquirySubmitted:
        name, email = _joined_actor(row)
        return cls(
            row_id=str(row["id"]),
            user_name=name,
            user_email=email,
            created_at=created_at,
        )


@dataclass(frozen=True)
class OrderPlaced(_ActivityVariant):
    source: ClassVar[ActivitySource] = ActivitySource.ORDER
    action: ClassVar[str] = "placed an order"

    total_amount: Any = None

    @property
    def target(self) -> str:
        return format_currency(self.total_amount)

    @classmethod
    def from_row(cls, row: dict[str, Any], created_at: datetime) -> OrderPlaced:
        name, email = _joined_actor(row)
        return cls(
            row_id=str(row["id"]),
            user_name=name,
            user_email=email,
            created_at=created_at,
            total_amount=row.get("total_amount"),
        )


ActivityVariant = UserRegistered | ListingCreated | InquirySubmitted | OrderPlaced


def variant_from_row(
    variant: type[ActivityVariant], row: dict[str, Any]
) -> ActivityVariant | None:
    """Build a variant from a row; None when created_at is missing or unparseable."""
    created_at = parse_iso_utc(row.get("created_at"))
    if created_at is None or row.get("id") is None:
        return None
    return variant.from_row(row, created_at)
