"""Domain enumerations for the Mr Cars admin dashboard.

Enums represent fixed sets of domain values (notification classification,
page lifecycle, outcome levels, activity sources).
"""

from enum import Enum


class NotificationType(str, Enum):
    """Classification of a notification; drives its navigation target."""

    INQUIRY = "inquiry"
    ORDER = "order"
    APPOINTMENT = "appointment"
    USER = "user"
    SYSTEM = "system"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid type values as strings."""
        return [t.value for t in cls]

    @classmethod
    def parse(cls, raw: str | None) -> "NotificationType":
        """Return the member for raw, or SYSTEM when raw is unknown or missing."""
        try:
            return cls(raw)
        except ValueError:
            return cls.SYSTEM


class NotificationPriority(str, Enum):
    """Notification priority stored under data.priority (default medium)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | None) -> "NotificationPriority":
        """Return the member for raw, or MEDIUM when raw is unknown or missing."""
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


class NotificationFilter(str, Enum):
    """Tab filter on the notifications page."""

    ALL = "all"
    UNREAD = "unread"
    READ = "read"


class PageStatus(str, Enum):
    """Page lifecycle: Loading → Ready; Ready re-enters Loading only on a full reload."""

    LOADING = "loading"
    READY = "ready"


class OutcomeLevel(str, Enum):
    """User-visible signal produced by a mutation (toast variant)."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class ActivitySource(str, Enum):
    """Source collection of an activity feed event.

    Declaration order is the tie-break priority for events with equal
    timestamps (earlier member sorts first).
    """

    ORDER = "order"
    INQUIRY = "inquiry"
    LISTING = "car"
    USER = "user"

    @property
    def priority(self) -> int:
        """Position in declaration order (0 sorts first on ties)."""
        return list(ActivitySource).index(self)
