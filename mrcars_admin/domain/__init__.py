"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from mrcars_admin.domain.entities import (
    ActivityEvent,
    DashboardSummary,
    NotificationRecord,
    TimeBucket,
)
from mrcars_admin.domain.enums import (
    ActivitySource,
    NotificationFilter,
    NotificationPriority,
    NotificationType,
    OutcomeLevel,
    PageStatus,
)
from mrcars_admin.domain.exceptions import (
    AuthenticationException,
    AuthProviderException,
    DashboardException,
    MutationFailedException,
    ResourceNotFoundException,
    StoreException,
    ValidationException,
)

__all__ = [
    # Entities
    "ActivityEvent",
    "DashboardSummary",
    "NotificationRecord",
    "TimeBucket",
    # Enums
    "ActivitySource",
    "NotificationFilter",
    "NotificationPriority",
    "NotificationType",
    "OutcomeLevel",
    "PageStatus",
    # Exceptions
    "AuthenticationException",
    "AuthProviderException",
    "DashboardException",
    "MutationFailedException",
    "ResourceNotFoundException",
    "StoreException",
    "ValidationException",
]
