"""Row shapes of the hosted database tables.

Models are lenient: only ``id`` is required, unknown columns and embedded
joins are kept (``extra="allow"``). ``coerce_rows`` normalizes rows read by
the resource pages (timestamps, numbers) before they go out as JSON.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from mrcars_admin.domain.collections import (
    COLLECTION_APPOINTMENTS,
    COLLECTION_CARS,
    COLLECTION_FORUM_REPLIES,
    COLLECTION_FORUM_TOPICS,
    COLLECTION_INQUIRIES,
    COLLECTION_NOTIFICATIONS,
    COLLECTION_ORDERS,
    COLLECTION_RENTAL_LISTINGS,
    COLLECTION_USERS,
)

logger = logging.getLogger(__name__)


class _Row(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserRow(_Row):
    email: str | None = None
    username: str | None = None
    phone: str | None = None
    profile_picture_url: str | None = None
    role: str | None = None
    is_active: bool | None = None
    last_login: datetime | None = None


class CarRow(_Row):
    make: str | None = None
    model: str | None = None
    year: int | None = None
    price: float | None = None
    mileage: int | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    location: str | None = None
    seller_id: str | None = None
    status: str | None = None
    is_active: bool | None = None
    images: list[str] | None = None
    date_added: datetime | None = None


class RentalListingRow(_Row):
    make: str | None = None
    model: str | None = None
    year: int | None = None
    price_per_day: float | None = None
    availability_status: str | None = None
    owner_id: str | None = None
    location: str | None = None
    min_rental_days: int | None = None
    max_rental_days: int | None = None


class OrderRow(_Row):
    user_id: str | None = None
    total_amount: float | None = None
    status: str | None = None
    payment_method: str | None = None
    payment_status: str | None = None
    shipping_address: str | None = None
    notes: str | None = None


class InquiryRow(_Row):
    car_id: str | None = None
    inquirer_id: str | None = None
    seller_id: str | None = None
    message: str | None = None
    phone_number: str | None = None
    email: str | None = None
    status: str | None = None


class AppointmentRow(_Row):
    car_id: str | None = None
    user_id: str | None = None
    date: str | None = None
    time: str | None = None
    status: str | None = None
    notes: str | None = None
    service_type: str | None = None


class NotificationRow(_Row):
    user_id: str | None = None
    title: str | None = None
    message: str | None = None
    type: str | None = None
    read: bool | None = None
    data: dict[str, Any] | None = None


class ForumTopicRow(_Row):
    title: str | None = None
    content: str | None = None
    user_id: str | None = None
    author_name: str | None = None
    category: str | None = None
    likes: int | None = None
    comments: int | None = None
    is_pinned: bool | None = None
    is_locked: bool | None = None
    views_count: int | None = None


class ForumReplyRow(_Row):
    topic_id: str | None = None
    content: str | None = None
    user_id: str | None = None
    author_name: str | None = None
    likes: int | None = None
    dislikes: int | None = None


TABLE_MODELS: dict[str, type[_Row]] = {
    COLLECTION_USERS: UserRow,
    COLLECTION_CARS: CarRow,
    COLLECTION_RENTAL_LISTINGS: RentalListingRow,
    COLLECTION_ORDERS: OrderRow,
    COLLECTION_INQUIRIES: InquiryRow,
    COLLECTION_APPOINTMENTS: AppointmentRow,
    COLLECTION_NOTIFICATIONS: NotificationRow,
    COLLECTION_FORUM_TOPICS: ForumTopicRow,
    COLLECTION_FORUM_REPLIES: ForumReplyRow,
}


def coerce_row(collection: str, row: dict[str, Any]) -> dict[str, Any]:
    """Validate row against its table model and dump it JSON-ready.

    Rows that do not validate are returned unchanged (logged at WARNING);
    a bad row never hides the rest of the table.
    """
    model = TABLE_MODELS.get(collection)
    if model is None:
        return row
    try:
        return model.model_validate(row).model_dump(mode="json")
    except ValidationError as e:
        logger.warning("Row in %s does not match schema: %s", collection, e.error_count())
        return row


def coerce_rows(collection: str, rows: list[dict[str, Any]] | tuple[dict[str, Any], ...]) -> list[dict[str, Any]]:
    return [coerce_row(collection, r) for r in rows]
