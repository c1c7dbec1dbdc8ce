"""Resource management pages (orders, listings, forum, users, payments, ...).

Every table page in the admin panel has the same shape: load rows, change
a status column, flip a boolean flag, delete a row. The per-table rules live
in a ResourceDefinition; ResourcePage applies them through the gateway.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from mrcars_admin.application.dtos.query import Query
from mrcars_admin.application.use_cases.base import Page
from mrcars_admin.domain.collections import (
    COLLECTION_APPOINTMENTS,
    COLLECTION_BATTERY_PRODUCTS,
    COLLECTION_BLOCKED_IPS,
    COLLECTION_CARS,
    COLLECTION_CONVERSATIONS,
    COLLECTION_EMERGENCY_REQUESTS,
    COLLECTION_FORUM_REPLIES,
    COLLECTION_FORUM_TOPICS,
    COLLECTION_INQUIRIES,
    COLLECTION_ORDERS,
    COLLECTION_PAYMENT_TRANSACTIONS,
    COLLECTION_RENTAL_LISTINGS,
    COLLECTION_SERVICE_PROVIDERS,
    COLLECTION_SUBSCRIPTION_PLANS,
    COLLECTION_TIRE_PRODUCTS,
    COLLECTION_USER_SUBSCRIPTIONS,
    COLLECTION_USERS,
)
from mrcars_admin.domain.exceptions import ResourceNotFoundException, ValidationException
from mrcars_admin.shared.telemetry.tracing import add_span_attributes, traced
from mrcars_admin.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from mrcars_admin.application.dtos.outcome import MutationOutcome
    from mrcars_admin.application.dtos.query import Filter
    from mrcars_admin.application.interfaces.store import ICollectionStore

Rows = tuple[dict[str, Any], ...]


@dataclass(frozen=True)
class ResourceDefinition:
    """What an admin may do to one table.

    Attributes:
        name: URL segment (``/resources/{name}``).
        collection: Backing table.
        label: Human name used in outcome messages.
        columns: Select list, joins embedded.
        order_column: Sort column (newest first unless order_descending is False).
        order_descending: Sort direction.
        order_nulls_last: Put rows with no order_column value last.
        status_field: Column changed by set_status, or None if not allowed.
        statuses: Allowed values for status_field.
        toggles: Boolean columns that may be flipped.
        deletable: Whether rows may be deleted.
    """

    name: str
    collection: str
    label: str
    columns: str = "*"
    order_column: str = "created_at"
    order_descending: bool = True
    order_nulls_last: bool = False
    status_field: str | None = None
    statuses: tuple[str, ...] = ()
    toggles: tuple[str, ...] = ()
    deletable: bool = False

    def query(self, limit: int | None = None) -> Query:
        query = Query(self.collection, self.columns).order_by(
            self.order_column, self.order_descending, self.order_nulls_last
        )
        return query.take(limit) if limit else query


RESOURCES: dict[str, ResourceDefinition] = {
    d.name: d
    for d in (
        ResourceDefinition(
            name="orders",
            collection=COLLECTION_ORDERS,
            label="Order",
            columns="*, users(username, email)",
            status_field="status",
            statuses=("pending", "processing", "shipped", "delivered", "cancelled"),
        ),
        ResourceDefinition(
            name="inquiries",
            collection=COLLECTION_INQUIRIES,
            label="Inquiry",
            columns="*, users(username, email)",
            status_field="status",
            statuses=("pending", "responded", "resolved", "closed"),
        ),
        ResourceDefinition(
            name="appointments",
            collection=COLLECTION_APPOINTMENTS,
            label="Appointment",
            columns="*, cars(make, model, year)",
            order_column="date",
            status_field="status",
            statuses=("scheduled", "completed", "cancelled"),
        ),
        ResourceDefinition(
            name="listings",
            collection=COLLECTION_CARS,
            label="Car listing",
            order_column="date_added",
            status_field="status",
            statuses=("active", "inactive", "pending", "sold"),
            deletable=True,
        ),
        ResourceDefinition(
            name="rentals",
            collection=COLLECTION_RENTAL_LISTINGS,
            label="Rental listing",
            status_field="availability_status",
            statuses=("available", "rented", "maintenance", "inactive"),
            deletable=True,
        ),
        ResourceDefinition(
            name="forum_topics",
            collection=COLLECTION_FORUM_TOPICS,
            label="Topic",
            columns="*, users(username)",
            toggles=("is_pinned", "is_locked"),
            deletable=True,
        ),
        ResourceDefinition(
            name="forum_replies",
            collection=COLLECTION_FORUM_REPLIES,
            label="Reply",
            columns="*, users(username)",
            deletable=True,
        ),
        ResourceDefinition(
            name="users",
            collection=COLLECTION_USERS,
            label="User",
            toggles=("is_active",),
            deletable=True,
        ),
        # Decided through PaymentVerificationPage.approve/reject only.
        ResourceDefinition(
            name="payments",
            collection=COLLECTION_PAYMENT_TRANSACTIONS,
            label="Payment",
            columns="*, gateway:payment_gateways(name, type)",
        ),
        ResourceDefinition(
            name="subscriptions",
            collection=COLLECTION_USER_SUBSCRIPTIONS,
            label="Subscription",
            columns="*, plan:subscription_plans(*)",
            status_field="status",
            statuses=("active", "cancelled", "expired", "pending", "paused"),
        ),
        ResourceDefinition(
            name="subscription_plans",
            collection=COLLECTION_SUBSCRIPTION_PLANS,
            label="Plan",
            order_column="sort_order",
            order_descending=False,
            toggles=("is_active",),
        ),
        ResourceDefinition(
            name="tire_products",
            collection=COLLECTION_TIRE_PRODUCTS,
            label="Tire",
            toggles=("is_active", "in_stock"),
            deletable=True,
        ),
        ResourceDefinition(
            name="battery_products",
            collection=COLLECTION_BATTERY_PRODUCTS,
            label="Battery",
            toggles=("is_active", "in_stock"),
            deletable=True,
        ),
        ResourceDefinition(
            name="service_providers",
            collection=COLLECTION_SERVICE_PROVIDERS,
            label="Service provider",
            toggles=("is_verified", "is_active"),
            deletable=True,
        ),
        ResourceDefinition(
            name="emergency_requests",
            collection=COLLECTION_EMERGENCY_REQUESTS,
            label="Emergency request",
            status_field="status",
            statuses=("pending", "accepted", "in_progress", "completed", "cancelled"),
            deletable=True,
        ),
        ResourceDefinition(
            name="blocked_ips",
            collection=COLLECTION_BLOCKED_IPS,
            label="Blocked IP",
            toggles=("is_active",),
            deletable=True,
        ),
        ResourceDefinition(
            name="conversations",
            collection=COLLECTION_CONVERSATIONS,
            label="Conversation",
            order_column="last_message_at",
            order_nulls_last=True,
            status_field="status",
            statuses=("active", "archived", "blocked"),
            deletable=True,
        ),
    )
}


def get_resource(name: str) -> ResourceDefinition:
    """Look up a resource definition or raise ResourceNotFoundException."""
    try:
        return RESOURCES[name]
    except KeyError:
        raise ResourceNotFoundException("resource", name) from None


def _row_id(row: dict[str, Any]) -> str:
    return str(row.get("id"))


class ResourcePage(Page[Rows]):
    """Table page for one ResourceDefinition."""

    commands = {"set_status": ("id", "status"), "toggle": ("id", "field"), "delete": ("id",)}

    def __init__(
        self,
        store: ICollectionStore,
        definition: ResourceDefinition,
        *,
        limit: int | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.definition = definition
        self.limit = limit
        self.collections = (definition.collection,)

    @property
    def rows(self) -> Rows:
        return self.state.data or ()

    def _by_id(self, row_id: str) -> tuple[Filter, ...]:
        return Query(self.definition.collection).where_eq("id", row_id).filters

    def _find(self, row_id: str) -> dict[str, Any] | None:
        return next((r for r in self.rows if _row_id(r) == row_id), None)

    @traced("page.resources.load")
    async def _fetch(self) -> Rows:
        add_span_attributes(resource=self.definition.name)
        result = await self.store.fetch(self.definition.query(self.limit))
        return tuple(result.rows)

    def _empty(self) -> Rows:
        return ()

    async def set_status(self, row_id: str, status: str) -> MutationOutcome:
        definition = self.definition
        if definition.status_field is None:
            raise ValidationException(f"{definition.label} has no status to change")
        if status not in definition.statuses:
            raise ValidationException(
                f"Invalid {definition.status_field} '{status}'; expected one of "
                f"{', '.join(definition.statuses)}",
                field=definition.status_field,
            )
        values = {definition.status_field: status}

        def patch(rows: Rows) -> Rows:
            return tuple({**r, **values} if _row_id(r) == row_id else r for r in rows)

        return await self.gateway.execute(
            lambda: self.store.update(definition.collection, values, self._by_id(row_id)),
            patch,
            success_message=f"{definition.label} status changed to {status}",
            failure_message=f"Failed to update {definition.label.lower()} status",
        )

    async def toggle(self, row_id: str, field: str) -> MutationOutcome:
        """Flip a boolean flag; the new value is derived from the loaded row."""
        definition = self.definition
        if field not in definition.toggles:
            raise ValidationException(
                f"{definition.label} field '{field}' cannot be toggled", field=field
            )
        row = self._find(row_id)
        if row is None:
            raise ResourceNotFoundException(definition.name, row_id)
        values = {field: not bool(row.get(field))}

        def patch(rows: Rows) -> Rows:
            return tuple({**r, **values} if _row_id(r) == row_id else r for r in rows)

        flag = field.removeprefix("is_").replace("_", " ")
        state = "enabled" if values[field] else "disabled"
        return await self.gateway.execute(
            lambda: self.store.update(definition.collection, values, self._by_id(row_id)),
            patch,
            success_message=f"{definition.label} {flag} {state}",
            failure_message=f"Failed to update {definition.label.lower()}",
        )

    async def delete(self, row_id: str) -> MutationOutcome:
        definition = self.definition
        if not definition.deletable:
            raise ValidationException(f"{definition.label} records cannot be deleted")

        def patch(rows: Rows) -> Rows:
            return tuple(r for r in rows if _row_id(r) != row_id)

        return await self.gateway.execute(
            lambda: self.store.delete(definition.collection, self._by_id(row_id)),
            patch,
            success_message=f"{definition.label} deleted",
            failure_message=f"Failed to delete {definition.label.lower()}",
        )

    def snapshot(self) -> dict:
        return {
            "type": "snapshot",
            "page": self.definition.name,
            "status": self.state.status.value,
            "error": self.state.error,
            "data": {"resource": self.definition.name, "rows": list(self.rows)},
        }


class PaymentVerificationPage(ResourcePage):
    """Manually verified payment transactions.

    Only pending transactions can be decided. Approving completes the
    transaction and, for a subscription payment, activates the subscription
    it references; rejecting marks it failed with the admin's reason. Both
    writes of an approval must succeed before the local row changes.
    """

    commands = {**ResourcePage.commands, "approve": ("id",), "reject": ("id", "reason")}

    def __init__(
        self,
        store: ICollectionStore,
        definition: ResourceDefinition,
        *,
        limit: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(store, definition, limit=limit)
        self._clock = clock

    def _pending(self, row_id: str) -> dict[str, Any]:
        row = self._find(row_id)
        if row is None:
            raise ResourceNotFoundException(self.definition.name, row_id)
        if row.get("status") != "pending":
            raise ValidationException(
                f"Payment is {row.get('status')}; only pending payments can be verified",
                field="status",
            )
        return row

    def _patch(self, row_id: str, values: dict[str, Any]) -> Callable[[Rows], Rows]:
        def patch(rows: Rows) -> Rows:
            return tuple({**r, **values} if _row_id(r) == row_id else r for r in rows)

        return patch

    async def approve(self, row_id: str, notes: str = "") -> MutationOutcome:
        row = self._pending(row_id)
        now = self._clock().isoformat()
        values = {
            "status": "completed",
            "processed_at": now,
            "updated_at": now,
            "payment_details": {
                **(row.get("payment_details") or {}),
                "admin_notes": notes,
                "verified_by": "admin",
                "verified_at": now,
            },
        }
        subscription_id = row.get("reference_id") if row.get("transaction_type") == "subscription" else None

        async def write() -> None:
            await self.store.update(self.definition.collection, values, self._by_id(row_id))
            if subscription_id:
                await self.store.update(
                    COLLECTION_USER_SUBSCRIPTIONS,
                    {"status": "active", "updated_at": now},
                    Query(COLLECTION_USER_SUBSCRIPTIONS).where_eq("id", subscription_id).filters,
                )

        return await self.gateway.execute(
            write,
            self._patch(row_id, values),
            success_message="Payment approved",
            failure_message="Failed to approve payment",
        )

    async def reject(self, row_id: str, reason: str) -> MutationOutcome:
        if not reason.strip():
            raise ValidationException("A rejection reason is required", field="reason")
        row = self._pending(row_id)
        now = self._clock().isoformat()
        values = {
            "status": "failed",
            "error_message": reason,
            "updated_at": now,
            "payment_details": {
                **(row.get("payment_details") or {}),
                "rejection_reason": reason,
                "rejected_by": "admin",
                "rejected_at": now,
            },
        }
        return await self.gateway.execute(
            lambda: self.store.update(self.definition.collection, values, self._by_id(row_id)),
            self._patch(row_id, values),
            success_message="Payment rejected",
            failure_message="Failed to reject payment",
        )


PAGE_CLASSES: dict[str, type[ResourcePage]] = {"payments": PaymentVerificationPage}


def build_resource_page(
    store: ICollectionStore, name: str, *, limit: int | None = None
) -> ResourcePage:
    """Page for the named resource; unknown names raise ResourceNotFoundException."""
    definition = get_resource(name)
    return PAGE_CLASSES.get(name, ResourcePage)(store, definition, limit=limit)
