"""Activity reconciler: merges recent records from several collections into one feed.

Each source is queried for its newest few rows, concurrently. Rows are
mapped into ActivityEvent through the source's variant, merged, ordered
newest first and truncated. A failed source contributes no events.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mrcars_admin.application.dtos.query import Query
from mrcars_admin.application.services.fanout import settle
from mrcars_admin.domain.collections import (
    COLLECTION_CARS,
    COLLECTION_INQUIRIES,
    COLLECTION_ORDERS,
    COLLECTION_USERS,
)
from mrcars_admin.domain.entities.activity import (
    ActivityEvent,
    ActivityVariant,
    InquirySubmitted,
    ListingCreated,
    OrderPlaced,
    UserRegistered,
    variant_from_row,
)
from mrcars_admin.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from mrcars_admin.application.interfaces.store import ICollectionStore

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 10
_ACTOR_JOIN = "users!inner(username, email)"


@dataclass(frozen=True)
class ActivitySourceSpec:
    """One "recent records" query and the variant its rows map to."""

    variant: type[ActivityVariant]
    query: Query


ACTIVITY_SOURCES: tuple[ActivitySourceSpec, ...] = (
    ActivitySourceSpec(
        UserRegistered,
        Query(COLLECTION_USERS, "id, username, email, created_at").order_by("created_at").take(3),
    ),
    ActivitySourceSpec(
        ListingCreated,
        Query(COLLECTION_CARS, f"id, make, model, seller_id, created_at, {_ACTOR_JOIN}")
        .order_by("created_at")
        .take(3),
    ),
    ActivitySourceSpec(
        InquirySubmitted,
        Query(COLLECTION_INQUIRIES, f"id, created_at, {_ACTOR_JOIN}").order_by("created_at").take(2),
    ),
    ActivitySourceSpec(
        OrderPlaced,
        Query(COLLECTION_ORDERS, f"id, total_amount, created_at, {_ACTOR_JOIN}")
        .order_by("created_at")
        .take(2),
    ),
)


def merge_events(events: list[ActivityEvent], limit: int) -> list[ActivityEvent]:
    """Order newest first and truncate to limit.

    Equal timestamps fall back to source priority, then id, so the result
    does not depend on which query answered first.
    """
    ordered = sorted(events, key=ActivityEvent.sort_key)
    ordered.sort(key=lambda e: e.created_at, reverse=True)
    return ordered[:limit]


class ActivityReconciler:
    """Builds the dashboard's recent-activity feed."""

    def __init__(
        self,
        store: ICollectionStore,
        *,
        limit: int = DEFAULT_FEED_LIMIT,
        sources: tuple[ActivitySourceSpec, ...] = ACTIVITY_SOURCES,
    ) -> None:
        self.store = store
        self.limit = limit
        self.sources = sources

    async def _events(self, spec: ActivitySourceSpec) -> list[ActivityEvent]:
        result = await self.store.fetch(spec.query)
        events = []
        for row in result.rows:
            variant = variant_from_row(spec.variant, row)
            if variant is None:
                logger.warning(
                    "Skipping %s row without a usable created_at: id=%s",
                    spec.query.collection,
                    row.get("id"),
                )
                continue
            events.append(variant.to_event())
        return events

    @traced("activity.recent")
    async def recent(self) -> list[ActivityEvent]:
        """Return at most ``limit`` events, newest first, with unique ids."""
        batches = await settle(
            [(f"activity.{spec.query.collection}", self._events(spec)) for spec in self.sources],
            default=[],
        )
        merged: dict[str, ActivityEvent] = {}
        for batch in batches:
            for event in batch:
                merged.setdefault(event.id, event)
        return merge_events(list(merged.values()), self.limit)
