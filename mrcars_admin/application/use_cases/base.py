"""Page base class: the load procedure shared by every data page.

A page owns its PageStore and MutationGateway. ``load()`` is the single
re-fetch entrypoint used on mount, manual refresh and invalidation.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from mrcars_admin.application.services.mutation_gateway import MutationGateway
from mrcars_admin.application.state import (
    LoadFailed,
    LoadSucceeded,
    PageState,
    PageStore,
)
from mrcars_admin.domain.exceptions import StoreException

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Page(Generic[T]):
    """Loading → Ready lifecycle around a subclass-provided fetch."""

    #: Collections whose changes invalidate this page.
    collections: tuple[str, ...] = ()

    #: WebSocket command name -> positional payload keys of the method it calls.
    commands: dict[str, tuple[str, ...]] = {}

    def __init__(self) -> None:
        self.page_store: PageStore[T] = PageStore()
        self.gateway: MutationGateway[T] = MutationGateway(self.page_store)

    @property
    def state(self) -> PageState[T]:
        return self.page_store.state

    async def _fetch(self) -> T:
        raise NotImplementedError

    def _empty(self) -> T:
        raise NotImplementedError

    async def load(self) -> PageState[T]:
        """Run the full load; the page always ends up renderable.

        An unexpected failure is logged and leaves the page Ready with
        empty data and the error recorded.
        """
        generation = self.page_store.begin_load()
        try:
            data = await self._fetch()
        except Exception as exc:
            logger.exception("%s load failed", type(self).__name__)
            return self.page_store.dispatch(
                LoadFailed(generation, str(exc), fallback=self._empty())
            )
        return self.page_store.dispatch(LoadSucceeded(generation, data))

    async def load_for_write(self) -> PageState[T]:
        """Load ahead of a mutation; a failed load raises StoreException.

        Mutations decide against the loaded data, so they never run on the
        empty fallback left by a failed load.
        """
        state = await self.load()
        if state.error is not None:
            collection = self.collections[0] if self.collections else None
            raise StoreException(
                f"Could not load current data: {state.error}", collection=collection
            )
        return state

    def snapshot(self) -> dict:
        """JSON-ready view of the current state (for WebSocket pushes)."""
        raise NotImplementedError
