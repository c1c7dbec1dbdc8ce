"""Mutation gateway: remote write first, local patch only on confirmed success.

The visible state never runs ahead of the store. On failure the page state
is left untouched and an ERROR outcome carries the reason; nothing is
retried. Preconditions that make a write pointless are reported as INFO
outcomes without touching the store.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from mrcars_admin.application.dtos.outcome import MutationOutcome
from mrcars_admin.application.state import MutationFailed, MutationSucceeded, PageStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MutationGateway(Generic[T]):
    """Runs writes for one page and reconciles that page's state."""

    def __init__(self, page_store: PageStore[T]) -> None:
        self.page_store = page_store

    async def execute(
        self,
        write: Callable[[], Awaitable[object]],
        patch: Callable[[T], T],
        *,
        success_message: str,
        failure_message: str,
    ) -> MutationOutcome:
        """Await write(); on success apply patch to local data.

        Args:
            write: Zero-arg coroutine factory performing the remote write.
            patch: Pure function producing the new local data from the old.
            success_message: Toast text on success.
            failure_message: Toast text on failure (reason is attached separately).

        Returns:
            SUCCESS or ERROR outcome.
        """
        try:
            await write()
        except Exception as exc:
            logger.warning("%s: %s", failure_message, exc)
            self.page_store.dispatch(MutationFailed(str(exc)))
            return MutationOutcome.error(failure_message, reason=str(exc))
        self.page_store.dispatch(MutationSucceeded(patch))
        return MutationOutcome.success(success_message)

    def info(self, message: str) -> MutationOutcome:
        """No-op precondition: informational signal, no write, no state change."""
        logger.debug("Mutation skipped: %s", message)
        return MutationOutcome.info(message)
