"""Page session: one mounted page bound to a push sink.

A session loads its page on start, then listens on the invalidation channel
for the page's collections and reloads on every token. Snapshots are pushed
to the sink after each load and each mutation. Closing the session cancels
the subscription; nothing is delivered afterwards.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from mrcars_admin.domain.exceptions import (
    DashboardException,
    StoreException,
    ValidationException,
)

if TYPE_CHECKING:
    from mrcars_admin.application.interfaces.realtime import IInvalidationChannel
    from mrcars_admin.application.use_cases.base import Page

logger = logging.getLogger(__name__)

Sink = Callable[[dict[str, Any]], Awaitable[None]]


class PageSession:
    def __init__(
        self,
        page: Page,
        sink: Sink,
        channel: IInvalidationChannel | None = None,
    ) -> None:
        self.page = page
        self.sink = sink
        self.channel = channel
        self._listener: asyncio.Task | None = None
        self._closed = False

    @property
    def subscribed(self) -> bool:
        return self._listener is not None and not self._listener.done()

    async def start(self) -> None:
        """Initial load, first snapshot, then subscribe (if a channel is configured)."""
        await self.refresh()
        if self.channel is not None and self.page.collections:
            self._listener = asyncio.create_task(self._listen())

    async def refresh(self) -> None:
        await self.page.load()
        await self._push(self.page.snapshot())

    async def _listen(self) -> None:
        assert self.channel is not None
        try:
            async for token in self.channel.subscribe(*self.page.collections):
                if self._closed:
                    break
                logger.info(
                    "Invalidation on %s (%s), reloading %s",
                    token.collection,
                    token.event,
                    type(self.page).__name__,
                )
                await self.refresh()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Invalidation listener for %s stopped", type(self.page).__name__)

    async def handle_command(self, message: dict[str, Any]) -> None:
        """Run one client command and push the outcome plus a fresh snapshot.

        ``{"action": "refresh"}`` reloads; other actions map to the page's
        mutation methods via ``Page.commands``. Rejected commands, and any
        command while the last load failed, produce an ``error`` message and
        leave the page untouched.
        """
        action = message.get("action")
        if action == "refresh":
            await self.refresh()
            return
        try:
            keys = self.page.commands.get(action) if isinstance(action, str) else None
            if keys is None:
                raise ValidationException(f"Unknown action: {action!r}", field="action")
            missing = [k for k in keys if message.get(k) in (None, "")]
            if missing:
                raise ValidationException(
                    f"Missing {', '.join(missing)} for {action}", field=missing[0]
                )
            if self.page.state.error is not None:
                raise StoreException(
                    f"Page data unavailable, refresh before {action}: {self.page.state.error}"
                )
            outcome = await getattr(self.page, action)(*(str(message[k]) for k in keys))
        except DashboardException as exc:
            await self._push({"type": "error", **exc.to_dict()})
            return
        await self._push({"type": "outcome", "action": action, "outcome": outcome.to_dict()})
        await self._push(self.page.snapshot())

    async def _push(self, payload: dict[str, Any]) -> None:
        if not self._closed:
            await self.sink(payload)

    async def close(self) -> None:
        self._closed = True
        if self._listener is not None:
            self._listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener
            self._listener = None
