"""Page-scoped view state and its reducer.

Each page owns one PageState; it is never shared across pages. Transitions
happen only through ``reduce``:

- LoadStarted: Ready → Loading, bumps the generation.
- LoadSucceeded / LoadFailed: Loading → Ready, only if the event's
  generation is the current one. A completion from an older load is
  discarded, so when two reloads overlap the most recently started wins
  regardless of which response arrives last.
- MutationSucceeded: patches data in place; status is unchanged.
- MutationFailed: returns the same state object.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from mrcars_admin.domain.enums import PageStatus

T = TypeVar("T")


@dataclass(frozen=True)
class PageState(Generic[T]):
    status: PageStatus = PageStatus.LOADING
    data: T | None = None
    generation: int = 0
    error: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.status is PageStatus.READY


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded(Generic[T]):
    generation: int
    data: T


@dataclass(frozen=True)
class LoadFailed:
    generation: int
    reason: str
    fallback: object | None = None


@dataclass(frozen=True)
class MutationSucceeded(Generic[T]):
    patch: Callable[[T], T]


@dataclass(frozen=True)
class MutationFailed:
    reason: str


PageEvent = LoadStarted | LoadSucceeded | LoadFailed | MutationSucceeded | MutationFailed


def reduce(state: PageState[T], event: PageEvent) -> PageState[T]:
    """Return the state after event (pure; never mutates state)."""
    if isinstance(event, LoadStarted):
        return replace(state, status=PageStatus.LOADING, generation=state.generation + 1)
    if isinstance(event, LoadSucceeded):
        if event.generation != state.generation:
            return state
        return replace(state, status=PageStatus.READY, data=event.data, error=None)
    if isinstance(event, LoadFailed):
        if event.generation != state.generation:
            return state
        data = event.fallback if event.fallback is not None else state.data
        return replace(state, status=PageStatus.READY, data=data, error=event.reason)
    if isinstance(event, MutationSucceeded):
        if state.data is None:
            return state
        return replace(state, data=event.patch(state.data))
    if isinstance(event, MutationFailed):
        return state
    raise TypeError(f"Unknown page event: {event!r}")


class PageStore(Generic[T]):
    """Holder for one page's current state; all writes go through dispatch()."""

    def __init__(self, initial: PageState[T] | None = None) -> None:
        self.state: PageState[T] = initial if initial is not None else PageState()

    def dispatch(self, event: PageEvent) -> PageState[T]:
        self.state = reduce(self.state, event)
        return self.state

    def begin_load(self) -> int:
        """Enter Loading and return the generation the load must report back."""
        return self.dispatch(LoadStarted()).generation
