"""Observable store primitives.

A store owns exactly one immutable ``StoreState`` snapshot and pushes every
new snapshot to its subscribers synchronously. Only the store's own
intent-revealing methods replace the snapshot.

``CollectionStore`` adds the CRUD conventions shared by every entity store:

* reads (``load``, ``get_by_id``) record failures in ``error`` and return normally;
* writes record failures in ``error`` and re-raise, so callers can react inline;
* writes go to the server first and apply the server's representation afterwards;
* responses are sequenced per entity id, so the most recently issued request
  for an id wins even when an older one resolves later.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pydantic import ValidationError

from bremray.api.client import ApiError

logger = logging.getLogger(__name__)

D = TypeVar("D")
T = TypeVar("T")

Subscriber = Callable[["StoreState[Any]"], None]

# Failures a store turns into an ``error`` message
FAILURES = (ApiError, ValidationError)


def describe(exc: BaseException, fallback: str) -> str:
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    return fallback


@dataclass(frozen=True)
class StoreState(Generic[D]):
    data: D
    loading: bool = False
    error: str | None = None


class ObservableStore(Generic[D]):
    def __init__(self, initial: D):
        self._state: StoreState[D] = StoreState(initial)
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> StoreState[D]:
        return self._state

    @property
    def data(self) -> D:
        return self._state.data

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; it receives the current snapshot right away."""
        self._subscribers.append(callback)
        callback(self._state)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def clear_error(self) -> None:
        if self._state.error is not None:
            self._patch(error=None)

    def _set(self, state: StoreState[D]) -> None:
        self._state = state
        for callback in list(self._subscribers):
            callback(state)

    def _patch(self, **changes: Any) -> None:
        self._set(replace(self._state, **changes))


class RequestSequencer:
    """Monotonic per-key tokens; only the newest token for a key is current."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    def issue(self, key: str) -> int:
        token = next(self._counter)
        self._latest[key] = token
        return token

    def is_current(self, key: str, token: int) -> bool:
        return self._latest.get(key) == token


class CollectionStore(ObservableStore[tuple[T, ...]], Generic[T]):
    """Store over a list of server entities exposed through a resource client.

    ``api`` must provide ``list``, ``get``, ``create``, ``update`` and ``delete``.
    """

    noun = "record"
    plural = "records"

    def __init__(self, api: Any):
        super().__init__(())
        self._api = api
        self._sequencer = RequestSequencer()
        self._background: set[asyncio.Task] = set()

    def find(self, entity_id: str) -> T | None:
        return next((e for e in self.data if e.id == entity_id), None)

    # ── reads ─────────────────────────────────────────────

    async def load(self) -> None:
        await self._load_with(self._api.list)

    async def _load_with(self, fetch: Callable[..., Awaitable[list[T]]], *args: Any, **kwargs: Any) -> None:
        self._patch(loading=True, error=None)
        try:
            rows = await fetch(*args, **kwargs)
        except FAILURES as e:
            logger.error("Failed to load %s: %s", self.plural, e)
            self._patch(loading=False, error=describe(e, f"Failed to load {self.plural}"))
            return
        self._set(StoreState(tuple(rows)))

    async def get_by_id(self, entity_id: str) -> T | None:
        """In-memory entity if present, else fetch it and append it. ``None`` on failure."""
        found = self.find(entity_id)
        if found is not None:
            return found
        try:
            entity = await self._api.get(entity_id)
        except FAILURES as e:
            logger.error("Failed to load %s %s: %s", self.noun, entity_id, e)
            self._patch(error=describe(e, f"Failed to load {self.noun}"))
            return None
        self._patch(data=self.data + (entity,))
        return entity

    async def load_by_id(self, entity_id: str) -> T | None:
        return await self.get_by_id(entity_id)

    # ── writes ────────────────────────────────────────────

    async def create(self, payload: Any) -> T:
        self._patch(loading=True, error=None)
        try:
            entity = await self._api.create(payload)
        except FAILURES as e:
            self._patch(loading=False, error=describe(e, f"Failed to create {self.noun}"))
            raise
        self._patch(data=self.data + (entity,), loading=False, error=None)
        return entity

    async def update(self, entity_id: str, changes: Any) -> T:
        """Send only the fields set on ``changes``; adopt the server's entity."""
        token = self._sequencer.issue(entity_id)
        try:
            entity = await self._api.update(entity_id, changes)
        except FAILURES as e:
            if self._sequencer.is_current(entity_id, token):
                self._patch(error=describe(e, f"Failed to update {self.noun}"))
            raise
        if self._sequencer.is_current(entity_id, token):
            self._replace(entity)
        else:
            logger.debug("Discarding stale update response for %s %s", self.noun, entity_id)
        return entity

    async def remove(self, entity_id: str) -> None:
        try:
            await self._api.delete(entity_id)
        except FAILURES as e:
            self._patch(error=describe(e, f"Failed to delete {self.noun}"))
            raise
        # responses still in flight for this id must not bring it back
        self._sequencer.issue(entity_id)
        self._patch(data=tuple(e for e in self.data if e.id != entity_id))

    # ── helpers for entity stores ─────────────────────────

    def _replace(self, entity: T) -> None:
        self._patch(data=tuple(entity if e.id == entity.id else e for e in self.data))

    def _upsert(self, entity: T) -> None:
        if self.find(entity.id) is None:
            self._patch(data=self.data + (entity,))
        else:
            self._replace(entity)

    async def _reload(self, entity_id: str) -> T:
        token = self._sequencer.issue(entity_id)
        entity = await self._api.get(entity_id)
        if self._sequencer.is_current(entity_id, token):
            self._upsert(entity)
        else:
            logger.debug("Discarding stale reload of %s %s", self.noun, entity_id)
        return entity

    async def _mutate_then_reload(self, entity_id: str, remote: Callable[[], Awaitable[Any]], failure: str) -> T:
        """Run a sub-resource mutation, then refetch the parent for its nested shape."""
        try:
            await remote()
            return await self._reload(entity_id)
        except FAILURES as e:
            self._patch(error=describe(e, failure))
            raise

    def _optimistic(
        self,
        patch: Callable[[tuple[T, ...]], tuple[T, ...]],
        remote: Callable[[], Awaitable[Any]],
        failure: str,
    ) -> asyncio.Task:
        """Apply ``patch`` now, confirm remotely in the background.

        On failure the whole pre-patch collection is restored, which also drops
        any unrelated change applied while the request was in flight.
        """
        before = self.data
        self._patch(data=patch(before))

        async def confirm() -> bool:
            try:
                await remote()
            except FAILURES as e:
                logger.warning("%s, reverting: %s", failure, e)
                self._patch(data=before, error=describe(e, failure))
                return False
            return True

        task = asyncio.get_running_loop().create_task(confirm())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task
