"""Read-only projections of a store, recomputed on every upstream notification."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from bremray.schemas import Job, JobStatus, JobTemplate
from bremray.stores.base import ObservableStore, StoreState

V = TypeVar("V")


class DerivedView(Generic[V]):
    """Cached projection of ``source``. Never holds a value older than the source."""

    def __init__(self, source: ObservableStore[Any], project: Callable[[StoreState[Any]], V]):
        self._project = project
        self._subscribers: list[Callable[[V], None]] = []
        self._value: V
        # subscribe() delivers the current snapshot immediately, which seeds _value
        self._unsubscribe = source.subscribe(self._on_source)

    @property
    def value(self) -> V:
        return self._value

    def subscribe(self, callback: Callable[[V], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def close(self) -> None:
        self._unsubscribe()
        self._subscribers.clear()

    def _on_source(self, state: StoreState[Any]) -> None:
        self._value = self._project(state)
        for callback in list(self._subscribers):
            callback(self._value)


def jobs_list(store: ObservableStore[tuple[Job, ...]]) -> DerivedView[list[Job]]:
    return DerivedView(store, lambda s: list(s.data))


def jobs_with_status(store: ObservableStore[tuple[Job, ...]], status: JobStatus) -> DerivedView[list[Job]]:
    return DerivedView(store, lambda s: [j for j in s.data if j.status == status])


def active_templates(store: ObservableStore[tuple[JobTemplate, ...]]) -> DerivedView[list[JobTemplate]]:
    return DerivedView(store, lambda s: [t for t in s.data if t.is_active])
