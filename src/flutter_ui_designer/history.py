from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

from .models.element import DesignElement

logger = logging.getLogger(__name__)

MAX_SNAPSHOTS = 50


def copy_elements(elements: Sequence[DesignElement]) -> list[DesignElement]:
    return [element.model_copy(deep=True) for element in elements]


@dataclass(frozen=True)
class HistoryState:
    cursor: int
    length: int

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def can_redo(self) -> bool:
        return self.cursor < self.length - 1


@dataclass(frozen=True)
class RecordRequest:
    """A history record decided at mutation time.

    The screen id and snapshot are fixed when the request is built, so
    applying it later cannot land on whichever screen is current by then.
    """

    screen_id: str
    snapshot: tuple[DesignElement, ...]

    @classmethod
    def capture(cls, screen_id: str, elements: Sequence[DesignElement]) -> "RecordRequest":
        return cls(screen_id=screen_id, snapshot=tuple(copy_elements(elements)))


class Timeline:
    """Snapshots of one screen's elements plus a cursor into them."""

    def __init__(
        self,
        initial: Sequence[DesignElement] = (),
        *,
        max_snapshots: int = MAX_SNAPSHOTS,
    ) -> None:
        self._snapshots: list[list[DesignElement]] = [copy_elements(initial)]
        self._cursor = 0
        self._max_snapshots = max_snapshots

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._snapshots)

    def state(self) -> HistoryState:
        return HistoryState(cursor=self._cursor, length=len(self._snapshots))

    def record(self, elements: Sequence[DesignElement]) -> None:
        del self._snapshots[self._cursor + 1 :]
        self._snapshots.append(copy_elements(elements))
        self._cursor = len(self._snapshots) - 1
        if len(self._snapshots) > self._max_snapshots:
            self._snapshots.pop(0)
            self._cursor = max(0, self._cursor - 1)

    def undo(self) -> list[DesignElement] | None:
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return copy_elements(self._snapshots[self._cursor])

    def redo(self) -> list[DesignElement] | None:
        if self._cursor >= len(self._snapshots) - 1:
            return None
        self._cursor += 1
        return copy_elements(self._snapshots[self._cursor])

    def current(self) -> list[DesignElement]:
        return copy_elements(self._snapshots[self._cursor])


class HistoryTable:
    """Per-screen timelines, created on first access."""

    def __init__(self, *, max_snapshots: int = MAX_SNAPSHOTS) -> None:
        self._timelines: Dict[str, Timeline] = {}
        self._max_snapshots = max_snapshots

    def ensure(self, screen_id: str) -> Timeline:
        timeline = self._timelines.get(screen_id)
        if timeline is None:
            timeline = Timeline(max_snapshots=self._max_snapshots)
            self._timelines[screen_id] = timeline
            logger.debug("Initialized history timeline", extra={"screen_id": screen_id})
        return timeline

    def seed(self, screen_id: str, elements: Sequence[DesignElement]) -> Timeline:
        """Start a fresh timeline whose only snapshot is ``elements``."""
        timeline = Timeline(elements, max_snapshots=self._max_snapshots)
        self._timelines[screen_id] = timeline
        return timeline

    def record(self, screen_id: str, elements: Sequence[DesignElement]) -> HistoryState:
        timeline = self.ensure(screen_id)
        timeline.record(elements)
        return timeline.state()

    def apply(self, request: RecordRequest) -> HistoryState:
        return self.record(request.screen_id, request.snapshot)

    def undo(self, screen_id: str) -> list[DesignElement] | None:
        return self.ensure(screen_id).undo()

    def redo(self, screen_id: str) -> list[DesignElement] | None:
        return self.ensure(screen_id).redo()

    def state(self, screen_id: str) -> HistoryState:
        return self.ensure(screen_id).state()

    def discard(self, screen_id: str) -> None:
        self._timelines.pop(screen_id, None)

    def __contains__(self, screen_id: object) -> bool:
        return screen_id in self._timelines


__all__ = ["HistoryState", "HistoryTable", "MAX_SNAPSHOTS", "RecordRequest", "Timeline", "copy_elements"]
