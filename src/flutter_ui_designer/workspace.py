from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Any, Mapping

from pydantic import TypeAdapter, ValidationError

from .chat import REPLY_DELAY_SECONDS, ChatSession
from .dictionaries import resolve_defaults
from .generator import FlutterCodeGenerator, GenerationOptions
from .history import HistoryState, HistoryTable, RecordRequest, copy_elements
from .models.chat import ChatMessage
from .models.document import Document, Screen
from .models.element import DesignElement

logger = logging.getLogger(__name__)

GEOMETRY_FIELDS = ("x", "y", "width", "height")
_GEOMETRY_ADAPTER = TypeAdapter(float)


class DesignerWorkspace:
    """Single owner of a document, its per-screen history and its chat log.

    Every element mutation updates the screen and records the resulting list
    in that screen's timeline under one lock, so no caller can observe a
    change that has not been recorded.
    """

    def __init__(
        self,
        document: Document | None = None,
        *,
        generator: FlutterCodeGenerator | None = None,
        reply_delay: float = REPLY_DELAY_SECONDS,
    ) -> None:
        self._document = document.model_copy(deep=True) if document else Document()
        self._history = HistoryTable()
        self._generator = generator or FlutterCodeGenerator()
        self._chat = ChatSession(reply_delay=reply_delay)
        self._lock = threading.Lock()
        for screen in self._document.screens:
            self._history.seed(screen.id, screen.elements)

    @property
    def chat(self) -> ChatSession:
        return self._chat

    @property
    def current_screen_id(self) -> str:
        with self._lock:
            return self._document.current_screen_id

    def document(self) -> Document:
        with self._lock:
            return self._document.model_copy(deep=True)

    def elements(self, screen_id: str | None = None) -> list[DesignElement]:
        with self._lock:
            screen = self._screen(screen_id)
            return copy_elements(screen.elements) if screen else []

    def history_state(self, screen_id: str | None = None) -> HistoryState:
        with self._lock:
            return self._history.state(screen_id or self._document.current_screen_id)

    def has_timeline(self, screen_id: str) -> bool:
        with self._lock:
            return screen_id in self._history

    def add_element(
        self,
        component_type: str,
        x: float,
        y: float,
        *,
        screen_id: str | None = None,
    ) -> DesignElement | None:
        defaults = resolve_defaults(component_type)
        with self._lock:
            screen = self._screen(screen_id)
            if screen is None:
                return None
            element = DesignElement(
                id=self._generate_element_id(),
                type=getattr(component_type, "value", component_type),
                x=x,
                y=y,
                width=defaults.width,
                height=defaults.height,
                properties=dict(defaults.properties),
            )
            self._commit(screen, [*screen.elements, element])
            logger.info(
                "Added element",
                extra={"screen_id": screen.id, "element_id": element.id, "component_type": element.type},
            )
            return element.model_copy(deep=True)

    def update_element(
        self,
        element_id: str,
        updates: Mapping[str, Any],
        *,
        screen_id: str | None = None,
    ) -> DesignElement | None:
        """Apply geometry changes and shallow-merge ``properties``.

        Unknown element ids leave the screen and its history untouched.
        """
        with self._lock:
            screen = self._screen(screen_id)
            if screen is None:
                return None
            target = next((element for element in screen.elements if element.id == element_id), None)
            if target is None:
                return None
            changes = self._geometry_changes(updates)
            if isinstance(updates.get("properties"), Mapping):
                changes["properties"] = {**target.properties, **updates["properties"]}
            updated = target.model_copy(update=changes, deep=True)
            self._commit(
                screen,
                [updated if element.id == element_id else element for element in screen.elements],
            )
            return updated.model_copy(deep=True)

    def remove_element(self, element_id: str, *, screen_id: str | None = None) -> bool:
        with self._lock:
            screen = self._screen(screen_id)
            if screen is None or not any(element.id == element_id for element in screen.elements):
                return False
            self._commit(screen, [element for element in screen.elements if element.id != element_id])
            logger.info("Removed element", extra={"screen_id": screen.id, "element_id": element_id})
            return True

    def clear_canvas(self, *, screen_id: str | None = None) -> bool:
        with self._lock:
            screen = self._screen(screen_id)
            if screen is None:
                return False
            self._commit(screen, [])
            return True

    def undo(self, screen_id: str | None = None) -> list[DesignElement] | None:
        with self._lock:
            screen = self._screen(screen_id)
            if screen is None:
                return None
            snapshot = self._history.undo(screen.id)
            if snapshot is not None:
                screen.elements = snapshot
            return copy_elements(snapshot) if snapshot is not None else None

    def redo(self, screen_id: str | None = None) -> list[DesignElement] | None:
        with self._lock:
            screen = self._screen(screen_id)
            if screen is None:
                return None
            snapshot = self._history.redo(screen.id)
            if snapshot is not None:
                screen.elements = snapshot
            return copy_elements(snapshot) if snapshot is not None else None

    def add_screen(self, name: str) -> Screen:
        with self._lock:
            screen = Screen(id=self._generate_screen_id(), name=name)
            self._document.screens.append(screen)
            self._document.current_screen_id = screen.id
            self._history.ensure(screen.id)
            logger.info("Added screen", extra={"screen_id": screen.id})
            return screen.model_copy(deep=True)

    def rename_screen(self, screen_id: str, name: str) -> bool:
        with self._lock:
            screen = self._document.find_screen(screen_id)
            if screen is None:
                return False
            screen.name = name
            return True

    def delete_screen(self, screen_id: str) -> bool:
        """Delete a screen; the last remaining screen can never be deleted."""
        with self._lock:
            if len(self._document.screens) <= 1 or self._document.find_screen(screen_id) is None:
                logger.info("Rejected screen deletion", extra={"screen_id": screen_id})
                return False
            self._document.screens = [screen for screen in self._document.screens if screen.id != screen_id]
            if self._document.current_screen_id == screen_id:
                self._document.current_screen_id = self._document.screens[0].id
                self._history.ensure(self._document.current_screen_id)
            self._history.discard(screen_id)
            logger.info("Deleted screen", extra={"screen_id": screen_id})
            return True

    def select_screen(self, screen_id: str) -> bool:
        with self._lock:
            if self._document.find_screen(screen_id) is None:
                return False
            self._document.current_screen_id = screen_id
            self._history.ensure(screen_id)
            return True

    def generate_code(
        self,
        options: GenerationOptions | Mapping[str, Any] | None = None,
        *,
        whole_document: bool = False,
    ) -> str:
        with self._lock:
            source: Document | list[DesignElement]
            if whole_document:
                source = self._document.model_copy(deep=True)
            else:
                source = copy_elements(self._document.current_screen.elements)
        return self._generator.generate(source, options)

    def send_chat_message(self, text: str) -> ChatMessage | None:
        return self._chat.send(text)

    def close(self) -> None:
        self._chat.close()

    def _screen(self, screen_id: str | None) -> Screen | None:
        if screen_id is None:
            return self._document.current_screen
        return self._document.find_screen(screen_id)

    def _geometry_changes(self, updates: Mapping[str, Any]) -> dict[str, Any]:
        """Validated geometry values; invalid ones keep the current geometry."""
        changes: dict[str, Any] = {}
        for key in GEOMETRY_FIELDS:
            if updates.get(key) is None:
                continue
            try:
                changes[key] = _GEOMETRY_ADAPTER.validate_python(updates[key])
            except ValidationError:
                logger.debug("Ignored invalid geometry value", extra={"key": key})
        return changes

    def _commit(self, screen: Screen, elements: list[DesignElement]) -> None:
        request = RecordRequest.capture(screen.id, elements)
        screen.elements = elements
        self._history.apply(request)

    def _generate_element_id(self) -> str:
        return f"element-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"

    def _generate_screen_id(self) -> str:
        return f"screen-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


__all__ = ["DesignerWorkspace"]
