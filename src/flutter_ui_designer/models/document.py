from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field, model_validator

from .element import DesignElement

DEFAULT_SCREEN_ID = "screen-1"
DEFAULT_SCREEN_NAME = "Home"


class Screen(BaseModel):
    id: str
    name: str
    elements: list[DesignElement] = Field(default_factory=list)


def _default_screens() -> list[Screen]:
    return [Screen(id=DEFAULT_SCREEN_ID, name=DEFAULT_SCREEN_NAME)]


class Document(BaseModel):
    screens: list[Screen] = Field(default_factory=_default_screens, min_length=1)
    current_screen_id: str = DEFAULT_SCREEN_ID

    @model_validator(mode="after")
    def _check_current_screen(self) -> "Document":
        if not any(screen.id == self.current_screen_id for screen in self.screens):
            self.current_screen_id = self.screens[0].id
        return self

    def find_screen(self, screen_id: str) -> Screen | None:
        return next((screen for screen in self.screens if screen.id == screen_id), None)

    @property
    def current_screen(self) -> Screen:
        return self.find_screen(self.current_screen_id) or self.screens[0]

    def screen_ids(self) -> Sequence[str]:
        return [screen.id for screen in self.screens]

    class Config:
        json_schema_extra = {
            "example": {
                "screens": [
                    {
                        "id": "screen-1",
                        "name": "Home",
                        "elements": [
                            {
                                "id": "element-1",
                                "type": "button",
                                "x": 10,
                                "y": 20,
                                "width": 120,
                                "height": 40,
                                "properties": {"text": "Go", "navigateTo": "screen-2"},
                            }
                        ],
                    },
                    {"id": "screen-2", "name": "Details", "elements": []},
                ],
                "current_screen_id": "screen-1",
            }
        }


__all__ = ["Document", "Screen", "DEFAULT_SCREEN_ID", "DEFAULT_SCREEN_NAME"]
