from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class ComponentType(str, Enum):
    button = "button"
    text_field = "textField"
    card = "card"
    list = "list"
    icon = "icon"
    container = "container"
    row = "row"
    column = "column"
    stack = "stack"
    switch = "switch"
    checkbox = "checkbox"
    radio = "radio"
    chat_input = "chatInput"
    chat_message = "chatMessage"
    dropdown = "dropdown"
    input_with_label = "inputWithLabel"
    switch_with_label = "switchWithLabel"
    radio_with_label = "radioWithLabel"
    checkbox_with_label = "checkboxWithLabel"
    dynamic_table = "dynamicTable"

    @classmethod
    def parse(cls, value: str) -> "ComponentType | None":
        try:
            return cls(value)
        except ValueError:
            return None


class DesignElement(BaseModel):
    id: str
    type: str
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    children: list[DesignElement] = Field(default_factory=list)

    @model_validator(mode="after")
    def _apply_type_defaults(self) -> "DesignElement":
        from ..dictionaries import resolve_defaults

        defaults = resolve_defaults(self.type)
        if self.width is None:
            self.width = float(defaults.width)
        if self.height is None:
            self.height = float(defaults.height)
        missing = {key: value for key, value in defaults.properties.items() if key not in self.properties}
        if missing:
            self.properties = {**self.properties, **missing}
        return self

    @property
    def component_type(self) -> ComponentType | None:
        return ComponentType.parse(self.type)

    def typed_properties(self):
        """Return the strongly-typed property record, or ``None`` for unknown kinds."""
        from .properties import PROPERTY_MODELS

        component_type = self.component_type
        if component_type is None:
            return None
        return PROPERTY_MODELS[component_type].coerce(self.properties)


__all__ = ["ComponentType", "DesignElement"]
