from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .element import ComponentType

logger = logging.getLogger(__name__)

DEFAULT_DROPDOWN_OPTIONS: tuple[dict[str, str], ...] = (
    {"label": "Option 1", "value": "option1"},
    {"label": "Option 2", "value": "option2"},
    {"label": "Option 3", "value": "option3"},
)

DEFAULT_TABLE_COLUMNS: tuple[dict[str, Any], ...] = (
    {"id": "col1", "title": "Column 1", "width": 100},
    {"id": "col2", "title": "Column 2", "width": 100},
    {"id": "col3", "title": "Column 3", "width": 100},
)


def serialize_list(items: tuple[dict[str, Any], ...]) -> str:
    return json.dumps(list(items), separators=(",", ":"))


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


class ComponentProperties(BaseModel):
    """Typed property record for one component kind.

    Field names are snake_case; the camelCase aliases are the keys used by
    the property editors and the serialized element format.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def coerce(cls, raw: Mapping[str, Any] | None) -> "ComponentProperties":
        """Build a record from a loose mapping, keeping defaults for bad values."""
        values: dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            if not raw or key not in raw:
                continue
            try:
                values[name] = _adapter(field.annotation).validate_python(raw[key])
            except ValidationError:
                logger.debug(
                    "Falling back to default property value",
                    extra={"properties": cls.__name__, "key": key},
                )
        return cls(**values)

    def to_mapping(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ButtonProperties(ComponentProperties):
    text: str = "Button"
    variant: str = "primary"
    rounded: bool = True
    color: str = "#2196F3"
    text_color: str = "#FFFFFF"
    padding: float = 16
    navigate_to: str = ""


class TextFieldProperties(ComponentProperties):
    hint: str = "Enter text"
    label: str = "Label"
    has_icon: bool = False
    icon: str = "search"
    validation: bool = False
    validation_message: str = "Please enter a valid value"


class CardProperties(ComponentProperties):
    elevation: float = 2
    border_radius: float = 8
    color: str = "#FFFFFF"
    padding: float = 16


class ListProperties(ComponentProperties):
    direction: str = "vertical"
    scrollable: bool = True
    item_count: int = 5
    item_height: float = 50


class IconProperties(ComponentProperties):
    name: str = "star"
    color: str = "#000000"
    size: float = 24


class ContainerProperties(ComponentProperties):
    color: str = "#E0E0E0"
    padding: float = 16
    margin: float = 8
    border_radius: float = 0


class FlexProperties(ComponentProperties):
    main_axis_alignment: str = "start"
    cross_axis_alignment: str = "center"
    padding: float = 8


class StackProperties(ComponentProperties):
    alignment: str = "center"
    padding: float = 8


class SwitchProperties(ComponentProperties):
    value: bool = False
    active_color: str = "#2196F3"
    inactive_color: str = "#9E9E9E"


class CheckboxProperties(ComponentProperties):
    value: bool = False
    active_color: str = "#2196F3"


class RadioProperties(ComponentProperties):
    value: bool = False
    active_color: str = "#2196F3"
    group_value: str = "option1"


class ChatInputProperties(ComponentProperties):
    placeholder: str = "Type a message..."
    button_text: str = "Send"
    button_color: str = "#2196F3"


class ChatMessageProperties(ComponentProperties):
    text: str = "Hello! This is a sample message."
    is_user: bool = True
    avatar: bool = True
    timestamp: bool = True


class DropdownProperties(ComponentProperties):
    label: str = "Select an option"
    placeholder: str = "Choose..."
    options: str | list[Any] = serialize_list(DEFAULT_DROPDOWN_OPTIONS)
    value: str = ""
    required: bool = False
    disabled: bool = False
    border_color: str = "#d1d5db"
    background_color: str = "#ffffff"


class InputWithLabelProperties(ComponentProperties):
    label: str = "Input Label"
    placeholder: str = "Enter text..."
    value: str = ""
    type: str = "text"
    required: bool = False
    disabled: bool = False
    border_color: str = "#d1d5db"
    label_color: str = "#374151"


class SwitchWithLabelProperties(ComponentProperties):
    label: str = "Toggle Switch"
    value: bool = False
    active_color: str = "#2196F3"
    inactive_color: str = "#9E9E9E"
    label_position: str = "right"
    disabled: bool = False
    label_color: str = "#374151"


class RadioWithLabelProperties(ComponentProperties):
    label: str = "Radio Option"
    value: bool = False
    active_color: str = "#2196F3"
    group_value: str = "option1"
    label_position: str = "right"
    disabled: bool = False
    label_color: str = "#374151"


class CheckboxWithLabelProperties(ComponentProperties):
    label: str = "Checkbox Option"
    value: bool = False
    active_color: str = "#2196F3"
    label_position: str = "right"
    disabled: bool = False
    label_color: str = "#374151"


class DynamicTableProperties(ComponentProperties):
    title: str = "Data Table"
    columns: str | list[Any] = serialize_list(DEFAULT_TABLE_COLUMNS)
    row_count: int = 3
    show_header: bool = True
    show_border: bool = True
    striped: bool = True
    header_color: str = "#f3f4f6"
    border_color: str = "#e5e7eb"
    even_row_color: str = "#ffffff"
    odd_row_color: str = "#f9fafb"


PROPERTY_MODELS: Mapping[ComponentType, type[ComponentProperties]] = {
    ComponentType.button: ButtonProperties,
    ComponentType.text_field: TextFieldProperties,
    ComponentType.card: CardProperties,
    ComponentType.list: ListProperties,
    ComponentType.icon: IconProperties,
    ComponentType.container: ContainerProperties,
    ComponentType.row: FlexProperties,
    ComponentType.column: FlexProperties,
    ComponentType.stack: StackProperties,
    ComponentType.switch: SwitchProperties,
    ComponentType.checkbox: CheckboxProperties,
    ComponentType.radio: RadioProperties,
    ComponentType.chat_input: ChatInputProperties,
    ComponentType.chat_message: ChatMessageProperties,
    ComponentType.dropdown: DropdownProperties,
    ComponentType.input_with_label: InputWithLabelProperties,
    ComponentType.switch_with_label: SwitchWithLabelProperties,
    ComponentType.radio_with_label: RadioWithLabelProperties,
    ComponentType.checkbox_with_label: CheckboxWithLabelProperties,
    ComponentType.dynamic_table: DynamicTableProperties,
}


def parse_record_list(
    raw: Any,
    *,
    required_keys: tuple[str, ...],
    fallback: tuple[dict[str, Any], ...],
    allow_empty: bool = True,
) -> list[dict[str, Any]]:
    """Decode a structured list property stored as JSON text or a plain list.

    Anything that is not a list of mappings carrying ``required_keys`` yields a
    copy of ``fallback``.
    """
    items = raw
    if isinstance(raw, str):
        try:
            items = json.loads(raw)
        except ValueError:
            return [dict(item) for item in fallback]
    if not isinstance(items, list) or (not items and not allow_empty):
        return [dict(item) for item in fallback]
    if not all(isinstance(item, dict) and all(key in item for key in required_keys) for item in items):
        return [dict(item) for item in fallback]
    return [dict(item) for item in items]


__all__ = [
    "ComponentProperties",
    "PROPERTY_MODELS",
    "DEFAULT_DROPDOWN_OPTIONS",
    "DEFAULT_TABLE_COLUMNS",
    "parse_record_list",
    "serialize_list",
    "ButtonProperties",
    "TextFieldProperties",
    "CardProperties",
    "ListProperties",
    "IconProperties",
    "ContainerProperties",
    "FlexProperties",
    "StackProperties",
    "SwitchProperties",
    "CheckboxProperties",
    "RadioProperties",
    "ChatInputProperties",
    "ChatMessageProperties",
    "DropdownProperties",
    "InputWithLabelProperties",
    "SwitchWithLabelProperties",
    "RadioWithLabelProperties",
    "CheckboxWithLabelProperties",
    "DynamicTableProperties",
]
