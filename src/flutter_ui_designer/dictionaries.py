from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .models.element import ComponentType
from .models.properties import PROPERTY_MODELS

FALLBACK_WIDTH = 100
FALLBACK_HEIGHT = 50


@dataclass(frozen=True)
class ComponentDefaults:
    width: float
    height: float
    properties: Mapping[str, Any] = field(default_factory=dict)


DEFAULT_SIZES: Mapping[ComponentType, tuple[int, int]] = {
    ComponentType.button: (120, 40),
    ComponentType.text_field: (200, 56),
    ComponentType.card: (300, 200),
    ComponentType.list: (300, 300),
    ComponentType.icon: (24, 24),
    ComponentType.container: (200, 200),
    ComponentType.row: (300, 50),
    ComponentType.column: (200, 200),
    ComponentType.stack: (200, 200),
    ComponentType.switch: (60, 24),
    ComponentType.checkbox: (24, 24),
    ComponentType.radio: (24, 24),
    ComponentType.chat_input: (300, 50),
    ComponentType.chat_message: (250, 80),
    ComponentType.dropdown: (200, 70),
    ComponentType.input_with_label: (200, 70),
    ComponentType.switch_with_label: (200, 40),
    ComponentType.radio_with_label: (200, 40),
    ComponentType.checkbox_with_label: (200, 40),
    ComponentType.dynamic_table: (350, 200),
}


DEFAULT_COMPONENTS: Mapping[ComponentType, ComponentDefaults] = {
    component_type: ComponentDefaults(
        width=width,
        height=height,
        properties=PROPERTY_MODELS[component_type]().to_mapping(),
    )
    for component_type, (width, height) in DEFAULT_SIZES.items()
}


def resolve_defaults(component_type: str | ComponentType) -> ComponentDefaults:
    """Default size and properties for a component kind.

    Unknown kinds resolve to a 100x50 box with no properties. The returned
    property mapping is a fresh copy each time.
    """
    known = ComponentType.parse(component_type) if isinstance(component_type, str) else component_type
    definition = DEFAULT_COMPONENTS.get(known) if known is not None else None
    if definition is None:
        return ComponentDefaults(width=FALLBACK_WIDTH, height=FALLBACK_HEIGHT, properties={})
    return ComponentDefaults(
        width=definition.width,
        height=definition.height,
        properties=dict(definition.properties),
    )


__all__ = [
    "ComponentDefaults",
    "DEFAULT_COMPONENTS",
    "DEFAULT_SIZES",
    "FALLBACK_HEIGHT",
    "FALLBACK_WIDTH",
    "resolve_defaults",
]
