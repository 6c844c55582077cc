from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Callable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .models.document import Document, Screen
from .models.element import ComponentType, DesignElement
from .models.properties import (
    DEFAULT_DROPDOWN_OPTIONS,
    DEFAULT_TABLE_COLUMNS,
    ButtonProperties,
    CardProperties,
    ChatInputProperties,
    ChatMessageProperties,
    CheckboxProperties,
    CheckboxWithLabelProperties,
    ComponentProperties,
    ContainerProperties,
    DropdownProperties,
    DynamicTableProperties,
    FlexProperties,
    IconProperties,
    InputWithLabelProperties,
    ListProperties,
    RadioProperties,
    RadioWithLabelProperties,
    StackProperties,
    SwitchProperties,
    SwitchWithLabelProperties,
    TextFieldProperties,
    parse_record_list,
)

logger = logging.getLogger(__name__)

APP_TITLE = "Flutter UI App"
HOME_PAGE_CLASS = "MyHomePage"
EMPTY_PLACEHOLDER = "// No elements added yet"
FALLBACK_COLOR = "0xFF000000"
FALLBACK_WIDGET = "Container()"

_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")
_DART_IDENTIFIER = re.compile(r"^[a-z_][a-zA-Z0-9_]*$")
_TENTH = Decimal("0.1")
# wide enough for any finite float
_FIXED_CONTEXT = Context(prec=400)

DARK_THEME = """brightness: Brightness.dark,
primarySwatch: Colors.blue,
scaffoldBackgroundColor: const Color(0xFF121212),
appBarTheme: const AppBarTheme(
  backgroundColor: Color(0xFF1E1E1E),
  elevation: 0,
),"""

LIGHT_THEME = """brightness: Brightness.light,
primarySwatch: Colors.blue,
scaffoldBackgroundColor: Colors.white,
appBarTheme: const AppBarTheme(
  backgroundColor: Colors.white,
  foregroundColor: Colors.black,
  elevation: 0,
),"""

MAIN_AXIS_ALIGNMENTS: Mapping[str, str] = {
    "start": "MainAxisAlignment.start",
    "center": "MainAxisAlignment.center",
    "end": "MainAxisAlignment.end",
    "spaceBetween": "MainAxisAlignment.spaceBetween",
    "spaceAround": "MainAxisAlignment.spaceAround",
    "spaceEvenly": "MainAxisAlignment.spaceEvenly",
}

CROSS_AXIS_ALIGNMENTS: Mapping[str, str] = {
    "start": "CrossAxisAlignment.start",
    "center": "CrossAxisAlignment.center",
    "end": "CrossAxisAlignment.end",
    "stretch": "CrossAxisAlignment.stretch",
}

STACK_ALIGNMENTS: Mapping[str, str] = {
    "topLeft": "Alignment.topLeft",
    "topCenter": "Alignment.topCenter",
    "topRight": "Alignment.topRight",
    "centerLeft": "Alignment.centerLeft",
    "center": "Alignment.center",
    "centerRight": "Alignment.centerRight",
    "bottomLeft": "Alignment.bottomLeft",
    "bottomCenter": "Alignment.bottomCenter",
    "bottomRight": "Alignment.bottomRight",
}

LIST_AXES: Mapping[str, str] = {
    "vertical": "Axis.vertical",
    "horizontal": "Axis.horizontal",
}

BUTTON_STYLES: Mapping[str, str] = {
    "primary": "ElevatedButton",
    "outline": "OutlinedButton",
}

LABEL_POSITIONS: Mapping[str, str] = {
    "left": "left",
    "right": "right",
}

KEYBOARD_TYPES: Mapping[str, str] = {
    "text": "TextInputType.text",
    "email": "TextInputType.emailAddress",
    "number": "TextInputType.number",
    "tel": "TextInputType.phone",
    "url": "TextInputType.url",
    "password": "TextInputType.visiblePassword",
}


def hex_to_argb(value: Any) -> str:
    """Convert ``#RRGGBB`` into an opaque Flutter color literal.

    Anything else, including short forms and named colors, maps to opaque black.
    """
    if not isinstance(value, str):
        return FALLBACK_COLOR
    match = _HEX_COLOR.fullmatch(value)
    if not match:
        return FALLBACK_COLOR
    red, green, blue = (int(part, 16) for part in match.groups())
    return f"0xFF{red:02x}{green:02x}{blue:02x}"


def map_enum(table: Mapping[str, str], value: Any, default: str) -> str:
    if isinstance(value, str) and value in table:
        return table[value]
    return default


def dart_string(value: Any) -> str:
    text = "" if value is None else str(value)
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def fixed(value: Any) -> str:
    """One decimal place, ties rounded away from zero."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 0.0
    if not math.isfinite(number):
        number = 0.0
    return str(Decimal(number).quantize(_TENTH, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT))


def icon_name(value: Any, default: str) -> str:
    if isinstance(value, str) and _DART_IDENTIFIER.match(value):
        return value
    return default


def to_pascal_case(name: str) -> str:
    words = re.split(r"[^0-9A-Za-z]+", name)
    pascal = "".join(word[:1].upper() + word[1:] for word in words if word)
    if not pascal or pascal[0].isdigit():
        pascal = f"Screen{pascal}"
    return pascal


def _indent(code: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line if line else line for line in code.splitlines())


def _field(name: str, code: str, spaces: int = 2) -> str:
    """Render ``name: code,`` with continuation lines indented under the field."""
    first, *rest = code.splitlines()
    pad = " " * spaces
    lines = [f"{pad}{name}: {first}", *(pad + line for line in rest)]
    lines[-1] += ","
    return "\n".join(lines)


def _items(widgets: Sequence[str], spaces: int) -> list[str]:
    return [_indent(widget, spaces) + "," for widget in widgets]


def _call(widget: str, *args: str) -> str:
    return "\n".join([f"{widget}(", *args, ")"])


class GenerationOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dark_mode: bool = Field(default=False, alias="darkMode")


@dataclass
class RenderContext:
    """Per-run state: named routes exist only when a whole document is exported."""

    routes: Mapping[str, str] = field(default_factory=dict)


Builder = Callable[[Any, RenderContext], str]


class FlutterCodeGenerator:
    def __init__(self, *, app_title: str = APP_TITLE) -> None:
        self._app_title = app_title
        self._builders: dict[ComponentType, tuple[type[ComponentProperties], Builder]] = {
            ComponentType.button: (ButtonProperties, self._build_button),
            ComponentType.text_field: (TextFieldProperties, self._build_text_field),
            ComponentType.card: (CardProperties, self._build_card),
            ComponentType.list: (ListProperties, self._build_list),
            ComponentType.icon: (IconProperties, self._build_icon),
            ComponentType.container: (ContainerProperties, self._build_container),
            ComponentType.row: (FlexProperties, self._build_row),
            ComponentType.column: (FlexProperties, self._build_column),
            ComponentType.stack: (StackProperties, self._build_stack),
            ComponentType.switch: (SwitchProperties, self._build_switch),
            ComponentType.checkbox: (CheckboxProperties, self._build_checkbox),
            ComponentType.radio: (RadioProperties, self._build_radio),
            ComponentType.chat_input: (ChatInputProperties, self._build_chat_input),
            ComponentType.chat_message: (ChatMessageProperties, self._build_chat_message),
            ComponentType.dropdown: (DropdownProperties, self._build_dropdown),
            ComponentType.input_with_label: (InputWithLabelProperties, self._build_input_with_label),
            ComponentType.switch_with_label: (SwitchWithLabelProperties, self._build_switch_with_label),
            ComponentType.radio_with_label: (RadioWithLabelProperties, self._build_radio_with_label),
            ComponentType.checkbox_with_label: (
                CheckboxWithLabelProperties,
                self._build_checkbox_with_label,
            ),
            ComponentType.dynamic_table: (DynamicTableProperties, self._build_dynamic_table),
        }

    def generate(
        self,
        source: Document | Sequence[DesignElement | Mapping[str, Any]],
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Render a screen's elements, or a whole document, as one Dart file."""
        resolved = self._resolve_options(options)
        if isinstance(source, Document):
            return self.generate_document(source, resolved)
        elements = [
            item if isinstance(item, DesignElement) else DesignElement.model_validate(item)
            for item in source
        ]
        return self.generate_screen(elements, resolved)

    def generate_screen(self, elements: Sequence[DesignElement], options: GenerationOptions) -> str:
        page = self._render_page(HOME_PAGE_CLASS, self._app_title, elements, RenderContext())
        code = self._render_app(options, home_class=HOME_PAGE_CLASS, routes={}, pages=[page])
        logger.info(
            "Generated Flutter screen",
            extra={"element_count": len(elements), "dark_mode": options.dark_mode},
        )
        return code

    def generate_document(self, document: Document, options: GenerationOptions) -> str:
        class_names = self._page_class_names(document.screens)
        routes = {screen.id: f"/{screen.id}" for screen in document.screens}
        context = RenderContext(routes=routes)
        pages = [
            self._render_page(class_names[screen.id], screen.name, screen.elements, context)
            for screen in document.screens
        ]
        code = self._render_app(
            options,
            home_class=class_names[document.screens[0].id],
            routes={routes[screen.id]: class_names[screen.id] for screen in document.screens},
            pages=pages,
        )
        logger.info(
            "Generated Flutter document",
            extra={
                "screen_count": len(document.screens),
                "element_count": sum(len(screen.elements) for screen in document.screens),
                "dark_mode": options.dark_mode,
            },
        )
        return code

    def build_widget(self, element: DesignElement, context: RenderContext | None = None) -> str:
        component_type = element.component_type
        entry = self._builders.get(component_type) if component_type is not None else None
        if entry is None:
            return FALLBACK_WIDGET
        properties_model, builder = entry
        return builder(properties_model.coerce(element.properties), context or RenderContext())

    def _resolve_options(self, options: GenerationOptions | Mapping[str, Any] | None) -> GenerationOptions:
        if options is None:
            return GenerationOptions()
        if isinstance(options, GenerationOptions):
            return options
        return GenerationOptions.model_validate(dict(options))

    def _page_class_names(self, screens: Sequence[Screen]) -> dict[str, str]:
        used: set[str] = {"MyApp"}
        names: dict[str, str] = {}
        for screen in screens:
            base = f"{to_pascal_case(screen.name)}Page"
            candidate = base
            suffix = 2
            while candidate in used:
                candidate = f"{base}{suffix}"
                suffix += 1
            used.add(candidate)
            names[screen.id] = candidate
        return names

    def _render_app(
        self,
        options: GenerationOptions,
        *,
        home_class: str,
        routes: Mapping[str, str],
        pages: Sequence[str],
    ) -> str:
        theme = _indent(DARK_THEME if options.dark_mode else LIGHT_THEME, 8)
        route_block = ""
        if routes:
            route_lines = "\n".join(
                f"        {dart_string(path)}: (context) => const {class_name}(),"
                for path, class_name in routes.items()
            )
            route_block = f"\n      routes: {{\n{route_lines}\n      }},"
        shell = f"""import 'package:flutter/material.dart';
import 'package:flutter/cupertino.dart';

void main() {{
  runApp(const MyApp());
}}

class MyApp extends StatelessWidget {{
  const MyApp({{Key? key}}) : super(key: key);

  @override
  Widget build(BuildContext context) {{
    return MaterialApp(
      title: {dart_string(self._app_title)},
      debugShowCheckedModeBanner: false,
      theme: ThemeData(
{theme}
      ),
      home: const {home_class}(),{route_block}
    );
  }}
}}
"""
        return "\n".join([shell, *pages])

    def _render_page(
        self,
        class_name: str,
        title: str,
        elements: Sequence[DesignElement],
        context: RenderContext,
    ) -> str:
        if elements:
            body = "\n".join(_indent(self._positioned(element, context), 10) for element in elements)
        else:
            body = _indent(EMPTY_PLACEHOLDER, 10)
        return f"""class {class_name} extends StatefulWidget {{
  const {class_name}({{Key? key}}) : super(key: key);

  @override
  State<{class_name}> createState() => _{class_name}State();
}}

class _{class_name}State extends State<{class_name}> {{
  @override
  Widget build(BuildContext context) {{
    return Scaffold(
      appBar: AppBar(
        title: const Text({dart_string(title)}),
      ),
      body: Stack(
        children: [
{body}
        ],
      ),
    );
  }}
}}
"""

    def _positioned(self, element: DesignElement, context: RenderContext) -> str:
        return "\n".join(
            [
                "Positioned(",
                f"  left: {fixed(element.x)},",
                f"  top: {fixed(element.y)},",
                f"  width: {fixed(element.width)},",
                f"  height: {fixed(element.height)},",
                _field("child", self.build_widget(element, context)),
                "),",
            ]
        )

    def _shape(self, rounded: bool) -> str:
        if rounded:
            return "const StadiumBorder()"
        return "RoundedRectangleBorder(borderRadius: BorderRadius.circular(8.0))"

    def _build_button(self, props: ButtonProperties, context: RenderContext) -> str:
        route = context.routes.get(props.navigate_to) if props.navigate_to else None
        on_pressed = f"() => Navigator.pushNamed(context, {dart_string(route)})" if route else "() {}"
        widget = map_enum(BUTTON_STYLES, props.variant, "ElevatedButton")
        color = hex_to_argb(props.color)
        if widget == "OutlinedButton":
            return f"""OutlinedButton(
  onPressed: {on_pressed},
  style: OutlinedButton.styleFrom(
    foregroundColor: Color({color}),
    side: BorderSide(color: Color({color})),
    shape: {self._shape(props.rounded)},
    padding: EdgeInsets.all({fixed(props.padding)}),
  ),
  child: Text(
    {dart_string(props.text)},
    style: TextStyle(color: Color({color})),
  ),
)"""
        return f"""ElevatedButton(
  onPressed: {on_pressed},
  style: ElevatedButton.styleFrom(
    backgroundColor: Color({color}),
    foregroundColor: Color({hex_to_argb(props.text_color)}),
    shape: {self._shape(props.rounded)},
    padding: EdgeInsets.all({fixed(props.padding)}),
  ),
  child: Text({dart_string(props.text)}),
)"""

    def _build_text_field(self, props: TextFieldProperties, context: RenderContext) -> str:
        decoration = [
            f"    labelText: {dart_string(props.label)},",
            f"    hintText: {dart_string(props.hint)},",
        ]
        if props.has_icon:
            decoration.append(f"    prefixIcon: const Icon(Icons.{icon_name(props.icon, 'search')}),")
        if props.validation:
            decoration.append(f"    errorText: {dart_string(props.validation_message)},")
        decoration += [
            "    border: OutlineInputBorder(",
            "      borderRadius: BorderRadius.circular(8.0),",
            "    ),",
        ]
        return _call("TextField", "  decoration: InputDecoration(", *decoration, "  ),")

    def _build_card(self, props: CardProperties, context: RenderContext) -> str:
        return f"""Card(
  elevation: {fixed(props.elevation)},
  color: Color({hex_to_argb(props.color)}),
  shape: RoundedRectangleBorder(
    borderRadius: BorderRadius.circular({fixed(props.border_radius)}),
  ),
  child: Padding(
    padding: EdgeInsets.all({fixed(props.padding)}),
    child: Column(
      crossAxisAlignment: CrossAxisAlignment.start,
      children: [
        Container(
          height: 20.0,
          width: 150.0,
          color: Colors.grey.shade300,
        ),
        const SizedBox(height: 8.0),
        Container(
          height: 12.0,
          width: 100.0,
          color: Colors.grey.shade300,
        ),
        const SizedBox(height: 16.0),
        Container(
          height: 100.0,
          color: Colors.grey.shade300,
        ),
      ],
    ),
  ),
)"""

    def _build_list(self, props: ListProperties, context: RenderContext) -> str:
        axis = map_enum(LIST_AXES, props.direction, "Axis.vertical")
        item_count = max(0, props.item_count)
        physics = "" if props.scrollable else "\n  physics: const NeverScrollableScrollPhysics(),"
        if axis == "Axis.horizontal":
            return f"""SizedBox(
  height: {fixed(props.item_height)},
  child: ListView.builder(
    scrollDirection: Axis.horizontal,{_indent(physics, 2) if physics else ""}
    itemCount: {item_count},
    itemBuilder: (context, index) {{
      return Container(
        width: 150.0,
        margin: const EdgeInsets.only(right: 8.0),
        decoration: BoxDecoration(
          color: Colors.grey.shade200,
          borderRadius: BorderRadius.circular(8.0),
        ),
        child: Row(
          children: [
            const SizedBox(width: 8.0),
            Container(
              width: 24.0,
              height: 24.0,
              decoration: const BoxDecoration(
                color: Colors.grey,
                shape: BoxShape.circle,
              ),
            ),
            const SizedBox(width: 8.0),
            Container(
              width: 80.0,
              height: 16.0,
              color: Colors.grey.shade300,
            ),
          ],
        ),
      );
    }},
  ),
)"""
        return f"""ListView.builder(
  itemCount: {item_count},{physics}
  itemBuilder: (context, index) {{
    return Container(
      height: {fixed(props.item_height)},
      margin: const EdgeInsets.only(bottom: 8.0),
      decoration: BoxDecoration(
        color: Colors.grey.shade200,
        borderRadius: BorderRadius.circular(8.0),
      ),
      child: Row(
        children: [
          const SizedBox(width: 16.0),
          Container(
            width: 24.0,
            height: 24.0,
            decoration: const BoxDecoration(
              color: Colors.grey,
              shape: BoxShape.circle,
            ),
          ),
          const SizedBox(width: 16.0),
          Container(
            width: 120.0,
            height: 16.0,
            color: Colors.grey.shade300,
          ),
        ],
      ),
    );
  }},
)"""

    def _build_icon(self, props: IconProperties, context: RenderContext) -> str:
        return f"""Icon(
  Icons.{icon_name(props.name, "star")},
  color: Color({hex_to_argb(props.color)}),
  size: {fixed(props.size)},
)"""

    def _build_container(self, props: ContainerProperties, context: RenderContext) -> str:
        return f"""Container(
  padding: EdgeInsets.all({fixed(props.padding)}),
  margin: EdgeInsets.all({fixed(props.margin)}),
  decoration: BoxDecoration(
    color: Color({hex_to_argb(props.color)}),
    borderRadius: BorderRadius.circular({fixed(props.border_radius)}),
  ),
)"""

    def _build_flex(self, widget: str, props: FlexProperties, placeholder: str, gap: str) -> str:
        main_axis = map_enum(MAIN_AXIS_ALIGNMENTS, props.main_axis_alignment, "MainAxisAlignment.start")
        cross_axis = map_enum(CROSS_AXIS_ALIGNMENTS, props.cross_axis_alignment, "CrossAxisAlignment.start")
        children = _items([placeholder, gap, placeholder, gap, placeholder], 6)
        return "\n".join(
            [
                "Padding(",
                f"  padding: EdgeInsets.all({fixed(props.padding)}),",
                f"  child: {widget}(",
                f"    mainAxisAlignment: {main_axis},",
                f"    crossAxisAlignment: {cross_axis},",
                "    children: [",
                *children,
                "    ],",
                "  ),",
                ")",
            ]
        )

    def _build_row(self, props: FlexProperties, context: RenderContext) -> str:
        placeholder = "Container(\n  width: 30.0,\n  height: 30.0,\n  color: Colors.grey.shade300,\n)"
        return self._build_flex("Row", props, placeholder, "const SizedBox(width: 8.0)")

    def _build_column(self, props: FlexProperties, context: RenderContext) -> str:
        placeholder = "Container(\n  width: 100.0,\n  height: 30.0,\n  color: Colors.grey.shade300,\n)"
        return self._build_flex("Column", props, placeholder, "const SizedBox(height: 8.0)")

    def _build_stack(self, props: StackProperties, context: RenderContext) -> str:
        alignment = map_enum(STACK_ALIGNMENTS, props.alignment, "Alignment.topLeft")
        return f"""Padding(
  padding: EdgeInsets.all({fixed(props.padding)}),
  child: Stack(
    alignment: {alignment},
    children: [
      Container(
        width: 60.0,
        height: 60.0,
        color: Colors.grey.shade200,
      ),
      Container(
        width: 40.0,
        height: 40.0,
        color: Colors.grey.shade300,
      ),
    ],
  ),
)"""

    def _switch(self, value: bool, active: str, inactive: str, disabled: bool = False) -> str:
        return f"""Switch(
  value: {_bool(value)},
  activeColor: Color({hex_to_argb(active)}),
  inactiveTrackColor: Color({hex_to_argb(inactive)}),
  onChanged: {_on_changed(disabled)},
)"""

    def _checkbox(self, value: bool, active: str, disabled: bool = False) -> str:
        return f"""Checkbox(
  value: {_bool(value)},
  activeColor: Color({hex_to_argb(active)}),
  onChanged: {_on_changed(disabled)},
)"""

    def _radio(self, value: bool, active: str, group_value: str, disabled: bool = False) -> str:
        return f"""Radio<String>(
  value: {dart_string("option1" if value else "option2")},
  groupValue: {dart_string(group_value)},
  activeColor: Color({hex_to_argb(active)}),
  onChanged: {_on_changed(disabled)},
)"""

    def _build_switch(self, props: SwitchProperties, context: RenderContext) -> str:
        return self._switch(props.value, props.active_color, props.inactive_color)

    def _build_checkbox(self, props: CheckboxProperties, context: RenderContext) -> str:
        return self._checkbox(props.value, props.active_color)

    def _build_radio(self, props: RadioProperties, context: RenderContext) -> str:
        return self._radio(props.value, props.active_color, props.group_value)

    def _build_chat_input(self, props: ChatInputProperties, context: RenderContext) -> str:
        placeholder = props.placeholder or "Type a message..."
        button_text = props.button_text or "Send"
        return f"""Row(
  children: [
    Expanded(
      child: TextField(
        decoration: InputDecoration(
          hintText: {dart_string(placeholder)},
          border: OutlineInputBorder(
            borderRadius: BorderRadius.circular(8.0),
          ),
        ),
      ),
    ),
    const SizedBox(width: 8.0),
    ElevatedButton(
      onPressed: () {{}},
      style: ElevatedButton.styleFrom(
        backgroundColor: Color({hex_to_argb(props.button_color)}),
        foregroundColor: Colors.white,
      ),
      child: Text({dart_string(button_text)}),
    ),
  ],
)"""

    def _build_chat_message(self, props: ChatMessageProperties, context: RenderContext) -> str:
        text = props.text or "This is a sample message"
        if props.is_user:
            bubble_color, text_color, side = "Colors.blue", "Colors.white", "end"
        else:
            bubble_color, text_color, side = "Colors.grey.shade200", "Colors.black87", "start"
        bubble = [
            f"""Container(
  padding: const EdgeInsets.all(12.0),
  decoration: BoxDecoration(
    color: {bubble_color},
    borderRadius: BorderRadius.circular(12.0),
  ),
  child: Text(
    {dart_string(text)},
    style: TextStyle(color: {text_color}),
  ),
)"""
        ]
        if props.timestamp:
            bubble += [
                "const SizedBox(height: 4.0)",
                "Text(\n  '12:34 PM',\n  style: TextStyle(fontSize: 12.0, color: Colors.grey),\n)",
            ]
        message = "\n".join(
            [
                "Flexible(",
                "  child: Column(",
                f"    crossAxisAlignment: CrossAxisAlignment.{side},",
                "    children: [",
                *_items(bubble, 6),
                "    ],",
                "  ),",
                ")",
            ]
        )
        children = [message]
        if props.avatar:
            shade = "Colors.blue.shade200" if props.is_user else "Colors.grey.shade300"
            avatar = f"CircleAvatar(\n  radius: 16.0,\n  backgroundColor: {shade},\n)"
            gap = "const SizedBox(width: 8.0)"
            children = [message, gap, avatar] if props.is_user else [avatar, gap, message]
        return _call(
            "Row",
            f"  mainAxisAlignment: MainAxisAlignment.{side},",
            "  crossAxisAlignment: CrossAxisAlignment.start,",
            "  children: [",
            *_items(children, 4),
            "  ],",
        )

    def _field_label(self, label: str, required: bool, color: str | None = None) -> str:
        text = f"{label} *" if required else label
        if color is None:
            return f"Text({dart_string(text)})"
        return f"""Text(
  {dart_string(text)},
  style: TextStyle(
    color: Color({hex_to_argb(color)}),
    fontWeight: FontWeight.w500,
  ),
)"""

    def _build_dropdown(self, props: DropdownProperties, context: RenderContext) -> str:
        options = parse_record_list(
            props.options,
            required_keys=("label", "value"),
            fallback=DEFAULT_DROPDOWN_OPTIONS,
        )
        values = [str(option["value"]) for option in options]
        selected = dart_string(props.value) if props.value in values else "null"
        items = [
            f"DropdownMenuItem(value: {dart_string(option['value'])}, child: Text({dart_string(option['label'])}))"
            for option in options
        ]
        dropdown = "\n".join(
            [
                "DropdownButtonFormField<String>(",
                f"  value: {selected},",
                f"  hint: Text({dart_string(props.placeholder)}),",
                "  decoration: InputDecoration(",
                "    filled: true,",
                f"    fillColor: Color({hex_to_argb(props.background_color)}),",
                "    border: OutlineInputBorder(",
                "      borderRadius: BorderRadius.circular(6.0),",
                f"      borderSide: BorderSide(color: Color({hex_to_argb(props.border_color)})),",
                "    ),",
                "  ),",
                "  items: [",
                *_items(items, 4),
                "  ],",
                f"  onChanged: {_on_changed(props.disabled)},",
                ")",
            ]
        )
        children = [dropdown]
        if props.label:
            children = [self._field_label(props.label, props.required), "const SizedBox(height: 4.0)", dropdown]
        return _call(
            "Column",
            "  crossAxisAlignment: CrossAxisAlignment.start,",
            "  children: [",
            *_items(children, 4),
            "  ],",
        )

    def _build_input_with_label(self, props: InputWithLabelProperties, context: RenderContext) -> str:
        args: list[str] = []
        if props.value:
            args.append(f"  initialValue: {dart_string(props.value)},")
        if props.disabled:
            args.append("  enabled: false,")
        if props.type == "password":
            args.append("  obscureText: true,")
        args += [
            f"  keyboardType: {map_enum(KEYBOARD_TYPES, props.type, 'TextInputType.text')},",
            "  decoration: InputDecoration(",
            f"    hintText: {dart_string(props.placeholder or 'Enter text...')},",
            "    border: OutlineInputBorder(",
            f"      borderSide: BorderSide(color: Color({hex_to_argb(props.border_color)})),",
            "    ),",
            "  ),",
        ]
        field_code = _call("TextFormField", *args)
        label = self._field_label(props.label or "Label", props.required, props.label_color)
        return _call(
            "Column",
            "  crossAxisAlignment: CrossAxisAlignment.start,",
            "  children: [",
            *_items([label, "const SizedBox(height: 4.0)", field_code], 4),
            "  ],",
        )

    def _labeled(self, control: str, label: str, color: str, position: str) -> str:
        text = f"Text(\n  {dart_string(label)},\n  style: TextStyle(color: Color({hex_to_argb(color)})),\n)"
        if map_enum(LABEL_POSITIONS, position, "left") == "left":
            children = [text, "const SizedBox(width: 12.0)", control]
        else:
            children = [control, "const SizedBox(width: 12.0)", text]
        return _call("Row", "  children: [", *_items(children, 4), "  ],")

    def _build_switch_with_label(self, props: SwitchWithLabelProperties, context: RenderContext) -> str:
        control = self._switch(props.value, props.active_color, props.inactive_color, props.disabled)
        return self._labeled(control, props.label or "Label", props.label_color, props.label_position)

    def _build_radio_with_label(self, props: RadioWithLabelProperties, context: RenderContext) -> str:
        control = self._radio(props.value, props.active_color, props.group_value, props.disabled)
        return self._labeled(control, props.label or "Radio option", props.label_color, props.label_position)

    def _build_checkbox_with_label(self, props: CheckboxWithLabelProperties, context: RenderContext) -> str:
        control = self._checkbox(props.value, props.active_color, props.disabled)
        return self._labeled(control, props.label or "Checkbox option", props.label_color, props.label_position)

    def _build_dynamic_table(self, props: DynamicTableProperties, context: RenderContext) -> str:
        columns = parse_record_list(
            props.columns,
            required_keys=("id", "title"),
            fallback=DEFAULT_TABLE_COLUMNS,
            allow_empty=False,
        )
        widths = [
            f"{index}: FixedColumnWidth({fixed(_column_width(column))}),"
            for index, column in enumerate(columns)
        ]
        rows: list[str] = []
        if props.show_header:
            header_cells = [
                f"Padding(padding: EdgeInsets.all(8.0), child: Text({dart_string(column['title'])}, "
                "style: TextStyle(fontWeight: FontWeight.w500)))"
                for column in columns
            ]
            rows.append(_table_row(header_cells, hex_to_argb(props.header_color)))
        for row_index in range(max(0, props.row_count)):
            cells = [
                f"Padding(padding: EdgeInsets.all(8.0), child: Text('Cell {row_index + 1}-{column_index + 1}'))"
                for column_index in range(len(columns))
            ]
            color = None
            if props.striped:
                color = hex_to_argb(props.even_row_color if row_index % 2 == 0 else props.odd_row_color)
            rows.append(_table_row(cells, color))

        table_args: list[str] = []
        if props.show_border:
            table_args.append(f"  border: TableBorder.all(color: Color({hex_to_argb(props.border_color)})),")
        table_args += [
            "  columnWidths: const <int, TableColumnWidth>{",
            *(f"    {line}" for line in widths),
            "  },",
            "  children: [",
            *_items(rows, 4),
            "  ],",
        ]
        table = _call("Table", *table_args)
        scroll = "\n".join(
            [
                "Expanded(",
                "  child: SingleChildScrollView(",
                _field("child", table, 4),
                "  ),",
                ")",
            ]
        )
        children = [scroll]
        if props.title:
            title = f"""Padding(
  padding: const EdgeInsets.symmetric(horizontal: 12.0, vertical: 8.0),
  child: Text(
    {dart_string(props.title)},
    style: const TextStyle(fontWeight: FontWeight.w500),
  ),
)"""
            children = [title, scroll]
        return _call(
            "Column",
            "  crossAxisAlignment: CrossAxisAlignment.start,",
            "  children: [",
            *_items(children, 4),
            "  ],",
        )


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _on_changed(disabled: bool) -> str:
    return "null" if disabled else "(value) {}"


def _column_width(column: Mapping[str, Any]) -> float:
    width = column.get("width")
    if isinstance(width, bool) or not isinstance(width, (int, float)) or width <= 0:
        return 100.0
    return float(width)


def _table_row(cells: Sequence[str], color: str | None) -> str:
    lines = ["TableRow("]
    if color is not None:
        lines.append(f"  decoration: BoxDecoration(color: Color({color})),")
    lines += ["  children: [", *_items(cells, 4), "  ],", ")"]
    return "\n".join(lines)


def generate_flutter_code(
    source: Document | Sequence[DesignElement | Mapping[str, Any]],
    options: GenerationOptions | Mapping[str, Any] | None = None,
) -> str:
    return FlutterCodeGenerator().generate(source, options)


__all__ = [
    "FlutterCodeGenerator",
    "GenerationOptions",
    "RenderContext",
    "generate_flutter_code",
    "hex_to_argb",
    "map_enum",
    "dart_string",
    "fixed",
]
