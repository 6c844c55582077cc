from flutter_ui_designer.generator import (
    EMPTY_PLACEHOLDER,
    FALLBACK_COLOR,
    FlutterCodeGenerator,
    GenerationOptions,
    dart_string,
    fixed,
    generate_flutter_code,
    hex_to_argb,
    to_pascal_case,
)
from flutter_ui_designer.models.document import Document, Screen
from flutter_ui_designer.models.element import DesignElement


def _element(type_, properties=None, **geometry):
    return DesignElement(id=f"el-{type_}", type=type_, properties=properties or {}, **geometry)


def test_empty_screen_emits_placeholder_only():
    code = generate_flutter_code([], {"darkMode": False})

    assert EMPTY_PLACEHOLDER in code
    assert "Positioned(" not in code
    assert "class MyHomePage extends StatefulWidget" in code
    assert "Brightness.light" in code


def test_button_is_positioned_and_themed_dark():
    element = {
        "id": "el-1",
        "type": "button",
        "x": 10,
        "y": 20,
        "width": 120,
        "height": 40,
        "properties": {
            "text": "Go",
            "variant": "primary",
            "rounded": True,
            "color": "#2196F3",
            "textColor": "#FFFFFF",
            "padding": 16,
        },
    }
    code = generate_flutter_code([element], GenerationOptions(dark_mode=True))

    assert "left: 10.0,\n" in code
    assert "top: 20.0,\n" in code
    assert "width: 120.0,\n" in code
    assert "height: 40.0,\n" in code
    assert "brightness: Brightness.dark," in code
    assert "scaffoldBackgroundColor: const Color(0xFF121212)," in code
    assert "backgroundColor: Color(0xFF1E1E1E)," in code
    assert "backgroundColor: Color(0xFF2196f3)," in code
    assert "foregroundColor: Color(0xFFffffff)," in code
    assert "shape: const StadiumBorder()," in code
    assert "padding: EdgeInsets.all(16.0)," in code
    assert "child: Text('Go')," in code
    assert "onPressed: () {}," in code


def test_light_theme_block():
    code = generate_flutter_code([], {"dark_mode": False})

    assert "scaffoldBackgroundColor: Colors.white," in code
    assert "foregroundColor: Colors.black," in code
    assert "Brightness.dark" not in code


def test_elements_are_emitted_in_array_order():
    first = DesignElement(id="a", type="button", properties={"text": "First"})
    second = DesignElement(id="b", type="button", properties={"text": "Second"})

    code = generate_flutter_code([first, second])

    assert code.count("Positioned(") == 2
    assert code.index("Text('First')") < code.index("Text('Second')")


def test_hex_to_argb_conversion():
    assert hex_to_argb("#2196F3") == "0xFF2196f3"
    assert hex_to_argb("#abcdef") == "0xFFabcdef"
    assert hex_to_argb("#000000") == "0xFF000000"


def test_hex_to_argb_falls_back_to_opaque_black():
    for value in ("blue", "#fff", "#1234567", "2196F3", "#GGGGGG", "#2196F3\n", "", None, 123):
        assert hex_to_argb(value) == FALLBACK_COLOR


def test_outline_button_uses_border_color():
    code = FlutterCodeGenerator().build_widget(
        _element("button", {"variant": "outline", "color": "#FF0000", "rounded": False})
    )

    assert code.startswith("OutlinedButton(")
    assert "side: BorderSide(color: Color(0xFFff0000))," in code
    assert "RoundedRectangleBorder(borderRadius: BorderRadius.circular(8.0))" in code


def test_malformed_properties_fall_back_to_defaults():
    code = FlutterCodeGenerator().build_widget(
        _element("button", {"padding": "wide", "color": "blue", "variant": "sparkly"})
    )

    assert code.startswith("ElevatedButton(")
    assert "padding: EdgeInsets.all(16.0)," in code
    assert "backgroundColor: Color(0xFF000000)," in code


def test_unknown_type_emits_empty_container():
    code = generate_flutter_code([_element("spinner", x=1, y=2)])

    assert "child: Container()," in code
    assert "width: 100.0," in code


def test_flex_alignment_tables_default_to_start():
    generator = FlutterCodeGenerator()

    row = generator.build_widget(_element("row", {"mainAxisAlignment": "diagonal", "crossAxisAlignment": "sideways"}))
    column = generator.build_widget(_element("column", {"mainAxisAlignment": "spaceEvenly"}))

    assert "child: Row(" in row
    assert "mainAxisAlignment: MainAxisAlignment.start," in row
    assert "crossAxisAlignment: CrossAxisAlignment.start," in row
    assert "mainAxisAlignment: MainAxisAlignment.spaceEvenly," in column
    assert "crossAxisAlignment: CrossAxisAlignment.center," in column


def test_stack_alignment_defaults_to_top_left():
    generator = FlutterCodeGenerator()

    assert "alignment: Alignment.center," in generator.build_widget(_element("stack"))
    assert "alignment: Alignment.topLeft," in generator.build_widget(_element("stack", {"alignment": "middle"}))


def test_list_direction_and_scrolling():
    generator = FlutterCodeGenerator()

    vertical = generator.build_widget(_element("list", {"itemCount": 3, "scrollable": False}))
    horizontal = generator.build_widget(_element("list", {"direction": "horizontal"}))

    assert vertical.startswith("ListView.builder(")
    assert "itemCount: 3," in vertical
    assert "physics: const NeverScrollableScrollPhysics()," in vertical
    assert horizontal.startswith("SizedBox(")
    assert "scrollDirection: Axis.horizontal," in horizontal
    assert "physics" not in horizontal


def test_text_field_optional_decorations():
    generator = FlutterCodeGenerator()

    plain = generator.build_widget(_element("textField"))
    decorated = generator.build_widget(
        _element("textField", {"hasIcon": True, "icon": "not an icon!", "validation": True})
    )

    assert "prefixIcon" not in plain
    assert "errorText" not in plain
    assert "prefixIcon: const Icon(Icons.search)," in decorated
    assert "errorText: 'Please enter a valid value'," in decorated


def test_toggle_controls():
    generator = FlutterCodeGenerator()

    switch = generator.build_widget(_element("switch", {"value": True}))
    checkbox = generator.build_widget(_element("checkbox"))
    radio = generator.build_widget(_element("radio", {"value": True}))

    assert "value: true," in switch
    assert "inactiveTrackColor: Color(0xFF9e9e9e)," in switch
    assert "value: false," in checkbox
    assert "value: 'option1'," in radio
    assert "groupValue: 'option1'," in radio


def test_labeled_controls_respect_label_position():
    generator = FlutterCodeGenerator()

    right = generator.build_widget(_element("switchWithLabel", {"label": "Wi-Fi"}))
    left = generator.build_widget(_element("checkboxWithLabel", {"labelPosition": "left", "disabled": True}))
    fallback = generator.build_widget(_element("radioWithLabel", {"labelPosition": "above", "label": ""}))

    assert right.index("Switch(") < right.index("'Wi-Fi'")
    assert left.index("'Checkbox Option'") < left.index("Checkbox(")
    assert "onChanged: null," in left
    assert fallback.index("'Radio option'") < fallback.index("Radio<String>(")


def test_dropdown_options_are_parsed_defensively():
    generator = FlutterCodeGenerator()

    parsed = generator.build_widget(
        _element("dropdown", {"options": '[{"label": "A", "value": "a"}]', "value": "a", "required": True})
    )
    broken = generator.build_widget(_element("dropdown", {"options": '{"label": "A"}'}))

    assert "DropdownMenuItem(value: 'a', child: Text('A'))," in parsed
    assert "value: 'a'," in parsed
    assert "Text('Select an option *')" in parsed
    assert broken.count("DropdownMenuItem(") == 3
    assert "value: null," in broken


def test_dynamic_table_rows_and_fallback_columns():
    code = FlutterCodeGenerator().build_widget(_element("dynamicTable", {"columns": "not json", "rowCount": 2}))

    assert code.count("TableRow(") == 3
    assert "Text('Column 3', style: TextStyle(fontWeight: FontWeight.w500))" in code
    assert "Text('Cell 2-3')" in code
    assert "Cell 3-1" not in code
    assert "2: FixedColumnWidth(100.0)," in code
    assert "border: TableBorder.all(color: Color(0xFFe5e7eb))," in code


def test_dynamic_table_without_header_or_stripes():
    code = FlutterCodeGenerator().build_widget(
        _element(
            "dynamicTable",
            {
                "columns": [{"id": "c", "title": "Only", "width": 240}],
                "showHeader": False,
                "striped": False,
                "showBorder": False,
                "rowCount": 1,
            },
        )
    )

    assert code.count("TableRow(") == 1
    assert "decoration" not in code
    assert "TableBorder" not in code
    assert "0: FixedColumnWidth(240.0)," in code


def test_chat_components():
    generator = FlutterCodeGenerator()

    chat_input = generator.build_widget(_element("chatInput", {"buttonText": ""}))
    incoming = generator.build_widget(_element("chatMessage", {"isUser": False, "timestamp": False}))

    assert "hintText: 'Type a message...'," in chat_input
    assert "child: Text('Send')," in chat_input
    assert "mainAxisAlignment: MainAxisAlignment.start," in incoming
    assert incoming.index("CircleAvatar(") < incoming.index("Flexible(")
    assert "12:34 PM" not in incoming


def test_input_with_label_keyboard_types():
    generator = FlutterCodeGenerator()

    email = generator.build_widget(_element("inputWithLabel", {"type": "email", "value": "a@b.c"}))
    password = generator.build_widget(_element("inputWithLabel", {"type": "password"}))
    unknown = generator.build_widget(_element("inputWithLabel", {"type": "hologram"}))

    assert "keyboardType: TextInputType.emailAddress," in email
    assert "initialValue: 'a@b.c'," in email
    assert "obscureText: true," in password
    assert "keyboardType: TextInputType.text," in unknown


def test_strings_are_escaped_for_dart():
    assert dart_string("It's $5\\") == "'It\\'s \\$5\\\\'"
    code = FlutterCodeGenerator().build_widget(_element("button", {"text": "Don't"}))
    assert "Text('Don\\'t')" in code


def test_fixed_formats_one_decimal():
    assert fixed(10) == "10.0"
    assert fixed(3.14159) == "3.1"
    assert fixed(float("nan")) == "0.0"
    assert fixed("12") == "12.0"


def test_fixed_rounds_ties_away_from_zero():
    assert fixed(10.25) == "10.3"
    assert fixed(10.75) == "10.8"
    assert fixed(-10.25) == "-10.3"
    assert fixed(1e30).endswith(".0")


def test_positioned_geometry_rounds_ties_up():
    code = generate_flutter_code([_element("button", x=10.25, y=0)])

    assert "left: 10.3," in code


def test_document_export_emits_page_per_screen(login_document):
    code = generate_flutter_code(login_document, {"darkMode": True})

    assert "class LoginPage extends StatefulWidget" in code
    assert "class OrderHistoryPage extends StatefulWidget" in code
    assert "home: const LoginPage()," in code
    assert "'/screen-2': (context) => const OrderHistoryPage()," in code
    assert "onPressed: () => Navigator.pushNamed(context, '/screen-2')," in code
    assert "title: const Text('Order history')," in code
    assert "class MyHomePage" not in code


def test_single_screen_export_ignores_navigation(login_document):
    code = generate_flutter_code(login_document.screens[0].elements)

    assert "Navigator.pushNamed" not in code
    assert "routes:" not in code


def test_page_class_names_are_unique():
    document = Document(
        screens=[Screen(id="s1", name="Home"), Screen(id="s2", name="Home"), Screen(id="s3", name="1st step")],
        current_screen_id="s1",
    )
    code = generate_flutter_code(document)

    assert "class HomePage extends" in code
    assert "class HomePage2 extends" in code
    assert "class Screen1stStepPage extends" in code
    assert to_pascal_case("order history") == "OrderHistory"


def test_generation_is_deterministic(login_document):
    generator = FlutterCodeGenerator()

    assert generator.generate(login_document) == generator.generate(login_document)
