from pathlib import Path

import pytest

from jsx2overreact import convert
from jsx2overreact.errors import ParseError, UnsupportedConstruct
from jsx2overreact.settings import ConverterSettings, RenderSettings, UnsupportedPolicy


SAMPLES_DIR = Path(__file__).parent / "samples"


# ------------------------------------------------------------------ #
# samples
# ------------------------------------------------------------------ #
@pytest.mark.parametrize("name", ["nested", "counter", "styled", "list"])
def test_convert_samples(name):
    source = (SAMPLES_DIR / f"{name}.jsx").read_text(encoding="utf-8")
    expected = (SAMPLES_DIR / f"{name}.expected").read_text(encoding="utf-8")
    assert convert(source).strip() == expected.strip()


# ------------------------------------------------------------------ #
# elements
# ------------------------------------------------------------------ #
@pytest.mark.parametrize(
    "text",
    [
        "hello world",
        "hello",
        "Hello, World",
        "42",
        "hello world\nfoo bar",
        "  padded  ",
    ],
)
def test_plain_text_is_wrapped_in_single_quotes(text):
    assert convert(text) == f"'{text}'"


def test_plain_text_escapes_quotes_and_dollars():
    assert convert("it's $5") == "'it\\'s \\$5'"


def test_dollar_signs_in_jsx_text_are_escaped():
    assert convert("<p>cost $5</p>") == "Dom.p()(\n  'cost \\$5'\n)"
    assert convert('<a title="$name" />') == "(Dom.a()\n  ..title = '\\$name'\n)()"


def test_lowercase_elements_are_dom_factories():
    assert convert("<div>hello world</div>") == "Dom.div()(\n  'hello world'\n)"


def test_capitalized_elements_are_component_factories():
    assert convert("<HelloWorld>hello world</HelloWorld>") == (
        "HelloWorld()(\n  'hello world'\n)"
    )


def test_props_become_cascade_setters():
    assert convert('<HelloWorld omg="lol">hello world</HelloWorld>') == (
        "(HelloWorld()\n"
        "  ..omg = 'lol'\n"
        ")(\n"
        "  'hello world'\n"
        ")"
    )


@pytest.mark.parametrize(
    "jsx_value, dart_value",
    [
        ("'some value'", "'some value'"),
        ("{true}", "true"),
        ('{{test:"omg"}}', "{'test': 'omg'}"),
        ("{42}", "42"),
        ("{null}", "null"),
    ],
)
def test_prop_values(jsx_value, dart_value):
    assert convert(f"<Test prop={jsx_value}></Test>") == (
        f"(Test()\n  ..prop = {dart_value}\n)()"
    )


def test_self_closing_element_without_props():
    assert convert("<br />") == "Dom.br()()"


def test_attribute_without_value_is_true():
    assert convert("<input disabled />") == "(Dom.input()\n  ..disabled = true\n)()"


def test_spread_attribute_uses_add_all():
    assert convert('<Foo {...props} bar="x" />') == (
        "(Foo()\n  ..addAll(props)\n  ..bar = 'x'\n)()"
    )


def test_aria_attributes_are_dotted():
    assert convert('<div aria-label="close" />') == (
        "(Dom.div()\n  ..aria.label = 'close'\n)()"
    )


def test_member_element_names():
    assert convert("<Foo.Bar />") == "Foo.Bar()()"
    assert convert("<foo.bar />") == "Dom.foo.bar()()"


def test_fragment_children_are_comma_terminated():
    assert convert("<><a /><b /></>") == "Fragment()(\n  Dom.a()(),\n  Dom.b()(),\n)"


def test_single_child_has_no_trailing_comma():
    assert convert("<><a /></>") == "Fragment()(\n  Dom.a()()\n)"


def test_empty_expression_containers_are_dropped():
    assert convert("<div>{/* nothing */}</div>") == "Dom.div()()"


def test_text_is_normalized_like_jsx():
    source = "<p>\n  hello\n  world\n</p>"
    assert convert(source) == "Dom.p()(\n  'hello world'\n)"


def test_text_entities_are_decoded():
    assert convert("<p>a &amp; b</p>") == "Dom.p()(\n  'a & b'\n)"


def test_text_and_expressions_mix():
    assert convert("<p>Hello {name}!</p>") == (
        "Dom.p()(\n  'Hello',\n  name,\n  '!',\n)"
    )


# ------------------------------------------------------------------ #
# script
# ------------------------------------------------------------------ #
def test_declarations():
    assert convert("const x = 1, y = 2;") == "final x = 1, y = 2;"
    assert convert("let z;") == "var z;"


def test_strings_use_single_quotes():
    assert convert('x = "it\'s"') == "x = 'it\\'s'"


def test_template_literal():
    assert convert("x = `a ${b} c`") == "x = 'a ${b} c'"


def test_regex_and_bigint_literals():
    assert convert("x = /ab+c/gi") == "x = /ab+c/gi"
    assert convert("x = 10n") == "x = 10n"


def test_array_holes():
    assert convert("x = [1, , 2]") == "x = [1, , 2]"


def test_objects_with_several_properties_span_lines():
    assert convert("x = {a: 1, b: 2}") == "x = {\n  'a': 1,\n  'b': 2\n}"


def test_empty_object():
    assert convert("x = {}") == "x = {}"


def test_parentheses_follow_precedence():
    assert convert("x = (a + b) * c") == "x = (a + b) * c"
    assert convert("x = a + b * c") == "x = a + b * c"
    assert convert("x = a - (b - c)") == "x = a - (b - c)"
    assert convert("x = -(a + b)") == "x = -(a + b)"


def test_arrow_functions():
    assert convert("f = () => ({a: 1})") == "f = () => ({'a': 1})"
    assert convert("f = async (x) => await g(x)") == "f = (x) async => await g(x)"


def test_optional_member_access():
    assert convert("x = a?.b") == "x = a?.b"


def test_if_statement():
    assert convert("if (a) { b(); } else { c(); }") == (
        "if (a) {\n  b()\n} else {\n  c()\n}"
    )


def test_export_default_function():
    assert convert("export default function App() { return <div />; }") == (
        "App() {\n  return Dom.div()();\n}"
    )


# ------------------------------------------------------------------ #
# rewrites
# ------------------------------------------------------------------ #
def test_styled_with_tag_and_styles_map():
    assert convert("styled('div')({color: 'red'})") == (
        "styled(Dom.div, stylesMap: {'color': 'red'})"
    )


def test_styled_with_component_and_style_builder():
    assert convert("styled(Button)(buildButtonStyles)") == (
        "styled(Button, buildStyles: buildButtonStyles)"
    )


def test_regular_curried_calls_are_untouched():
    assert convert("connect(a)(b)") == "connect(a)(b)"


def test_hook_rewrite_is_scoped_to_component():
    source = (
        "function A() { const [v, setV] = useState(0); return v; }\n"
        "function B() { return v; }"
    )
    assert convert(source) == (
        "A() {\n"
        "  final v = useState(0);\n"
        "  return v.value;\n"
        "}\n"
        "B() {\n"
        "  return v;\n"
        "}"
    )


def test_hook_outside_component_is_not_rewritten():
    source = "function helper() { const [a, setA] = useState(1); return a; }"
    assert convert(source) == "helper() {\n  final a = useState(1);\n  return a;\n}"


def test_hook_rewrite_in_arrow_component():
    source = "const Toggle = () => { const [on, setOn] = useState(false); return on; };"
    assert convert(source) == (
        "final Toggle = () {\n  final on = useState(false);\n  return on.value;\n};"
    )


def test_member_property_names_are_not_rewritten():
    source = (
        "function Item() {\n"
        "  const [count, setCount] = useState(0);\n"
        "  return <div title={item.count}>{count}</div>;\n"
        "}"
    )
    assert convert(source) == (
        "Item() {\n"
        "  final count = useState(0);\n"
        "  return (Dom.div()\n"
        "    ..title = item.count\n"
        "  )(\n"
        "    count.value\n"
        "  );\n"
        "}"
    )


# ------------------------------------------------------------------ #
# failures and settings
# ------------------------------------------------------------------ #
def test_invalid_source_raises_parse_error():
    with pytest.raises(ParseError):
        convert("<div>")


def test_unsupported_construct_raises():
    with pytest.raises(UnsupportedConstruct) as exc_info:
        convert("class A {}")
    assert exc_info.value.node_type == "class_declaration"
    assert exc_info.value.line == 1


def test_unsupported_construct_placeholder():
    settings = ConverterSettings(
        render=RenderSettings(unsupported=UnsupportedPolicy.PLACEHOLDER)
    )
    assert convert("class A {}", settings) == "/* unsupported: class_declaration */"


def test_custom_indent():
    settings = ConverterSettings(render=RenderSettings(indent="    "))
    assert convert("<div>hi</div>", settings) == "Dom.div()(\n    'hi'\n)"
