import pytest

from jsx2overreact.errors import UnsupportedConstruct
from jsx2overreact.models import (
    CallExpression,
    ExpressionStatement,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXIdentifier,
    JSXNamespacedName,
    JSXOpeningElement,
    JSXText,
    Literal,
    ObjectExpression,
    Program,
    Property,
    Unsupported,
)
from jsx2overreact.renderer import RenderState, Renderer, factory_name, render
from jsx2overreact.settings import RenderSettings, UnsupportedPolicy


def _element(name, attributes=None, children=None):
    return JSXElement(
        opening=JSXOpeningElement(name=JSXIdentifier(name=name), attributes=attributes or []),
        children=children or [],
    )


@pytest.mark.parametrize(
    "resolved, expected",
    [
        ("div", "Dom.div"),
        ("Dom.div", "Dom.div"),
        ("HelloWorld", "HelloWorld"),
        ("Foo.Bar", "Foo.Bar"),
        ("foo.bar", "Dom.foo.bar"),
    ],
)
def test_factory_name(resolved, expected):
    assert factory_name(resolved) == expected


def test_factory_name_custom_namespace():
    assert factory_name("span", "Html") == "Html.span"
    assert factory_name("Html.span", "Html") == "Html.span"


def test_resolve_namespaced_name():
    name = JSXNamespacedName(
        namespace=JSXIdentifier(name="svg"), name=JSXIdentifier(name="path")
    )
    assert Renderer().resolve_element_name(name) == "Dom.svg.path"


def test_render_element_without_children():
    assert render(_element("Foo")) == "Foo()()"


def test_render_whitespace_text_is_dropped():
    element = _element("div", children=[JSXText(value="\n   \n")])
    assert render(element) == "Dom.div()()"


def test_render_attribute_with_custom_settings():
    attribute = JSXAttribute(
        name=JSXIdentifier(name="id"), value=Literal(raw='"x"', value="x")
    )
    settings = RenderSettings(indent="\t", dom_namespace="Html")
    assert render(_element("p", attributes=[attribute]), settings) == (
        "(Html.p()\n\t..id = 'x'\n)()"
    )


def test_render_quotes_text():
    element = _element("p", children=[JSXText(value="it's a \\ test")])
    assert render(element) == "Dom.p()(\n  'it\\'s a \\\\ test'\n)"


def test_render_property_keys_are_quoted():
    obj = ObjectExpression(
        properties=[Property(key=Literal(raw="1", value=1), value=Identifier(name="a"))]
    )
    assert render(obj) == "{'1': a}"


def test_render_object_with_multiline_value_is_not_inlined():
    inner = ObjectExpression(
        properties=[
            Property(key=Identifier(name="a"), value=Literal(raw="1", value=1)),
            Property(key=Identifier(name="b"), value=Literal(raw="2", value=2)),
        ]
    )
    outer = ObjectExpression(properties=[Property(key=Identifier(name="x"), value=inner)])
    assert render(outer) == "{\n  'x': {\n    'a': 1,\n    'b': 2\n  }\n}"


def test_render_inline_object_limit():
    obj = ObjectExpression(
        properties=[
            Property(key=Identifier(name="a"), value=Literal(raw="1", value=1)),
            Property(key=Identifier(name="b"), value=Literal(raw="2", value=2)),
        ]
    )
    settings = RenderSettings(inline_object_max_properties=2)
    assert render(obj, settings) == "{'a': 1, 'b': 2}"


def test_render_program_statements():
    program = Program(
        body=[
            ExpressionStatement(expression=CallExpression(callee=Identifier(name="a"))),
            ExpressionStatement(expression=CallExpression(callee=Identifier(name="b"))),
        ]
    )
    assert render(program) == "a()\nb()\n"


def test_render_unsupported_raises():
    node = Unsupported(node_type="with_statement", line=3)
    with pytest.raises(UnsupportedConstruct) as exc_info:
        render(node)
    assert exc_info.value.node_type == "with_statement"
    assert exc_info.value.line == 3
    assert "with_statement" in str(exc_info.value)


def test_render_unsupported_placeholder():
    node = Unsupported(node_type="with_statement")
    settings = RenderSettings(unsupported=UnsupportedPolicy.PLACEHOLDER)
    assert render(node, settings) == "/* unsupported: with_statement */"


def test_renderer_is_reusable():
    renderer = Renderer()
    element = _element("div")
    assert renderer.render(element) == renderer.render(element) == "Dom.div()()"


def test_render_state_nesting_restores_depth():
    state = RenderState(indent="  ")
    with state.nested():
        with state.nested():
            assert state.indentation() == "    "
    assert state.depth == 0
    with pytest.raises(RuntimeError):
        with state.nested():
            raise RuntimeError("boom")
    assert state.depth == 0


def test_render_verbatim_text_keeps_line_breaks():
    text = JSXText(value="one\n  two ", verbatim=True)
    assert render(text) == "'one\n  two '"
    assert render(JSXText(value="\n  ", verbatim=True)) == ""
