import contextlib
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from jsx2overreact.errors import UnsupportedConstruct
from jsx2overreact.helpers import (
    escape_template_chunk,
    normalize_jsx_text,
    quote,
    quote_text,
    starts_with_capital,
)
from jsx2overreact.logger import logger
from jsx2overreact.models import (
    ArrayPattern,
    BlockStatement,
    CallExpression,
    DeclarationKind,
    FunctionExpression,
    Identifier,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXIdentifier,
    JSXMemberExpression,
    JSXNamespacedName,
    JSXText,
    Literal,
    MemberExpression,
    NodeKind,
    ObjectExpression,
    Property,
    PropertyKind,
    SyntaxNode,
    Unsupported,
)
from jsx2overreact.scope import HookRewriteTable
from jsx2overreact.settings import RenderSettings, UnsupportedPolicy

# Binding strength (higher binds tighter), used to put back the parentheses
# the parser drops.
_PRIMARY = 20
_BINARY_PRECEDENCE = {
    "??": 3,
    "||": 3,
    "&&": 4,
    "|": 5,
    "^": 6,
    "&": 7,
    "==": 8,
    "!=": 8,
    "===": 8,
    "!==": 8,
    "<": 9,
    ">": 9,
    "<=": 9,
    ">=": 9,
    "instanceof": 9,
    "in": 9,
    "<<": 10,
    ">>": 10,
    ">>>": 10,
    "+": 11,
    "-": 11,
    "*": 12,
    "/": 12,
    "%": 12,
    "**": 13,
}
_PRECEDENCE = {
    NodeKind.SEQUENCE_EXPRESSION: 0,
    NodeKind.ARROW_FUNCTION_EXPRESSION: 1,
    NodeKind.FUNCTION_EXPRESSION: 1,
    NodeKind.ASSIGNMENT_EXPRESSION: 1,
    NodeKind.CONDITIONAL_EXPRESSION: 2,
    NodeKind.UNARY_EXPRESSION: 14,
    NodeKind.AWAIT_EXPRESSION: 14,
    NodeKind.UPDATE_EXPRESSION: 15,
}
_UNARY_PRECEDENCE = 14
_BINARY_KINDS = (NodeKind.BINARY_EXPRESSION, NodeKind.LOGICAL_EXPRESSION)


def _precedence(node: SyntaxNode) -> int:
    if node.kind in _BINARY_KINDS:
        return _BINARY_PRECEDENCE.get(node.operator, 0)
    return _PRECEDENCE.get(node.kind, _PRIMARY)


def factory_name(resolved: str, dom_namespace: str = "Dom") -> str:
    """
    Map a resolved (dotted) tag name to the factory that builds it.

    Names whose last segment starts with an uppercase letter are component
    factories and are kept as is. Everything else is a built-in element and
    gets the DOM namespace, unless it already has it.
    """
    prefix = f"{dom_namespace}."
    if resolved.startswith(prefix):
        return resolved
    if starts_with_capital(resolved.rsplit(".", 1)[-1]):
        return resolved
    return prefix + resolved


@dataclass
class RenderState:
    indent: str = "  "
    line_end: str = "\n"
    depth: int = 0
    hooks: HookRewriteTable = field(default_factory=HookRewriteTable)

    def indentation(self) -> str:
        return self.indent * self.depth

    @contextlib.contextmanager
    def nested(self) -> Iterator[None]:
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1


class Renderer:
    """
    Renders a ``SyntaxNode`` tree as OverReact builder code.

    Rendering methods are looked up by node kind in ``self._handlers`` and
    write into a single output buffer. Node kinds without a handler raise
    ``UnsupportedConstruct`` (or emit a placeholder when configured to).
    """

    def __init__(self, settings: Optional[RenderSettings] = None) -> None:
        self.settings = settings or RenderSettings()
        self.state = self._new_state()
        self._out: List[str] = []
        self._handlers: dict[NodeKind, Callable[[Any], None]] = {
            # statements
            NodeKind.PROGRAM: self._render_program,
            NodeKind.EXPRESSION_STATEMENT: self._render_expression_statement,
            NodeKind.BLOCK_STATEMENT: self._render_block,
            NodeKind.RETURN_STATEMENT: self._render_return,
            NodeKind.IF_STATEMENT: self._render_if,
            NodeKind.EXPORT_DECLARATION: self._render_export,
            NodeKind.VARIABLE_DECLARATION: self._render_variable_declaration,
            NodeKind.VARIABLE_DECLARATOR: self._render_variable_declarator,
            NodeKind.FUNCTION_DECLARATION: self._render_function,
            # expressions
            NodeKind.IDENTIFIER: self._render_identifier,
            NodeKind.LITERAL: self._render_literal,
            NodeKind.TEMPLATE_LITERAL: self._render_template_literal,
            NodeKind.THIS_EXPRESSION: self._render_this,
            NodeKind.OBJECT_EXPRESSION: self._render_object,
            NodeKind.PROPERTY: self._render_property,
            NodeKind.SPREAD_ELEMENT: self._render_spread,
            NodeKind.ARRAY_EXPRESSION: self._render_array,
            NodeKind.ARROW_FUNCTION_EXPRESSION: self._render_arrow_function,
            NodeKind.FUNCTION_EXPRESSION: self._render_function,
            NodeKind.CALL_EXPRESSION: self._render_call,
            NodeKind.NEW_EXPRESSION: self._render_new,
            NodeKind.MEMBER_EXPRESSION: self._render_member,
            NodeKind.BINARY_EXPRESSION: self._render_binary,
            NodeKind.LOGICAL_EXPRESSION: self._render_binary,
            NodeKind.UNARY_EXPRESSION: self._render_unary,
            NodeKind.UPDATE_EXPRESSION: self._render_update,
            NodeKind.CONDITIONAL_EXPRESSION: self._render_conditional,
            NodeKind.ASSIGNMENT_EXPRESSION: self._render_assignment,
            NodeKind.AWAIT_EXPRESSION: self._render_await,
            NodeKind.SEQUENCE_EXPRESSION: self._render_sequence,
            # patterns
            NodeKind.ARRAY_PATTERN: self._render_array_pattern,
            NodeKind.OBJECT_PATTERN: self._render_object_pattern,
            NodeKind.ASSIGNMENT_PATTERN: self._render_assignment_pattern,
            NodeKind.REST_ELEMENT: self._render_rest,
            # jsx
            NodeKind.JSX_ELEMENT: self._render_jsx_element,
            NodeKind.JSX_FRAGMENT: self._render_jsx_fragment,
            NodeKind.JSX_ATTRIBUTE: self._render_jsx_attribute,
            NodeKind.JSX_SPREAD_ATTRIBUTE: self._render_jsx_spread_attribute,
            NodeKind.JSX_EXPRESSION_CONTAINER: self._render_jsx_expression_container,
            NodeKind.JSX_EMPTY_EXPRESSION: self._render_nothing,
            NodeKind.JSX_TEXT: self._render_jsx_text,
            NodeKind.JSX_IDENTIFIER: self._render_jsx_name,
            NodeKind.JSX_MEMBER_EXPRESSION: self._render_jsx_name,
            NodeKind.JSX_NAMESPACED_NAME: self._render_jsx_name,
        }

    def render(self, node: SyntaxNode) -> str:
        self.state = self._new_state()
        self._out = []
        self._render(node)
        return "".join(self._out)

    def resolve_element_name(self, name: SyntaxNode) -> str:
        return factory_name(self._jsx_name(name), self.settings.dom_namespace)

    # --- helpers ----------------------------------------------------
    def _new_state(self) -> RenderState:
        return RenderState(indent=self.settings.indent, line_end=self.settings.line_end)

    def write(self, text: str) -> None:
        self._out.append(text)

    def _render(self, node: SyntaxNode) -> None:
        handler = self._handlers.get(node.kind)
        if handler is None:
            self.write(self._placeholder(node))
            return
        handler(node)

    def _placeholder(self, node: SyntaxNode) -> str:
        node_type = node.node_type if isinstance(node, Unsupported) else node.kind.value
        if self.settings.unsupported != UnsupportedPolicy.PLACEHOLDER:
            raise UnsupportedConstruct(node_type, line=node.line)
        logger.warning(
            "Unsupported construct rendered as placeholder",
            node_type=node_type,
            line=node.line,
        )
        return f"/* unsupported: {node_type} */"

    def _capture(self, fn: Callable[[], None]) -> str:
        saved = self._out
        self._out = []
        try:
            fn()
            return "".join(self._out)
        finally:
            self._out = saved

    def _write_sequence(
        self,
        nodes: Sequence[Optional[SyntaxNode]],
        render: Optional[Callable[[SyntaxNode], None]] = None,
        separator: str = ", ",
    ) -> None:
        render = render or self._render
        for i, node in enumerate(nodes):
            if i:
                self.write(separator)
            if node is not None:
                render(node)

    def _write_params(self, params: Sequence[SyntaxNode]) -> None:
        self.write("(")
        self._write_sequence(params, self._render_binding)
        self.write(")")

    def _render_binding(self, node: SyntaxNode) -> None:
        # declared names are written as is, never hook-rewritten
        if isinstance(node, Identifier):
            self.write(node.name)
        else:
            self._render(node)

    def _render_wrapped(self, node: SyntaxNode, parenthesize: bool) -> None:
        if parenthesize:
            self.write("(")
            self._render(node)
            self.write(")")
        else:
            self._render(node)

    def _render_primary(self, node: SyntaxNode) -> None:
        self._render_wrapped(node, _precedence(node) < _PRIMARY)

    @contextlib.contextmanager
    def _component_scope(self, name: str, node: SyntaxNode) -> Iterator[None]:
        scope = self.state.hooks.enter(name, node)
        try:
            yield
        finally:
            self.state.hooks.exit(scope)

    # --- statements -------------------------------------------------
    def _render_program(self, node) -> None:
        for statement in node.body:
            self._render(statement)
            self.write(self.state.line_end)

    def _render_expression_statement(self, node) -> None:
        self._render(node.expression)

    def _render_block(self, node) -> None:
        state = self.state
        if not node.body:
            self.write("{}")
            return
        indent = state.indentation()
        self.write("{" + state.line_end)
        with state.nested():
            for statement in node.body:
                self.write(state.indentation())
                self._render(statement)
                self.write(state.line_end)
        self.write(indent + "}")

    def _render_return(self, node) -> None:
        self.write("return")
        if node.argument is not None:
            self.write(" ")
            self._render(node.argument)
        self.write(";")

    def _render_if(self, node) -> None:
        self.write("if (")
        self._render(node.test)
        self.write(") ")
        self._render(node.consequent)
        if node.alternate is not None:
            self.write(" else ")
            self._render(node.alternate)

    def _render_export(self, node) -> None:
        self._render(node.declaration)

    def _render_variable_declaration(self, node) -> None:
        keyword = "final" if node.declaration_kind == DeclarationKind.CONST else "var"
        self.write(keyword + " ")
        self._write_sequence(node.declarations)
        self.write(";")

    def _hook_binding(self, node) -> Optional[Tuple[str, str]]:
        """Return ``(value, setter)`` for ``const [value, setter] = useX(...)``."""
        init = node.init
        if not isinstance(node.id, ArrayPattern) or not isinstance(init, CallExpression):
            return None
        if not self._callee_name(init.callee).startswith(self.settings.hook_prefix):
            return None
        elements = node.id.elements
        if len(elements) != 2 or not all(isinstance(e, Identifier) for e in elements):
            return None
        return elements[0].name, elements[1].name

    def _callee_name(self, callee: SyntaxNode) -> str:
        if isinstance(callee, Identifier):
            return callee.name
        if (
            isinstance(callee, MemberExpression)
            and not callee.computed
            and isinstance(callee.property, Identifier)
        ):
            return callee.property.name
        return ""

    def _render_variable_declarator(self, node) -> None:
        binding = self._hook_binding(node)
        if binding is not None:
            self.write(binding[0])
        else:
            self._render_binding(node.id)
        if node.init is not None:
            self.write(" = ")
            if (
                isinstance(node.id, Identifier)
                and starts_with_capital(node.id.name)
                and node.init.kind
                in (NodeKind.ARROW_FUNCTION_EXPRESSION, NodeKind.FUNCTION_EXPRESSION)
            ):
                with self._component_scope(node.id.name, node.init):
                    self._render(node.init)
            else:
                self._render(node.init)
        if binding is not None:
            self.state.hooks.register(*binding)

    def _render_function(self, node) -> None:
        name = node.id.name if node.id is not None else None
        if node.kind == NodeKind.FUNCTION_DECLARATION and starts_with_capital(name):
            with self._component_scope(name, node):
                self._write_function(node, name)
        else:
            self._write_function(node, name)

    def _write_function(self, node: FunctionExpression, name: Optional[str]) -> None:
        if name:
            self.write(name)
        self._write_params(node.params)
        self.write(" async " if node.is_async else " ")
        self._render_block(node.body)

    # --- literals and names -----------------------------------------
    def _render_identifier(self, node) -> None:
        rewrite = self.state.hooks.lookup(node.name, node)
        self.write(rewrite if rewrite is not None else node.name)

    def _render_literal(self, node) -> None:
        if node.regex is not None:
            self.write(f"/{node.regex.pattern}/{node.regex.flags}")
        elif node.bigint is not None:
            self.write(f"{node.bigint}n")
        elif isinstance(node.value, str):
            self.write(quote(node.value))
        else:
            self.write(node.raw)

    def _render_template_literal(self, node) -> None:
        self.write("'")
        for i, quasi in enumerate(node.quasis):
            self.write(escape_template_chunk(quasi))
            if i < len(node.expressions):
                self.write("${")
                self._render(node.expressions[i])
                self.write("}")
        self.write("'")

    def _render_this(self, node) -> None:
        self.write("this")

    # --- objects and arrays -----------------------------------------
    def _render_object(self, node) -> None:
        state = self.state
        properties = node.properties
        if not properties:
            self.write("{}")
            return
        if len(properties) <= self.settings.inline_object_max_properties:
            inline = self._capture(lambda: self._write_sequence(properties))
            if state.line_end not in inline:
                self.write("{" + inline + "}")
                return
        indent = state.indentation()
        self.write("{" + state.line_end)
        with state.nested():
            for i, prop in enumerate(properties):
                if i:
                    self.write("," + state.line_end)
                self.write(state.indentation())
                self._render(prop)
        self.write(state.line_end + indent + "}")

    def _write_key(self, node: Property, *, quoted: bool) -> None:
        key = node.key
        if node.computed and not quoted:
            self.write("[")
            self._render(key)
            self.write("]")
        elif isinstance(key, Identifier):
            self.write(quote(key.name) if quoted else key.name)
        elif isinstance(key, Literal) and key.regex is None:
            self.write(quote(key.value if isinstance(key.value, str) else key.raw))
        else:
            self._render(key)

    def _render_property(self, node) -> None:
        if node.method or node.property_kind != PropertyKind.INIT:
            self._render_method_property(node)
            return
        if not node.shorthand:
            self._write_key(node, quoted=True)
            self.write(": ")
        self._render(node.value)

    def _render_method_property(self, node: Property) -> None:
        if node.property_kind == PropertyKind.GET:
            self.write("get ")
        elif node.property_kind == PropertyKind.SET:
            self.write("set ")
        self._write_key(node, quoted=False)
        self._write_function(node.value, None)

    def _render_object_pattern(self, node) -> None:
        self.write("{")
        self._write_sequence(node.properties, self._render_pattern_property)
        self.write("}")

    def _render_pattern_property(self, node: SyntaxNode) -> None:
        if not isinstance(node, Property):
            self._render_binding(node)
            return
        if not node.shorthand:
            self._write_key(node, quoted=False)
            self.write(": ")
        self._render_binding(node.value)

    def _write_elements(
        self, elements: Sequence[Optional[SyntaxNode]], render: Callable[[SyntaxNode], None]
    ) -> None:
        self.write("[")
        last = len(elements) - 1
        for i, element in enumerate(elements):
            if element is not None:
                render(element)
            if i < last or element is None:
                self.write(", ")
        self.write("]")

    def _render_array(self, node) -> None:
        self._write_elements(node.elements, self._render)

    def _render_array_pattern(self, node) -> None:
        self._write_elements(node.elements, self._render_binding)

    def _render_assignment_pattern(self, node) -> None:
        self._render_binding(node.left)
        self.write(" = ")
        self._render(node.right)

    def _render_spread(self, node) -> None:
        self.write("...")
        self._render(node.argument)

    def _render_rest(self, node) -> None:
        self.write("...")
        self._render_binding(node.argument)

    # --- functions and calls ----------------------------------------
    def _render_arrow_function(self, node) -> None:
        self._write_params(node.params)
        if node.is_async:
            self.write(" async")
        if isinstance(node.body, BlockStatement):
            self.write(" ")
            self._render_block(node.body)
        elif isinstance(node.body, ObjectExpression):
            self.write(" => (")
            self._render(node.body)
            self.write(")")
        else:
            self.write(" => ")
            self._render_wrapped(node.body, _precedence(node.body) == 0)

    def _render_call(self, node) -> None:
        if self._render_styled_call(node):
            return
        self._render_primary(node.callee)
        if node.optional:
            self.write("?.")
        self.write("(")
        self._write_sequence(node.arguments)
        self.write(")")

    def _render_styled_call(self, node) -> bool:
        """Rewrite ``styled(x[, options])(styles)`` into a single named-argument call."""
        inner = node.callee
        if not isinstance(inner, CallExpression) or len(node.arguments) != 1:
            return False
        marker = inner.callee
        if not isinstance(marker, Identifier) or marker.name != self.settings.styled_marker:
            return False
        if len(inner.arguments) not in (1, 2):
            return False
        target, *options = inner.arguments
        styles = node.arguments[0]
        self.write(f"{marker.name}(")
        if isinstance(target, Literal) and isinstance(target.value, str):
            self.write(f"{self.settings.dom_namespace}.{target.value}")
        else:
            self._render(target)
        if options:
            self.write(", options: ")
            self._render(options[0])
        if isinstance(styles, ObjectExpression):
            self.write(", stylesMap: ")
        else:
            self.write(", buildStyles: ")
        self._render(styles)
        self.write(")")
        return True

    def _render_new(self, node) -> None:
        self.write("new ")
        self._render_primary(node.callee)
        self.write("(")
        self._write_sequence(node.arguments)
        self.write(")")

    def _render_member(self, node) -> None:
        self._render_primary(node.object)
        if node.computed:
            self.write("?.[" if node.optional else "[")
            self._render(node.property)
            self.write("]")
            return
        self.write("?." if node.optional else ".")
        self._render_binding(node.property)

    # --- operators --------------------------------------------------
    def _render_operand(
        self, node: SyntaxNode, precedence: int, *, right: bool, right_assoc: bool
    ) -> None:
        child = _precedence(node)
        parenthesize = child < precedence or (
            child == precedence and node.kind in _BINARY_KINDS and right != right_assoc
        )
        self._render_wrapped(node, parenthesize)

    def _render_binary(self, node) -> None:
        precedence = _precedence(node)
        right_assoc = node.operator == "**"
        self._render_operand(node.left, precedence, right=False, right_assoc=right_assoc)
        self.write(f" {node.operator} ")
        self._render_operand(node.right, precedence, right=True, right_assoc=right_assoc)

    def _render_unary(self, node) -> None:
        self.write(node.operator + (" " if node.operator.isalpha() else ""))
        self._render_wrapped(node.argument, _precedence(node.argument) < _UNARY_PRECEDENCE)

    def _render_update(self, node) -> None:
        if node.prefix:
            self.write(node.operator)
        self._render_primary(node.argument)
        if not node.prefix:
            self.write(node.operator)

    def _render_conditional(self, node) -> None:
        self._render_wrapped(node.test, _precedence(node.test) <= 2)
        self.write(" ? ")
        self._render_wrapped(node.consequent, _precedence(node.consequent) == 0)
        self.write(" : ")
        self._render_wrapped(node.alternate, _precedence(node.alternate) == 0)

    def _render_assignment(self, node) -> None:
        self._render(node.left)
        self.write(f" {node.operator} ")
        self._render_wrapped(node.right, _precedence(node.right) == 0)

    def _render_await(self, node) -> None:
        self.write("await ")
        self._render_wrapped(node.argument, _precedence(node.argument) < _UNARY_PRECEDENCE)

    def _render_sequence(self, node) -> None:
        self._write_sequence(node.expressions)

    # --- jsx --------------------------------------------------------
    def _has_content(self, child: SyntaxNode) -> bool:
        if isinstance(child, JSXText):
            return bool(normalize_jsx_text(child.value))
        if isinstance(child, JSXExpressionContainer):
            return not isinstance(child.expression, JSXEmptyExpression)
        return True

    def _write_jsx(
        self, name: str, attributes: Sequence[SyntaxNode], children: Sequence[SyntaxNode]
    ) -> None:
        state = self.state
        indent = state.indentation()
        content = [c for c in children if self._has_content(c)]
        if attributes:
            self.write("(")
        self.write(f"{name}()")
        if attributes:
            self.write(state.line_end)
            with state.nested():
                for attribute in attributes:
                    self.write(state.indentation())
                    self._render(attribute)
                    self.write(state.line_end)
            self.write(indent + ")")
        self.write("(")
        if content:
            # a lone child is not comma-terminated
            separator = "," if len(content) > 1 else ""
            self.write(state.line_end)
            with state.nested():
                for child in content:
                    self.write(state.indentation())
                    self._render(child)
                    self.write(separator + state.line_end)
            self.write(indent)
        self.write(")")

    def _render_jsx_element(self, node) -> None:
        name = self.resolve_element_name(node.opening.name)
        self._write_jsx(name, node.opening.attributes, node.children)

    def _render_jsx_fragment(self, node) -> None:
        self._write_jsx(self.settings.fragment_name, [], node.children)

    def _render_jsx_attribute(self, node) -> None:
        self.write(f"..{self._jsx_name(node.name)} = ")
        if node.value is None:
            self.write("true")
        else:
            self._render(node.value)

    def _render_jsx_spread_attribute(self, node) -> None:
        self.write(f"..{self.settings.add_all_method}(")
        self._render(node.argument)
        self.write(")")

    def _render_jsx_expression_container(self, node) -> None:
        self._render(node.expression)

    def _render_nothing(self, node) -> None:
        return None

    def _render_jsx_text(self, node) -> None:
        if node.verbatim:
            if node.value.strip():
                self.write(quote_text(node.value))
            return
        text = normalize_jsx_text(node.value)
        if text:
            self.write(quote(text))

    def _render_jsx_name(self, node) -> None:
        self.write(self._jsx_name(node))

    def _jsx_name(self, node: SyntaxNode) -> str:
        if isinstance(node, JSXIdentifier):
            if node.name.startswith("aria-"):
                return "aria." + node.name[len("aria-") :]
            return node.name
        if isinstance(node, JSXMemberExpression):
            return f"{self._jsx_name(node.object)}.{self._jsx_name(node.property)}"
        if isinstance(node, JSXNamespacedName):
            return f"{self._jsx_name(node.namespace)}.{self._jsx_name(node.name)}"
        return self._placeholder(node)


def render(node: SyntaxNode, settings: Optional[RenderSettings] = None) -> str:
    """Render *node* (usually a ``Program``) as OverReact builder code."""
    return Renderer(settings).render(node)
