import html
from typing import Callable, List, Optional

import tree_sitter as ts
import tree_sitter_javascript as tsjs

from jsx2overreact.errors import ParseError
from jsx2overreact.helpers import decode_string_literal, get_node_text, parse_number
from jsx2overreact.logger import logger
from jsx2overreact.models import (
    ArrayExpression,
    ArrayPattern,
    ArrowFunctionExpression,
    AssignmentExpression,
    AssignmentPattern,
    AwaitExpression,
    BinaryExpression,
    BlockStatement,
    CallExpression,
    ConditionalExpression,
    DeclarationKind,
    ExportDeclaration,
    ExpressionStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXIdentifier,
    JSXMemberExpression,
    JSXNamespacedName,
    JSXOpeningElement,
    JSXSpreadAttribute,
    JSXText,
    Literal,
    MemberExpression,
    NewExpression,
    NodeKind,
    ObjectExpression,
    ObjectPattern,
    Program,
    Property,
    PropertyKind,
    RegexValue,
    RestElement,
    ReturnStatement,
    SequenceExpression,
    SpreadElement,
    SyntaxNode,
    TemplateLiteral,
    ThisExpression,
    UnaryExpression,
    Unsupported,
    UpdateExpression,
    VariableDeclaration,
    VariableDeclarator,
)
from jsx2overreact.settings import ConverterSettings

JS_LANGUAGE = ts.Language(tsjs.language())
_parser: Optional[ts.Parser] = None

# Statement-level nodes that carry no content
_SKIPPED = ("comment", "empty_statement", "hash_bang_line")
# Leaf nodes that are folded into JSX text runs
_JSX_TEXT_TYPES = ("jsx_text", "html_character_reference", "comment")
_JSX_MARKUP = frozenset("<>{}")
# Expression statements made only of these read as prose, not code
_TEXT_NODE_TYPES = ("identifier", "number", "string", "true", "false", "null", "undefined")
_LOGICAL_OPERATORS = ("&&", "||", "??")


def _get_parser() -> ts.Parser:
    global _parser
    if _parser is None:
        _parser = ts.Parser(JS_LANGUAGE)
    return _parser


def _named(node: ts.Node) -> List[ts.Node]:
    return [c for c in node.named_children if c.type != "comment"]


def _first_named(node: Optional[ts.Node]) -> Optional[ts.Node]:
    if node is None:
        return None
    return next((c for c in node.named_children if c.type != "comment"), None)


def _find_error(node: ts.Node) -> Optional[ts.Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _find_error(child)
            if found is not None:
                return found
    return None


class JSXTreeProducer:
    """
    Turns JavaScript/JSX source into a tree of ``SyntaxNode`` models.

    tree-sitter produces a concrete syntax tree; every node type is mapped to
    its ESTree-shaped model through ``self._handlers``. Parentheses are not
    kept as nodes. Node types without a handler become ``Unsupported`` nodes
    so the renderer can report them.
    """

    def __init__(self, source: str, settings: Optional[ConverterSettings] = None):
        self.settings = settings or ConverterSettings()
        self.source = source
        self.source_bytes = source.encode("utf-8")
        self.parser = _get_parser()
        self._handlers: dict[str, Callable[[ts.Node], SyntaxNode]] = {
            # statements
            "expression_statement": self._handle_expression_statement,
            "lexical_declaration": self._handle_variable_declaration,
            "variable_declaration": self._handle_variable_declaration,
            "function_declaration": self._handle_function,
            "statement_block": self._handle_block,
            "return_statement": self._handle_return,
            "if_statement": self._handle_if,
            "export_statement": self._handle_export,
            # names and literals
            "identifier": self._handle_identifier,
            "property_identifier": self._handle_identifier,
            "private_property_identifier": self._handle_identifier,
            "shorthand_property_identifier": self._handle_identifier,
            "shorthand_property_identifier_pattern": self._handle_identifier,
            "undefined": self._handle_identifier,
            "super": self._handle_identifier,
            "this": self._handle_this,
            "string": self._handle_string,
            "number": self._handle_number,
            "true": self._handle_boolean,
            "false": self._handle_boolean,
            "null": self._handle_null,
            "regex": self._handle_regex,
            "template_string": self._handle_template_string,
            # compound expressions
            "object": self._handle_object,
            "object_pattern": self._handle_object_pattern,
            "array": self._handle_array,
            "array_pattern": self._handle_array_pattern,
            "assignment_pattern": self._handle_assignment_pattern,
            "rest_pattern": self._handle_rest,
            "spread_element": self._handle_spread,
            "arrow_function": self._handle_arrow_function,
            "function_expression": self._handle_function,
            "function": self._handle_function,
            "call_expression": self._handle_call,
            "new_expression": self._handle_new,
            "member_expression": self._handle_member,
            "subscript_expression": self._handle_subscript,
            "binary_expression": self._handle_binary,
            "unary_expression": self._handle_unary,
            "update_expression": self._handle_update,
            "ternary_expression": self._handle_ternary,
            "assignment_expression": self._handle_assignment,
            "augmented_assignment_expression": self._handle_assignment,
            "await_expression": self._handle_await,
            "sequence_expression": self._handle_sequence,
            # jsx
            "jsx_element": self._handle_jsx_element,
            "jsx_self_closing_element": self._handle_jsx_self_closing_element,
            "jsx_fragment": self._handle_jsx_fragment,
            "jsx_expression": self._handle_jsx_expression,
        }

    def parse(self) -> Program:
        tree = self.parser.parse(self.source_bytes)
        root = tree.root_node
        if (
            self.settings.text_fallback
            and not (_JSX_MARKUP & set(self.source))
            and (root.has_error or self._is_bare_text(root))
        ):
            logger.debug("Source is plain text", size=len(self.source))
            return self._text_program()
        if root.has_error:
            raise self._parse_error(_find_error(root))
        return Program(body=self._statements(root.named_children), **self._span(root))

    # --- helpers ----------------------------------------------------
    def _span(self, node: ts.Node) -> dict:
        return dict(start=node.start_byte, end=node.end_byte, line=node.start_point[0] + 1)

    def _slice(self, start: int, end: int) -> str:
        return self.source_bytes[start:end].decode("utf-8")

    def _process(self, node: ts.Node) -> SyntaxNode:
        if node.type == "parenthesized_expression":
            inner = _first_named(node)
            if inner is not None:
                return self._process(inner)
        handler = self._handlers.get(node.type)
        if handler is None:
            self._debug_unknown_node(node)
            return Unsupported(node_type=node.type, raw=get_node_text(node), **self._span(node))
        return handler(node)

    def _optional(self, node: Optional[ts.Node]) -> Optional[SyntaxNode]:
        return self._process(node) if node is not None else None

    def _statements(self, nodes: List[ts.Node]) -> List[SyntaxNode]:
        return [self._process(n) for n in nodes if n.type not in _SKIPPED]

    def _debug_unknown_node(self, node: ts.Node) -> None:
        logger.debug(
            "Unknown JavaScript node type",
            node_type=node.type,
            line=node.start_point[0] + 1,
            raw=(get_node_text(node) or "")[:200],
        )

    def _parse_error(self, error: Optional[ts.Node]) -> ParseError:
        if error is None:
            return ParseError("Invalid JavaScript/JSX source")
        row, column = error.start_point[0], error.start_point[1]
        if error.is_missing:
            message = f"Missing {error.type!r}"
        else:
            snippet = (get_node_text(error) or "")[:40]
            message = f"Unexpected {snippet!r}" if snippet else "Unexpected end of input"
        return ParseError(message, line=row + 1, column=column + 1)

    def _is_bare_text(self, root: ts.Node) -> bool:
        # prose such as "hello" or "Hello, World" is also valid JavaScript
        def is_word(node: Optional[ts.Node]) -> bool:
            if node is None:
                return False
            if node.type == "sequence_expression":
                return all(is_word(c) for c in _named(node))
            return node.type in _TEXT_NODE_TYPES

        return all(
            n.type == "expression_statement" and is_word(_first_named(n))
            for n in root.named_children
            if n.type not in _SKIPPED
        )

    def _text_program(self) -> Program:
        end = len(self.source_bytes)
        text = JSXText(value=self.source, raw=self.source, verbatim=True, start=0, end=end)
        statement = ExpressionStatement(expression=text, start=0, end=end)
        return Program(body=[statement], start=0, end=end)

    def _is_async(self, node: ts.Node) -> bool:
        return any(c.type == "async" for c in node.children)

    def _params(self, node: Optional[ts.Node]) -> List[SyntaxNode]:
        if node is None:
            return []
        return [self._process(c) for c in _named(node)]

    def _elements(self, node: ts.Node) -> List[Optional[SyntaxNode]]:
        # tree-sitter has no node for holes, so count the commas
        elements: List[Optional[SyntaxNode]] = []
        current: Optional[SyntaxNode] = None
        for child in node.children[1:-1]:
            if child.type == ",":
                elements.append(current)
                current = None
            elif child.is_named and child.type != "comment":
                current = self._process(child)
        if current is not None:
            elements.append(current)
        return elements

    # --- statements -------------------------------------------------
    def _handle_expression_statement(self, node: ts.Node) -> SyntaxNode:
        return ExpressionStatement(
            expression=self._process(_first_named(node)), **self._span(node)
        )

    def _handle_variable_declaration(self, node: ts.Node) -> SyntaxNode:
        declarators = [
            VariableDeclarator(
                id=self._process(c.child_by_field_name("name")),
                init=self._optional(c.child_by_field_name("value")),
                **self._span(c),
            )
            for c in node.named_children
            if c.type == "variable_declarator"
        ]
        return VariableDeclaration(
            declaration_kind=DeclarationKind(node.children[0].type),
            declarations=declarators,
            **self._span(node),
        )

    def _handle_function(self, node: ts.Node) -> SyntaxNode:
        name_node = node.child_by_field_name("name")
        model = FunctionDeclaration if node.type == "function_declaration" else FunctionExpression
        return model(
            id=self._handle_identifier(name_node) if name_node is not None else None,
            params=self._params(node.child_by_field_name("parameters")),
            body=self._handle_block(node.child_by_field_name("body")),
            is_async=self._is_async(node),
            **self._span(node),
        )

    def _handle_block(self, node: ts.Node) -> BlockStatement:
        return BlockStatement(body=self._statements(node.named_children), **self._span(node))

    def _handle_return(self, node: ts.Node) -> SyntaxNode:
        return ReturnStatement(argument=self._optional(_first_named(node)), **self._span(node))

    def _handle_if(self, node: ts.Node) -> SyntaxNode:
        alternative = node.child_by_field_name("alternative")
        return IfStatement(
            test=self._process(node.child_by_field_name("condition")),
            consequent=self._process(node.child_by_field_name("consequence")),
            alternate=self._optional(_first_named(alternative)),
            **self._span(node),
        )

    def _handle_export(self, node: ts.Node) -> SyntaxNode:
        declaration = node.child_by_field_name("declaration") or node.child_by_field_name(
            "value"
        )
        if declaration is None:
            # export { a, b } / export * from "x"
            self._debug_unknown_node(node)
            return Unsupported(node_type=node.type, raw=get_node_text(node), **self._span(node))
        return ExportDeclaration(
            declaration=self._process(declaration),
            default=any(c.type == "default" for c in node.children),
            **self._span(node),
        )

    # --- names and literals -----------------------------------------
    def _handle_identifier(self, node: ts.Node) -> Identifier:
        return Identifier(name=get_node_text(node), **self._span(node))

    def _handle_this(self, node: ts.Node) -> SyntaxNode:
        return ThisExpression(**self._span(node))

    def _handle_string(self, node: ts.Node) -> SyntaxNode:
        raw = get_node_text(node)
        return Literal(raw=raw, value=decode_string_literal(raw), **self._span(node))

    def _handle_number(self, node: ts.Node) -> SyntaxNode:
        raw = get_node_text(node)
        if raw.endswith("n"):
            return Literal(raw=raw, bigint=raw[:-1].replace("_", ""), **self._span(node))
        return Literal(raw=raw, value=parse_number(raw), **self._span(node))

    def _handle_boolean(self, node: ts.Node) -> SyntaxNode:
        return Literal(raw=node.type, value=node.type == "true", **self._span(node))

    def _handle_null(self, node: ts.Node) -> SyntaxNode:
        return Literal(raw="null", value=None, **self._span(node))

    def _handle_regex(self, node: ts.Node) -> SyntaxNode:
        regex = RegexValue(
            pattern=get_node_text(node.child_by_field_name("pattern")),
            flags=get_node_text(node.child_by_field_name("flags")),
        )
        return Literal(raw=get_node_text(node), regex=regex, **self._span(node))

    def _handle_template_string(self, node: ts.Node) -> SyntaxNode:
        quasis: List[str] = []
        expressions: List[SyntaxNode] = []
        pos = node.start_byte + 1
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            quasis.append(self._slice(pos, child.start_byte))
            expressions.append(self._process(_first_named(child)))
            pos = child.end_byte
        quasis.append(self._slice(pos, node.end_byte - 1))
        return TemplateLiteral(quasis=quasis, expressions=expressions, **self._span(node))

    # --- objects and arrays -----------------------------------------
    def _handle_object(self, node: ts.Node) -> SyntaxNode:
        return ObjectExpression(
            properties=[self._property(c) for c in _named(node)], **self._span(node)
        )

    def _property(self, node: ts.Node) -> SyntaxNode:
        if node.type in ("pair", "pair_pattern"):
            key = node.child_by_field_name("key")
            computed = key.type == "computed_property_name"
            return Property(
                key=self._process(_first_named(key)) if computed else self._process(key),
                value=self._process(node.child_by_field_name("value")),
                computed=computed,
                **self._span(node),
            )
        if node.type in ("shorthand_property_identifier", "shorthand_property_identifier_pattern"):
            name = self._handle_identifier(node)
            return Property(key=name, value=name, shorthand=True, **self._span(node))
        if node.type == "object_assignment_pattern":
            left = node.child_by_field_name("left")
            value = AssignmentPattern(
                left=self._process(left),
                right=self._process(node.child_by_field_name("right")),
                **self._span(node),
            )
            if left.type != "shorthand_property_identifier_pattern":
                return value
            return Property(
                key=self._handle_identifier(left), value=value, shorthand=True, **self._span(node)
            )
        if node.type == "method_definition":
            return self._method(node)
        return self._process(node)

    def _method(self, node: ts.Node) -> SyntaxNode:
        name = node.child_by_field_name("name")
        modifiers = {c.type for c in node.children if not c.is_named}
        if "get" in modifiers:
            kind = PropertyKind.GET
        elif "set" in modifiers:
            kind = PropertyKind.SET
        else:
            kind = PropertyKind.INIT
        computed = name.type == "computed_property_name"
        function = FunctionExpression(
            params=self._params(node.child_by_field_name("parameters")),
            body=self._handle_block(node.child_by_field_name("body")),
            is_async="async" in modifiers,
            **self._span(node),
        )
        return Property(
            key=self._process(_first_named(name)) if computed else self._process(name),
            value=function,
            computed=computed,
            method=kind == PropertyKind.INIT,
            property_kind=kind,
            **self._span(node),
        )

    def _handle_object_pattern(self, node: ts.Node) -> SyntaxNode:
        return ObjectPattern(
            properties=[self._property(c) for c in _named(node)], **self._span(node)
        )

    def _handle_array(self, node: ts.Node) -> SyntaxNode:
        return ArrayExpression(elements=self._elements(node), **self._span(node))

    def _handle_array_pattern(self, node: ts.Node) -> SyntaxNode:
        return ArrayPattern(elements=self._elements(node), **self._span(node))

    def _handle_assignment_pattern(self, node: ts.Node) -> SyntaxNode:
        return AssignmentPattern(
            left=self._process(node.child_by_field_name("left")),
            right=self._process(node.child_by_field_name("right")),
            **self._span(node),
        )

    def _handle_rest(self, node: ts.Node) -> SyntaxNode:
        return RestElement(argument=self._process(_first_named(node)), **self._span(node))

    def _handle_spread(self, node: ts.Node) -> SyntaxNode:
        return SpreadElement(argument=self._process(_first_named(node)), **self._span(node))

    # --- functions and calls ----------------------------------------
    def _handle_arrow_function(self, node: ts.Node) -> SyntaxNode:
        param = node.child_by_field_name("parameter")
        if param is not None:
            params = [self._process(param)]
        else:
            params = self._params(node.child_by_field_name("parameters"))
        return ArrowFunctionExpression(
            params=params,
            body=self._process(node.child_by_field_name("body")),
            is_async=self._is_async(node),
            **self._span(node),
        )

    def _handle_call(self, node: ts.Node) -> SyntaxNode:
        arguments = node.child_by_field_name("arguments")
        if arguments is None or arguments.type != "arguments":
            # tagged template: styled.div`...`
            self._debug_unknown_node(node)
            return Unsupported(
                node_type="tagged_template", raw=get_node_text(node), **self._span(node)
            )
        return CallExpression(
            callee=self._process(node.child_by_field_name("function")),
            arguments=[self._process(a) for a in _named(arguments)],
            optional=any(c.type == "optional_chain" for c in node.children),
            **self._span(node),
        )

    def _handle_new(self, node: ts.Node) -> SyntaxNode:
        arguments = node.child_by_field_name("arguments")
        return NewExpression(
            callee=self._process(node.child_by_field_name("constructor")),
            arguments=[self._process(a) for a in _named(arguments)] if arguments else [],
            **self._span(node),
        )

    def _handle_member(self, node: ts.Node) -> SyntaxNode:
        return MemberExpression(
            object=self._process(node.child_by_field_name("object")),
            property=self._process(node.child_by_field_name("property")),
            optional=any(c.type == "optional_chain" for c in node.children),
            **self._span(node),
        )

    def _handle_subscript(self, node: ts.Node) -> SyntaxNode:
        return MemberExpression(
            object=self._process(node.child_by_field_name("object")),
            property=self._process(node.child_by_field_name("index")),
            computed=True,
            optional=any(c.type == "optional_chain" for c in node.children),
            **self._span(node),
        )

    # --- operators --------------------------------------------------
    def _handle_binary(self, node: ts.Node) -> SyntaxNode:
        operator = node.child_by_field_name("operator").type
        kind = (
            NodeKind.LOGICAL_EXPRESSION
            if operator in _LOGICAL_OPERATORS
            else NodeKind.BINARY_EXPRESSION
        )
        return BinaryExpression(
            kind=kind,
            operator=operator,
            left=self._process(node.child_by_field_name("left")),
            right=self._process(node.child_by_field_name("right")),
            **self._span(node),
        )

    def _handle_unary(self, node: ts.Node) -> SyntaxNode:
        return UnaryExpression(
            operator=node.child_by_field_name("operator").type,
            argument=self._process(node.child_by_field_name("argument")),
            **self._span(node),
        )

    def _handle_update(self, node: ts.Node) -> SyntaxNode:
        operator = node.child_by_field_name("operator")
        return UpdateExpression(
            operator=operator.type,
            argument=self._process(node.child_by_field_name("argument")),
            prefix=operator.start_byte == node.start_byte,
            **self._span(node),
        )

    def _handle_ternary(self, node: ts.Node) -> SyntaxNode:
        return ConditionalExpression(
            test=self._process(node.child_by_field_name("condition")),
            consequent=self._process(node.child_by_field_name("consequence")),
            alternate=self._process(node.child_by_field_name("alternative")),
            **self._span(node),
        )

    def _handle_assignment(self, node: ts.Node) -> SyntaxNode:
        operator = node.child_by_field_name("operator")
        return AssignmentExpression(
            operator=operator.type if operator is not None else "=",
            left=self._process(node.child_by_field_name("left")),
            right=self._process(node.child_by_field_name("right")),
            **self._span(node),
        )

    def _handle_await(self, node: ts.Node) -> SyntaxNode:
        return AwaitExpression(argument=self._process(_first_named(node)), **self._span(node))

    def _handle_sequence(self, node: ts.Node) -> SyntaxNode:
        expressions: List[SyntaxNode] = []
        for child in _named(node):
            item = self._process(child)
            if isinstance(item, SequenceExpression):
                expressions.extend(item.expressions)
            else:
                expressions.append(item)
        return SequenceExpression(expressions=expressions, **self._span(node))

    # --- jsx --------------------------------------------------------
    def _handle_jsx_element(self, node: ts.Node) -> SyntaxNode:
        open_tag = node.child_by_field_name("open_tag") or next(
            c for c in node.named_children if c.type == "jsx_opening_element"
        )
        close_tag = node.child_by_field_name("close_tag") or next(
            c for c in reversed(node.named_children) if c.type == "jsx_closing_element"
        )
        children = self._jsx_children(node, open_tag.end_byte, close_tag.start_byte)
        name_node = open_tag.child_by_field_name("name")
        if name_node is None:
            # <>...</> is an element without a name in recent grammars
            return JSXFragment(children=children, **self._span(node))
        return JSXElement(
            opening=self._jsx_opening(open_tag, name_node, self_closing=False),
            children=children,
            **self._span(node),
        )

    def _handle_jsx_self_closing_element(self, node: ts.Node) -> SyntaxNode:
        name_node = node.child_by_field_name("name")
        return JSXElement(
            opening=self._jsx_opening(node, name_node, self_closing=True),
            children=[],
            **self._span(node),
        )

    def _handle_jsx_fragment(self, node: ts.Node) -> SyntaxNode:
        tokens = [c for c in node.children if not c.is_named]
        start = tokens[1].end_byte
        end = [t for t in tokens if t.type == "<"][-1].start_byte
        return JSXFragment(children=self._jsx_children(node, start, end), **self._span(node))

    def _jsx_opening(
        self, node: ts.Node, name_node: ts.Node, *, self_closing: bool
    ) -> JSXOpeningElement:
        attributes: List[SyntaxNode] = []
        for child in _named(node):
            if child.start_byte == name_node.start_byte and child.end_byte == name_node.end_byte:
                continue
            if child.type == "jsx_attribute":
                attributes.append(self._jsx_attribute(child))
            elif child.type == "jsx_expression":
                inner = _first_named(child)
                if inner is not None and inner.type == "spread_element":
                    attributes.append(
                        JSXSpreadAttribute(
                            argument=self._process(_first_named(inner)), **self._span(child)
                        )
                    )
                else:
                    attributes.append(self._process(child))
            else:
                attributes.append(self._process(child))
        return JSXOpeningElement(
            name=self._jsx_name(name_node),
            attributes=attributes,
            self_closing=self_closing,
            **self._span(node),
        )

    def _jsx_name(self, node: ts.Node) -> SyntaxNode:
        if node.type in ("identifier", "jsx_identifier", "property_identifier"):
            return JSXIdentifier(name=get_node_text(node), **self._span(node))
        if node.type in ("member_expression", "nested_identifier"):
            parts = _named(node)
            obj = node.child_by_field_name("object") or parts[0]
            prop = node.child_by_field_name("property") or parts[-1]
            return JSXMemberExpression(
                object=self._jsx_name(obj),
                property=JSXIdentifier(name=get_node_text(prop), **self._span(prop)),
                **self._span(node),
            )
        if node.type == "jsx_namespace_name":
            namespace, name = _named(node)[:2]
            return JSXNamespacedName(
                namespace=JSXIdentifier(name=get_node_text(namespace), **self._span(namespace)),
                name=JSXIdentifier(name=get_node_text(name), **self._span(name)),
                **self._span(node),
            )
        self._debug_unknown_node(node)
        return Unsupported(node_type=node.type, raw=get_node_text(node), **self._span(node))

    def _jsx_attribute(self, node: ts.Node) -> SyntaxNode:
        parts = _named(node)
        value: Optional[SyntaxNode] = None
        if len(parts) > 1:
            value_node = parts[1]
            if value_node.type == "string":
                # attribute strings have no escape sequences, only entities
                raw = get_node_text(value_node)
                value = Literal(
                    raw=raw, value=html.unescape(raw[1:-1]), **self._span(value_node)
                )
            else:
                value = self._process(value_node)
        return JSXAttribute(name=self._jsx_name(parts[0]), value=value, **self._span(node))

    def _handle_jsx_expression(self, node: ts.Node) -> SyntaxNode:
        inner = _first_named(node)
        if inner is None:
            expression: SyntaxNode = JSXEmptyExpression(**self._span(node))
        else:
            expression = self._process(inner)
        return JSXExpressionContainer(expression=expression, **self._span(node))

    def _jsx_children(self, node: ts.Node, start: int, end: int) -> List[SyntaxNode]:
        # Text is taken from the gaps between child elements and expressions
        children: List[SyntaxNode] = []
        pos = start
        for child in node.named_children:
            if child.start_byte < start or child.end_byte > end:
                continue
            if child.type in _JSX_TEXT_TYPES:
                continue
            if child.start_byte > pos:
                children.append(self._jsx_text(pos, child.start_byte))
            children.append(self._process(child))
            pos = child.end_byte
        if end > pos:
            children.append(self._jsx_text(pos, end))
        return children

    def _jsx_text(self, start: int, end: int) -> JSXText:
        raw = self._slice(start, end)
        return JSXText(
            value=html.unescape(raw),
            raw=raw,
            start=start,
            end=end,
            line=self.source_bytes.count(b"\n", 0, start) + 1,
        )


def parse(source: str, settings: Optional[ConverterSettings] = None) -> Program:
    """
    Parse JavaScript/JSX *source* into a ``Program``. Raises ``ParseError``
    when the source is not syntactically valid.
    """
    return JSXTreeProducer(source, settings).parse()
