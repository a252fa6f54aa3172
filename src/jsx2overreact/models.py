from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class NodeKind(str, Enum):
    # Statements
    PROGRAM = "Program"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"
    RETURN_STATEMENT = "ReturnStatement"
    IF_STATEMENT = "IfStatement"
    EXPORT_DECLARATION = "ExportDeclaration"
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    # Expressions
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    TEMPLATE_LITERAL = "TemplateLiteral"
    THIS_EXPRESSION = "ThisExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    PROPERTY = "Property"
    SPREAD_ELEMENT = "SpreadElement"
    ARRAY_EXPRESSION = "ArrayExpression"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    FUNCTION_EXPRESSION = "FunctionExpression"
    CALL_EXPRESSION = "CallExpression"
    NEW_EXPRESSION = "NewExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    BINARY_EXPRESSION = "BinaryExpression"
    LOGICAL_EXPRESSION = "LogicalExpression"
    UNARY_EXPRESSION = "UnaryExpression"
    UPDATE_EXPRESSION = "UpdateExpression"
    CONDITIONAL_EXPRESSION = "ConditionalExpression"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"
    AWAIT_EXPRESSION = "AwaitExpression"
    SEQUENCE_EXPRESSION = "SequenceExpression"
    # Patterns
    ARRAY_PATTERN = "ArrayPattern"
    OBJECT_PATTERN = "ObjectPattern"
    ASSIGNMENT_PATTERN = "AssignmentPattern"
    REST_ELEMENT = "RestElement"
    # JSX
    JSX_ELEMENT = "JSXElement"
    JSX_OPENING_ELEMENT = "JSXOpeningElement"
    JSX_FRAGMENT = "JSXFragment"
    JSX_ATTRIBUTE = "JSXAttribute"
    JSX_SPREAD_ATTRIBUTE = "JSXSpreadAttribute"
    JSX_EXPRESSION_CONTAINER = "JSXExpressionContainer"
    JSX_EMPTY_EXPRESSION = "JSXEmptyExpression"
    JSX_TEXT = "JSXText"
    JSX_IDENTIFIER = "JSXIdentifier"
    JSX_MEMBER_EXPRESSION = "JSXMemberExpression"
    JSX_NAMESPACED_NAME = "JSXNamespacedName"
    # Valid syntax without a model (kept so the renderer can report it)
    UNSUPPORTED = "Unsupported"


class DeclarationKind(str, Enum):
    VAR = "var"
    LET = "let"
    CONST = "const"


class PropertyKind(str, Enum):
    INIT = "init"
    GET = "get"
    SET = "set"


# ---------------------------------------------------------------------------
# Syntax nodes
# ---------------------------------------------------------------------------


class SyntaxNode(BaseModel):
    kind: NodeKind
    start: int = 0  # byte offset into the UTF-8 encoded source
    end: int = 0
    line: int = 1

    def contains(self, other: "SyntaxNode") -> bool:
        return self.start <= other.start and other.end <= self.end


class Unsupported(SyntaxNode):
    kind: NodeKind = NodeKind.UNSUPPORTED
    node_type: str  # tree-sitter node type
    raw: str = ""


class Identifier(SyntaxNode):
    kind: NodeKind = NodeKind.IDENTIFIER
    name: str


class RegexValue(BaseModel):
    pattern: str
    flags: str = ""


class Literal(SyntaxNode):
    kind: NodeKind = NodeKind.LITERAL
    raw: str
    value: Any = None
    regex: Optional[RegexValue] = None
    bigint: Optional[str] = None


class TemplateLiteral(SyntaxNode):
    kind: NodeKind = NodeKind.TEMPLATE_LITERAL
    quasis: List[str] = Field(default_factory=list)  # raw text, len(expressions) + 1
    expressions: List[SyntaxNode] = Field(default_factory=list)


class ThisExpression(SyntaxNode):
    kind: NodeKind = NodeKind.THIS_EXPRESSION


class SpreadElement(SyntaxNode):
    kind: NodeKind = NodeKind.SPREAD_ELEMENT
    argument: SyntaxNode


class RestElement(SyntaxNode):
    kind: NodeKind = NodeKind.REST_ELEMENT
    argument: SyntaxNode


class AssignmentPattern(SyntaxNode):
    kind: NodeKind = NodeKind.ASSIGNMENT_PATTERN
    left: SyntaxNode
    right: SyntaxNode


class ArrayPattern(SyntaxNode):
    kind: NodeKind = NodeKind.ARRAY_PATTERN
    elements: List[Optional[SyntaxNode]] = Field(default_factory=list)


class BlockStatement(SyntaxNode):
    kind: NodeKind = NodeKind.BLOCK_STATEMENT
    body: List[SyntaxNode] = Field(default_factory=list)


class Property(SyntaxNode):
    kind: NodeKind = NodeKind.PROPERTY
    key: SyntaxNode
    value: SyntaxNode
    computed: bool = False
    shorthand: bool = False
    method: bool = False
    property_kind: PropertyKind = PropertyKind.INIT


class ObjectExpression(SyntaxNode):
    kind: NodeKind = NodeKind.OBJECT_EXPRESSION
    properties: List[SyntaxNode] = Field(default_factory=list)


class ObjectPattern(SyntaxNode):
    kind: NodeKind = NodeKind.OBJECT_PATTERN
    properties: List[SyntaxNode] = Field(default_factory=list)


class ArrayExpression(SyntaxNode):
    kind: NodeKind = NodeKind.ARRAY_EXPRESSION
    elements: List[Optional[SyntaxNode]] = Field(default_factory=list)


class ArrowFunctionExpression(SyntaxNode):
    kind: NodeKind = NodeKind.ARROW_FUNCTION_EXPRESSION
    params: List[SyntaxNode] = Field(default_factory=list)
    body: SyntaxNode
    is_async: bool = False


class FunctionExpression(SyntaxNode):
    kind: NodeKind = NodeKind.FUNCTION_EXPRESSION
    id: Optional[Identifier] = None
    params: List[SyntaxNode] = Field(default_factory=list)
    body: BlockStatement
    is_async: bool = False


class FunctionDeclaration(FunctionExpression):
    kind: NodeKind = NodeKind.FUNCTION_DECLARATION


class CallExpression(SyntaxNode):
    kind: NodeKind = NodeKind.CALL_EXPRESSION
    callee: SyntaxNode
    arguments: List[SyntaxNode] = Field(default_factory=list)
    optional: bool = False


class NewExpression(SyntaxNode):
    kind: NodeKind = NodeKind.NEW_EXPRESSION
    callee: SyntaxNode
    arguments: List[SyntaxNode] = Field(default_factory=list)


class MemberExpression(SyntaxNode):
    kind: NodeKind = NodeKind.MEMBER_EXPRESSION
    object: SyntaxNode
    property: SyntaxNode
    computed: bool = False
    optional: bool = False


class BinaryExpression(SyntaxNode):
    kind: NodeKind = NodeKind.BINARY_EXPRESSION
    operator: str
    left: SyntaxNode
    right: SyntaxNode


class UnaryExpression(SyntaxNode):
    kind: NodeKind = NodeKind.UNARY_EXPRESSION
    operator: str
    argument: SyntaxNode


class UpdateExpression(SyntaxNode):
    kind: NodeKind = NodeKind.UPDATE_EXPRESSION
    operator: str
    argument: SyntaxNode
    prefix: bool = False


class ConditionalExpression(SyntaxNode):
    kind: NodeKind = NodeKind.CONDITIONAL_EXPRESSION
    test: SyntaxNode
    consequent: SyntaxNode
    alternate: SyntaxNode


class AssignmentExpression(SyntaxNode):
    kind: NodeKind = NodeKind.ASSIGNMENT_EXPRESSION
    operator: str = "="
    left: SyntaxNode
    right: SyntaxNode


class AwaitExpression(SyntaxNode):
    kind: NodeKind = NodeKind.AWAIT_EXPRESSION
    argument: SyntaxNode


class SequenceExpression(SyntaxNode):
    kind: NodeKind = NodeKind.SEQUENCE_EXPRESSION
    expressions: List[SyntaxNode] = Field(default_factory=list)


class VariableDeclarator(SyntaxNode):
    kind: NodeKind = NodeKind.VARIABLE_DECLARATOR
    id: SyntaxNode
    init: Optional[SyntaxNode] = None


class VariableDeclaration(SyntaxNode):
    kind: NodeKind = NodeKind.VARIABLE_DECLARATION
    declaration_kind: DeclarationKind = DeclarationKind.VAR
    declarations: List[VariableDeclarator] = Field(default_factory=list)


class ExpressionStatement(SyntaxNode):
    kind: NodeKind = NodeKind.EXPRESSION_STATEMENT
    expression: SyntaxNode


class ReturnStatement(SyntaxNode):
    kind: NodeKind = NodeKind.RETURN_STATEMENT
    argument: Optional[SyntaxNode] = None


class IfStatement(SyntaxNode):
    kind: NodeKind = NodeKind.IF_STATEMENT
    test: SyntaxNode
    consequent: SyntaxNode
    alternate: Optional[SyntaxNode] = None


class ExportDeclaration(SyntaxNode):
    kind: NodeKind = NodeKind.EXPORT_DECLARATION
    declaration: SyntaxNode
    default: bool = False


class Program(SyntaxNode):
    kind: NodeKind = NodeKind.PROGRAM
    body: List[SyntaxNode] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# JSX
# ---------------------------------------------------------------------------


class JSXIdentifier(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_IDENTIFIER
    name: str


class JSXNamespacedName(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_NAMESPACED_NAME
    namespace: JSXIdentifier
    name: JSXIdentifier


class JSXMemberExpression(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_MEMBER_EXPRESSION
    object: SyntaxNode  # JSXIdentifier | JSXMemberExpression
    property: JSXIdentifier


class JSXEmptyExpression(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_EMPTY_EXPRESSION


class JSXExpressionContainer(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_EXPRESSION_CONTAINER
    expression: SyntaxNode


class JSXText(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_TEXT
    value: str
    raw: str = ""
    verbatim: bool = False  # plain-text input, rendered without JSX whitespace rules


class JSXAttribute(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_ATTRIBUTE
    name: SyntaxNode  # JSXIdentifier | JSXNamespacedName
    value: Optional[SyntaxNode] = None


class JSXSpreadAttribute(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_SPREAD_ATTRIBUTE
    argument: SyntaxNode


class JSXOpeningElement(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_OPENING_ELEMENT
    name: SyntaxNode  # JSXIdentifier | JSXMemberExpression | JSXNamespacedName
    attributes: List[SyntaxNode] = Field(default_factory=list)
    self_closing: bool = False


class JSXElement(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_ELEMENT
    opening: JSXOpeningElement
    children: List[SyntaxNode] = Field(default_factory=list)


class JSXFragment(SyntaxNode):
    kind: NodeKind = NodeKind.JSX_FRAGMENT
    children: List[SyntaxNode] = Field(default_factory=list)
