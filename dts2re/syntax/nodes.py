"""Declaration syntax tree node definitions.

These nodes describe the public surface of a TypeScript declaration file in a
parser-independent way. The front-end builds them, the translator only reads
them.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass
class Node:
    """Base syntax node"""

    line: int | None = field(default=None, kw_only=True)


# ====================
# Names and Expressions
# ====================


@dataclass
class Identifier(Node):
    text: str


@dataclass
class StringLiteral(Node):
    """String literal, stored without quotes"""

    text: str


@dataclass
class NumericLiteral(Node):
    text: str


@dataclass
class QualifiedName(Node):
    """Dotted type name: `left.right`"""

    left: Union["QualifiedName", Identifier]
    right: Identifier

    @property
    def text(self) -> str:
        return f"{self.left.text}.{self.right.text}"


@dataclass
class PropertyAccessExpression(Node):
    """Dotted value expression: `expression.name`"""

    expression: Union["PropertyAccessExpression", Identifier]
    name: Identifier

    @property
    def text(self) -> str:
        return f"{self.expression.text}.{self.name.text}"


@dataclass
class ComputedPropertyName(Node):
    """Member name written in brackets, e.g. `[Symbol.iterator]`"""

    expression: PropertyAccessExpression | Identifier | StringLiteral | None = None


EntityName = Union[Identifier, QualifiedName]
PropertyName = Union[Identifier, StringLiteral, NumericLiteral, ComputedPropertyName]


# ====================
# Types
# ====================


@dataclass
class TypeNode(Node):
    """Base type node"""

    pass


@dataclass
class KeywordType(TypeNode):
    """Predefined type such as `string`, `number` or `any`"""

    keyword: str


@dataclass
class ArrayType(TypeNode):
    element_type: TypeNode


@dataclass
class UnionType(TypeNode):
    types: list[TypeNode] = field(default_factory=list)


@dataclass
class TupleType(TypeNode):
    element_types: list[TypeNode] = field(default_factory=list)


@dataclass
class ParenthesizedType(TypeNode):
    type: TypeNode


@dataclass
class ThisType(TypeNode):
    pass


@dataclass
class TypeReference(TypeNode):
    """Named type, e.g. `Foo`, `NodeJS.Buffer` or `Promise<string>`"""

    type_name: EntityName | None = None
    type_arguments: list[TypeNode] = field(default_factory=list)


@dataclass
class ExpressionWithTypeArguments(TypeNode):
    """Heritage clause entry, e.g. `extends EventEmitter`"""

    expression: PropertyAccessExpression | Identifier | None = None
    type_arguments: list[TypeNode] = field(default_factory=list)


@dataclass
class StringLiteralType(TypeNode):
    text: str


@dataclass
class LiteralType(TypeNode):
    """Non-string literal type (`42`, `true`, `null`, ...)"""

    text: str


@dataclass
class OpaqueType(TypeNode):
    """Type shape without dedicated support, kept as source text"""

    text: str = ""


# ====================
# Members
# ====================


@dataclass
class TypeParameter(Node):
    name: Identifier


@dataclass
class Parameter(Node):
    name: Identifier | None = None
    type: TypeNode | None = None
    question_token: bool = False
    dot_dot_dot_token: bool = False


@dataclass
class Member(Node):
    """Base for class and interface members"""

    name: PropertyName | None = None
    type: TypeNode | None = None
    question_token: bool = False
    modifiers: list[str] = field(default_factory=list)


@dataclass
class PropertySignature(Member):
    pass


@dataclass
class PropertyDeclaration(Member):
    pass


@dataclass
class SignatureDeclaration(Member):
    """Base for everything that has a parameter list"""

    type_parameters: list[TypeParameter] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)


@dataclass
class MethodSignature(SignatureDeclaration):
    pass


@dataclass
class MethodDeclaration(SignatureDeclaration):
    pass


@dataclass
class CallSignature(SignatureDeclaration):
    pass


@dataclass
class ConstructSignature(SignatureDeclaration):
    pass


@dataclass
class IndexSignature(SignatureDeclaration):
    pass


@dataclass
class Constructor(SignatureDeclaration):
    pass


@dataclass
class FunctionType(SignatureDeclaration, TypeNode):
    """Function type literal: `(a: string) => void`"""

    pass


@dataclass
class TypeLiteral(TypeNode):
    """Inline object type: `{ x: number }`"""

    members: list[Member] = field(default_factory=list)


# ====================
# Statements
# ====================


@dataclass
class Statement(Node):
    """Base statement node"""

    pass


@dataclass
class HeritageClause(Node):
    token: str
    types: list[ExpressionWithTypeArguments] = field(default_factory=list)


@dataclass
class InterfaceDeclaration(Statement):
    name: Identifier | None = None
    type_parameters: list[TypeParameter] = field(default_factory=list)
    heritage_clauses: list[HeritageClause] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)


@dataclass
class ClassDeclaration(InterfaceDeclaration):
    modifiers: list[str] = field(default_factory=list)


@dataclass
class TypeAliasDeclaration(Statement):
    name: Identifier | None = None
    type_parameters: list[TypeParameter] = field(default_factory=list)
    type: TypeNode | None = None


@dataclass
class VariableDeclaration(Node):
    name: Identifier | None = None
    type: TypeNode | None = None


@dataclass
class VariableStatement(Statement):
    declaration_list: list[VariableDeclaration] = field(default_factory=list)


@dataclass
class FunctionDeclaration(SignatureDeclaration, Statement):
    pass


@dataclass
class EnumDeclaration(Statement):
    name: Identifier | None = None
    members: list[str] = field(default_factory=list)


@dataclass
class ModuleBlock(Node):
    statements: list[Statement] = field(default_factory=list)


@dataclass
class ModuleDeclaration(Statement):
    """`namespace X { ... }` or `module "x" { ... }`"""

    name: Identifier | StringLiteral | None = None
    body: Union["ModuleDeclaration", ModuleBlock, None] = None


@dataclass
class SourceFile(Node):
    file_name: str
    statements: list[Statement] = field(default_factory=list)


__all__ = [
    "ArrayType",
    "CallSignature",
    "ClassDeclaration",
    "ComputedPropertyName",
    "ConstructSignature",
    "Constructor",
    "EntityName",
    "EnumDeclaration",
    "ExpressionWithTypeArguments",
    "FunctionDeclaration",
    "FunctionType",
    "HeritageClause",
    "Identifier",
    "IndexSignature",
    "InterfaceDeclaration",
    "KeywordType",
    "LiteralType",
    "Member",
    "MethodDeclaration",
    "MethodSignature",
    "ModuleBlock",
    "ModuleDeclaration",
    "Node",
    "NumericLiteral",
    "OpaqueType",
    "Parameter",
    "ParenthesizedType",
    "PropertyAccessExpression",
    "PropertyDeclaration",
    "PropertyName",
    "PropertySignature",
    "QualifiedName",
    "SignatureDeclaration",
    "SourceFile",
    "Statement",
    "StringLiteral",
    "StringLiteralType",
    "ThisType",
    "TupleType",
    "TypeAliasDeclaration",
    "TypeLiteral",
    "TypeNode",
    "TypeParameter",
    "TypeReference",
    "UnionType",
    "VariableDeclaration",
    "VariableStatement",
]
