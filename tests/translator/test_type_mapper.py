"""Tests for the type mapper module."""

import pytest

from dts2re.syntax.nodes import (
    ArrayType,
    ExpressionWithTypeArguments,
    FunctionType,
    Identifier,
    InterfaceDeclaration,
    KeywordType,
    LiteralType,
    OpaqueType,
    Parameter,
    ParenthesizedType,
    PropertyAccessExpression,
    QualifiedName,
    StringLiteralType,
    ThisType,
    TupleType,
    TypeParameter,
    TypeReference,
    UnionType,
)
from dts2re.syntax.scope import TypeScope
from dts2re.translator.type_mapper import map_type, map_type_arguments


def ref(name: str, *arguments) -> TypeReference:
    left, *rest = name.split(".")
    type_name = Identifier(left)
    for part in rest:
        type_name = QualifiedName(type_name, Identifier(part))
    return TypeReference(type_name, list(arguments))


@pytest.mark.parametrize(
    "keyword, expected",
    [
        ("string", "string"),
        ("number", "float"),
        ("boolean", "bool"),
        ("void", "unit"),
        ("symbol", "Symbol"),
    ],
)
def test_primitive_types(keyword, expected):
    """Test that predefined types use the primitive table."""
    assert map_type(KeywordType(keyword)) == expected


def test_missing_type_is_placeholder():
    assert map_type(None) == "'a"


@pytest.mark.parametrize("keyword", ["any", "unknown", "never", "object"])
def test_unsupported_keyword_is_placeholder(keyword):
    assert map_type(KeywordType(keyword)) == "'a"


def test_unsupported_shapes_are_placeholders():
    """Test that shapes without a target equivalent degrade instead of failing."""
    assert map_type(OpaqueType("keyof Foo")) == "'a"
    assert map_type(LiteralType("42")) == "'a"
    assert map_type(TypeReference()) == "'a"


def test_array_type():
    assert map_type(ArrayType(KeywordType("string"))) == "array string"
    nested = ArrayType(ArrayType(KeywordType("number")))
    assert map_type(nested) == "array array float"


def test_function_type():
    """Test that function types become arrow chains in parentheses."""
    # Arrange
    node = FunctionType(
        parameters=[
            Parameter(name=Identifier("x"), type=KeywordType("number")),
            Parameter(name=Identifier("y"), type=KeywordType("string")),
        ],
        type=KeywordType("void"),
    )

    # Act & Assert
    assert map_type(node) == "(float => string => unit)"


def test_function_type_without_parameters():
    node = FunctionType(type=KeywordType("boolean"))
    assert map_type(node) == "(unit => bool)"


def test_function_type_rest_parameter_is_placeholder():
    node = FunctionType(
        parameters=[
            Parameter(
                name=Identifier("args"),
                type=ArrayType(KeywordType("string")),
                dot_dot_dot_token=True,
            )
        ],
        type=KeywordType("void"),
    )
    assert map_type(node) == "('a => unit)"


def test_function_type_sees_own_type_parameters():
    node = FunctionType(
        type_parameters=[TypeParameter(Identifier("U"))],
        parameters=[Parameter(name=Identifier("value"), type=ref("U"))],
        type=ref("U"),
    )
    assert map_type(node) == "('U => 'U)"


def test_string_literal_union():
    """Test that string literal unions are annotated with their values."""
    node = UnionType([StringLiteralType("left"), StringLiteralType("right")])
    assert map_type(node) == '/* StringEnum "left" | "right" */ string'


@pytest.mark.parametrize(
    "arms",
    [
        [KeywordType("string"), KeywordType("number")],
        [ref("Foo"), ref("Bar"), ref("Baz"), ref("Qux"), ref("Quux")],
        [KeywordType("number"), StringLiteralType("auto")],
    ],
)
def test_other_unions_are_placeholders(arms):
    assert map_type(UnionType(arms)) == "'a"


def test_tuple_type():
    node = TupleType([KeywordType("number"), KeywordType("string")])
    assert map_type(node) == "float * string"


def test_parenthesized_type_is_transparent():
    inner = FunctionType(type=KeywordType("void"))
    assert map_type(ParenthesizedType(inner)) == map_type(inner)


def test_this_type():
    assert map_type(ThisType()) == "t"


def test_type_reference_uses_instance_type():
    assert map_type(ref("BrowserWindow")) == "BrowserWindow.t"


def test_qualified_type_reference():
    """Test that dotted names render as the nested module's instance type."""
    assert map_type(ref("Electron.WebContents")) == "Electron.WebContents.t"
    assert map_type(ref("A.B.C")) == "A.B.C.t"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Date", "DateTime"),
        ("Object", "obj"),
        ("RegExp", "Regex"),
        ("String", "string"),
        ("Number", "float"),
        ("Function", "(<..> => <..>)"),
    ],
)
def test_override_table(name, expected):
    """Test that well-known types take precedence over the instance type."""
    assert map_type(ref(name)) == expected


def test_generic_arguments():
    assert map_type(ref("Array", KeywordType("string"))) == "ResizeArray(string)"
    promise = ref("Promise", KeywordType("number"), ref("Error"))
    assert map_type(promise) == "Promise.t(float, Error.t)"


def test_type_variable_in_scope():
    """Test that a type parameter of an enclosing declaration is marked."""
    # Arrange
    declaration = InterfaceDeclaration(
        name=Identifier("Box"), type_parameters=[TypeParameter(Identifier("T"))]
    )
    scope = TypeScope().enter(declaration)

    # Act & Assert
    assert map_type(ref("T"), scope) == "'T"
    assert map_type(ArrayType(ref("T")), scope) == "array 'T"


def test_type_variable_out_of_scope():
    assert map_type(ref("T")) == "T.t"


def test_type_variable_from_outer_declaration():
    outer = InterfaceDeclaration(
        name=Identifier("Map"), type_parameters=[TypeParameter(Identifier("K"))]
    )
    inner = FunctionType(type_parameters=[TypeParameter(Identifier("V"))])
    scope = TypeScope().enter(outer).enter(inner)

    assert map_type(ref("K"), scope) == "'K"
    assert map_type(ref("V"), scope) == "'V"


def test_heritage_expression_keeps_bare_name():
    node = ExpressionWithTypeArguments(Identifier("EventEmitter"))
    assert map_type(node) == "EventEmitter"

    dotted = ExpressionWithTypeArguments(
        PropertyAccessExpression(Identifier("NodeJS"), Identifier("EventEmitter"))
    )
    assert map_type(dotted) == "NodeJS.EventEmitter"


def test_mapping_is_pure():
    """Test that mapping the same node twice gives the same text."""
    node = FunctionType(
        parameters=[Parameter(name=Identifier("d"), type=ref("Date"))],
        type=UnionType([StringLiteralType("a")]),
    )
    assert map_type(node) == map_type(node)


def test_map_type_arguments():
    assert map_type_arguments([]) == ""
    arguments = [KeywordType("string"), ArrayType(KeywordType("number"))]
    assert map_type_arguments(arguments) == "(string, array float)"
