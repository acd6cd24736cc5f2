"""Map declaration type nodes to Reason type expressions."""

from loguru import logger

from dts2re.syntax.nodes import (
    ArrayType,
    ExpressionWithTypeArguments,
    FunctionType,
    Identifier,
    KeywordType,
    ParenthesizedType,
    PropertyAccessExpression,
    QualifiedName,
    StringLiteralType,
    ThisType,
    TupleType,
    TypeNode,
    TypeReference,
    UnionType,
)
from dts2re.syntax.scope import TypeScope, find_type_parameters
from dts2re.translator.constants import (
    ARROW,
    INSTANCE_TYPE_NAME,
    MAPPED_TYPES,
    PRIMITIVE_TYPES,
    TUPLE_SEPARATOR,
    TYPE_VARIABLE_MARKER,
    TYPE_VARIABLE_PLACEHOLDER,
    UNIT_TYPE,
)

_ROOT_SCOPE = TypeScope()


def map_type(type_node: TypeNode | None, scope: TypeScope = _ROOT_SCOPE) -> str:
    """Convert a type node into a target type expression.

    Every input produces a type: shapes without a target equivalent degrade
    to the ``'a`` placeholder.

    Args:
        type_node: Type annotation, or None when the declaration has none
        scope: Declarations enclosing the annotation

    Returns:
        Target type expression
    """
    match type_node:
        case None:
            return TYPE_VARIABLE_PLACEHOLDER

        case KeywordType(keyword=keyword) if keyword in PRIMITIVE_TYPES:
            return PRIMITIVE_TYPES[keyword]

        case ArrayType():
            return f"array {map_type(type_node.element_type, scope)}"

        case FunctionType():
            return _map_function_type(type_node, scope)

        case UnionType():
            return _map_union_type(type_node)

        case TupleType():
            return TUPLE_SEPARATOR.join(
                map_type(element, scope) for element in type_node.element_types
            )

        case ParenthesizedType():
            return map_type(type_node.type, scope)

        case ThisType():
            return INSTANCE_TYPE_NAME

        case _:
            return _map_type_reference(type_node, scope)


def map_type_arguments(
    type_arguments: list[TypeNode], scope: TypeScope = _ROOT_SCOPE
) -> str:
    """Render generic arguments as ``(a, b)``, or nothing when there are none."""
    if not type_arguments:
        return ""
    return "(" + ", ".join(map_type(arg, scope) for arg in type_arguments) + ")"


def _map_function_type(node: FunctionType, scope: TypeScope) -> str:
    inner = scope.enter(node)
    # Variadic callback parameters are not modeled
    params = ARROW.join(
        TYPE_VARIABLE_PLACEHOLDER if p.dot_dot_dot_token else map_type(p.type, inner)
        for p in node.parameters
    )
    return "(" + (params or UNIT_TYPE) + ARROW + map_type(node.type, inner) + ")"


def _map_union_type(node: UnionType) -> str:
    if node.types and isinstance(node.types[0], StringLiteralType):
        values = " | ".join(
            f'"{arm.text}"' if isinstance(arm, StringLiteralType) else "_"
            for arm in node.types
        )
        return f"/* StringEnum {values} */ string"

    # TODO: small unions could become polymorphic variants
    logger.debug(f"Degrading union of {len(node.types)} arms to a type variable")
    return TYPE_VARIABLE_PLACEHOLDER


def _reference_names(node: TypeNode) -> tuple[str | None, str | None]:
    """Return the raw dotted name of a reference and its rendered form.

    Type references render as a module's instance type (``Foo.t``), heritage
    expressions keep the bare name.
    """
    match node:
        case TypeReference(type_name=Identifier() | QualifiedName() as name):
            return name.text, f"{name.text}.{INSTANCE_TYPE_NAME}"
        case ExpressionWithTypeArguments(
            expression=Identifier() | PropertyAccessExpression() as expression
        ):
            return expression.text, expression.text
        case _:
            return None, None


def _map_type_reference(node: TypeNode, scope: TypeScope) -> str:
    raw_name, rendered = _reference_names(node)
    if raw_name is None or rendered is None:
        return TYPE_VARIABLE_PLACEHOLDER

    type_arguments = getattr(node, "type_arguments", [])
    arguments = map_type_arguments(type_arguments, scope)

    if raw_name in find_type_parameters(node, scope):
        return f"{TYPE_VARIABLE_MARKER}{raw_name}{arguments}"

    name = MAPPED_TYPES.get(raw_name) or MAPPED_TYPES.get(rendered) or rendered
    return name + arguments
