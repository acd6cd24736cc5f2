"""Enclosing-declaration tracking for type-parameter lookup."""

from dataclasses import dataclass

from dts2re.syntax.nodes import Node


@dataclass(frozen=True)
class TypeScope:
    """Chain of declarations enclosing the node being translated.

    The chain is ordered from the outermost declaration to the innermost one.
    It replaces parent pointers: a builder passes the scope alongside each node
    and extends it with ``enter`` when descending into a declaration.
    """

    enclosing: tuple[Node, ...] = ()

    def enter(self, node: Node) -> "TypeScope":
        """Return a new scope with ``node`` as the innermost declaration."""
        return TypeScope(self.enclosing + (node,))


def _declared_type_parameters(node: Node | None) -> list[str]:
    type_parameters = getattr(node, "type_parameters", None)
    if not isinstance(type_parameters, list):
        return []
    return [tp.name.text for tp in type_parameters]


def find_type_parameters(node: Node | None, scope: TypeScope) -> list[str]:
    """Collect type-parameter names visible from ``node``.

    Names declared on the node itself come first, followed by the names of
    each enclosing declaration walking towards the root.

    Args:
        node: Node whose visibility is checked
        scope: Declarations enclosing the node

    Returns:
        Type-parameter names, innermost first
    """
    names = _declared_type_parameters(node)
    for declaration in reversed(scope.enclosing):
        if declaration is node:
            continue
        names.extend(_declared_type_parameters(declaration))
    return names
