"""
Pytest configuration and shared fixtures for translator tests.

This module contains syntax tree fixtures that are shared across multiple test
modules. They are built by hand so the model builder and printer can be tested
without the tree-sitter front-end.
"""

import pytest

from dts2re.syntax.nodes import (
    ClassDeclaration,
    Constructor,
    FunctionDeclaration,
    Identifier,
    InterfaceDeclaration,
    KeywordType,
    MethodSignature,
    ModuleBlock,
    ModuleDeclaration,
    Parameter,
    PropertySignature,
    SourceFile,
)


def ident(text: str) -> Identifier:
    return Identifier(text)


def keyword(name: str) -> KeywordType:
    return KeywordType(name)


@pytest.fixture
def make_source():
    """Fixture wrapping statements into a SourceFile."""

    def _make(*statements, file_name: str = "index.d.ts") -> SourceFile:
        return SourceFile(file_name=file_name, statements=list(statements))

    return _make


@pytest.fixture
def point_interface():
    """Fixture providing `interface Point { x: number; y?: string }`."""
    return InterfaceDeclaration(
        name=ident("Point"),
        members=[
            PropertySignature(name=ident("x"), type=keyword("number")),
            PropertySignature(
                name=ident("y"), type=keyword("string"), question_token=True
            ),
        ],
    )


@pytest.fixture
def widget_class():
    """Fixture providing `class Widget { constructor(); }`."""
    return ClassDeclaration(name=ident("Widget"), members=[Constructor()])


@pytest.fixture
def foo_function():
    """Fixture providing `function foo(a: number, b?: string): void`."""
    return FunctionDeclaration(
        name=ident("foo"),
        parameters=[
            Parameter(name=ident("a"), type=keyword("number")),
            Parameter(name=ident("b"), type=keyword("string"), question_token=True),
        ],
        type=keyword("void"),
    )


@pytest.fixture
def emitter_interface():
    """Fixture providing an interface with a single instance method."""
    return InterfaceDeclaration(
        name=ident("Emitter"),
        members=[
            MethodSignature(
                name=ident("emit"),
                parameters=[Parameter(name=ident("event"), type=keyword("string"))],
                type=keyword("boolean"),
            ),
        ],
    )


@pytest.fixture
def empty_namespace():
    """Fixture providing `namespace Empty {}`."""
    return ModuleDeclaration(name=ident("Empty"), body=ModuleBlock())
