"""
Data models for the binding translator.

This module contains the dataclass definitions describing the structural
model built from a declaration tree: modules, interfaces, their members and
parameters. The printer renders these records to text.
"""

from dataclasses import dataclass, field
from enum import Enum


class InterfaceKind(str, Enum):
    """Declaration shape an interface record was built from."""

    CLASS = "class"
    INTERFACE = "interface"


@dataclass
class Parameter:
    """Parameter of a method or maker.

    Attributes:
        name: Parameter name, empty for the sentinel parameter
        type: Target type expression
        optional: Whether the parameter may be omitted
        rest: Whether the parameter is variadic
    """

    name: str
    type: str
    optional: bool = False
    rest: bool = False


@dataclass
class Property:
    """Field of an interface or class.

    Attributes:
        name: Property name
        type: Target type expression
        optional: Whether the property may be absent
        static: Whether the property belongs to the class itself
        emit: Emission template for members without a plain field shape
    """

    name: str
    type: str
    optional: bool = False
    static: bool = False
    emit: str | None = None


@dataclass
class Method:
    """Method, constructor or module-level function.

    Attributes:
        name: Binding name
        type: Target return type expression
        optional: Whether the method may be absent
        static: Whether the method is called without a receiver
        parameters: Parameters in declaration order
        ctor: Class constructor
        maker: Synthesized constructor for interfaces and type aliases
        module_name: Name of the owning interface or module
        emit: Emission template for members without a plain method shape
    """

    name: str
    type: str
    optional: bool = False
    static: bool = False
    parameters: list[Parameter] = field(default_factory=list)
    ctor: bool = False
    maker: bool = False
    module_name: str = ""
    emit: str | None = None


@dataclass
class Variable:
    """Value exported by the library."""

    name: str
    type: str
    static: bool = True


@dataclass
class Interface:
    """Class, interface or type alias.

    Attributes:
        name: Interface name, including type parameters for generics
        kind: Declaration shape
        parents: Inherited types as target type expressions
        properties: Properties in declaration order
        methods: Methods in declaration order
    """

    name: str
    kind: InterfaceKind = InterfaceKind.INTERFACE
    parents: list[str] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)


@dataclass
class Module:
    """Namespace or whole declaration file.

    Attributes:
        name: Module name
        modules: Nested namespaces
        variables: Exported values
        interfaces: Classes, interfaces and type aliases
        methods: Module-level functions
    """

    name: str
    modules: list["Module"] = field(default_factory=list)
    variables: list[Variable] = field(default_factory=list)
    interfaces: list[Interface] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)

    def merge(self, other: "Module") -> None:
        """Append all records of ``other`` to this module."""
        self.modules.extend(other.modules)
        self.variables.extend(other.variables)
        self.interfaces.extend(other.interfaces)
        self.methods.extend(other.methods)
