"""
Constants for the Reason/BuckleScript binding target.

This module contains the fixed names, primitive type table and well-known type
overrides used by the type mapper and the printer.
"""

from types import MappingProxyType

# Opaque type declared inside every generated interface module
INSTANCE_TYPE_NAME = "t"

# Two spaces per nesting level
INDENTATION = "  "

# Generic type variable used whenever a type cannot be expressed
TYPE_VARIABLE_PLACEHOLDER = "'a"

# Prefix marking a polymorphic type variable
TYPE_VARIABLE_MARKER = "'"

UNIT_TYPE = "unit"
OPTION_PREFIX = "option "

ARROW = " => "
TUPLE_SEPARATOR = " * "

# Declaration file suffixes stripped to derive the root module name
DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts", ".ts")

PRIMITIVE_TYPES: MappingProxyType[str, str] = MappingProxyType(
    {
        "string": "string",
        "number": "float",
        "boolean": "bool",
        "void": "unit",
        # No symbol support in the bindings yet
        "symbol": "Symbol",
    }
)

# Well-known library types with a direct target equivalent
MAPPED_TYPES: MappingProxyType[str, str] = MappingProxyType(
    {
        "Date": "DateTime",
        "Object": "obj",
        "Array": "ResizeArray",
        "RegExp": "Regex",
        "String": "string",
        "Number": "float",
        "Function.t": "(<..> => <..>)",
    }
)

# Emission templates recorded for members without a plain method/property shape
CALL_EMIT = "$0($1...)"
CONSTRUCT_EMIT = "new $0($1...)"
INDEX_EMIT = "$0[$1]{{=$2}}"

# Synthesized member names
INVOKE_NAME = "invoke"
CREATE_NAME = "Create"
INDEX_NAME = "Item"
MAKE_NAME = "make"
