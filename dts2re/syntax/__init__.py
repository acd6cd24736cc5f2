"""Parser-independent syntax tree for TypeScript declaration files."""

from dts2re.syntax.nodes import *  # noqa: F403
from dts2re.syntax.nodes import __all__ as _node_names
from dts2re.syntax.scope import TypeScope, find_type_parameters

__all__ = [*_node_names, "TypeScope", "find_type_parameters"]
