"""Printer that renders the Module tree as Reason/BuckleScript bindings."""

from loguru import logger

from dts2re.translator.code_block import CodeBlock
from dts2re.translator.constants import (
    ARROW,
    INSTANCE_TYPE_NAME,
    OPTION_PREFIX,
    UNIT_TYPE,
)
from dts2re.translator.models import (
    Interface,
    Method,
    Module,
    Parameter,
    Property,
    Variable,
)


def capitalize(name: str) -> str:
    """Uppercase the first character only."""
    return name[:1].upper() + name[1:]


def print_variable(variable: Variable) -> str:
    return f'external {variable.name} : {variable.type} = "" [@@bs.val];'


def print_parameter(param: Parameter, include_name: bool) -> str:
    """Render a parameter type, labelled when named or optional."""
    prefix = ""
    if (include_name or param.optional) and param.name:
        prefix = f"{'?' if param.optional else ''}{param.name}::"
    return f"{prefix}{param.type}"


def print_method(method: Method, library_name: str) -> str:
    """Render one method binding.

    Constructors are linked to the owning class exported by the library
    module, makers build a fresh object, instance methods take the receiver
    first and static methods are plain functions.
    """
    if method.ctor or method.maker:
        params = ARROW.join(print_parameter(p, True) for p in method.parameters)
        if method.ctor:
            return (
                f"external {method.name} : {params or UNIT_TYPE} => "
                f'{INSTANCE_TYPE_NAME} = "{method.module_name}" [@@bs.new] '
                f'[@@bs.module "{library_name}"];'
            )
        return (
            f"external {method.name} : {params or UNIT_TYPE} => "
            f'{INSTANCE_TYPE_NAME} = "" [@@bs.obj];'
        )

    params = ARROW.join(print_parameter(p, False) for p in method.parameters)
    if not method.static:
        receiver = INSTANCE_TYPE_NAME + (ARROW + params if params else "")
        return (
            f"external {method.name} : {receiver} => {method.type} "
            '= "" [@@bs.send];'
        )
    return f'external {method.name} : {params or UNIT_TYPE} => {method.type} = "";'


def print_property(prop: Property, code: CodeBlock) -> None:
    """Render the setter and getter bindings of a property."""
    type_ = f"{OPTION_PREFIX if prop.optional else ''}{prop.type}"
    suffix = " [@@bs.return null_undefined_to_opt]" if prop.optional else ""
    code.add_line(
        f"external set{capitalize(prop.name)} : {INSTANCE_TYPE_NAME} => {type_} "
        f'=> unit = "{prop.name}" [@@bs.set];'
    )
    code.add_line(
        f"external get{capitalize(prop.name)} : {INSTANCE_TYPE_NAME} => {type_} "
        f'= "{prop.name}" [@@bs.get]{suffix};'
    )
    code.add_line()


class Printer:
    """Renders a root Module to binding text.

    Emission templates recorded on call, construct and index signatures and
    on computed-name members are not consulted: every member is rendered
    with the generic method or property template.
    """

    def __init__(self, root: Module):
        self.root = root
        self.code = CodeBlock()

    def render(self) -> str:
        """Render the whole tree and return the text."""
        self._print_module(self.root, is_root=True)
        return self.code.get_code()

    def _print_module(self, module: Module, is_root: bool = False) -> None:
        if is_root:
            self._print_module_body(module)
            return
        with self.code.block(f"let module {module.name}", blank_after_header=True):
            self._print_module_body(module)

    def _print_module_body(self, module: Module) -> None:
        for variable in module.variables:
            self.code.add_line(print_variable(variable))

        for method in module.methods:
            self.code.add_line(print_method(method, self.root.name))

        for ifc in module.interfaces:
            self._print_interface(ifc)
            self.code.add_line()

        for child in module.modules:
            self._print_module(child)
            self.code.add_line()

    def _print_interface(self, ifc: Interface) -> None:
        with self.code.block(f"let module {ifc.name}"):
            self.code.add_line(f"type {INSTANCE_TYPE_NAME};")
            self.code.add_line()

            for method in ifc.methods:
                if method.emit:
                    logger.debug(f"{ifc.name}.{method.name} ignores {method.emit}")
                self.code.add_line(print_method(method, self.root.name))

            for prop in ifc.properties:
                print_property(prop, self.code)


def render(module: Module) -> str:
    """Render a root Module as Reason/BuckleScript binding declarations.

    Args:
        module: Root module built from a declaration file

    Returns:
        Binding text, one declaration per line
    """
    return Printer(module).render()
