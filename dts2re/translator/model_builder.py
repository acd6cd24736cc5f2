"""Build the structural Module tree from a declaration syntax tree."""

import os

from loguru import logger

from dts2re.syntax import nodes
from dts2re.syntax.scope import TypeScope
from dts2re.translator.constants import (
    CALL_EMIT,
    CONSTRUCT_EMIT,
    CREATE_NAME,
    DECLARATION_SUFFIXES,
    INDEX_EMIT,
    INDEX_NAME,
    INSTANCE_TYPE_NAME,
    INVOKE_NAME,
    MAKE_NAME,
    TYPE_VARIABLE_MARKER,
    UNIT_TYPE,
)
from dts2re.translator.models import (
    Interface,
    InterfaceKind,
    Method,
    Module,
    Parameter,
    Property,
    Variable,
)
from dts2re.translator.type_mapper import map_type


def module_name_for(file_name: str) -> str:
    """Derive the root module name from a declaration file path."""
    base = os.path.basename(file_name)
    for suffix in DECLARATION_SUFFIXES:
        if base.endswith(suffix):
            return base[: -len(suffix)]
    return base


def get_name(node: nodes.Node | None) -> str | None:
    """Return the identifier a declaration or name node stands for.

    Computed names and dotted expressions resolve to their dotted text, e.g.
    ``[Symbol.iterator]`` gives ``Symbol.iterator``.
    """
    if node is None:
        return None
    if isinstance(node, nodes.ComputedPropertyName):
        return get_name(node.expression)
    if isinstance(node, (nodes.PropertyAccessExpression, nodes.QualifiedName)):
        return node.text
    if isinstance(node, (nodes.Identifier, nodes.StringLiteral, nodes.NumericLiteral)):
        return node.text
    return get_name(getattr(node, "name", None))


def with_sentinel(parameters: list[Parameter]) -> list[Parameter]:
    """Append the trailing unit parameter when any parameter is optional.

    Labelled optional arguments can only be omitted when a positional
    argument follows them.
    """
    if any(p.optional for p in parameters):
        parameters.append(Parameter(name="", type=UNIT_TYPE))
    return parameters


def _is_static(node: nodes.Node) -> bool:
    return "static" in getattr(node, "modifiers", [])


class ModelBuilder:
    """Walks a SourceFile and builds the Module tree."""

    def build(self, source_file: nodes.SourceFile, name: str | None = None) -> Module:
        """Build the root Module of a declaration file.

        Args:
            source_file: Parsed declaration file
            name: Root module name, defaults to the file's base name

        Returns:
            Root Module holding every supported declaration
        """
        root = Module(name=name or module_name_for(source_file.file_name))
        scope = TypeScope().enter(source_file)
        for statement in source_file.statements:
            self.visit_statement(statement, root, scope)
        logger.debug(
            f"Built module {root.name}: {len(root.modules)} modules, "
            f"{len(root.interfaces)} interfaces, {len(root.variables)} variables, "
            f"{len(root.methods)} functions"
        )
        return root

    # ====================
    # Statements
    # ====================

    def visit_statement(
        self, node: nodes.Statement, module: Module, scope: TypeScope
    ) -> None:
        """Dispatch one statement and append its records to ``module``."""
        match node:
            case nodes.ModuleDeclaration():
                module.modules.append(self.visit_module(node, scope))

            case nodes.ClassDeclaration():
                module.interfaces.append(
                    self.visit_interface(node, scope, kind=InterfaceKind.CLASS)
                )

            case nodes.InterfaceDeclaration():
                module.interfaces.append(self.visit_interface(node, scope))

            case nodes.TypeAliasDeclaration():
                module.interfaces.append(self.visit_type_alias(node, scope))

            case nodes.VariableStatement():
                variables, anonymous = self.visit_variables(node, scope)
                module.variables.extend(variables)
                module.interfaces.extend(anonymous)

            case nodes.FunctionDeclaration():
                module.methods.append(
                    self.visit_method(
                        node, scope, static=True, module_name=module.name
                    )
                )

            case nodes.EnumDeclaration():
                logger.debug(f"Skipping enum {get_name(node)}")

            case _:
                logger.debug(f"Skipping unsupported statement {type(node).__name__}")

    def visit_module(self, node: nodes.ModuleDeclaration, scope: TypeScope) -> Module:
        """Build the Module for a namespace declaration."""
        module = Module(name=self._require_name(node))
        inner = scope.enter(node)
        match node.body:
            case nodes.ModuleDeclaration():
                module.modules.append(self.visit_module(node.body, inner))
            case nodes.ModuleBlock():
                block = Module(name=module.name)
                for statement in node.body.statements:
                    self.visit_statement(statement, block, inner)
                module.merge(block)
            case None:
                logger.debug(f"Namespace {module.name} has no body")
        return module

    def visit_variables(
        self, node: nodes.VariableStatement, scope: TypeScope
    ) -> tuple[list[Variable], list[Interface]]:
        """Build Variables, plus interfaces for inline object-type annotations."""
        variables = []
        anonymous = []
        for declaration in node.declaration_list:
            name = self._require_name(declaration)
            if isinstance(declaration.type, nodes.TypeLiteral):
                ifc = self.visit_interface(
                    declaration.type, scope, name=name + "Type"
                )
                anonymous.append(ifc)
                type_ = ifc.name
            else:
                type_ = map_type(declaration.type, scope)
            variables.append(Variable(name=name, type=type_, static=True))
        return variables, anonymous

    # ====================
    # Interfaces
    # ====================

    def visit_interface(
        self,
        node: nodes.InterfaceDeclaration | nodes.TypeLiteral,
        scope: TypeScope,
        kind: InterfaceKind = InterfaceKind.INTERFACE,
        name: str | None = None,
    ) -> Interface:
        """Build an Interface from a class, interface or object type literal."""
        inner = scope.enter(node)
        parents = []
        for clause in getattr(node, "heritage_clauses", []):
            parents.extend(map_type(t, inner) for t in clause.types)

        ifc = Interface(
            name=name or self._interface_name(node),
            kind=kind,
            parents=parents,
        )
        self._visit_members(ifc, node.members, inner)
        if kind is not InterfaceKind.CLASS:
            ifc.methods.append(self._maker(ifc))
        logger.debug(
            f"Collected {kind.value} {ifc.name}: "
            f"{len(ifc.methods)} methods, {len(ifc.properties)} properties"
        )
        return ifc

    def visit_type_alias(
        self, node: nodes.TypeAliasDeclaration, scope: TypeScope
    ) -> Interface:
        """Fold a type alias into an interface-shaped record.

        Object literal aliases contribute their members, any other alias
        records the aliased type as its parent.
        """
        inner = scope.enter(node)
        ifc = Interface(name=self._interface_name(node), kind=InterfaceKind.INTERFACE)
        if isinstance(node.type, nodes.TypeLiteral):
            self._visit_members(ifc, node.type.members, inner)
        else:
            ifc.parents.append(map_type(node.type, inner))
        ifc.methods.append(self._maker(ifc))
        logger.debug(f"Collected type alias {ifc.name}")
        return ifc

    def _visit_members(
        self, ifc: Interface, members: list[nodes.Member], scope: TypeScope
    ) -> None:
        for member in members:
            match member:
                case nodes.PropertySignature() | nodes.PropertyDeclaration():
                    ifc.properties.append(self.visit_property(member, scope))

                # TODO: an interface holding only a call signature could alias
                # the function type directly
                case nodes.CallSignature():
                    method = self.visit_method(
                        member, scope, name=INVOKE_NAME, module_name=ifc.name
                    )
                    method.emit = CALL_EMIT
                    ifc.methods.append(method)

                case nodes.MethodSignature() | nodes.MethodDeclaration():
                    if isinstance(member.name, nodes.ComputedPropertyName):
                        key = get_name(member.name) or ""
                        method = self.visit_method(
                            member, scope, name=f"[{key}]", module_name=ifc.name
                        )
                        method.emit = f"$0[{key}]($1...)"
                    else:
                        method = self.visit_method(member, scope, module_name=ifc.name)
                    ifc.methods.append(method)

                case nodes.ConstructSignature():
                    method = self.visit_method(
                        member, scope, name=CREATE_NAME, module_name=ifc.name
                    )
                    method.emit = CONSTRUCT_EMIT
                    ifc.methods.append(method)

                case nodes.IndexSignature():
                    ifc.properties.append(
                        Property(
                            name=INDEX_NAME,
                            type=map_type(member.type, scope.enter(member)),
                            optional=member.question_token,
                            static=_is_static(member),
                            emit=INDEX_EMIT,
                        )
                    )

                case nodes.Constructor():
                    ifc.methods.append(
                        self.visit_method(
                            member,
                            scope,
                            name=MAKE_NAME,
                            ctor=True,
                            module_name=ifc.name,
                        )
                    )

                case _:
                    logger.debug(f"Skipping member {type(member).__name__}")

    def visit_property(self, node: nodes.Member, scope: TypeScope) -> Property:
        prop = Property(
            name=self._require_name(node),
            type=map_type(node.type, scope),
            optional=node.question_token,
            static=_is_static(node),
        )
        if isinstance(node.name, nodes.ComputedPropertyName):
            prop.name = f"[{prop.name}]"
            prop.emit = f"$0{prop.name}{{{{=$1}}}}"
        return prop

    def _maker(self, ifc: Interface) -> Method:
        """Synthesize the ``make`` constructor of a non-class shape."""
        params = [
            Parameter(name=p.name, type=p.type, optional=p.optional, rest=False)
            for p in ifc.properties
        ]
        return Method(
            name=MAKE_NAME,
            type=INSTANCE_TYPE_NAME,
            static=True,
            parameters=with_sentinel(params),
            maker=True,
            module_name=ifc.name,
        )

    # ====================
    # Methods
    # ====================

    def visit_method(
        self,
        node: nodes.SignatureDeclaration,
        scope: TypeScope,
        name: str | None = None,
        static: bool = False,
        ctor: bool = False,
        module_name: str = "",
    ) -> Method:
        """Build a Method from any signature-like declaration.

        Args:
            node: Method, function, constructor or signature declaration
            scope: Declarations enclosing ``node``
            name: Binding name, defaults to the declared name
            static: Force a receiver-less binding
            ctor: Whether the method is a class constructor
            module_name: Name of the owning interface or module

        Returns:
            Method with mapped types and the optional-parameter sentinel
        """
        inner = scope.enter(node)
        parameters = [self.visit_parameter(p, inner) for p in node.parameters]
        return Method(
            name=name if name is not None else self._require_name(node),
            type=map_type(node.type, inner),
            optional=node.question_token,
            static=static or _is_static(node),
            parameters=with_sentinel(parameters),
            ctor=ctor,
            module_name=module_name,
        )

    def visit_parameter(self, node: nodes.Parameter, scope: TypeScope) -> Parameter:
        return Parameter(
            name=get_name(node.name) or "",
            type=map_type(node.type, scope),
            optional=node.question_token,
            rest=node.dot_dot_dot_token,
        )

    # ====================
    # Names
    # ====================

    def _interface_name(
        self, node: nodes.InterfaceDeclaration | nodes.TypeAliasDeclaration
    ) -> str:
        name = self._require_name(node)
        if not node.type_parameters:
            return name
        params = ", ".join(
            TYPE_VARIABLE_MARKER + tp.name.text for tp in node.type_parameters
        )
        return f"{name}({params})"

    def _require_name(self, node: nodes.Node) -> str:
        """Return the declared name, or an empty one with a warning."""
        name = get_name(node)
        if name is None:
            line = f" at line {node.line}" if node.line else ""
            logger.warning(f"{type(node).__name__}{line} has no name")
            return ""
        return name


def build_module(source_file: nodes.SourceFile, name: str | None = None) -> Module:
    """Build the Module tree for a declaration file.

    Args:
        source_file: Parsed declaration file
        name: Root module name, defaults to the file's base name

    Returns:
        Root Module
    """
    return ModelBuilder().build(source_file, name)
