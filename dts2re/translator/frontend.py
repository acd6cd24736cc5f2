"""
Declaration file front-end built on tree-sitter.

This module parses TypeScript declaration source with tree-sitter and converts
the concrete parse tree into the syntax nodes consumed by the translator.
Constructs without a matching node are skipped or kept as opaque types.
"""

import tree_sitter_typescript as tsts
from loguru import logger
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from dts2re.syntax import nodes

TS_LANGUAGE = Language(tsts.language_typescript())


_MODIFIERS = ("static", "readonly", "abstract", "declare", "override")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


class DeclarationConverter:
    """Converts tree-sitter nodes of one source buffer into syntax nodes."""

    def __init__(self, source: bytes):
        self.source = source

    # ====================
    # Helpers
    # ====================

    def text(self, node: TSNode) -> str:
        """Extract source text for a node."""
        return self.source[node.start_byte : node.end_byte].decode(
            "utf-8", errors="replace"
        )

    def line(self, node: TSNode) -> int:
        return node.start_point[0] + 1

    def named(self, node: TSNode | None) -> list[TSNode]:
        """Named children without comments."""
        if node is None:
            return []
        return [c for c in node.named_children if c.type != "comment"]

    def field_or_self(self, node: TSNode, field_name: str) -> TSNode:
        child = node.child_by_field_name(field_name)
        return node if child is None else child

    def has_token(self, node: TSNode, token: str) -> bool:
        return any(c.type == token for c in node.children)

    def modifiers(self, node: TSNode) -> list[str]:
        result = []
        for child in node.children:
            if child.type in _MODIFIERS:
                result.append(child.type)
            elif child.type == "accessibility_modifier":
                result.append(self.text(child))
        return result

    def identifier(self, node: TSNode | None) -> nodes.Identifier | None:
        if node is None:
            return None
        return nodes.Identifier(self.text(node), line=self.line(node))

    def entity_name(self, node: TSNode) -> nodes.EntityName:
        """Build a (possibly qualified) type name from dotted source text."""
        line = self.line(node)
        parts = "".join(self.text(node).split()).split(".")
        name: nodes.EntityName = nodes.Identifier(parts[0], line=line)
        for part in parts[1:]:
            name = nodes.QualifiedName(
                name, nodes.Identifier(part, line=line), line=line
            )
        return name

    def expression_name(
        self, node: TSNode
    ) -> nodes.PropertyAccessExpression | nodes.Identifier:
        """Build a (possibly dotted) value expression from source text."""
        line = self.line(node)
        parts = "".join(self.text(node).split()).split(".")
        expression: nodes.PropertyAccessExpression | nodes.Identifier
        expression = nodes.Identifier(parts[0], line=line)
        for part in parts[1:]:
            expression = nodes.PropertyAccessExpression(
                expression, nodes.Identifier(part, line=line), line=line
            )
        return expression

    def property_name(self, node: TSNode | None) -> nodes.PropertyName | None:
        if node is None:
            return None
        line = self.line(node)
        match node.type:
            case "string":
                return nodes.StringLiteral(_unquote(self.text(node)), line=line)
            case "number":
                return nodes.NumericLiteral(self.text(node), line=line)
            case "computed_property_name":
                inner = self.named(node)
                expression = None
                if inner and inner[0].type == "string":
                    expression = nodes.StringLiteral(
                        _unquote(self.text(inner[0])), line=line
                    )
                elif inner and inner[0].type in ("identifier", "member_expression"):
                    expression = self.expression_name(inner[0])
                return nodes.ComputedPropertyName(expression, line=line)
            case _:
                return nodes.Identifier(self.text(node), line=line)

    # ====================
    # Statements
    # ====================

    def convert_statements(self, children: list[TSNode]) -> list[nodes.Statement]:
        statements = []
        for child in children:
            statements.extend(self.convert_statement(child))
        return statements

    def convert_statement(self, node: TSNode) -> list[nodes.Statement]:
        """Convert one top-level or namespace-level statement."""
        line = self.line(node)
        match node.type:
            case "ambient_declaration" | "export_statement" | "expression_statement":
                return self.convert_statements(self.named(node))

            case "statement_block":
                # declare global { ... }
                return self.convert_statements(self.named(node))

            case "internal_module" | "module":
                return [self.convert_module(node)]

            case "interface_declaration":
                return [self.convert_interface(node)]

            case "class_declaration" | "abstract_class_declaration" | "class":
                return [self.convert_class(node)]

            case "type_alias_declaration":
                return [
                    nodes.TypeAliasDeclaration(
                        name=self.identifier(node.child_by_field_name("name")),
                        type_parameters=self.convert_type_parameters(
                            node.child_by_field_name("type_parameters")
                        ),
                        type=self.convert_type(node.child_by_field_name("value")),
                        line=line,
                    )
                ]

            case "lexical_declaration" | "variable_declaration":
                return [self.convert_variables(node)]

            case "function_signature" | "function_declaration":
                return [
                    nodes.FunctionDeclaration(
                        name=self.identifier(node.child_by_field_name("name")),
                        type_parameters=self.convert_type_parameters(
                            node.child_by_field_name("type_parameters")
                        ),
                        parameters=self.convert_parameters(
                            node.child_by_field_name("parameters")
                        ),
                        type=self.convert_annotation(
                            node.child_by_field_name("return_type")
                        ),
                        line=line,
                    )
                ]

            case "enum_declaration":
                body = node.child_by_field_name("body")
                members = [
                    self.text(self.field_or_self(c, "name"))
                    for c in self.named(body)
                ]
                return [
                    nodes.EnumDeclaration(
                        name=self.identifier(node.child_by_field_name("name")),
                        members=members,
                        line=line,
                    )
                ]

            case "ERROR":
                logger.warning(f"Skipping unparsable declaration at line {line}")
                return []

            case _:
                logger.debug(f"Skipping {node.type} at line {line}")
                return []

    def convert_module(self, node: TSNode) -> nodes.ModuleDeclaration:
        """Convert a namespace, splitting dotted names into nested modules."""
        line = self.line(node)
        name_node = node.child_by_field_name("name")
        body_node = node.child_by_field_name("body")

        names: list[nodes.Identifier | nodes.StringLiteral] = []
        if name_node is not None and name_node.type == "string":
            names = [nodes.StringLiteral(_unquote(self.text(name_node)), line=line)]
        elif name_node is not None:
            names = [
                nodes.Identifier(part, line=line)
                for part in "".join(self.text(name_node).split()).split(".")
            ]

        block = None
        if body_node is not None:
            block = nodes.ModuleBlock(
                statements=self.convert_statements(self.named(body_node)),
                line=self.line(body_node),
            )
        declaration = nodes.ModuleDeclaration(
            name=names[-1] if names else None, body=block, line=line
        )
        for name in reversed(names[:-1]):
            declaration = nodes.ModuleDeclaration(
                name=name, body=declaration, line=line
            )
        return declaration

    def convert_interface(self, node: TSNode) -> nodes.InterfaceDeclaration:
        heritage = []
        for child in self.named(node):
            if child.type == "extends_type_clause":
                heritage.append(
                    nodes.HeritageClause(
                        "extends",
                        [self.convert_heritage_type(t) for t in self.named(child)],
                        line=self.line(child),
                    )
                )
        return nodes.InterfaceDeclaration(
            name=self.identifier(node.child_by_field_name("name")),
            type_parameters=self.convert_type_parameters(
                node.child_by_field_name("type_parameters")
            ),
            heritage_clauses=heritage,
            members=self.convert_members(node.child_by_field_name("body")),
            line=self.line(node),
        )

    def convert_class(self, node: TSNode) -> nodes.ClassDeclaration:
        heritage = []
        for child in self.named(node):
            if child.type == "class_heritage":
                heritage.extend(self.convert_class_heritage(child))
        modifiers = ["abstract"] if node.type == "abstract_class_declaration" else []
        return nodes.ClassDeclaration(
            name=self.identifier(node.child_by_field_name("name")),
            type_parameters=self.convert_type_parameters(
                node.child_by_field_name("type_parameters")
            ),
            heritage_clauses=heritage,
            members=self.convert_members(
                node.child_by_field_name("body"), in_class=True
            ),
            modifiers=modifiers,
            line=self.line(node),
        )

    def convert_class_heritage(self, node: TSNode) -> list[nodes.HeritageClause]:
        clauses = []
        for clause in self.named(node):
            types: list[nodes.ExpressionWithTypeArguments] = []
            if clause.type == "extends_clause":
                for child in self.named(clause):
                    if child.type == "type_arguments" and types:
                        types[-1].type_arguments = self.convert_type_arguments(child)
                    elif child.type in ("identifier", "member_expression"):
                        types.append(
                            nodes.ExpressionWithTypeArguments(
                                self.expression_name(child), line=self.line(child)
                            )
                        )
                    else:
                        types.append(
                            nodes.ExpressionWithTypeArguments(line=self.line(child))
                        )
                clauses.append(
                    nodes.HeritageClause("extends", types, line=self.line(clause))
                )
            elif clause.type == "implements_clause":
                types = [self.convert_heritage_type(t) for t in self.named(clause)]
                clauses.append(
                    nodes.HeritageClause("implements", types, line=self.line(clause))
                )
        return clauses

    def convert_heritage_type(self, node: TSNode) -> nodes.ExpressionWithTypeArguments:
        name_node = node
        type_arguments: list[nodes.TypeNode] = []
        if node.type == "generic_type":
            name_node = self.field_or_self(node, "name")
            type_arguments = self.convert_type_arguments(
                node.child_by_field_name("type_arguments")
            )
        if name_node.type not in ("type_identifier", "nested_type_identifier"):
            return nodes.ExpressionWithTypeArguments(line=self.line(node))
        return nodes.ExpressionWithTypeArguments(
            self.expression_name(name_node),
            type_arguments,
            line=self.line(node),
        )

    def convert_variables(self, node: TSNode) -> nodes.VariableStatement:
        declarations = []
        for declarator in self.named(node):
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            name = None
            if name_node is not None and name_node.type == "identifier":
                name = self.identifier(name_node)
            declarations.append(
                nodes.VariableDeclaration(
                    name=name,
                    type=self.convert_annotation(
                        declarator.child_by_field_name("type")
                    ),
                    line=self.line(declarator),
                )
            )
        return nodes.VariableStatement(
            declaration_list=declarations, line=self.line(node)
        )

    # ====================
    # Members
    # ====================

    def convert_members(
        self, body: TSNode | None, in_class: bool = False
    ) -> list[nodes.Member]:
        members = []
        for child in self.named(body):
            member = self.convert_member(child, in_class)
            if member is not None:
                members.append(member)
        return members

    def convert_member(self, node: TSNode, in_class: bool) -> nodes.Member | None:
        line = self.line(node)
        match node.type:
            case "property_signature" | "public_field_definition":
                cls = (
                    nodes.PropertySignature
                    if node.type == "property_signature"
                    else nodes.PropertyDeclaration
                )
                return cls(
                    name=self.property_name(node.child_by_field_name("name")),
                    type=self.convert_annotation(node.child_by_field_name("type")),
                    question_token=self.has_token(node, "?"),
                    modifiers=self.modifiers(node),
                    line=line,
                )

            case "method_signature" | "abstract_method_signature" | "method_definition":
                name_node = node.child_by_field_name("name")
                parameters = self.convert_parameters(
                    node.child_by_field_name("parameters")
                )
                if in_class and name_node and self.text(name_node) == "constructor":
                    return nodes.Constructor(
                        parameters=parameters,
                        modifiers=self.modifiers(node),
                        line=line,
                    )
                cls = (
                    nodes.MethodDeclaration
                    if node.type == "method_definition"
                    else nodes.MethodSignature
                )
                return cls(
                    name=self.property_name(name_node),
                    type_parameters=self.convert_type_parameters(
                        node.child_by_field_name("type_parameters")
                    ),
                    parameters=parameters,
                    type=self.convert_annotation(
                        node.child_by_field_name("return_type")
                    ),
                    question_token=self.has_token(node, "?"),
                    modifiers=self.modifiers(node),
                    line=line,
                )

            case "call_signature":
                return nodes.CallSignature(
                    type_parameters=self.convert_type_parameters(
                        node.child_by_field_name("type_parameters")
                    ),
                    parameters=self.convert_parameters(
                        node.child_by_field_name("parameters")
                    ),
                    type=self.convert_annotation(
                        node.child_by_field_name("return_type")
                    ),
                    line=line,
                )

            case "construct_signature":
                return nodes.ConstructSignature(
                    type_parameters=self.convert_type_parameters(
                        node.child_by_field_name("type_parameters")
                    ),
                    parameters=self.convert_parameters(
                        node.child_by_field_name("parameters")
                    ),
                    type=self.convert_annotation(node.child_by_field_name("type")),
                    line=line,
                )

            case "index_signature":
                key = node.child_by_field_name("name")
                parameters = []
                if key is not None:
                    parameters.append(
                        nodes.Parameter(
                            name=self.identifier(key),
                            type=self.convert_type(
                                node.child_by_field_name("index_type")
                            ),
                            line=line,
                        )
                    )
                return nodes.IndexSignature(
                    parameters=parameters,
                    type=self.convert_annotation(node.child_by_field_name("type")),
                    modifiers=self.modifiers(node),
                    line=line,
                )

            case _:
                logger.debug(f"Skipping member {node.type} at line {line}")
                return None

    def convert_parameters(self, node: TSNode | None) -> list[nodes.Parameter]:
        parameters = []
        for child in self.named(node):
            if child.type not in ("required_parameter", "optional_parameter"):
                continue
            pattern = child.child_by_field_name("pattern")
            rest = pattern is not None and pattern.type == "rest_pattern"
            name_node = self.named(pattern)[0] if rest and pattern else pattern
            name = None
            if name_node is not None and name_node.type in ("identifier", "this"):
                name = self.identifier(name_node)
            parameters.append(
                nodes.Parameter(
                    name=name,
                    type=self.convert_annotation(child.child_by_field_name("type")),
                    question_token=child.type == "optional_parameter",
                    dot_dot_dot_token=rest,
                    line=self.line(child),
                )
            )
        return parameters

    def convert_type_parameters(self, node: TSNode | None) -> list[nodes.TypeParameter]:
        return [
            nodes.TypeParameter(
                self.identifier(tp.child_by_field_name("name")), line=self.line(tp)
            )
            for tp in self.named(node)
            if tp.type == "type_parameter"
        ]

    # ====================
    # Types
    # ====================

    def convert_annotation(self, node: TSNode | None) -> nodes.TypeNode | None:
        """Convert a ``: T`` annotation, or a bare type node."""
        if node is None:
            return None
        if node.type.endswith("type_annotation"):
            inner = self.named(node)
            return self.convert_type(inner[0]) if inner else None
        return self.convert_type(node)

    def convert_type_arguments(self, node: TSNode | None) -> list[nodes.TypeNode]:
        return [self.convert_type(arg) for arg in self.named(node)]

    def convert_type(self, node: TSNode | None) -> nodes.TypeNode | None:
        if node is None:
            return None
        line = self.line(node)
        match node.type:
            case "predefined_type":
                return nodes.KeywordType(self.text(node), line=line)

            case "type_identifier" | "nested_type_identifier":
                return nodes.TypeReference(self.entity_name(node), line=line)

            case "generic_type":
                name = self.field_or_self(node, "name")
                return nodes.TypeReference(
                    self.entity_name(name),
                    self.convert_type_arguments(
                        node.child_by_field_name("type_arguments")
                    ),
                    line=line,
                )

            case "array_type":
                element = self.convert_type(self.named(node)[0])
                return nodes.ArrayType(element, line=line)

            case "function_type":
                return nodes.FunctionType(
                    type_parameters=self.convert_type_parameters(
                        node.child_by_field_name("type_parameters")
                    ),
                    parameters=self.convert_parameters(
                        node.child_by_field_name("parameters")
                    ),
                    type=self.convert_type(node.child_by_field_name("return_type")),
                    line=line,
                )

            case "union_type":
                return nodes.UnionType(self._union_arms(node), line=line)

            case "tuple_type":
                return nodes.TupleType(
                    [self.convert_type(c) for c in self.named(node)], line=line
                )

            case "parenthesized_type":
                return nodes.ParenthesizedType(
                    self.convert_type(self.named(node)[0]), line=line
                )

            case "readonly_type":
                return self.convert_type(self.named(node)[0])

            case "this_type":
                return nodes.ThisType(line=line)

            case "literal_type":
                inner = self.named(node)
                if inner and inner[0].type == "string":
                    return nodes.StringLiteralType(
                        _unquote(self.text(inner[0])), line=line
                    )
                return nodes.LiteralType(self.text(node), line=line)

            case "object_type":
                return nodes.TypeLiteral(self.convert_members(node), line=line)

            case _:
                return nodes.OpaqueType(self.text(node), line=line)

    def _union_arms(self, node: TSNode) -> list[nodes.TypeNode]:
        arms = []
        for child in self.named(node):
            if child.type == "union_type":
                arms.extend(self._union_arms(child))
            else:
                arms.append(self.convert_type(child))
        return arms


def parse_declarations(text: str, file_name: str = "index.d.ts") -> nodes.SourceFile:
    """Parse declaration source into a SourceFile syntax tree.

    Syntax errors are not fatal: the declarations tree-sitter recovers are
    kept and the broken ones are skipped.

    Args:
        text: Declaration file contents
        file_name: Path used to name the root module

    Returns:
        SourceFile holding the converted top-level statements
    """
    source = text.encode("utf-8")
    tree = Parser(TS_LANGUAGE).parse(source)
    if tree.root_node.has_error:
        logger.warning(f"{file_name} has syntax errors, skipping broken declarations")

    converter = DeclarationConverter(source)
    statements = converter.convert_statements(converter.named(tree.root_node))
    logger.debug(f"Parsed {len(statements)} top-level declarations from {file_name}")
    return nodes.SourceFile(file_name=file_name, statements=statements, line=1)
