"""Structural checks on a parsed file before type resolution."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from quill.nodes import (
    ASTNode,
    Directive,
    DirectiveType,
    LiteralKind,
    NodeType,
    Type,
    TypeBuiltIn,
    TypeKind,
)


class AnalyzerError(Exception):
    """Raised when a syntax tree breaks a structural rule."""


# Directives allowed on nodes, with the node kind each one must be attached to.
_NODE_DIRECTIVE_TARGETS: dict[DirectiveType, NodeType] = {
    DirectiveType.C_HEADER: NodeType.PACKAGE,
    DirectiveType.C_STR: NodeType.LITERAL,
    DirectiveType.IGNORE_UNUSED: NodeType.VAR_DECL,
    DirectiveType.IMPL: NodeType.FUNCTION_DECL,
    DirectiveType.STRING_LITERAL: NodeType.STRUCT_DECL,
    DirectiveType.STRING_TEMPLATE: NodeType.STRUCT_DECL,
    DirectiveType.RANGE_LITERAL: NodeType.STRUCT_DECL,
}

_TYPE_ONLY_DIRECTIVES = frozenset({DirectiveType.C_RESTRICT, DirectiveType.C_FILE})

_UNSUPPORTED_NODES = frozenset(
    {
        NodeType.NONE,
        NodeType.TRY,
        NodeType.DO_WHILE,
        NodeType.FOR,
        NodeType.SWITCH,
        NodeType.UNION_DECL,
        NodeType.ENUM_DECL,
        NodeType.GLOBALTAG_DECL,
    }
)

_LEAF_NODES = frozenset(
    {
        NodeType.CONTINUE,
        NodeType.IMPORT,
        NodeType.CRASH,
        NodeType.SIZEOF,
        NodeType.LITERAL,
        NodeType.VAR_REF,
    }
)


def _check_unique(directives: Iterable[Directive]) -> None:
    seen: set[DirectiveType] = set()
    for directive in directives:
        if directive.type in seen:
            raise AnalyzerError(f"directive {directive.type.name} used more than once")
        seen.add(directive.type)


@dataclass
class Analyzer:
    """Verifies one file's syntax tree; tracks whether a package and separator were seen."""

    has_package: bool = False
    has_separator: bool = False
    _visited: int = field(default=0, init=False, repr=False)

    def verify_syntax(self, ast: ASTNode) -> int:
        """Check a file root and everything below it; return the number of nodes and types visited."""
        if ast.type != NodeType.FILE_ROOT:
            raise AnalyzerError("syntax verification needs a file root")
        self._visited = 0
        self._verify_node(ast, 0)
        return self._visited

    def _verify_type(self, type_: Optional[Type], depth: int) -> None:
        if type_ is None:
            raise AnalyzerError("missing type")
        self._visited += 1

        _check_unique(type_.directives)
        for directive in type_.directives:
            if directive.type in _TYPE_ONLY_DIRECTIVES:
                if type_.kind != TypeKind.BUILT_IN or type_.built_in != TypeBuiltIn.VOID:
                    raise AnalyzerError(
                        f"directive {directive.type.name} only applies to void"
                    )
            elif directive.type != DirectiveType.C_HEADER:
                raise AnalyzerError(
                    f"directive {directive.type.name} is only valid on nodes"
                )

    def _verify_directives(self, node: ASTNode) -> None:
        _check_unique(node.directives)
        for directive in node.directives:
            if directive.type in _TYPE_ONLY_DIRECTIVES:
                raise AnalyzerError(
                    f"directive {directive.type.name} is only valid on types"
                )
            target = _NODE_DIRECTIVE_TARGETS[directive.type]
            if node.type != target:
                raise AnalyzerError(
                    f"directive {directive.type.name} is not valid on {node.type.name}"
                )
            if directive.type == DirectiveType.C_STR and node.node.kind != LiteralKind.STR:
                raise AnalyzerError("directive C_STR needs a string literal")

    def _verify_all(self, nodes: Iterable[ASTNode], depth: int) -> None:
        for child in nodes:
            self._verify_node(child, depth)

    def _verify_node(self, node: Optional[ASTNode], depth: int) -> None:
        if node is None:
            raise AnalyzerError("missing node")
        self._visited += 1
        self._verify_directives(node)

        kind = node.type
        payload = node.node
        inner = depth + 1

        if kind in _UNSUPPORTED_NODES:
            raise AnalyzerError(f"{kind.name} nodes are not supported")
        if kind in _LEAF_NODES:
            return

        if kind == NodeType.FILE_ROOT:
            if depth != 0 or self._visited != 1:
                raise AnalyzerError("a file root must be the outermost node")
            if node.directives:
                raise AnalyzerError("a file root takes no directives")
            self._verify_all(payload.nodes, inner)
        elif kind == NodeType.PACKAGE:
            if depth != 1 or self._visited != 2:
                raise AnalyzerError("the package declaration must come first")
            if self.has_package:
                raise AnalyzerError("only one package declaration is allowed")
            self.has_package = True
        elif kind == NodeType.FILE_SEPARATOR:
            if depth != 1:
                raise AnalyzerError("a file separator must be at the top level")
            if self.has_separator:
                raise AnalyzerError("only one file separator is allowed")
            self.has_separator = True
        elif kind == NodeType.UNARY_OP:
            self._verify_node(payload.right, inner)
        elif kind in (NodeType.BINARY_OP, NodeType.RANGE, NodeType.ASSIGNMENT):
            self._verify_node(payload.lhs, inner)
            self._verify_node(payload.rhs, inner)
        elif kind == NodeType.VAR_DECL:
            if not payload.type_or_let.is_let:
                self._verify_type(payload.type_or_let.maybe_type, inner)
            if payload.initializer is not None:
                self._verify_node(payload.initializer, inner)
        elif kind == NodeType.GET_FIELD:
            self._verify_node(payload.root, inner)
        elif kind == NodeType.TUPLE:
            self._verify_all(payload.exprs, inner)
        elif kind == NodeType.INDEX:
            self._verify_node(payload.root, inner)
            self._verify_node(payload.value, inner)
        elif kind == NodeType.FUNCTION_CALL:
            self._verify_node(payload.function, inner)
            self._verify_all(payload.args, inner)
        elif kind == NodeType.STATEMENT_BLOCK:
            self._verify_all(payload.stmts, inner)
        elif kind == NodeType.IF:
            if payload.block is None:
                raise AnalyzerError("if statement without a block")
            self._verify_node(payload.cond, inner)
            self._verify_all(payload.block.stmts, inner)
            if payload.else_ is not None:
                self._verify_node(payload.else_, inner)
        elif kind == NodeType.CATCH:
            self._verify_node(payload.target, inner)
            self._verify_node(payload.then, inner)
        elif kind == NodeType.BREAK:
            if payload.maybe_expr is not None:
                raise AnalyzerError("break cannot carry a value")
        elif kind == NodeType.WHILE:
            if payload.block is None:
                raise AnalyzerError("while loop without a block")
            self._verify_node(payload.cond, inner)
            self._verify_all(payload.block.stmts, inner)
        elif kind == NodeType.FOREACH:
            self._verify_node(payload.iterable, inner)
            self._verify_all(payload.block.stmts, inner)
        elif kind == NodeType.RETURN:
            if payload.maybe_expr is not None:
                self._verify_node(payload.maybe_expr, inner)
        elif kind == NodeType.DEFER:
            self._verify_node(payload.stmt, inner)
        elif kind == NodeType.STRUCT_INIT:
            for field_init in payload.fields:
                self._verify_node(field_init.value, inner)
        elif kind == NodeType.ARRAY_INIT:
            length = payload.maybe_explicit_length
            if length is not None and (
                length.type != NodeType.LITERAL or length.node.kind != LiteralKind.INT
            ):
                raise AnalyzerError("an array length must be an integer literal")
            for elem in payload.elems:
                if elem.maybe_index is not None:
                    self._verify_node(elem.maybe_index, inner)
                self._verify_node(elem.value, inner)
        elif kind == NodeType.TEMPLATE_STRING:
            self._verify_all(payload.template_expr_parts, inner)
        elif kind == NodeType.CAST:
            self._verify_type(payload.type, inner)
            self._verify_node(payload.target, inner)
        elif kind == NodeType.POSTFIX_OP:
            self._verify_node(payload.left, inner)
        elif kind == NodeType.STRUCT_DECL:
            for struct_field in payload.fields:
                self._verify_type(struct_field.type, inner)
        elif kind == NodeType.TYPEDEF_DECL:
            self._verify_type(payload.type, inner)
        elif kind == NodeType.FUNCTION_HEADER_DECL:
            if depth != 1:
                raise AnalyzerError("function headers must be at the top level")
            self._verify_type(payload.return_type, inner)
        elif kind == NodeType.FUNCTION_DECL:
            if depth != 1:
                raise AnalyzerError("functions must be at the top level")
            self._verify_type(payload.header.return_type, inner)
            self._verify_all(payload.stmts, inner)
        else:
            raise AnalyzerError(f"{kind.name} nodes are not supported")