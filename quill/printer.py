"""Source-like text rendering of syntax tree nodes."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from enum import IntEnum
from itertools import zip_longest
from typing import Any, Optional

from quill.format_types import (
    format_directives,
    format_import_path,
    format_package_path,
    format_static_path,
    format_type,
)
from quill.nodes import (
    ASTNode,
    AssignmentOperator,
    BinaryOperator,
    FnParam,
    ImportType,
    Literal,
    LiteralKind,
    NodeType,
    PostfixOperator,
    SizeofKind,
    UnaryOperator,
    VarDeclLHS,
    VarDeclLHSType,
)

_TAB = "    "
_UNKNOWN = "<Unknown AST Node>\n"


class _Block(IntEnum):
    OTHER = 0
    IMPORT = 1
    FUNCTION_DECLS = 2
    STATIC_VARS = 3
    VARS = 4


_ASSIGNMENT_TEXT: dict[AssignmentOperator, str] = {
    AssignmentOperator.ASSIGN: " = ",
    AssignmentOperator.PLUS_ASSIGN: " += ",
    AssignmentOperator.MINUS_ASSIGN: " -= ",
    AssignmentOperator.MULTIPLY_ASSIGN: " *= ",
    AssignmentOperator.DIVIDE_ASSIGN: " /= ",
    AssignmentOperator.BIT_AND_ASSIGN: " &= ",
    AssignmentOperator.BIT_OR_ASSIGN: " |= ",
    AssignmentOperator.BIT_XOR_ASSIGN: " ^= ",
}

_UNARY_TEXT: dict[UnaryOperator, str] = {
    UnaryOperator.BOOL_NEGATE: "!",
    UnaryOperator.NUM_NEGATE: "-",
    UnaryOperator.PTR_REF: "&",
    UnaryOperator.PTR_DEREF: "*",
    UnaryOperator.PLUS_PLUS: "++",
    UnaryOperator.MINUS_MINUS: "--",
}

_BINARY_TEXT: dict[BinaryOperator, str] = {
    BinaryOperator.BIT_OR: " | ",
    BinaryOperator.BIT_AND: " & ",
    BinaryOperator.BIT_XOR: " ^ ",
    BinaryOperator.ADD: " + ",
    BinaryOperator.SUBTRACT: " - ",
    BinaryOperator.MULTIPLY: " * ",
    BinaryOperator.DIVIDE: " / ",
    BinaryOperator.MODULO: " % ",
    BinaryOperator.BOOL_OR: " || ",
    BinaryOperator.BOOL_AND: " && ",
    BinaryOperator.EQ: " == ",
    BinaryOperator.NOT_EQ: " != ",
    BinaryOperator.LESS: " < ",
    BinaryOperator.LESS_OR_EQ: " <= ",
    BinaryOperator.GREATER: " > ",
    BinaryOperator.GREATER_OR_EQ: " >= ",
}

_POSTFIX_TEXT: dict[PostfixOperator, str] = {
    PostfixOperator.PLUS_PLUS: "++",
    PostfixOperator.MINUS_MINUS: "--",
}

_IMPORT_PREFIX: dict[ImportType, str] = {
    ImportType.DEFAULT: "",
    ImportType.LOCAL: "./",
    ImportType.ROOT: "~/",
}


def _single_name(lhs: VarDeclLHS) -> str:
    if lhs.type != VarDeclLHSType.NAME or lhs.count != 1:
        raise ValueError("only single-name declarations can be printed")
    return lhs.name


def _generic_params(params: list[str]) -> str:
    return f"<{', '.join(params)}>" if params else ""


def _params(params: Iterable[FnParam]) -> str:
    return ", ".join(
        f"{format_type(p.type)} {'mut ' if p.is_mut else ''}{p.name}" for p in params
    )


def _block_of(node: ASTNode) -> _Block:
    if node.type == NodeType.IMPORT:
        return _Block.IMPORT
    if node.type == NodeType.FUNCTION_HEADER_DECL:
        return _Block.FUNCTION_DECLS
    if node.type == NodeType.VAR_DECL:
        return _Block.STATIC_VARS if node.node.is_static else _Block.VARS
    return _Block.OTHER


def _literal(lit: Literal) -> str:
    if lit.kind == LiteralKind.STR:
        return f'"{lit.value}"'
    if lit.kind in (LiteralKind.CHARS, LiteralKind.CHAR):
        return f"'{lit.value}'"
    if lit.kind == LiteralKind.INT:
        return str(lit.value)
    if lit.kind == LiteralKind.FLOAT:
        return f"{lit.value:f}"
    if lit.kind == LiteralKind.BOOL:
        return "true" if lit.value else "false"
    return "null"


def _stmts(stmts: Iterable[ASTNode], indent: int) -> str:
    tabs = _TAB * indent
    return "".join(f"{tabs}{_format(s, indent)};\n" for s in stmts)


def _file_root(payload: Any, indent: int) -> str:
    parts = []
    prev = _Block.OTHER
    last_ok = True
    nodes = payload.nodes
    for child, following in zip_longest(nodes, nodes[1:]):
        if child.type == NodeType.NONE:
            if last_ok:
                parts.append(_UNKNOWN)
            last_ok = False
            continue
        last_ok = True
        parts.append(_format(child, indent))
        if following is None:
            continue
        curr = _block_of(following)
        if curr != prev:
            parts.append("\n")
            prev = curr
    return "".join(parts)


def _struct_decl(payload: Any, indent: int) -> str:
    text = "struct "
    if payload.maybe_name is not None:
        text += payload.maybe_name + _generic_params(payload.generic_params) + " "
    tabs = _TAB * (indent + 1)
    fields = "".join(
        f"{tabs}{format_type(f.type)} {f.name},\n" for f in payload.fields
    )
    return text + "{\n" + fields + "}\n"


def _var_decl(payload: Any, indent: int) -> str:
    text = "static " if payload.is_static else ""
    type_or_let = payload.type_or_let
    if type_or_let.is_let:
        text += "let "
    else:
        text += format_type(type_or_let.maybe_type) + " "
    if type_or_let.is_mut:
        text += "mut "
    text += _single_name(payload.lhs)
    if payload.initializer is not None:
        text += " = " + _format(payload.initializer, indent)
    return text


def _function_header(payload: Any, indent: int) -> str:
    return (
        f"{format_type(payload.return_type)} {payload.name}"
        f"{_generic_params(payload.generic_params)}({_params(payload.params)});\n"
    )


def _function_decl(payload: Any, indent: int) -> str:
    header = payload.header
    parts = [
        f"{format_type(header.return_type)} {header.name}"
        f"{_generic_params(header.generic_params)}({_params(header.params)}) {{\n"
    ]
    inner = indent + 1
    tabs = _TAB * inner
    if not payload.stmts:
        parts.append(_TAB + "//\n")
    last_ok = True
    for stmt in payload.stmts:
        if stmt.type == NodeType.NONE:
            if last_ok:
                parts.append(tabs + _UNKNOWN)
            last_ok = False
            continue
        last_ok = True
        parts.append(f"{tabs}{_format(stmt, inner)};\n")
    parts.append("}\n\n")
    return "".join(parts)


def _function_call(payload: Any, indent: int) -> str:
    text = _format(payload.function, indent)
    if payload.generic_args:
        text += "<" + ", ".join(format_type(t) for t in payload.generic_args) + ">"
    args = ", ".join(_format(a, indent) for a in payload.args)
    return f"{text}({args})"


def _sizeof(payload: Any, indent: int) -> str:
    if payload.kind == SizeofKind.TYPE:
        inner = format_type(payload.type)
    else:
        inner = _format(payload.expr, indent)
    return f"sizeof({inner})"


def _struct_init(payload: Any, indent: int) -> str:
    inner_tabs = _TAB * (indent + 1)
    fields = "".join(
        f"{inner_tabs}.{f.name} = {_format(f.value, indent + 1)},\n"
        for f in payload.fields
    )
    return ".{\n" + fields + _TAB * indent + "}"


def _array_init(payload: Any, indent: int) -> str:
    length = payload.maybe_explicit_length
    text = "[" + (_format(length, indent) if length is not None else "") + "]{"
    elems = []
    for elem in payload.elems:
        prefix = ""
        if elem.maybe_index is not None:
            prefix = _format(elem.maybe_index, indent) + " = "
        elems.append(prefix + _format(elem.value, indent))
    return text + ", ".join(elems) + "}"


def _template_string(payload: Any, indent: int) -> str:
    parts = [payload.str_parts[0]]
    for expr, text in zip(payload.template_expr_parts, payload.str_parts[1:]):
        parts.append(_format(expr, indent))
        parts.append(text)
    return "".join(parts)


def _if(payload: Any, indent: int) -> str:
    text = (
        f"if ({_format(payload.cond, indent)}) {{\n"
        f"{_stmts(payload.block.stmts, indent)}}}"
    )
    if payload.else_ is not None:
        text += " else " + _format(payload.else_, indent)
    return text


def _foreach(payload: Any, indent: int) -> str:
    name = _single_name(payload.var) if payload.var.type == VarDeclLHSType.NAME else None
    if name is None:
        raise ValueError("only single-name foreach variables can be printed")
    return (
        f"foreach {name} in {_format(payload.iterable, indent)} {{\n"
        f"{_stmts(payload.block.stmts, indent)}}}"
    )


def _crash(payload: Any, indent: int) -> str:
    text = "CRASH"
    if payload.maybe_expr is not None:
        text += " " + _format(payload.maybe_expr, indent)
    return text + ";"


def _return(payload: Any, indent: int) -> str:
    if payload.maybe_expr is None:
        return "return"
    return "return " + _format(payload.maybe_expr, indent)


_Handler = Callable[[Any, int], str]

_HANDLERS: dict[NodeType, _Handler] = {
    NodeType.NONE: lambda p, i: "<Incomplete AST Node>",
    NodeType.FILE_ROOT: _file_root,
    NodeType.FILE_SEPARATOR: lambda p, i: "---\n\n",
    NodeType.IMPORT: lambda p, i: (
        f"import {_IMPORT_PREFIX[p.type]}{format_import_path(p.import_path)};\n"
    ),
    NodeType.PACKAGE: lambda p, i: f"package {format_package_path(p.package_path)};\n",
    NodeType.TYPEDEF_DECL: lambda p, i: f"typedef {p.name} = {format_type(p.type)};\n",
    NodeType.STRUCT_DECL: _struct_decl,
    NodeType.VAR_DECL: _var_decl,
    NodeType.FUNCTION_HEADER_DECL: _function_header,
    NodeType.FUNCTION_DECL: _function_decl,
    NodeType.FUNCTION_CALL: _function_call,
    NodeType.VAR_REF: lambda p, i: format_static_path(p.path),
    NodeType.LITERAL: lambda p, i: _literal(p),
    NodeType.SIZEOF: _sizeof,
    NodeType.GET_FIELD: lambda p, i: (
        _format(p.root, i) + ("->" if p.is_ptr_deref else ".") + p.name
    ),
    NodeType.RETURN: _return,
    NodeType.STRUCT_INIT: _struct_init,
    NodeType.ASSIGNMENT: lambda p, i: (
        _format(p.lhs, i) + _ASSIGNMENT_TEXT.get(p.op, " <op:?> ") + _format(p.rhs, i)
    ),
    NodeType.UNARY_OP: lambda p, i: (
        _UNARY_TEXT.get(p.op, "<unary_op:?>") + _format(p.right, i)
    ),
    NodeType.ARRAY_INIT: _array_init,
    NodeType.INDEX: lambda p, i: f"{_format(p.root, i)}[{_format(p.value, i)}]",
    NodeType.BINARY_OP: lambda p, i: (
        _format(p.lhs, i)
        + _BINARY_TEXT.get(p.op, f"<binary_op:{int(p.op)}>")
        + _format(p.rhs, i)
    ),
    NodeType.POSTFIX_OP: lambda p, i: (
        _format(p.left, i) + _POSTFIX_TEXT.get(p.op, f"<postfix_op:{int(p.op)}>")
    ),
    NodeType.TEMPLATE_STRING: _template_string,
    NodeType.WHILE: lambda p, i: (
        f"while ({_format(p.cond, i)}) {{\n{_stmts(p.block.stmts, i)}}}"
    ),
    NodeType.IF: _if,
    NodeType.STATEMENT_BLOCK: lambda p, i: "{\n" + _stmts(p.stmts, i) + "{",
    NodeType.TUPLE: lambda p, i: "(" + ", ".join(_format(e, i) for e in p.exprs) + ")",
    NodeType.CRASH: _crash,
    NodeType.RANGE: lambda p, i: (
        _format(p.lhs, i) + ".." + ("=" if p.inclusive else "") + _format(p.rhs, i)
    ),
    NodeType.FOREACH: _foreach,
    NodeType.DEFER: lambda p, i: "defer " + _format(p.stmt, i),
    NodeType.BREAK: lambda p, i: "break",
    NodeType.CONTINUE: lambda p, i: "continue",
}


def _format(node: ASTNode, indent: int) -> str:
    text = f"#{node.id}#" + format_directives(node.directives)
    handler: Optional[_Handler] = _HANDLERS.get(node.type)
    if handler is None:
        return text + f"/* TODO: print_node({int(node.type)}) */"
    return text + handler(node.node, indent)


def format_astnode(node: ASTNode) -> str:
    """Render a node and everything below it as source-like text, prefixed by node ids."""
    return _format(node, 0)


def print_astnode(node: ASTNode) -> None:
    """Write the rendering of a node to standard output."""
    sys.stdout.write(format_astnode(node))


def println_astnode(node: ASTNode) -> None:
    """Write the rendering of a node followed by a newline to standard output."""
    sys.stdout.write(format_astnode(node) + "\n")