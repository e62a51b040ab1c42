"""Source-like text forms of paths, directives and type expressions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, Union

from quill.nodes import (
    Directive,
    DirectiveType,
    ImportPath,
    ImportStaticPath,
    ImportStaticPathType,
    PackagePath,
    StaticPath,
    Type,
    TypeKind,
    TypeStaticPath,
)

_DIRECTIVE_TEXT: dict[DirectiveType, str] = {
    DirectiveType.C_RESTRICT: "@c_restrict ",
    DirectiveType.C_FILE: "@c_FILE ",
    DirectiveType.C_STR: "@c_str ",
    DirectiveType.IGNORE_UNUSED: "@ignore_unused ",
    DirectiveType.IMPL: "@impl ",
    DirectiveType.STRING_LITERAL: "@string_literal ",
    DirectiveType.STRING_TEMPLATE: "@string_template ",
    DirectiveType.RANGE_LITERAL: "@range_literal ",
}


def format_static_path(path: Optional[StaticPath]) -> str:
    """Render `a::b::c`, or a marker for a missing path."""
    if path is None:
        return "<static_path:NULL>"
    names = []
    current: Optional[StaticPath] = path
    while current is not None:
        names.append(current.name)
        current = current.child
    return "::".join(names)


def format_package_path(path: PackagePath) -> str:
    """Render `a/b/c`."""
    names = []
    current: Optional[PackagePath] = path
    while current is not None:
        names.append(current.name)
        current = current.child
    return "/".join(names)


def _format_import_static_path(path: ImportStaticPath) -> str:
    parts = []
    current: Optional[ImportStaticPath] = path
    while current is not None:
        if current.type == ImportStaticPathType.WILDCARD:
            parts.append("*")
            break
        parts.append(current.name)
        current = current.child
    return "::".join(parts)


def format_import_path(path: ImportPath) -> str:
    """Render an import path; directories join with `/`, the file's tail with `::`."""
    dirs = []
    current: Union[ImportPath, ImportStaticPath, None] = path
    while isinstance(current, ImportPath):
        dirs.append(current.name)
        current = current.child
    text = "/".join(dirs)
    if isinstance(current, ImportStaticPath):
        text += "::" + _format_import_static_path(current)
    return text


def format_directives(directives: Iterable[Directive]) -> str:
    """Render directives, each followed by a space."""
    parts = []
    for directive in directives:
        if directive.type == DirectiveType.C_HEADER:
            parts.append(f'@c_header("{directive.include}") ')
        else:
            parts.append(_DIRECTIVE_TEXT[directive.type])
    return "".join(parts)


def format_type_static_path(t_path: TypeStaticPath) -> str:
    """Render a named type with its generic arguments in angle brackets."""
    text = format_static_path(t_path.path)
    if t_path.generic_args:
        text += "<" + ", ".join(format_type(arg) for arg in t_path.generic_args) + ">"
    return text


def format_type(type_: Optional[Type]) -> str:
    """Render a type expression, prefixed by its directives."""
    if type_ is None:
        return "<type:NULL>"

    prefix = format_directives(type_.directives)

    if type_.kind == TypeKind.BUILT_IN:
        return prefix + type_.built_in.name.lower()
    if type_.kind == TypeKind.STATIC_PATH:
        return prefix + format_type_static_path(type_.static_path)
    if type_.kind == TypeKind.POINTER:
        return prefix + format_type(type_.of) + "*"
    if type_.kind == TypeKind.MUT_POINTER:
        return prefix + format_type(type_.of) + " mut*"
    return prefix + f"<type:{int(type_.kind)}>"