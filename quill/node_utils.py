"""Lookups, structural equality and string forms for syntax tree values."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Optional, Union

from quill.nodes import (
    ASTNode,
    Directive,
    DirectiveType,
    FileRoot,
    ImportPath,
    ImportPathType,
    ImportStaticPath,
    ImportStaticPathType,
    NodeType,
    PackagePath,
    StaticPath,
    Type,
    TypeKind,
    TypeStaticPath,
)

_PathLike = Union[StaticPath, PackagePath]


def _names(path: Optional[_PathLike]) -> Iterator[str]:
    while path is not None:
        yield path.name
        path = path.child


def find_decl_by_id(root: FileRoot, node_id: int) -> Optional[ASTNode]:
    """Return the top-level node with the given id, or None."""
    return next((node for node in root.nodes if node.id == node_id), None)


def _decl_name(node: ASTNode) -> Optional[str]:
    payload = node.node
    if node.type == NodeType.VAR_DECL:
        lhs = payload.lhs
        return lhs.name if lhs.type.name == "NAME" else None
    if node.type in (NodeType.STRUCT_DECL, NodeType.UNION_DECL, NodeType.GLOBALTAG_DECL):
        return payload.maybe_name
    if node.type in (NodeType.ENUM_DECL, NodeType.TYPEDEF_DECL, NodeType.FUNCTION_HEADER_DECL):
        return payload.name
    if node.type == NodeType.FUNCTION_DECL:
        return payload.header.name
    if node.type == NodeType.FILE_ROOT:
        raise ValueError("a file root cannot be nested inside another file root")
    return None


def find_decl_by_name(root: FileRoot, name: str) -> Optional[ASTNode]:
    """Return the first top-level declaration with the given name, or None."""
    for node in root.nodes:
        if _decl_name(node) == name:
            return node
    return None


def static_path_eq(a: StaticPath, b: StaticPath) -> bool:
    """Compare two `a::b` paths segment by segment."""
    return list(_names(a)) == list(_names(b))


def type_static_path_eq(a: TypeStaticPath, b: TypeStaticPath) -> bool:
    """Compare named types by presence of a path and by their generic arguments."""
    if (a.path is None) != (b.path is None):
        return False
    return types_eq(a.generic_args, b.generic_args)


def directive_eq(a: Directive, b: Directive) -> bool:
    """Compare two directives, including the include of `@c_header`."""
    if a.type != b.type:
        return False
    if a.type == DirectiveType.C_HEADER:
        return a.include == b.include
    return True


def directives_eq(a: Sequence[Directive], b: Sequence[Directive]) -> bool:
    """Compare directive lists pairwise; lists of differing length count as equal."""
    if len(a) != len(b):
        return True
    return all(directive_eq(x, y) for x, y in zip(a, b))


def type_eq(a: Type, b: Type) -> bool:
    """Structural equality of two type expressions."""
    if a.kind != b.kind:
        return False
    if not directives_eq(a.directives, b.directives):
        return False

    if a.kind == TypeKind.BUILT_IN:
        return a.built_in == b.built_in
    if a.kind == TypeKind.STATIC_PATH:
        return type_static_path_eq(a.static_path, b.static_path)
    if a.kind in (TypeKind.POINTER, TypeKind.MUT_POINTER):
        if a.of is None or b.of is None:
            return True
        return type_eq(a.of, b.of)
    raise ValueError(f"equality of {a.kind.name} types is unsupported")


def types_eq(a: Sequence[Type], b: Sequence[Type]) -> bool:
    """Compare two type lists element by element."""
    if len(a) != len(b):
        return False
    return all(type_eq(x, y) for x, y in zip(a, b))


def static_path_to_str(path: StaticPath) -> str:
    """Render `a::b::c`."""
    return "::".join(_names(path))


def package_path_to_str(path: PackagePath) -> str:
    """Render `a/b/c`."""
    return "/".join(_names(path))


def _import_static_path_to_str(path: ImportStaticPath) -> str:
    parts = []
    current: Optional[ImportStaticPath] = path
    while current is not None:
        if current.type == ImportStaticPathType.WILDCARD:
            parts.append("*")
            break
        parts.append(current.name)
        current = current.child
    return "::".join(parts)


def import_path_to_str(path: ImportPath) -> str:
    """Render an import path; the file's static tail follows a `/`."""
    parts = []
    current: Union[ImportPath, ImportStaticPath, None] = path
    while isinstance(current, ImportPath):
        parts.append(current.name)
        current = current.child
    if isinstance(current, ImportStaticPath):
        parts.append(_import_static_path_to_str(current))
    return "/".join(parts)


def import_path_to_package_path(import_path: Optional[ImportPath]) -> Optional[PackagePath]:
    """Drop the static tail of an import path, keeping directories and file."""
    if import_path is None:
        return None
    if import_path.type == ImportPathType.DIR:
        return PackagePath(import_path.name, import_path_to_package_path(import_path.child))
    return PackagePath(import_path.name)


def package_path_to_import_path(package_path: Optional[PackagePath]) -> Optional[ImportPath]:
    """Turn a package path into an import path whose last segment is a file."""
    if package_path is None:
        return None
    if package_path.child is not None:
        return ImportPath(
            ImportPathType.DIR,
            package_path.name,
            package_path_to_import_path(package_path.child),
        )
    return ImportPath(ImportPathType.FILE, package_path.name)


def package_path_eq(p1: Optional[PackagePath], p2: Optional[PackagePath]) -> bool:
    """Compare two package paths; two missing paths are equal."""
    if p1 is None or p2 is None:
        return p1 is None and p2 is None
    return list(_names(p1)) == list(_names(p2))