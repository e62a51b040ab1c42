import pytest

from quill.node_utils import (
    directive_eq,
    directives_eq,
    find_decl_by_id,
    find_decl_by_name,
    import_path_to_package_path,
    import_path_to_str,
    package_path_eq,
    package_path_to_import_path,
    package_path_to_str,
    static_path_eq,
    static_path_to_str,
    type_eq,
    type_static_path_eq,
    types_eq,
)
from quill.nodes import (
    ASTNode,
    Directive,
    DirectiveType,
    EnumDecl,
    FileRoot,
    FunctionDecl,
    FunctionHeaderDecl,
    ImportPath,
    ImportPathType,
    ImportStaticPath,
    ImportStaticPathType,
    Literal,
    LiteralKind,
    NodeType,
    PackagePath,
    StaticPath,
    StructDecl,
    Type,
    TypeBuiltIn,
    TypeKind,
    TypeOrLet,
    TypeStaticPath,
    VarDecl,
    VarDeclLHS,
    VarDeclLHSType,
)


def builtin(kind):
    return Type(TypeKind.BUILT_IN, built_in=kind)


def void():
    return builtin(TypeBuiltIn.VOID)


@pytest.fixture
def root():
    var = ASTNode(
        NodeType.VAR_DECL,
        VarDecl(
            TypeOrLet(is_let=True),
            VarDeclLHS(VarDeclLHSType.NAME, name="count"),
            Literal(LiteralKind.INT, 1),
        ),
        id=3,
    )
    struct = ASTNode(NodeType.STRUCT_DECL, StructDecl(maybe_name="Point"), id=4)
    anon = ASTNode(NodeType.STRUCT_DECL, StructDecl(), id=5)
    enum = ASTNode(NodeType.ENUM_DECL, EnumDecl("Color"), id=6)
    func = ASTNode(
        NodeType.FUNCTION_DECL,
        FunctionDecl(FunctionHeaderDecl(void(), "main", is_main=True)),
        id=7,
    )
    sep = ASTNode(NodeType.FILE_SEPARATOR, id=8)
    return FileRoot([var, struct, anon, enum, sep, func])


def test_find_decl_by_id(root):
    assert find_decl_by_id(root, 4) is root.nodes[1]
    assert find_decl_by_id(root, 7) is root.nodes[-1]
    assert find_decl_by_id(root, 1000) is None


def test_find_decl_by_name(root):
    assert find_decl_by_name(root, "count") is root.nodes[0]
    assert find_decl_by_name(root, "Point") is root.nodes[1]
    assert find_decl_by_name(root, "Color") is root.nodes[3]
    assert find_decl_by_name(root, "main") is root.nodes[-1]
    assert find_decl_by_name(root, "missing") is None


def test_find_decl_by_name_rejects_nested_root():
    root = FileRoot([ASTNode(NodeType.FILE_ROOT, FileRoot())])
    with pytest.raises(ValueError):
        find_decl_by_name(root, "x")


def test_static_path_eq():
    a = StaticPath("io", StaticPath("println"))
    assert static_path_eq(a, StaticPath("io", StaticPath("println")))
    assert not static_path_eq(a, StaticPath("io"))
    assert not static_path_eq(a, StaticPath("io", StaticPath("print")))


def test_static_path_to_str():
    assert static_path_to_str(StaticPath("std", StaticPath("io"))) == "std::io"
    assert static_path_to_str(StaticPath("main")) == "main"


def test_package_path_to_str():
    assert package_path_to_str(PackagePath("std", PackagePath("io"))) == "std/io"


def test_import_path_to_str():
    wildcard = ImportStaticPath(ImportStaticPathType.WILDCARD)
    path = ImportPath(
        ImportPathType.DIR,
        "std",
        ImportPath(
            ImportPathType.FILE,
            "io",
            ImportStaticPath(ImportStaticPathType.IDENT, "println"),
        ),
    )
    assert import_path_to_str(path) == "std/io/println"
    assert import_path_to_str(ImportPath(ImportPathType.FILE, "io", wildcard)) == "io/*"


def test_package_import_round_trip():
    pkg = PackagePath("a", PackagePath("b", PackagePath("c")))
    imp = package_path_to_import_path(pkg)
    assert imp.type == ImportPathType.DIR
    assert import_path_to_str(imp) == package_path_to_str(pkg)
    assert package_path_eq(import_path_to_package_path(imp), pkg)


def test_none_conversions():
    assert package_path_to_import_path(None) is None
    assert import_path_to_package_path(None) is None


def test_import_to_package_drops_static_tail():
    path = ImportPath(
        ImportPathType.FILE, "io", ImportStaticPath(ImportStaticPathType.IDENT, "x")
    )
    assert package_path_eq(import_path_to_package_path(path), PackagePath("io"))


def test_package_path_eq():
    assert package_path_eq(None, None)
    assert not package_path_eq(PackagePath("a"), None)
    assert not package_path_eq(PackagePath("a", PackagePath("b")), PackagePath("a"))
    assert not package_path_eq(PackagePath("a"), PackagePath("b"))
    assert package_path_eq(PackagePath("a", PackagePath("b")), PackagePath("a", PackagePath("b")))


def test_directive_eq():
    assert directive_eq(Directive(DirectiveType.C_HEADER, "stdio.h"), Directive(DirectiveType.C_HEADER, "stdio.h"))
    assert not directive_eq(Directive(DirectiveType.C_HEADER, "stdio.h"), Directive(DirectiveType.C_HEADER, "string.h"))
    assert not directive_eq(Directive(DirectiveType.C_FILE), Directive(DirectiveType.C_STR))
    assert directive_eq(Directive(DirectiveType.IMPL), Directive(DirectiveType.IMPL))


def test_directives_eq():
    a = [Directive(DirectiveType.C_FILE)]
    assert directives_eq(a, [Directive(DirectiveType.C_FILE)])
    assert not directives_eq(a, [Directive(DirectiveType.C_RESTRICT)])
    assert directives_eq(a, [])


def test_type_eq_builtin():
    assert type_eq(builtin(TypeBuiltIn.INT), builtin(TypeBuiltIn.INT))
    assert not type_eq(builtin(TypeBuiltIn.INT), builtin(TypeBuiltIn.UINT))
    assert not type_eq(builtin(TypeBuiltIn.INT), Type(TypeKind.POINTER, of=void()))


def test_type_eq_pointer():
    ptr_int = Type(TypeKind.POINTER, of=builtin(TypeBuiltIn.INT))
    assert type_eq(ptr_int, Type(TypeKind.POINTER, of=builtin(TypeBuiltIn.INT)))
    assert not type_eq(ptr_int, Type(TypeKind.POINTER, of=builtin(TypeBuiltIn.CHAR)))
    assert not type_eq(ptr_int, Type(TypeKind.MUT_POINTER, of=builtin(TypeBuiltIn.INT)))


def test_type_eq_directives():
    a = Type(TypeKind.BUILT_IN, built_in=TypeBuiltIn.VOID, directives=[Directive(DirectiveType.C_FILE)])
    b = Type(TypeKind.BUILT_IN, built_in=TypeBuiltIn.VOID, directives=[Directive(DirectiveType.C_RESTRICT)])
    assert not type_eq(a, b)


def test_type_eq_static_path():
    a = Type(TypeKind.STATIC_PATH, static_path=TypeStaticPath(StaticPath("List"), [builtin(TypeBuiltIn.INT)]))
    b = Type(TypeKind.STATIC_PATH, static_path=TypeStaticPath(StaticPath("List"), [builtin(TypeBuiltIn.INT)]))
    c = Type(TypeKind.STATIC_PATH, static_path=TypeStaticPath(StaticPath("List"), [builtin(TypeBuiltIn.BOOL)]))
    assert type_eq(a, b)
    assert not type_eq(a, c)


def test_type_static_path_eq_missing_path():
    assert not type_static_path_eq(TypeStaticPath(None), TypeStaticPath(StaticPath("A")))
    assert type_static_path_eq(TypeStaticPath(None), TypeStaticPath(None))


def test_type_eq_unsupported_kind():
    with pytest.raises(ValueError):
        type_eq(Type(TypeKind.ARRAY, of=void()), Type(TypeKind.ARRAY, of=void()))


def test_types_eq():
    assert types_eq([], [])
    assert types_eq([void()], [void()])
    assert not types_eq([void()], [])
    assert not types_eq([void()], [builtin(TypeBuiltIn.BOOL)])