"""Syntax tree data model: node kinds, types, paths and directives."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Any, Optional, Union

_UINT64_MAX = 2**64 - 1


class NodeType(IntEnum):
    """Kind of an AST node."""

    NONE = 0
    FILE_ROOT = auto()
    FILE_SEPARATOR = auto()
    UNARY_OP = auto()
    BINARY_OP = auto()
    POSTFIX_OP = auto()
    LITERAL = auto()
    TUPLE = auto()
    VAR_DECL = auto()
    VAR_REF = auto()
    GET_FIELD = auto()
    INDEX = auto()
    RANGE = auto()
    ASSIGNMENT = auto()
    FUNCTION_CALL = auto()
    STATEMENT_BLOCK = auto()
    IF = auto()
    TRY = auto()
    CATCH = auto()
    BREAK = auto()
    CONTINUE = auto()
    WHILE = auto()
    DO_WHILE = auto()
    FOR = auto()
    FOREACH = auto()
    RETURN = auto()
    DEFER = auto()
    STRUCT_INIT = auto()
    ARRAY_INIT = auto()
    IMPORT = auto()
    PACKAGE = auto()
    TEMPLATE_STRING = auto()
    CRASH = auto()
    SIZEOF = auto()
    SWITCH = auto()
    CAST = auto()
    STRUCT_DECL = auto()
    UNION_DECL = auto()
    ENUM_DECL = auto()
    TYPEDEF_DECL = auto()
    GLOBALTAG_DECL = auto()
    FUNCTION_HEADER_DECL = auto()
    FUNCTION_DECL = auto()


class TypeKind(IntEnum):
    """Kind of a type expression."""

    BUILT_IN = 0
    STATIC_PATH = auto()
    TUPLE = auto()
    POINTER = auto()
    MUT_POINTER = auto()
    ARRAY = auto()
    SLICE = auto()


class TypeBuiltIn(IntEnum):
    """Built-in primitive types."""

    VOID = 0
    BOOL = auto()
    CHAR = auto()
    INT = auto()
    INT8 = auto()
    INT16 = auto()
    INT32 = auto()
    INT64 = auto()
    UINT = auto()
    UINT8 = auto()
    UINT16 = auto()
    UINT32 = auto()
    UINT64 = auto()
    FLOAT = auto()
    FLOAT32 = auto()
    FLOAT64 = auto()


class DirectiveType(IntEnum):
    """Kind of an `@directive`."""

    C_HEADER = 0
    C_RESTRICT = auto()
    C_FILE = auto()
    C_STR = auto()
    IGNORE_UNUSED = auto()
    IMPL = auto()
    STRING_LITERAL = auto()
    STRING_TEMPLATE = auto()
    RANGE_LITERAL = auto()


class UnaryOperator(IntEnum):
    NUM_NEGATE = 0
    BOOL_NEGATE = auto()
    PTR_REF = auto()
    PTR_DEREF = auto()
    PLUS_PLUS = auto()
    MINUS_MINUS = auto()


class BinaryOperator(IntEnum):
    BIT_OR = 0
    BIT_AND = auto()
    BIT_XOR = auto()
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    BOOL_OR = auto()
    BOOL_AND = auto()
    EQ = auto()
    NOT_EQ = auto()
    LESS = auto()
    LESS_OR_EQ = auto()
    GREATER = auto()
    GREATER_OR_EQ = auto()


class PostfixOperator(IntEnum):
    PLUS_PLUS = 0
    MINUS_MINUS = auto()


class AssignmentOperator(IntEnum):
    ASSIGN = 0
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    MULTIPLY_ASSIGN = auto()
    DIVIDE_ASSIGN = auto()
    BIT_AND_ASSIGN = auto()
    BIT_OR_ASSIGN = auto()
    BIT_XOR_ASSIGN = auto()


class LiteralKind(IntEnum):
    BOOL = 0
    INT = auto()
    FLOAT = auto()
    STR = auto()
    CHAR = auto()
    CHARS = auto()
    NULL = auto()


class VarDeclLHSType(IntEnum):
    NAME = 0
    TUPLE = auto()


class ImportPathType(IntEnum):
    DIR = 0
    FILE = auto()


class ImportStaticPathType(IntEnum):
    WILDCARD = 0
    IDENT = auto()


class ImportType(IntEnum):
    DEFAULT = 0
    LOCAL = auto()
    ROOT = auto()


class SizeofKind(IntEnum):
    TYPE = 0
    EXPR = auto()


@dataclass
class Directive:
    """A directive attached to a node or type; only `@c_header` carries data."""

    type: DirectiveType
    include: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type == DirectiveType.C_HEADER:
            if self.include is None:
                raise ValueError("c_header directive requires an include")
        elif self.include is not None:
            raise ValueError(f"directive {self.type.name} takes no include")


@dataclass
class StaticPath:
    """A `a::b::c` path."""

    name: str
    child: Optional[StaticPath] = None


@dataclass
class PackagePath:
    """A `a/b/c` package path."""

    name: str
    child: Optional[PackagePath] = None


@dataclass
class ImportStaticPath:
    """The `::`-separated tail of an import, possibly ending in a wildcard."""

    type: ImportStaticPathType
    name: Optional[str] = None
    child: Optional[ImportStaticPath] = None

    def __post_init__(self) -> None:
        if self.type == ImportStaticPathType.IDENT:
            if self.name is None:
                raise ValueError("identifier import path requires a name")
        elif self.name is not None or self.child is not None:
            raise ValueError("wildcard import path takes no name or child")


@dataclass
class ImportPath:
    """A `/`-separated import path; directories nest, files end in a static path."""

    type: ImportPathType
    name: str
    child: Union[ImportPath, ImportStaticPath, None] = None

    def __post_init__(self) -> None:
        if self.child is None:
            return
        expected = ImportPath if self.type == ImportPathType.DIR else ImportStaticPath
        if not isinstance(self.child, expected):
            raise TypeError(
                f"{self.type.name} import path child must be {expected.__name__}"
            )


@dataclass
class TypeStaticPath:
    """A named type with optional generic arguments."""

    path: Optional[StaticPath]
    generic_args: list[Type] = field(default_factory=list)
    impl_version: int = 0


@dataclass
class Type:
    """A type expression."""

    kind: TypeKind
    built_in: Optional[TypeBuiltIn] = None
    static_path: Optional[TypeStaticPath] = None
    of: Optional[Type] = None
    explicit_size: Any = None
    directives: list[Directive] = field(default_factory=list)
    id: int = 0

    def __post_init__(self) -> None:
        if self.kind == TypeKind.BUILT_IN and self.built_in is None:
            raise ValueError("built-in type requires a built_in value")
        if self.kind == TypeKind.STATIC_PATH and self.static_path is None:
            raise ValueError("static path type requires a static_path")


@dataclass
class TypeOrLet:
    is_let: bool = False
    is_mut: bool = False
    maybe_type: Optional[Type] = None


@dataclass
class VarDeclLHS:
    """Left-hand side of a declaration: one name or a tuple of names."""

    type: VarDeclLHSType
    name: Optional[str] = None
    tuple_names: list[str] = field(default_factory=list)
    count: int = 1

    def __post_init__(self) -> None:
        if self.type == VarDeclLHSType.NAME and self.name is None:
            raise ValueError("named declaration requires a name")


@dataclass
class FnParam:
    type: Type
    name: str
    is_mut: bool = False


@dataclass
class StructField:
    type: Type
    name: str


@dataclass
class StructFieldInit:
    name: str
    value: ASTNode


@dataclass
class ArrayInitElem:
    value: ASTNode
    maybe_index: Optional[ASTNode] = None


@dataclass
class FileRoot:
    nodes: list[ASTNode] = field(default_factory=list)


@dataclass
class UnaryOpNode:
    op: UnaryOperator
    right: ASTNode


@dataclass
class BinaryOpNode:
    op: BinaryOperator
    lhs: ASTNode
    rhs: ASTNode


@dataclass
class PostfixOpNode:
    left: ASTNode
    op: PostfixOperator


_LITERAL_TYPES: dict[LiteralKind, tuple[type, ...]] = {
    LiteralKind.BOOL: (bool,),
    LiteralKind.INT: (int,),
    LiteralKind.FLOAT: (float,),
    LiteralKind.STR: (str,),
    LiteralKind.CHAR: (str,),
    LiteralKind.CHARS: (str,),
}


@dataclass
class Literal:
    """A literal value; integers are unsigned 64-bit."""

    kind: LiteralKind
    value: Union[bool, int, float, str, None] = None

    def __post_init__(self) -> None:
        if self.kind == LiteralKind.NULL:
            if self.value is not None:
                raise ValueError("null literal carries no value")
            return
        expected = _LITERAL_TYPES[self.kind]
        if not isinstance(self.value, expected) or (
            self.kind == LiteralKind.INT and isinstance(self.value, bool)
        ):
            raise TypeError(f"{self.kind.name} literal has wrong value type")
        if self.kind == LiteralKind.INT and not 0 <= self.value <= _UINT64_MAX:
            raise ValueError("integer literal out of unsigned 64-bit range")


@dataclass
class TupleNode:
    exprs: list[ASTNode] = field(default_factory=list)


@dataclass
class VarDecl:
    type_or_let: TypeOrLet
    lhs: VarDeclLHS
    initializer: Optional[ASTNode] = None
    is_static: bool = False


@dataclass
class VarRef:
    path: StaticPath


@dataclass
class GetField:
    root: ASTNode
    name: str
    is_ptr_deref: bool = False


@dataclass
class IndexNode:
    root: ASTNode
    value: ASTNode


@dataclass
class RangeNode:
    lhs: ASTNode
    rhs: ASTNode
    inclusive: bool = False


@dataclass
class Assignment:
    op: AssignmentOperator
    lhs: ASTNode
    rhs: ASTNode


@dataclass
class FunctionCall:
    function: ASTNode
    args: list[ASTNode] = field(default_factory=list)
    generic_args: list[Type] = field(default_factory=list)
    impl_version: int = 0


@dataclass
class StatementBlock:
    stmts: list[ASTNode] = field(default_factory=list)


@dataclass
class IfNode:
    cond: ASTNode
    block: StatementBlock
    else_: Optional[ASTNode] = None


@dataclass
class CatchNode:
    target: ASTNode
    error: str
    then: ASTNode


@dataclass
class BreakNode:
    maybe_expr: Optional[ASTNode] = None


@dataclass
class WhileNode:
    cond: ASTNode
    block: StatementBlock


@dataclass
class ForEachNode:
    var: VarDeclLHS
    iterable: ASTNode
    block: StatementBlock


@dataclass
class ReturnNode:
    maybe_expr: Optional[ASTNode] = None


@dataclass
class DeferNode:
    stmt: ASTNode


@dataclass
class StructInit:
    fields: list[StructFieldInit] = field(default_factory=list)


@dataclass
class ArrayInit:
    elems: list[ArrayInitElem] = field(default_factory=list)
    maybe_explicit_length: Optional[ASTNode] = None


@dataclass
class ImportNode:
    type: ImportType
    import_path: ImportPath


@dataclass
class PackageNode:
    package_path: PackagePath


@dataclass
class TemplateString:
    """Interleaved text parts and expressions: one more text part than expressions."""

    str_parts: list[str]
    template_expr_parts: list[ASTNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.str_parts) != len(self.template_expr_parts) + 1:
            raise ValueError(
                "template string needs exactly one more text part than expressions"
            )


@dataclass
class CrashNode:
    maybe_expr: Optional[ASTNode] = None


@dataclass
class SizeofNode:
    kind: SizeofKind
    type: Optional[Type] = None
    expr: Optional[ASTNode] = None

    def __post_init__(self) -> None:
        if self.kind == SizeofKind.TYPE and self.type is None:
            raise ValueError("sizeof of a type requires a type")
        if self.kind == SizeofKind.EXPR and self.expr is None:
            raise ValueError("sizeof of an expression requires an expression")


@dataclass
class CastNode:
    type: Type
    target: ASTNode


@dataclass
class StructDecl:
    maybe_name: Optional[str] = None
    fields: list[StructField] = field(default_factory=list)
    generic_params: list[str] = field(default_factory=list)
    generic_impls: list[list[Type]] = field(default_factory=list)


@dataclass
class UnionDecl:
    maybe_name: Optional[str] = None


@dataclass
class EnumDecl:
    name: str


@dataclass
class TypedefDecl:
    name: str
    type: Type


@dataclass
class GlobaltagDecl:
    maybe_name: Optional[str] = None


@dataclass
class FunctionHeaderDecl:
    return_type: Type
    name: str
    params: list[FnParam] = field(default_factory=list)
    generic_params: list[str] = field(default_factory=list)
    generic_impls: list[list[Type]] = field(default_factory=list)
    is_main: bool = False


@dataclass
class FunctionDecl:
    header: FunctionHeaderDecl
    stmts: list[ASTNode] = field(default_factory=list)


_PAYLOADS: dict[NodeType, type] = {
    NodeType.FILE_ROOT: FileRoot,
    NodeType.UNARY_OP: UnaryOpNode,
    NodeType.BINARY_OP: BinaryOpNode,
    NodeType.POSTFIX_OP: PostfixOpNode,
    NodeType.LITERAL: Literal,
    NodeType.TUPLE: TupleNode,
    NodeType.VAR_DECL: VarDecl,
    NodeType.VAR_REF: VarRef,
    NodeType.GET_FIELD: GetField,
    NodeType.INDEX: IndexNode,
    NodeType.RANGE: RangeNode,
    NodeType.ASSIGNMENT: Assignment,
    NodeType.FUNCTION_CALL: FunctionCall,
    NodeType.STATEMENT_BLOCK: StatementBlock,
    NodeType.IF: IfNode,
    NodeType.CATCH: CatchNode,
    NodeType.BREAK: BreakNode,
    NodeType.WHILE: WhileNode,
    NodeType.FOREACH: ForEachNode,
    NodeType.RETURN: ReturnNode,
    NodeType.DEFER: DeferNode,
    NodeType.STRUCT_INIT: StructInit,
    NodeType.ARRAY_INIT: ArrayInit,
    NodeType.IMPORT: ImportNode,
    NodeType.PACKAGE: PackageNode,
    NodeType.TEMPLATE_STRING: TemplateString,
    NodeType.CRASH: CrashNode,
    NodeType.SIZEOF: SizeofNode,
    NodeType.CAST: CastNode,
    NodeType.STRUCT_DECL: StructDecl,
    NodeType.UNION_DECL: UnionDecl,
    NodeType.ENUM_DECL: EnumDecl,
    NodeType.TYPEDEF_DECL: TypedefDecl,
    NodeType.GLOBALTAG_DECL: GlobaltagDecl,
    NodeType.FUNCTION_HEADER_DECL: FunctionHeaderDecl,
    NodeType.FUNCTION_DECL: FunctionDecl,
}

_NO_PAYLOAD = frozenset({NodeType.NONE, NodeType.FILE_SEPARATOR, NodeType.CONTINUE})


@dataclass
class ASTNode:
    """A syntax tree node: its kind, its kind-specific payload and its directives."""

    type: NodeType
    node: Any = None
    id: int = 0
    directives: list[Directive] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.type in _NO_PAYLOAD:
            if self.node is not None:
                raise TypeError(f"{self.type.name} node carries no payload")
            return
        expected = _PAYLOADS.get(self.type)
        if expected is not None and not isinstance(self.node, expected):
            raise TypeError(f"{self.type.name} node requires a {expected.__name__}")