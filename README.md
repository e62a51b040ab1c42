# quill

Front-end building blocks for the Quill programming language compiler.
The package uses only the standard library.

## Modules

- `quill.nodes`: the syntax tree model. An `ASTNode` holds a `NodeType`,
  the payload for that kind (for example `FunctionDecl`, `VarDecl`,
  `IfNode`, `Literal`), an integer `id` and a list of `Directive`s.
  Constructing a node with a payload of the wrong class raises
  `TypeError`. Type annotations are `Type` values with a `TypeKind`
  (`BUILT_IN`, `STATIC_PATH`, `POINTER`, `MUT_POINTER`, ...), a
  `TypeBuiltIn` or a `TypeStaticPath`. Paths are `StaticPath`
  (`a::b`), `PackagePath` (`a/b`) and `ImportPath` / `ImportStaticPath`.
  Integer literals must fit in an unsigned 64-bit value.
- `quill.node_utils`: lookups, comparisons and text forms.
  - `find_decl_by_id` and `find_decl_by_name` search the top-level nodes
    of a `FileRoot` and return the first match or `None`.
  - `type_eq`, `types_eq`, `static_path_eq`, `package_path_eq`,
    `directive_eq`, `directives_eq` and `type_static_path_eq` compare
    parts of the tree. Note their exact rules: `directives_eq` treats
    lists of different lengths as equal, `type_static_path_eq` compares
    only whether a path is present and the generic arguments, pointer
    types with a missing target compare equal, and `type_eq` raises
    `ValueError` for tuple, array and slice types.
  - `static_path_to_str`, `package_path_to_str` and `import_path_to_str`
    render paths; `import_path_to_package_path` and
    `package_path_to_import_path` convert between the two path kinds.
- `quill.format_types`: source-like text for paths, directives and types,
  for example `int32`, `char mut*`, `Vec<int>` or `@c_header("stdio.h") `.
- `quill.printer`: `format_astnode` renders a node and its children as
  source-like text, each node prefixed by `#<id>#`. `print_astnode` and
  `println_astnode` write that text to standard output.
- `quill.analyzer`: `Analyzer().verify_syntax(root)` checks a file root
  and returns the number of nodes and types it visited. It checks that
  each directive is attached to the kind of node or type it belongs to
  and appears at most once, that the package declaration comes first and
  appears at most once, that there is at most one file separator, that
  functions are at the top level, that `break` carries no value and that
  an explicit array length is an integer literal. Node kinds it does not
  support yet (`TRY`, `DO_WHILE`, `FOR`, `SWITCH`, union, enum and
  global-tag declarations) are rejected. Every failure raises
  `AnalyzerError`.
- `quill.args`: `parse_args(argv)` reads compiler options (without the
  program name; by default `sys.argv[1:]`) into a `QuillcArgs`. The
  options, listed in `QuillcOption`, are `-m/--main`, `-o/--output`,
  `-lstd`, `-llibc` and `-D/--build-dir`. A value follows the flag as
  the next word or after `=`. Arguments not starting with `-` are source
  paths. The values of `--main`, `-lstd` and `-llibc` are appended to the
  source paths; paths are normalised with `os.path.normpath` and
  duplicates are dropped, keeping the first. Unrecognised flags are
  ignored. A repeated option, a missing or empty value, or more than 254
  arguments raise `ArgsError`. `QuillcArgs.describe()` returns a readable
  summary.

## Example

```python
from quill.args import parse_args

args = parse_args(["main.ql", "-D=build", "-lstd=std/std.ql"])
print(args.paths_to_include)   # ['main.ql', 'std/std.ql']
print(args.describe())
```

Checking and printing a tree built from `quill.nodes`:

```python
from quill.analyzer import Analyzer, AnalyzerError
from quill.printer import format_astnode

try:
    Analyzer().verify_syntax(tree)
except AnalyzerError as exc:
    print(f"invalid file: {exc}")
else:
    print(format_astnode(tree))
```

## What it does not do

The package has no lexer and no parser: syntax trees are built directly
from the classes in `quill.nodes`. It performs no type resolution and
generates no output code, and it installs no command that compiles a
source file.