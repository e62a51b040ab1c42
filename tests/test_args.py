import pytest

from quill.args import ArgsError, QuillcArgs, QuillcOption, parse_args


def test_equals_form_sets_option():
    args = parse_args(["-D=out", "main.ql"])
    assert args.options == {QuillcOption.BUILD_DIR: "out"}
    assert args.paths_to_include == ["main.ql"]


def test_separate_value_form():
    args = parse_args(["--build-dir", "out", "a.ql"])
    assert args.options[QuillcOption.BUILD_DIR] == "out"
    assert args.paths_to_include == ["a.ql"]


def test_short_and_long_spellings_agree():
    assert parse_args(["-o", "bin"]).options == parse_args(["--output=bin"]).options


def test_included_options_appended_in_order():
    args = parse_args(["-llibc=libc.ql", "x.ql", "-lstd=std.ql", "-m", "main.ql"])
    assert args.paths_to_include == ["x.ql", "main.ql", "std.ql", "libc.ql"]
    assert args.options[QuillcOption.LLIBC] == "libc.ql"
    assert args.options[QuillcOption.LSTD] == "std.ql"


def test_paths_after_library_option_are_sources():
    args = parse_args(["hello.ql", "-lstd=std.ql", "io.ql", "-D=tmp"])
    assert args.paths_to_include == ["hello.ql", "io.ql", "std.ql"]
    assert args.options[QuillcOption.BUILD_DIR] == "tmp"


def test_duplicates_removed_keeping_first():
    args = parse_args(["a.ql", "b.ql", "a.ql", "-m", "b.ql"])
    assert args.paths_to_include == ["a.ql", "b.ql"]


def test_paths_are_normalized():
    assert parse_args(["./x/../a.ql"]).paths_to_include == parse_args(["a.ql"]).paths_to_include


def test_unknown_dash_options_are_ignored():
    args = parse_args(["-x", "a.ql"])
    assert args.options == {}
    assert args.paths_to_include == ["a.ql"]


def test_repeated_option_is_rejected():
    with pytest.raises(ArgsError):
        parse_args(["-D=a", "--build-dir=b"])


def test_missing_value_is_rejected():
    with pytest.raises(ArgsError):
        parse_args(["a.ql", "-D"])


def test_empty_value_is_rejected():
    with pytest.raises(ArgsError):
        parse_args(["-D="])


def test_argument_count_limit():
    assert parse_args(["a.ql"] * 254).paths_to_include == ["a.ql"]
    with pytest.raises(ArgsError):
        parse_args(["a.ql"] * 255)


def test_library_option_separate_value_form():
    args = parse_args(["-llibc", "libc.ql", "--main=m.ql"])
    assert args.options == {QuillcOption.LLIBC: "libc.ql", QuillcOption.MAIN: "m.ql"}
    assert args.paths_to_include == ["m.ql", "libc.ql"]


def test_describe_with_options_and_paths():
    args = parse_args(["-D=out", "a.ql"])
    assert args.describe() == '\nOptions:\n- [-D] out\n- source paths:\n  - "a.ql"\n\n'


def test_describe_without_options():
    text = QuillcArgs(paths_to_include=["a.ql"]).describe()
    assert "Options:" not in text
    assert text.endswith('  - "a.ql"\n\n')