"""Command-line argument parsing for the compiler driver."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Optional

ARGC_MAX = 255


class ArgsError(Exception):
    """Raised when the command line is malformed."""


class QuillcOption(IntEnum):
    """Options the compiler driver understands."""

    MAIN = 0
    OUTPUT = auto()
    LSTD = auto()
    LLIBC = auto()
    BUILD_DIR = auto()

    @property
    def patterns(self) -> tuple[str, ...]:
        """Spellings of this option, the short form first."""
        return _PATTERNS[self]


_PATTERNS: dict[QuillcOption, tuple[str, ...]] = {
    QuillcOption.MAIN: ("-m", "--main"),
    QuillcOption.OUTPUT: ("-o", "--output"),
    QuillcOption.LSTD: ("-lstd",),
    QuillcOption.LLIBC: ("-llibc",),
    QuillcOption.BUILD_DIR: ("-D", "--build-dir"),
}

# Options whose value is also a source file to compile, in the order they are added.
_INCLUDED_OPTIONS = (QuillcOption.MAIN, QuillcOption.LSTD, QuillcOption.LLIBC)


def _normalize(path: str) -> str:
    return os.path.normpath(path)


@dataclass
class QuillcArgs:
    """Parsed options and the ordered, duplicate-free list of source paths."""

    options: dict[QuillcOption, str] = field(default_factory=dict)
    paths_to_include: list[str] = field(default_factory=list)

    def describe(self) -> str:
        """Human-readable summary of the options and source paths."""
        lines = [""]
        if self.options:
            lines.append("Options:")
        for option in QuillcOption:
            if option in self.options:
                lines.append(f"- [{option.patterns[0]}] {self.options[option]}")
        if self.paths_to_include:
            lines.append("- source paths:")
            lines.extend(f'  - "{path}"' for path in self.paths_to_include)
        lines.append("")
        return "\n".join(lines) + "\n"


def _match(
    args: Sequence[str], index: int, option: QuillcOption, options: dict[QuillcOption, str]
) -> Optional[int]:
    """Try `option` at `args[index]`; return the index of the last consumed argument."""
    arg = args[index]
    for pattern in option.patterns:
        if not arg.startswith(pattern):
            continue
        if option in options:
            raise ArgsError(f"option {pattern} given more than once")

        rest = arg[len(pattern):]
        if rest.startswith("="):
            value = rest[1:]
        else:
            index += 1
            if index >= len(args):
                raise ArgsError(f"option {pattern} needs a value")
            value = args[index]

        if not value:
            raise ArgsError(f"option {pattern} needs a non-empty value")
        options[option] = _normalize(value)
        return index
    return None


def parse_args(argv: Optional[Sequence[str]] = None) -> QuillcArgs:
    """Parse arguments (without the program name; defaults to the process's own)."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) + 1 > ARGC_MAX:
        raise ArgsError(f"too many arguments (at most {ARGC_MAX - 1})")

    options: dict[QuillcOption, str] = {}
    paths: list[str] = []

    index = 0
    while index < len(args):
        arg = args[index]
        if not arg.startswith("-"):
            paths.append(_normalize(arg))
        else:
            for option in QuillcOption:
                consumed = _match(args, index, option, options)
                if consumed is not None:
                    index = consumed
                    break
        index += 1

    paths.extend(options[option] for option in _INCLUDED_OPTIONS if option in options)

    return QuillcArgs(options=options, paths_to_include=list(dict.fromkeys(paths)))