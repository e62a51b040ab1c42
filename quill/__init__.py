"""Quill compiler front-end: syntax tree model, checks, printing and argument parsing."""

__version__ = "0.1.0"

__all__ = ["analyzer", "args", "format_types", "node_utils", "nodes", "printer"]