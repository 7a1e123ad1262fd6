"""Walker module for dependency extraction, resolution and traversal."""

from .kinds import Dialect, dialect_for
from .parser import extract_specifiers, read_source
from .filters import avoid_loaders
from .aliases import AliasTable, resolve_alias
from .resolver import absolute_path, resolve_specifier, resolve_specifiers
from .builder import TreeWalker, resolve_dependency_tree, get_tree_as_list
from .errors import (
    DeptreeError,
    InvalidArgument,
    UnreadableFile,
    ExtractionFailure,
    AliasConfigError,
)

__all__ = [
    "Dialect",
    "dialect_for",
    "extract_specifiers",
    "read_source",
    "avoid_loaders",
    "AliasTable",
    "resolve_alias",
    "absolute_path",
    "resolve_specifier",
    "resolve_specifiers",
    "TreeWalker",
    "resolve_dependency_tree",
    "get_tree_as_list",
    "DeptreeError",
    "InvalidArgument",
    "UnreadableFile",
    "ExtractionFailure",
    "AliasConfigError",
]
