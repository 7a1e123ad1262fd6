"""Path resolution utilities for mapping specifiers to absolute file paths."""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .kinds import DEFAULT_EXTENSION, Dialect, dialect_for, get_extension


def absolute_path(path: Union[str, Path]) -> str:
    """
    Make a path absolute and collapse '.' and '..' segments.

    Symlinks are left as they are, so a linked file keeps the path it
    was reached through.
    """
    return os.path.normpath(Path(path).absolute())


def resolve_specifier(
    specifier: str,
    context_file: str,
    root: str,
    dialect: Optional[Dialect] = None,
) -> str:
    """
    Resolve a raw specifier to an absolute file path.
    
    Relative specifiers (starting with '.') are resolved against the
    directory of the referencing file; everything else is resolved
    against the root directory.
    
    Extension inference follows the referencing file:
    - style sheets give extensionless specifiers their own extension;
    - scripts always get the script extension appended, whatever the
      specifier already ends with;
    - other files leave the specifier as written.
    
    No filesystem access is performed.
    
    Args:
        specifier: The raw specifier string.
        context_file: Absolute path of the file containing the reference.
        root: The configured root directory.
        dialect: Dialect of the referencing file, if already known.
    
    Returns:
        The absolute path the specifier points at.
    """
    if dialect is None:
        dialect = dialect_for(context_file)
    
    file_ext = get_extension(context_file)
    dep_ext = get_extension(specifier)
    
    # Relative paths are about the current file, non-relative about the root
    if specifier.startswith("."):
        base = Path(context_file).parent
    else:
        base = Path(root)
    resolved = absolute_path(base / specifier)
    
    if dialect is Dialect.SASS and not dep_ext:
        resolved += file_ext
    elif file_ext == DEFAULT_EXTENSION:
        resolved += DEFAULT_EXTENSION
    
    return resolved


def resolve_specifiers(
    specifiers: Iterable[str],
    context_file: str,
    root: str,
    dialect: Optional[Dialect] = None,
) -> List[str]:
    """
    Resolve specifiers from one file, preserving their order.
    
    Args:
        specifiers: Raw specifiers extracted from the referencing file.
        context_file: Absolute path of the referencing file.
        root: The configured root directory.
        dialect: Dialect of the referencing file, if already known.
    
    Returns:
        List of absolute paths, one per specifier.
    """
    if dialect is None:
        dialect = dialect_for(context_file)
    return [
        resolve_specifier(spec, context_file, root, dialect)
        for spec in specifiers
    ]


def get_relative_path(file_path: str, base: str) -> str:
    """
    Get the path relative to base for display.
    
    Args:
        file_path: The absolute file path.
        base: The directory to make it relative to.
    
    Returns:
        Relative path with forward slashes, or the original path if it
        is not below base.
    """
    path = Path(absolute_path(file_path))
    try:
        return path.relative_to(absolute_path(base)).as_posix()
    except ValueError:
        return path.as_posix()
