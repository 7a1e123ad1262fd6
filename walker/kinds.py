"""File kind classification by extension."""

from enum import Enum
from pathlib import PurePath


DEFAULT_EXTENSION = ".js"
SASS_EXTENSIONS = {".sass", ".scss"}


class Dialect(Enum):
    """Extraction and resolution mode of a source file."""

    DEFAULT = "default"
    SASS = "sass"


def get_extension(filename: str) -> str:
    """Return the extension of a path, including the leading dot."""
    return PurePath(filename).suffix


def dialect_for(filename: str) -> Dialect:
    """
    Classify a file by its extension.
    
    Files ending in .sass or .scss are style sheets; everything else,
    notably .js, uses the default script dialect.
    """
    if get_extension(filename) in SASS_EXTENSIONS:
        return Dialect.SASS
    return Dialect.DEFAULT
