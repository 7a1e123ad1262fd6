"""Specifier filters applied before path resolution."""

import re
from typing import Iterable, List


# RequireJS loader plugins for non-code resources:
# hogan templates, inline style sheets and plain text.
LOADER_PREFIXES = ("hgn!", "css!", "txt!")

_LOADER_PATTERN = re.compile("|".join(re.escape(prefix) for prefix in LOADER_PREFIXES))


def is_loader_specifier(specifier: str) -> bool:
    """Check if a specifier goes through a non-code loader plugin."""
    return _LOADER_PATTERN.search(specifier) is not None


def avoid_loaders(specifiers: Iterable[str]) -> List[str]:
    """
    Drop specifiers that denote loader dependencies.
    
    Args:
        specifiers: Raw specifiers extracted from a file.
    
    Returns:
        The specifiers that name traversable code, in their original order.
    """
    return [spec for spec in specifiers if not is_loader_specifier(spec)]
