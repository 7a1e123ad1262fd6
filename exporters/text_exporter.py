"""Plain list exporter: one file path per line."""

from typing import Optional

from tree.model import DependencyTree
from walker.resolver import get_relative_path


def to_text(tree: DependencyTree, base: Optional[str] = None) -> str:
    """
    Convert a dependency tree to a newline-separated list of paths.
    
    Args:
        tree: The traversal result.
        base: Optional directory to display paths relative to. Absolute
             paths are printed when omitted.
    
    Returns:
        The result list, root file first.
    """
    if base is None:
        return "\n".join(tree.files)
    return "\n".join(get_relative_path(path, base) for path in tree.files)
