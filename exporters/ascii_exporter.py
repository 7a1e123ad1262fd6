"""ASCII tree-style exporter for dependency trees."""

from typing import List, Optional, Set, Tuple

from tree.model import DependencyTree
from walker.resolver import get_relative_path


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    tree: DependencyTree,
    base: Optional[str] = None,
    style: str = "tree",
    include_missing: bool = False,
) -> str:
    """
    Convert a dependency tree to an indented tree representation.

    Each file is expanded the first time it is shown; later references
    to it are marked with [*]. Unreadable files are marked [UNREADABLE].

    Args:
        tree: The traversal result.
        base: Optional directory for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_missing: If True, show missing dependencies marked [MISSING].

    Returns:
        Tree string, empty when the traversal found nothing.
    """
    if not tree.files:
        return ""

    # Select character set based on style
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    lines: List[str] = []
    _render_node(
        tree=tree,
        node=tree.files[0],
        base=base,
        prefix="",
        connector="",
        chars=chars,
        shown=set(),
        missing=set(tree.missing),
        lines=lines,
        include_missing=include_missing,
    )
    return "\n".join(lines)


def _render_node(
    tree: DependencyTree,
    node: str,
    base: Optional[str],
    prefix: str,
    connector: str,
    chars: Tuple[str, str, str, str],
    shown: Set[str],
    missing: Set[str],
    lines: List[str],
    include_missing: bool,
) -> None:
    """
    Recursively render a node and its dependencies.

    Args:
        tree: The traversal result.
        node: Current file to render.
        base: Base path for display.
        prefix: Indentation inherited from the ancestors.
        connector: Branch characters for this line ("" for the root).
        chars: Character set (branch, last, vertical, space).
        shown: Files already rendered (modified in place).
        missing: Dependency paths that did not exist.
        lines: Output lines list (modified in place).
        include_missing: If True, render missing dependencies.
    """
    branch, last, vertical, space = chars
    display_path = get_relative_path(node, base) if base else node

    if node in missing:
        lines.append(f"{prefix}{connector}{display_path} [MISSING]")
        return

    if node in shown:
        lines.append(f"{prefix}{connector}{display_path} [*]")
        return

    marker = " [UNREADABLE]" if node in tree.unreadable else ""
    lines.append(f"{prefix}{connector}{display_path}{marker}")
    shown.add(node)

    children = []
    for child in tree.get_dependencies(node):
        if child in children:
            continue
        if child in missing and not include_missing:
            continue
        children.append(child)

    # Root children start at column zero
    if connector:
        child_prefix = prefix + (space if connector == last else vertical)
    else:
        child_prefix = prefix

    for i, child in enumerate(children):
        _render_node(
            tree=tree,
            node=child,
            base=base,
            prefix=child_prefix,
            connector=last if i == len(children) - 1 else branch,
            chars=chars,
            shown=shown,
            missing=missing,
            lines=lines,
            include_missing=include_missing,
        )
