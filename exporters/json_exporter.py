"""JSON exporter for dependency trees (machine-friendly format)."""

import json
from typing import Any, Dict, List, Optional

from tree.model import DependencyTree
from walker.resolver import get_relative_path


def to_json(
    tree: DependencyTree,
    base: Optional[str] = None,
    indent: int = 2,
    include_missing: bool = True,
) -> str:
    """
    Convert a dependency tree to JSON format.
    
    Args:
        tree: The traversal result.
        base: Optional directory for relative path display.
        indent: JSON indentation level.
        include_missing: If True, include missing dependency paths.
    
    Returns:
        JSON string with root, files, edges, missing and unreadable keys.
    """
    def _path(path: str) -> str:
        return get_relative_path(path, base) if base else path
    
    edges: List[Dict[str, Any]] = []
    missing = set(tree.missing)
    for source, target in tree.iter_edges():
        if target in missing:
            if include_missing:
                edges.append({"source": _path(source), "target": _path(target), "missing": True})
            continue
        edges.append({"source": _path(source), "target": _path(target)})
    
    data: Dict[str, Any] = {
        "root": _path(tree.root),
        "files": [_path(path) for path in tree.files],
        "edges": edges,
        "unreadable": {_path(path): reason for path, reason in sorted(tree.unreadable.items())},
    }
    if include_missing:
        data["missing"] = sorted(_path(path) for path in missing)
    
    return json.dumps(data, indent=indent)
