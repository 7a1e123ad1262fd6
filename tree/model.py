"""Data model for dependency traversal state and results."""

import threading
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple


class VisitedSet:
    """
    Set of absolute file paths already claimed by a traversal.

    Paths are only ever added. Membership test and insertion happen under
    one lock, so two branches can never both claim the same path. A set can
    be handed to several traversals to share memoization between them.
    """

    def __init__(self, paths: Optional[Iterable[str]] = None):
        self._paths: Set[str] = set(paths or ())
        self._lock = threading.Lock()

    def claim(self, path: str) -> bool:
        """
        Mark a path as visited.

        Returns:
            True if the caller claimed the path, False if it was already visited.
        """
        with self._lock:
            if path in self._paths:
                return False
            self._paths.add(path)
            return True

    def claim_all(self, paths: Iterable[str]) -> List[str]:
        """
        Claim every path not visited yet.

        Duplicates within the batch are only claimed once.

        Returns:
            The newly claimed paths, in their original order.
        """
        claimed: List[str] = []
        with self._lock:
            for path in paths:
                if path not in self._paths:
                    self._paths.add(path)
                    claimed.append(path)
        return claimed

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            snapshot = sorted(self._paths)
        return iter(snapshot)

    def __repr__(self) -> str:
        return f"VisitedSet(paths={len(self)})"


class DependencyTree:
    """
    Result of one traversal.

    `files` is the flat dependency closure: the root file first, then every
    reachable existing file exactly once, in discovery order. It is empty
    when the root file was already visited or does not exist. `visited` is
    the set the traversal claimed paths in, for reuse by later calls. The
    remaining attributes are diagnostics collected along the way.
    """

    def __init__(self, root: str, visited: Optional[VisitedSet] = None):
        self.root = root
        self.visited = visited if visited is not None else VisitedSet()
        self._files: List[str] = []
        self._edges: Dict[str, List[str]] = {}
        self._missing: List[str] = []
        self._unreadable: Dict[str, str] = {}  # path -> failure reason

    @property
    def files(self) -> List[str]:
        """Return the ordered result list."""
        return list(self._files)

    @property
    def edges(self) -> Dict[str, List[str]]:
        """Return resolved dependencies per expanded file."""
        return {k: list(v) for k, v in self._edges.items()}

    @property
    def missing(self) -> List[str]:
        """Return dependency paths that did not exist on disk."""
        return list(self._missing)

    @property
    def unreadable(self) -> Dict[str, str]:
        """Return files whose content could not be read or scanned."""
        return dict(self._unreadable)

    def add_files(self, paths: Iterable[str]) -> None:
        """Append newly discovered files to the result list."""
        self._files.extend(paths)

    def set_dependencies(self, source: str, targets: Iterable[str]) -> None:
        """Record the resolved dependencies of an expanded file."""
        self._edges[source] = list(targets)

    def get_dependencies(self, source: str) -> List[str]:
        """Get the resolved dependencies of a file."""
        return list(self._edges.get(source, []))

    def add_missing(self, path: str) -> None:
        self._missing.append(path)

    def add_unreadable(self, path: str, reason: str) -> None:
        self._unreadable[path] = reason

    def iter_edges(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all edges as (source, target) tuples."""
        for source, targets in self._edges.items():
            for target in targets:
                yield source, target

    def __len__(self) -> int:
        """Return the number of files in the closure."""
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._files))

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __repr__(self) -> str:
        edge_count = sum(len(t) for t in self._edges.values())
        return (
            f"DependencyTree(files={len(self._files)}, edges={edge_count}, "
            f"missing={len(self._missing)}, unreadable={len(self._unreadable)})"
        )
