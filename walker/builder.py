"""Tree walker that collects the transitive dependencies of a file."""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional, Union

from tree.model import DependencyTree, VisitedSet
from .aliases import AliasTable
from .errors import ExtractionFailure, InvalidArgument, UnreadableFile
from .filters import avoid_loaders
from .kinds import Dialect, dialect_for
from .parser import extract_specifiers, read_source
from .resolver import absolute_path, resolve_specifiers


logger = logging.getLogger(__name__)

Extractor = Callable[[str, Dialect], Iterable[str]]


class TreeWalker:
    """
    Walks the dependency graph below one root file.

    Every discovered dependency is expanded in its own task; a node is
    done once all of its children are. The visited set decides which
    branch gets to expand a path, so each path is expanded at most once.
    """

    def __init__(
        self,
        root: str,
        visited: Optional[VisitedSet] = None,
        aliases: Optional[AliasTable] = None,
        extractor: Extractor = extract_specifiers,
    ):
        self.root = absolute_path(root)
        self.visited = visited if visited is not None else VisitedSet()
        self.aliases = aliases
        self.extractor = extractor

    async def walk(self, filename: str) -> DependencyTree:
        """
        Collect the dependency closure of a file.

        Args:
            filename: Path of the file to start from, relative to the
                     current working directory or absolute.

        Returns:
            DependencyTree whose files list starts with the root file. The
            list is empty if the file was already visited or does not exist.
        """
        path = absolute_path(filename)
        tree = DependencyTree(path, self.visited)

        if path in self.visited:
            logger.debug("Already visited: %s", path)
            return tree

        if not await asyncio.to_thread(Path(path).is_file):
            logger.debug("No such file: %s", path)
            return tree

        if not self.visited.claim(path):
            return tree

        tree.add_files([path])
        await self._expand(path, tree)
        return tree

    async def _expand(self, path: str, tree: DependencyTree) -> None:
        """Discover the dependencies of one file and expand them concurrently."""
        dialect = dialect_for(path)
        specifiers = await self._read_specifiers(path, dialect, tree)

        dependencies: List[str] = []
        if specifiers:
            if self.aliases is not None:
                # Aliased specifiers are final; loader filtering does not apply
                specifiers = [self.aliases.lookup(spec) for spec in specifiers]
            else:
                specifiers = avoid_loaders(specifiers)

            resolved = resolve_specifiers(specifiers, path, self.root, dialect)
            tree.set_dependencies(path, resolved)
            claimed = self.visited.claim_all(resolved)
            dependencies = await self._existing(claimed, tree)

        tree.add_files(dependencies)

        await asyncio.gather(*(self._expand(dep, tree) for dep in dependencies))

    async def _read_specifiers(
        self,
        path: str,
        dialect: Dialect,
        tree: DependencyTree,
    ) -> List[str]:
        """Read a file and extract its specifiers; failures yield no specifiers."""
        try:
            content = await asyncio.to_thread(read_source, path)
        except UnreadableFile as e:
            logger.warning("cannot read: %s", path)
            tree.add_unreadable(path, e.reason)
            return []

        try:
            return list(self.extractor(content, dialect))
        except ExtractionFailure as e:
            failure = ExtractionFailure(e.reason, path)
        except Exception as e:
            # Extractors are pluggable; any failure only cuts this node's edges
            failure = ExtractionFailure(str(e), path)

        logger.warning("%s", failure)
        tree.add_unreadable(path, failure.reason)
        return []

    async def _existing(self, paths: List[str], tree: DependencyTree) -> List[str]:
        """Keep the paths that exist as files, recording the others as missing."""
        checks = await asyncio.gather(
            *(asyncio.to_thread(Path(path).is_file) for path in paths)
        )

        existing = []
        for path, is_file in zip(paths, checks):
            if is_file:
                existing.append(path)
            else:
                logger.debug("Missing dependency: %s", path)
                tree.add_missing(path)
        return existing


def _check_arguments(filename: Optional[str], root: Optional[str]) -> None:
    if not filename:
        raise InvalidArgument("filename not given")
    if not root:
        raise InvalidArgument("root not given")


def _as_visited_set(visited: Union[VisitedSet, Iterable[str], None]) -> Optional[VisitedSet]:
    if visited is None or isinstance(visited, VisitedSet):
        return visited
    return VisitedSet(absolute_path(path) for path in visited)


def resolve_dependency_tree(
    filename: str,
    root: str,
    visited: Union[VisitedSet, Iterable[str], None] = None,
    config: Optional[str] = None,
    extractor: Extractor = extract_specifiers,
) -> Awaitable[DependencyTree]:
    """
    Start collecting the dependency closure of a file.

    Arguments are checked and the alias configuration is loaded before
    anything is scheduled, so bad input fails at call time.

    Args:
        filename: The file whose dependency tree to traverse.
        root: The directory non-relative specifiers are resolved against.
        visited: Paths that must not be expanded again. Pass the same
                VisitedSet to several calls to share memoization.
        config: Optional alias configuration (RequireJS paths/baseUrl).
        extractor: Specifier extraction function, (content, dialect) -> specifiers.

    Returns:
        Awaitable resolving to the DependencyTree.

    Raises:
        InvalidArgument: If filename or root is missing.
        AliasConfigError: If the alias configuration cannot be loaded.
    """
    _check_arguments(filename, root)

    aliases = AliasTable.load(config) if config else None
    walker = TreeWalker(
        root=root,
        visited=_as_visited_set(visited),
        aliases=aliases,
        extractor=extractor,
    )
    return walker.walk(filename)


def get_tree_as_list(
    filename: str,
    root: str,
    visited: Union[VisitedSet, Iterable[str], None] = None,
    config: Optional[str] = None,
    success: Optional[Callable[[List[str]], None]] = None,
    extractor: Extractor = extract_specifiers,
) -> List[str]:
    """
    Collect the dependency closure of a file as a flat list of paths.

    Blocks until the traversal has finished. Must not be called from a
    running event loop; await resolve_dependency_tree there instead.

    Args:
        filename: The file whose dependency tree to traverse.
        root: The directory non-relative specifiers are resolved against.
        visited: Paths that must not be expanded again.
        config: Optional alias configuration file.
        success: Optional callback invoked once with the result list.
        extractor: Specifier extraction function.

    Returns:
        Absolute paths: the root file followed by its transitive
        dependencies, each exactly once.

    Raises:
        InvalidArgument: If filename or root is missing, or success is
                        given but not callable.
    """
    if success is not None and not callable(success):
        raise InvalidArgument("success callback is not callable")

    tree = asyncio.run(
        resolve_dependency_tree(filename, root, visited, config, extractor)
    )
    files = tree.files

    if success is not None:
        success(files)
    return files
