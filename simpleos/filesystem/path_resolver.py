"""
Path Resolver Module

String arithmetic on ``/``-separated paths.

Relative paths are joined onto the working directory verbatim: ``.``
and ``..`` are ordinary names here and are never collapsed. The only
place that walks upwards is ``cd ..``, through ``parent_of_cwd``.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, List, Tuple


class PathResolver:
    """
    Resolves and manipulates filesystem paths.

    Handles:
    - Absolute and relative paths
    - Repeated, leading and trailing slashes
    - Splitting a path into parent and final name
    """

    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith('/')

    @staticmethod
    def components(path: str) -> List[str]:
        """Split a path on ``/`` and discard empty segments."""
        return [c for c in path.split('/') if c]

    @staticmethod
    def combine(path: str, cwd: str = '/') -> str:
        """
        Make a path absolute against a working directory.

        Args:
            path: Absolute or relative path
            cwd: Current working directory (absolute)

        Returns:
            ``path`` if it is absolute, otherwise ``cwd + '/' + path``
        """
        if PathResolver.is_absolute(path):
            return path
        if cwd.endswith('/'):
            return cwd + path
        return cwd + '/' + path

    @staticmethod
    def resolve(path: str, cwd: str = '/') -> List[str]:
        """Combine with ``cwd`` and return the components to walk."""
        return PathResolver.components(PathResolver.combine(path, cwd))

    @staticmethod
    def to_absolute(components: List[str]) -> str:
        """Build the canonical absolute path for a component list."""
        return '/' + '/'.join(components)

    @staticmethod
    def canonical(path: str) -> str:
        """Absolute path with repeated and trailing slashes removed."""
        return PathResolver.to_absolute(PathResolver.components(path))

    @staticmethod
    def split(components: List[str]) -> Tuple[List[str], Optional[str]]:
        """
        Split components into parent components and final name.

        The root has no final name, so ``([], None)`` is returned for it.
        """
        if not components:
            return ([], None)
        return (components[:-1], components[-1])

    @staticmethod
    def parent_of_cwd(cwd: str) -> str:
        """Drop the last component of an absolute path; root stays root."""
        return PathResolver.to_absolute(PathResolver.components(cwd)[:-1])
