"""
Filesystem Tree Module

The in-memory directory tree and the path resolution primitives the
shell commands are built on:
- Exact resolution of a path to a node
- Deepest reachable ancestor of a path
- Parent lookup for insertion and removal
- Recursive removal of whole subtrees

All lookups are string based: a relative path is appended to the
working directory and walked from the root one component at a time.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, Any, List

from .node import Node, File, Directory
from .path_resolver import PathResolver
from simpleos.core.registry import Subsystem, SubsystemState
from simpleos.core.config_loader import Config, get_config
from simpleos.exceptions import (
    FileNotFoundError,
    FileExistsError,
    IsADirectoryError,
    NotADirectoryError,
    PathResolutionError,
)


README_TEXT = "Welcome to SimpleOS!\nType 'help' for available commands."
PASSWD_TEXT = "{user}:x:1000:1000:Default User:{home}:/bin/sh"


@dataclass
class DeepestMatch:
    """The furthest directory reachable along a path."""
    node: Directory
    resolved_prefix: str
    components: List[str] = field(default_factory=list)
    complete: bool = False


class FileSystemTree(Subsystem):
    """
    Filesystem Tree Subsystem.

    Owns the root directory and everything below it. Every operation
    takes the working directory explicitly, so the tree itself holds no
    session state.

    Example:
        >>> tree = FileSystemTree()
        >>> tree.initialize()
        >>> tree.make_directory('notes', cwd='/home/user')
        >>> tree.write_file('notes/todo.txt', 'buy milk', cwd='/home/user')
    """

    def __init__(self, config: Optional[Config] = None):
        super().__init__('filesystem')
        self._config = config or get_config()
        self._root = Directory()

    @property
    def root(self) -> Directory:
        return self._root

    def initialize(self) -> None:
        """Build the initial tree. The home directory always exists."""
        self._logger.info("Initializing filesystem tree")

        self._root = Directory()
        self._create_home()

        if self._config.filesystem.seed_standard_tree:
            self._create_standard_tree()

        self.set_state(SubsystemState.INITIALIZED)

    def _create_home(self) -> None:
        home_components = PathResolver.components(self._config.session.home)
        for depth in range(1, len(home_components) + 1):
            path = PathResolver.to_absolute(home_components[:depth])
            if self.resolve(path) is None:
                self.make_directory(path)

    def _create_standard_tree(self) -> None:
        """Create /bin, /etc, the readme and the passwd file."""
        session = self._config.session
        home = PathResolver.canonical(session.home)

        for path in ('/bin', '/etc'):
            if self.resolve(path) is None:
                self.make_directory(path)

        self.write_file(PathResolver.combine('readme.txt', home), README_TEXT)
        self.write_file(
            '/etc/passwd',
            PASSWD_TEXT.format(user=session.user, home=home)
        )

    # Resolution primitives

    def _walk(self, components: List[str]) -> Optional[Node]:
        current: Node = self._root

        for component in components:
            if not isinstance(current, Directory):
                return None
            child = current.get_entry(component)
            if child is None:
                return None
            current = child

        return current

    def resolve(self, path: str, cwd: str = '/') -> Optional[Node]:
        """
        Resolve a path to a node.

        Args:
            path: Absolute path, or path relative to ``cwd``
            cwd: Current working directory

        Returns:
            The node, or None if any component is missing or an
            intermediate component is a file
        """
        return self._walk(PathResolver.resolve(path, cwd))

    def resolve_deepest(self, path: str, cwd: str = '/') -> DeepestMatch:
        """
        Walk as far along a path as the tree allows.

        Returns:
            The last directory reached and the path consumed to reach
            it, with a trailing slash (``/`` or ``/a/b/``). ``complete``
            is True when the whole path is a directory.
        """
        components = PathResolver.resolve(path, cwd)
        current = self._root
        consumed: List[str] = []

        for component in components:
            child = current.get_entry(component)
            if not isinstance(child, Directory):
                break
            current = child
            consumed.append(component)

        return DeepestMatch(
            node=current,
            resolved_prefix='/' + ''.join(f'{name}/' for name in consumed),
            components=consumed,
            complete=len(consumed) == len(components)
        )

    def parent_of(self, path: str, cwd: str = '/') -> Optional[Directory]:
        """
        Find the directory that holds (or would hold) a path's last name.

        Returns:
            The parent directory, or None for the root or when the
            parent is missing or is not a directory
        """
        parent_components, name = PathResolver.split(PathResolver.resolve(path, cwd))
        if name is None:
            return None

        parent = self._walk(parent_components)
        if isinstance(parent, Directory):
            return parent
        return None

    def _require_directory(self, path: str) -> Directory:
        node = self.resolve(path)
        if node is None:
            raise FileNotFoundError(path)
        if not isinstance(node, Directory):
            raise NotADirectoryError(path)
        return node

    def insert(self, parent_path: str, name: str, node: Node) -> None:
        """
        Insert a node under an existing directory.

        Args:
            parent_path: Absolute path of the containing directory
            name: Entry name (no slashes)
            node: Node to insert

        Raises:
            FileNotFoundError: If the parent does not exist
            NotADirectoryError: If the parent is a file
            FileExistsError: If the name is already taken
            PathResolutionError: If the name is empty or contains a slash
        """
        if not name or '/' in name:
            raise PathResolutionError(name, reason="invalid entry name")

        parent = self._require_directory(parent_path)
        full_path = PathResolver.combine(name, parent_path)

        if parent.has_entry(name):
            raise FileExistsError(full_path)

        parent.add_entry(name, node)

        self._logger.debug(
            "Inserted node",
            context={'path': full_path, 'type': node.node_type.value}
        )

    def remove(self, parent_path: str, name: str) -> Node:
        """
        Remove an entry and everything below it.

        Directories are removed whether or not they are empty.

        Returns:
            The removed node

        Raises:
            FileNotFoundError: If the parent or the entry does not exist
        """
        full_path = PathResolver.combine(name, parent_path)

        parent = self.resolve(parent_path)
        if not isinstance(parent, Directory):
            raise FileNotFoundError(full_path)

        node = parent.remove_entry(name)
        if node is None:
            raise FileNotFoundError(full_path)

        self._logger.debug(
            "Removed node",
            context={'path': full_path, 'type': node.node_type.value}
        )
        return node

    # Operations used by the shell commands

    def _split_target(self, path: str, cwd: str) -> tuple[str, Optional[str]]:
        parent_components, name = PathResolver.split(PathResolver.resolve(path, cwd))
        return PathResolver.to_absolute(parent_components), name

    def list_directory(self, path: str, cwd: str = '/') -> List[tuple[str, Node]]:
        """
        List the children of a directory in insertion order.

        Raises:
            FileNotFoundError: If the path does not exist
            NotADirectoryError: If the path is a file
        """
        node = self.resolve(path, cwd)
        if node is None:
            raise FileNotFoundError(PathResolver.combine(path, cwd))
        if not isinstance(node, Directory):
            raise NotADirectoryError(PathResolver.combine(path, cwd))
        return node.list_entries()

    def read_file(self, path: str, cwd: str = '/') -> str:
        """
        Return the content of a file.

        Raises:
            FileNotFoundError: If the path does not exist
            IsADirectoryError: If the path is a directory
        """
        node = self.resolve(path, cwd)
        if node is None:
            raise FileNotFoundError(PathResolver.combine(path, cwd))
        if isinstance(node, Directory):
            raise IsADirectoryError(PathResolver.combine(path, cwd))
        return node.read()

    def make_directory(self, path: str, cwd: str = '/') -> Directory:
        """
        Create an empty directory.

        Raises:
            FileNotFoundError: If the parent does not exist
            NotADirectoryError: If the parent is a file
            FileExistsError: If the name is taken (or the path is the root)
        """
        parent_path, name = self._split_target(path, cwd)
        if name is None:
            raise FileExistsError('/')

        directory = Directory()
        self.insert(parent_path, name, directory)
        return directory

    def touch(self, path: str, cwd: str = '/') -> Node:
        """
        Create an empty file unless something already exists at the path.

        An existing node is returned untouched; its content is never
        truncated.

        Raises:
            FileNotFoundError: If the parent does not exist
            NotADirectoryError: If the parent is a file
        """
        existing = self.resolve(path, cwd)
        if existing is not None:
            return existing

        parent_path, name = self._split_target(path, cwd)
        node = File()
        self.insert(parent_path, name, node)
        return node

    def write_file(self, path: str, content: str, cwd: str = '/') -> File:
        """
        Overwrite a file, creating it if needed.

        Raises:
            IsADirectoryError: If the path is a directory
            FileNotFoundError: If the file is new and its parent is missing
            NotADirectoryError: If the file is new and its parent is a file
        """
        node = self.resolve(path, cwd)

        if isinstance(node, Directory):
            raise IsADirectoryError(PathResolver.combine(path, cwd))

        if isinstance(node, File):
            node.write(content)
            return node

        parent_path, name = self._split_target(path, cwd)
        node = File(content=content)
        self.insert(parent_path, name, node)
        return node

    def delete(self, path: str, cwd: str = '/') -> Node:
        """
        Remove a file or a whole directory subtree.

        Raises:
            FileNotFoundError: If the path does not exist or is the root
        """
        parent_path, name = self._split_target(path, cwd)
        if name is None:
            raise FileNotFoundError('/')
        return self.remove(parent_path, name)

    def exists(self, path: str, cwd: str = '/') -> bool:
        """Check if a path exists."""
        return self.resolve(path, cwd) is not None

    def is_directory(self, path: str, cwd: str = '/') -> bool:
        """Check if a path is a directory."""
        return isinstance(self.resolve(path, cwd), Directory)

    def get_stats(self) -> dict[str, Any]:
        """Count directories, files and stored characters."""
        directories = 0
        files = 0
        total_size = 0
        stack: List[Node] = [self._root]

        while stack:
            node = stack.pop()
            if isinstance(node, Directory):
                directories += 1
                stack.extend(child for _, child in node.list_entries())
            else:
                files += 1
                total_size += node.size

        return {
            'directories': directories,
            'files': files,
            'total_size': total_size,
        }
