"""
Node Module

The two kinds of entry in the virtual file system. A directory owns its
children outright; there are no links, so the structure is always a tree.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Union


class NodeType(Enum):
    """Types of filesystem nodes."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class File:
    """
    A regular file.

    ``size`` always equals ``len(content)``; it is recomputed on every
    write and on construction.
    """

    content: str = ""
    created: datetime = field(default_factory=datetime.now)
    size: int = field(init=False, default=0)

    def __post_init__(self):
        self.size = len(self.content)

    @property
    def node_type(self) -> NodeType:
        return NodeType.FILE

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def is_file(self) -> bool:
        return True

    def read(self) -> str:
        return self.content

    def write(self, content: str) -> int:
        """
        Replace the file content.

        Returns:
            Number of characters written
        """
        self.content = content
        self.size = len(content)
        return self.size


@dataclass
class Directory:
    """
    A directory.

    Children are kept in insertion order, which is the order ``ls``
    shows them in.
    """

    _entries: dict[str, 'Node'] = field(default_factory=dict, repr=False)
    created: datetime = field(default_factory=datetime.now)

    @property
    def node_type(self) -> NodeType:
        return NodeType.DIRECTORY

    @property
    def is_directory(self) -> bool:
        return True

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def add_entry(self, name: str, node: 'Node') -> None:
        """
        Add a child.

        Raises:
            ValueError: If the name is empty, contains a slash, or is taken
        """
        if not name or '/' in name:
            raise ValueError(f"Invalid entry name: {name!r}")
        if name in self._entries:
            raise ValueError(f"Entry already exists: {name}")
        self._entries[name] = node

    def remove_entry(self, name: str) -> Optional['Node']:
        """Remove a child and return it, or None if absent."""
        return self._entries.pop(name, None)

    def get_entry(self, name: str) -> Optional['Node']:
        return self._entries.get(name)

    def has_entry(self, name: str) -> bool:
        return name in self._entries

    def list_entries(self) -> List[tuple[str, 'Node']]:
        """List all children as (name, node) pairs."""
        return list(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)


Node = Union[File, Directory]
