"""
SimpleOS Virtual File System Module

Provides the in-memory filesystem:
- Hierarchical directory tree owned from a single root
- String-based path resolution
- File and directory operations
"""

from .node import Node, NodeType, File, Directory
from .path_resolver import PathResolver
from .tree import FileSystemTree, DeepestMatch

__all__ = [
    # Nodes
    'Node',
    'NodeType',
    'File',
    'Directory',
    # Path Resolver
    'PathResolver',
    # Tree
    'FileSystemTree',
    'DeepestMatch',
]
