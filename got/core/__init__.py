"""Core functionality for got.

This module contains the core data structures:
- Got objects (Blob, Tree) and their canonical encoding
- The sharded object store
- Repository management
- Configuration management
- Hashing utilities

For the operations the CLI calls into, see got.operations
"""

from got.core.objects import GotObject, Blob, Tree, TreeEntry
from got.core.store import ObjectStore
from got.core.repository import Repository
from got.core.hash import hash_object
from got.core.config import Config, get_config
from got.core.errors import (GotError, PathError, NotARepository, RepositoryExists,
                             ObjectNotFound, AmbiguousObjectName, CorruptObject,
                             WrongObjectType)

__all__ = [
    'GotObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'ObjectStore',
    'Repository',
    'Config',
    'get_config',
    'hash_object',
    'GotError',
    'PathError',
    'NotARepository',
    'RepositoryExists',
    'ObjectNotFound',
    'AmbiguousObjectName',
    'CorruptObject',
    'WrongObjectType',
]
