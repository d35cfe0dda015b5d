"""Operations module for high-level got operations.

This module contains the entry points the command line calls into:
- Repository initialization
- Adding files and directories to the object store
- Viewing and listing stored objects
"""

from got.operations.objects import (ObjectCounts, init_store, add_path, hash_path,
                                    view_object, list_tree, count_objects)

__all__ = [
    'ObjectCounts',
    'init_store', 'add_path', 'hash_path',
    'view_object', 'list_tree', 'count_objects',
]
