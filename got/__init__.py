"""got - a minimal content-addressable object store in the style of Git."""

__version__ = '0.1.0'

from got.core.repository import Repository
from got.core.objects import GotObject, Blob, Tree, TreeEntry

__all__ = [
    'Repository',
    'GotObject',
    'Blob',
    'Tree',
    'TreeEntry',
]
