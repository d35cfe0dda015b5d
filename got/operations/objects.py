"""Object operations consumed by the command line.

Each function takes the repository root explicitly and performs one
complete unit of work: it either returns a result or raises a GotError
(or OSError for filesystem failures).
"""

import logging
from typing import Iterator, NamedTuple, Tuple

from got.core.errors import CorruptObject, NotARepository, WrongObjectType
from got.core.objects import BLOB, TREE, GotObject, Tree, TreeEntry
from got.core.repository import Repository

logger = logging.getLogger(__name__)


class ObjectCounts(NamedTuple):
    """Summary of the loose objects in a store."""

    total: int
    size: int
    blobs: int = 0
    trees: int = 0
    corrupt: int = 0


def open_repository(repo_root) -> Repository:
    """
    Return the Repository rooted exactly at repo_root.

    Raises:
        NotARepository: If repo_root has no .got directory
    """
    repo = Repository(str(repo_root))
    if not repo.exists():
        raise NotARepository(repo.work_tree)
    return repo


def init_store(repo_root) -> Repository:
    """
    Create an empty repository at repo_root.

    Raises:
        RepositoryExists: If repo_root already holds a .got directory
    """
    return Repository(str(repo_root)).init()


def hash_path(repo_root, path) -> str:
    """Return the hash add_path would produce, without writing anything."""
    repo = open_repository(repo_root)
    return repo.build_object(path).hash


def add_path(repo_root, path) -> str:
    """
    Store a file or directory and return the hash of its top object.

    A directory is built in full before anything is written, then
    persisted children-first. A file is stored as a single blob.

    Args:
        repo_root: Repository work tree
        path: File or directory inside the work tree

    Returns:
        str: Hash of the blob or root tree

    Raises:
        NotARepository: If repo_root is not a repository
        PathError: If path is outside the repository or unreadable as an object
    """
    repo = open_repository(repo_root)
    obj = repo.build_object(path)
    object_hash = repo.write_object(obj)
    logger.debug("Added %s as %s %s", path, obj.type, object_hash)
    return object_hash


def view_object(repo_root, name: str) -> Tuple[str, bytes]:
    """
    Load an object by hash.

    Args:
        repo_root: Repository work tree
        name: Full hash or unambiguous abbreviation

    Returns:
        tuple: (kind, content)

    Raises:
        ObjectNotFound: If no object matches
        CorruptObject: If the stored object cannot be decoded
    """
    obj = open_repository(repo_root).read_object(name)
    return obj.type, obj.content


def read_tree(repo: Repository, name: str) -> Tree:
    """Load an object and make sure it is a tree."""
    obj = repo.read_object(name)
    if not isinstance(obj, Tree):
        raise WrongObjectType(obj.hash, TREE, obj.type)
    return obj


def list_tree(repo_root, name: str, recursive: bool = False) -> Iterator[Tuple[str, TreeEntry]]:
    """
    Iterate over the entries of a stored tree.

    Args:
        repo_root: Repository work tree
        name: Hash of a tree object
        recursive: Descend into subtrees

    Yields:
        tuple: (slash-separated path, entry)
    """
    repo = open_repository(repo_root)
    yield from _walk_entries(repo, read_tree(repo, name), '', recursive)


def _walk_entries(repo: Repository, tree: Tree, prefix: str, recursive: bool):
    for entry in tree.entries:
        full_path = f"{prefix}{entry.name}"
        yield full_path, entry

        if recursive and entry.type == TREE:
            yield from _walk_entries(repo, read_tree(repo, entry.hash), full_path + '/', recursive)


def count_objects(repo_root, by_type: bool = False) -> ObjectCounts:
    """
    Count the objects in the store.

    Args:
        repo_root: Repository work tree
        by_type: Also read every object to count blobs and trees

    Returns:
        ObjectCounts
    """
    repo = open_repository(repo_root)
    store = repo.store

    total = size = blobs = trees = corrupt = 0
    for object_hash in store:
        total += 1
        size += store.object_path(object_hash).stat().st_size

        if not by_type:
            continue
        try:
            obj = GotObject.load(store, object_hash)
        except CorruptObject as e:
            logger.warning("%s", e)
            corrupt += 1
            continue
        if obj.type == BLOB:
            blobs += 1
        else:
            trees += 1

    return ObjectCounts(total, size, blobs, trees, corrupt)
