"""Got objects: blobs and trees.

Every object is stored as ``<type> <size>\\0<content>``. The SHA-1 of those
uncompressed bytes is the object's identity and storage key.
"""

import logging
import os
import zlib
from abc import ABC
from pathlib import Path
from typing import Dict, Iterator, NamedTuple, Optional, Sequence, Tuple

from .errors import CorruptObject, PathError
from .hash import hash_object, is_valid_hash

logger = logging.getLogger(__name__)

GOT_DIR = '.got'

BLOB = 'blob'
TREE = 'tree'
KINDS = (BLOB, TREE)

FILE_MODE = '100644'
DIR_MODE = '040000'
MODES = {BLOB: FILE_MODE, TREE: DIR_MODE}


def object_header(kind: str, content: bytes) -> bytes:
    """
    Build the canonical header for an object.

    Args:
        kind: Object type ('blob' or 'tree')
        content: Object content, without header

    Returns:
        bytes: ASCII ``<kind> <len(content)>\\0``
    """
    return f"{kind} {len(content)}\0".encode('ascii')


def object_hash(kind: str, content: bytes) -> str:
    """Return the 40-character SHA-1 of header + content."""
    return hash_object(object_header(kind, content) + content)


def compress_object(kind: str, content: bytes, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    """Return the zlib-compressed on-disk form of an object."""
    return zlib.compress(object_header(kind, content) + content, level)


def decode_object(raw: bytes) -> Tuple[str, bytes]:
    """
    Split decompressed object bytes into type and content.

    Args:
        raw: Decompressed ``<type> <size>\\0<content>`` bytes

    Returns:
        tuple: (kind, content)

    Raises:
        CorruptObject: If the header is malformed or the size is wrong
    """
    null_idx = raw.find(b'\0')
    if null_idx < 0:
        raise CorruptObject("missing NUL byte after header")

    header = raw[:null_idx]
    content = raw[null_idx + 1:]

    space_idx = header.find(b' ')
    if space_idx < 0:
        raise CorruptObject(f"missing space in header {header!r}")

    kind = header[:space_idx].decode('ascii', errors='replace')
    if kind not in KINDS:
        raise CorruptObject(f"unknown object type {kind!r}")

    size_field = header[space_idx + 1:]
    if not size_field.isdigit():
        raise CorruptObject(f"invalid size {size_field!r}")

    size = int(size_field)
    if len(content) != size:
        raise CorruptObject(f"size mismatch: header says {size}, got {len(content)}")

    return kind, content


class GotObject(ABC):
    """
    Base class for all got objects.

    Objects are immutable values: content is fixed at construction and
    the header and hash are derived from it.
    """

    def __init__(self, content: bytes):
        self._content = bytes(content)
        self._hash = object_hash(self.type, self._content)

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob or tree)
        """
        return self.__class__.__name__.lower()

    @property
    def content(self) -> bytes:
        """Object content without header."""
        return self._content

    @property
    def header(self) -> bytes:
        """Canonical ``<type> <size>\\0`` header."""
        return object_header(self.type, self._content)

    @property
    def hash(self) -> str:
        """
        Get object hash.

        Returns:
            str: 40-character SHA-1 hash
        """
        return self._hash

    def compress(self, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
        """Return the compressed on-disk representation."""
        return compress_object(self.type, self._content, level)

    def walk(self) -> Iterator['GotObject']:
        """Yield this object and every in-memory descendant, children first."""
        yield self

    def save(self, store, level: int = zlib.Z_DEFAULT_COMPRESSION) -> str:
        """
        Write this single object to a store.

        Saving an object that is already stored leaves the store unchanged.

        Args:
            store: ObjectStore to write to
            level: zlib compression level

        Returns:
            str: Object hash
        """
        store.put(self._hash, self.compress(level))
        return self._hash

    def persist(self, store, level: int = zlib.Z_DEFAULT_COMPRESSION) -> str:
        """
        Write this object and all of its in-memory descendants.

        Objects are written in post-order, so a tree is never stored
        before the objects it references.

        Returns:
            str: Hash of this object
        """
        for obj in self.walk():
            obj.save(store, level)
        return self._hash

    @classmethod
    def load(cls, store, object_hash: str) -> 'GotObject':
        """
        Read an object back from a store.

        Args:
            store: ObjectStore to read from
            object_hash: Full 40-character hash

        Returns:
            GotObject: Blob or Tree

        Raises:
            ObjectNotFound: If the store has no such object
            CorruptObject: If the stored bytes cannot be decoded
        """
        compressed = store.get(object_hash)

        try:
            raw = zlib.decompress(compressed)
        except zlib.error as e:
            raise CorruptObject(f"decompression failed: {e}", object_hash) from e

        try:
            kind, content = decode_object(raw)
            obj = from_kind(kind, content)
        except CorruptObject as e:
            raise CorruptObject(e.reason, object_hash) from e

        if obj.hash != object_hash:
            raise CorruptObject(f"content hashes to {obj.hash}", object_hash)

        return obj

    def __eq__(self, other) -> bool:
        if not isinstance(other, GotObject):
            return NotImplemented
        return self.type == other.type and self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)


class Blob(GotObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: bytes = b''):
        """
        Initialize a blob.

        Args:
            data: File content as bytes
        """
        super().__init__(data)

    @property
    def data(self) -> bytes:
        """Raw file content."""
        return self._content

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to a regular file

        Returns:
            Blob: New blob containing the exact file bytes

        Raises:
            PathError: If the path is missing or not a regular file
        """
        path = Path(filepath)

        if not path.exists():
            raise PathError(path, "no such file")
        if path.is_dir():
            raise PathError(path, "is a directory, cannot create a blob from it")
        if not path.is_file():
            raise PathError(path, "not a regular file")

        return cls(path.read_bytes())

    def __repr__(self) -> str:
        """String representation of blob."""
        return f"Blob(hash={self.hash[:7]}, size={len(self._content)})"


class TreeEntry(NamedTuple):
    """
    Represents a single entry in a tree.

    Each entry contains:
    - mode: '100644' for a file, '040000' for a directory
    - type: Object type ('blob' or 'tree')
    - hash: SHA-1 hash of the object
    - name: Filename or directory name
    """

    mode: str
    type: str
    hash: str
    name: str

    @classmethod
    def for_object(cls, name: str, obj: GotObject) -> 'TreeEntry':
        """Create the entry referencing obj under name."""
        return cls(MODES[obj.type], obj.type, obj.hash, name)

    @property
    def sort_key(self) -> bytes:
        """Byte-wise name used to order tree entries."""
        return os.fsencode(self.name)

    def to_line(self) -> bytes:
        """Render as ``<mode> <type> <hash> <name>``."""
        return f"{self.mode} {self.type} {self.hash} ".encode('ascii') + self.sort_key

    @classmethod
    def from_line(cls, line: bytes) -> 'TreeEntry':
        """
        Parse one serialized tree line.

        Raises:
            CorruptObject: If the line is malformed
        """
        parts = line.split(b' ', 3)
        if len(parts) != 4:
            raise CorruptObject(f"malformed tree entry {line!r}")

        mode, obj_type, obj_hash = (part.decode('ascii', errors='replace') for part in parts[:3])
        name = os.fsdecode(parts[3])

        if MODES.get(obj_type) != mode:
            raise CorruptObject(f"invalid mode {mode!r} for {obj_type!r} entry")
        if not is_valid_hash(obj_hash):
            raise CorruptObject(f"invalid hash {obj_hash!r} in tree entry")
        if not name or '/' in name:
            raise CorruptObject(f"invalid entry name {name!r}")

        return cls(mode, obj_type, obj_hash, name)

    def __repr__(self) -> str:
        """String representation."""
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


def serialize_entries(entries: Sequence[TreeEntry]) -> bytes:
    """Join entries, sorted by name, with newlines and no trailing newline."""
    return b'\n'.join(entry.to_line() for entry in sorted(entries, key=lambda e: e.sort_key))


class Tree(GotObject):
    """
    Represents directory structure.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). A tree built from disk also keeps the child objects
    themselves so the whole graph can be persisted in one pass.
    """

    def __init__(self, entries: Sequence[TreeEntry] = (),
                 children: Optional[Dict[str, GotObject]] = None):
        """
        Initialize tree.

        Args:
            entries: Child references, in any order
            children: Optional in-memory child objects keyed by entry name
        """
        self._entries = tuple(sorted(entries, key=lambda e: e.sort_key))

        names = [entry.name for entry in self._entries]
        if len(set(names)) != len(names):
            raise ValueError("Tree entries must have unique names")

        self._children = dict(children or {})
        super().__init__(serialize_entries(self._entries))

    @property
    def entries(self) -> Tuple[TreeEntry, ...]:
        """Entries sorted by name."""
        return self._entries

    @property
    def children(self) -> Dict[str, GotObject]:
        """In-memory child objects; empty for a tree loaded from a store."""
        return dict(self._children)

    def walk(self) -> Iterator[GotObject]:
        for entry in self._entries:
            child = self._children.get(entry.name)
            if child is not None:
                yield from child.walk()
        yield self

    @classmethod
    def from_content(cls, content: bytes) -> 'Tree':
        """
        Parse serialized tree content.

        Raises:
            CorruptObject: If a line is malformed or entries are out of order
        """
        if not content:
            return cls()

        entries = [TreeEntry.from_line(line) for line in content.split(b'\n')]
        try:
            tree = cls(entries)
        except ValueError as e:
            raise CorruptObject(str(e)) from e

        if tree.content != content:
            raise CorruptObject("tree entries are not sorted by name")
        return tree

    @classmethod
    def build(cls, dir_path, repo_root) -> 'Tree':
        """
        Build tree from directory contents.

        Nothing is written; call persist() on the result to store it.

        Args:
            dir_path: Directory to mirror
            repo_root: Repository work tree that must contain dir_path

        Returns:
            Tree: Root of the in-memory object graph

        Raises:
            PathError: If dir_path is outside repo_root or not a directory
        """
        directory = Path(dir_path).resolve()
        root = Path(repo_root).resolve()

        if directory != root and root not in directory.parents:
            raise PathError(dir_path, f"outside repository {root}")
        if not directory.exists():
            raise PathError(dir_path, "no such directory")
        if not directory.is_dir():
            raise PathError(dir_path, "not a directory")

        return cls._build(directory)

    @classmethod
    def _build(cls, directory: Path) -> 'Tree':
        entries = []
        children = {}

        for item in sorted(directory.iterdir(), key=lambda p: os.fsencode(p.name)):
            if item.name == GOT_DIR:
                continue
            if '\n' in item.name:
                raise PathError(item, "file name contains a newline")

            if item.is_dir():
                if item.is_symlink():
                    raise PathError(item, "symbolic links to directories are not supported")
                child = cls._build(item)
            else:
                child = Blob.from_file(item)

            children[item.name] = child
            entries.append(TreeEntry.for_object(item.name, child))

        tree = cls(entries, children)
        logger.debug("Built tree %s for %s (%d entries)", tree.hash[:7], directory, len(entries))
        return tree

    def __repr__(self) -> str:
        """String representation."""
        return f"Tree(hash={self.hash[:7]}, entries={len(self._entries)})"


def from_kind(kind: str, content: bytes) -> GotObject:
    """
    Construct the object subclass for a type name.

    Raises:
        CorruptObject: If kind is unknown or tree content is malformed
    """
    if kind == BLOB:
        return Blob(content)
    if kind == TREE:
        return Tree.from_content(content)
    raise CorruptObject(f"unknown object type {kind!r}")
