"""Sharded on-disk object storage.

Objects live under ``<objects>/<hash[:2]>/<hash[2:]>``. The store only
moves compressed bytes around; encoding is handled by got.core.objects.
The store is append-only: writing the same hash twice is a no-op.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator

from .errors import AmbiguousObjectName, ObjectNotFound
from .hash import HASH_LENGTH, is_hash_prefix, is_valid_hash

logger = logging.getLogger(__name__)

MIN_PREFIX_LENGTH = 4


class ObjectStore:
    """Filesystem-backed, content-addressed byte storage."""

    def __init__(self, objects_dir):
        """
        Initialize store.

        Args:
            objects_dir: Root directory of the object database
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, object_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            object_hash: 40-character SHA-1 hash

        Returns:
            Path: Shard directory / remaining 38 characters
        """
        if not is_valid_hash(object_hash):
            raise ValueError(f"Not a valid object hash: {object_hash!r}")
        return self.objects_dir / object_hash[:2] / object_hash[2:]

    def contains(self, object_hash: str) -> bool:
        """Return True if an object with this hash is stored."""
        return is_valid_hash(object_hash) and self.object_path(object_hash).is_file()

    def __contains__(self, object_hash: str) -> bool:
        return self.contains(object_hash)

    def put(self, object_hash: str, data: bytes) -> bool:
        """
        Store compressed object bytes.

        The bytes are written to a temporary file in the shard directory
        and renamed into place, so a partial write is never visible under
        the final name.

        Args:
            object_hash: Hash the bytes are stored under
            data: Compressed object bytes

        Returns:
            bool: False if the object was already present
        """
        path = self.object_path(object_hash)

        if path.exists():
            logger.debug("Object %s already stored, skipped", object_hash[:7])
            return False

        # Concurrent writers may create the same shard
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix='tmp_obj_')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug("Stored object %s (%d bytes)", object_hash[:7], len(data))
        return True

    def get(self, object_hash: str) -> bytes:
        """
        Read compressed object bytes.

        Raises:
            ObjectNotFound: If the hash is malformed or not stored
        """
        if not is_valid_hash(object_hash):
            raise ObjectNotFound(object_hash, f"Not a valid object hash: {object_hash}")

        try:
            return self.object_path(object_hash).read_bytes()
        except FileNotFoundError:
            raise ObjectNotFound(object_hash) from None

    def resolve(self, name: str) -> str:
        """
        Expand an abbreviated hash to the full stored hash.

        Args:
            name: Full hash or a prefix of at least 4 hex characters

        Returns:
            str: Full 40-character hash

        Raises:
            ObjectNotFound: If nothing matches
            AmbiguousObjectName: If several objects match
        """
        prefix = name.strip().lower()

        if not is_hash_prefix(prefix):
            raise ObjectNotFound(name, f"Not a valid object name: {name}")
        if len(prefix) == HASH_LENGTH:
            if not self.contains(prefix):
                raise ObjectNotFound(prefix)
            return prefix
        if len(prefix) < MIN_PREFIX_LENGTH:
            raise ObjectNotFound(
                name, f"Short hash {name} needs at least {MIN_PREFIX_LENGTH} characters"
            )

        shard = self.objects_dir / prefix[:2]
        matches = []
        if shard.is_dir():
            for obj_file in shard.iterdir():
                full_hash = shard.name + obj_file.name
                if is_valid_hash(full_hash) and full_hash.startswith(prefix):
                    matches.append(full_hash)

        if not matches:
            raise ObjectNotFound(name)
        if len(matches) > 1:
            raise AmbiguousObjectName(name, matches)
        return matches[0]

    def __iter__(self) -> Iterator[str]:
        """Iterate over stored hashes in sorted order."""
        if not self.objects_dir.is_dir():
            return

        for shard in sorted(self.objects_dir.iterdir()):
            if not shard.is_dir() or len(shard.name) != 2:
                continue
            for obj_file in sorted(shard.iterdir()):
                full_hash = shard.name + obj_file.name
                if is_valid_hash(full_hash):
                    yield full_hash

    def __repr__(self) -> str:
        """String representation of store."""
        return f"ObjectStore(path={self.objects_dir})"
