"""Hash utilities for got."""

import hashlib
import re

HASH_LENGTH = 40

_HASH_RE = re.compile(r'[0-9a-f]{40}')
_PREFIX_RE = re.compile(r'[0-9a-f]+')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_valid_hash(value: str) -> bool:
    """Return True if value is a full 40-character lowercase hex hash."""
    return bool(_HASH_RE.fullmatch(value))


def is_hash_prefix(value: str) -> bool:
    """Return True if value could be an abbreviation of a hash."""
    return 0 < len(value) <= HASH_LENGTH and bool(_PREFIX_RE.fullmatch(value))
