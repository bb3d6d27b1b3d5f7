"""Hashing helpers used to derive stable project identities."""

import hashlib
from pathlib import Path


def compute_hash(data: bytes, algorithm: str = "sha256") -> str:
    """Compute hash of bytes data.

    Args:
        data: Bytes to hash
        algorithm: Hash algorithm to use

    Returns:
        Hex digest of the hash
    """
    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def short_hash(hash_value: str, length: int = 12) -> str:
    """Get a shortened version of a hash."""
    return hash_value[:length]


def project_id(project_dir: Path | str) -> str:
    """Compute the identity of a project from its absolute path.

    The same directory always maps to the same id, so caches keyed by
    it survive between invocations.
    """
    resolved = str(Path(project_dir).expanduser().resolve())
    return short_hash(compute_hash(resolved.encode()), 8)
