"""
Password hashing for local (email + password) accounts.

Hashes are scrypt with fixed work parameters:

    N = 2**14 (rounds=14), r = 8 (block_size), p = 1 (parallelism)

Each hash gets a fresh 16-byte random salt. passlib stores salt, parameters
and digest together in one modular-crypt string
("$scrypt$ln=14,r=8,p=1$<salt>$<digest>"), so verification only needs the
stored value. Digest comparison is constant-time.
"""

import logging
from typing import Optional

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

SCRYPT_ROUNDS = 14
SCRYPT_BLOCK_SIZE = 8
SCRYPT_PARALLELISM = 1

_context = CryptContext(
    schemes=["scrypt"],
    scrypt__rounds=SCRYPT_ROUNDS,
    scrypt__block_size=SCRYPT_BLOCK_SIZE,
    scrypt__parallelism=SCRYPT_PARALLELISM,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password with a freshly generated salt."""
    return _context.hash(password)


def verify_password(password: str, stored_hash: Optional[str]) -> bool:
    """
    Check a plaintext password against a stored hash.

    A missing or malformed stored hash never verifies. The dummy
    verification keeps the "no usable hash" path roughly as slow as a
    real comparison.
    """
    if not stored_hash:
        _context.dummy_verify()
        return False

    try:
        return _context.verify(password, stored_hash)
    except ValueError:
        logger.warning("Stored password hash is not a recognized scrypt hash")
        return False


def dummy_verify() -> None:
    """Spend the time of one verification without checking anything."""
    _context.dummy_verify()
