"""
Password hashing (bcrypt).
"""

import bcrypt
from flask import current_app

from todoapp.errors import StoreFailure

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
MAX_PASSWORD_BYTES = 72


def _rounds():
    return int(current_app.config.get('BCRYPT_ROUNDS', DEFAULT_ROUNDS))


def _encode(plain):
    return plain.encode('utf-8')[:MAX_PASSWORD_BYTES]


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of ``plain`` as text."""
    if not plain:
        raise ValueError('Cannot hash an empty password')
    salt = bcrypt.gensalt(rounds=_rounds())
    return bcrypt.hashpw(_encode(plain), salt).decode('utf-8')


def verify_password(plain: str, password_hash: str) -> bool:
    """Check ``plain`` against a stored hash.

    A stored value that is not a bcrypt hash means the users table is
    corrupt, which is reported as a store failure instead of a mismatch.
    """
    if not plain:
        return False
    if not password_hash:
        raise StoreFailure('Stored password hash is empty')
    try:
        return bcrypt.checkpw(_encode(plain), password_hash.encode('utf-8'))
    except ValueError as e:
        raise StoreFailure('Stored password hash is malformed') from e
