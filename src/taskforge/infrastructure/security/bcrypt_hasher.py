"""bcrypt password hashing."""

import bcrypt

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    """PasswordHasher backed by bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, plain: str) -> str:
        return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(self._rounds)).decode("utf-8")
