"""Password hashing port."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password hashing."""

    def hash(self, password: str) -> str: ...
