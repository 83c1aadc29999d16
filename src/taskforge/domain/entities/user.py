"""User entity - identity and lockout state."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """Registered user. ``password_hash`` is never the clear-text password."""

    id: UUID
    name: str
    email: str
    password_hash: str
    is_active: bool = True
    failed_login_attempts: int = 0
    locked_until: datetime | None = None

    def is_locked(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now
