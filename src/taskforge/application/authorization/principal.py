"""Authenticated caller as seen by authorization."""

from dataclasses import dataclass
from uuid import UUID

from taskforge.domain.value_objects import SystemRole


@dataclass(frozen=True)
class Principal:
    """Caller claims. Claims are kept raw; evaluators decide whether they are usable."""

    user_id_claim: str | None = None
    role_claim: str | None = None
    email: str | None = None
    username: str | None = None

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls()

    @property
    def user_id(self) -> UUID | None:
        """Parsed identity claim, or None when missing or malformed."""
        if not self.user_id_claim:
            return None
        try:
            return UUID(self.user_id_claim)
        except ValueError:
            return None

    @property
    def system_role(self) -> SystemRole | None:
        """Parsed role claim, or None when missing or unknown."""
        if not self.role_claim:
            return None
        try:
            return SystemRole(self.role_claim)
        except ValueError:
            return None
