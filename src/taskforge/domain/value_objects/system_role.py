"""System-wide roles carried in the caller's claims."""

from enum import StrEnum


class SystemRole(StrEnum):
    """Role claim attached to every authenticated principal."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    DEVELOPER = "Developer"
