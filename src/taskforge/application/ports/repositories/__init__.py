"""Repository ports."""

from taskforge.application.ports.repositories.repository import Repository

__all__ = ["Repository"]
