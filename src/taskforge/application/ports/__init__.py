"""Application ports - interfaces for external adapters."""

from taskforge.application.ports.password_hasher import PasswordHasher
from taskforge.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PasswordHasher",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
