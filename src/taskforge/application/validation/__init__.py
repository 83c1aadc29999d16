"""Request validation."""

from taskforge.application.validation.password import password_complexity
from taskforge.application.validation.rules import (
    RuleChain,
    ValidationFailure,
    Validator,
    group_failures,
)

__all__ = [
    "RuleChain",
    "ValidationFailure",
    "Validator",
    "group_failures",
    "password_complexity",
]
