"""Domain services."""

from taskforge.domain.services.role_hierarchy import ensure_acyclic, find_cycle

__all__ = ["ensure_acyclic", "find_cycle"]
