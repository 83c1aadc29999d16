"""Generic repository port."""

from typing import Any, Protocol, TypeVar
from uuid import UUID

EntityT = TypeVar("EntityT")


class Repository(Protocol[EntityT]):
    """Port for entity persistence.

    ``get_where`` filters on entity attributes: a scalar value matches by
    equality, a set/list/tuple value matches by membership. Calling it
    without criteria returns every row.
    """

    async def get_by_id(self, entity_id: UUID) -> EntityT | None: ...

    async def get_where(self, **criteria: Any) -> list[EntityT]: ...

    async def insert(self, entity: EntityT) -> EntityT: ...

    async def update(self, entity: EntityT) -> None: ...

    async def delete(self, entity: EntityT) -> None: ...
