"""Generic PostgreSQL repository over a mapped table."""

from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from psycopg import AsyncConnection, sql

from taskforge.infrastructure.persistence.postgres.tables import Table

EntityT = TypeVar("EntityT")


class PostgresRepository(Generic[EntityT]):
    """Repository implementation; every write reports its row count to ``on_write``."""

    def __init__(
        self,
        conn: AsyncConnection,
        table: Table[EntityT],
        on_write: Callable[[int], None] = lambda count: None,
    ) -> None:
        self._conn = conn
        self._table = table
        self._on_write = on_write
        self._select = sql.SQL("SELECT {columns} FROM {table}").format(
            columns=sql.SQL(", ").join(map(sql.Identifier, table.columns)),
            table=sql.Identifier(table.name),
        )

    async def get_by_id(self, entity_id: UUID) -> EntityT | None:
        """Get entity by id."""
        cur = await self._conn.execute(
            self._select + sql.SQL(" WHERE id = %s"),
            (entity_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return self._table.from_row(r)

    async def get_where(self, **criteria: Any) -> list[EntityT]:
        """Rows matching every criterion; collections match by membership."""
        conditions = []
        params: list[Any] = []
        for column, value in criteria.items():
            if column not in self._table.columns:
                raise ValueError(f"{self._table.name} has no column {column!r}")
            if isinstance(value, (set, frozenset, list, tuple)):
                if not value:
                    return []
                conditions.append(
                    sql.SQL("{} = ANY(%s)").format(sql.Identifier(column))
                )
                params.append([_adapt(v) for v in value])
            elif value is None:
                conditions.append(sql.SQL("{} IS NULL").format(sql.Identifier(column)))
            else:
                conditions.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
                params.append(_adapt(value))

        query = self._select
        if conditions:
            query += sql.SQL(" WHERE ") + sql.SQL(" AND ").join(conditions)
        cur = await self._conn.execute(query, params)
        rows = await cur.fetchall()
        return [self._table.from_row(r) for r in rows]

    async def insert(self, entity: EntityT) -> EntityT:
        """Insert entity."""
        columns = self._table.columns
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values})").format(
            table=sql.Identifier(self._table.name),
            columns=sql.SQL(", ").join(map(sql.Identifier, columns)),
            values=sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        )
        cur = await self._conn.execute(query, self._table.to_row(entity))
        self._on_write(cur.rowcount)
        return entity

    async def update(self, entity: EntityT) -> None:
        """Update every column except id."""
        columns = self._table.columns[1:]
        query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s").format(
            table=sql.Identifier(self._table.name),
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in columns
            ),
        )
        row = self._table.to_row(entity)
        cur = await self._conn.execute(query, (*row[1:], row[0]))
        self._on_write(cur.rowcount)

    async def delete(self, entity: EntityT) -> None:
        """Delete entity by id."""
        cur = await self._conn.execute(
            sql.SQL("DELETE FROM {table} WHERE id = %s").format(
                table=sql.Identifier(self._table.name)
            ),
            (entity.id,),
        )
        self._on_write(cur.rowcount)


def _adapt(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
