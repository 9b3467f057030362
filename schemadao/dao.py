"""Record classes built from table descriptions, with async insert support."""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Mapping, Optional, Protocol, Sequence

from schemadao.schema import Schema, Table


class AsyncClient(Protocol):
    """The subset of an async database client that records need."""

    async def query_one(self, query: str, params: Sequence[Any]) -> Any: ...

    async def execute(self, query: str, params: Sequence[Any]) -> Any: ...


class InsertError(Exception):
    """Raised when a record cannot be inserted.

    ``constraint_violation`` is true when the insert was refused because a
    row with the same composite-unique values already exists.
    """

    def __init__(self, message: str, *, constraint_violation: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.constraint_violation = constraint_violation


class Record:
    """Base class of the record classes built for each table."""

    __table__: ClassVar[Optional[Table]] = None

    @classmethod
    def _table(cls) -> Table:
        if cls.__table__ is None:
            raise TypeError(f"{cls.__name__} is not bound to a table")
        return cls.__table__

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Record":
        """Build a record from a row that maps column names to values."""
        table = cls._table()
        return cls(**{column.name: row[column.name] for column in table.fields})

    async def insert_self_into_table(self, client: AsyncClient) -> None:
        """Insert this record, first checking any composite uniqueness constraint."""
        table = self._table()
        query = table.uniqueness_query()
        if query is not None:
            assert table.composite_uniqueness is not None
            await self._check_uniqueness(client, table, query)

        values = [getattr(self, column.name) for column in table.insertable_fields()]
        try:
            await client.execute(table.insert_statement(), values)
        except Exception as exc:
            raise InsertError(
                f"Unable to insert self: {self!r} into table {table.name}"
            ) from exc

    async def _check_uniqueness(self, client: AsyncClient, table: Table, query: str) -> None:
        cu = table.composite_uniqueness
        assert cu is not None
        first = getattr(self, cu.field1)
        second = getattr(self, cu.field2)
        try:
            row = await client.query_one(query, [first, second])
        except Exception as exc:
            raise InsertError(
                f"Unable to query existence of fields {cu.field1} = {first} and "
                f"{cu.field2} = {second} from table {table.name}: {exc}"
            ) from exc

        try:
            exists = row[0]
        except (LookupError, TypeError) as exc:
            raise InsertError(
                "Unable to get row value when checking uniqueness constraint for "
                f"{cu.field1} and {cu.field2}: {exc}"
            ) from exc
        if not isinstance(exists, bool):
            raise InsertError(
                "Unable to get row value when checking uniqueness constraint for "
                f"{cu.field1} and {cu.field2}: expected a boolean, got {exists!r}"
            )

        if exists:
            raise InsertError(
                f"A row already exists where {cu.field1} = `{first}` and "
                f"{cu.field2} = `{second}`",
                constraint_violation=True,
            )


def build_record_class(table: Table) -> type[Record]:
    """Create a dataclass for the rows of ``table``."""
    columns = [(column.name, column.python_type()) for column in table.fields]
    return dataclasses.make_dataclass(
        table.name,
        columns,
        bases=(Record,),
        namespace={"__table__": table},
    )


def build_record_classes(schema: Schema) -> dict[str, type[Record]]:
    """Create a record class for every table of ``schema``, keyed by table name."""
    return {table.name: build_record_class(table) for table in schema.tables}