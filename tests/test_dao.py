import dataclasses
from datetime import datetime, timezone

import pytest

from schemadao.dao import InsertError, Record, build_record_class, build_record_classes
from schemadao.schema import Field, Schema, Table


class FakeClient:
    def __init__(self, exists=False, query_error=None, execute_error=None, row=None):
        self.exists = exists
        self.query_error = query_error
        self.execute_error = execute_error
        self.row = row
        self.queries = []
        self.executions = []

    async def query_one(self, query, params):
        self.queries.append((query, list(params)))
        if self.query_error is not None:
            raise self.query_error
        if self.row is not None:
            return self.row
        return (self.exists,)

    async def execute(self, query, params):
        self.executions.append((query, list(params)))
        if self.execute_error is not None:
            raise self.execute_error
        return 1


def user_table():
    return Table(
        "User",
        [
            Field.id("user_id"),
            Field.unique_string_variable_length("username"),
            Field.date_time("date_created"),
        ],
    )


def join_table():
    return Table.join_table("User", "user_id", "Interest", "interest_id")


def test_record_class_has_table_name_and_fields():
    cls = build_record_class(user_table())
    assert cls.__name__ == "User"
    assert [f.name for f in dataclasses.fields(cls)] == ["user_id", "username", "date_created"]
    assert issubclass(cls, Record)


def test_from_row_round_trip():
    cls = build_record_class(user_table())
    created = datetime(2024, 1, 2, tzinfo=timezone.utc)
    row = {"user_id": 7, "username": "Mike", "date_created": created}
    record = cls.from_row(row)
    assert record == cls(7, "Mike", created)
    assert dataclasses.asdict(record) == row


def test_from_row_on_unbound_base_raises():
    with pytest.raises(TypeError):
        Record.from_row({})


@pytest.mark.asyncio
async def test_insert_skips_auto_incrementing_field():
    table = user_table()
    cls = build_record_class(table)
    created = datetime(2024, 1, 2, tzinfo=timezone.utc)
    client = FakeClient()
    await cls(None, "Mike", created).insert_self_into_table(client)
    assert client.queries == []
    assert client.executions == [(table.insert_statement(), ["Mike", created])]


@pytest.mark.asyncio
async def test_join_insert_checks_uniqueness_then_inserts():
    table = join_table()
    cls = build_record_class(table)
    client = FakeClient(exists=False)
    await cls(1, 2).insert_self_into_table(client)
    assert client.queries == [(table.uniqueness_query(), [1, 2])]
    assert client.executions == [(table.insert_statement(), [1, 2])]


@pytest.mark.asyncio
async def test_join_insert_existing_row_is_constraint_violation():
    cls = build_record_class(join_table())
    client = FakeClient(exists=True)
    with pytest.raises(InsertError) as info:
        await cls(1, 2).insert_self_into_table(client)
    assert info.value.constraint_violation is True
    assert "`1`" in info.value.message and "`2`" in info.value.message
    assert client.executions == []


@pytest.mark.asyncio
async def test_uniqueness_query_failure():
    cls = build_record_class(join_table())
    error = RuntimeError("connection lost")
    client = FakeClient(query_error=error)
    with pytest.raises(InsertError) as info:
        await cls(3, 4).insert_self_into_table(client)
    assert info.value.constraint_violation is False
    assert info.value.__cause__ is error
    assert "connection lost" in info.value.message
    assert client.executions == []


@pytest.mark.asyncio
async def test_uniqueness_row_without_value():
    cls = build_record_class(join_table())
    client = FakeClient(row=())
    with pytest.raises(InsertError) as info:
        await cls(3, 4).insert_self_into_table(client)
    assert info.value.constraint_violation is False
    assert client.executions == []


@pytest.mark.asyncio
async def test_execute_failure_raises_insert_error():
    cls = build_record_class(user_table())
    error = RuntimeError("duplicate")
    client = FakeClient(execute_error=error)
    record = cls(None, "Mike", datetime(2024, 1, 2, tzinfo=timezone.utc))
    with pytest.raises(InsertError) as info:
        await record.insert_self_into_table(client)
    assert info.value.constraint_violation is False
    assert info.value.__cause__ is error
    assert info.value.message.endswith("into table User")
    assert repr(record) in info.value.message


def test_build_record_classes_keys_match_tables():
    schema = Schema([user_table(), join_table()])
    classes = build_record_classes(schema)
    assert list(classes) == [t.name for t in schema.tables]
    assert all(cls.__name__ == name for name, cls in classes.items())