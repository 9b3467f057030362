# schemadao

`schemadao` lets you describe a relational schema in Python (tables,
typed fields, foreign keys and composite uniqueness) and turns that one
description into two things:

* the PostgreSQL `CREATE TABLE` statements for it, and
* a record class per table, able to build itself from a result row and to
  insert itself into its table through an asynchronous client you supply.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Printing the schema

The package ships with a small built-in schema of users, interests and
the join table between them. To print its SQL, run:

```
schemadao
```

The command takes no options (besides `--help`). The output is:

```
CREATE TABLE User (
    user_id SERIAL NOT NULL UNIQUE,
    username TEXT NOT NULL UNIQUE,
    date_created TIMESTAMPTZ NOT NULL
);

CREATE TABLE Interest (
    interest_id SERIAL NOT NULL UNIQUE,
    interest_name TEXT NOT NULL UNIQUE
);

CREATE TABLE InterestForUser (
    user_id INT NOT NULL REFERENCES User(user_id),
    interest_id INT NOT NULL REFERENCES Interest(interest_id),
    UNIQUE (user_id, interest_id)
);
```

The same schema is available from Python as `schemadao.app.build_schema()`.

## Describing your own schema

Tables are built from `Field` constructors in `schemadao.schema` and
gathered into a `Schema`:

```python
from schemadao.schema import Field, Schema, Table

user = Table("User", [
    Field.id("user_id"),
    Field.unique_string_variable_length("username"),
    Field.date_time("date_created"),
])
place = Table("Place", [
    Field.id("place_id"),
    Field.geospatial("latitude"),
    Field.geospatial("longitude"),
    Field.string_list("tags", unique=False, nullable=True),
])
visits = Table.join_table("User", "user_id", "Place", "place_id")

schema = Schema([user, place, visits])
print(schema.to_sql())
```

The field constructors give these columns:

| Constructor | SQL | Python type |
| --- | --- | --- |
| `Field.id(name)` | `SERIAL NOT NULL UNIQUE` | `Optional[int]` |
| `Field.unique_string_variable_length(name)` | `TEXT NOT NULL UNIQUE` | `str` |
| `Field.date_time(name)` | `TIMESTAMPTZ NOT NULL` | `datetime` |
| `Field.geospatial(name)` | `DECIMAL(9, 6) NOT NULL` | `Decimal` |
| `Field.string_list(name, unique, nullable)` | `TEXT[]` | `list[str]` |

Other columns can be made directly with `Field(name, field_type, nullable=..., unique=..., reference=...)`,
where the type is a `FieldType` of a `FieldKind` (`INT`, `BYTE_ARRAY`, and
so on), `FieldType.decimal(total_digits, digits_after_decimal)` or
`FieldType.list_of(inner)`, and the reference a `FieldReference(table, field)`.
Setting `primary_key` on a `Table` to a column name adds `PRIMARY KEY` to
that column.

`Table.join_table` names the table after both sides (`PlaceForUser`
above), makes both columns non-null `INT` references to their tables, and
requires each pair of ids to be unique.

Each table can also show the statements used when writing rows:

* `Table.insertable_fields()` – the fields supplied on insert (auto
  incrementing ids are left to the database);
* `Table.insert_statement()` – the parameterised `insert into` statement,
  with `$1`, `$2`, ... placeholders;
* `Table.uniqueness_query()` – for tables with composite uniqueness, the
  `SELECT EXISTS (...)` query checked before inserting; `None` otherwise.

## Record classes

`schemadao.dao.build_record_classes(schema)` returns a dict mapping each
table name to a `Record` subclass (`build_record_class(table)` does it for
a single table). Each is a dataclass with one attribute per field:

```python
from schemadao.app import build_schema
from schemadao.dao import build_record_classes

classes = build_record_classes(build_schema())
User = classes["User"]
user = User(user_id=None, username="mike", date_created=now)
same = User.from_row({"user_id": 1, "username": "mike", "date_created": now})
```

`from_row(row)` takes any mapping from column names to values.

`await record.insert_self_into_table(client)` writes the record. The
client is any object with coroutine methods `query_one(query, params)`
and `execute(query, params)`. For a table with composite uniqueness the
existence query is run first, and its result row's first item must be a
boolean.

Any failure raises `InsertError`, whose `message` says what went wrong.
When a row with the same pair of composite-unique values already exists,
`constraint_violation` is `True` and nothing is inserted; in every other
case it is `False`.

## What it does not do

`schemadao` does not connect to a database, create the tables in one, or
read records back by key: it produces SQL text and record classes, and
the record classes only insert through a client you provide.