"""Declarative description of a relational schema and its SQL rendering."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

INDENT = "    "


class FieldKind(enum.Enum):
    """The kinds of column a field can hold."""

    DECIMAL = "decimal"
    INT = "int"
    AUTO_INCREMENTING = "auto_incrementing"
    STRING_VARIABLE_LENGTH = "string_variable_length"
    DATE_TIME = "date_time"
    BYTE_ARRAY = "byte_array"
    LIST = "list"


@dataclass(frozen=True)
class DecimalBounds:
    """Precision and scale of a fixed-point column."""

    total_digits: int
    digits_after_decimal: int


@dataclass(frozen=True)
class FieldType:
    """A column type; decimals carry bounds and lists carry an inner type."""

    kind: FieldKind
    bounds: Optional[DecimalBounds] = None
    inner: Optional[FieldType] = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.DECIMAL and self.bounds is None:
            raise ValueError("a decimal field type needs bounds")
        if self.kind is FieldKind.LIST and self.inner is None:
            raise ValueError("a list field type needs an inner type")

    @classmethod
    def decimal(cls, total_digits: int, digits_after_decimal: int) -> FieldType:
        return cls(FieldKind.DECIMAL, bounds=DecimalBounds(total_digits, digits_after_decimal))

    @classmethod
    def list_of(cls, inner: FieldType) -> FieldType:
        return cls(FieldKind.LIST, inner=inner)

    def to_sql(self) -> str:
        """The SQL type name of this column type."""
        if self.kind is FieldKind.DECIMAL:
            assert self.bounds is not None
            return f"DECIMAL({self.bounds.total_digits}, {self.bounds.digits_after_decimal})"
        if self.kind is FieldKind.LIST:
            assert self.inner is not None
            return f"{self.inner.to_sql()}[]"
        return _SQL_NAMES[self.kind]

    def python_type(self) -> object:
        """The Python type a value of this column is held as."""
        if self.kind is FieldKind.LIST:
            assert self.inner is not None
            return list[self.inner.python_type()]  # type: ignore[misc]
        return _PYTHON_TYPES[self.kind]


_SQL_NAMES = {
    FieldKind.INT: "INT",
    FieldKind.AUTO_INCREMENTING: "SERIAL",
    FieldKind.STRING_VARIABLE_LENGTH: "TEXT",
    FieldKind.DATE_TIME: "TIMESTAMPTZ",
    FieldKind.BYTE_ARRAY: "bytea",
}

_PYTHON_TYPES: dict[FieldKind, object] = {
    FieldKind.DECIMAL: Decimal,
    FieldKind.INT: int,
    FieldKind.AUTO_INCREMENTING: Optional[int],
    FieldKind.STRING_VARIABLE_LENGTH: str,
    FieldKind.DATE_TIME: datetime,
    FieldKind.BYTE_ARRAY: bytes,
}


@dataclass(frozen=True)
class FieldReference:
    """A foreign-key reference to a column of another table."""

    referenced_table: str
    referenced_field: str

    def to_sql(self) -> str:
        return f"REFERENCES {self.referenced_table}({self.referenced_field})"


@dataclass(frozen=True)
class CompositeUniqueness:
    """A uniqueness constraint over a pair of columns."""

    field1: str
    field2: str


@dataclass(frozen=True)
class Field:
    """One column of a table."""

    name: str
    field_type: FieldType
    nullable: bool = False
    unique: bool = False
    reference: Optional[FieldReference] = None

    @classmethod
    def id(cls, field_name: str) -> Field:
        return cls(field_name, FieldType(FieldKind.AUTO_INCREMENTING), unique=True)

    @classmethod
    def unique_string_variable_length(cls, field_name: str) -> Field:
        return cls(field_name, FieldType(FieldKind.STRING_VARIABLE_LENGTH), unique=True)

    @classmethod
    def date_time(cls, name: str) -> Field:
        return cls(name, FieldType(FieldKind.DATE_TIME))

    @classmethod
    def geospatial(cls, field_name: str) -> Field:
        return cls(field_name, FieldType.decimal(9, 6))

    @classmethod
    def string_list(cls, name: str, unique: bool, nullable: bool) -> Field:
        return cls(
            name,
            FieldType.list_of(FieldType(FieldKind.STRING_VARIABLE_LENGTH)),
            nullable=nullable,
            unique=unique,
        )

    def to_sql(self) -> str:
        """The column definition as it appears inside CREATE TABLE."""
        parts = [self.name, self.field_type.to_sql()]
        if not self.nullable:
            parts.append("NOT NULL")
        if self.unique:
            parts.append("UNIQUE")
        if self.reference is not None:
            parts.append(self.reference.to_sql())
        return " ".join(parts)

    def python_type(self) -> object:
        """The Python type of the attribute that holds this column."""
        base = self.field_type.python_type()
        return Optional[base] if self.nullable else base  # type: ignore[valid-type]


@dataclass
class Table:
    """A table: its name, columns and table-level constraints."""

    name: str
    fields: list[Field] = field(default_factory=list)
    composite_uniqueness: Optional[CompositeUniqueness] = None
    primary_key: Optional[str] = None

    @classmethod
    def join_table(cls, table_1: str, table_1_id: str, table_2: str, table_2_id: str) -> Table:
        """A many-to-many table linking rows of two tables by their ids."""
        return cls(
            name=f"{table_2}For{table_1}",
            fields=[
                Field(
                    table_1_id,
                    FieldType(FieldKind.INT),
                    reference=FieldReference(table_1, table_1_id),
                ),
                Field(
                    table_2_id,
                    FieldType(FieldKind.INT),
                    reference=FieldReference(table_2, table_2_id),
                ),
            ],
            composite_uniqueness=CompositeUniqueness(table_1_id, table_2_id),
        )

    def _column_sql(self, column: Field) -> str:
        sql = column.to_sql()
        if self.primary_key is not None and column.name == self.primary_key:
            sql += " PRIMARY KEY"
        return sql

    def to_sql(self) -> str:
        """The CREATE TABLE statement for this table."""
        columns = f",\n{INDENT}".join(self._column_sql(column) for column in self.fields)
        constraint = ""
        if self.composite_uniqueness is not None:
            cu = self.composite_uniqueness
            constraint = f",\n{INDENT}UNIQUE ({cu.field1}, {cu.field2})"
        return f"CREATE TABLE {self.name} (\n{INDENT}{columns}{constraint}\n);"

    def insertable_fields(self) -> list[Field]:
        """Fields given a value on insert; auto-incrementing ones are left to the database."""
        return [f for f in self.fields if f.field_type.kind is not FieldKind.AUTO_INCREMENTING]

    def insert_statement(self) -> str:
        """The parameterised INSERT statement for this table."""
        columns = self.insertable_fields()
        names = ", ".join(f.name for f in columns)
        placeholders = ", ".join(f"${position}" for position in range(1, len(columns) + 1))
        return f"insert into {self.name} ({names}) values ({placeholders})"

    def uniqueness_query(self) -> Optional[str]:
        """The query checking the composite uniqueness constraint, if there is one."""
        if self.composite_uniqueness is None:
            return None
        cu = self.composite_uniqueness
        return (
            f"SELECT EXISTS (SELECT 1 FROM {self.name} "
            f"WHERE {cu.field1} = $1 AND {cu.field2} = $2)"
        )


@dataclass
class Schema:
    """A collection of tables."""

    tables: list[Table] = field(default_factory=list)

    def to_sql(self) -> str:
        """All CREATE TABLE statements, separated by blank lines."""
        return "\n\n".join(table.to_sql() for table in self.tables)