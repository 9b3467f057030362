"""The example schema of users and their interests, and a command printing its SQL."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from schemadao.schema import Field, Schema, Table


def build_schema() -> Schema:
    """The users, interests and user-interest join tables."""
    user_table_name = "User"
    user_id_field = "user_id"
    users_table = Table(
        user_table_name,
        [
            Field.id(user_id_field),
            Field.unique_string_variable_length("username"),
            Field.date_time("date_created"),
        ],
    )

    interest_table_name = "Interest"
    interest_id_field = "interest_id"
    interests_table = Table(
        interest_table_name,
        [
            Field.id(interest_id_field),
            Field.unique_string_variable_length("interest_name"),
        ],
    )

    user_interests = Table.join_table(
        user_table_name, user_id_field, interest_table_name, interest_id_field
    )
    return Schema([users_table, interests_table, user_interests])


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the SQL schema."""
    parser = argparse.ArgumentParser(description="Print the SQL for the example schema.")
    parser.parse_args(argv)
    print(build_schema().to_sql())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())