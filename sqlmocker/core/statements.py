"""Statement values, one dataclass per statement kind, and their SQL rendering."""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .models import Column


# Rendered in place of an empty predicate so every WHERE clause stays well formed.
TAUTOLOGY = "1 = 1"


def column_definition(column: Column) -> str:
    """Render ``name type[(length[,decimal])][ NOT NULL][ PRIMARY KEY]``."""
    clause = f"{column.name} {column.data_type}"
    if column.length is not None:
        if column.decimal_places is not None:
            clause += f"({column.length},{column.decimal_places})"
        else:
            clause += f"({column.length})"
    if not column.is_nullable:
        clause += " NOT NULL"
    if column.is_primary_key:
        clause += " PRIMARY KEY"
    return clause


@dataclass
class Predicate:
    """Conditions combined with AND."""
    conditions: List[str] = field(default_factory=list)

    def to_sql(self) -> str:
        if not self.conditions:
            return TAUTOLOGY
        return " AND ".join(self.conditions)


@dataclass
class CreateTableStatement:
    table_name: str
    columns: List[Column]

    def to_sql(self) -> str:
        clauses = ", ".join(column_definition(column) for column in self.columns)
        return f"CREATE TABLE {self.table_name} ({clauses});"


@dataclass
class AlterTableStatement:
    """Adds every column in one statement, comma separated."""
    table_name: str
    columns: List[Column]

    def to_sql(self) -> str:
        clauses = ", ".join(f"ADD COLUMN {column_definition(column)}" for column in self.columns)
        return f"ALTER TABLE {self.table_name} {clauses};"


@dataclass
class DropTableStatement:
    table_name: str

    def to_sql(self) -> str:
        return f"DROP TABLE {self.table_name};"


@dataclass
class InsertStatement:
    table_name: str
    column_names: List[str]
    values: List[str]

    def to_sql(self) -> str:
        return (f"INSERT INTO {self.table_name} ({', '.join(self.column_names)}) "
                f"VALUES ({', '.join(self.values)});")


@dataclass
class SelectStatement:
    table_name: str
    column_names: List[str]
    predicate: Predicate

    def to_sql(self) -> str:
        return (f"SELECT {', '.join(self.column_names)} FROM {self.table_name} "
                f"WHERE {self.predicate.to_sql()};")


@dataclass
class UpdateStatement:
    table_name: str
    assignments: List[Tuple[str, str]]
    predicate: Predicate

    def to_sql(self) -> str:
        assignments = ", ".join(f"{name} = {value}" for name, value in self.assignments)
        return f"UPDATE {self.table_name} SET {assignments} WHERE {self.predicate.to_sql()};"


@dataclass
class DeleteStatement:
    table_name: str
    predicate: Predicate

    def to_sql(self) -> str:
        return f"DELETE FROM {self.table_name} WHERE {self.predicate.to_sql()};"


Statement = Union[
    CreateTableStatement,
    AlterTableStatement,
    DropTableStatement,
    InsertStatement,
    SelectStatement,
    UpdateStatement,
    DeleteStatement,
]
