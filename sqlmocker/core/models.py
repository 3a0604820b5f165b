"""Data models for table schemas and generation configuration."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ColumnCategory(Enum):
    """Broad type families the generator knows how to fill."""
    NUMERIC = "numeric"
    TEXT = "text"
    DATE = "date"
    OTHER = "other"


# Normalized type tags per category; anything else is opaque.
TYPE_CATEGORIES: Dict[str, ColumnCategory] = {
    "number": ColumnCategory.NUMERIC,
    "int": ColumnCategory.NUMERIC,
    "integer": ColumnCategory.NUMERIC,
    "numeric": ColumnCategory.NUMERIC,
    "decimal": ColumnCategory.NUMERIC,
    "varchar": ColumnCategory.TEXT,
    "text": ColumnCategory.TEXT,
    "date": ColumnCategory.DATE,
    "datetime": ColumnCategory.DATE,
}


class StatementKind(Enum):
    """The seven statement kinds the generator renders."""
    CREATE_TABLE = "create_table"
    ALTER_TABLE = "alter_table"
    DROP_TABLE = "drop_table"
    INSERT = "insert"
    SELECT = "select"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class Column:
    """A single column definition parsed from DDL."""
    name: str
    data_type: str
    length: Optional[int] = None
    decimal_places: Optional[int] = None
    is_nullable: bool = True
    is_primary_key: bool = False
    ref_table: Optional[str] = None
    ref_column: Optional[str] = None

    @property
    def category(self) -> ColumnCategory:
        return TYPE_CATEGORIES.get(self.data_type, ColumnCategory.OTHER)

    @property
    def is_foreign_key(self) -> bool:
        return self.ref_table is not None


@dataclass
class Table:
    """A table name plus its ordered columns."""
    name: str
    columns: List[Column] = field(default_factory=list)
    comment: Optional[str] = None

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def set_comment(self, comment: Optional[str]) -> None:
        """Attach a free-text annotation; the generator ignores it."""
        self.comment = comment

    def add_column(self, column: Column) -> None:
        """Append a column to the end of the table."""
        self.columns.append(column)

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def get_primary_key_columns(self) -> List[str]:
        """Get primary key column names."""
        return [column.name for column in self.columns if column.is_primary_key]

    def get_foreign_key_columns(self) -> List[str]:
        """Get foreign key column names."""
        return [column.name for column in self.columns if column.is_foreign_key]


class GenerationConfig(BaseModel):
    """Configuration for literal and predicate synthesis."""

    seed: Optional[int] = Field(default=None, description="Random seed for reproducible statements")
    name_pool: List[str] = Field(
        default_factory=lambda: ["Alice", "Bob", "Charlie", "David"],
        description="Names used for text literals"
    )
    use_faker_names: bool = Field(
        default=False, description="Draw text literals from Faker instead of the name pool"
    )
    min_value: int = Field(default=1, description="Smallest random integer (inclusive)")
    max_value: int = Field(default=100, description="Upper bound for random integers (exclusive)")
    min_in_list: int = Field(default=2, description="Fewest names in an IN (...) predicate")
    max_in_list: int = Field(default=10, description="Most names in an IN (...) predicate")
    base_date: date = Field(default=date(2021, 1, 1), description="Earliest BETWEEN start date")
    max_start_offset_days: int = Field(
        default=2, description="Largest random day offset added to base_date"
    )

    @field_validator("name_pool")
    @classmethod
    def validate_name_pool(cls, v):
        if not v:
            raise ValueError("name_pool must contain at least one name")
        return v

    @field_validator("max_start_offset_days")
    @classmethod
    def validate_offset(cls, v):
        if v < 0:
            raise ValueError("max_start_offset_days must not be negative")
        return v

    @model_validator(mode="after")
    def validate_ranges(self):
        if self.min_value >= self.max_value:
            raise ValueError("min_value must be smaller than max_value")
        if not 1 <= self.min_in_list <= self.max_in_list:
            raise ValueError("IN list bounds must satisfy 1 <= min_in_list <= max_in_list")
        return self


class RunConfig(BaseModel):
    """Configuration for a statement-writing run."""

    record_count: int = Field(default=30, description="Number of statements to write")
    output_path: Path = Field(default=Path("output.sql"), description="File statements are appended to")
    tables: List[str] = Field(
        default_factory=list, description="CREATE TABLE strings (empty = built-in tables)"
    )
    statement_weights: Dict[StatementKind, float] = Field(
        default_factory=dict, description="Relative weight per statement kind (empty = uniform)"
    )
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    @field_validator("record_count")
    @classmethod
    def validate_record_count(cls, v):
        if v < 0:
            raise ValueError("record_count must not be negative")
        return v

    @field_validator("statement_weights")
    @classmethod
    def validate_weights(cls, v):
        if any(weight < 0 for weight in v.values()):
            raise ValueError("Statement weights must not be negative")
        if v and sum(v.values()) <= 0:
            raise ValueError("At least one statement weight must be positive")
        return v


@dataclass
class GenerationStats:
    """Statistics from a statement-writing run."""
    statements_written: int = 0
    total_time_seconds: float = 0.0
    kind_counts: Dict[str, int] = field(default_factory=dict)
    table_counts: Dict[str, int] = field(default_factory=dict)

    def record(self, table_name: str, kind: StatementKind) -> None:
        self.statements_written += 1
        self.kind_counts[kind.value] = self.kind_counts.get(kind.value, 0) + 1
        self.table_counts[table_name] = self.table_counts.get(table_name, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statements_written": self.statements_written,
            "total_time_seconds": self.total_time_seconds,
            "kind_counts": dict(self.kind_counts),
            "table_counts": dict(self.table_counts),
        }
