"""Randomized SQL statement generation for parsed tables."""

import logging
import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Dict, Optional

from faker import Faker

from .models import Column, ColumnCategory, GenerationConfig, StatementKind, Table
from .statements import (
    AlterTableStatement, CreateTableStatement, DeleteStatement, DropTableStatement,
    InsertStatement, Predicate, SelectStatement, Statement, UpdateStatement
)


logger = logging.getLogger(__name__)

COMPARISON_OPERATORS = ["=", ">", "<", ">=", "<="]
DATE_FORMAT = "YYYY-MM-DD"


class StatementGenerator:
    """Renders tables into randomized CREATE/ALTER/DROP/INSERT/SELECT/UPDATE/DELETE text.

    All randomness comes from ``rng``; two generators built with the same seed
    (and the same ``today``) produce the same statements. Tables are only read.
    """

    def __init__(self, config: Optional[GenerationConfig] = None,
                 rng: Optional[random.Random] = None,
                 today: Optional[Callable[[], date]] = None):
        """Initialize generator with configuration and randomness source."""
        self.config = config or GenerationConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.today = today or date.today

        self.faker = None
        if self.config.use_faker_names:
            self.faker = Faker()
            # Faker draws follow the rng seed
            self.faker.seed_instance(self.rng.getrandbits(32))

        self._builders: Dict[StatementKind, Callable[[Table], Statement]] = {
            StatementKind.CREATE_TABLE: self._build_create_table,
            StatementKind.ALTER_TABLE: self._build_alter_table,
            StatementKind.DROP_TABLE: self._build_drop_table,
            StatementKind.INSERT: self._build_insert,
            StatementKind.SELECT: self._build_select,
            StatementKind.UPDATE: self._build_update,
            StatementKind.DELETE: self._build_delete,
        }

    def build(self, table: Table, kind: StatementKind) -> Statement:
        """Build the statement value for ``kind`` without rendering it."""
        builder = self._builders.get(kind)
        if builder is None:
            raise ValueError(f"Unsupported statement kind: {kind!r}")
        return builder(table)

    def render(self, table: Table, kind: StatementKind) -> str:
        """Render one terminated SQL statement for ``table``."""
        sql = self.build(table, kind).to_sql()
        logger.debug(f"Rendered {kind.value} for {table.name}: {sql}")
        return sql

    def _build_create_table(self, table: Table) -> CreateTableStatement:
        return CreateTableStatement(table_name=table.name, columns=list(table.columns))

    def _build_alter_table(self, table: Table) -> AlterTableStatement:
        return AlterTableStatement(table_name=table.name, columns=list(table.columns))

    def _build_drop_table(self, table: Table) -> DropTableStatement:
        return DropTableStatement(table_name=table.name)

    def _build_insert(self, table: Table) -> InsertStatement:
        return InsertStatement(
            table_name=table.name,
            column_names=table.column_names,
            values=[self.generate_value(column) for column in table.columns],
        )

    def _build_select(self, table: Table) -> SelectStatement:
        return SelectStatement(
            table_name=table.name,
            column_names=table.column_names,
            predicate=self.generate_predicate(table),
        )

    def _build_update(self, table: Table) -> UpdateStatement:
        assignments = [(column.name, self.generate_value(column)) for column in table.columns]
        return UpdateStatement(
            table_name=table.name,
            assignments=assignments,
            predicate=self.generate_predicate(table),
        )

    def _build_delete(self, table: Table) -> DeleteStatement:
        return DeleteStatement(table_name=table.name, predicate=self.generate_predicate(table))

    def generate_value(self, column: Column) -> str:
        """Generate a SQL literal for an INSERT value or UPDATE assignment."""
        category = column.category

        if category == ColumnCategory.TEXT:
            return self._quoted_name()
        if category == ColumnCategory.DATE:
            return _to_date(self.today())
        if category == ColumnCategory.NUMERIC and column.decimal_places is not None:
            return self._generate_decimal(column.decimal_places)

        # Integers and opaque types alike
        return str(self._random_int())

    def generate_predicate(self, table: Table) -> Predicate:
        """Generate one condition per recognized column; opaque columns are skipped."""
        conditions = []
        for column in table.columns:
            condition = self._generate_condition(column)
            if condition is None:
                logger.debug(f"Skipping column {table.name}.{column.name} of type {column.data_type} in predicate")
                continue
            conditions.append(condition)
        return Predicate(conditions=conditions)

    def _generate_condition(self, column: Column) -> Optional[str]:
        category = column.category

        if category == ColumnCategory.NUMERIC:
            operator = self.rng.choice(COMPARISON_OPERATORS)
            if column.decimal_places is not None:
                value = self._generate_decimal(column.decimal_places)
            else:
                value = str(self._random_int())
            return f"{column.name} {operator} {value}"

        if category == ColumnCategory.TEXT:
            count = self.rng.randint(self.config.min_in_list, self.config.max_in_list)
            names = [self._quoted_name() for _ in range(count)]
            return f"{column.name} IN ({', '.join(names)})"

        if category == ColumnCategory.DATE:
            end_date = self.today()
            offset = self.rng.randint(0, self.config.max_start_offset_days)
            start_date = min(self.config.base_date + timedelta(days=offset), end_date)
            return f"{column.name} BETWEEN {_to_date(start_date)} AND {_to_date(end_date)}"

        return None

    def _random_int(self) -> int:
        return self.rng.randrange(self.config.min_value, self.config.max_value)

    def _generate_decimal(self, decimal_places: int) -> str:
        """Random integer scaled down to exactly ``decimal_places`` fractional digits."""
        value = Decimal(self._random_int()).scaleb(-decimal_places)
        return f"{value:.{decimal_places}f}"

    def _quoted_name(self) -> str:
        if self.faker is not None:
            name = self.faker.first_name()
        else:
            name = self.rng.choice(self.config.name_pool)
        return "'" + name.replace("'", "''") + "'"


def _to_date(value: date) -> str:
    return f"to_date('{value.isoformat()}','{DATE_FORMAT}')"


def render_statement(table: Table, kind: StatementKind,
                     rng: Optional[random.Random] = None) -> str:
    """Render a single statement with default configuration."""
    return StatementGenerator(rng=rng).render(table, kind)
