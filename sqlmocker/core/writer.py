"""Appends randomly chosen statements for a set of tables to an output file."""

import logging
import random
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from .generator import StatementGenerator
from .models import GenerationStats, RunConfig, StatementKind, Table
from .parser import parse_create_table


logger = logging.getLogger(__name__)

DEFAULT_TABLES = [
    "create table orders(order_id number(10) primary key, order_date date, customer_id number(10))",
    "create table customers(customer_id number(10) primary key, customer_name varchar(255), "
    "customer_email varchar(255))",
    "create table products(product_id number(10) primary key, product_name varchar(255), "
    "product_price number(10, 2))",
]


def load_tables(ddl_statements: Sequence[str]) -> List[Table]:
    """Parse every DDL string; the built-in tables are used when none are given."""
    statements = list(ddl_statements) or DEFAULT_TABLES
    tables = [parse_create_table(ddl) for ddl in statements]
    logger.info(f"Loaded {len(tables)} tables: {', '.join(table.name for table in tables)}")
    return tables


def split_ddl_script(script: str) -> List[str]:
    """Split a script holding several CREATE TABLE statements on ';'."""
    return [statement.strip() for statement in script.split(";") if statement.strip()]


class StatementWriter:
    """Writes one generated statement per line, appending to the output file."""

    def __init__(self, tables: List[Table], generator: Optional[StatementGenerator] = None,
                 statement_weights: Optional[Dict[StatementKind, float]] = None):
        if not tables:
            raise ValueError("At least one table is required")

        self.tables = tables
        self.generator = generator or StatementGenerator()
        self.rng = self.generator.rng

        weights = statement_weights or {}
        if weights:
            self.kinds = [kind for kind in StatementKind if weights.get(kind, 0) > 0]
            self.weights = [weights[kind] for kind in self.kinds]
        else:
            self.kinds = list(StatementKind)
            self.weights = None
        if not self.kinds:
            raise ValueError("No statement kind has a positive weight")

    @classmethod
    def from_config(cls, config: RunConfig, rng: Optional[random.Random] = None) -> "StatementWriter":
        """Build tables and generator from a run configuration."""
        tables = load_tables(config.tables)
        generator = StatementGenerator(config.generation, rng=rng)
        return cls(tables, generator, config.statement_weights)

    def next_statement(self) -> Tuple[Table, StatementKind, str]:
        """Pick a table and a kind, and render one statement."""
        table = self.rng.choice(self.tables)
        if self.weights is None:
            kind = self.rng.choice(self.kinds)
        else:
            kind = self.rng.choices(self.kinds, weights=self.weights, k=1)[0]
        return table, kind, self.generator.render(table, kind)

    def write(self, output_path: Union[str, Path], count: int,
              show_progress: bool = True) -> GenerationStats:
        """Append ``count`` statements to ``output_path``."""
        output_path = Path(output_path)
        logger.info(f"Writing {count} statements to {output_path}")
        start_time = time.time()
        stats = GenerationStats()

        with open(output_path, "a", encoding="utf-8") as f:
            with tqdm(total=count, desc="Generating statements", disable=not show_progress) as pbar:
                for _ in range(count):
                    table, kind, sql = self.next_statement()
                    f.write(sql + "\n")
                    stats.record(table.name, kind)
                    pbar.update(1)

        stats.total_time_seconds = time.time() - start_time
        logger.info(f"Wrote {stats.statements_written} statements to {output_path} "
                    f"in {stats.total_time_seconds:.2f} seconds")
        return stats
