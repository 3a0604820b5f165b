"""
JaySoft-SQLMocker - Randomized SQL statement generation from CREATE TABLE schemas.

This package provides tools to:
- Parse a CREATE TABLE statement into a table/column model
- Render CREATE, ALTER, DROP, INSERT, SELECT, UPDATE and DELETE statements
  with random literals and predicates
- Append generated statements to a file as synthetic log/test data
"""

__version__ = "1.0.0"
__author__ = "JaySoft Development"
__email__ = "info@jaysoft.dev"

from sqlmocker.core.exceptions import MalformedDDLError, SQLMockerError
from sqlmocker.core.models import Column, Table, StatementKind, GenerationConfig
from sqlmocker.core.parser import SchemaParser, parse_create_table
from sqlmocker.core.generator import StatementGenerator, render_statement
from sqlmocker.core.writer import StatementWriter

__all__ = [
    "Column",
    "Table",
    "StatementKind",
    "GenerationConfig",
    "SchemaParser",
    "StatementGenerator",
    "StatementWriter",
    "MalformedDDLError",
    "SQLMockerError",
    "parse_create_table",
    "render_statement",
]
