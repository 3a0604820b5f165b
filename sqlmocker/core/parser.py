"""CREATE TABLE parser producing Table/Column models."""

import logging
import re
from typing import Callable, List, Optional, Tuple

from .exceptions import MalformedDDLError
from .models import Column, Table


logger = logging.getLogger(__name__)

_PREFIX_PATTERN = re.compile(r"^create\s+table\b\s*")
_TYPE_PATTERN = re.compile(r"^([a-z][a-z0-9_]*)(?:\((.*)\))?$")
_NUMBER_PATTERN = re.compile(r"\d+")
_TABLE_CONSTRAINT_KEYWORDS = {"constraint", "primary", "foreign", "unique", "check"}


class SchemaParser:
    """Parses a single ``create table`` statement into a :class:`Table`.

    Only the column-level subset is understood: a name, a type with optional
    ``(length[, decimal_places])``, an optional ``primary key`` and an optional
    inline ``references table(column)``.
    """

    def parse(self, ddl: str) -> Table:
        """Parse one CREATE TABLE string.

        Raises:
            MalformedDDLError: if the prefix, the column list or any column's
                name/type pair is missing.
        """
        source = ddl.strip().lower()

        prefix = _PREFIX_PATTERN.match(source)
        if not prefix:
            raise MalformedDDLError("Expected statement to start with 'create table'", ddl)
        remainder = source[prefix.end():]

        body_start = remainder.find("(")
        body_end = remainder.rfind(")")
        if body_start == -1 or body_end < body_start:
            raise MalformedDDLError("Missing parenthesized column list", ddl)

        table_name = remainder[:body_start].strip()
        if not table_name:
            raise MalformedDDLError("Missing table name", ddl)
        if len(table_name.split()) > 1:
            raise MalformedDDLError(f"Unsupported table name '{table_name}'", ddl)

        body = remainder[body_start + 1:body_end]
        columns = [
            self._parse_column(chunk, ddl)
            for chunk in _split_top_level(body, lambda char: char == ",", ddl)
        ]

        table = Table(name=table_name, columns=columns)
        primary_keys = table.get_primary_key_columns()
        if len(primary_keys) > 1:
            logger.warning(f"Table {table_name} declares {len(primary_keys)} primary key columns: "
                           f"{', '.join(primary_keys)}")

        logger.debug(f"Parsed table {table_name} with {len(columns)} columns")
        return table

    def _parse_column(self, chunk: str, ddl: str) -> Column:
        """Parse one comma-separated column definition."""
        tokens = [token for token in _split_top_level(chunk, str.isspace, ddl) if token]
        if len(tokens) < 2:
            raise MalformedDDLError(
                f"Column definition '{chunk.strip()}' needs at least a name and a type", ddl
            )
        if tokens[0] in _TABLE_CONSTRAINT_KEYWORDS:
            raise MalformedDDLError(f"Table-level constraint '{chunk.strip()}' is not supported", ddl)

        # "varchar (255)" arrives as two tokens
        if len(tokens) > 2 and tokens[2].startswith("(") and "(" not in tokens[1]:
            tokens[1:3] = [tokens[1] + tokens[2]]

        name = tokens[0]
        data_type, length, decimal_places = self._parse_type(tokens[1], ddl)
        is_primary_key = _has_primary_key(tokens)
        ref_table, ref_column = self._parse_references(tokens[2:], ddl)

        return Column(
            name=name,
            data_type=data_type,
            length=length,
            decimal_places=decimal_places,
            is_nullable=not is_primary_key,
            is_primary_key=is_primary_key,
            ref_table=ref_table,
            ref_column=ref_column,
        )

    def _parse_type(self, descriptor: str, ddl: str) -> Tuple[str, Optional[int], Optional[int]]:
        """Split ``number(10,2)`` into ``("number", 10, 2)``."""
        match = _TYPE_PATTERN.match(descriptor)
        if not match:
            raise MalformedDDLError(f"Invalid column type '{descriptor}'", ddl)

        data_type, arguments = match.groups()
        numbers = [int(value) for value in _NUMBER_PATTERN.findall(arguments or "")]
        length = numbers[0] if len(numbers) > 0 else None
        decimal_places = numbers[1] if len(numbers) > 1 else None
        return data_type, length, decimal_places

    def _parse_references(self, tokens: List[str], ddl: str) -> Tuple[Optional[str], Optional[str]]:
        """Extract ``references <table>(<column>)`` from the trailing tokens."""
        if "references" not in tokens:
            return None, None

        target = tokens[tokens.index("references") + 1:]
        if not target:
            raise MalformedDDLError("'references' is missing its target table", ddl)

        if "(" in target[0]:
            ref_table, _, ref_column = target[0].partition("(")
        else:
            ref_table = target[0]
            ref_column = target[1] if len(target) > 1 else ""

        ref_column = ref_column.strip("()").strip()
        return ref_table, ref_column or None


def _has_primary_key(tokens: List[str]) -> bool:
    if "primary" not in tokens:
        return False
    return "key" in tokens[tokens.index("primary") + 1:]


def _split_top_level(text: str, is_separator: Callable[[str], bool], ddl: str) -> List[str]:
    """Split on separator characters that sit outside any parentheses."""
    parts = []
    current = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise MalformedDDLError("Unbalanced ')' in column list", ddl)

        if depth == 0 and is_separator(char):
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    if depth != 0:
        raise MalformedDDLError("Unbalanced '(' in column list", ddl)

    parts.append("".join(current).strip())
    return parts


def parse_create_table(ddl: str) -> Table:
    """Parse a CREATE TABLE string into a :class:`Table`."""
    return SchemaParser().parse(ddl)
