"""Tests for CREATE TABLE parsing."""

import logging

import pytest

from sqlmocker.core.exceptions import MalformedDDLError, SQLMockerError
from sqlmocker.core.models import ColumnCategory
from sqlmocker.core.parser import SchemaParser, parse_create_table


class TestSchemaParser:
    """Test SchemaParser on well-formed input."""

    def test_parse_simple_table(self):
        """Test the basic two-column table."""
        table = parse_create_table("create table t (id number(10) primary key, name varchar(255))")

        assert table.name == "t"
        assert len(table.columns) == 2

        id_column, name_column = table.columns
        assert id_column.name == "id"
        assert id_column.data_type == "number"
        assert id_column.length == 10
        assert id_column.decimal_places is None
        assert id_column.is_nullable is False
        assert id_column.is_primary_key is True

        assert name_column.name == "name"
        assert name_column.data_type == "varchar"
        assert name_column.length == 255
        assert name_column.is_nullable is True
        assert name_column.is_primary_key is False

    def test_decimal_precision_is_one_column(self):
        """Test number(10, 2) is not split into two columns."""
        table = parse_create_table(
            "create table products(product_id number(10) primary key, "
            "product_name varchar(255), product_price number(10, 2))"
        )

        assert table.column_names == ["product_id", "product_name", "product_price"]
        price = table.get_column("product_price")
        assert price.length == 10
        assert price.decimal_places == 2

    @pytest.mark.parametrize("descriptor", ["number(8,3)", "number(8, 3)", "number(8 , 3)", "number(8.3)"])
    def test_decimal_spellings(self, descriptor):
        """Test the precision separator variants."""
        table = parse_create_table(f"create table t (amount {descriptor}, note text)")

        assert len(table.columns) == 2
        assert table.columns[0].length == 8
        assert table.columns[0].decimal_places == 3

    def test_no_space_before_column_list(self):
        """Test table name directly followed by the parenthesis."""
        table = parse_create_table(
            "create table orders(order_id number(10) primary key, order_date date, customer_id number(10))"
        )

        assert table.name == "orders"
        assert table.column_names == ["order_id", "order_date", "customer_id"]
        assert table.get_column("order_date").length is None

    def test_case_and_whitespace_normalized(self):
        """Test input is lowercased and trimmed."""
        table = parse_create_table("  CREATE   TABLE Customers (\n  Customer_ID NUMBER(10) PRIMARY KEY,\n"
                                   "  Customer_Name VARCHAR(255)\n);  ")

        assert table.name == "customers"
        assert table.column_names == ["customer_id", "customer_name"]
        assert table.columns[0].is_primary_key is True
        assert table.columns[1].data_type == "varchar"

    def test_trailing_clauses_dropped(self):
        """Test text after the last parenthesis is ignored."""
        table = parse_create_table("create table t (id int) tablespace users;")

        assert table.column_names == ["id"]

    def test_type_without_length(self):
        """Test types without arguments."""
        table = parse_create_table("create table t (body text, created datetime)")

        assert table.columns[0].length is None
        assert table.columns[1].data_type == "datetime"
        assert table.columns[1].category == ColumnCategory.DATE

    def test_space_before_type_arguments(self):
        """Test 'varchar (255)' is read as one type descriptor."""
        table = parse_create_table("create table t (name varchar (255) primary key)")

        column = table.columns[0]
        assert column.data_type == "varchar"
        assert column.length == 255
        assert column.is_primary_key is True

    def test_unrecognized_type_kept(self):
        """Test unknown types are stored verbatim."""
        table = parse_create_table("create table t (payload blob, code varchar2(20))")

        assert table.columns[0].data_type == "blob"
        assert table.columns[0].category == ColumnCategory.OTHER
        assert table.columns[1].data_type == "varchar2"
        assert table.columns[1].length == 20

    def test_primary_key_requires_both_words(self):
        """Test 'primary' alone does not mark a key."""
        table = parse_create_table("create table t (a int primary, b int key primary)")

        assert table.columns[0].is_primary_key is False
        assert table.columns[1].is_primary_key is False
        assert table.columns[1].is_nullable is True

    def test_references_with_attached_column(self):
        """Test references customers(customer_id)."""
        table = parse_create_table(
            "create table orders (order_id int primary key, "
            "customer_id number(10) references customers(customer_id))"
        )

        column = table.get_column("customer_id")
        assert column.ref_table == "customers"
        assert column.ref_column == "customer_id"
        assert table.get_column("order_id").ref_table is None

    def test_references_with_separate_column(self):
        """Test references customers (customer_id)."""
        table = parse_create_table("create table orders (customer_id int references customers (id))")

        column = table.columns[0]
        assert column.ref_table == "customers"
        assert column.ref_column == "id"

    def test_references_without_column(self):
        """Test a bare table reference."""
        table = parse_create_table("create table orders (customer_id int references customers)")

        assert table.columns[0].ref_table == "customers"
        assert table.columns[0].ref_column is None

    def test_duplicate_primary_keys_accepted(self, caplog):
        """Test two primary key columns are kept and logged."""
        with caplog.at_level(logging.WARNING, logger="sqlmocker.core.parser"):
            table = parse_create_table("create table t (a int primary key, b int primary key)")

        assert table.get_primary_key_columns() == ["a", "b"]
        assert "2 primary key columns" in caplog.text

    def test_parser_instance_reusable(self):
        """Test one parser instance handles several statements."""
        parser = SchemaParser()

        first = parser.parse("create table a (x int)")
        second = parser.parse("create table b (y int, z int)")

        assert (first.name, len(first.columns)) == ("a", 1)
        assert (second.name, len(second.columns)) == ("b", 2)


class TestMalformedDDL:
    """Test SchemaParser rejects malformed input."""

    @pytest.mark.parametrize("ddl", [
        "",
        "select * from t",
        "table t (id int)",
        "create tablet (id int)",
        "create view t (id int)",
    ])
    def test_missing_prefix(self, ddl):
        """Test input not starting with create table."""
        with pytest.raises(MalformedDDLError, match="create table"):
            parse_create_table(ddl)

    @pytest.mark.parametrize("ddl", [
        "create table t",
        "create table t id int",
        "create table t ) id int (",
    ])
    def test_missing_column_list(self, ddl):
        """Test input without a parenthesized column list."""
        with pytest.raises(MalformedDDLError, match="column list"):
            parse_create_table(ddl)

    def test_missing_table_name(self):
        """Test empty table name."""
        with pytest.raises(MalformedDDLError, match="Missing table name"):
            parse_create_table("create table (id int)")

    def test_table_name_with_spaces(self):
        """Test multi-word table names are rejected."""
        with pytest.raises(MalformedDDLError, match="Unsupported table name"):
            parse_create_table("create table if not exists t (id int)")

    @pytest.mark.parametrize("ddl", [
        "create table t (id)",
        "create table t ()",
        "create table t (id int, )",
        "create table t (id int,, name text)",
    ])
    def test_column_without_type(self, ddl):
        """Test column chunks lacking a name/type pair."""
        with pytest.raises(MalformedDDLError, match="needs at least a name and a type"):
            parse_create_table(ddl)

    def test_unbalanced_parentheses(self):
        """Test unclosed type arguments."""
        with pytest.raises(MalformedDDLError, match="Unbalanced"):
            parse_create_table("create table t (a number(10, b int)")

    def test_invalid_type(self):
        """Test type descriptors not starting with a letter."""
        with pytest.raises(MalformedDDLError, match="Invalid column type"):
            parse_create_table("create table t (a 10)")

    def test_table_level_constraint(self):
        """Test table-level constraints are rejected rather than read as columns."""
        with pytest.raises(MalformedDDLError, match="Table-level constraint"):
            parse_create_table("create table t (id int, primary key (id))")

    def test_dangling_references(self):
        """Test references without a target."""
        with pytest.raises(MalformedDDLError, match="missing its target"):
            parse_create_table("create table t (id int references)")

    def test_error_hierarchy(self):
        """Test parse errors are catchable as ValueError and SQLMockerError."""
        with pytest.raises(ValueError):
            parse_create_table("nonsense")
        with pytest.raises(SQLMockerError):
            parse_create_table("nonsense")

    def test_error_includes_source(self):
        """Test the offending DDL is carried on the error."""
        with pytest.raises(MalformedDDLError) as exc_info:
            parse_create_table("create table t (id)")

        assert exc_info.value.ddl == "create table t (id)"
        assert "create table t (id)" in str(exc_info.value)
