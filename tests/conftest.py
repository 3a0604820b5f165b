"""Test configuration and fixtures for SQLMocker tests."""

import random
from datetime import date

import pytest

from sqlmocker.core.generator import StatementGenerator
from sqlmocker.core.models import Column, GenerationConfig, Table


FIXED_TODAY = date(2024, 5, 17)


@pytest.fixture
def fixed_today():
    """The date generators under test treat as today."""
    return FIXED_TODAY


@pytest.fixture
def simple_table():
    """Two-column table with a primary key."""
    return Table(
        name="test_table",
        columns=[
            Column(name="id", data_type="number", length=10, is_nullable=False, is_primary_key=True),
            Column(name="name", data_type="varchar", length=255),
        ]
    )


@pytest.fixture
def orders_table():
    """Orders table with a date and a foreign key column."""
    return Table(
        name="orders",
        columns=[
            Column(name="order_id", data_type="number", length=10, is_nullable=False, is_primary_key=True),
            Column(name="order_date", data_type="date"),
            Column(name="customer_id", data_type="number", length=10,
                   ref_table="customers", ref_column="customer_id"),
        ]
    )


@pytest.fixture
def products_table():
    """Products table with a fixed-point price column."""
    return Table(
        name="products",
        columns=[
            Column(name="product_id", data_type="number", length=10, is_nullable=False, is_primary_key=True),
            Column(name="product_name", data_type="varchar", length=255),
            Column(name="product_price", data_type="number", length=10, decimal_places=2),
        ]
    )


@pytest.fixture
def opaque_table():
    """Table whose only column has a type the generator does not know."""
    return Table(name="blobs", columns=[Column(name="payload", data_type="blob")])


@pytest.fixture
def generator():
    """Seeded generator with a fixed notion of today."""
    return StatementGenerator(GenerationConfig(seed=42), today=lambda: FIXED_TODAY)


@pytest.fixture
def make_generator():
    """Factory for seeded generators sharing the fixed date."""
    def _make(seed=42, **config):
        return StatementGenerator(
            GenerationConfig(seed=seed, **config),
            rng=random.Random(seed),
            today=lambda: FIXED_TODAY,
        )
    return _make
