"""Shared pytest fixtures for vertiql unit and integration tests."""
from __future__ import annotations

import pytest
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from vertiql.compile.registry import AdapterRegistry
from vertiql.compile.temporal import TemporalCompiler
from vertiql.compile.vertica import VerticaAdapter
from tests.fixtures import make_engine


@pytest.fixture(scope="session")
def compiler() -> TemporalCompiler:
    return TemporalCompiler()


@pytest.fixture(scope="session")
def adapter() -> VerticaAdapter:
    return VerticaAdapter()


@pytest.fixture(scope="session")
def orders() -> Table:
    """Orders table used to build column expressions."""
    return Table(
        "orders",
        MetaData(),
        Column("order_id", Integer, primary_key=True),
        Column("customer", String(80)),
        Column("created_at", DateTime),
    )


@pytest.fixture
def engine() -> Engine:
    """In-memory SQLite engine without a view catalog."""
    return make_engine()


@pytest.fixture
def clean_registry():
    """Snapshot and restore the process-wide adapter registry."""
    factories = dict(AdapterRegistry._factories)
    instances = dict(AdapterRegistry._instances)
    yield AdapterRegistry
    AdapterRegistry._factories.clear()
    AdapterRegistry._factories.update(factories)
    AdapterRegistry._instances.clear()
    AdapterRegistry._instances.update(instances)
