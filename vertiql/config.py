"""Adapter configuration.

Defaults suit a stock Vertica install; override fields directly or read
them from the environment::

    from vertiql.config import AdapterConfig

    config = AdapterConfig(fetch_views=False)
    config = AdapterConfig.from_env()   # VERTIQL_* variables
"""
from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

#: Vertica system schemas; never part of a user-facing catalog.
SYSTEM_SCHEMAS: frozenset[str] = frozenset(
    {"v_catalog", "v_monitor", "v_internal", "v_func", "v_txtindex", "v_secret"}
)

VIEWS_QUERY = 'SELECT TABLE_SCHEMA AS "schema", TABLE_NAME AS "name" FROM V_CATALOG.VIEWS'

_FALSE_VALUES = {"0", "false", "no", "off"}


class AdapterConfig(BaseModel):
    """Settings shared by the Vertica adapter and its catalog merger.

    Attributes:
        identity: Registry key the adapter is registered under.
        fetch_views: Also list views from ``V_CATALOG.VIEWS`` when describing
            a database.
        views_query: SQL used for the view fetch; must return ``schema`` and
            ``name`` columns.
        excluded_schemas: System schemas skipped by base introspection.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    identity: str = "vertica"
    fetch_views: bool = True
    views_query: str = VIEWS_QUERY
    excluded_schemas: frozenset[str] = Field(default_factory=lambda: SYSTEM_SCHEMAS)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AdapterConfig":
        """Build a config from ``VERTIQL_IDENTITY``, ``VERTIQL_FETCH_VIEWS``
        and ``VERTIQL_EXCLUDED_SCHEMAS`` (comma-separated)."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if "VERTIQL_IDENTITY" in env:
            values["identity"] = env["VERTIQL_IDENTITY"]
        if "VERTIQL_FETCH_VIEWS" in env:
            values["fetch_views"] = env["VERTIQL_FETCH_VIEWS"].strip().lower() not in _FALSE_VALUES
        if "VERTIQL_EXCLUDED_SCHEMAS" in env:
            values["excluded_schemas"] = frozenset(
                s.strip() for s in env["VERTIQL_EXCLUDED_SCHEMAS"].split(",") if s.strip()
            )
        return cls.model_validate(values)
