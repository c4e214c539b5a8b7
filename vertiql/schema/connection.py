"""Connection parameters and the transport spec built from them.

:func:`build_spec` turns loosely-typed connection details (as a form or a
config file supplies them) into a :class:`ConnectionSpec`: the driver
identifier, a JDBC-style ``subname`` and every caller field the builder does
not interpret itself.  :meth:`ConnectionSpec.to_url` bridges the spec to a
SQLAlchemy :class:`~sqlalchemy.engine.URL`.

Example::

    from vertiql.schema.connection import build_spec

    spec = build_spec({"dbname": "sales", "user": "dbadmin"})
    spec.subname      # '//localhost:5433/sales'
    engine = create_engine(spec.to_url())
"""
from __future__ import annotations

import ipaddress
import os
from collections.abc import Mapping
from typing import Any, Literal
from urllib.parse import parse_qsl

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from sqlalchemy.engine import URL

from vertiql.errors import ConnectionSpecError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5433
DRIVER_CLASSNAME = "com.vertica.jdbc.Driver"
SUBPROTOCOL = "vertica"
SQLALCHEMY_DRIVERNAME = "vertica+vertica_python"

# Fields consumed by build_spec itself; everything else passes through.
_INTERPRETED_FIELDS: frozenset[str] = frozenset({"host", "port", "dbname", "db", "ssl"})


class ConnectionParams(BaseModel):
    """Connection details as supplied by the caller.

    Unknown fields are kept (``extra="allow"``) and carried through to the
    resulting :class:`ConnectionSpec`.

    Attributes:
        host: Server host name; blank or missing means ``"localhost"``.
        port: Server port, ``5433`` by default.
        dbname: Database name, also accepted as ``database-name``.  Preferred
            over ``db`` when both are set.
        db: Legacy database name field.
        user: Login user.
        password: Login password.
        ssl: TLS flag; accepted in any form and dropped from the spec.
        additional_options: Extra driver options, e.g.
            ``"ConnectionLoadBalance=1"``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    dbname: str | None = Field(
        default=None,
        validation_alias=AliasChoices("dbname", "database-name", "database_name"),
    )
    db: str | None = None
    user: Any = None
    password: Any = None
    ssl: Any = False
    additional_options: str | None = Field(
        default=None,
        validation_alias=AliasChoices("additional_options", "additional-options"),
    )

    @field_validator("host", mode="before")
    @classmethod
    def _coerce_host(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_HOST
        if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
            value = str(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError(f"host must be a string, got {type(value).__name__}")
        return value.strip() or DEFAULT_HOST

    @field_validator("dbname", "db", "additional_options", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str | None:
        return _optional_str(value)

    @field_validator("port", mode="before")
    @classmethod
    def _default_port(cls, value: Any) -> Any:
        if value is None or value == "":
            return DEFAULT_PORT
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConnectionParams":
        """Build params from ``VERTICA_*`` environment variables.

        Reads ``VERTICA_HOST``, ``VERTICA_PORT``, ``VERTICA_DB``,
        ``VERTICA_USER``, ``VERTICA_PASSWORD`` and
        ``VERTICA_ADDITIONAL_OPTIONS``; unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        mapping = {
            "host": "VERTICA_HOST",
            "port": "VERTICA_PORT",
            "dbname": "VERTICA_DB",
            "user": "VERTICA_USER",
            "password": "VERTICA_PASSWORD",
            "additional_options": "VERTICA_ADDITIONAL_OPTIONS",
        }
        values = {field: env[var] for field, var in mapping.items() if var in env}
        return cls.model_validate(values)


class ConnectionSpec(BaseModel):
    """Normalized parameter bag consumed by the transport.

    Caller fields that :func:`build_spec` does not interpret (``user``,
    ``password``, ``additional_options``, anything custom) are stored as
    extra fields and available through :attr:`passthrough`.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    classname: str = DRIVER_CLASSNAME
    subprotocol: str = SUBPROTOCOL
    subname: str
    host: str
    port: int
    database: str

    @property
    def passthrough(self) -> dict[str, Any]:
        """Caller-supplied fields carried through unchanged."""
        return dict(self.model_extra or {})

    def to_url(self, drivername: str = SQLALCHEMY_DRIVERNAME) -> URL:
        """Return a SQLAlchemy URL for this spec.

        ``additional_options`` (``"a=1&b=2"`` or ``"a=1;b=2"``) become URL
        query parameters.
        """
        extra = self.passthrough
        options = extra.get("additional_options") or ""
        query = dict(parse_qsl(options.replace(";", "&")))
        return URL.create(
            drivername,
            username=_optional_str(extra.get("user")),
            password=_optional_str(extra.get("password")),
            host=self.host,
            port=self.port,
            database=self.database or None,
            query=query,
        )


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


FieldType = Literal["string", "integer", "password"]


class ConnectionField(BaseModel):
    """Declarative descriptor for one connection form field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    display_name: str
    type: FieldType = "string"
    default: Any = None
    placeholder: str | None = None
    required: bool = False


#: Ordered connection-field descriptors shown to users configuring Vertica.
DETAILS_FIELDS: tuple[ConnectionField, ...] = (
    ConnectionField(name="host", display_name="Host", placeholder=DEFAULT_HOST),
    ConnectionField(
        name="port", display_name="Port", type="integer", default=DEFAULT_PORT
    ),
    ConnectionField(
        name="dbname", display_name="Database name", placeholder="birds_of_the_world",
        required=True,
    ),
    ConnectionField(name="user", display_name="Database username", required=True),
    ConnectionField(name="password", display_name="Database password", type="password"),
    ConnectionField(
        name="additional_options",
        display_name="Additional JDBC connection string options",
        placeholder="ConnectionLoadBalance=1",
    ),
)


def build_spec(params: ConnectionParams | Mapping[str, Any]) -> ConnectionSpec:
    """Build the transport :class:`ConnectionSpec` from connection params.

    Args:
        params: A :class:`ConnectionParams` or a plain mapping of fields.

    Returns:
        The normalized spec.  Missing optional fields never raise.

    Raises:
        ConnectionSpecError: If ``host`` cannot be coerced to a string or
            ``port`` is not an integer.  Other fields are coerced or passed
            through and never raise.
    """
    if not isinstance(params, ConnectionParams):
        try:
            params = ConnectionParams.model_validate(dict(params))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = str(first["loc"][0]) if first["loc"] else None
            raise ConnectionSpecError(
                f"Invalid connection parameter {field!r}: {first['msg']}", field=field
            ) from exc

    database = params.dbname if params.dbname is not None else (params.db or "")
    supplied = params.model_dump(exclude_unset=True)
    passthrough = {k: v for k, v in supplied.items() if k not in _INTERPRETED_FIELDS}

    built = {
        "subname": f"//{params.host}:{params.port}/{database}",
        "host": params.host,
        "port": params.port,
        "database": database,
    }
    spec_fields = {**passthrough, **built}
    return ConnectionSpec(**_with_additional_options(spec_fields))


def _with_additional_options(fields: dict[str, Any]) -> dict[str, Any]:
    """Append non-blank ``additional_options`` to the subname (``?opts``)."""
    options = (fields.get("additional_options") or "").strip()
    if not options:
        return fields
    return {**fields, "subname": f"{fields['subname']}?{options}"}
