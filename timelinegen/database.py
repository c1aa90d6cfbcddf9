"""MySQL connection settings and a small database wrapper."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Sequence

import pymysql

logger = logging.getLogger(__name__)

DEFAULT_MYSQL_PORT = 3306


class RecordNotFound(LookupError):
    """A query that should return one row returned none."""


@dataclass(frozen=True)
class MySQLSettings:
    """Connection settings for the MySQL server."""

    user: str = ""
    password: str = ""
    host: str = ""
    port: str = ""
    database: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MySQLSettings":
        env = os.environ if environ is None else environ
        return cls(
            user=env.get("MYSQL_USER", ""),
            password=env.get("MYSQL_PASSWORD", ""),
            host=env.get("MYSQL_HOST", ""),
            port=env.get("MYSQL_PORT", ""),
            database=env.get("MYSQL_DATABASE", ""),
        )

    def dsn(self) -> str:
        return (
            f"{self.user}:{self.password}@tcp({self.host}:{self.port})/"
            f"{self.database}?parseTime=true"
        )


class Database:
    """A DB-API connection with '?' placeholders and explicit transactions.

    Outside a transaction every statement is committed as it runs.
    """

    def __init__(self, connection: Any, *, paramstyle: str = "qmark") -> None:
        if paramstyle not in ("qmark", "format"):
            raise ValueError(f"unsupported paramstyle: {paramstyle}")
        self._connection = connection
        self._paramstyle = paramstyle
        self._in_transaction = False

    def _sql(self, query: str) -> str:
        if self._paramstyle == "format":
            return query.replace("%", "%%").replace("?", "%s")
        return query

    def _run(self, query: str, params: Sequence[Any], fetch: Optional[str]) -> Any:
        cursor = self._connection.cursor()
        try:
            cursor.execute(self._sql(query), tuple(params))
            if fetch == "one":
                result = cursor.fetchone()
            elif fetch == "all":
                result = cursor.fetchall()
            else:
                result = cursor.rowcount
        except BaseException:
            if not self._in_transaction:
                self._connection.rollback()
            raise
        finally:
            cursor.close()
        if not self._in_transaction:
            self._connection.commit()
        return result

    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a statement and return the number of affected rows."""
        return self._run(query, params, None)

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> tuple:
        """Return the first row of a query, raising RecordNotFound if empty."""
        row = self._run(query, params, "one")
        if row is None:
            raise RecordNotFound("no rows in result set")
        return tuple(row)

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> list[tuple]:
        """Return every row of a query."""
        return [tuple(row) for row in self._run(query, params, "all")]

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """Commit the enclosed statements together, or roll all back on error."""
        if self._in_transaction:
            yield self
            return
        self._in_transaction = True
        try:
            yield self
        except BaseException:
            self._connection.rollback()
            raise
        else:
            self._connection.commit()
        finally:
            self._in_transaction = False

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def connect(environ: Optional[Mapping[str, str]] = None) -> Database:
    """Open and check a MySQL connection configured from the environment."""
    settings = MySQLSettings.from_env(environ)
    port = int(settings.port) if settings.port else DEFAULT_MYSQL_PORT
    try:
        connection = pymysql.connect(
            host=settings.host,
            port=port,
            user=settings.user,
            password=settings.password,
            database=settings.database,
        )
    except pymysql.MySQLError as exc:
        raise ConnectionError(f"Failed to connect to database: {exc}") from exc
    try:
        connection.ping()
    except pymysql.MySQLError as exc:
        connection.close()
        raise ConnectionError(f"Failed to ping database: {exc}") from exc
    logger.info("Connected to database successfully")
    return Database(connection, paramstyle="format")