import sqlite3
from unittest import mock

import pytest

from timelinegen.database import Database, MySQLSettings, RecordNotFound, connect

ENV = {
    "MYSQL_USER": "user",
    "MYSQL_PASSWORD": "password",
    "MYSQL_HOST": "localhost",
    "MYSQL_PORT": "3306",
    "MYSQL_DATABASE": "app",
}


@pytest.fixture
def db():
    database = Database(sqlite3.connect(":memory:"))
    database.execute("CREATE TABLE items (id TEXT PRIMARY KEY, name TEXT)")
    yield database
    database.close()


def test_settings_from_env():
    settings = MySQLSettings.from_env(ENV)
    assert settings.host == "localhost"
    assert settings.database == "app"
    assert settings.password == ENV["MYSQL_PASSWORD"]


def test_settings_missing_values_are_empty():
    assert MySQLSettings.from_env({}) == MySQLSettings()


def test_dsn():
    assert MySQLSettings.from_env(ENV).dsn() == (
        "user:password@tcp(localhost:3306)/app?parseTime=true"
    )


def test_execute_and_fetch(db):
    assert db.execute("INSERT INTO items (id, name) VALUES (?, ?)", ("a", "alpha")) == 1
    assert db.fetch_one("SELECT id, name FROM items WHERE id = ?", ("a",)) == ("a", "alpha")
    assert db.fetch_all("SELECT id FROM items") == [("a",)]


def test_fetch_one_missing_raises(db):
    with pytest.raises(RecordNotFound):
        db.fetch_one("SELECT id FROM items WHERE id = ?", ("missing",))


def test_transaction_commits(db):
    with db.transaction():
        db.execute("INSERT INTO items (id, name) VALUES (?, ?)", ("a", "alpha"))
        db.execute("INSERT INTO items (id, name) VALUES (?, ?)", ("b", "beta"))
    assert sorted(db.fetch_all("SELECT id FROM items")) == [("a",), ("b",)]


def test_transaction_rolls_back_on_error(db):
    with pytest.raises(RuntimeError):
        with db.transaction():
            db.execute("INSERT INTO items (id, name) VALUES (?, ?)", ("a", "alpha"))
            raise RuntimeError("boom")
    assert db.fetch_all("SELECT id FROM items") == []


def test_format_paramstyle_rewrites_placeholders():
    connection = mock.MagicMock()
    cursor = connection.cursor.return_value
    cursor.rowcount = 1
    database = Database(connection, paramstyle="format")
    assert database.execute("SELECT ?", (1,)) == 1
    cursor.execute.assert_called_once_with("SELECT %s", (1,))
    connection.commit.assert_called_once_with()


def test_unknown_paramstyle_rejected():
    with pytest.raises(ValueError):
        Database(mock.MagicMock(), paramstyle="named")


@mock.patch("pymysql.connect")
def test_connect_uses_environment(pymysql_connect):
    database = connect(ENV)
    kwargs = pymysql_connect.call_args.kwargs
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 3306
    assert kwargs["user"] == "user"
    assert kwargs["database"] == "app"
    pymysql_connect.return_value.ping.assert_called_once_with()

    cursor = pymysql_connect.return_value.cursor.return_value
    cursor.rowcount = 3
    assert database.execute("DELETE FROM items") == 3
    cursor.execute.assert_called_once()
    assert cursor.execute.call_args.args[0] == "DELETE FROM items"

    database.close()
    pymysql_connect.return_value.close.assert_called_once_with()