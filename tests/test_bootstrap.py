from __future__ import annotations

from src.bundy_kiosk.bundy_kiosk.database.bootstrap import (
    SCHEMA_PATH,
    _iter_sql_statements,
    _strip_create_db_and_use,
)


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";\n"
    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"']


def test_strip_create_database_and_use():
    sql = "CREATE DATABASE foo;\nUSE foo;\nCREATE TABLE t (id INT);"
    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_schema_statements():
    statements = list(_iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    assert len(statements) == 6
    assert any("UNIQUE KEY uq_attendance_events_employee_sequence (employee_id, seq_no)" in s for s in statements)
    triggers = [s for s in statements if s.startswith("CREATE TRIGGER")]
    assert len(triggers) == 2
    assert all("append-only" in s for s in triggers)
