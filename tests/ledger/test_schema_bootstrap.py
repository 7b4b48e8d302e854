from pathlib import Path

from src.attendance_core.attendance_core.database.bootstrap import schema_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_file_yields_both_ledger_tables():
    statements = schema_statements(SCHEMA.read_text(encoding="utf-8"))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS ledger_partitions")
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS ledger_rows")
    assert not any("--" in s for s in statements)


def test_comment_lines_and_blank_statements_are_dropped():
    sql = "-- header\nCREATE TABLE a (x INT);\n\n;\n-- trailer\n"

    assert schema_statements(sql) == ["CREATE TABLE a (x INT)"]
