from __future__ import annotations

import importlib.util
from pathlib import Path

from app.services.schema_fix import STEPS, get_schema_fix_sql

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "schema_fix.py"


def _load_script():
    module_spec = importlib.util.spec_from_file_location("schema_fix_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_script_recreates_both_tables_with_row_level_security() -> None:
    sql = get_schema_fix_sql()

    assert sql.index("DROP TABLE IF EXISTS activities;") < sql.index("CREATE TABLE profiles")
    assert "activity_type TEXT NOT NULL" in sql
    assert sql.count("ENABLE ROW LEVEL SECURITY") == 2
    for action in ("view", "insert", "update", "delete"):
        assert f'"Users can {action} their own activities"' in sql


def test_cli_prints_script(capsys) -> None:
    assert _load_script().main([]) == 0

    assert capsys.readouterr().out == get_schema_fix_sql()


def test_cli_writes_file_and_steps(tmp_path, capsys) -> None:
    target = tmp_path / "fix.sql"

    assert _load_script().main(["--output", str(target), "--steps"]) == 0

    assert target.read_text(encoding="utf-8") == get_schema_fix_sql()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"1. {STEPS[0]}" in captured.err
    assert f"{len(STEPS)}. {STEPS[-1]}" in captured.err
