"""Print the hosted-database schema fix script for copy-paste into the SQL editor.

Usage examples:

    python scripts/schema_fix.py
    python scripts/schema_fix.py --output schema_fix.sql
    python scripts/schema_fix.py --steps
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from app.services.schema_fix import STEPS, TITLE, get_schema_fix_sql  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--output", type=Path, default=None, help="Write the script to this file instead of stdout")
    parser.add_argument("--steps", action="store_true", help="Also print the steps for running it")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    sql = get_schema_fix_sql()
    if args.output:
        args.output.write_text(sql, encoding="utf-8")
        print(f"Wrote {len(sql.splitlines())} lines to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(sql)
    if args.steps:
        for index, step in enumerate(STEPS, start=1):
            print(f"{index}. {step}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
