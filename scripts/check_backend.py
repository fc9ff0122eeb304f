"""
Smoke check: verifies the backend's dependencies import and its data files load,
without starting the server.

Usage:
    python scripts/check_backend.py
    python scripts/check_backend.py --catalog data/courses.csv --students data/students.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = REPO_ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))

DEFAULT_CATALOG = REPO_ROOT / "data" / "courses.csv"
DEFAULT_STUDENTS = REPO_ROOT / "data" / "students.json"

HINTS = (
    "1. Make sure you ran: pip install -e .",
    "2. Check that data/courses.csv exists and has major,id,name columns",
    "3. Check CATALOG_PATH / STUDENTS_PATH in your .env",
)


def check_backend(catalog_path: Path, students_path: Path) -> dict:
    """Run every check in order; raises on the first failure."""
    from importlib.metadata import version
    import flask  # noqa: F401
    import flask_cors  # noqa: F401

    from data_loader import load_catalog
    from student_store import StudentStore

    print("[check] Flask and flask-cors loaded")
    catalog = load_catalog(str(catalog_path))
    print(f"[check] Catalog loaded: {len(catalog['majors'])} majors, {catalog['course_count']} courses")
    students = StudentStore(str(students_path)).load()
    print(f"[check] Student store readable: {len(students)} student(s) in {students_path}")
    return {
        "flask_version": version("flask"),
        "majors": len(catalog["majors"]),
        "courses": catalog["course_count"],
        "students": len(students),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check that the backend can start.")
    parser.add_argument("--catalog", type=Path, default=DEFAULT_CATALOG)
    parser.add_argument("--students", type=Path, default=DEFAULT_STUDENTS)
    args = parser.parse_args(argv)

    try:
        check_backend(args.catalog, args.students)
    except Exception as exc:
        print(f"[check] FAILED: {exc}", file=sys.stderr)
        print("\nPossible solutions:", file=sys.stderr)
        for hint in HINTS:
            print(hint, file=sys.stderr)
        return 1

    print("\n[check] All checks passed. Start the backend with: python scripts/run_local.py")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
