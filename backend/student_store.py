"""
JSON-file-backed student store.

The whole collection lives in one human-readable JSON array and is rewritten
in full on every mutation. Reads are fail-open: a missing, unreadable, or
malformed file is treated as an empty collection. Writes go to a temp file in
the same directory and are swapped in with os.replace, so a crash mid-write
never truncates the previous state.

All load-modify-save cycles must go through transaction(), which serializes
them behind a per-store lock. This only protects writers inside one process.
"""

import json
import os
import sys
import tempfile
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field

from errors import StorageWriteError


@dataclass
class StudentBatch:
    """Working copy handed out by StudentStore.transaction()."""
    students: list = field(default_factory=list)
    changed: bool = False


class StudentStore:
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()

    def load(self) -> list[dict]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            print(f"[WARN] Could not read students from {self.path}; treating as empty: {exc}", file=sys.stderr)
            return []

        if not isinstance(data, list):
            print(f"[WARN] {self.path} does not hold a JSON array; treating as empty.", file=sys.stderr)
            return []
        return [s for s in data if isinstance(s, dict)]

    def save(self, students: list[dict]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".students-", suffix=".json.tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(students, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as exc:
            raise StorageWriteError(f"Failed to write students to {self.path}: {exc}") from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def snapshot(self) -> list[dict]:
        """Consistent read that never observes a half-applied transaction."""
        with self._lock:
            return self.load()

    @contextmanager
    def transaction(self):
        """
        Serialized load-modify-save.

            with store.transaction() as batch:
                student, outcome = register(batch.students, name, email)
                batch.changed = outcome in MUTATING_OUTCOMES

        The collection is saved on a clean exit only when batch.changed is set.
        An exception inside the block discards the working copy.
        """
        with self._lock:
            batch = StudentBatch(students=self.load())
            yield batch
            if batch.changed:
                self.save(batch.students)
