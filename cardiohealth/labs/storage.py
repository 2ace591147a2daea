# -*- coding: utf-8 -*-
"""Lab results — SQLite storage.

Every query is scoped by `user_id`; a row owned by someone else is
indistinguishable from a missing row.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..app_db import db_conn
from ..rows import LAB_RESULT_COLUMNS, lab_result_from_row, lab_result_to_row
from .models import LabResult, LabResultType

_UPDATABLE_COLUMNS = [c for c in LAB_RESULT_COLUMNS if c not in ("id", "user_id", "created_at")]


class LabResultStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def insert(self, result: LabResult) -> None:
        row = lab_result_to_row(result)
        columns = ", ".join(LAB_RESULT_COLUMNS)
        placeholders = ", ".join("?" for _ in LAB_RESULT_COLUMNS)
        with db_conn(self.db_path) as conn:
            conn.execute(
                f"INSERT INTO lab_results ({columns}) VALUES ({placeholders})",
                [row[c] for c in LAB_RESULT_COLUMNS],
            )

    def get(self, user_id: str, result_id: str) -> Optional[LabResult]:
        with db_conn(self.db_path) as conn:
            row = conn.execute(
                "SELECT * FROM lab_results WHERE id = ? AND user_id = ?",
                (result_id, user_id),
            ).fetchone()
        return lab_result_from_row(row) if row else None

    def list_by_user(self, user_id: str, *, lab_type: LabResultType | None = None) -> List[LabResult]:
        sql = "SELECT * FROM lab_results WHERE user_id = ?"
        params: list = [user_id]
        if lab_type is not None:
            sql += " AND type = ?"
            params.append(lab_type.value)
        sql += " ORDER BY rowid ASC"
        with db_conn(self.db_path) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [lab_result_from_row(r) for r in rows]

    def update(self, result: LabResult) -> bool:
        row = lab_result_to_row(result)
        assignments = ", ".join(f"{c} = ?" for c in _UPDATABLE_COLUMNS)
        with db_conn(self.db_path) as conn:
            cur = conn.execute(
                f"UPDATE lab_results SET {assignments} WHERE id = ? AND user_id = ?",
                [row[c] for c in _UPDATABLE_COLUMNS] + [result.id, result.user_id],
            )
            return cur.rowcount > 0

    def delete(self, user_id: str, result_id: str) -> bool:
        with db_conn(self.db_path) as conn:
            cur = conn.execute(
                "DELETE FROM lab_results WHERE id = ? AND user_id = ?",
                (result_id, user_id),
            )
            return cur.rowcount > 0
