# -*- coding: utf-8 -*-
"""Symptoms — SQLite storage, scoped by owner like the lab store."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..app_db import db_conn
from ..rows import SYMPTOM_COLUMNS, symptom_from_row, symptom_to_row
from .models import Symptom

_UPDATABLE_COLUMNS = [c for c in SYMPTOM_COLUMNS if c not in ("id", "user_id", "created_at")]


class SymptomStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def insert(self, symptom: Symptom) -> None:
        row = symptom_to_row(symptom)
        with db_conn(self.db_path) as conn:
            conn.execute(
                f"INSERT INTO symptoms ({', '.join(SYMPTOM_COLUMNS)}) VALUES ({', '.join('?' for _ in SYMPTOM_COLUMNS)})",
                [row[c] for c in SYMPTOM_COLUMNS],
            )

    def get(self, user_id: str, symptom_id: str) -> Optional[Symptom]:
        with db_conn(self.db_path) as conn:
            row = conn.execute(
                "SELECT * FROM symptoms WHERE id = ? AND user_id = ?",
                (symptom_id, user_id),
            ).fetchone()
        return symptom_from_row(row) if row else None

    def list_by_user(self, user_id: str, *, symptom_type: Optional[str] = None) -> List[Symptom]:
        sql = "SELECT * FROM symptoms WHERE user_id = ?"
        params: list = [user_id]
        if symptom_type is not None:
            sql += " AND type = ?"
            params.append(symptom_type)
        sql += " ORDER BY rowid ASC"
        with db_conn(self.db_path) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [symptom_from_row(r) for r in rows]

    def update(self, symptom: Symptom) -> bool:
        row = symptom_to_row(symptom)
        with db_conn(self.db_path) as conn:
            cur = conn.execute(
                f"UPDATE symptoms SET {', '.join(f'{c} = ?' for c in _UPDATABLE_COLUMNS)} WHERE id = ? AND user_id = ?",
                [row[c] for c in _UPDATABLE_COLUMNS] + [symptom.id, symptom.user_id],
            )
            return cur.rowcount > 0

    def delete(self, user_id: str, symptom_id: str) -> bool:
        with db_conn(self.db_path) as conn:
            cur = conn.execute(
                "DELETE FROM symptoms WHERE id = ? AND user_id = ?",
                (symptom_id, user_id),
            )
            return cur.rowcount > 0
