# -*- coding: utf-8 -*-
"""Auth — user rows."""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..timeutils import to_iso, utc_now


def _normalize_email(email: str) -> str:
    return email.lower().strip()


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (_normalize_email(email),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def create_user(*, email: str, password_hash: str) -> Dict[str, Any]:
    user = {
        "id": str(uuid4()),
        "email": _normalize_email(email),
        "password_hash": password_hash,
        "created_at": to_iso(utc_now()),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO users (id, email, password_hash, created_at) VALUES (:id, :email, :password_hash, :created_at)",
            user,
        )
    return user
