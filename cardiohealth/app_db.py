# -*- coding: utf-8 -*-
"""App database — SQLite helpers.

Holds users, lab results and symptoms. Timestamps are stored as ISO8601 text
in UTC.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS lab_results (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('bloodPressure', 'cholesterol', 'hba1c')),
    systolic INTEGER,
    diastolic INTEGER,
    total_cholesterol INTEGER,
    ldl INTEGER,
    hdl INTEGER,
    triglycerides INTEGER,
    hba1c REAL,
    date TEXT NOT NULL,
    notes TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_lab_results_user_type_date ON lab_results(user_id, type, date);

CREATE TABLE IF NOT EXISTS symptoms (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    type TEXT NOT NULL,
    severity INTEGER CHECK (severity IS NULL OR severity BETWEEN 1 AND 10),
    duration TEXT,
    notes TEXT,
    timestamp TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_symptoms_user_type_timestamp ON symptoms(user_id, type, timestamp);
"""


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_app_db(db_path: Path) -> None:
    """Create tables and indexes if missing. Safe to call on every start."""
    with db_conn(db_path) as conn:
        conn.executescript(SCHEMA)
