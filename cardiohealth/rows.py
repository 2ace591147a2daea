# -*- coding: utf-8 -*-
"""Mapping between SQLite rows and domain models.

This is the only place that knows about column names, NULLs and the text
encoding of timestamps. Stores call into it; services never see rows.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .labs.models import LAB_VALUE_FIELDS, LabResult, LabResultType
from .symptoms.models import Symptom
from .timeutils import parse_iso, to_iso

LAB_RESULT_COLUMNS = ("id", "user_id", "type", *LAB_VALUE_FIELDS, "date", "notes", "created_at")
SYMPTOM_COLUMNS = ("id", "user_id", "type", "severity", "duration", "notes", "timestamp", "created_at")


def lab_result_from_row(row: Mapping[str, Any]) -> LabResult:
    values = {name: row[name] for name in LAB_VALUE_FIELDS}
    return LabResult(
        id=row["id"],
        user_id=row["user_id"],
        type=LabResultType(row["type"]),
        date=parse_iso(row["date"]),
        notes=row["notes"],
        created_at=parse_iso(row["created_at"]),
        **values,
    )


def lab_result_to_row(result: LabResult) -> Dict[str, Any]:
    row: Dict[str, Any] = {name: getattr(result, name) for name in LAB_VALUE_FIELDS}
    row.update(
        id=result.id,
        user_id=result.user_id,
        type=result.type.value,
        date=to_iso(result.date),
        notes=result.notes,
        created_at=to_iso(result.created_at),
    )
    return row


def symptom_from_row(row: Mapping[str, Any]) -> Symptom:
    return Symptom(
        id=row["id"],
        user_id=row["user_id"],
        type=row["type"],
        severity=row["severity"],
        duration=row["duration"],
        notes=row["notes"],
        timestamp=parse_iso(row["timestamp"]),
        created_at=parse_iso(row["created_at"]),
    )


def symptom_to_row(symptom: Symptom) -> Dict[str, Any]:
    return {
        "id": symptom.id,
        "user_id": symptom.user_id,
        "type": symptom.type,
        "severity": symptom.severity,
        "duration": symptom.duration,
        "notes": symptom.notes,
        "timestamp": to_iso(symptom.timestamp),
        "created_at": to_iso(symptom.created_at),
    }
