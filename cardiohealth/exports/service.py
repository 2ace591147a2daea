# -*- coding: utf-8 -*-
"""Exports — CSV rendering of lab results and symptoms.

Every cell is quoted. Dates are written as UTC calendar days and missing
values as empty cells.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Any, Iterable, List, Sequence

from ..labs.models import LabResult, LabResultType
from ..labs.service import LabResultsService
from ..symptoms.models import Symptom
from ..symptoms.service import SymptomService
from ..timeutils import ensure_utc

LAB_RESULTS_HEADER = (
    "Date",
    "Type",
    "Systolic",
    "Diastolic",
    "Total Cholesterol",
    "LDL",
    "HDL",
    "Triglycerides",
    "HbA1c",
    "Notes",
)
SYMPTOMS_HEADER = ("Date", "Type", "Severity", "Duration", "Notes")
ALL_DATA_HEADER = ("Date", "DataType", "Details")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _day(value: datetime) -> str:
    return ensure_utc(value).date().isoformat()


def _render(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    buf = io.StringIO()
    # Header unquoted, data rows fully quoted.
    buf.write(",".join(header) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows([_cell(v) for v in row] for row in rows)
    return buf.getvalue()


def _lab_details(result: LabResult) -> str:
    if result.type == LabResultType.blood_pressure:
        details = f"BP: {_cell(result.systolic)}/{_cell(result.diastolic)} mmHg"
    elif result.type == LabResultType.cholesterol:
        details = (
            f"Cholesterol: Total={_cell(result.total_cholesterol)}, LDL={_cell(result.ldl)}, "
            f"HDL={_cell(result.hdl)}, Triglycerides={_cell(result.triglycerides)}"
        )
    else:
        details = f"HbA1c: {_cell(result.hba1c)}%"
    if result.notes:
        details += f" | Notes: {result.notes}"
    return details


def _symptom_details(symptom: Symptom) -> str:
    parts: List[str] = []
    if symptom.severity is not None:
        parts.append(f"Severity: {symptom.severity}/10")
    if symptom.duration:
        parts.append(f"Duration: {symptom.duration}")
    if symptom.notes:
        parts.append(f"Notes: {symptom.notes}")
    return ", ".join(parts)


class ExportService:
    def __init__(self, labs: LabResultsService, symptoms: SymptomService) -> None:
        self._labs = labs
        self._symptoms = symptoms

    def export_lab_results_csv(self, user_id: str) -> str:
        rows = (
            (
                _day(r.date),
                r.type.value,
                r.systolic,
                r.diastolic,
                r.total_cholesterol,
                r.ldl,
                r.hdl,
                r.triglycerides,
                r.hba1c,
                r.notes,
            )
            for r in self._labs.get_lab_results(user_id)
        )
        return _render(LAB_RESULTS_HEADER, rows)

    def export_symptoms_csv(self, user_id: str) -> str:
        rows = (
            (_day(s.timestamp), s.type, s.severity, s.duration, s.notes)
            for s in self._symptoms.get_symptoms(user_id)
        )
        return _render(SYMPTOMS_HEADER, rows)

    def export_all_csv(self, user_id: str) -> str:
        """Lab results first, then symptoms, one summary line each."""
        rows: List[Sequence[Any]] = [
            (_day(r.date), f"Lab Result - {r.type.value}", _lab_details(r))
            for r in self._labs.get_lab_results(user_id)
        ]
        rows.extend(
            (_day(s.timestamp), f"Symptom - {s.type}", _symptom_details(s))
            for s in self._symptoms.get_symptoms(user_id)
        )
        return _render(ALL_DATA_HEADER, rows)
