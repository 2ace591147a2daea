# -*- coding: utf-8 -*-
"""Trend builder: raw lab results / symptoms -> per-type ascending series.

Types with no records produce no trend at all.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..labs.models import FIELDS_BY_TYPE, LabResult, LabResultType
from ..symptoms.models import Symptom
from .models import LabTrend, LabTrendValue, SymptomTrend, SymptomTrendValue

# The scalar plotted on a single-axis chart for each lab type.
_REPRESENTATIVE_FIELD: Dict[LabResultType, str] = {
    LabResultType.blood_pressure: "systolic",
    LabResultType.cholesterol: "total_cholesterol",
    LabResultType.hba1c: "hba1c",
}


def _lab_trend_value(result: LabResult) -> LabTrendValue:
    fields = {name: getattr(result, name) for name in FIELDS_BY_TYPE[result.type]}
    representative = getattr(result, _REPRESENTATIVE_FIELD[result.type])
    return LabTrendValue(date=result.date, value=representative or 0, **fields)


def build_lab_trends(results: Iterable[LabResult]) -> List[LabTrend]:
    by_type: Dict[LabResultType, List[LabResult]] = {t: [] for t in LabResultType}
    for result in results:
        by_type[result.type].append(result)

    trends: List[LabTrend] = []
    for lab_type, items in by_type.items():
        if not items:
            continue
        values = sorted((_lab_trend_value(r) for r in items), key=lambda v: v.date)
        trends.append(LabTrend(type=lab_type, values=values))
    return trends


def build_symptom_trends(symptoms: Iterable[Symptom]) -> List[SymptomTrend]:
    # dict keeps first-seen order of symptom types
    by_type: Dict[str, List[Symptom]] = {}
    for symptom in symptoms:
        by_type.setdefault(symptom.type, []).append(symptom)

    trends: List[SymptomTrend] = []
    for symptom_type, items in by_type.items():
        values = sorted(
            (SymptomTrendValue(date=s.timestamp, value=s.severity, severity=s.severity) for s in items),
            key=lambda v: v.date,
        )
        trends.append(SymptomTrend(type=symptom_type, values=values))
    return trends
