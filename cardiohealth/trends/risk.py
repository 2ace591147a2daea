# -*- coding: utf-8 -*-
"""Composite risk calculator.

Heuristic score per date, not a model. The thresholds, multipliers and caps
below are part of the API contract; changing them changes every score that
clients have already seen.

Readings are joined to dates with a named comparison (`same_instant` by
default) so the join can be swapped without touching the scoring rules.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from ..labs.models import LabResultType
from .models import (
    CompositeRiskTrend,
    ContributingFactor,
    LabTrend,
    LabTrendValue,
    RiskPoint,
    SymptomTrend,
    SymptomTrendValue,
)

DateJoin = Callable[[datetime, datetime], bool]

BP_SYSTOLIC_THRESHOLD = 140
BP_DIASTOLIC_THRESHOLD = 90
BP_SYSTOLIC_WEIGHT = 0.5
BP_DIASTOLIC_WEIGHT = 1.0
BP_CAP = 30.0

CHOLESTEROL_THRESHOLD = 200
CHOLESTEROL_WEIGHT = 0.2
CHOLESTEROL_CAP = 20.0

SYMPTOM_SEVERITY_WEIGHT = 1.5
SYMPTOM_CAP = 15.0

RISK_MIN = 0.0
RISK_MAX = 100.0

_V = TypeVar("_V")


def same_instant(a: datetime, b: datetime) -> bool:
    """Exact timestamp equality."""
    return a == b


def same_day(a: datetime, b: datetime) -> bool:
    """Same UTC calendar day."""
    return a.astimezone(timezone.utc).date() == b.astimezone(timezone.utc).date()


def _value_at(values: Sequence[_V], when: datetime, join: DateJoin) -> Optional[_V]:
    for value in values:
        if join(value.date, when):
            return value
    return None


def _lookup(values: Sequence[_V], join: DateJoin) -> Callable[[datetime], Optional[_V]]:
    """First value whose date joins `when`.

    Exact-instant joins are answered from a dict. Any other join falls back
    to a linear scan, so scoring costs O(dates x values) for those.
    """
    if join is same_instant:
        index: Dict[datetime, _V] = {}
        for value in values:
            index.setdefault(value.date, value)
        return index.get
    return lambda when: _value_at(values, when, join)


def _union_of_dates(
    lab_trends: Sequence[LabTrend], symptom_trends: Sequence[SymptomTrend], join: DateJoin
) -> List[datetime]:
    all_dates = [value.date for trend in [*lab_trends, *symptom_trends] for value in trend.values]
    if join is same_instant:
        return sorted(set(all_dates))

    # Pairwise dedup, quadratic in the number of distinct dates.
    dates: List[datetime] = []
    for when in all_dates:
        if not any(join(d, when) for d in dates):
            dates.append(when)
    dates.sort()
    return dates


def blood_pressure_contribution(systolic: float, diastolic: float) -> float:
    # Only the sum is capped. With systolic over threshold and a low diastolic
    # the raw sum can be negative and lowers the score.
    raw = (systolic - BP_SYSTOLIC_THRESHOLD) * BP_SYSTOLIC_WEIGHT + (
        diastolic - BP_DIASTOLIC_THRESHOLD
    ) * BP_DIASTOLIC_WEIGHT
    return min(BP_CAP, raw)


def cholesterol_contribution(total_cholesterol: float) -> float:
    return min(CHOLESTEROL_CAP, (total_cholesterol - CHOLESTEROL_THRESHOLD) * CHOLESTEROL_WEIGHT)


def symptom_contribution(severity: float) -> float:
    return min(SYMPTOM_CAP, severity * SYMPTOM_SEVERITY_WEIGHT)


def _lab_lookup(
    lab_trends: Sequence[LabTrend], lab_type: LabResultType, join: DateJoin
) -> Callable[[datetime], Optional[LabTrendValue]]:
    trend = next((t for t in lab_trends if t.type == lab_type), None)
    return _lookup(trend.values if trend is not None else [], join)


def _score_date(
    when: datetime,
    bp_at: Callable[[datetime], Optional[LabTrendValue]],
    chol_at: Callable[[datetime], Optional[LabTrendValue]],
    symptoms_at: Sequence[Tuple[str, Callable[[datetime], Optional[SymptomTrendValue]]]],
) -> RiskPoint:
    score = 0.0
    factors: List[ContributingFactor] = []

    bp = bp_at(when)
    if bp is not None and bp.systolic and bp.diastolic:
        if bp.systolic > BP_SYSTOLIC_THRESHOLD or bp.diastolic > BP_DIASTOLIC_THRESHOLD:
            contribution = blood_pressure_contribution(bp.systolic, bp.diastolic)
            score += contribution
            factors.append(ContributingFactor(factor="High Blood Pressure", contribution=contribution))

    chol = chol_at(when)
    if chol is not None and chol.total_cholesterol and chol.total_cholesterol > CHOLESTEROL_THRESHOLD:
        contribution = cholesterol_contribution(chol.total_cholesterol)
        score += contribution
        factors.append(ContributingFactor(factor="High Cholesterol", contribution=contribution))

    for symptom_type, reported_at in symptoms_at:
        reported = reported_at(when)
        if reported is not None and reported.severity:
            contribution = symptom_contribution(reported.severity)
            score += contribution
            factors.append(ContributingFactor(factor=f"Severe {symptom_type}", contribution=contribution))

    score = min(RISK_MAX, max(RISK_MIN, score))
    return RiskPoint(date=when, risk_score=score, contributing_factors=factors)


def calculate_composite_risk_trend(
    lab_trends: Sequence[LabTrend],
    symptom_trends: Sequence[SymptomTrend],
    join: DateJoin = same_instant,
) -> Optional[CompositeRiskTrend]:
    """One risk point per distinct date across both inputs.

    Returns None when there are no trends at all; callers should read that as
    "insufficient data", not as zero risk.
    """
    if not lab_trends and not symptom_trends:
        return None

    bp_at = _lab_lookup(lab_trends, LabResultType.blood_pressure, join)
    chol_at = _lab_lookup(lab_trends, LabResultType.cholesterol, join)
    symptoms_at = [(trend.type, _lookup(trend.values, join)) for trend in symptom_trends]

    dates = _union_of_dates(lab_trends, symptom_trends, join)
    return CompositeRiskTrend(
        values=[_score_date(d, bp_at, chol_at, symptoms_at) for d in dates]
    )
