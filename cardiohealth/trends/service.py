# -*- coding: utf-8 -*-
"""Health trends service: builds, filters and scores trends for one user."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..labs.models import LabResultType
from ..labs.service import LabResultsService
from ..symptoms.service import SymptomService
from ..timeutils import Clock, utc_now
from .filters import apply_filters
from .models import (
    ComparativeAnalysis,
    HealthMetricRange,
    HealthTrendData,
    LabTrend,
    RangeBound,
    SymptomTrend,
    TrendFilterOptions,
)
from .risk import DateJoin, calculate_composite_risk_trend, same_instant


def _range(
    metric: str,
    optimal: tuple[Optional[float], Optional[float]],
    normal: tuple[Optional[float], Optional[float]],
    high_risk: tuple[Optional[float], Optional[float]],
) -> HealthMetricRange:
    return HealthMetricRange(
        metric=metric,
        optimal_range=RangeBound(min=optimal[0], max=optimal[1]),
        normal_range=RangeBound(min=normal[0], max=normal[1]),
        high_risk_range=RangeBound(min=high_risk[0], max=high_risk[1]),
    )


# Reference ranges shown next to the user's latest values.
HEALTH_METRIC_RANGES: List[HealthMetricRange] = [
    _range("bloodPressure_systolic", (None, 120), (120, 139), (140, None)),
    _range("bloodPressure_diastolic", (None, 80), (80, 89), (90, None)),
    _range("cholesterol_total", (None, 200), (200, 239), (240, None)),
    _range("cholesterol_ldl", (None, 100), (100, 129), (130, None)),
    _range("cholesterol_hdl", (60, None), (40, 59), (None, 40)),
    _range("hba1c", (None, 5.7), (5.7, 6.4), (6.5, None)),
]


def _latest_value(trends: List[LabTrend], lab_type: LabResultType):
    trend = next((t for t in trends if t.type == lab_type), None)
    if trend is None or not trend.values:
        return None
    return trend.values[-1]


class HealthTrendsService:
    def __init__(
        self,
        labs: LabResultsService,
        symptoms: SymptomService,
        *,
        clock: Clock = utc_now,
        join: DateJoin = same_instant,
    ) -> None:
        self._labs = labs
        self._symptoms = symptoms
        self._clock = clock
        self._join = join

    def get_health_trends(self, user_id: str, options: Optional[TrendFilterOptions] = None) -> HealthTrendData:
        lab_trends = self._labs.get_lab_trends(user_id)
        symptom_trends = self._symptoms.get_symptom_trends(user_id)

        if options is not None and not options.is_empty():
            lab_trends, symptom_trends = apply_filters(lab_trends, symptom_trends, options, self._clock())

        return HealthTrendData(
            lab_trends=lab_trends,
            symptom_trends=symptom_trends,
            composite_risk=calculate_composite_risk_trend(lab_trends, symptom_trends, self._join),
        )

    def get_lab_trends(self, user_id: str) -> List[LabTrend]:
        return self._labs.get_lab_trends(user_id)

    def get_symptom_trends(self, user_id: str) -> List[SymptomTrend]:
        return self._symptoms.get_symptom_trends(user_id)

    def get_health_metric_ranges(self) -> List[HealthMetricRange]:
        return [r.model_copy(deep=True) for r in HEALTH_METRIC_RANGES]

    def get_comparative_analysis_data(self, user_id: str) -> ComparativeAnalysis:
        trends = self.get_health_trends(user_id)
        latest: Dict[str, Any] = {}

        bp = _latest_value(trends.lab_trends, LabResultType.blood_pressure)
        if bp is not None:
            latest["bloodPressure"] = {"systolic": bp.systolic, "diastolic": bp.diastolic}

        chol = _latest_value(trends.lab_trends, LabResultType.cholesterol)
        if chol is not None:
            latest["cholesterol"] = {"total": chol.total_cholesterol, "ldl": chol.ldl, "hdl": chol.hdl}

        hba1c = _latest_value(trends.lab_trends, LabResultType.hba1c)
        if hba1c is not None:
            latest["hba1c"] = hba1c.hba1c

        if trends.composite_risk is not None and trends.composite_risk.values:
            point = trends.composite_risk.values[-1]
            latest["compositeRisk"] = {
                "score": point.risk_score,
                "factors": [f.model_dump(by_alias=True) for f in point.contributing_factors],
            }

        return ComparativeAnalysis(latest_data=latest, metric_ranges=self.get_health_metric_ranges())
