# -*- coding: utf-8 -*-
"""Health trends — Pydantic models.

Trends are derived on every read and never stored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field, field_validator

from ..labs.models import LabResultType
from ..models import CamelModel
from ..timeutils import ensure_utc

TimeRange = Literal["7d", "30d", "90d", "1y", "all"]


class LabTrendValue(CamelModel):
    date: datetime
    value: Union[int, float]
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    total_cholesterol: Optional[int] = None
    ldl: Optional[int] = None
    hdl: Optional[int] = None
    triglycerides: Optional[int] = None
    hba1c: Optional[float] = None


class LabTrend(CamelModel):
    type: LabResultType
    values: List[LabTrendValue]


class SymptomTrendValue(CamelModel):
    date: datetime
    value: Optional[int] = None
    severity: Optional[int] = None


class SymptomTrend(CamelModel):
    type: str
    values: List[SymptomTrendValue]


class ContributingFactor(CamelModel):
    factor: str
    contribution: float


class RiskPoint(CamelModel):
    date: datetime
    risk_score: float = Field(..., ge=0, le=100)
    contributing_factors: List[ContributingFactor] = Field(default_factory=list)


class CompositeRiskTrend(CamelModel):
    values: List[RiskPoint]


class TrendFilterOptions(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    metrics: List[str] = Field(default_factory=list)
    time_range: Optional[TimeRange] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    def is_empty(self) -> bool:
        return not (self.start_date or self.end_date or self.metrics or self.time_range)


class HealthTrendData(CamelModel):
    lab_trends: List[LabTrend]
    symptom_trends: List[SymptomTrend]
    composite_risk: Optional[CompositeRiskTrend] = None


class RangeBound(CamelModel):
    min: Optional[float] = None
    max: Optional[float] = None


class HealthMetricRange(CamelModel):
    metric: str
    optimal_range: RangeBound
    normal_range: RangeBound
    high_risk_range: RangeBound


class ComparativeAnalysis(CamelModel):
    latest_data: Dict[str, Any]
    metric_ranges: List[HealthMetricRange]
