# -*- coding: utf-8 -*-
"""Health trends — API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..deps import get_health_trends_service
from .models import (
    ComparativeAnalysis,
    HealthMetricRange,
    HealthTrendData,
    LabTrend,
    SymptomTrend,
    TimeRange,
    TrendFilterOptions,
)
from .service import HealthTrendsService

router = APIRouter(prefix="/api/health/trends", tags=["Health trends"])


@router.get(
    "",
    response_model=HealthTrendData,
    summary="Lab and symptom trends with composite risk",
)
def get_health_trends_api(
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    metrics: Optional[str] = Query(default=None, description="Comma-separated metric names"),
    time_range: Optional[TimeRange] = Query(default=None, alias="timeRange"),
    user: dict = Depends(get_current_user),
    service: HealthTrendsService = Depends(get_health_trends_service),
):
    options = TrendFilterOptions(
        start_date=start_date,
        end_date=end_date,
        metrics=[m.strip() for m in (metrics or "").split(",") if m.strip()],
        time_range=time_range,
    )
    return service.get_health_trends(user["id"], options)


@router.get("/lab", response_model=List[LabTrend], summary="Lab trends")
def get_lab_trends_api(
    user: dict = Depends(get_current_user),
    service: HealthTrendsService = Depends(get_health_trends_service),
):
    return service.get_lab_trends(user["id"])


@router.get("/symptoms", response_model=List[SymptomTrend], summary="Symptom trends")
def get_symptom_trends_api(
    user: dict = Depends(get_current_user),
    service: HealthTrendsService = Depends(get_health_trends_service),
):
    return service.get_symptom_trends(user["id"])


@router.get("/comparative", response_model=ComparativeAnalysis, summary="Latest values against reference ranges")
def get_comparative_analysis_api(
    user: dict = Depends(get_current_user),
    service: HealthTrendsService = Depends(get_health_trends_service),
):
    return service.get_comparative_analysis_data(user["id"])


@router.get("/ranges", response_model=List[HealthMetricRange], summary="Reference ranges per metric")
def get_metric_ranges_api(service: HealthTrendsService = Depends(get_health_trends_service)):
    return service.get_health_metric_ranges()
