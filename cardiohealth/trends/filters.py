# -*- coding: utf-8 -*-
"""Trend filtering by date window and metric membership.

All functions are pure: they return new lists and never mutate the trends
they are given. A trend whose values are all filtered away is dropped.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from ..labs.models import LabResultType
from .models import LabTrend, SymptomTrend, TrendFilterOptions

TrendT = TypeVar("TrendT", bound=Union[LabTrend, SymptomTrend])

LAB_METRICS = frozenset(t.value for t in LabResultType)

TIME_RANGE_WINDOWS: Dict[str, timedelta] = {
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
    "1y": timedelta(days=365),
}


def filter_by_date(
    trends: Sequence[TrendT],
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[TrendT]:
    """Keep values inside [start_date, end_date]; either bound may be omitted."""
    if start_date is None and end_date is None:
        return list(trends)

    filtered: List[TrendT] = []
    for trend in trends:
        values = [
            v
            for v in trend.values
            if (start_date is None or v.date >= start_date) and (end_date is None or v.date <= end_date)
        ]
        if values:
            filtered.append(trend.model_copy(update={"values": values}))
    return filtered


def resolve_time_range(time_range: Optional[str], now: datetime) -> Optional[Tuple[datetime, datetime]]:
    """Turn a 7d/30d/90d/1y shorthand into a concrete window ending at `now`.

    Returns None for "all" or no range, meaning "do not filter".
    """
    if not time_range or time_range == "all":
        return None
    window = TIME_RANGE_WINDOWS.get(time_range)
    if window is None:
        raise ValueError(f"Unknown time range: {time_range}")
    return now - window, now


def filter_by_metrics(
    lab_trends: Sequence[LabTrend],
    symptom_trends: Sequence[SymptomTrend],
    metrics: Sequence[str],
) -> Tuple[List[LabTrend], List[SymptomTrend]]:
    """Narrow trends to the requested metrics.

    Lab type names narrow the lab trends, any other name narrows the symptom
    trends. A family with no requested names is left untouched.
    """
    lab_metrics = [m for m in metrics if m in LAB_METRICS]
    symptom_metrics = [m for m in metrics if m not in LAB_METRICS]

    labs = list(lab_trends)
    symptoms = list(symptom_trends)
    if lab_metrics:
        labs = [t for t in labs if t.type.value in lab_metrics]
    if symptom_metrics:
        symptoms = [t for t in symptoms if t.type in symptom_metrics]
    return labs, symptoms


def apply_filters(
    lab_trends: Sequence[LabTrend],
    symptom_trends: Sequence[SymptomTrend],
    options: Optional[TrendFilterOptions],
    now: datetime,
) -> Tuple[List[LabTrend], List[SymptomTrend]]:
    labs, symptoms = list(lab_trends), list(symptom_trends)
    if options is None:
        return labs, symptoms

    if options.start_date or options.end_date:
        labs = filter_by_date(labs, options.start_date, options.end_date)
        symptoms = filter_by_date(symptoms, options.start_date, options.end_date)

    if options.metrics:
        labs, symptoms = filter_by_metrics(labs, symptoms, options.metrics)

    window = resolve_time_range(options.time_range, now)
    if window is not None:
        labs = filter_by_date(labs, *window)
        symptoms = filter_by_date(symptoms, *window)

    return labs, symptoms
