# -*- coding: utf-8 -*-
"""Lab results — Pydantic models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import Field

from ..models import CamelModel


class LabResultType(str, Enum):
    blood_pressure = "bloodPressure"
    cholesterol = "cholesterol"
    hba1c = "hba1c"


LAB_VALUE_FIELDS: Tuple[str, ...] = (
    "systolic",
    "diastolic",
    "total_cholesterol",
    "ldl",
    "hdl",
    "triglycerides",
    "hba1c",
)

# Value fields that carry meaning for each lab type; the rest are stored as NULL.
FIELDS_BY_TYPE: Dict[LabResultType, Tuple[str, ...]] = {
    LabResultType.blood_pressure: ("systolic", "diastolic"),
    LabResultType.cholesterol: ("total_cholesterol", "ldl", "hdl", "triglycerides"),
    LabResultType.hba1c: ("hba1c",),
}


class LabResultCreateRequest(CamelModel):
    type: LabResultType
    systolic: Optional[int] = Field(None, description="mmHg")
    diastolic: Optional[int] = Field(None, description="mmHg")
    total_cholesterol: Optional[int] = Field(None, description="mg/dL")
    ldl: Optional[int] = Field(None, description="mg/dL")
    hdl: Optional[int] = Field(None, description="mg/dL")
    triglycerides: Optional[int] = Field(None, description="mg/dL")
    hba1c: Optional[float] = Field(None, description="%")
    date: Optional[datetime] = Field(None, description="When the measurement was taken; defaults to now")
    notes: Optional[str] = Field(None, max_length=2000)


class LabResultUpdateRequest(CamelModel):
    type: Optional[LabResultType] = None
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    total_cholesterol: Optional[int] = None
    ldl: Optional[int] = None
    hdl: Optional[int] = None
    triglycerides: Optional[int] = None
    hba1c: Optional[float] = None
    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=2000)


class LabResult(CamelModel):
    id: str
    user_id: str
    type: LabResultType
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    total_cholesterol: Optional[int] = None
    ldl: Optional[int] = None
    hdl: Optional[int] = None
    triglycerides: Optional[int] = None
    hba1c: Optional[float] = None
    date: datetime
    notes: Optional[str] = None
    created_at: datetime
