# -*- coding: utf-8 -*-
"""Symptoms — Pydantic models.

`type` is a free-text category such as "chest_pain"; there is no enum.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models import CamelModel


class SymptomCreateRequest(CamelModel):
    type: str = Field(..., max_length=128, description="e.g. chest_pain, shortness_of_breath")
    severity: Optional[int] = Field(None, description="1-10")
    duration: Optional[str] = Field(None, max_length=256)
    notes: Optional[str] = Field(None, max_length=2000)
    timestamp: Optional[datetime] = Field(None, description="When the symptom occurred; defaults to now")


class SymptomUpdateRequest(CamelModel):
    type: Optional[str] = Field(None, max_length=128)
    severity: Optional[int] = None
    duration: Optional[str] = Field(None, max_length=256)
    notes: Optional[str] = Field(None, max_length=2000)
    timestamp: Optional[datetime] = None


class Symptom(CamelModel):
    id: str
    user_id: str
    type: str
    severity: Optional[int] = None
    duration: Optional[str] = None
    notes: Optional[str] = None
    timestamp: datetime
    created_at: datetime
