# -*- coding: utf-8 -*-
"""Triage — Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from ..models import CamelModel

AlertLevel = Literal["warning", "danger"]


class TriageAlert(CamelModel):
    type: AlertLevel
    message: str
    recommendation: str
    triggered_at: datetime
