# -*- coding: utf-8 -*-
"""Triage — API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from ..deps import get_triage_service
from .models import TriageAlert
from .service import TriageService

router = APIRouter(prefix="/api/triage", tags=["Triage"])


@router.get("/alerts", response_model=List[TriageAlert], summary="Current safety alerts")
def get_alerts_api(
    user: dict = Depends(get_current_user),
    service: TriageService = Depends(get_triage_service),
):
    return service.get_alerts(user["id"])
