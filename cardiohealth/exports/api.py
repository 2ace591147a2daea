# -*- coding: utf-8 -*-
"""Exports — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from ..auth.security import get_current_user
from ..deps import get_export_service
from .service import ExportService

router = APIRouter(prefix="/api/export", tags=["Export"])


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/lab-results", summary="Download lab results as CSV")
def export_lab_results_api(
    user: dict = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
):
    return _csv_response(service.export_lab_results_csv(user["id"]), "lab-results.csv")


@router.get("/symptoms", summary="Download symptoms as CSV")
def export_symptoms_api(
    user: dict = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
):
    return _csv_response(service.export_symptoms_csv(user["id"]), "symptoms.csv")


@router.get("/all", summary="Download all health data as CSV")
def export_all_api(
    user: dict = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
):
    return _csv_response(service.export_all_csv(user["id"]), "health-data.csv")
