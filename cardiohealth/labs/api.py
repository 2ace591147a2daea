# -*- coding: utf-8 -*-
"""Lab results — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..auth.security import get_current_user
from ..deps import get_lab_results_service
from .models import LabResult, LabResultCreateRequest, LabResultType, LabResultUpdateRequest
from .service import LabResultsService

router = APIRouter(prefix="/api/lab-results", tags=["Lab results"])


@router.post("", response_model=LabResult, status_code=201, summary="Add a lab result")
def create_lab_result_api(
    request: LabResultCreateRequest,
    user: dict = Depends(get_current_user),
    service: LabResultsService = Depends(get_lab_results_service),
):
    return service.add_lab_result(user["id"], request)


@router.get("", response_model=List[LabResult], summary="List lab results")
def list_lab_results_api(
    lab_type: Optional[LabResultType] = Query(default=None, alias="type"),
    user: dict = Depends(get_current_user),
    service: LabResultsService = Depends(get_lab_results_service),
):
    if lab_type is not None:
        return service.get_lab_results_by_type(user["id"], lab_type)
    return service.get_lab_results(user["id"])


@router.get("/{result_id}", response_model=LabResult, summary="Get a lab result")
def get_lab_result_api(
    result_id: str,
    user: dict = Depends(get_current_user),
    service: LabResultsService = Depends(get_lab_results_service),
):
    result = service.get_lab_result(user["id"], result_id)
    if not result:
        raise HTTPException(status_code=404, detail="Lab result not found")
    return result


@router.put("/{result_id}", response_model=LabResult, summary="Update a lab result")
def update_lab_result_api(
    result_id: str,
    request: LabResultUpdateRequest,
    user: dict = Depends(get_current_user),
    service: LabResultsService = Depends(get_lab_results_service),
):
    result = service.update_lab_result(user["id"], result_id, request)
    if not result:
        raise HTTPException(status_code=404, detail="Lab result not found")
    return result


@router.delete("/{result_id}", status_code=204, summary="Delete a lab result")
def delete_lab_result_api(
    result_id: str,
    user: dict = Depends(get_current_user),
    service: LabResultsService = Depends(get_lab_results_service),
):
    if not service.delete_lab_result(user["id"], result_id):
        raise HTTPException(status_code=404, detail="Lab result not found")
    return Response(status_code=204)
