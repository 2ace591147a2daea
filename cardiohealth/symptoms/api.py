# -*- coding: utf-8 -*-
"""Symptoms — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..deps import get_symptom_service
from .models import Symptom, SymptomCreateRequest, SymptomUpdateRequest
from .service import SymptomService

router = APIRouter(prefix="/api/symptoms", tags=["Symptoms"])


@router.post("", response_model=Symptom, status_code=201, summary="Report a symptom")
def create_symptom_api(
    request: SymptomCreateRequest,
    user: dict = Depends(get_current_user),
    service: SymptomService = Depends(get_symptom_service),
):
    return service.add_symptom(user["id"], request)


@router.get("", response_model=List[Symptom], summary="List symptoms")
def list_symptoms_api(
    symptom_type: Optional[str] = Query(default=None, alias="type"),
    user: dict = Depends(get_current_user),
    service: SymptomService = Depends(get_symptom_service),
):
    if symptom_type:
        return service.get_symptoms_by_type(user["id"], symptom_type)
    return service.get_symptoms(user["id"])


@router.get("/{symptom_id}", response_model=Symptom, summary="Get a symptom entry")
def get_symptom_api(
    symptom_id: str,
    user: dict = Depends(get_current_user),
    service: SymptomService = Depends(get_symptom_service),
):
    symptom = service.get_symptom(user["id"], symptom_id)
    if not symptom:
        raise HTTPException(status_code=404, detail="Symptom entry not found")
    return symptom


@router.put("/{symptom_id}", response_model=Symptom, summary="Update a symptom entry")
def update_symptom_api(
    symptom_id: str,
    request: SymptomUpdateRequest,
    user: dict = Depends(get_current_user),
    service: SymptomService = Depends(get_symptom_service),
):
    symptom = service.update_symptom(user["id"], symptom_id, request)
    if not symptom:
        raise HTTPException(status_code=404, detail="Symptom entry not found")
    return symptom


@router.delete("/{symptom_id}", summary="Delete a symptom entry")
def delete_symptom_api(
    symptom_id: str,
    user: dict = Depends(get_current_user),
    service: SymptomService = Depends(get_symptom_service),
):
    if not service.delete_symptom(user["id"], symptom_id):
        raise HTTPException(status_code=404, detail="Symptom entry not found")
    return {"status": "ok", "id": symptom_id}
