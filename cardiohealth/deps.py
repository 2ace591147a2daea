# -*- coding: utf-8 -*-
"""Service wiring for request handlers.

Each request gets services built over stores bound to the configured
database. Tests replace these through `app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import Depends

from .config import settings
from .exports.service import ExportService
from .labs.service import LabResultsService
from .labs.storage import LabResultStore
from .symptoms.service import SymptomService
from .symptoms.storage import SymptomStore
from .trends.service import HealthTrendsService
from .triage.service import TriageService


def get_lab_results_service() -> LabResultsService:
    return LabResultsService(LabResultStore(settings.app_db_path))


def get_symptom_service() -> SymptomService:
    return SymptomService(SymptomStore(settings.app_db_path))


def get_health_trends_service(
    labs: LabResultsService = Depends(get_lab_results_service),
    symptoms: SymptomService = Depends(get_symptom_service),
) -> HealthTrendsService:
    return HealthTrendsService(labs, symptoms)


def get_triage_service(
    labs: LabResultsService = Depends(get_lab_results_service),
    symptoms: SymptomService = Depends(get_symptom_service),
) -> TriageService:
    return TriageService(labs, symptoms)


def get_export_service(
    labs: LabResultsService = Depends(get_lab_results_service),
    symptoms: SymptomService = Depends(get_symptom_service),
) -> ExportService:
    return ExportService(labs, symptoms)
