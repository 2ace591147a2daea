# -*- coding: utf-8 -*-
"""Lab results — validation and CRUD service.

Ownership is checked by loading the row scoped to the caller before any
mutation; validation runs before anything is written.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ..errors import LabResultValidationError
from ..timeutils import Clock, ensure_utc, utc_now
from ..trends.builder import build_lab_trends
from ..trends.models import LabTrend
from .models import (
    FIELDS_BY_TYPE,
    LAB_VALUE_FIELDS,
    LabResult,
    LabResultCreateRequest,
    LabResultType,
    LabResultUpdateRequest,
)
from .storage import LabResultStore

logger = logging.getLogger(__name__)

# Changing only these never requires re-validation.
_METADATA_FIELDS = frozenset({"date", "notes"})


def _check_range(value: Optional[float], low: float, high: float, message: str) -> None:
    if value is not None and (value < low or value > high):
        raise LabResultValidationError(message)


def validate_lab_result(values: Mapping[str, Any]) -> None:
    """Raise LabResultValidationError if the values are not a valid reading for their type."""
    lab_type = values.get("type")
    if lab_type == LabResultType.blood_pressure:
        systolic, diastolic = values.get("systolic"), values.get("diastolic")
        if systolic is None or diastolic is None:
            raise LabResultValidationError("Blood pressure requires both systolic and diastolic values")
        _check_range(systolic, 50, 300, "Systolic blood pressure must be between 50 and 300 mmHg")
        _check_range(diastolic, 30, 150, "Diastolic blood pressure must be between 30 and 150 mmHg")
    elif lab_type == LabResultType.cholesterol:
        if values.get("total_cholesterol") is None:
            raise LabResultValidationError("Cholesterol requires total cholesterol value")
        _check_range(values["total_cholesterol"], 100, 500, "Total cholesterol must be between 100 and 500 mg/dL")
        _check_range(values.get("ldl"), 50, 400, "LDL cholesterol must be between 50 and 400 mg/dL")
        _check_range(values.get("hdl"), 10, 100, "HDL cholesterol must be between 10 and 100 mg/dL")
        _check_range(values.get("triglycerides"), 50, 500, "Triglycerides must be between 50 and 500 mg/dL")
    elif lab_type == LabResultType.hba1c:
        if values.get("hba1c") is None:
            raise LabResultValidationError("HbA1c requires hba1c value")
        _check_range(values["hba1c"], 4, 15, "HbA1c must be between 4% and 15%")
    else:
        raise LabResultValidationError("Invalid lab result type")


def _clear_irrelevant_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    relevant = FIELDS_BY_TYPE[LabResultType(values["type"])]
    for name in LAB_VALUE_FIELDS:
        if name not in relevant:
            values[name] = None
    return values


class LabResultsService:
    def __init__(self, store: LabResultStore, *, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def add_lab_result(self, user_id: str, data: LabResultCreateRequest) -> LabResult:
        values = data.model_dump()
        validate_lab_result(values)

        now = self._clock()
        values["date"] = ensure_utc(data.date) if data.date else now
        result = LabResult(
            id=str(uuid4()),
            user_id=user_id,
            created_at=now,
            **_clear_irrelevant_fields(values),
        )
        self._store.insert(result)
        logger.info("Lab result %s (%s) added for user %s", result.id, result.type.value, user_id)
        return result

    def get_lab_results(self, user_id: str) -> List[LabResult]:
        return self._store.list_by_user(user_id)

    def get_lab_results_by_type(self, user_id: str, lab_type: LabResultType) -> List[LabResult]:
        return self._store.list_by_user(user_id, lab_type=LabResultType(lab_type))

    def get_lab_result(self, user_id: str, result_id: str) -> Optional[LabResult]:
        return self._store.get(user_id, result_id)

    def get_lab_trends(self, user_id: str) -> List[LabTrend]:
        return build_lab_trends(self.get_lab_results(user_id))

    def update_lab_result(
        self, user_id: str, result_id: str, updates: LabResultUpdateRequest
    ) -> Optional[LabResult]:
        existing = self._store.get(user_id, result_id)
        if existing is None:
            logger.warning("Lab result %s not found for user %s; update rejected", result_id, user_id)
            return None

        changes = updates.model_dump(exclude_unset=True)
        # type and date are NOT NULL; an explicit null means "leave as is".
        for key in ("type", "date"):
            if key in changes and changes[key] is None:
                del changes[key]

        merged = existing.model_dump()
        merged.update(changes)
        if "type" in changes or any(key not in _METADATA_FIELDS for key in changes):
            validate_lab_result(merged)
        if "date" in changes:
            merged["date"] = ensure_utc(merged["date"])

        updated = LabResult(**_clear_irrelevant_fields(merged))
        if not self._store.update(updated):
            return None
        logger.info("Lab result %s updated for user %s", result_id, user_id)
        return updated

    def delete_lab_result(self, user_id: str, result_id: str) -> bool:
        if self._store.get(user_id, result_id) is None:
            logger.warning("Lab result %s not found for user %s; delete rejected", result_id, user_id)
            return False
        deleted = self._store.delete(user_id, result_id)
        if deleted:
            logger.info("Lab result %s deleted for user %s", result_id, user_id)
        return deleted
