# -*- coding: utf-8 -*-
"""Symptoms — validation and CRUD service."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from ..errors import SymptomValidationError
from ..timeutils import Clock, ensure_utc, utc_now
from ..trends.builder import build_symptom_trends
from ..trends.models import SymptomTrend
from .models import Symptom, SymptomCreateRequest, SymptomUpdateRequest
from .storage import SymptomStore

logger = logging.getLogger(__name__)

SEVERITY_MIN = 1
SEVERITY_MAX = 10


def validate_symptom(values: Mapping[str, Any]) -> None:
    symptom_type = values.get("type")
    if not isinstance(symptom_type, str) or not symptom_type.strip():
        raise SymptomValidationError("Symptom type is required")
    severity = values.get("severity")
    if severity is not None:
        if isinstance(severity, bool) or not isinstance(severity, int):
            raise SymptomValidationError("Severity must be an integer")
        if severity < SEVERITY_MIN or severity > SEVERITY_MAX:
            raise SymptomValidationError("Severity must be between 1 and 10")


class SymptomService:
    def __init__(self, store: SymptomStore, *, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def add_symptom(self, user_id: str, data: SymptomCreateRequest) -> Symptom:
        values = data.model_dump()
        validate_symptom(values)

        now = self._clock()
        symptom = Symptom(
            id=str(uuid4()),
            user_id=user_id,
            type=data.type.strip(),
            severity=data.severity,
            duration=data.duration or None,
            notes=data.notes or None,
            timestamp=ensure_utc(data.timestamp) if data.timestamp else now,
            created_at=now,
        )
        self._store.insert(symptom)
        logger.info("Symptom %s (%s) added for user %s", symptom.id, symptom.type, user_id)
        return symptom

    def get_symptoms(self, user_id: str) -> List[Symptom]:
        return self._store.list_by_user(user_id)

    def get_symptoms_by_type(self, user_id: str, symptom_type: str) -> List[Symptom]:
        return self._store.list_by_user(user_id, symptom_type=symptom_type)

    def get_symptom(self, user_id: str, symptom_id: str) -> Optional[Symptom]:
        return self._store.get(user_id, symptom_id)

    def get_symptom_trends(self, user_id: str) -> List[SymptomTrend]:
        return build_symptom_trends(self.get_symptoms(user_id))

    def update_symptom(self, user_id: str, symptom_id: str, updates: SymptomUpdateRequest) -> Optional[Symptom]:
        existing = self._store.get(user_id, symptom_id)
        if existing is None:
            logger.warning("Symptom %s not found for user %s; update rejected", symptom_id, user_id)
            return None

        changes = updates.model_dump(exclude_unset=True)
        # Same rule as lab results: an explicit null on a NOT NULL column means "leave as is".
        for key in ("type", "timestamp"):
            if key in changes and changes[key] is None:
                del changes[key]

        merged = existing.model_dump()
        merged.update(changes)
        validate_symptom(merged)
        merged["type"] = merged["type"].strip()
        merged["timestamp"] = ensure_utc(merged["timestamp"])

        updated = Symptom(**merged)
        if not self._store.update(updated):
            return None
        logger.info("Symptom %s updated for user %s", symptom_id, user_id)
        return updated

    def delete_symptom(self, user_id: str, symptom_id: str) -> bool:
        if self._store.get(user_id, symptom_id) is None:
            logger.warning("Symptom %s not found for user %s; delete rejected", symptom_id, user_id)
            return False
        deleted = self._store.delete(user_id, symptom_id)
        if deleted:
            logger.info("Symptom %s deleted for user %s", symptom_id, user_id)
        return deleted
