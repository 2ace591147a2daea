# -*- coding: utf-8 -*-
"""Triage alert evaluator.

Stateless: every call re-reads the latest readings and re-emits whatever
alerts apply. `triggered_at` is the evaluation time, not the reading time.
Rules are independent and several alerts may fire at once.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from ..labs.models import LabResult, LabResultType
from ..labs.service import LabResultsService
from ..symptoms.models import Symptom
from ..symptoms.service import SymptomService
from ..timeutils import Clock, utc_now
from .models import TriageAlert

logger = logging.getLogger(__name__)

DANGER_RECOMMENDATION = "Seek immediate medical attention. Consider calling emergency services."
BP_WARNING_RECOMMENDATION = "Contact your healthcare provider to discuss this reading."
CHOLESTEROL_RECOMMENDATION = "Contact your healthcare provider to discuss cholesterol management."
HBA1C_RECOMMENDATION = "Contact your healthcare provider to discuss diabetes management."

BP_WINDOW = 3
BP_DANGER_SYSTOLIC = 180
BP_WARNING_SYSTOLIC = 140
CHOLESTEROL_WARNING = 240
HBA1C_WARNING = 8
CHEST_PAIN_DANGER = 7
SHORTNESS_OF_BREATH_DANGER = 8


def _num(value: float) -> str:
    return f"{value:g}"


def _latest_labs(results: List[LabResult], lab_type: LabResultType, count: int) -> List[LabResult]:
    matching = [r for r in results if r.type == lab_type]
    return sorted(matching, key=lambda r: r.date, reverse=True)[:count]


def _latest_symptom(symptoms: List[Symptom], symptom_type: str) -> List[Symptom]:
    matching = [s for s in symptoms if s.type == symptom_type]
    return sorted(matching, key=lambda s: s.timestamp, reverse=True)[:1]


class TriageService:
    def __init__(self, labs: LabResultsService, symptoms: SymptomService, *, clock: Clock = utc_now) -> None:
        self._labs = labs
        self._symptoms = symptoms
        self._clock = clock

    def _alert(self, level: str, message: str, recommendation: str, now: datetime) -> TriageAlert:
        return TriageAlert(type=level, message=message, recommendation=recommendation, triggered_at=now)

    def check_for_alerts(self, user_id: str) -> List[TriageAlert]:
        now = self._clock()
        alerts: List[TriageAlert] = []
        results = self._labs.get_lab_results(user_id)

        for bp in _latest_labs(results, LabResultType.blood_pressure, BP_WINDOW):
            reading = f"{_num(bp.systolic)}/{_num(bp.diastolic)} mmHg" if bp.systolic else ""
            if bp.systolic and bp.systolic >= BP_DANGER_SYSTOLIC:
                alerts.append(
                    self._alert("danger", f"High blood pressure detected: {reading}", DANGER_RECOMMENDATION, now)
                )
            elif bp.systolic and bp.systolic >= BP_WARNING_SYSTOLIC:
                alerts.append(
                    self._alert(
                        "warning", f"Elevated blood pressure detected: {reading}", BP_WARNING_RECOMMENDATION, now
                    )
                )

        for chol in _latest_labs(results, LabResultType.cholesterol, 1):
            if chol.total_cholesterol and chol.total_cholesterol >= CHOLESTEROL_WARNING:
                alerts.append(
                    self._alert(
                        "warning",
                        f"High cholesterol detected: {_num(chol.total_cholesterol)} mg/dL",
                        CHOLESTEROL_RECOMMENDATION,
                        now,
                    )
                )

        for reading in _latest_labs(results, LabResultType.hba1c, 1):
            if reading.hba1c and reading.hba1c >= HBA1C_WARNING:
                alerts.append(
                    self._alert("warning", f"High HbA1c detected: {_num(reading.hba1c)}%", HBA1C_RECOMMENDATION, now)
                )

        symptoms = self._symptoms.get_symptoms(user_id)
        for chest_pain in _latest_symptom(symptoms, "chest_pain"):
            if chest_pain.severity and chest_pain.severity >= CHEST_PAIN_DANGER:
                alerts.append(self._alert("danger", "Severe chest pain reported", DANGER_RECOMMENDATION, now))

        for sob in _latest_symptom(symptoms, "shortness_of_breath"):
            if sob.severity and sob.severity >= SHORTNESS_OF_BREATH_DANGER:
                alerts.append(
                    self._alert("danger", "Severe shortness of breath reported", DANGER_RECOMMENDATION, now)
                )

        if alerts:
            logger.info("Triage raised %d alert(s) for user %s", len(alerts), user_id)
        return alerts

    def get_alerts(self, user_id: str) -> List[TriageAlert]:
        return self.check_for_alerts(user_id)
