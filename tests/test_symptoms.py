# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from cardiohealth.app_db import init_app_db
from cardiohealth.errors import SymptomValidationError
from cardiohealth.symptoms.models import SymptomCreateRequest, SymptomUpdateRequest
from cardiohealth.symptoms.service import SymptomService
from cardiohealth.symptoms.storage import SymptomStore

T0 = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


class TestSymptomService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="cardio-test-"))
        db_path = self._tmp / "test.db"
        init_app_db(db_path)
        self.service = SymptomService(SymptomStore(db_path))

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def test_add_and_fetch(self) -> None:
        created = self.service.add_symptom(
            "u1", SymptomCreateRequest(type="chest_pain", severity=6, duration="10 minutes", timestamp=T0)
        )
        fetched = self.service.get_symptom("u1", created.id)
        self.assertEqual(fetched, created)
        self.assertEqual(fetched.severity, 6)
        self.assertEqual(fetched.timestamp, T0)

    def test_any_type_string_is_accepted(self) -> None:
        created = self.service.add_symptom("u1", SymptomCreateRequest(type="palpitations"))
        self.assertEqual(created.type, "palpitations")
        self.assertIsNone(created.severity)

    def test_type_is_required(self) -> None:
        for value in ("", "   "):
            with self.assertRaises(SymptomValidationError):
                self.service.add_symptom("u1", SymptomCreateRequest(type=value))
        self.assertEqual(self.service.get_symptoms("u1"), [])

    def test_severity_bounds(self) -> None:
        self.service.add_symptom("u1", SymptomCreateRequest(type="fatigue", severity=1))
        self.service.add_symptom("u1", SymptomCreateRequest(type="fatigue", severity=10))
        for severity in (0, 11, -3):
            with self.assertRaises(SymptomValidationError) as ctx:
                self.service.add_symptom("u1", SymptomCreateRequest(type="fatigue", severity=severity))
            self.assertEqual(str(ctx.exception), "Severity must be between 1 and 10")
        self.assertEqual(len(self.service.get_symptoms("u1")), 2)

    def test_get_by_type(self) -> None:
        self.service.add_symptom("u1", SymptomCreateRequest(type="chest_pain", severity=3))
        self.service.add_symptom("u1", SymptomCreateRequest(type="dizziness", severity=2))
        self.assertEqual([s.type for s in self.service.get_symptoms_by_type("u1", "dizziness")], ["dizziness"])

    def test_update_validates_merged_record(self) -> None:
        created = self.service.add_symptom("u1", SymptomCreateRequest(type="chest_pain", severity=3))
        with self.assertRaises(SymptomValidationError):
            self.service.update_symptom("u1", created.id, SymptomUpdateRequest(severity=12))
        self.assertEqual(self.service.get_symptom("u1", created.id).severity, 3)

        updated = self.service.update_symptom("u1", created.id, SymptomUpdateRequest(severity=5, notes="on stairs"))
        self.assertEqual(updated.severity, 5)
        self.assertEqual(updated.type, "chest_pain")
        self.assertEqual(self.service.get_symptom("u1", created.id).notes, "on stairs")

    def test_explicit_null_type_and_timestamp_are_ignored_on_update(self) -> None:
        created = self.service.add_symptom("u1", SymptomCreateRequest(type="chest_pain", severity=3, timestamp=T0))
        updates = SymptomUpdateRequest.model_validate({"type": None, "timestamp": None, "severity": 4})
        updated = self.service.update_symptom("u1", created.id, updates)
        self.assertEqual((updated.type, updated.timestamp, updated.severity), ("chest_pain", T0, 4))

    def test_other_user_cannot_update_or_delete(self) -> None:
        created = self.service.add_symptom("alice", SymptomCreateRequest(type="chest_pain", severity=4))
        self.assertIsNone(self.service.update_symptom("bob", created.id, SymptomUpdateRequest(severity=9)))
        self.assertFalse(self.service.delete_symptom("bob", created.id))
        self.assertEqual(self.service.get_symptom("alice", created.id), created)

    def test_delete(self) -> None:
        created = self.service.add_symptom("u1", SymptomCreateRequest(type="chest_pain"))
        self.assertTrue(self.service.delete_symptom("u1", created.id))
        self.assertIsNone(self.service.get_symptom("u1", created.id))

    def test_trends_grouped_by_type_and_sorted(self) -> None:
        self.service.add_symptom("u1", SymptomCreateRequest(type="chest_pain", severity=5, timestamp=T0 + timedelta(days=3)))
        self.service.add_symptom("u1", SymptomCreateRequest(type="dizziness", severity=2, timestamp=T0))
        self.service.add_symptom("u1", SymptomCreateRequest(type="chest_pain", severity=7, timestamp=T0))

        trends = self.service.get_symptom_trends("u1")
        self.assertEqual([t.type for t in trends], ["chest_pain", "dizziness"])
        chest = trends[0]
        self.assertEqual([v.severity for v in chest.values], [7, 5])
        self.assertEqual([v.date for v in chest.values], [T0, T0 + timedelta(days=3)])


if __name__ == "__main__":
    unittest.main()
