# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from cardiohealth.app_db import init_app_db
from cardiohealth.errors import LabResultValidationError
from cardiohealth.labs.models import LabResultCreateRequest, LabResultType, LabResultUpdateRequest
from cardiohealth.labs.service import LabResultsService
from cardiohealth.labs.storage import LabResultStore

T0 = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


def bp(systolic, diastolic, when=T0, **extra) -> LabResultCreateRequest:
    return LabResultCreateRequest(type="bloodPressure", systolic=systolic, diastolic=diastolic, date=when, **extra)


class LabResultsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="cardio-test-"))
        db_path = self._tmp / "test.db"
        init_app_db(db_path)
        self.service = LabResultsService(LabResultStore(db_path))

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)


class TestLabResultValidation(LabResultsTestCase):
    def test_blood_pressure_bounds_are_inclusive(self) -> None:
        for systolic, diastolic in [(50, 30), (300, 150), (120, 80)]:
            self.service.add_lab_result("u1", bp(systolic, diastolic))
        self.assertEqual(len(self.service.get_lab_results("u1")), 3)

    def test_out_of_range_blood_pressure_is_rejected_and_not_stored(self) -> None:
        for systolic, diastolic in [(49, 80), (301, 80), (120, 29), (120, 151)]:
            with self.assertRaises(LabResultValidationError):
                self.service.add_lab_result("u1", bp(systolic, diastolic))
        self.assertEqual(self.service.get_lab_results("u1"), [])

    def test_blood_pressure_requires_both_values(self) -> None:
        with self.assertRaises(LabResultValidationError) as ctx:
            self.service.add_lab_result("u1", LabResultCreateRequest(type="bloodPressure", systolic=120))
        self.assertIn("requires both systolic and diastolic", str(ctx.exception))

    def test_cholesterol_rules(self) -> None:
        self.service.add_lab_result(
            "u1", LabResultCreateRequest(type="cholesterol", total_cholesterol=180, ldl=90, hdl=55, triglycerides=120)
        )
        with self.assertRaises(LabResultValidationError):
            self.service.add_lab_result("u1", LabResultCreateRequest(type="cholesterol", ldl=90))
        with self.assertRaises(LabResultValidationError) as ctx:
            self.service.add_lab_result("u1", LabResultCreateRequest(type="cholesterol", total_cholesterol=180, hdl=5))
        self.assertIn("HDL", str(ctx.exception))
        with self.assertRaises(LabResultValidationError):
            self.service.add_lab_result(
                "u1", LabResultCreateRequest(type="cholesterol", total_cholesterol=180, triglycerides=501)
            )
        self.assertEqual(len(self.service.get_lab_results("u1")), 1)

    def test_hba1c_bounds(self) -> None:
        self.service.add_lab_result("u1", LabResultCreateRequest(type="hba1c", hba1c=4))
        self.service.add_lab_result("u1", LabResultCreateRequest(type="hba1c", hba1c=15))
        for value in (3.9, 15.1):
            with self.assertRaises(LabResultValidationError):
                self.service.add_lab_result("u1", LabResultCreateRequest(type="hba1c", hba1c=value))
        with self.assertRaises(LabResultValidationError):
            self.service.add_lab_result("u1", LabResultCreateRequest(type="hba1c"))


class TestLabResultCrud(LabResultsTestCase):
    def test_add_then_fetch_round_trip(self) -> None:
        created = self.service.add_lab_result("u1", bp(135, 85, notes="after coffee"))
        fetched = self.service.get_lab_result("u1", created.id)

        self.assertIsNotNone(fetched)
        self.assertEqual(fetched, created)
        self.assertEqual(fetched.type, LabResultType.blood_pressure)
        self.assertEqual((fetched.systolic, fetched.diastolic), (135, 85))
        self.assertEqual(fetched.date, T0)
        self.assertEqual(fetched.notes, "after coffee")
        self.assertTrue(fetched.id)
        self.assertIsNotNone(fetched.created_at)

    def test_date_defaults_to_now(self) -> None:
        before = datetime.now(timezone.utc)
        created = self.service.add_lab_result("u1", LabResultCreateRequest(type="hba1c", hba1c=5.5))
        self.assertGreaterEqual(created.date, before)

    def test_fields_of_other_types_are_dropped(self) -> None:
        created = self.service.add_lab_result(
            "u1", LabResultCreateRequest(type="cholesterol", total_cholesterol=190, systolic=120)
        )
        self.assertIsNone(self.service.get_lab_result("u1", created.id).systolic)

    def test_get_by_type(self) -> None:
        self.service.add_lab_result("u1", bp(120, 80))
        self.service.add_lab_result("u1", LabResultCreateRequest(type="hba1c", hba1c=6.1))
        results = self.service.get_lab_results_by_type("u1", LabResultType.hba1c)
        self.assertEqual([r.type for r in results], [LabResultType.hba1c])

    def test_update_revalidates_merged_record(self) -> None:
        created = self.service.add_lab_result("u1", bp(120, 80))
        with self.assertRaises(LabResultValidationError):
            self.service.update_lab_result("u1", created.id, LabResultUpdateRequest(systolic=400))
        self.assertEqual(self.service.get_lab_result("u1", created.id).systolic, 120)

        updated = self.service.update_lab_result("u1", created.id, LabResultUpdateRequest(diastolic=95))
        self.assertEqual((updated.systolic, updated.diastolic), (120, 95))

    def test_update_notes_and_date_only(self) -> None:
        created = self.service.add_lab_result("u1", bp(120, 80))
        later = T0 + timedelta(days=1)
        updated = self.service.update_lab_result("u1", created.id, LabResultUpdateRequest(notes="resting", date=later))
        self.assertEqual(updated.notes, "resting")
        self.assertEqual(self.service.get_lab_result("u1", created.id).date, later)

    def test_type_change_requires_new_fields_and_clears_old_ones(self) -> None:
        created = self.service.add_lab_result("u1", bp(120, 80))
        with self.assertRaises(LabResultValidationError):
            self.service.update_lab_result("u1", created.id, LabResultUpdateRequest(type="hba1c"))

        updated = self.service.update_lab_result("u1", created.id, LabResultUpdateRequest(type="hba1c", hba1c=6.0))
        self.assertEqual(updated.type, LabResultType.hba1c)
        self.assertIsNone(updated.systolic)
        self.assertIsNone(updated.diastolic)

    def test_other_user_cannot_update_or_delete(self) -> None:
        created = self.service.add_lab_result("alice", bp(120, 80))

        self.assertIsNone(self.service.update_lab_result("bob", created.id, LabResultUpdateRequest(systolic=130)))
        self.assertFalse(self.service.delete_lab_result("bob", created.id))
        self.assertIsNone(self.service.get_lab_result("bob", created.id))
        self.assertEqual(self.service.get_lab_result("alice", created.id), created)

    def test_delete(self) -> None:
        created = self.service.add_lab_result("u1", bp(120, 80))
        self.assertTrue(self.service.delete_lab_result("u1", created.id))
        self.assertFalse(self.service.delete_lab_result("u1", created.id))
        self.assertEqual(self.service.get_lab_results("u1"), [])


class TestLabTrends(LabResultsTestCase):
    def test_no_trend_for_types_without_results(self) -> None:
        self.assertEqual(self.service.get_lab_trends("u1"), [])
        self.service.add_lab_result("u1", bp(120, 80))
        trends = self.service.get_lab_trends("u1")
        self.assertEqual([t.type for t in trends], [LabResultType.blood_pressure])

    def test_values_sorted_by_date_and_mirror_representative_field(self) -> None:
        self.service.add_lab_result("u1", bp(150, 95, when=T0 + timedelta(days=2)))
        self.service.add_lab_result("u1", bp(130, 85, when=T0))
        self.service.add_lab_result("u1", bp(140, 90, when=T0 + timedelta(days=1)))
        self.service.add_lab_result("u1", LabResultCreateRequest(type="cholesterol", total_cholesterol=210, date=T0))

        trends = {t.type: t for t in self.service.get_lab_trends("u1")}
        bp_values = trends[LabResultType.blood_pressure].values
        self.assertEqual([v.date for v in bp_values], sorted(v.date for v in bp_values))
        self.assertEqual([v.value for v in bp_values], [130, 140, 150])
        self.assertEqual(bp_values[0].diastolic, 85)
        self.assertEqual(trends[LabResultType.cholesterol].values[0].value, 210)


if __name__ == "__main__":
    unittest.main()
