# -*- coding: utf-8 -*-

from __future__ import annotations

import csv
import io
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from cardiohealth.app_db import init_app_db
from cardiohealth.exports.service import ExportService
from cardiohealth.labs.models import LabResultCreateRequest
from cardiohealth.labs.service import LabResultsService
from cardiohealth.labs.storage import LabResultStore
from cardiohealth.symptoms.models import SymptomCreateRequest
from cardiohealth.symptoms.service import SymptomService
from cardiohealth.symptoms.storage import SymptomStore

T0 = datetime(2024, 2, 10, 23, 30, tzinfo=timezone.utc)


class TestExportService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="cardio-test-"))
        db_path = self._tmp / "test.db"
        init_app_db(db_path)
        self.labs = LabResultsService(LabResultStore(db_path))
        self.symptoms = SymptomService(SymptomStore(db_path))
        self.exports = ExportService(self.labs, self.symptoms)

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def _seed(self) -> None:
        self.labs.add_lab_result(
            "u1", LabResultCreateRequest(type="bloodPressure", systolic=142, diastolic=91, date=T0, notes="after coffee")
        )
        self.labs.add_lab_result("u1", LabResultCreateRequest(type="hba1c", hba1c=6.0, date=T0))
        self.symptoms.add_symptom(
            "u1", SymptomCreateRequest(type="dizziness", severity=3, duration="5 min", notes='said "mild"', timestamp=T0)
        )
        self.symptoms.add_symptom("u1", SymptomCreateRequest(type="cough", timestamp=T0))

    def test_empty_exports_have_headers_only(self) -> None:
        self.assertEqual(
            self.exports.export_lab_results_csv("u1"),
            "Date,Type,Systolic,Diastolic,Total Cholesterol,LDL,HDL,Triglycerides,HbA1c,Notes\n",
        )
        self.assertEqual(self.exports.export_symptoms_csv("u1"), "Date,Type,Severity,Duration,Notes\n")
        self.assertEqual(self.exports.export_all_csv("u1"), "Date,DataType,Details\n")

    def test_lab_results_rows(self) -> None:
        self._seed()
        lines = self.exports.export_lab_results_csv("u1").splitlines()
        self.assertEqual(lines[1], '"2024-02-10","bloodPressure","142","91","","","","","","after coffee"')
        self.assertEqual(lines[2], '"2024-02-10","hba1c","","","","","","","6",""')

    def test_symptom_rows_escape_quotes(self) -> None:
        self._seed()
        text = self.exports.export_symptoms_csv("u1")
        rows = list(csv.reader(io.StringIO(text)))
        self.assertEqual(rows[1], ["2024-02-10", "dizziness", "3", "5 min", 'said "mild"'])
        self.assertEqual(rows[2], ["2024-02-10", "cough", "", "", ""])

    def test_all_data_lists_labs_then_symptoms(self) -> None:
        self._seed()
        rows = list(csv.reader(io.StringIO(self.exports.export_all_csv("u1"))))
        self.assertEqual(
            rows[1:],
            [
                ["2024-02-10", "Lab Result - bloodPressure", "BP: 142/91 mmHg | Notes: after coffee"],
                ["2024-02-10", "Lab Result - hba1c", "HbA1c: 6%"],
                ["2024-02-10", "Symptom - dizziness", 'Severity: 3/10, Duration: 5 min, Notes: said "mild"'],
                ["2024-02-10", "Symptom - cough", ""],
            ],
        )

    def test_exports_are_owner_scoped(self) -> None:
        self._seed()
        self.assertEqual(self.exports.export_all_csv("someone-else"), "Date,DataType,Details\n")


if __name__ == "__main__":
    unittest.main()
