# -*- coding: utf-8 -*-
"""
Shared fixtures: a request runner the test completes by hand and a fake
backend client returning canned API payloads.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from services.academic_api_service import AcademicApiService
from services.query_cache import QueryCache
from services.request_runner import RequestRunner

from api_payloads import enrollment_row, option_row, preview_payload


class ManualRequestRunner(RequestRunner):
    """Queues every call until the test completes it."""

    def __init__(self):
        self.pending = []

    def run(self, fn, on_success, on_error, label="request"):
        self.pending.append((fn, on_success, on_error, label))

    @property
    def labels(self):
        return [call[3] for call in self.pending]

    def complete(self, index=0):
        fn, on_success, on_error, _ = self.pending.pop(index)
        try:
            result = fn()
        except Exception as e:
            on_error(e)
            return
        on_success(result)

    def complete_all(self):
        """Run queued calls, including the ones their callbacks queue."""
        while self.pending:
            self.complete(0)

    def fail(self, index, error):
        _, _, on_error, _ = self.pending.pop(index)
        on_error(error)


class FakeApiClient:
    """Stands in for EduCenterApiClient; records every call."""

    def __init__(self):
        self.calls = []
        self.eligibility = {
            "eligibleForTransfer": True,
            "currentClasses": [enrollment_row()],
            "policyInfo": {"maxTransfersPerCourse": 1},
        }
        self.student_eligibility = {
            "eligibleForTransfer": True,
            "currentClasses": [enrollment_row(class_id=11, branch_id=1, modality="OFFLINE")],
        }
        self.options = [option_row()]
        self.students = [
            {"id": 42, "studentCode": "ST042", "fullName": "Pham Minh D", "email": "d@example.com"},
        ]
        self.branches = [
            {"id": 1, "name": "District 1"},
            {"id": 2, "name": "District 3"},
        ]
        self.preview = preview_payload()
        self.submit_error = None
        self.eligibility_error = None
        self.preview_error = None

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

    def get_my_transfer_eligibility(self):
        self._record("eligibility")
        if self.eligibility_error is not None:
            raise self.eligibility_error
        return self.eligibility

    def get_student_transfer_eligibility(self, student_id):
        self._record("student_eligibility", student_id)
        return self.student_eligibility

    def get_transfer_options(self, current_class_id, target_branch_id=None,
                             target_modality=None, schedule_only=None):
        self._record("options", current_class_id, target_branch_id, target_modality, schedule_only)
        return {"availableClasses": self.options}

    def submit_transfer_request(self, payload):
        self._record("submit", payload)
        if self.submit_error is not None:
            raise self.submit_error
        return {"id": 77, "status": "PENDING", "effectiveDate": payload.get("effectiveDate")}

    def submit_transfer_on_behalf(self, payload):
        self._record("submit_on_behalf", payload)
        if self.submit_error is not None:
            raise self.submit_error
        return {"id": 78, "status": "APPROVED", "student": {"fullName": "Pham Minh D"}}

    def search_students(self, keyword, branch_id=None):
        self._record("search", keyword, branch_id)
        return self.students

    def get_branches(self):
        self._record("branches")
        return self.branches

    def preview_enrollment_import(self, class_id, file_path):
        self._record("preview", class_id, str(file_path))
        if self.preview_error is not None:
            raise self.preview_error
        return self.preview

    def execute_enrollment_import(self, class_id, payload):
        self._record("execute", class_id, payload)
        if self.submit_error is not None:
            raise self.submit_error
        return {"enrolledCount": 2, "totalStudentSessionsCreated": 24}


@pytest.fixture
def runner():
    return ManualRequestRunner()


@pytest.fixture
def client():
    return FakeApiClient()


@pytest.fixture
def cache(qapp, runner):
    return QueryCache(runner, ttl_seconds=60)


@pytest.fixture
def api(cache, client):
    return AcademicApiService(client, cache)


@pytest.fixture
def notifications():
    return []
