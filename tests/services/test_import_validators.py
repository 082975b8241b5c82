# -*- coding: utf-8 -*-
"""
Tests for the local enrollment import validators.

Tests cover:
- Student ids carried by a PARTIAL selection
- Strategy checks on the confirmation step
"""

import pytest

from models.enrollment_import import EnrollmentImportPreview, EnrollmentStrategy
from services.translation_manager import tr
from services.wizard.import_validators import selected_student_ids, validate_import_strategy

from api_payloads import preview_payload, preview_row


@pytest.fixture
def preview():
    return EnrollmentImportPreview.from_api(preview_payload())


def partial_state(preview, selected):
    return {
        "preview": preview,
        "strategy": EnrollmentStrategy.PARTIAL,
        "selected_rows": frozenset(selected),
        "override_reason": "",
    }


class TestSelectedStudentIds:

    def test_only_resolved_rows_have_ids(self, preview):
        assert selected_student_ids(preview, {0, 1}) == [7]

    def test_new_students_carry_no_id(self, preview):
        assert selected_student_ids(preview, {1}) == []

    def test_error_rows_are_ignored(self):
        preview = EnrollmentImportPreview.from_api(
            preview_payload(rows=[preview_row("ERROR", student_id=9), preview_row("FOUND", student_id=4)])
        )
        assert selected_student_ids(preview, {0, 1}) == [4]


class TestPartialStrategy:

    def test_selection_with_existing_student(self, preview):
        assert validate_import_strategy(partial_state(preview, {0, 1})).is_valid

    def test_empty_selection(self, preview):
        result = validate_import_strategy(partial_state(preview, set()))
        assert not result.is_valid
        assert tr("validation.import.partial_selection") in result.errors

    def test_selection_of_new_students_only(self, preview):
        result = validate_import_strategy(partial_state(preview, {1}))
        assert not result.is_valid
        assert tr("validation.import.partial_existing_only") in result.errors
