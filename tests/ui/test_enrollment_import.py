# -*- coding: utf-8 -*-
"""
Tests for the enrollment import wizard.

Tests cover:
- Roster preview and default row selection
- Strategy checks (ALL, PARTIAL, OVERRIDE, blocked rosters)
- Execute payloads
- Superseded and late previews
"""

import pytest

from models.enrollment_import import EnrollmentStrategy, ImportRowStatus
from services.exceptions import ApiException, NetworkException
from services.translation_manager import tr
from ui.wizards.enrollment_import.import_controller import EnrollmentImportController
from ui.wizards.enrollment_import.import_steps import ImportSteps
from ui.wizards.framework.wizard_context import WizardStatus

from api_payloads import preview_payload, preview_row

OVERRIDE_REASON = "Head of center approved two extra seats"


@pytest.fixture
def importer(api, runner, notifications):
    controller = EnrollmentImportController(api, runner, notifier=notifications.append)
    controller.open_for_class(30)
    return controller


@pytest.fixture
def roster(tmp_path):
    path = tmp_path / "roster.xlsx"
    path.write_bytes(b"PK")
    return path


@pytest.fixture
def previewed(importer, runner, roster):
    """Importer with the default roster previewed."""
    assert importer.choose_file(roster)
    runner.complete_all()
    return importer


class TestPreview:
    """Upload and preview."""

    def test_preview_request(self, qtbot, importer, runner, client, roster):
        with qtbot.waitSignal(importer.preview_loading_changed) as blocker:
            assert importer.choose_file(roster)
        assert blocker.args == [True]

        runner.complete_all()

        assert client.calls[-1] == ("preview", 30, str(roster))
        assert not importer.preview_loading
        assert [row.status for row in importer.rows()] == [
            ImportRowStatus.FOUND, ImportRowStatus.CREATE, ImportRowStatus.ERROR,
        ]

    def test_defaults_from_preview(self, previewed):
        state = previewed.snapshot()
        assert state["strategy"] is EnrollmentStrategy.ALL
        assert state["selected_rows"] == frozenset({0, 1})

    def test_cannot_advance_without_preview(self, importer, runner, roster):
        importer.choose_file(roster)
        transition = importer.next()
        assert not transition.accepted
        assert tr("validation.import.preview_required") in transition.reasons

    def test_import_needs_a_class(self, api, runner, roster):
        controller = EnrollmentImportController(api, runner)
        controller.open()
        assert controller.choose_file(roster) is False
        assert runner.pending == []

    def test_new_file_supersedes_pending_preview(self, importer, runner, client, tmp_path, roster):
        second = tmp_path / "roster-v2.xlsx"
        second.write_bytes(b"PK")
        importer.choose_file(roster)
        client.preview = preview_payload(rows=[preview_row("FOUND", student_id=9)])

        importer.choose_file(second)
        runner.complete_all()

        assert client.count("preview") == 2
        assert importer.snapshot()["file_path"] == second
        assert [row.resolved_student_id for row in importer.rows()] == [9]

    def test_changing_file_clears_preview(self, previewed, tmp_path):
        other = tmp_path / "other.xlsx"
        previewed.context.set("file_path", other)
        state = previewed.snapshot()
        assert state["preview"] is None
        assert state["strategy"] is None
        assert state["selected_rows"] == frozenset()

    def test_preview_failure_is_reported(self, qtbot, importer, runner, client, roster):
        client.preview_error = NetworkException("Connection refused")
        importer.choose_file(roster)

        with qtbot.waitSignal(importer.error_reported) as blocker:
            runner.complete_all()

        assert blocker.args[0].code == "NETWORK_ERROR"
        assert not importer.preview_loading
        assert importer.preview is None

    def test_preview_after_close_is_dropped(self, importer, runner, roster):
        importer.choose_file(roster)
        importer.close()
        runner.complete_all()
        assert importer.preview is None
        assert importer.status is WizardStatus.CANCELLED


class TestSelection:
    """Row selection and strategies."""

    def test_error_rows_cannot_be_selected(self, qtbot, previewed):
        error_row = previewed.rows()[2]
        with qtbot.waitSignal(previewed.selection_blocked):
            assert previewed.toggle_row(error_row, True) is False
        assert 2 not in previewed.snapshot()["selected_rows"]

    def test_select_rows_ignores_error_rows(self, previewed):
        previewed.select_rows([1, 2])
        assert previewed.snapshot()["selected_rows"] == frozenset({1})

    def test_partial_requires_selection(self, previewed):
        previewed.set_strategy(EnrollmentStrategy.PARTIAL)
        previewed.select_rows([])
        assert previewed.next()
        transition = previewed.next()

        assert not transition.accepted
        assert tr("validation.import.partial_selection") in transition.reasons

    def test_blocked_recommendation(self, importer, runner, client, roster):
        client.preview = preview_payload(recommendation="BLOCKED", available=0)
        importer.choose_file(roster)
        runner.complete_all()
        assert importer.next()

        transition = importer.next()

        assert not transition.accepted
        assert tr("validation.import.blocked") in transition.reasons

    def test_roster_without_valid_rows(self, importer, runner, client, roster):
        client.preview = preview_payload(rows=[preview_row("ERROR")])
        importer.choose_file(roster)
        runner.complete_all()
        importer.next()

        assert tr("validation.import.no_valid_rows") in importer.next().reasons


class TestExecute:
    """Confirm step and execution."""

    def _to_confirm(self, controller):
        assert controller.next()
        assert controller.next()
        assert controller.current_step_id == ImportSteps.CONFIRM

    def test_enroll_all(self, previewed, runner, client, notifications):
        self._to_confirm(previewed)
        assert previewed.submit()
        runner.complete_all()

        _, class_id, payload = next(call for call in client.calls if call[0] == "execute")
        assert class_id == 30
        assert payload["strategy"] == "ALL"
        assert [s["email"] for s in payload["students"]] == ["b@example.com", "c@example.com", ""]
        assert "selectedStudentIds" not in payload
        assert notifications[0].enrolled_count == 2
        assert notifications[0].total_student_sessions_created == 24
        assert previewed.status is WizardStatus.TERMINAL

    def test_enroll_partial(self, previewed, runner, client):
        previewed.set_strategy(EnrollmentStrategy.PARTIAL)
        previewed.select_rows([0])
        self._to_confirm(previewed)
        previewed.submit()
        runner.complete_all()

        payload = next(call[2] for call in client.calls if call[0] == "execute")
        assert payload["strategy"] == "PARTIAL"
        assert len(payload["students"]) == 3
        assert payload["selectedStudentIds"] == [7]

    def test_partial_of_new_students_only_is_blocked(self, previewed):
        previewed.set_strategy(EnrollmentStrategy.PARTIAL)
        previewed.select_rows([1])
        assert previewed.next()

        transition = previewed.next()

        assert not transition.accepted
        assert tr("validation.import.partial_existing_only") in transition.reasons
        assert previewed.current_step_id == ImportSteps.PREVIEW

    def test_partial_gate_checks_student_ids(self, previewed):
        previewed.set_strategy(EnrollmentStrategy.PARTIAL)
        self._to_confirm(previewed)
        assert previewed.gate.can_submit

        previewed.select_rows([1])

        assert not previewed.gate.can_submit
        assert previewed.submit() is False

    def test_override_needs_reason(self, importer, runner, client, roster):
        client.preview = preview_payload(recommendation="OVERRIDE_AVAILABLE", available=1)
        importer.choose_file(roster)
        runner.complete_all()
        assert importer.snapshot()["strategy"] is EnrollmentStrategy.OVERRIDE
        self._to_confirm(importer)

        assert not importer.gate.can_submit
        importer.set_override_reason(OVERRIDE_REASON)
        assert importer.gate.can_submit

        importer.submit()
        runner.complete_all()
        payload = next(call[2] for call in client.calls if call[0] == "execute")
        assert payload["overrideReason"] == OVERRIDE_REASON

    def test_execute_failure_keeps_roster(self, previewed, runner, client, notifications):
        client.submit_error = ApiException("Server Error", 500)
        self._to_confirm(previewed)
        previewed.submit()
        runner.complete_all()

        assert previewed.last_error.code == "INTERNAL_SERVER_ERROR"
        assert previewed.current_step_id == ImportSteps.CONFIRM
        assert previewed.preview is not None
        assert notifications == []
