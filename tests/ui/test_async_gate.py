# -*- coding: utf-8 -*-
"""
Tests for the Async Step Gate.

Tests cover:
- can_submit truth table
- Single dispatch while a submission is in flight
- Success: terminal state, notification, cache invalidation, reset
- Rejection: state kept, error mapped, stale references sent back
- Results arriving after the run was closed
"""

import pytest

from services.error_mapper import ErrorActionType, ErrorSeverity
from services.exceptions import ApiException, NetworkException
from services.query_cache import QueryEndpoint, QueryState, QueryStatus
from ui.wizards.framework.async_gate import AsyncStepGate
from ui.wizards.framework.wizard_context import WizardStatus

READY = QueryState(status=QueryStatus.SUCCESS, data=["class-20"])


class RecordingMutation:
    def __init__(self):
        self.payloads = []
        self.error = None

    def __call__(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return {"id": 1}


@pytest.fixture
def mutation():
    return RecordingMutation()


@pytest.fixture
def gate(navigator, runner, cache, mutation, notifications):
    return AsyncStepGate(
        navigator,
        mutation=mutation,
        payload_builder=lambda state: {"target": state["target"], "note": state["note"].strip()},
        runner=runner,
        cache=cache,
        invalidates=("StudentRequests",),
        stale_reference_step="target",
        stale_reference_clears=("target",),
        on_success=notifications.append,
    )


class TestGateState:
    """can_submit = form_valid and has_data and not is_loading and not is_error."""

    def test_all_conditions_hold(self, gate, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)

        assert gate.can_submit
        assert gate.state.form_valid and gate.state.has_data
        assert not gate.is_loading

    def test_invalid_form_closes_gate(self, gate, walk_to_confirm):
        walk_to_confirm(note="")
        gate.set_query_state(READY)

        assert not gate.can_submit
        assert "Note too short" in gate.state.errors

    @pytest.mark.parametrize("query_state", [
        QueryState(status=QueryStatus.SUCCESS, data=None),
        QueryState(status=QueryStatus.SUCCESS, data=["class-20"], is_fetching=True),
        QueryState(status=QueryStatus.ERROR, data=["class-20"], error=RuntimeError("boom")),
    ], ids=["no-data", "loading", "error"])
    def test_remote_state_closes_gate(self, gate, walk_to_confirm, query_state):
        walk_to_confirm()
        gate.set_query_state(query_state)

        assert gate.state.form_valid
        assert not gate.can_submit

    def test_no_remote_dependency_counts_as_data(self, gate, walk_to_confirm):
        walk_to_confirm()
        gate.bind_query(None)
        assert gate.can_submit

    def test_follows_bound_cache_query(self, gate, cache, runner, walk_to_confirm):
        cache.register(QueryEndpoint("options", lambda: ["class-20"], provides=("TransferOptions",)))
        walk_to_confirm()
        key = cache.subscribe("options")
        gate.bind_query(key)
        assert gate.is_loading and not gate.can_submit

        runner.complete_all()

        assert gate.can_submit

    def test_state_changed_emitted(self, qtbot, gate, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(QueryState(status=QueryStatus.LOADING, is_fetching=True))
        assert not gate.can_submit

        with qtbot.waitSignal(gate.state_changed) as blocker:
            gate.set_query_state(READY)
        assert blocker.args[0].can_submit


class TestGateSubmit:
    """Test submission dispatch and its outcomes."""

    def test_double_submit_dispatches_once(self, gate, runner, mutation, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)

        assert gate.submit() is True
        assert gate.is_loading
        assert gate.submit() is False
        assert len(runner.pending) == 1

        runner.complete_all()
        assert len(mutation.payloads) == 1

    def test_submit_ignored_when_gate_closed(self, gate, runner, walk_to_confirm):
        walk_to_confirm(note="")
        gate.set_query_state(READY)
        assert gate.submit() is False
        assert runner.pending == []

    def test_submit_only_from_submit_step(self, gate, navigator, runner, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)
        navigator.previous_step()

        assert gate.submit() is False
        assert runner.pending == []

    def test_chain_revalidated_before_dispatch(self, qtbot, gate, runner, sample_context, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)
        sample_context.set("verified", False)
        assert gate.can_submit

        with qtbot.waitSignal(gate.submit_blocked):
            assert gate.submit() is False
        assert runner.pending == []

    def test_success_ends_run(self, qtbot, gate, runner, mutation, sample_context,
                              notifications, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)
        gate.submit()

        with qtbot.waitSignal(gate.submitted) as blocker:
            runner.complete(0)

        assert blocker.args == [{"id": 1}]
        assert mutation.payloads == [{"target": "class-20", "note": "ready to go"}]
        assert notifications == [{"id": 1}]
        assert sample_context.status is WizardStatus.TERMINAL
        assert sample_context.current_step_id == "source"
        assert sample_context.get("target") is None
        assert not gate.is_loading

    def test_success_invalidates_tags(self, gate, cache, runner, walk_to_confirm):
        cache.register(QueryEndpoint("requests", lambda: ["req-1"], provides=("StudentRequests",)))
        key = cache.subscribe("requests")
        runner.complete_all()
        walk_to_confirm()
        gate.set_query_state(READY)

        gate.submit()
        runner.complete(0)

        assert key in runner.labels

    def test_rejection_keeps_entered_state(self, qtbot, gate, runner, mutation, sample_context,
                                           notifications, walk_to_confirm):
        mutation.error = ApiException(
            "Bad Request", 400, {"success": False, "message": "TRF_PENDING_EXISTS"}
        )
        walk_to_confirm()
        gate.set_query_state(READY)
        gate.submit()

        with qtbot.waitSignal(gate.submit_failed) as blocker:
            runner.complete(0)

        error = blocker.args[0]
        assert error.code == "TRF_PENDING_EXISTS"
        assert error.action.type is ErrorActionType.CONTACT
        assert error.severity is ErrorSeverity.WARNING
        assert gate.last_error is error
        assert sample_context.status is WizardStatus.ACTIVE
        assert sample_context.current_step_id == "confirm"
        assert sample_context.get("note") == "ready to go"
        assert notifications == []
        assert gate.can_submit

    def test_network_failure_offers_retry(self, gate, runner, mutation, walk_to_confirm):
        mutation.error = NetworkException("Connection refused")
        walk_to_confirm()
        gate.set_query_state(READY)
        gate.submit()
        runner.complete(0)

        assert gate.last_error.code == "NETWORK_ERROR"
        assert gate.last_error.action.type is ErrorActionType.RETRY

    def test_stale_reference_returns_to_target(self, gate, runner, mutation, sample_context, walk_to_confirm):
        mutation.error = ApiException("Conflict", 409)
        walk_to_confirm()
        gate.set_query_state(READY)
        gate.submit()
        runner.complete(0)

        assert gate.last_error.stale_reference
        assert sample_context.current_step_id == "target"
        assert sample_context.get("target") is None
        assert sample_context.get("date") is None
        assert sample_context.get("note") == "ready to go"
        assert sample_context.get("kind") == "schedule"

    def test_result_after_close_is_dropped(self, gate, runner, sample_context, notifications, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)
        gate.submit()

        sample_context.cancel()
        runner.complete(0)

        assert notifications == []
        assert sample_context.status is WizardStatus.CANCELLED
        assert not gate.is_loading

    def test_reset_forgets_in_flight_dispatch(self, gate, runner, notifications, walk_to_confirm):
        walk_to_confirm()
        gate.set_query_state(READY)
        gate.submit()

        gate.reset()
        runner.complete(0)

        assert notifications == []
        assert not gate.in_flight
