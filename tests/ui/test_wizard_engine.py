# -*- coding: utf-8 -*-
"""
Tests for the wizard engine.

Tests cover:
- Step registry validity
- Context fields and cascading invalidation
- Forward, branching and back navigation
- Chain re-validation
"""

import random

import pytest

from services.exceptions import ConfigurationError, StepNotFoundError
from ui.wizards.framework.step_navigator import StepNavigator
from ui.wizards.framework.step_registry import StepDefinition, StepKind, StepRegistry
from ui.wizards.framework.wizard_context import WizardContext, WizardStatus

from sample_flow import SampleContext


class TestStepRegistry:
    """Test the step catalogue."""

    def test_registry_keeps_order(self, sample_registry):
        assert sample_registry.ids() == ["source", "kind", "target", "confirm", "help"]
        assert len(sample_registry) == 5
        assert sample_registry.first().step_id == "source"
        assert sample_registry.last().step_id == "help"

    def test_lookup_by_id_and_index(self, sample_registry):
        assert sample_registry.index_of("target") == 2
        assert sample_registry.step_at(3).step_id == "confirm"
        assert sample_registry.get("kind").title == "Kind"
        assert "help" in sample_registry
        assert "missing" not in sample_registry

    def test_unknown_step_raises_not_found(self, sample_registry):
        with pytest.raises(StepNotFoundError):
            sample_registry.get("missing")
        with pytest.raises(StepNotFoundError):
            sample_registry.step_at(9)

    def test_empty_registry_rejected(self):
        with pytest.raises(ConfigurationError):
            StepRegistry([])

    def test_duplicate_ids_rejected(self):
        steps = [StepDefinition("a", "A"), StepDefinition("a", "Again")]
        with pytest.raises(ConfigurationError):
            StepRegistry(steps)

    def test_single_submit_step(self, sample_registry):
        assert sample_registry.submit_step().step_id == "confirm"
        steps = [
            StepDefinition("a", "A", kind=StepKind.SUBMIT),
            StepDefinition("b", "B", kind=StepKind.SUBMIT),
        ]
        with pytest.raises(ConfigurationError):
            StepRegistry(steps)

    def test_final_steps(self, sample_registry):
        assert sample_registry.is_final("confirm")
        assert sample_registry.is_final("help")
        assert not sample_registry.is_final("source")

    def test_submit_step_defaults_to_last(self):
        registry = StepRegistry([StepDefinition("a", "A"), StepDefinition("b", "B")])
        assert registry.submit_step().step_id == "b"


class TestWizardContext:
    """Test selection fields and cascading invalidation."""

    def test_initialized_with_defaults(self, sample_context):
        assert sample_context.current_step_id == "source"
        assert sample_context.status is WizardStatus.IDLE
        assert sample_context.get("note") == ""
        assert sample_context.get("target") is None
        assert sample_context.reference_number.startswith("SMP-")

    def test_initialize_bumps_generation(self, sample_context):
        generation = sample_context.generation
        sample_context.initialize()
        assert sample_context.generation == generation + 1

    def test_changing_upstream_clears_dependents(self, sample_context):
        sample_context.update(source="class-10", kind="schedule", target="class-20", date="2030-01-07")

        cleared = sample_context.set("source", "class-11")

        assert set(cleared) == {"kind", "target", "date"}
        assert sample_context.get("kind") is None
        assert sample_context.get("target") is None
        assert sample_context.get("date") is None

    def test_cascade_is_transitive_and_scoped(self, sample_context):
        sample_context.update(source="class-10", target="class-20", date="2030-01-07", note="keep me")

        sample_context.set("target", "class-21")

        assert sample_context.get("date") is None
        assert sample_context.get("source") == "class-10"
        assert sample_context.get("note") == "keep me"

    def test_same_value_does_not_cascade(self, sample_context):
        sample_context.update(source="class-10", target="class-20")
        assert sample_context.set("source", "class-10") == []
        assert sample_context.get("target") == "class-20"

    def test_cascade_emits_fields_cleared(self, qtbot, sample_context):
        sample_context.update(source="class-10", target="class-20")
        with qtbot.waitSignal(sample_context.fields_cleared) as blocker:
            sample_context.set("source", "class-11")
        assert blocker.args == [["target"]]

    def test_unknown_field_raises(self, sample_context):
        with pytest.raises(KeyError):
            sample_context.set("unknown", 1)
        with pytest.raises(KeyError):
            sample_context.get("unknown")

    def test_undeclared_dependency_rejected(self, qapp, sample_registry):
        class BrokenContext(WizardContext):
            FIELDS = {"a": None}
            DEPENDENCIES = {"a": ("b",)}

        with pytest.raises(KeyError):
            BrokenContext(sample_registry)

    def test_snapshot_is_read_only(self, sample_context):
        snapshot = sample_context.snapshot()
        with pytest.raises(TypeError):
            snapshot["source"] = "x"

    def test_view_only_exposes_requested_fields(self, sample_context):
        view = sample_context.view(("source",))
        assert dict(view) == {"source": None}
        with pytest.raises(KeyError):
            view["target"]

    def test_clear_resets_to_defaults(self, sample_context):
        sample_context.update(source="class-10", target="class-20", date="2030-01-07")
        cleared = sample_context.clear(["target"])
        assert cleared == ["target", "date"]

    def test_move_to_activates_run(self, sample_context):
        sample_context.move_to("kind")
        assert sample_context.status is WizardStatus.ACTIVE
        with pytest.raises(StepNotFoundError):
            sample_context.move_to("missing")

    def test_cancel_resets_everything(self, sample_context):
        sample_context.set("source", "class-10")
        sample_context.move_to("kind")
        sample_context.cancel()

        assert sample_context.status is WizardStatus.CANCELLED
        assert sample_context.current_step_id == "source"
        assert sample_context.get("source") is None

    def test_cancel_after_terminal_is_noop(self, sample_context):
        sample_context.mark_terminal()
        sample_context.cancel()
        assert sample_context.status is WizardStatus.TERMINAL

    def test_to_dict(self, sample_context):
        sample_context.set("source", "class-10")
        data = sample_context.to_dict()
        assert data["current_step"] == "source"
        assert data["data"]["source"] == "class-10"
        assert data["status"] == "idle"


class TestNavigation:
    """Test wizard navigation between steps."""

    def test_next_blocked_by_predicate(self, qtbot, navigator, sample_context):
        with qtbot.waitSignal(navigator.transition_blocked):
            transition = navigator.next_step()

        assert not transition.accepted
        assert transition.reasons == ("Pick a source",)
        assert sample_context.current_step_id == "source"

    def test_next_advances_by_index(self, navigator, sample_context):
        sample_context.set("source", "class-10")
        transition = navigator.next_step()

        assert transition.accepted and transition.moved
        assert sample_context.current_step_id == "kind"
        assert sample_context.history == ["source"]
        assert sample_context.is_step_completed("source")

    def test_resolver_branches(self, navigator, sample_context):
        sample_context.set("source", "class-10")
        navigator.next_step()
        sample_context.set("kind", "branch")

        navigator.next_step()

        assert sample_context.current_step_id == "help"

    def test_next_on_exit_step_is_noop(self, navigator, sample_context):
        sample_context.set("source", "class-10")
        navigator.next_step()
        sample_context.set("kind", "branch")
        navigator.next_step()

        transition = navigator.next_step()

        assert not transition.accepted
        assert sample_context.current_step_id == "help"
        assert not navigator.can_go_next()

    def test_next_on_submit_step_is_noop(self, navigator, sample_context, walk_to_confirm):
        walk_to_confirm()
        assert not navigator.next_step().accepted
        assert sample_context.current_step_id == "confirm"

    def test_previous_follows_visited_path(self, navigator, sample_context):
        sample_context.set("source", "class-10")
        navigator.next_step()
        sample_context.set("kind", "branch")
        navigator.next_step()

        transition = navigator.previous_step()

        assert transition.to_step == "kind"
        assert sample_context.current_step_id == "kind"

    def test_previous_applies_resets(self, navigator, sample_context, walk_to_confirm):
        walk_to_confirm()
        navigator.previous_step()
        assert sample_context.current_step_id == "target"

        transition = navigator.previous_step()

        assert sample_context.current_step_id == "kind"
        assert set(transition.cleared) == {"target", "date"}
        assert sample_context.get("target") is None
        assert sample_context.get("kind") == "schedule"

    def test_previous_to_first_step_clears_later_fields(self, navigator, sample_context, walk_to_confirm):
        walk_to_confirm()
        navigator.goto_step("source")
        assert sample_context.get("source") == "class-10"
        assert sample_context.get("kind") is None
        assert sample_context.get("note") == ""

    def test_previous_on_first_step_is_noop(self, navigator, sample_context):
        transition = navigator.previous_step()
        assert not transition.accepted
        assert sample_context.current_step_id == "source"
        assert not navigator.can_go_previous()

    def test_previous_on_first_step_requests_close(self, qtbot, sample_context):
        navigator = StepNavigator(sample_context, close_on_first_previous=True)
        with qtbot.waitSignal(navigator.close_requested):
            navigator.previous_step()
        assert navigator.can_go_previous()

    def test_goto_forward_requires_predicates(self, navigator, sample_context):
        assert not navigator.goto_step("target").accepted

        sample_context.update(source="class-10", kind="schedule")
        transition = navigator.goto_step("target")

        assert transition.accepted
        assert sample_context.history == ["source", "kind"]

    def test_goto_unreachable_branch_rejected(self, navigator, sample_context):
        sample_context.update(source="class-10", kind="schedule")
        assert not navigator.goto_step("help").accepted

    def test_goto_unknown_step_raises(self, navigator):
        with pytest.raises(StepNotFoundError):
            navigator.goto_step("missing")

    def test_resolver_to_unknown_step_is_configuration_error(self, qapp):
        steps = [
            StepDefinition("a", "A", resolve_next=lambda state: "nowhere"),
            StepDefinition("b", "B"),
        ]
        context = SampleContext(StepRegistry(steps))
        with pytest.raises(ConfigurationError):
            StepNavigator(context).next_step()

    def test_predicate_cannot_read_undeclared_fields(self, qapp):
        steps = [
            StepDefinition("a", "A", can_advance=lambda state: state["note"] == "", reads=("source",)),
            StepDefinition("b", "B"),
        ]
        context = SampleContext(StepRegistry(steps))
        with pytest.raises(KeyError):
            StepNavigator(context).next_step()

    def test_validate_chain(self, navigator, sample_context, walk_to_confirm):
        walk_to_confirm()
        assert navigator.validate_chain().is_valid

        sample_context.set("verified", False)

        result = navigator.validate_chain()
        assert not result.is_valid
        assert "Source not verified" in result.errors

    def test_reset(self, navigator, sample_context, walk_to_confirm):
        walk_to_confirm()
        navigator.reset()
        assert sample_context.current_step_id == "source"
        assert sample_context.history == []

    def test_progress(self, navigator, sample_context):
        assert navigator.get_progress_percentage() == 0.0
        sample_context.set("source", "class-10")
        navigator.next_step()
        assert navigator.get_progress_percentage() == 25.0

    def test_current_step_always_registered(self, navigator, sample_context):
        rng = random.Random(7)
        values = {
            "source": ["class-10", None],
            "kind": ["schedule", "branch", None],
            "target": ["class-20", None],
            "date": ["2030-01-07", None],
            "note": ["ok!", ""],
        }
        for _ in range(300):
            action = rng.choice(["next", "previous", "set"])
            if action == "next":
                navigator.next_step()
            elif action == "previous":
                navigator.previous_step()
            else:
                field = rng.choice(list(values))
                sample_context.set(field, rng.choice(values[field]))
            assert sample_context.current_step_id in sample_context.registry
            assert all(step in sample_context.registry for step in sample_context.history)
