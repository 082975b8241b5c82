# -*- coding: utf-8 -*-
"""Fixtures around the sample flow of sample_flow.py."""

import pytest

from ui.wizards.framework.step_navigator import StepNavigator
from ui.wizards.framework.step_registry import StepRegistry

from sample_flow import SampleContext, build_sample_steps


@pytest.fixture
def sample_registry():
    return StepRegistry(build_sample_steps())


@pytest.fixture
def sample_context(qapp, sample_registry):
    return SampleContext(sample_registry)


@pytest.fixture
def navigator(sample_context):
    return StepNavigator(sample_context)


@pytest.fixture
def walk_to_confirm(sample_context, navigator):
    """Fill every step and stop on the submit step."""
    def walk(note="ready to go"):
        sample_context.set("source", "class-10")
        assert navigator.next_step()
        sample_context.set("kind", "schedule")
        assert navigator.next_step()
        sample_context.update(target="class-20", date="2030-01-07")
        assert navigator.next_step()
        sample_context.set("note", note)
        assert sample_context.current_step_id == "confirm"
    return walk
