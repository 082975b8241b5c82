# -*- coding: utf-8 -*-
"""Tests for the error boundary around wizard callbacks."""

import pytest

from ui.wizards.framework.error_boundary import ErrorBoundary
from ui.wizards.transfer.transfer_controller import TransferController


@pytest.fixture
def boundary(qapp):
    return ErrorBoundary("SampleWizard")


class TestErrorBoundary:

    def test_result_passes_through(self, boundary):
        assert boundary.protect(lambda x: x * 2)(21) == 42
        assert not boundary.has_errors

    def test_exception_becomes_fallback(self, qtbot, boundary):
        def explode():
            raise RuntimeError("boom")

        with qtbot.waitSignal(boundary.error_occurred) as blocker:
            assert boundary.protect(explode, "loading", fallback=[])() == []

        assert blocker.args == ["loading", "RuntimeError"]
        assert boundary.errors[0][0] == "loading"

    def test_keyboard_interrupt_propagates(self, boundary):
        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            boundary.protect(interrupt)()

    def test_reset(self, boundary):
        boundary.protect(lambda: 1 / 0)()
        boundary.reset()
        assert boundary.errors == []


def test_failing_notifier_is_contained(api, runner):
    def notifier(result):
        raise ValueError("toast failed")

    controller = TransferController(api, runner, notifier=notifier)
    controller.open()

    controller.notify_success({"id": 1})

    assert controller.boundary.has_errors
    controller.open()
    assert not controller.boundary.has_errors
