# -*- coding: utf-8 -*-
"""
Async Step Gate - enables the wizard's primary action.

Combines local form validity with the state of the remote query the submit
step depends on, and runs the submission mutation exactly once per click.
The footer observes ``state_changed`` instead of polling the step.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from services.error_mapper import TransferError, map_transfer_error
from services.query_cache import QueryCache, QueryState
from services.request_runner import RequestRunner
from utils.logger import get_logger
from .base_step import StepValidationResult
from .step_navigator import StepNavigator
from .wizard_context import WizardStatus

logger = get_logger(__name__)

FormValidator = Callable[[Mapping[str, Any]], Any]
PayloadBuilder = Callable[[Mapping[str, Any]], Dict[str, Any]]


@dataclass(frozen=True)
class GateState:
    """What the footer needs to render the primary action."""
    can_submit: bool = False
    is_loading: bool = False
    form_valid: bool = False
    has_data: bool = False
    is_error: bool = False
    errors: Tuple[str, ...] = ()


class AsyncStepGate(QObject):
    """
    Gate of the submit step.

    can_submit = form_valid and has_data and not is_loading and not is_error
    """

    state_changed = pyqtSignal(object)  # GateState
    submitting = pyqtSignal()
    submitted = pyqtSignal(object)  # mutation result
    submit_failed = pyqtSignal(object)  # TransferError
    submit_blocked = pyqtSignal(object)  # StepValidationResult

    def __init__(
        self,
        navigator: StepNavigator,
        mutation: Callable[[Dict[str, Any]], Any],
        payload_builder: PayloadBuilder,
        runner: RequestRunner,
        cache: Optional[QueryCache] = None,
        invalidates: Iterable[str] = (),
        form_validator: Optional[FormValidator] = None,
        stale_reference_step: Optional[str] = None,
        stale_reference_clears: Iterable[str] = (),
        on_success: Optional[Callable[[Any], None]] = None,
        label: str = "submit",
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.navigator = navigator
        self.context = navigator.context
        self.registry = navigator.registry
        self.mutation = mutation
        self.payload_builder = payload_builder
        self.runner = runner
        self.cache = cache
        self.invalidates = tuple(invalidates)
        self.form_validator = form_validator
        self.stale_reference_step = stale_reference_step
        self.stale_reference_clears = tuple(stale_reference_clears)
        self.on_success = on_success
        self.label = label

        self.last_error: Optional[TransferError] = None
        self.last_result: Any = None
        self._query_key: Optional[str] = None
        self._query_state: Optional[QueryState] = None
        self._in_flight = False
        self._dispatch_id = 0
        self._state = GateState()

        self.context.state_changed.connect(self.refresh)
        if self.cache is not None:
            self.cache.query_updated.connect(self._on_query_updated)
        self.refresh()

    # =========================================================================
    # Remote dependency
    # =========================================================================

    def bind_query(self, key: Optional[str]):
        """Depend on a cached query (None: no remote dependency)."""
        self._query_key = key
        self._query_state = self.cache.state(key) if (key and self.cache is not None) else None
        self.refresh()

    def set_query_state(self, state: Optional[QueryState]):
        """Depend on a query state supplied directly."""
        self._query_key = None
        self._query_state = state
        self.refresh()

    def _on_query_updated(self, key: str, state: QueryState):
        if key == self._query_key:
            self._query_state = state
            self.refresh()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def can_submit(self) -> bool:
        return self._state.can_submit

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def evaluate_form(self) -> StepValidationResult:
        step = self.registry.submit_step()
        view = self.context.view(step.reads)
        if self.form_validator is not None:
            return StepValidationResult.coerce(self.form_validator(view))
        return step.evaluate(view)

    def compute(self) -> GateState:
        form = self.evaluate_form()
        query = self._query_state
        has_data = True if query is None else query.has_data
        query_loading = False if query is None else query.is_loading
        is_error = False if query is None else query.is_error
        is_loading = self._in_flight or query_loading
        return GateState(
            can_submit=form.is_valid and has_data and not is_loading and not is_error,
            is_loading=is_loading,
            form_valid=form.is_valid,
            has_data=has_data,
            is_error=is_error,
            errors=tuple(form.errors),
        )

    def refresh(self):
        state = self.compute()
        if state != self._state:
            self._state = state
            self.state_changed.emit(state)

    # =========================================================================
    # Submission
    # =========================================================================

    def submit(self) -> bool:
        """
        Dispatch the mutation once.

        Returns:
            True if a request was dispatched
        """
        if self._in_flight:
            logger.debug("Submit ignored: request already in flight")
            return False

        state = self.compute()
        if not state.can_submit:
            logger.debug(f"Submit ignored: gate closed {state}")
            return False

        if self.context.current_step_id != self.registry.submit_step().step_id:
            logger.warning(f"Submit requested from non-submit step {self.context.current_step_id}")
            return False

        chain = self.navigator.validate_chain()
        if not chain.is_valid:
            self.submit_blocked.emit(chain)
            return False

        payload = self.payload_builder(self.context.snapshot())
        generation = self.context.generation
        self._dispatch_id += 1
        dispatch_id = self._dispatch_id
        self._in_flight = True
        self.last_error = None
        self.refresh()
        self.submitting.emit()
        logger.info(f"Submitting {self.label} ({self.context.reference_number})")

        self.runner.run(
            lambda: self.mutation(payload),
            lambda result: self._on_success(result, generation, dispatch_id),
            lambda error: self._on_error(error, generation, dispatch_id),
            label=self.label,
        )
        return True

    def _finish(self, dispatch_id: int) -> bool:
        if dispatch_id != self._dispatch_id:
            return False
        self._in_flight = False
        return True

    def _on_success(self, result: Any, generation: int, dispatch_id: int):
        if not self._finish(dispatch_id) or generation != self.context.generation:
            logger.info(f"Dropping {self.label} result of a closed wizard run")
            self.refresh()
            return

        logger.info(f"{self.label} succeeded")
        self.last_result = result
        if self.cache is not None and self.invalidates:
            self.cache.invalidate_tags(self.invalidates)
        self.context.mark_terminal()
        self.submitted.emit(result)
        if self.on_success is not None:
            self.on_success(result)
        self.context.teardown(WizardStatus.TERMINAL)
        self.refresh()

    def _on_error(self, error: Exception, generation: int, dispatch_id: int):
        if not self._finish(dispatch_id) or generation != self.context.generation:
            logger.info(f"Dropping {self.label} error of a closed wizard run: {error}")
            self.refresh()
            return

        mapped = map_transfer_error(error)
        logger.warning(f"{self.label} rejected: {mapped.code} ({mapped.message})")
        self.last_error = mapped

        if mapped.stale_reference and self.stale_reference_step:
            # The cached options still show the rejected class as available
            if self._query_key and self.cache is not None:
                self.cache.refetch(self._query_key)
            self.navigator.goto_step(self.stale_reference_step)
            if self.stale_reference_clears:
                self.context.clear(self.stale_reference_clears)

        self.refresh()
        self.submit_failed.emit(mapped)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def reset(self):
        """Forget any in-flight dispatch (wizard closed or reopened)."""
        self._dispatch_id += 1
        self._in_flight = False
        self.last_error = None
        self.last_result = None
        self.refresh()
