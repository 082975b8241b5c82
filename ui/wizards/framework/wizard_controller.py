# -*- coding: utf-8 -*-
"""
Wizard Controller - headless driver of one wizard.

Owns the registry, context, navigator and gate of a flow and the cache
subscriptions its steps need. Dialogs and tests drive a wizard through
this class only; it never touches widgets.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from PyQt5.QtCore import QObject, pyqtSignal

from services.error_mapper import TransferError
from services.query_cache import QueryCache, QueryState
from services.request_runner import RequestRunner
from utils.logger import get_logger
from .async_gate import AsyncStepGate
from .error_boundary import ErrorBoundary
from .step_navigator import StepNavigator, Transition
from .step_registry import StepRegistry
from .wizard_context import WizardContext, WizardStatus

logger = get_logger(__name__)


class ListState(str, Enum):
    """What a list-backed step should render."""
    IDLE = "idle"  # query not started (filters incomplete)
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


class WizardController(QObject):
    """
    Base class for wizard controllers.

    Subclasses must implement:
    - create_registry(): the flow's steps
    - create_context(registry): the flow's context
    - create_gate(navigator): the submit step's gate
    Optional hooks:
    - on_opened(): start the first queries
    - on_step_entered(step_id): start queries a step needs
    """

    # Signals
    wizard_completed = pyqtSignal(object)  # mutation result
    wizard_cancelled = pyqtSignal()
    error_reported = pyqtSignal(object)  # TransferError
    data_changed = pyqtSignal(str)  # query slot whose state changed

    close_on_first_previous = False

    def __init__(self, api, runner: RequestRunner,
                 notifier: Optional[Callable[[Any], None]] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.api = api
        self.cache: QueryCache = api.cache
        self.runner = runner
        self.notifier = notifier
        self.registry = self.create_registry()
        self.context = self.create_context(self.registry)
        self.navigator = StepNavigator(self.context, close_on_first_previous=self.close_on_first_previous)
        self.gate = self.create_gate(self.navigator)
        self.boundary = ErrorBoundary(type(self).__name__, self)
        self._queries: Dict[str, str] = {}

        self.navigator.step_changed.connect(self._on_step_changed)
        self.gate.submitted.connect(self._on_submitted)
        self.gate.submit_failed.connect(self.error_reported)
        self.cache.query_updated.connect(self._on_query_updated)

    # =========================================================================
    # Factory methods
    # =========================================================================

    def create_registry(self) -> StepRegistry:
        raise NotImplementedError

    def create_context(self, registry: StepRegistry) -> WizardContext:
        raise NotImplementedError

    def create_gate(self, navigator: StepNavigator) -> AsyncStepGate:
        raise NotImplementedError

    def on_opened(self):
        """Start the queries the first step needs."""

    def on_step_entered(self, step_id: str):
        """Start the queries ``step_id`` needs."""

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self):
        """Start a fresh run."""
        self._release_queries()
        self.gate.bind_query(None)
        self.gate.reset()
        self.context.initialize()
        self.boundary.reset()
        logger.info(f"{type(self).__name__} opened ({self.context.reference_number})")
        self.boundary.protect(self.on_opened, "opening")()

    def close(self):
        """Cancel the run. Late results of in-flight requests are dropped."""
        if not self.context.is_closed:
            self.context.cancel()
            self.wizard_cancelled.emit()
        self.gate.bind_query(None)
        self.gate.reset()
        self._release_queries()

    @property
    def status(self) -> WizardStatus:
        return self.context.status

    @property
    def current_step_id(self) -> str:
        return self.context.current_step_id

    def snapshot(self) -> Mapping[str, Any]:
        return self.context.snapshot()

    # =========================================================================
    # Navigation
    # =========================================================================

    def next(self) -> Transition:
        return self.navigator.next_step()

    def previous(self) -> Transition:
        return self.navigator.previous_step()

    def goto(self, step_id: str) -> Transition:
        return self.navigator.goto_step(step_id)

    def submit(self) -> bool:
        return self.gate.submit()

    def primary_action(self):
        """Footer's main button: submit on the submit step, next elsewhere."""
        if self.context.current_step_id == self.registry.submit_step().step_id:
            return self.submit()
        return self.next()

    def on_focus(self) -> int:
        """Window regained focus: refresh observed data."""
        return self.cache.refetch_on_focus()

    def _on_step_changed(self, old_step: str, new_step: str):
        self.boundary.protect(self.on_step_entered, f"entering {new_step}")(new_step)

    def _on_submitted(self, result: Any):
        logger.info(f"{type(self).__name__} completed ({self.context.reference_number})")
        self.wizard_completed.emit(result)

    def notify_success(self, result: Any):
        """Hand a successful submission to the notification collaborator."""
        if self.notifier is not None:
            self.boundary.protect(self.notifier, "success notification")(result)

    # =========================================================================
    # Queries
    # =========================================================================

    def watch(self, slot: str, key: Optional[str]) -> Optional[str]:
        """
        Observe ``key`` under ``slot``, replacing the previous subscription.

        ``key`` must come from a cache subscribe call; the slot owns that
        subscription from now on.
        """
        previous = self._queries.pop(slot, None)
        if previous is not None:
            self.cache.unsubscribe(previous)
        if key is not None:
            self._queries[slot] = key
        self.data_changed.emit(slot)
        return key

    def unwatch(self, slot: str):
        key = self._queries.pop(slot, None)
        if key is not None:
            self.cache.unsubscribe(key)
            self.data_changed.emit(slot)

    def query_key(self, slot: str) -> Optional[str]:
        return self._queries.get(slot)

    def query_state(self, slot: str) -> QueryState:
        key = self._queries.get(slot)
        return self.cache.state(key) if key else QueryState()

    def list_state(self, slot: str, items: Sequence[Any]) -> ListState:
        state = self.query_state(slot)
        if slot not in self._queries:
            return ListState.IDLE
        if state.is_error:
            return ListState.ERROR
        if state.is_loading and not state.has_data:
            return ListState.LOADING
        return ListState.READY if items else ListState.EMPTY

    def retry(self, slot: str) -> bool:
        key = self._queries.get(slot)
        return bool(key) and self.cache.refetch(key)

    def _on_query_updated(self, key: str, state: QueryState):
        for slot, watched in list(self._queries.items()):
            if watched == key:
                self.data_changed.emit(slot)

    def _release_queries(self):
        for slot in list(self._queries):
            self.unwatch(slot)

    def active_queries(self) -> List[str]:
        return list(self._queries)

    @property
    def last_error(self) -> Optional[TransferError]:
        return self.gate.last_error
