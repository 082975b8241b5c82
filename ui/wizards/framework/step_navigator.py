# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Forward navigation gated by the current step's predicate
- Branching through a step's resolver
- Back navigation along the visited path with reset rules
- Full-chain re-validation before submission
- Progress tracking
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from services.exceptions import ConfigurationError
from utils.logger import get_logger
from .base_step import StepValidationResult
from .step_registry import StepDefinition
from .wizard_context import WizardContext

logger = get_logger(__name__)


@dataclass(frozen=True)
class Transition:
    """Outcome of a navigation request. A rejection is not an error."""
    accepted: bool
    from_step: str
    to_step: str
    reasons: Tuple[str, ...] = ()
    cleared: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.accepted

    @property
    def moved(self) -> bool:
        return self.accepted and self.from_step != self.to_step


class StepNavigator(QObject):
    """
    Moves the context's step pointer.

    Responsibilities:
    - Evaluate predicates on the fields each step declares it reads
    - Resolve the next step (branch or index + 1)
    - Apply reset rules on back navigation
    - Emit signals for UI updates
    """

    # Signals
    step_changed = pyqtSignal(str, str)  # old step id, new step id
    transition_blocked = pyqtSignal(object)  # StepValidationResult
    close_requested = pyqtSignal()
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)

    def __init__(self, context: WizardContext, close_on_first_previous: bool = False,
                 parent: Optional[QObject] = None):
        """
        Initialize the navigator.

        Args:
            context: Wizard context (owns the step pointer and history)
            close_on_first_previous: "previous" on the first step asks the
                host to close instead of doing nothing
        """
        super().__init__(parent)
        self.context = context
        self.registry = context.registry
        self.close_on_first_previous = close_on_first_previous

        self.context.state_changed.connect(self._emit_availability)

    # =========================================================================
    # Queries
    # =========================================================================

    def current_step(self) -> StepDefinition:
        return self.registry.get(self.context.current_step_id)

    @property
    def current_index(self) -> int:
        return self.registry.index_of(self.context.current_step_id)

    def get_step_count(self) -> int:
        return len(self.registry)

    def evaluate(self, step_id: Optional[str] = None) -> StepValidationResult:
        """Run a step's predicate against the fields that step reads."""
        step = self.registry.get(step_id or self.context.current_step_id)
        return step.evaluate(self.context.view(step.reads))

    def can_go_next(self) -> bool:
        step_id = self.context.current_step_id
        return not self.registry.is_final(step_id) and self.evaluate(step_id).is_valid

    def can_go_previous(self) -> bool:
        return bool(self.context.history) or self.current_index > 0 or self.close_on_first_previous

    def resolve(self, step: StepDefinition) -> str:
        """Identifier of the step after ``step`` for the current state."""
        if step.resolve_next is None:
            return self.registry.step_at(self.registry.index_of(step.step_id) + 1).step_id

        target = step.resolve_next(self.context.view(step.reads))
        if target not in self.registry:
            raise ConfigurationError(
                f"Step {step.step_id!r} resolved to unregistered step {target!r}"
            )
        return target

    # =========================================================================
    # Navigation
    # =========================================================================

    def next_step(self) -> Transition:
        """
        Advance if the current step's predicate holds.

        Returns:
            The transition; rejected when the predicate fails, a no-op on a
            final step
        """
        current = self.context.current_step_id
        if self.registry.is_final(current):
            logger.debug(f"Cannot go next: {current} is a final step")
            return Transition(False, current, current)

        result = self.evaluate(current)
        if not result.is_valid:
            logger.info(f"Step {current} blocked: {result.errors}")
            self.transition_blocked.emit(result)
            return Transition(False, current, current, reasons=tuple(result.errors))

        target = self.resolve(self.registry.get(current))
        logger.info(f"Navigating: {current} → {target}")
        self.context.mark_step_completed(current)
        self.context.history.append(current)
        self._move(current, target)
        return Transition(True, current, target)

    def previous_step(self) -> Transition:
        """Go back one step on the visited path and apply that step's resets."""
        current = self.context.current_step_id
        if self.context.history:
            target = self.context.history.pop()
        elif self.current_index > 0:
            target = self.registry.step_at(self.current_index - 1).step_id
        else:
            if self.close_on_first_previous:
                logger.debug("Previous on first step: close requested")
                self.close_requested.emit()
            return Transition(False, current, current)

        cleared = self._apply_resets(target)
        logger.info(f"Navigating back: {current} → {target}")
        self._move(current, target)
        return Transition(True, current, target, cleared=tuple(cleared))

    def goto_step(self, step_id: str) -> Transition:
        """
        Jump to a step.

        Backward jumps follow the visited path. Forward jumps must be reachable
        from the current step with every predicate on the way holding.
        """
        self.registry.get(step_id)
        current = self.context.current_step_id
        if step_id == current:
            return Transition(True, current, current)

        if step_id in self.context.history:
            position = self.context.history.index(step_id)
            del self.context.history[position:]
            cleared = self._apply_resets(step_id)
            logger.info(f"Jumping back: {current} → {step_id}")
            self._move(current, step_id)
            return Transition(True, current, step_id, cleared=tuple(cleared))

        path, reasons = self._forward_path(step_id)
        if path is None:
            return Transition(False, current, current, reasons=tuple(reasons))

        for visited in path:
            self.context.mark_step_completed(visited)
            self.context.history.append(visited)
        logger.info(f"Jumping forward: {current} → {step_id}")
        self._move(current, step_id)
        return Transition(True, current, step_id)

    def _forward_path(self, step_id: str) -> Tuple[Optional[List[str]], List[str]]:
        path: List[str] = []
        cursor = self.context.current_step_id
        while cursor != step_id:
            if self.registry.is_final(cursor) or cursor in path:
                return None, [f"{step_id} is not reachable from {self.context.current_step_id}"]
            result = self.evaluate(cursor)
            if not result.is_valid:
                self.transition_blocked.emit(result)
                return None, list(result.errors)
            path.append(cursor)
            cursor = self.resolve(self.registry.get(cursor))
        return path, []

    def validate_chain(self) -> StepValidationResult:
        """Re-validate every step on the visited path, current step included."""
        combined = StepValidationResult.ok()
        for step_id in list(self.context.history) + [self.context.current_step_id]:
            result = self.evaluate(step_id)
            if not result.is_valid:
                logger.warning(f"Chain validation failed at {step_id}: {result.errors}")
            combined.merge(result)
        return combined

    def reset(self):
        """Back to the first step with an empty visited path."""
        current = self.context.current_step_id
        self.context.history.clear()
        first = self.registry.first().step_id
        if current != first:
            self._move(current, first)

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        if len(self.registry) <= 1:
            return 0.0
        return (self.current_index / (len(self.registry) - 1)) * 100.0

    def get_completed_steps_count(self) -> int:
        return len(self.context.completed_steps)

    # =========================================================================
    # Internals
    # =========================================================================

    def _apply_resets(self, step_id: str) -> List[str]:
        resets = self.registry.get(step_id).resets
        if not resets:
            return []
        cleared = self.context.clear(resets)
        if cleared:
            logger.debug(f"Returning to {step_id} cleared: {cleared}")
        return cleared

    def _move(self, old_step: str, new_step: str):
        self.context.move_to(new_step)
        self.step_changed.emit(old_step, new_step)

    def _emit_availability(self):
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())
