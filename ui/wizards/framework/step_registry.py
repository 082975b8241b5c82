# -*- coding: utf-8 -*-
"""
Step Registry - the ordered, immutable catalogue of a wizard's steps.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from services.exceptions import ConfigurationError, StepNotFoundError
from .base_step import StepValidationResult

Predicate = Callable[[Mapping[str, Any]], Union[bool, StepValidationResult]]
Resolver = Callable[[Mapping[str, Any]], str]


class StepKind(str, Enum):
    """Role a step plays in the flow."""
    STEP = "step"
    SUBMIT = "submit"  # the step whose primary action submits the wizard
    EXIT = "exit"  # dead end of a branch (e.g. contact support)


def _always(state: Mapping[str, Any]) -> bool:
    return True


@dataclass(frozen=True)
class StepDefinition:
    """
    Static descriptor of one step.

    reads: the only context fields the predicate and resolver may look at.
        None exposes the full snapshot.
    resets: fields cleared when the user navigates back onto this step.
    """
    step_id: str
    title: str
    can_advance: Predicate = _always
    resolve_next: Optional[Resolver] = None
    reads: Optional[Tuple[str, ...]] = None
    resets: Tuple[str, ...] = ()
    kind: StepKind = StepKind.STEP
    description: str = ""

    def evaluate(self, state: Mapping[str, Any]) -> StepValidationResult:
        return StepValidationResult.coerce(self.can_advance(state))


class StepRegistry:
    """Ordered lookup over a wizard's step definitions."""

    def __init__(self, steps: Optional[Sequence[StepDefinition]] = None):
        self._steps: Tuple[StepDefinition, ...] = ()
        self._index: Mapping[str, int] = MappingProxyType({})
        if steps is not None:
            self.register(steps)

    def register(self, steps: Sequence[StepDefinition]) -> "StepRegistry":
        """Replace the catalogue. Identifiers must be unique and the list non-empty."""
        steps = tuple(steps)
        if not steps:
            raise ConfigurationError("A wizard needs at least one step")

        index: Dict[str, int] = {}
        for i, step in enumerate(steps):
            if step.step_id in index:
                raise ConfigurationError(f"Duplicate step id: {step.step_id!r}")
            index[step.step_id] = i

        submit_steps = [s.step_id for s in steps if s.kind is StepKind.SUBMIT]
        if len(submit_steps) > 1:
            raise ConfigurationError(f"More than one submit step: {submit_steps}")

        self._steps = steps
        self._index = MappingProxyType(index)
        return self

    def step_at(self, index: int) -> StepDefinition:
        if not 0 <= index < len(self._steps):
            raise StepNotFoundError(index)
        return self._steps[index]

    def index_of(self, step_id: str) -> int:
        try:
            return self._index[step_id]
        except KeyError:
            raise StepNotFoundError(step_id) from None

    def get(self, step_id: str) -> StepDefinition:
        return self._steps[self.index_of(step_id)]

    def first(self) -> StepDefinition:
        return self.step_at(0)

    def last(self) -> StepDefinition:
        return self.step_at(len(self._steps) - 1)

    def submit_step(self) -> StepDefinition:
        """The submit step; the last registered step when none is marked."""
        for step in self._steps:
            if step.kind is StepKind.SUBMIT:
                return step
        return self.last()

    def is_final(self, step_id: str) -> bool:
        """Whether "next" from this step can never move forward."""
        step = self.get(step_id)
        return (
            step.kind is not StepKind.STEP
            or self.index_of(step_id) == len(self._steps) - 1
        )

    def ids(self) -> List[str]:
        return [step.step_id for step in self._steps]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._index
