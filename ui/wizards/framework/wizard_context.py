# -*- coding: utf-8 -*-
"""
Wizard Context - the single mutable source of truth for one wizard run.

Provides:
- Declared selection fields with empty defaults
- Cascading invalidation along a declared dependency graph
- Current step pointer and visited path
- Run status (idle, active, terminal, cancelled)
- Qt signals so views and the footer observe state instead of polling
"""

import copy
import uuid
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from services.exceptions import StepNotFoundError
from utils.logger import get_logger
from .step_registry import StepRegistry

logger = get_logger(__name__)


class WizardStatus(str, Enum):
    IDLE = "idle"  # opened, nothing navigated yet
    ACTIVE = "active"
    TERMINAL = "terminal"  # submitted successfully
    CANCELLED = "cancelled"


class WizardContext(QObject):
    """
    Base class for wizard contexts.

    Subclasses declare:
    - FIELDS: field name -> empty default
    - DEPENDENCIES: upstream field -> fields derived from it. Changing the
      upstream value clears them (transitively).
    """

    FIELDS: Dict[str, Any] = {}
    DEPENDENCIES: Dict[str, Tuple[str, ...]] = {}

    # Signals
    field_changed = pyqtSignal(str, object)  # field, new value
    fields_cleared = pyqtSignal(list)  # fields reset by cascade or navigation
    step_changed = pyqtSignal(str, str)  # old step id, new step id
    status_changed = pyqtSignal(str)
    state_changed = pyqtSignal()

    def __init__(self, registry: StepRegistry, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._check_declarations()
        self.registry = registry
        self.generation = 0
        self._values: Dict[str, Any] = {}
        self.history: List[str] = []
        self.completed_steps: set = set()
        self.current_step_id: str = registry.first().step_id
        self.status = WizardStatus.IDLE
        self.initialize()

    def _check_declarations(self):
        for upstream, dependents in self.DEPENDENCIES.items():
            for name in (upstream,) + tuple(dependents):
                if name not in self.FIELDS:
                    raise KeyError(f"{type(self).__name__}: undeclared field {name!r} in DEPENDENCIES")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self):
        """Reset every field, the step pointer and the visited path."""
        self.generation += 1
        self.wizard_id = str(uuid.uuid4())
        self.created_at = datetime.now()
        self.updated_at = self.created_at
        self.reference_number = self._generate_reference_number()
        self._values = {name: copy.copy(default) for name, default in self.FIELDS.items()}
        self.history = []
        self.completed_steps = set()
        old_step = self.current_step_id
        self.current_step_id = self.registry.first().step_id
        self._set_status(WizardStatus.IDLE)
        logger.debug(f"{type(self).__name__} initialized (generation {self.generation})")
        if old_step != self.current_step_id:
            self.step_changed.emit(old_step, self.current_step_id)
        self.state_changed.emit()

    def teardown(self, status: WizardStatus):
        """
        End the run: clear all selections and record the final status.

        The generation bump makes late async results from this run stale.
        """
        values = {name: copy.copy(default) for name, default in self.FIELDS.items()}
        self._values = values
        self.history = []
        self.completed_steps = set()
        self.generation += 1
        old_step = self.current_step_id
        self.current_step_id = self.registry.first().step_id
        self._set_status(status)
        if old_step != self.current_step_id:
            self.step_changed.emit(old_step, self.current_step_id)
        self.state_changed.emit()

    def cancel(self):
        if self.status is WizardStatus.TERMINAL:
            return
        logger.info(f"Wizard {self.reference_number} cancelled at step {self.current_step_id}")
        self.teardown(WizardStatus.CANCELLED)

    def mark_terminal(self):
        self._set_status(WizardStatus.TERMINAL)
        self.state_changed.emit()

    @property
    def is_closed(self) -> bool:
        return self.status in (WizardStatus.TERMINAL, WizardStatus.CANCELLED)

    def _set_status(self, status: WizardStatus):
        if self.status is not status:
            self.status = status
            self.status_changed.emit(status.value)

    def _generate_reference_number(self) -> str:
        """
        Reference for logs and support tickets.

        Format: {PREFIX}-{YYYYMMDDHHMMSS}-{SHORT_UUID}
        """
        timestamp = self.created_at.strftime("%Y%m%d%H%M%S")
        return f"{self._get_reference_prefix()}-{timestamp}-{self.wizard_id[:4].upper()}"

    def _get_reference_prefix(self) -> str:
        """Get the prefix for reference number. Override in subclasses."""
        return "WIZ"

    # =========================================================================
    # Fields
    # =========================================================================

    def get(self, name: str) -> Any:
        if name not in self.FIELDS:
            raise KeyError(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> List[str]:
        """
        Assign a field. A changed value clears every field derived from it.

        Returns:
            Names of the fields cleared by the cascade
        """
        if name not in self.FIELDS:
            raise KeyError(name)

        previous = self._values[name]
        self._values[name] = value
        self.updated_at = datetime.now()

        cleared: List[str] = []
        if previous != value:
            cleared = self._cascade(name)
            if cleared:
                logger.debug(f"'{name}' changed, cleared dependents: {cleared}")

        self.field_changed.emit(name, value)
        if cleared:
            self.fields_cleared.emit(cleared)
        self.state_changed.emit()
        return cleared

    def update(self, **values: Any) -> List[str]:
        """Assign several fields in declaration order."""
        cleared: List[str] = []
        for name in self.FIELDS:
            if name in values:
                cleared.extend(self.set(name, values.pop(name)))
        if values:
            raise KeyError(next(iter(values)))
        return cleared

    def clear(self, names: Iterable[str]) -> List[str]:
        """Reset fields to their empty defaults, cascading to dependents."""
        cleared: List[str] = []
        for name in names:
            if name not in self.FIELDS:
                raise KeyError(name)
            if self._values[name] != self.FIELDS[name]:
                self._values[name] = copy.copy(self.FIELDS[name])
                cleared.append(name)
                cleared.extend(c for c in self._cascade(name) if c not in cleared)
        if cleared:
            self.updated_at = datetime.now()
            self.fields_cleared.emit(cleared)
            self.state_changed.emit()
        return cleared

    def _cascade(self, name: str) -> List[str]:
        cleared: List[str] = []
        pending = list(self.DEPENDENCIES.get(name, ()))
        seen = set()
        while pending:
            dependent = pending.pop(0)
            if dependent in seen:
                continue
            seen.add(dependent)
            default = self.FIELDS[dependent]
            if self._values[dependent] != default:
                self._values[dependent] = copy.copy(default)
                cleared.append(dependent)
            pending.extend(self.DEPENDENCIES.get(dependent, ()))
        return cleared

    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy of every field."""
        return MappingProxyType(dict(self._values))

    def view(self, names: Optional[Iterable[str]]) -> Mapping[str, Any]:
        """Read-only mapping restricted to ``names`` (all fields for None)."""
        if names is None:
            return self.snapshot()
        return MappingProxyType({name: self.get(name) for name in names})

    def dependents_of(self, name: str) -> List[str]:
        """Every field transitively derived from ``name``."""
        result: List[str] = []
        pending = list(self.DEPENDENCIES.get(name, ()))
        while pending:
            dependent = pending.pop(0)
            if dependent not in result:
                result.append(dependent)
                pending.extend(self.DEPENDENCIES.get(dependent, ()))
        return result

    # =========================================================================
    # Step pointer
    # =========================================================================

    def move_to(self, step_id: str):
        """Point at another registered step."""
        if step_id not in self.registry:
            raise StepNotFoundError(step_id)
        old_step = self.current_step_id
        self.current_step_id = step_id
        self.updated_at = datetime.now()
        if self.status is WizardStatus.IDLE:
            self._set_status(WizardStatus.ACTIVE)
        if old_step != step_id:
            self.step_changed.emit(old_step, step_id)
        self.state_changed.emit()

    def mark_step_completed(self, step_id: str):
        self.completed_steps.add(step_id)

    def is_step_completed(self, step_id: str) -> bool:
        return step_id in self.completed_steps

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context to dictionary (diagnostics and support reports)."""
        return {
            "wizard_id": self.wizard_id,
            "reference_number": self.reference_number,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step": self.current_step_id,
            "history": list(self.history),
            "completed_steps": sorted(self.completed_steps),
            "data": {name: _serialize(value) for name, value in self._values.items()},
        }


def _serialize(value: Any) -> Any:
    if is_dataclass(value):
        return _serialize(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_serialize(v) for v in value]
    return value
