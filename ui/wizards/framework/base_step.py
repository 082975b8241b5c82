# -*- coding: utf-8 -*-
"""
Base Step - validation result and base view for wizard steps.

A step's behaviour (predicate, branching) is declared by a StepDefinition in
the registry; a BaseStepView only renders it and writes the user's choices
into the wizard context.
"""

from typing import List, Optional
from dataclasses import dataclass, field

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel


@dataclass
class StepValidationResult:
    """Result of step validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    def merge(self, other: "StepValidationResult") -> "StepValidationResult":
        """Fold another result into this one."""
        for error in other.errors:
            self.add_error(error)
        if not other.is_valid and not other.errors:
            self.is_valid = False
        self.warnings.extend(other.warnings)
        return self

    @classmethod
    def ok(cls) -> "StepValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, *errors: str) -> "StepValidationResult":
        return cls(is_valid=False, errors=list(errors))

    @classmethod
    def coerce(cls, value) -> "StepValidationResult":
        """Normalise a predicate's return value (bool or result)."""
        if isinstance(value, StepValidationResult):
            return value
        return cls(is_valid=bool(value))


class BaseStepView(QWidget):
    """
    Base class for step views.

    Subclasses build their widgets in setup_ui() and refresh them from the
    controller in populate_data(). Views never decide navigation.
    """

    def __init__(self, controller, step_id: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.controller = controller
        self.step_id = step_id
        self._is_initialized = False

        # Main layout
        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(20, 20, 20, 20)
        self.main_layout.setSpacing(16)

    @property
    def context(self):
        return self.controller.context

    def initialize(self):
        """Build the UI once, the first time the step is shown."""
        if not self._is_initialized:
            self.setup_ui()
            self._is_initialized = True

    def on_show(self):
        """Called when the step becomes current."""
        if not self._is_initialized:
            self.initialize()
        self.populate_data()

    def on_hide(self):
        """Called when the wizard leaves this step."""
        pass

    def setup_ui(self):
        """Create widgets and layouts."""
        title = QLabel(self.controller.registry.get(self.step_id).title)
        self.main_layout.addWidget(title)

    def populate_data(self):
        """Refresh the widgets from the controller state."""
        pass
