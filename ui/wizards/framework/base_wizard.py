# -*- coding: utf-8 -*-
"""
Base Wizard - modal host dialog for a wizard controller.

Provides unified wizard UI with:
- Header with title and "Step k of n" progress
- Step container (one view per registered step)
- Error banner with the rejection's suggested action
- Footer bound to the navigator and the submit gate
"""

from typing import Dict, Optional

from PyQt5.QtCore import QUrl, pyqtSignal
from PyQt5.QtGui import QDesktopServices, QFont
from PyQt5.QtWidgets import (
    QDialog, QFrame, QHBoxLayout, QLabel, QProgressBar, QStackedWidget,
    QVBoxLayout, QWidget
)

from app.config import Config
from services.error_mapper import ErrorActionType, TransferError
from services.translation_manager import tr
from ui.components.action_button import ActionButton
from ui.components.toast import Toast
from ui.components.wizard_footer import WizardFooter
from ui.design_system import Colors, tone_colors
from ui.error_handler import ErrorHandler
from utils.logger import get_logger
from .async_gate import GateState
from .base_step import BaseStepView, StepValidationResult
from .step_registry import StepKind
from .wizard_controller import WizardController

logger = get_logger(__name__)


class BaseWizard(QDialog):
    """
    Host dialog of one wizard.

    Subclasses must implement:
    - create_step_views(): one BaseStepView per registered step id
    """

    navigate_requested = pyqtSignal(str)  # destination of a navigate action

    def __init__(self, controller: WizardController, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.controller = controller
        self.registry = controller.registry
        self.setModal(True)
        self.setMinimumSize(Config.WIZARD_MIN_WIDTH, Config.WIZARD_MIN_HEIGHT)
        self.setWindowTitle(self.get_wizard_title())

        self.views: Dict[str, BaseStepView] = self.create_step_views()
        missing = [step_id for step_id in self.registry.ids() if step_id not in self.views]
        if missing:
            raise ValueError(f"{type(self).__name__}: no view for steps {missing}")

        self._current_error: Optional[TransferError] = None
        self._setup_ui()

        context = controller.context
        context.step_changed.connect(self._on_step_changed)
        context.state_changed.connect(self._update_navigation_buttons)
        controller.navigator.transition_blocked.connect(self._on_transition_blocked)
        controller.navigator.close_requested.connect(self.reject)
        controller.gate.state_changed.connect(self._on_gate_state)
        controller.gate.submitting.connect(self._on_submitting)
        controller.error_reported.connect(self._on_error)
        controller.wizard_completed.connect(self._on_completed)
        controller.boundary.error_occurred.connect(self._on_unexpected_error)

    # =========================================================================
    # Methods for subclasses
    # =========================================================================

    def create_step_views(self) -> Dict[str, BaseStepView]:
        raise NotImplementedError

    def get_wizard_title(self) -> str:
        return tr("wizard.title")

    def get_submit_button_text(self) -> str:
        return tr("wizard.submit")

    def get_success_message(self, result) -> str:
        return tr("wizard.success")

    # =========================================================================
    # UI Setup
    # =========================================================================

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        main_layout.addWidget(self._create_header())

        separator = QFrame()
        separator.setFrameShape(QFrame.HLine)
        separator.setStyleSheet(f"background-color: {Colors.BORDER_DEFAULT};")
        separator.setFixedHeight(1)
        main_layout.addWidget(separator)

        main_layout.addWidget(self._create_error_banner())

        self.step_container = QStackedWidget()
        for step_id in self.registry.ids():
            self.step_container.addWidget(self.views[step_id])
        main_layout.addWidget(self.step_container, 1)

        self.footer = WizardFooter()
        self.footer.cancel_clicked.connect(self.reject)
        self.footer.previous_clicked.connect(self._handle_previous)
        self.footer.primary_clicked.connect(self._handle_primary)
        main_layout.addWidget(self.footer)

    def _create_header(self) -> QWidget:
        header = QWidget()
        header.setStyleSheet(f"QWidget {{ background-color: {Colors.BACKGROUND}; }}")

        layout = QVBoxLayout(header)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(12)

        self.title_label = QLabel(self.get_wizard_title())
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        self.title_label.setFont(title_font)
        layout.addWidget(self.title_label)

        self.step_title_label = QLabel("")
        self.step_title_label.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
        layout.addWidget(self.step_title_label)

        progress_layout = QHBoxLayout()
        progress_layout.setSpacing(8)

        self.progress_label = QLabel("")
        progress_layout.addWidget(self.progress_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setMaximum(100)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(6)
        self.progress_bar.setStyleSheet(f"""
            QProgressBar {{
                border: none;
                background-color: #e9ecef;
                border-radius: 3px;
            }}
            QProgressBar::chunk {{
                background-color: {Colors.PRIMARY_BLUE};
                border-radius: 3px;
            }}
        """)
        progress_layout.addWidget(self.progress_bar, 1)
        layout.addLayout(progress_layout)
        return header

    def _create_error_banner(self) -> QWidget:
        self.error_banner = QFrame()
        layout = QHBoxLayout(self.error_banner)
        layout.setContentsMargins(20, 10, 20, 10)

        self.error_label = QLabel("")
        self.error_label.setWordWrap(True)
        layout.addWidget(self.error_label, 1)

        self.error_action_button = ActionButton("", variant="outline", width=140, height=36)
        self.error_action_button.clicked.connect(self._handle_error_action)
        layout.addWidget(self.error_action_button)

        self.error_banner.hide()
        return self.error_banner

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self):
        """Open a fresh run of the controller and show its first step."""
        self.controller.open()
        self._hide_error()
        self._show_step(self.controller.current_step_id)
        return self

    def reject(self):
        self.controller.close()
        super().reject()

    def closeEvent(self, event):
        self.controller.close()
        super().closeEvent(event)

    def focusInEvent(self, event):
        self.controller.on_focus()
        super().focusInEvent(event)

    # =========================================================================
    # Navigation Handlers
    # =========================================================================

    def _handle_previous(self):
        self._hide_error()
        self.controller.previous()

    def _handle_primary(self):
        step = self.controller.navigator.current_step()
        if step.kind is StepKind.EXIT:
            self.reject()
            return
        self._hide_error()
        self.controller.primary_action()

    def _on_step_changed(self, old_step: str, new_step: str):
        old_view = self.views.get(old_step)
        if old_view is not None:
            old_view.on_hide()
        self._show_step(new_step)

    def _show_step(self, step_id: str):
        view = self.views[step_id]
        self.step_container.setCurrentWidget(view)
        view.on_show()
        self._update_progress()
        self._update_navigation_buttons()

    def _update_progress(self):
        navigator = self.controller.navigator
        step = navigator.current_step()
        self.step_title_label.setText(step.title)
        self.progress_label.setText(
            tr("wizard.step_of", current=navigator.current_index + 1, total=navigator.get_step_count())
        )
        self.progress_bar.setValue(int(navigator.get_progress_percentage()))

    def _update_navigation_buttons(self):
        navigator = self.controller.navigator
        step = navigator.current_step()
        self.footer.set_previous_enabled(navigator.can_go_previous())

        if step.kind is StepKind.SUBMIT:
            self.footer.set_primary(self.get_submit_button_text(), self.controller.gate.can_submit)
        elif step.kind is StepKind.EXIT:
            self.footer.set_primary(tr("wizard.close"), True)
        else:
            self.footer.set_primary(tr("wizard.next"), navigator.can_go_next())

    # =========================================================================
    # Gate and errors
    # =========================================================================

    def _on_gate_state(self, state: GateState):
        self.footer.set_busy(state.is_loading and self.controller.gate.in_flight)
        self._update_navigation_buttons()

    def _on_submitting(self):
        self.footer.set_busy(True)

    def _on_transition_blocked(self, result: StepValidationResult):
        message = "\n".join(f"• {error}" for error in result.errors) or tr("validation.check_data")
        self._show_banner(message, "warning", action_label="")

    def _on_error(self, error: TransferError):
        self.footer.set_busy(False)
        self._current_error = error
        label = error.action.label if error.action.type is not ErrorActionType.NONE else ""
        self._show_banner(error.user_message, error.severity.value, action_label=label)

    def _on_unexpected_error(self, operation: str, error_type: str):
        self._show_banner(tr("error.unexpected"), "error", action_label="")

    def _show_banner(self, message: str, tone: str, action_label: str):
        background, color = tone_colors(tone)
        self.error_banner.setStyleSheet(f"QFrame {{ background-color: {background}; }} QLabel {{ color: {color}; }}")
        self.error_label.setText(message)
        self.error_action_button.setText(action_label)
        self.error_action_button.setVisible(bool(action_label))
        self.error_banner.show()

    def _hide_error(self):
        self._current_error = None
        self.error_banner.hide()

    def _handle_error_action(self):
        error = self._current_error
        if error is None:
            return
        action = error.action
        logger.info(f"Error action {action.type.value} for {error.code}")
        if action.type is ErrorActionType.RETRY:
            self._hide_error()
            self.controller.primary_action()
        elif action.type is ErrorActionType.CONTACT:
            if not QDesktopServices.openUrl(QUrl(f"mailto:{Config.SUPPORT_EMAIL}")):
                ErrorHandler.show_warning(self, tr("error.contact_email", email=Config.SUPPORT_EMAIL))
        elif action.type is ErrorActionType.NAVIGATE and action.destination:
            self.navigate_requested.emit(action.destination)
            self.reject()

    def _on_completed(self, result):
        self.footer.set_busy(False)
        self.controller.close()
        parent = self.parentWidget()
        if parent is not None:
            Toast.notify(parent, self.get_success_message(result), Toast.SUCCESS)
        self.accept()
