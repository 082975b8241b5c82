# -*- coding: utf-8 -*-
"""
Step views of the transfer wizards.

Views render controller state and forward the user's choices to the
controller; predicates and branching live in transfer_steps.
"""

from typing import Any, List, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QButtonGroup, QCheckBox, QComboBox, QFormLayout, QGroupBox, QHBoxLayout,
    QLabel, QLineEdit, QRadioButton, QTextEdit
)

from app.config import Config
from models.transfer import SessionInfo, TransferEligibility, TransferOption, TransferType
from services.translation_manager import tr
from ui.components.badge import Badge
from ui.design_system import Colors
from ui.wizards.framework.base_step import BaseStepView
from ui.wizards.framework.list_step import ListStepView
from .option_filters import TransferDimension
from .transfer_steps import enrollment_block_reason, on_behalf_block_reason


def _enrollment_text(enrollment: TransferEligibility) -> str:
    quota = enrollment.quota
    return (
        f"{enrollment.class_code} - {enrollment.class_name}"
        f" | {enrollment.branch_name or '-'}"
        f" | {tr('transfer.quota.remaining', remaining=quota.remaining, limit=quota.limit)}"
    )


def _option_text(option: TransferOption) -> str:
    slots = tr("transfer.option.full") if option.is_full else tr(
        "transfer.option.slots", available=option.available_slots, capacity=option.max_capacity
    )
    modality = option.modality.display if option.modality else "-"
    return (
        f"{option.class_code} - {option.class_name} | {option.branch_name or '-'} | {modality}"
        f" | {option.schedule_days} {option.schedule_time} | {slots}"
        f" | {tr(option.content_gap.severity.label_key)}"
    )


def _session_text(session: SessionInfo) -> str:
    day = session.date.strftime(Config.DATE_FORMAT_DISPLAY) if session.date else "-"
    title = session.subject_session_title or ""
    return f"{day} {session.time_slot} {title}".strip()


class _SessionPicker(QGroupBox):
    """Upcoming sessions of the chosen target class."""

    def __init__(self, controller, parent=None):
        super().__init__(tr("transfer.session.title"), parent)
        self.controller = controller
        layout = QFormLayout(self)
        self.combo = QComboBox()
        self.combo.activated.connect(self._on_activated)
        layout.addRow(tr("transfer.session.first_session"), self.combo)
        self.gap_badge = Badge()
        layout.addRow(tr("transfer.gap.title"), self.gap_badge)

    def refresh(self):
        target: Optional[TransferOption] = self.controller.context.get("target_class")
        self.setVisible(target is not None)
        self.combo.blockSignals(True)
        self.combo.clear()
        selected = self.controller.context.get("session_id")
        for session in self.controller.upcoming_sessions():
            self.combo.addItem(_session_text(session), session)
            if session.session_id == selected:
                self.combo.setCurrentIndex(self.combo.count() - 1)
        if selected is None:
            self.combo.setCurrentIndex(-1)
        self.combo.blockSignals(False)
        if target is not None:
            severity = target.content_gap.severity
            self.gap_badge.set_badge(tr(severity.label_key), severity.tone)

    def _on_activated(self, index: int):
        session = self.combo.itemData(index)
        if session is not None:
            self.controller.select_session(session)


# ==================== Self-service ====================

class EligibilityStepView(ListStepView):
    slot = "eligibility"
    empty_title_key = "transfer.eligibility.empty"

    def items(self) -> List[Any]:
        return self.controller.enrollments()

    def item_text(self, item: TransferEligibility) -> str:
        return _enrollment_text(item)

    def item_block_reason(self, item: TransferEligibility) -> Optional[str]:
        return enrollment_block_reason(item)

    def is_selected(self, item: TransferEligibility) -> bool:
        return item == self.context.get("enrollment")

    def select_item(self, item: TransferEligibility):
        self.controller.select_enrollment(item)


class TransferTypeStepView(BaseStepView):

    def setup_ui(self):
        self.group = QButtonGroup(self)
        for transfer_type in TransferType:
            button = QRadioButton(tr(f"transfer.type.{transfer_type.value}"))
            button.setProperty("transfer_type", transfer_type.value)
            self.group.addButton(button)
            self.main_layout.addWidget(button)
        self.group.buttonClicked.connect(self._on_clicked)
        self.main_layout.addStretch()

    def populate_data(self):
        selected = self.context.get("transfer_type")
        self.group.setExclusive(False)
        for button in self.group.buttons():
            button.setChecked(selected is not None and button.property("transfer_type") == selected.value)
        self.group.setExclusive(True)

    def _on_clicked(self, button):
        self.controller.select_transfer_type(TransferType(button.property("transfer_type")))


class TargetClassStepView(ListStepView):
    slot = "options"
    empty_title_key = "transfer.options.empty"
    empty_description_key = "transfer.options.empty_hint"

    def setup_footer(self):
        self.session_picker = _SessionPicker(self.controller)
        self.main_layout.addWidget(self.session_picker)
        self.context.field_changed.connect(self._on_field_changed)

    def _on_field_changed(self, name: str, value):
        if name in ("target_class", "session_id"):
            self.session_picker.refresh()

    def items(self) -> List[Any]:
        return self.controller.options()

    def item_text(self, item: TransferOption) -> str:
        return _option_text(item)

    def item_block_reason(self, item: TransferOption) -> Optional[str]:
        if not item.can_transfer or item.is_full:
            return tr("transfer.blocked.target_unavailable")
        return None

    def is_selected(self, item: TransferOption) -> bool:
        return item == self.context.get("target_class")

    def select_item(self, item: TransferOption):
        self.controller.select_target(item)

    def populate_data(self):
        super().populate_data()
        self.session_picker.refresh()


class _ConfirmationBase(BaseStepView):
    """Summary, reason and the gate's remaining errors."""

    def setup_ui(self):
        self.summary_label = QLabel("")
        self.summary_label.setWordWrap(True)
        self.main_layout.addWidget(self.summary_label)

        self.reason_edit = QTextEdit()
        self.reason_edit.setPlaceholderText(
            tr("transfer.reason.placeholder", min=Config.TRANSFER_REASON_MIN_LENGTH)
        )
        self.reason_edit.setFixedHeight(90)
        self.reason_edit.textChanged.connect(
            lambda: self.controller.set_reason(self.reason_edit.toPlainText())
        )
        self.main_layout.addWidget(QLabel(tr("transfer.reason.label")))
        self.main_layout.addWidget(self.reason_edit)

        self.setup_fields()

        self.errors_label = QLabel("")
        self.errors_label.setWordWrap(True)
        self.errors_label.setStyleSheet(f"color: {Colors.ERROR};")
        self.main_layout.addWidget(self.errors_label)
        self.main_layout.addStretch()

        self.controller.gate.state_changed.connect(self._on_gate_state)

    def setup_fields(self):
        pass

    def _on_gate_state(self, state):
        self.errors_label.setText("\n".join(f"• {error}" for error in state.errors))

    def summary_lines(self) -> List[str]:
        target: Optional[TransferOption] = self.context.get("target_class")
        effective = self.context.get("effective_date")
        lines = []
        if target is not None:
            lines.append(tr("transfer.summary.target", target=f"{target.class_code} - {target.class_name}"))
        if effective is not None:
            lines.append(tr("transfer.summary.effective_date", date=effective.strftime(Config.DATE_FORMAT_DISPLAY)))
        return lines

    def populate_data(self):
        self.summary_label.setText("\n".join(self.summary_lines()))
        if self.reason_edit.toPlainText() != self.context.get("reason"):
            self.reason_edit.setPlainText(self.context.get("reason"))
        self._on_gate_state(self.controller.gate.state)


class ConfirmationStepView(_ConfirmationBase):

    ACKNOWLEDGEMENTS = ("terms_accepted", "quota_acknowledged", "content_gap_acknowledged")

    def setup_fields(self):
        self.checkboxes = {}
        for name in self.ACKNOWLEDGEMENTS:
            checkbox = QCheckBox(tr(f"transfer.ack.{name}"))
            checkbox.toggled.connect(
                lambda checked, field=name: self.controller.set_acknowledgement(field, checked)
            )
            self.checkboxes[name] = checkbox
            self.main_layout.addWidget(checkbox)

    def summary_lines(self) -> List[str]:
        enrollment: Optional[TransferEligibility] = self.context.get("enrollment")
        lines = []
        if enrollment is not None:
            lines.append(tr("transfer.summary.current", current=f"{enrollment.class_code} - {enrollment.class_name}"))
        return lines + super().summary_lines()

    def populate_data(self):
        super().populate_data()
        for name, checkbox in self.checkboxes.items():
            checkbox.blockSignals(True)
            checkbox.setChecked(bool(self.context.get(name)))
            checkbox.blockSignals(False)


class ContactSupportStepView(BaseStepView):

    def setup_ui(self):
        message = QLabel(tr("transfer.contact_support.message", email=Config.SUPPORT_EMAIL))
        message.setWordWrap(True)
        message.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.main_layout.addWidget(message)
        self.main_layout.addStretch()


# ==================== On behalf ====================

class StudentSearchStepView(ListStepView):
    slot = "students"
    empty_title_key = "transfer.students.empty"

    def setup_header(self):
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText(
            tr("transfer.students.search_hint", min=Config.STUDENT_SEARCH_MIN_CHARS)
        )
        self.search_edit.textChanged.connect(self.controller.search_students)
        self.main_layout.addWidget(self.search_edit)

    def items(self) -> List[Any]:
        return self.controller.students()

    def item_text(self, item) -> str:
        return f"{item.display_name} | {item.email or '-'} | {item.branch_name or '-'}"

    def is_selected(self, item) -> bool:
        return item == self.context.get("student")

    def select_item(self, item):
        self.controller.select_student(item)


class CurrentClassStepView(ListStepView):
    slot = "eligibility"
    empty_title_key = "transfer.eligibility.empty"

    def items(self) -> List[Any]:
        return self.controller.current_classes()

    def item_text(self, item: TransferEligibility) -> str:
        return _enrollment_text(item)

    def item_block_reason(self, item: TransferEligibility) -> Optional[str]:
        return on_behalf_block_reason(item)

    def is_selected(self, item: TransferEligibility) -> bool:
        return item == self.context.get("current_class")

    def select_item(self, item: TransferEligibility):
        self.controller.select_current_class(item)


class OnBehalfTargetStepView(TargetClassStepView):

    def setup_header(self):
        filters_box = QGroupBox(tr("transfer.filters.title"))
        layout = QHBoxLayout(filters_box)
        self.dimension_boxes = {}
        for dimension in TransferDimension:
            checkbox = QCheckBox(tr(f"transfer.filters.{dimension.value}"))
            checkbox.clicked.connect(lambda checked, d=dimension: self.controller.toggle_dimension(d))
            self.dimension_boxes[dimension] = checkbox
            layout.addWidget(checkbox)

        self.branch_combo = QComboBox()
        self.branch_combo.activated.connect(
            lambda index: self.controller.set_target_branch(self.branch_combo.itemData(index))
        )
        layout.addWidget(self.branch_combo)

        self.modality_combo = QComboBox()
        self.modality_combo.activated.connect(
            lambda index: self.controller.set_target_modality(self.modality_combo.itemData(index))
        )
        layout.addWidget(self.modality_combo)
        self.main_layout.addWidget(filters_box)

    def _on_field_changed(self, name: str, value):
        super()._on_field_changed(name, value)
        if name == "filters":
            self._refresh_filters()

    def _on_data_changed(self, slot: str):
        super()._on_data_changed(slot)
        if slot == "branches" and self._is_initialized:
            self._refresh_filters()

    def _refresh_filters(self):
        filters = self.controller.filters
        for dimension, checkbox in self.dimension_boxes.items():
            checkbox.setChecked(getattr(filters, dimension.value))

        self.branch_combo.clear()
        self.branch_combo.setVisible(filters.branch)
        for branch in self.controller.branches():
            self.branch_combo.addItem(branch.name, branch.branch_id)
        self.branch_combo.setCurrentIndex(self.branch_combo.findData(filters.target_branch_id))

        self.modality_combo.clear()
        self.modality_combo.setVisible(filters.modality)
        for modality in self.controller.allowed_modalities():
            self.modality_combo.addItem(modality.display, modality)
        self.modality_combo.setCurrentIndex(self.modality_combo.findData(filters.target_modality))

    def item_block_reason(self, item: TransferOption) -> Optional[str]:
        if not item.can_transfer:
            return tr("transfer.blocked.target_unavailable")
        return None

    def populate_data(self):
        super().populate_data()
        self._refresh_filters()


class OnBehalfConfirmationStepView(_ConfirmationBase):

    def setup_fields(self):
        self.note_edit = QLineEdit()
        self.note_edit.setPlaceholderText(tr("transfer.note.placeholder"))
        self.note_edit.textChanged.connect(self.controller.set_note)
        self.main_layout.addWidget(self.note_edit)

        self.override_box = QGroupBox(tr("transfer.override.title"))
        layout = QFormLayout(self.override_box)
        self.override_check = QCheckBox(tr("transfer.override.enable"))
        self.override_check.toggled.connect(self._on_override_changed)
        layout.addRow(self.override_check)
        self.override_reason_edit = QLineEdit()
        self.override_reason_edit.setPlaceholderText(
            tr("transfer.override.reason_hint", min=Config.OVERRIDE_REASON_MIN_LENGTH)
        )
        self.override_reason_edit.textChanged.connect(self._on_override_changed)
        layout.addRow(tr("transfer.override.reason"), self.override_reason_edit)
        self.main_layout.addWidget(self.override_box)

    def _on_override_changed(self, *args):
        self.controller.set_capacity_override(
            self.override_check.isChecked(), self.override_reason_edit.text()
        )

    def summary_lines(self) -> List[str]:
        student = self.context.get("student")
        current: Optional[TransferEligibility] = self.context.get("current_class")
        lines = []
        if student is not None:
            lines.append(tr("transfer.summary.student", student=student.display_name))
        if current is not None:
            lines.append(tr("transfer.summary.current", current=f"{current.class_code} - {current.class_name}"))
        return lines + super().summary_lines()

    def populate_data(self):
        super().populate_data()
        self.override_box.setVisible(self.context.target_is_full)
        for widget, value in (
            (self.note_edit, self.context.get("note")),
            (self.override_reason_edit, self.context.get("override_reason")),
        ):
            if widget.text() != value:
                widget.blockSignals(True)
                widget.setText(value)
                widget.blockSignals(False)
        self.override_check.blockSignals(True)
        self.override_check.setChecked(self.context.get("capacity_override"))
        self.override_check.blockSignals(False)
