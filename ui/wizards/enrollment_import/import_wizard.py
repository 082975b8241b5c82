# -*- coding: utf-8 -*-
"""
Enrollment import dialog and its step views.
"""

from typing import Dict

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QComboBox, QFileDialog, QFormLayout, QHBoxLayout, QLabel, QLineEdit,
    QTableWidget, QTableWidgetItem
)

from app.config import Config
from models.enrollment_import import EnrollmentResult, EnrollmentStrategy, ImportRowStatus
from services.translation_manager import tr
from services.wizard.import_validators import selected_student_ids
from ui.components.action_button import ActionButton
from ui.components.badge import Badge
from ui.components.loading_overlay import LoadingOverlay
from ui.design_system import Colors
from ui.wizards.framework.base_step import BaseStepView
from ui.wizards.framework.base_wizard import BaseWizard
from .import_controller import EnrollmentImportController
from .import_steps import ImportSteps

_ROW_TONES = {
    ImportRowStatus.FOUND: "success",
    ImportRowStatus.CREATE: "info",
    ImportRowStatus.DUPLICATE: "warning",
    ImportRowStatus.ERROR: "danger",
}


class UploadStepView(BaseStepView):

    def setup_ui(self):
        description = QLabel(self.controller.registry.get(self.step_id).description)
        description.setWordWrap(True)
        self.main_layout.addWidget(description)

        row = QHBoxLayout()
        self.file_label = QLabel(tr("import.file.none"))
        self.file_label.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
        row.addWidget(self.file_label, 1)
        self.btn_browse = ActionButton(tr("import.file.browse"), variant="outline")
        self.btn_browse.clicked.connect(self._browse)
        row.addWidget(self.btn_browse)
        self.main_layout.addLayout(row)

        self.summary_label = QLabel("")
        self.summary_label.setWordWrap(True)
        self.main_layout.addWidget(self.summary_label)
        self.main_layout.addStretch()

        self.overlay = LoadingOverlay(self)
        self.controller.preview_loading_changed.connect(
            lambda loading: self.overlay.set_loading(loading, tr("import.preview.loading"))
        )
        self.context.field_changed.connect(lambda name, value: self.populate_data())

    def _browse(self):
        path, _ = QFileDialog.getOpenFileName(self, tr("import.file.browse"), "", tr("import.file.filter"))
        if path:
            self.controller.choose_file(path)

    def populate_data(self):
        path = self.context.get("file_path")
        self.file_label.setText(path.name if path else tr("import.file.none"))
        preview = self.context.get("preview")
        if preview is None:
            self.summary_label.setText("")
            return
        self.summary_label.setText(tr(
            "import.preview.summary",
            total=len(preview.rows),
            found=preview.count(ImportRowStatus.FOUND),
            create=preview.count(ImportRowStatus.CREATE),
            duplicate=preview.count(ImportRowStatus.DUPLICATE),
            error=preview.count(ImportRowStatus.ERROR),
        ))


class PreviewStepView(BaseStepView):

    COLUMNS = ("import.column.select", "import.column.name", "import.column.email",
               "import.column.status", "import.column.message")

    def setup_ui(self):
        header = QHBoxLayout()
        self.capacity_label = QLabel("")
        header.addWidget(self.capacity_label, 1)
        self.recommendation_badge = Badge()
        header.addWidget(self.recommendation_badge)
        self.main_layout.addLayout(header)

        self.recommendation_label = QLabel("")
        self.recommendation_label.setWordWrap(True)
        self.main_layout.addWidget(self.recommendation_label)

        form = QFormLayout()
        self.strategy_combo = QComboBox()
        for strategy in EnrollmentStrategy:
            self.strategy_combo.addItem(tr(f"import.strategy.{strategy.value.lower()}"), strategy)
        self.strategy_combo.activated.connect(
            lambda index: self.controller.set_strategy(self.strategy_combo.itemData(index))
        )
        form.addRow(tr("import.strategy.label"), self.strategy_combo)
        self.main_layout.addLayout(form)

        self.table = QTableWidget(0, len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels([tr(key) for key in self.COLUMNS])
        self.table.itemChanged.connect(self._on_item_changed)
        self.main_layout.addWidget(self.table, 1)

        self.context.field_changed.connect(self._on_field_changed)

    def _on_field_changed(self, name: str, value):
        if name in ("preview", "strategy", "selected_rows"):
            self.populate_data()

    def populate_data(self):
        preview = self.controller.preview
        if preview is None:
            self.table.setRowCount(0)
            return

        self.capacity_label.setText(tr(
            "import.capacity",
            enrolled=preview.current_enrolled,
            capacity=preview.max_capacity,
            available=preview.available_slots,
        ))
        recommendation = preview.recommendation
        tone = "success" if recommendation.can_proceed else "danger"
        self.recommendation_badge.set_badge(tr(f"import.recommendation.{recommendation.type.value.lower()}"), tone)
        self.recommendation_label.setText(recommendation.message)

        strategy = self.context.get("strategy")
        self.strategy_combo.setCurrentIndex(self.strategy_combo.findData(strategy))

        selected = self.context.get("selected_rows")
        self.table.blockSignals(True)
        self.table.setRowCount(len(preview.rows))
        for i, row in enumerate(preview.rows):
            check = QTableWidgetItem()
            check.setData(Qt.UserRole, row.row_index)
            flags = Qt.ItemIsUserCheckable
            if row.status.is_enrollable and strategy is EnrollmentStrategy.PARTIAL:
                flags |= Qt.ItemIsEnabled
            check.setFlags(flags)
            check.setCheckState(Qt.Checked if row.row_index in selected else Qt.Unchecked)
            self.table.setItem(i, 0, check)
            self.table.setItem(i, 1, QTableWidgetItem(row.full_name))
            self.table.setItem(i, 2, QTableWidgetItem(row.email))
            self.table.setCellWidget(i, 3, Badge(row.status.value, _ROW_TONES[row.status]))
            self.table.setItem(i, 4, QTableWidgetItem(row.error_message))
        self.table.blockSignals(False)

    def _on_item_changed(self, item: QTableWidgetItem):
        if item.column() != 0:
            return
        index = item.data(Qt.UserRole)
        row = next(r for r in self.controller.rows() if r.row_index == index)
        self.controller.toggle_row(row, item.checkState() == Qt.Checked)


class ConfirmStepView(BaseStepView):

    def setup_ui(self):
        self.summary_label = QLabel("")
        self.summary_label.setWordWrap(True)
        self.main_layout.addWidget(self.summary_label)

        self.override_label = QLabel(tr("import.override.reason", min=Config.OVERRIDE_REASON_MIN_LENGTH))
        self.main_layout.addWidget(self.override_label)
        self.override_edit = QLineEdit()
        self.override_edit.textChanged.connect(self.controller.set_override_reason)
        self.main_layout.addWidget(self.override_edit)

        self.errors_label = QLabel("")
        self.errors_label.setStyleSheet(f"color: {Colors.ERROR};")
        self.main_layout.addWidget(self.errors_label)
        self.main_layout.addStretch()

        self.controller.gate.state_changed.connect(
            lambda state: self.errors_label.setText("\n".join(f"• {e}" for e in state.errors))
        )

    def populate_data(self):
        preview = self.controller.preview
        strategy = self.context.get("strategy")
        if preview is None or strategy is None:
            return
        count = (len(selected_student_ids(preview, self.context.get("selected_rows")))
                 if strategy is EnrollmentStrategy.PARTIAL else len(preview.enrollable_rows))
        self.summary_label.setText(tr(
            "import.confirm.summary",
            count=count,
            class_code=preview.class_code,
            strategy=tr(f"import.strategy.{strategy.value.lower()}"),
        ))
        is_override = strategy is EnrollmentStrategy.OVERRIDE
        self.override_label.setVisible(is_override)
        self.override_edit.setVisible(is_override)
        if self.override_edit.text() != self.context.get("override_reason"):
            self.override_edit.setText(self.context.get("override_reason"))
        self.errors_label.setText("\n".join(f"• {e}" for e in self.controller.gate.state.errors))


class EnrollmentImportWizard(BaseWizard):
    """Import a roster file into a class."""

    controller: EnrollmentImportController

    def __init__(self, controller: EnrollmentImportController, parent=None):
        super().__init__(controller, parent)
        controller.selection_blocked.connect(
            lambda reason: self._show_banner(reason, "warning", action_label="")
        )

    def get_wizard_title(self) -> str:
        return tr("import.wizard.title")

    def get_submit_button_text(self) -> str:
        return tr("import.submit")

    def get_success_message(self, result: EnrollmentResult) -> str:
        return tr(
            "import.success",
            enrolled=result.enrolled_count,
            sessions=result.total_student_sessions_created,
        )

    def create_step_views(self) -> Dict[str, BaseStepView]:
        controller = self.controller
        return {
            ImportSteps.UPLOAD: UploadStepView(controller, ImportSteps.UPLOAD),
            ImportSteps.PREVIEW: PreviewStepView(controller, ImportSteps.PREVIEW),
            ImportSteps.CONFIRM: ConfirmStepView(controller, ImportSteps.CONFIRM),
        }

    def start_for_class(self, class_id: int):
        self.controller.class_id = class_id
        return self.start()
