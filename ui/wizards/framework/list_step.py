# -*- coding: utf-8 -*-
"""
List Step - step view backed by a cached query.

Shows the loading, error and empty states of the query in place of the
list, and writes the clicked item back through the controller.
"""

from typing import Any, List, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QLabel, QListWidget, QListWidgetItem, QStackedWidget

from services.translation_manager import tr
from ui.components.empty_state import EmptyState
from ui.design_system import Colors
from .base_step import BaseStepView
from .wizard_controller import ListState


class ListStepView(BaseStepView):
    """
    Subclasses set ``slot`` and implement items(), item_text() and
    select_item(); item_block_reason() disables rows that cannot be chosen.
    """

    slot = ""
    empty_title_key = "state.empty"
    empty_description_key = ""

    def setup_ui(self):
        step = self.controller.registry.get(self.step_id)
        if step.description:
            description = QLabel(step.description)
            description.setWordWrap(True)
            description.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
            self.main_layout.addWidget(description)

        self.setup_header()

        self.list_stack = QStackedWidget()
        self.list_widget = QListWidget()
        self.list_widget.itemClicked.connect(self._on_item_clicked)
        self.empty_state = EmptyState()
        self.empty_state.retry_clicked.connect(lambda: self.controller.retry(self.slot))
        self.list_stack.addWidget(self.list_widget)
        self.list_stack.addWidget(self.empty_state)
        self.main_layout.addWidget(self.list_stack, 1)

        self.setup_footer()
        self.controller.data_changed.connect(self._on_data_changed)

    def setup_header(self):
        """Widgets above the list."""

    def setup_footer(self):
        """Widgets below the list."""

    # ==================== Subclass API ====================

    def items(self) -> List[Any]:
        raise NotImplementedError

    def item_text(self, item: Any) -> str:
        raise NotImplementedError

    def item_block_reason(self, item: Any) -> Optional[str]:
        return None

    def is_selected(self, item: Any) -> bool:
        return False

    def select_item(self, item: Any):
        raise NotImplementedError

    # ==================== Rendering ====================

    def _on_data_changed(self, slot: str):
        if slot == self.slot and self._is_initialized:
            self.populate_data()

    def populate_data(self):
        items = self.items()
        state = self.controller.list_state(self.slot, items)

        if state is ListState.READY:
            self._fill_list(items)
            self.list_stack.setCurrentWidget(self.list_widget)
            return

        if state is ListState.LOADING:
            self.empty_state.show_loading()
        elif state is ListState.ERROR:
            error = self.controller.query_state(self.slot).error
            self.empty_state.show_error(str(error) if error else "")
        elif state is ListState.EMPTY:
            self.empty_state.show_empty(
                tr(self.empty_title_key),
                tr(self.empty_description_key) if self.empty_description_key else "",
            )
        else:
            self.empty_state.show_empty(tr("state.idle"))
        self.list_stack.setCurrentWidget(self.empty_state)

    def _fill_list(self, items: List[Any]):
        self.list_widget.clear()
        for item in items:
            row = QListWidgetItem(self.item_text(item))
            row.setData(Qt.UserRole, item)
            reason = self.item_block_reason(item)
            if reason:
                row.setToolTip(reason)
                row.setForeground(Qt.gray)
            self.list_widget.addItem(row)
            if self.is_selected(item):
                row.setSelected(True)

    def _on_item_clicked(self, row: QListWidgetItem):
        self.select_item(row.data(Qt.UserRole))
