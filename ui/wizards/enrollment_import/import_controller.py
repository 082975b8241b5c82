# -*- coding: utf-8 -*-
"""
Enrollment import controller.

Uploads the roster for a server-side preview, keeps the row selection and
strategy, and executes the import through the submit gate.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from PyQt5.QtCore import pyqtSignal

from models.enrollment_import import EnrollmentImportPreview, EnrollmentStrategy, ImportRow
from services.academic_api_service import INVALIDATION_GRAPH, Mutations
from services.error_mapper import map_transfer_error
from services.translation_manager import tr
from utils.logger import get_logger
from ui.wizards.framework.async_gate import AsyncStepGate
from ui.wizards.framework.wizard_controller import WizardController
from .import_context import EnrollmentImportContext
from .import_steps import ImportSteps, build_import_payload, build_import_registry

logger = get_logger(__name__)


class EnrollmentImportController(WizardController):
    """Roster import into one class."""

    preview_loading_changed = pyqtSignal(bool)
    selection_blocked = pyqtSignal(str)

    def __init__(self, api, runner, class_id: Optional[int] = None, notifier=None, parent=None):
        super().__init__(api, runner, notifier=notifier, parent=parent)
        self.class_id = class_id
        self.preview_loading = False
        self._preview_request = 0

    def create_registry(self):
        return build_import_registry()

    def create_context(self, registry):
        return EnrollmentImportContext(registry)

    def create_gate(self, navigator):
        return AsyncStepGate(
            navigator,
            mutation=self.api.execute_enrollment_import,
            payload_builder=build_import_payload,
            runner=self.runner,
            cache=self.cache,
            invalidates=INVALIDATION_GRAPH[Mutations.EXECUTE_ENROLLMENT_IMPORT],
            on_success=self.notify_success,
            label=Mutations.EXECUTE_ENROLLMENT_IMPORT,
            parent=self,
        )

    def open_for_class(self, class_id: int):
        self.class_id = class_id
        self.open()

    def close(self):
        self._set_preview_loading(False)
        self._preview_request += 1
        super().close()

    # ==================== Step 1: upload ====================

    def choose_file(self, file_path) -> bool:
        """Select a roster and request its preview."""
        if self.class_id is None:
            return self._block(tr("validation.import.class_required"))
        path = Path(file_path) if file_path else None
        self.context.set("file_path", path)
        if path is None:
            return False
        return self.load_preview()

    def load_preview(self) -> bool:
        path: Optional[Path] = self.context.get("file_path")
        if path is None:
            return False

        self._preview_request += 1
        request = self._preview_request
        generation = self.context.generation
        class_id = self.class_id
        self._set_preview_loading(True)
        logger.info(f"Previewing roster {path.name} for class {class_id}")

        self.runner.run(
            lambda: self.api.preview_enrollment_import(class_id, path),
            lambda preview: self._on_preview(preview, request, generation, path),
            lambda error: self._on_preview_error(error, request, generation),
            label=Mutations.PREVIEW_ENROLLMENT_IMPORT,
        )
        return True

    def _is_current(self, request: int, generation: int) -> bool:
        return request == self._preview_request and generation == self.context.generation

    def _on_preview(self, preview: EnrollmentImportPreview, request: int, generation: int, path: Path):
        if not self._is_current(request, generation) or self.context.get("file_path") != path:
            logger.debug("Dropping stale roster preview")
            return
        self._set_preview_loading(False)
        self.context.set("preview", preview)
        self.context.set("strategy", preview.recommendation.recommended_strategy)
        self.context.set("selected_rows", frozenset(row.row_index for row in preview.enrollable_rows))
        logger.info(
            f"Preview: {len(preview.rows)} rows, {len(preview.enrollable_rows)} enrollable, "
            f"recommendation {preview.recommendation.type.value}"
        )

    def _on_preview_error(self, error: Exception, request: int, generation: int):
        if not self._is_current(request, generation):
            return
        self._set_preview_loading(False)
        mapped = map_transfer_error(error)
        logger.warning(f"Roster preview rejected: {mapped.code}")
        self.error_reported.emit(mapped)

    def _set_preview_loading(self, loading: bool):
        if self.preview_loading != loading:
            self.preview_loading = loading
            self.preview_loading_changed.emit(loading)

    def _block(self, reason: str) -> bool:
        self.selection_blocked.emit(reason)
        return False

    # ==================== Step 2: preview ====================

    @property
    def preview(self) -> Optional[EnrollmentImportPreview]:
        return self.context.get("preview")

    def rows(self) -> List[ImportRow]:
        preview = self.preview
        return list(preview.rows) if preview else []

    def set_strategy(self, strategy: EnrollmentStrategy):
        self.context.set("strategy", strategy)

    def toggle_row(self, row: ImportRow, selected: bool) -> bool:
        if not row.status.is_enrollable:
            return self._block(row.error_message or tr("import.row.not_enrollable"))
        rows = set(self.context.get("selected_rows"))
        if selected:
            rows.add(row.row_index)
        else:
            rows.discard(row.row_index)
        self.context.set("selected_rows", frozenset(rows))
        return True

    def select_rows(self, indexes: Iterable[int]):
        enrollable = {row.row_index for row in (self.preview.enrollable_rows if self.preview else [])}
        self.context.set("selected_rows", frozenset(i for i in indexes if i in enrollable))

    # ==================== Step 3: confirm ====================

    def set_override_reason(self, text: str):
        self.context.set("override_reason", text or "")
