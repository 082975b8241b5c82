# -*- coding: utf-8 -*-
"""
Step catalogue of the enrollment import wizard: upload → preview → confirm.
"""

from typing import Any, Dict, Mapping

from models.enrollment_import import EnrollmentImportPreview, EnrollmentStrategy
from services.translation_manager import tr
from services.wizard.import_validators import (
    selected_student_ids,
    validate_import_preview,
    validate_import_strategy,
    validate_partial_selection,
)
from ui.wizards.framework.base_step import StepValidationResult
from ui.wizards.framework.step_registry import StepDefinition, StepKind, StepRegistry


class ImportSteps:
    UPLOAD = "upload"
    PREVIEW = "preview"
    CONFIRM = "confirm"


def _preview_loaded(state: Mapping[str, Any]) -> StepValidationResult:
    if state["file_path"] is None:
        return StepValidationResult.fail(tr("validation.import.file_required"))
    if state["preview"] is None:
        return StepValidationResult.fail(tr("validation.import.preview_required"))
    return StepValidationResult.ok()


def _preview_acceptable(state: Mapping[str, Any]) -> StepValidationResult:
    result = validate_import_preview(state["preview"])
    if result.is_valid and state["strategy"] is EnrollmentStrategy.PARTIAL:
        result.merge(validate_partial_selection(state))
    return result


def build_import_registry() -> StepRegistry:
    return StepRegistry([
        StepDefinition(
            ImportSteps.UPLOAD,
            tr("import.step.upload"),
            can_advance=_preview_loaded,
            reads=("file_path", "preview"),
            description=tr("import.step.upload.description"),
        ),
        StepDefinition(
            ImportSteps.PREVIEW,
            tr("import.step.preview"),
            can_advance=_preview_acceptable,
            reads=("preview", "strategy", "selected_rows"),
        ),
        StepDefinition(
            ImportSteps.CONFIRM,
            tr("import.step.confirm"),
            can_advance=validate_import_strategy,
            reads=("preview", "strategy", "selected_rows", "override_reason"),
            kind=StepKind.SUBMIT,
        ),
    ])


def build_import_payload(state: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Execute request for the previewed roster.

    The whole previewed roster is sent; PARTIAL names the students to
    enroll in selectedStudentIds and OVERRIDE adds the reason.
    """
    preview: EnrollmentImportPreview = state["preview"]
    strategy: EnrollmentStrategy = state["strategy"]

    payload: Dict[str, Any] = {
        "classId": preview.class_id,
        "strategy": strategy.value,
        "students": [row.raw for row in preview.rows],
    }
    if strategy is EnrollmentStrategy.PARTIAL:
        payload["selectedStudentIds"] = selected_student_ids(preview, state["selected_rows"])
    if strategy is EnrollmentStrategy.OVERRIDE:
        payload["overrideReason"] = state["override_reason"].strip()
    return payload
