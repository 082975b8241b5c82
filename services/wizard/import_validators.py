# -*- coding: utf-8 -*-
"""
Local validation for the enrollment import wizard.
"""

from typing import AbstractSet, Any, List, Mapping

from app.config import Config
from models.enrollment_import import EnrollmentImportPreview, EnrollmentStrategy
from services.translation_manager import tr
from ui.wizards.framework.base_step import StepValidationResult
from .transfer_validators import validate_reason


def validate_import_preview(preview: EnrollmentImportPreview) -> StepValidationResult:
    """The roster can be enrolled at all."""
    if preview is None:
        return StepValidationResult.fail(tr("validation.import.preview_required"))
    if not preview.recommendation.can_proceed:
        return StepValidationResult.fail(
            preview.recommendation.message or tr("validation.import.blocked")
        )
    if not preview.enrollable_rows:
        return StepValidationResult.fail(tr("validation.import.no_valid_rows"))
    return StepValidationResult.ok()


def selected_student_ids(preview: EnrollmentImportPreview, selected_rows: AbstractSet[int]) -> List[int]:
    """Existing-student ids of the selected rows; rows to be created have none."""
    return [
        row.resolved_student_id for row in preview.enrollable_rows
        if row.row_index in selected_rows and row.resolved_student_id is not None
    ]


def validate_partial_selection(state: Mapping[str, Any]) -> StepValidationResult:
    """PARTIAL enrolls by student id, so the selection must name an existing student."""
    if not state["selected_rows"]:
        return StepValidationResult.fail(tr("validation.import.partial_selection"))
    if not selected_student_ids(state["preview"], state["selected_rows"]):
        return StepValidationResult.fail(tr("validation.import.partial_existing_only"))
    return StepValidationResult.ok()


def validate_import_strategy(state: Mapping[str, Any]) -> StepValidationResult:
    """
    Strategy requirements.

    Reads: preview, strategy, selected_rows, override_reason.
    PARTIAL needs a selected row with a resolved student id; OVERRIDE needs a reason of
    OVERRIDE_REASON_MIN_LENGTH characters.
    """
    result = validate_import_preview(state["preview"])
    if not result.is_valid:
        return result

    strategy = state["strategy"]
    if strategy is None:
        return StepValidationResult.fail(tr("validation.import.strategy_required"))
    if strategy is EnrollmentStrategy.PARTIAL:
        result.merge(validate_partial_selection(state))
    if strategy is EnrollmentStrategy.OVERRIDE:
        reason = validate_reason(state["override_reason"], Config.OVERRIDE_REASON_MIN_LENGTH)
        result.merge(reason)
    return result
