# -*- coding: utf-8 -*-
"""
Step catalogues of the transfer wizards.

Each predicate only sees the fields its step lists in ``reads``.
"""

from datetime import date
from typing import Any, Dict, Mapping, Optional

from models.transfer import TransferEligibility, TransferType
from services.translation_manager import tr
from services.wizard.transfer_validators import (
    validate_on_behalf_confirmation, validate_transfer_confirmation
)
from ui.wizards.framework.base_step import StepValidationResult
from ui.wizards.framework.step_registry import StepDefinition, StepKind, StepRegistry


class TransferSteps:
    """Step identifiers of the self-service transfer."""
    ELIGIBILITY = "eligibility"
    TRANSFER_TYPE = "transfer-type"
    TARGET_CLASS = "target-class"
    CONFIRMATION = "confirmation"
    CONTACT_SUPPORT = "contact-support"


class OnBehalfSteps:
    """Step identifiers of the on-behalf transfer."""
    STUDENT_SEARCH = "student-search"
    CURRENT_CLASS = "current-class"
    TARGET_CLASS = "target-class"
    CONFIRMATION = "confirmation"


def enrollment_block_reason(enrollment: TransferEligibility) -> Optional[str]:
    """Why a transfer cannot start from ``enrollment`` (None when it can)."""
    if enrollment.has_pending_transfer:
        return tr("transfer.blocked.pending")
    if enrollment.quota.exhausted:
        return tr("transfer.blocked.quota")
    if not enrollment.can_transfer:
        return tr("transfer.blocked.not_eligible")
    return None


def on_behalf_block_reason(enrollment: TransferEligibility) -> Optional[str]:
    """Academic affairs may start from any enrollment without a pending request or spent quota."""
    if enrollment.has_pending_transfer:
        return tr("transfer.blocked.pending")
    if enrollment.quota.exhausted:
        return tr("transfer.blocked.quota")
    return None


# ==================== Self-service predicates ====================

def _enrollment_chosen(state: Mapping[str, Any]) -> StepValidationResult:
    enrollment = state["enrollment"]
    if enrollment is None:
        return StepValidationResult.fail(tr("validation.enrollment.required"))
    reason = enrollment_block_reason(enrollment)
    if reason:
        return StepValidationResult.fail(reason)
    return StepValidationResult.ok()


def _transfer_type_chosen(state: Mapping[str, Any]) -> StepValidationResult:
    if state["transfer_type"] is None:
        return StepValidationResult.fail(tr("validation.transfer_type.required"))
    return StepValidationResult.ok()


def _route_by_transfer_type(state: Mapping[str, Any]) -> str:
    if state["transfer_type"] is TransferType.SCHEDULE:
        return TransferSteps.TARGET_CLASS
    return TransferSteps.CONTACT_SUPPORT


def _target_and_session_chosen(state: Mapping[str, Any]) -> StepValidationResult:
    target = state["target_class"]
    if target is None:
        return StepValidationResult.fail(tr("validation.target.required"))
    if not target.can_transfer or target.is_full:
        return StepValidationResult.fail(tr("transfer.blocked.target_unavailable"))
    if state["session_id"] is None:
        return StepValidationResult.fail(tr("validation.session.required"))
    return StepValidationResult.ok()


def _confirmation_valid(state: Mapping[str, Any]) -> StepValidationResult:
    return validate_transfer_confirmation(state)


def build_transfer_registry() -> StepRegistry:
    return StepRegistry([
        StepDefinition(
            TransferSteps.ELIGIBILITY,
            tr("transfer.step.eligibility"),
            can_advance=_enrollment_chosen,
            reads=("enrollment",),
            resets=(
                "transfer_type", "target_class", "session_id", "effective_date", "reason",
                "terms_accepted", "quota_acknowledged", "content_gap_acknowledged",
            ),
            description=tr("transfer.step.eligibility.description"),
        ),
        StepDefinition(
            TransferSteps.TRANSFER_TYPE,
            tr("transfer.step.transfer_type"),
            can_advance=_transfer_type_chosen,
            resolve_next=_route_by_transfer_type,
            reads=("transfer_type",),
            resets=("target_class",),
        ),
        StepDefinition(
            TransferSteps.TARGET_CLASS,
            tr("transfer.step.target_class"),
            can_advance=_target_and_session_chosen,
            reads=("target_class", "session_id"),
            description=tr("transfer.step.target_class.description"),
        ),
        StepDefinition(
            TransferSteps.CONFIRMATION,
            tr("transfer.step.confirmation"),
            can_advance=_confirmation_valid,
            reads=(
                "target_class", "effective_date", "reason",
                "terms_accepted", "quota_acknowledged", "content_gap_acknowledged",
            ),
            kind=StepKind.SUBMIT,
        ),
        StepDefinition(
            TransferSteps.CONTACT_SUPPORT,
            tr("transfer.step.contact_support"),
            reads=("enrollment",),
            kind=StepKind.EXIT,
        ),
    ])


def build_transfer_payload(state: Mapping[str, Any]) -> Dict[str, Any]:
    effective: date = state["effective_date"]
    return {
        "currentClassId": state["enrollment"].class_id,
        "targetClassId": state["target_class"].class_id,
        "effectiveDate": effective.isoformat(),
        "sessionId": state["session_id"],
        "requestReason": state["reason"].strip(),
    }


# ==================== On-behalf predicates ====================

def _student_chosen(state: Mapping[str, Any]) -> StepValidationResult:
    if state["student"] is None:
        return StepValidationResult.fail(tr("validation.student.required"))
    return StepValidationResult.ok()


def _current_class_chosen(state: Mapping[str, Any]) -> StepValidationResult:
    current = state["current_class"]
    if current is None:
        return StepValidationResult.fail(tr("validation.current_class.required"))
    reason = on_behalf_block_reason(current)
    if reason:
        return StepValidationResult.fail(reason)
    return StepValidationResult.ok()


def _target_chosen(state: Mapping[str, Any]) -> StepValidationResult:
    target = state["target_class"]
    if target is None:
        return StepValidationResult.fail(tr("validation.target.required"))
    if not target.can_transfer:
        return StepValidationResult.fail(tr("transfer.blocked.target_unavailable"))
    return StepValidationResult.ok()


def _on_behalf_confirmation_valid(state: Mapping[str, Any]) -> StepValidationResult:
    return validate_on_behalf_confirmation(state)


def build_on_behalf_registry() -> StepRegistry:
    return StepRegistry([
        StepDefinition(
            OnBehalfSteps.STUDENT_SEARCH,
            tr("transfer.step.student_search"),
            can_advance=_student_chosen,
            reads=("student",),
            resets=(
                "current_class", "filters", "target_class", "session_id", "effective_date",
                "reason", "note", "capacity_override", "override_reason",
            ),
        ),
        StepDefinition(
            OnBehalfSteps.CURRENT_CLASS,
            tr("transfer.step.current_class"),
            can_advance=_current_class_chosen,
            reads=("current_class",),
        ),
        StepDefinition(
            OnBehalfSteps.TARGET_CLASS,
            tr("transfer.step.target_class"),
            can_advance=_target_chosen,
            reads=("target_class",),
        ),
        StepDefinition(
            OnBehalfSteps.CONFIRMATION,
            tr("transfer.step.confirmation"),
            can_advance=_on_behalf_confirmation_valid,
            reads=(
                "target_class", "session_id", "effective_date", "reason",
                "capacity_override", "override_reason",
            ),
            kind=StepKind.SUBMIT,
        ),
    ])


def build_on_behalf_payload(state: Mapping[str, Any]) -> Dict[str, Any]:
    target = state["target_class"]
    payload = {
        "studentId": state["student"].student_id,
        "currentClassId": state["current_class"].class_id,
        "targetClassId": target.class_id,
        "effectiveDate": state["effective_date"].isoformat(),
        "sessionId": state["session_id"],
        "requestReason": state["reason"].strip(),
        "note": state["note"].strip() or None,
    }
    if target.is_full:
        payload["capacityOverride"] = True
        payload["overrideReason"] = state["override_reason"].strip()
    return {key: value for key, value in payload.items() if value is not None}
