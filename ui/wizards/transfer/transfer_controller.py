# -*- coding: utf-8 -*-
"""
Transfer wizard controllers.

TransferController drives the student self-service flow,
OnBehalfTransferController the academic-affairs flow. Both write the user's
choices into their context and keep the cache subscriptions each step needs.
"""

from typing import List, Optional

from PyQt5.QtCore import pyqtSignal

from app.config import Config
from models.branch import BranchOption
from models.student import StudentSearchResult
from models.transfer import (
    Modality, SessionInfo, TransferEligibility, TransferEligibilityResponse,
    TransferOption, TransferType
)
from services.academic_api_service import INVALIDATION_GRAPH, Mutations
from services.translation_manager import tr
from utils.logger import get_logger
from ui.wizards.framework.async_gate import AsyncStepGate
from ui.wizards.framework.wizard_controller import ListState, WizardController
from .option_filters import TransferDimension, TransferOptionFilters, allowed_modalities
from .transfer_context import OnBehalfTransferContext, TransferContext
from .transfer_steps import (
    OnBehalfSteps, TransferSteps, build_on_behalf_payload, build_on_behalf_registry,
    build_transfer_payload, build_transfer_registry, enrollment_block_reason,
    on_behalf_block_reason
)

logger = get_logger(__name__)


class _TransferControllerBase(WizardController):
    """Target-class handling shared by both transfer flows."""

    selection_blocked = pyqtSignal(str)  # user-facing reason

    def _block(self, reason: str) -> bool:
        logger.info(f"Selection blocked: {reason}")
        self.selection_blocked.emit(reason)
        return False

    def options(self) -> List[TransferOption]:
        return self.query_state("options").data or []

    def options_state(self) -> ListState:
        return self.list_state("options", self.options())

    def upcoming_sessions(self) -> List[SessionInfo]:
        target: Optional[TransferOption] = self.context.get("target_class")
        return target.upcoming_sessions() if target else []

    def select_session(self, session: SessionInfo) -> bool:
        """Pick the first session in the target class; it fixes the effective date."""
        target: Optional[TransferOption] = self.context.get("target_class")
        if target is None:
            return self._block(tr("validation.target.required"))
        if session.session_id not in {s.session_id for s in target.all_sessions}:
            return self._block(tr("validation.session.required"))
        self.context.set("session_id", session.session_id)
        self.context.set("effective_date", session.date)
        return True

    def set_reason(self, text: str):
        self.context.set("reason", text or "")

    def _bind_options(self, key: Optional[str]):
        self.watch("options", key)
        self.gate.bind_query(key)


class TransferController(_TransferControllerBase):
    """Student self-service transfer."""

    def create_registry(self):
        return build_transfer_registry()

    def create_context(self, registry):
        return TransferContext(registry)

    def create_gate(self, navigator):
        return AsyncStepGate(
            navigator,
            mutation=self.api.submit_transfer,
            payload_builder=build_transfer_payload,
            runner=self.runner,
            cache=self.cache,
            invalidates=INVALIDATION_GRAPH[Mutations.SUBMIT_TRANSFER],
            stale_reference_step=TransferSteps.TARGET_CLASS,
            stale_reference_clears=("target_class",),
            on_success=self.notify_success,
            label=Mutations.SUBMIT_TRANSFER,
            parent=self,
        )

    def on_opened(self):
        self.watch("eligibility", self.api.eligibility_query())

    def on_step_entered(self, step_id: str):
        if step_id == TransferSteps.TARGET_CLASS:
            self.load_options()

    # ==================== Step 1: eligibility ====================

    def eligibility(self) -> Optional[TransferEligibilityResponse]:
        return self.query_state("eligibility").data

    def enrollments(self) -> List[TransferEligibility]:
        response = self.eligibility()
        return list(response.enrollments) if response else []

    def eligibility_state(self) -> ListState:
        return self.list_state("eligibility", self.enrollments())

    def select_enrollment(self, enrollment: TransferEligibility) -> bool:
        reason = enrollment_block_reason(enrollment)
        if reason:
            return self._block(reason)
        self.context.set("enrollment", enrollment)
        return True

    # ==================== Step 2: transfer type ====================

    def select_transfer_type(self, transfer_type: TransferType):
        self.context.set("transfer_type", transfer_type)

    # ==================== Step 3: target class ====================

    def load_options(self) -> Optional[str]:
        enrollment: Optional[TransferEligibility] = self.context.get("enrollment")
        if enrollment is None:
            self._bind_options(None)
            return None
        key = self.api.options_query(enrollment.class_id)
        self._bind_options(key)
        return key

    def select_target(self, option: TransferOption) -> bool:
        if not option.can_transfer or option.is_full:
            return self._block(tr("transfer.blocked.target_unavailable"))
        self.context.set("target_class", option)
        return True

    # ==================== Step 4: confirmation ====================

    def set_acknowledgement(self, name: str, accepted: bool):
        if name not in ("terms_accepted", "quota_acknowledged", "content_gap_acknowledged"):
            raise KeyError(name)
        self.context.set(name, bool(accepted))

    def support_email(self) -> str:
        return Config.SUPPORT_EMAIL


class OnBehalfTransferController(_TransferControllerBase):
    """Transfer submitted by academic affairs for a student."""

    close_on_first_previous = True

    def create_registry(self):
        return build_on_behalf_registry()

    def create_context(self, registry):
        return OnBehalfTransferContext(registry)

    def create_gate(self, navigator):
        return AsyncStepGate(
            navigator,
            mutation=self.api.submit_transfer_on_behalf,
            payload_builder=build_on_behalf_payload,
            runner=self.runner,
            cache=self.cache,
            invalidates=INVALIDATION_GRAPH[Mutations.SUBMIT_TRANSFER_ON_BEHALF],
            stale_reference_step=OnBehalfSteps.TARGET_CLASS,
            stale_reference_clears=("target_class",),
            on_success=self.notify_success,
            label=Mutations.SUBMIT_TRANSFER_ON_BEHALF,
            parent=self,
        )

    def on_step_entered(self, step_id: str):
        if step_id == OnBehalfSteps.CURRENT_CLASS:
            self.load_current_classes()
        elif step_id == OnBehalfSteps.TARGET_CLASS:
            self.watch("branches", self.api.branches_query())
            self.load_options()

    # ==================== Step 1: student search ====================

    def search_students(self, keyword: str, branch_id: Optional[int] = None) -> Optional[str]:
        """Search once the keyword is long enough; shorter keywords clear the results."""
        keyword = (keyword or "").strip()
        if len(keyword) < Config.STUDENT_SEARCH_MIN_CHARS:
            self.unwatch("students")
            return None
        return self.watch("students", self.api.student_search_query(keyword, branch_id=branch_id))

    def students(self) -> List[StudentSearchResult]:
        return self.query_state("students").data or []

    def students_state(self) -> ListState:
        return self.list_state("students", self.students())

    def select_student(self, student: StudentSearchResult):
        self.context.set("student", student)

    # ==================== Step 2: current class ====================

    def load_current_classes(self) -> Optional[str]:
        student: Optional[StudentSearchResult] = self.context.get("student")
        if student is None:
            self.unwatch("eligibility")
            return None
        return self.watch("eligibility", self.api.eligibility_query(student.student_id))

    def current_classes(self) -> List[TransferEligibility]:
        response: Optional[TransferEligibilityResponse] = self.query_state("eligibility").data
        return list(response.enrollments) if response else []

    def current_classes_state(self) -> ListState:
        return self.list_state("eligibility", self.current_classes())

    def select_current_class(self, enrollment: TransferEligibility) -> bool:
        reason = on_behalf_block_reason(enrollment)
        if reason:
            return self._block(reason)
        self.context.set("current_class", enrollment)
        return True

    # ==================== Step 3: target class ====================

    @property
    def filters(self) -> TransferOptionFilters:
        return self.context.get("filters")

    def allowed_modalities(self) -> List[Modality]:
        current: Optional[TransferEligibility] = self.context.get("current_class")
        return allowed_modalities(current.modality if current else None)

    def branches(self) -> List[BranchOption]:
        """Branches other than the current class's one."""
        current: Optional[TransferEligibility] = self.context.get("current_class")
        rows = self.query_state("branches").data or []
        if current is None:
            return list(rows)
        return [branch for branch in rows if branch.branch_id != current.branch_id]

    def toggle_dimension(self, dimension: TransferDimension):
        self._set_filters(self.filters.toggle(dimension))

    def set_target_branch(self, branch_id: Optional[int]):
        self._set_filters(self.filters.with_branch(branch_id))

    def set_target_modality(self, modality: Optional[Modality]):
        if modality is not None and modality not in self.allowed_modalities():
            self._block(tr("transfer.blocked.modality_not_allowed"))
            return
        self._set_filters(self.filters.with_modality(modality))

    def _set_filters(self, filters: TransferOptionFilters):
        self.context.set("filters", filters)
        if self.context.current_step_id == OnBehalfSteps.TARGET_CLASS:
            self.load_options()

    def load_options(self) -> Optional[str]:
        """Query target options once every enabled filter has its value."""
        current: Optional[TransferEligibility] = self.context.get("current_class")
        filters = self.filters
        if current is None or not filters.ready:
            self._bind_options(None)
            return None
        key = self.api.options_query(current.class_id, **filters.query_args())
        self._bind_options(key)
        return key

    def select_target(self, option: TransferOption) -> bool:
        if not option.can_transfer:
            return self._block(tr("transfer.blocked.target_unavailable"))
        self.context.set("target_class", option)
        return True

    # ==================== Step 4: confirmation ====================

    def set_note(self, text: str):
        self.context.set("note", text or "")

    def set_capacity_override(self, enabled: bool, reason: str = ""):
        self.context.set("capacity_override", bool(enabled))
        if enabled:
            self.context.set("override_reason", reason or "")
