# -*- coding: utf-8 -*-
"""
Class transfer models.

Mirror the backend's transfer eligibility, option and request payloads.
Every classification carried here (eligibility, content-gap severity, quota)
is computed by the server; the client only reads it.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class Modality(str, Enum):
    """Learning modality of a class."""
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    HYBRID = "HYBRID"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Modality"]:
        if not value:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            return None

    @property
    def display(self) -> str:
        return {
            Modality.ONLINE: "Online",
            Modality.OFFLINE: "In class",
            Modality.HYBRID: "Hybrid",
        }[self]


class ContentGapSeverity(str, Enum):
    """How much curriculum a transferring student would miss."""
    NONE = "NONE"
    MINOR = "MINOR"
    MODERATE = "MODERATE"
    MAJOR = "MAJOR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ContentGapSeverity":
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def tone(self) -> str:
        """Presentation tone used by badges."""
        return {
            ContentGapSeverity.NONE: "success",
            ContentGapSeverity.MINOR: "warning",
            ContentGapSeverity.MODERATE: "caution",
            ContentGapSeverity.MAJOR: "danger",
            ContentGapSeverity.UNKNOWN: "neutral",
        }[self]

    @property
    def label_key(self) -> str:
        return f"transfer.gap.{self.value.lower()}"


class SessionStatus(str, Enum):
    PLANNED = "PLANNED"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TransferType(str, Enum):
    """Kind of change a student asks for in the self-service flow."""
    SCHEDULE = "schedule"
    BRANCH_MODALITY = "branch-modality"


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class TransferQuota:
    used: int = 0
    limit: int = 0
    remaining: int = 0

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "TransferQuota":
        data = data or {}
        return cls(
            used=int(data.get("used") or 0),
            limit=int(data.get("limit") or 0),
            remaining=int(data.get("remaining") or 0),
        )


@dataclass(frozen=True)
class SessionInfo:
    session_id: int
    date: Optional[date]
    subject_session_number: Optional[int] = None
    subject_session_title: str = ""
    time_slot: str = ""
    status: SessionStatus = SessionStatus.PLANNED

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SessionInfo":
        try:
            status = SessionStatus(data.get("status") or "PLANNED")
        except ValueError:
            status = SessionStatus.PLANNED
        return cls(
            session_id=int(data["sessionId"]),
            date=_parse_date(data.get("date")),
            subject_session_number=(
                data.get("subjectSessionNumber") or data.get("courseSessionNumber")
            ),
            subject_session_title=(
                data.get("subjectSessionTitle") or data.get("courseSessionTitle") or ""
            ),
            time_slot=data.get("timeSlot") or "",
            status=status,
        )


@dataclass(frozen=True)
class ContentGap:
    severity: ContentGapSeverity = ContentGapSeverity.NONE
    missed_sessions: int = 0
    recommendation: str = ""
    total_sessions: Optional[int] = None
    recommended_actions: tuple = ()
    impact_description: str = ""

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "ContentGap":
        data = data or {}
        return cls(
            severity=ContentGapSeverity.parse(data.get("severity") or "NONE"),
            missed_sessions=int(data.get("missedSessions") or 0),
            recommendation=data.get("recommendation") or "",
            total_sessions=data.get("totalSessions"),
            recommended_actions=tuple(data.get("recommendedActions") or ()),
            impact_description=data.get("impactDescription") or "",
        )


@dataclass(frozen=True)
class TransferEligibility:
    """One current enrollment of a student, as the eligibility check sees it."""

    enrollment_id: int
    class_id: int
    class_code: str
    class_name: str
    course_id: Optional[int] = None
    course_name: str = ""
    branch_id: Optional[int] = None
    branch_name: str = ""
    modality: Optional[Modality] = None
    enrollment_status: str = ""
    quota: TransferQuota = field(default_factory=TransferQuota)
    has_pending_transfer: bool = False
    can_transfer: bool = False
    schedule_info: str = ""
    all_sessions: tuple = ()

    @property
    def is_selectable(self) -> bool:
        """Whether a transfer can be started from this enrollment."""
        return self.can_transfer and not self.has_pending_transfer and not self.quota.exhausted

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TransferEligibility":
        return cls(
            enrollment_id=int(data.get("enrollmentId") or 0),
            class_id=int(data["classId"]),
            class_code=data.get("classCode") or "",
            class_name=data.get("className") or "",
            course_id=data.get("courseId"),
            course_name=data.get("courseName") or "",
            branch_id=data.get("branchId"),
            branch_name=data.get("branchName") or "",
            modality=Modality.parse(data.get("modality") or data.get("learningMode")),
            enrollment_status=data.get("enrollmentStatus") or "",
            quota=TransferQuota.from_api(data.get("transferQuota")),
            has_pending_transfer=bool(data.get("hasPendingTransfer")),
            can_transfer=bool(data.get("canTransfer")),
            schedule_info=data.get("scheduleTime") or data.get("scheduleInfo") or "",
            all_sessions=tuple(
                SessionInfo.from_api(s) for s in (data.get("allSessions") or [])
            ),
        )


@dataclass(frozen=True)
class PolicyInfo:
    max_transfers_per_course: int = 1
    auto_approval_conditions: str = ""
    requires_aa_approval: bool = False
    policy_description: str = ""

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "PolicyInfo":
        data = data or {}
        return cls(
            max_transfers_per_course=int(data.get("maxTransfersPerCourse") or 1),
            auto_approval_conditions=data.get("autoApprovalConditions") or "",
            requires_aa_approval=bool(data.get("requiresAAApproval")),
            policy_description=data.get("policyDescription") or "",
        )


@dataclass(frozen=True)
class TransferEligibilityResponse:
    eligible_for_transfer: bool
    ineligibility_reason: Optional[str]
    enrollments: List[TransferEligibility]
    policy: PolicyInfo

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TransferEligibilityResponse":
        rows = data.get("currentClasses") or data.get("currentEnrollments") or []
        return cls(
            eligible_for_transfer=bool(data.get("eligibleForTransfer")),
            ineligibility_reason=data.get("ineligibilityReason"),
            enrollments=[TransferEligibility.from_api(row) for row in rows],
            policy=PolicyInfo.from_api(data.get("policyInfo")),
        )


@dataclass(frozen=True)
class TransferOption:
    """A candidate target class returned by the options query."""

    class_id: int
    class_code: str
    class_name: str
    branch_id: Optional[int] = None
    branch_name: str = ""
    modality: Optional[Modality] = None
    schedule_days: str = ""
    schedule_time: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current_session: int = 0
    max_capacity: int = 0
    enrolled_count: int = 0
    available_slots: int = 0
    class_status: str = ""
    content_gap: ContentGap = field(default_factory=ContentGap)
    can_transfer: bool = True
    progress_note: str = ""
    all_sessions: tuple = ()

    @property
    def is_full(self) -> bool:
        return self.available_slots <= 0

    def upcoming_sessions(self, today: Optional[date] = None) -> List[SessionInfo]:
        """Planned sessions on or after ``today``."""
        today = today or date.today()
        return [
            s for s in self.all_sessions
            if s.status == SessionStatus.PLANNED and s.date is not None and s.date >= today
        ]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TransferOption":
        return cls(
            class_id=int(data["classId"]),
            class_code=data.get("classCode") or "",
            class_name=data.get("className") or "",
            branch_id=data.get("branchId"),
            branch_name=data.get("branchName") or "",
            modality=Modality.parse(data.get("modality")),
            schedule_days=data.get("scheduleDays") or "",
            schedule_time=data.get("scheduleTime") or data.get("scheduleInfo") or "",
            start_date=_parse_date(data.get("startDate")),
            end_date=_parse_date(data.get("endDate")),
            current_session=int(data.get("currentSession") or 0),
            max_capacity=int(data.get("maxCapacity") or 0),
            enrolled_count=int(data.get("enrolledCount") or data.get("currentEnrollment") or 0),
            available_slots=int(data.get("availableSlots") or 0),
            class_status=data.get("classStatus") or "",
            content_gap=ContentGap.from_api(data.get("contentGap")),
            can_transfer=bool(data.get("canTransfer", True)),
            progress_note=data.get("progressNote") or "",
            all_sessions=tuple(
                SessionInfo.from_api(s)
                for s in (data.get("allSessions") or data.get("upcomingSessions") or [])
            ),
        )


@dataclass(frozen=True)
class TransferRequestResponse:
    """Success payload of a submitted transfer request."""

    request_id: int
    status: str
    submitted_at: str = ""
    effective_date: str = ""
    current_class_code: str = ""
    target_class_code: str = ""
    student_name: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TransferRequestResponse":
        current = data.get("currentClass") or {}
        target = data.get("targetClass") or {}
        student = data.get("student") or {}
        return cls(
            request_id=int(data["id"]),
            status=data.get("status") or "",
            submitted_at=data.get("submittedAt") or "",
            effective_date=data.get("effectiveDate") or "",
            current_class_code=current.get("code") or "",
            target_class_code=target.get("code") or "",
            student_name=student.get("fullName") or "",
        )
