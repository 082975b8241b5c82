# -*- coding: utf-8 -*-
"""
Class enrollment import models.

The backend parses the uploaded roster, resolves every row against existing
students and recommends an enrollment strategy from the class capacity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ImportRowStatus(str, Enum):
    """Resolution status of one roster row."""
    FOUND = "FOUND"
    CREATE = "CREATE"
    DUPLICATE = "DUPLICATE"
    ERROR = "ERROR"

    @property
    def is_enrollable(self) -> bool:
        return self is not ImportRowStatus.ERROR


class EnrollmentStrategy(str, Enum):
    ALL = "ALL"
    PARTIAL = "PARTIAL"
    OVERRIDE = "OVERRIDE"


class RecommendationType(str, Enum):
    OK = "OK"
    PARTIAL_SUGGESTED = "PARTIAL_SUGGESTED"
    OVERRIDE_AVAILABLE = "OVERRIDE_AVAILABLE"
    BLOCKED = "BLOCKED"


_DEFAULT_STRATEGY = {
    RecommendationType.OK: EnrollmentStrategy.ALL,
    RecommendationType.PARTIAL_SUGGESTED: EnrollmentStrategy.PARTIAL,
    RecommendationType.OVERRIDE_AVAILABLE: EnrollmentStrategy.OVERRIDE,
    RecommendationType.BLOCKED: EnrollmentStrategy.ALL,
}


@dataclass(frozen=True)
class ImportRow:
    row_index: int
    full_name: str
    email: str = ""
    phone: str = ""
    status: ImportRowStatus = ImportRowStatus.ERROR
    resolved_student_id: Optional[int] = None
    error_message: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_api(cls, index: int, data: Dict[str, Any]) -> "ImportRow":
        try:
            status = ImportRowStatus(data.get("status") or "ERROR")
        except ValueError:
            status = ImportRowStatus.ERROR
        return cls(
            row_index=index,
            full_name=data.get("fullName") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            status=status,
            resolved_student_id=data.get("resolvedStudentId") or data.get("existingStudentId"),
            error_message=data.get("errorMessage") or "",
            raw=dict(data),
        )


@dataclass(frozen=True)
class EnrollmentRecommendation:
    type: RecommendationType
    message: str = ""
    suggested_enroll_count: Optional[int] = None
    recommended_strategy: EnrollmentStrategy = EnrollmentStrategy.ALL

    @property
    def can_proceed(self) -> bool:
        return self.type is not RecommendationType.BLOCKED

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "EnrollmentRecommendation":
        data = data or {}
        try:
            rec_type = RecommendationType(data.get("type") or "OK")
        except ValueError:
            rec_type = RecommendationType.BLOCKED
        strategy = _DEFAULT_STRATEGY[rec_type]
        if data.get("recommendedStrategy"):
            try:
                strategy = EnrollmentStrategy(data["recommendedStrategy"])
            except ValueError:
                pass
        return cls(
            type=rec_type,
            message=data.get("message") or "",
            suggested_enroll_count=data.get("suggestedEnrollCount"),
            recommended_strategy=strategy,
        )


@dataclass(frozen=True)
class EnrollmentImportPreview:
    class_id: int
    class_code: str
    class_name: str
    rows: List[ImportRow]
    current_enrolled: int = 0
    max_capacity: int = 0
    available_slots: int = 0
    exceeds_capacity: bool = False
    exceeded_by: int = 0
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    recommendation: EnrollmentRecommendation = field(
        default_factory=lambda: EnrollmentRecommendation(RecommendationType.OK)
    )

    def count(self, status: ImportRowStatus) -> int:
        return sum(1 for row in self.rows if row.status is status)

    @property
    def enrollable_rows(self) -> List[ImportRow]:
        return [row for row in self.rows if row.status.is_enrollable]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "EnrollmentImportPreview":
        return cls(
            class_id=int(data["classId"]),
            class_code=data.get("classCode") or "",
            class_name=data.get("className") or "",
            rows=[ImportRow.from_api(i, row) for i, row in enumerate(data.get("students") or [])],
            current_enrolled=int(data.get("currentEnrolled") or 0),
            max_capacity=int(data.get("maxCapacity") or 0),
            available_slots=int(data.get("availableSlots") or 0),
            exceeds_capacity=bool(data.get("exceedsCapacity")),
            exceeded_by=int(data.get("exceededBy") or 0),
            warnings=list(data.get("warnings") or []),
            errors=list(data.get("errors") or []),
            recommendation=EnrollmentRecommendation.from_api(data.get("recommendation")),
        )


@dataclass(frozen=True)
class EnrollmentResult:
    enrolled_count: int = 0
    students_created: int = 0
    total_student_sessions_created: int = 0
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "EnrollmentResult":
        data = data or {}
        return cls(
            enrolled_count=int(data.get("enrolledCount") or 0),
            students_created=int(data.get("studentsCreated") or 0),
            total_student_sessions_created=int(data.get("totalStudentSessionsCreated") or 0),
            warnings=list(data.get("warnings") or []),
        )
