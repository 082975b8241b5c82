# -*- coding: utf-8 -*-
"""
Student search result model.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StudentSearchResult:
    """Student row returned by the academic-affairs student search."""

    student_id: int
    student_code: str
    full_name: str
    email: str = ""
    phone: str = ""
    branch_id: Optional[int] = None
    branch_name: str = ""
    active_enrollments: int = 0
    last_enrollment_date: Optional[str] = None
    can_enroll: bool = True

    @property
    def display_name(self) -> str:
        return f"{self.full_name} ({self.student_code})"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "StudentSearchResult":
        return cls(
            student_id=int(data["id"]),
            student_code=data.get("studentCode") or "",
            full_name=data.get("fullName") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            branch_id=data.get("branchId"),
            branch_name=data.get("branchName") or "",
            active_enrollments=int(data.get("activeEnrollments") or 0),
            last_enrollment_date=data.get("lastEnrollmentDate"),
            can_enroll=bool(data.get("canEnroll", True)),
        )
