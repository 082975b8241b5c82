# -*- coding: utf-8 -*-
"""
EduCenter Data Models
"""

from .branch import BranchOption
from .enrollment_import import (
    EnrollmentImportPreview, EnrollmentRecommendation, EnrollmentResult,
    EnrollmentStrategy, ImportRow, ImportRowStatus, RecommendationType
)
from .student import StudentSearchResult
from .transfer import (
    ContentGap, ContentGapSeverity, Modality, SessionInfo, TransferEligibility,
    TransferEligibilityResponse, TransferOption, TransferQuota,
    TransferRequestResponse, TransferType
)

__all__ = [
    "BranchOption",
    "ContentGap",
    "ContentGapSeverity",
    "EnrollmentImportPreview",
    "EnrollmentRecommendation",
    "EnrollmentResult",
    "EnrollmentStrategy",
    "ImportRow",
    "ImportRowStatus",
    "Modality",
    "RecommendationType",
    "SessionInfo",
    "StudentSearchResult",
    "TransferEligibility",
    "TransferEligibilityResponse",
    "TransferOption",
    "TransferQuota",
    "TransferRequestResponse",
    "TransferType",
]
