# -*- coding: utf-8 -*-
"""
Academic API Service
====================

Typed facade over EduCenterApiClient for the wizards.

Reads go through the QueryCache so identical requests are shared and
mutations can invalidate them by tag. Mutations return typed models and
declare the tags they invalidate in INVALIDATION_GRAPH.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.branch import BranchOption
from models.enrollment_import import EnrollmentImportPreview, EnrollmentResult
from models.student import StudentSearchResult
from models.transfer import TransferEligibilityResponse, TransferOption, TransferRequestResponse
from services.api_client import EduCenterApiClient
from services.query_cache import QueryCache, QueryEndpoint
from utils.logger import get_logger

logger = get_logger(__name__)


class Endpoints:
    """Names of the cached read endpoints."""
    MY_TRANSFER_ELIGIBILITY = "myTransferEligibility"
    STUDENT_TRANSFER_ELIGIBILITY = "studentTransferEligibility"
    TRANSFER_OPTIONS = "transferOptions"
    STUDENT_SEARCH = "searchStudents"
    BRANCHES = "branches"


class Mutations:
    """Names of the write endpoints."""
    SUBMIT_TRANSFER = "submitTransferRequest"
    SUBMIT_TRANSFER_ON_BEHALF = "submitTransferOnBehalf"
    PREVIEW_ENROLLMENT_IMPORT = "previewEnrollmentImport"
    EXECUTE_ENROLLMENT_IMPORT = "executeEnrollmentImport"


# Tags whose cached collections change when a mutation succeeds
INVALIDATION_GRAPH: Mapping[str, Tuple[str, ...]] = {
    Mutations.SUBMIT_TRANSFER: ("StudentRequests", "PendingRequests", "TransferEligibility"),
    Mutations.SUBMIT_TRANSFER_ON_BEHALF: ("StudentRequests", "PendingRequests", "TransferEligibility"),
    Mutations.PREVIEW_ENROLLMENT_IMPORT: (),
    Mutations.EXECUTE_ENROLLMENT_IMPORT: ("ClassStudents", "AvailableStudents"),
}


def _parse_options(data: Any) -> List[TransferOption]:
    if isinstance(data, dict):
        rows = data.get("availableClasses") or data.get("options") or []
    else:
        rows = data or []
    return [TransferOption.from_api(row) for row in rows]


def _parse_students(data: Any) -> List[StudentSearchResult]:
    return [StudentSearchResult.from_api(row) for row in (data or [])]


def _parse_branches(data: Any) -> List[BranchOption]:
    return [BranchOption.from_api(row) for row in (data or [])]


def _eligibility_tags(data, args: Dict[str, Any]) -> Tuple[str, ...]:
    student_id = args.get("student_id")
    if student_id is None:
        return ("TransferEligibility",)
    return ("TransferEligibility", f"TransferEligibility:{student_id}")


def _options_tags(data, args: Dict[str, Any]) -> Tuple[str, ...]:
    return ("TransferOptions", f"TransferOptions:{args.get('current_class_id')}")


class AcademicApiService:
    """Transfer, student search and enrollment import operations."""

    def __init__(self, client: EduCenterApiClient, cache: QueryCache):
        self.client = client
        self.cache = cache
        self._register_endpoints()

    def _register_endpoints(self):
        client = self.client
        self.cache.register(QueryEndpoint(
            Endpoints.MY_TRANSFER_ELIGIBILITY,
            lambda: client.get_my_transfer_eligibility(),
            provides=_eligibility_tags,
            transform=TransferEligibilityResponse.from_api,
        ))
        self.cache.register(QueryEndpoint(
            Endpoints.STUDENT_TRANSFER_ELIGIBILITY,
            lambda student_id: client.get_student_transfer_eligibility(student_id),
            provides=_eligibility_tags,
            transform=TransferEligibilityResponse.from_api,
        ))
        self.cache.register(QueryEndpoint(
            Endpoints.TRANSFER_OPTIONS,
            lambda current_class_id, target_branch_id=None, target_modality=None, schedule_only=None:
                client.get_transfer_options(
                    current_class_id,
                    target_branch_id=target_branch_id,
                    target_modality=target_modality,
                    schedule_only=schedule_only,
                ),
            provides=_options_tags,
            transform=_parse_options,
        ))
        self.cache.register(QueryEndpoint(
            Endpoints.STUDENT_SEARCH,
            lambda keyword, branch_id=None: client.search_students(keyword, branch_id=branch_id),
            provides=("Students",),
            transform=_parse_students,
        ))
        self.cache.register(QueryEndpoint(
            Endpoints.BRANCHES,
            lambda: client.get_branches(),
            provides=("Branches",),
            transform=_parse_branches,
        ))

    # ==================== Query keys ====================

    def eligibility_query(self, student_id: Optional[int] = None) -> str:
        """Subscribe to eligibility (own when ``student_id`` is None)."""
        if student_id is None:
            return self.cache.subscribe(Endpoints.MY_TRANSFER_ELIGIBILITY)
        return self.cache.subscribe(Endpoints.STUDENT_TRANSFER_ELIGIBILITY, student_id=student_id)

    def options_query(self, current_class_id: int, target_branch_id: Optional[int] = None,
                      target_modality: Optional[str] = None,
                      schedule_only: Optional[bool] = None) -> str:
        return self.cache.subscribe(
            Endpoints.TRANSFER_OPTIONS,
            current_class_id=current_class_id,
            target_branch_id=target_branch_id,
            target_modality=target_modality,
            schedule_only=schedule_only,
        )

    def student_search_query(self, keyword: str, branch_id: Optional[int] = None) -> str:
        return self.cache.subscribe(Endpoints.STUDENT_SEARCH, keyword=keyword, branch_id=branch_id)

    def branches_query(self) -> str:
        return self.cache.subscribe(Endpoints.BRANCHES)

    # ==================== Mutations ====================

    def submit_transfer(self, payload: Dict[str, Any]) -> TransferRequestResponse:
        return TransferRequestResponse.from_api(self.client.submit_transfer_request(payload))

    def submit_transfer_on_behalf(self, payload: Dict[str, Any]) -> TransferRequestResponse:
        return TransferRequestResponse.from_api(self.client.submit_transfer_on_behalf(payload))

    def preview_enrollment_import(self, class_id: int, file_path: Path) -> EnrollmentImportPreview:
        return EnrollmentImportPreview.from_api(
            self.client.preview_enrollment_import(class_id, file_path)
        )

    def execute_enrollment_import(self, payload: Dict[str, Any]) -> EnrollmentResult:
        return EnrollmentResult.from_api(
            self.client.execute_enrollment_import(payload["classId"], payload)
        )

    @staticmethod
    def invalidated_by(mutation: str) -> Tuple[str, ...]:
        return INVALIDATION_GRAPH[mutation]
