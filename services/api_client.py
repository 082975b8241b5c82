# -*- coding: utf-8 -*-
"""
EduCenter API Client
====================

Thin HTTP client for the education-center backend. Every endpoint the
wizards need (transfer eligibility, transfer options, student search,
transfer submission, enrollment import) goes through ``_request`` so that
authentication, logging and error translation live in one place.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
import urllib3

from services.exceptions import ApiException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ApiConfig:
    """
    API connection settings.

    Values left as None are loaded from Config (which reads .env).
    """
    base_url: str = None
    username: str = None
    password: str = None
    timeout: int = None
    verify_ssl: bool = None

    def __post_init__(self):
        from app.config import Config

        if self.base_url is None:
            self.base_url = Config.API_BASE_URL
        if self.username is None:
            self.username = Config.API_USERNAME
        if self.password is None:
            self.password = Config.API_PASSWORD
        if self.timeout is None:
            self.timeout = Config.API_TIMEOUT
        if self.verify_ssl is None:
            self.verify_ssl = Config.API_VERIFY_SSL
        if not self.verify_ssl:
            # Self-signed certificates in development
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


class EduCenterApiClient:
    """
    Client for the EduCenter backend.

    Features:
    - Bearer token login and refresh
    - Response envelope unwrapping ({"success", "message", "data"})
    - Error translation to ApiException / NetworkException

    Usage:
        client = EduCenterApiClient(ApiConfig(base_url="http://localhost:8080/api/v1"))
        client.login("aa@center.local", "secret")
        eligibility = client.get_student_transfer_eligibility(42)
    """

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.token_expires_at: Optional[datetime] = None

    # ==================== Authentication ====================

    def login(self, username: Optional[str] = None, password: Optional[str] = None) -> Dict[str, Any]:
        """
        Log in and store the access/refresh tokens.

        Returns:
            The unwrapped login payload
        """
        username = username or self.config.username
        password = password or self.config.password
        try:
            response = requests.post(
                f"{self.base_url}/auth/login",
                json={"email": username, "password": password},
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logger.error(f"Login failed: {e}")
            raise ApiException(
                message=str(e),
                status_code=e.response.status_code if e.response is not None else None,
                context="login"
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Login failed: {e}")
            raise NetworkException(message=str(e), original_error=e, context="login")

        data = self._unwrap(response.json(), "/auth/login")
        self._store_tokens(data)
        logger.info(f"Logged in as {username}")
        return data

    def set_access_token(self, token: str, expires_in: int = 3600):
        """Set access token from an external source (e.g. an existing session)."""
        self.access_token = token
        self.token_expires_at = datetime.now() + timedelta(seconds=expires_in)
        logger.debug(f"Access token updated externally (expires in {expires_in}s)")

    def refresh_access_token(self) -> bool:
        """
        Refresh the access token with the refresh token.

        Returns:
            True if the refresh succeeded
        """
        if not self.refresh_token:
            logger.warning("No refresh token available")
            return False

        try:
            response = requests.post(
                f"{self.base_url}/auth/refresh",
                json={"refreshToken": self.refresh_token},
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()
            data = self._unwrap(response.json(), "/auth/refresh")
        except (requests.exceptions.RequestException, ApiException, ValueError) as e:
            logger.error(f"Token refresh failed: {e}")
            return False

        self._store_tokens(data)
        logger.info("Token refreshed")
        return True

    def logout(self):
        """Forget all tokens."""
        self.access_token = None
        self.refresh_token = None
        self.token_expires_at = None

    def _store_tokens(self, data: Dict[str, Any]):
        self.access_token = data["accessToken"]
        self.refresh_token = data.get("refreshToken", self.refresh_token)
        expires_in = data.get("expiresIn", 3600)
        self.token_expires_at = datetime.now() + timedelta(seconds=expires_in)

    def _ensure_valid_token(self):
        """Make sure the token is usable before a request."""
        from app.config import Config

        if not self.access_token:
            self.login()
            return

        if self.token_expires_at:
            time_until_expiry = (self.token_expires_at - datetime.now()).total_seconds()
            if time_until_expiry < Config.TOKEN_REFRESH_MARGIN_SECONDS:
                logger.info("Token expiring soon, refreshing...")
                if not self.refresh_access_token():
                    # Re-login if refresh fails
                    self.login()

    def _headers(self, json_body: bool = True) -> Dict[str, str]:
        """Headers with Authorization."""
        self._ensure_valid_token()
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json"
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    # ==================== Transport ====================

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        files: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request and return the unwrapped ``data`` field.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "/classes/12/transfer-options")
            json_data: JSON payload
            params: Query parameters
            files: Multipart files

        Returns:
            Response data
        """
        url = f"{self.base_url}{endpoint}"
        params = {k: v for k, v in (params or {}).items() if v is not None} or None

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data:
            logger.debug(f"[API REQ] Body: {json.dumps(json_data, ensure_ascii=False, default=str)}")

        try:
            response = requests.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                files=files,
                headers=self._headers(json_body=files is None),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data if isinstance(response_data, dict) else {}
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timed out: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e)
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e)

        logger.info(f"[API RES] {response.status_code} {endpoint}")
        if not response.text:
            return None
        try:
            body = response.json()
        except ValueError:
            raise ApiException(
                message="Malformed response body",
                status_code=response.status_code,
                context=endpoint
            )
        return self._unwrap(body, endpoint, response.status_code)

    @staticmethod
    def _unwrap(body: Any, endpoint: str, status_code: int = 200) -> Any:
        """Unwrap the {"success", "message", "data"} envelope."""
        if not isinstance(body, dict) or "success" not in body:
            return body
        if body.get("success") is False:
            logger.warning(f"[API ERR] {endpoint} rejected: {body.get('message')}")
            raise ApiException(
                message=body.get("message") or "Request rejected",
                status_code=status_code,
                response_data=body,
                context=endpoint
            )
        return body.get("data")

    # ==================== Transfer ====================

    def get_my_transfer_eligibility(self) -> Dict[str, Any]:
        """Eligibility of the logged-in student's enrollments."""
        return self._request("GET", "/students/me/transfer-eligibility")

    def get_student_transfer_eligibility(self, student_id: int) -> Dict[str, Any]:
        """Eligibility of a student's enrollments (academic affairs)."""
        return self._request("GET", f"/students/{student_id}/transfer-eligibility")

    def get_transfer_options(
        self,
        current_class_id: int,
        target_branch_id: Optional[int] = None,
        target_modality: Optional[str] = None,
        schedule_only: Optional[bool] = None
    ) -> Dict[str, Any]:
        """
        Candidate target classes for a transfer out of ``current_class_id``.

        Returns:
            {"availableClasses": [TransferOption, ...], ...}
        """
        params = {
            "targetBranchId": target_branch_id,
            "targetModality": target_modality,
            "scheduleOnly": None if schedule_only is None else str(bool(schedule_only)).lower(),
        }
        return self._request("GET", f"/classes/{current_class_id}/transfer-options", params=params)

    def submit_transfer_request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Self-service transfer submission."""
        return self._request("POST", "/student-requests/transfer", json_data=payload)

    def submit_transfer_on_behalf(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Transfer submission made by academic affairs for a student."""
        return self._request("POST", "/student-requests/transfer-on-behalf", json_data=payload)

    # ==================== Students ====================

    def search_students(self, keyword: str, branch_id: Optional[int] = None,
                        size: int = 20) -> List[Dict[str, Any]]:
        """Search students by name, code, email or phone."""
        data = self._request(
            "GET",
            "/students/search",
            params={"keyword": keyword, "branchId": branch_id, "size": size}
        )
        if isinstance(data, dict):
            return data.get("content") or []
        return data or []

    # ==================== Branches ====================

    def get_branches(self) -> List[Dict[str, Any]]:
        """All branches of the center (target-branch filter)."""
        return self._request("GET", "/branches") or []

    # ==================== Enrollment import ====================

    def preview_enrollment_import(self, class_id: int, file_path: Path) -> Dict[str, Any]:
        """Upload a roster file and get the server's resolution preview."""
        file_path = Path(file_path)
        with open(file_path, "rb") as fh:
            files = {"file": (file_path.name, fh)}
            return self._request(
                "POST", f"/enrollments/classes/{class_id}/import/preview", files=files
            )

    def execute_enrollment_import(self, class_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Enroll the previewed roster with the chosen strategy."""
        return self._request(
            "POST", f"/enrollments/classes/{class_id}/import/execute", json_data=payload
        )
