# -*- coding: utf-8 -*-
"""Centralized error message mapper."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from services.translation_manager import tr
from services.exceptions import ApiException, ValidationException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


class ErrorSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorActionType(str, Enum):
    RETRY = "retry"
    CONTACT = "contact"
    NAVIGATE = "navigate"
    NONE = "none"


@dataclass(frozen=True)
class ErrorAction:
    type: ErrorActionType
    label: str = ""
    destination: Optional[str] = None


@dataclass(frozen=True)
class TransferError:
    """Structured, user-presentable rejection of a wizard request."""
    code: str
    message: str
    user_message: str
    severity: ErrorSeverity
    action: ErrorAction
    stale_reference: bool = False


# code -> (severity, action type, destination)
TRANSFER_ERROR_CODES: Dict[str, tuple] = {
    # Business rules
    "TRF_QUOTA_EXCEEDED": (ErrorSeverity.ERROR, ErrorActionType.CONTACT, None),
    "TRF_PENDING_EXISTS": (ErrorSeverity.WARNING, ErrorActionType.CONTACT, None),
    "TRF_CLASS_FULL": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "TRF_INVALID_DATE": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "TRF_PAST_DATE": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "TRF_TIER_VIOLATION": (ErrorSeverity.WARNING, ErrorActionType.CONTACT, None),
    "TRF_SAME_CLASS": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "TRF_DIFFERENT_COURSE": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "TRF_CLASS_STATUS": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "TRF_CONCURRENT_UPDATE": (ErrorSeverity.WARNING, ErrorActionType.RETRY, None),
    # Validation
    "VALIDATION_FAILED": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "REQUEST_REASON_TOO_SHORT": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    # System
    "NETWORK_ERROR": (ErrorSeverity.WARNING, ErrorActionType.RETRY, None),
    "UNAUTHORIZED": (ErrorSeverity.ERROR, ErrorActionType.NAVIGATE, "/login"),
    "FORBIDDEN": (ErrorSeverity.ERROR, ErrorActionType.NONE, None),
    "NOT_FOUND": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "INTERNAL_SERVER_ERROR": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
    "UNKNOWN_ERROR": (ErrorSeverity.ERROR, ErrorActionType.RETRY, None),
}

# The selection they refer to changed on the server since it was made
STALE_REFERENCE_CODES = frozenset({"TRF_CLASS_FULL", "TRF_CONCURRENT_UPDATE", "TRF_CLASS_STATUS"})

_STATUS_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "TRF_CONCURRENT_UPDATE",
    500: "INTERNAL_SERVER_ERROR",
}


def build_transfer_error(code: str, message: str = "", user_message: Optional[str] = None) -> TransferError:
    """Build a TransferError for a known code (unknown codes become UNKNOWN_ERROR)."""
    if code not in TRANSFER_ERROR_CODES:
        code = "UNKNOWN_ERROR"
    severity, action_type, destination = TRANSFER_ERROR_CODES[code]
    label = tr(f"error.action.{code.lower()}") if action_type is not ErrorActionType.NONE else ""
    if label == f"error.action.{code.lower()}":
        label = tr(f"error.action.{action_type.value}")
    return TransferError(
        code=code,
        message=message or code,
        user_message=user_message or tr(f"transfer.error.{code.lower()}"),
        severity=severity,
        action=ErrorAction(type=action_type, label=label, destination=destination),
        stale_reference=code in STALE_REFERENCE_CODES,
    )


def map_transfer_error(error: Any) -> TransferError:
    """
    Map any failure of a wizard request to a TransferError.

    Malformed or unexpected errors degrade to UNKNOWN_ERROR.
    """
    if error is None:
        return build_transfer_error("UNKNOWN_ERROR")

    if isinstance(error, TransferError):
        return error

    if isinstance(error, NetworkException):
        return build_transfer_error("NETWORK_ERROR", error.message)

    if isinstance(error, ApiException):
        return _map_api_rejection(error)

    if isinstance(error, ValidationException):
        if error.field == "requestReason":
            return build_transfer_error("REQUEST_REASON_TOO_SHORT", error.message)
        return build_transfer_error("VALIDATION_FAILED", error.message)

    if isinstance(error, str):
        return build_transfer_error("UNKNOWN_ERROR", error, user_message=error or None)

    logger.warning(f"Unexpected error: {error!r}")
    return build_transfer_error("UNKNOWN_ERROR", str(error))


def _map_api_rejection(error: ApiException) -> TransferError:
    body = error.response_data if isinstance(error.response_data, dict) else {}
    server_message = error.server_message

    if error.status_code in _STATUS_CODES:
        return build_transfer_error(_STATUS_CODES[error.status_code], server_message or error.message)

    if error.rejected and server_message:
        if server_message in TRANSFER_ERROR_CODES:
            return build_transfer_error(server_message, server_message)

        details = body.get("data")
        if isinstance(details, dict) and details:
            if "requestReason" in details:
                return build_transfer_error("REQUEST_REASON_TOO_SHORT", server_message)
            joined = ", ".join(str(v) for v in details.values())
            return build_transfer_error(
                "VALIDATION_FAILED",
                server_message,
                user_message=tr("transfer.error.validation_failed_details", details=joined),
            )

    if error.status_code == 400:
        details = _extract_validation_details(body)
        if details:
            logger.warning(f"API validation error (400): {details}")
    elif error.status_code:
        logger.warning(f"API error ({error.status_code}): {error}")
    return build_transfer_error("UNKNOWN_ERROR", server_message or error.message)


def map_network_error(error: NetworkException) -> str:
    """Map network exception to user-friendly translated message."""
    if error.is_timeout:
        return tr("error.api.timeout")
    return tr("error.api.connection")


def map_exception(error: Exception, context: str = None) -> str:
    """Map any exception to a user-friendly message.

    Technical details are logged only - never shown to the user.
    """
    if isinstance(error, ApiException) and not error.context and context:
        error.context = context

    if isinstance(error, NetworkException):
        return map_network_error(error)

    mapped = map_transfer_error(error)
    if mapped.code == "UNKNOWN_ERROR":
        logger.warning(f"Unmapped error{f' in {context}' if context else ''}: {error}")
        return tr("error.api.connection")
    return mapped.user_message


def _extract_validation_details(response_data: dict) -> str:
    """Extract validation error details from API response."""
    if not response_data:
        return ""

    errors = response_data.get("errors") or response_data.get("data") or {}
    if isinstance(errors, dict):
        lines = []
        for field, messages in errors.items():
            if isinstance(messages, list):
                for msg in messages:
                    lines.append(f"• {field}: {msg}")
            else:
                lines.append(f"• {field}: {messages}")
        return "\n".join(lines)

    if isinstance(errors, list):
        return "\n".join(f"• {e}" for e in errors)

    title = response_data.get("title", "")
    if title:
        return title

    return ""
