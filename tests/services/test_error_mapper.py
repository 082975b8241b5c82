# -*- coding: utf-8 -*-
"""
Tests for the error mapper.

Tests cover:
- Business rejection codes in the response envelope
- HTTP status fallbacks
- Network and validation failures
- Malformed or unexpected errors
"""

import pytest

from services.error_mapper import (
    STALE_REFERENCE_CODES, TRANSFER_ERROR_CODES, ErrorActionType, ErrorSeverity,
    build_transfer_error, map_exception, map_transfer_error
)
from services.exceptions import ApiException, NetworkException, ValidationException
from services.translation_manager import tr


def rejection(code, status=400, **extra):
    body = {"success": False, "message": code}
    body.update(extra)
    return ApiException("Bad Request", status, body)


class TestBusinessCodes:
    """Codes the backend sends in {"success": false, "message": CODE}."""

    @pytest.mark.parametrize("code", sorted(c for c in TRANSFER_ERROR_CODES if c.startswith("TRF_")))
    def test_every_transfer_code_is_recognised(self, code):
        error = map_transfer_error(rejection(code))
        assert error.code == code
        assert error.user_message == tr(f"transfer.error.{code.lower()}")

    def test_pending_exists_offers_contact(self):
        error = map_transfer_error(rejection("TRF_PENDING_EXISTS"))
        assert error.severity is ErrorSeverity.WARNING
        assert error.action.type is ErrorActionType.CONTACT
        assert error.action.label
        assert not error.stale_reference

    def test_quota_exceeded_is_an_error(self):
        error = map_transfer_error(rejection("TRF_QUOTA_EXCEEDED"))
        assert error.severity is ErrorSeverity.ERROR
        assert error.action.type is ErrorActionType.CONTACT

    @pytest.mark.parametrize("code", sorted(STALE_REFERENCE_CODES))
    def test_stale_reference_codes(self, code):
        assert map_transfer_error(rejection(code)).stale_reference

    def test_field_errors_become_validation_failed(self):
        error = map_transfer_error(rejection(
            "Validation failed", data={"effectiveDate": "must be a future date"}
        ))
        assert error.code == "VALIDATION_FAILED"
        assert "must be a future date" in error.user_message

    def test_reason_field_error(self):
        error = map_transfer_error(rejection(
            "Validation failed", data={"requestReason": "size must be between 10 and 500"}
        ))
        assert error.code == "REQUEST_REASON_TOO_SHORT"


class TestStatusFallbacks:
    """Rejections without a recognised code."""

    @pytest.mark.parametrize("status,code", [
        (401, "UNAUTHORIZED"),
        (403, "FORBIDDEN"),
        (404, "NOT_FOUND"),
        (409, "TRF_CONCURRENT_UPDATE"),
        (500, "INTERNAL_SERVER_ERROR"),
    ])
    def test_status_codes(self, status, code):
        assert map_transfer_error(ApiException("failed", status)).code == code

    def test_unauthorized_navigates_to_login(self):
        error = map_transfer_error(ApiException("Unauthorized", 401))
        assert error.action.type is ErrorActionType.NAVIGATE
        assert error.action.destination == "/login"

    def test_forbidden_has_no_action(self):
        error = map_transfer_error(ApiException("Forbidden", 403))
        assert error.action.type is ErrorActionType.NONE
        assert error.action.label == ""

    def test_unrecognised_message_is_unknown(self):
        error = map_transfer_error(rejection("Something odd happened"))
        assert error.code == "UNKNOWN_ERROR"
        assert error.message == "Something odd happened"


class TestOtherFailures:
    """Network, validation and malformed input."""

    def test_network_error(self):
        error = map_transfer_error(NetworkException("Connection refused"))
        assert error.code == "NETWORK_ERROR"
        assert error.action.type is ErrorActionType.RETRY

    def test_validation_exception(self):
        assert map_transfer_error(ValidationException("bad", field="requestReason")).code == \
            "REQUEST_REASON_TOO_SHORT"
        assert map_transfer_error(ValidationException("bad", field="effectiveDate")).code == \
            "VALIDATION_FAILED"

    @pytest.mark.parametrize("error", [None, RuntimeError("boom"), 42, {"unexpected": True}])
    def test_malformed_input_degrades_to_unknown(self, error):
        assert map_transfer_error(error).code == "UNKNOWN_ERROR"

    def test_non_dict_response_body(self):
        error = ApiException("Bad Request", 400)
        error.response_data = ["not", "a", "dict"]
        assert map_transfer_error(error).code == "UNKNOWN_ERROR"

    def test_string_error_keeps_message(self):
        error = map_transfer_error("Server is busy")
        assert error.code == "UNKNOWN_ERROR"
        assert error.user_message == "Server is busy"

    def test_already_mapped_error_passes_through(self):
        mapped = build_transfer_error("TRF_SAME_CLASS")
        assert map_transfer_error(mapped) is mapped

    def test_unknown_code_in_builder(self):
        assert build_transfer_error("NOT_A_CODE").code == "UNKNOWN_ERROR"

    def test_map_exception_hides_technical_details(self):
        assert map_exception(RuntimeError("Traceback ...")) == tr("error.api.connection")
        assert map_exception(rejection("TRF_CLASS_FULL")) == tr("transfer.error.trf_class_full")

    def test_map_exception_network(self):
        timeout = NetworkException("read timed out")
        refused = NetworkException("refused", original_error=ConnectionError("refused"))
        assert map_exception(timeout) == tr("error.api.timeout")
        assert map_exception(refused) == tr("error.api.connection")

    def test_map_exception_records_context(self):
        error = rejection("TRF_SAME_CLASS")
        map_exception(error, context="transfer")
        assert error.context == "transfer"


class TestExceptions:
    """Properties the mapper reads from client exceptions."""

    def test_server_message(self):
        assert rejection("TRF_CLASS_FULL").server_message == "TRF_CLASS_FULL"
        assert ApiException("Server Error", 500).server_message is None
        assert ApiException("x", 400, {"message": ""}).server_message is None

    def test_rejected_envelope(self):
        assert rejection("TRF_CLASS_FULL").rejected
        assert not ApiException("x", 400, {"success": True, "message": "ok"}).rejected

    def test_str_includes_status(self):
        assert str(ApiException("Not Found", 404)) == "[404] Not Found"
        assert str(ApiException("Offline")) == "Offline"

    def test_timeout_detection(self):
        assert NetworkException("x", original_error=TimeoutError("timed out")).is_timeout
        assert not NetworkException("Connection refused").is_timeout
