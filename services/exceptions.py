# -*- coding: utf-8 -*-
"""Custom exceptions for the application."""

from typing import Optional


class EduCenterError(Exception):
    """Base of every error raised by the client."""

    def __init__(self, message: str, context: str = None):
        super().__init__(message)
        self.message = message
        self.context = context


class ApiException(EduCenterError):
    """The backend answered with an error status or a rejected envelope."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message, context)
        self.status_code = status_code
        self.response_data = response_data or {}

    @property
    def server_message(self) -> Optional[str]:
        """The envelope's ``message``; a business code such as TRF_CLASS_FULL on rejections."""
        if not isinstance(self.response_data, dict):
            return None
        message = self.response_data.get("message")
        return message if isinstance(message, str) and message else None

    @property
    def rejected(self) -> bool:
        return isinstance(self.response_data, dict) and self.response_data.get("success") is False

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ValidationException(EduCenterError):
    """A value failed a client-side check before being sent."""

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message, context)
        self.field = field
        self.errors = errors or []


class NetworkException(EduCenterError):
    """The backend could not be reached."""

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message, context)
        self.original_error = original_error

    @property
    def is_timeout(self) -> bool:
        text = f"{self.message} {self.original_error or ''}".lower()
        return "timeout" in text or "timed out" in text


class ConfigurationError(EduCenterError):
    """Raised when a wizard is declared with an invalid step catalogue."""


class StepNotFoundError(LookupError):
    """Raised when a step identifier or index is not registered."""

    def __init__(self, step):
        super().__init__(f"Step not registered: {step!r}")
        self.step = step
