# -*- coding: utf-8 -*-
"""
Error Boundary for wizard callbacks.

Step hooks and collaborators (query starters, success notifier) run behind
the boundary: an exception they raise is logged and reported through
error_occurred instead of unwinding into the navigator or the gate.
"""

from functools import wraps
from typing import Any, Callable, List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)


class ErrorBoundary(QObject):
    """Catches unexpected exceptions of one wizard run."""

    error_occurred = pyqtSignal(str, str)  # operation, error type

    def __init__(self, scope: str, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.scope = scope
        self.errors: List[Tuple[str, Exception]] = []

    def protect(self, func: Callable, operation: str = "operation", fallback: Any = None) -> Callable:
        """
        Wrap ``func`` so that it returns ``fallback`` instead of raising.

        MemoryError and KeyboardInterrupt are never caught.
        """
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (MemoryError, KeyboardInterrupt):
                raise
            except Exception as e:
                self.errors.append((operation, e))
                logger.error(f"{self.scope}: {operation} failed: {e}", exc_info=True)
                self.error_occurred.emit(operation, type(e).__name__)
                return fallback

        return wrapper

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def reset(self):
        """Forget the errors of the previous run."""
        self.errors = []
