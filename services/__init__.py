# -*- coding: utf-8 -*-
"""
EduCenter Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "EduCenterApiClient",
    "AcademicApiService",
    "QueryCache",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "EduCenterApiClient":
        from .api_client import EduCenterApiClient
        return EduCenterApiClient
    elif name == "AcademicApiService":
        from .academic_api_service import AcademicApiService
        return AcademicApiService
    elif name == "QueryCache":
        from .query_cache import QueryCache
        return QueryCache
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
