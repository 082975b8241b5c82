# -*- coding: utf-8 -*-
"""
Enrollment Import Wizard.

Roster upload, server preview with strategy recommendation, and execution.
"""

from .import_context import EnrollmentImportContext
from .import_controller import EnrollmentImportController
from .import_steps import ImportSteps, build_import_payload

__all__ = [
    'EnrollmentImportContext',
    'EnrollmentImportController',
    'ImportSteps',
    'build_import_payload',
]
