# -*- coding: utf-8 -*-
"""
Enrollment Import Context.

Roster file, server preview and the chosen enrollment strategy.
"""

from ui.wizards.framework.wizard_context import WizardContext


class EnrollmentImportContext(WizardContext):

    FIELDS = {
        "file_path": None,  # Path of the uploaded roster
        "preview": None,  # EnrollmentImportPreview
        "strategy": None,  # EnrollmentStrategy
        "selected_rows": frozenset(),  # row indexes
        "override_reason": "",
    }

    DEPENDENCIES = {
        "file_path": ("preview",),
        "preview": ("strategy", "selected_rows"),
        "strategy": ("override_reason",),
    }

    def _get_reference_prefix(self) -> str:
        return "IMP"
