# -*- coding: utf-8 -*-
"""
Transfer Wizard Contexts.

Selections of the self-service and on-behalf transfer wizards and the
fields derived from each of them.
"""

from models.transfer import TransferOption
from ui.wizards.framework.wizard_context import WizardContext
from .option_filters import TransferOptionFilters


class TransferContext(WizardContext):
    """Student self-service transfer."""

    FIELDS = {
        "enrollment": None,  # TransferEligibility
        "transfer_type": None,  # TransferType
        "target_class": None,  # TransferOption
        "session_id": None,
        "effective_date": None,  # date of the chosen session
        "reason": "",
        "terms_accepted": False,
        "quota_acknowledged": False,
        "content_gap_acknowledged": False,
    }

    DEPENDENCIES = {
        "enrollment": ("transfer_type", "target_class"),
        "transfer_type": ("target_class",),
        "target_class": ("session_id", "effective_date", "content_gap_acknowledged"),
        "session_id": ("effective_date",),
    }

    def _get_reference_prefix(self) -> str:
        return "TRF"


class OnBehalfTransferContext(WizardContext):
    """Transfer made by academic affairs for a student."""

    FIELDS = {
        "student": None,  # StudentSearchResult
        "current_class": None,  # TransferEligibility
        "filters": TransferOptionFilters(),
        "target_class": None,  # TransferOption
        "session_id": None,
        "effective_date": None,
        "reason": "",
        "note": "",
        "capacity_override": False,
        "override_reason": "",
    }

    DEPENDENCIES = {
        "student": ("current_class",),
        "current_class": ("filters", "target_class"),
        "filters": ("target_class",),
        "target_class": ("session_id", "effective_date", "capacity_override"),
        "session_id": ("effective_date",),
        "capacity_override": ("override_reason",),
    }

    def _get_reference_prefix(self) -> str:
        return "AAT"

    @property
    def target_is_full(self) -> bool:
        target: TransferOption = self.get("target_class")
        return target is not None and target.is_full
