# -*- coding: utf-8 -*-
"""
Target-class option filters of the on-behalf transfer.

A transfer may change the schedule, the branch and/or the modality. The
filters decide which of these dimensions the options query varies.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from models.transfer import Modality


class TransferDimension(str, Enum):
    SCHEDULE = "schedule"
    BRANCH = "branch"
    MODALITY = "modality"


@dataclass(frozen=True)
class TransferOptionFilters:
    schedule: bool = True
    branch: bool = False
    modality: bool = False
    target_branch_id: Optional[int] = None
    target_modality: Optional[Modality] = None

    def toggle(self, dimension: TransferDimension) -> "TransferOptionFilters":
        """
        Flip one dimension.

        Schedule comes back on when every dimension would be off. Turning
        branch or modality off forgets its chosen value.
        """
        updated = replace(self, **{dimension.value: not getattr(self, dimension.value)})
        if not (updated.schedule or updated.branch or updated.modality):
            updated = replace(updated, schedule=True)
        if not updated.branch:
            updated = replace(updated, target_branch_id=None)
        if not updated.modality:
            updated = replace(updated, target_modality=None)
        return updated

    def with_branch(self, branch_id: Optional[int]) -> "TransferOptionFilters":
        return replace(self, target_branch_id=branch_id)

    def with_modality(self, modality: Optional[Modality]) -> "TransferOptionFilters":
        return replace(self, target_modality=modality)

    @property
    def ready(self) -> bool:
        """Every enabled dimension has its value."""
        return (
            (not self.branch or self.target_branch_id is not None)
            and (not self.modality or self.target_modality is not None)
        )

    @property
    def schedule_only(self) -> bool:
        return self.schedule and not self.branch and not self.modality

    def query_args(self) -> Dict[str, Any]:
        return {
            "target_branch_id": self.target_branch_id if self.branch else None,
            "target_modality": self.target_modality.value if (self.modality and self.target_modality) else None,
            "schedule_only": self.schedule_only,
        }


def allowed_modalities(current: Optional[Modality]) -> List[Modality]:
    """Modalities a class of modality ``current`` may transfer to."""
    if current is None:
        return []
    if current is Modality.ONLINE:
        return [Modality.OFFLINE, Modality.HYBRID]
    return [Modality.ONLINE]
