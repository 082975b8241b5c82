# -*- coding: utf-8 -*-
"""
Branch model.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class BranchOption:
    """Branch entry of the branch dropdown."""

    branch_id: int
    name: str
    code: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BranchOption":
        return cls(
            branch_id=int(data["id"]),
            name=data.get("name") or "",
            code=data.get("code") or "",
        )
