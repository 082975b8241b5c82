# -*- coding: utf-8 -*-
"""
Class Transfer Wizards.

This package contains:
- TransferContext / OnBehalfTransferContext: selections of each flow
- transfer_steps: step catalogues and submission payloads
- TransferController / OnBehalfTransferController: headless drivers
- TransferWizard / OnBehalfTransferWizard: host dialogs
"""

from .transfer_context import OnBehalfTransferContext, TransferContext
from .transfer_controller import OnBehalfTransferController, TransferController
from .transfer_steps import OnBehalfSteps, TransferSteps

__all__ = [
    'OnBehalfSteps',
    'OnBehalfTransferContext',
    'OnBehalfTransferController',
    'TransferContext',
    'TransferController',
    'TransferSteps',
]
