# -*- coding: utf-8 -*-
"""
Transfer wizard dialogs.
"""

from typing import Dict

from models.transfer import TransferRequestResponse
from services.translation_manager import tr
from ui.wizards.framework.base_step import BaseStepView
from ui.wizards.framework.base_wizard import BaseWizard
from .transfer_controller import OnBehalfTransferController, TransferController
from .transfer_steps import OnBehalfSteps, TransferSteps
from .transfer_views import (
    ConfirmationStepView, ContactSupportStepView, CurrentClassStepView,
    EligibilityStepView, OnBehalfConfirmationStepView, OnBehalfTargetStepView,
    StudentSearchStepView, TargetClassStepView, TransferTypeStepView
)


class _TransferWizardBase(BaseWizard):

    def __init__(self, controller, parent=None):
        super().__init__(controller, parent)
        controller.selection_blocked.connect(
            lambda reason: self._show_banner(reason, "warning", action_label="")
        )

    def get_submit_button_text(self) -> str:
        return tr("transfer.submit")

    def get_success_message(self, result: TransferRequestResponse) -> str:
        return tr("transfer.success", request_id=result.request_id)


class TransferWizard(_TransferWizardBase):
    """Student self-service class transfer."""

    controller: TransferController

    def get_wizard_title(self) -> str:
        return tr("transfer.wizard.title")

    def create_step_views(self) -> Dict[str, BaseStepView]:
        controller = self.controller
        return {
            TransferSteps.ELIGIBILITY: EligibilityStepView(controller, TransferSteps.ELIGIBILITY),
            TransferSteps.TRANSFER_TYPE: TransferTypeStepView(controller, TransferSteps.TRANSFER_TYPE),
            TransferSteps.TARGET_CLASS: TargetClassStepView(controller, TransferSteps.TARGET_CLASS),
            TransferSteps.CONFIRMATION: ConfirmationStepView(controller, TransferSteps.CONFIRMATION),
            TransferSteps.CONTACT_SUPPORT: ContactSupportStepView(controller, TransferSteps.CONTACT_SUPPORT),
        }


class OnBehalfTransferWizard(_TransferWizardBase):
    """Class transfer created by academic affairs for a student."""

    controller: OnBehalfTransferController

    def get_wizard_title(self) -> str:
        return tr("transfer.on_behalf.title")

    def create_step_views(self) -> Dict[str, BaseStepView]:
        controller = self.controller
        return {
            OnBehalfSteps.STUDENT_SEARCH: StudentSearchStepView(controller, OnBehalfSteps.STUDENT_SEARCH),
            OnBehalfSteps.CURRENT_CLASS: CurrentClassStepView(controller, OnBehalfSteps.CURRENT_CLASS),
            OnBehalfSteps.TARGET_CLASS: OnBehalfTargetStepView(controller, OnBehalfSteps.TARGET_CLASS),
            OnBehalfSteps.CONFIRMATION: OnBehalfConfirmationStepView(controller, OnBehalfSteps.CONFIRMATION),
        }
