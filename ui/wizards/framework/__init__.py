# -*- coding: utf-8 -*-
"""
Wizard Framework - multi-step wizard engine for EduCenter.

Provides the step registry, the observable wizard context, the transition
resolver, the async submit gate and the host dialog the concrete flows are
built from.
"""

from .base_step import BaseStepView, StepValidationResult
from .step_registry import StepDefinition, StepKind, StepRegistry
from .wizard_context import WizardContext, WizardStatus
from .step_navigator import StepNavigator, Transition
from .async_gate import AsyncStepGate, GateState
from .wizard_controller import ListState, WizardController
from .base_wizard import BaseWizard

__all__ = [
    'AsyncStepGate',
    'BaseStepView',
    'BaseWizard',
    'GateState',
    'ListState',
    'StepDefinition',
    'StepKind',
    'StepNavigator',
    'StepRegistry',
    'StepValidationResult',
    'Transition',
    'WizardContext',
    'WizardController',
    'WizardStatus',
]
