"""
Client Onboarding Module
Validates client onboarding details and submits them to the onboarding endpoint.
"""

from .controller import FormState, SubmissionController, SubmissionOutcome
from .form import onboarding_bp
from .validation import NormalizedRecord, SERVICE_CATALOG, validate_onboarding_form

__all__ = [
    'FormState',
    'NormalizedRecord',
    'SERVICE_CATALOG',
    'SubmissionController',
    'SubmissionOutcome',
    'onboarding_bp',
    'validate_onboarding_form',
]
