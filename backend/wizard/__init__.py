"""
Wizard client for the AI Wedding Newspaper Generator.

Drives the access -> form -> generating -> complete flow against the backend API
and the generation endpoint, tracking analytics events along the way.
"""
from wizard.analytics import AnalyticsTracker, SCROLL_DEPTH_THRESHOLDS
from wizard.api_client import WeddingApiClient
from wizard.models import FormData, WizardStage, FORM_FIELDS, REQUIRED_FIELDS
from wizard.session import WizardSession, WizardStageError

__all__ = [
    "AnalyticsTracker",
    "SCROLL_DEPTH_THRESHOLDS",
    "WeddingApiClient",
    "FormData",
    "WizardStage",
    "FORM_FIELDS",
    "REQUIRED_FIELDS",
    "WizardSession",
    "WizardStageError",
]
