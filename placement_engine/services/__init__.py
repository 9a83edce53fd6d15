from .explanation import assess_rejection, build_explanation_request
from .explanation_client import ExplanationClient, explanation_enabled

__all__ = [
    "build_explanation_request",
    "assess_rejection",
    "ExplanationClient",
    "explanation_enabled",
]
