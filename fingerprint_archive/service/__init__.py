"""Service-layer business logic."""

from .comparison import (
    ComparisonItem,
    get_comparison_set,
    list_fingerprint_catalogue,
    list_registered_fingerprints,
)
from .retention import RetentionAction, RetentionDecision, decide_retention, record_attempt
from .submission import BatchReport, ScanSubmission, SubmissionResult, submit_fingerprints

__all__ = [
    "BatchReport",
    "ComparisonItem",
    "RetentionAction",
    "RetentionDecision",
    "ScanSubmission",
    "SubmissionResult",
    "decide_retention",
    "get_comparison_set",
    "list_fingerprint_catalogue",
    "list_registered_fingerprints",
    "record_attempt",
    "submit_fingerprints",
]
