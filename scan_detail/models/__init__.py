"""
Pydantic models for items, API outcomes and session state.
"""

from scan_detail.models.item import ITEMS, ApiItem, Mode, get_item
from scan_detail.models.outcome import (
    ApiErrorOutcome,
    ApiOutcome,
    DeveloperMessage,
    Fault,
    ImagePayload,
    ScanResult,
    TextPayload,
    TransportFailure,
    outcome_from_exception,
)
from scan_detail.models.state import AggregateState

__all__ = [
    # Items
    "ITEMS",
    "ApiItem",
    "Mode",
    "get_item",
    # Outcomes
    "ApiErrorOutcome",
    "ApiOutcome",
    "DeveloperMessage",
    "Fault",
    "ImagePayload",
    "ScanResult",
    "TextPayload",
    "TransportFailure",
    "outcome_from_exception",
    # State
    "AggregateState",
]
