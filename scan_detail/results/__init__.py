"""
Result aggregation and error normalization.
"""

from scan_detail.results.aggregator import ResultAggregator, derive_error_message, merge_text

__all__ = ["ResultAggregator", "derive_error_message", "merge_text"]
