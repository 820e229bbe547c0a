"""
Dispatch of scan events and user actions to the API client.
"""

from scan_detail.dispatch.controller import DetailController, ScanRouting, format_json

__all__ = ["DetailController", "ScanRouting", "format_json"]
