"""
Error taxonomy for the detail-view core.
"""

from typing import Any


class FormatError(ValueError):
    """Malformed barcode input passed to a conversion function."""


class UnknownSymbologyError(ValueError):
    """A symbology name that matches no known symbology."""

    def __init__(self, name: str):
        super().__init__(f"Unknown symbology: {name}")
        self.name = name


class SavannaApiError(Exception):
    """
    Structured failure returned by an API collaborator.

    Attributes:
        message: Primary error message
        detail: Optional error detail
        developer_message: Optional developer message, either plain text or a
            fault object (``{"fault": {"faultstring": ...}}``)
    """

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        developer_message: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.developer_message = developer_message
