"""
Outcomes of API calls fed to the result aggregator.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scan_detail.errors import SavannaApiError


@dataclass(frozen=True)
class ScanResult:
    """A code delivered by the scan source."""

    barcode: str
    symbology_label: str


class Fault(BaseModel):
    """Fault block of a structured developer message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fault_string: str | None = Field(None, alias="faultstring")


class DeveloperMessage(BaseModel):
    """Structured developer message (``{"fault": {"faultstring": ...}}``)."""

    model_config = ConfigDict(frozen=True)

    fault: Fault | None = None


class TextPayload(BaseModel):
    """JSON text returned by a lookup endpoint."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class ImagePayload(BaseModel):
    """Raw image bytes returned by the create barcode endpoint."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    data: bytes


class ApiErrorOutcome(BaseModel):
    """Structured API failure."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["api_error"] = "api_error"
    message: str
    detail: str | None = None
    developer_message: DeveloperMessage | str | None = None

    @property
    def fault_string(self) -> str | None:
        """Fault string from the developer message, if any."""
        if isinstance(self.developer_message, str):
            return self.developer_message
        if self.developer_message and self.developer_message.fault:
            return self.developer_message.fault.fault_string
        return None

    @classmethod
    def from_error(cls, error: SavannaApiError) -> "ApiErrorOutcome":
        """
        Create an outcome from a raised API error.

        Developer messages that are neither text nor a fault object are kept
        as their string form.
        """
        developer_message: Any = error.developer_message
        if isinstance(developer_message, dict):
            try:
                developer_message = DeveloperMessage.model_validate(developer_message)
            except ValidationError:
                developer_message = str(developer_message)
        elif developer_message is not None and not isinstance(
            developer_message, (str, DeveloperMessage)
        ):
            developer_message = str(developer_message)

        return cls(
            message=str(error.message),
            detail=str(error.detail) if error.detail is not None else None,
            developer_message=developer_message,
        )


class TransportFailure(BaseModel):
    """Network or serialization failure surfaced as a generic exception."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transport"] = "transport"
    message: str


ApiOutcome = Annotated[
    Union[TextPayload, ImagePayload, ApiErrorOutcome, TransportFailure],
    Field(discriminator="kind"),
]


def outcome_from_exception(exc: Exception) -> ApiErrorOutcome | TransportFailure:
    """Convert an exception raised by an API call into an outcome."""
    if isinstance(exc, SavannaApiError):
        return ApiErrorOutcome.from_error(exc)
    return TransportFailure(message=str(exc) or type(exc).__name__)
