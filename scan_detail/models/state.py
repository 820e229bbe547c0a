"""
Accumulated display state of a detail session.
"""

from pydantic import BaseModel, Field

from scan_detail.models.item import Mode


class AggregateState(BaseModel):
    """
    Display content accumulated for the active item.

    The image, when present, always takes precedence over text at render
    time; text is kept so it can be shown again by a later text result.
    """

    item_id: str = Field(..., description="Item this state belongs to")
    mode: Mode

    accumulated_text: str = Field("", description="Newline-joined distinct result segments")
    image: bytes | None = None
    has_image: bool = Field(False, description="Whether the last ingestion produced an image")
    show_header: bool = Field(True, description="Whether the result label is shown")

    @property
    def show_image(self) -> bool:
        """Whether the renderer shows the image view."""
        return self.has_image

    @property
    def show_text(self) -> bool:
        """Whether the renderer shows the text view."""
        return not self.has_image

    def clear(self) -> None:
        """Clear text and image before a new action."""
        self.accumulated_text = ""
        self.image = None
        self.has_image = False
        self.show_header = True
