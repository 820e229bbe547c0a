"""
Catalog items shown in the item list and their detail modes.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Mode(str, Enum):
    """Workflow driven by a detail session."""

    GENERATE = "generate"
    RECALL_SEARCH = "recall_search"
    UPC_LOOKUP = "upc_lookup"


class ApiItem(BaseModel):
    """An entry of the item list."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Item identifier used as the session key")
    title: str
    details: str
    mode: Mode


ITEMS: dict[str, ApiItem] = {
    item.id: item
    for item in (
        ApiItem(
            id="1",
            title="Create Barcode",
            details="Generate a barcode image from text in the selected symbology.",
            mode=Mode.GENERATE,
        ),
        ApiItem(
            id="2",
            title="FDA Recall",
            details="Search FDA device and drug recalls, or scan a UPC to find food and drug recalls.",
            mode=Mode.RECALL_SEARCH,
        ),
        ApiItem(
            id="3",
            title="UPC Lookup",
            details="Look up product information for a UPC code.",
            mode=Mode.UPC_LOOKUP,
        ),
    )
}


def get_item(item_id: str) -> ApiItem:
    """
    Get a catalog item by id.

    Raises:
        KeyError: If the id is not in the catalog
    """
    return ITEMS[item_id]
