"""
Collaborator protocols consumed by the dispatch layer.
"""

from typing import Protocol

from scan_detail.barcode.symbology import Rotation, Symbology


class SavannaClient(Protocol):
    """
    External API client.

    Text endpoints return raw JSON text. Failures are raised either as
    ``SavannaApiError`` or as any other exception for transport problems.
    """

    async def create_barcode(
        self,
        symbology: Symbology,
        text: str,
        density: int,
        rotation: Rotation,
        include_text: bool,
    ) -> bytes: ...

    async def food_recall_upc(self, code: str) -> str: ...

    async def drug_recall_upc(self, code: str) -> str: ...

    async def device_recall_search(self, term: str) -> str: ...

    async def drug_recall_search(self, term: str) -> str: ...

    async def upc_lookup(self, code: str) -> str: ...
