"""
Detail screen controller.

Routes scan events and button actions to the API client and feeds every call
outcome into the result aggregator. Calls belonging to one action run as
independent tasks; their outcomes are ingested one at a time, in the order
they complete.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from scan_detail.barcode.converter import (
    UPCE0,
    ean8_to_upca,
    normalize_upce0,
    strip_symbology_prefix,
)
from scan_detail.barcode.symbology import (
    Rotation,
    map_symbology_name,
    symbology_choices,
    symbology_index,
)
from scan_detail.config import Settings, get_settings
from scan_detail.errors import UnknownSymbologyError
from scan_detail.interfaces import SavannaClient
from scan_detail.models.item import Mode
from scan_detail.models.outcome import (
    ApiOutcome,
    ImagePayload,
    ScanResult,
    TextPayload,
    TransportFailure,
    outcome_from_exception,
)
from scan_detail.models.state import AggregateState
from scan_detail.results.aggregator import ResultAggregator

logger = structlog.get_logger(__name__)

ApiCall = Callable[[], Awaitable[bytes | str]]


@dataclass
class ScanRouting:
    """What a scan event did to the detail form."""

    mode: Mode
    symbology: str
    code: str
    upca: str | None = None
    symbology_index: int | None = None  # generate mode: selection list position
    lookup_code: str | None = None  # UPC lookup mode: code placed in the lookup field
    state: AggregateState | None = None


def format_json(text: str) -> str:
    """Pretty-print JSON text for display."""
    return json.dumps(json.loads(text), indent=2, ensure_ascii=False)


def upca_for_upce(code: str) -> str:
    """UPC-A code for a normalized UPC-E0 code (number system 0 implied for 7 digits)."""
    if len(code) == 7:
        code = "0" + code
    return ean8_to_upca(code)


class DetailController:
    """Drives the active detail item against the API client."""

    def __init__(
        self,
        client: SavannaClient,
        aggregator: ResultAggregator | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.client = client
        self.aggregator = aggregator or ResultAggregator(self.settings.no_results_text)

    def open_item(self, item_id: str) -> AggregateState:
        """Show an item, keeping its state if it is already active."""
        return self.aggregator.activate(item_id)

    def symbology_choices(self) -> list[str]:
        """Entries of the symbology selection list."""
        return symbology_choices(self.settings.symbology_placeholder)

    @staticmethod
    def action_enabled(text: str) -> bool:
        """Whether the search/lookup button is enabled for the entered text."""
        return bool(text.strip())

    @staticmethod
    def symbology_selected(position: int) -> bool:
        """Whether a real symbology (not the placeholder) is selected."""
        return position > 0

    async def route_scan_data(self, scan: ScanResult) -> ScanRouting:
        """
        Route a scanned code according to the active item's mode.

        Raises:
            FormatError: If the symbology label or a UPC-E0 code is malformed
        """
        item_id, mode = self._active()

        symbology = strip_symbology_prefix(scan.symbology_label)
        code = scan.barcode
        upca = None
        if symbology == UPCE0:
            symbology, code = normalize_upce0(symbology, code)
            upca = upca_for_upce(code)

        logger.info(
            "Routing scan",
            item_id=item_id,
            mode=mode.value,
            symbology=symbology,
            code=code,
            upca=upca,
        )
        routing = ScanRouting(mode=mode, symbology=symbology, code=code, upca=upca)

        if mode == Mode.GENERATE:
            try:
                routing.symbology_index = symbology_index(map_symbology_name(symbology))
            except UnknownSymbologyError as e:
                logger.warning("Scanned symbology not available", symbology=symbology, error=str(e))
                routing.symbology_index = 0
            return routing

        self.aggregator.reset_for_new_action(item_id)

        if mode == Mode.RECALL_SEARCH:
            routing.state = await self._dispatch(
                item_id,
                mode,
                lambda: self.client.food_recall_upc(code),
                lambda: self.client.drug_recall_upc(code),
            )
        else:
            lookup_code = upca or code
            routing.lookup_code = lookup_code
            routing.state = await self._dispatch(
                item_id,
                mode,
                lambda: self.client.upc_lookup(lookup_code),
            )
        return routing

    async def create_barcode(
        self,
        symbology_name: str,
        text: str,
        include_text: bool = False,
    ) -> AggregateState | None:
        """
        Generate a barcode image.

        Raises:
            UnknownSymbologyError: If the selected name is not a symbology
        """
        item_id, mode = self._active(Mode.GENERATE)
        symbology = map_symbology_name(symbology_name)
        self.aggregator.reset_for_new_action(item_id)

        return await self._dispatch(
            item_id,
            mode,
            lambda: self.client.create_barcode(
                symbology,
                text,
                self.settings.barcode_density,
                Rotation.NORMAL,
                include_text,
            ),
        )

    async def search_recalls(self, term: str) -> AggregateState | None:
        """Search device and drug recalls."""
        item_id, mode = self._active(Mode.RECALL_SEARCH)
        self.aggregator.reset_for_new_action(item_id)

        return await self._dispatch(
            item_id,
            mode,
            lambda: self.client.device_recall_search(term),
            lambda: self.client.drug_recall_search(term),
        )

    async def lookup_upc(self, code: str) -> AggregateState | None:
        """Look up product information for a UPC code."""
        item_id, mode = self._active(Mode.UPC_LOOKUP)
        self.aggregator.reset_for_new_action(item_id)

        return await self._dispatch(item_id, mode, lambda: self.client.upc_lookup(code))

    def _active(self, expected: Mode | None = None) -> tuple[str, Mode]:
        item_id = self.aggregator.item_id
        mode = self.aggregator.mode
        if item_id is None or mode is None:
            raise RuntimeError("No active item")
        if expected is not None and mode != expected:
            raise ValueError(f"Action requires {expected.value} mode, active mode is {mode.value}")
        return item_id, mode

    async def _dispatch(
        self,
        item_id: str,
        mode: Mode,
        *calls: ApiCall,
    ) -> AggregateState | None:
        """Run calls concurrently and ingest outcomes in completion order."""
        session = self.aggregator.session
        queue: asyncio.Queue[ApiOutcome] = asyncio.Queue()

        async def run(call: ApiCall) -> None:
            try:
                outcome = await self._invoke(call)
            except Exception as e:
                logger.error("Failed to convert API result", error=str(e), error_type=type(e).__name__)
                outcome = TransportFailure(message=str(e) or type(e).__name__)
            await queue.put(outcome)

        tasks = [asyncio.create_task(run(call)) for call in calls]

        state = None
        for _ in tasks:
            outcome = await queue.get()
            ingested = self.aggregator.ingest(outcome, mode, item_id, session)
            if ingested is not None:
                state = ingested

        await asyncio.gather(*tasks)
        return state

    async def _invoke(self, call: ApiCall) -> ApiOutcome:
        try:
            result = await call()
        except Exception as e:
            logger.warning("API call failed", error=str(e), error_type=type(e).__name__)
            return outcome_from_exception(e)

        if isinstance(result, bytes):
            return ImagePayload(data=result)

        try:
            return TextPayload(text=format_json(result))
        except Exception as e:
            logger.warning("Invalid JSON response", error=str(e), error_type=type(e).__name__)
            return TransportFailure(message=str(e) or type(e).__name__)
