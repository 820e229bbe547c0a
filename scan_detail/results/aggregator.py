"""
Aggregation of API outcomes into the displayable state of a detail session.
"""

import structlog

from scan_detail.models.item import Mode, get_item
from scan_detail.models.outcome import (
    ApiErrorOutcome,
    ApiOutcome,
    ImagePayload,
    TextPayload,
    TransportFailure,
)
from scan_detail.models.state import AggregateState

logger = structlog.get_logger(__name__)

EMPTY_JSON_OBJECT = "{}"


def derive_error_message(outcome: ApiErrorOutcome) -> str:
    """
    Build a single display message for a structured API error.

    The secondary text is the detail if it differs from the message, otherwise
    the developer fault string if it differs. With a secondary text the result
    is ``"{message}: {secondary}"``, otherwise just the message.
    """
    secondary = None
    if outcome.detail is not None and outcome.detail != outcome.message:
        secondary = outcome.detail
    else:
        fault_string = outcome.fault_string
        if fault_string is not None and fault_string != outcome.message:
            secondary = fault_string

    if secondary is None:
        return outcome.message
    return f"{outcome.message}: {secondary}"


def _contains_segment(text: str, segment: str) -> bool:
    return f"\n{segment}\n" in f"\n{text}\n"


def merge_text(current: str, new: str, no_results: str) -> str:
    """
    Merge a text result into the accumulated text.

    - ``"{}"`` counts as empty
    - Empty or no-results current text is replaced verbatim
    - Non-blank text not already present as a segment is appended on a new line
    - An empty result becomes the no-results text
    """
    if new == EMPTY_JSON_OBJECT:
        new = ""

    if not current or current == no_results:
        merged = new
    elif new.strip() and not _contains_segment(current, new):
        merged = f"{current}\n{new}"
    else:
        merged = current

    return merged or no_results


class ResultAggregator:
    """
    Session-scoped accumulator of API outcomes.

    Holds the active item and its state. Outcomes that belong to an item other
    than the active one are dropped.
    """

    def __init__(self, no_results_text: str = "No results found"):
        self.no_results_text = no_results_text
        self._item_id: str | None = None
        self._mode: Mode | None = None
        self._session = 0
        self._states: dict[str, AggregateState] = {}

    @property
    def item_id(self) -> str | None:
        return self._item_id

    @property
    def mode(self) -> Mode | None:
        return self._mode

    @property
    def session(self) -> int:
        """Counter bumped whenever a different item becomes active."""
        return self._session

    @property
    def state(self) -> AggregateState | None:
        """State of the active item, created on first access."""
        if self._item_id is None or self._mode is None:
            return None
        if self._item_id not in self._states:
            self._states[self._item_id] = AggregateState(item_id=self._item_id, mode=self._mode)
        return self._states[self._item_id]

    def activate(self, item_id: str) -> AggregateState:
        """
        Make an item the active one.

        Switching to a different item discards the previous item's state.
        Activating the current item again keeps its state.
        """
        item = get_item(item_id)
        if self._item_id != item_id:
            if self._item_id is not None:
                logger.info("Switching item", previous=self._item_id, item_id=item_id)
                self._states.pop(self._item_id, None)
            self._session += 1

        self._item_id = item.id
        self._mode = item.mode
        return self.state

    def reset_for_new_action(self, item_id: str) -> AggregateState:
        """Clear text and image before a new user action."""
        if item_id != self._item_id:
            self.activate(item_id)
        state = self.state
        state.clear()
        return state

    def ingest(
        self,
        outcome: ApiOutcome,
        mode: Mode,
        item_id: str | None = None,
        session: int | None = None,
    ) -> AggregateState | None:
        """
        Merge an outcome into the active state.

        Args:
            outcome: Outcome of a single API call
            mode: Mode of the session that issued the call
            item_id: Item that issued the call, if known
            session: Session counter captured when the call was issued, if known

        Returns:
            The updated state, or None if the outcome was dropped as stale
        """
        if (
            self._item_id is None
            or mode != self._mode
            or (item_id is not None and item_id != self._item_id)
            or (session is not None and session != self._session)
        ):
            logger.warning(
                "Dropping stale outcome",
                kind=outcome.kind,
                item_id=item_id,
                mode=mode.value,
                active_item_id=self._item_id,
                session=session,
                active_session=self._session,
            )
            return None

        state = self.state

        if isinstance(outcome, ImagePayload):
            state.image = outcome.data
            state.has_image = True
            state.show_header = True
        elif isinstance(outcome, ApiErrorOutcome):
            self._merge(state, derive_error_message(outcome), show_header=False)
        elif isinstance(outcome, TransportFailure):
            self._merge(state, outcome.message, show_header=False)
        elif isinstance(outcome, TextPayload):
            self._merge(state, outcome.text, show_header=True)
        else:
            raise TypeError(f"Unsupported outcome type: {type(outcome)}")

        logger.debug(
            "Outcome ingested",
            kind=outcome.kind,
            item_id=state.item_id,
            has_image=state.has_image,
        )
        return state

    def _merge(self, state: AggregateState, text: str, show_header: bool) -> None:
        state.accumulated_text = merge_text(state.accumulated_text, text, self.no_results_text)
        state.has_image = False
        state.show_header = show_header
