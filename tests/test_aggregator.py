"""
Tests for result aggregation and error normalization.
"""

import pytest

from scan_detail.models import (
    ApiErrorOutcome,
    ImagePayload,
    Mode,
    TextPayload,
    TransportFailure,
)
from scan_detail.results import ResultAggregator, derive_error_message, merge_text

NO_RESULTS = "No results found"


@pytest.fixture
def aggregator():
    """Aggregator with the FDA recall item active."""
    aggregator = ResultAggregator(NO_RESULTS)
    aggregator.activate("2")
    return aggregator


def ingest_all(aggregator, *outcomes, mode=Mode.RECALL_SEARCH):
    state = None
    for outcome in outcomes:
        state = aggregator.ingest(outcome, mode)
    return state


class TestDeriveErrorMessage:
    """Tests for API error message derivation."""

    def test_message_only(self):
        """Test a bare message."""
        assert derive_error_message(ApiErrorOutcome(message="Not Found")) == "Not Found"

    def test_detail_preferred(self):
        """Test the detail is appended to the message."""
        outcome = ApiErrorOutcome(
            message="Bad Request",
            detail="upc must be numeric",
            developer_message={"fault": {"faultstring": "ignored"}},
        )
        assert derive_error_message(outcome) == "Bad Request: upc must be numeric"

    def test_fault_string_used(self):
        """Test the fault string is used without a detail."""
        outcome = ApiErrorOutcome(
            message="Unauthorized",
            developer_message={"fault": {"faultstring": "Invalid ApiKey"}},
        )
        assert derive_error_message(outcome) == "Unauthorized: Invalid ApiKey"

    def test_detail_equal_to_message_falls_back_to_fault(self):
        """Test a detail repeating the message is skipped."""
        outcome = ApiErrorOutcome(
            message="Unauthorized",
            detail="Unauthorized",
            developer_message={"fault": {"faultstring": "Invalid ApiKey"}},
        )
        assert derive_error_message(outcome) == "Unauthorized: Invalid ApiKey"

    def test_secondary_equal_to_message(self):
        """Test no suffix when everything repeats the message."""
        outcome = ApiErrorOutcome(message="Unauthorized", developer_message="Unauthorized")
        assert derive_error_message(outcome) == "Unauthorized"


class TestMergeText:
    """Tests for the text merge rule."""

    def test_replace_empty(self):
        """Test empty text is replaced."""
        assert merge_text("", "A", NO_RESULTS) == "A"

    def test_replace_no_results(self):
        """Test the no-results text is replaced."""
        assert merge_text(NO_RESULTS, "A", NO_RESULTS) == "A"

    def test_append(self):
        """Test distinct text is appended on a new line."""
        assert merge_text("A", "B", NO_RESULTS) == "A\nB"

    def test_duplicate_and_blank_ignored(self):
        """Test duplicates and blank text leave the current text."""
        assert merge_text("A", "A", NO_RESULTS) == "A"
        assert merge_text("A\nB", "A", NO_RESULTS) == "A\nB"
        assert merge_text("A", "   ", NO_RESULTS) == "A"
        assert merge_text("A", "{}", NO_RESULTS) == "A"

    def test_empty_becomes_no_results(self):
        """Test an empty merge shows the no-results text."""
        assert merge_text("", "{}", NO_RESULTS) == NO_RESULTS
        assert merge_text(NO_RESULTS, "", NO_RESULTS) == NO_RESULTS

    def test_partial_line_is_not_a_duplicate(self):
        """Test only whole segments count as duplicates."""
        assert merge_text("AB", "A", NO_RESULTS) == "AB\nA"


class TestIngestText:
    """Tests for ingesting text payloads."""

    def test_empty_object_then_empty(self, aggregator):
        """Test empty results leave the no-results text."""
        state = ingest_all(aggregator, TextPayload(text="{}"), TextPayload(text=""))
        assert state.accumulated_text == NO_RESULTS

    def test_duplicate_suppressed(self, aggregator):
        """Test the same text twice is kept once."""
        state = ingest_all(aggregator, TextPayload(text="A"), TextPayload(text="A"))
        assert state.accumulated_text == "A"

    def test_distinct_appended(self, aggregator):
        """Test distinct texts accumulate."""
        state = ingest_all(aggregator, TextPayload(text="A"), TextPayload(text="B"))
        assert state.accumulated_text == "A\nB"
        assert state.show_text is True
        assert state.show_header is True

    def test_no_results_replaced(self, aggregator):
        """Test a later result replaces the no-results text."""
        state = ingest_all(aggregator, TextPayload(text="{}"), TextPayload(text="A"))
        assert state.accumulated_text == "A"

    def test_state_is_session_state(self, aggregator):
        """Test ingest mutates and returns the active state."""
        state = aggregator.ingest(TextPayload(text="A"), Mode.RECALL_SEARCH)
        assert state is aggregator.state


class TestIngestErrors:
    """Tests for ingesting failures."""

    def test_api_error_merged_as_text(self, aggregator):
        """Test API errors become text and hide the header."""
        state = ingest_all(
            aggregator,
            ApiErrorOutcome(message="Unauthorized", developer_message="Invalid ApiKey"),
        )
        assert state.accumulated_text == "Unauthorized: Invalid ApiKey"
        assert state.show_header is False
        assert state.show_image is False

    def test_transport_failure_merged_as_text(self, aggregator):
        """Test transport failures become text and hide the header."""
        state = ingest_all(aggregator, TransportFailure(message="Connection refused"))
        assert state.accumulated_text == "Connection refused"
        assert state.show_header is False

    def test_header_shown_again_for_text(self, aggregator):
        """Test a text result after an error shows the header."""
        state = ingest_all(aggregator, TransportFailure(message="timeout"), TextPayload(text="A"))
        assert state.show_header is True

    def test_error_order(self, aggregator):
        """Test error and success text keep arrival order."""
        state = ingest_all(aggregator, TransportFailure(message="timeout"), TextPayload(text="A"))
        assert state.accumulated_text == "timeout\nA"

        aggregator.reset_for_new_action("2")
        state = ingest_all(aggregator, TextPayload(text="A"), TransportFailure(message="timeout"))
        assert state.accumulated_text == "A\ntimeout"

    def test_same_error_twice(self, aggregator):
        """Test identical errors from both calls are kept once."""
        failure = TransportFailure(message="Network is unreachable")
        state = ingest_all(aggregator, failure, failure)
        assert state.accumulated_text == "Network is unreachable"


class TestIngestImage:
    """Tests for ingesting image payloads."""

    def test_image_shown_text_kept(self):
        """Test an image wins rendering but keeps accumulated text."""
        aggregator = ResultAggregator(NO_RESULTS)
        aggregator.activate("1")
        aggregator.ingest(TextPayload(text="A"), Mode.GENERATE)
        state = aggregator.ingest(ImagePayload(data=b"png"), Mode.GENERATE)

        assert state.has_image is True
        assert state.show_image is True
        assert state.show_text is False
        assert state.image == b"png"
        assert state.accumulated_text == "A"

    def test_error_after_image_shows_text(self):
        """Test a failure after an image shows the error text."""
        aggregator = ResultAggregator(NO_RESULTS)
        aggregator.activate("1")
        aggregator.ingest(ImagePayload(data=b"png"), Mode.GENERATE)
        state = aggregator.ingest(TransportFailure(message="timeout"), Mode.GENERATE)

        assert state.show_image is False
        assert state.accumulated_text == "timeout"
        assert state.image == b"png"

    def test_last_image_wins(self):
        """Test a newer image replaces the previous one."""
        aggregator = ResultAggregator(NO_RESULTS)
        aggregator.activate("1")
        aggregator.ingest(ImagePayload(data=b"one"), Mode.GENERATE)
        state = aggregator.ingest(ImagePayload(data=b"two"), Mode.GENERATE)
        assert state.image == b"two"


class TestSessionLifecycle:
    """Tests for item switching, resets and stale outcomes."""

    def test_no_active_item(self):
        """Test outcomes are dropped without an active item."""
        aggregator = ResultAggregator(NO_RESULTS)
        assert aggregator.state is None
        assert aggregator.ingest(TextPayload(text="A"), Mode.UPC_LOOKUP) is None

    def test_reset_for_new_action(self, aggregator):
        """Test a new action clears text and image."""
        aggregator.ingest(TextPayload(text="A"), Mode.RECALL_SEARCH)
        state = aggregator.reset_for_new_action("2")
        assert state.accumulated_text == ""
        assert state.image is None

    def test_reactivate_keeps_state(self, aggregator):
        """Test recreating the view for the same item keeps its state."""
        aggregator.ingest(TextPayload(text="A"), Mode.RECALL_SEARCH)
        state = aggregator.activate("2")
        assert state.accumulated_text == "A"

    def test_item_switch_clears_state(self, aggregator):
        """Test switching items starts from an empty state."""
        aggregator.ingest(TextPayload(text="A"), Mode.RECALL_SEARCH)
        state = aggregator.activate("3")
        assert state.item_id == "3"
        assert state.mode == Mode.UPC_LOOKUP
        assert state.accumulated_text == ""

        state = aggregator.activate("2")
        assert state.accumulated_text == ""

    def test_reset_switches_item(self, aggregator):
        """Test resetting for another item activates it."""
        state = aggregator.reset_for_new_action("3")
        assert aggregator.item_id == "3"
        assert state.mode == Mode.UPC_LOOKUP

    def test_stale_item_dropped(self, aggregator):
        """Test outcomes for a previous item do not touch the new item."""
        aggregator.activate("3")
        aggregator.ingest(TextPayload(text="B"), Mode.UPC_LOOKUP, "3")

        assert aggregator.ingest(TextPayload(text="A"), Mode.RECALL_SEARCH, "2") is None
        assert aggregator.ingest(TextPayload(text="A"), Mode.UPC_LOOKUP, "2") is None
        assert aggregator.state.accumulated_text == "B"

    def test_returning_to_item_drops_old_session(self, aggregator):
        """Test outcomes from before leaving an item are dropped after returning to it."""
        session = aggregator.session
        aggregator.activate("3")
        aggregator.activate("2")
        assert aggregator.session != session

        assert aggregator.ingest(TextPayload(text="old"), Mode.RECALL_SEARCH, "2", session) is None
        assert aggregator.state.accumulated_text == ""

        state = aggregator.ingest(
            TextPayload(text="new"), Mode.RECALL_SEARCH, "2", aggregator.session
        )
        assert state.accumulated_text == "new"

    def test_same_item_keeps_session(self, aggregator):
        """Test re-activating or resetting the active item keeps the session."""
        session = aggregator.session
        aggregator.activate("2")
        aggregator.reset_for_new_action("2")
        assert aggregator.session == session

    def test_stale_mode_dropped(self, aggregator):
        """Test outcomes tagged with another mode are dropped."""
        assert aggregator.ingest(ImagePayload(data=b"png"), Mode.GENERATE) is None
        assert aggregator.state.image is None

    def test_unknown_item(self):
        """Test activating an unknown item fails."""
        with pytest.raises(KeyError):
            ResultAggregator(NO_RESULTS).activate("9")
