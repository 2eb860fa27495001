"""
Unit tests for FieldSyncController in select mode.

Covers the optimistic edit cycle (Idle -> Editing -> Idle), rollback on
rejection and transport failure, entity switches and external updates while
a save is in flight, and discarding of stale, duplicate and post-dispose
responses.
"""
from unittest.mock import MagicMock

import pytest

from src.features.field_sync.application.field_sync_controller import FieldMode, FieldSyncController
from src.features.field_sync.application.option_cache import OptionCache
from src.features.field_sync.application.validation_presenter import ValidationPresenter
from src.features.field_sync.domain import GENERIC_TRANSPORT_MESSAGE, FieldAccessor, ValidationOutcome
from src.features.records.domain import WORK, Work


@pytest.fixture
def work():
    return Work(work_id=7, title="Salt Year", type="novel", status="Working")


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.update = MagicMock(side_effect=lambda entity: ValidationOutcome.accepted(entity))
    return gw


@pytest.fixture
def presenter():
    return ValidationPresenter()


@pytest.fixture
def controller(work, gateway, manual_dispatcher, presenter):
    return FieldSyncController(
        FieldAccessor(WORK, "type"), work, gateway,
        dispatcher=manual_dispatcher, presenter=presenter,
    )


@pytest.fixture
def signals(controller):
    captured = {"value": [], "pending": [], "updated": [], "failed": []}
    controller.value_changed.connect(captured["value"].append)
    controller.pending_changed.connect(captured["pending"].append)
    controller.entity_updated.connect(captured["updated"].append)
    controller.edit_failed.connect(captured["failed"].append)
    return captured


class TestNoOpEdits:
    """Edits that must never reach the gateway."""

    def test_select_mode_is_default_for_select_fields(self, controller):
        assert controller.mode == FieldMode.SELECT

    def test_submitting_authoritative_value_is_noop(self, controller, manual_dispatcher, signals):
        assert controller.submit_edit("novel") is False
        assert manual_dispatcher.call_count == 0
        assert signals["pending"] == []
        assert not controller.is_pending

    def test_submitting_empty_value_is_noop(self, controller, manual_dispatcher):
        assert controller.submit_edit("") is False
        assert controller.submit_edit(None) is False
        assert manual_dispatcher.call_count == 0

    def test_edit_text_requires_text_mode(self, controller):
        with pytest.raises(RuntimeError):
            controller.edit_text("memoir")


class TestOptimisticEdit:
    """Idle -> Editing -> Idle with a successful save."""

    def test_value_shown_immediately_and_pending(self, controller, manual_dispatcher, signals):
        assert controller.submit_edit("memoir") is True

        assert controller.current_value == "memoir"
        assert controller.is_pending
        assert not controller.affordance_enabled
        assert signals["value"] == ["memoir"]
        assert signals["pending"] == [True]
        assert manual_dispatcher.call_count == 1

    def test_success_settles_with_confirmed_entity(self, controller, manual_dispatcher, gateway, signals):
        controller.submit_edit("memoir")
        manual_dispatcher.resolve(0)

        assert not controller.is_pending
        assert controller.current_value == "memoir"
        assert controller.authoritative_value == "memoir"
        assert signals["pending"] == [True, False]
        assert len(signals["updated"]) == 1
        assert signals["updated"][0].type == "memoir"
        assert signals["updated"][0].title == "Salt Year"

        sent = gateway.update.call_args[0][0]
        assert sent.work_id == 7
        assert sent.type == "memoir"

    def test_server_entity_becomes_authoritative(self, controller, manual_dispatcher, work):
        controller.submit_edit("memoir")
        normalized = Work(work_id=7, title="Salt Year", type="Memoir", status="Working")
        manual_dispatcher.resolve(0, ValidationOutcome.accepted(normalized))

        assert controller.entity is normalized
        assert controller.authoritative_value == "Memoir"

    def test_second_submit_while_pending_is_ignored(self, controller, manual_dispatcher):
        controller.submit_edit("memoir")
        assert controller.submit_edit("essay") is False

        assert manual_dispatcher.call_count == 1
        assert controller.current_value == "memoir"

    def test_warnings_do_not_block_success(self, controller, manual_dispatcher, presenter, work):
        from src.shared.application.validation import FieldIssue

        messages = []
        presenter.message_posted.connect(lambda level, title, text: messages.append((level, text)))
        controller.submit_edit("memoir")
        manual_dispatcher.resolve(0, ValidationOutcome.accepted(
            Work(work_id=7, title="Salt Year", type="memoir"), [FieldIssue("type", "unusual type")]
        ))

        assert controller.current_value == "memoir"
        assert messages == [("warning", "type: unusual type")]


class TestRollback:
    """Rejected and failed saves restore the last known-good value."""

    def test_rejection_reverts_and_reports(self, controller, manual_dispatcher, presenter, signals):
        messages = []
        presenter.message_posted.connect(lambda level, title, text: messages.append((title, text)))

        controller.submit_edit("essay")
        manual_dispatcher.resolve(0, ValidationOutcome.rejected("invalid type", field_name="type"))

        assert controller.current_value == "novel"
        assert not controller.is_pending
        assert signals["value"] == ["essay", "novel"]
        assert signals["failed"] == [["type: invalid type"]]
        assert signals["updated"] == []
        assert messages == [("Validation Error", "type: invalid type")]

    def test_transport_failure_reverts_with_generic_message(self, controller, manual_dispatcher, gateway, signals):
        gateway.update.side_effect = ConnectionError("backend down")

        controller.submit_edit("memoir")
        manual_dispatcher.resolve(0)

        assert controller.current_value == "novel"
        assert not controller.is_pending
        assert signals["failed"] == [[GENERIC_TRANSPORT_MESSAGE]]

    def test_can_edit_again_after_rejection(self, controller, manual_dispatcher):
        controller.submit_edit("essay")
        manual_dispatcher.resolve(0, ValidationOutcome.rejected("invalid type"))

        assert controller.submit_edit("memoir") is True
        assert manual_dispatcher.call_count == 2


class TestExternalUpdates:
    """Authoritative entity changes from the owning view."""

    def test_switch_while_idle_resets_draft(self, controller, signals):
        controller.set_entity(Work(work_id=8, title="Night Ferry", type="poem"))

        assert controller.entity_id == 8
        assert controller.current_value == "poem"
        assert signals["value"] == ["poem"]

    def test_switch_while_pending_discards_late_response(self, controller, manual_dispatcher, signals):
        controller.submit_edit("memoir")
        controller.set_entity(Work(work_id=8, title="Night Ferry", type="poem"))

        assert controller.current_value == "poem"
        assert not controller.is_pending
        assert signals["pending"] == [True, False]

        manual_dispatcher.resolve(0)

        assert controller.current_value == "poem"
        assert controller.entity_id == 8
        assert signals["updated"] == []

    def test_switch_while_pending_discards_late_rejection(self, controller, manual_dispatcher, signals):
        controller.submit_edit("essay")
        controller.set_entity(Work(work_id=8, title="Night Ferry", type="poem"))
        manual_dispatcher.resolve(0, ValidationOutcome.rejected("invalid type"))

        assert controller.current_value == "poem"
        assert signals["failed"] == []

    def test_same_record_while_idle_resynchronises(self, controller, work):
        controller.set_entity(Work(work_id=7, title="Salt Year", type="memoir"))
        assert controller.current_value == "memoir"
        assert controller.authoritative_value == "memoir"

    def test_same_record_while_pending_is_queued(self, controller, manual_dispatcher):
        controller.submit_edit("memoir")
        controller.set_entity(Work(work_id=7, title="Salt Year", type="fiction"))

        assert controller.current_value == "memoir"
        assert controller.is_pending

    def test_queued_update_overwritten_by_success(self, controller, manual_dispatcher):
        controller.submit_edit("memoir")
        controller.set_entity(Work(work_id=7, title="Salt Year", type="fiction"))
        manual_dispatcher.resolve(0)

        assert controller.current_value == "memoir"
        assert controller.authoritative_value == "memoir"

    def test_queued_update_is_baseline_after_rejection(self, controller, manual_dispatcher):
        controller.submit_edit("memoir")
        controller.set_entity(Work(work_id=7, title="Salt Year", type="fiction"))
        manual_dispatcher.resolve(0, ValidationOutcome.rejected("invalid type"))

        assert controller.current_value == "fiction"
        assert controller.authoritative_value == "fiction"


class TestStaleResponses:
    """Responses that must not change state."""

    def test_duplicate_outcome_ignored(self, controller, manual_dispatcher, signals):
        controller.submit_edit("memoir")
        manual_dispatcher.resolve(0)
        manual_dispatcher.resolve(0, ValidationOutcome.rejected("late duplicate"))

        assert controller.current_value == "memoir"
        assert signals["failed"] == []
        assert len(signals["updated"]) == 1

    def test_dispose_ignores_late_results(self, controller, manual_dispatcher, signals):
        controller.submit_edit("memoir")
        controller.dispose()
        manual_dispatcher.resolve(0)

        assert controller.is_disposed
        assert signals["pending"] == [True]
        assert signals["updated"] == []
        assert controller.submit_edit("essay") is False

    def test_set_entity_after_dispose_ignored(self, controller):
        controller.dispose()
        controller.set_entity(Work(work_id=8, title="Night Ferry", type="poem"))
        assert controller.entity_id == 7


class TestOptionCacheIntegration:
    """Successful free-form values join the shared suggestions."""

    def test_saved_value_added_to_loaded_options(self, work, gateway, manual_dispatcher):
        provider = MagicMock()
        provider.list_distinct_values.return_value = ["novel", "poem"]
        cache = OptionCache(provider)
        cache.options_for("Works", "type")

        controller = FieldSyncController(
            FieldAccessor(WORK, "type"), work, gateway,
            dispatcher=manual_dispatcher, option_cache=cache,
        )
        controller.submit_edit("memoir")
        manual_dispatcher.resolve(0)

        assert cache.options_for("Works", "type") == ["memoir", "novel", "poem"]

    def test_controller_requires_entity(self, gateway):
        with pytest.raises(ValueError):
            FieldSyncController(FieldAccessor(WORK, "type"), None, gateway)
