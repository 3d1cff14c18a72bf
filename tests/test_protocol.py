"""Tests for the checkout state machine."""

import pytest

from gitlane.sync.protocol import CheckoutSync, SyncState


def result(commit_hash: str, ok: bool, reason: str | None = None) -> dict:
    payload = {"command": "checkoutResult", "commitHash": commit_hash, "ok": ok}
    if reason is not None:
        payload["reason"] = reason
    return payload


@pytest.fixture
def sync(qapp):
    """CheckoutSync at HEAD 'h0' that records everything it emits."""
    machine = CheckoutSync("h0")
    machine.sent = []
    machine.moves = []
    machine.failures = []
    machine.states = []
    machine.message_out.connect(machine.sent.append)
    machine.head_moved.connect(lambda old, new: machine.moves.append((old, new)))
    machine.checkout_failed.connect(lambda h, reason: machine.failures.append((h, reason)))
    machine.state_changed.connect(machine.states.append)
    return machine


class TestRequest:
    def test_starts_idle(self, sync):
        assert sync.state == SyncState.IDLE
        assert sync.head == "h0"
        assert sync.pending_target is None

    def test_idle_request_sends_message(self, sync):
        assert sync.request_checkout("h1") is True
        assert sync.sent == [{"command": "checkout", "commitHash": "h1"}]
        assert sync.state == SyncState.CHECKOUT_PENDING
        assert sync.pending_target == "h1"
        assert sync.states == [SyncState.CHECKOUT_PENDING]

    def test_second_request_while_pending_is_ignored(self, sync):
        sync.request_checkout("h1")
        assert sync.request_checkout("h2") is False
        assert len(sync.sent) == 1
        assert sync.pending_target == "h1"

    def test_request_of_current_head_is_sent(self, sync):
        assert sync.request_checkout("h0") is True
        assert sync.pending_target == "h0"


class TestResults:
    def test_success_moves_head(self, sync):
        sync.request_checkout("h1")
        sync.receive(result("h1", True))

        assert sync.head == "h1"
        assert sync.moves == [("h0", "h1")]
        assert sync.state == SyncState.IDLE
        assert sync.pending_target is None

    def test_head_moves_before_idle(self, sync):
        """Listeners of state_changed see the new HEAD already."""
        seen = []
        sync.state_changed.connect(lambda state: seen.append((state, sync.head)))
        sync.request_checkout("h1")
        sync.receive(result("h1", True))
        assert seen[-1] == (SyncState.IDLE, "h1")

    def test_new_request_after_success(self, sync):
        sync.request_checkout("h1")
        sync.receive(result("h1", True))
        assert sync.request_checkout("h2") is True

    def test_failure_keeps_head(self, sync):
        sync.request_checkout("h1")
        sync.receive(result("h1", False, "local changes would be overwritten"))

        assert sync.head == "h0"
        assert sync.moves == []
        assert sync.state == SyncState.CHECKOUT_FAILED
        assert sync.failure_reason == "local changes would be overwritten"
        assert sync.failures == [("h1", "local changes would be overwritten")]

    def test_failure_without_reason_gets_generic_text(self, sync):
        sync.request_checkout("h1")
        sync.receive(result("h1", False))
        assert sync.failure_reason == "Checkout failed"

    def test_failed_state_rejects_requests_until_acknowledged(self, sync):
        sync.request_checkout("h1")
        sync.receive(result("h1", False, "nope"))

        assert sync.request_checkout("h2") is False
        sync.acknowledge()
        assert sync.state == SyncState.IDLE
        assert sync.failure_reason is None
        assert sync.request_checkout("h2") is True

    def test_acknowledge_when_idle_does_nothing(self, sync):
        sync.acknowledge()
        assert sync.state == SyncState.IDLE
        assert sync.states == []


class TestUnexpectedMessages:
    def test_result_for_other_commit_dropped(self, sync):
        sync.request_checkout("h1")
        sync.receive(result("h9", True))
        assert sync.head == "h0"
        assert sync.state == SyncState.CHECKOUT_PENDING

    def test_result_while_idle_dropped(self, sync):
        sync.receive(result("h1", True))
        assert sync.head == "h0"
        assert sync.moves == []

    def test_malformed_message_dropped(self, sync):
        sync.request_checkout("h1")
        sync.receive({"command": "checkoutResult", "commitHash": "h1"})
        sync.receive({"command": "bogus"})
        assert sync.state == SyncState.CHECKOUT_PENDING

    def test_request_from_host_ignored(self, sync):
        sync.receive({"command": "checkout", "commitHash": "h1"})
        assert sync.state == SyncState.IDLE
        assert sync.sent == []


class TestDispose:
    def test_late_result_ignored_after_dispose(self, sync):
        sync.request_checkout("h1")
        sync.dispose()
        sync.receive(result("h1", True))

        assert sync.is_disposed
        assert sync.head == "h0"
        assert sync.moves == []

    def test_no_requests_after_dispose(self, sync):
        sync.dispose()
        assert sync.request_checkout("h1") is False
        assert sync.sent == []
