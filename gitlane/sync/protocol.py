"""
Checkout synchronization between the graph panel and its host.

The panel asks the host to check a commit out and waits for the answer. Only
one checkout can be outstanding; once the host confirms, HEAD moves and the
renderer patches the HEAD decoration in place (the layout is untouched).

    idle --request_checkout(h)--> checkout_pending(h)
    checkout_pending(h) --ok result--> idle            (head_moved emitted)
    checkout_pending(h) --failed result--> checkout_failed(reason)
    checkout_failed --acknowledge()--> idle
"""

import logging
from typing import Any

from PySide6.QtCore import QObject, Signal

from gitlane.sync.messages import (
    CheckoutRequest,
    CheckoutResult,
    MessageError,
    decode_message,
    encode_message,
)

logger = logging.getLogger(__name__)


class SyncState:
    """Checkout protocol state."""

    IDLE = "idle"
    CHECKOUT_PENDING = "checkout_pending"  # Waiting for the host's result
    CHECKOUT_FAILED = "checkout_failed"  # Failure shown, waiting for acknowledge()


class CheckoutSync(QObject):
    """
    Checkout state machine for one panel session.

    Owns the session's HEAD pointer. All methods run on the GUI thread;
    host results arrive through queued signals, one at a time.
    """

    message_out = Signal(dict)  # Wire message for the host
    head_moved = Signal(str, str)  # old_head, new_head
    checkout_failed = Signal(str, str)  # commit_hash, reason
    state_changed = Signal(str)  # SyncState value

    def __init__(self, head: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._head = head
        self._state = SyncState.IDLE
        self._pending_target: str | None = None
        self._failure_reason: str | None = None
        self._disposed = False

    @property
    def head(self) -> str:
        return self._head

    @property
    def state(self) -> str:
        return self._state

    @property
    def pending_target(self) -> str | None:
        return self._pending_target

    @property
    def failure_reason(self) -> str | None:
        return self._failure_reason

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def _set_state(self, state: str) -> None:
        if state != self._state:
            self._state = state
            self.state_changed.emit(state)

    def request_checkout(self, commit_hash: str) -> bool:
        """Ask the host to check out commit_hash.

        Returns False (and sends nothing) unless the protocol is idle.
        """
        if self._disposed:
            return False

        if self._state != SyncState.IDLE:
            logger.info(
                "Ignoring checkout of %s while %s (%s)",
                commit_hash[:7],
                self._state,
                (self._pending_target or "")[:7],
            )
            return False

        self._pending_target = commit_hash
        self._set_state(SyncState.CHECKOUT_PENDING)
        logger.info("Requesting checkout of %s", commit_hash[:7])
        self.message_out.emit(encode_message(CheckoutRequest(commit_hash)))
        return True

    def receive(self, payload: dict[str, Any]) -> None:
        """Handle a wire message from the host."""
        if self._disposed:
            logger.debug("Panel disposed, dropping host message %r", payload)
            return

        try:
            message = decode_message(payload)
        except MessageError as e:
            logger.warning("Dropping malformed host message: %s", e)
            return

        if isinstance(message, CheckoutResult):
            self._on_checkout_result(message)
        else:
            logger.warning("Unexpected %s from host", type(message).__name__)

    def _on_checkout_result(self, result: CheckoutResult) -> None:
        if self._state != SyncState.CHECKOUT_PENDING or result.commit_hash != self._pending_target:
            logger.warning(
                "Dropping checkout result for %s (state %s)", result.commit_hash[:7], self._state
            )
            return

        self._pending_target = None

        if result.ok:
            old_head = self._head
            self._head = result.commit_hash
            logger.info("HEAD moved %s -> %s", old_head[:7], self._head[:7])
            self.head_moved.emit(old_head, self._head)
            self._set_state(SyncState.IDLE)
        else:
            reason = result.reason or "Checkout failed"
            self._failure_reason = reason
            logger.warning("Checkout of %s failed: %s", result.commit_hash[:7], reason)
            self._set_state(SyncState.CHECKOUT_FAILED)
            self.checkout_failed.emit(result.commit_hash, reason)

    def acknowledge(self) -> None:
        """Dismiss a reported failure and return to idle."""
        if self._state == SyncState.CHECKOUT_FAILED:
            self._failure_reason = None
            self._set_state(SyncState.IDLE)

    def dispose(self) -> None:
        """Stop reacting to host messages; the scene is being torn down."""
        self._disposed = True
