"""
Messages exchanged between the graph panel and its host.

Wire format is a flat dict with a "command" tag:

    {"command": "checkout", "commitHash": "<hash>"}
    {"command": "checkoutResult", "commitHash": "<hash>", "ok": true}
    {"command": "checkoutResult", "commitHash": "<hash>", "ok": false, "reason": "..."}

Dicts are decoded once, at the boundary, into one dataclass per command.
"""

from dataclasses import dataclass
from typing import Any

from gitlane.constants import CHECKOUT_COMMAND, CHECKOUT_RESULT_COMMAND


class MessageError(ValueError):
    """A message payload could not be decoded."""


@dataclass(frozen=True)
class CheckoutRequest:
    """Panel -> host: check out a commit."""

    commit_hash: str


@dataclass(frozen=True)
class CheckoutResult:
    """Host -> panel: outcome of a checkout request."""

    commit_hash: str
    ok: bool
    reason: str | None = None


HostMessage = CheckoutRequest | CheckoutResult


def _require_hash(payload: dict[str, Any]) -> str:
    commit_hash = payload.get("commitHash")
    if not isinstance(commit_hash, str) or not commit_hash:
        raise MessageError(f"Missing or invalid commitHash in {payload!r}")
    return commit_hash


def decode_message(payload: dict[str, Any]) -> HostMessage:
    """Decode a wire dict into a message object.

    Raises:
        MessageError: unknown command or malformed fields
    """
    if not isinstance(payload, dict):
        raise MessageError(f"Message must be a dict, got {type(payload).__name__}")

    command = payload.get("command")
    if command == CHECKOUT_COMMAND:
        return CheckoutRequest(commit_hash=_require_hash(payload))

    if command == CHECKOUT_RESULT_COMMAND:
        ok = payload.get("ok")
        if not isinstance(ok, bool):
            raise MessageError(f"checkoutResult needs a boolean 'ok', got {ok!r}")
        reason = payload.get("reason")
        if reason is not None and not isinstance(reason, str):
            raise MessageError(f"checkoutResult 'reason' must be a string, got {reason!r}")
        return CheckoutResult(commit_hash=_require_hash(payload), ok=ok, reason=reason)

    raise MessageError(f"Unknown command: {command!r}")


def encode_message(message: HostMessage) -> dict[str, Any]:
    """Encode a message object into its wire dict."""
    if isinstance(message, CheckoutRequest):
        return {"command": CHECKOUT_COMMAND, "commitHash": message.commit_hash}

    payload: dict[str, Any] = {
        "command": CHECKOUT_RESULT_COMMAND,
        "commitHash": message.commit_hash,
        "ok": message.ok,
    }
    if message.reason is not None:
        payload["reason"] = message.reason
    return payload
