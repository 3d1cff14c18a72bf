"""Panel <-> host checkout synchronization"""

from gitlane.sync.messages import (
    CheckoutRequest,
    CheckoutResult,
    HostMessage,
    MessageError,
    decode_message,
    encode_message,
)
from gitlane.sync.protocol import CheckoutSync, SyncState

__all__ = [
    "CheckoutRequest",
    "CheckoutResult",
    "CheckoutSync",
    "HostMessage",
    "MessageError",
    "SyncState",
    "decode_message",
    "encode_message",
]
