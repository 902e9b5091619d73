"""Escrow event log decoding.

Logs are matched on topic0 against the escrow's event signatures. Logs of
other contracts or unknown events are dropped, not reported as errors: one
receipt routinely carries token Transfer/Approval logs next to the escrow's.
"""

from __future__ import annotations

from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import event_abi_to_log_topic, to_bytes, to_checksum_address

from escrow_client.abi import ESCROW_ABI
from escrow_client.domain.enums import EscrowEvent, FeeConfig, TransactionStatus
from escrow_client.domain.models import DecodedEvent
from escrow_client.logging_config import get_logger

logger = get_logger(__name__)

_BY_TOPIC: dict[bytes, dict] = {
    event_abi_to_log_topic(entry): entry
    for entry in ESCROW_ABI
    if entry["type"] == "event" and entry["name"] in {e.value for e in EscrowEvent}
}


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    return to_bytes(hexstr=value)


def _normalize(abi_type: str, name: str, value: Any) -> Any:
    if abi_type == "address":
        return to_checksum_address(value)
    if name == "feeConfig":
        return FeeConfig(value)
    return value


def decode_log(log: dict) -> DecodedEvent | None:
    """Decode one log, or return None if it is not an escrow event."""
    topics = [_as_bytes(topic) for topic in log.get("topics", [])]
    if not topics:
        return None
    event_abi = _BY_TOPIC.get(topics[0])
    if event_abi is None:
        return None

    indexed = [arg for arg in event_abi["inputs"] if arg["indexed"]]
    plain = [arg for arg in event_abi["inputs"] if not arg["indexed"]]
    if len(indexed) != len(topics) - 1:
        return None

    try:
        args: dict[str, Any] = {}
        for arg, topic in zip(indexed, topics[1:], strict=True):
            (args[arg["name"]],) = abi_decode([arg["type"]], topic)
        data = _as_bytes(log.get("data") or b"")
        values = abi_decode([arg["type"] for arg in plain], data) if plain else ()
        for arg, value in zip(plain, values, strict=True):
            args[arg["name"]] = value
        normalized = {
            arg["name"]: _normalize(arg["type"], arg["name"], args[arg["name"]])
            for arg in event_abi["inputs"]
        }
    except (DecodingError, ValueError) as exc:
        logger.debug("codec.log_undecodable", event_name=event_abi["name"], error=str(exc))
        return None

    address = log.get("address")
    return DecodedEvent(
        event_name=event_abi["name"],
        args=normalized,
        address=to_checksum_address(address) if address else None,
    )


def decode_receipt_events(receipt: dict, address: str | None = None) -> list[DecodedEvent]:
    """Decode the escrow events of a receipt, in log order.

    Args:
        receipt: Transaction receipt with a ``logs`` list.
        address: If given, only logs emitted by this contract are considered.
    """
    events: list[DecodedEvent] = []
    wanted = address.lower() if address else None
    for log in receipt.get("logs", []):
        if wanted and str(log.get("address", "")).lower() != wanted:
            continue
        event = decode_log(log)
        if event is not None:
            events.append(event)
    return events


def receipt_status(receipt: dict | None) -> TransactionStatus:
    """Map a receipt (or its absence) to a TransactionStatus."""
    if receipt is None:
        return TransactionStatus.PENDING
    status = receipt.get("status")
    if isinstance(status, str):
        if status in (TransactionStatus.SUCCESS, TransactionStatus.REVERTED):
            return TransactionStatus(status)
        status = int(status, 16) if status.startswith("0x") else int(status)
    return TransactionStatus.SUCCESS if status == 1 else TransactionStatus.REVERTED
