"""Transaction codec: calldata and event logs to and from typed intents."""

from escrow_client.codec.amounts import from_base_units, to_base_units
from escrow_client.codec.calldata import (
    decode_transaction,
    encode_arguments,
    encode_calldata,
    function_selector,
)
from escrow_client.codec.events import (
    decode_log,
    decode_receipt_events,
    receipt_status,
)

__all__ = [
    "from_base_units",
    "to_base_units",
    "decode_transaction",
    "encode_arguments",
    "encode_calldata",
    "function_selector",
    "decode_log",
    "decode_receipt_events",
    "receipt_status",
]
