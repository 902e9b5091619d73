"""Pydantic schemas for escrow transaction intents.

A TransactionIntent is one escrow contract call in typed form. Callers build
intents before encoding; the codec produces the same shapes when decoding
historical calldata. ``function_name`` is the contract function and the
discriminator of the union.

Amounts are human-readable Decimals in units of the intent's token; the
codec converts them to and from base units.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Annotated, Literal

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from escrow_client.domain.enums import DepositStatus, DisputeWinner, FeeConfig
from escrow_client.environment import DEFAULT_TOKEN_SYMBOL

# keccak256 of empty input
EMPTY_DATA_HASH = "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

_BYTES32_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def _checksum(value: object) -> str:
    if isinstance(value, bytes) and len(value) == 20:
        return to_checksum_address(value)
    if not isinstance(value, str) or not is_address(value):
        raise ValueError(f"not an address: {value!r}")
    return to_checksum_address(value)


def _bytes32_hex(value: object) -> str:
    if isinstance(value, bytes):
        if len(value) != 32:
            raise ValueError(f"expected 32 bytes, got {len(value)}")
        return "0x" + value.hex()
    if not isinstance(value, str) or not _BYTES32_RE.match(value):
        raise ValueError(f"not a 0x-prefixed 32-byte hex string: {value!r}")
    return value.lower()


Address = Annotated[str, BeforeValidator(_checksum)]
Bytes32Hex = Annotated[str, BeforeValidator(_bytes32_hex)]
Amount = Annotated[Decimal, Field(ge=0)]
DepositId = Annotated[int, Field(ge=0)]


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Lifecycle intents
# ---------------------------------------------------------------------------


class DepositIntent(_Intent):
    """Fund a new deposit for a contractor."""

    function_name: Literal["deposit"] = "deposit"
    contractor: Address
    token: str = Field(default=DEFAULT_TOKEN_SYMBOL, description="Payment token symbol")
    token_address: Address | None = Field(
        default=None,
        description="Resolved from ``token`` when encoding; set when decoding",
    )
    amount: Amount
    amount_to_claim: Amount = Decimal(0)
    time_lock: int = Field(default=0, ge=0)
    fee_config: FeeConfig = FeeConfig.CLIENT_COVERS_ONLY
    recipient_data: Bytes32Hex = EMPTY_DATA_HASH
    status: DepositStatus = DepositStatus.PENDING


class WithdrawIntent(_Intent):
    function_name: Literal["withdraw"] = "withdraw"
    deposit_id: DepositId


class ClaimIntent(_Intent):
    function_name: Literal["claim"] = "claim"
    deposit_id: DepositId


class SubmitIntent(_Intent):
    """Contractor submits work. ``salt`` commits the data hash."""

    function_name: Literal["submit"] = "submit"
    deposit_id: DepositId
    data: bytes = b""
    salt: Bytes32Hex


class ApproveIntent(_Intent):
    """Client approves payment and/or adds funds.

    ``token`` is only informational on decode; the controller resolves the
    token from the deposit record.
    """

    function_name: Literal["approve"] = "approve"
    deposit_id: DepositId
    value_approve: Amount = Decimal(0)
    value_additional: Amount = Decimal(0)
    recipient: Address | None = None
    token: str | None = None


class RefillIntent(_Intent):
    function_name: Literal["refill"] = "refill"
    deposit_id: DepositId
    value_additional: Amount
    token: str | None = None


# ---------------------------------------------------------------------------
# Return requests
# ---------------------------------------------------------------------------


class RequestReturnIntent(_Intent):
    function_name: Literal["requestReturn"] = "requestReturn"
    deposit_id: DepositId


class ApproveReturnIntent(_Intent):
    function_name: Literal["approveReturn"] = "approveReturn"
    deposit_id: DepositId


class CancelReturnIntent(_Intent):
    function_name: Literal["cancelReturn"] = "cancelReturn"
    deposit_id: DepositId
    status: DepositStatus


# ---------------------------------------------------------------------------
# Disputes (decoded only)
# ---------------------------------------------------------------------------


class CreateDisputeIntent(_Intent):
    function_name: Literal["createDispute"] = "createDispute"
    deposit_id: DepositId


class ResolveDisputeIntent(_Intent):
    function_name: Literal["resolveDispute"] = "resolveDispute"
    deposit_id: DepositId
    winner: DisputeWinner
    client_amount: Amount
    contractor_amount: Amount
    token: str | None = None


TransactionIntent = Annotated[
    DepositIntent
    | WithdrawIntent
    | ClaimIntent
    | SubmitIntent
    | ApproveIntent
    | RefillIntent
    | RequestReturnIntent
    | ApproveReturnIntent
    | CancelReturnIntent
    | CreateDisputeIntent
    | ResolveDisputeIntent,
    Field(discriminator="function_name"),
]

intent_adapter: TypeAdapter[TransactionIntent] = TypeAdapter(TransactionIntent)
