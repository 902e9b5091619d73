"""Domain records for the escrow client.

Plain frozen dataclasses. They mirror contract storage or describe the
result of a call; nothing here is persisted, every record is rebuilt from
the chain on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from escrow_client.domain.enums import DepositStatus, FeeConfig, TransactionStatus
from escrow_client.domain.exceptions import NotSetError

if TYPE_CHECKING:
    from escrow_client.schemas.intents import TransactionIntent

MAX_BPS = 10_000


@dataclass(frozen=True)
class TokenDescriptor:
    """An ERC-20 token the escrow accepts.

    Attributes:
        symbol: Ticker used by callers (e.g. "MockUSDT").
        address: Checksummed token contract address.
        decimals: Number of base-unit decimals.
    """

    symbol: str
    address: str
    decimals: int


@dataclass(frozen=True)
class EscrowContext:
    """Escrow contract and signing account bound to one call.

    Attributes:
        escrow: Address of the escrow contract the call targets.
        account: Address of the account that signs writes. Reads that do not
            depend on the caller may leave it unset.
    """

    escrow: str
    account: str | None = None

    def require_account(self) -> str:
        if not self.account:
            raise NotSetError("account")
        return self.account


@dataclass(frozen=True)
class Deposit:
    """A deposit record as stored by the escrow contract.

    Amounts are in human units of ``payment_token``; ``contractor_data`` is the
    0x-prefixed 32-byte hash the contractor commits to on submit.
    """

    contractor: str
    payment_token: str
    amount: Decimal
    amount_to_claim: Decimal
    time_lock: int
    contractor_data: str
    fee_config: FeeConfig
    status: DepositStatus


@dataclass(frozen=True)
class FeeRates:
    """Fee rates that apply to one account, in basis points."""

    coverage_bps: int
    claim_bps: int
    max_bps: int = MAX_BPS


@dataclass(frozen=True)
class DepositAmount:
    """What the client pays for a deposit of a given amount."""

    total_deposit_amount: Decimal
    fee_applied: Decimal


@dataclass(frozen=True)
class ClaimableAmount:
    """What the contractor receives when claiming a given amount."""

    claimable_amount: Decimal
    fee_deducted: Decimal
    client_fee: Decimal


@dataclass(frozen=True)
class WriteResult:
    """Result of a write operation.

    Attributes:
        transaction_id: Hash of the submitted transaction.
        status: ``pending`` when the receipt was not awaited, otherwise the
            receipt status.
        contract_id: Id of the new deposit. Only set by deposit, and only once
            the receipt is known.
    """

    transaction_id: str
    status: TransactionStatus
    contract_id: int | None = None


@dataclass(frozen=True)
class DecodedEvent:
    """An escrow event decoded from a receipt log."""

    event_name: str
    args: dict[str, Any]
    address: str | None = None


@dataclass(frozen=True)
class TransactionOutcome:
    """A transaction looked up by hash.

    ``intent`` and ``events`` stay empty until EscrowService.transaction_parse
    decodes them for a transaction that targets the context's escrow.
    """

    transaction_id: str
    status: TransactionStatus
    transaction: dict[str, Any]
    receipt: dict[str, Any] | None = None
    intent: TransactionIntent | None = None
    events: tuple[DecodedEvent, ...] = field(default_factory=tuple)
