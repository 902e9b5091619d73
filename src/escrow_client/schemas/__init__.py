"""Pydantic schemas for transaction intents."""

from escrow_client.schemas.intents import (
    EMPTY_DATA_HASH,
    ApproveIntent,
    ApproveReturnIntent,
    CancelReturnIntent,
    ClaimIntent,
    CreateDisputeIntent,
    DepositIntent,
    RefillIntent,
    RequestReturnIntent,
    ResolveDisputeIntent,
    SubmitIntent,
    TransactionIntent,
    WithdrawIntent,
    intent_adapter,
)

__all__ = [
    "EMPTY_DATA_HASH",
    "ApproveIntent",
    "ApproveReturnIntent",
    "CancelReturnIntent",
    "ClaimIntent",
    "CreateDisputeIntent",
    "DepositIntent",
    "RefillIntent",
    "RequestReturnIntent",
    "ResolveDisputeIntent",
    "SubmitIntent",
    "TransactionIntent",
    "WithdrawIntent",
    "intent_adapter",
]
