"""Domain layer — pure business logic with zero blockchain-library dependencies."""

from escrow_client.domain.chain_protocol import ChainGateway, PreparedCall
from escrow_client.domain.enums import (
    DepositStatus,
    DisputeWinner,
    ErrorKind,
    EscrowEvent,
    EscrowFunction,
    FeeConfig,
    TransactionStatus,
)
from escrow_client.domain.exceptions import (
    ConfigurationError,
    CoreClientError,
    DecodeError,
    EscrowClientError,
    InsufficientFundsError,
    InvalidStateTransitionError,
    MismatchError,
    NotFoundError,
    NotSetError,
    SimulationError,
    UnsuccessfulTransactionError,
    parse_error,
)
from escrow_client.domain.models import (
    MAX_BPS,
    ClaimableAmount,
    DecodedEvent,
    Deposit,
    DepositAmount,
    EscrowContext,
    FeeRates,
    TokenDescriptor,
    TransactionOutcome,
    WriteResult,
)
from escrow_client.domain.state_machine import (
    DepositStateMachine,
    validate_transition,
)

__all__ = [
    "ChainGateway",
    "PreparedCall",
    "DepositStatus",
    "DisputeWinner",
    "ErrorKind",
    "EscrowEvent",
    "EscrowFunction",
    "FeeConfig",
    "TransactionStatus",
    "ConfigurationError",
    "CoreClientError",
    "DecodeError",
    "EscrowClientError",
    "InsufficientFundsError",
    "InvalidStateTransitionError",
    "MismatchError",
    "NotFoundError",
    "NotSetError",
    "SimulationError",
    "UnsuccessfulTransactionError",
    "parse_error",
    "MAX_BPS",
    "ClaimableAmount",
    "DecodedEvent",
    "Deposit",
    "DepositAmount",
    "EscrowContext",
    "FeeRates",
    "TokenDescriptor",
    "TransactionOutcome",
    "WriteResult",
    "DepositStateMachine",
    "validate_transition",
]
