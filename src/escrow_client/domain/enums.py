"""Domain enumerations for the escrow client.

On-chain enums are IntEnums because the contract stores them as ``uint8``
and the codec passes the raw integer through the ABI unchanged.
"""

import enum


class FeeConfig(enum.IntEnum):
    """How protocol fees are split between client and contractor."""

    CLIENT_COVERS_ALL = 0
    CLIENT_COVERS_ONLY = 1
    CONTRACTOR_COVERS_CLAIM = 2
    NO_FEES = 3


class DepositStatus(enum.IntEnum):
    """Lifecycle states of a deposit as recorded by the escrow contract.

    Transitions are enforced by DepositStateMachine.
    See domain/state_machine.py for the transition table.
    """

    PENDING = 0
    SUBMITTED = 1
    APPROVED = 2


class DisputeWinner(enum.IntEnum):
    """Outcome of a resolved dispute. Only ever decoded, never sent."""

    CLIENT = 0
    CONTRACTOR = 1
    SPLIT = 2


class TransactionStatus(enum.StrEnum):
    """Status of a submitted transaction as reported to callers."""

    PENDING = "pending"
    SUCCESS = "success"
    REVERTED = "reverted"


class EscrowFunction(enum.StrEnum):
    """Escrow contract functions the codec can encode and decode."""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    CLAIM = "claim"
    SUBMIT = "submit"
    APPROVE = "approve"
    REFILL = "refill"
    REQUEST_RETURN = "requestReturn"
    APPROVE_RETURN = "approveReturn"
    CANCEL_RETURN = "cancelReturn"
    CREATE_DISPUTE = "createDispute"
    RESOLVE_DISPUTE = "resolveDispute"


class EscrowEvent(enum.StrEnum):
    """Events emitted by the escrow contract that the client decodes."""

    APPROVED = "Approved"
    CLAIMED = "Claimed"
    DEPOSITED = "Deposited"
    REFILLED = "Refilled"
    SUBMITTED = "Submitted"
    WITHDRAWN = "Withdrawn"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"
    REGISTRY_UPDATED = "RegistryUpdated"


class ErrorKind(enum.StrEnum):
    """Stable kind labels carried by every EscrowClientError."""

    NOT_SUPPORTED = "not_supported"
    NOT_FOUND = "not_found"
    NOT_MATCH = "not_match"
    NOT_SET = "not_set"
    NOT_ENOUGH = "not_enough"
    SIMULATE = "simulate"
    NOT_SUCCESS_TRANSACTION = "not_success_transaction"
    NO_MATCHING_FUNCTION = "no_matching_function"
    CORE = "core"
