"""Domain exceptions for the escrow client.

Every failure surfaced by the client is an EscrowClientError carrying a
stable ``code`` (one of ErrorKind) and a human-readable ``message``.
Reverted receipts of the main action are NOT exceptions; callers inspect
the returned status instead.
"""

from __future__ import annotations

from escrow_client.domain.enums import ErrorKind


class EscrowClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, code: str = ErrorKind.CORE) -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" if self.message else str(self.code)


class CoreClientError(EscrowClientError):
    """Raised when a collaborator fails in a way the client cannot classify."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorKind.CORE)


# --- Configuration / lookup errors ---


class ConfigurationError(EscrowClientError):
    """Raised for an unsupported environment, chain id or token."""

    def __init__(self, subject: str) -> None:
        super().__init__(message=f"unsupported {subject}", code=ErrorKind.NOT_SUPPORTED)
        self.subject = subject


class NotFoundError(EscrowClientError):
    """Raised when a deposit record references a token outside the token table."""

    def __init__(self, subject: str) -> None:
        super().__init__(message=f"{subject} not found", code=ErrorKind.NOT_FOUND)
        self.subject = subject


class MismatchError(EscrowClientError):
    """Raised when an observed value disagrees with the expected one.

    Example: the provider reports chain id 1 but the environment is Sepolia.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorKind.NOT_MATCH)


class InvalidStateTransitionError(MismatchError):
    """Raised when a deposit's on-chain status does not allow the action.

    Example: submit on a deposit that is already APPROVED.
    """

    def __init__(self, current_state: str, event_name: str) -> None:
        super().__init__(message=f"deposit status {current_state} does not allow {event_name}")
        self.current_state = current_state
        self.event_name = event_name


class NotSetError(EscrowClientError):
    """Raised when a required value (account, nonzero amount) is absent."""

    def __init__(self, field_name: str) -> None:
        super().__init__(message=f"{field_name} is not set", code=ErrorKind.NOT_SET)
        self.field_name = field_name


# --- Funds errors ---


class InsufficientFundsError(EscrowClientError):
    """Raised when balance or allowance is below the computed requirement."""

    def __init__(self, what: str, symbol: str, required: str, available: str) -> None:
        super().__init__(
            message=f"{what} of {symbol} is {available}, required {required}",
            code=ErrorKind.NOT_ENOUGH,
        )
        self.what = what
        self.symbol = symbol
        self.required = required
        self.available = available


# --- Transaction errors ---


class SimulationError(EscrowClientError):
    """Raised when a call would revert if executed. Carries the revert reason."""

    def __init__(self, function_name: str, reason: str) -> None:
        super().__init__(
            message=f"{function_name} would revert: {reason}",
            code=ErrorKind.SIMULATE,
        )
        self.function_name = function_name
        self.reason = reason


class UnsuccessfulTransactionError(EscrowClientError):
    """Raised when a precondition transaction (e.g. token approval) does not succeed."""

    def __init__(self, description: str, tx_hash: str | None = None) -> None:
        super().__init__(
            message=f"transaction did not succeed: {description}",
            code=ErrorKind.NOT_SUCCESS_TRANSACTION,
        )
        self.tx_hash = tx_hash


# --- Decode errors ---


class DecodeError(EscrowClientError):
    """Raised when calldata matches none of the known escrow functions."""

    def __init__(self, message: str = "no matching function for input data") -> None:
        super().__init__(message=message, code=ErrorKind.NO_MATCHING_FUNCTION)


def parse_error(error: object, message: str = "") -> str:
    """Render any raised object as a single human-readable line."""
    if isinstance(error, EscrowClientError):
        return f"{error.code}: {error.message or message}"
    if isinstance(error, Exception):
        return str(error) or message or type(error).__name__
    prefix = f"{message}: " if message else ""
    return f"{prefix}unknown {error!r}"
