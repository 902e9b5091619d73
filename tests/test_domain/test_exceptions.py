"""Tests for the error taxonomy."""

from __future__ import annotations

import pytest

from escrow_client.domain.enums import ErrorKind
from escrow_client.domain.exceptions import (
    ConfigurationError,
    CoreClientError,
    DecodeError,
    EscrowClientError,
    InsufficientFundsError,
    MismatchError,
    NotFoundError,
    NotSetError,
    SimulationError,
    UnsuccessfulTransactionError,
    parse_error,
)


class TestErrorKinds:
    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (ConfigurationError("token DAI"), ErrorKind.NOT_SUPPORTED),
            (NotFoundError("token 0xabc"), ErrorKind.NOT_FOUND),
            (MismatchError("chain id 1"), ErrorKind.NOT_MATCH),
            (NotSetError("account"), ErrorKind.NOT_SET),
            (InsufficientFundsError("balance", "MockUSDT", "103", "50"), ErrorKind.NOT_ENOUGH),
            (SimulationError("claim", "Escrow__NotApproved"), ErrorKind.SIMULATE),
            (UnsuccessfulTransactionError("token approve"), ErrorKind.NOT_SUCCESS_TRANSACTION),
            (DecodeError(), ErrorKind.NO_MATCHING_FUNCTION),
            (CoreClientError("boom"), ErrorKind.CORE),
        ],
    )
    def test_every_error_carries_its_kind(self, error: EscrowClientError, kind: ErrorKind) -> None:
        assert isinstance(error, EscrowClientError)
        assert error.code == kind
        assert str(error).startswith(f"{kind}: ")


class TestMessages:
    def test_configuration_error(self) -> None:
        assert ConfigurationError("chain id 5").message == "unsupported chain id 5"

    def test_not_set_error(self) -> None:
        error = NotSetError("value_approve")
        assert error.field_name == "value_approve"
        assert error.message == "value_approve is not set"

    def test_insufficient_funds(self) -> None:
        error = InsufficientFundsError("allowance", "MockUSDT", "103", "0")
        assert error.message == "allowance of MockUSDT is 0, required 103"

    def test_simulation_error_keeps_reason(self) -> None:
        error = SimulationError("claim", "Escrow__NotApproved")
        assert error.reason == "Escrow__NotApproved"
        assert "claim would revert" in error.message

    def test_unsuccessful_transaction_keeps_hash(self) -> None:
        assert UnsuccessfulTransactionError("approve", tx_hash="0x01").tx_hash == "0x01"

    def test_decode_error_default_message(self) -> None:
        assert DecodeError().message == "no matching function for input data"


class TestParseError:
    def test_client_error(self) -> None:
        assert parse_error(NotSetError("account")) == "not_set: account is not set"

    def test_foreign_exception(self) -> None:
        assert parse_error(RuntimeError("rpc down")) == "rpc down"

    def test_foreign_exception_without_message(self) -> None:
        assert parse_error(TimeoutError(), "lookup") == "lookup"

    def test_non_exception(self) -> None:
        assert parse_error(42, "deposit") == "deposit: unknown 42"
