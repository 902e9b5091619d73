"""Tests for domain enumerations."""

from __future__ import annotations

from escrow_client.domain.enums import (
    DepositStatus,
    DisputeWinner,
    ErrorKind,
    EscrowEvent,
    EscrowFunction,
    FeeConfig,
    TransactionStatus,
)


class TestFeeConfig:
    def test_contract_values(self) -> None:
        assert FeeConfig.CLIENT_COVERS_ALL == 0
        assert FeeConfig.CLIENT_COVERS_ONLY == 1
        assert FeeConfig.CONTRACTOR_COVERS_CLAIM == 2
        assert FeeConfig.NO_FEES == 3

    def test_round_trips_from_raw_uint8(self) -> None:
        assert FeeConfig(2) is FeeConfig.CONTRACTOR_COVERS_CLAIM


class TestDepositStatus:
    def test_contract_values(self) -> None:
        assert [s.value for s in DepositStatus] == [0, 1, 2]
        assert DepositStatus(1).name == "SUBMITTED"


class TestDisputeWinner:
    def test_contract_values(self) -> None:
        assert {w.name: w.value for w in DisputeWinner} == {
            "CLIENT": 0,
            "CONTRACTOR": 1,
            "SPLIT": 2,
        }


class TestTransactionStatus:
    def test_status_is_str_enum(self) -> None:
        assert isinstance(TransactionStatus.SUCCESS, str)
        assert TransactionStatus.PENDING == "pending"
        assert TransactionStatus.REVERTED == "reverted"


class TestEscrowFunction:
    def test_all_functions_exist(self) -> None:
        # 6 lifecycle + 3 return requests + 2 disputes
        assert len(EscrowFunction) == 11

    def test_values_match_contract_names(self) -> None:
        assert EscrowFunction.REQUEST_RETURN == "requestReturn"
        assert EscrowFunction.RESOLVE_DISPUTE == "resolveDispute"


class TestEscrowEvent:
    def test_all_events_exist(self) -> None:
        assert {e.value for e in EscrowEvent} == {
            "Approved",
            "Claimed",
            "Deposited",
            "Refilled",
            "Submitted",
            "Withdrawn",
            "OwnershipTransferred",
            "RegistryUpdated",
        }


class TestErrorKind:
    def test_kinds(self) -> None:
        assert len(ErrorKind) == 9
        assert ErrorKind.NO_MATCHING_FUNCTION == "no_matching_function"
