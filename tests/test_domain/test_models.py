"""Tests for domain records."""

from __future__ import annotations

import dataclasses

import pytest

from escrow_client.domain.enums import TransactionStatus
from escrow_client.domain.exceptions import NotSetError
from escrow_client.domain.models import MAX_BPS, EscrowContext, FeeRates, WriteResult


class TestEscrowContext:
    def test_require_account(self) -> None:
        ctx = EscrowContext(escrow="0xEscrow", account="0xClient")
        assert ctx.require_account() == "0xClient"

    def test_require_account_raises_when_missing(self) -> None:
        with pytest.raises(NotSetError, match="account"):
            EscrowContext(escrow="0xEscrow").require_account()

    def test_is_immutable(self) -> None:
        ctx = EscrowContext(escrow="0xEscrow")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.account = "0xClient"  # type: ignore[misc]


class TestFeeRates:
    def test_defaults_to_contract_max_bps(self) -> None:
        assert FeeRates(coverage_bps=300, claim_bps=500).max_bps == MAX_BPS == 10_000


class TestWriteResult:
    def test_contract_id_defaults_to_none(self) -> None:
        result = WriteResult(transaction_id="0x01", status=TransactionStatus.PENDING)
        assert result.contract_id is None
