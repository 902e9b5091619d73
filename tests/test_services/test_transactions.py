"""Tests for the shared simulate/send/receipt path."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fakes import CLIENT

from escrow_client.abi import ESCROW_ABI
from escrow_client.domain.exceptions import CoreClientError, SimulationError
from escrow_client.services.transactions import fetch_receipt, simulate_and_send


class TestSimulateAndSend:
    @pytest.mark.asyncio
    async def test_returns_hash(self, chain) -> None:
        tx_hash = await simulate_and_send(chain, chain.escrow, ESCROW_ABI, "claim", (1,), CLIENT)
        assert tx_hash in chain.transactions

    @pytest.mark.asyncio
    async def test_simulation_error_passes_through(self, chain) -> None:
        chain.reverts.add("claim")
        with pytest.raises(SimulationError):
            await simulate_and_send(chain, chain.escrow, ESCROW_ABI, "claim", (1,), CLIENT)
        assert chain.sent == []

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self) -> None:
        gateway = MagicMock()
        gateway.simulate_contract = AsyncMock(return_value=MagicMock())
        gateway.send_transaction = AsyncMock(side_effect=RuntimeError("nonce too low"))

        with pytest.raises(CoreClientError, match="nonce too low") as exc_info:
            await simulate_and_send(gateway, "0xEscrow", ESCROW_ABI, "claim", (1,), CLIENT)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestFetchReceipt:
    @pytest.mark.asyncio
    async def test_not_waiting_skips_lookup(self) -> None:
        gateway = MagicMock()
        gateway.wait_for_transaction_receipt = AsyncMock()
        assert await fetch_receipt(gateway, "0x01", wait_for_receipt=False) is None
        gateway.wait_for_transaction_receipt.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_wrapped(self) -> None:
        gateway = MagicMock()
        gateway.wait_for_transaction_receipt = AsyncMock(side_effect=ConnectionResetError("reset"))
        with pytest.raises(CoreClientError, match="receipt of 0x01"):
            await fetch_receipt(gateway, "0x01", wait_for_receipt=True)
