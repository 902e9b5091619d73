"""Tests for the ChainGateway protocol and its implementations."""

from __future__ import annotations

import inspect
from pathlib import Path

from fakes import FakeEscrowChain

from escrow_client.domain.chain_protocol import ChainGateway

_REPO_ROOT = Path(__file__).resolve().parents[2]


class TestImplementations:
    def test_fake_chain_satisfies_protocol(self, contracts) -> None:
        assert isinstance(FakeEscrowChain(contracts), ChainGateway)

    def test_fake_chain_methods_are_async(self, contracts) -> None:
        chain = FakeEscrowChain(contracts)
        for name in ("read_contract", "simulate_contract", "send_transaction", "get_transaction"):
            assert inspect.iscoroutinefunction(getattr(chain, name)), name

    def test_listed_implementations_exist(self) -> None:
        listed = [
            line.split()[1]
            for line in ChainGateway.__doc__.splitlines()
            if line.strip().startswith("- ")
        ]
        assert listed
        for path in listed:
            candidates = [_REPO_ROOT / path, _REPO_ROOT / "src" / "escrow_client" / path]
            assert any(candidate.exists() for candidate in candidates), path
