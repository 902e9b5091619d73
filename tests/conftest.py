"""Shared test fixtures for the escrow client test suite.

Provides:
    - The local environment's contract list
    - A FakeEscrowChain (see fakes.py) and an EscrowService wired to it
    - Client and contractor contexts
"""

from __future__ import annotations

import pytest
from fakes import CLIENT, CONTRACTOR, FakeEscrowChain, encode_log

from escrow_client.domain.models import EscrowContext
from escrow_client.environment import ContractList, contract_list
from escrow_client.services.escrow_service import EscrowService

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def contracts() -> ContractList:
    """Contract list of the local development environment."""
    return contract_list("local")


@pytest.fixture
def chain(contracts: ContractList) -> FakeEscrowChain:
    return FakeEscrowChain(contracts)


@pytest.fixture
def service(chain: FakeEscrowChain, contracts: ContractList) -> EscrowService:
    return EscrowService(chain, contracts)


@pytest.fixture
def client_ctx(contracts: ContractList) -> EscrowContext:
    return EscrowContext(escrow=contracts.escrow, account=CLIENT)


@pytest.fixture
def contractor_ctx(contracts: ContractList) -> EscrowContext:
    return EscrowContext(escrow=contracts.escrow, account=CONTRACTOR)


@pytest.fixture
def make_log():
    """Return the receipt log builder."""
    return encode_log
