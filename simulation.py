#!/usr/bin/env python3
"""Escrow Client — End-to-End Simulation against a local node.

Walks two bots through the deposit lifecycle on the "local" environment
(a Hardhat/Anvil node with the escrow deployed at the addresses listed in
escrow_client/environment.py):

    Scenario 1: Happy Path
        - Contractor commits to a data hash
        - Client deposits 100 MockUSDT (approving the escrow first)
        - Contractor submits the data and salt -> SUBMITTED
        - Client approves 100 -> APPROVED
        - Contractor claims

    Scenario 2: Approve with Refill
        - Client deposits 50, contractor submits
        - Client calls approve with value_additional=25: routed to refill,
          then approves 75

    Scenario 3: Withdraw
        - Client deposits 10 and withdraws it before anything is submitted

Usage:
    # Start a local node with the contracts deployed, then:
    uv run python simulation.py
    uv run python simulation.py --scenario 2
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from decimal import Decimal

# ---------------------------------------------------------------------------
# Configure structured logging BEFORE importing app modules
# ---------------------------------------------------------------------------
from escrow_client.logging_config import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False)
logger = get_logger("simulation")

from escrow_client.client import EscrowClient  # noqa: E402
from escrow_client.domain.models import WriteResult  # noqa: E402
from escrow_client.schemas.intents import ApproveIntent, DepositIntent  # noqa: E402

# Well-known development keys of Hardhat/Anvil accounts #0 and #1
CLIENT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
CONTRACTOR_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"


# ---------------------------------------------------------------------------
# Bot Agents
# ---------------------------------------------------------------------------
@dataclass
class ClientBot:
    """Simulated client that funds and approves deposits."""

    client: EscrowClient

    async def deposit(self, contractor: str, amount: Decimal, data_hash: str) -> int:
        ctx = self.client.context()
        quote = await self.client.escrow.compute_deposit_amount_and_fee(ctx, amount)
        logger.info(
            "CLIENT: Depositing",
            amount=str(amount),
            total=str(quote.total_deposit_amount),
            fee=str(quote.fee_applied),
        )
        result = await self.client.escrow.deposit(
            ctx,
            DepositIntent(contractor=contractor, amount=amount, recipient_data=data_hash),
        )
        print_result("deposit", self.client, result)
        if result.contract_id is None:
            raise RuntimeError(f"deposit {result.transaction_id} emitted no Deposited event")
        return result.contract_id

    async def approve(
        self, contract_id: int, value: Decimal, additional: Decimal = Decimal(0)
    ) -> None:
        result = await self.client.escrow.approve(
            self.client.context(),
            ApproveIntent(deposit_id=contract_id, value_approve=value, value_additional=additional),
        )
        print_result("approve", self.client, result)

    async def withdraw(self, contract_id: int) -> None:
        result = await self.client.escrow.withdraw(self.client.context(), contract_id)
        print_result("withdraw", self.client, result)


@dataclass
class ContractorBot:
    """Simulated contractor that commits to work, submits it and claims."""

    client: EscrowClient
    data: str = "ipfs://QmSimulatedDeliverable"

    def __post_init__(self) -> None:
        self.salt = self.client.escrow.make_salt()

    @property
    def address(self) -> str:
        return self.client.context().require_account()

    async def commitment(self) -> str:
        return await self.client.escrow.make_data_hash(self.client.context(), self.data, self.salt)

    async def submit(self, contract_id: int) -> None:
        result = await self.client.escrow.submit(
            self.client.context(), contract_id, self.salt, self.data
        )
        print_result("submit", self.client, result)

    async def claim(self, contract_id: int) -> None:
        result = await self.client.escrow.claim(self.client.context(), contract_id)
        print_result("claim", self.client, result)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------
def section(title: str) -> None:
    print(f"\n{'=' * 70}\n  {title}\n{'=' * 70}")


def print_result(action: str, client: EscrowClient, result: WriteResult) -> None:
    print(f"  {action:<10} {result.status:<9} {client.transaction_url(result.transaction_id)}")


async def print_deposit(client: EscrowClient, contract_id: int) -> None:
    deposit = await client.escrow.get_deposit(client.context(), contract_id)
    print(
        f"  deposit #{contract_id}: status={deposit.status.name} amount={deposit.amount} "
        f"to_claim={deposit.amount_to_claim} {deposit.payment_token}"
    )


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------
async def scenario_1_happy_path(client_bot: ClientBot, contractor_bot: ContractorBot) -> None:
    section("Scenario 1: Happy Path")
    contract_id = await client_bot.deposit(
        contractor_bot.address, Decimal(100), await contractor_bot.commitment()
    )
    await contractor_bot.submit(contract_id)
    await client_bot.approve(contract_id, Decimal(100))
    await print_deposit(client_bot.client, contract_id)
    await contractor_bot.claim(contract_id)
    await print_deposit(client_bot.client, contract_id)


async def scenario_2_refill(client_bot: ClientBot, contractor_bot: ContractorBot) -> None:
    section("Scenario 2: Approve with Refill")
    contract_id = await client_bot.deposit(
        contractor_bot.address, Decimal(50), await contractor_bot.commitment()
    )
    await contractor_bot.submit(contract_id)
    await client_bot.approve(contract_id, Decimal(75), additional=Decimal(25))
    await print_deposit(client_bot.client, contract_id)


async def scenario_3_withdraw(client_bot: ClientBot, contractor_bot: ContractorBot) -> None:
    section("Scenario 3: Withdraw")
    contract_id = await client_bot.deposit(
        contractor_bot.address, Decimal(10), await contractor_bot.commitment()
    )
    await client_bot.withdraw(contract_id)
    await print_deposit(client_bot.client, contract_id)


SCENARIOS = {
    1: scenario_1_happy_path,
    2: scenario_2_refill,
    3: scenario_3_withdraw,
}


# ===========================================================================
# Main
# ===========================================================================
async def run(scenario: int = 0, rpc_url: str | None = None) -> None:
    client_side = EscrowClient.build_by_environment("local", CLIENT_KEY, rpc_url)
    contractor_side = EscrowClient.build_by_environment("local", CONTRACTOR_KEY, rpc_url)
    await client_side.connect()

    client_bot = ClientBot(client_side)
    contractor_bot = ContractorBot(contractor_side)

    if scenario == 0:
        for run_scenario in SCENARIOS.values():
            await run_scenario(client_bot, contractor_bot)
    elif scenario in SCENARIOS:
        await SCENARIOS[scenario](client_bot, contractor_bot)
    else:
        print(f"Unknown scenario {scenario}. Available: 1, 2, 3")
        return

    print("\n" + "=" * 70)
    print(f"  ALL SCENARIOS COMPLETED (block {await client_side.block_number()})")
    print("=" * 70 + "\n")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Escrow Client Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        help="Run a specific scenario (1, 2, or 3). Default: run all.",
    )
    parser.add_argument(
        "--rpc-url",
        default=None,
        help="RPC endpoint of the local node. Default: ESCROW_RPC_URL or http://127.0.0.1:8545.",
    )
    args = parser.parse_args()
    asyncio.run(run(scenario=args.scenario, rpc_url=args.rpc_url))
