"""Fee Calculator.

Rates are authoritative on-chain state: the coverage and claim fee of an
account are read from the fee manager in basis points. The arithmetic is
done here on base units with integer division, which truncates exactly like
the contract does.

Fee split per FeeConfig:

    config                    deposit fee        claim: client fee   claim: deducted
    CLIENT_COVERS_ALL         coverage + claim   coverage + claim    0
    CLIENT_COVERS_ONLY        coverage           coverage            claim
    CONTRACTOR_COVERS_CLAIM   0                  0                   claim
    NO_FEES                   0                  0                   0
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from escrow_client.abi import FEE_MANAGER_ABI
from escrow_client.codec.amounts import from_base_units, to_base_units
from escrow_client.domain.enums import FeeConfig
from escrow_client.domain.models import ClaimableAmount, DepositAmount, FeeRates
from escrow_client.logging_config import get_logger

if TYPE_CHECKING:
    from escrow_client.domain.chain_protocol import ChainGateway
    from escrow_client.domain.models import EscrowContext
    from escrow_client.environment import ContractList

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Pure arithmetic on base units
# ---------------------------------------------------------------------------


def deposit_fee_bps(rates: FeeRates, fee_config: FeeConfig) -> int:
    """Basis points the client pays on top of a deposit."""
    if fee_config == FeeConfig.CLIENT_COVERS_ALL:
        return rates.coverage_bps + rates.claim_bps
    if fee_config == FeeConfig.CLIENT_COVERS_ONLY:
        return rates.coverage_bps
    return 0


def claim_fee_bps(rates: FeeRates, fee_config: FeeConfig) -> tuple[int, int]:
    """Return ``(client_fee_bps, deducted_bps)`` for a claim."""
    if fee_config == FeeConfig.CLIENT_COVERS_ALL:
        return rates.coverage_bps + rates.claim_bps, 0
    if fee_config == FeeConfig.CLIENT_COVERS_ONLY:
        return rates.coverage_bps, rates.claim_bps
    if fee_config == FeeConfig.CONTRACTOR_COVERS_CLAIM:
        return 0, rates.claim_bps
    return 0, 0


def compute_deposit_units(amount: int, rates: FeeRates, fee_config: FeeConfig) -> tuple[int, int]:
    """Return ``(total_deposit_amount, fee_applied)`` in base units."""
    fee = amount * deposit_fee_bps(rates, fee_config) // rates.max_bps
    return amount + fee, fee


def compute_claimable_units(
    amount: int, rates: FeeRates, fee_config: FeeConfig
) -> tuple[int, int, int]:
    """Return ``(claimable_amount, fee_deducted, client_fee)`` in base units."""
    client_bps, deducted_bps = claim_fee_bps(rates, fee_config)
    fee_deducted = amount * deducted_bps // rates.max_bps
    client_fee = amount * client_bps // rates.max_bps
    return amount - fee_deducted, fee_deducted, client_fee


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class FeeService:
    """Reads fee rates and computes fee-adjusted amounts."""

    def __init__(self, chain: ChainGateway, contracts: ContractList) -> None:
        self._chain = chain
        self._contracts = contracts

    async def fee_rates(self, account: str) -> FeeRates:
        """Read the coverage and claim rates that apply to ``account``."""
        coverage = await self._read("getCoverageFee", (account,), account)
        claim = await self._read("getClaimFee", (account,), account)
        return FeeRates(coverage_bps=int(coverage), claim_bps=int(claim))

    async def compute_deposit_amount_and_fee(
        self,
        ctx: EscrowContext,
        amount: Decimal,
        fee_config: FeeConfig = FeeConfig.CLIENT_COVERS_ONLY,
        token_symbol: str | None = None,
    ) -> DepositAmount:
        """Total the client must deposit for ``amount`` and the fee included in it.

        Raises:
            ConfigurationError: If the token is not configured.
            NotSetError: If the context has no account.
        """
        token = self._token(token_symbol)
        account = ctx.require_account()
        rates = await self.fee_rates(account)
        total, fee = compute_deposit_units(to_base_units(amount, token.decimals), rates, fee_config)
        result = DepositAmount(
            total_deposit_amount=from_base_units(total, token.decimals),
            fee_applied=from_base_units(fee, token.decimals),
        )
        logger.debug(
            "fee.deposit_computed",
            amount=str(amount),
            fee_config=fee_config.name,
            total=str(result.total_deposit_amount),
            fee=str(result.fee_applied),
        )
        return result

    async def compute_claimable_amount_and_fee(
        self,
        ctx: EscrowContext,
        amount: Decimal,
        fee_config: FeeConfig = FeeConfig.CLIENT_COVERS_ONLY,
        token_symbol: str | None = None,
    ) -> ClaimableAmount:
        """What the contractor receives for ``amount`` and the fees on each side."""
        token = self._token(token_symbol)
        account = ctx.require_account()
        rates = await self.fee_rates(account)
        claimable, deducted, client_fee = compute_claimable_units(
            to_base_units(amount, token.decimals), rates, fee_config
        )
        return ClaimableAmount(
            claimable_amount=from_base_units(claimable, token.decimals),
            fee_deducted=from_base_units(deducted, token.decimals),
            client_fee=from_base_units(client_fee, token.decimals),
        )

    async def get_coverage_fee(self, account: str) -> Decimal:
        """Coverage fee of ``account`` in percent (300 bps -> 3)."""
        rates = await self.fee_rates(account)
        return Decimal(rates.coverage_bps) * 100 / Decimal(rates.max_bps)

    async def get_claim_fee(self, account: str) -> Decimal:
        """Claim fee of ``account`` in percent."""
        rates = await self.fee_rates(account)
        return Decimal(rates.claim_bps) * 100 / Decimal(rates.max_bps)

    async def get_max_bps(self) -> Decimal:
        """The fee manager's MAX_BPS expressed in percent (10000 -> 100)."""
        max_bps = await self._read("MAX_BPS", ())
        return Decimal(int(max_bps)) / 100

    def _token(self, symbol: str | None):
        if symbol is None:
            return self._contracts.canonical_token()
        return self._contracts.token(symbol)

    async def _read(self, function_name: str, args: tuple, account: str | None = None):
        return await self._chain.read_contract(
            self._contracts.fee_manager, FEE_MANAGER_ABI, function_name, args, account
        )
