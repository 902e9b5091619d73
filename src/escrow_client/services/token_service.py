"""ERC-20 balance and allowance handling for the escrow's payment tokens.

Comparisons are made on base units so that a requirement computed by the
fee calculator is checked exactly, without float rounding.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from escrow_client.abi import ERC20_ABI
from escrow_client.codec.amounts import from_base_units, to_base_units
from escrow_client.codec.events import receipt_status
from escrow_client.domain.enums import TransactionStatus
from escrow_client.domain.exceptions import (
    InsufficientFundsError,
    UnsuccessfulTransactionError,
)
from escrow_client.logging_config import get_logger
from escrow_client.services.transactions import fetch_receipt, simulate_and_send

if TYPE_CHECKING:
    from escrow_client.domain.chain_protocol import ChainGateway
    from escrow_client.domain.models import EscrowContext, TokenDescriptor
    from escrow_client.environment import ContractList

logger = get_logger(__name__)


class TokenService:
    """Reads balances and allowances and approves the escrow as spender."""

    def __init__(self, chain: ChainGateway, contracts: ContractList) -> None:
        self._chain = chain
        self._contracts = contracts

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def token_balance(self, account: str, symbol: str | None = None) -> Decimal:
        """Balance of ``account`` in human units."""
        token = self._token(symbol)
        return from_base_units(await self._balance_units(account, token), token.decimals)

    async def token_allowance(
        self, ctx: EscrowContext, owner: str | None = None, symbol: str | None = None
    ) -> Decimal:
        """How much of ``owner``'s tokens the escrow may spend, in human units."""
        token = self._token(symbol)
        owner = owner or ctx.require_account()
        units = await self._allowance_units(owner, ctx.escrow, token)
        return from_base_units(units, token.decimals)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def token_approve(
        self, ctx: EscrowContext, amount: Decimal, symbol: str | None = None
    ) -> str:
        """Set the escrow's allowance over the account's tokens. Returns the tx hash."""
        token = self._token(symbol)
        account = ctx.require_account()
        return await simulate_and_send(
            self._chain,
            token.address,
            ERC20_ABI,
            "approve",
            (ctx.escrow, to_base_units(amount, token.decimals)),
            account,
        )

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    async def require_balance(self, owner: str, amount: Decimal, symbol: str | None = None) -> None:
        """Raise InsufficientFundsError if ``owner`` holds less than ``amount``."""
        token = self._token(symbol)
        required = to_base_units(amount, token.decimals)
        balance = await self._balance_units(owner, token)
        if balance < required:
            raise InsufficientFundsError(
                what="balance",
                symbol=token.symbol,
                required=str(amount),
                available=str(from_base_units(balance, token.decimals)),
            )

    async def require_allowance(
        self, ctx: EscrowContext, amount: Decimal, symbol: str | None = None
    ) -> str | None:
        """Make sure the escrow may spend ``amount``; approve it if not.

        ERC-20 ``approve`` replaces the allowance rather than adding to it, so
        the approval is for the full required amount. Blocks until the approval
        is mined.

        Returns:
            The approval tx hash, or None if the allowance already sufficed.

        Raises:
            UnsuccessfulTransactionError: If the approval does not succeed.
        """
        token = self._token(symbol)
        owner = ctx.require_account()
        required = to_base_units(amount, token.decimals)
        allowance = await self._allowance_units(owner, ctx.escrow, token)
        if allowance >= required:
            return None

        logger.info(
            "token.approval_required",
            symbol=token.symbol,
            owner=owner,
            allowance=str(from_base_units(allowance, token.decimals)),
            required=str(amount),
        )
        tx_hash = await self.token_approve(ctx, amount, token.symbol)
        receipt = await fetch_receipt(self._chain, tx_hash, wait_for_receipt=True)
        if receipt_status(receipt) != TransactionStatus.SUCCESS:
            raise UnsuccessfulTransactionError(
                f"token approve of {token.symbol} for {amount}", tx_hash=tx_hash
            )
        logger.info("token.approval_confirmed", symbol=token.symbol, tx_hash=tx_hash)
        return tx_hash

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _token(self, symbol: str | None) -> TokenDescriptor:
        if symbol is None:
            return self._contracts.canonical_token()
        return self._contracts.token(symbol)

    async def _balance_units(self, account: str, token: TokenDescriptor) -> int:
        balance = await self._chain.read_contract(
            token.address, ERC20_ABI, "balanceOf", (account,), account
        )
        return int(balance)

    async def _allowance_units(self, owner: str, spender: str, token: TokenDescriptor) -> int:
        allowance = await self._chain.read_contract(
            token.address, ERC20_ABI, "allowance", (owner, spender), owner
        )
        return int(allowance)
