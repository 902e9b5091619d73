"""Client entry point: wires settings, environment tables and services together.

Usage:
    client = EscrowClient.build_by_environment("local", private_key="0x...")
    await client.connect()
    ctx = client.context()
    result = await client.escrow.deposit(ctx, DepositIntent(contractor=..., amount=100))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from escrow_client.config import get_settings
from escrow_client.domain.exceptions import MismatchError
from escrow_client.domain.models import EscrowContext
from escrow_client.environment import contract_list
from escrow_client.infrastructure.web3_gateway import Web3Gateway
from escrow_client.logging_config import get_logger
from escrow_client.services.escrow_service import EscrowService
from escrow_client.services.fee_service import FeeService
from escrow_client.services.token_service import TokenService

if TYPE_CHECKING:
    from escrow_client.domain.chain_protocol import ChainGateway
    from escrow_client.environment import ContractList

logger = get_logger(__name__)


class EscrowClient:
    """Services bound to one environment and one chain gateway."""

    def __init__(
        self,
        chain: ChainGateway,
        contracts: ContractList,
        account: str | None = None,
    ) -> None:
        self.chain = chain
        self.contracts = contracts
        self.account = account
        self.fees = FeeService(chain, contracts)
        self.tokens = TokenService(chain, contracts)
        self.escrow = EscrowService(chain, contracts, fees=self.fees, tokens=self.tokens)

    @classmethod
    def build_by_environment(
        cls,
        name: str | None = None,
        private_key: str | None = None,
        rpc_url: str | None = None,
        account: str | None = None,
    ) -> EscrowClient:
        """Build a web3-backed client for a named environment.

        Arguments left unset fall back to the ESCROW_* settings, and the RPC
        URL finally to the environment's public endpoint.

        Raises:
            ConfigurationError: If the environment is unknown or not deployed.
        """
        settings = get_settings()
        contracts = contract_list(name or settings.environment)
        if private_key is None and settings.private_key is not None:
            private_key = settings.private_key.get_secret_value()
        gateway = Web3Gateway.from_rpc(
            rpc_url or settings.rpc_url or contracts.rpc_url, private_key
        )
        return cls(gateway, contracts, account=account or gateway.signer_address)

    async def connect(self) -> int:
        """Check the provider serves the environment's chain. Returns the chain id.

        Raises:
            MismatchError: If the provider reports a different chain id.
        """
        provider_chain_id = await self.chain.chain_id()
        if provider_chain_id != self.contracts.chain_id:
            raise MismatchError(
                f"chain id {provider_chain_id} of provider, expected {self.contracts.chain_id} "
                f"for {self.contracts.environment}"
            )
        logger.info(
            "client.connected",
            environment=self.contracts.environment,
            chain=self.contracts.chain_name,
            chain_id=provider_chain_id,
        )
        return provider_chain_id

    def context(self, escrow: str | None = None, account: str | None = None) -> EscrowContext:
        """Bind an escrow address and signing account for a sequence of calls."""
        return EscrowContext(
            escrow=escrow or self.contracts.escrow,
            account=account or self.account,
        )

    async def block_number(self) -> int:
        return await self.chain.block_number()

    def transaction_url(self, tx_hash: str) -> str:
        return f"{self.contracts.block_explorer}/tx/{tx_hash}"

    def account_url(self, address: str) -> str:
        return f"{self.contracts.block_explorer}/address/{address}"
