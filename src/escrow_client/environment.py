"""Static chain, contract and token tables per deployment environment.

Each environment is deployed on exactly one chain. ``contract_list`` resolves
an environment name (and optionally the chain id the provider reports) to
the addresses the client talks to.
"""

from __future__ import annotations

from dataclasses import dataclass

from escrow_client.domain.exceptions import ConfigurationError
from escrow_client.domain.models import TokenDescriptor

DEFAULT_TOKEN_SYMBOL = "MockUSDT"


@dataclass(frozen=True)
class ContractList:
    """Addresses and tokens for one environment on one chain."""

    environment: str
    chain_id: int
    chain_name: str
    contracts: dict[str, str]
    tokens: dict[str, TokenDescriptor]
    block_explorer: str = "http://localhost"
    rpc_url: str = "http://127.0.0.1:8545"
    default_token_symbol: str = DEFAULT_TOKEN_SYMBOL

    @property
    def escrow(self) -> str:
        return self._contract("ESCROW")

    @property
    def fee_manager(self) -> str:
        return self._contract("FEE_MANAGER")

    def token(self, symbol: str) -> TokenDescriptor:
        """Look up a token by symbol.

        Raises:
            ConfigurationError: If the symbol is not configured here.
        """
        descriptor = self.tokens.get(symbol)
        if descriptor is None:
            raise ConfigurationError(f"token {symbol}")
        return descriptor

    def token_by_address(self, address: str) -> TokenDescriptor | None:
        wanted = address.lower()
        for descriptor in self.tokens.values():
            if descriptor.address.lower() == wanted:
                return descriptor
        return None

    def canonical_token(self) -> TokenDescriptor:
        """The token assumed for calldata that carries no token address."""
        if self.default_token_symbol in self.tokens:
            return self.tokens[self.default_token_symbol]
        if not self.tokens:
            raise ConfigurationError(f"token list of {self.environment}")
        return next(iter(self.tokens.values()))

    def _contract(self, name: str) -> str:
        address = self.contracts.get(name)
        if address is None:
            raise ConfigurationError(f"contract {name} on {self.chain_name}")
        return address


def _tokens(*descriptors: TokenDescriptor) -> dict[str, TokenDescriptor]:
    return {d.symbol: d for d in descriptors}


ENVIRONMENTS: dict[str, dict[int, ContractList]] = {
    "local": {
        31337: ContractList(
            environment="local",
            chain_id=31337,
            chain_name="Localhost",
            contracts={
                "ESCROW": "0xD8038Fae596CDC13cC9b3681A6Eb44cC1984D670",
                "REGISTRY": "0xB536cc39702CE1103E12d6fBC3199cFC32d714f3",
                "FACTORY": "0xeaD5265B6412103d316b6389c0c15EBA82a0cbDa",
                "FEE_MANAGER": "0xA4857B1178425cfaaaeedBcFc220F242b4A518fA",
            },
            tokens=_tokens(
                TokenDescriptor("MockUSDT", "0x5FbDB2315678afecb367f032d93F642f64180aa3", 6),
            ),
        ),
    },
    "test": {
        11_155_111: ContractList(
            environment="test",
            chain_id=11_155_111,
            chain_name="Sepolia",
            contracts={
                "ESCROW": "0xB3A88448768aa314bAdbE43A5d394B1B8Ef2db1b",
                "REGISTRY": "0x928D26474d15855c697F47A64f8877b228920d59",
                "FACTORY": "0xE5552A5830cd05a3f19553A8879582C33E9E46D8",
                "FEE_MANAGER": "0x617247BCcDB41F55AdbE31234b2a8aC273b57c35",
            },
            tokens=_tokens(
                TokenDescriptor("MockUSDT", "0xa801061f49970Ef796e0fD0998348f3436ccCb1d", 6),
            ),
            block_explorer="https://sepolia.etherscan.io",
            rpc_url="https://rpc.sepolia.org",
        ),
    },
    "beta": {
        168_587_773: ContractList(
            environment="beta",
            chain_id=168_587_773,
            chain_name="BlastSepolia",
            contracts={
                "ESCROW": "0x6ff9DFae2ca36CCd06f30Fb272bCcb2A88848568",
                "REGISTRY": "0xcda8DF73fFA90c151879F0E5A46B2ad659502C73",
                "FACTORY": "0xE732a3625499885cE800f795A076C6Daf69e9E3d",
                "FEE_MANAGER": "0xA4857B1178425cfaaaeedBcFc220F242b4A518fA",
            },
            tokens=_tokens(
                TokenDescriptor("USDT", "0x6593f0D49BB695098358cAcE2Db325610daa3830", 18),
            ),
            block_explorer="https://testnet.blastscan.io",
            rpc_url="https://sepolia.blast.io",
            default_token_symbol="USDT",
        ),
    },
    "beta2": {
        80_002: ContractList(
            environment="beta2",
            chain_id=80_002,
            chain_name="PolygonAmoy",
            contracts={
                "ESCROW": "0x2B87991A32f258ac73CEF4Cd66eF06bEC8A89D21",
                "REGISTRY": "0xf2f8bb2549313Ca95D4cE688C76b713e2D31E4E7",
                "FACTORY": "0x704760EA333633DD875aA327c9e6cFba7b3bDA4a",
                "FEE_MANAGER": "0xbE1B323b557bA23ca0Ed0B56fAFEFdf7cA978dA4",
            },
            tokens=_tokens(
                TokenDescriptor("MockUSDT", "0xD19AC10fE911d913Eb0B731925d3a69c80Bd6643", 6),
            ),
            block_explorer="https://amoy.polygonscan.com",
            rpc_url="https://rpc-amoy.polygon.technology",
        ),
    },
    # Not deployed yet
    "prod": {},
}


def environment_by_name(name: str) -> dict[int, ContractList]:
    """Return the chain table of an environment.

    Raises:
        ConfigurationError: If the environment is unknown or has no deployment.
    """
    chains = ENVIRONMENTS.get(name)
    if not chains:
        raise ConfigurationError(f"environment {name}")
    return chains


def contract_list(name: str, chain_id: int | None = None) -> ContractList:
    """Resolve the contract list of an environment.

    Args:
        name: Environment name (local, test, beta, beta2, prod).
        chain_id: Expected chain id. Defaults to the environment's only chain.

    Raises:
        ConfigurationError: If the environment or chain id is not supported.
    """
    chains = environment_by_name(name)
    if chain_id is None:
        return next(iter(chains.values()))
    contracts = chains.get(chain_id)
    if contracts is None:
        raise ConfigurationError(f"chain id {chain_id}")
    return contracts
