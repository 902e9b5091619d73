"""Tests for the environment contract tables."""

from __future__ import annotations

import pytest

from escrow_client.domain.exceptions import ConfigurationError
from escrow_client.environment import ENVIRONMENTS, contract_list, environment_by_name


class TestContractList:
    def test_local(self) -> None:
        contracts = contract_list("local")
        assert contracts.chain_id == 31337
        assert contracts.escrow == "0xD8038Fae596CDC13cC9b3681A6Eb44cC1984D670"
        assert contracts.fee_manager == "0xA4857B1178425cfaaaeedBcFc220F242b4A518fA"

    def test_each_deployed_environment_has_one_chain(self) -> None:
        for name, chains in ENVIRONMENTS.items():
            if chains:
                assert len(chains) == 1, name

    @pytest.mark.parametrize(
        ("name", "chain_id"),
        [("test", 11_155_111), ("beta", 168_587_773), ("beta2", 80_002)],
    )
    def test_explicit_chain_id(self, name: str, chain_id: int) -> None:
        assert contract_list(name, chain_id).chain_id == chain_id

    def test_wrong_chain_id(self) -> None:
        with pytest.raises(ConfigurationError, match="unsupported chain id 1"):
            contract_list("test", 1)

    def test_prod_is_not_deployed(self) -> None:
        with pytest.raises(ConfigurationError, match="environment prod"):
            environment_by_name("prod")

    def test_unknown_environment(self) -> None:
        with pytest.raises(ConfigurationError):
            contract_list("staging")

    def test_missing_contract(self) -> None:
        contracts = contract_list("local")
        with pytest.raises(ConfigurationError, match="contract MISSING"):
            contracts._contract("MISSING")


class TestTokens:
    def test_token_by_symbol(self) -> None:
        token = contract_list("test").token("MockUSDT")
        assert token.decimals == 6

    def test_unknown_symbol(self) -> None:
        with pytest.raises(ConfigurationError, match="unsupported token DAI"):
            contract_list("test").token("DAI")

    def test_token_by_address_ignores_case(self) -> None:
        contracts = contract_list("beta")
        token = contracts.token_by_address("0x6593f0d49bb695098358cace2db325610daa3830")
        assert token is not None
        assert token.symbol == "USDT"
        assert token.decimals == 18

    def test_token_by_unknown_address(self) -> None:
        assert contract_list("local").token_by_address("0x" + "00" * 20) is None

    def test_canonical_token(self) -> None:
        assert contract_list("local").canonical_token().symbol == "MockUSDT"
        assert contract_list("beta").canonical_token().symbol == "USDT"
