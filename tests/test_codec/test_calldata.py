"""Tests for the escrow calldata codec."""

from __future__ import annotations

from decimal import Decimal

import pytest
from eth_abi import encode as abi_encode
from fakes import CLIENT, CONTRACTOR, STRANGER, ZERO_ADDRESS
from pydantic import ValidationError

from escrow_client.codec.calldata import (
    decode_transaction,
    encode_arguments,
    encode_calldata,
    function_selector,
)
from escrow_client.domain.enums import DepositStatus, DisputeWinner, FeeConfig
from escrow_client.domain.exceptions import ConfigurationError, DecodeError
from escrow_client.schemas.intents import (
    EMPTY_DATA_HASH,
    ApproveIntent,
    CancelReturnIntent,
    ClaimIntent,
    DepositIntent,
    RefillIntent,
    ResolveDisputeIntent,
    SubmitIntent,
    WithdrawIntent,
)

_DEPOSIT_TUPLE = "(address,address,uint256,uint256,uint256,bytes32,uint8,uint8)"


class TestSelectors:
    def test_withdraw_selector(self) -> None:
        # keccak256("withdraw(uint256)")[:4]
        assert function_selector("withdraw") == "0x2e1a7d4d"

    def test_selectors_are_distinct(self) -> None:
        names = ["deposit", "withdraw", "claim", "submit", "approve", "refill"]
        assert len({function_selector(name) for name in names}) == len(names)


class TestEncodeArguments:
    def test_deposit_uses_token_address_and_base_units(self, contracts) -> None:
        intent = DepositIntent(contractor=CONTRACTOR, amount=Decimal("100.5"))
        name, args = encode_arguments(intent, contracts)

        token = contracts.token("MockUSDT")
        assert name == "deposit"
        (record,) = args
        assert record[0] == CONTRACTOR
        assert record[1] == token.address
        assert record[2] == 100_500_000
        assert record[6] == FeeConfig.CLIENT_COVERS_ONLY
        assert record[7] == DepositStatus.PENDING

    def test_approve_without_recipient_sends_zero_address(self, contracts) -> None:
        _, args = encode_arguments(ApproveIntent(deposit_id=4, value_approve=10), contracts)
        assert args == (4, 10_000_000, 0, ZERO_ADDRESS)

    def test_cancel_return_passes_raw_status(self, contracts) -> None:
        intent = CancelReturnIntent(deposit_id=2, status=DepositStatus.SUBMITTED)
        assert encode_arguments(intent, contracts) == ("cancelReturn", (2, 1))

    def test_unknown_token_raises(self, contracts) -> None:
        intent = DepositIntent(contractor=CONTRACTOR, token="DAI", amount=1)
        with pytest.raises(ConfigurationError, match="unsupported token DAI"):
            encode_arguments(intent, contracts)


class TestDecodeTransaction:
    def test_deposit(self, contracts) -> None:
        intent = DepositIntent(
            contractor=CONTRACTOR,
            amount=Decimal("100"),
            amount_to_claim=Decimal("0"),
            time_lock=3600,
            fee_config=FeeConfig.CLIENT_COVERS_ALL,
        )
        decoded = decode_transaction(encode_calldata(intent, contracts), contracts)

        assert isinstance(decoded, DepositIntent)
        assert decoded.contractor == CONTRACTOR
        assert decoded.token == "MockUSDT"
        assert decoded.token_address == contracts.token("MockUSDT").address
        assert decoded.amount == Decimal("100")
        assert decoded.time_lock == 3600
        assert decoded.fee_config is FeeConfig.CLIENT_COVERS_ALL
        assert decoded.recipient_data == EMPTY_DATA_HASH
        assert decoded.status is DepositStatus.PENDING

    def test_submit_keeps_data_and_salt(self, contracts) -> None:
        salt = "0x" + "ab" * 32
        intent = SubmitIntent(deposit_id=9, data=b"ipfs://Qm", salt=salt)
        decoded = decode_transaction(encode_calldata(intent, contracts), contracts)
        assert decoded == intent

    def test_approve_uses_canonical_token(self, contracts) -> None:
        intent = ApproveIntent(
            deposit_id=1, value_approve=Decimal("2.5"), recipient=STRANGER
        )
        decoded = decode_transaction(encode_calldata(intent, contracts), contracts)

        assert isinstance(decoded, ApproveIntent)
        assert decoded.value_approve == Decimal("2.5")
        assert decoded.value_additional == 0
        assert decoded.recipient == STRANGER
        assert decoded.token == "MockUSDT"

    def test_refill(self, contracts) -> None:
        calldata = encode_calldata(RefillIntent(deposit_id=3, value_additional=7), contracts)
        decoded = decode_transaction(calldata, contracts)
        assert decoded == RefillIntent(deposit_id=3, value_additional=Decimal(7), token="MockUSDT")

    def test_accepts_raw_bytes(self, contracts) -> None:
        calldata = encode_calldata(ClaimIntent(deposit_id=12), contracts)
        assert decode_transaction(bytes.fromhex(calldata[2:]), contracts) == ClaimIntent(
            deposit_id=12
        )

    def test_resolve_dispute(self, contracts) -> None:
        calldata = function_selector("resolveDispute") + abi_encode(
            ["uint256", "uint8", "uint256", "uint256"], [5, 2, 40_000_000, 60_000_000]
        ).hex()
        decoded = decode_transaction(calldata, contracts)

        assert isinstance(decoded, ResolveDisputeIntent)
        assert decoded.winner is DisputeWinner.SPLIT
        assert decoded.client_amount == Decimal(40)
        assert decoded.contractor_amount == Decimal(60)

    def test_withdraw(self, contracts) -> None:
        calldata = "0x2e1a7d4d" + abi_encode(["uint256"], [77]).hex()
        assert decode_transaction(calldata, contracts) == WithdrawIntent(deposit_id=77)


class TestDecodeErrors:
    def test_unknown_selector(self, contracts) -> None:
        # ERC-20 transfer(address,uint256)
        calldata = "0xa9059cbb" + abi_encode(["address", "uint256"], [CLIENT, 1]).hex()
        with pytest.raises(DecodeError, match="no matching function"):
            decode_transaction(calldata, contracts)

    def test_too_short(self, contracts) -> None:
        with pytest.raises(DecodeError):
            decode_transaction("0x2e1a", contracts)

    def test_not_hex(self, contracts) -> None:
        with pytest.raises(DecodeError, match="not hex"):
            decode_transaction("0xzz1a7d4d", contracts)

    def test_truncated_arguments(self, contracts) -> None:
        with pytest.raises(DecodeError, match="cannot decode arguments of withdraw"):
            decode_transaction("0x2e1a7d4d01", contracts)

    def test_out_of_range_enum(self, contracts) -> None:
        calldata = function_selector("resolveDispute") + abi_encode(
            ["uint256", "uint8", "uint256", "uint256"], [5, 7, 0, 0]
        ).hex()
        with pytest.raises(DecodeError, match="invalid arguments of resolveDispute"):
            decode_transaction(calldata, contracts)

    def test_deposit_with_unconfigured_token(self, contracts) -> None:
        record = (CONTRACTOR, STRANGER, 1, 0, 0, b"\x00" * 32, 1, 0)
        calldata = function_selector("deposit") + abi_encode([_DEPOSIT_TUPLE], [record]).hex()
        with pytest.raises(ConfigurationError, match="unsupported token"):
            decode_transaction(calldata, contracts)


class TestIntentValidation:
    def test_contractor_must_be_an_address(self) -> None:
        with pytest.raises(ValidationError):
            DepositIntent(contractor="not-an-address", amount=1)

    def test_amount_must_be_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            DepositIntent(contractor=CONTRACTOR, amount=Decimal("-1"))

    def test_salt_must_be_32_bytes(self) -> None:
        with pytest.raises(ValidationError):
            SubmitIntent(deposit_id=1, salt="0x1234")

    def test_addresses_are_checksummed(self) -> None:
        intent = DepositIntent(contractor=CONTRACTOR.lower(), amount=1)
        assert intent.contractor == CONTRACTOR
