"""Escrow calldata codec.

Encoding maps a TransactionIntent to the function name and positional ABI
arguments of the escrow call (and, for ``encode_calldata``, to the full
selector-prefixed payload). Decoding goes the other way: it identifies the
4-byte selector, dispatches to exactly one of the known shapes and converts
base-unit amounts back to human amounts.

Decimals are resolved per call:
    - deposit: from the payment token address inside the calldata
    - approve, refill, resolveDispute: from the intent's token, or the
      environment's canonical token when the calldata carries no address

An unknown selector or an undecodable payload is a DecodeError. There is no
fallback intent.
"""

from __future__ import annotations

from collections.abc import Callable

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import (
    collapse_if_tuple,
    function_abi_to_4byte_selector,
    to_bytes,
    to_checksum_address,
)

from escrow_client.abi import ESCROW_ABI
from escrow_client.codec.amounts import from_base_units, to_base_units
from escrow_client.domain.enums import DepositStatus, DisputeWinner, EscrowFunction, FeeConfig
from escrow_client.domain.exceptions import ConfigurationError, DecodeError
from escrow_client.domain.models import TokenDescriptor
from escrow_client.environment import ContractList
from escrow_client.schemas.intents import (
    ApproveIntent,
    ApproveReturnIntent,
    CancelReturnIntent,
    ClaimIntent,
    CreateDisputeIntent,
    DepositIntent,
    RefillIntent,
    RequestReturnIntent,
    ResolveDisputeIntent,
    SubmitIntent,
    TransactionIntent,
    WithdrawIntent,
)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_FUNCTION_ABIS: dict[str, dict] = {
    entry["name"]: entry
    for entry in ESCROW_ABI
    if entry["type"] == "function" and entry["name"] in {f.value for f in EscrowFunction}
}

_BY_SELECTOR: dict[bytes, dict] = {
    function_abi_to_4byte_selector(entry): entry for entry in _FUNCTION_ABIS.values()
}


def _input_types(function_abi: dict) -> list[str]:
    return [collapse_if_tuple(arg) for arg in function_abi["inputs"]]


def function_selector(function_name: str) -> str:
    """Return the 0x-prefixed 4-byte selector of an escrow function."""
    return "0x" + function_abi_to_4byte_selector(_FUNCTION_ABIS[function_name]).hex()


def _token_for(symbol: str | None, tokens: ContractList) -> TokenDescriptor:
    return tokens.token(symbol) if symbol else tokens.canonical_token()


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def _encode_deposit(intent: DepositIntent, tokens: ContractList) -> tuple:
    token = tokens.token(intent.token)
    return (
        (
            intent.contractor,
            token.address,
            to_base_units(intent.amount, token.decimals),
            to_base_units(intent.amount_to_claim, token.decimals),
            intent.time_lock,
            to_bytes(hexstr=intent.recipient_data),
            int(intent.fee_config),
            int(DepositStatus.PENDING),
        ),
    )


def _encode_deposit_id(intent, tokens: ContractList) -> tuple:
    return (intent.deposit_id,)


def _encode_submit(intent: SubmitIntent, tokens: ContractList) -> tuple:
    return (intent.deposit_id, intent.data, to_bytes(hexstr=intent.salt))


def _encode_approve(intent: ApproveIntent, tokens: ContractList) -> tuple:
    token = _token_for(intent.token, tokens)
    return (
        intent.deposit_id,
        to_base_units(intent.value_approve, token.decimals),
        to_base_units(intent.value_additional, token.decimals),
        intent.recipient or ZERO_ADDRESS,
    )


def _encode_refill(intent: RefillIntent, tokens: ContractList) -> tuple:
    token = _token_for(intent.token, tokens)
    return (intent.deposit_id, to_base_units(intent.value_additional, token.decimals))


def _encode_cancel_return(intent: CancelReturnIntent, tokens: ContractList) -> tuple:
    return (intent.deposit_id, int(intent.status))


def _encode_resolve_dispute(intent: ResolveDisputeIntent, tokens: ContractList) -> tuple:
    token = _token_for(intent.token, tokens)
    return (
        intent.deposit_id,
        int(intent.winner),
        to_base_units(intent.client_amount, token.decimals),
        to_base_units(intent.contractor_amount, token.decimals),
    )


_ENCODERS: dict[str, Callable[..., tuple]] = {
    EscrowFunction.DEPOSIT: _encode_deposit,
    EscrowFunction.WITHDRAW: _encode_deposit_id,
    EscrowFunction.CLAIM: _encode_deposit_id,
    EscrowFunction.SUBMIT: _encode_submit,
    EscrowFunction.APPROVE: _encode_approve,
    EscrowFunction.REFILL: _encode_refill,
    EscrowFunction.REQUEST_RETURN: _encode_deposit_id,
    EscrowFunction.APPROVE_RETURN: _encode_deposit_id,
    EscrowFunction.CANCEL_RETURN: _encode_cancel_return,
    EscrowFunction.CREATE_DISPUTE: _encode_deposit_id,
    EscrowFunction.RESOLVE_DISPUTE: _encode_resolve_dispute,
}


def encode_arguments(intent: TransactionIntent, tokens: ContractList) -> tuple[str, tuple]:
    """Map an intent to ``(function_name, positional ABI arguments)``.

    Raises:
        ConfigurationError: If the intent names a token that is not configured.
    """
    encoder = _ENCODERS[intent.function_name]
    return intent.function_name, encoder(intent, tokens)


def encode_calldata(intent: TransactionIntent, tokens: ContractList) -> str:
    """Encode an intent as 0x-prefixed calldata (selector + arguments)."""
    function_name, args = encode_arguments(intent, tokens)
    function_abi = _FUNCTION_ABIS[function_name]
    payload = function_abi_to_4byte_selector(function_abi) + abi_encode(
        _input_types(function_abi), args
    )
    return "0x" + payload.hex()


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def _decode_deposit(args: tuple, tokens: ContractList) -> DepositIntent:
    contractor, payment_token, amount, amount_to_claim, time_lock, data, fee_config, status = (
        args[0]
    )
    token = tokens.token_by_address(payment_token)
    if token is None:
        raise ConfigurationError(f"token {to_checksum_address(payment_token)}")
    return DepositIntent(
        contractor=contractor,
        token=token.symbol,
        token_address=token.address,
        amount=from_base_units(amount, token.decimals),
        amount_to_claim=from_base_units(amount_to_claim, token.decimals),
        time_lock=time_lock,
        fee_config=FeeConfig(fee_config),
        recipient_data=data,
        status=DepositStatus(status),
    )


def _decode_withdraw(args: tuple, tokens: ContractList) -> WithdrawIntent:
    return WithdrawIntent(deposit_id=args[0])


def _decode_claim(args: tuple, tokens: ContractList) -> ClaimIntent:
    return ClaimIntent(deposit_id=args[0])


def _decode_submit(args: tuple, tokens: ContractList) -> SubmitIntent:
    return SubmitIntent(deposit_id=args[0], data=args[1], salt=args[2])


def _decode_approve(args: tuple, tokens: ContractList) -> ApproveIntent:
    token = tokens.canonical_token()
    deposit_id, value_approve, value_additional, receiver = args
    return ApproveIntent(
        deposit_id=deposit_id,
        value_approve=from_base_units(value_approve, token.decimals),
        value_additional=from_base_units(value_additional, token.decimals),
        recipient=receiver,
        token=token.symbol,
    )


def _decode_refill(args: tuple, tokens: ContractList) -> RefillIntent:
    token = tokens.canonical_token()
    return RefillIntent(
        deposit_id=args[0],
        value_additional=from_base_units(args[1], token.decimals),
        token=token.symbol,
    )


def _decode_request_return(args: tuple, tokens: ContractList) -> RequestReturnIntent:
    return RequestReturnIntent(deposit_id=args[0])


def _decode_approve_return(args: tuple, tokens: ContractList) -> ApproveReturnIntent:
    return ApproveReturnIntent(deposit_id=args[0])


def _decode_cancel_return(args: tuple, tokens: ContractList) -> CancelReturnIntent:
    return CancelReturnIntent(deposit_id=args[0], status=DepositStatus(args[1]))


def _decode_create_dispute(args: tuple, tokens: ContractList) -> CreateDisputeIntent:
    return CreateDisputeIntent(deposit_id=args[0])


def _decode_resolve_dispute(args: tuple, tokens: ContractList) -> ResolveDisputeIntent:
    token = tokens.canonical_token()
    deposit_id, winner, client_amount, contractor_amount = args
    return ResolveDisputeIntent(
        deposit_id=deposit_id,
        winner=DisputeWinner(winner),
        client_amount=from_base_units(client_amount, token.decimals),
        contractor_amount=from_base_units(contractor_amount, token.decimals),
        token=token.symbol,
    )


_DECODERS: dict[str, Callable[[tuple, ContractList], TransactionIntent]] = {
    EscrowFunction.DEPOSIT: _decode_deposit,
    EscrowFunction.WITHDRAW: _decode_withdraw,
    EscrowFunction.CLAIM: _decode_claim,
    EscrowFunction.SUBMIT: _decode_submit,
    EscrowFunction.APPROVE: _decode_approve,
    EscrowFunction.REFILL: _decode_refill,
    EscrowFunction.REQUEST_RETURN: _decode_request_return,
    EscrowFunction.APPROVE_RETURN: _decode_approve_return,
    EscrowFunction.CANCEL_RETURN: _decode_cancel_return,
    EscrowFunction.CREATE_DISPUTE: _decode_create_dispute,
    EscrowFunction.RESOLVE_DISPUTE: _decode_resolve_dispute,
}


def _as_bytes(raw_input: str | bytes) -> bytes:
    if isinstance(raw_input, bytes | bytearray):
        return bytes(raw_input)
    try:
        return to_bytes(hexstr=raw_input)
    except ValueError as exc:
        raise DecodeError(f"input data is not hex: {raw_input[:20]}") from exc


def decode_transaction(raw_input: str | bytes, tokens: ContractList) -> TransactionIntent:
    """Decode escrow calldata into a TransactionIntent.

    Args:
        raw_input: Calldata as 0x-hex or raw bytes.
        tokens: Token table used to resolve decimals.

    Raises:
        DecodeError: If the selector is unknown or the arguments do not decode.
        ConfigurationError: If a deposit names a token that is not configured.
    """
    data = _as_bytes(raw_input)
    if len(data) < 4:
        raise DecodeError()

    function_abi = _BY_SELECTOR.get(data[:4])
    if function_abi is None:
        raise DecodeError(f"no matching function for selector 0x{data[:4].hex()}")

    name = function_abi["name"]
    try:
        args = abi_decode(_input_types(function_abi), data[4:])
    except (DecodingError, EncodingError, ValueError) as exc:
        raise DecodeError(f"cannot decode arguments of {name}: {exc}") from exc

    try:
        return _DECODERS[name](args, tokens)
    except ValueError as exc:
        # Out-of-range enum values; pydantic's ValidationError is a ValueError too
        raise DecodeError(f"invalid arguments of {name}: {exc}") from exc
