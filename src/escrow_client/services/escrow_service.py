"""Escrow Service: deposit lifecycle controller.

This is the application layer that coordinates between:
    - Domain state machine (status guard)
    - Fee calculator and token preconditions (balance, allowance)
    - Transaction codec (intent <-> calldata, receipt events)
    - Chain gateway (simulate, send, receipts)

Every write follows the same template: precondition checks, simulate, send,
optionally wait for the receipt. Simulation failures raise. A reverted
receipt of the main action does not; it is reported in WriteResult.status.
"""

from __future__ import annotations

import dataclasses
import secrets
from decimal import Decimal
from typing import TYPE_CHECKING

from eth_utils import keccak, to_bytes, to_checksum_address

from escrow_client.abi import ESCROW_ABI
from escrow_client.codec.amounts import from_base_units
from escrow_client.codec.calldata import decode_transaction, encode_arguments
from escrow_client.codec.events import decode_receipt_events, receipt_status
from escrow_client.domain.enums import (
    DepositStatus,
    EscrowEvent,
    FeeConfig,
    TransactionStatus,
)
from escrow_client.domain.exceptions import (
    ConfigurationError,
    MismatchError,
    NotFoundError,
    NotSetError,
)
from escrow_client.domain.models import (
    ClaimableAmount,
    DecodedEvent,
    Deposit,
    DepositAmount,
    TransactionOutcome,
    WriteResult,
)
from escrow_client.domain.state_machine import validate_transition
from escrow_client.logging_config import get_logger
from escrow_client.schemas.intents import (
    ApproveIntent,
    ApproveReturnIntent,
    CancelReturnIntent,
    ClaimIntent,
    DepositIntent,
    RefillIntent,
    RequestReturnIntent,
    SubmitIntent,
    TransactionIntent,
    WithdrawIntent,
)
from escrow_client.services.fee_service import FeeService
from escrow_client.services.token_service import TokenService
from escrow_client.services.transactions import fetch_receipt, simulate_and_send

if TYPE_CHECKING:
    from escrow_client.domain.chain_protocol import ChainGateway
    from escrow_client.domain.models import EscrowContext
    from escrow_client.environment import ContractList

logger = get_logger(__name__)


class EscrowService:
    """Drives the escrow deposit lifecycle against one environment."""

    def __init__(
        self,
        chain: ChainGateway,
        contracts: ContractList,
        fees: FeeService | None = None,
        tokens: TokenService | None = None,
    ) -> None:
        self._chain = chain
        self._contracts = contracts
        self._fees = fees or FeeService(chain, contracts)
        self._tokens = tokens or TokenService(chain, contracts)

    # ------------------------------------------------------------------
    # Fees
    # ------------------------------------------------------------------

    async def compute_deposit_amount_and_fee(
        self,
        ctx: EscrowContext,
        amount: Decimal,
        fee_config: FeeConfig = FeeConfig.CLIENT_COVERS_ONLY,
        token_symbol: str | None = None,
    ) -> DepositAmount:
        return await self._fees.compute_deposit_amount_and_fee(
            ctx, amount, fee_config, token_symbol
        )

    async def compute_claimable_amount_and_fee(
        self,
        ctx: EscrowContext,
        amount: Decimal,
        fee_config: FeeConfig = FeeConfig.CLIENT_COVERS_ONLY,
        token_symbol: str | None = None,
    ) -> ClaimableAmount:
        return await self._fees.compute_claimable_amount_and_fee(
            ctx, amount, fee_config, token_symbol
        )

    # ------------------------------------------------------------------
    # Deposit
    # ------------------------------------------------------------------

    async def deposit(
        self,
        ctx: EscrowContext,
        intent: DepositIntent,
        wait_for_receipt: bool = True,
    ) -> WriteResult:
        """Fund a new deposit.

        Checks the account can cover amount plus fees, approves the escrow
        as spender if needed, then submits the deposit. ``contract_id`` is
        read from the Deposited event once the receipt is known.
        """
        account = ctx.require_account()
        token = self._contracts.token(intent.token)
        required = await self._fees.compute_deposit_amount_and_fee(
            ctx, intent.amount, intent.fee_config, token.symbol
        )
        await self._tokens.require_balance(account, required.total_deposit_amount, token.symbol)
        await self._tokens.require_allowance(ctx, required.total_deposit_amount, token.symbol)

        tx_hash, receipt = await self._execute(ctx, intent, wait_for_receipt)
        contract_id = self._deposited_contract_id(ctx, receipt)
        result = WriteResult(
            transaction_id=tx_hash,
            status=self._status(receipt, wait_for_receipt),
            contract_id=contract_id,
        )
        logger.info(
            "escrow.deposit.submitted",
            tx_hash=tx_hash,
            status=result.status,
            contract_id=contract_id,
            amount=str(intent.amount),
            total=str(required.total_deposit_amount),
        )
        return result

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def submit(
        self,
        ctx: EscrowContext,
        contract_id: int,
        salt: str,
        data: str | bytes = b"",
        wait_for_receipt: bool = True,
    ) -> WriteResult:
        """Contractor submits work for a PENDING deposit."""
        ctx.require_account()
        deposit = await self.get_deposit(ctx, contract_id)
        validate_transition(deposit.status, "submit")

        payload = data.encode("utf-8") if isinstance(data, str) else data
        intent = SubmitIntent(deposit_id=contract_id, data=payload, salt=salt)
        return await self._write(ctx, intent, wait_for_receipt)

    # ------------------------------------------------------------------
    # Approve / refill
    # ------------------------------------------------------------------

    async def approve(
        self,
        ctx: EscrowContext,
        intent: ApproveIntent,
        wait_for_receipt: bool = True,
    ) -> WriteResult:
        """Combined entry point for approving payment and adding funds.

        Routing:
            - both values zero: NotSetError, before any network call
            - ``value_additional > 0``: refill branch (see _approve_with_refill)
            - otherwise: approve_payment
        """
        if intent.value_approve == 0 and intent.value_additional == 0:
            raise NotSetError("value_approve or value_additional")

        if intent.value_additional > 0:
            return await self._approve_with_refill(ctx, intent, wait_for_receipt)
        return await self.approve_payment(
            ctx, intent.deposit_id, intent.value_approve, intent.recipient, wait_for_receipt
        )

    async def approve_payment(
        self,
        ctx: EscrowContext,
        contract_id: int,
        value: Decimal,
        recipient: str | None = None,
        wait_for_receipt: bool = True,
    ) -> WriteResult:
        """Client approves ``value`` of a SUBMITTED (or APPROVED) deposit for claiming."""
        if value == 0:
            raise NotSetError("value_approve")
        ctx.require_account()
        deposit = await self.get_deposit(ctx, contract_id)
        validate_transition(deposit.status, "approve")

        intent = ApproveIntent(
            deposit_id=contract_id,
            value_approve=value,
            recipient=recipient,
            token=deposit.payment_token,
        )
        return await self._write(ctx, intent, wait_for_receipt)

    async def refill(
        self,
        ctx: EscrowContext,
        contract_id: int,
        value: Decimal,
        wait_for_receipt: bool = True,
    ) -> WriteResult:
        """Add ``value`` to a deposit.

        The fee config comes from the on-chain deposit record, never from
        the caller.
        """
        if value == 0:
            raise NotSetError("value_additional")
        account = ctx.require_account()
        deposit = await self.get_deposit(ctx, contract_id)
        required = await self._fees.compute_deposit_amount_and_fee(
            ctx, value, deposit.fee_config, deposit.payment_token
        )
        await self._tokens.require_balance(
            account, required.total_deposit_amount, deposit.payment_token
        )
        await self._tokens.require_allowance(
            ctx, required.total_deposit_amount, deposit.payment_token
        )

        intent = RefillIntent(
            deposit_id=contract_id, value_additional=value, token=deposit.payment_token
        )
        return await self._write(ctx, intent, wait_for_receipt)

    async def _approve_with_refill(
        self,
        ctx: EscrowContext,
        intent: ApproveIntent,
        wait_for_receipt: bool,
    ) -> WriteResult:
        """Refill branch of approve.

        Adds ``value_additional`` through refill. If ``value_approve`` is also
        set, the deposit status is checked for approval before the refill is
        sent, and the payment is approved afterwards unless the refill reverted.
        No approve call is made for the additional value itself.
        """
        if intent.value_approve > 0:
            ctx.require_account()
            deposit = await self.get_deposit(ctx, intent.deposit_id)
            validate_transition(deposit.status, "approve")

        logger.info(
            "escrow.approve.routed_to_refill",
            contract_id=intent.deposit_id,
            value_additional=str(intent.value_additional),
        )
        refilled = await self.refill(
            ctx, intent.deposit_id, intent.value_additional, wait_for_receipt
        )
        if intent.value_approve == 0 or refilled.status == TransactionStatus.REVERTED:
            return refilled
        return await self.approve_payment(
            ctx, intent.deposit_id, intent.value_approve, intent.recipient, wait_for_receipt
        )

    # ------------------------------------------------------------------
    # Claim / withdraw / return requests
    # ------------------------------------------------------------------

    async def claim(
        self, ctx: EscrowContext, contract_id: int, wait_for_receipt: bool = True
    ) -> WriteResult:
        """Contractor claims the approved amount."""
        return await self._write(ctx, ClaimIntent(deposit_id=contract_id), wait_for_receipt)

    async def withdraw(
        self, ctx: EscrowContext, contract_id: int, wait_for_receipt: bool = True
    ) -> WriteResult:
        """Client withdraws what is left of the deposit."""
        return await self._write(ctx, WithdrawIntent(deposit_id=contract_id), wait_for_receipt)

    async def request_return(
        self, ctx: EscrowContext, contract_id: int, wait_for_receipt: bool = True
    ) -> WriteResult:
        return await self._write(
            ctx, RequestReturnIntent(deposit_id=contract_id), wait_for_receipt
        )

    async def approve_return(
        self, ctx: EscrowContext, contract_id: int, wait_for_receipt: bool = True
    ) -> WriteResult:
        return await self._write(
            ctx, ApproveReturnIntent(deposit_id=contract_id), wait_for_receipt
        )

    async def cancel_return(
        self,
        ctx: EscrowContext,
        contract_id: int,
        status: DepositStatus,
        wait_for_receipt: bool = True,
    ) -> WriteResult:
        """Cancel a return request, restoring the deposit to ``status``."""
        return await self._write(
            ctx, CancelReturnIntent(deposit_id=contract_id, status=status), wait_for_receipt
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_deposit(self, ctx: EscrowContext, contract_id: int) -> Deposit:
        """Read a deposit record from the escrow.

        Raises:
            NotFoundError: If the deposit's payment token is not configured.
            MismatchError: If the recorded status is not a known DepositStatus.
        """
        (
            contractor,
            payment_token,
            amount,
            amount_to_claim,
            time_lock,
            contractor_data,
            fee_config,
            status,
        ) = await self._chain.read_contract(
            ctx.escrow, ESCROW_ABI, "deposits", (contract_id,), ctx.account
        )
        token = self._contracts.token_by_address(payment_token)
        if token is None:
            raise NotFoundError(f"token {payment_token} of deposit {contract_id}")
        try:
            deposit_status = DepositStatus(int(status))
            deposit_fee_config = FeeConfig(int(fee_config))
        except ValueError as exc:
            raise MismatchError(f"deposit {contract_id} has unknown state: {exc}") from exc

        return Deposit(
            contractor=to_checksum_address(contractor),
            payment_token=token.symbol,
            amount=from_base_units(amount, token.decimals),
            amount_to_claim=from_base_units(amount_to_claim, token.decimals),
            time_lock=int(time_lock),
            contractor_data=_hex(contractor_data),
            fee_config=deposit_fee_config,
            status=deposit_status,
        )

    async def current_contract_id(self, ctx: EscrowContext) -> int:
        """Id of the most recently created deposit."""
        value = await self._chain.read_contract(
            ctx.escrow, ESCROW_ABI, "getCurrentContractId", (), ctx.account
        )
        return int(value)

    @staticmethod
    def make_salt(value: int | None = None) -> str:
        """Return ``value`` (or 32 random bytes) as a 0x-prefixed bytes32 hex string."""
        if value is None:
            return "0x" + secrets.token_bytes(32).hex()
        if value < 0 or value >= 2**256:
            raise ValueError(f"salt out of bytes32 range: {value}")
        return "0x" + format(value, "064x")

    async def make_data_hash(self, ctx: EscrowContext, data: str, salt: str) -> str:
        """Contractor data hash as computed by the escrow contract."""
        account = ctx.require_account()
        value = await self._chain.read_contract(
            ctx.escrow,
            ESCROW_ABI,
            "getContractorDataHash",
            (data.encode("utf-8"), to_bytes(hexstr=salt)),
            account,
        )
        return _hex(value)

    @staticmethod
    def hash_contractor_data(contractor: str, data: str, salt: str) -> str:
        """keccak256(contractor ++ data ++ salt), packed, computed locally."""
        packed = to_bytes(hexstr=contractor) + data.encode("utf-8") + to_bytes(hexstr=salt)
        return "0x" + keccak(packed).hex()

    # ------------------------------------------------------------------
    # Decoding and lookups
    # ------------------------------------------------------------------

    def decode_transaction(self, raw_input: str | bytes) -> TransactionIntent:
        return decode_transaction(raw_input, self._contracts)

    def decode_receipt_events(
        self, receipt: dict, address: str | None = None
    ) -> list[DecodedEvent]:
        return decode_receipt_events(receipt, address)

    async def transaction_by_hash(
        self, tx_hash: str, wait_for_receipt: bool = False
    ) -> TransactionOutcome:
        """Fetch a transaction and its receipt (if mined).

        The intent and events are not decoded here; see transaction_parse.
        """
        transaction = dict(await self._chain.get_transaction(tx_hash))
        if wait_for_receipt:
            receipt = await fetch_receipt(self._chain, tx_hash, wait_for_receipt=True)
        else:
            receipt = await self._chain.get_transaction_receipt(tx_hash)
        return TransactionOutcome(
            transaction_id=tx_hash,
            status=receipt_status(receipt),
            transaction=transaction,
            receipt=dict(receipt) if receipt is not None else None,
        )

    def transaction_parse(
        self, ctx: EscrowContext, outcome: TransactionOutcome
    ) -> TransactionOutcome:
        """Decode the intent and escrow events of a looked-up transaction.

        Raises:
            MismatchError: If the transaction does not target ``ctx.escrow``.
            DecodeError: If the calldata is not a known escrow call.
        """
        target = outcome.transaction.get("to")
        if not target or str(target).lower() != ctx.escrow.lower():
            raise MismatchError(
                f"transaction {outcome.transaction_id} targets {target}, not escrow {ctx.escrow}"
            )
        raw_input = outcome.transaction.get("input") or outcome.transaction.get("data") or b""
        intent = self.decode_transaction(raw_input)
        events = (
            tuple(decode_receipt_events(outcome.receipt, ctx.escrow))
            if outcome.receipt is not None
            else ()
        )
        return dataclasses.replace(outcome, intent=intent, events=events)

    def parse_amount(self, token_address: str, amount: int) -> tuple[str, Decimal]:
        """Resolve a base-unit amount of ``token_address`` to (symbol, human amount).

        Raises:
            ConfigurationError: If the token is not configured.
        """
        token = self._contracts.token_by_address(token_address)
        if token is None:
            raise ConfigurationError(f"token {token_address}")
        return token.symbol, from_base_units(amount, token.decimals)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _execute(
        self, ctx: EscrowContext, intent: TransactionIntent, wait_for_receipt: bool
    ) -> tuple[str, dict | None]:
        account = ctx.require_account()
        function_name, args = encode_arguments(intent, self._contracts)
        tx_hash = await simulate_and_send(
            self._chain, ctx.escrow, ESCROW_ABI, function_name, args, account
        )
        receipt = await fetch_receipt(self._chain, tx_hash, wait_for_receipt)
        return tx_hash, receipt

    async def _write(
        self, ctx: EscrowContext, intent: TransactionIntent, wait_for_receipt: bool
    ) -> WriteResult:
        tx_hash, receipt = await self._execute(ctx, intent, wait_for_receipt)
        result = WriteResult(
            transaction_id=tx_hash, status=self._status(receipt, wait_for_receipt)
        )
        logger.info(
            f"escrow.{intent.function_name}.submitted",
            contract_id=intent.deposit_id,
            tx_hash=tx_hash,
            status=result.status,
        )
        return result

    @staticmethod
    def _status(receipt: dict | None, wait_for_receipt: bool) -> TransactionStatus:
        if not wait_for_receipt:
            return TransactionStatus.PENDING
        return receipt_status(receipt)

    @staticmethod
    def _deposited_contract_id(ctx: EscrowContext, receipt: dict | None) -> int | None:
        if receipt is None:
            return None
        for event in decode_receipt_events(receipt, ctx.escrow):
            if event.event_name == EscrowEvent.DEPOSITED:
                return int(event.args["contractId"])
        return None


def _hex(value: bytes | str) -> str:
    if isinstance(value, bytes | bytearray):
        return "0x" + bytes(value).hex()
    return value if value.startswith("0x") else "0x" + value
