"""ChainGateway backed by web3.py (AsyncWeb3).

Writes are simulated with ``estimate_gas`` (which executes the call and
raises ContractLogicError on revert), priced with an EIP-1559 fee derived
from the latest base fee, and either signed locally with an eth-account key
or handed to the node for signing.

Read-only receipt and transaction lookups retry transient transport errors
(OSError: connection resets, timeouts) with exponential backoff. A
transaction the node does not know yet is not an error: the receipt lookup
returns None.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from eth_account import Account
from eth_utils import to_checksum_address, to_hex
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ContractLogicError, TimeExhausted, TransactionNotFound

from escrow_client.config import get_settings
from escrow_client.domain.chain_protocol import PreparedCall
from escrow_client.domain.exceptions import NotFoundError, SimulationError
from escrow_client.logging_config import get_logger

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount

logger = get_logger(__name__)


class Web3Gateway:
    """Chain access through an AsyncWeb3 instance."""

    def __init__(
        self,
        w3: AsyncWeb3,
        signer: LocalAccount | None = None,
        receipt_timeout: float = 120,
        gas_buffer_percent: int = 30,
        max_priority_fee_wei: int = 40 * 10**9,
        lookup_retry_attempts: int = 3,
    ) -> None:
        self._w3 = w3
        self._signer = signer
        self._receipt_timeout = receipt_timeout
        self._gas_buffer_percent = gas_buffer_percent
        self._max_priority_fee_wei = max_priority_fee_wei
        self._lookup_retry_attempts = lookup_retry_attempts

    @classmethod
    def from_rpc(cls, rpc_url: str, private_key: str | None = None) -> Web3Gateway:
        """Build a gateway for an HTTP RPC endpoint using the global settings."""
        settings = get_settings()
        signer = Account.from_key(private_key) if private_key else None
        return cls(
            AsyncWeb3(AsyncHTTPProvider(rpc_url)),
            signer=signer,
            receipt_timeout=settings.receipt_timeout_seconds,
            gas_buffer_percent=settings.gas_buffer_percent,
            max_priority_fee_wei=settings.max_priority_fee_wei,
            lookup_retry_attempts=settings.lookup_retry_attempts,
        )

    @property
    def signer_address(self) -> str | None:
        return self._signer.address if self._signer else None

    # ------------------------------------------------------------------
    # Chain state
    # ------------------------------------------------------------------

    async def chain_id(self) -> int:
        return int(await self._w3.eth.chain_id)

    async def block_number(self) -> int:
        return int(await self._w3.eth.block_number)

    # ------------------------------------------------------------------
    # Contract calls
    # ------------------------------------------------------------------

    async def read_contract(
        self,
        address: str,
        abi: list[dict],
        function_name: str,
        args: tuple = (),
        account: str | None = None,
    ) -> Any:
        function = self._function(address, abi, function_name, args)
        params = {"from": to_checksum_address(account)} if account else {}
        return await function.call(params)

    async def simulate_contract(
        self,
        address: str,
        abi: list[dict],
        function_name: str,
        args: tuple,
        account: str,
    ) -> PreparedCall:
        sender = to_checksum_address(account)
        function = self._function(address, abi, function_name, args)
        try:
            gas = await function.estimate_gas({"from": sender})
        except ContractLogicError as exc:
            reason = getattr(exc, "message", None) or str(exc)
            logger.warning("chain.simulation_reverted", function=function_name, reason=reason)
            raise SimulationError(function_name, reason) from exc

        params: dict[str, Any] = {
            "from": sender,
            "gas": gas * (100 + self._gas_buffer_percent) // 100,
        }
        params.update(await self._fee_params())
        request = await function.build_transaction(params)
        return PreparedCall(
            address=to_checksum_address(address),
            function_name=function_name,
            args=tuple(args),
            account=sender,
            request=dict(request),
        )

    async def send_transaction(self, prepared: PreparedCall) -> str:
        tx = dict(prepared.request)
        if self._signer is not None and self._signer.address.lower() == prepared.account.lower():
            tx["nonce"] = await self._w3.eth.get_transaction_count(self._signer.address, "pending")
            signed = self._signer.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            # Node-managed account (e.g. an unlocked dev node account)
            tx_hash = await self._w3.eth.send_transaction(tx)
        return to_hex(tx_hash)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_transaction_receipt(self, tx_hash: str) -> dict | None:
        try:
            receipt = await self._lookup(self._w3.eth.get_transaction_receipt, tx_hash)
        except TransactionNotFound:
            return None
        return dict(receipt)

    async def wait_for_transaction_receipt(self, tx_hash: str) -> dict | None:
        try:
            receipt = await self._lookup(
                self._w3.eth.wait_for_transaction_receipt, tx_hash, self._receipt_timeout
            )
        except TimeExhausted:
            return None
        return dict(receipt)

    async def get_transaction(self, tx_hash: str) -> dict:
        try:
            transaction = await self._lookup(self._w3.eth.get_transaction, tx_hash)
        except TransactionNotFound as exc:
            raise NotFoundError(f"transaction {tx_hash}") from exc
        return dict(transaction)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _function(self, address: str, abi: list[dict], function_name: str, args: tuple):
        contract = self._w3.eth.contract(address=to_checksum_address(address), abi=abi)
        return getattr(contract.functions, function_name)(*args)

    async def _fee_params(self) -> dict[str, int]:
        block = await self._w3.eth.get_block("latest")
        base_fee = block.get("baseFeePerGas")
        if base_fee is None:
            # Pre-London chain
            return {"gasPrice": int(await self._w3.eth.gas_price)}
        return {
            "maxPriorityFeePerGas": self._max_priority_fee_wei,
            "maxFeePerGas": 2 * int(base_fee) + self._max_priority_fee_wei,
        }

    async def _lookup(self, method, *args):
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._lookup_retry_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        ):
            with attempt:
                return await method(*args)
