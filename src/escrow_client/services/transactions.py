"""Shared write path: simulate, send, optionally wait for the receipt.

Simulation failures surface as SimulationError from the gateway and pass
through unchanged. Anything else a collaborator raises is wrapped in
CoreClientError so callers only ever see EscrowClientError subclasses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from escrow_client.domain.exceptions import CoreClientError, EscrowClientError
from escrow_client.logging_config import get_logger

if TYPE_CHECKING:
    from escrow_client.domain.chain_protocol import ChainGateway

logger = get_logger(__name__)


async def simulate_and_send(
    chain: ChainGateway,
    address: str,
    abi: list[dict],
    function_name: str,
    args: tuple,
    account: str,
) -> str:
    """Simulate a contract call and submit it. Returns the transaction hash.

    Raises:
        SimulationError: If the call would revert.
        CoreClientError: If the gateway fails for any other reason.
    """
    try:
        prepared = await chain.simulate_contract(address, abi, function_name, args, account)
        tx_hash = await chain.send_transaction(prepared)
    except EscrowClientError:
        raise
    except Exception as exc:
        logger.error("tx.send_failed", function=function_name, address=address, error=str(exc))
        raise CoreClientError(f"{function_name} on {address}: {exc}") from exc

    logger.info("tx.sent", function=function_name, address=address, tx_hash=tx_hash)
    return tx_hash


async def fetch_receipt(chain: ChainGateway, tx_hash: str, wait_for_receipt: bool) -> dict | None:
    """Wait for the receipt of a submitted transaction.

    Returns None when not waiting, or when the wait timed out.

    Raises:
        CoreClientError: If the lookup keeps failing after the gateway's retries.
    """
    if not wait_for_receipt:
        return None
    try:
        receipt = await chain.wait_for_transaction_receipt(tx_hash)
    except EscrowClientError:
        raise
    except Exception as exc:
        raise CoreClientError(f"receipt of {tx_hash}: {exc}") from exc
    if receipt is None:
        logger.warning("tx.receipt_timeout", tx_hash=tx_hash)
    return receipt
