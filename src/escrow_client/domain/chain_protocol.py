"""Chain Gateway Protocol.

The interface the client needs from a blockchain access library. It is a
Protocol (structural subtyping) so the web3.py gateway and the in-memory
test chain only need to match the shape.

The domain layer has ZERO imports from web3 or any RPC transport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class PreparedCall:
    """A contract call that passed simulation and can be sent.

    Attributes:
        address: Target contract.
        function_name: ABI function name.
        args: Positional ABI arguments.
        account: Sender address.
        request: Gateway-specific transaction fields (gas, fees, data).
    """

    address: str
    function_name: str
    args: tuple
    account: str
    request: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ChainGateway(Protocol):
    """Protocol that all chain access implementations must satisfy.

    Concrete implementations:
        - infrastructure/web3_gateway.py  (web3.py AsyncWeb3)
        - tests/fakes.py                  (in-memory escrow and tokens)
    """

    async def chain_id(self) -> int:
        """Return the chain id reported by the provider."""
        ...

    async def block_number(self) -> int:
        """Return the latest block number."""
        ...

    async def read_contract(
        self,
        address: str,
        abi: list[dict],
        function_name: str,
        args: tuple = (),
        account: str | None = None,
    ) -> Any:
        """Call a view function and return its decoded result."""
        ...

    async def simulate_contract(
        self,
        address: str,
        abi: list[dict],
        function_name: str,
        args: tuple,
        account: str,
    ) -> PreparedCall:
        """Dry-run a write.

        Raises:
            SimulationError: If the call would revert.
        """
        ...

    async def send_transaction(self, prepared: PreparedCall) -> str:
        """Submit a prepared call and return the transaction hash."""
        ...

    async def get_transaction_receipt(self, tx_hash: str) -> dict | None:
        """Return the receipt, or None if the transaction is not mined."""
        ...

    async def wait_for_transaction_receipt(self, tx_hash: str) -> dict | None:
        """Block until the receipt is available. Returns None on timeout."""
        ...

    async def get_transaction(self, tx_hash: str) -> dict:
        """Return the transaction (``to``, ``input``, ...)."""
        ...
