"""Contract ABIs used by the client."""

from escrow_client.abi.erc20 import ERC20_ABI
from escrow_client.abi.escrow import ESCROW_ABI
from escrow_client.abi.fee_manager import FEE_MANAGER_ABI

__all__ = ["ERC20_ABI", "ESCROW_ABI", "FEE_MANAGER_ABI"]
