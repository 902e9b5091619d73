"""Application services — use case orchestration."""

from escrow_client.services.escrow_service import EscrowService
from escrow_client.services.fee_service import FeeService
from escrow_client.services.token_service import TokenService

__all__ = ["EscrowService", "FeeService", "TokenService"]
