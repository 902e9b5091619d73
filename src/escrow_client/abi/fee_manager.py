"""Escrow fee manager ABI (read side only)."""

FEE_MANAGER_ABI = [
    {"type": "error", "name": "EscrowFeeManager__FeeTooHigh", "inputs": []},
    {"type": "error", "name": "EscrowFeeManager__UnsupportedFeeConfiguration", "inputs": []},
    {
        "type": "function",
        "name": "MAX_BPS",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "getCoverageFee",
        "stateMutability": "view",
        "inputs": [{"name": "_user", "type": "address"}],
        "outputs": [{"name": "", "type": "uint16"}],
    },
    {
        "type": "function",
        "name": "getClaimFee",
        "stateMutability": "view",
        "inputs": [{"name": "_user", "type": "address"}],
        "outputs": [{"name": "", "type": "uint16"}],
    },
    {
        "type": "function",
        "name": "defaultFees",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "coverage", "type": "uint16"},
            {"name": "claim", "type": "uint16"},
        ],
    },
    {
        "type": "function",
        "name": "specialFees",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [
            {"name": "coverage", "type": "uint16"},
            {"name": "claim", "type": "uint16"},
        ],
    },
    {
        "type": "function",
        "name": "computeDepositAmountAndFee",
        "stateMutability": "view",
        "inputs": [
            {"name": "_client", "type": "address"},
            {"name": "_depositAmount", "type": "uint256"},
            {"name": "_feeConfig", "type": "uint8"},
        ],
        "outputs": [
            {"name": "totalDepositAmount", "type": "uint256"},
            {"name": "feeApplied", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "computeClaimableAmountAndFee",
        "stateMutability": "view",
        "inputs": [
            {"name": "_contractor", "type": "address"},
            {"name": "_claimedAmount", "type": "uint256"},
            {"name": "_feeConfig", "type": "uint8"},
        ],
        "outputs": [
            {"name": "claimableAmount", "type": "uint256"},
            {"name": "feeDeducted", "type": "uint256"},
            {"name": "clientFee", "type": "uint256"},
        ],
    },
]
