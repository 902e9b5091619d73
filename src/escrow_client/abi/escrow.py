"""Fixed-price escrow contract ABI.

Covers every function the codec encodes or decodes, the views the client
reads and the events it decodes from receipts. Custom errors are listed so
web3 can render revert reasons by name.
"""

_CONTRACT_ID = {"name": "_contractId", "type": "uint256"}

_DEPOSIT_COMPONENTS = [
    {"name": "contractor", "type": "address"},
    {"name": "paymentToken", "type": "address"},
    {"name": "amount", "type": "uint256"},
    {"name": "amountToClaim", "type": "uint256"},
    {"name": "timeLock", "type": "uint256"},
    {"name": "contractorData", "type": "bytes32"},
    {"name": "feeConfig", "type": "uint8"},
    {"name": "status", "type": "uint8"},
]


def _write(name: str, *inputs: dict) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "nonpayable",
        "inputs": list(inputs),
        "outputs": [],
    }


def _error(name: str) -> dict:
    return {"type": "error", "name": name, "inputs": []}


ESCROW_ABI = [
    # --- Errors ---
    _error("Escrow__AlreadyInitialized"),
    _error("Escrow__FeeTooHigh"),
    _error("Escrow__InvalidAmount"),
    _error("Escrow__InvalidContractorDataHash"),
    _error("Escrow__InvalidFeeConfig"),
    _error("Escrow__InvalidStatusForApprove"),
    _error("Escrow__InvalidStatusForSubmit"),
    _error("Escrow__InvalidStatusForWithdraw"),
    _error("Escrow__NotApproved"),
    _error("Escrow__NotEnoughDeposit"),
    _error("Escrow__NotSetFeeManager"),
    _error("Escrow__NotSupportedPaymentToken"),
    {
        "type": "error",
        "name": "Escrow__UnauthorizedAccount",
        "inputs": [{"name": "account", "type": "address"}],
    },
    _error("Escrow__UnauthorizedReceiver"),
    _error("Escrow__ZeroAddressProvided"),
    _error("Escrow__ZeroDepositAmount"),
    _error("Unauthorized"),
    # --- Events ---
    {
        "type": "event",
        "name": "Approved",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "contractId", "type": "uint256"},
            {"indexed": True, "name": "amountApprove", "type": "uint256"},
            {"indexed": True, "name": "receiver", "type": "address"},
        ],
    },
    {
        "type": "event",
        "name": "Claimed",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "sender", "type": "address"},
            {"indexed": True, "name": "contractId", "type": "uint256"},
            {"indexed": True, "name": "paymentToken", "type": "address"},
            {"indexed": False, "name": "amount", "type": "uint256"},
        ],
    },
    {
        "type": "event",
        "name": "Deposited",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "sender", "type": "address"},
            {"indexed": True, "name": "contractId", "type": "uint256"},
            {"indexed": True, "name": "paymentToken", "type": "address"},
            {"indexed": False, "name": "amount", "type": "uint256"},
            {"indexed": False, "name": "timeLock", "type": "uint256"},
            {"indexed": False, "name": "feeConfig", "type": "uint8"},
        ],
    },
    {
        "type": "event",
        "name": "OwnershipTransferred",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "oldOwner", "type": "address"},
            {"indexed": True, "name": "newOwner", "type": "address"},
        ],
    },
    {
        "type": "event",
        "name": "Refilled",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "contractId", "type": "uint256"},
            {"indexed": True, "name": "amountAdditional", "type": "uint256"},
        ],
    },
    {
        "type": "event",
        "name": "RegistryUpdated",
        "anonymous": False,
        "inputs": [{"indexed": False, "name": "registry", "type": "address"}],
    },
    {
        "type": "event",
        "name": "Submitted",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "sender", "type": "address"},
            {"indexed": True, "name": "contractId", "type": "uint256"},
        ],
    },
    {
        "type": "event",
        "name": "Withdrawn",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "sender", "type": "address"},
            {"indexed": True, "name": "contractId", "type": "uint256"},
            {"indexed": True, "name": "paymentToken", "type": "address"},
            {"indexed": False, "name": "amount", "type": "uint256"},
        ],
    },
    # --- Writes ---
    _write(
        "deposit",
        {"name": "_deposit", "type": "tuple", "components": _DEPOSIT_COMPONENTS},
    ),
    _write("withdraw", _CONTRACT_ID),
    _write("claim", _CONTRACT_ID),
    _write(
        "submit",
        _CONTRACT_ID,
        {"name": "_data", "type": "bytes"},
        {"name": "_salt", "type": "bytes32"},
    ),
    _write(
        "approve",
        _CONTRACT_ID,
        {"name": "_amountApprove", "type": "uint256"},
        {"name": "_amountAdditional", "type": "uint256"},
        {"name": "_receiver", "type": "address"},
    ),
    _write("refill", _CONTRACT_ID, {"name": "_amountAdditional", "type": "uint256"}),
    _write("requestReturn", _CONTRACT_ID),
    _write("approveReturn", _CONTRACT_ID),
    _write("cancelReturn", _CONTRACT_ID, {"name": "_status", "type": "uint8"}),
    _write("createDispute", _CONTRACT_ID),
    _write(
        "resolveDispute",
        _CONTRACT_ID,
        {"name": "_winner", "type": "uint8"},
        {"name": "_clientAmount", "type": "uint256"},
        {"name": "_contractorAmount", "type": "uint256"},
    ),
    # --- Views ---
    {
        "type": "function",
        "name": "deposits",
        "stateMutability": "view",
        "inputs": [{"name": "contractId", "type": "uint256"}],
        "outputs": _DEPOSIT_COMPONENTS,
    },
    {
        "type": "function",
        "name": "getContractorDataHash",
        "stateMutability": "view",
        "inputs": [
            {"name": "_data", "type": "bytes"},
            {"name": "_salt", "type": "bytes32"},
        ],
        "outputs": [{"name": "", "type": "bytes32"}],
    },
    {
        "type": "function",
        "name": "getCurrentContractId",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]
