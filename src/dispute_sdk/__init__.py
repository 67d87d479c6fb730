"""
Dispute SDK

Python SDK for the on-chain DisputeModule, supporting:
- Raising disputes against IP assets
- Setting dispute judgements (arbitration relayers)
- Cancelling and resolving disputes

Quick Start:
    >>> from dispute_sdk import StoryClient, SDKConfig, RaiseDisputeRequest, TxOptions
    >>> client = StoryClient.new_client(SDKConfig(
    ...     rpc_url="https://rpc.example.org",
    ...     dispute_module_address="0x...",
    ...     private_key="your_hex_private_key",
    ... ))
    >>> response = client.dispute.raise_dispute(RaiseDisputeRequest(
    ...     target_ip_id="0x...",
    ...     arbitration_policy="0x...",
    ...     link_to_dispute_evidence="ipfs://evidence",
    ...     target_tag="PLAGIARISM",
    ...     tx_options=TxOptions(wait_for_transaction=True),
    ... ))
"""

from .story_client import SDKConfig, StoryClient
from .contracts import DISPUTE_MODULE_ABI, ContractConfig, dispute_module_config
from .core import ContractCall, PublicClient, WalletClient, wait_tx, wait_tx_and_filter_log
from .resources import DisputeClient
from .signer import LocalAccountSigner, Signer
from .types import (
    CancelDisputeRequest,
    RaiseDisputeRequest,
    RaiseDisputeResponse,
    ResolveDisputeRequest,
    SetDisputeJudgementRequest,
    TransactionResponse,
    TxOptions,
)
from .exceptions import (
    SDKError,
    ConfigurationError,
    MissingContractAddressError,
    InvalidPrivateKeyError,
    ChainIdResolutionError,
    NetworkError,
    RPCError,
    TimeoutError,
    ContractError,
    ContractCallError,
    SimulationError,
    ContractFunctionNotFoundError,
    TransactionFailedError,
    EventNotFoundError,
    SignatureError,
    SignerNotAvailableError,
    DataError,
    InvalidAddressError,
    SerializationError,
    OperationError,
    handle_error,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "StoryClient",
    "SDKConfig",
    "DisputeClient",
    # Chain
    "PublicClient",
    "WalletClient",
    "ContractCall",
    "ContractConfig",
    "DISPUTE_MODULE_ABI",
    "dispute_module_config",
    "wait_tx",
    "wait_tx_and_filter_log",
    # Signers
    "Signer",
    "LocalAccountSigner",
    # Types
    "TxOptions",
    "RaiseDisputeRequest",
    "SetDisputeJudgementRequest",
    "CancelDisputeRequest",
    "ResolveDisputeRequest",
    "TransactionResponse",
    "RaiseDisputeResponse",
    # Exceptions
    "SDKError",
    "ConfigurationError",
    "MissingContractAddressError",
    "InvalidPrivateKeyError",
    "ChainIdResolutionError",
    "NetworkError",
    "RPCError",
    "TimeoutError",
    "ContractError",
    "ContractCallError",
    "SimulationError",
    "ContractFunctionNotFoundError",
    "TransactionFailedError",
    "EventNotFoundError",
    "SignatureError",
    "SignerNotAvailableError",
    "DataError",
    "InvalidAddressError",
    "SerializationError",
    "OperationError",
    "handle_error",
]
