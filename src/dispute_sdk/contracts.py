"""
DisputeModule contract metadata.

ABI fragments for the functions the SDK calls, the events it decodes and
the custom errors it can resolve from revert data.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .exceptions import ContractFunctionNotFoundError, MissingContractAddressError


def _error(name: str) -> Dict[str, Any]:
    return {"inputs": [], "name": name, "type": "error"}


DISPUTE_MODULE_ERRORS: List[Dict[str, Any]] = [
    _error("ArbitrationPolicySP__NotDisputeModule"),
    _error("ArbitrationPolicySP__ZeroDisputeModule"),
    _error("ArbitrationPolicySP__ZeroPaymentToken"),
    _error("DisputeModule__NotAbleToResolve"),
    _error("DisputeModule__NotDisputeInitiator"),
    _error("DisputeModule__NotInDisputeState"),
    _error("DisputeModule__NotRegisteredIpId"),
    _error("DisputeModule__NotWhitelistedArbitrationPolicy"),
    _error("DisputeModule__NotWhitelistedArbitrationRelayer"),
    _error("DisputeModule__NotWhitelistedDisputeTag"),
    _error("DisputeModule__UnauthorizedAccess"),
    _error("DisputeModule__ZeroArbitrationPolicy"),
    _error("DisputeModule__ZeroArbitrationRelayer"),
    _error("DisputeModule__ZeroDisputeTag"),
    _error("DisputeModule__ZeroLinkToDisputeEvidence"),
]

DISPUTE_MODULE_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": "raiseDispute",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "address", "name": "_targetIpId", "type": "address"},
            {"internalType": "string", "name": "_linkToDisputeEvidence", "type": "string"},
            {"internalType": "bytes32", "name": "_targetTag", "type": "bytes32"},
            {"internalType": "bytes", "name": "_data", "type": "bytes"},
        ],
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "setDisputeJudgement",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "uint256", "name": "_disputeId", "type": "uint256"},
            {"internalType": "bool", "name": "_decision", "type": "bool"},
            {"internalType": "bytes", "name": "_data", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "cancelDispute",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "uint256", "name": "_disputeId", "type": "uint256"},
            {"internalType": "bytes", "name": "_data", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "resolveDispute",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "uint256", "name": "_disputeId", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "event",
        "name": "DisputeRaised",
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "uint256", "name": "disputeId", "type": "uint256"},
            {"indexed": False, "internalType": "address", "name": "targetIpId", "type": "address"},
            {"indexed": False, "internalType": "address", "name": "disputeInitiator", "type": "address"},
            {"indexed": False, "internalType": "address", "name": "arbitrationPolicy", "type": "address"},
            {"indexed": False, "internalType": "bytes32", "name": "linkToDisputeEvidence", "type": "bytes32"},
            {"indexed": False, "internalType": "bytes32", "name": "targetTag", "type": "bytes32"},
            {"indexed": False, "internalType": "bytes", "name": "data", "type": "bytes"},
        ],
    },
    {
        "type": "event",
        "name": "DisputeJudgementSet",
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "uint256", "name": "disputeId", "type": "uint256"},
            {"indexed": False, "internalType": "bool", "name": "decision", "type": "bool"},
            {"indexed": False, "internalType": "bytes", "name": "data", "type": "bytes"},
        ],
    },
    {
        "type": "event",
        "name": "DisputeCancelled",
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "uint256", "name": "disputeId", "type": "uint256"},
            {"indexed": False, "internalType": "bytes", "name": "data", "type": "bytes"},
        ],
    },
    {
        "type": "event",
        "name": "DisputeResolved",
        "anonymous": False,
        "inputs": [
            {"indexed": False, "internalType": "uint256", "name": "disputeId", "type": "uint256"},
        ],
    },
] + DISPUTE_MODULE_ERRORS


@dataclass(frozen=True)
class ContractConfig:
    """Address and ABI of a deployed contract."""

    name: str
    address: str
    abi: List[Dict[str, Any]]

    def function_abi(self, function_name: str, arity: Optional[int] = None) -> Dict[str, Any]:
        """Look up a function entry by name (and arity, for overloads)."""
        for item in self.abi:
            if item.get("type") != "function" or item.get("name") != function_name:
                continue
            if arity is None or len(item.get("inputs", [])) == arity:
                return item
        raise ContractFunctionNotFoundError(self.name, function_name, arity)

    def event_abi(self, event_name: str) -> Dict[str, Any]:
        for item in self.abi:
            if item.get("type") == "event" and item.get("name") == event_name:
                return item
        raise ContractFunctionNotFoundError(self.name, event_name)

    def error_abis(self) -> List[Dict[str, Any]]:
        return [item for item in self.abi if item.get("type") == "error"]


def dispute_module_config(address: Optional[str]) -> ContractConfig:
    """
    Build the DisputeModule contract config for a deployment address.

    Raises:
        MissingContractAddressError: address is empty
    """
    if not address:
        raise MissingContractAddressError("dispute")
    return ContractConfig(name="DisputeModule", address=address, abi=DISPUTE_MODULE_ABI)
