"""
Request and response value objects for dispute operations.

Requests are built by the caller per operation; responses are returned by
DisputeClient. ``RaiseDisputeResponse`` is only produced when the caller
waited for the transaction and the ``DisputeRaised`` event was decoded, so
a dispute ID is never optional on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

Calldata = Union[str, bytes]
DisputeId = Union[int, str]


@dataclass(frozen=True)
class TxOptions:
    """Per-call transaction options."""

    wait_for_transaction: bool = False


@dataclass(frozen=True)
class RaiseDisputeRequest:
    """
    Attributes:
        target_ip_id: IP asset the dispute is raised against
        arbitration_policy: Address of the arbitration policy
        link_to_dispute_evidence: Link to the dispute evidence (e.g. ipfs://...)
        target_tag: Dispute tag, e.g. "PLAGIARISM" (encoded as bytes32)
        calldata: Optional data used to initialize the policy
        tx_options: Optional transaction options
    """

    target_ip_id: str
    arbitration_policy: str
    link_to_dispute_evidence: str
    target_tag: str
    calldata: Optional[Calldata] = None
    tx_options: Optional[TxOptions] = None


@dataclass(frozen=True)
class SetDisputeJudgementRequest:
    dispute_id: DisputeId
    decision: bool
    calldata: Optional[Calldata] = None
    tx_options: Optional[TxOptions] = None


@dataclass(frozen=True)
class CancelDisputeRequest:
    dispute_id: DisputeId
    calldata: Optional[Calldata] = None
    tx_options: Optional[TxOptions] = None


@dataclass(frozen=True)
class ResolveDisputeRequest:
    dispute_id: DisputeId
    tx_options: Optional[TxOptions] = None


@dataclass(frozen=True)
class TransactionResponse:
    """Hash of a transaction accepted by the node."""

    tx_hash: str


@dataclass(frozen=True)
class RaiseDisputeResponse(TransactionResponse):
    """Hash of a confirmed raiseDispute transaction and the new dispute ID (decimal)."""

    dispute_id: str


def wants_wait(tx_options: Optional[TxOptions]) -> bool:
    return bool(tx_options and tx_options.wait_for_transaction)
