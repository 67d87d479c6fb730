"""
DisputeModule client.

Every operation follows the same sequence: encode arguments, simulate the
call from the wallet's address, submit it, and optionally wait for it to
be mined. Any failure is raised as a single OperationError naming the
operation and the failing step; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..contracts import ContractConfig
from ..core.transactions import wait_tx, wait_tx_and_filter_log
from ..core.web3_client import PublicClient, WalletClient
from ..exceptions import handle_error
from ..types import (
    CancelDisputeRequest,
    RaiseDisputeRequest,
    RaiseDisputeResponse,
    ResolveDisputeRequest,
    SetDisputeJudgementRequest,
    TransactionResponse,
    TxOptions,
    wants_wait,
)
from ..utils import string_to_bytes32, to_calldata_bytes, to_checksum_address, to_uint256

logger = logging.getLogger("dispute_sdk.dispute")


class DisputeClient:
    """
    Typed wrappers around DisputeModule transactions.

    Args:
        rpc_client: Read-only endpoint used for simulation and receipts
        wallet: Signing endpoint used to submit transactions
        dispute_module: DisputeModule address and ABI
        confirmation_timeout: Seconds to wait for a transaction to be mined
            when waiting is requested; None waits indefinitely
    """

    def __init__(
        self,
        rpc_client: PublicClient,
        wallet: WalletClient,
        dispute_module: ContractConfig,
        confirmation_timeout: Optional[float] = None,
    ) -> None:
        self.rpc_client = rpc_client
        self.wallet = wallet
        self.dispute_module = dispute_module
        self.confirmation_timeout = confirmation_timeout

    def raise_dispute(self, request: RaiseDisputeRequest) -> Union[TransactionResponse, RaiseDisputeResponse]:
        """
        Initiate a dispute on an IP asset.

        Args:
            request: Target IP, arbitration policy, evidence link, tag and options

        Returns:
            TransactionResponse, or RaiseDisputeResponse carrying the new
            dispute ID when ``tx_options.wait_for_transaction`` is set

        Raises:
            OperationError: "Failed to raise dispute: ...". Reverts such as
                DisputeModule__NotRegisteredIpId, DisputeModule__NotWhitelistedDisputeTag
                or DisputeModule__ZeroLinkToDisputeEvidence surface at the simulate step.

        Example:
            >>> response = client.dispute.raise_dispute(RaiseDisputeRequest(
            ...     target_ip_id="0x...",
            ...     arbitration_policy="0x...",
            ...     link_to_dispute_evidence="ipfs://evidence",
            ...     target_tag="PLAGIARISM",
            ...     tx_options=TxOptions(wait_for_transaction=True),
            ... ))
            >>> response.dispute_id
            '1'
        """
        tx_hash, event = self._send(
            "raiseDispute",
            lambda: [
                to_checksum_address(request.target_ip_id),
                request.link_to_dispute_evidence,
                string_to_bytes32(request.target_tag),
                to_calldata_bytes(request.calldata),
            ],
            request.tx_options,
            "Failed to raise dispute",
            event_name="DisputeRaised",
        )
        if event is None:
            return TransactionResponse(tx_hash=tx_hash)
        return RaiseDisputeResponse(tx_hash=tx_hash, dispute_id=str(int(event["disputeId"])))

    def set_dispute_judgement(self, request: SetDisputeJudgementRequest) -> TransactionResponse:
        """
        Set the judgement for an existing dispute.

        The caller must be a whitelisted arbitration relayer and the dispute
        must still be in dispute (DisputeModule__NotWhitelistedArbitrationRelayer,
        DisputeModule__NotInDisputeState otherwise).

        Raises:
            OperationError: "Failed to set dispute judgement: ..."
        """
        tx_hash, _ = self._send(
            "setDisputeJudgement",
            lambda: [
                to_uint256(request.dispute_id),
                bool(request.decision),
                to_calldata_bytes(request.calldata),
            ],
            request.tx_options,
            "Failed to set dispute judgement",
        )
        return TransactionResponse(tx_hash=tx_hash)

    def cancel_dispute(self, request: CancelDisputeRequest) -> TransactionResponse:
        """
        Cancel an existing dispute. Only the dispute initiator may cancel.

        Raises:
            OperationError: "Failed to cancel dispute: ..."
        """
        tx_hash, _ = self._send(
            "cancelDispute",
            lambda: [to_uint256(request.dispute_id), to_calldata_bytes(request.calldata)],
            request.tx_options,
            "Failed to cancel dispute",
        )
        return TransactionResponse(tx_hash=tx_hash)

    def resolve_dispute(self, request: ResolveDisputeRequest) -> TransactionResponse:
        """
        Resolve a dispute after its judgement has been set.

        Raises:
            OperationError: "Failed to resolve dispute: ...", e.g.
                DisputeModule__NotAbleToResolve while still awaiting judgement
        """
        tx_hash, _ = self._send(
            "resolveDispute",
            lambda: [to_uint256(request.dispute_id)],
            request.tx_options,
            "Failed to resolve dispute",
        )
        return TransactionResponse(tx_hash=tx_hash)

    def _send(
        self,
        function_name: str,
        build_args: Callable[[], List[Any]],
        tx_options: Optional[TxOptions],
        message: str,
        event_name: Optional[str] = None,
    ) -> Tuple[str, Optional[Dict[str, Any]]]:
        step = "simulate"
        tx_hash = None
        try:
            args = build_args()
            call = self.rpc_client.simulate_contract(
                self.dispute_module,
                function_name,
                args,
                account=self.wallet.address,
            )

            step = "submit"
            tx_hash = self.wallet.write_contract(call)

            if not wants_wait(tx_options):
                return tx_hash, None

            step = "wait"
            if event_name is None:
                wait_tx(self.rpc_client, tx_hash, timeout=self.confirmation_timeout)
                return tx_hash, None
            event = wait_tx_and_filter_log(
                self.rpc_client,
                tx_hash,
                self.dispute_module,
                event_name,
                timeout=self.confirmation_timeout,
            )
            return tx_hash, event
        except Exception as e:
            logger.warning("%s at %s step (tx=%s): %s", message, step, tx_hash, e)
            handle_error(e, message, step=step, tx_hash=tx_hash)
