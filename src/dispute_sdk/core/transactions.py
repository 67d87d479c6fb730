"""
Transaction confirmation helpers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..contracts import ContractConfig
from ..exceptions import EventNotFoundError, TransactionFailedError
from .events import filter_logs
from .web3_client import PublicClient

logger = logging.getLogger("dispute_sdk.transactions")


def _status(receipt: Dict[str, Any]) -> int:
    status = receipt.get("status")
    if status is None:
        # pre-Byzantium receipts carry no status
        return 1
    if isinstance(status, (bytes, bytearray)):
        return int.from_bytes(status, "big")
    if isinstance(status, str):
        return int(status, 16) if status.startswith("0x") else int(status)
    return int(status)


def wait_tx(
    rpc_client: PublicClient,
    tx_hash: str,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Wait until ``tx_hash`` is mined and check that it succeeded.

    Returns:
        Transaction receipt

    Raises:
        TransactionFailedError: The transaction was mined but reverted
        TimeoutError: Not mined within ``timeout``
    """
    receipt = rpc_client.wait_for_transaction_receipt(tx_hash, timeout=timeout)
    if _status(receipt) == 0:
        raise TransactionFailedError(tx_id=tx_hash, reason="reverted")
    logger.info("Transaction confirmed: %s", tx_hash)
    return receipt


def wait_tx_and_filter_log(
    rpc_client: PublicClient,
    tx_hash: str,
    contract: ContractConfig,
    event_name: str,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Wait for ``tx_hash`` and decode the first ``event_name`` log emitted by ``contract``.

    Returns:
        Decoded event arguments

    Raises:
        EventNotFoundError: The confirmed transaction did not emit the event
        TransactionFailedError: The transaction was mined but reverted
    """
    receipt = wait_tx(rpc_client, tx_hash, timeout=timeout)
    events = filter_logs(receipt.get("logs") or [], contract.event_abi(event_name), address=contract.address)
    if not events:
        raise EventNotFoundError(event_name, tx_id=tx_hash)
    return events[0]
