"""
Chain client layer for contract interactions.

PublicClient is the read-only endpoint: it simulates calls and fetches
receipts. WalletClient is the signing endpoint: it builds, signs and
broadcasts transactions for calls that passed simulation. Both are
stateless between calls and can be shared across threads.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from ..contracts import ContractConfig
from ..exceptions import (
    ChainIdResolutionError,
    ContractCallError,
    RPCError,
    SDKError,
    SimulationError,
    TimeoutError,
)
from ..signer import Signer
from ..utils import abi_signature, keccak256_hex, normalize_hash, to_checksum_address, to_hex

logger = logging.getLogger("dispute_sdk.chain")

_HEX_DATA = re.compile(r"0x[0-9a-fA-F]{8,}")


@dataclass(frozen=True)
class ContractCall:
    """A contract call that passed simulation, ready to be submitted."""

    contract: ContractConfig
    function_name: str
    args: tuple
    account: Optional[str] = None
    result: Any = None


def decode_custom_error(data: Optional[str], error_abis: List[Dict[str, Any]]) -> Optional[str]:
    """
    Resolve revert data to a custom error name using the 4-byte selector.

    Returns:
        Error name (e.g. "DisputeModule__NotInDisputeState"), or None if the
        selector is not declared in ``error_abis``
    """
    cleaned = normalize_hash(data)
    if len(cleaned) < 8:
        return None
    selector = cleaned[:8]
    for entry in error_abis:
        if normalize_hash(keccak256_hex(abi_signature(entry).encode("utf-8")))[:8] == selector:
            return entry["name"]
    return None


def _revert_data(error: ContractLogicError) -> Optional[str]:
    data = getattr(error, "data", None)
    if isinstance(data, (bytes, bytearray)):
        return to_hex(data)
    if isinstance(data, str) and data.startswith("0x"):
        return data
    match = _HEX_DATA.search(str(getattr(error, "message", None) or error))
    return match.group(0) if match else None


class PublicClient:
    """
    Read-only chain endpoint.

    Args:
        rpc_url: HTTP JSON-RPC URL, used when ``w3`` is not given
        w3: Preconfigured web3 instance
        poll_interval: Seconds between receipt polls
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        w3: Optional[Any] = None,
        poll_interval: float = 1.0,
    ) -> None:
        if w3 is None:
            if not rpc_url:
                raise ValueError("rpc_url or w3 is required")
            w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.w3 = w3
        self.rpc_url = rpc_url
        self.poll_interval = poll_interval

    @property
    def chain_id(self) -> int:
        try:
            return int(self.w3.eth.chain_id)
        except Exception as e:
            raise ChainIdResolutionError(self.rpc_url) from e

    def get_contract(self, contract: ContractConfig) -> Any:
        address = to_checksum_address(contract.address)
        return self.w3.eth.contract(address=address, abi=contract.abi)

    def simulate_contract(
        self,
        contract: ContractConfig,
        function_name: str,
        args: Sequence[Any],
        account: Optional[str] = None,
    ) -> ContractCall:
        """
        Dry-run a contract call against the latest state.

        Raises:
            SimulationError: The call reverts or its arguments cannot be encoded
            RPCError: The node is unreachable
        """
        contract.function_abi(function_name, len(args))
        logger.debug("Simulating %s.%s args=%s from=%s", contract.name, function_name, args, account)
        try:
            function = getattr(self.get_contract(contract).functions, function_name)(*args)
            result = function.call({"from": account} if account else {})
        except SDKError:
            raise
        except ContractLogicError as e:
            data = _revert_data(e)
            error_name = decode_custom_error(data, contract.error_abis())
            reason = error_name or getattr(e, "message", None) or str(e)
            raise SimulationError(contract.name, function_name, reason, error_name=error_name) from e
        except OSError as e:
            raise RPCError(str(e), rpc_url=self.rpc_url, method="eth_call") from e
        except Exception as e:
            raise SimulationError(contract.name, function_name, str(e)) from e

        return ContractCall(
            contract=contract,
            function_name=function_name,
            args=tuple(args),
            account=account,
            result=result,
        )

    def wait_for_transaction_receipt(self, tx_hash: str, timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Block until the transaction is mined.

        Args:
            tx_hash: Transaction hash
            timeout: Seconds to wait; None waits indefinitely

        Raises:
            TimeoutError: Not mined within ``timeout``
            RPCError: The node is unreachable
        """
        try:
            # web3's Timeout(None) never expires
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=timeout,
                poll_latency=self.poll_interval,
            )
        except TimeExhausted as e:
            raise TimeoutError("wait_for_transaction_receipt", timeout) from e
        except OSError as e:
            raise RPCError(str(e), rpc_url=self.rpc_url, method="eth_getTransactionReceipt") from e

        logger.debug("Transaction %s mined in block %s", tx_hash, receipt.get("blockNumber"))
        return receipt


class WalletClient:
    """
    Transaction-signing endpoint.

    Args:
        public_client: Client whose web3 connection is used to build and broadcast
        signer: Signs transactions
        chain_id: Chain ID for replay protection; fetched from the node when None
    """

    def __init__(self, public_client: PublicClient, signer: Signer, chain_id: Optional[int] = None) -> None:
        self.public_client = public_client
        self.signer = signer
        self._chain_id = chain_id

    @property
    def address(self) -> str:
        return self.signer.get_address()

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.public_client.chain_id
        return self._chain_id

    def write_contract(self, call: ContractCall) -> str:
        """
        Sign and broadcast a simulated call.

        Returns:
            0x-prefixed transaction hash. The transaction is pending, not confirmed.

        Raises:
            ContractCallError: The transaction cannot be built (e.g. gas estimation reverts)
            RPCError: The node is unreachable
        """
        w3 = self.public_client.w3
        address = self.address
        try:
            function = getattr(self.public_client.get_contract(call.contract).functions, call.function_name)(
                *call.args
            )
            nonce = w3.eth.get_transaction_count(address, "pending")
            tx = function.build_transaction({"from": address, "nonce": nonce, "chainId": self.chain_id})
            raw = self.signer.sign_tx(tx)
            tx_hash = w3.eth.send_raw_transaction(raw)
        except SDKError:
            raise
        except ContractLogicError as e:
            raise ContractCallError(call.contract.name, call.function_name, str(e)) from e
        except OSError as e:
            raise RPCError(str(e), rpc_url=self.public_client.rpc_url, method="eth_sendRawTransaction") from e

        tx_hash_hex = to_hex(tx_hash)
        logger.info("Transaction sent: %s.%s %s", call.contract.name, call.function_name, tx_hash_hex)
        return tx_hash_hex
