"""
Dispute SDK client entry point.

Builds the chain endpoints from configuration and exposes the dispute
resource client.

Example:
    >>> from dispute_sdk import StoryClient, SDKConfig
    >>> client = StoryClient.new_client(SDKConfig.from_env())
    >>> client.dispute.cancel_dispute(CancelDisputeRequest(dispute_id=1))
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .contracts import ContractConfig, dispute_module_config
from .core.web3_client import PublicClient, WalletClient
from .exceptions import ConfigurationError, SignerNotAvailableError
from .resources.dispute import DisputeClient
from .signer import LocalAccountSigner, Signer

logger = logging.getLogger("dispute_sdk.client")


def _optional_float(name: str, value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number", details={name: value}) from e


@dataclass
class SDKConfig:
    """
    SDK configuration.

    Attributes:
        rpc_url: JSON-RPC endpoint of the chain
        chain_id: Chain ID; resolved from the node when None
        dispute_module_address: Deployed DisputeModule address
        private_key: Hex private key of the transaction signer
        confirmation_timeout: Seconds to wait for a transaction to be mined; None waits indefinitely
        poll_interval: Seconds between receipt polls
    """

    rpc_url: str = "http://127.0.0.1:8545"
    chain_id: Optional[int] = None
    dispute_module_address: Optional[str] = None
    private_key: Optional[str] = None
    confirmation_timeout: Optional[float] = None
    poll_interval: float = 1.0

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "SDKConfig":
        """
        Load configuration from environment variables (and a .env file, if present).

        Environment Variables:
            RPC_PROVIDER_URL, CHAIN_ID, DISPUTE_MODULE_ADDRESS,
            WALLET_PRIVATE_KEY, TX_CONFIRMATION_TIMEOUT, TX_POLL_INTERVAL
        """
        load_dotenv(dotenv_path)

        chain_id = os.getenv("CHAIN_ID")
        try:
            parsed_chain_id = int(chain_id, 0) if chain_id else None
        except ValueError as e:
            raise ConfigurationError("CHAIN_ID must be an integer", details={"CHAIN_ID": chain_id}) from e

        poll_interval = _optional_float("TX_POLL_INTERVAL", os.getenv("TX_POLL_INTERVAL"))
        return cls(
            rpc_url=os.getenv("RPC_PROVIDER_URL", cls.rpc_url),
            chain_id=parsed_chain_id,
            dispute_module_address=os.getenv("DISPUTE_MODULE_ADDRESS") or None,
            private_key=os.getenv("WALLET_PRIVATE_KEY") or None,
            confirmation_timeout=_optional_float("TX_CONFIRMATION_TIMEOUT", os.getenv("TX_CONFIRMATION_TIMEOUT")),
            poll_interval=cls.poll_interval if poll_interval is None else poll_interval,
        )


class StoryClient:
    """
    Top-level SDK client.

    Args:
        config: SDK configuration
        rpc_client: Read-only endpoint
        wallet: Signing endpoint
        dispute_module: DisputeModule contract config
    """

    def __init__(
        self,
        config: SDKConfig,
        rpc_client: PublicClient,
        wallet: WalletClient,
        dispute_module: ContractConfig,
    ) -> None:
        self.config = config
        self.rpc_client = rpc_client
        self.wallet = wallet
        self.dispute_module = dispute_module
        self._dispute: Optional[DisputeClient] = None

    @classmethod
    def new_client(
        cls,
        config: SDKConfig,
        signer: Optional[Signer] = None,
        rpc_client: Optional[PublicClient] = None,
    ) -> "StoryClient":
        """
        Build a client from configuration.

        Raises:
            SignerNotAvailableError: No signer and no private key configured
            InvalidPrivateKeyError: Configured private key is malformed
            MissingContractAddressError: DisputeModule address not configured
        """
        if signer is None:
            if not config.private_key:
                raise SignerNotAvailableError("account is null")
            signer = LocalAccountSigner(private_key=config.private_key)

        dispute_module = dispute_module_config(config.dispute_module_address)
        if rpc_client is None:
            rpc_client = PublicClient(rpc_url=config.rpc_url, poll_interval=config.poll_interval)
        wallet = WalletClient(rpc_client, signer, chain_id=config.chain_id)

        logger.info(
            "SDK initialized: rpc=%s, dispute_module=%s, signer=%s",
            config.rpc_url,
            dispute_module.address,
            type(signer).__name__,
        )
        return cls(config, rpc_client, wallet, dispute_module)

    @property
    def dispute(self) -> DisputeClient:
        if self._dispute is None:
            self._dispute = DisputeClient(
                self.rpc_client,
                self.wallet,
                self.dispute_module,
                confirmation_timeout=self.config.confirmation_timeout,
            )
        return self._dispute
