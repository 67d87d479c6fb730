import pytest
from web3 import Web3

from dispute_sdk.exceptions import (
    ConfigurationError,
    InvalidPrivateKeyError,
    MissingContractAddressError,
    SignerNotAvailableError,
)
from dispute_sdk.core.web3_client import PublicClient
from dispute_sdk.resources.dispute import DisputeClient
from dispute_sdk.signer import LocalAccountSigner, Signer
from dispute_sdk.story_client import SDKConfig, StoryClient

PRIVATE_KEY = "0x" + "01" * 32
MODULE = "0x" + "11" * 20
ENV_VARS = [
    "RPC_PROVIDER_URL",
    "CHAIN_ID",
    "DISPUTE_MODULE_ADDRESS",
    "WALLET_PRIVATE_KEY",
    "TX_CONFIRMATION_TIMEOUT",
    "TX_POLL_INTERVAL",
]


class FixedSigner(Signer):
    def get_address(self) -> str:
        return "0x" + "22" * 20

    def sign_tx(self, unsigned_tx):  # pragma: no cover - not used
        return b""


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


def test_new_client_requires_account():
    with pytest.raises(SignerNotAvailableError, match="account is null"):
        StoryClient.new_client(SDKConfig(dispute_module_address=MODULE))


def test_new_client_requires_dispute_module():
    with pytest.raises(MissingContractAddressError):
        StoryClient.new_client(SDKConfig(private_key=PRIVATE_KEY))


def test_new_client_rejects_bad_key():
    with pytest.raises(InvalidPrivateKeyError):
        StoryClient.new_client(SDKConfig(private_key="0x1234", dispute_module_address=MODULE))


def test_new_client_with_private_key():
    config = SDKConfig(private_key=PRIVATE_KEY, dispute_module_address=MODULE, chain_id=1315, poll_interval=0.5)
    client = StoryClient.new_client(config)
    assert isinstance(client.rpc_client, PublicClient)
    assert client.rpc_client.poll_interval == 0.5
    assert isinstance(client.wallet.signer, LocalAccountSigner)
    assert Web3.is_checksum_address(client.wallet.address)
    assert client.wallet.chain_id == 1315


def test_dispute_client_is_cached():
    rpc = PublicClient(rpc_url="http://127.0.0.1:8545")
    config = SDKConfig(dispute_module_address=MODULE, confirmation_timeout=12.0)
    client = StoryClient.new_client(config, signer=FixedSigner(), rpc_client=rpc)
    dispute = client.dispute
    assert isinstance(dispute, DisputeClient)
    assert dispute is client.dispute
    assert dispute.rpc_client is rpc
    assert dispute.wallet is client.wallet
    assert dispute.dispute_module.address == MODULE
    assert dispute.confirmation_timeout == 12.0


def test_config_defaults():
    config = SDKConfig()
    assert config.rpc_url == "http://127.0.0.1:8545"
    assert config.confirmation_timeout is None
    assert config.poll_interval == 1.0


def test_config_from_env(clean_env, tmp_path):
    clean_env.setenv("RPC_PROVIDER_URL", "https://rpc.example.org")
    clean_env.setenv("CHAIN_ID", "1315")
    clean_env.setenv("DISPUTE_MODULE_ADDRESS", MODULE)
    clean_env.setenv("WALLET_PRIVATE_KEY", PRIVATE_KEY)
    clean_env.setenv("TX_CONFIRMATION_TIMEOUT", "90")
    config = SDKConfig.from_env(str(tmp_path / "missing.env"))
    assert config.rpc_url == "https://rpc.example.org"
    assert config.chain_id == 1315
    assert config.dispute_module_address == MODULE
    assert config.private_key == PRIVATE_KEY
    assert config.confirmation_timeout == 90.0
    assert config.poll_interval == 1.0


def test_config_from_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        f"RPC_PROVIDER_URL=https://dotenv.example.org\nDISPUTE_MODULE_ADDRESS={MODULE}\nTX_POLL_INTERVAL=0.25\n"
    )
    config = SDKConfig.from_env(str(env_file))
    assert config.rpc_url == "https://dotenv.example.org"
    assert config.dispute_module_address == MODULE
    assert config.chain_id is None
    assert config.poll_interval == 0.25


def test_config_from_env_invalid_number(clean_env, tmp_path):
    clean_env.setenv("TX_CONFIRMATION_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        SDKConfig.from_env(str(tmp_path / "missing.env"))
