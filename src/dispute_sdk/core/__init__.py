from .events import decode_log, event_topic, filter_logs
from .transactions import wait_tx, wait_tx_and_filter_log
from .web3_client import ContractCall, PublicClient, WalletClient, decode_custom_error

__all__ = [
    "ContractCall",
    "PublicClient",
    "WalletClient",
    "decode_custom_error",
    "decode_log",
    "event_topic",
    "filter_logs",
    "wait_tx",
    "wait_tx_and_filter_log",
]
