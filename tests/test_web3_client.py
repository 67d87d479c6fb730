import pytest
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from dispute_sdk.contracts import dispute_module_config
from dispute_sdk.core.transactions import wait_tx, wait_tx_and_filter_log
from dispute_sdk.core.web3_client import ContractCall, PublicClient, WalletClient, decode_custom_error
from dispute_sdk.exceptions import (
    ChainIdResolutionError,
    ContractCallError,
    ContractFunctionNotFoundError,
    EventNotFoundError,
    InvalidAddressError,
    RPCError,
    SimulationError,
    TimeoutError,
    TransactionFailedError,
)
from dispute_sdk.signer import Signer
from dispute_sdk.utils import keccak256_hex

MODULE = "0x" + "11" * 20
WALLET = Web3.to_checksum_address("0x" + "22" * 20)
CONFIG = dispute_module_config(MODULE)


def selector(signature: str) -> str:
    return keccak256_hex(signature.encode("utf-8"))[:10]


class FakeFunction:
    def __init__(self, eth, name, args) -> None:
        self.eth = eth
        self.name = name
        self.args = args

    def call(self, tx=None):
        self.eth.calls.append(("call", self.name, self.args, tx))
        if self.eth.call_error is not None:
            raise self.eth.call_error
        return None

    def build_transaction(self, params):
        self.eth.calls.append(("build", self.name, self.args, params))
        return dict(params, to=self.eth.contract_address, data="0x")


class FakeFunctions:
    def __init__(self, eth) -> None:
        self._eth = eth

    def __getattr__(self, name):
        return lambda *args: FakeFunction(self._eth, name, args)


class FakeContract:
    def __init__(self, eth) -> None:
        self.functions = FakeFunctions(eth)


class FakeEth:
    def __init__(self, receipt=None, call_error=None, send_error=None, receipt_error=None) -> None:
        self.calls = []
        self.receipt = receipt
        self.receipt_error = receipt_error
        self.call_error = call_error
        self.send_error = send_error
        self.contract_address = None
        self.chain_id = 1315

    def contract(self, address, abi):
        self.contract_address = address
        return FakeContract(self)

    def get_transaction_count(self, address, block):
        self.calls.append(("nonce", address, block))
        return 12

    def send_raw_transaction(self, raw):
        self.calls.append(("send", raw))
        if self.send_error is not None:
            raise self.send_error
        return bytes.fromhex("ab" * 32)

    def wait_for_transaction_receipt(self, tx_hash, timeout=120, poll_latency=0.1):
        self.calls.append(("wait", tx_hash, timeout, poll_latency))
        if self.receipt_error is not None:
            raise self.receipt_error
        return self.receipt


class FakeW3:
    def __init__(self, **kwargs) -> None:
        self.eth = FakeEth(**kwargs)


class BrokenChainIdEth(FakeEth):
    @property
    def chain_id(self):
        raise ConnectionError("refused")

    @chain_id.setter
    def chain_id(self, value):
        pass


class FixedSigner(Signer):
    def get_address(self) -> str:
        return WALLET

    def sign_tx(self, unsigned_tx):
        self.signed = unsigned_tx
        return b"signed"


def make_public(**kwargs):
    return PublicClient(w3=FakeW3(**kwargs), poll_interval=0)


class TestDecodeCustomError:
    def test_known_selector(self):
        data = selector("DisputeModule__NotWhitelistedDisputeTag()")
        assert decode_custom_error(data, CONFIG.error_abis()) == "DisputeModule__NotWhitelistedDisputeTag"

    def test_unknown_selector(self):
        assert decode_custom_error("0x12345678", CONFIG.error_abis()) is None

    def test_empty_data(self):
        assert decode_custom_error(None, CONFIG.error_abis()) is None
        assert decode_custom_error("0x", CONFIG.error_abis()) is None


class TestSimulateContract:
    def test_success(self):
        rpc = make_public()
        call = rpc.simulate_contract(CONFIG, "cancelDispute", [1, b""], account=WALLET)
        assert isinstance(call, ContractCall)
        assert call.args == (1, b"")
        assert call.account == WALLET
        assert rpc.w3.eth.calls == [("call", "cancelDispute", (1, b""), {"from": WALLET})]
        assert rpc.w3.eth.contract_address == Web3.to_checksum_address(MODULE)

    def test_custom_error_is_named(self):
        data = selector("DisputeModule__NotInDisputeState()")
        rpc = make_public(call_error=ContractLogicError(message=data, data=data))
        with pytest.raises(SimulationError) as exc_info:
            rpc.simulate_contract(CONFIG, "resolveDispute", [1], account=WALLET)
        assert exc_info.value.error_name == "DisputeModule__NotInDisputeState"
        assert exc_info.value.reason == "DisputeModule__NotInDisputeState"

    def test_plain_revert(self):
        rpc = make_public(call_error=ContractLogicError(message="execution reverted"))
        with pytest.raises(SimulationError) as exc_info:
            rpc.simulate_contract(CONFIG, "resolveDispute", [1])
        assert exc_info.value.error_name is None
        assert "execution reverted" in exc_info.value.reason

    def test_transport_error(self):
        rpc = make_public(call_error=ConnectionError("refused"))
        with pytest.raises(RPCError):
            rpc.simulate_contract(CONFIG, "resolveDispute", [1])

    def test_unknown_function(self):
        with pytest.raises(ContractFunctionNotFoundError):
            make_public().simulate_contract(CONFIG, "deleteDispute", [1])

    def test_invalid_contract_address(self):
        with pytest.raises(InvalidAddressError):
            make_public().simulate_contract(dispute_module_config("0x1234"), "resolveDispute", [1])


class TestWaitForReceipt:
    def test_returns_mined_receipt(self):
        rpc = make_public(receipt={"status": 1, "blockNumber": 5})
        receipt = rpc.wait_for_transaction_receipt("0xabc")
        assert receipt["blockNumber"] == 5

    def test_waits_indefinitely_by_default(self):
        rpc = PublicClient(w3=FakeW3(receipt={"status": 1, "blockNumber": 5}), poll_interval=0.5)
        rpc.wait_for_transaction_receipt("0xabc")
        assert rpc.w3.eth.calls == [("wait", "0xabc", None, 0.5)]

    def test_forwards_timeout(self):
        rpc = make_public(receipt={"status": 1, "blockNumber": 5})
        rpc.wait_for_transaction_receipt("0xabc", timeout=30)
        assert rpc.w3.eth.calls == [("wait", "0xabc", 30, 0)]

    def test_timeout(self):
        rpc = make_public(receipt_error=TimeExhausted("not mined"))
        with pytest.raises(TimeoutError) as exc_info:
            rpc.wait_for_transaction_receipt("0xabc", timeout=0)
        assert isinstance(exc_info.value.__cause__, TimeExhausted)

    def test_transport_error(self):
        rpc = make_public(receipt_error=ConnectionError("refused"))
        with pytest.raises(RPCError):
            rpc.wait_for_transaction_receipt("0xabc", timeout=5)

    def test_chain_id(self):
        assert make_public().chain_id == 1315

    def test_chain_id_failure(self):
        w3 = FakeW3()
        w3.eth = BrokenChainIdEth()
        with pytest.raises(ChainIdResolutionError):
            PublicClient(w3=w3).chain_id


class TestWalletClient:
    def test_write_contract(self):
        rpc = make_public()
        signer = FixedSigner()
        wallet = WalletClient(rpc, signer, chain_id=1315)
        call = ContractCall(contract=CONFIG, function_name="resolveDispute", args=(7,), account=WALLET)
        tx_hash = wallet.write_contract(call)
        assert tx_hash == "0x" + "ab" * 32
        assert signer.signed["from"] == WALLET
        assert signer.signed["nonce"] == 12
        assert signer.signed["chainId"] == 1315
        assert ("nonce", WALLET, "pending") in rpc.w3.eth.calls
        assert ("send", b"signed") in rpc.w3.eth.calls

    def test_chain_id_resolved_from_node(self):
        wallet = WalletClient(make_public(), FixedSigner())
        assert wallet.chain_id == 1315
        assert wallet.address == WALLET

    def test_broadcast_transport_error(self):
        wallet = WalletClient(make_public(send_error=ConnectionError("down")), FixedSigner(), chain_id=1)
        call = ContractCall(contract=CONFIG, function_name="resolveDispute", args=(7,))
        with pytest.raises(RPCError):
            wallet.write_contract(call)

    def test_broadcast_revert(self):
        wallet = WalletClient(
            make_public(send_error=ContractLogicError(message="execution reverted")), FixedSigner(), chain_id=1
        )
        call = ContractCall(contract=CONFIG, function_name="resolveDispute", args=(7,))
        with pytest.raises(ContractCallError):
            wallet.write_contract(call)


class TestWaitTx:
    def test_success(self):
        rpc = make_public(receipt={"status": 1, "blockNumber": 3, "logs": []})
        assert wait_tx(rpc, "0xabc")["blockNumber"] == 3

    @pytest.mark.parametrize("status", [0, "0x0", b"\x00"])
    def test_reverted(self, status):
        rpc = make_public(receipt={"status": status, "blockNumber": 3, "logs": []})
        with pytest.raises(TransactionFailedError) as exc_info:
            wait_tx(rpc, "0xabc")
        assert exc_info.value.tx_id == "0xabc"

    def test_missing_event(self):
        rpc = make_public(receipt={"status": 1, "blockNumber": 3, "logs": []})
        with pytest.raises(EventNotFoundError) as exc_info:
            wait_tx_and_filter_log(rpc, "0xabc", CONFIG, "DisputeRaised")
        assert exc_info.value.event_name == "DisputeRaised"
