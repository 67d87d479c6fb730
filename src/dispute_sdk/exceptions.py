"""
Dispute SDK Exceptions Module

Provides fine-grained exception types for precise error handling by callers.

Exception Hierarchy:
    SDKError (Base Class)
    ├── ConfigurationError
    │   ├── MissingContractAddressError
    │   ├── InvalidPrivateKeyError
    │   └── ChainIdResolutionError
    ├── NetworkError
    │   ├── RPCError
    │   └── TimeoutError
    ├── ContractError
    │   ├── ContractCallError
    │   │   └── SimulationError
    │   ├── ContractFunctionNotFoundError
    │   ├── TransactionFailedError
    │   └── EventNotFoundError
    ├── SignatureError
    │   └── SignerNotAvailableError
    ├── DataError
    │   ├── InvalidAddressError
    │   └── SerializationError
    └── OperationError

Example:
    >>> from dispute_sdk.exceptions import OperationError
    >>> try:
    ...     client.dispute.raise_dispute(request)
    ... except OperationError as e:
    ...     print(f"{e.step} failed: {e.reason}")

Note:
    - All exceptions inherit from SDKError
    - Each exception has code and details attributes
    - Dispute operations only ever raise OperationError; the lower level
      error is available as ``__cause__``
"""

from typing import Any, NoReturn, Optional


class SDKError(Exception):
    """
    SDK Base Exception.

    Base class for all SDK exceptions, providing unified error code and details mechanism.

    Attributes:
        code: Error code string for programmatic handling
        details: Error details, can be any type

    Args:
        message: Error message
        code: Error code, defaults to "SDK_ERROR"
        details: Error details

    Example:
        >>> raise SDKError("Something went wrong", code="CUSTOM_ERROR", details={"key": "value"})
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.code = code or "SDK_ERROR"
        self.details = details

    @property
    def message(self) -> str:
        """Error message without code or details."""
        return super().__str__()

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            return f"[{self.code}] {super().__str__()} - {self.details}"
        return f"[{self.code}] {super().__str__()}"


# ============ Configuration Exceptions ============


class ConfigurationError(SDKError):
    """Raised when SDK configuration is incorrect."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR", details)


class MissingContractAddressError(ConfigurationError):
    """
    Missing Contract Address Error.

    Raised when a contract is needed but its address is not configured.

    Args:
        contract_name: Contract name (e.g., "dispute")

    Example:
        >>> raise MissingContractAddressError("dispute")
        # [MISSING_CONTRACT_ADDRESS] Contract address missing for 'dispute'
    """

    def __init__(self, contract_name: str) -> None:
        super().__init__(
            f"Contract address missing for '{contract_name}'",
            details={"contract": contract_name}
        )
        self.code = "MISSING_CONTRACT_ADDRESS"


class InvalidPrivateKeyError(ConfigurationError):
    """
    Invalid Private Key Error.

    Args:
        reason: Reason for invalidity

    Example:
        >>> raise InvalidPrivateKeyError("Expected 64 hex characters")
    """

    def __init__(self, reason: str = "Invalid format") -> None:
        super().__init__(f"Private key invalid: {reason}")
        self.code = "INVALID_PRIVATE_KEY"


class ChainIdResolutionError(ConfigurationError):
    """Raised when the chain ID cannot be fetched from the RPC node."""

    def __init__(self, rpc_url: Optional[str] = None) -> None:
        super().__init__(
            "Failed to resolve chain ID from RPC",
            details={"rpc_url": rpc_url}
        )
        self.code = "CHAIN_ID_RESOLUTION_FAILED"


# ============ Network Exceptions ============


class NetworkError(SDKError):
    """Raised when a network request fails."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, "NETWORK_ERROR", details)


class RPCError(NetworkError):
    """
    RPC Call Failed Error.

    Raised when a JSON-RPC request to the node fails at the transport level.

    Args:
        message: Error message
        rpc_url: RPC node URL
        method: Method name called

    Example:
        >>> raise RPCError("Connection refused", rpc_url="http://...", method="eth_sendRawTransaction")
    """

    def __init__(
        self,
        message: str,
        rpc_url: Optional[str] = None,
        method: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            details={"rpc_url": rpc_url, "method": method}
        )
        self.code = "RPC_ERROR"


class TimeoutError(NetworkError):
    """
    Request Timeout Error.

    Raised when an operation does not complete within the configured time.

    Args:
        operation: Operation name
        timeout_seconds: Timeout in seconds

    Example:
        >>> raise TimeoutError("wait_for_transaction_receipt", 30.0)
    """

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Operation '{operation}' timed out after {timeout_seconds}s",
            details={"operation": operation, "timeout": timeout_seconds}
        )
        self.code = "TIMEOUT_ERROR"


# ============ Contract Exceptions ============


class ContractError(SDKError):
    """Raised when interaction with a smart contract fails."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, "CONTRACT_ERROR", details)


class ContractCallError(ContractError):
    """
    Contract Call Failed Error.

    Args:
        contract: Contract name or address
        method: Method name
        reason: Failure reason

    Example:
        >>> raise ContractCallError("dispute", "raiseDispute", "execution reverted")
    """

    def __init__(
        self,
        contract: str,
        method: str,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Contract call failed: {contract}.{method}",
            details={"contract": contract, "method": method, "reason": reason}
        )
        self.code = "CONTRACT_CALL_FAILED"
        self.reason = reason


class SimulationError(ContractCallError):
    """
    Contract Simulation Failed Error.

    Raised when the dry run of a contract call reverts against current chain
    state. ``error_name`` holds the decoded custom error, if any.

    Example:
        >>> raise SimulationError("dispute", "raiseDispute", "DisputeModule__NotRegisteredIpId",
        ...                       error_name="DisputeModule__NotRegisteredIpId")
    """

    def __init__(
        self,
        contract: str,
        method: str,
        reason: Optional[str] = None,
        error_name: Optional[str] = None,
    ) -> None:
        super().__init__(contract, method, reason)
        self.code = "SIMULATION_FAILED"
        self.error_name = error_name


class ContractFunctionNotFoundError(ContractError):
    """
    Contract Function Not Found Error.

    Raised when attempting to call a method that is not in the contract ABI.

    Args:
        contract: Contract address or name
        method: Method name
        arity: Number of arguments (to distinguish overloads)
    """

    def __init__(
        self,
        contract: str,
        method: str,
        arity: Optional[int] = None,
    ) -> None:
        msg = f"Function '{method}' not found in contract '{contract}'"
        if arity is not None:
            msg += f" with arity {arity}"
        super().__init__(
            msg,
            details={"contract": contract, "method": method, "arity": arity}
        )
        self.code = "CONTRACT_FUNCTION_NOT_FOUND"


class TransactionFailedError(ContractError):
    """
    Transaction Execution Failed Error.

    Raised when a mined transaction reverted.

    Example:
        >>> raise TransactionFailedError(tx_id="0x123...", reason="reverted")
    """

    def __init__(
        self,
        tx_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Transaction failed: {reason or 'unknown reason'}",
            details={"tx_id": tx_id, "reason": reason}
        )
        self.code = "TRANSACTION_FAILED"
        self.tx_id = tx_id


class EventNotFoundError(ContractError):
    """
    Event Not Found Error.

    Raised when a confirmed transaction does not contain the expected event log.

    Args:
        event_name: Name of the expected event
        tx_id: Transaction hash

    Example:
        >>> raise EventNotFoundError("DisputeRaised", tx_id="0xabc...")
    """

    def __init__(self, event_name: str, tx_id: Optional[str] = None) -> None:
        super().__init__(
            f"Event '{event_name}' not found in transaction logs",
            details={"event": event_name, "tx_id": tx_id}
        )
        self.code = "EVENT_NOT_FOUND"
        self.event_name = event_name
        self.tx_id = tx_id


# ============ Signature Exceptions ============


class SignatureError(SDKError):
    """Raised when a signing operation fails."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, "SIGNATURE_ERROR", details)


class SignerNotAvailableError(SignatureError):
    """
    Signer Not Available Error.

    Raised when a signer is required but not configured.

    Example:
        >>> raise SignerNotAvailableError("account is null")
    """

    def __init__(self, reason: str = "Signer not configured") -> None:
        super().__init__(reason)
        self.code = "SIGNER_NOT_AVAILABLE"


# ============ Data Exceptions ============


class DataError(SDKError):
    """Raised when data format or content is incorrect."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, "DATA_ERROR", details)


class InvalidAddressError(DataError):
    """
    Invalid Address Format Error.

    Args:
        address: Invalid address
        expected_format: Description of expected format

    Example:
        >>> raise InvalidAddressError("invalid_addr")
    """

    def __init__(
        self,
        address: str,
        expected_format: str = "20 bytes hex",
    ) -> None:
        super().__init__(
            f"Invalid address format: {address}",
            details={"address": address, "expected": expected_format}
        )
        self.code = "INVALID_ADDRESS"


class SerializationError(DataError):
    """
    Serialization Failed Error.

    Raised when an argument cannot be encoded for the contract call,
    or a log cannot be decoded.

    Example:
        >>> raise SerializationError("value exceeds 32 bytes")
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Serialization failed: {reason}")
        self.code = "SERIALIZATION_ERROR"


# ============ Operation Exceptions ============


class OperationError(SDKError):
    """
    Operation Failed Error.

    The single error type surfaced by dispute operations. Wraps the
    underlying failure with an operation specific message.

    Attributes:
        context: Operation message (e.g., "Failed to raise dispute")
        reason: Message of the underlying failure
        step: Failing stage: "simulate", "submit" or "wait"
        tx_hash: Transaction hash, known once submission succeeded

    Example:
        >>> raise OperationError("Failed to cancel dispute", "DisputeModule__NotDisputeInitiator",
        ...                      step="simulate")
    """

    def __init__(
        self,
        context: str,
        reason: str,
        step: Optional[str] = None,
        tx_hash: Optional[str] = None,
    ) -> None:
        details = {"step": step, "tx_hash": tx_hash} if step or tx_hash else None
        super().__init__(f"{context}: {reason}", "OPERATION_FAILED", details)
        self.context = context
        self.reason = reason
        self.step = step
        self.tx_hash = tx_hash


def _describe(error: BaseException) -> str:
    if isinstance(error, ContractCallError) and error.reason:
        return error.reason
    if isinstance(error, SDKError):
        return error.message
    message = str(error)
    return message or type(error).__name__


def handle_error(
    error: BaseException,
    message: str,
    step: Optional[str] = None,
    tx_hash: Optional[str] = None,
) -> NoReturn:
    """
    Translate a raw failure into an OperationError and raise it.

    Args:
        error: Caught exception
        message: Operation context, prefixed to the reason
        step: Failing stage, if known
        tx_hash: Transaction hash, if the transaction was already broadcast

    Raises:
        OperationError: Always, chained from ``error``
    """
    raise OperationError(message, _describe(error), step=step, tx_hash=tx_hash) from error
