"""
Dispute SDK Utility Module

Provides the encoding helpers used when building contract calls and decoding results.

Functions:
    keccak256_hex: Keccak-256 hash (hexadecimal)
    keccak256_bytes: Keccak-256 hash (bytes)
    abi_signature: Canonical ``name(type,...)`` signature of an ABI entry
    normalize_hash: Normalize hash strings
    to_hex: Convert bytes-like values to 0x-prefixed hex
    to_checksum_address: Checksum an address given in any hex case
    string_to_bytes32: Encode a short string as a right-padded bytes32
    to_calldata_bytes: Normalize optional free-form calldata to bytes
    to_uint256: Parse an integer identifier without loss of precision

Example:
    >>> from dispute_sdk.utils import string_to_bytes32, to_uint256
    >>> string_to_bytes32("PLAGIARISM")[:10]
    b'PLAGIARISM'
    >>> to_uint256("0x10")
    16

Note:
    - Keccak-256 is the hash used for event topics and error selectors,
      slightly different from SHA3-256
    - Identifiers are Python ints end to end, never floats
"""

from typing import Any, Dict, Optional, Union

from Crypto.Hash import keccak
from web3 import Web3

from .exceptions import InvalidAddressError, SerializationError

UINT256_MAX = 2**256 - 1


def keccak256_hex(payload: bytes) -> str:
    """
    Calculate Keccak-256 hash value (hexadecimal format).

    Args:
        payload: Bytes to hash

    Returns:
        Hexadecimal hash string with 0x prefix (64 chars + prefix)

    Example:
        >>> keccak256_hex(b"hello")
        '0x1c8aff950685c2ed4bc3174f3472287b56d9517b9c948127319a09a7a36deac8'
    """
    hasher = keccak.new(digest_bits=256)
    hasher.update(payload)
    return "0x" + hasher.hexdigest()


def keccak256_bytes(payload: bytes) -> bytes:
    """Same as keccak256_hex, but returns the raw 32-byte digest."""
    hasher = keccak.new(digest_bits=256)
    hasher.update(payload)
    return hasher.digest()


def _expand_type(item: Dict[str, Any]) -> str:
    """Expand tuple type to (type1,type2,...) format."""
    t = item.get("type", "")
    if t.startswith("tuple"):
        inner = ",".join(_expand_type(c) for c in item.get("components", []))
        return f"({inner}){t[5:]}"
    return t


def abi_signature(entry: Dict[str, Any]) -> str:
    """
    Build the canonical signature of an ABI function, event or error entry.

    Example:
        >>> abi_signature({"name": "cancelDispute", "inputs": [{"type": "uint256"}, {"type": "bytes"}]})
        'cancelDispute(uint256,bytes)'
    """
    types = ",".join(_expand_type(inp) for inp in entry.get("inputs", []))
    return f"{entry.get('name')}({types})"


def normalize_hash(value: Optional[str]) -> str:
    """
    Normalize hash string to lowercase without 0x prefix.

    Example:
        >>> normalize_hash("0xABC123")
        'abc123'
        >>> normalize_hash(None)
        ''
    """
    if not value:
        return ""
    cleaned = value.lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]
    return cleaned


def to_hex(value: Union[bytes, bytearray, str]) -> str:
    """
    Convert bytes (or HexBytes) to a 0x-prefixed lowercase hex string.

    Strings are normalized and returned with a single 0x prefix.
    """
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return "0x" + normalize_hash(value)


def string_to_bytes32(value: str) -> bytes:
    """
    Encode a string as UTF-8 and right-pad it with zeros to 32 bytes.

    Args:
        value: Short string, e.g. a dispute tag such as "PLAGIARISM"

    Returns:
        32 bytes

    Raises:
        SerializationError: Encoded value longer than 32 bytes
    """
    raw = value.encode("utf-8")
    if len(raw) > 32:
        raise SerializationError(f"'{value}' is {len(raw)} bytes, exceeds bytes32")
    return raw.ljust(32, b"\x00")


def to_calldata_bytes(value: Optional[Union[str, bytes]]) -> bytes:
    """
    Normalize optional free-form calldata.

    Missing or empty calldata becomes an empty byte string. Hex strings
    may carry a 0x prefix.

    Raises:
        SerializationError: String is not valid hex
    """
    if not value:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    cleaned = normalize_hash(value)
    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise SerializationError(f"calldata is not valid hex: {value!r}") from e


def to_uint256(value: Union[int, str]) -> int:
    """
    Parse an unsigned 256-bit identifier.

    Accepts ints, decimal strings and 0x-prefixed hex strings.

    Example:
        >>> to_uint256("1606938044258990275541962092341162602522202993782792835301376") == 2**200
        True

    Raises:
        SerializationError: Not an integer, negative, or wider than 256 bits
    """
    if isinstance(value, bool):
        raise SerializationError(f"expected integer identifier, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith("0x"):
                number = int(text, 16)
            else:
                number = int(text, 10)
        except ValueError as e:
            raise SerializationError(f"expected integer identifier, got {value!r}") from e
    else:
        raise SerializationError(f"expected integer identifier, got {type(value).__name__}")

    if number < 0 or number > UINT256_MAX:
        raise SerializationError(f"{number} is out of uint256 range")
    return number


def to_checksum_address(address: str) -> str:
    """
    Checksum an address given in any hex case.

    Raises:
        InvalidAddressError: Not a 20-byte hex address
    """
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError) as e:
        raise InvalidAddressError(address) from e
