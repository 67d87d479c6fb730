"""
Event log decoding.

Matches receipt logs against an event ABI by emitting address and topic0,
then decodes indexed values from topics and the rest from log data with
eth_abi.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from ..exceptions import SerializationError
from ..utils import abi_signature, keccak256_hex, normalize_hash, to_hex

logger = logging.getLogger("dispute_sdk.events")

_DYNAMIC_TYPES = ("string", "bytes")


def event_topic(event_abi: Dict[str, Any]) -> str:
    """Topic0 of an event: keccak256 of its canonical signature."""
    return keccak256_hex(abi_signature(event_abi).encode("utf-8"))


def _decode_topic_value(value_hex: str, typ: str) -> Any:
    raw = bytes.fromhex(normalize_hash(value_hex))
    if typ in _DYNAMIC_TYPES or typ.endswith("]") or typ.startswith("tuple"):
        # indexed reference types only keep their hash
        return "0x" + raw.hex()
    return abi_decode([typ], raw)[0]


def _field(log: Any, key: str) -> Any:
    if isinstance(log, Mapping):
        return log.get(key)
    return getattr(log, key, None)


def decode_log(event_abi: Dict[str, Any], log: Any) -> Dict[str, Any]:
    """
    Decode a single log into a dict of event argument values.

    Integers are returned as Python ints (arbitrary precision), addresses as
    checksummed strings, bytes values as raw bytes.

    Raises:
        SerializationError: log data does not match the event ABI
    """
    topics = [to_hex(t) for t in (_field(log, "topics") or [])]
    data = _field(log, "data") or b""
    data_bytes = bytes(data) if isinstance(data, (bytes, bytearray)) else bytes.fromhex(normalize_hash(data))

    inputs = event_abi.get("inputs", [])
    indexed_inputs = [i for i in inputs if i.get("indexed")]
    non_indexed_inputs = [i for i in inputs if not i.get("indexed")]

    if len(topics) < len(indexed_inputs) + 1:
        raise SerializationError(
            f"{event_abi.get('name')} log has {len(topics)} topics, expected {len(indexed_inputs) + 1}"
        )

    decoded: Dict[str, Any] = {}
    try:
        # indexed params are in topics[1..]
        for idx, inp in enumerate(indexed_inputs):
            decoded[inp["name"]] = _decode_topic_value(topics[idx + 1], inp["type"])

        if non_indexed_inputs:
            types = [i["type"] for i in non_indexed_inputs]
            values = abi_decode(types, data_bytes)
            for inp, val in zip(non_indexed_inputs, values):
                decoded[inp["name"]] = val
    except (DecodingError, ValueError) as e:
        raise SerializationError(f"cannot decode {event_abi.get('name')} log: {e}") from e

    # preserve ABI order
    return {inp["name"]: decoded[inp["name"]] for inp in inputs}


def filter_logs(
    logs: Iterable[Any],
    event_abi: Dict[str, Any],
    address: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Decode every log in ``logs`` that was emitted for ``event_abi``.

    Args:
        logs: Receipt logs
        event_abi: Event ABI entry
        address: Only consider logs emitted by this contract, if given

    Returns:
        Decoded argument dicts, in log order
    """
    topic0 = normalize_hash(event_topic(event_abi))
    wanted_address = normalize_hash(address) if address else None

    matched = []
    for log in logs:
        topics = _field(log, "topics") or []
        if not topics or normalize_hash(to_hex(topics[0])) != topic0:
            continue
        if wanted_address and normalize_hash(_field(log, "address")) != wanted_address:
            continue
        matched.append(decode_log(event_abi, log))

    logger.debug("Matched %d %s log(s)", len(matched), event_abi.get("name"))
    return matched
