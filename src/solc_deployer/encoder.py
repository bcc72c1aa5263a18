"""Constructor argument encoding for solc-deployer library."""

from typing import Any, Dict, List, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError


def _canonical_type(abi_input: Dict[str, Any]) -> str:
    # Tuples are spelled out from their components, keeping any array suffix
    abi_type = abi_input["type"]
    if not abi_type.startswith("tuple"):
        return abi_type
    components = ",".join(_canonical_type(c) for c in abi_input.get("components", []))
    return f"({components}){abi_type[len('tuple'):]}"


def constructor_input_types(abi: List[Dict[str, Any]]) -> List[str]:
    """
    Get the canonical constructor parameter types from an ABI.

    Args:
        abi: Contract ABI

    Returns:
        List of types, e.g. ["address", "uint256"]; empty if no constructor
    """
    for item in abi:
        if item.get("type") == "constructor":
            return [_canonical_type(i) for i in item.get("inputs", [])]
    return []


def encode_constructor_args(args: Sequence[Any], abi: List[Dict[str, Any]]) -> str:
    """
    ABI-encode constructor arguments.

    Args:
        args: Constructor argument values
        abi: Contract ABI

    Returns:
        Hex string without 0x prefix; empty string for no arguments

    Raises:
        ValueError: If the arguments do not match the constructor inputs
    """
    types = constructor_input_types(abi)
    if len(args) != len(types):
        raise ValueError(
            f"Constructor expects {len(types)} argument(s), got {len(args)}"
        )
    if not types:
        return ""
    try:
        encoded = encode(types, list(args))
    except EncodingError as e:
        raise ValueError(f"Cannot encode constructor arguments as {types}: {e}") from e
    return encoded.hex()
