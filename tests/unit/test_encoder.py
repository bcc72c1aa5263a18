"""Unit tests for constructor argument encoding."""

import pytest

from solc_deployer.encoder import constructor_input_types, encode_constructor_args

TOKEN_ABI = [
    {
        "type": "constructor",
        "inputs": [
            {"name": "supply", "type": "uint256"},
            {"name": "active", "type": "bool"},
        ],
    },
    {"type": "function", "name": "totalSupply", "inputs": [], "outputs": [{"type": "uint256"}]},
]


class TestConstructorInputTypes:
    """Test the constructor_input_types function."""

    def test_reads_constructor_inputs(self):
        """Test that parameter types are listed in order."""
        assert constructor_input_types(TOKEN_ABI) == ["uint256", "bool"]

    def test_no_constructor(self):
        """Test that an ABI without constructor has no parameters."""
        assert constructor_input_types([{"type": "function", "name": "f", "inputs": []}]) == []

    def test_tuple_components(self):
        """Test that tuple parameters are expanded from their components."""
        abi = [
            {
                "type": "constructor",
                "inputs": [
                    {
                        "type": "tuple[]",
                        "components": [{"type": "address"}, {"type": "uint8"}],
                    }
                ],
            }
        ]
        assert constructor_input_types(abi) == ["(address,uint8)[]"]


class TestEncodeConstructorArgs:
    """Test the encode_constructor_args function."""

    def test_empty_arguments(self):
        """Test that a constructor without parameters encodes to an empty string."""
        assert encode_constructor_args([], [{"type": "constructor", "inputs": []}]) == ""
        assert encode_constructor_args([], []) == ""

    def test_encodes_static_values(self):
        """Test the 32-byte word encoding of static values, without 0x prefix."""
        encoded = encode_constructor_args([1, True], TOKEN_ABI)

        assert encoded == ("0" * 63 + "1") + ("0" * 63 + "1")
        assert not encoded.startswith("0x")

    def test_argument_count_mismatch(self):
        """Test that a wrong number of arguments is rejected."""
        with pytest.raises(ValueError, match="expects 2"):
            encode_constructor_args([1], TOKEN_ABI)

    def test_wrong_argument_type(self):
        """Test that a value the ABI type cannot hold is rejected as ValueError."""
        with pytest.raises(ValueError, match="Cannot encode constructor arguments"):
            encode_constructor_args(["notanumber", True], TOKEN_ABI)
