"""Integration tests against an installed solc build."""

import json

import pytest
import solcx

from solc_deployer.constants import COMPILER_BINARIES
from solc_deployer.solc import SolcCompiler

INSTALLED = {str(v) for v in solcx.get_installed_solc_versions()}
AVAILABLE = [build for version, build in COMPILER_BINARIES.items() if version in INSTALLED]

pytestmark = pytest.mark.skipif(not AVAILABLE, reason="no solc build installed")


def no_imports(import_path):
    return {"contents": None}


class TestSolcCompiler:
    """Test the SolcCompiler class with a real compiler."""

    def test_compiles_contract(self):
        """Test that output is keyed by file and contract name."""
        compiler = SolcCompiler(AVAILABLE[-1], install=False)
        source = f"pragma solidity ^{compiler.version}; contract Foo {{ uint public x; }}"

        output = compiler.compile({"Foo.sol": source}, False, no_imports)

        compiled = output["contracts"]["Foo.sol:Foo"]
        assert compiled["bytecode"]
        assert any(item.get("name") == "x" for item in json.loads(compiled["interface"]))

    def test_syntax_error_reported(self):
        """Test that a broken source yields diagnostics and no contract."""
        compiler = SolcCompiler(AVAILABLE[-1], install=False)
        source = f"pragma solidity ^{compiler.version}; contract Foo {{"

        output = compiler.compile({"Foo.sol": source}, False, no_imports)

        assert "Foo.sol:Foo" not in output["contracts"]
        assert output["errors"]
