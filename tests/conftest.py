"""Shared pytest fixtures for solc-deployer tests."""

import hashlib
import json
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from solc_deployer.solc import collect_sources
from solc_deployer.types import CompilerOptions, DeployerOptions

FOO_SOURCE = "pragma solidity ^0.4.11; contract Foo {}"

DEPLOYED_ADDRESS = "0x1111111111111111111111111111111111111111"
ACCOUNT_ADDRESS = "0x2222222222222222222222222222222222222222"
TX_HASH = "0x" + "ab" * 32


class FakeCompiler:
    """Stands in for solc: returns a constructor-only ABI and bytecode derived from the source."""

    def __init__(self, build: str, factory: "FakeCompilerFactory"):
        self.build = build
        self.factory = factory

    def compile(self, sources, optimizer_enabled, find_imports) -> Dict[str, Any]:
        self.factory.calls.append((self.build, dict(sources), optimizer_enabled))
        # Exercise the import callback the way solc would
        collected = collect_sources(sources, find_imports)
        self.factory.resolved_units.append(sorted(collected))

        contracts = {}
        for file_name, source in sources.items():
            contract_name = file_name[: -len(".sol")]
            if contract_name in self.factory.broken:
                continue
            digest = hashlib.sha256(f"{source}:{optimizer_enabled}".encode()).hexdigest()
            contracts[f"{file_name}:{contract_name}"] = {
                "interface": json.dumps(self.factory.abi),
                "bytecode": "6060" + digest,
            }
        return {"contracts": contracts, "errors": list(self.factory.errors.get(file_name, []))}


class FakeCompilerFactory:
    """Compiler factory recording every compile call."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.resolved_units: List[List[str]] = []
        self.errors: Dict[str, List[str]] = {}
        self.broken: set = set()
        self.abi: List[Dict[str, Any]] = [
            {"type": "constructor", "inputs": [], "payable": False},
            {"type": "function", "name": "owner", "inputs": [], "outputs": [{"type": "address"}]},
        ]

    def __call__(self, build: str) -> FakeCompiler:
        return FakeCompiler(build, self)


class StubChain:
    """Chain collaborator whose creation callback fires pending, then confirmed.

    With a delay, create() returns at once and the callbacks arrive later
    from a background thread.
    """

    def __init__(
        self,
        address: Optional[str] = DEPLOYED_ADDRESS,
        accounts: Optional[List[str]] = None,
        error_on: Optional[str] = None,
        gas_estimate: int = 100000,
        delay: Optional[float] = None,
    ):
        self.address = address
        self.accounts = [ACCOUNT_ADDRESS] if accounts is None else accounts
        self.error_on = error_on  # None, "pending" or "confirmed"
        self.gas_estimate = gas_estimate
        self.delay = delay
        self.estimates: List[Dict[str, Any]] = []
        self.created: List[tuple] = []
        self.threads: List[threading.Thread] = []

    def get_available_addresses(self) -> List[str]:
        return list(self.accounts)

    def estimate_gas(self, tx_data: Dict[str, Any]) -> int:
        self.estimates.append(tx_data)
        return self.gas_estimate

    def create(self, abi, constructor_args, tx_data, callback) -> None:
        self.created.append((abi, list(constructor_args), dict(tx_data)))
        if self.delay is None:
            self._notify(callback)
            return
        thread = threading.Thread(target=self._notify_later, args=(callback,), daemon=True)
        self.threads.append(thread)
        thread.start()

    def _notify_later(self, callback) -> None:
        time.sleep(self.delay)
        self._notify(callback)

    def _notify(self, callback) -> None:
        if self.error_on == "pending":
            callback(RuntimeError("insufficient funds"), None)
            return
        callback(None, {"transactionHash": TX_HASH, "address": None})
        if self.error_on == "confirmed":
            callback(RuntimeError("out of gas"), None)
            return
        callback(None, {"transactionHash": TX_HASH, "address": self.address})


@pytest.fixture
def contracts_dir(tmp_path: Path) -> Path:
    """Create a contracts directory holding Foo.sol."""
    path = tmp_path / "contracts"
    path.mkdir()
    (path / "Foo.sol").write_text(FOO_SOURCE)
    return path


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) artifacts directory."""
    return tmp_path / "build" / "artifacts"


@pytest.fixture
def compiler_factory() -> FakeCompilerFactory:
    return FakeCompilerFactory()


@pytest.fixture
def compiler_options(contracts_dir: Path, artifacts_dir: Path) -> CompilerOptions:
    return CompilerOptions(
        contracts_dir=contracts_dir,
        artifacts_dir=artifacts_dir,
        network_id=50,
        optimizer_enabled=False,
    )


@pytest.fixture
def deployer_options(artifacts_dir: Path) -> DeployerOptions:
    return DeployerOptions(
        artifacts_dir=artifacts_dir,
        network_id=50,
        jsonrpc_port=8545,
        gas_price="20000000000",
    )


@pytest.fixture
def stub_chain() -> StubChain:
    return StubChain()


@pytest.fixture
def sample_record_dict() -> Dict[str, Any]:
    """A compiled network record in its JSON form."""
    return {
        "compiler_version": "0.4.11",
        "source_fingerprint": "0x" + "11" * 32,
        "optimizer_enabled": False,
        "abi": [{"type": "constructor", "inputs": []}],
        "unlinked_binary": "0x6060604052",
        "updated_at": 1500000000000,
    }


@pytest.fixture
def make_chain():
    """Return the StubChain class for tests needing custom chain behaviour."""
    return StubChain
