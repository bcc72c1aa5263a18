"""Data types and dataclasses for solc-deployer library."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import RECEIPT_TIMEOUT

# Keys of a network record modelled as fields; anything else is carried in `extra`
_RECORD_FIELDS = (
    "compiler_version",
    "source_fingerprint",
    "optimizer_enabled",
    "abi",
    "unlinked_binary",
    "updated_at",
    "address",
    "constructor_args",
)


@dataclass(frozen=True)
class NetworkRecord:
    """Compiled and deployed state of a contract on one network."""

    # Required fields (set by compilation)
    compiler_version: str  # e.g., "0.4.11"
    source_fingerprint: str  # 0x-prefixed keccak256 of the source text
    optimizer_enabled: bool
    abi: List[Dict[str, Any]]
    unlinked_binary: str  # 0x-prefixed hex bytecode
    updated_at: int  # Unix time in milliseconds

    # Optional fields (set by deployment)
    address: Optional[str] = None
    constructor_args: Optional[str] = None

    # Unmodelled keys found on disk, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_deployed(self) -> bool:
        return self.address is not None

    def with_deployment(self, address: str, constructor_args: str) -> "NetworkRecord":
        """Return a copy carrying deployment fields; compiled fields are kept."""
        return replace(self, address=address, constructor_args=constructor_args)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "compiler_version": self.compiler_version,
            "source_fingerprint": self.source_fingerprint,
            "optimizer_enabled": self.optimizer_enabled,
            "abi": self.abi,
            "unlinked_binary": self.unlinked_binary,
            "updated_at": self.updated_at,
        }
        if self.address is not None:
            data["address"] = self.address
        if self.constructor_args is not None:
            data["constructor_args"] = self.constructor_args
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkRecord":
        """
        Build a record from its JSON form.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            compiler_version=data["compiler_version"],
            source_fingerprint=data["source_fingerprint"],
            optimizer_enabled=bool(data["optimizer_enabled"]),
            abi=data["abi"],
            unlinked_binary=data["unlinked_binary"],
            updated_at=data["updated_at"],
            address=data.get("address"),
            constructor_args=data.get("constructor_args"),
            extra={k: v for k, v in data.items() if k not in _RECORD_FIELDS},
        )


@dataclass(frozen=True)
class ContractArtifact:
    """Multi-network artifact for one contract, persisted as <contract_name>.json."""

    contract_name: str
    networks: Dict[int, NetworkRecord] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def network(self, network_id: int) -> Optional[NetworkRecord]:
        return self.networks.get(network_id)

    def to_dict(self) -> Dict[str, Any]:
        # JSON object keys are strings; they still represent numeric network ids
        data: Dict[str, Any] = dict(self.extra)
        data["contract_name"] = self.contract_name
        data["networks"] = {
            str(network_id): record.to_dict()
            for network_id, record in self.networks.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractArtifact":
        """
        Build an artifact from its JSON form.

        Raises:
            KeyError: If contract_name or a required record field is missing
            ValueError: If a network key is not numeric
        """
        networks = {
            int(key): NetworkRecord.from_dict(record)
            for key, record in data.get("networks", {}).items()
        }
        return cls(
            contract_name=data["contract_name"],
            networks=networks,
            extra={k: v for k, v in data.items() if k not in ("contract_name", "networks")},
        )


@dataclass
class CompilerOptions:
    """Options for a compile run."""

    contracts_dir: Path
    artifacts_dir: Path
    network_id: int
    optimizer_enabled: bool = False


@dataclass
class DeployerOptions:
    """Options for deployments against a node."""

    artifacts_dir: Path
    network_id: int
    jsonrpc_port: int
    gas_price: str
    from_address: Optional[str] = None  # Defaults to the node's first account
    jsonrpc_url: Optional[str] = None  # Overrides the URL derived from jsonrpc_port
    receipt_timeout: float = RECEIPT_TIMEOUT  # Seconds to wait for the confirmed address


@dataclass
class CompileResult:
    """Outcome of compiling every source file in a contracts directory."""

    compiled: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)  # contract name -> error
    diagnostics: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class DeployedContract:
    """A contract instance created on chain and recorded in its artifact."""

    contract_name: str
    network_id: int
    address: str
    abi: List[Dict[str, Any]]
    constructor_args: str
    transaction_hash: Optional[str] = None
