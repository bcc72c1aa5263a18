"""Contract artifact merge rules and persistence for solc-deployer library."""

import json
from pathlib import Path
from typing import Optional

from .constants import JSON_INDENT
from .exceptions import NetworkDataNotFoundError
from .types import ContractArtifact, NetworkRecord


def is_stale(
    record: Optional[NetworkRecord], source_fingerprint: str, optimizer_enabled: bool
) -> bool:
    """
    Decide whether a network record must be recompiled.

    Args:
        record: Existing record for the target network, if any
        source_fingerprint: Fingerprint of the current source text
        optimizer_enabled: Current optimizer setting

    Returns:
        True if the record is absent or was built from different inputs
    """
    if record is None:
        return True
    return (
        record.source_fingerprint != source_fingerprint
        or record.optimizer_enabled != optimizer_enabled
    )


def merge_artifact(
    existing: Optional[ContractArtifact],
    contract_name: str,
    network_id: int,
    record: NetworkRecord,
) -> ContractArtifact:
    """
    Merge a network record into an artifact by network key.

    The record for network_id is replaced wholesale; records for every other
    network and any unmodelled top-level keys are carried over unchanged.

    Args:
        existing: Artifact currently on disk (None if absent)
        contract_name: Name used when no artifact exists yet
        network_id: Network key to write
        record: New record for that network

    Returns:
        New ContractArtifact; existing is not modified
    """
    if existing is None:
        return ContractArtifact(contract_name=contract_name, networks={network_id: record})

    networks = dict(existing.networks)
    networks[network_id] = record
    return ContractArtifact(
        contract_name=existing.contract_name,
        networks=networks,
        extra=dict(existing.extra),
    )


def record_deployment(
    artifact: ContractArtifact, network_id: int, address: str, constructor_args: str
) -> ContractArtifact:
    """
    Merge deployment results into the record of one network.

    Args:
        artifact: Artifact holding compiled data for network_id
        network_id: Network the contract was deployed to
        address: Address of the created contract
        constructor_args: Hex-encoded constructor arguments

    Returns:
        New ContractArtifact with address and constructor_args set for network_id

    Raises:
        NetworkDataNotFoundError: If the artifact has no record for network_id
    """
    record = artifact.network(network_id)
    if record is None:
        raise NetworkDataNotFoundError(
            f"Data not found in artifact for contract: {artifact.contract_name} "
            f"(network {network_id})"
        )
    return merge_artifact(
        artifact,
        artifact.contract_name,
        network_id,
        record.with_deployment(address, constructor_args),
    )


def load_artifact(artifact_path: Path) -> Optional[ContractArtifact]:
    """
    Load an artifact from disk.

    Args:
        artifact_path: Path to <contract_name>.json

    Returns:
        ContractArtifact, or None if the file doesn't exist or is corrupted
    """
    try:
        with open(artifact_path) as f:
            data = json.load(f)
        return ContractArtifact.from_dict(data)
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError):
        return None


def save_artifact(artifact: ContractArtifact, artifact_path: Path) -> None:
    """
    Write an artifact to disk, replacing the file.

    Args:
        artifact: Artifact to save
        artifact_path: Path to <contract_name>.json

    Creates parent directories if they don't exist.
    """
    artifact_path.parent.mkdir(parents=True, exist_ok=True)
    with open(artifact_path, "w") as f:
        json.dump(artifact.to_dict(), f, indent=JSON_INDENT)
