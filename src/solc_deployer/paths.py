"""Path management utilities for solc-deployer library."""

from pathlib import Path
from typing import Optional, Union

from .constants import DEFAULT_ARTIFACTS_DIR, DEFAULT_CONTRACTS_DIR


def get_default_contracts_dir() -> Path:
    """
    Get default contracts directory.

    Returns:
        Path to ./contracts
    """
    return Path.cwd() / DEFAULT_CONTRACTS_DIR


def get_default_artifacts_dir() -> Path:
    """
    Get default artifacts directory.

    Returns:
        Path to ./build/artifacts
    """
    return Path.cwd() / DEFAULT_ARTIFACTS_DIR


def get_artifact_path(
    contract_name: str, artifacts_dir: Optional[Union[Path, str]] = None
) -> Path:
    """
    Get the artifact file path for a contract.

    Args:
        contract_name: Contract name without extension
        artifacts_dir: Custom artifacts directory (defaults to ./build/artifacts)

    Returns:
        Path to {artifacts_dir}/{contract_name}.json
    """
    if artifacts_dir is None:
        artifacts_dir = get_default_artifacts_dir()
    else:
        artifacts_dir = Path(artifacts_dir).absolute()

    return artifacts_dir / f"{contract_name}.json"


def get_jsonrpc_url(port: int, host: str = "localhost") -> str:
    """Build the HTTP JSON-RPC endpoint for a local node."""
    return f"http://{host}:{port}"
