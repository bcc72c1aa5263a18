"""
solc-deployer: compile Solidity contracts into per-network artifacts and deploy them
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import is_stale, load_artifact, merge_artifact, record_deployment, save_artifact
from .compiler import Compiler
from .deployer import Deployer
from .exceptions import (
    ArtifactNotFoundError,
    CompilationError,
    ContractsDirNotFoundError,
    DeployerError,
    DeploymentFailedError,
    MigrationError,
    NetworkDataNotFoundError,
    RPCError,
    SolidityVersionNotFoundError,
    SourcesNotInitializedError,
    UnknownCompilerVersionError,
)
from .types import (
    CompileResult,
    CompilerOptions,
    ContractArtifact,
    DeployedContract,
    DeployerOptions,
    NetworkRecord,
)

try:
    __version__ = version("solc-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "Compiler",
    "Deployer",
    "ContractArtifact",
    "NetworkRecord",
    "CompilerOptions",
    "DeployerOptions",
    "CompileResult",
    "DeployedContract",
    "is_stale",
    "merge_artifact",
    "record_deployment",
    "load_artifact",
    "save_artifact",
    "DeployerError",
    "ContractsDirNotFoundError",
    "SourcesNotInitializedError",
    "SolidityVersionNotFoundError",
    "UnknownCompilerVersionError",
    "CompilationError",
    "ArtifactNotFoundError",
    "NetworkDataNotFoundError",
    "RPCError",
    "DeploymentFailedError",
    "MigrationError",
]
