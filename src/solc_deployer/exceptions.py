"""Custom exception classes for solc-deployer library."""


class DeployerError(Exception):
    """Base exception for compile and deploy errors."""

    pass


class ContractsDirNotFoundError(DeployerError, FileNotFoundError):
    """Raised when the contracts source directory cannot be read."""

    pass


class SourcesNotInitializedError(DeployerError, RuntimeError):
    """Raised when sources are requested before the source set is resolved."""

    pass


class SolidityVersionNotFoundError(DeployerError, ValueError):
    """Raised when a source file has no parseable compiler version directive."""

    pass


class UnknownCompilerVersionError(DeployerError, ValueError):
    """Raised when no compiler build is known for a requested version."""

    pass


class CompilationError(DeployerError, RuntimeError):
    """Raised when compiler output does not contain the expected contract."""

    pass


class ArtifactNotFoundError(DeployerError, FileNotFoundError):
    """Raised when a contract artifact is missing or cannot be parsed."""

    pass


class NetworkDataNotFoundError(DeployerError, ValueError):
    """Raised when an artifact has no record for the requested network."""

    pass


class RPCError(DeployerError, RuntimeError):
    """Raised when a JSON-RPC request fails or returns an error object."""

    pass


class DeploymentFailedError(DeployerError, RuntimeError):
    """Raised when a contract creation transaction does not succeed."""

    pass


class MigrationError(DeployerError, RuntimeError):
    """Raised when a migration script cannot be loaded."""

    pass
