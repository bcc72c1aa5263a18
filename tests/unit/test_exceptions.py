"""Unit tests for custom exception classes."""

import pytest

from solc_deployer.exceptions import (
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

ALL_EXCEPTIONS = [
    DeployerError,
    ContractsDirNotFoundError,
    SourcesNotInitializedError,
    SolidityVersionNotFoundError,
    UnknownCompilerVersionError,
    CompilationError,
    ArtifactNotFoundError,
    NetworkDataNotFoundError,
    RPCError,
    DeploymentFailedError,
    MigrationError,
]


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    def test_catch_contracts_dir_not_found_as_file_not_found_error(self):
        """Test that ContractsDirNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            raise ContractsDirNotFoundError("test")

    def test_catch_artifact_not_found_as_file_not_found_error(self):
        """Test that ArtifactNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            raise ArtifactNotFoundError("test")

    def test_catch_version_errors_as_value_error(self):
        """Test that version directive errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise SolidityVersionNotFoundError("test")
        with pytest.raises(ValueError):
            raise UnknownCompilerVersionError("test")

    def test_catch_network_data_not_found_as_value_error(self):
        """Test that NetworkDataNotFoundError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise NetworkDataNotFoundError("test")

    def test_catch_runtime_failures_as_runtime_error(self):
        """Test that chain and compiler failures can be caught as RuntimeError."""
        for exc in (RPCError("test"), DeploymentFailedError("test"), CompilationError("test")):
            with pytest.raises(RuntimeError):
                raise exc

    def test_catch_all_as_deployer_error(self):
        """Test that all custom exceptions can be caught as DeployerError."""
        for exc_class in ALL_EXCEPTIONS:
            with pytest.raises(DeployerError):
                raise exc_class("test")


class TestExceptionCreation:
    """Test creating exceptions with various message types."""

    def test_exceptions_accept_string_messages(self):
        """Test that all exceptions accept string messages."""
        for exc_class in ALL_EXCEPTIONS:
            exc = exc_class("test message")
            assert str(exc) == "test message"

    def test_exceptions_accept_empty_messages(self):
        """Test that exceptions can be created with empty messages."""
        for exc_class in ALL_EXCEPTIONS:
            exc = exc_class("")
            assert isinstance(exc, exc_class)
