"""Compilation cache engine for solc-deployer library."""

import asyncio
import json
import re
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Set

import structlog
from Crypto.Hash import keccak

from .artifacts import is_stale, load_artifact, merge_artifact, save_artifact
from .constants import COMPILER_BINARIES, SOLIDITY_FILE_EXTENSION
from .exceptions import (
    CompilationError,
    SolidityVersionNotFoundError,
    SourcesNotInitializedError,
    UnknownCompilerVersionError,
)
from .paths import get_artifact_path
from .solc import FindImports, SolcCompiler
from .sources import get_contract_sources
from .types import CompileResult, CompilerOptions, NetworkRecord

logger = structlog.get_logger(__name__)

_SOLIDITY_VERSION_PATTERN = re.compile(r"solidity\s\^?([0-9]{1,2}\.[0-9]{1,2}\.[0-9]{1,2})")
_ERROR_PATH_PATTERN = re.compile(r"[^\s:\"']+\.sol")


class CompilerBackend(Protocol):
    def compile(
        self,
        sources: Dict[str, str],
        optimizer_enabled: bool,
        find_imports: FindImports,
    ) -> Dict[str, Any]: ...


def contract_name_from_file(file_name: str) -> str:
    """Strip the source extension: "Token.sol" -> "Token"."""
    return Path(file_name).name.removesuffix(SOLIDITY_FILE_EXTENSION)


def compute_source_fingerprint(source: str) -> str:
    """
    Hash the exact text of one source file.

    Imported files do not contribute to the fingerprint.

    Returns:
        0x-prefixed keccak256 hex digest
    """
    digest = keccak.new(digest_bits=256, data=source.encode("utf-8")).hexdigest()
    return f"0x{digest}"


def parse_solidity_version(source: str) -> str:
    """
    Find the compiler version in a pragma directive.

    Args:
        source: Source code of a contract

    Returns:
        Version string, e.g. "0.4.11" for "pragma solidity ^0.4.11;"

    Raises:
        SolidityVersionNotFoundError: If no version directive is found
    """
    match = _SOLIDITY_VERSION_PATTERN.search(source)
    if match is None:
        raise SolidityVersionNotFoundError("Could not find Solidity version in source")
    return match.group(1)


def normalize_error_message(message: str) -> str:
    """
    Truncate directories from the source path in a compiler message.

    Example: "base/Token.sol:6:46: Warning: Unused local variable" becomes
    "Token.sol:6:46: Warning: Unused local variable", so the same warning
    reached through different paths is reported once.
    """
    match = _ERROR_PATH_PATTERN.search(message)
    if match is None:
        return message
    error_path = match.group(0)
    return message.replace(error_path, Path(error_path).name, 1)


def _now_ms() -> int:
    return int(time.time() * 1000)


class Compiler:
    """Compiles every source file under a directory, skipping unchanged contracts."""

    def __init__(
        self,
        options: CompilerOptions,
        compiler_factory: Callable[[str], CompilerBackend] = SolcCompiler,
        compiler_binaries: Mapping[str, str] = COMPILER_BINARIES,
        clock: Callable[[], int] = _now_ms,
    ):
        """
        Initialize the compiler.

        Args:
            options: Directories, target network and optimizer setting
            compiler_factory: Builds a compiler backend for a solc build string
            compiler_binaries: Version -> solc build lookup table
            clock: Returns the current time in milliseconds for updated_at
        """
        self.contracts_dir = Path(options.contracts_dir)
        self.artifacts_dir = Path(options.artifacts_dir)
        self.network_id = options.network_id
        self.optimizer_enabled = options.optimizer_enabled
        self._compiler_factory = compiler_factory
        self._compiler_binaries = compiler_binaries
        self._clock = clock
        self._contract_sources: Optional[Dict[str, str]] = None
        self._diagnostics: Set[str] = set()

    async def compile_all(self) -> CompileResult:
        """
        Compile all source files found in contracts_dir and write artifacts.

        Each file is compiled independently; a failure is recorded for that
        contract and does not stop the others.

        Returns:
            CompileResult with compiled, skipped and failed contracts and the
            deduplicated compiler diagnostics

        Raises:
            ContractsDirNotFoundError: If contracts_dir cannot be read
        """
        self._create_artifacts_dir_if_missing()
        self._contract_sources = get_contract_sources(self.contracts_dir)
        self._diagnostics = set()

        file_names = list(self._contract_sources)
        outcomes = await asyncio.gather(
            *(self.compile_contract(file_name) for file_name in file_names),
            return_exceptions=True,
        )

        result = CompileResult()
        for file_name, outcome in zip(file_names, outcomes):
            contract_name = contract_name_from_file(file_name)
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error("compile_failed", contract=contract_name, error=str(outcome))
                result.failed[contract_name] = str(outcome)
            elif outcome:
                result.compiled.append(contract_name)
            else:
                result.skipped.append(contract_name)

        result.diagnostics = sorted(self._diagnostics)
        for message in result.diagnostics:
            logger.warning("compiler_diagnostic", message=message)

        return result

    async def compile_contract(self, file_name: str) -> bool:
        """
        Compile one source file if its artifact is stale, and save the artifact.

        Args:
            file_name: Source base name with extension, e.g. "Token.sol"

        Returns:
            True if the contract was compiled, False if the cached record was kept

        Raises:
            SourcesNotInitializedError: If the source set has not been resolved
            SolidityVersionNotFoundError: If the source has no version directive
            UnknownCompilerVersionError: If the version is not in the build table
            CompilationError: If the compiler output lacks the contract
        """
        if self._contract_sources is None:
            raise SourcesNotInitializedError("Contract sources not yet initialized")

        source = self._contract_sources[file_name]
        contract_name = contract_name_from_file(file_name)
        artifact_path = get_artifact_path(contract_name, self.artifacts_dir)
        fingerprint = compute_source_fingerprint(source)

        # A corrupt or missing artifact counts as no artifact
        current_artifact = load_artifact(artifact_path)
        current_record = (
            current_artifact.network(self.network_id) if current_artifact is not None else None
        )
        if not is_stale(current_record, fingerprint, self.optimizer_enabled):
            logger.debug("artifact_up_to_date", contract=contract_name, network_id=self.network_id)
            return False

        solc_version = parse_solidity_version(source)
        build = self._compiler_binaries.get(solc_version)
        if build is None:
            raise UnknownCompilerVersionError(
                f"No compiler build known for Solidity {solc_version} "
                f"(required by {file_name})"
            )
        backend = self._compiler_factory(build)

        logger.info("compiling", file=file_name, solc_version=solc_version)
        compiled = await asyncio.to_thread(
            backend.compile,
            {file_name: source},
            self.optimizer_enabled,
            self.find_imports,
        )

        for message in compiled.get("errors") or []:
            self._diagnostics.add(normalize_error_message(message))

        contract_identifier = f"{file_name}:{contract_name}"
        contract_output = compiled.get("contracts", {}).get(contract_identifier)
        if contract_output is None:
            raise CompilationError(
                f"Compiler output has no contract {contract_identifier} "
                f"for contract: {contract_name}"
            )

        record = NetworkRecord(
            compiler_version=solc_version,
            source_fingerprint=fingerprint,
            optimizer_enabled=self.optimizer_enabled,
            abi=json.loads(contract_output["interface"]),
            unlinked_binary=f"0x{contract_output['bytecode']}",
            updated_at=self._clock(),
        )
        artifact = merge_artifact(current_artifact, contract_name, self.network_id, record)
        save_artifact(artifact, artifact_path)
        logger.info("artifact_saved", contract=contract_name, path=str(artifact_path))
        return True

    def find_imports(self, import_path: str) -> Dict[str, Optional[str]]:
        """
        Resolve an import for the compiler by its base name.

        Args:
            import_path: Path of an imported dependency as written in source

        Returns:
            {"contents": source}, with None contents for unknown files

        Raises:
            SourcesNotInitializedError: If the source set has not been resolved
        """
        if self._contract_sources is None:
            raise SourcesNotInitializedError("Contract sources not yet initialized")
        return {"contents": self._contract_sources.get(Path(import_path).name)}

    @property
    def diagnostics(self) -> Set[str]:
        return set(self._diagnostics)

    def _create_artifacts_dir_if_missing(self) -> None:
        if not self.artifacts_dir.exists():
            logger.info("creating_artifacts_dir", path=str(self.artifacts_dir))
            self.artifacts_dir.mkdir(parents=True, exist_ok=True)
