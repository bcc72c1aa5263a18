"""Synchronous entry points for solc-deployer library."""

import asyncio
from typing import Any, Optional, Sequence

from .compiler import Compiler
from .deployer import Chain, Deployer
from .migrations import run_migration
from .types import CompileResult, CompilerOptions, DeployedContract, DeployerOptions


def compile_contracts(options: CompilerOptions, **compiler_kwargs: Any) -> CompileResult:
    """
    Compile every contract under options.contracts_dir.

    Args:
        options: Compiler options
        **compiler_kwargs: Passed to Compiler (compiler_factory, compiler_binaries, clock)

    Returns:
        CompileResult for the run
    """
    return asyncio.run(Compiler(options, **compiler_kwargs).compile_all())


def deploy_contract(
    contract_name: str,
    args: Sequence[Any],
    options: DeployerOptions,
    chain: Optional[Chain] = None,
) -> DeployedContract:
    """Deploy one compiled contract and record it in its artifact."""
    return asyncio.run(Deployer(options, chain).deploy(contract_name, args))


def run_migrations(
    script_path: str, options: DeployerOptions, chain: Optional[Chain] = None
) -> None:
    """Run a migration script with a deployer bound to the node."""
    asyncio.run(run_migration(script_path, Deployer(options, chain)))
