"""Command line interface for solc-deployer.

Commands:
    compile  - compile contracts into artifacts for one network
    migrate  - compile for the node's network and run a migration script
    deploy   - deploy a single compiled contract
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import click

from .commands import compile_contracts, deploy_contract, run_migrations
from .constants import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_CONTRACTS_DIR,
    DEFAULT_GAS_PRICE,
    DEFAULT_JSONRPC_PORT,
    DEFAULT_NETWORK_ID,
    NETWORK_NAMES,
)
from .exceptions import DeployerError
from .log import configure_logging
from .paths import get_jsonrpc_url
from .rpc import ChainClient
from .types import CompileResult, CompilerOptions, DeployerOptions

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1

DEFAULT_MIGRATIONS_SCRIPT = "migrations/migrate.py"


def _error(message: str) -> None:
    click.secho(message, fg="red", err=True)


def contracts_dir_option(f: Callable) -> Callable:
    return click.option(
        "--contracts-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=DEFAULT_CONTRACTS_DIR,
        show_default=True,
        envvar="SOLC_DEPLOYER_CONTRACTS_DIR",
        help="Path of contracts directory to compile",
    )(f)


def artifacts_dir_option(f: Callable) -> Callable:
    return click.option(
        "--artifacts-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=DEFAULT_ARTIFACTS_DIR,
        show_default=True,
        envvar="SOLC_DEPLOYER_ARTIFACTS_DIR",
        help="Path to write contract artifacts to",
    )(f)


def network_id_option(f: Callable) -> Callable:
    return click.option(
        "--network-id",
        type=int,
        default=DEFAULT_NETWORK_ID,
        show_default=True,
        envvar="SOLC_DEPLOYER_NETWORK_ID",
        help=", ".join(f"{name}={network_id}" for network_id, name in NETWORK_NAMES.items()),
    )(f)


def optimize_option(f: Callable) -> Callable:
    return click.option(
        "--optimize/--no-optimize",
        default=False,
        show_default=True,
        help="Enable the solc optimizer",
    )(f)


def node_options(f: Callable) -> Callable:
    f = click.option(
        "--from",
        "from_address",
        default=None,
        envvar="SOLC_DEPLOYER_FROM",
        help="Sending account [default: first node account]",
    )(f)
    f = click.option(
        "--gas-price",
        default=DEFAULT_GAS_PRICE,
        show_default=True,
        envvar="SOLC_DEPLOYER_GAS_PRICE",
        help="Gas price used for transactions",
    )(f)
    return click.option(
        "--jsonrpc-port",
        type=int,
        default=DEFAULT_JSONRPC_PORT,
        show_default=True,
        envvar="SOLC_DEPLOYER_JSONRPC_PORT",
        help="Port connected to JSON RPC",
    )(f)


def _parse_arg(value: str) -> Any:
    # JSON literals (numbers, lists, booleans) or plain strings such as addresses
    try:
        return json.loads(value)
    except ValueError:
        return value


def _report_compile(result: CompileResult) -> None:
    for message in result.diagnostics:
        click.echo(message)
    for contract_name, reason in result.failed.items():
        _error(f"{contract_name}: {reason}")
    click.echo(
        f"Compiled {len(result.compiled)}, up to date {len(result.skipped)}, "
        f"failed {len(result.failed)}"
    )


@click.group()
@click.version_option(package_name="solc-deployer", prog_name="solc-deployer")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool) -> None:
    """Compile Solidity contracts and deploy them, keeping per-network artifacts."""
    configure_logging(verbose)


@cli.command("compile")
@contracts_dir_option
@artifacts_dir_option
@network_id_option
@optimize_option
def compile_cmd(contracts_dir: Path, artifacts_dir: Path, network_id: int, optimize: bool) -> None:
    """Compile contracts, recompiling only those whose source or settings changed.

    Examples:

        solc-deployer compile

        solc-deployer compile --network-id 42 --optimize
    """
    options = CompilerOptions(
        contracts_dir=contracts_dir,
        artifacts_dir=artifacts_dir,
        network_id=network_id,
        optimizer_enabled=optimize,
    )
    try:
        result = compile_contracts(options)
    except DeployerError as e:
        _error(str(e))
        raise SystemExit(EXIT_USER_ERROR) from None

    _report_compile(result)
    if not result.ok:
        raise SystemExit(EXIT_USER_ERROR)


@cli.command("migrate")
@contracts_dir_option
@artifacts_dir_option
@optimize_option
@node_options
@click.option(
    "--migrations",
    "migrations_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_MIGRATIONS_SCRIPT,
    show_default=True,
    help="Migration script defining run_migrations(deployer)",
)
def migrate_cmd(
    contracts_dir: Path,
    artifacts_dir: Path,
    optimize: bool,
    jsonrpc_port: int,
    gas_price: str,
    from_address: str | None,
    migrations_path: Path,
) -> None:
    """Compile contracts for the node's network and run a migration script."""
    try:
        chain = ChainClient.from_url(get_jsonrpc_url(jsonrpc_port))
        network_id = chain.get_network_id()

        result = compile_contracts(
            CompilerOptions(
                contracts_dir=contracts_dir,
                artifacts_dir=artifacts_dir,
                network_id=network_id,
                optimizer_enabled=optimize,
            )
        )
        _report_compile(result)
        if not result.ok:
            raise SystemExit(EXIT_USER_ERROR)

        run_migrations(
            str(migrations_path),
            DeployerOptions(
                artifacts_dir=artifacts_dir,
                network_id=network_id,
                jsonrpc_port=jsonrpc_port,
                gas_price=gas_price,
                from_address=from_address,
            ),
            chain,
        )
    except DeployerError as e:
        _error(str(e))
        raise SystemExit(EXIT_USER_ERROR) from None

    click.echo("Migrations complete")


@cli.command("deploy")
@click.argument("contract_name")
@click.argument("args", nargs=-1)
@artifacts_dir_option
@network_id_option
@node_options
def deploy_cmd(
    contract_name: str,
    args: tuple[str, ...],
    artifacts_dir: Path,
    network_id: int,
    jsonrpc_port: int,
    gas_price: str,
    from_address: str | None,
) -> None:
    """Deploy one compiled contract with constructor ARGS.

    Examples:

        solc-deployer deploy Token

        solc-deployer deploy Exchange 0x1111111111111111111111111111111111111111 100
    """
    options = DeployerOptions(
        artifacts_dir=artifacts_dir,
        network_id=network_id,
        jsonrpc_port=jsonrpc_port,
        gas_price=gas_price,
        from_address=from_address,
    )
    try:
        deployed = deploy_contract(contract_name, [_parse_arg(a) for a in args], options)
    except DeployerError as e:
        _error(str(e))
        raise SystemExit(EXIT_USER_ERROR) from None

    click.echo(f"{contract_name} deployed at {deployed.address}")


def main() -> None:
    cli()
