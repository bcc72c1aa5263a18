"""Migration script loading for solc-deployer library."""

import importlib.util
import inspect
from pathlib import Path
from types import ModuleType
from typing import Union

import structlog

from .deployer import Deployer
from .exceptions import MigrationError

logger = structlog.get_logger(__name__)


def load_migration(script_path: Union[Path, str]) -> ModuleType:
    """
    Import a migration script from a file.

    The script must define run_migrations(deployer), sync or async.

    Args:
        script_path: Path to a Python file

    Returns:
        The imported module

    Raises:
        MigrationError: If the file is missing or lacks run_migrations
    """
    path = Path(script_path)
    if not path.is_file():
        raise MigrationError(f"Migration script not found at {path}")

    spec = importlib.util.spec_from_file_location(f"_migration_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise MigrationError(f"Cannot load migration script {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    if not callable(getattr(module, "run_migrations", None)):
        raise MigrationError(f"Migration script {path} does not define run_migrations(deployer)")
    return module


async def run_migration(script_path: Union[Path, str], deployer: Deployer) -> None:
    """Load a migration script and run it against a deployer."""
    module = load_migration(script_path)
    logger.info("running_migration", script=str(script_path), network_id=deployer.network_id)
    outcome = module.run_migrations(deployer)
    if inspect.isawaitable(outcome):
        await outcome
