"""Contract source discovery for solc-deployer library."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

import structlog

from .constants import SOLIDITY_FILE_EXTENSION
from .exceptions import ContractsDirNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SourceEntry:
    """Outcome of visiting one source file during a directory walk."""

    path: Path
    source: Optional[str] = None
    skip_reason: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def ok(self) -> bool:
        return self.skip_reason is None


def _list_dir(dir_path: Path) -> list[str]:
    return sorted(os.listdir(dir_path))


def _walk(dir_path: Path) -> Iterator[SourceEntry]:
    for name in _list_dir(dir_path):
        content_path = dir_path / name

        if content_path.suffix == SOLIDITY_FILE_EXTENSION:
            try:
                # Decode the raw bytes so line endings reach the fingerprint unchanged
                source = content_path.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError) as e:
                yield SourceEntry(content_path, skip_reason=f"Could not read file: {e}")
                continue
            yield SourceEntry(content_path, source=source)
            continue

        # Anything that is not a source file is treated as a subdirectory
        if not content_path.is_dir():
            yield SourceEntry(
                content_path,
                skip_reason=f"Not a directory or {SOLIDITY_FILE_EXTENSION} file",
            )
            continue
        try:
            yield from _walk(content_path)
        except OSError as e:
            yield SourceEntry(content_path, skip_reason=f"Could not read directory: {e}")


def walk_sources(root: Union[Path, str]) -> Iterator[SourceEntry]:
    """
    Recursively visit source files under a directory.

    Args:
        root: Contracts directory

    Yields:
        One SourceEntry per visited entry; unreadable files and entries that
        are neither directories nor source files carry a skip_reason

    Raises:
        ContractsDirNotFoundError: If the root directory cannot be read
    """
    root_path = Path(root)
    try:
        _list_dir(root_path)
    except OSError as e:
        raise ContractsDirNotFoundError(f"No directory found at {root_path}") from e

    yield from _walk(root_path)


def get_contract_sources(root: Union[Path, str]) -> Dict[str, str]:
    """
    Map source file base names to source text for every file under root.

    Files sharing a base name in different directories collapse onto the
    last one visited.

    Args:
        root: Contracts directory

    Returns:
        Dictionary mapping e.g. "Token.sol" -> source text

    Raises:
        ContractsDirNotFoundError: If the root directory cannot be read
    """
    sources: Dict[str, str] = {}
    for entry in walk_sources(root):
        if not entry.ok:
            logger.warning("source_skipped", path=str(entry.path), reason=entry.skip_reason)
            continue
        logger.info("reading_source", file=entry.name)
        sources[entry.name] = entry.source  # type: ignore[assignment]
    return sources
