"""Solidity compiler invocation for solc-deployer library."""

import json
import posixpath
import re
from typing import Any, Callable, Dict, List, Optional

import solcx
from solcx.exceptions import SolcError

from .constants import DEFAULT_OPTIMIZER_RUNS

# Signature of the import-resolution callback: import path -> {"contents": source or None}
FindImports = Callable[[str], Dict[str, Optional[str]]]

_IMPORT_PATTERN = re.compile(r"""import\s+(?:[^;"']*?\s+from\s+)?["']([^"']+)["']""")


def build_to_version(build: str) -> str:
    """
    Extract the installable version from a solc build string.

    Args:
        build: Build string, e.g. "v0.4.11+commit.68ef5810"

    Returns:
        Version string, e.g. "0.4.11"
    """
    return build.lstrip("v").split("+", 1)[0]


def _resolve_unit_name(importer: str, import_path: str) -> str:
    # Relative imports resolve against the importing unit, as solc does
    if import_path.startswith("."):
        return posixpath.normpath(posixpath.join(posixpath.dirname(importer), import_path))
    return import_path


def collect_sources(
    sources: Dict[str, str], find_imports: FindImports
) -> Dict[str, Dict[str, str]]:
    """
    Build the standard JSON "sources" section, following import directives.

    Imports whose callback returns no contents are left out so that the
    compiler reports them as missing.

    Args:
        sources: Mapping of file name to source text for the files to compile
        find_imports: Import-resolution callback

    Returns:
        Mapping of source unit name -> {"content": source}
    """
    collected: Dict[str, Dict[str, str]] = {}
    seen = set(sources)
    pending = list(sources.items())

    while pending:
        unit_name, content = pending.pop()
        collected[unit_name] = {"content": content}

        for import_path in _IMPORT_PATTERN.findall(content):
            resolved = _resolve_unit_name(unit_name, import_path)
            if resolved in seen:
                continue
            seen.add(resolved)
            imported = find_imports(import_path).get("contents")
            if imported is not None:
                pending.append((resolved, imported))

    return collected


class SolcCompiler:
    """Compiles Solidity sources with one solc build via py-solc-x."""

    def __init__(self, build: str, install: bool = True):
        """
        Initialize the compiler for a build.

        Args:
            build: solc build string from the compiler build table
            install: Download the build if it is not installed yet
        """
        self.build = build
        self.version = build_to_version(build)
        self._install = install

    def _ensure_installed(self) -> None:
        installed = {str(v) for v in solcx.get_installed_solc_versions()}
        if self.version not in installed and self._install:
            solcx.install_solc(self.version)

    def compile(
        self,
        sources: Dict[str, str],
        optimizer_enabled: bool,
        find_imports: FindImports,
    ) -> Dict[str, Any]:
        """
        Compile sources.

        Args:
            sources: Mapping of one file name to its source text
            optimizer_enabled: Enable the optimizer
            find_imports: Import-resolution callback

        Returns:
            {"contracts": {"<file>:<contract>": {"interface": abi_json, "bytecode": hex}},
             "errors": [message, ...]}
        """
        self._ensure_installed()

        input_data = {
            "language": "Solidity",
            "sources": collect_sources(sources, find_imports),
            "settings": {
                "optimizer": {"enabled": optimizer_enabled, "runs": DEFAULT_OPTIMIZER_RUNS},
                "outputSelection": {"*": {"*": ["abi", "evm.bytecode.object"]}},
            },
        }

        try:
            output = solcx.compile_standard(input_data, solc_version=self.version)
        except SolcError as e:
            # Fatal compiler errors still carry the diagnostics
            return {"contracts": {}, "errors": _error_messages(e.error_dict or [])}

        contracts: Dict[str, Dict[str, str]] = {}
        for unit_name, unit_contracts in output.get("contracts", {}).items():
            file_name = posixpath.basename(unit_name)
            for contract_name, compiled in unit_contracts.items():
                contracts[f"{file_name}:{contract_name}"] = {
                    "interface": json.dumps(compiled.get("abi", [])),
                    "bytecode": compiled.get("evm", {}).get("bytecode", {}).get("object", ""),
                }

        return {"contracts": contracts, "errors": _error_messages(output.get("errors", []))}


def _error_messages(errors: List[Dict[str, Any]]) -> List[str]:
    return [
        (error.get("formattedMessage") or error.get("message", "")).strip()
        for error in errors
    ]
