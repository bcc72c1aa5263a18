"""Configuration constants for solc-deployer library."""

from types import MappingProxyType

SOLIDITY_FILE_EXTENSION = ".sol"

# Artifacts are pretty-printed with 4-space indentation
JSON_INDENT = 4

# Gas added to the estimate so deployments survive estimation drift
EXTRA_GAS = 500000

DEFAULT_CONTRACTS_DIR = "contracts"
DEFAULT_ARTIFACTS_DIR = "build/artifacts"
DEFAULT_NETWORK_ID = 50
DEFAULT_JSONRPC_PORT = 8545
DEFAULT_GAS_PRICE = "20000000000"
DEFAULT_OPTIMIZER_RUNS = 200

# Receipt polling for contract creation transactions
RECEIPT_POLL_INTERVAL = 0.5
RECEIPT_TIMEOUT = 240

# Well known network identifiers
NETWORK_NAMES = {
    1: "mainnet",
    3: "ropsten",
    4: "rinkeby",
    42: "kovan",
    50: "testrpc",
}

# Semantic version from a pragma directive -> concrete solc build
COMPILER_BINARIES = MappingProxyType(
    {
        "0.4.11": "v0.4.11+commit.68ef5810",
        "0.4.18": "v0.4.18+commit.9cf6e910",
        "0.4.24": "v0.4.24+commit.e67f0147",
        "0.4.25": "v0.4.25+commit.59dbf8f1",
        "0.5.17": "v0.5.17+commit.d19bba13",
        "0.6.12": "v0.6.12+commit.27d51765",
        "0.7.6": "v0.7.6+commit.7338295f",
        "0.8.19": "v0.8.19+commit.7dd6d404",
        "0.8.20": "v0.8.20+commit.a1b79de6",
        "0.8.24": "v0.8.24+commit.e11b9ed9",
    }
)
