"""JSON-RPC transport and chain access for solc-deployer library."""

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from .constants import RECEIPT_POLL_INTERVAL, RECEIPT_TIMEOUT
from .encoder import encode_constructor_args
from .exceptions import DeploymentFailedError, RPCError

# Creation callback: (error, result) with result {"transactionHash", "address"}
CreateCallback = Callable[[Optional[BaseException], Optional[Dict[str, Any]]], None]


class RpcClient:
    """Minimal JSON-RPC 2.0 client for EVM nodes (HTTP POST)."""

    def __init__(self, rpc_url: str, timeout: int = 30):
        url = (rpc_url or "").strip()
        if not url:
            raise ValueError("rpc_url must be a non-empty string.")

        self.rpc_url = url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self._next_id = 1

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make one JSON-RPC call.

        Args:
            method: RPC method name, e.g. "eth_accounts"
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            RPCError: On transport errors, non-200 status or an RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "id": self._next_id,
            "method": method,
            "params": params or [],
        }
        self._next_id += 1

        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RPCError(f"Network error during RPC call {method}: {e}") from e

        if response.status_code != 200:
            raise RPCError(f"RPC request {method} failed with status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise RPCError(f"RPC request {method} returned invalid JSON") from e

        if "error" in result:
            raise RPCError(f"RPC error in {method}: {result['error']}")
        if "result" not in result:
            raise RPCError(f"RPC response to {method} is missing result")

        return result["result"]


class ChainClient:
    """Account, gas and contract-creation access to a node."""

    def __init__(
        self,
        rpc: RpcClient,
        poll_interval: float = RECEIPT_POLL_INTERVAL,
        receipt_timeout: float = RECEIPT_TIMEOUT,
    ):
        self.rpc = rpc
        self.poll_interval = poll_interval
        self.receipt_timeout = receipt_timeout

    @classmethod
    def from_url(cls, rpc_url: str, **kwargs: Any) -> "ChainClient":
        return cls(RpcClient(rpc_url), **kwargs)

    def get_network_id(self) -> int:
        return int(self.rpc.call("net_version"))

    def get_available_addresses(self) -> List[str]:
        return self.rpc.call("eth_accounts")

    def estimate_gas(self, tx_data: Dict[str, Any]) -> int:
        """
        Estimate gas for a transaction.

        Returns:
            Gas units as an integer
        """
        return int(self.rpc.call("eth_estimateGas", [_to_rpc_tx(tx_data)]), 16)

    def create(
        self,
        abi: List[Dict[str, Any]],
        constructor_args: Sequence[Any],
        tx_data: Dict[str, Any],
        callback: CreateCallback,
    ) -> None:
        """
        Send a contract creation transaction and report progress.

        The callback is invoked twice on success: once with the transaction
        hash and no address after submission, then with the address once the
        receipt confirms the contract. Any failure is reported once through
        the callback's error argument.

        Args:
            abi: Contract ABI, used to encode constructor_args
            constructor_args: Constructor argument values
            tx_data: Transaction fields; "data" holds the creation bytecode
            callback: Called with (error, result)
        """
        try:
            tx = dict(tx_data)
            tx["data"] = tx["data"] + encode_constructor_args(constructor_args, abi)
            tx_hash = self.rpc.call("eth_sendTransaction", [_to_rpc_tx(tx)])
        except Exception as e:
            callback(e, None)
            return

        callback(None, {"transactionHash": tx_hash, "address": None})

        try:
            address = self._wait_for_contract(tx_hash)
        except Exception as e:
            callback(e, None)
            return

        callback(None, {"transactionHash": tx_hash, "address": address})

    def _wait_for_contract(self, tx_hash: str) -> str:
        deadline = time.monotonic() + self.receipt_timeout
        while True:
            receipt = self.rpc.call("eth_getTransactionReceipt", [tx_hash])
            if receipt is not None:
                break
            if time.monotonic() >= deadline:
                raise DeploymentFailedError(
                    f"Contract transaction {tx_hash} was not mined within "
                    f"{self.receipt_timeout} seconds"
                )
            time.sleep(self.poll_interval)

        if receipt.get("status") == "0x0":
            raise DeploymentFailedError(f"Contract creation transaction {tx_hash} failed")

        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentFailedError(f"Receipt for {tx_hash} has no contract address")

        code = self.rpc.call("eth_getCode", [address, "latest"])
        if code in (None, "0x", "0x0"):
            raise DeploymentFailedError(
                "The contract code couldn't be stored, please check your gas amount."
            )
        return address


def _to_rpc_tx(tx_data: Dict[str, Any]) -> Dict[str, Any]:
    # Quantities travel as hex strings
    tx: Dict[str, Any] = {}
    for key, value in tx_data.items():
        if value is None:
            continue
        if key in ("gas", "gasPrice", "value"):
            tx[key] = hex(int(value))
        else:
            tx[key] = value
    return tx
