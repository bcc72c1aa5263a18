"""Contract deployment and artifact recording for solc-deployer library."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

import structlog

from .artifacts import load_artifact, record_deployment, save_artifact
from .constants import EXTRA_GAS
from .encoder import encode_constructor_args
from .exceptions import ArtifactNotFoundError, DeploymentFailedError, NetworkDataNotFoundError
from .paths import get_artifact_path, get_jsonrpc_url
from .rpc import ChainClient, CreateCallback
from .types import DeployedContract, DeployerOptions

logger = structlog.get_logger(__name__)


class Chain(Protocol):
    def get_available_addresses(self) -> List[str]: ...

    def estimate_gas(self, tx_data: Dict[str, Any]) -> int: ...

    def create(
        self,
        abi: List[Dict[str, Any]],
        constructor_args: Sequence[Any],
        tx_data: Dict[str, Any],
        callback: CreateCallback,
    ) -> None: ...


class Deployer:
    """Deploys compiled contracts and records addresses in their artifacts."""

    def __init__(self, options: DeployerOptions, chain: Optional[Chain] = None):
        """
        Initialize the deployer.

        Args:
            options: Artifacts directory, network, node port and gas price
            chain: Chain access (defaults to a JSON-RPC client for the node)
        """
        self.artifacts_dir = Path(options.artifacts_dir)
        self.network_id = options.network_id
        self.gas_price = options.gas_price
        self.from_address = options.from_address
        self.receipt_timeout = options.receipt_timeout
        if chain is None:
            rpc_url = options.jsonrpc_url or get_jsonrpc_url(options.jsonrpc_port)
            chain = ChainClient.from_url(rpc_url, receipt_timeout=options.receipt_timeout)
        self.chain = chain

    async def deploy(self, contract_name: str, args: Sequence[Any] = ()) -> DeployedContract:
        """
        Load a contract artifact, deploy it and save the deployment to the artifact.

        Nothing is written unless the contract creation is confirmed.

        Args:
            contract_name: Must match the name of an artifact in artifacts_dir
            args: Constructor arguments

        Returns:
            DeployedContract for the new instance

        Raises:
            ArtifactNotFoundError: If the artifact is missing or unparseable
            NetworkDataNotFoundError: If the artifact has no record for network_id
            DeploymentFailedError: If the creation transaction fails or no address
                is reported within receipt_timeout
            RPCError: If the node cannot be reached
        """
        artifact_path = get_artifact_path(contract_name, self.artifacts_dir)
        artifact = load_artifact(artifact_path)
        if artifact is None:
            raise ArtifactNotFoundError(f"Artifact not found for contract: {contract_name}")

        record = artifact.network(self.network_id)
        if record is None:
            raise NetworkDataNotFoundError(
                f"Data not found in artifact for contract: {contract_name} "
                f"(network {self.network_id})"
            )

        if record.is_deployed:
            logger.info(
                "replacing_deployment",
                contract=contract_name,
                previous_address=record.address,
                network_id=self.network_id,
            )

        try:
            encoded_args = encode_constructor_args(args, record.abi)
        except ValueError as e:
            raise DeploymentFailedError(f"Invalid constructor arguments for {contract_name}: {e}") from e

        data = record.unlinked_binary
        from_address = self.from_address
        if from_address is None:
            accounts = await asyncio.to_thread(self.chain.get_available_addresses)
            if not accounts:
                raise DeploymentFailedError(f"No account available to deploy {contract_name}")
            from_address = accounts[0]

        gas_estimate = await asyncio.to_thread(self.chain.estimate_gas, {"data": data})
        tx_data = {
            "gasPrice": self.gas_price,
            "from": from_address,
            "data": data,
            "gas": gas_estimate + EXTRA_GAS,
        }

        result = await self._create_contract(contract_name, record.abi, args, tx_data)
        address = result["address"]
        logger.info(
            "contract_deployed", contract=contract_name, address=address, network_id=self.network_id
        )

        updated = record_deployment(artifact, self.network_id, address, encoded_args)
        save_artifact(updated, artifact_path)

        return DeployedContract(
            contract_name=contract_name,
            network_id=self.network_id,
            address=address,
            abi=record.abi,
            constructor_args=encoded_args,
            transaction_hash=result.get("transactionHash"),
        )

    async def _create_contract(
        self,
        contract_name: str,
        abi: List[Dict[str, Any]],
        args: Sequence[Any],
        tx_data: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Run the chain's creation primitive and resolve once an address is reported."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def settle(error: Optional[BaseException], result: Optional[Dict[str, Any]]) -> None:
            if future.done():
                return
            if error is not None:
                failure = DeploymentFailedError(f"Deployment of {contract_name} failed: {error}")
                failure.__cause__ = error
                future.set_exception(failure)
            elif result is None or result.get("address") is None:
                # Mined-pending notification; the confirmed one follows
                logger.info(
                    "transaction_pending",
                    contract=contract_name,
                    transaction_hash=(result or {}).get("transactionHash"),
                )
            else:
                future.set_result(result)

        def callback(error: Optional[BaseException], result: Optional[Dict[str, Any]]) -> None:
            try:
                loop.call_soon_threadsafe(settle, error, result)
            except RuntimeError:
                # Event loop closed after the deploy timed out
                logger.warning("late_creation_notification", contract=contract_name)

        # create() may return before either notification arrives
        await loop.run_in_executor(None, self.chain.create, abi, list(args), tx_data, callback)
        try:
            return await asyncio.wait_for(future, self.receipt_timeout)
        except asyncio.TimeoutError as e:
            raise DeploymentFailedError(
                f"Deployment of {contract_name} reported no contract address "
                f"within {self.receipt_timeout} seconds"
            ) from e
