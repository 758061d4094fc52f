"""Generic base class for Cosmos DB client operations."""

import logging
from typing import Any

from azure.cosmos import CosmosClient, PartitionKey
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

from userhub_common.config.store_config import StoreConfig

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


class BaseCosmosClient[T: BaseModel]:
    """Infrastructure layer: Generic base class for Cosmos DB client operations."""

    @staticmethod
    def _strip_system_fields(item: dict) -> dict:
        return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}

    def __init__(
        self,
        container_name: str,
        partition_key_path: str = "/id",
        config: StoreConfig | None = None,
        database_name: str | None = None,
    ) -> None:
        """Initialize Cosmos DB client.

        Args:
            container_name: Container name
            partition_key_path: Partition key path (default: "/id")
            config: Store configuration. If None, will load from environment.
            database_name: Database name. If None, uses config.cosmos_db.
        """
        if config is None:
            from userhub_common.config.store_config import get_store_config

            config = get_store_config()

        self.config = config
        self.container_name = container_name
        self.partition_key_path = partition_key_path

        if not config.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

        if config.azure_cosmosdb_key:
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=config.azure_cosmosdb_key)
        else:
            # Use managed identity
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=DefaultAzureCredential())

        db_name = database_name or config.cosmos_db
        self.database = self.client.create_database_if_not_exists(id=db_name)
        self.container = self._ensure_container(container_name, partition_key_path)

    def _ensure_container(self, container_name: str, partition_key_path: str):
        """Get the container, creating it if it doesn't exist."""
        # Emulator typically requires provisioned throughput; use 400 only for localhost
        is_emulator = "localhost" in (self.config.azure_cosmosdb_endpoint or "").lower()
        pk = PartitionKey(path=partition_key_path)

        if is_emulator:
            container = self.database.create_container_if_not_exists(
                id=container_name,
                partition_key=pk,
                offer_throughput=400,
            )
        else:
            container = self.database.create_container_if_not_exists(id=container_name, partition_key=pk)

        logger.info("Container '%s' ready with partition key '%s'", container_name, partition_key_path)
        return container

    def create_item(self, item: T) -> dict:
        """Create an item in Cosmos DB.

        Args:
            item: Pydantic model instance to create

        Returns:
            Created item as dictionary (with Cosmos system fields removed)

        Raises:
            CosmosResourceExistsError: If an item with the same id already exists
        """
        item_dict = item.model_dump(mode="json", by_alias=True)
        item_dict["id"] = str(item_dict["id"])
        try:
            created = self.container.create_item(body=item_dict)
        except CosmosResourceExistsError:
            logger.debug("Item %s already exists in %s", item_dict["id"], self.container_name)
            raise
        logger.info("Created item %s in container %s", created["id"], self.container_name)
        return self._strip_system_fields(created)

    def read_item(self, item_id: str, partition_key: str) -> dict | None:
        """Read an item from Cosmos DB.

        Returns:
            Item as dictionary (with Cosmos system fields removed), or None if not found
        """
        try:
            item = self.container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found in container %s", item_id, self.container_name)
            return None
        return self._strip_system_fields(item)

    def replace_item(self, item: T) -> dict | None:
        """Replace an item in Cosmos DB (full replace).

        Returns:
            Replaced item as dictionary, or None if the item no longer exists
        """
        item_dict = item.model_dump(mode="json", by_alias=True)
        item_dict["id"] = str(item_dict["id"])
        try:
            replaced = self.container.replace_item(item=item_dict["id"], body=item_dict)
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for replace in %s", item_dict["id"], self.container_name)
            return None
        logger.info("Replaced item %s in container %s", item_dict["id"], self.container_name)
        return self._strip_system_fields(replaced)

    def query_items(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[dict]:
        """Run a cross-partition query.

        Args:
            query: SQL query string
            parameters: Query parameters, e.g. ``[{"name": "@email", "value": "a@b.com"}]``

        Returns:
            List of items as dictionaries
        """
        items = list(
            self.container.query_items(
                query=query,
                parameters=parameters or [],
                enable_cross_partition_query=True,
            )
        )
        logger.debug("Queried %d items from container %s", len(items), self.container_name)
        return items

    def delete_item(self, item_id: str, partition_key: str) -> bool:
        """Delete an item from Cosmos DB.

        Returns:
            True if the item was deleted, False if it did not exist
        """
        try:
            self.container.delete_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for deletion in %s", item_id, self.container_name)
            return False
        logger.info("Deleted item %s from container %s", item_id, self.container_name)
        return True
