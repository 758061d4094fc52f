"""Cosmos DB infrastructure."""

from userhub_common.infra.cosmos.cosmos_base import BaseCosmosClient

__all__ = ["BaseCosmosClient"]
