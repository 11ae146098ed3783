"""Lazy MongoClient construction for gateway factories."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pymongo import MongoClient

from .gateway import MongoDocumentGateway

logger = logging.getLogger(__name__)


def create_mongo_gateway_factory(
    database_url: str,
    database: str,
) -> Callable[[], MongoDocumentGateway]:
    """Return a factory sharing one lazily created client."""

    if not database:
        msg = "A database name is required"
        raise ValueError(msg)
    client: MongoClient | None = None

    def factory() -> MongoDocumentGateway:
        nonlocal client
        if client is None:
            client = MongoClient(database_url)
            logger.info("MongoDB client initialised for database %s", database)
        return MongoDocumentGateway(client[database])

    return factory


__all__ = ["create_mongo_gateway_factory"]
