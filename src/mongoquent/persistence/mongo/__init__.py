"""MongoDB persistence implementation."""

from .client import create_mongo_gateway_factory
from .gateway import MongoDocumentGateway

__all__ = ["MongoDocumentGateway", "create_mongo_gateway_factory"]
