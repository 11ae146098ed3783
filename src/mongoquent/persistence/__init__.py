"""Persistence collaborators for the mapping layer."""

from .errors import NotFoundError, RepositoryError
from .interfaces import DocumentGateway, GatewayFactory
from .memory import InMemoryDocumentGateway

__all__ = [
    "DocumentGateway",
    "GatewayFactory",
    "InMemoryDocumentGateway",
    "NotFoundError",
    "RepositoryError",
]
