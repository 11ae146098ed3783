"""Service container wiring settings to a document gateway."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TypeVar

from mongoquent.config import MapperSettings
from mongoquent.model import Model
from mongoquent.persistence import DocumentGateway, GatewayFactory
from mongoquent.persistence.mongo import create_mongo_gateway_factory
from mongoquent.query import Builder

M = TypeVar("M", bound=Model)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapperContainer:
    """Holds shared configuration and the gateway factory."""

    settings: MapperSettings
    gateway_factory: GatewayFactory

    def gateway(self) -> DocumentGateway:
        return self.gateway_factory()

    def query(self, model_cls: type[M]) -> Builder[M]:
        return Builder(
            model_cls,
            self.gateway(),
            snapshot_sync=self.settings.snapshot_sync,
        )


def build_container(
    settings: MapperSettings | None = None,
    gateway_factory: GatewayFactory | None = None,
) -> MapperContainer:
    """Construct the mapper container, defaulting to a MongoDB gateway."""

    resolved_settings = settings or MapperSettings.from_env()
    if gateway_factory is None:
        gateway_factory = create_mongo_gateway_factory(
            resolved_settings.database_url,
            resolved_settings.database,
        )
    logger.debug(
        "Mapper container built for %s (%s)",
        resolved_settings.database,
        resolved_settings.environment,
    )
    return MapperContainer(settings=resolved_settings, gateway_factory=gateway_factory)


__all__ = ["MapperContainer", "build_container"]
