"""Lightweight mapper configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass

from mongoquent.domain import SnapshotSync


def _env_snapshot_sync(name: str, default: SnapshotSync) -> SnapshotSync:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return SnapshotSync(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in SnapshotSync)
        msg = f"{name} must be one of: {choices}"
        raise ValueError(msg) from exc


@dataclass(frozen=True)
class MapperSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    database_url: str = "mongodb://127.0.0.1:27017"
    database: str = "mongoquent"
    snapshot_sync: SnapshotSync = SnapshotSync.OPTIMISTIC

    @classmethod
    def from_env(cls) -> MapperSettings:
        return cls(
            environment=os.getenv("MONGOQUENT_ENV", cls.environment),
            database_url=os.getenv("MONGOQUENT_DATABASE_URL", cls.database_url),
            database=os.getenv("MONGOQUENT_DATABASE", cls.database),
            snapshot_sync=_env_snapshot_sync("MONGOQUENT_SNAPSHOT_SYNC", cls.snapshot_sync),
        )


__all__ = ["MapperSettings"]
