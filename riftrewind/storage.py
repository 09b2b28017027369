# storage.py – stockage clé → blob (une chaîne JSON par clé)

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol

import redis.asyncio as aioredis
from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

log = logging.getLogger(__name__)

Base = declarative_base()


class BlobStore(Protocol):
    async def read(self, key: str) -> Optional[str]: ...

    async def write(self, key: str, value: str) -> None: ...

    async def close(self) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Blob(Base):
    """Une ligne par clé ; la valeur est réécrite en entier à chaque write."""
    __tablename__ = "blobs"
    key   = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    ts    = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class SqlBlobStore:
    """Blob store backed by a local SQLite file (any SQLAlchemy URL works)."""

    def __init__(self, db_url: str):
        # Si on utilise SQLite, créer le dossier parent du fichier .db
        if db_url.startswith("sqlite:///") and db_url != "sqlite:///:memory:":
            Path(db_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(db_url, future=True)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, future=True)
        Base.metadata.create_all(bind=self.engine)

    async def read(self, key: str) -> Optional[str]:
        with self.Session() as session:
            row = session.get(Blob, key)
            return row.value if row else None

    async def write(self, key: str, value: str) -> None:
        with self.Session.begin() as session:
            session.merge(Blob(key=key, value=value, ts=_utcnow()))

    async def close(self) -> None:
        self.engine.dispose()


class RedisBlobStore:
    """Blob store on a Redis instance, no TTL."""

    def __init__(self, url: str, prefix: str = ""):
        self.redis = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
        self.prefix = prefix

    async def read(self, key: str) -> Optional[str]:
        return await self.redis.get(self.prefix + key)

    async def write(self, key: str, value: str) -> None:
        await self.redis.set(self.prefix + key, value)

    async def close(self) -> None:
        await self.redis.aclose()


class MemoryBlobStore:
    """Process-local store, used by tests and `STORAGE_BACKEND=memory`."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0
        self.closed = False

    async def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def write(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    async def close(self) -> None:
        self.closed = True


def make_store(backend: str, db_url: str = "", redis_url: str = "") -> BlobStore:
    backend = backend.lower()
    log.debug("Leaderboard storage backend: %s", backend)
    if backend == "sql":
        return SqlBlobStore(db_url)
    if backend == "redis":
        if not redis_url:
            raise ValueError("STORAGE_BACKEND=redis requires REDIS_URL")
        return RedisBlobStore(redis_url)
    if backend == "memory":
        return MemoryBlobStore()
    raise ValueError(f"Unknown storage backend {backend!r}")
