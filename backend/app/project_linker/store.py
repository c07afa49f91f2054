"""Keyed stores for the latest external-project link per canonical project.

Writes are last-write-wins. Store methods are coroutines so the Redis store can
use the asyncio client without blocking the event loop. The in-memory store
serialises access with a lock and supports optional TTL expiry and a size cap;
the Redis store shares links between worker processes.
"""

import json
import threading
import time
from collections import OrderedDict

from app.project_linker.records import ProjectLinkRecord


class ProjectLinkStore:
    """Interface for project link storage."""

    async def get(self, key: str) -> ProjectLinkRecord | None:
        raise NotImplementedError

    async def put(self, record: ProjectLinkRecord) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> bool:
        raise NotImplementedError

    async def all(self) -> list[ProjectLinkRecord]:
        raise NotImplementedError

    async def clear(self) -> None:
        raise NotImplementedError


class InMemoryProjectLinkStore(ProjectLinkStore):
    """Process-local store guarded by a mutex."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_entries: int | None = None,
        clock=time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (written_at, record); insertion order doubles as write order
        self._entries: OrderedDict[str, tuple[float, ProjectLinkRecord]] = OrderedDict()

    async def get(self, key: str) -> ProjectLinkRecord | None:
        with self._lock:
            self._expire()
            entry = self._entries.get(key)
            return entry[1] if entry else None

    async def put(self, record: ProjectLinkRecord) -> None:
        key = record.store_key
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock(), record)
            self._expire()
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)

    async def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def all(self) -> list[ProjectLinkRecord]:
        with self._lock:
            self._expire()
            return [record for _, record in self._entries.values()]

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._expire()
            return len(self._entries)

    def _expire(self) -> None:
        if not self.ttl_seconds:
            return
        cutoff = self._clock() - self.ttl_seconds
        # Oldest writes come first, so stop at the first live entry
        while self._entries:
            key, (written_at, _) = next(iter(self._entries.items()))
            if written_at > cutoff:
                break
            del self._entries[key]


class RedisProjectLinkStore(ProjectLinkStore):
    """Links stored as JSON strings under `<prefix><store_key>`.

    `client` is a `redis.asyncio.Redis` created with `decode_responses=True`;
    expiry is delegated to Redis.
    """

    def __init__(self, client, ttl_seconds: int | None = None, prefix: str = "opscentral:project_link:"):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    async def get(self, key: str) -> ProjectLinkRecord | None:
        raw = await self.client.get(self.prefix + key)
        if raw is None:
            return None
        return ProjectLinkRecord.from_dict(json.loads(raw))

    async def put(self, record: ProjectLinkRecord) -> None:
        await self.client.set(
            self.prefix + record.store_key,
            json.dumps(record.to_dict()),
            ex=self.ttl_seconds or None,
        )

    async def delete(self, key: str) -> bool:
        return bool(await self.client.delete(self.prefix + key))

    async def all(self) -> list[ProjectLinkRecord]:
        keys = [key async for key in self.client.scan_iter(match=f"{self.prefix}*")]
        if not keys:
            return []
        records = []
        for raw in await self.client.mget(keys):
            # A key may expire between SCAN and MGET
            if raw is not None:
                records.append(ProjectLinkRecord.from_dict(json.loads(raw)))
        return records

    async def clear(self) -> None:
        keys = [key async for key in self.client.scan_iter(match=f"{self.prefix}*")]
        if keys:
            await self.client.delete(*keys)
