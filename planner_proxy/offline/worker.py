from __future__ import annotations

import enum
import logging
from typing import Iterable

import httpx

from .manifest import CACHE_VERSION, PRECACHE_URLS, cache_name
from .storage import AssetCacheError, CacheStorage

logger = logging.getLogger(__name__)


class LifecyclePhase(str, enum.Enum):
    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


class LifecycleError(AssetCacheError):
    pass


class OfflineAssetCache:
    """Cache-first asset server with versioned install/activate phases.

    ``install`` precaches ``urls`` into the store for ``version``; ``activate``
    drops every other store and claims the registered clients; ``fetch``
    answers from the store and falls back to the network without writing back.
    Relative URLs are resolved against ``origin``.
    """

    def __init__(
        self,
        storage: CacheStorage,
        *,
        origin: str,
        version: str = CACHE_VERSION,
        urls: Iterable[str] = PRECACHE_URLS,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.storage = storage
        self.origin = httpx.URL(origin)
        self.version = version
        self.cache_name = cache_name(version)
        self.urls = tuple(self.resolve(url) for url in urls)
        self.phase = LifecyclePhase.PARSED
        self.skip_waiting = False
        self.clients: set[str] = set()
        self.controlled_clients: set[str] = set()
        self._transport = transport
        self._timeout = timeout

    def resolve(self, url: str) -> str:
        return str(self.origin.join(url))

    def register_client(self, client_id: str) -> None:
        self.clients.add(client_id)

    async def install(self) -> None:
        self.skip_waiting = True
        self.phase = LifecyclePhase.INSTALLING

        store = self.storage.open(self.cache_name)
        try:
            await store.add_all(self.urls, self._network_fetch)
        except AssetCacheError:
            self.phase = LifecyclePhase.REDUNDANT
            logger.error("Install of cache '%s' failed", self.cache_name)
            raise

        logger.info("Cached %d core assets in '%s'", len(self.urls), self.cache_name)
        self.phase = LifecyclePhase.INSTALLED

    async def activate(self) -> list[str]:
        if self.phase is not LifecyclePhase.INSTALLED:
            raise LifecycleError(
                f"Cannot activate from phase '{self.phase.value}'; install first."
            )

        self.phase = LifecyclePhase.ACTIVATING
        deleted = [
            name
            for name in self.storage.keys()
            if name != self.cache_name and self.storage.delete(name)
        ]

        self.controlled_clients = set(self.clients)
        self.phase = LifecyclePhase.ACTIVATED
        logger.info(
            "Activated '%s'; removed %d old cache(s), claimed %d client(s)",
            self.cache_name,
            len(deleted),
            len(self.controlled_clients),
        )
        return deleted

    async def fetch(self, url: str) -> httpx.Response:
        resolved = self.resolve(url)
        cached = self.storage.match(resolved)
        if cached is not None:
            logger.debug("Cache hit: %s", resolved)
            return cached.to_response()

        logger.debug("Cache miss: %s", resolved)
        return await self._network_fetch(resolved)

    async def _network_fetch(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            return await client.get(url)
