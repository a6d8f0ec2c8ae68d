"""Named response stores for the offline asset cache."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable

import httpx

logger = logging.getLogger(__name__)

# httpx has already decoded the body, so these no longer describe the stored bytes.
_DROPPED_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})

Fetcher = Callable[[str], Awaitable[httpx.Response]]


class AssetCacheError(Exception):
    pass


class AssetPopulationError(AssetCacheError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to cache {url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(slots=True, frozen=True)
class CachedResponse:
    url: str
    status_code: int
    headers: tuple[tuple[str, str], ...]
    content: bytes

    @classmethod
    def from_response(cls, url: str, response: httpx.Response) -> CachedResponse:
        return cls(
            url=url,
            status_code=response.status_code,
            headers=tuple(
                (key, value)
                for key, value in response.headers.multi_items()
                if key.lower() not in _DROPPED_HEADERS
            ),
            content=response.content,
        )

    def to_response(self) -> httpx.Response:
        return httpx.Response(
            status_code=self.status_code,
            headers=list(self.headers),
            content=self.content,
            request=httpx.Request("GET", self.url),
        )


@dataclass
class AssetStore:
    name: str
    _entries: dict[str, CachedResponse] = field(default_factory=dict)

    def __contains__(self, url: str) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        return list(self._entries)

    def match(self, url: str) -> CachedResponse | None:
        return self._entries.get(url)

    async def add_all(self, urls: Iterable[str], fetch: Fetcher) -> None:
        """Fetch every URL and store them only if all of them succeed."""

        url_list = list(urls)
        results = await asyncio.gather(
            *(fetch(url) for url in url_list),
            return_exceptions=True,
        )

        entries: list[CachedResponse] = []
        for url, result in zip(url_list, results):
            if isinstance(result, BaseException):
                reason = str(result) or type(result).__name__
                raise AssetPopulationError(url, reason) from result
            if not result.is_success:
                raise AssetPopulationError(url, f"status {result.status_code}")
            entries.append(CachedResponse.from_response(url, result))

        for entry in entries:
            self._entries[entry.url] = entry


class CacheStorage:
    """In-process equivalent of the browser's ``CacheStorage``."""

    def __init__(self) -> None:
        self._stores: dict[str, AssetStore] = {}

    def open(self, name: str) -> AssetStore:
        store = self._stores.get(name)
        if store is None:
            logger.info("Opened cache '%s'", name)
            store = self._stores[name] = AssetStore(name)
        return store

    def has(self, name: str) -> bool:
        return name in self._stores

    def keys(self) -> list[str]:
        return list(self._stores)

    def delete(self, name: str) -> bool:
        if self._stores.pop(name, None) is None:
            return False
        logger.info("Deleted old cache '%s'", name)
        return True

    def match(self, url: str) -> CachedResponse | None:
        for store in self._stores.values():
            entry = store.match(url)
            if entry is not None:
                return entry
        return None
