"""
Key/Value Store Abstract Base Class

The client-side persistent cache behind the Session Store. Every backend
stores plain strings under string keys and notifies listeners when a key
changes, which is how several open "tabs" learn that another one signed
in or out.

Backends:
---------
- MemoryKeyValueStore: process-local; share one instance between several
  SessionStores to model several tabs of the same browser.
- RedisKeyValueStore: keys live in Redis and changes are broadcast on a
  pub/sub channel, so SessionStores in different processes reconcile.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from elderease.core.config import settings

logger = logging.getLogger(__name__)

# Called with the key that changed
ChangeListener = Callable[[str], Awaitable[None]]


class KeyValueStore(ABC):
    """Interface every session cache backend implements."""

    def __init__(self):
        self._listeners: List[ChangeListener] = []

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the key. Deleting an absent key is not an error."""
        pass

    # ------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------
    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def notify(self, key: str) -> None:
        """
        Deliver a change to every listener.

        Delivery is best-effort: a failing listener is logged and the
        others still run.
        """
        for listener in list(self._listeners):
            try:
                await listener(key)
            except Exception as e:
                logger.warning(f"Session change listener failed for {key!r}: {e}")


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        super().__init__()
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        await self.notify(key)

    async def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            await self.notify(key)


class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed store.

    Keys are prefixed with the namespace and every write publishes the
    key name on ``<namespace>:changes``. Call ``start()`` to begin
    receiving changes made by other processes and ``close()`` on shutdown.
    """

    def __init__(self, redis: Optional[Redis] = None, namespace: Optional[str] = None):
        super().__init__()
        self.redis = redis or Redis.from_url(settings.REDIS_URL, decode_responses=True)
        self.namespace = namespace or settings.SESSION_NAMESPACE
        self.channel = f"{self.namespace}:changes"
        self._listen_task: Optional[asyncio.Task] = None

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return value

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self._key(key), value)
        await self.redis.publish(self.channel, key)

    async def delete(self, key: str) -> None:
        removed = await self.redis.delete(self._key(key))
        if removed:
            await self.redis.publish(self.channel, key)

    # ------------------------------------------------------------
    # Pub/sub
    # ------------------------------------------------------------
    async def start(self) -> None:
        """Subscribe to the change channel in a background task."""
        if self._listen_task is not None:
            return
        pubsub = self.redis.pubsub()
        await pubsub.subscribe(self.channel)
        self._listen_task = asyncio.create_task(self._listen(pubsub))
        logger.info(f"Listening for session changes on {self.channel}")

    async def _listen(self, pubsub) -> None:
        """
        Forward published key names to the listeners.

        A dropped connection ends the loop with a warning; reads and
        writes keep working, only cross-process notifications stop.
        """
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                key = message.get("data")
                if isinstance(key, bytes):
                    key = key.decode("utf-8", errors="replace")
                await self.notify(key)
        except (RedisError, OSError) as e:
            logger.warning(f"Stopped listening on {self.channel}: {e!r}")
        finally:
            try:
                await pubsub.unsubscribe(self.channel)
                await pubsub.aclose()
            except (RedisError, OSError) as e:
                logger.warning(f"Could not close subscription to {self.channel}: {e!r}")

    async def close(self) -> None:
        if self._listen_task is not None:
            self._listen_task.cancel()
            try:
                await self._listen_task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning(f"Change listener for {self.channel} ended with an error: {e!r}")
            self._listen_task = None
        await self.redis.aclose()
