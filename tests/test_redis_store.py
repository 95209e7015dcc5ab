import asyncio
import logging
from unittest.mock import AsyncMock, Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from elderease.client.session import LOGGED_IN_KEY, USER_ID_KEY, USER_KEY, SessionStore
from elderease.client.storage import RedisKeyValueStore
from tests.utils import make_user_response


class FakePubSub:
    """Enough of redis.asyncio's PubSub for one change channel."""

    def __init__(self):
        self.messages = asyncio.Queue()
        self.subscribed = []
        self.closed = asyncio.Event()

    async def subscribe(self, channel):
        self.subscribed.append(channel)

    async def unsubscribe(self, channel):
        self.subscribed.remove(channel)

    async def aclose(self):
        self.closed.set()

    async def listen(self):
        while True:
            item = await self.messages.get()
            if isinstance(item, Exception):
                raise item
            yield item


@pytest.fixture()
def pubsub():
    return FakePubSub()


@pytest.fixture()
def redis_client(pubsub):
    client = AsyncMock()
    client.pubsub = Mock(return_value=pubsub)
    client.get.return_value = None
    client.delete.return_value = 1
    return client


@pytest.fixture()
def redis_store(redis_client):
    return RedisKeyValueStore(redis=redis_client, namespace="tab")


# ============================================================
# Reads & writes
# ============================================================

@pytest.mark.asyncio
async def test_keys_are_namespaced(redis_store, redis_client):
    redis_client.get.return_value = "true"

    assert await redis_store.get(LOGGED_IN_KEY) == "true"
    redis_client.get.assert_awaited_with(f"tab:{LOGGED_IN_KEY}")

    await redis_store.set(USER_KEY, "{}")
    redis_client.set.assert_awaited_with(f"tab:{USER_KEY}", "{}")
    redis_client.publish.assert_awaited_with("tab:changes", USER_KEY)


@pytest.mark.asyncio
async def test_bytes_are_decoded(redis_store, redis_client):
    redis_client.get.return_value = b"true"

    assert await redis_store.get(LOGGED_IN_KEY) == "true"


@pytest.mark.asyncio
async def test_delete_publishes_only_when_something_was_removed(redis_store, redis_client):
    await redis_store.delete(USER_KEY)
    redis_client.delete.assert_awaited_with(f"tab:{USER_KEY}")
    redis_client.publish.assert_awaited_once_with("tab:changes", USER_KEY)

    redis_client.publish.reset_mock()
    redis_client.delete.return_value = 0

    await redis_store.delete(USER_KEY)
    redis_client.publish.assert_not_awaited()


# ============================================================
# Change channel
# ============================================================

@pytest.mark.asyncio
async def test_published_change_notifies_listeners(redis_store, redis_client, pubsub):
    keys = []
    received = asyncio.Event()

    async def record(key):
        keys.append(key)
        received.set()

    redis_store.add_listener(record)
    await redis_store.start()
    assert pubsub.subscribed == ["tab:changes"]

    await pubsub.messages.put({"type": "subscribe", "data": 1})
    await pubsub.messages.put({"type": "message", "data": USER_KEY.encode()})
    await asyncio.wait_for(received.wait(), timeout=1)

    assert keys == [USER_KEY]

    await redis_store.close()
    assert pubsub.closed.is_set()
    assert pubsub.subscribed == []
    redis_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_start_is_idempotent(redis_store, redis_client):
    await redis_store.start()
    await redis_store.start()

    redis_client.pubsub.assert_called_once()
    await redis_store.close()


@pytest.mark.asyncio
async def test_dropped_connection_is_logged_and_close_succeeds(redis_store, redis_client, pubsub, caplog):
    caplog.set_level(logging.WARNING)
    await redis_store.start()

    await pubsub.messages.put(RedisConnectionError("Connection closed by server."))
    await asyncio.wait_for(pubsub.closed.wait(), timeout=1)

    assert "Stopped listening on tab:changes" in caplog.text

    await redis_store.close()
    redis_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_sign_in_from_another_process_reaches_session(redis_store, redis_client, pubsub):
    user = make_user_response(name="Dana White")
    data = {
        f"tab:{LOGGED_IN_KEY}": "true",
        f"tab:{USER_KEY}": user.model_dump_json(by_alias=True),
        f"tab:{USER_ID_KEY}": str(user.id),
    }
    redis_client.get.side_effect = lambda key: data.get(key)

    session = SessionStore(redis_store)
    signed_in = asyncio.Event()

    async def watch(snapshot):
        if snapshot.is_authenticated:
            signed_in.set()

    session.subscribe(watch)
    await redis_store.start()

    await pubsub.messages.put({"type": "message", "data": USER_KEY})
    await asyncio.wait_for(signed_in.wait(), timeout=1)

    assert session.snapshot.display_name == "Dana White"
    assert await session.user_id() == user.id

    session.close()
    await redis_store.close()
