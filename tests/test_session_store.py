import json

import pytest

from elderease.client.session import (
    LOGGED_IN_KEY,
    ONBOARDING_KEY,
    PREFERENCES_KEY,
    USER_ID_KEY,
    USER_KEY,
    SessionStore,
)
from elderease.client.storage import MemoryKeyValueStore
from elderease.schemas.preferences import AccessibilityPreferences, FontSize
from tests.utils import UnreachableStore, make_user_response


@pytest.mark.asyncio
async def test_set_and_read_session(session_store):
    user = make_user_response(name="Bob Smith")

    await session_store.set_session(user)

    assert await session_store.is_authenticated() is True
    assert await session_store.user_id() == user.id
    cached = await session_store.current_user()
    assert cached.email == "bob@example.com"
    assert session_store.snapshot.is_authenticated is True
    assert session_store.snapshot.display_name == "Bob Smith"


@pytest.mark.asyncio
async def test_cached_user_uses_camel_case(session_store, kv_store):
    await session_store.set_session(make_user_response(birth_year=1948))

    stored = json.loads(await kv_store.get(USER_KEY))

    assert stored["birthYear"] == 1948
    assert "birth_year" not in stored


@pytest.mark.asyncio
async def test_clear_session(session_store, kv_store):
    await session_store.set_session(make_user_response())
    await session_store.set_onboarding_complete()

    await session_store.clear_session()

    assert await session_store.is_authenticated() is False
    assert await session_store.current_user() is None
    assert await session_store.user_id() is None
    assert await kv_store.get(ONBOARDING_KEY) is None
    assert session_store.snapshot.is_authenticated is False


@pytest.mark.asyncio
async def test_empty_store_is_anonymous(session_store):
    assert await session_store.is_authenticated() is False
    assert await session_store.current_user() is None
    assert (await session_store.reconcile()).display_name is None


@pytest.mark.asyncio
async def test_flag_without_user_is_anonymous():
    store = SessionStore(MemoryKeyValueStore({LOGGED_IN_KEY: "true"}))

    assert await store.is_authenticated() is False


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_user", ["{not json", '{"name": "missing fields"}', "[]"])
async def test_unreadable_user_is_anonymous(raw_user):
    store = SessionStore(MemoryKeyValueStore({LOGGED_IN_KEY: "true", USER_KEY: raw_user}))

    assert await store.current_user() is None
    assert await store.is_authenticated() is False
    assert (await store.reconcile()).is_authenticated is False


@pytest.mark.asyncio
async def test_unreadable_flag_is_anonymous(kv_store, session_store):
    await session_store.set_session(make_user_response())
    await kv_store.set(LOGGED_IN_KEY, "yes please")

    assert await session_store.is_authenticated() is False


@pytest.mark.asyncio
async def test_unreadable_user_id_is_none(kv_store, session_store):
    await session_store.set_session(make_user_response())
    await kv_store.set(USER_ID_KEY, json.dumps("not-a-uuid"))

    assert await session_store.user_id() is None


# ============================================================
# Preferences & onboarding
# ============================================================

@pytest.mark.asyncio
async def test_preferences_default_when_missing(session_store):
    assert await session_store.preferences() == AccessibilityPreferences()


@pytest.mark.asyncio
async def test_damaged_preferences_fall_back_to_defaults(kv_store, session_store):
    await kv_store.set(PREFERENCES_KEY, json.dumps({"fontSize": "huge", "contrast": "high"}))

    prefs = await session_store.preferences()

    assert prefs.font_size == FontSize.MEDIUM
    assert prefs.contrast == "high"


@pytest.mark.asyncio
async def test_unparseable_preferences_fall_back_to_defaults(kv_store, session_store):
    await kv_store.set(PREFERENCES_KEY, "{{{")

    assert await session_store.preferences() == AccessibilityPreferences()


@pytest.mark.asyncio
async def test_set_session_caches_preferences(session_store):
    user = make_user_response(preferences=AccessibilityPreferences(font_size=FontSize.XLARGE))

    await session_store.set_session(user)

    assert (await session_store.preferences()).font_size == FontSize.XLARGE


@pytest.mark.asyncio
async def test_onboarding_flag(session_store):
    assert await session_store.onboarding_complete() is False

    await session_store.set_onboarding_complete()

    assert await session_store.onboarding_complete() is True


# ============================================================
# Cross-tab reconciliation
# ============================================================

@pytest.mark.asyncio
async def test_other_tab_sees_sign_in_and_sign_out(kv_store):
    tab_a = SessionStore(kv_store)
    tab_b = SessionStore(kv_store)
    seen = []

    async def record(snapshot):
        seen.append(snapshot.is_authenticated)

    tab_b.subscribe(record)

    await tab_a.set_session(make_user_response(name="Carol"))

    assert tab_b.snapshot.is_authenticated is True
    assert tab_b.snapshot.display_name == "Carol"
    assert seen[-1] is True

    await tab_a.clear_session()

    assert tab_b.snapshot.is_authenticated is False
    assert seen[-1] is False

    tab_a.close()
    tab_b.close()


@pytest.mark.asyncio
async def test_preference_writes_do_not_reconcile(kv_store):
    tab_a = SessionStore(kv_store)
    tab_b = SessionStore(kv_store)
    calls = []

    async def record(snapshot):
        calls.append(snapshot)

    tab_b.subscribe(record)
    await tab_a.set_preferences(AccessibilityPreferences(contrast="blue"))

    assert calls == []


@pytest.mark.asyncio
async def test_unsubscribe(session_store):
    calls = []

    async def record(snapshot):
        calls.append(snapshot)

    unsubscribe = session_store.subscribe(record)
    unsubscribe()
    await session_store.reconcile()

    assert calls == []


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_block_others(session_store):
    calls = []

    async def broken(snapshot):
        raise RuntimeError("render failed")

    async def record(snapshot):
        calls.append(snapshot.is_authenticated)

    session_store.subscribe(broken)
    session_store.subscribe(record)

    await session_store.set_session(make_user_response())

    assert calls and calls[-1] is True


@pytest.mark.asyncio
async def test_failing_listener_does_not_block_write(kv_store):
    async def broken(key):
        raise RuntimeError("listener exploded")

    kv_store.add_listener(broken)
    tab = SessionStore(kv_store)

    await tab.set_session(make_user_response())

    assert tab.snapshot.is_authenticated is True


@pytest.mark.asyncio
async def test_closed_store_stops_listening(kv_store):
    tab_a = SessionStore(kv_store)
    tab_b = SessionStore(kv_store)
    tab_b.close()

    await tab_a.set_session(make_user_response())

    assert tab_b.snapshot.is_authenticated is False


# ============================================================
# Unreachable backend
# ============================================================

@pytest.mark.asyncio
async def test_unreachable_backend_reads_as_anonymous():
    store = SessionStore(UnreachableStore())

    assert await store.is_authenticated() is False
    assert await store.current_user() is None
    assert await store.user_id() is None
    assert await store.preferences() == AccessibilityPreferences()
    assert await store.onboarding_complete() is False

    snapshot = await store.reconcile()
    assert snapshot.is_authenticated is False
    assert snapshot.user is None


# ============================================================
# User id format
# ============================================================

@pytest.mark.asyncio
async def test_user_id_is_stored_bare(session_store, kv_store):
    user = make_user_response()

    await session_store.set_session(user)

    assert await kv_store.get(USER_ID_KEY) == str(user.id)


@pytest.mark.asyncio
@pytest.mark.parametrize("encode", [str, lambda v: json.dumps(str(v))])
async def test_user_id_written_elsewhere_is_readable(kv_store, session_store, encode):
    user = make_user_response()
    await session_store.set_session(user)

    await kv_store.set(USER_ID_KEY, encode(user.id))

    assert await session_store.user_id() == user.id
