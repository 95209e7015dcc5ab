import asyncio
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from elderease.db.database import Base, enable_sqlite_foreign_keys, get_db
from elderease.main import app
from tests.utils import register_payload


async def _register(client, **overrides) -> dict:
    response = await client.post("/api/auth/register", json=register_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["user"]


# ============================================================
# Health
# ============================================================

@pytest.mark.asyncio
async def test_root(http_client):
    response = await http_client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


# ============================================================
# Auth
# ============================================================

@pytest.mark.asyncio
async def test_register_returns_user_without_credential(http_client):
    response = await http_client.post("/api/auth/register", json=register_payload())

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == "alice@example.com"
    assert user["birthYear"] == 1950
    assert user["preferences"]["fontSize"] == "medium"
    assert "password" not in user
    assert "passwordHash" not in user
    assert "password_hash" not in response.text


@pytest.mark.asyncio
async def test_register_duplicate_email(http_client):
    await _register(http_client)

    response = await http_client.post("/api/auth/register", json=register_payload(email="ALICE@example.com"))

    assert response.status_code == 400
    assert response.json()["detail"] == "An account with this email already exists."


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["email", "name", "password"])
async def test_register_missing_field_is_400(http_client, missing):
    payload = register_payload()
    del payload[missing]

    response = await http_client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    assert missing in response.json()["detail"]


@pytest.mark.asyncio
async def test_login(http_client):
    await _register(http_client)

    response = await http_client.post("/api/auth/login", json={"email": "Alice@Example.com", "password": "pw123456"})

    assert response.status_code == 200
    assert response.json()["user"]["lastLogin"] is not None


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(http_client):
    await _register(http_client)

    wrong = await http_client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
    unknown = await http_client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "pw123456"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


@pytest.mark.asyncio
async def test_login_missing_password_is_400(http_client):
    response = await http_client.post("/api/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 400


@pytest_asyncio.fixture()
async def file_db_client(tmp_path):
    """App client on a file-backed SQLite database, one connection per session."""
    engine = enable_sqlite_foreign_keys(
        create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'elderease.db'}")
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        await engine.dispose()


@pytest.mark.asyncio
async def test_simultaneous_registrations_for_one_email(file_db_client):
    responses = await asyncio.gather(
        file_db_client.post("/api/auth/register", json=register_payload(email="alice@example.com")),
        file_db_client.post("/api/auth/register", json=register_payload(email="ALICE@example.com")),
    )

    assert sorted(r.status_code for r in responses) == [201, 400]
    rejected = next(r for r in responses if r.status_code == 400)
    assert rejected.json()["detail"] == "An account with this email already exists."


# ============================================================
# Profile & preferences
# ============================================================

@pytest.mark.asyncio
async def test_get_profile(http_client):
    user = await _register(http_client)

    response = await http_client.get("/api/profile", params={"userId": user["id"]})

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Alice Johnson"
    assert response.json()["user"]["preferences"]["contrast"] == "normal"


@pytest.mark.asyncio
async def test_get_profile_errors(http_client):
    assert (await http_client.get("/api/profile")).status_code == 400
    assert (await http_client.get("/api/profile", params={"userId": "not-a-uuid"})).status_code == 400
    assert (await http_client.get("/api/profile", params={"userId": str(uuid4())})).status_code == 404


@pytest.mark.asyncio
async def test_update_profile_partial(http_client):
    user = await _register(http_client)

    response = await http_client.put("/api/profile", json={"userId": user["id"], "name": "Alice J."})

    assert response.status_code == 200
    updated = response.json()["user"]
    assert updated["name"] == "Alice J."
    assert updated["phone"] == "555-0100"


@pytest.mark.asyncio
async def test_update_profile_requires_user_id(http_client):
    response = await http_client.put("/api/profile", json={"name": "Nobody"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_profile_cannot_change_password(http_client):
    user = await _register(http_client)

    await http_client.put("/api/profile", json={"userId": user["id"], "password": "hijacked"})
    login = await http_client.post("/api/auth/login", json={"email": "alice@example.com", "password": "pw123456"})

    assert login.status_code == 200


@pytest.mark.asyncio
async def test_preferences_round_trip(http_client):
    user = await _register(http_client)

    saved = await http_client.put(
        "/api/preferences",
        json={"userId": user["id"], "preferences": {"fontSize": "large", "contrast": "high"}},
    )
    assert saved.status_code == 200
    assert saved.json()["preferences"]["fontSize"] == "large"

    fetched = await http_client.get("/api/preferences", params={"userId": user["id"]})
    assert fetched.json()["preferences"] == saved.json()["preferences"]


@pytest.mark.asyncio
async def test_preferences_reject_unknown_option_value(http_client):
    user = await _register(http_client)

    response = await http_client.put(
        "/api/preferences",
        json={"userId": user["id"], "preferences": {"fontSize": "enormous"}},
    )

    assert response.status_code == 400


# ============================================================
# Tutorials
# ============================================================

@pytest.mark.asyncio
async def test_get_tutorial(http_client):
    response = await http_client.get("/api/tutorials/1")

    assert response.status_code == 200
    tutorial = response.json()["tutorial"]
    assert tutorial["title"] == "Getting Started with Facebook"
    assert tutorial["estimatedTime"] == 15
    assert len(tutorial["steps"]) == 5
    assert tutorial["steps"][0]["imageUrl"] == "/images/facebook-signup.png"


@pytest.mark.asyncio
async def test_get_unknown_tutorial(http_client):
    response = await http_client.get("/api/tutorials/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "We couldn't find that tutorial."


@pytest.mark.asyncio
async def test_list_tutorials_with_filters(http_client):
    response = await http_client.get("/api/tutorials", params={"platform": "facebook", "difficulty": "all"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert [t["id"] for t in body["tutorials"]] == ["1", "2"]


# ============================================================
# Progress
# ============================================================

@pytest.mark.asyncio
async def test_progress_scenario_last_step(http_client):
    user = await _register(http_client)
    body = {"userId": user["id"], "tutorialId": "2"}

    at_four = await http_client.put("/api/progress", json={**body, "currentStep": 4})
    assert at_four.json()["progress"]["completed"] is False

    done = await http_client.put("/api/progress", json={**body, "currentStep": 5})
    assert done.status_code == 200
    assert done.json()["progress"]["currentStep"] == 5
    assert done.json()["progress"]["completed"] is True

    again = await http_client.put("/api/progress", json={**body, "currentStep": 6})
    assert again.json()["progress"]["currentStep"] == 5
    assert again.json()["progress"]["completed"] is True


@pytest.mark.asyncio
async def test_progress_mark_complete(http_client):
    user = await _register(http_client)

    response = await http_client.put(
        "/api/progress",
        json={"userId": user["id"], "tutorialId": "5", "completed": True},
    )

    assert response.status_code == 200
    progress = response.json()["progress"]
    assert progress["currentStep"] == 6
    assert progress["completed"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"tutorialId": "1", "currentStep": 1},
        {"userId": "00000000-0000-0000-0000-000000000000", "currentStep": 1},
        {"userId": "00000000-0000-0000-0000-000000000000", "tutorialId": "1"},
        {"userId": "00000000-0000-0000-0000-000000000000", "tutorialId": "1", "currentStep": -1},
    ],
)
async def test_progress_bad_requests(http_client, body):
    response = await http_client.put("/api/progress", json=body)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_progress_listing_and_summary(http_client):
    user = await _register(http_client)
    await http_client.put("/api/progress", json={"userId": user["id"], "tutorialId": "1", "completed": True})
    await http_client.put("/api/progress", json={"userId": user["id"], "tutorialId": "3", "currentStep": 2})

    listing = await http_client.get("/api/progress", params={"userId": user["id"]})
    assert {p["tutorialId"] for p in listing.json()["progress"]} == {"1", "3"}

    summary = (await http_client.get("/api/progress/summary", params={"userId": user["id"]})).json()
    assert summary["totalTutorials"] == 5
    assert summary["completedTutorials"] == 1
    assert summary["inProgressTutorials"] == 1
    assert summary["totalTimeSpent"] == 15
    assert set(summary["favoritePlatforms"]) == {"facebook", "whatsapp"}


# ============================================================
# Bookmarks
# ============================================================

@pytest.mark.asyncio
async def test_bookmark_add_and_remove(http_client):
    user = await _register(http_client)
    body = {"userId": user["id"], "tutorialId": "5"}

    added = await http_client.post("/api/bookmarks", json=body)
    assert added.status_code == 200
    assert added.json() == {"tutorialId": "5", "bookmarked": True}

    listing = await http_client.get("/api/bookmarks", params={"userId": user["id"]})
    assert listing.json()["tutorialIds"] == ["5"]

    merged = await http_client.get("/api/tutorials/5", params={"userId": user["id"]})
    assert merged.json()["tutorial"]["isBookmarked"] is True

    removed = await http_client.request("DELETE", "/api/bookmarks", json=body)
    assert removed.status_code == 200
    assert removed.json() == {"tutorialId": "5", "bookmarked": False}


@pytest.mark.asyncio
async def test_bookmark_requires_ids(http_client):
    response = await http_client.post("/api/bookmarks", json={"tutorialId": "5"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_bookmark_unknown_tutorial(http_client):
    user = await _register(http_client)

    response = await http_client.post("/api/bookmarks", json={"userId": user["id"], "tutorialId": "nope"})

    assert response.status_code == 404
