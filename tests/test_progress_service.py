from uuid import uuid4

import pytest

from elderease.core.exceptions import InputValidationError, NotFoundError
from elderease.services.progress_service import ProgressService
from tests.utils import create_user


@pytest.mark.asyncio
async def test_no_record_means_not_started(db_session):
    user = await create_user(db_session)

    progress = await ProgressService(db_session).get_progress(user.id, "2")

    assert progress.current_step == 0
    assert progress.completed is False
    assert progress.tutorial_id == "2"


@pytest.mark.asyncio
async def test_advancing_through_every_step_completes(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    for step in range(5):
        progress = await service.advance_step(user.id, "2", step)
        assert progress.completed is False
        assert progress.current_step == step

    progress = await service.advance_step(user.id, "2", 5)
    assert progress.current_step == 5
    assert progress.completed is True


@pytest.mark.asyncio
async def test_lower_step_never_moves_backwards(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    await service.advance_step(user.id, "1", 3)
    progress = await service.advance_step(user.id, "1", 1)

    assert progress.current_step == 3
    assert (await service.get_progress(user.id, "1")).current_step == 3


@pytest.mark.asyncio
async def test_out_of_order_advances_keep_the_highest(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    for step in (2, 4, 3, 4, 1):
        await service.advance_step(user.id, "5", step)

    assert (await service.get_progress(user.id, "5")).current_step == 4


@pytest.mark.asyncio
async def test_next_after_last_step_is_a_no_op(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    await service.advance_step(user.id, "2", 4)
    finished = await service.advance_step(user.id, "2", 5)
    again = await service.advance_step(user.id, "2", 6)

    assert finished.current_step == again.current_step == 5
    assert again.completed is True


@pytest.mark.asyncio
async def test_jump_to_any_step_is_stored(db_session):
    user = await create_user(db_session)

    progress = await ProgressService(db_session).advance_step(user.id, "5", 3)

    assert progress.current_step == 3
    assert progress.completed is False


@pytest.mark.asyncio
async def test_mark_complete_is_idempotent(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    first = await service.mark_complete(user.id, "3")
    second = await service.mark_complete(user.id, "3")

    assert first.current_step == second.current_step == 5
    assert first.completed is second.completed is True
    assert first.model_dump(exclude={"updated_at"}) == second.model_dump(exclude={"updated_at"})


@pytest.mark.asyncio
async def test_advance_after_complete_keeps_completed(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    await service.mark_complete(user.id, "4")
    progress = await service.advance_step(user.id, "4", 0)

    assert progress.completed is True
    assert progress.current_step == 4


@pytest.mark.asyncio
async def test_negative_step_is_rejected(db_session):
    user = await create_user(db_session)

    with pytest.raises(InputValidationError):
        await ProgressService(db_session).advance_step(user.id, "1", -1)


@pytest.mark.asyncio
async def test_unknown_tutorial_or_user(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    with pytest.raises(NotFoundError):
        await service.advance_step(user.id, "does-not-exist", 1)
    with pytest.raises(NotFoundError):
        await service.mark_complete(uuid4(), "1")


@pytest.mark.asyncio
async def test_summary(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    await service.mark_complete(user.id, "2")  # facebook, 12 minutes
    await service.advance_step(user.id, "3", 1)  # whatsapp
    await service.advance_step(user.id, "4", 2)  # whatsapp

    summary = await service.summary(user.id)

    assert summary.total_tutorials == 5
    assert summary.completed_tutorials == 1
    assert summary.in_progress_tutorials == 2
    assert summary.total_time_spent == 12
    assert summary.favorite_platforms == ["whatsapp", "facebook"]


@pytest.mark.asyncio
async def test_list_for_user(db_session):
    user = await create_user(db_session)
    service = ProgressService(db_session)

    await service.advance_step(user.id, "1", 1)
    await service.advance_step(user.id, "5", 2)

    records = await service.list_for_user(user.id)

    assert {(r.tutorial_id, r.current_step) for r in records} == {("1", 1), ("5", 2)}
