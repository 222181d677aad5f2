"""Integration tests for WorkQueueRepository (SQLite via aiosqlite).

Tests cover:
- Drain returns every queued id and empties the queue
- Second drain returns nothing
- Enqueue is idempotent per session
- Concurrent drains never hand the same item to two workers as present
"""

import asyncio

import pytest
from uuid_extensions import uuid7

from src.infrastructure.persistence.repositories import WorkQueueRepository


async def _enqueue(database, *session_ids) -> None:
    async with database.get_session() as session:
        repo = WorkQueueRepository(session)
        for session_id in session_ids:
            await repo.enqueue(session_id)


async def _drain(database):
    async with database.get_session() as session:
        return await WorkQueueRepository(session).take_all_pending()


@pytest.mark.integration
class TestWorkQueueRepository:
    @pytest.mark.asyncio
    async def test_empty_queue_drains_to_empty_list(self, database):
        assert await _drain(database) == []

    @pytest.mark.asyncio
    async def test_drain_takes_everything_once(self, database):
        first, second = uuid7(), uuid7()
        await _enqueue(database, first, second)

        items = await _drain(database)

        assert {item.id for item in items} == {first, second}
        assert all(item.was_present for item in items)
        assert await _drain(database) == []

    @pytest.mark.asyncio
    async def test_enqueue_twice_keeps_one_item(self, database):
        session_id = uuid7()
        await _enqueue(database, session_id, session_id)

        items = await _drain(database)

        assert [item.id for item in items] == [session_id]

    @pytest.mark.asyncio
    async def test_items_queued_after_drain_wait_for_next_batch(self, database):
        early, late = uuid7(), uuid7()
        await _enqueue(database, early)
        assert [item.id for item in await _drain(database)] == [early]

        await _enqueue(database, late)

        assert [item.id for item in await _drain(database)] == [late]

    @pytest.mark.asyncio
    async def test_concurrent_drains_report_each_item_present_once(self, database):
        ids = [uuid7() for _ in range(5)]
        await _enqueue(database, *ids)

        results = await asyncio.gather(
            _drain(database), _drain(database), return_exceptions=True
        )

        present = [
            item.id
            for batch in results
            if isinstance(batch, list)
            for item in batch
            if item.was_present
        ]
        assert sorted(present) == sorted(ids)
