"""Tests for per-user locks."""

import asyncio
from uuid import uuid4

import pytest

from cooking_companion.services.locks import UserLocks


def test_same_user_requests_are_serialised() -> None:
    locks = UserLocks()
    user_id = uuid4()
    events: list[str] = []

    async def request(name: str) -> None:
        async with locks.hold(user_id):
            events.append(f"{name}:start")
            await asyncio.sleep(0)
            events.append(f"{name}:end")

    async def main() -> None:
        await asyncio.gather(request("a"), request("b"))

    asyncio.run(main())

    assert events == ["a:start", "a:end", "b:start", "b:end"]


def test_different_users_do_not_block_each_other() -> None:
    locks = UserLocks()
    events: list[str] = []

    async def request(name: str) -> None:
        async with locks.hold(uuid4()):
            events.append(f"{name}:start")
            await asyncio.sleep(0)
            events.append(f"{name}:end")

    async def main() -> None:
        await asyncio.gather(request("a"), request("b"))

    asyncio.run(main())

    assert events == ["a:start", "b:start", "a:end", "b:end"]


def test_lock_is_released_after_errors() -> None:
    locks = UserLocks()
    user_id = uuid4()

    async def failing() -> None:
        async with locks.hold(user_id):
            assert locks.is_held(user_id)
            raise ValueError("boom")

    with pytest.raises(ValueError):
        asyncio.run(failing())

    assert not locks.is_held(user_id)
