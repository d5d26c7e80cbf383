"""Unit tests for ActorService."""

from datetime import timedelta

import pytest

from board.domain.error import NotFoundError, ValidationError
from board.domain.repository import ActorRepository
from board.domain.service import ActorService
from board.domain.value import Line
from tests.conftest import FakeClock, make_actor
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestBootstrap:
    """Tests for ActorService.bootstrap."""

    @pytest.mark.asyncio
    async def test_first_contact_creates_actor(self, unit_env):
        """A new device gets an actor with the requested line."""
        # Arrange
        service = await unit_env.get(ActorService)

        # Act
        actor, created = await service.bootstrap("device-1", Line.G)

        # Assert
        assert created
        assert actor.device_id == "device-1"
        assert actor.line == Line.G
        assert not actor.is_admin

    @pytest.mark.asyncio
    async def test_same_device_returns_same_actor(self, unit_env):
        """Bootstrapping again returns the stored actor and keeps its line."""
        # Arrange
        service = await unit_env.get(ActorService)
        first, _ = await service.bootstrap("device-1", Line.G)

        # Act
        second, created = await service.bootstrap("device-1", Line.Q)

        # Assert
        assert not created
        assert second.id == first.id
        assert second.line == Line.G

    @pytest.mark.asyncio
    async def test_random_line_when_none_requested(self, unit_env):
        """Omitting the line still assigns one."""
        service = await unit_env.get(ActorService)

        actor, _ = await service.bootstrap("device-2")

        assert actor.line in set(Line)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("device_id", ["", "d" * 256])
    async def test_invalid_device_id(self, unit_env, device_id):
        """Empty and overlong device ids are rejected."""
        service = await unit_env.get(ActorService)

        with pytest.raises(ValidationError):
            await service.bootstrap(device_id)


class TestActorActivity:
    """Tests for activity bookkeeping."""

    @pytest.mark.asyncio
    async def test_get_actor_missing(self, unit_env):
        """Unknown actors raise NotFoundError."""
        service = await unit_env.get(ActorService)

        with pytest.raises(NotFoundError):
            await service.get_actor(make_actor().id)

    @pytest.mark.asyncio
    async def test_posts_today_resets_on_new_day(self, unit_env):
        """The daily post counter restarts on the first post of a new day."""
        # Arrange
        clock = FakeClock()
        service = ActorService(await unit_env.get(ActorRepository), clock=clock)
        actor, _ = await service.bootstrap("device-3", Line.L)

        # Act
        actor = await service.record_post(actor)
        actor = await service.record_post(actor)
        same_day_count = actor.posts_today
        clock.advance(days=1)
        actor = await service.record_post(actor)

        # Assert
        assert same_day_count == 2
        assert actor.posts_today == 1
        assert actor.last_post_at == clock()

    @pytest.mark.asyncio
    async def test_touch_updates_last_seen(self, unit_env):
        """Touching an actor moves last_seen_at to now."""
        # Arrange
        clock = FakeClock()
        repo = await unit_env.get(ActorRepository)
        service = ActorService(repo, clock=clock)
        actor, _ = await service.bootstrap("device-4", Line.L)
        clock.advance(hours=3)

        # Act
        await service.touch(actor)

        # Assert
        stored = await repo.find_by_id(actor.id)
        assert stored.last_seen_at - actor.last_seen_at == timedelta(hours=3)
