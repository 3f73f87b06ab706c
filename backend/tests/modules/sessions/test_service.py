"""Tests for the session service."""

from datetime import datetime, timedelta, timezone

import pytest

from modules.identity.repository import InMemoryUserRepository
from modules.sessions.repository import InMemorySessionStore
from modules.sessions.service import SessionService, digest_token


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def service(store, users, clock):
    return SessionService(store, users, ttl=timedelta(days=7), clock=clock)


@pytest.fixture
def user(users):
    return users.create({"email": "a@x.com"})


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_issues_random_token(self, service, user):
        first = await service.create_session(user)
        second = await service.create_session(user)
        assert first.token != second.token
        assert len(first.token) >= 43

    @pytest.mark.asyncio
    async def test_stores_only_the_digest(self, service, store, user):
        issued = await service.create_session(user)
        assert store.get(issued.token) is None
        stored = store.get(digest_token(issued.token))
        assert stored is not None
        assert stored.user_id == user.id

    @pytest.mark.asyncio
    async def test_fixed_expiry(self, service, user, clock):
        issued = await service.create_session(user)
        assert issued.expires_at == clock.now + timedelta(days=7)


class TestResolveSession:
    @pytest.mark.asyncio
    async def test_resolves_to_user(self, service, user):
        issued = await service.create_session(user)
        resolved = await service.resolve_session(issued.token)
        assert resolved.id == user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "not-a-real-token"])
    async def test_unknown_tokens_are_anonymous(self, service, token):
        assert await service.resolve_session(token) is None

    @pytest.mark.asyncio
    async def test_expired_session_is_removed(self, service, store, user, clock):
        issued = await service.create_session(user)
        clock.advance(timedelta(days=7))
        assert await service.resolve_session(issued.token) is None
        assert store.get(digest_token(issued.token)) is None

    @pytest.mark.asyncio
    async def test_resolve_does_not_extend(self, service, user, clock):
        issued = await service.create_session(user)
        clock.advance(timedelta(days=6))
        assert await service.resolve_session(issued.token) is not None
        clock.advance(timedelta(days=1, seconds=1))
        assert await service.resolve_session(issued.token) is None

    @pytest.mark.asyncio
    async def test_missing_user(self, service, store, user, users):
        issued = await service.create_session(user)
        users._users.clear()
        assert await service.resolve_session(issued.token) is None
        assert store.get(digest_token(issued.token)) is None

    @pytest.mark.asyncio
    async def test_flag_changes_visible_on_next_resolve(self, service, user, users):
        issued = await service.create_session(user)
        users.update(user.id, {"is_admin": True})
        resolved = await service.resolve_session(issued.token)
        assert resolved.is_admin is True


class TestDestroySession:
    @pytest.mark.asyncio
    async def test_destroy(self, service, user):
        issued = await service.create_session(user)
        await service.destroy_session(issued.token)
        assert await service.resolve_session(issued.token) is None

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self, service, user):
        issued = await service.create_session(user)
        await service.destroy_session(issued.token)
        await service.destroy_session(issued.token)
        await service.destroy_session(None)

    @pytest.mark.asyncio
    async def test_other_sessions_survive(self, service, user):
        laptop = await service.create_session(user)
        phone = await service.create_session(user)
        await service.destroy_session(laptop.token)
        assert await service.resolve_session(phone.token) is not None


class TestPurgeExpired:
    @pytest.mark.asyncio
    async def test_purge(self, service, user, clock):
        old = await service.create_session(user)
        clock.advance(timedelta(days=3))
        fresh = await service.create_session(user)
        clock.advance(timedelta(days=5))

        assert await service.purge_expired() == 1
        assert await service.resolve_session(old.token) is None
        assert await service.resolve_session(fresh.token) is not None
