"""Unit tests for ObservationFeedService (read path with offline fallback)."""

import pytest

from sbo_core.application.services.observation_feed_service import (
    FeedResult,
    ObservationFeedService,
)
from sbo_core.config.workflow_config import TEST_WORKFLOW_CONFIG
from sbo_core.domain.errors import UnknownRoleError
from sbo_core.domain.models.observation import ActionStatus
from tests.helpers import make_identity, make_observation


@pytest.fixture
def feed(repository, offline_cache) -> ObservationFeedService:
    return ObservationFeedService(repository, offline_cache, config=TEST_WORKFLOW_CONFIG)


class TestFetchVisible:
    @pytest.mark.asyncio
    async def test_observer_sees_own_newest_first(
        self, feed, repository, observer, second_observer, fake_time_authority
    ) -> None:
        now = fake_time_authority.now()
        older = repository.seed(make_observation(observer, created_at=now.replace(day=1)))
        newer = repository.seed(make_observation(observer, created_at=now))
        repository.seed(make_observation(second_observer, created_at=now))

        result = await feed.fetch_visible(observer)

        assert result.degraded is False
        assert [o.id for o in result.observations] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_manager_sees_only_routed(self, feed, repository, manager) -> None:
        mine = repository.seed(make_observation(area_manager="John Doe"))
        repository.seed(make_observation(area_manager="Sarah Smith"))

        result = await feed.fetch_visible(manager)

        assert [o.id for o in result.observations] == [mine.id]

    @pytest.mark.asyncio
    async def test_hse_sees_all(self, feed, repository, hse) -> None:
        repository.seed(make_observation(area_manager="John Doe"))
        repository.seed(make_observation(area_manager="Sarah Smith"))

        result = await feed.fetch_visible(hse)

        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_failure_serves_last_snapshot(
        self, feed, repository, observer
    ) -> None:
        first = repository.seed(make_observation(observer))
        live = await feed.fetch_visible(observer)
        repository.seed(make_observation(observer))
        repository.set_unreachable()

        result = await feed.fetch_visible(observer)

        assert result == FeedResult(observations=live.observations, degraded=True)
        assert [o.id for o in result.observations] == [first.id]

    @pytest.mark.asyncio
    async def test_failure_without_prior_fetch_is_empty(
        self, feed, repository, observer
    ) -> None:
        repository.seed(make_observation(observer))
        repository.set_unreachable()

        result = await feed.fetch_visible(observer)

        assert result.observations == ()
        assert result.degraded is True

    @pytest.mark.asyncio
    async def test_timeout_degrades_to_cache(
        self, feed, repository, observer
    ) -> None:
        repository.seed(make_observation(observer))
        await feed.fetch_visible(observer)
        repository.set_latency(1.0)

        result = await feed.fetch_visible(observer)

        assert result.degraded is True
        assert len(result) == 1

    @pytest.mark.asyncio
    async def test_snapshots_are_per_identity(
        self, feed, repository, observer, second_observer
    ) -> None:
        repository.seed(make_observation(observer))
        await feed.fetch_visible(observer)
        repository.set_unreachable()

        result = await feed.fetch_visible(second_observer)

        assert result.observations == ()

    @pytest.mark.asyncio
    async def test_unknown_role_is_not_degraded(self, feed) -> None:
        identity = make_identity()
        object.__setattr__(identity, "role", "contractor")

        with pytest.raises(UnknownRoleError):
            await feed.fetch_visible(identity)


class TestFetchActionRecords:
    @pytest.mark.asyncio
    async def test_lists_actions_assigned_to_identity(
        self, feed, repository, second_observer
    ) -> None:
        assigned = repository.seed(
            make_observation(
                action_assignee_id=second_observer.id,
                action_status=ActionStatus.IN_PROGRESS,
            )
        )
        repository.seed(make_observation(action_assignee_id="u-other"))

        result = await feed.fetch_action_records(second_observer)

        assert [o.id for o in result.observations] == [assigned.id]

    @pytest.mark.asyncio
    async def test_action_snapshot_does_not_replace_visible_snapshot(
        self, feed, repository, observer, offline_cache
    ) -> None:
        own = repository.seed(make_observation(observer))
        await feed.fetch_visible(observer)
        await feed.fetch_action_records(observer)
        repository.set_unreachable()

        visible = await feed.fetch_visible(observer)
        actions = await feed.fetch_action_records(observer)

        assert [o.id for o in visible.observations] == [own.id]
        assert actions.observations == ()
        assert offline_cache.cached_at(f"{observer.id}:actions") is not None


class TestFetchAllSubmissions:
    @pytest.mark.asyncio
    async def test_ignores_visibility_scope(
        self, feed, repository, observer, second_observer
    ) -> None:
        repository.seed(make_observation(observer))
        repository.seed(make_observation(second_observer))

        result = await feed.fetch_all_submissions(observer)

        assert {o.observer.id for o in result.observations} == {
            observer.id,
            second_observer.id,
        }

    @pytest.mark.asyncio
    async def test_cached_under_its_own_key(
        self, feed, repository, observer, offline_cache
    ) -> None:
        repository.seed(make_observation(observer))
        await feed.fetch_all_submissions(observer)
        repository.set_unreachable()

        result = await feed.fetch_all_submissions(observer)

        assert result.degraded is True
        assert len(result) == 1
        assert offline_cache.cached_at(observer.id) is None
        assert offline_cache.cached_at(f"{observer.id}:all") is not None
