"""Tests for the service container wiring."""

from datetime import timedelta

from api.dependencies import ServiceContainer, get_container, reset_container
from modules.rooms.interfaces import IRoomService
from modules.tournaments.interfaces import ITournamentService
from modules.users.store import InMemoryUserProfileStore
from shared.config import Settings


class TestServiceContainer:

    def test_services_are_singletons(self):
        container = ServiceContainer(Settings(storage_backend="memory"))

        assert container.lives is container.lives
        assert container.rooms is container.rooms
        assert container.users is container.users

    def test_memory_backend_wiring(self):
        container = ServiceContainer(Settings(storage_backend="memory"))

        assert isinstance(container.profiles, InMemoryUserProfileStore)
        assert isinstance(container.rooms, IRoomService)
        assert isinstance(container.tournaments, ITournamentService)

    def test_settings_flow_into_services(self):
        container = ServiceContainer(
            Settings(storage_backend="memory", max_lives=3, life_regeneration_minutes=10)
        )

        assert container.lives.max_lives == 3
        assert container.lives._interval == timedelta(minutes=10)

    def test_reset_drops_instances(self):
        container = ServiceContainer(Settings(storage_backend="memory"))
        lives = container.lives

        container.reset()

        assert container.lives is not lives

    def test_global_container_reset(self):
        first = get_container()
        reset_container()
        assert get_container() is not first
        reset_container()


class TestBackgroundWork:

    def test_startup_runs_poller_and_dispatcher(self, client, container):
        assert container.lives_poller.running
        assert container.notification_dispatcher.running

    def test_dispatcher_drains_the_shared_schedule_table(self):
        container = ServiceContainer(Settings(storage_backend="memory", notification_dispatch_seconds=7))

        dispatcher = container.notification_dispatcher

        assert dispatcher._scheduler is container.notification_scheduler
        assert dispatcher._interval == 7

    def test_poller_idle_window_from_settings(self):
        container = ServiceContainer(Settings(storage_backend="memory", lives_poll_idle_minutes=5))

        assert container.lives_poller._idle_after == timedelta(minutes=5)
