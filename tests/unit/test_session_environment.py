"""
Unit tests for backend/services/session_environment.py
"""

import pytest

from backend.core.plan_builder import build_plan
from backend.services.playback_scheduler import PlaybackScheduler
from backend.services.session_environment import SessionEnvironmentManager
from domain.models import PlaybackState, PlaybackStatus
from tests.fakes import FakeFullscreen, FakeWakeLock

pytestmark = pytest.mark.unit


@pytest.fixture
def scheduler(fake_clock):
    plan = build_plan([{"name": "Plank", "sets": 2, "hold_time_seconds": 10, "rest_time_seconds": 5}])
    return PlaybackScheduler(plan, fake_clock)


class TestWakeLock:
    def test_follows_playback(self, scheduler, fake_clock, wake_lock):
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)

        scheduler.start()
        assert wake_lock.held and manager.wake_lock_held

        fake_clock.tick(12)
        scheduler.pause()
        assert not wake_lock.held

        scheduler.resume()
        assert wake_lock.held

        fake_clock.run_until_stopped()
        assert not wake_lock.held
        assert not manager.wake_lock_held

    def test_acquired_once_while_ticking(self, scheduler, fake_clock, wake_lock):
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)
        scheduler.start()
        fake_clock.tick(15)
        assert wake_lock.acquire_calls == 1

    def test_released_on_cancel_and_teardown(self, scheduler, fake_clock, wake_lock):
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)
        scheduler.start()
        scheduler.cancel()
        assert not wake_lock.held

        scheduler.start()
        scheduler.teardown()
        assert not wake_lock.held
        assert wake_lock.release_calls == 2

    def test_unsupported_is_noop(self, scheduler, fake_clock):
        wake_lock = FakeWakeLock(supported=False)
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)
        scheduler.start()
        assert wake_lock.acquire_calls == 0
        assert not manager.wake_lock_held

    def test_missing_port_is_noop(self, scheduler):
        manager = SessionEnvironmentManager()
        manager.attach(scheduler)
        scheduler.start()
        scheduler.teardown()
        assert not manager.wake_lock_held

    def test_acquire_failure_is_logged_not_raised(self, scheduler, caplog):
        wake_lock = FakeWakeLock(fail_on_acquire=True)
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)

        scheduler.start()

        assert scheduler.state.status == PlaybackStatus.PREPARING
        assert not manager.wake_lock_held
        assert "Wake lock request failed" in caplog.text

    def test_reacquired_when_visible_again(self, scheduler, wake_lock):
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)
        scheduler.start()

        manager.handle_visibility_change(False)
        assert not manager.wake_lock_held
        manager.handle_visibility_change(True)

        assert manager.wake_lock_held
        assert wake_lock.acquire_calls == 2

    def test_hidden_page_releases_port(self, scheduler, wake_lock):
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.attach(scheduler)
        scheduler.start()

        manager.handle_visibility_change(False)
        assert not wake_lock.held
        assert wake_lock.release_calls == 1

        scheduler.pause()
        manager.handle_visibility_change(True)

        assert not wake_lock.held
        assert wake_lock.release_calls == 1
        assert wake_lock.acquire_calls == 1

    def test_not_reacquired_when_paused(self, wake_lock):
        manager = SessionEnvironmentManager(wake_lock=wake_lock)
        manager.on_state_change(PlaybackState(status=PlaybackStatus.PAUSED))
        manager.handle_visibility_change(False)
        manager.handle_visibility_change(True)
        assert wake_lock.acquire_calls == 0


class TestFullscreen:
    def test_toggle(self, fullscreen):
        manager = SessionEnvironmentManager(fullscreen=fullscreen)

        assert manager.toggle_fullscreen() is True
        assert manager.is_fullscreen
        assert not manager.chrome_visible

        assert manager.toggle_fullscreen() is False
        assert manager.chrome_visible
        assert fullscreen.enter_calls == 1
        assert fullscreen.exit_calls == 1

    def test_external_exit_restores_chrome(self, fullscreen):
        seen = []
        manager = SessionEnvironmentManager(fullscreen=fullscreen)
        manager.add_fullscreen_listener(seen.append)
        manager.toggle_fullscreen()

        fullscreen.trigger_external_exit()

        assert not manager.is_fullscreen
        assert manager.chrome_visible
        assert seen == [True, False]

    def test_flag_follows_request_when_port_never_reports(self):
        fullscreen = FakeFullscreen(report_changes=False)
        manager = SessionEnvironmentManager(fullscreen=fullscreen)
        assert manager.toggle_fullscreen() is True

    def test_unsupported_toggle_is_noop(self):
        fullscreen = FakeFullscreen(supported=False)
        manager = SessionEnvironmentManager(fullscreen=fullscreen)
        assert manager.toggle_fullscreen() is False
        assert fullscreen.enter_calls == 0
