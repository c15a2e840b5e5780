"""Tests for request routing in PomodoroService."""

import pytest

from pomidoro.clock.clock import ClockError, Paused, Running
from pomidoro.clock.pomodoro import EmptySessionsError, PomodoroClock
from pomidoro.ipc.protocol import ConfirmationResponse, Request, StateResponse
from pomidoro.ipc.server import ServerAction
from pomidoro.model.session import Session
from pomidoro.runtime.service import PomodoroService

SECOND = 1_000_000_000


def _service(clock=None, now: int = 0, sessions=None) -> PomodoroService:
    if sessions is None:
        sessions = [Session(name="work", duration=10 * SECOND), Session(name="rest", duration=5 * SECOND)]
    return PomodoroService(PomodoroClock(sessions, clock=clock), now=lambda: now)


class TestRouting:
    """Each request maps to one engine action and one reply."""

    def test_fetch_returns_state(self):
        action = _service(clock=Paused(elapsed=12 * SECOND)).update(Request.FETCH)
        assert isinstance(action.response, StateResponse)
        assert action.response.state.session_name == "rest"
        assert action.stop is False

    def test_toggle_confirms(self):
        service = _service(now=3 * SECOND)
        action = service.update(Request.TOGGLE)
        assert action == ServerAction.respond(ConfirmationResponse())
        assert service.pomodoro.clock == Running(resumed_at=3 * SECOND, offset=0)

    def test_skip_confirms(self):
        service = _service(clock=Paused(elapsed=SECOND))
        assert service.update(Request.SKIP) == ServerAction.respond(ConfirmationResponse())
        assert service.pomodoro.clock == Paused(elapsed=10 * SECOND)

    def test_reset_confirms(self):
        service = _service(clock=Running(resumed_at=0, offset=4))
        assert service.update(Request.RESET) == ServerAction.respond(ConfirmationResponse())
        assert service.pomodoro.clock == Paused()

    def test_stop_confirms_and_stops(self):
        service = _service(clock=Paused(elapsed=7))
        action = service.update(Request.STOP)
        assert action.response == ConfirmationResponse()
        assert action.stop is True
        assert service.pomodoro.clock == Paused(elapsed=7)


class TestFatalErrors:
    """Clock and configuration failures are not converted into replies."""

    @pytest.mark.parametrize("request_kind", [Request.FETCH, Request.TOGGLE, Request.SKIP])
    def test_clock_error_propagates(self, request_kind):
        service = _service(clock=Running(resumed_at=10 * SECOND), now=SECOND)
        with pytest.raises(ClockError):
            service.update(request_kind)

    @pytest.mark.parametrize("request_kind", [Request.FETCH, Request.SKIP])
    def test_empty_sessions_propagate(self, request_kind):
        service = _service(sessions=[])
        with pytest.raises(EmptySessionsError):
            service.update(request_kind)

    def test_reset_never_fails(self):
        service = _service(sessions=[], clock=Running(resumed_at=10 * SECOND))
        assert service.update(Request.RESET).response == ConfirmationResponse()
