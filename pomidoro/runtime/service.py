"""Request handler driving the pomodoro engine from the server loop."""

import time
from collections.abc import Callable

from pomidoro.clock.pomodoro import PomodoroClock
from pomidoro.ipc.protocol import ConfirmationResponse, Request, StateResponse
from pomidoro.ipc.server import RequestHandler, ServerAction


class PomodoroService(RequestHandler):
    """Routes each request to the engine it exclusively owns.

    Clock and configuration failures (ClockError, EmptySessionsError) are
    not caught here: they end the server.

    Args:
        pomodoro: The engine to drive.
        now: Monotonic time source in nanoseconds.
    """

    def __init__(
        self,
        pomodoro: PomodoroClock,
        now: Callable[[], int] = time.monotonic_ns,
    ):
        self.pomodoro = pomodoro
        self._now = now

    def update(self, request: Request) -> ServerAction:
        ok = ConfirmationResponse()

        if request is Request.FETCH:
            state = self.pomodoro.state_at(self._now())
            return ServerAction.respond(StateResponse(state))
        if request is Request.TOGGLE:
            self.pomodoro.toggle(self._now())
            return ServerAction.respond(ok)
        if request is Request.SKIP:
            self.pomodoro.skip_session(self._now())
            return ServerAction.respond(ok)
        if request is Request.RESET:
            self.pomodoro.reset()
            return ServerAction.respond(ok)
        # STOP
        return ServerAction.respond_and_stop(ok)
