"""Single-threaded scheduler merging control requests and player supervision."""

from core.control_server import ControlServer
from core.logging import get_logger
from core.session import PlaybackSession

logger = get_logger(__name__)


class ControlLoop:
    """
    Alternates between the control server and the player supervisor.

    Each iteration waits (bounded by the server's poll timeout) for one
    request, then ticks the session, so the player is checked at least
    once per poll timeout even when nobody is calling.
    """

    def __init__(self, session: PlaybackSession, server: ControlServer):
        self.session = session
        self.server = server

    def run_once(self) -> None:
        try:
            self.server.poll()
        except OSError as e:
            logger.error("error from http server: %s", e)
        self.session.tick()

    def run_forever(self) -> None:
        while True:
            self.run_once()
