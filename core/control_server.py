"""HTTP control surface: show the current track and skip it.

The server never runs on its own thread. The control loop calls
ControlServer.poll(), which waits a bounded time for at most one request
and answers it inline, so request handling and player supervision never
overlap.
"""

import html
import http.server
import json
from typing import NamedTuple
from urllib.parse import urlsplit

from core.exceptions import ControlServerError, PlayerControlError
from core.logging import get_logger
from core.session import PlaybackSession

logger = get_logger(__name__)

SKIP_REDIRECT = '<html><head><meta http-equiv="refresh" content="0; url=/"/></head></html>'


class Response(NamedTuple):
    status: int
    content_type: str
    body: str


def render_status(session: PlaybackSession) -> Response:
    track = session.current_track
    if track is None:
        body = 'no track yet<br/><a href="/skip">skip</a>'
    else:
        body = f'current track: {html.escape(track)}'
        metadata = session.current_metadata
        if metadata is not None:
            body += f'<br/>{html.escape(metadata.display_name)}'
        body += '<br/><a href="/skip">skip</a>'
    return Response(200, 'text/html', body)


def render_skip(session: PlaybackSession) -> Response:
    try:
        session.skip()
    except PlayerControlError as e:
        logger.error("Skip failed: %s", e)
        return Response(200, 'text/html', html.escape(f"unable to skip track: {e}"))
    return Response(200, 'text/html', SKIP_REDIRECT)


def render_status_json(session: PlaybackSession) -> Response:
    return Response(200, 'application/json', json.dumps(session.status()))


ROUTES = {
    '/': render_status,
    '/skip': render_skip,
    '/status.json': render_status_json,
}


def dispatch(path: str, session: PlaybackSession) -> Response:
    """Route a request path to its renderer."""
    route = ROUTES.get(urlsplit(path).path)
    if route is None:
        return Response(404, 'text/plain', 'unsupported request')
    return route(session)


class ControlRequestHandler(http.server.BaseHTTPRequestHandler):
    """Answers GET requests from the session owned by the server."""

    server: '_SessionHTTPServer'

    def setup(self):
        # A stalled client may hold the loop no longer than one poll
        self.timeout = self.server.timeout
        super().setup()

    def do_GET(self):
        response = dispatch(self.path, self.server.session)
        payload = response.body.encode('utf-8')
        self.send_response(response.status)
        self.send_header('Content-Type', f'{response.content_type}; charset=utf-8')
        self.send_header('Content-Length', str(len(payload)))
        self.send_header('Cache-Control', 'no-store')
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class _SessionHTTPServer(http.server.HTTPServer):
    # A second instance on the same port must fail to bind
    allow_reuse_port = False

    def __init__(self, address, session: PlaybackSession):
        self.session = session
        super().__init__(address, ControlRequestHandler)

    def handle_error(self, request, client_address):
        logger.error("error from http server while serving %s", client_address, exc_info=True)


class ControlServer:
    """Bound HTTP listener polled by the control loop."""

    def __init__(self, host: str, port: int, session: PlaybackSession, poll_timeout: float = 0.5):
        try:
            self._httpd = _SessionHTTPServer((host, port), session)
        except OSError as e:
            raise ControlServerError(f"unable to start http server on {host}:{port}: {e}") from e
        self._httpd.timeout = poll_timeout
        logger.info("Control surface listening on http://%s:%d/", host, self.port)

    @property
    def port(self) -> int:
        return self._httpd.server_address[1]

    def poll(self) -> None:
        """Wait up to the poll timeout and serve at most one request."""
        self._httpd.handle_request()

    def close(self) -> None:
        self._httpd.server_close()
