#!/usr/bin/env python3
"""Shuffle Player - Main entry point."""

import signal
import sys

from core.config import get_config
from core.control_loop import ControlLoop
from core.control_server import ControlServer
from core.exceptions import ShufflePlayerError
from core.logging import LinuxLogger, get_logger
from core.session import PlaybackSession

logger = get_logger(__name__)


def _on_sigterm(signum, frame):
    raise SystemExit(0)


def main():
    """Main entry point."""
    try:
        config = get_config()
    except ShufflePlayerError as e:
        # Logging is not set up yet; its directory comes from the config.
        print(f"unable to load configuration: {e}", file=sys.stderr)
        return 1

    LinuxLogger(log_dir=config.log_dir)

    try:
        session = PlaybackSession.start(config)
        server = ControlServer(
            config.http_host,
            config.http_port,
            session,
            poll_timeout=config.poll_timeout,
        )
    except ShufflePlayerError as e:
        logger.critical("%s", e)
        return 1

    signal.signal(signal.SIGTERM, _on_sigterm)
    try:
        ControlLoop(session, server).run_forever()
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
        server.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
