import argparse
import logging
import sys

from nicegui import app as ng_app
from nicegui import ui

from app.common.logging_config import TRACE, configure_logging
from app.common.theme import apply_theme
from app.constants import (
    DEVICE_URL,
    LOG_LEVEL,
    REQUEST_TIMEOUT_S,
    SERVER_HOST,
    SERVER_PORT,
    UPDATE_INTERVAL_S,
)
from app.pages.status import StatusPage
from app.services.status_poller import StatusPoller
from app.services.wall_eno_client import client
from app.state import DisplayState

# Runtime configuration (resolved later from CLI/env)
RUNTIME_SERVER_HOST = SERVER_HOST
RUNTIME_SERVER_PORT = SERVER_PORT
RUNTIME_UPDATE_INTERVAL_S = UPDATE_INTERVAL_S


@ui.page("/", title="wall-eno status")
def index() -> None:
    # Fresh state and poller per visit: a reload starts over from placeholders
    apply_theme()
    state = DisplayState()
    StatusPage(state).build()
    StatusPoller(client, state, interval=RUNTIME_UPDATE_INTERVAL_S).start()


async def _app_shutdown() -> None:
    await client.close()
    logging.info("wall-eno client closed")


ng_app.on_shutdown(_app_shutdown)


if __name__ in {"__main__", "__mp_main__"}:
    # CLI: web bind, device target, poll cadence and log level
    parser = argparse.ArgumentParser(description="wall-eno status dashboard")
    parser.add_argument("--host", default=SERVER_HOST, help="Webserver bind host")
    parser.add_argument(
        "--port", type=int, default=SERVER_PORT, help="Webserver bind port"
    )
    parser.add_argument(
        "--device-url",
        default=DEVICE_URL,
        help="Base URL of the wall-eno device (serves /wall-eno/json-status)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=UPDATE_INTERVAL_S,
        help="Seconds between status polls",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT_S,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set log level",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Enable WARNING logging"
    )
    args, _ = parser.parse_known_args()

    if args.interval <= 0:
        parser.error("--interval must be > 0")
    if args.timeout <= 0:
        parser.error("--timeout must be > 0")

    # Resolve runtime values
    RUNTIME_SERVER_HOST = args.host
    RUNTIME_SERVER_PORT = int(args.port)
    RUNTIME_UPDATE_INTERVAL_S = float(args.interval)

    client.base_url = args.device_url
    client.timeout = float(args.timeout)

    # Resolve log level priority: explicit --log-level > -v/-q > env default from constants
    if args.log_level:
        if args.log_level == "TRACE":
            RUNTIME_LOG_LEVEL = TRACE
        else:
            RUNTIME_LOG_LEVEL = getattr(logging, args.log_level)
    elif args.verbose >= 3:
        RUNTIME_LOG_LEVEL = TRACE
    elif args.verbose >= 2:
        RUNTIME_LOG_LEVEL = logging.DEBUG
    elif args.verbose == 1:
        RUNTIME_LOG_LEVEL = logging.INFO
    elif args.quiet:
        RUNTIME_LOG_LEVEL = logging.WARNING
    else:
        RUNTIME_LOG_LEVEL = LOG_LEVEL

    configure_logging(RUNTIME_LOG_LEVEL)
    logging.info(
        f"Webserver bind: host={RUNTIME_SERVER_HOST} port={RUNTIME_SERVER_PORT}"
    )
    logging.info(
        f"Polling {client.status_url} every {RUNTIME_UPDATE_INTERVAL_S:g}s"
    )

    ui.run(
        title="wall-eno status",
        host=RUNTIME_SERVER_HOST,
        port=RUNTIME_SERVER_PORT,
        reload=False,
        show=False,
        loop="uvloop" if sys.platform != "win32" else "asyncio",
        http="httptools",
        ws="wsproto",
    )
