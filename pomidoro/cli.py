"""CLI interface for pomidoro."""

import argparse
import logging
import signal
import sys
from pathlib import Path
from types import FrameType

import yaml
from langchain_core.prompts import PromptTemplate

from pomidoro.clock.clock import ClockError
from pomidoro.clock.pomodoro import EmptySessionsError, PomodoroClock
from pomidoro.core.config import Config, load_config
from pomidoro.core.logging import setup_logging
from pomidoro.ipc.client import RequestRejectedError, client_socket_path, send_and_receive
from pomidoro.ipc.protocol import ProtocolError, Request, StateResponse
from pomidoro.ipc.server import start_server
from pomidoro.prompts.status import build_status_source, compile_status_template, render_status
from pomidoro.runtime.service import PomodoroService

logger = logging.getLogger(__name__)

REQUEST_COMMANDS = {
    "fetch": Request.FETCH,
    "toggle": Request.TOGGLE,
    "skip": Request.SKIP,
    "reset": Request.RESET,
    "stop": Request.STOP,
}


def template_arg(value: str) -> PromptTemplate:
    """argparse type converting a mustache string into a status template."""
    try:
        return compile_status_template(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="pomidoro",
        description="pomidoro - pomodoro timer server controlled over a local socket",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: $XDG_CONFIG_HOME/pomidoro/config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    start_parser = subparsers.add_parser("start", help="Start a pomodoro server")
    start_parser.add_argument(
        "--id",
        dest="server_id",
        type=int,
        default=0,
        help="Server id, selects the socket to bind (default: 0)",
    )

    send_parser = subparsers.add_parser("send", help="Send a request to a running server")
    send_parser.add_argument(
        "--id",
        dest="server_id",
        type=int,
        default=0,
        help="Id of the server to talk to (default: 0)",
    )
    requests = send_parser.add_subparsers(dest="request", required=True, help="Request to send")

    fetch_parser = requests.add_parser("fetch", help="Print the current state through a template")
    fetch_parser.add_argument(
        "template",
        type=template_arg,
        help="Mustache template; variables: id, clock_state, session, duration, percent, time",
    )
    requests.add_parser("toggle", help="Pause or resume the clock")
    requests.add_parser("skip", help="Skip to the start of the next session")
    requests.add_parser("reset", help="Pause the clock and rewind to the first session")
    requests.add_parser("stop", help="Stop the server")

    return parser


def _handle_sigterm(signum: int, frame: FrameType | None) -> None:
    raise SystemExit(0)


def run_server(config: Config, server_id: int) -> None:
    """Bind the server socket and serve until a stop request arrives."""
    server_path = config.server_path(server_id)
    config.socket_dir.mkdir(parents=True, exist_ok=True)
    if server_path.exists():
        logger.warning(f"Removing stale socket {server_path}")
        server_path.unlink()

    pomodoro = PomodoroClock.paused(config.build_sessions(), config.time_format)
    service = PomodoroService(pomodoro)

    logger.info(f"Starting server {server_id} with {len(pomodoro.sessions)} session(s)")
    try:
        start_server(server_path, service)
    finally:
        server_path.unlink(missing_ok=True)
        logger.info(f"Server {server_id} stopped")


def run_send(
    config: Config,
    server_id: int,
    request: Request,
    template: PromptTemplate | None = None,
) -> str | None:
    """Send one request and return the rendered output for fetch, if any."""
    config.socket_dir.mkdir(parents=True, exist_ok=True)
    client_path = client_socket_path(config.socket_dir)
    response = send_and_receive(client_path, config.server_path(server_id), request)

    if request is not Request.FETCH:
        return None
    if not isinstance(response, StateResponse):
        raise ProtocolError(f"Expected a state response, got {response!r}")

    source = build_status_source(
        server_id,
        response.state,
        paused_text=config.paused_state_text,
        running_text=config.running_state_text,
    )
    return render_status(template, source)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.command == "start":
        setup_logging(
            level="DEBUG" if args.verbose else config.logging.level,
            directory=config.logging.directory,
            max_size_mb=config.logging.max_size_mb,
            backup_count=config.logging.backup_count,
        )
        signal.signal(signal.SIGTERM, _handle_sigterm)
        try:
            run_server(config, args.server_id)
        except OSError as e:
            logger.error(f"Server socket failure: {e}")
            return 1
        except (ClockError, EmptySessionsError):
            logger.exception("Fatal server error")
            return 1
        except KeyboardInterrupt:
            logger.info("Interrupted")
        return 0

    request = REQUEST_COMMANDS[args.request]
    try:
        output = run_send(config, args.server_id, request, getattr(args, "template", None))
    except RequestRejectedError as e:
        logger.error(f"Server rejected {args.request}: {e}")
        return 1
    except (OSError, ProtocolError) as e:
        logger.error(f"Failed to send {args.request} to server {args.server_id}: {e}")
        return 1

    if output is not None:
        print(output)
    return 0


def run() -> None:
    """Entry point for the console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()
