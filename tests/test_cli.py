"""Tests for the command-line interface."""

import tempfile
import threading
import time
from pathlib import Path

import pytest
import yaml

from pomidoro import cli
from pomidoro.core.config import Config
from pomidoro.ipc.protocol import Request

TIMEOUT = 5.0


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from replacing pytest's logging handlers."""
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(workdir):
    path = workdir / "config.yaml"
    path.write_text(yaml.safe_dump({
        "socket_dir": str(workdir / "sock"),
        "paused_state_text": "paused",
        "running_state_text": "running",
        "sessions": [
            {"name": "work", "duration": 1500},
            {"name": "rest", "duration": 300},
        ],
        "logging": {"directory": str(workdir / "logs")},
    }))
    return path


@pytest.fixture
def server(config_file):
    """Run `start` in a background thread until a stop request."""
    config = Config(**yaml.safe_load(config_file.read_text()))
    thread = threading.Thread(target=cli.run_server, args=(config, 0), daemon=True)
    thread.start()

    deadline = time.monotonic() + TIMEOUT
    while not config.server_path(0).exists():
        assert time.monotonic() < deadline, "server did not bind"
        time.sleep(0.01)

    yield config

    if thread.is_alive():
        cli.run_send(config, 0, Request.STOP)
    thread.join(TIMEOUT)
    assert not config.server_path(0).exists()


class TestParser:
    """Argument parsing."""

    def test_start_defaults(self):
        args = cli.build_parser().parse_args(["start"])
        assert args.command == "start"
        assert args.server_id == 0
        assert args.config is None

    def test_send_with_id_and_config(self):
        args = cli.build_parser().parse_args(["-c", "x.yaml", "send", "--id", "3", "skip"])
        assert args.config == Path("x.yaml")
        assert args.server_id == 3
        assert cli.REQUEST_COMMANDS[args.request] is Request.SKIP

    def test_fetch_template_compiled(self):
        args = cli.build_parser().parse_args(["send", "fetch", "{{time}}"])
        assert args.template.template == "{{time}}"

    def test_fetch_requires_template(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["send", "fetch"])

    def test_invalid_template_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["send", "fetch", "{{nonsense}}"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestSendCommands:
    """`send` against a running server."""

    def test_fetch_prints_rendered_state(self, server, config_file, capsys):
        code = cli.main(["-c", str(config_file), "send", "fetch", "{{session}} {{time}} {{percent}}% {{clock_state}}"])
        assert code == 0
        assert capsys.readouterr().out == "work 25:00 0% paused\n"

    def test_toggle_then_fetch_running(self, server, config_file, capsys):
        assert cli.main(["-c", str(config_file), "send", "toggle"]) == 0
        assert capsys.readouterr().out == ""
        cli.main(["-c", str(config_file), "send", "fetch", "{{clock_state}}"])
        assert capsys.readouterr().out == "running\n"

    def test_skip_and_reset(self, server, config_file, capsys):
        assert cli.main(["-c", str(config_file), "send", "skip"]) == 0
        cli.main(["-c", str(config_file), "send", "fetch", "{{session}} {{duration}}"])
        assert capsys.readouterr().out == "rest 05:00\n"

        assert cli.main(["-c", str(config_file), "send", "reset"]) == 0
        cli.main(["-c", str(config_file), "send", "fetch", "{{session}}"])
        assert capsys.readouterr().out == "work\n"

    def test_stop(self, server, config_file):
        assert cli.main(["-c", str(config_file), "send", "stop"]) == 0

    def test_client_sockets_cleaned_up(self, server, config_file):
        cli.main(["-c", str(config_file), "send", "toggle"])
        assert [p.name for p in server.socket_dir.iterdir()] == ["server0.sock"]


class TestFailures:
    """Exit status on errors."""

    def test_no_server(self, config_file):
        assert cli.main(["-c", str(config_file), "send", "--id", "7", "toggle"]) == 1

    def test_missing_config_file(self, workdir):
        assert cli.main(["-c", str(workdir / "missing.yaml"), "send", "toggle"]) == 1

    def test_invalid_config(self, workdir):
        path = workdir / "bad.yaml"
        path.write_text(yaml.safe_dump({"sessions": []}))
        assert cli.main(["-c", str(path), "start"]) == 1

    def test_stale_server_socket_replaced(self, config_file):
        config = Config(**yaml.safe_load(config_file.read_text()))
        config.socket_dir.mkdir(parents=True)
        config.server_path(0).touch()

        thread = threading.Thread(target=cli.run_server, args=(config, 0), daemon=True)
        thread.start()
        deadline = time.monotonic() + TIMEOUT
        while True:
            try:
                cli.run_send(config, 0, Request.STOP)
                break
            except OSError:
                assert time.monotonic() < deadline, "server did not bind"
                time.sleep(0.01)
        thread.join(TIMEOUT)
        assert not thread.is_alive()
        assert not config.server_path(0).exists()
