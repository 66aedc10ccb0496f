"""Tests for the command line entry point."""

import io
import json
import signal
from pathlib import Path

import pytest

from settings_mcp import __version__, cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Leave the test runner's logging configuration alone."""
    monkeypatch.setattr(cli, "configure_logging", lambda level, stream=None: None)


def run(lines: list[str], argv: list[str] | None = None) -> tuple[int, list[dict]]:
    stdin = io.StringIO("".join(line + "\n" for line in lines))
    stdout = io.StringIO()
    code = cli.main(argv if argv is not None else ["--backend", "memory"], stdin=stdin, stdout=stdout)
    return code, [json.loads(line) for line in stdout.getvalue().splitlines()]


class TestMain:
    """Tests for cli.main."""

    def test_serves_until_eof(self):
        """Should answer each request and exit 0 at end of input."""
        code, responses = run(
            [
                '{"jsonrpc":"2.0","id":1,"method":"initialize","params":{}}',
                '{"jsonrpc":"2.0","method":"notifications/initialized"}',
                '{"jsonrpc":"2.0","id":2,"method":"tools/list"}',
                '{"jsonrpc":"2.0","id":3,"method":"tools/call","params":'
                '{"name":"adjust_brightness","arguments":{"action":"get"}}}',
            ]
        )

        assert code == 0
        assert [r["id"] for r in responses] == [1, 2, 3]
        assert responses[0]["result"]["serverInfo"]["name"] == "system-settings-mcp"
        assert [t["name"] for t in responses[1]["result"]["tools"]] == [
            "adjust_brightness",
            "adjust_volume",
            "get_system_info",
        ]
        assert responses[2]["result"]["content"][0]["text"] == "Current display brightness: 50%"

    def test_empty_input(self):
        """Should exit cleanly when stdin is closed immediately."""
        assert run([]) == (0, [])

    def test_uses_config_file(self, tmp_path: Path):
        """Should apply settings from --config."""
        config = tmp_path / "server.yaml"
        config.write_text('server:\n  name: "desk"\nproviders:\n  backend: memory\n')

        code, responses = run(
            ['{"jsonrpc":"2.0","id":1,"method":"initialize"}'], ["--config", str(config)]
        )

        assert code == 0
        assert responses[0]["result"]["serverInfo"]["name"] == "desk"

    def test_writes_audit_journal(self, tmp_path: Path):
        """Should journal tool calls when audit.log_file is set."""
        journal = tmp_path / "audit.jsonl"
        config = tmp_path / "server.yaml"
        config.write_text(f"audit:\n  log_file: {journal}\nproviders:\n  backend: memory\n")

        run(
            [
                '{"jsonrpc":"2.0","id":1,"method":"tools/call","params":'
                '{"name":"adjust_volume","arguments":{"action":"mute"}}}'
            ],
            ["--config", str(config)],
        )

        entries = [json.loads(line) for line in journal.read_text().splitlines()]
        assert [e["type"] for e in entries] == ["request", "response"]

    def test_missing_config_file(self, tmp_path: Path, capsys):
        """Should exit 1 when the config file cannot be read."""
        code = cli.main(["--config", str(tmp_path / "nope.yaml")], stdin=io.StringIO(), stdout=io.StringIO())

        assert code == 1
        assert "Error loading config" in capsys.readouterr().err

    def test_restores_signal_handlers(self):
        """Should put back the previous SIGTERM and SIGINT handlers on exit."""
        before = {sig: signal.getsignal(sig) for sig in (signal.SIGTERM, signal.SIGINT)}

        run([])

        assert {sig: signal.getsignal(sig) for sig in before} == before

    def test_sigint_mid_request_still_answers(self, monkeypatch):
        """Should finish the current request on Ctrl-C and stop before the next one."""
        handle_message = cli.MCPServer.handle_message

        def interrupted(self, raw):
            signal.raise_signal(signal.SIGINT)
            return handle_message(self, raw)

        monkeypatch.setattr(cli.MCPServer, "handle_message", interrupted)

        code, responses = run(
            [
                '{"jsonrpc":"2.0","id":1,"method":"tools/call","params":'
                '{"name":"adjust_volume","arguments":{"action":"get"}}}',
                '{"jsonrpc":"2.0","id":2,"method":"ping"}',
            ]
        )

        assert code == 0
        assert [r["id"] for r in responses] == [1]
        assert responses[0]["result"]["content"][0]["text"] == "Current system volume: 50%"

    def test_second_sigint_exits_immediately(self, monkeypatch):
        """Should exit 130 when Ctrl-C is pressed twice."""

        def interrupted_twice(self, raw):
            signal.raise_signal(signal.SIGINT)
            signal.raise_signal(signal.SIGINT)
            return "{}"

        monkeypatch.setattr(cli.MCPServer, "handle_message", interrupted_twice)

        code, responses = run(['{"jsonrpc":"2.0","id":1,"method":"ping"}'])

        assert code == 130
        assert responses == []

    def test_unwritable_audit_log(self, tmp_path: Path, caplog):
        """Should exit 1 when the audit journal cannot be opened."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        config = tmp_path / "server.yaml"
        config.write_text(f"audit:\n  log_file: {blocker / 'audit.jsonl'}\nproviders:\n  backend: memory\n")

        code = cli.main(["--config", str(config)], stdin=io.StringIO(), stdout=io.StringIO())

        assert code == 1
        assert "Error opening audit log" in caplog.text

    def test_keyboard_interrupt(self, monkeypatch):
        """Should exit 130 on Ctrl-C."""

        def interrupt(self, handler, stop_event=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.StdioTransport, "serve", interrupt)

        assert run([])[0] == 130

    def test_fatal_error(self, monkeypatch):
        """Should exit 1 on an unexpected error."""

        def explode(self, handler, stop_event=None):
            raise RuntimeError("broken pipe")

        monkeypatch.setattr(cli.StdioTransport, "serve", explode)

        assert run([])[0] == 1


class TestParser:
    """Tests for command line parsing."""

    def test_version(self, capsys):
        """Should print the version and exit."""
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_overrides(self):
        """Should let flags override the configuration."""
        args = cli.build_parser().parse_args(["--log-level", "debug", "--backend", "memory"])

        config = cli._apply_overrides(cli.ServerConfig(), args)

        assert config.log_level == "DEBUG"
        assert config.backend == "memory"

    def test_rejects_unknown_backend(self):
        """Should reject backends that do not exist."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--backend", "windows"])
