import json
from pathlib import Path

from click.testing import CliRunner

from storedesk._cli import cli
from storedesk._cli.cli_session import mask


class TestMask:
    def test_mask(self):
        assert mask(None) == "<none>"
        assert mask("short") == "*****"
        assert mask("eyJhbGciOiJIUzI1NiJ9") == "eyJh…IiJ9"


class TestSessionCommands:
    def test_set_and_show(self, runner: CliRunner, session_file: Path):
        result = runner.invoke(
            cli,
            [
                "session",
                "set",
                "--access-token",
                "access-token-value",
                "--refresh-token",
                "refresh-token-value",
                "--user",
                '{"id": "user-1"}',
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(session_file.read_text()) == {
            "accessToken": "access-token-value",
            "refreshToken": "refresh-token-value",
            "user": {"id": "user-1"},
        }

        result = runner.invoke(cli, ["session", "show"])

        assert result.exit_code == 0, result.output
        assert "Access token: acce…alue" in result.output
        assert "Refresh token: refr…alue" in result.output
        assert '"id": "user-1"' in result.output
        assert "access-token-value" not in result.output

    def test_set_requires_access_token(self, runner: CliRunner, session_file: Path):
        result = runner.invoke(cli, ["session", "set"])

        assert result.exit_code == 2
        assert not session_file.exists()

    def test_set_rejects_invalid_user(self, runner: CliRunner, session_file: Path):
        result = runner.invoke(
            cli, ["session", "set", "--access-token", "a1", "--user", "{"]
        )

        assert result.exit_code == 2
        assert not session_file.exists()

    def test_show_empty_session(self, runner: CliRunner, session_file: Path):
        result = runner.invoke(cli, ["session", "show"])

        assert result.exit_code == 0
        assert "Access token: <none>" in result.output
        assert "User: <none>" in result.output

    def test_clear(self, runner: CliRunner, logged_in: Path):
        result = runner.invoke(cli, ["session", "clear"])

        assert result.exit_code == 0
        assert "Session cleared" in result.output
        assert json.loads(logged_in.read_text()) == {}
