import json
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def session_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "session.json"
    monkeypatch.setenv("STOREDESK_SESSION_FILE", str(path))
    return path


@pytest.fixture
def logged_in(session_file: Path) -> Path:
    session_file.write_text(
        json.dumps(
            {
                "accessToken": "access-token",
                "refreshToken": "refresh-token",
                "user": {"id": "user-1"},
            }
        )
    )
    return session_file
