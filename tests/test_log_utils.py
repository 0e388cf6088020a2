"""Request log files: the secret never reaches disk in clear text."""

import json

from core.config import Config
from ui import log_utils
from ui.dashboard import Dashboard


def test_forward_log_masks_token(tmp_path):
    path = log_utils.write_forward_log(
        {"userId": "abc", "contextAuthToken": "a-very-long-secret-value"},
        {"Content-Type": "application/json"},
        path="/",
        target_url="https://upstream.test",
        log_root=tmp_path,
    )

    entry = json.loads(path.read_text())
    assert path.parent == tmp_path / "forwarded"
    assert entry["body"] == {"userId": "abc", "contextAuthToken": "a-very...alue"}
    assert entry["target"] == "https://upstream.test"


def test_short_token_is_fully_masked(tmp_path):
    path = log_utils.write_incoming_log(
        "POST", "/", {}, {"contextAuthToken": "S3CRET"}, log_root=tmp_path
    )

    assert json.loads(path.read_text())["body"] == {"contextAuthToken": "***"}


def test_incoming_log_redacts_sensitive_headers(tmp_path):
    path = log_utils.write_incoming_log(
        "POST",
        "/",
        {"authorization": "Bearer abcdefghijkl", "x-api-key": "k", "origin": "https://a.b"},
        "raw text",
        log_root=tmp_path,
    )

    entry = json.loads(path.read_text())
    assert entry["headers"] == {
        "authorization": "Bearer...ijkl",
        "x-api-key": "***",
        "origin": "https://a.b",
    }
    assert entry["body"] == "raw text"


def test_clear_logs_removes_request_folders(tmp_path):
    log_utils.write_incoming_log("POST", "/", {}, {}, log_root=tmp_path)
    log_utils.write_forward_log({}, {}, path="/", target_url="u", log_root=tmp_path)

    log_utils.clear_logs(tmp_path)

    assert not (tmp_path / "incoming").exists()
    assert not (tmp_path / "forwarded").exists()


def test_dashboard_writes_masked_forward_log():
    dashboard = Dashboard(Config())

    dashboard.log_forward(
        {"userId": "abc", "contextAuthToken": "S3CRET"},
        {"Content-Type": "application/json"},
        path="/",
        target_url="https://upstream.test",
    )
    dashboard.log_error("VibeLive", 502, "Upstream connection error")

    files = list((log_utils.LOG_ROOT / "forwarded").glob("*.json"))
    assert len(files) == 1
    assert "S3CRET" not in files[0].read_text()
    cli_log = log_utils.CLI_LOG_FILE.read_text()
    assert "FORWARD" in cli_log
    assert "ERROR: Upstream connection error route=VibeLive status=502" in cli_log
