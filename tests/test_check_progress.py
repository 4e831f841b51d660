import importlib.util
from pathlib import Path

import pytest

from conftest import make_token, resolved_reports, report
from helpers.backend_client import BackendAPIError

_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "check_progress.py"
_spec = importlib.util.spec_from_file_location("check_progress", _SCRIPT)
check_progress = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(check_progress)


def run(backend, store, *argv):
    return check_progress.main(list(argv), client=backend, store=store)


def test_login_stores_token(backend, store, capsys):
    token = make_token("user-1")
    backend.login.return_value = {"token": token}
    assert run(backend, store, "login", "--email", "Ana@Example.com", "--password", "pw") == 0
    assert store.get("token") == token
    backend.login.assert_called_once_with("ana@example.com", "pw")
    assert "Login successful" in capsys.readouterr().out


def test_login_failure(backend, store, capsys):
    backend.login.side_effect = BackendAPIError(401, "Invalid credentials")
    assert run(backend, store, "login", "--email", "a@b.co", "--password", "pw") == 1
    assert store.get("token") is None
    assert "Invalid credentials" in capsys.readouterr().out


def test_progress_requires_login(backend, store, capsys):
    assert run(backend, store, "progress") == 1
    assert "Not logged in" in capsys.readouterr().out
    backend.list_reports.assert_not_called()


def test_progress_prints_badge_and_milestone(backend, store, capsys):
    store.set("token", make_token("user-1"))
    backend.list_reports.return_value = resolved_reports(20)

    assert run(backend, store, "progress") == 0
    out = capsys.readouterr().out
    assert "Resolved reports: 20" in out
    assert "0/10" in out
    assert "Green Guardian" in out
    assert "Milestone reached" in out

    assert run(backend, store, "progress") == 0
    out = capsys.readouterr().out
    assert "Last badge: Green Guardian" in out
    assert "Milestone reached" not in out


def test_reports_listing(backend, store, capsys):
    store.set("token", make_token("user-1"))
    backend.list_reports.return_value = [report("abc", "user-1", "On Going")]
    assert run(backend, store, "reports") == 0
    out = capsys.readouterr().out
    assert "abc" in out
    assert "On Going" in out


def test_reports_upstream_failure(backend, store, capsys):
    store.set("token", make_token("user-1"))
    backend.list_reports.side_effect = BackendAPIError(None, "unreachable")
    assert run(backend, store, "reports") == 1
    assert "Failed to load reports" in capsys.readouterr().out


def test_logout(backend, store):
    store.set("token", "t")
    assert run(backend, store, "logout") == 0
    assert store.get("token") is None


def test_command_is_required(backend, store):
    with pytest.raises(SystemExit):
        run(backend, store)
