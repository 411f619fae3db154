"""Tests for the Dredd hook bridge and the hook file."""

import json
import os
import sys
from unittest.mock import MagicMock

import pytest
from dredd_hooks import dredd
from task_fixtures import dredd_bridge
from task_fixtures.controller import FixtureController
from task_fixtures.dredd_bridge import DreddHookBridge, build_controller
from task_fixtures.fixture_policy.exceptions import FixtureLoadError
from task_fixtures.fixture_policy.invalid_token import InvalidTokenPolicy
from task_fixtures.fixtures.named_fixtures import (
    GET_TASK_200,
    GET_TASK_404,
    LIST_TASKS_401,
    LOGIN_200,
    NamedFixtures,
)

HOOK_FILE = os.path.join(os.path.dirname(dredd_bridge.__file__), "hooks.py")


@pytest.fixture
def bridge(container) -> DreddHookBridge:
    return DreddHookBridge(FixtureController(container))


def test_build_controller_uses_default_table():
    controller = build_controller()

    assert len(controller.named_fixtures) == 18
    assert controller.session.token is None


def test_build_controller_loads_table_file(tmp_path, monkeypatch):
    table_file = tmp_path / "fixtures.json"
    table_file.write_text(json.dumps({"/custom > Custom > 401 > application/json": {"type": "InvalidToken"}}))
    monkeypatch.setenv("FIXTURE_TABLE_FILEPATH", str(table_file))

    controller = build_controller()

    assert list(controller.named_fixtures) == ["/custom > Custom > 401 > application/json"]
    assert isinstance(controller.named_fixtures.get("/custom > Custom > 401 > application/json"), InvalidTokenPolicy)


def test_build_controller_rejects_broken_table(tmp_path, monkeypatch):
    table_file = tmp_path / "fixtures.json"
    table_file.write_text(json.dumps({"x": {"type": "Nope"}}))
    monkeypatch.setenv("FIXTURE_TABLE_FILEPATH", str(table_file))

    with pytest.raises(FixtureLoadError):
        build_controller()


def test_full_run_against_fake_service(bridge, fake_service, make_raw_transaction):
    list_tasks = make_raw_transaction(name="/tasks > Get user tasks > 200 > application/json", path="/tasks")
    list_tasks_401 = make_raw_transaction(name=LIST_TASKS_401, path="/tasks", status="401")
    get_task = make_raw_transaction(name=GET_TASK_200, path="/tasks/1")
    get_missing = make_raw_transaction(name=GET_TASK_404, path="/tasks/1", status="404")
    login = make_raw_transaction(name=LOGIN_200, method="POST", path="/login", body='{"email": "x", "password": "y"}')
    transactions = [list_tasks, list_tasks_401, get_task, get_missing, login]

    bridge.before_all(transactions)
    for raw in transactions:
        bridge.before_each(raw)
        if raw["name"] in bridge.controller.named_fixtures:
            bridge.before_named(raw)
    bridge.after_all(transactions)

    token = bridge.controller.session.token
    assert token == fake_service.token
    assert list_tasks["request"]["headers"]["Authorization"] == f"Bearer {token}"
    assert list_tasks_401["request"]["headers"]["Authorization"] == "Bearer invalid_token_here"
    assert get_task["fullPath"] == "/tasks/42"
    assert get_task["request"]["uri"] == "/tasks/42"
    assert get_missing["fullPath"] == "/tasks/1"
    assert get_missing["request"]["uri"] == "/tasks/1"
    assert json.loads(login["request"]["body"])["email"] == bridge.controller.session.email
    # Teardown removed the seeded task
    assert fake_service.tasks == {}


def test_before_all_swallows_unexpected_errors(caplog):
    controller = MagicMock(spec=FixtureController)
    controller.setup.side_effect = RuntimeError("unexpected")

    DreddHookBridge(controller).before_all([])

    assert "Fixture setup aborted unexpectedly" in caplog.text


def test_after_all_swallows_unexpected_errors(caplog):
    controller = MagicMock(spec=FixtureController)
    controller.teardown.side_effect = RuntimeError("unexpected")

    DreddHookBridge(controller).after_all([])

    assert "Fixture teardown aborted unexpectedly" in caplog.text


def test_transaction_hook_errors_leave_transaction_unchanged(make_raw_transaction, caplog):
    controller = MagicMock(spec=FixtureController)
    controller.before_each.side_effect = RuntimeError("unexpected")
    raw = make_raw_transaction()
    snapshot = json.dumps(raw, sort_keys=True)

    DreddHookBridge(controller).before_each(raw)

    assert json.dumps(raw, sort_keys=True) == snapshot
    assert "Fixture hook failed" in caplog.text



# --- Hook file loaded by the dredd_hooks handler ---


@pytest.fixture
def dredd_registry(monkeypatch):
    """A fresh dredd_hooks registry; the hook file is loaded with setup_logging patched out."""
    registry = dredd.Hooks()
    monkeypatch.setattr(dredd, "hooks", registry)
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.setattr("task_fixtures.core.logging.setup_logging", MagicMock())
    yield registry
    sys.modules.pop(os.path.basename(HOOK_FILE), None)


def loaded_hook_module():
    return sys.modules[os.path.basename(HOOK_FILE)]


def test_hook_file_registers_every_hook(dredd_registry):
    dredd.load_hook_files(HOOK_FILE)

    assert len(dredd_registry._before_all) == 1
    assert len(dredd_registry._before_each) == 1
    assert len(dredd_registry._after_all) == 1
    assert set(dredd_registry._before) == set(NamedFixtures())
    assert all(len(callbacks) == 1 for callbacks in dredd_registry._before.values())
    assert isinstance(loaded_hook_module().bridge, DreddHookBridge)


def test_registered_hooks_apply_fixtures(dredd_registry, make_raw_transaction):
    dredd.load_hook_files(HOOK_FILE)
    session = loaded_hook_module().bridge.controller.session
    session.token = "setup-token"
    session.task_id = 42
    list_tasks_401 = make_raw_transaction(name=LIST_TASKS_401, path="/tasks", status="401")
    get_task = make_raw_transaction(name=GET_TASK_200, path="/tasks/1")

    for raw in (list_tasks_401, get_task):
        for hook in dredd_registry._before_each:
            hook(raw)
        for hook in dredd_registry._before.get(raw["name"], []):
            hook(raw)

    assert list_tasks_401["request"]["headers"]["Authorization"] == "Bearer invalid_token_here"
    assert get_task["request"]["headers"]["Authorization"] == "Bearer setup-token"
    assert get_task["fullPath"] == "/tasks/42"
    assert get_task["request"]["uri"] == "/tasks/42"
