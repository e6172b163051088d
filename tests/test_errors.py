from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests

from api.client import ApiError
from core import errors
from core.errors import USER_SAFE_MESSAGES, classify_error, handle_api_error, safe_execute, user_message_for


@pytest.fixture
def fake_st():
    fake = MagicMock()
    fake.session_state = {"session": SimpleNamespace(role="Dispatcher")}
    with patch.object(errors, "st", fake):
        yield fake


@pytest.mark.parametrize("error, category", [
    (ApiError("bad", 400), "validation"),
    (ApiError("who", 401), "session"),
    (ApiError("no", 403), "permission"),
    (ApiError("gone", 404), "not_found"),
    (ApiError("clash", 409), "conflict"),
    (ApiError("down", 503), "backend"),
    (TimeoutError("slow"), "timeout"),
    (requests.ConnectionError("connection refused"), "network"),
    (ValueError("bad number"), "validation"),
    (RuntimeError("weird"), "default"),
])
def test_classify(error, category):
    assert classify_error(error) == category


def test_client_errors_show_server_message():
    assert user_message_for(ApiError("Ticket is locked", 409)) == "Ticket is locked"


def test_server_message_on_5xx_is_shown():
    assert user_message_for(ApiError("Backup in progress, retry shortly", 503)) == "Backup in progress, retry shortly"


def test_transport_failure_keeps_call_message(fake_st):
    success, message, error_id = handle_api_error(ApiError("Failed to load user rights"), "load_rights")
    assert not success
    assert message == f"Failed to load user rights (Ref: {error_id})"


def test_api_error_without_message_is_generalized():
    assert user_message_for(ApiError("", 500)) == USER_SAFE_MESSAGES["backend"]


def test_other_exceptions_are_generalized():
    assert user_message_for(RuntimeError("internal detail")) == USER_SAFE_MESSAGES["default"]


def test_handle_api_error(fake_st, caplog):
    success, message, error_id = handle_api_error(ApiError("Site not found", 404), "load_site")
    assert success is False
    assert message == f"Site not found (Ref: {error_id})"
    assert len(error_id) == 8
    assert fake_st.session_state["error_count"] == 1
    assert "CONTEXT=API:load_site" in caplog.text
    assert "ROLE=Dispatcher" in caplog.text


def test_safe_execute_returns_fallback(fake_st):
    def broken():
        raise ApiError("Failed to load sites", 503)

    assert safe_execute(broken, context="load_sites", fallback=list)() == []
    fake_st.error.assert_called_once()
    assert "Failed to load sites (Ref: " in fake_st.error.call_args.args[0]


def test_safe_execute_quiet(fake_st):
    result = safe_execute(lambda: 1 / 0, context="math", fallback=0, show_error=False)()
    assert result == 0
    fake_st.error.assert_not_called()


def test_safe_execute_decorator_passes_through(fake_st):
    @safe_execute(context="adding")
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
