import logging

from services import audit_service
from services.audit_service import generate_audit_id, log_activity_event


def test_audit_id_format():
    audit_id = generate_audit_id()
    assert audit_id.startswith("AUD-")
    assert len(audit_id) == 16
    assert audit_id != generate_audit_id()


def test_entry_fields_and_severity():
    entry = log_activity_event("RIGHTS_UPDATED", "user_rights", "Admin", "Changed rights",
                               performed_by="admin", entity_id="u-1")
    assert entry["severity"] == "critical"
    assert entry["is_critical"]
    assert entry["performed_by"] == "admin"
    assert entry["success"] is True


def test_unknown_action_is_low_severity():
    entry = log_activity_event("SOMETHING_ELSE", "misc", "Admin", "Did a thing")
    assert entry["severity"] == "low"
    assert not entry["is_critical"]


def test_failure_logged_as_warning(caplog):
    with caplog.at_level(logging.INFO, logger="TicketOps"):
        log_activity_event("TICKET_CREATED", "tickets", "Dispatcher", "Create failed",
                           success=False, error_message="boom")
    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "ACTION=TICKET_CREATED" in record.getMessage()
    assert "ERROR=boom" in record.getMessage()


def test_session_log_is_trimmed(monkeypatch):
    monkeypatch.setattr(audit_service, "MAX_SESSION_ENTRIES", 10)
    monkeypatch.setattr(audit_service, "RECENT_ENTRIES_KEPT", 5)
    log = []
    log_activity_event("ACCESS_DENIED", "navigation", "L1Engineer", "Blocked", activity_log=log)
    for i in range(10):
        log_activity_event("USER_LOGIN", "authentication", "Admin", f"login {i}", activity_log=log)

    assert len(log) == 6
    assert log[0]["action_type"] == "ACCESS_DENIED"
    assert [e["description"] for e in log[1:]] == [f"login {i}" for i in range(5, 10)]
