import pytest

from config.permissions import ActionResult, check_page_access, required_roles_for, validate_action
from core.session import SessionContext


def session_for(role, rights=None):
    return SessionContext(user_id="u", role=role, rights=rights or [])


class TestPageAccess:
    def test_unlisted_pages_are_open(self):
        assert check_page_access("Dashboard", session_for("SiteClient"))

    def test_no_session(self):
        assert not check_page_access("Users", None)

    @pytest.mark.parametrize("role, allowed", [("Admin", True), ("Supervisor", False), ("L1Engineer", False)])
    def test_admin_only_pages(self, role, allowed):
        assert check_page_access("User Rights", session_for(role)) is allowed

    def test_right_opens_page(self, site_session):
        assert check_page_access("Requisitions", site_session)

    def test_site_client_cannot_open_rma(self):
        assert not check_page_access("RMA Records", session_for("SiteClient"))

    def test_required_roles(self):
        assert required_roles_for("Users") == ["Admin"]
        assert required_roles_for("Dashboard") == []


class TestValidateAction:
    def test_role_grants(self):
        result = validate_action("edit_ticket", session_for("Dispatcher"))
        assert result
        assert "Dispatcher" in result.message

    def test_site_right_grants_for_that_site_only(self, site_session):
        assert validate_action("edit_ticket", site_session, "site-1")
        assert not validate_action("edit_ticket", site_session, "site-2")

    def test_denied_message_lists_requirements(self):
        result = validate_action("manage_stock", session_for("L2Engineer"))
        assert not result
        assert "Admin" in result.message
        assert "'Manage Site Stock' right" in result.message

    def test_unknown_action(self):
        assert "Unknown action" in validate_action("launch", session_for("Admin")).message

    def test_no_session(self):
        assert not validate_action("create_ticket", None)

    def test_edit_rights_is_admin_only(self):
        everything = ["VIEW_IP", "EXPORT_SENSITIVE", "MANAGE_ASSETS"]
        assert not validate_action("edit_rights", session_for("Supervisor", everything))
        assert validate_action("edit_rights", session_for("Admin"))


def test_action_result_truthiness():
    assert ActionResult(True, "ok")
    assert not ActionResult(False, "no")
    assert ActionResult(True, "ok").data == {}
