from core.session import SessionContext


def test_from_login_payload():
    session = SessionContext.from_login({
        "user": {"_id": "u-1", "username": "jdoe", "fullName": "Jane Doe", "role": "Dispatcher",
                 "assignedSites": [{"_id": "s-1"}], "rights": {"globalRights": ["VIEW_IP"], "siteRights": []}},
        "token": "a",
        "refreshToken": "b",
    })
    assert session.user_id == "u-1"
    assert session.display_name == "Jane Doe"
    assert session.assigned_site_ids == ["s-1"]
    assert (session.access_token, session.refresh_token) == ("a", "b")
    assert session.has_right("VIEW_IP")


def test_display_name_falls_back_to_username():
    assert SessionContext(user_id="u", username="jdoe").display_name == "jdoe"


def test_has_role():
    session = SessionContext(user_id="u", role="Supervisor")
    assert session.has_role("Supervisor")
    assert session.has_role(["Admin", "Supervisor"])
    assert not session.has_role(["Admin"])


class TestSiteRights:
    def test_global_right_applies_everywhere(self, site_session):
        assert site_session.has_right("VIEW_REPORTS")
        assert site_session.has_right("VIEW_REPORTS", "site-99")

    def test_site_right_needs_matching_site(self, site_session):
        assert site_session.has_right("EDIT_TICKET", "site-1")
        assert not site_session.has_right("EDIT_TICKET", "site-2")
        assert not site_session.has_right("EDIT_TICKET")

    def test_any_site(self, site_session):
        assert site_session.has_right_for_any_site("MANAGE_SITE_STOCK")
        assert not site_session.has_right_for_any_site("EXPORT_SENSITIVE")


class TestLegacyRights:
    def test_flat_list_applies_everywhere(self):
        session = SessionContext(user_id="u", assigned_sites=["s-1"], rights=["VIEW_MAC"])
        assert session.has_right("VIEW_MAC", "s-5")
        assert session.has_right_for_any_site("VIEW_MAC")
        assert not session.has_right("VIEW_IP")

    def test_no_rights(self):
        session = SessionContext(user_id="u", rights=None)
        assert not session.has_right("VIEW_MAC")
        assert not session.has_right_for_any_site("VIEW_MAC")


class TestApplyScopeRights:
    def test_global(self, site_session):
        site_session.apply_scope_rights("global", ["VIEW_MAC"])
        assert site_session.has_right("VIEW_MAC", "site-2")
        assert not site_session.has_right("VIEW_REPORTS")

    def test_existing_site(self, site_session):
        site_session.apply_scope_rights("site-1", ["VIEW_SERIAL"])
        assert site_session.has_right("VIEW_SERIAL", "site-1")
        assert not site_session.has_right("VIEW_IP", "site-1")

    def test_new_site(self, site_session):
        site_session.apply_scope_rights("site-3", ["VIEW_IP"])
        assert site_session.has_right("VIEW_IP", "site-3")

    def test_legacy_list_is_converted(self):
        session = SessionContext(user_id="u", rights=["VIEW_MAC"])
        session.apply_scope_rights("s-1", ["VIEW_IP"])
        assert session.rights == {"globalRights": ["VIEW_MAC"], "siteRights": [{"site": "s-1", "rights": ["VIEW_IP"]}]}
