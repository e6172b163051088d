from unittest.mock import MagicMock

import pytest

from api.client import ApiError
from core.session import SessionContext
from services.rights_editor import RightsEditor


@pytest.fixture
def record(rights_record):
    return rights_record("u-a", "Ann", global_rights=["VIEW_REPORTS"], site_rights=[
        {"site": {"_id": "site-s", "siteName": "South"}, "rights": ["VIEW_IP"]},
    ])


@pytest.fixture
def update_rights():
    return MagicMock(return_value=None)


@pytest.fixture
def editor(record, update_rights):
    return RightsEditor([record], update_rights)


def test_scope_switch_discards_unsaved_global_edits(editor, record, update_rights):
    editor.select_user(record)
    editor.select_scope("global")
    editor.toggle_right("EDIT_TICKET")
    editor.select_scope("site-s")
    editor.toggle_right("VIEW_MAC")

    result = editor.save()

    assert result.success
    update_rights.assert_called_once_with("u-a", ["VIEW_IP", "VIEW_MAC"], "site-s")
    saved = editor.records[0]
    assert saved.global_rights == frozenset({"VIEW_REPORTS"})
    assert saved.rights_for_scope("site-s") == frozenset({"VIEW_IP", "VIEW_MAC"})
    assert editor.selected_user is saved
    assert not editor.is_dirty


def test_double_toggle_is_identity(editor, record):
    editor.select_user(record)
    before = set(editor.edited_rights)
    editor.toggle_right("VIEW_SERIAL")
    editor.toggle_right("VIEW_SERIAL")
    assert editor.edited_rights == before
    assert not editor.is_dirty


def test_select_user_starts_on_global_scope(editor, record):
    editor.select_user(record)
    assert editor.selected_scope == "global"
    assert editor.edited_rights == {"VIEW_REPORTS"}


def test_select_scope_requires_user(editor):
    with pytest.raises(RuntimeError):
        editor.select_scope("site-s")


def test_unknown_permission_code(editor, record):
    editor.select_user(record)
    with pytest.raises(ValueError):
        editor.toggle_right("LAUNCH_ROCKETS")


def test_save_new_site_scope_appends_entry(editor, record, update_rights):
    editor.select_user(record)
    editor.select_scope("site-new")
    assert editor.edited_rights == set()
    editor.toggle_right("MANAGE_SITE_STOCK")

    assert editor.save()
    entry = editor.records[0].site_rights[-1]
    assert entry.site.id == "site-new"
    assert entry.rights == frozenset({"MANAGE_SITE_STOCK"})


def test_save_without_user(editor, update_rights):
    result = editor.save()
    assert not result.success
    update_rights.assert_not_called()


def test_failed_save_changes_nothing(record):
    update = MagicMock(side_effect=ApiError("User not found", 404))
    editor = RightsEditor([record], update)
    editor.select_user(record)
    editor.toggle_right("VIEW_MAC")

    result = editor.save()

    assert not result.success
    assert result.message == "User not found"
    assert editor.records[0] is record
    assert editor.is_dirty


def test_failed_save_without_server_message(record):
    editor = RightsEditor([record], MagicMock(side_effect=ApiError("", 500)))
    editor.select_user(record)
    editor.toggle_right("VIEW_MAC")
    assert editor.save().message == "Failed to update rights"


def test_saving_own_rights_updates_session(record, update_rights):
    session = SessionContext(user_id="u-a", role="Supervisor",
                             rights={"globalRights": ["VIEW_REPORTS"], "siteRights": []})
    editor = RightsEditor([record], update_rights, session=session)
    editor.select_user(record)
    editor.toggle_right("EXPORT_SENSITIVE")

    assert editor.save()
    assert session.has_right("EXPORT_SENSITIVE")


def test_saving_other_user_leaves_session_alone(record, update_rights):
    session = SessionContext(user_id="someone-else", rights=[])
    editor = RightsEditor([record], update_rights, session=session)
    editor.select_user(record)
    editor.toggle_right("EXPORT_SENSITIVE")

    assert editor.save()
    assert session.rights == []
