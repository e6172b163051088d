from unittest.mock import MagicMock, patch

import pytest

from services.rights_editor import RightsEditor
from views import user_rights


@pytest.fixture
def fake_st():
    fake = MagicMock()
    fake.session_state = {}
    with patch.object(user_rights, "st", fake):
        yield fake


@pytest.fixture
def record(rights_record):
    return rights_record("u-a", "Ann", global_rights=["VIEW_REPORTS"], site_rights=[
        {"site": "site-s", "rights": ["VIEW_IP"]},
    ])


def test_reselecting_user_resets_scope_widget(fake_st, record):
    editor = RightsEditor([record], MagicMock())
    editor.select_user(record)
    editor.select_scope("site-s")
    fake_st.session_state.update({
        "rights_scope_u-a": "site-s",
        "right_u-a_site-s_VIEW_MAC": True,
        "right_u-b_global_VIEW_MAC": True,
    })

    user_rights._select_user(editor, record)

    assert editor.selected_scope == "global"
    assert editor.edited_rights == {"VIEW_REPORTS"}
    assert "rights_scope_u-a" not in fake_st.session_state
    assert "right_u-a_site-s_VIEW_MAC" not in fake_st.session_state
    assert fake_st.session_state["right_u-b_global_VIEW_MAC"] is True
