import pytest

from services.profile_service import (
    get_initials,
    password_error_fields,
    profile_fields,
    validate_password_change,
)


@pytest.mark.parametrize("name, initials", [
    ("Jane Doe", "JD"),
    ("ada lovelace byron", "AL"),
    ("Prince", "PR"),
    ("", "U"),
    (None, "U"),
])
def test_initials(name, initials):
    assert get_initials(name) == initials


class TestPasswordChange:
    def test_valid_change(self):
        assert validate_password_change("old-pass", "new-pass-1", "new-pass-1") == {}

    def test_all_fields_required(self):
        errors = validate_password_change("", "", "")
        assert errors == {
            "current_password": "Current password is required",
            "new_password": "New password is required",
            "confirm_password": "Please confirm your new password",
        }

    def test_minimum_length(self):
        errors = validate_password_change("old-pass", "short", "short")
        assert errors == {"new_password": "Password must be at least 8 characters"}

    def test_exactly_minimum_length_is_accepted(self):
        assert validate_password_change("old-pass", "12345678", "12345678") == {}

    def test_mismatch(self):
        errors = validate_password_change("old-pass", "new-pass-1", "new-pass-2")
        assert errors == {"confirm_password": "Passwords do not match"}

    def test_server_rejection_flags_current_password(self):
        assert password_error_fields("Current password is incorrect") == {
            "current_password": "Current password is incorrect",
        }
        assert password_error_fields("Failed to change password") == {}
        assert password_error_fields(None) == {}


def test_profile_fields_from_api():
    info = profile_fields({"fullName": "Jane Doe", "role": "Dispatcher",
                           "siteId": {"_id": "s-1", "siteName": "North Yard"},
                           "createdAt": "2025-01-02T00:00:00Z"})
    assert info["site_name"] == "North Yard"
    assert info["created_on"] == "2025-01-02T00:00:00Z"
    assert info["email"] == ""


def test_profile_fields_fallback():
    info = profile_fields(None, {"fullName": "Jane Doe", "username": "jdoe", "role": "Admin"})
    assert info["full_name"] == "Jane Doe"
    assert info["site_name"] == ""
