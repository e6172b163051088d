"""
Profile display helpers and password change rules.
"""

from config.constants import MIN_PASSWORD_LENGTH


def get_initials(name) -> str:
    """Two-letter avatar initials: first letters of the first two words, else the first two letters."""
    if not name or not name.strip():
        return "U"
    parts = name.split()
    if len(parts) >= 2:
        return (parts[0][0] + parts[1][0]).upper()
    return parts[0][:2].upper()


def profile_fields(profile: dict, fallback: dict = None) -> dict:
    """Flatten `/auth/me` data for display; falls back to the signed-in user when the call failed."""
    data = profile or fallback or {}
    site = data.get("siteId")
    return {
        "full_name": data.get("fullName") or "",
        "username": data.get("username") or "",
        "email": data.get("email") or "",
        "mobile": data.get("mobileNumber") or "",
        "role": data.get("role") or "",
        "site_name": site.get("siteName", "") if isinstance(site, dict) else data.get("siteName") or "",
        "created_on": data.get("createdAt") or data.get("createdOn") or "",
        "last_login_on": data.get("lastLoginOn") or "",
    }


def validate_password_change(current_password, new_password, confirm_password) -> dict:
    """
    Client-side checks before calling the backend.

    Returns:
        dict of field name -> error message; empty when the change may be sent
    """
    errors = {}
    if not current_password:
        errors["current_password"] = "Current password is required"

    if not new_password:
        errors["new_password"] = "New password is required"
    elif len(new_password) < MIN_PASSWORD_LENGTH:
        errors["new_password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    if not confirm_password:
        errors["confirm_password"] = "Please confirm your new password"
    elif new_password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    return errors


def password_error_fields(server_message) -> dict:
    """Map a rejected change back to a field; messages about the current password flag that field."""
    if server_message and "current" in server_message.lower():
        return {"current_password": "Current password is incorrect"}
    return {}
