"""
Role and right based access control for console pages and actions.
Checks run against the injected SessionContext, never against UI state.
"""

from config.constants import MANAGER_ROLES, PERMISSION_LABELS, USER_ROLES

# ============================================
# PAGE ACCESS
# ============================================
# A page is reachable when the user's role is listed OR the user holds the
# right for at least one site. Pages not listed here are open to every role.
PAGE_ACCESS_CONTROL = {
    "Create Ticket": {"roles": MANAGER_ROLES + ["SiteClient"], "right": "CREATE_TICKET"},
    "Requisitions": {"roles": ["Admin", "Supervisor"], "right": "MANAGE_SITE_STOCK"},
    "RMA Records": {"roles": ["Admin", "Supervisor", "Dispatcher", "L1Engineer", "L2Engineer"], "right": None},
    "Users": {"roles": ["Admin"], "right": None},
    "User Rights": {"roles": ["Admin"], "right": None},
}


def check_page_access(page_name, session) -> bool:
    """Check whether the signed-in session may open a page."""
    rule = PAGE_ACCESS_CONTROL.get(page_name)
    if rule is None:
        return True
    if session is None:
        return False
    if session.has_role(rule["roles"]):
        return True
    return bool(rule["right"]) and session.has_right_for_any_site(rule["right"])


def required_roles_for(page_name) -> list:
    rule = PAGE_ACCESS_CONTROL.get(page_name)
    return list(rule["roles"]) if rule else []


# ============================================
# ACTION VALIDATION
# ============================================

class ActionResult:
    """Result of an action validation or execution."""
    def __init__(self, success: bool, message: str, data: dict = None):
        self.success = success
        self.message = message
        self.data = data or {}

    def __bool__(self):
        return self.success

    def __repr__(self):
        return f"ActionResult(success={self.success!r}, message={self.message!r})"


# Action -> (roles that always may, right that grants it per site)
ACTION_PERMISSIONS = {
    "create_ticket": (MANAGER_ROLES + ["SiteClient"], "CREATE_TICKET"),
    "edit_ticket": (MANAGER_ROLES, "EDIT_TICKET"),
    "delete_ticket": (MANAGER_ROLES, "DELETE_TICKET"),
    "direct_rma": ([], "DIRECT_RMA_GENERATE"),
    "manage_stock": (["Admin", "Supervisor"], "MANAGE_SITE_STOCK"),
    "edit_rights": (["Admin"], None),
    "edit_asset": (["Admin", "Supervisor", "Dispatcher"], "MANAGE_ASSETS"),
}

ACTION_DISPLAY_NAMES = {
    "create_ticket": "Create Ticket",
    "edit_ticket": "Edit Ticket",
    "delete_ticket": "Delete Ticket",
    "direct_rma": "Direct RMA Creation",
    "manage_stock": "Manage Site Stock",
    "edit_rights": "Edit User Rights",
    "edit_asset": "Edit Asset",
}


def validate_action(action: str, session, site_id: str = None) -> ActionResult:
    """
    Validate that the session may perform an action, optionally for one site.

    Args:
        action: Action identifier (e.g., "edit_ticket", "manage_stock")
        session: The signed-in SessionContext
        site_id: Site the action targets; None checks global rights only

    Returns:
        ActionResult with success=True if allowed, False with message if denied
    """
    action_name = ACTION_DISPLAY_NAMES.get(action, action.replace("_", " ").title())

    if action not in ACTION_PERMISSIONS:
        return ActionResult(
            False,
            f"Access Denied: Unknown action '{action}'. Please contact an administrator."
        )

    if session is None:
        return ActionResult(False, f"Access Denied: {action_name} requires a signed-in user.")

    roles, right = ACTION_PERMISSIONS[action]
    role_name = USER_ROLES.get(session.role, {}).get("name", session.role)

    if roles and session.has_role(roles):
        return ActionResult(True, f"{action_name} permitted for {role_name}")
    if right and session.has_right(right, site_id):
        return ActionResult(True, f"{action_name} permitted by right {right}")

    needs = [USER_ROLES.get(r, {}).get("name", r) for r in roles]
    if right:
        needs.append(f"the '{PERMISSION_LABELS.get(right, right)}' right")
    return ActionResult(
        False,
        f"Access Denied: {action_name} is not permitted for your role ({role_name}). "
        f"This action requires: {', '.join(needs)}."
    )
