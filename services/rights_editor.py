"""
Working-copy editor for user rights.

The editor holds one user and one scope at a time ("global" or a site id) and
a mutable copy of that scope's rights. Nothing reaches the backend until
save(). Switching user or scope drops unsaved edits.
"""
import logging
from dataclasses import replace

from api.client import ApiError
from api.models import SiteRef, SiteRights
from config.constants import GLOBAL_SCOPE, PERMISSION_CODES
from config.permissions import ActionResult

logger = logging.getLogger("TicketOps")


class RightsEditor:
    """
    Args:
        records: UserRightsRecord list as loaded from the backend
        update_rights: callable(user_id, rights, scope_id); raises ApiError on failure
        session: Signed-in SessionContext, updated when users edit their own rights
    """

    def __init__(self, records, update_rights, session=None):
        self.records = list(records)
        self.update_rights = update_rights
        self.session = session
        self.selected_user = None
        self.selected_scope = GLOBAL_SCOPE
        self.edited_rights = set()

    def select_user(self, record):
        self.selected_user = record
        self.selected_scope = GLOBAL_SCOPE
        self.edited_rights = set(record.global_rights) if record else set()

    def select_scope(self, scope_id: str):
        if self.selected_user is None:
            raise RuntimeError("Select a user before choosing a scope")
        self.selected_scope = scope_id or GLOBAL_SCOPE
        self.edited_rights = set(self.selected_user.rights_for_scope(self.selected_scope))

    def toggle_right(self, code: str):
        if code not in PERMISSION_CODES:
            raise ValueError(f"Unknown permission code: {code}")
        self.edited_rights ^= {code}

    @property
    def is_dirty(self) -> bool:
        if self.selected_user is None:
            return False
        return self.edited_rights != set(self.selected_user.rights_for_scope(self.selected_scope))

    # ============================================
    # PERSISTENCE
    # ============================================

    def save(self) -> ActionResult:
        """Persist the working copy for the selected scope and merge it back on success."""
        if self.selected_user is None:
            return ActionResult(False, "Select a user first")

        user_id = self.selected_user.user.id
        scope = self.selected_scope
        rights = sorted(self.edited_rights)

        try:
            self.update_rights(user_id, rights, scope)
        except ApiError as e:
            logger.warning(f"Rights update failed for user={user_id} scope={scope}: {e.message}")
            return ActionResult(False, e.message or "Failed to update rights")

        updated = self._with_scope_rights(self.selected_user, scope, frozenset(rights))
        self.records = [updated if r.user.id == user_id else r for r in self.records]
        self.selected_user = updated

        if self.session is not None and self.session.user_id == user_id:
            self.session.apply_scope_rights(scope, rights)
            logger.info(f"Mirrored scope {scope} rights into the active session")

        logger.info(f"Rights updated for user={user_id} scope={scope} count={len(rights)}")
        return ActionResult(True, "User rights updated successfully",
                            {"user_id": user_id, "scope": scope, "rights": rights})

    @staticmethod
    def _with_scope_rights(record, scope: str, rights: frozenset):
        if scope == GLOBAL_SCOPE:
            return replace(record, global_rights=rights)

        entries = list(record.site_rights)
        for index, entry in enumerate(entries):
            if entry.site.id == scope:
                entries[index] = replace(entry, rights=rights)
                break
        else:
            entries.append(SiteRights(site=SiteRef(id=scope), rights=rights))
        return replace(record, site_rights=tuple(entries))
