"""
Signed-in session context.

One SessionContext is built at login and handed to every page and service
that needs to know who the user is. Rights come in two shapes from the
backend: the current `{globalRights, siteRights}` object and a legacy flat
list where every right applies everywhere.
"""
from dataclasses import dataclass, field

from api.models import ref_id
from config.constants import GLOBAL_SCOPE


@dataclass
class SessionContext:
    user_id: str
    username: str = ""
    full_name: str = ""
    email: str = ""
    role: str = ""
    assigned_sites: list = field(default_factory=list)
    rights: object = None
    access_token: str = None
    refresh_token: str = None

    @classmethod
    def from_login(cls, payload: dict) -> "SessionContext":
        """Build from the `/auth/login` data block: `{user, token, refreshToken}`."""
        user = payload.get("user") or {}
        return cls(
            user_id=ref_id(user.get("id") or user.get("_id") or user.get("userId")),
            username=user.get("username") or "",
            full_name=user.get("fullName") or "",
            email=user.get("email") or "",
            role=user.get("role") or "",
            assigned_sites=list(user.get("assignedSites") or []),
            rights=user.get("rights") if user.get("rights") is not None else [],
            access_token=payload.get("token"),
            refresh_token=payload.get("refreshToken"),
        )

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    @property
    def assigned_site_ids(self) -> list:
        return [sid for sid in (ref_id(s) for s in self.assigned_sites) if sid]

    def _is_legacy_rights(self) -> bool:
        return isinstance(self.rights, (list, tuple, set, frozenset))

    def _global_rights(self) -> list:
        return (self.rights or {}).get("globalRights") or []

    def _site_entries(self) -> list:
        return (self.rights or {}).get("siteRights") or []

    # ============================================
    # CHECKS
    # ============================================

    def has_role(self, roles) -> bool:
        if isinstance(roles, str):
            return self.role == roles
        return self.role in roles

    def has_right(self, code: str, site_id: str = None) -> bool:
        """Global rights first, then the entry for `site_id` when one is given."""
        if self._is_legacy_rights():
            return code in self.rights
        if not self.rights:
            return False
        if code in self._global_rights():
            return True
        if site_id:
            target = str(site_id)
            for entry in self._site_entries():
                if ref_id(entry.get("site")) == target:
                    return code in (entry.get("rights") or [])
        return False

    def has_right_for_any_site(self, code: str) -> bool:
        if self._is_legacy_rights():
            return code in self.rights
        if not self.rights:
            return False
        if code in self._global_rights():
            return True
        return any(code in (entry.get("rights") or []) for entry in self._site_entries())

    # ============================================
    # MUTATION
    # ============================================

    def apply_scope_rights(self, scope_id: str, rights):
        """Mirror a saved scope into this session after the backend accepted it."""
        rights = sorted(rights)
        if self._is_legacy_rights():
            self.rights = {"globalRights": sorted(self.rights), "siteRights": []}
        elif not self.rights:
            self.rights = {"globalRights": [], "siteRights": []}

        if scope_id == GLOBAL_SCOPE:
            self.rights["globalRights"] = rights
            return

        entries = self.rights.setdefault("siteRights", [])
        for entry in entries:
            if ref_id(entry.get("site")) == str(scope_id):
                entry["rights"] = rights
                return
        entries.append({"site": str(scope_id), "rights": rights})
