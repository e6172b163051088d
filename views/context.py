"""Shared context object passed to all page renderers."""

from dataclasses import dataclass
from typing import Any


@dataclass
class AppContext:
    """Bundles shared state that page renderers need from app.py."""

    # REST client carrying the signed-in user's tokens
    api: Any = None
    # Injected session: identity, role, rights
    session: Any = None
    backend_ok: bool = False

    @property
    def user_id(self) -> str:
        return self.session.user_id if self.session else ""

    @property
    def is_site_client(self) -> bool:
        return bool(self.session and self.session.role == "SiteClient")
