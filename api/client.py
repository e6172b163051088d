"""
REST client for the ticketing backend.

All outbound HTTP calls go through TicketOpsApi. Responses are normalized into
ApiEnvelope and typed records at this boundary; any failure surfaces as
ApiError carrying the server's message when it sent one.

Pass a mock `session` in tests to intercept HTTP calls.
"""
import logging

import requests

from api.config import API_CONFIG
from api.models import (
    ApiEnvelope,
    DashboardStats,
    Notification,
    Pagination,
    ReplacementEvent,
    Requisition,
    RmaRecord,
    SiteRef,
    SlaPolicy,
    UserRef,
    UserRightsRecord,
)

logger = logging.getLogger("TicketOps")


class ApiError(Exception):
    """Raised for transport failures, non-2xx responses and `success: false` bodies."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _clean_params(params: dict = None) -> dict:
    """Drop unset query params; the backend treats missing and empty differently."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


class TicketOpsApi:
    """
    Thin client over requests.Session with bearer auth and one refresh retry.

    Args:
        base_url: Backend root, e.g. http://localhost:5000/api
        session: Optional requests.Session (inject a mock in tests)
        timeout: Per-request timeout in seconds
        access_token / refresh_token: Tokens from a previous login
        on_token_refresh: Called with the new access token after a refresh
    """

    def __init__(self, base_url: str = None, session=None, timeout: int = None,
                 access_token: str = None, refresh_token: str = None,
                 on_token_refresh=None):
        self.base_url = (base_url or API_CONFIG["base_url"]).rstrip("/")
        self.timeout = timeout or API_CONFIG["timeout"]
        self.verify_ssl = API_CONFIG["verify_ssl"]
        self._session = session
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.on_token_refresh = on_token_refresh

    @property
    def session(self):
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def set_tokens(self, access_token: str = None, refresh_token: str = None):
        self.access_token = access_token
        self.refresh_token = refresh_token

    # ============================================
    # TRANSPORT
    # ============================================

    def _request(self, method: str, path: str, params: dict = None, json: dict = None,
                 files: dict = None, fallback: str = "Request failed",
                 authenticated: bool = True, refresh_on_401: bool = True,
                 _retried: bool = False) -> ApiEnvelope:
        url = f"{self.base_url}{path}"
        headers = {}
        if authenticated and self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = self.session.request(
                method,
                url,
                params=_clean_params(params),
                json=json,
                files=files,
                headers=headers,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.RequestException as e:
            logger.warning(f"API {method} {path} failed: {type(e).__name__}: {e}")
            raise ApiError(fallback) from e

        status = response.status_code
        # Endpoints that answer 401 for bad credentials pass refresh_on_401=False
        if status == 401 and authenticated and refresh_on_401 and not _retried and self.refresh_token:
            if self.refresh():
                return self._request(method, path, params=params, json=json, files=files,
                                     fallback=fallback, authenticated=authenticated, _retried=True)
            raise ApiError("Session expired. Please sign in again.", status)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= status < 300:
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(f"API {method} {path} -> HTTP {status}: {message or fallback}")
            raise ApiError(message or fallback, status)

        envelope = ApiEnvelope.from_api(body)
        if not envelope.success:
            logger.warning(f"API {method} {path} -> success=false: {envelope.message or fallback}")
            raise ApiError(envelope.message or fallback, status)
        return envelope

    def _get(self, path, params=None, fallback="Failed to load data") -> ApiEnvelope:
        return self._request("GET", path, params=params, fallback=fallback)

    def _list(self, path, params=None, fallback="Failed to load data") -> tuple:
        """GET a list endpoint and return (items, Pagination)."""
        envelope = self._get(path, params=params, fallback=fallback)
        items = envelope.data if isinstance(envelope.data, list) else []
        pagination = envelope.pagination or Pagination(page=1, pages=1, total=len(items))
        return items, pagination

    # ============================================
    # AUTH
    # ============================================

    def login(self, username: str, password: str) -> dict:
        """Sign in and keep the returned tokens. Returns `{user, token, refreshToken}`."""
        envelope = self._request(
            "POST", "/auth/login",
            json={"username": username, "password": password},
            fallback="Login failed",
            authenticated=False,
        )
        data = envelope.data or {}
        self.set_tokens(data.get("token"), data.get("refreshToken"))
        return data

    def logout(self):
        try:
            self._request("POST", "/auth/logout", fallback="Logout failed")
        finally:
            self.set_tokens(None, None)

    def refresh(self) -> bool:
        """Exchange the refresh token for a new access token."""
        if not self.refresh_token:
            return False
        try:
            envelope = self._request(
                "POST", "/auth/refresh",
                json={"refreshToken": self.refresh_token},
                fallback="Token refresh failed",
                authenticated=False,
            )
        except ApiError as e:
            logger.warning(f"Token refresh rejected: {e.message}")
            return False

        token = (envelope.data or {}).get("token")
        if not token:
            return False
        self.access_token = token
        if self.on_token_refresh:
            self.on_token_refresh(token)
        logger.info("Access token refreshed")
        return True

    def ping(self) -> bool:
        """True when the backend health endpoint answers."""
        try:
            self._request("GET", "/health", fallback="Backend unavailable", authenticated=False)
        except ApiError:
            return False
        return True

    def get_profile(self) -> dict:
        return self._get("/auth/me", fallback="Failed to load profile").data or {}

    def change_password(self, current_password: str, new_password: str) -> ApiEnvelope:
        return self._request(
            "PUT", "/auth/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
            fallback="Failed to change password",
            refresh_on_401=False,
        )

    # ============================================
    # USERS & RIGHTS
    # ============================================

    def list_user_rights(self) -> list:
        envelope = self._get("/user-rights", fallback="Failed to load user rights")
        return [UserRightsRecord.from_api(item) for item in envelope.data or []]

    def update_rights(self, user_id: str, rights: list, scope_id: str) -> ApiEnvelope:
        """Replace the rights of one scope ("global" or a site id) for a user."""
        return self._request(
            "PUT", f"/user-rights/{user_id}",
            json={"rights": list(rights), "siteId": scope_id},
            fallback="Failed to update rights",
        )

    def list_users(self, params: dict = None) -> tuple:
        return self._list("/users", params=params, fallback="Failed to load users")

    def get_engineers(self) -> list:
        envelope = self._get("/users/engineers", fallback="Failed to load engineers")
        return [UserRef.from_api(item) for item in envelope.data or []]

    def get_sites_dropdown(self) -> list:
        envelope = self._get("/sites/dropdown", fallback="Failed to load sites")
        return [SiteRef.from_api(item) for item in envelope.data or []]

    # ============================================
    # ASSETS
    # ============================================

    def list_assets(self, params: dict = None) -> tuple:
        return self._list("/assets", params=params, fallback="Failed to load assets")

    def get_asset(self, asset_id: str) -> dict:
        return self._get(f"/assets/{asset_id}", fallback="Failed to load asset").data or {}

    def get_location_names(self, site_id: str) -> list:
        return self._get("/assets/locations", params={"siteId": site_id},
                         fallback="Failed to load locations").data or []

    def get_asset_types(self, site_id: str, location_name: str = None) -> list:
        return self._get("/assets/asset-types",
                         params={"siteId": site_id, "locationName": location_name},
                         fallback="Failed to load asset types").data or []

    def get_device_types(self, site_id: str, location_name: str = None, asset_type: str = None) -> list:
        return self._get("/assets/device-types",
                         params={"siteId": site_id, "locationName": location_name, "assetType": asset_type},
                         fallback="Failed to load device types").data or []

    def get_assets_dropdown(self, site_id: str = None, asset_type: str = None) -> list:
        return self._get("/assets/dropdown",
                         params={"siteId": site_id, "assetType": asset_type},
                         fallback="Failed to load assets").data or []

    def get_replacement_history(self, asset_id: str) -> list:
        envelope = self._get(f"/stock/asset/{asset_id}/history",
                             fallback="Failed to load replacement history")
        return [ReplacementEvent.from_api(item) for item in envelope.data or []]

    # ============================================
    # TICKETS & LOOKUPS
    # ============================================

    def list_tickets(self, params: dict = None) -> tuple:
        return self._list("/tickets", params=params, fallback="Failed to load tickets")

    def get_ticket(self, ticket_id: str) -> dict:
        return self._get(f"/tickets/{ticket_id}", fallback="Failed to load ticket").data or {}

    def create_ticket(self, payload: dict) -> dict:
        return self._request("POST", "/tickets", json=payload,
                             fallback="Failed to create ticket").data or {}

    def update_ticket(self, ticket_id: str, payload: dict) -> dict:
        return self._request("PUT", f"/tickets/{ticket_id}", json=payload,
                             fallback="Failed to update ticket").data or {}

    def get_dashboard_stats(self, site_id: str = None) -> DashboardStats:
        envelope = self._get("/tickets/dashboard/stats", params={"siteId": site_id},
                             fallback="Failed to load dashboard data")
        return DashboardStats.from_api(envelope.data)

    def get_lookups(self) -> dict:
        return self._get("/lookups", fallback="Failed to load lookups").data or {}

    def get_sla_policies(self) -> list:
        return [SlaPolicy.from_api(p) for p in self.get_lookups().get("slaPolicies") or []]

    def get_categories(self) -> list:
        return self._get("/lookups/categories", fallback="Failed to load categories").data or []

    def upload_attachment(self, ticket_id: str, filename: str, content: bytes,
                          content_type: str = "application/octet-stream") -> dict:
        return self._request(
            "POST", f"/tickets/{ticket_id}/activities/attachments",
            files={"file": (filename, content, content_type)},
            fallback=f"Failed to upload {filename}",
        ).data or {}

    # ============================================
    # RMA & STOCK
    # ============================================

    def list_rma(self, params: dict = None) -> tuple:
        items, pagination = self._list("/rma", params=params, fallback="Failed to load RMA records")
        return [RmaRecord.from_api(item) for item in items], pagination

    def get_rma_history(self, asset_id: str) -> list:
        envelope = self._get(f"/rma/asset/{asset_id}", fallback="Failed to load RMA history")
        return [RmaRecord.from_api(item) for item in envelope.data or []]

    def list_requisitions(self, params: dict = None) -> tuple:
        """Returns (requisitions, pagination, type_counts)."""
        envelope = self._get("/stock/requisitions", params=params,
                             fallback="Failed to load requisitions")
        items = [Requisition.from_api(item) for item in envelope.data or []]
        pagination = envelope.pagination or Pagination(page=1, pages=1, total=len(items))
        return items, pagination, dict(envelope.extra.get("typeCounts") or {})

    def approve_requisition(self, requisition_id: str) -> ApiEnvelope:
        return self._request("PUT", f"/stock/requisitions/{requisition_id}/approve",
                             fallback="Failed to approve requisition")

    def reject_requisition(self, requisition_id: str, reason: str) -> ApiEnvelope:
        return self._request("PUT", f"/stock/requisitions/{requisition_id}/reject",
                             json={"reason": reason},
                             fallback="Failed to reject requisition")

    # ============================================
    # NOTIFICATIONS
    # ============================================

    def list_notifications(self, page: int = 1, limit: int = 20, unread_only: bool = False) -> tuple:
        """Returns (notifications, pagination, unread_count), newest first."""
        params = {"page": page, "limit": limit, "unreadOnly": "true" if unread_only else None}
        envelope = self._get("/notifications", params=params, fallback="Failed to load notifications")
        items = [Notification.from_api(item) for item in envelope.data or []]
        pagination = envelope.pagination or Pagination(page=page, pages=page, total=len(items))
        return items, pagination, int(envelope.extra.get("unreadCount") or 0)

    def get_unread_count(self) -> int:
        envelope = self._get("/notifications/unread-count", fallback="Failed to load unread count")
        return int((envelope.data or {}).get("count") or 0)

    def mark_notification_read(self, notification_id: str) -> ApiEnvelope:
        return self._request("PUT", f"/notifications/{notification_id}/read",
                             fallback="Failed to mark as read")

    def mark_all_notifications_read(self) -> ApiEnvelope:
        return self._request("PUT", "/notifications/read-all", fallback="Failed to mark all as read")

    def delete_notification(self, notification_id: str) -> ApiEnvelope:
        return self._request("DELETE", f"/notifications/{notification_id}",
                             fallback="Failed to delete notification")
