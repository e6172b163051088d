"""
Typed records built at the REST boundary.

The backend returns populated objects in some places and raw id strings in
others, uses `_id` next to `id`, and wraps payloads in `{success, data, ...}`.
Every `from_api` classmethod absorbs those shapes so the rest of the console
works with one representation.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def ref_id(value) -> Optional[str]:
    """Resolve a populated reference or a raw id into an id string."""
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        inner = value.get("_id") or value.get("id") or value.get("value")
        return str(inner) if inner else None
    return str(value)


def _ref_attr(value, key: str, default=None):
    """Read an attribute of a populated reference; raw ids carry none."""
    if isinstance(value, dict):
        return value.get(key, default)
    return default


# ============================================
# ENVELOPE
# ============================================

@dataclass(frozen=True)
class Pagination:
    page: int = 1
    pages: int = 1
    total: int = 0

    @classmethod
    def from_api(cls, payload: dict, fallback_total: int = 0) -> "Pagination":
        if not payload:
            return cls(page=1, pages=1, total=fallback_total)
        return cls(
            page=int(payload.get("page", 1) or 1),
            pages=int(payload.get("pages", payload.get("totalPages", 1)) or 1),
            total=int(payload.get("total", fallback_total) or 0),
        )


@dataclass(frozen=True)
class ApiEnvelope:
    """Normalized response: `{success, data, message?, pagination?}` plus any extra keys."""
    success: bool
    data: Any = None
    message: Optional[str] = None
    pagination: Optional[Pagination] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload) -> "ApiEnvelope":
        # Some endpoints return a bare list or object without the wrapper
        if not isinstance(payload, dict) or ("success" not in payload and "data" not in payload):
            return cls(success=True, data=payload)

        data = payload.get("data")
        pagination = None
        if "pagination" in payload:
            total = len(data) if isinstance(data, list) else 0
            pagination = Pagination.from_api(payload.get("pagination"), fallback_total=total)

        known = {"success", "data", "message", "pagination"}
        return cls(
            success=bool(payload.get("success", True)),
            data=data,
            message=payload.get("message"),
            pagination=pagination,
            extra={k: v for k, v in payload.items() if k not in known},
        )


# ============================================
# USERS, SITES, RIGHTS
# ============================================

@dataclass(frozen=True)
class SiteRef:
    id: Optional[str]
    name: str = ""

    @classmethod
    def from_api(cls, value) -> "SiteRef":
        return cls(
            id=ref_id(value),
            name=_ref_attr(value, "siteName") or _ref_attr(value, "label") or "",
        )


@dataclass(frozen=True)
class UserRef:
    id: Optional[str]
    full_name: str = ""
    email: str = ""
    role: str = ""
    username: str = ""

    @classmethod
    def from_api(cls, value) -> "UserRef":
        return cls(
            id=ref_id(value) or ref_id(_ref_attr(value, "userId")),
            full_name=_ref_attr(value, "fullName") or _ref_attr(value, "label") or "",
            email=_ref_attr(value, "email") or "",
            role=_ref_attr(value, "role") or "",
            username=_ref_attr(value, "username") or "",
        )


@dataclass(frozen=True)
class SiteRights:
    site: SiteRef
    rights: frozenset = frozenset()

    @classmethod
    def from_api(cls, payload: dict) -> "SiteRights":
        return cls(
            site=SiteRef.from_api(payload.get("site")),
            rights=frozenset(payload.get("rights") or []),
        )


@dataclass(frozen=True)
class UserRightsRecord:
    """A user's global rights plus one entry per site. Duplicate site entries are kept."""
    user: UserRef
    global_rights: frozenset = frozenset()
    site_rights: tuple = ()

    @classmethod
    def from_api(cls, payload: dict) -> "UserRightsRecord":
        return cls(
            user=UserRef.from_api(payload.get("user") or {}),
            global_rights=frozenset(payload.get("globalRights") or []),
            site_rights=tuple(SiteRights.from_api(sr) for sr in payload.get("siteRights") or []),
        )

    def rights_for_scope(self, scope_id: str) -> frozenset:
        """Rights held in one scope: "global" or a site id."""
        if scope_id == "global":
            return self.global_rights
        for entry in self.site_rights:
            if entry.site.id == scope_id:
                return entry.rights
        return frozenset()


# ============================================
# ASSETS & RMA
# ============================================

@dataclass(frozen=True)
class DeviceSnapshot:
    asset_code: str = ""
    serial_number: str = ""
    ip_address: str = ""
    mac: str = ""
    model: str = ""
    make: str = ""

    @classmethod
    def from_api(cls, payload) -> "DeviceSnapshot":
        payload = payload if isinstance(payload, dict) else {}
        return cls(
            asset_code=payload.get("assetCode") or "",
            serial_number=payload.get("serialNumber") or "",
            ip_address=payload.get("ipAddress") or "",
            mac=payload.get("mac") or payload.get("macAddress") or "",
            model=payload.get("model") or "",
            make=payload.get("make") or "",
        )


@dataclass(frozen=True)
class TimelineStep:
    status: str
    changed_by: str = ""
    timestamp: Optional[str] = None
    remarks: str = ""

    @classmethod
    def from_api(cls, payload: dict) -> "TimelineStep":
        changed_by = payload.get("changedBy")
        return cls(
            status=payload.get("status") or "",
            changed_by=_ref_attr(changed_by, "fullName") or (changed_by if isinstance(changed_by, str) else ""),
            timestamp=payload.get("timestamp") or payload.get("changedAt"),
            remarks=payload.get("remarks") or "",
        )


@dataclass(frozen=True)
class RmaRecord:
    id: Optional[str]
    rma_number: str = ""
    ticket_ref: Optional[str] = None
    ticket_number: str = ""
    site: SiteRef = SiteRef(None)
    original_asset: DeviceSnapshot = DeviceSnapshot()
    original_snapshot: DeviceSnapshot = DeviceSnapshot()
    replacement_details: DeviceSnapshot = DeviceSnapshot()
    status: str = ""
    request_reason: str = ""
    replacement_source: str = "RepairOnly"
    installation_status: str = "Pending"
    faulty_item_action: str = "None"
    timeline: tuple = ()
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "RmaRecord":
        ticket = payload.get("ticketId")
        return cls(
            id=ref_id(payload.get("_id") or payload.get("id")),
            rma_number=payload.get("rmaNumber") or "",
            ticket_ref=ref_id(ticket),
            ticket_number=_ref_attr(ticket, "ticketNumber") or "",
            site=SiteRef.from_api(payload.get("siteId")),
            original_asset=DeviceSnapshot.from_api(payload.get("originalAssetId")),
            original_snapshot=DeviceSnapshot.from_api(payload.get("originalDetailsSnapshot")),
            replacement_details=DeviceSnapshot.from_api(payload.get("replacementDetails")),
            status=payload.get("status") or "",
            request_reason=payload.get("requestReason") or "",
            replacement_source=payload.get("replacementSource") or "RepairOnly",
            installation_status=payload.get("installationStatus") or "Pending",
            faulty_item_action=payload.get("faultyItemAction") or "None",
            timeline=tuple(TimelineStep.from_api(step) for step in payload.get("timeline") or []),
            created_at=payload.get("createdAt"),
        )


@dataclass(frozen=True)
class ReplacementEvent:
    """One entry of an asset's replacement history (stock or RMA replacement)."""
    id: Optional[str]
    type: str = ""
    ticket_number: str = ""
    date: Optional[str] = None
    performed_by: str = ""
    old_details: DeviceSnapshot = DeviceSnapshot()
    new_details: DeviceSnapshot = DeviceSnapshot()
    remarks: str = ""

    @classmethod
    def from_api(cls, payload: dict) -> "ReplacementEvent":
        return cls(
            id=ref_id(payload.get("id") or payload.get("_id")),
            type=payload.get("type") or "",
            ticket_number=payload.get("ticketNumber") or "",
            date=payload.get("date"),
            performed_by=payload.get("performedBy") or "",
            old_details=DeviceSnapshot.from_api(payload.get("oldDetails")),
            new_details=DeviceSnapshot.from_api(payload.get("newDetails")),
            remarks=payload.get("remarks") or "",
        )


# ============================================
# REQUISITIONS
# ============================================

@dataclass(frozen=True)
class Requisition:
    id: Optional[str]
    requisition_number: str = ""
    requisition_type: str = "StockRequest"
    status: str = "Pending"
    transfer_direction: str = "None"
    source_site: SiteRef = SiteRef(None)
    destination_site: SiteRef = SiteRef(None)
    asset_ref: Optional[str] = None
    asset_code: str = ""
    asset_type: str = ""
    rma_ref: Optional[str] = None
    rma_number: str = ""
    ticket_ref: Optional[str] = None
    ticket_number: str = ""
    quantity: int = 1
    requested_by: str = ""
    comments: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "Requisition":
        asset = payload.get("assetId")
        rma = payload.get("rmaId")
        ticket = payload.get("ticketId")
        return cls(
            id=ref_id(payload.get("_id") or payload.get("id")),
            requisition_number=payload.get("requisitionNumber") or "",
            requisition_type=payload.get("requisitionType") or "StockRequest",
            status=payload.get("status") or "Pending",
            transfer_direction=payload.get("transferDirection") or "None",
            source_site=SiteRef.from_api(payload.get("sourceSiteId")),
            destination_site=SiteRef.from_api(payload.get("siteId")),
            asset_ref=ref_id(asset),
            asset_code=_ref_attr(asset, "assetCode") or "",
            asset_type=payload.get("assetType") or "",
            rma_ref=ref_id(rma),
            rma_number=_ref_attr(rma, "rmaNumber") or "",
            ticket_ref=ref_id(ticket),
            ticket_number=_ref_attr(ticket, "ticketNumber") or "",
            quantity=int(payload.get("quantity") or 1),
            requested_by=_ref_attr(payload.get("requestedBy"), "fullName") or "",
            comments=payload.get("comments") or "",
            created_at=payload.get("createdAt"),
        )


# ============================================
# SLA & DASHBOARD
# ============================================

@dataclass(frozen=True)
class SlaPolicy:
    priority: str
    response_minutes: int
    restore_minutes: int

    @classmethod
    def from_api(cls, payload: dict) -> "SlaPolicy":
        return cls(
            priority=payload.get("priority") or "",
            response_minutes=int(payload.get("responseTimeMinutes") or 0),
            restore_minutes=int(payload.get("restoreTimeMinutes") or 0),
        )


@dataclass(frozen=True)
class DashboardStats:
    total_tickets: int = 0
    open_tickets: int = 0
    in_progress_tickets: int = 0
    resolved_tickets: int = 0
    sla_breached: int = 0
    sla_at_risk: int = 0
    sla_compliance_percent: int = 100
    escalated_tickets: int = 0
    total_assets: int = 0
    offline_assets: int = 0
    tickets_by_priority: tuple = ()
    tickets_by_status: tuple = ()
    tickets_by_category: tuple = ()
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: dict) -> "DashboardStats":
        payload = payload or {}

        def count(key):
            return int(payload.get(key) or 0)

        def breakdown(key, label):
            return tuple(
                (item.get(label) or "Uncategorized", int(item.get("count") or 0))
                for item in payload.get(key) or []
            )

        return cls(
            total_tickets=count("totalTickets"),
            open_tickets=count("openTickets"),
            in_progress_tickets=count("inProgressTickets"),
            resolved_tickets=count("resolvedToday"),
            sla_breached=count("slaBreached"),
            sla_at_risk=count("slaAtRisk"),
            sla_compliance_percent=int(payload.get("slaCompliancePercent", 100) or 0),
            escalated_tickets=count("escalatedTickets"),
            total_assets=count("totalAssets"),
            offline_assets=count("offlineAssets"),
            tickets_by_priority=breakdown("ticketsByPriority", "priority"),
            tickets_by_status=breakdown("ticketsByStatus", "status"),
            tickets_by_category=breakdown("ticketsByCategory", "category"),
            raw=dict(payload),
        )


# ============================================
# NOTIFICATIONS
# ============================================

@dataclass(frozen=True)
class Notification:
    id: Optional[str]
    title: str = ""
    message: str = ""
    type: str = "info"
    link: Optional[str] = None
    is_read: bool = False
    is_broadcast: bool = False
    created_at: str = ""
    created_by: str = ""

    @classmethod
    def from_api(cls, payload: dict) -> "Notification":
        payload = payload or {}
        return cls(
            id=ref_id(payload.get("_id") or payload.get("id")),
            title=payload.get("title") or "",
            message=payload.get("message") or "",
            type=payload.get("type") or "info",
            link=payload.get("link") or None,
            is_read=bool(payload.get("isRead")),
            is_broadcast=bool(payload.get("isBroadcast")),
            created_at=payload.get("createdAt") or "",
            created_by=_ref_attr(payload.get("createdBy"), "fullName", "") or "",
        )
