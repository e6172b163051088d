"""
Status taxonomy: maps every lifecycle and asset status the backend can send
to a display label, a color tier and an icon key.

Lookups are total. A status the catalog has never seen still renders, using
the catalog's fallback entry with the raw status as its label.
"""

from dataclasses import dataclass
from enum import Enum

from config.constants import COLOR_TIERS, CRITICALITY_LEVELS, DEFAULT_CRITICALITY


class ColorTier(str, Enum):
    PRIMARY = "primary"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    SECONDARY = "secondary"

    @property
    def hex(self) -> str:
        return COLOR_TIERS[self.value]


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    color: ColorTier
    icon: str

    @property
    def hex(self) -> str:
        return self.color.hex


# ============================================
# STATUS ENUMS
# ============================================

class RmaStatus(str, Enum):
    # Core workflow
    REQUESTED = "Requested"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    # Simplified repair workflow
    SENT_TO_SERVICE_CENTER = "SentToServiceCenter"
    SENT_TO_HO = "SentToHO"
    RECEIVED_AT_HO = "ReceivedAtHO"
    SENT_FOR_REPAIR_FROM_HO = "SentForRepairFromHO"
    ITEM_REPAIRED_AT_HO = "ItemRepairedAtHO"
    RETURN_SHIPPED_TO_SITE = "ReturnShippedToSite"
    RECEIVED_AT_SITE = "ReceivedAtSite"
    REPAIRED_RECEIVED_AT_SITE = "RepairedReceivedAtSite"
    ADD_TO_SITE_STOCK = "AddToSiteStock"
    INSTALLED = "Installed"
    # Replacement workflow
    REPLACEMENT_REQUISITION_RAISED = "ReplacementRequisitionRaised"
    REPLACEMENT_DISPATCHED = "ReplacementDispatched"
    REPLACEMENT_RECEIVED_AT_SITE = "ReplacementReceivedAtSite"
    # Legacy statuses still present on older records
    ORDERED = "Ordered"
    DISPATCHED = "Dispatched"
    RECEIVED = "Received"
    AWAITING_STOCK_TRANSFER = "AwaitingStockTransfer"
    STOCK_IN_TRANSIT = "StockInTransit"
    STOCK_RECEIVED = "StockReceived"
    IN_REPAIR = "InRepair"
    REPAIRED = "Repaired"
    REPAIRED_ITEM_EN_ROUTE = "RepairedItemEnRoute"
    REPAIRED_ITEM_RECEIVED = "RepairedItemReceived"
    TRANSFERRED_TO_SITE_STORE = "TransferredToSiteStore"
    TRANSFERRED_TO_HO_STOCK = "TransferredToHOStock"
    DISCARDED = "Discarded"


class TicketStatus(str, Enum):
    OPEN = "Open"
    ASSIGNED = "Assigned"
    ACKNOWLEDGED = "Acknowledged"
    IN_PROGRESS = "InProgress"
    ON_HOLD = "OnHold"
    ESCALATED = "Escalated"
    RESOLVED = "Resolved"
    RESOLUTION_REJECTED = "ResolutionRejected"
    VERIFIED = "Verified"
    CLOSED = "Closed"
    CANCELLED = "Cancelled"


class AssetStatus(str, Enum):
    OPERATIONAL = "Operational"
    DEGRADED = "Degraded"
    OFFLINE = "Offline"
    MAINTENANCE = "Maintenance"
    ONLINE = "Online"
    PASSIVE_DEVICE = "Passive Device"


# ============================================
# CATALOGS
# ============================================

_P, _I, _S, _W, _D, _X = (
    ColorTier.PRIMARY, ColorTier.INFO, ColorTier.SUCCESS,
    ColorTier.WARNING, ColorTier.DANGER, ColorTier.SECONDARY,
)

RMA_STATUS_CATALOG = {
    RmaStatus.REQUESTED: StatusDisplay("Awaiting Approval", _W, "clock"),
    RmaStatus.APPROVED: StatusDisplay("Approved", _I, "check-circle"),
    RmaStatus.REJECTED: StatusDisplay("Rejected", _D, "x-circle"),
    RmaStatus.SENT_TO_SERVICE_CENTER: StatusDisplay("Sent to Service Center", _P, "send"),
    RmaStatus.SENT_TO_HO: StatusDisplay("Sent to HO", _W, "building"),
    RmaStatus.RECEIVED_AT_HO: StatusDisplay("Received at HO", _I, "package"),
    RmaStatus.SENT_FOR_REPAIR_FROM_HO: StatusDisplay("Sent to SC from HO", _P, "send"),
    RmaStatus.ITEM_REPAIRED_AT_HO: StatusDisplay("Repaired (at HO)", _I, "check-circle"),
    RmaStatus.RETURN_SHIPPED_TO_SITE: StatusDisplay("Shipped to Site", _P, "truck"),
    RmaStatus.RECEIVED_AT_SITE: StatusDisplay("Received at Site", _I, "map-pin"),
    RmaStatus.REPAIRED_RECEIVED_AT_SITE: StatusDisplay("Repaired (at Site)", _I, "map-pin"),
    RmaStatus.ADD_TO_SITE_STOCK: StatusDisplay("Added to Site Stock", _S, "package"),
    RmaStatus.INSTALLED: StatusDisplay("Installed", _S, "settings"),
    RmaStatus.REPLACEMENT_REQUISITION_RAISED: StatusDisplay("Requisition Raised", _I, "package"),
    RmaStatus.REPLACEMENT_DISPATCHED: StatusDisplay("Replacement Dispatched", _P, "truck"),
    RmaStatus.REPLACEMENT_RECEIVED_AT_SITE: StatusDisplay("Replacement Received", _I, "map-pin"),
    RmaStatus.ORDERED: StatusDisplay("Ordered from Vendor", _P, "package"),
    RmaStatus.DISPATCHED: StatusDisplay("In Transit", _P, "truck"),
    RmaStatus.RECEIVED: StatusDisplay("Received", _I, "download"),
    RmaStatus.AWAITING_STOCK_TRANSFER: StatusDisplay("Awaiting HO Transfer", _W, "clock"),
    RmaStatus.STOCK_IN_TRANSIT: StatusDisplay("Stock In Transit", _P, "truck"),
    RmaStatus.STOCK_RECEIVED: StatusDisplay("Stock Received", _I, "download"),
    RmaStatus.IN_REPAIR: StatusDisplay("In Repair", _W, "refresh-cw"),
    RmaStatus.REPAIRED: StatusDisplay("Repaired", _I, "check-circle"),
    RmaStatus.REPAIRED_ITEM_EN_ROUTE: StatusDisplay("Repaired Item En Route", _P, "truck"),
    RmaStatus.REPAIRED_ITEM_RECEIVED: StatusDisplay("Repaired Item Received", _I, "download"),
    RmaStatus.TRANSFERRED_TO_SITE_STORE: StatusDisplay("Transferred to Site", _S, "package"),
    RmaStatus.TRANSFERRED_TO_HO_STOCK: StatusDisplay("Transferred to HO", _S, "package"),
    RmaStatus.DISCARDED: StatusDisplay("Discarded", _D, "x-circle"),
}

TICKET_STATUS_CATALOG = {
    TicketStatus.OPEN: StatusDisplay("Open", _I, "inbox"),
    TicketStatus.ASSIGNED: StatusDisplay("Assigned", _P, "user-check"),
    TicketStatus.ACKNOWLEDGED: StatusDisplay("Acknowledged", _W, "eye"),
    TicketStatus.IN_PROGRESS: StatusDisplay("In Progress", _P, "loader"),
    TicketStatus.ON_HOLD: StatusDisplay("On Hold", _W, "pause"),
    TicketStatus.ESCALATED: StatusDisplay("Escalated", _D, "alert-triangle"),
    TicketStatus.RESOLVED: StatusDisplay("Resolved", _S, "check-circle"),
    TicketStatus.RESOLUTION_REJECTED: StatusDisplay("Resolution Rejected", _D, "x-circle"),
    TicketStatus.VERIFIED: StatusDisplay("Verified", _S, "shield-check"),
    TicketStatus.CLOSED: StatusDisplay("Closed", _X, "lock"),
    TicketStatus.CANCELLED: StatusDisplay("Cancelled", _X, "slash"),
}

ASSET_STATUS_CATALOG = {
    AssetStatus.OPERATIONAL: StatusDisplay("Operational", _S, "check-circle"),
    AssetStatus.DEGRADED: StatusDisplay("Degraded", _W, "alert-triangle"),
    AssetStatus.OFFLINE: StatusDisplay("Offline", _D, "wifi-off"),
    AssetStatus.MAINTENANCE: StatusDisplay("Maintenance", _I, "tool"),
    AssetStatus.ONLINE: StatusDisplay("Online", _S, "wifi"),
    AssetStatus.PASSIVE_DEVICE: StatusDisplay("Passive Device", _X, "box"),
}

LIFECYCLE_CATALOG = {**RMA_STATUS_CATALOG, **TICKET_STATUS_CATALOG}


def _coerce(enum_cls, status):
    try:
        return enum_cls(status)
    except ValueError:
        return None


def label_for(status) -> StatusDisplay:
    """Display entry for an RMA or ticket status; unknown values render as a secondary badge."""
    member = _coerce(RmaStatus, status) or _coerce(TicketStatus, status)
    if member is None:
        return StatusDisplay(str(status or ""), _X, "clock")
    return LIFECYCLE_CATALOG[member]


def asset_label_for(status) -> StatusDisplay:
    member = _coerce(AssetStatus, status)
    if member is None:
        return StatusDisplay(str(status or ""), _X, "circle")
    return ASSET_STATUS_CATALOG[member]


# ============================================
# ASSET CRITICALITY
# ============================================

def normalize_criticality(value) -> int:
    """Criticality level 1-3; anything unmapped or missing counts as Medium."""
    try:
        level = int(value)
    except (TypeError, ValueError):
        return DEFAULT_CRITICALITY
    return level if level in CRITICALITY_LEVELS else DEFAULT_CRITICALITY


def criticality_for(value) -> dict:
    level = normalize_criticality(value)
    return {"level": level, **CRITICALITY_LEVELS[level]}
