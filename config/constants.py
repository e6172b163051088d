"""
Centralized configuration constants for the TicketOps console.
Pure data, no runtime dependencies.
"""

# ============================================
# AUTHENTICATION & SESSION MANAGEMENT
# ============================================
SESSION_TIMEOUT_HOURS = 8  # Auto-logout after 8 hours
INACTIVITY_TIMEOUT_MINUTES = 30  # Auto-logout after 30 minutes of inactivity

# ============================================
# ROLE CONFIGURATION
# ============================================
USER_ROLES = {
    "Admin": {"name": "Admin", "description": "Full system access"},
    "Supervisor": {"name": "Supervisor", "description": "Oversees sites and escalations"},
    "Dispatcher": {"name": "Dispatcher", "description": "Routes and assigns tickets"},
    "L1Engineer": {"name": "L1 Engineer", "description": "First-line field support"},
    "L2Engineer": {"name": "L2 Engineer", "description": "Second-line support"},
    "SiteClient": {"name": "Site Client", "description": "Raises tickets for own site"},
}

MANAGER_ROLES = ["Admin", "Supervisor", "Dispatcher"]

# ============================================
# PERMISSION CODES (closed set shared with the backend)
# ============================================
PERMISSION_LABELS = {
    "CREATE_TICKET": "Create Tickets",
    "EDIT_TICKET": "Edit Tickets",
    "DELETE_TICKET": "Delete Tickets",
    "ESCALATION_L1": "Escalation Level 1",
    "ESCALATION_L2": "Escalation Level 2",
    "ESCALATION_L3": "Escalation Level 3",
    "DIRECT_RMA_GENERATE": "Direct RMA Generation",
    "MANAGE_SITE_STOCK": "Manage Site Stock",
    "MANAGE_ASSETS": "Manage Assets",
    "VIEW_REPORTS": "View Reports",
    "VIEW_CREDENTIALS": "View Device Credentials",
    "VIEW_SERIAL": "View Serial Numbers",
    "VIEW_MAC": "View MAC Addresses",
    "VIEW_IP": "View IP Addresses",
    "EXPORT_SENSITIVE": "Export Sensitive Data",
}

PERMISSION_CODES = frozenset(PERMISSION_LABELS)

# Scope value for rights that apply to every site
GLOBAL_SCOPE = "global"

# ============================================
# PRIORITY & SLA
# ============================================
# Score = impact x urgency x asset criticality; first band whose floor is met wins
PRIORITY_BANDS = [
    (50, "P1"),
    (25, "P2"),
    (10, "P3"),
]
LOWEST_PRIORITY = "P4"

IMPACT_RANGE = (1, 5)
URGENCY_RANGE = (1, 5)
DEFAULT_IMPACT = 3
DEFAULT_URGENCY = 3

CRITICALITY_LEVELS = {
    1: {"label": "Low", "color": "success"},
    2: {"label": "Medium", "color": "warning"},
    3: {"label": "High", "color": "danger"},
}
DEFAULT_CRITICALITY = 2

PRIORITY_COLORS = {
    "P1": "#dc2626",
    "P2": "#f97316",
    "P3": "#f59e0b",
    "P4": "#10b981",
}

# ============================================
# RMA WORKFLOW
# ============================================
# Records in these states are finished; every other status counts as ongoing
COMPLETED_RMA_STATUSES = frozenset({"Installed", "Rejected", "Discarded"})

TIMELINE_PREVIEW_LENGTH = 5

# Tickets in these states can no longer be edited from the form
LOCKED_TICKET_STATUSES = frozenset({
    "InProgress", "OnHold", "Resolved", "Verified", "Closed", "Cancelled",
})

# ============================================
# STATUS BADGE COLORS (color tier -> hex)
# ============================================
COLOR_TIERS = {
    "primary": "#3b82f6",
    "info": "#06b6d4",
    "success": "#10b981",
    "warning": "#f59e0b",
    "danger": "#ef4444",
    "secondary": "#64748b",
}

# ============================================
# REQUISITIONS
# ============================================
REQUISITION_TYPES = {
    "all": {"label": "All", "badge": "badge-all"},
    "StockRequest": {"label": "Stock Requests", "badge": "badge-stock-request"},
    "RMATransfer": {"label": "RMA Transfers", "badge": "badge-rma-transfer"},
    "RepairedItemTransfer": {"label": "Repaired Items", "badge": "badge-repaired-transfer"},
}

TRANSFER_DIRECTIONS = {
    "ToSite": "To Site",
    "ToHO": "To HO",
    "SiteToSite": "Site to Site",
    "None": "-",
}

REQUISITION_STATUSES = ["Pending", "Approved", "InTransit", "Fulfilled", "Rejected"]
DEFAULT_REQUISITION_STATUS = "Pending"

# ============================================
# TICKET FORM
# ============================================
TICKET_CATEGORIES = ["Hardware", "Software", "Network", "Power", "Connectivity", "Other"]

MAX_ATTACHMENT_BYTES = 10 * 1024 * 1024  # 10MB per file

# ============================================
# NOTIFICATIONS & PROFILE
# ============================================
NOTIFICATION_PAGE_SIZE = 20
NOTIFICATION_PREVIEW_CHARS = 100

# Icon and color per notification type; unknown types render as "info"
NOTIFICATION_TYPES = {
    "info": {"icon": "ℹ", "color": "#3b82f6"},
    "success": {"icon": "✔", "color": "#10b981"},
    "warning": {"icon": "⚠", "color": "#f59e0b"},
    "error": {"icon": "✖", "color": "#ef4444"},
    "announcement": {"icon": "◆", "color": "#8b5cf6"},
    "ticket": {"icon": "▤", "color": "#0ea5e9"},
    "system": {"icon": "⚙", "color": "#64748b"},
}

MIN_PASSWORD_LENGTH = 8

# ============================================
# PERFORMANCE & PAGINATION CONFIGURATION
# ============================================
PAGINATION_CONFIG = {
    "default_page_size": 20,
    "rma_page_size": 50,
}

CACHE_CONFIG = {
    "ttl_lookups": 900,        # 15 minutes for sites, categories, SLA policies
}

DASHBOARD_POLL_SECONDS = 30
DASHBOARD_MAX_WORKERS = 4

# Critical actions that get a severity in the activity log
CRITICAL_ACTIONS = {
    "USER_LOGIN": {"severity": "low"},
    "USER_LOGOUT": {"severity": "low"},
    "RIGHTS_UPDATED": {"severity": "critical"},
    "TICKET_CREATED": {"severity": "medium"},
    "TICKET_UPDATED": {"severity": "medium"},
    "ATTACHMENT_UPLOAD_FAILED": {"severity": "medium"},
    "REQUISITION_APPROVED": {"severity": "high"},
    "REQUISITION_REJECTED": {"severity": "high"},
    "ACCESS_DENIED": {"severity": "critical"},
    "PASSWORD_CHANGED": {"severity": "high"},
}
