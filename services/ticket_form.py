"""
Ticket create/edit form state.

The asset selectors form a cascade: site -> location -> asset type ->
device type -> asset. Changing a level clears every level below it. An edit
form first hydrates the whole chain from the saved ticket with resets
suppressed, then switches to interactive editing exactly once.
"""

from dataclasses import dataclass, field
from enum import Enum

from api.models import ref_id
from config.constants import (
    DEFAULT_IMPACT,
    DEFAULT_URGENCY,
    IMPACT_RANGE,
    LOCKED_TICKET_STATUSES,
    URGENCY_RANGE,
)
from config.permissions import ActionResult
from services.status_catalog import normalize_criticality


class FormPhase(Enum):
    HYDRATING = "hydrating"
    INTERACTIVE = "interactive"


CASCADE_FIELDS = ["site_id", "location_name", "asset_type", "device_type", "asset_id"]


@dataclass
class TicketDraft:
    site_id: str = None
    location_name: str = None
    asset_type: str = None
    device_type: str = None
    asset_id: str = None
    category: str = ""
    sub_category: str = ""
    title: str = ""
    description: str = ""
    impact: int = DEFAULT_IMPACT
    urgency: int = DEFAULT_URGENCY
    assigned_to: str = None
    tags: str = ""
    attachments: list = field(default_factory=list)


def check_ticket_editable(status) -> ActionResult:
    if status in LOCKED_TICKET_STATUSES:
        return ActionResult(False, "Ticket cannot be edited once work has started")
    return ActionResult(True, "Ticket can be edited")


class TicketForm:
    def __init__(self, editing: bool = False):
        self.draft = TicketDraft()
        self.phase = FormPhase.HYDRATING if editing else FormPhase.INTERACTIVE

    @property
    def is_hydrating(self) -> bool:
        return self.phase is FormPhase.HYDRATING

    # ============================================
    # CASCADE SELECTORS
    # ============================================

    def _select(self, name: str, value):
        value = value or None
        previous = getattr(self.draft, name)
        setattr(self.draft, name, value)
        if self.phase is FormPhase.INTERACTIVE and value != previous:
            for dependant in CASCADE_FIELDS[CASCADE_FIELDS.index(name) + 1:]:
                setattr(self.draft, dependant, None)

    def set_site(self, site_id):
        self._select("site_id", site_id)

    def set_location(self, location_name):
        self._select("location_name", location_name)

    def set_asset_type(self, asset_type):
        self._select("asset_type", asset_type)

    def set_device_type(self, device_type):
        self._select("device_type", device_type)

    def set_asset(self, asset_id):
        self._select("asset_id", asset_id)

    def set_field(self, name: str, value):
        if name in CASCADE_FIELDS:
            raise ValueError(f"Use the cascade selector for {name}")
        if not hasattr(self.draft, name):
            raise AttributeError(f"TicketDraft has no field {name}")
        setattr(self.draft, name, value)

    # ============================================
    # HYDRATION
    # ============================================

    def hydrate(self, ticket: dict):
        """Load the full cascade and fields from a saved ticket, without resets."""
        if self.phase is not FormPhase.HYDRATING:
            raise RuntimeError("Ticket form is already interactive")

        asset = ticket.get("assetId") if isinstance(ticket.get("assetId"), dict) else None
        asset = asset or {}

        self.set_site(ref_id(ticket.get("siteId")) or ref_id(asset.get("siteId")))
        self.set_location(asset.get("locationName"))
        self.set_asset_type(asset.get("assetType"))
        self.set_device_type(asset.get("deviceType"))
        self.set_asset(ref_id(ticket.get("assetId")))

        tags = ticket.get("tags") or ""
        self.draft.category = ticket.get("category") or ""
        self.draft.sub_category = ticket.get("subCategory") or ""
        self.draft.title = ticket.get("title") or ""
        self.draft.description = ticket.get("description") or ""
        self.draft.impact = int(ticket.get("impact") or DEFAULT_IMPACT)
        self.draft.urgency = int(ticket.get("urgency") or DEFAULT_URGENCY)
        self.draft.assigned_to = ref_id(ticket.get("assignedTo"))
        self.draft.tags = ", ".join(tags) if isinstance(tags, list) else tags

    def finish_hydration(self):
        if self.phase is not FormPhase.HYDRATING:
            raise RuntimeError("Hydration already finished")
        self.phase = FormPhase.INTERACTIVE

    # ============================================
    # SUBMISSION
    # ============================================

    def validate(self, is_site_client: bool = False) -> ActionResult:
        draft = self.draft
        if self.is_hydrating:
            return ActionResult(False, "Ticket is still loading")
        if not is_site_client and not draft.site_id:
            return ActionResult(False, "Please select a Site")
        if not (draft.title or "").strip() or not draft.category:
            return ActionResult(False, "Please fill in required fields")
        if not is_site_client:
            for name, value, (low, high) in (("Impact", draft.impact, IMPACT_RANGE),
                                             ("Urgency", draft.urgency, URGENCY_RANGE)):
                if not isinstance(value, int) or not low <= value <= high:
                    return ActionResult(False, f"{name} must be between {low} and {high}")
        return ActionResult(True, "Ticket is valid")

    def to_payload(self, is_site_client: bool = False, fallback_site_id: str = None) -> dict:
        """Request body for create/update. Site clients never choose asset or priority inputs."""
        draft = self.draft
        return {
            "siteId": draft.site_id or (fallback_site_id if is_site_client else None),
            "assetId": None if is_site_client else (draft.asset_id or None),
            "category": draft.category,
            "subCategory": draft.sub_category,
            "title": draft.title.strip(),
            "description": draft.description,
            "impact": DEFAULT_IMPACT if is_site_client else int(draft.impact),
            "urgency": DEFAULT_URGENCY if is_site_client else int(draft.urgency),
            "assignedTo": draft.assigned_to or None,
            "tags": draft.tags,
        }


# ============================================
# ASSET DROPDOWN
# ============================================

def asset_option_label(asset: dict) -> str:
    code = asset.get("assetCode") or ""
    suffix = asset.get("deviceType") or asset.get("assetType")
    return f"{code} ({suffix})" if suffix else code


def filter_asset_options(assets, location_name: str = None, device_type: str = None) -> list:
    """Narrow the site's asset dropdown client-side by location and device type."""
    options = []
    for asset in assets or []:
        if location_name and asset.get("locationName") != location_name:
            continue
        if device_type and asset.get("deviceType") != device_type:
            continue
        options.append({
            "value": ref_id(asset.get("_id") or asset.get("value") or asset.get("assetId")),
            "label": asset_option_label(asset),
            "criticality": normalize_criticality(asset.get("criticality")),
        })
    return options


def selected_criticality(options, asset_id) -> int:
    option = next((o for o in options if o["value"] == asset_id), None)
    return normalize_criticality(option["criticality"] if option else None)
