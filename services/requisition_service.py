"""
Requisition taxonomy and list query building.
"""

from config.constants import (
    DEFAULT_REQUISITION_STATUS,
    PAGINATION_CONFIG,
    REQUISITION_TYPES,
    TRANSFER_DIRECTIONS,
)
from config.permissions import ActionResult


def requisition_type_label(requisition_type) -> str:
    """Label for a requisition card; unknown types read as a stock request."""
    if requisition_type == "all" or requisition_type not in REQUISITION_TYPES:
        return "Stock Request"
    return REQUISITION_TYPES[requisition_type]["label"]


def requisition_badge_class(requisition_type) -> str:
    return REQUISITION_TYPES.get(requisition_type, REQUISITION_TYPES["StockRequest"])["badge"]


def direction_label(requisition) -> str:
    """Transfer direction only applies to transfers; stock requests always show '-'."""
    if requisition.requisition_type == "StockRequest":
        return TRANSFER_DIRECTIONS["None"]
    return TRANSFER_DIRECTIONS.get(requisition.transfer_direction, TRANSFER_DIRECTIONS["None"])


def status_label(status: str) -> str:
    return "In Transit" if status == "InTransit" else status


def build_requisition_params(status: str = None, requisition_type: str = "all",
                             page: int = 1, limit: int = None) -> dict:
    params = {
        "status": status or DEFAULT_REQUISITION_STATUS,
        "page": page,
        "limit": limit or PAGINATION_CONFIG["default_page_size"],
    }
    if requisition_type and requisition_type != "all":
        params["requisitionType"] = requisition_type
    return params


def type_tab_count(type_counts: dict, requisition_type: str) -> int:
    """Badge count for a type tab; the "all" tab sums every type."""
    if requisition_type == "all":
        return sum(type_counts.values())
    return type_counts.get(requisition_type, 0)


def can_review(requisition) -> bool:
    """Approve/reject is offered for pending requisitions other than repaired-item transfers."""
    return requisition.status == "Pending" and requisition.requisition_type != "RepairedItemTransfer"


def validate_rejection(reason) -> ActionResult:
    if reason is None:
        return ActionResult(False, "Rejection cancelled")
    if not str(reason).strip():
        return ActionResult(False, "A rejection reason is required")
    return ActionResult(True, "Reason accepted", {"reason": str(reason).strip()})
