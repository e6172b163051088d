from api.models import Requisition
from services.requisition_service import (
    build_requisition_params,
    can_review,
    direction_label,
    requisition_badge_class,
    requisition_type_label,
    status_label,
    type_tab_count,
    validate_rejection,
)


def requisition(**payload):
    return Requisition.from_api({"_id": "r-1", **payload})


def test_type_labels():
    assert requisition_type_label("RMATransfer") == "RMA Transfers"
    assert requisition_type_label("RepairedItemTransfer") == "Repaired Items"
    assert requisition_type_label("Mystery") == "Stock Request"
    assert requisition_type_label(None) == "Stock Request"


def test_badge_class_defaults_to_stock_request():
    assert requisition_badge_class("RMATransfer") == "badge-rma-transfer"
    assert requisition_badge_class("Mystery") == "badge-stock-request"


def test_direction_label():
    assert direction_label(requisition(requisitionType="RMATransfer", transferDirection="ToHO")) == "To HO"
    assert direction_label(requisition(requisitionType="StockRequest", transferDirection="ToSite")) == "-"
    assert direction_label(requisition(requisitionType="RMATransfer", transferDirection="Sideways")) == "-"


def test_status_label():
    assert status_label("InTransit") == "In Transit"
    assert status_label("Pending") == "Pending"


def test_params_default_to_pending():
    assert build_requisition_params() == {"status": "Pending", "page": 1, "limit": 20}


def test_params_include_type_unless_all():
    params = build_requisition_params("Approved", "RMATransfer", page=3)
    assert params["requisitionType"] == "RMATransfer"
    assert params["status"] == "Approved"
    assert "requisitionType" not in build_requisition_params(requisition_type="all")


def test_type_tab_count():
    counts = {"StockRequest": 4, "RMATransfer": 2}
    assert type_tab_count(counts, "all") == 6
    assert type_tab_count(counts, "RMATransfer") == 2
    assert type_tab_count(counts, "RepairedItemTransfer") == 0


def test_can_review():
    assert can_review(requisition(status="Pending", requisitionType="StockRequest"))
    assert not can_review(requisition(status="Approved"))
    assert not can_review(requisition(status="Pending", requisitionType="RepairedItemTransfer"))


def test_rejection_reason():
    assert validate_rejection(None).message == "Rejection cancelled"
    assert not validate_rejection("   ")
    result = validate_rejection("  wrong part  ")
    assert result
    assert result.data == {"reason": "wrong part"}


def test_requisition_from_api_defaults():
    req = requisition(siteId={"_id": "s-1", "siteName": "North"}, requestedBy={"fullName": "Kim"},
                      quantity="3")
    assert req.requisition_type == "StockRequest"
    assert req.status == "Pending"
    assert req.destination_site.name == "North"
    assert req.requested_by == "Kim"
    assert req.quantity == 3
