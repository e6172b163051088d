"""Shared fixtures for the TicketOps test suite."""
from unittest.mock import MagicMock

import pytest

from api.client import TicketOpsApi
from api.models import RmaRecord, UserRightsRecord
from core.session import SessionContext


def make_rights_record(user_id, full_name, role="L1Engineer", global_rights=(), site_rights=None, email=""):
    return UserRightsRecord.from_api({
        "user": {"_id": user_id, "fullName": full_name, "role": role,
                 "email": email or f"{full_name.lower()}@example.com"},
        "globalRights": list(global_rights),
        "siteRights": site_rights or [],
    })


def make_rma(status, rma_number="RMA-1", site_name="North Yard", **extra):
    payload = {
        "_id": f"id-{rma_number}",
        "rmaNumber": rma_number,
        "status": status,
        "siteId": {"_id": "site-1", "siteName": site_name},
        "ticketId": {"_id": "t-1", "ticketNumber": "TKT-0001"},
        "originalAssetId": {"assetCode": "CAM-001", "ipAddress": "10.0.0.5", "serialNumber": "SN-123"},
    }
    payload.update(extra)
    return RmaRecord.from_api(payload)


def make_response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def alice_and_bob():
    return [
        make_rights_record("u-alice", "Alice", role="Admin"),
        make_rights_record("u-bob", "Bob", role="L1Engineer", global_rights=["VIEW_REPORTS"]),
    ]


@pytest.fixture
def site_session():
    return SessionContext(
        user_id="u-1",
        username="jdoe",
        full_name="Jane Doe",
        role="L1Engineer",
        assigned_sites=[{"_id": "site-1", "siteName": "North Yard"}, "site-2"],
        rights={
            "globalRights": ["VIEW_REPORTS"],
            "siteRights": [
                {"site": {"_id": "site-1"}, "rights": ["EDIT_TICKET", "VIEW_IP"]},
                {"site": "site-2", "rights": ["MANAGE_SITE_STOCK"]},
            ],
        },
    )


@pytest.fixture
def http_session():
    return MagicMock()


@pytest.fixture
def api(http_session):
    return TicketOpsApi(base_url="http://backend.test/api/", session=http_session, timeout=5,
                        access_token="token-1", refresh_token="refresh-1")


@pytest.fixture
def rights_record():
    return make_rights_record


@pytest.fixture
def rma():
    return make_rma


@pytest.fixture
def response():
    return make_response
