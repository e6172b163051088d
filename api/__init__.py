"""
API Package
Provides the REST client and typed records for the ticketing backend
"""
from .config import API_CONFIG, ENVIRONMENT, validate_api_config
from .client import ApiError, TicketOpsApi
from .models import (
    ApiEnvelope,
    DashboardStats,
    DeviceSnapshot,
    Notification,
    Pagination,
    ReplacementEvent,
    Requisition,
    RmaRecord,
    SiteRef,
    SiteRights,
    SlaPolicy,
    TimelineStep,
    UserRef,
    UserRightsRecord,
    ref_id,
)

__all__ = [
    'API_CONFIG',
    'ENVIRONMENT',
    'validate_api_config',
    'ApiError',
    'TicketOpsApi',
    'ApiEnvelope',
    'DashboardStats',
    'DeviceSnapshot',
    'Notification',
    'Pagination',
    'ReplacementEvent',
    'Requisition',
    'RmaRecord',
    'SiteRef',
    'SiteRights',
    'SlaPolicy',
    'TimelineStep',
    'UserRef',
    'UserRightsRecord',
    'ref_id',
]
