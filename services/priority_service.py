"""
Ticket priority and SLA target calculation.

Priority is derived from impact x urgency x asset criticality and mapped onto
P1-P4 bands. SLA targets come from the backend's policy list for that band.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from config.constants import (
    IMPACT_RANGE,
    LOWEST_PRIORITY,
    PRIORITY_BANDS,
    PRIORITY_COLORS,
    URGENCY_RANGE,
)
from services.status_catalog import normalize_criticality


@dataclass(frozen=True)
class SlaTargets:
    priority: str
    score: int
    response_due: datetime = None
    resolution_due: datetime = None


def _check_range(name, value, bounds):
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValueError(f"{name} must be an integer between {low} and {high}, got {value!r}")


def calculate_priority_score(impact: int, urgency: int, criticality=None) -> int:
    """
    Score a ticket.

    Args:
        impact: 1-5
        urgency: 1-5
        criticality: Asset criticality 1-3; missing or unmapped counts as 2

    Returns:
        impact * urgency * criticality
    """
    _check_range("impact", impact, IMPACT_RANGE)
    _check_range("urgency", urgency, URGENCY_RANGE)
    return impact * urgency * normalize_criticality(criticality)


def get_priority_from_score(score: int) -> str:
    for floor, priority in PRIORITY_BANDS:
        if score >= floor:
            return priority
    return LOWEST_PRIORITY


def get_priority_color(priority: str) -> str:
    return PRIORITY_COLORS.get(priority, PRIORITY_COLORS[LOWEST_PRIORITY])


def calculate_sla_targets(impact: int, urgency: int, asset_criticality=None,
                          policies=None, now: datetime = None) -> SlaTargets:
    """
    Compute the priority band and the response / resolution due times.

    The policy whose priority equals the computed band supplies the minutes.
    With no matching policy both due times are None.
    """
    score = calculate_priority_score(impact, urgency, asset_criticality)
    priority = get_priority_from_score(score)
    policy = next((p for p in policies or [] if p.priority == priority), None)

    if policy is None:
        return SlaTargets(priority=priority, score=score)

    now = now or datetime.now()
    return SlaTargets(
        priority=priority,
        score=score,
        response_due=now + timedelta(minutes=policy.response_minutes),
        resolution_due=now + timedelta(minutes=policy.restore_minutes),
    )
