"""
Timeline reduction for RMA records.
"""

from collections import namedtuple

from config.constants import COMPLETED_RMA_STATUSES, TIMELINE_PREVIEW_LENGTH
from services.status_catalog import label_for

TimelineMarker = namedtuple("TimelineMarker", ["step", "is_latest", "display"])
RecordPartition = namedtuple("RecordPartition", ["ongoing", "completed"])


def is_completed(status) -> bool:
    """Exact, case-sensitive membership in the completed set."""
    return status in COMPLETED_RMA_STATUSES


def preview_timeline(steps, n: int = TIMELINE_PREVIEW_LENGTH) -> list:
    """
    Last `n` steps as markers. Only the final step of the full timeline is
    flagged latest, never the last step of a shorter preview window.
    """
    steps = list(steps)
    if n <= 0 or not steps:
        return []
    start = max(0, len(steps) - n)
    last_index = len(steps) - 1
    return [
        TimelineMarker(step, index == last_index, label_for(step.status))
        for index, step in enumerate(steps[start:], start=start)
    ]


def partition_records(records) -> RecordPartition:
    """Split RMA records into ongoing and completed, keeping input order in each."""
    ongoing, completed = [], []
    for record in records:
        (completed if is_completed(record.status) else ongoing).append(record)
    return RecordPartition(ongoing, completed)
