from api.models import TimelineStep
from services.timeline_service import is_completed, partition_records, preview_timeline


def steps(*statuses):
    return [TimelineStep(status=s) for s in statuses]


def test_rma_partition_scenario(rma):
    records = [rma("Requested", "R1"), rma("Installed", "R2"), rma("SentToHO", "R3"), rma("Rejected", "R4")]
    result = partition_records(records)
    assert [r.status for r in result.ongoing] == ["Requested", "SentToHO"]
    assert [r.status for r in result.completed] == ["Installed", "Rejected"]


def test_unknown_and_differently_cased_statuses_are_ongoing(rma):
    result = partition_records([rma("installed"), rma("Mystery"), rma("Discarded")])
    assert len(result.ongoing) == 2
    assert [r.status for r in result.completed] == ["Discarded"]


def test_is_completed():
    assert is_completed("Installed")
    assert not is_completed("ItemRepairedAtHO")
    assert not is_completed(None)


def test_preview_keeps_last_steps():
    markers = preview_timeline(steps("A", "B", "C", "D", "E", "F", "G"), n=5)
    assert [m.step.status for m in markers] == ["C", "D", "E", "F", "G"]
    assert [m.is_latest for m in markers] == [False, False, False, False, True]


def test_preview_short_timeline():
    markers = preview_timeline(steps("Requested", "Approved"))
    assert len(markers) == 2
    assert markers[-1].is_latest
    assert markers[-1].display.label == "Approved"


def test_preview_empty_or_zero():
    assert preview_timeline([]) == []
    assert preview_timeline(steps("A"), n=0) == []


def test_timeline_from_api_payload():
    step = TimelineStep.from_api({"status": "SentToHO", "changedBy": {"fullName": "Kim"},
                                  "changedAt": "2024-05-01T10:00:00Z", "remarks": "boxed"})
    assert step.changed_by == "Kim"
    assert step.timestamp == "2024-05-01T10:00:00Z"
