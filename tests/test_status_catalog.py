import pytest

from services.status_catalog import (
    ColorTier,
    RmaStatus,
    TicketStatus,
    asset_label_for,
    criticality_for,
    label_for,
    normalize_criticality,
)


class TestLabelFor:
    def test_every_rma_status_has_an_entry(self):
        for status in RmaStatus:
            display = label_for(status.value)
            assert display.label
            assert isinstance(display.color, ColorTier)

    def test_every_ticket_status_has_an_entry(self):
        for status in TicketStatus:
            assert label_for(status.value).label

    def test_known_rma_status(self):
        display = label_for("Requested")
        assert display.label == "Awaiting Approval"
        assert display.color is ColorTier.WARNING
        assert display.icon == "clock"

    def test_ticket_status(self):
        assert label_for("InProgress").label == "In Progress"
        assert label_for("Closed").color is ColorTier.SECONDARY

    def test_unknown_status_falls_back_to_secondary(self):
        display = label_for("SomethingNew")
        assert display.label == "SomethingNew"
        assert display.color is ColorTier.SECONDARY
        assert display.icon == "clock"

    def test_none_status(self):
        assert label_for(None).label == ""

    def test_lookup_is_case_sensitive(self):
        assert label_for("installed").color is ColorTier.SECONDARY
        assert label_for("Installed").color is ColorTier.SUCCESS

    def test_hex_follows_tier(self):
        assert label_for("Rejected").hex == "#ef4444"


class TestAssetLabelFor:
    def test_known(self):
        assert asset_label_for("Offline").color is ColorTier.DANGER
        assert asset_label_for("Passive Device").label == "Passive Device"

    def test_unknown_uses_circle_icon(self):
        display = asset_label_for("Retired")
        assert display.label == "Retired"
        assert display.icon == "circle"
        assert display.color is ColorTier.SECONDARY


class TestCriticality:
    @pytest.mark.parametrize("value, expected", [
        (1, 1), (3, 3), ("2", 2), (None, 2), ("", 2), (7, 2), ("high", 2),
    ])
    def test_normalize(self, value, expected):
        assert normalize_criticality(value) == expected

    def test_labels(self):
        assert criticality_for(1)["label"] == "Low"
        assert criticality_for(3)["label"] == "High"
        assert criticality_for(None) == {"level": 2, "label": "Medium", "color": "warning"}
