from openpyxl import load_workbook

from services.export_service import (
    MASK,
    RMA_EXPORT_COLUMNS,
    export_rma_to_excel,
    rma_records_to_dataframe,
)


def test_sensitive_columns_masked_by_default(rma):
    df = rma_records_to_dataframe([rma("SentToHO", createdAt="2024-05-01T10:00:00Z")])
    row = df.iloc[0]
    assert row["IP Address"] == MASK
    assert row["Serial Number"] == MASK
    assert row["Status"] == "Sent to HO"
    assert row["Stage"] == "Ongoing"
    assert row["Created At"] == "2024-05-01"


def test_sensitive_columns_when_allowed(rma):
    df = rma_records_to_dataframe([rma("Installed")], include_sensitive=True)
    assert df.iloc[0]["IP Address"] == "10.0.0.5"
    assert df.iloc[0]["Serial Number"] == "SN-123"
    assert df.iloc[0]["Stage"] == "Completed"


def test_snapshot_serial_preferred(rma):
    record = rma("Installed", originalDetailsSnapshot={"serialNumber": "SNAP-1"})
    df = rma_records_to_dataframe([record], include_sensitive=True)
    assert df.iloc[0]["Serial Number"] == "SNAP-1"


def test_empty_export_keeps_columns():
    df = rma_records_to_dataframe([])
    assert list(df.columns) == RMA_EXPORT_COLUMNS
    assert df.empty


def test_workbook_layout(rma):
    buffer = export_rma_to_excel([rma("Requested", "RMA-7"), rma("Rejected", "RMA-8")])
    sheet = load_workbook(buffer).active
    assert sheet.title == "RMA Records"
    assert [c.value for c in sheet[1]] == RMA_EXPORT_COLUMNS
    assert sheet["A2"].value == "RMA-7"
    assert sheet["A3"].value == "RMA-8"
    assert sheet.freeze_panes == "A2"
    assert sheet["A1"].font.bold
