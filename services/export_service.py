"""
Excel export for RMA records.
Builds a pandas table of the visible records and writes it as a styled workbook.
"""

from io import BytesIO

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from services.status_catalog import label_for
from services.timeline_service import is_completed

RMA_EXPORT_COLUMNS = [
    "RMA Number", "Ticket", "Site", "Asset Code", "IP Address", "Serial Number",
    "Status", "Stage", "Replacement Source", "Faulty Item Action",
    "Installation Status", "Request Reason", "Created At",
]
SENSITIVE_COLUMNS = ["IP Address", "Serial Number"]
MASK = "••••"

# Styling constants
HEADER_FILL = PatternFill(start_color="F97316", end_color="F97316", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center", wrap_text=True)
CELL_BORDER = Border(
    left=Side(style='thin', color='D1D5DB'),
    right=Side(style='thin', color='D1D5DB'),
    top=Side(style='thin', color='D1D5DB'),
    bottom=Side(style='thin', color='D1D5DB')
)


def rma_records_to_dataframe(records, include_sensitive: bool = False) -> pd.DataFrame:
    """Flatten RmaRecord objects into display rows. Serial and IP are masked unless allowed."""
    rows = []
    for r in records:
        snapshot = r.original_snapshot if r.original_snapshot.serial_number else r.original_asset
        rows.append({
            "RMA Number": r.rma_number,
            "Ticket": r.ticket_number,
            "Site": r.site.name,
            "Asset Code": r.original_asset.asset_code,
            "IP Address": r.original_asset.ip_address,
            "Serial Number": snapshot.serial_number,
            "Status": label_for(r.status).label,
            "Stage": "Completed" if is_completed(r.status) else "Ongoing",
            "Replacement Source": r.replacement_source,
            "Faulty Item Action": r.faulty_item_action,
            "Installation Status": r.installation_status,
            "Request Reason": r.request_reason,
            "Created At": (r.created_at or "")[:10],
        })

    df = pd.DataFrame(rows, columns=RMA_EXPORT_COLUMNS)
    if not include_sensitive and not df.empty:
        for col in SENSITIVE_COLUMNS:
            df[col] = df[col].map(lambda v: MASK if v else "")
    return df


def dataframe_to_excel(df: pd.DataFrame, sheet_title: str) -> BytesIO:
    """
    Write a DataFrame to a formatted Excel file.

    Args:
        df: Rows to export, columns in display order
        sheet_title: Worksheet name

    Returns:
        BytesIO buffer containing the Excel file
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]

    columns = list(df.columns)

    # Header row
    for col_idx, col_name in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = HEADER_ALIGNMENT
        cell.border = CELL_BORDER

    # Data rows
    for row_idx, row_data in enumerate(df.itertuples(index=False), 2):
        for col_idx, value in enumerate(row_data, 1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            cell.border = CELL_BORDER
            cell.alignment = Alignment(vertical="center")

    # Auto-adjust column widths
    for col_idx, col_name in enumerate(columns, 1):
        max_length = len(str(col_name))
        for value in df.iloc[:, col_idx - 1]:
            if value:
                max_length = max(max_length, len(str(value)))
        ws.column_dimensions[ws.cell(row=1, column=col_idx).column_letter].width = min(max_length + 2, 50)

    ws.freeze_panes = "A2"

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


def export_rma_to_excel(records, include_sensitive: bool = False) -> BytesIO:
    return dataframe_to_excel(rma_records_to_dataframe(records, include_sensitive), "RMA Records")
