"""Allocation audit workbook renderer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from offering_domain.blocks import AllocationBlock, BlockContext, BlockExecutor, TierScheduleBlock
from offering_domain.schemas import AuditWorkbookCFG

log = logging.getLogger(__name__)

TITLE_ROW = 1
HEADER_ROW = 3
FIRST_DATA_ROW = 4

MONEY_FORMAT = '"$"#,##0.00'
PRICE_FORMAT = '"$"0.0000'
SHARES_FORMAT = '#,##0'
PERCENT_FORMAT = '0"%"'
DATETIME_FORMAT = 'yyyy-mm-dd hh:mm:ss'

# (header, ledger column or None for formula cells, number format)
SUBMISSION_COLUMNS = [
    ("Submission ID", "submission_id", None),
    ("Submitted At (UTC)", "submitted_at", DATETIME_FORMAT),
    ("Investor", "investor_name", None),
    ("Investor Type", "investor_type", None),
    ("Investor Class", "investor_class", None),
    ("Tier", "tier_label", None),
    ("Investment", "investment_amount", MONEY_FORMAT),
    ("Share Price", "share_price", PRICE_FORMAT),
    ("Base Shares", "base_shares", SHARES_FORMAT),
    ("Bonus Shares", "bonus_shares", SHARES_FORMAT),
    ("Total Shares", None, SHARES_FORMAT),
    ("Effective Price", None, PRICE_FORMAT),
    ("Recorded Effective Price", "effective_share_price", PRICE_FORMAT),
    ("Bonus %", "bonus_percentage", PERCENT_FORMAT),
]

TIER_SCHEDULE_COLUMNS = [
    ("Investor Class", "investor_class", None),
    ("Tier", "tier_label", None),
    ("Threshold", "threshold_amount", MONEY_FORMAT),
    ("Bonus %", "bonus_percentage", PERCENT_FORMAT),
    ("Base Shares", "base_shares", SHARES_FORMAT),
    ("Bonus Shares", "bonus_shares", SHARES_FORMAT),
    ("Total Shares", "total_shares", SHARES_FORMAT),
    ("Effective Price", "effective_price", PRICE_FORMAT),
]

SUMMARY_LABELS = [
    ("Submissions", "submissions", SHARES_FORMAT),
    ("Accredited Submissions", "accredited_submissions", SHARES_FORMAT),
    ("Total Investment", "total_investment", MONEY_FORMAT),
    ("Base Shares", "total_base_shares", SHARES_FORMAT),
    ("Bonus Shares", "total_bonus_shares", SHARES_FORMAT),
    ("Total Shares", "total_shares", SHARES_FORMAT),
    ("Blended Share Price", "blended_share_price", PRICE_FORMAT),
]

BY_TIER_COLUMNS = [
    ("Investor Class", "investor_class", None),
    ("Tier", "tier_label", None),
    ("Submissions", "submissions", SHARES_FORMAT),
    ("Investment", "investment_amount", MONEY_FORMAT),
    ("Base Shares", "base_shares", SHARES_FORMAT),
    ("Bonus Shares", "bonus_shares", SHARES_FORMAT),
    ("Total Shares", "total_shares", SHARES_FORMAT),
]


def _naive_utc(value) -> datetime:
    """Excel has no time zones; store submission times as naive UTC."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.to_pydatetime()


def _cell_value(value):
    # openpyxl rejects some numpy scalars; unwrap them
    if hasattr(value, "item"):
        return value.item()
    return value


class AuditWorkbookRenderer:
    """Render an allocation audit workbook from an AuditWorkbookCFG.

    Sheets:
        - Tier Schedule (optional)
        - Submissions: one row per submission. Total shares and effective price
          are Excel formulas, next to the recorded effective price, so a
          reviewer can spot records whose stored allocation does not match
          their inputs.
        - Summary (optional)
    """

    def __init__(self, config: AuditWorkbookCFG):
        self.config = config

        self.blue_font = Font(color="0000FF")  # Blue for recorded input values
        self.black_font = Font(color="000000")  # Black for calculated values
        self.bold_font = Font(bold=True)
        self.title_font = Font(bold=True, size=14)

        self.header_font = Font(bold=True, color="FFFFFF")  # White text on dark blue
        self.header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")

        self.totals_fill = PatternFill(start_color="F2F2F2", end_color="F2F2F2", fill_type="solid")

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        self.top_border = Border(top=Side(style='medium'))
        self.center_align = Alignment(horizontal='center', vertical='center', wrap_text=True)

    def render(self, output_path: str) -> str:
        wb = self.build_workbook()
        wb.save(output_path)
        log.info(
            "wrote audit workbook path=%s submissions=%s sheets=%s",
            output_path, len(self.config.submissions), wb.sheetnames,
        )
        return output_path

    def build_workbook(self) -> Workbook:
        context = self._run_blocks()

        wb = Workbook()
        wb.remove(wb.active)

        if self.config.include_tier_schedule:
            self._render_tier_schedule(wb, context.get("tier_schedule"))
        self._render_submissions(wb, context.get("allocation_ledger"))
        if self.config.include_summary:
            self._render_summary(
                wb,
                context.get("allocation_summary"),
                context.get("allocation_by_tier"),
            )

        return wb

    def _run_blocks(self) -> BlockContext:
        blocks = [AllocationBlock()]
        if self.config.include_tier_schedule:
            blocks.append(TierScheduleBlock())

        context = BlockContext()
        context.set("submissions", self.config.submissions)
        return BlockExecutor(blocks).execute(context)

    # ------------------------------------------------------------------ #
    # Sheets
    # ------------------------------------------------------------------ #

    def _render_tier_schedule(self, wb: Workbook, schedule_df: pd.DataFrame) -> None:
        ws = wb.create_sheet("Tier Schedule")
        self._write_title(ws, f"{self.config.title} - Tier Schedule")
        self._write_header(ws, [header for header, _, _ in TIER_SCHEDULE_COLUMNS])

        for offset, record in enumerate(schedule_df.to_dict("records")):
            row = FIRST_DATA_ROW + offset
            for col_idx, (_, key, number_format) in enumerate(TIER_SCHEDULE_COLUMNS, start=1):
                cell = ws.cell(row=row, column=col_idx, value=_cell_value(record[key]))
                cell.border = self.thin_border
                # Thresholds and bonus rates are offering terms, the rest is derived
                cell.font = self.blue_font if key in ("threshold_amount", "bonus_percentage") else self.black_font
                if number_format:
                    cell.number_format = number_format

        self._set_widths(ws, len(TIER_SCHEDULE_COLUMNS))

    def _render_submissions(self, wb: Workbook, ledger_df: pd.DataFrame) -> None:
        ws = wb.create_sheet("Submissions")
        self._write_title(ws, f"{self.config.title} - Submissions")
        self._write_header(ws, [header for header, _, _ in SUBMISSION_COLUMNS])

        cols: Dict[str, str] = {
            header: get_column_letter(idx) for idx, (header, _, _) in enumerate(SUBMISSION_COLUMNS, start=1)
        }
        investment, price = cols["Investment"], cols["Share Price"]
        base, bonus, total = cols["Base Shares"], cols["Bonus Shares"], cols["Total Shares"]

        records: List[dict] = ledger_df.to_dict("records")
        for offset, record in enumerate(records):
            row = FIRST_DATA_ROW + offset
            for col_idx, (header, key, number_format) in enumerate(SUBMISSION_COLUMNS, start=1):
                if header == "Total Shares":
                    value = f"={base}{row}+{bonus}{row}"
                elif header == "Effective Price":
                    value = f"=IF({total}{row}>0,ROUND({investment}{row}/{total}{row},4),{price}{row})"
                elif key == "submitted_at":
                    value = _naive_utc(record[key])
                else:
                    value = _cell_value(record[key])

                cell = ws.cell(row=row, column=col_idx, value=value)
                cell.border = self.thin_border
                cell.font = self.black_font if key is None else self.blue_font
                if number_format:
                    cell.number_format = number_format

        self._write_submission_totals(ws, cols, len(records))
        ws.freeze_panes = ws.cell(row=FIRST_DATA_ROW, column=2)
        self._set_widths(ws, len(SUBMISSION_COLUMNS))

    def _write_submission_totals(self, ws: Worksheet, cols: Dict[str, str], count: int) -> None:
        totals_row = FIRST_DATA_ROW + count
        last_row = totals_row - 1

        label = ws.cell(row=totals_row, column=1, value="Total")
        label.font = self.bold_font

        for header in ("Investment", "Base Shares", "Bonus Shares", "Total Shares"):
            col = cols[header]
            value = f"=SUM({col}{FIRST_DATA_ROW}:{col}{last_row})" if count else 0
            ws[f"{col}{totals_row}"] = value

        for col_idx in range(1, len(SUBMISSION_COLUMNS) + 1):
            cell = ws.cell(row=totals_row, column=col_idx)
            cell.fill = self.totals_fill
            cell.border = self.top_border
            cell.font = self.bold_font
            _, _, number_format = SUBMISSION_COLUMNS[col_idx - 1]
            if number_format and cell.value is not None:
                cell.number_format = number_format

    def _render_summary(
        self,
        wb: Workbook,
        summary_df: pd.DataFrame,
        by_tier_df: pd.DataFrame,
    ) -> None:
        ws = wb.create_sheet("Summary")
        self._write_title(ws, f"{self.config.title} - Summary")

        summary = summary_df.iloc[0]
        for offset, (label, key, number_format) in enumerate(SUMMARY_LABELS):
            row = HEADER_ROW + offset
            ws.cell(row=row, column=1, value=label).font = self.bold_font
            cell = ws.cell(row=row, column=2, value=_cell_value(summary[key]))
            cell.number_format = number_format

        table_row = HEADER_ROW + len(SUMMARY_LABELS) + 1
        ws.cell(row=table_row, column=1, value="By Tier").font = self.title_font

        self._write_header(ws, [header for header, _, _ in BY_TIER_COLUMNS], row=table_row + 1)
        for offset, record in enumerate(by_tier_df.to_dict("records")):
            row = table_row + 2 + offset
            for col_idx, (_, key, number_format) in enumerate(BY_TIER_COLUMNS, start=1):
                cell = ws.cell(row=row, column=col_idx, value=_cell_value(record[key]))
                cell.border = self.thin_border
                if number_format:
                    cell.number_format = number_format

        self._set_widths(ws, len(BY_TIER_COLUMNS))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _write_title(self, ws: Worksheet, title: str) -> None:
        ws.cell(row=TITLE_ROW, column=1, value=title).font = self.title_font

    def _write_header(self, ws: Worksheet, headers: List[str], row: int = HEADER_ROW) -> None:
        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col_idx, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_align
            cell.border = self.thin_border

    @staticmethod
    def _set_widths(ws: Worksheet, count: int, width: int = 18) -> None:
        for idx in range(1, count + 1):
            ws.column_dimensions[get_column_letter(idx)].width = width
