from __future__ import annotations

import logging
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..errors import ExportUnavailableError
from ..models.export import CellStyle, ExportCell, ExportDocument, ExportRow, ExportSection
from ..models.project import ProjectConfig
from ..models.results import AggregateResult, BreakdownRow
from .calculator import generate_breakdown
from .formatting import format_money


logger = logging.getLogger(__name__)

SUMMARY_TITLE = "PROJECT SUMMARY"
ROSTER_TITLE = "TEAM ROSTER"
BREAKDOWN_TITLE = "MONTHLY BREAKDOWN"

ROSTER_COLUMNS = [
    "Role",
    "Name",
    "Type",
    "Model",
    "Share Value",
    "Months Active",
    "Monthly Payout",
    "Total Payout",
]
BREAKDOWN_COLUMNS = [
    "Month",
    "Gross Revenue",
    "Team Costs",
    "Referral Fees",
    "Total Cost",
    "Net Income",
    "Cumulative Net",
]
COLUMN_WIDTHS = [20, 20, 15, 15, 15, 15, 18, 18]

GREEN = "008000"
RED = "FF0000"


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"project_estimate_{today.isoformat()}.xlsx"


def _header(columns: Sequence[str], style: CellStyle = CellStyle.HEADER) -> ExportRow:
    return ExportRow(cells=[ExportCell(value=column, style=style) for column in columns])


def _signed(amount: float, symbol: str) -> ExportCell:
    return ExportCell(value=format_money(amount, symbol), style=CellStyle.GAIN if amount >= 0 else CellStyle.LOSS)


class ExportFormatter:
    """Lays out an already computed estimate as a three-section document.

    Nothing is recomputed here: every figure comes from the aggregate and the
    breakdown handed in, so the export always matches what was displayed.
    """

    def __init__(self, currency_symbol: str = "$") -> None:
        self.currency_symbol = currency_symbol

    def format(
        self,
        aggregate: AggregateResult,
        config: ProjectConfig,
        breakdown: Optional[List[BreakdownRow]] = None,
        today: Optional[date] = None,
    ) -> ExportDocument:
        if breakdown is None:
            breakdown = generate_breakdown(aggregate)
        return ExportDocument(
            filename=export_filename(today),
            sections=[
                self._summary(aggregate, config),
                self._roster(aggregate),
                self._breakdown(breakdown),
            ],
            column_widths=list(COLUMN_WIDTHS),
        )

    def _money(self, amount: float, style: CellStyle = CellStyle.CURRENCY) -> ExportCell:
        return ExportCell(value=format_money(amount, self.currency_symbol), style=style)

    def _summary(self, aggregate: AggregateResult, config: ProjectConfig) -> ExportSection:
        def line(label: str, value: ExportCell) -> ExportRow:
            return ExportRow(cells=[ExportCell(value=label), value])

        rows = [
            line("Project Name", ExportCell(value=config.project_name)),
            line("Duration", ExportCell(value=f"{aggregate.project_duration} Months")),
            line("Pricing Model", ExportCell(value=config.pricing_model)),
            line("Monthly Revenue", self._money(aggregate.monthly_revenue)),
            line("Total Revenue", self._money(aggregate.total_revenue)),
            line("Total Cost", self._money(aggregate.total_cost, CellStyle.COST)),
            line("Net Value", _signed(aggregate.net_value, self.currency_symbol)),
        ]
        return ExportSection(
            title=SUMMARY_TITLE,
            header=_header(["Metric", "Value"], CellStyle.SUB_HEADER),
            rows=rows,
        )

    def _roster(self, aggregate: AggregateResult) -> ExportSection:
        rows = [
            ExportRow(
                cells=[
                    ExportCell(value=stats.role),
                    ExportCell(value=stats.name),
                    ExportCell(value=stats.employment_type),
                    ExportCell(value=stats.share_type),
                    ExportCell(value=stats.share_value),
                    ExportCell(value=stats.effective_duration),
                    self._money(stats.monthly_payout),
                    self._money(stats.total_payout),
                ]
            )
            for stats in aggregate.member_stats
        ]
        return ExportSection(title=ROSTER_TITLE, header=_header(ROSTER_COLUMNS), rows=rows)

    def _breakdown(self, breakdown: List[BreakdownRow]) -> ExportSection:
        rows = [
            ExportRow(
                cells=[
                    ExportCell(value=f"Month {row.month}"),
                    self._money(row.gross_revenue),
                    self._money(row.team_cost),
                    self._money(row.referral_cost),
                    self._money(row.total_cost),
                    _signed(row.net_income, self.currency_symbol),
                    self._money(row.cumulative_net),
                ]
            )
            for row in breakdown
        ]
        return ExportSection(title=BREAKDOWN_TITLE, header=_header(BREAKDOWN_COLUMNS), rows=rows)


def format_export(
    aggregate: AggregateResult,
    config: ProjectConfig,
    breakdown: Optional[List[BreakdownRow]] = None,
    today: Optional[date] = None,
    currency_symbol: str = "$",
) -> ExportDocument:
    return ExportFormatter(currency_symbol).format(aggregate, config, breakdown=breakdown, today=today)


# ── openpyxl rendering ───────────────────────────────────────────────────

_thin = Side(style="thin")
thin_border = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
align_right = Alignment(horizontal="right")


def _cell_style(font: Optional[Font] = None, fill: Optional[PatternFill] = None,
                alignment: Optional[Alignment] = None, border: Optional[Border] = thin_border) -> Dict[str, object]:
    return {"font": font, "fill": fill, "alignment": alignment, "border": border}


STYLES: Dict[CellStyle, Dict[str, object]] = {
    CellStyle.SECTION: _cell_style(font=Font(bold=True, size=14, color="366092"), border=None),
    CellStyle.HEADER: _cell_style(
        font=Font(bold=True, color="FFFFFF"),
        fill=PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid"),
        alignment=Alignment(horizontal="center"),
    ),
    CellStyle.SUB_HEADER: _cell_style(
        font=Font(bold=True),
        fill=PatternFill(start_color="DCE6F1", end_color="DCE6F1", fill_type="solid"),
    ),
    CellStyle.CELL: _cell_style(),
    CellStyle.CURRENCY: _cell_style(alignment=align_right),
    CellStyle.COST: _cell_style(font=Font(color=RED), alignment=align_right),
    CellStyle.GAIN: _cell_style(font=Font(bold=True, color=GREEN), alignment=align_right),
    CellStyle.LOSS: _cell_style(font=Font(bold=True, color=RED), alignment=align_right),
}


class WorkbookWriter:
    def build(self, document: ExportDocument) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = document.sheet_title

        for row_index, row in enumerate(document.layout(), start=1):
            for col_index, item in enumerate(row.cells, start=1):
                value = item.value
                if isinstance(value, str):
                    value = ILLEGAL_CHARACTERS_RE.sub("", value)
                cell = ws.cell(row=row_index, column=col_index, value=value)
                if isinstance(value, str) and value.startswith("="):
                    # Entered text, never a formula.
                    cell.data_type = "s"
                for attribute, style in STYLES[item.style].items():
                    if style is not None:
                        setattr(cell, attribute, style)

        for col_index, width in enumerate(document.column_widths, start=1):
            ws.column_dimensions[get_column_letter(col_index)].width = width
        return wb

    def to_bytes(self, document: ExportDocument) -> bytes:
        buffer = BytesIO()
        self.build(document).save(buffer)
        return buffer.getvalue()

    def save(self, document: ExportDocument, directory: Path) -> Path:
        target = Path(directory) / document.filename
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Same-day exports share a name; the newer file replaces the older one.
            self.build(document).save(target)
        except OSError as exc:
            logger.error("Failed to write export %s: %s", target, exc)
            raise ExportUnavailableError(f"Could not write {target.name}; try again in a moment") from exc
        logger.info("Wrote export %s", target)
        return target
