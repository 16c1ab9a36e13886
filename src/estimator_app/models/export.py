from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class CellStyle(str, Enum):
    SECTION = "section"
    HEADER = "header"
    SUB_HEADER = "sub_header"
    CELL = "cell"
    CURRENCY = "currency"
    COST = "cost"
    GAIN = "gain"
    LOSS = "loss"


class ExportCell(BaseModel):
    value: Union[str, int, float] = ""
    style: CellStyle = CellStyle.CELL


class ExportRow(BaseModel):
    cells: List[ExportCell] = Field(default_factory=list)

    def values(self) -> List[Union[str, int, float]]:
        return [cell.value for cell in self.cells]


class ExportSection(BaseModel):
    title: str
    header: ExportRow
    rows: List[ExportRow] = Field(default_factory=list)


class ExportDocument(BaseModel):
    filename: str
    sheet_title: str = "Project Estimate"
    sections: List[ExportSection]
    column_widths: List[int] = Field(default_factory=list)

    def section(self, title: str) -> Optional[ExportSection]:
        return next((section for section in self.sections if section.title == title), None)

    def layout(self) -> List[ExportRow]:
        """Rows in sheet order: title, header and data per section, one blank row between sections."""
        rows: List[ExportRow] = []
        for position, section in enumerate(self.sections):
            if position:
                rows.append(ExportRow())
            rows.append(ExportRow(cells=[ExportCell(value=section.title, style=CellStyle.SECTION)]))
            rows.append(section.header)
            rows.extend(section.rows)
        return rows
