"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Small tabular layout primitive rendering to plain text or HTML.

A table is filled row by row, optionally starting with header rows:

    t = Table()
    t.head()
    t.row(["Lap", "Duration"])
    t.set_column_attributes([{"halign": "right"}, {"halign": "right"}])
    t.body()
    t.cell(1)
    t.cell("0:05:00")
    t.new_row()

Cell alignment falls back to the column attributes and then to left.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence

ALIGNMENTS = ("left", "right", "center")


@dataclass(frozen=True)
class Cell:
    text: str
    halign: Optional[str] = None


def _to_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _check_alignment(halign: Optional[str]) -> Optional[str]:
    if halign is not None and halign not in ALIGNMENTS:
        raise ValueError(f"Unsupported alignment {halign!r}")
    return halign


class Table:
    def __init__(self) -> None:
        self._head_rows: List[List[Cell]] = []
        self._body_rows: List[List[Cell]] = []
        self._section = self._body_rows
        self._current: List[Cell] = []
        self._column_alignments: List[Optional[str]] = []
        self._frame = True

    # ------------------------------------------------------------------
    # Building
    def enable_frame(self, enabled: bool) -> None:
        self._frame = enabled

    def head(self) -> None:
        self._flush()
        self._section = self._head_rows

    def body(self) -> None:
        self._flush()
        self._section = self._body_rows

    def cell(self, value: object, halign: Optional[str] = None) -> None:
        self._current.append(Cell(_to_text(value), _check_alignment(halign)))

    def new_row(self) -> None:
        self._section.append(self._current)
        self._current = []

    def row(self, cells: Iterable[object], halign: Optional[str] = None) -> None:
        for value in cells:
            self.cell(value, halign)
        self.new_row()

    def set_column_attributes(self, attributes: Sequence[Mapping[str, str]]) -> None:
        self._column_alignments = [_check_alignment(attr.get("halign")) for attr in attributes]

    @property
    def head_rows(self) -> List[List[Cell]]:
        return list(self._head_rows)

    @property
    def body_rows(self) -> List[List[Cell]]:
        rows = list(self._body_rows)
        if self._current and self._section is self._body_rows:
            rows.append(list(self._current))
        return rows

    def _flush(self) -> None:
        if self._current:
            self.new_row()

    def _alignment(self, cell: Cell, column: int) -> str:
        if cell.halign:
            return cell.halign
        if column < len(self._column_alignments) and self._column_alignments[column]:
            return self._column_alignments[column]  # type: ignore[return-value]
        return "left"

    # ------------------------------------------------------------------
    # Text output
    def to_text(self) -> str:
        rows = self.head_rows + self.body_rows
        if not rows:
            return ""
        columns = max(len(row) for row in rows)
        widths = [0] * columns
        for row in rows:
            for idx, cell in enumerate(row):
                widths[idx] = max(widths[idx], len(cell.text))

        lines: List[str] = []
        separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        if self._frame:
            lines.append(separator)
        for idx, row in enumerate(rows):
            lines.append(self._text_line(row, widths))
            if self._frame and idx == len(self._head_rows) - 1:
                lines.append(separator)
        if self._frame:
            lines.append(separator)
        return "\n".join(lines) + "\n"

    def _text_line(self, row: List[Cell], widths: List[int]) -> str:
        padded = []
        for idx, width in enumerate(widths):
            cell = row[idx] if idx < len(row) else Cell("")
            align = self._alignment(cell, idx)
            if align == "right":
                padded.append(cell.text.rjust(width))
            elif align == "center":
                padded.append(cell.text.center(width))
            else:
                padded.append(cell.text.ljust(width))
        if self._frame:
            return "| " + " | ".join(padded) + " |"
        return " ".join(padded).rstrip()

    def __str__(self) -> str:
        return self.to_text()

    # ------------------------------------------------------------------
    # HTML output
    def to_html(self) -> str:
        css = "ft_table framed" if self._frame else "ft_table"
        parts = [f'<table class="{css}">']
        if self._head_rows:
            parts.append("<thead>")
            parts.extend(self._html_row(row, "th") for row in self._head_rows)
            parts.append("</thead>")
        parts.append("<tbody>")
        parts.extend(self._html_row(row, "td") for row in self.body_rows)
        parts.append("</tbody></table>")
        return "".join(parts)

    def _html_row(self, row: List[Cell], tag: str) -> str:
        cells = []
        for idx, cell in enumerate(row):
            align = self._alignment(cell, idx)
            cells.append(
                f'<{tag} style="text-align: {align}">{html.escape(cell.text)}</{tag}>'
            )
        return "<tr>" + "".join(cells) + "</tr>"


class HtmlDocument:
    """Collects HTML fragments appended by report sections."""

    def __init__(self) -> None:
        self._fragments: List[str] = []

    def append(self, fragment: str) -> None:
        self._fragments.append(fragment)

    @property
    def fragments(self) -> List[str]:
        return list(self._fragments)

    def to_html(self) -> str:
        return "\n".join(self._fragments)

    def page(self, title: str) -> str:
        return (
            "<!DOCTYPE html>\n<html><head><meta charset=\"utf-8\">"
            f"<title>{html.escape(title)}</title>"
            f"<style>{PAGE_STYLE}</style></head>\n<body>\n"
            f"{self.to_html()}\n</body></html>\n"
        )

    def __str__(self) -> str:
        return self.to_html()


class ViewFrame:
    """Titled, width constrained frame around a table."""

    def __init__(
        self,
        frame_id: str,
        title: str,
        width: int,
        content: Table,
        hide_button: bool = False,
    ) -> None:
        self.frame_id = frame_id
        self.title = title
        self.width = width
        self.content = content
        self.hide_button = hide_button

    def to_html(self, doc: HtmlDocument) -> None:
        title = html.escape(self.title)
        inner = self.content.to_html()
        if self.hide_button:
            # Collapsible without scripting.
            body = (
                f'<details class="frame_content" open><summary class="frame_title">{title}</summary>'
                f"{inner}</details>"
            )
        else:
            body = f'<div class="frame_title">{title}</div><div class="frame_content">{inner}</div>'
        doc.append(
            f'<div class="widget_frame" id="{html.escape(self.frame_id)}" '
            f'style="width: {int(self.width)}px">{body}</div>'
        )


PAGE_STYLE = (
    "body{font-family:sans-serif;}"
    ".widget_frame{margin:8px auto;border:1px solid #d1d5db;border-radius:6px;padding:6px 10px;}"
    ".frame_title{font-weight:bold;margin-bottom:4px;}"
    ".ft_table{border-collapse:collapse;width:100%;}"
    ".ft_table.framed th,.ft_table.framed td{border:1px solid #e5e7eb;}"
    ".ft_table th,.ft_table td{padding:2px 6px;}"
)
