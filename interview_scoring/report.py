# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
ODS report.

The report contains three sheets:
    - Occurrences: one row per interview with the number of tokens that carry
      a category and the run count of every category (parents include their
      children).
    - Patterns: every category pattern per interview with its count.
    - Sequence: the categories of every interview in textual order.
"""

import re
from pathlib import Path
from typing import Any, Sequence, cast

from odfdo import Document
from odfdo.cell import Cell
from odfdo.config_elements import ConfigItem, ConfigItemMapEntry
from odfdo.element import Element
from odfdo.row import Row
from odfdo.style import Style
from odfdo.table import Table

from interview_scoring.analytics import (
    count_occurrences,
    count_tokens_with_category,
    extract_patterns,
    extract_sequence,
)
from interview_scoring.model import Project


_XML_ILLEGAL_CHARS_RE = re.compile(
    # XML 1.0 disallows most C0 control chars except TAB, LF, CR.
    r"[\x00-\x08\x0B\x0C\x0E-\x1F]"
    r"|[\uD800-\uDFFF]"
    r"|[\uFFFE\uFFFF]"
)

Cells = list[Any]


def _xml_safe_text(value: Any) -> str:
    """Strip characters lxml refuses to serialize."""

    if value is None:
        return ""
    return _XML_ILLEGAL_CHARS_RE.sub("", str(value))


def _style_key(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", name).strip("_") or "x"


def occurrence_rows(project: Project) -> tuple[list[str], list[Cells]]:
    """Header and rows of the Occurrences sheet."""

    interviews = project.sorted_interviews()
    occurrences = count_occurrences(interviews, project.categories)
    with_category = count_tokens_with_category(interviews)

    header = ["Participant", "Index", "Tokens with category"]
    header.extend(category.code for category in project.categories)

    rows: list[Cells] = []
    for interview in interviews:
        row: Cells = [interview.participant_id, interview.index, with_category[interview]]
        row.extend(occurrences[interview][category] for category in project.categories)
        rows.append(row)
    return header, rows


def pattern_rows(project: Project, min_length: int, max_length: int) -> tuple[list[str], list[Cells]]:
    """
    Header and rows of the Patterns sheet.

    Within an interview, patterns are ordered by descending count, then by
    length and codes.
    """

    interviews = project.sorted_interviews()
    patterns = extract_patterns(interviews, min_length, max_length)

    rows: list[Cells] = []
    for interview in interviews:
        entries = sorted(
            patterns[interview].items(),
            key=lambda item: (-item[1], len(item[0]), [c.code for c in item[0]]),
        )
        for pattern, count in entries:
            rows.append([
                interview.participant_id,
                interview.index,
                " ".join(c.code for c in pattern),
                len(pattern),
                count,
            ])
    return ["Participant", "Index", "Pattern", "Length", "Count"], rows


def sequence_rows(project: Project) -> tuple[list[str], list[Cells]]:
    """Header and rows of the Sequence sheet."""

    rows: list[Cells] = []
    for interview in project.sorted_interviews():
        for position, category in enumerate(extract_sequence(interview), start=1):
            rows.append([interview.participant_id, interview.index, position, category.code, category.name])
    return ["Participant", "Index", "Position", "Category", "Name"], rows


def _insert_automatic_style(doc: Document, style: Style | None) -> Style | None:
    if style is None:
        return None
    try:
        doc.insert_style(style, automatic=True)
        return style
    except Exception:  # noqa: BLE001
        return None


def _append_sheet(doc: Document, name: str, header: Sequence[str], rows: Sequence[Cells]) -> tuple[str, int, int]:
    """
    Add one sheet with a bold header row.

    Returns:
        Sheet name, number of columns and number of rows (header included).
    """

    print(f"Writing sheet: {name}")
    table = Table(name)

    try:
        header_style = cast(
            Style,
            Style("table-cell", name=f"hdr_{_style_key(name)}", area="text", bold=True),
        )
    except Exception:  # noqa: BLE001
        header_style = None
    header_style = _insert_automatic_style(doc, header_style)

    header_row = Row()
    for title in header:
        cell = Cell(text=_xml_safe_text(title))
        if header_style is not None:
            cell.style = header_style.name
        header_row.append_cell(cell)

    # Rows inside table-header-rows are repeated and frozen by most viewers.
    header_group = Element.from_tag("table:table-header-rows")
    header_group.append(header_row)
    table.append(header_group)

    for values in rows:
        row = Row()
        for value in values:
            if isinstance(value, int) and not isinstance(value, bool):
                row.append_cell(Cell(value=value))
            else:
                row.append_cell(Cell(text=_xml_safe_text(value)))
        table.append_row(row)

    doc.body.append(table)
    return (name, len(header), 1 + len(rows))


def _set_config_item(entry: Element, *, name: str, config_type: str, value: str | int | bool) -> None:
    for item in entry.get_elements("config:config-item"):
        if isinstance(item, ConfigItem) and item.name == name:
            item.config_type = config_type
            item.value = value
            return
    entry.append(ConfigItem(name=name, config_type=config_type, value=value))


def _freeze_header_rows(doc: Document) -> None:
    """Best-effort: freeze the first row of every sheet in LibreOffice's view settings."""

    try:
        table_names = [t.name for t in doc.body.tables if getattr(t, "name", None)]
        tables_map = doc.settings.get_element(
            '//config:config-item-set[@config:name="ooo:view-settings"]'
            '//config:config-item-map-named[@config:name="Tables"]'
        )
        if not table_names or tables_map is None:
            return

        template = tables_map.get_element("config:config-item-map-entry")
        if template is None:
            return
        template_entry = cast(ConfigItemMapEntry, template)

        for child in list(tables_map.children):
            tables_map.delete(child)

        for name in table_names:
            entry = cast(ConfigItemMapEntry, template_entry.clone)
            entry.name = name
            _set_config_item(entry, name="HorizontalSplitMode", config_type="short", value=0)
            _set_config_item(entry, name="HorizontalSplitPosition", config_type="int", value=0)
            _set_config_item(entry, name="VerticalSplitMode", config_type="short", value=2)
            _set_config_item(entry, name="VerticalSplitPosition", config_type="int", value=1)
            tables_map.append(entry)
    except Exception:  # noqa: BLE001
        return


def _col_letters(index_1_based: int) -> str:
    """Convert a 1-based column index to spreadsheet letters (A, ..., Z, AA, ...)."""

    n = max(1, index_1_based)
    out: list[str] = []
    while n:
        n, rem = divmod(n - 1, 26)
        out.append(chr(ord("A") + rem))
    return "".join(reversed(out))


def _enable_autofilter(doc: Document, sheet_ranges: list[tuple[str, int, int]]) -> None:
    """Add a database range with filter buttons per sheet, covering A1 to the last cell."""

    db_ranges = Element.from_tag("table:database-ranges")

    for sheet_name, ncols, nrows in sheet_ranges:
        quoted = "'" + sheet_name.replace("'", "''") + "'"
        db = Element.from_tag("table:database-range")
        db.set_attribute("table:name", f"db_{_style_key(sheet_name)}")
        db.set_attribute("table:target-range-address", f"{quoted}.A1:{_col_letters(ncols)}{max(1, nrows)}")
        db.set_attribute("table:display-filter-buttons", "true")
        db.set_attribute("table:contains-header", "true")
        db_ranges.append(db)

    doc.body.append(db_ranges)


def build_report(project: Project, *, min_length: int, max_length: int) -> Document:
    """
    Build the ODS report of a project.

    Args:
        project:
            The scored project.
        min_length:
            Shortest pattern length for the Patterns sheet.
        max_length:
            Longest pattern length for the Patterns sheet.

    Returns:
        The spreadsheet document, not yet saved.
    """

    doc = Document.new("spreadsheet")

    # odfdo creates a default empty sheet; the report holds only its own sheets.
    for table in list(doc.body.tables):
        doc.body.delete(table)

    sheet_ranges = [
        _append_sheet(doc, "Occurrences", *occurrence_rows(project)),
        _append_sheet(doc, "Patterns", *pattern_rows(project, min_length, max_length)),
        _append_sheet(doc, "Sequence", *sequence_rows(project)),
    ]

    _freeze_header_rows(doc)
    _enable_autofilter(doc, sheet_ranges)
    return doc


def write_report(project: Project, path: Path, *, min_length: int, max_length: int) -> None:
    """Build the report and save it to `path`."""

    doc = build_report(project, min_length=min_length, max_length=max_length)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(path)
