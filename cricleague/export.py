"""Admin dashboard counts and CSV / Excel / PDF exports."""

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional
from xml.sax.saxutils import escape

import openpyxl
import polars as pl
from openpyxl.styles import Font
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .constants import STANDINGS_CSV_HEADERS
from .models import StandingsRow
from .store import DocumentStore

logger = logging.getLogger('cricleague.export')

# Dashboard label -> collection
DASHBOARD_COLLECTIONS = {
    'users': 'users',
    'teams': 'teams',
    'players': 'players',
    'trials': 'sessions',
}


def dashboard_counts(store: DocumentStore) -> dict[str, int]:
    """Document counts shown on the admin dashboard."""
    return {label: store.count(collection) for label, collection in DASHBOARD_COLLECTIONS.items()}


def collection_rows(store: DocumentStore, collection: str) -> list[dict[str, Any]]:
    """Documents flattened to rows with their id as the first column."""
    return [{'id': doc_id, **doc} for doc_id, doc in store.all(collection).items()]


def _columns(rows: Sequence[Mapping[str, Any]], fields: Optional[Sequence[str]]) -> list[str]:
    return list(fields) if fields else list(rows[0].keys())


def _text(value: Any) -> Optional[str]:
    """Cell text for CSV and PDF output; None and '' both mean an empty cell."""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_csv(rows: Sequence[Mapping[str, Any]], fields: Optional[Sequence[str]] = None) -> str:
    """
    Render rows as CSV text.

    Quoting follows RFC 4180 (polars ``write_csv``): fields containing a
    comma, quote or line break are quoted and quotes are doubled.

    Args:
        rows: Row dicts
        fields: Column order (default: keys of the first row)

    Returns:
        CSV text; just the header when there are no rows but ``fields`` is
        given, otherwise an empty string for no rows
    """
    if not rows and not fields:
        return ''

    keys = _columns(rows, fields)
    frame = pl.DataFrame(
        {key: [_text(row.get(key)) for row in rows] for key in keys},
        schema={key: pl.Utf8 for key in keys},
    )
    return frame.write_csv()


def standings_to_csv(rows: Sequence[StandingsRow]) -> str:
    """Leaderboard CSV, one line per team in table order (blank NRR when absent)."""
    return to_csv(standings_table_rows(rows), STANDINGS_CSV_HEADERS)


def write_csv(path: str | Path, text: str) -> Path:
    """Write CSV text to a file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    logger.debug(f'Wrote CSV: {path}')
    return path


def _xlsx_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def write_xlsx(
    path: str | Path,
    rows: Sequence[Mapping[str, Any]],
    title: str,
    fields: Optional[Sequence[str]] = None,
) -> Path:
    """
    Export rows to an Excel workbook with a bold header row.

    Raises:
        ValueError: If there are no rows to export
    """
    if not rows:
        raise ValueError(f'No rows to export for {title}')

    keys = _columns(rows, fields)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title[:31]  # Excel sheet name limit

    ws.append(keys)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append([_xlsx_value(row.get(k)) for k in keys])

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    wb.close()
    logger.debug(f'Wrote {len(rows)} rows to {path}')
    return path


def standings_table_rows(rows: Sequence[StandingsRow]) -> list[dict[str, Any]]:
    """Standings as export rows (same columns as the leaderboard CSV)."""
    return [
        {
            'rank': rank,
            'teamId': row.team_id,
            'team': row.name,
            'played': row.played,
            'won': row.won,
            'drawn': row.drawn,
            'lost': row.lost,
            'points': row.points,
            'nrr': row.nrr,
        }
        for rank, row in enumerate(rows, 1)
    ]


def write_pdf(
    path: str | Path,
    rows: Sequence[Mapping[str, Any]],
    title: str,
    fields: Optional[Sequence[str]] = None,
) -> Path:
    """
    Export rows to a landscape A4 PDF: the title, then one table with a
    shaded header row that repeats on every page.

    Raises:
        ValueError: If there are no rows to export
    """
    if not rows:
        raise ValueError(f'No rows to export for {title}')

    keys = _columns(rows, fields)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(path),
        pagesize=landscape(A4),
        title=title,
        leftMargin=20,
        rightMargin=20,
        topMargin=20,
        bottomMargin=20,
    )
    styles = getSampleStyleSheet()
    cell = ParagraphStyle(name='Cell', parent=styles['Normal'], fontSize=8, leading=10)
    header = ParagraphStyle(name='HeaderCell', parent=cell, fontName='Helvetica-Bold')

    data = [[Paragraph(escape(key), header) for key in keys]]
    for row in rows:
        data.append([Paragraph(escape(_text(row.get(key)) or ''), cell) for key in keys])

    table = Table(data, colWidths=[doc.width / len(keys)] * len(keys), repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))

    doc.build([Paragraph(escape(title), styles['Heading2']), Spacer(1, 8), table])
    logger.debug(f'Wrote {len(rows)} rows to {path}')
    return path
