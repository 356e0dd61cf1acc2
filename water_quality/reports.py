"""
Printable PDF summary of a loaded table.

Text only: the charts live in the window, this file is just something the
user can save or share next to the CSV.
"""
from __future__ import annotations

from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .csv_parser import Table
from .statistics import column_stats


def build_summary_pdf(table: Table, source_name: str, generated_at: Optional[datetime] = None) -> bytes:
    """Return the PDF bytes for a per-column statistics summary of `table`."""
    generated_at = generated_at or datetime.now()

    buffer = BytesIO()
    pdf_canvas = canvas.Canvas(buffer, pagesize=A4)
    _, height = A4

    y = height - 50

    pdf_canvas.setFont("Helvetica-Bold", 14)
    pdf_canvas.drawString(40, y, "Water Quality Summary Report")
    y -= 30

    pdf_canvas.setFont("Helvetica", 10)
    pdf_canvas.drawString(40, y, f"Source file: {source_name}")
    y -= 20
    pdf_canvas.drawString(40, y, f"Generated at: {generated_at:%Y-%m-%d %H:%M:%S}")
    y -= 15
    pdf_canvas.drawString(40, y, f"Rows: {len(table.rows)}    Columns: {len(table.headers)}")
    y -= 30

    pdf_canvas.setFont("Helvetica-Bold", 12)
    pdf_canvas.drawString(40, y, "Column Statistics")
    y -= 20

    numeric_columns = table.numeric_column_names()
    if not numeric_columns:
        pdf_canvas.setFont("Helvetica", 10)
        pdf_canvas.drawString(60, y, "No numeric columns found.")

    for column in numeric_columns:
        stats = column_stats(table, column)
        if stats is None:
            continue
        shown = stats.display()

        # Each column block takes four lines; start a new page when it would not fit.
        if y < 100:
            pdf_canvas.showPage()
            y = height - 50

        pdf_canvas.setFont("Helvetica-Bold", 10)
        pdf_canvas.drawString(60, y, column)
        y -= 15
        pdf_canvas.setFont("Helvetica", 10)
        pdf_canvas.drawString(
            80, y, f"Count: {shown['count']}    Min: {shown['min']}    Max: {shown['max']}"
        )
        y -= 15
        pdf_canvas.drawString(
            80, y, f"Mean: {shown['mean']}    Median: {shown['median']}    Std dev: {shown['stdev']}"
        )
        y -= 25

    pdf_canvas.showPage()
    pdf_canvas.save()
    return buffer.getvalue()


def write_summary_pdf(table: Table, path: Union[str, Path], source_name: str) -> Path:
    target = Path(path)
    target.write_bytes(build_summary_pdf(table, source_name))
    return target
