"""
Capacity Planning - Report Export

Builds a PDF (ReportLab) and a DOCX (python-docx) with:
  1) Executive KPI summary
  2) Monthly resource statistics
  3) Maintenance schedule (next alerts)
  4) Appendix: daily averages

Usage in Streamlit:
    from utils_capacity_planning.report_capacity_planning import report_capacity_planning
    pdf_bytes, docx_bytes = report_capacity_planning(
        records,
        client_name="UEMS",
        period="Jan-Mar 2025",
        logo_path="logo.png",
    )
"""

from __future__ import annotations
import io, os, datetime as dt
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

# PDF (ReportLab)
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

# DOCX
from docx import Document
from docx.shared import Inches, Pt, RGBColor

from utils_capacity_planning.aggregation_capacity import daily_frame, monthly_frame
from utils_capacity_planning.maintenance_capacity import alerts_frame
from utils_capacity_planning.records_capacity import ResourceSample
from utils_capacity_planning.settings_capacity import NETWORK_DIVISOR, POWER_DIVISOR
from utils_capacity_planning.state_capacity import derive_views, require_records

BRAND = RGBColor(0x00, 0x4C, 0x99)
PAGE_W, PAGE_H = A4
M_L, M_R, M_T, M_B = 50, 50, 60, 50
CONTENT_W = PAGE_W - M_L - M_R

# =========================
#   Data Structures
# =========================

@dataclass
class ReportModel:
    title: str
    client_name: str = ""
    period: str = ""
    logo_path: Optional[str] = None
    kpis: Dict[str, str] = field(default_factory=dict)
    sections: Dict[str, pd.DataFrame] = field(default_factory=dict)

# =========================
#   KPI logic
# =========================

def _compute_overview_kpis(views) -> Dict[str, str]:
    s = views.summary
    return {
        "Total Records": f"{s.total_records:,}",
        "Date Range": f"{s.start_date} to {s.end_date}",
        "Distinct Dates": f"{len(views.groups):,}",
        "Average Daily Inputs": f"{s.daily_inputs:,.2f}",
        "Average CPU Usage": f"{s.avg_cpu:.2f}%",
        "Average Memory Usage": f"{s.avg_memory:.2f}%",
        "Average Network Traffic": f"{s.avg_network / NETWORK_DIVISOR:.2f} MB/s",
        "Average Power Consumption": f"{s.avg_power / POWER_DIVISOR:.2f} KW",
        "Upcoming Maintenance Tasks": f"{len(views.alerts)}",
    }

def build_report_model(
    records: Sequence[ResourceSample],
    client_name: str = "",
    period: str = "",
    logo_path: Optional[str] = None,
    title: str = "Database Capacity Planning: Executive Report",
) -> ReportModel:
    views = derive_views(require_records(records))

    monthly = monthly_frame(views.monthly).rename(columns={
        "month": "Month", "cpu": "CPU (%)", "memory": "Memory (%)",
        "network": "Network (MB/s)", "power": "Power (KW)",
        "days": "Days", "total_inputs": "Inputs",
    })
    alerts = alerts_frame(views.alerts).drop(columns=["Description"])
    daily = daily_frame(views.daily).drop(columns=["day"]).rename(columns={
        "date": "Date", "input_count": "Inputs", "cpu": "CPU (%)", "memory": "Memory (%)",
        "network": "Network (MB/s)", "power": "Power (KW)",
    })

    return ReportModel(
        title=title,
        client_name=client_name,
        period=period,
        logo_path=logo_path if (logo_path and os.path.exists(logo_path)) else None,
        kpis=_compute_overview_kpis(views),
        sections={
            "Monthly Resource Statistics": monthly,
            "Maintenance Schedule": alerts,
            "Appendix: Daily Averages": daily,
        },
    )

# =========================
#   PDF helpers
# =========================

def _footer(c: canvas.Canvas):
    c.setFont("Helvetica", 8)
    c.setFillColor(colors.grey)
    c.drawRightString(PAGE_W - M_R, 25, f"Page {c.getPageNumber()}")
    c.setFillColor(colors.black)

def _df_to_pdf_table(df: pd.DataFrame, zebra=True) -> Table:
    if df is None or df.empty:
        df = pd.DataFrame([["No data"]], columns=["Message"])

    data = [list(df.columns)] + df.astype(str).values.tolist()
    n_cols = len(df.columns)
    tbl = Table(data, colWidths=[CONTENT_W / n_cols] * n_cols, repeatRows=1)
    styles = [
        ('BACKGROUND', (0,0), (-1,0), colors.HexColor("#F2F2F2")),
        ('FONTNAME', (0,0), (-1,0), 'Helvetica-Bold'),
        ('FONTSIZE', (0,0), (-1,-1), 8),
        ('GRID', (0,0), (-1,-1), 0.25, colors.lightgrey),
        ('ALIGN', (0,0), (-1,0), 'CENTER'),
        ('VALIGN', (0,0), (-1,-1), 'TOP'),
    ]
    if zebra:
        styles.append(('ROWBACKGROUNDS', (0,1), (-1,-1), [colors.white, colors.HexColor("#FBFBFB")]))
    tbl.setStyle(TableStyle(styles))
    return tbl

def _draw_table_paginated(c: canvas.Canvas, df: pd.DataFrame, y: float) -> float:
    if df is None or df.empty:
        df = pd.DataFrame([["No data"]], columns=["Message"])

    rows = df.astype(str).values.tolist()
    header = list(df.columns)
    start = 0

    while start < len(rows):
        block = min(35, len(rows) - start)
        while block >= 1:
            tbl = _df_to_pdf_table(pd.DataFrame(rows[start:start + block], columns=header))
            _w, h = tbl.wrapOn(c, CONTENT_W, PAGE_H)
            if h <= y - M_B - 20:
                tbl.drawOn(c, M_L, y - h)
                y = y - h - 10
                start += block
                break
            block -= 1

        if start < len(rows):
            _footer(c)
            c.showPage()
            y = PAGE_H - M_T

    return y

def _heading(c: canvas.Canvas, text: str, y: float) -> float:
    if y < M_B + 80:
        _footer(c)
        c.showPage()
        y = PAGE_H - M_T
    c.setFont("Helvetica-Bold", 13)
    c.setFillColor(colors.HexColor("#004C99"))
    c.drawString(M_L, y, text)
    c.setFillColor(colors.black)
    return y - 20

# =========================
#   BUILDERS: PDF / DOCX
# =========================

def build_pdf(model: ReportModel) -> io.BytesIO:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(model.title)

    # Cover band
    c.setFillColor(colors.HexColor("#004C99"))
    c.rect(0, PAGE_H - 60, PAGE_W, 60, stroke=0, fill=1)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 16)
    c.drawString(M_L, PAGE_H - 38, model.title)
    c.setFillColor(colors.black)
    if model.logo_path:
        c.drawImage(ImageReader(model.logo_path), PAGE_W - M_R - 80, PAGE_H - 130, width=80, height=50,
                    preserveAspectRatio=True, mask="auto")

    c.setFont("Helvetica", 10)
    y = PAGE_H - 90
    for line in (f"Client: {model.client_name or '-'}", f"Period: {model.period or '-'}",
                 f"Generated: {dt.date.today().isoformat()}"):
        c.drawString(M_L, y, line)
        y -= 14
    y -= 10

    y = _heading(c, "1. Executive KPI Summary", y)
    y = _draw_table_paginated(c, pd.DataFrame(list(model.kpis.items()), columns=["KPI", "Value"]), y)

    for idx, (name, df) in enumerate(model.sections.items(), start=2):
        y = _heading(c, f"{idx}. {name}", y - 10)
        y = _draw_table_paginated(c, df, y)

    _footer(c)
    c.showPage()
    c.save()
    buf.seek(0)
    return buf

def _docx_table(doc, df: pd.DataFrame):
    if df is None or df.empty:
        doc.add_paragraph("No data available.")
        return
    table = doc.add_table(rows=1, cols=len(df.columns))
    table.style = "Light Grid Accent 1"
    hdr = table.rows[0].cells
    for i, col in enumerate(df.columns):
        hdr[i].text = str(col)
    for row in df.astype(str).values.tolist():
        cells = table.add_row().cells
        for i, value in enumerate(row):
            cells[i].text = value

def build_docx(model: ReportModel) -> io.BytesIO:
    doc = Document()
    style = doc.styles['Normal']
    style.font.name = 'Calibri'
    style.font.size = Pt(11)

    sect = doc.sections[0]
    sect.top_margin, sect.bottom_margin = Inches(0.75), Inches(0.75)
    sect.left_margin, sect.right_margin = Inches(0.75), Inches(0.75)

    def add_heading(text, level=1):
        p = doc.add_heading(level=level)
        run = p.add_run(text)
        run.font.color.rgb = BRAND
        return p

    add_heading(model.title, level=0)
    if model.logo_path:
        doc.add_picture(model.logo_path, width=Inches(1.5))
    doc.add_paragraph(f"Client: {model.client_name or '-'}")
    doc.add_paragraph(f"Period: {model.period or '-'}")
    doc.add_paragraph(f"Generated: {dt.date.today().isoformat()}")

    add_heading("1. Executive KPI Summary", level=1)
    _docx_table(doc, pd.DataFrame(list(model.kpis.items()), columns=["KPI", "Value"]))

    for idx, (name, df) in enumerate(model.sections.items(), start=2):
        add_heading(f"{idx}. {name}", level=1)
        _docx_table(doc, df)

    out = io.BytesIO()
    doc.save(out)
    out.seek(0)
    return out

# =========================
#   Public Callable
# =========================

def report_capacity_planning(
    records: Sequence[ResourceSample],
    client_name: str = "",
    period: str = "",
    logo_path: Optional[str] = None,
) -> Tuple[bytes, bytes]:
    """Build the executive report as (pdf_bytes, docx_bytes). Raises EmptyDatasetError without dated rows."""
    model = build_report_model(records, client_name=client_name, period=period, logo_path=logo_path)
    return build_pdf(model).getvalue(), build_docx(model).getvalue()
