import io
import os
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from scubarent.config import settings
from scubarent.models.booking_equipment import BookingEquipment, AssignmentStatus
from scubarent.services.basket_service import get_basket


# ── Písma (česká diakritika) ─────────────────────────────────────────────────
_FONT_REGULAR = "Helvetica"
_FONT_BOLD = "Helvetica-Bold"

_FONT_PAIRS = [
    ("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    ("/usr/share/fonts/ttf-dejavu/DejaVuSans.ttf", "/usr/share/fonts/ttf-dejavu/DejaVuSans-Bold.ttf"),
]


def _init_export_fonts() -> None:
    global _FONT_REGULAR, _FONT_BOLD
    for reg_path, bold_path in _FONT_PAIRS:
        if not os.path.exists(reg_path):
            continue
        try:
            pdfmetrics.registerFont(TTFont("SRDejaVu", reg_path))
            _FONT_REGULAR = _FONT_BOLD = "SRDejaVu"
            if os.path.exists(bold_path):
                pdfmetrics.registerFont(TTFont("SRDejaVuBold", bold_path))
                _FONT_BOLD = "SRDejaVuBold"
            return
        except TTFError:
            continue


_init_export_fonts()

_STATUS_COLORS = {
    AssignmentStatus.pending: "#888888",
    AssignmentStatus.checked_out: "#0B5CAD",
    AssignmentStatus.returned: "#2E7D32",
    AssignmentStatus.lost: "#C00000",
}


def _fmt_date(value) -> str:
    return value.strftime("%d.%m.%Y") if value else "-"


def export_basket_pdf(db: Session, basket_id: int) -> bytes:
    """Předávací protokol košíku: hlavička, zákazník, termíny, seznam vybavení a podpisy."""
    basket = get_basket(db, basket_id)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Košík {basket.basket_no}")
    pw, ph = A4
    margin = 20 * mm
    content_w = pw - 2 * margin
    bottom_y = 40 * mm

    # ── Hlavička ──────────────────────────────────────────────────────────────
    c.setFillColor(colors.HexColor("#0B3D5C"))
    c.rect(0, ph - 32 * mm, pw, 32 * mm, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont(_FONT_BOLD, 18)
    c.drawString(margin, ph - 17 * mm, f"VÝDEJ VYBAVENÍ  {basket.basket_no}")
    c.setFont(_FONT_REGULAR, 10)
    c.drawString(margin, ph - 26 * mm, f"{settings.CENTER_NAME}  ·  Stav: {basket.status.value}")

    y = ph - 42 * mm
    y = _pdf_section_header(c, "Zákazník a termín", y, margin, pw)
    rows = [
        ("Zákazník:", basket.customer_name or "-"),
        ("Číslo bedny:", basket.center_bucket_no or "-"),
        ("Výdej:", _fmt_date(basket.checkout_date)),
        ("Očekávané vrácení:", _fmt_date(basket.expected_return_date)),
        ("Vráceno:", _fmt_date(basket.actual_return_date)),
        ("Poznámka:", basket.notes or "-"),
    ]
    y = _pdf_table(c, rows, y, margin, pw)

    # ── Vybavení ──────────────────────────────────────────────────────────────
    y -= 6 * mm
    y = _pdf_section_header(c, f"Vybavení  ({len(basket.assignments)} ks)", y, margin, pw)
    for i, a in enumerate(basket.assignments):
        if y - 7 * mm < bottom_y:
            c.showPage()
            y = ph - margin
        bg = colors.HexColor("#f8f8f8") if i % 2 == 0 else colors.white
        c.setFillColor(bg)
        c.rect(margin, y - 6 * mm, content_w, 7 * mm, fill=True, stroke=False)
        c.setFillColor(colors.black)
        c.setFont(_FONT_REGULAR, 9)
        c.drawString(margin + 2 * mm, y - 3 * mm, a.equipment_label[:55])
        c.drawString(margin + 100 * mm, y - 3 * mm, f"{_fmt_date(a.checkout_date)} - {_fmt_date(a.return_date)}")
        c.setFillColor(colors.HexColor(_STATUS_COLORS[a.assignment_status]))
        c.setFont(_FONT_BOLD, 9)
        c.drawRightString(pw - margin - 2 * mm, y - 3 * mm, a.assignment_status.value)
        y -= 7 * mm

    # ── Podpisové řádky ────────────────────────────────────────────────────────
    sig_y = min(y - 15 * mm, bottom_y)
    sig_w = (content_w - 20 * mm) / 2
    for x, label in ((margin, "Vydal:"), (pw - margin - sig_w, "Převzal zákazník:")):
        c.setFillColor(colors.black)
        c.setFont(_FONT_REGULAR, 10)
        c.drawString(x, sig_y, label)
        c.line(x, sig_y - 12 * mm, x + sig_w, sig_y - 12 * mm)
        c.setFont(_FONT_REGULAR, 8)
        c.setFillColor(colors.gray)
        c.drawString(x, sig_y - 15 * mm, "Jméno, podpis, datum")

    c.setFont(_FONT_REGULAR, 7)
    c.drawRightString(pw - margin, 6 * mm,
                      f"Vytištěno: {datetime.now(timezone.utc).strftime('%d.%m.%Y %H:%M')} UTC")
    c.save()
    return buf.getvalue()


def export_assignments_excel(db: Session, status: AssignmentStatus | None = None) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Výpůjčky"

    header_fill = PatternFill(start_color="0B3D5C", end_color="0B3D5C", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)
    headers = ["ID", "Košík", "Zákazník", "Zdroj", "Vybavení", "Výdej", "Vrácení (plán)",
               "Vráceno", "Stav", "Cena", "Poškození", "Náklady na opravu"]
    for col, h in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    query = select(BookingEquipment).order_by(BookingEquipment.id)
    if status is not None:
        query = query.where(BookingEquipment.assignment_status == status)
    for row_num, a in enumerate(db.scalars(query).all(), 2):
        ws.cell(row=row_num, column=1, value=a.id)
        ws.cell(row=row_num, column=2, value=a.basket_no or "")
        ws.cell(row=row_num, column=3, value=a.customer_name or "")
        ws.cell(row=row_num, column=4, value=a.equipment_source.value)
        ws.cell(row=row_num, column=5, value=a.equipment_label)
        ws.cell(row=row_num, column=6, value=_fmt_date(a.checkout_date))
        ws.cell(row=row_num, column=7, value=_fmt_date(a.return_date))
        ws.cell(row=row_num, column=8, value=_fmt_date(a.actual_return_date))
        ws.cell(row=row_num, column=9, value=a.assignment_status.value)
        ws.cell(row=row_num, column=10, value=float(a.price) if a.price is not None else None)
        ws.cell(row=row_num, column=11, value=a.damage_description or ("Ano" if a.damage_reported else ""))
        ws.cell(row=row_num, column=12, value=float(a.damage_cost) if a.damage_cost is not None else None)

    for i, w in enumerate([6, 16, 26, 14, 32, 12, 14, 12, 12, 10, 30, 16], 1):
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.freeze_panes = "A2"

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _pdf_section_header(c, title: str, y: float, margin: float, pw: float) -> float:
    c.setFillColor(colors.HexColor("#404040"))
    c.rect(margin, y - 6 * mm, pw - 2 * margin, 7 * mm, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont(_FONT_BOLD, 10)
    c.drawString(margin + 3 * mm, y - 3.5 * mm, title)
    c.setFillColor(colors.black)
    return y - 10 * mm


def _pdf_table(c, rows: list[tuple], y: float, margin: float, pw: float) -> float:
    col1_w = 50 * mm
    for i, (label, value) in enumerate(rows):
        bg = colors.HexColor("#f8f8f8") if i % 2 == 0 else colors.white
        c.setFillColor(bg)
        c.rect(margin, y - 6 * mm, pw - 2 * margin, 7 * mm, fill=True, stroke=False)
        c.setFillColor(colors.black)
        c.setFont(_FONT_BOLD, 9)
        c.drawString(margin + 2 * mm, y - 3 * mm, label)
        c.setFont(_FONT_REGULAR, 9)
        c.drawString(margin + col1_w, y - 3 * mm, str(value)[:70])
        y -= 7 * mm
    return y
