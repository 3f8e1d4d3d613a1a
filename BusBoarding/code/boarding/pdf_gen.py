from pathlib import Path
from fpdf import FPDF
import logging
from typing import List

from boarding.bookings import Booking
from boarding.utils import render_seat_map_image

LOG = logging.getLogger(__name__)

A4_W = 210.0
A4_H = 297.0


class BoardingPDF(FPDF):
    def __init__(self, orientation='P', unit='mm', format='A4'):
        super().__init__(orientation=orientation, unit=unit, format=format)
        self.set_auto_page_break(False)


def _latin1(text) -> str:
    # core fonts only cover latin-1
    return str(text).encode("latin-1", "replace").decode("latin-1")


def _draw_page_header(pdf: BoardingPDF, title: str, booking_count: int, seat_count: int):
    margin = 10.0
    pdf.set_xy(margin, 12)
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 9, _latin1(title), ln=1, align="C")
    pdf.ln(1)
    pdf.set_font("Helvetica", size=10)
    pdf.cell(0, 6, f"Bookings: {booking_count} | Seats booked: {seat_count}", ln=1, align="C")
    y = pdf.get_y() + 2
    pdf.set_line_width(0.5)
    pdf.line(margin, y, A4_W - margin, y)
    pdf.ln(5)


def _fit_image_size_mm(size_px, max_w_mm: float, max_h_mm: float):
    w, h = size_px
    aspect = w / h if h != 0 else 1.0
    w_mm = max_w_mm
    h_mm = w_mm / aspect
    if h_mm > max_h_mm:
        h_mm = max_h_mm
        w_mm = h_mm * aspect
    return w_mm, h_mm


def _fit_text(pdf: BoardingPDF, text: str, width: float) -> str:
    text = _latin1(text)
    if pdf.get_string_width(text) <= width - 2.0:
        return text
    while text and pdf.get_string_width(text + "...") > width - 2.0:
        text = text[:-1]
    return text + "..."


def write_boarding_pdf(order: List[Booking], grid, out_path, title: str = "Bus Boarding Sequence") -> str:
    """
    Write a printable boarding sheet: header, seat map image, then the boarding
    order table (continued on as many pages as needed).
    """
    left_margin = 10.0
    top_margin = 15.0
    bottom_margin = 18.0
    table_w = A4_W - 2 * left_margin
    col_seq_w = table_w * 0.12
    col_id_w = table_w * 0.20
    col_seats_w = table_w * 0.68
    header_h = 8.0
    row_h = 7.5

    pdf = BoardingPDF()
    pdf.add_page()
    _draw_page_header(pdf, title, len(order), sum(len(b.seats) for b in order))

    img = render_seat_map_image(grid)
    img_w, img_h = _fit_image_size_mm(img.size, table_w, 70.0)
    img_x = left_margin + (table_w - img_w) / 2.0
    img_y = pdf.get_y()
    try:
        pdf.image(img, x=img_x, y=img_y, w=img_w, h=img_h)
    except Exception:
        LOG.exception("Failed to draw seat map image; leaving a blank box.")
        pdf.rect(img_x, img_y, img_w, img_h)
    pdf.set_xy(left_margin, img_y + img_h + 6.0)

    drawn = 0
    while True:
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(col_seq_w, header_h, "#", border=1, align='C')
        pdf.cell(col_id_w, header_h, "Booking ID", border=1, align='C')
        pdf.cell(col_seats_w, header_h, "Seats", border=1, align='C')
        pdf.ln(header_h)

        pdf.set_font("Helvetica", size=9)
        remaining_space = A4_H - pdf.get_y() - bottom_margin
        per_page_rows = max(1, int(remaining_space // row_h))
        rows_this_page = min(per_page_rows, len(order) - drawn)

        for _ in range(rows_this_page):
            b = order[drawn]
            pdf.cell(col_seq_w, row_h, str(drawn + 1), border=1, align='C')
            pdf.cell(col_id_w, row_h, str(b.id), border=1, align='C')
            pdf.cell(col_seats_w, row_h, _fit_text(pdf, ", ".join(b.seats), col_seats_w), border=1, align='L')
            pdf.ln(row_h)
            drawn += 1

        if drawn >= len(order):
            break
        pdf.add_page()
        pdf.set_xy(left_margin, top_margin)

    out_pdf = Path(out_path)
    out_pdf.parent.mkdir(parents=True, exist_ok=True)
    pdf.output(str(out_pdf))
    LOG.info("Generated PDF: %s", out_pdf)
    return str(out_pdf)
