import io
import logging
from pathlib import Path
from typing import List

import pandas as pd

from boarding.bookings import Booking

LOG = logging.getLogger(__name__)

ORDER_COLUMNS = ["Seq", "Booking_ID", "Seats", "Farthest_Seat"]


def order_frame(order: List[Booking]) -> pd.DataFrame:
    rows = []
    for seq, b in enumerate(order, start=1):
        rows.append({
            "Seq": seq,
            "Booking_ID": b.id,
            "Seats": ", ".join(b.seats),
            "Farthest_Seat": b.farthest_seat_index,
        })
    return pd.DataFrame(rows, columns=ORDER_COLUMNS)


def write_order_csv(order: List[Booking], out_path) -> str:
    out_path = Path(out_path)
    order_frame(order).to_csv(out_path, index=False)
    LOG.info("Wrote boarding order CSV to %s", out_path)
    return str(out_path)


def write_order_xlsx(order: List[Booking], out_path) -> str:
    out_path = Path(out_path)
    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        order_frame(order).to_excel(writer, sheet_name="boarding_order", index=False)
    LOG.info("Wrote boarding order workbook to %s", out_path)
    return str(out_path)


def order_xlsx_bytes(order: List[Booking]) -> bytes:
    bio = io.BytesIO()
    with pd.ExcelWriter(bio, engine="openpyxl") as writer:
        order_frame(order).to_excel(writer, sheet_name="boarding_order", index=False)
    bio.seek(0)
    return bio.read()
