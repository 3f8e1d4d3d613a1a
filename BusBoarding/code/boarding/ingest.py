import io
import logging
from typing import List

import pandas as pd

from boarding.bookings import RawBooking
from boarding.errors import IngestError, MissingColumn

LOG = logging.getLogger(__name__)

BOOKING_ID_COL = "Booking_ID"
SEATS_COL = "Seats"
REQUIRED_COLUMNS = (BOOKING_ID_COL, SEATS_COL)


def find_best_col(df, name):
    cols_low = {str(c).strip().lower(): c for c in df.columns}
    return cols_low.get(name.strip().lower())


def read_bookings_frame(source) -> pd.DataFrame:
    """Read a bookings CSV (path, file-like or bytes) with every cell kept as text."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            # trailing commas must not turn the first column into the index
            index_col=False,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        raise IngestError("The uploaded file is empty") from None
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestError(f"Could not parse CSV: {e}") from e
    LOG.info("Read bookings CSV: %d row(s), columns %s", len(df), list(df.columns))
    return df


def rows_from_frame(df: pd.DataFrame) -> List[RawBooking]:
    id_col = find_best_col(df, BOOKING_ID_COL)
    if id_col is None:
        raise MissingColumn(BOOKING_ID_COL, list(df.columns))
    seats_col = find_best_col(df, SEATS_COL)
    if seats_col is None:
        raise MissingColumn(SEATS_COL, list(df.columns))

    rows = []
    for _, r in df.iterrows():
        id_text = str(r.get(id_col) or "").strip()
        seats_text = str(r.get(seats_col) or "")
        # separator-only lines such as ",,"
        if not id_text and not seats_text.strip():
            continue
        rows.append(RawBooking(booking_id_text=id_text, seats_text=seats_text, row_number=len(rows) + 1))
    return rows


def read_booking_rows(source) -> List[RawBooking]:
    return rows_from_frame(read_bookings_frame(source))
