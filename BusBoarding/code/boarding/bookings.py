from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union
import logging
import re

from boarding.errors import (
    BoardingError,
    DuplicateBookingId,
    EmptySeatList,
    InvalidBookingData,
    InvalidBookingId,
    InvalidSeatLabel,
)

LOG = logging.getLogger(__name__)

SEAT_SPLIT_RE = re.compile(r"[\s,]+")
SEAT_NUMBER_RE = re.compile(r"[0-9]+")
BOOKING_ID_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RawBooking:
    """One input row as text, before any parsing."""
    booking_id_text: str
    seats_text: str
    row_number: Optional[int] = None


@dataclass(frozen=True)
class Booking:
    id: int
    seats: Tuple[str, ...]
    farthest_seat_index: int = field(init=False)

    def __post_init__(self):
        if not self.seats:
            raise EmptySeatList(booking_id=self.id)
        farthest = max(seat_index(s) for s in self.seats)
        object.__setattr__(self, "farthest_seat_index", farthest)


@dataclass(frozen=True)
class RowError:
    row_number: Optional[int]
    error: BoardingError


def seat_index(label: str) -> int:
    """Return the first run of digits in a seat label as an int ("B07" -> 7)."""
    m = SEAT_NUMBER_RE.search(label or "")
    if not m:
        raise InvalidSeatLabel(label)
    return int(m.group(0))


def split_seats(text) -> List[str]:
    if text is None:
        return []
    return [s for s in SEAT_SPLIT_RE.split(str(text)) if s]


def parse_booking_id(text, row_number=None) -> int:
    s = "" if text is None else str(text).strip()
    if not BOOKING_ID_RE.fullmatch(s):
        raise InvalidBookingId(s, row_number=row_number)
    return int(s)


def normalize_row(row: RawBooking) -> Booking:
    booking_id = parse_booking_id(row.booking_id_text, row.row_number)
    seats = split_seats(row.seats_text)
    if not seats:
        raise EmptySeatList(booking_id=booking_id, row_number=row.row_number)
    for label in seats:
        try:
            seat_index(label)
        except InvalidSeatLabel:
            raise InvalidSeatLabel(label, row_number=row.row_number, booking_id=booking_id) from None
    return Booking(id=booking_id, seats=tuple(seats))


def normalize_rows(rows: Sequence[RawBooking]) -> List[Union[Booking, RowError]]:
    results = []
    for idx, row in enumerate(rows, start=1):
        row_number = row.row_number if row.row_number is not None else idx
        try:
            results.append(normalize_row(row))
        except BoardingError as e:
            results.append(RowError(row_number=row_number, error=e))
    return results


def _check_unique_ids(bookings: Sequence[Booking], row_numbers: Sequence[int]):
    seen = {}
    for b, rn in zip(bookings, row_numbers):
        seen.setdefault(b.id, []).append(rn)
    for booking_id, rns in seen.items():
        if len(rns) > 1:
            raise DuplicateBookingId(booking_id, rns)


def normalize(rows: Sequence[RawBooking], skip_invalid: bool = False) -> List[Booking]:
    """
    Normalize every row into a Booking.

    In strict mode any bad row raises InvalidBookingData listing all row errors.
    With skip_invalid=True bad rows are logged and dropped. Duplicate booking
    ids are rejected in both modes.
    """
    results = normalize_rows(rows)
    errors = [r for r in results if isinstance(r, RowError)]
    if errors and not skip_invalid:
        raise InvalidBookingData(errors)
    for e in errors:
        LOG.warning("Skipping row %s: %s", e.row_number, e.error)

    bookings = []
    row_numbers = []
    for idx, r in enumerate(results, start=1):
        if isinstance(r, Booking):
            bookings.append(r)
            rn = rows[idx - 1].row_number
            row_numbers.append(rn if rn is not None else idx)
    _check_unique_ids(bookings, row_numbers)
    LOG.info("Normalized %d booking(s), skipped %d row(s)", len(bookings), len(errors))
    return bookings
