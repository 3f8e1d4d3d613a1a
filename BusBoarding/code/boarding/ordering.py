"""
Boarding order and seat lookup.

Bookings whose farthest seat is closest to the rear board first; bookings that
share a farthest seat board in booking id order. The seat grid is fixed at four
rows (A-D) of twenty seats, seat 1 at the front door.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from boarding.bookings import Booking

LOG = logging.getLogger(__name__)

ROW_LABELS = ("A", "B", "C", "D")
SEATS_PER_ROW = 20


@dataclass(frozen=True)
class SeatAssignment:
    label: str
    booking_id: int
    position: int


@dataclass(frozen=True)
class SeatCell:
    label: str
    booking_id: Optional[int] = None
    position: Optional[int] = None
    conflict: Tuple[int, ...] = ()

    @property
    def occupied(self) -> bool:
        return self.position is not None

    @property
    def title(self) -> str:
        if self.conflict:
            ids = ", ".join(str(i) for i in self.conflict)
            return f"Seat {self.label} - claimed by bookings {ids}"
        if self.occupied:
            return f"Seat {self.label} - Booking {self.booking_id} (Boarding #{self.position})"
        return f"Seat {self.label} - Available"


def boarding_key(booking: Booking):
    return (-booking.farthest_seat_index, booking.id)


def derive_order(bookings: Iterable[Booking]) -> List[Booking]:
    return sorted(bookings, key=boarding_key)


def position_of(booking_id: int, order: List[Booking]) -> Optional[int]:
    """1-based position of booking_id in order, or None when it is not there."""
    for i, b in enumerate(order, start=1):
        if b.id == booking_id:
            return i
    return None


def grid_labels() -> List[List[str]]:
    return [[f"{row}{n}" for n in range(1, SEATS_PER_ROW + 1)] for row in ROW_LABELS]


def build_seat_map(order: List[Booking]) -> Tuple[Dict[str, SeatAssignment], Dict[str, Tuple[int, ...]]]:
    """
    Map every seat label in order to its booking and boarding position.

    A label claimed by more than one booking is left out of the map and
    returned in the conflicts dict with the claiming ids in boarding order.
    """
    claims = {}
    for pos, b in enumerate(order, start=1):
        for label in b.seats:
            owners = claims.setdefault(label, [])
            if not any(bid == b.id for bid, _ in owners):
                owners.append((b.id, pos))

    seat_map = {}
    conflicts = {}
    for label, owners in claims.items():
        if len(owners) > 1:
            conflicts[label] = tuple(bid for bid, _ in owners)
            continue
        bid, pos = owners[0]
        seat_map[label] = SeatAssignment(label=label, booking_id=bid, position=pos)
    if conflicts:
        LOG.warning("Seats claimed by more than one booking: %s", conflicts)
    return seat_map, conflicts


def seat_grid(order: List[Booking]) -> List[List[SeatCell]]:
    seat_map, conflicts = build_seat_map(order)
    grid = []
    for row in grid_labels():
        cells = []
        for label in row:
            if label in conflicts:
                cells.append(SeatCell(label=label, conflict=conflicts[label]))
            elif label in seat_map:
                a = seat_map[label]
                cells.append(SeatCell(label=label, booking_id=a.booking_id, position=a.position))
            else:
                cells.append(SeatCell(label=label))
        grid.append(cells)
    return grid


def off_grid_labels(order: List[Booking]) -> List[str]:
    """Seat labels present in the order that the fixed grid cannot show."""
    on_grid = {label for row in grid_labels() for label in row}
    out = []
    for b in order:
        for label in b.seats:
            if label not in on_grid and label not in out:
                out.append(label)
    return out
