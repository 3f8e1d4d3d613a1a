from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple
import logging

from boarding.bookings import Booking, normalize
from boarding.export import write_order_csv, write_order_xlsx
from boarding.ingest import read_booking_rows
from boarding.ordering import (
    ROW_LABELS,
    SEATS_PER_ROW,
    build_seat_map,
    derive_order,
    off_grid_labels,
    seat_grid,
)
from boarding.pdf_gen import write_boarding_pdf
from boarding.utils import save_seat_map_png

LOG = logging.getLogger(__name__)

ORDER_CSV = "boarding_order.csv"
ORDER_XLSX = "boarding_order.xlsx"
SEAT_MAP_PNG = "seat_map.png"
BOARDING_PDF = "boarding_sheet.pdf"


@dataclass
class BoardingResult:
    bookings: List[Booking]
    order: List[Booking]
    conflicts: Dict[str, Tuple[int, ...]] = field(default_factory=dict)
    off_grid: List[str] = field(default_factory=list)
    files: Dict[str, str] = field(default_factory=dict)

    @property
    def grid(self):
        return seat_grid(self.order)


def compute_boarding(source, skip_invalid: bool = False) -> BoardingResult:
    """Read a bookings CSV and derive its boarding order. Raises BoardingError subclasses."""
    rows = read_booking_rows(source)
    bookings = normalize(rows, skip_invalid=skip_invalid)
    order = derive_order(bookings)
    _, conflicts = build_seat_map(order)
    off_grid = off_grid_labels(order)
    if off_grid:
        LOG.warning("Seat labels outside the %dx%d grid: %s", len(ROW_LABELS), SEATS_PER_ROW, off_grid)
    LOG.info("Derived boarding order for %d booking(s)", len(order))
    return BoardingResult(bookings=bookings, order=order, conflicts=conflicts, off_grid=off_grid)


def write_outputs(order: List[Booking], output_root: str, with_pdf: bool = True,
                  title: str = "Bus Boarding Sequence") -> Dict[str, str]:
    out_dir = Path(output_root)
    out_dir.mkdir(parents=True, exist_ok=True)
    grid = seat_grid(order)

    files = {
        "csv": write_order_csv(order, out_dir / ORDER_CSV),
        "xlsx": write_order_xlsx(order, out_dir / ORDER_XLSX),
        "png": save_seat_map_png(grid, out_dir / SEAT_MAP_PNG),
    }
    if with_pdf:
        try:
            files["pdf"] = write_boarding_pdf(order, grid, out_dir / BOARDING_PDF, title=title)
        except Exception:
            LOG.exception("Failed to generate boarding sheet PDF")
            raise
    LOG.info("Boarding outputs written to %s", out_dir)
    return files


def run_pipeline(source, output_root: str, skip_invalid: bool = False, with_pdf: bool = True) -> BoardingResult:
    result = compute_boarding(source, skip_invalid=skip_invalid)
    result.files = write_outputs(result.order, output_root, with_pdf=with_pdf)
    return result
