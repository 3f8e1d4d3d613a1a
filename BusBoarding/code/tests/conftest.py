import pytest

from boarding.bookings import Booking

SAMPLE_CSV = 'Booking_ID,Seats\n1,"A1 A5"\n2,B10\n3,"C5,C1"\n'


@pytest.fixture
def sample_csv_text():
    return SAMPLE_CSV


@pytest.fixture
def sample_csv(tmp_path):
    p = tmp_path / "bookings.csv"
    p.write_text(SAMPLE_CSV, encoding="utf-8")
    return p


@pytest.fixture
def sample_bookings():
    return [
        Booking(id=1, seats=("A1", "A5")),
        Booking(id=2, seats=("B10",)),
        Booking(id=3, seats=("C5", "C1")),
    ]
