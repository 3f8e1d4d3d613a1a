import io

import pytest

from boarding.bookings import normalize
from boarding.errors import IngestError, MissingColumn
from boarding.ingest import read_booking_rows


def test_reads_rows_as_text(sample_csv_text):
    rows = read_booking_rows(io.StringIO(sample_csv_text))
    assert [(r.booking_id_text, r.seats_text, r.row_number) for r in rows] == [
        ("1", "A1 A5", 1),
        ("2", "B10", 2),
        ("3", "C5,C1", 3),
    ]


def test_reads_path_and_bytes(sample_csv, sample_csv_text):
    from_path = read_booking_rows(sample_csv)
    from_bytes = read_booking_rows(sample_csv_text.encode("utf-8"))
    assert from_path == from_bytes
    assert len(from_path) == 3


def test_blank_lines_are_ignored():
    text = "Booking_ID,Seats\n\n1,A1\n\n\n2,B2\n,\n"
    rows = read_booking_rows(io.StringIO(text))
    assert [r.booking_id_text for r in rows] == ["1", "2"]


def test_header_match_ignores_case_and_extra_columns():
    text = "passenger, booking_id ,SEATS\nAnn,7,\"D19 D20\"\n"
    rows = read_booking_rows(io.StringIO(text))
    assert len(rows) == 1
    assert rows[0].booking_id_text == "7"
    assert rows[0].seats_text == "D19 D20"


def test_leading_zeros_survive_as_text():
    rows = read_booking_rows(io.StringIO("Booking_ID,Seats\n007,A1\n"))
    assert rows[0].booking_id_text == "007"
    assert normalize(rows)[0].id == 7


def test_utf8_bom_header():
    data = "\ufeffBooking_ID,Seats\n1,A1\n".encode("utf-8")
    rows = read_booking_rows(data)
    assert rows[0].booking_id_text == "1"


def test_missing_column_is_named():
    with pytest.raises(MissingColumn) as exc:
        read_booking_rows(io.StringIO("Booking_ID,Seat_List\n1,A1\n"))
    assert exc.value.column == "Seats"
    assert "Seat_List" in str(exc.value)


def test_empty_file_raises_ingest_error():
    with pytest.raises(IngestError):
        read_booking_rows(io.StringIO(""))


def test_header_only_file_has_no_rows():
    assert read_booking_rows(io.StringIO("Booking_ID,Seats\n")) == []


def test_missing_booking_id_column_lists_found_columns():
    with pytest.raises(MissingColumn) as exc:
        read_booking_rows(io.StringIO("Ref,Seats\n1,A1\n"))
    assert exc.value.column == "Booking_ID"
    assert exc.value.found == ["Ref", "Seats"]


def test_trailing_commas_keep_columns_aligned():
    rows = read_booking_rows(io.StringIO("Booking_ID,Seats\n1,A1,\n2,B2,\n"))
    assert [(r.booking_id_text, r.seats_text) for r in rows] == [("1", "A1"), ("2", "B2")]
    assert [b.id for b in normalize(rows)] == [1, 2]


def test_row_numbers_skip_separator_only_lines():
    rows = read_booking_rows(io.StringIO("Booking_ID,Seats\n,\n1,A1\n,\n2,B2\n"))
    assert [r.row_number for r in rows] == [1, 2]
