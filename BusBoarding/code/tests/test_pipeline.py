import zipfile
from pathlib import Path

import pytest

from boarding.errors import BoardingError, InvalidBookingData, MissingColumn
from boarding.pipeline import compute_boarding, run_pipeline

import boarding_cli


def test_compute_boarding(sample_csv):
    result = compute_boarding(sample_csv)
    assert [b.id for b in result.order] == [2, 1, 3]
    assert [b.id for b in result.bookings] == [1, 2, 3]
    assert result.conflicts == {}
    assert result.off_grid == []
    assert result.grid[1][9].position == 1


def test_compute_boarding_flags_conflicts_and_off_grid(tmp_path):
    p = tmp_path / "b.csv"
    p.write_text('Booking_ID,Seats\n1,"A3 E1"\n2,A3\n', encoding="utf-8")
    result = compute_boarding(p)
    assert result.conflicts == {"A3": (1, 2)}
    assert result.off_grid == ["E1"]


def test_compute_boarding_strict_and_lenient(tmp_path):
    p = tmp_path / "b.csv"
    p.write_text("Booking_ID,Seats\n1,A1\nabc,A2\n3,C\n", encoding="utf-8")
    with pytest.raises(InvalidBookingData) as exc:
        compute_boarding(p)
    assert len(exc.value.errors) == 2
    assert [b.id for b in compute_boarding(p, skip_invalid=True).order] == [1]


def test_run_pipeline_writes_outputs(tmp_path, sample_csv):
    out = tmp_path / "out"
    result = run_pipeline(sample_csv, str(out))
    assert set(result.files) == {"csv", "xlsx", "png", "pdf"}
    for path in result.files.values():
        assert Path(path).is_file()
    assert Path(path).parent == out


def test_run_pipeline_without_pdf(tmp_path, sample_csv):
    result = run_pipeline(sample_csv, str(tmp_path), with_pdf=False)
    assert "pdf" not in result.files


def _run_cli(tmp_path, *extra):
    out = tmp_path / "dist"
    argv = ["--outdir", str(out), "--log-file", str(tmp_path / "run.log"), *extra]
    return boarding_cli.main(argv), out


def test_cli_writes_zip(tmp_path, sample_csv, capsys):
    code, out = _run_cli(tmp_path, "--csv", str(sample_csv))
    assert code == 0
    zip_path = out / "Boarding_Output.zip"
    assert zip_path.is_file()
    with zipfile.ZipFile(zip_path) as z:
        assert set(z.namelist()) == {
            "boarding_order.csv", "boarding_order.xlsx", "seat_map.png", "boarding_sheet.pdf",
        }
    assert str(zip_path) in capsys.readouterr().out
    assert "Booking 2" in (tmp_path / "run.log").read_text(encoding="utf-8")


def test_cli_no_pdf_and_custom_name(tmp_path, sample_csv):
    code, out = _run_cli(tmp_path, "--csv", str(sample_csv), "--no-pdf", "--name", "trip")
    assert code == 0
    with zipfile.ZipFile(out / "trip.zip") as z:
        assert "boarding_sheet.pdf" not in z.namelist()


def test_cli_missing_file(tmp_path):
    code, _ = _run_cli(tmp_path, "--csv", str(tmp_path / "nope.csv"))
    assert code == 2


def test_cli_empty_file(tmp_path):
    p = tmp_path / "empty.csv"
    p.write_text("", encoding="utf-8")
    code, _ = _run_cli(tmp_path, "--csv", str(p))
    assert code == 2


def test_cli_invalid_rows(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_text("Booking_ID,Seats\n1,A1\nx,B2\n", encoding="utf-8")
    code, out = _run_cli(tmp_path, "--csv", str(p))
    assert code == 3
    assert not out.exists()

    code, out = _run_cli(tmp_path, "--csv", str(p), "--skip-invalid")
    assert code == 0
    assert (out / "Boarding_Output.zip").is_file()


def test_cli_missing_column(tmp_path):
    p = tmp_path / "cols.csv"
    p.write_text("Booking,Seats\n1,A1\n", encoding="utf-8")
    code, _ = _run_cli(tmp_path, "--csv", str(p))
    assert code == 3


def test_compute_boarding_missing_column_is_a_boarding_error(tmp_path):
    p = tmp_path / "b.csv"
    p.write_text("Booking_ID,Seat_List\n1,A1\n", encoding="utf-8")
    with pytest.raises(MissingColumn) as exc:
        compute_boarding(p)
    assert isinstance(exc.value, BoardingError)
    assert exc.value.found == ["Booking_ID", "Seat_List"]
