#!/usr/bin/env python3
"""
Command-line version of the Streamlit bus boarding page.
Performs:
    1. Reads the bookings CSV (Booking_ID, Seats)
    2. Derives the boarding order (farthest seat first, then booking id)
    3. Writes order CSV/XLSX, seat map PNG and boarding sheet PDF
    4. Packs final ZIP into output directory
"""

import argparse
import tempfile
import shutil
from pathlib import Path
import logging
import sys

from boarding.errors import BoardingError, IngestError
from boarding.pipeline import compute_boarding, write_outputs
from boarding.utils import create_final_zip, setup_output_dir

# ----------------------------------------------------------
# Logging: console + file (boarding_cli.log next to this script)
# ----------------------------------------------------------
SCRIPT_DIR = Path(__file__).resolve().parent
LOG_FILE = SCRIPT_DIR / "boarding_cli.log"
logger = logging.getLogger("boarding_cli")


def setup_logging(log_file=LOG_FILE):
    ch_fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.INFO)
    ch.setFormatter(ch_fmt)

    # file handler (overwrite each run)
    fh = logging.FileHandler(str(log_file), mode="w", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(ch_fmt)

    # the script's own logger plus the boarding package loggers
    for lg in (logger, logging.getLogger("boarding")):
        lg.setLevel(logging.INFO)
        # remove existing handlers if any (helpful when reloading)
        if lg.hasHandlers():
            lg.handlers.clear()
        lg.addHandler(ch)
        lg.addHandler(fh)

    logger.info("Logger initialized. Writing logs to %s", log_file)


def _cleanup(tmpdir, keep):
    if keep:
        return
    try:
        shutil.rmtree(tmpdir)
        logger.info("Removed temporary directory.")
    except OSError:
        logger.warning("Failed to remove temporary directory: %s", tmpdir)


def build_parser():
    parser = argparse.ArgumentParser(description="Command-line bus boarding sequence generator (equivalent to Streamlit app).")
    parser.add_argument("--csv", required=True, help="Bookings CSV with Booking_ID and Seats columns")
    parser.add_argument("--outdir", required=True, help="Directory to store final ZIP")
    parser.add_argument("--name", default="Boarding_Output", help="Output ZIP base name")
    parser.add_argument("--skip-invalid", action="store_true", help="Drop invalid rows instead of failing")
    parser.add_argument("--no-pdf", action="store_true", help="Do not generate the boarding sheet PDF")
    parser.add_argument("--keep-tmp", action="store_true", help="Keep temporary working directory for debugging")
    parser.add_argument("--log-file", default=str(LOG_FILE), help="Where to write the run log")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file)

    csv_path = Path(args.csv)
    if not csv_path.is_file():
        logger.error("Bookings file not found: %s", csv_path)
        return 2

    try:
        result = compute_boarding(csv_path, skip_invalid=args.skip_invalid)
    except IngestError as e:
        logger.error("Could not read %s: %s", csv_path, e)
        return 2
    except BoardingError as e:
        logger.error("Invalid bookings in %s: %s", csv_path, e)
        return 3

    for label, ids in result.conflicts.items():
        logger.warning("Seat %s is claimed by bookings %s", label, ", ".join(str(i) for i in ids))

    logger.info("Boarding order:")
    for seq, b in enumerate(result.order, start=1):
        logger.info("  %d. Booking %d (seats %s)", seq, b.id, ", ".join(b.seats))

    tmpdir = Path(tempfile.mkdtemp(prefix="boarding_"))
    logger.info("Using temporary directory: %s", tmpdir)
    output_root = setup_output_dir(str(tmpdir))

    try:
        write_outputs(result.order, output_root, with_pdf=not args.no_pdf)
        final_zip = create_final_zip(output_root, args.name)
        dest = Path(args.outdir)
        dest.mkdir(parents=True, exist_ok=True)
        final_path = dest / Path(final_zip).name
        shutil.move(final_zip, final_path)
        logger.info("Success! Final ZIP created at: %s", final_path)
        print(final_path)
    except Exception as e:
        logger.exception("Failed to write outputs: %s", e)
        _cleanup(tmpdir, args.keep_tmp)
        return 5

    _cleanup(tmpdir, args.keep_tmp)
    return 0


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
