# app.py (Streamlit page; logs to app.log)
import streamlit as st
import tempfile
import os
from pathlib import Path
import logging

# -------------------- Logging configuration --------------------
# write logs to console AND to app.log next to this file
BASE_DIR = Path(__file__).resolve().parent
LOG_FILE = BASE_DIR / "app.log"

# Remove existing handlers (useful when reloading in dev)
for h in logging.root.handlers[:]:
    logging.root.removeHandler(h)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(),                       # console
        logging.FileHandler(str(LOG_FILE), mode="w"),  # file (overwrites each run)
    ],
)

LOG = logging.getLogger(__name__)
LOG.info("Logging initialized. Writing logs to %s", LOG_FILE)
# --------------------------------------------------------------

from boarding.errors import BoardingError
from boarding.export import order_frame
from boarding.pipeline import compute_boarding, write_outputs
from boarding.ordering import ROW_LABELS, SEATS_PER_ROW, seat_grid
from boarding.state import BoardingState
from boarding.utils import create_final_zip, setup_output_dir
from boarding.view import seat_grid_html, upload_token


def build_downloads(order, output_name):
    """Write every export into a temp dir and return {kind: (filename, bytes)}."""
    tmpdir = tempfile.mkdtemp(prefix="boarding_")
    output_root = setup_output_dir(tmpdir)
    result_files = write_outputs(order, output_root)
    result_files["zip"] = create_final_zip(output_root, output_name)
    out = {}
    for kind, path in result_files.items():
        with open(path, "rb") as f:
            out[kind] = (os.path.basename(path), f.read())
    LOG.info("Prepared downloads in %s", tmpdir)
    return out


# --- Streamlit UI setup ---
st.set_page_config(page_title="Smart Bus Boarding System", layout="wide")

# --- Session state ---
_SS_DEFAULTS = {
    "boarding_state": None,
    "_upload_token": None,
    "upload_error": None,
    "upload_warnings": [],
    "downloads": None,
    "downloads_generation": None,
}
for _k, _v in _SS_DEFAULTS.items():
    if _k not in st.session_state:
        st.session_state[_k] = _v
if st.session_state.boarding_state is None:
    st.session_state.boarding_state = BoardingState()
state = st.session_state.boarding_state

st.title("Smart Bus Boarding System")
st.markdown("Upload a CSV to view the boarding order and seat mapping.")

uploaded = st.file_uploader("Bookings CSV (Booking_ID, Seats)", type=["csv"])
col1, col2 = st.columns(2)
with col1:
    skip_invalid = st.checkbox("Skip invalid rows instead of rejecting the file", value=False)
with col2:
    output_name = st.text_input("Download ZIP name (without .zip)", value="Boarding_Output")

if uploaded is not None:
    token = upload_token(uploaded, skip_invalid)
    if token != st.session_state._upload_token:
        generation = state.begin_upload()
        LOG.info("Processing upload %s (generation %d)", uploaded.name, generation)
        st.session_state._upload_token = token
        st.session_state.upload_error = None
        st.session_state.upload_warnings = []
        try:
            with st.spinner("Reading bookings..."):
                result = compute_boarding(uploaded.getvalue(), skip_invalid=skip_invalid)
        except BoardingError as e:
            LOG.warning("Rejected upload %s: %s", uploaded.name, e)
            st.session_state.upload_error = str(e)
            state.clear()
        else:
            state.commit(generation, result.bookings, result.order, source_name=uploaded.name)
            warnings = []
            for label, ids in result.conflicts.items():
                warnings.append(f"Seat {label} is claimed by bookings {', '.join(str(i) for i in ids)}.")
            if result.off_grid:
                warnings.append(
                    f"Seats outside the {len(ROW_LABELS)}x{SEATS_PER_ROW} layout are not drawn: {', '.join(result.off_grid)}"
                )
            st.session_state.upload_warnings = warnings

if st.session_state.upload_error:
    st.error(f"Could not process the uploaded file: {st.session_state.upload_error}")
for w in st.session_state.upload_warnings:
    st.warning(w)

order = state.order

if order:
    st.subheader("Boarding Order")
    st.dataframe(order_frame(order), hide_index=True, use_container_width=True)

st.subheader("Bus Seat Layout")
st.markdown(seat_grid_html(seat_grid(order)), unsafe_allow_html=True)
st.caption(f"Front of Bus ({ROW_LABELS[0]}1-{ROW_LABELS[-1]}1) | Rear at {ROW_LABELS[0]}{SEATS_PER_ROW}-{ROW_LABELS[-1]}{SEATS_PER_ROW}")

if order:
    st.subheader("Downloads")
    if st.session_state.downloads_generation != (state.generation, output_name):
        try:
            with st.spinner("Preparing downloads..."):
                st.session_state.downloads = build_downloads(order, output_name or "Boarding_Output")
            st.session_state.downloads_generation = (state.generation, output_name)
        except Exception as e:
            LOG.exception("Failed to prepare downloads")
            st.error(f"Failed to prepare downloads: {e}")
            st.session_state.downloads = None

    downloads = st.session_state.downloads or {}
    mimes = {
        "csv": ("Order CSV", "text/csv"),
        "xlsx": ("Order XLSX", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        "png": ("Seat map PNG", "image/png"),
        "pdf": ("Boarding sheet PDF", "application/pdf"),
        "zip": ("Everything (ZIP)", "application/zip"),
    }
    cols = st.columns(len(mimes))
    for col, (kind, (label, mime)) in zip(cols, mimes.items()):
        if kind in downloads:
            fname, data = downloads[kind]
            with col:
                st.download_button(label, data=data, file_name=fname, mime=mime, key=f"dl_{kind}")
