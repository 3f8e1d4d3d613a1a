import hashlib
import html

GRID_CSS = """
<style>
.bus-grid{ display:inline-flex; flex-direction:column; gap:6px; padding:12px;
  border-radius:10px; background:rgba(255,255,255,0.08); border:1px solid rgba(255,255,255,0.2); }
.bus-row{ display:flex; gap:6px; }
.seat{ width:42px; height:42px; display:flex; align-items:center; justify-content:center;
  border-radius:6px; font-size:12px; font-weight:bold; }
.seat.free{ background:rgba(255,255,255,0.08); color:#ccc; border:1px solid rgba(255,255,255,0.2); }
.seat.taken{ background:rgba(255,215,0,0.8); color:black; border:2px solid gold; }
.seat.conflict{ background:#dc3545; color:white; border:2px solid #a71d2a; }
</style>
"""


def seat_grid_html(grid):
    rows = []
    for row in grid:
        cells = []
        for cell in row:
            if cell.conflict:
                css, text = "conflict", "!"
            elif cell.occupied:
                css, text = "taken", str(cell.position)
            else:
                css, text = "free", cell.label
            cells.append(
                f'<div class="seat {css}" title="{html.escape(cell.title)}">{html.escape(text)}</div>'
            )
        rows.append('<div class="bus-row">' + "".join(cells) + "</div>")
    return GRID_CSS + '<div class="bus-grid">' + "".join(rows) + "</div>"


def upload_token(uploaded, skip_invalid: bool):
    """
    Identity of one file selection. A re-upload of an edited file with the
    same name and size still gets a new token.
    """
    file_id = getattr(uploaded, "file_id", None)
    digest = hashlib.sha256(uploaded.getvalue()).hexdigest()
    return (uploaded.name, file_id, digest, bool(skip_invalid))
