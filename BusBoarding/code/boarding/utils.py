# boarding/utils.py
import shutil
from pathlib import Path
from PIL import Image, ImageDraw, ImageFont
import logging

LOG = logging.getLogger(__name__)

CELL_PX = 42
GAP_PX = 6
MARGIN_PX = 16
CAPTION_PX = 22

BG_COLOR = (32, 58, 67)
FREE_FILL = (60, 84, 92)
FREE_TEXT = (204, 204, 204)
TAKEN_FILL = (255, 215, 0)
TAKEN_TEXT = (0, 0, 0)
CONFLICT_FILL = (220, 53, 69)
CONFLICT_TEXT = (255, 255, 255)
CAPTION = "Front of bus (seat 1)  |  Rear (seat 20)"


def _load_font():
    try:
        return ImageFont.load_default()
    except Exception:
        return None


def _draw_centered(draw, box, text, fill, font):
    x0, y0, x1, y1 = box
    bbox = draw.textbbox((0, 0), text, font=font)
    w = bbox[2] - bbox[0]
    h = bbox[3] - bbox[1]
    draw.text((x0 + (x1 - x0 - w) / 2, y0 + (y1 - y0 - h) / 2), text, fill=fill, font=font)


def render_seat_map_image(grid) -> Image.Image:
    """Draw the seat grid: occupied seats show their boarding number, free seats their label."""
    n_rows = len(grid)
    n_cols = max((len(r) for r in grid), default=0)
    width = MARGIN_PX * 2 + n_cols * CELL_PX + max(0, n_cols - 1) * GAP_PX
    height = MARGIN_PX * 2 + n_rows * CELL_PX + max(0, n_rows - 1) * GAP_PX + CAPTION_PX
    img = Image.new("RGB", (max(width, 1), max(height, 1)), color=BG_COLOR)
    draw = ImageDraw.Draw(img)
    fnt = _load_font()

    for r_idx, row in enumerate(grid):
        for c_idx, cell in enumerate(row):
            x = MARGIN_PX + c_idx * (CELL_PX + GAP_PX)
            y = MARGIN_PX + r_idx * (CELL_PX + GAP_PX)
            box = (x, y, x + CELL_PX, y + CELL_PX)
            if cell.conflict:
                fill, text_fill, text = CONFLICT_FILL, CONFLICT_TEXT, "!"
            elif cell.occupied:
                fill, text_fill, text = TAKEN_FILL, TAKEN_TEXT, str(cell.position)
            else:
                fill, text_fill, text = FREE_FILL, FREE_TEXT, cell.label
            draw.rounded_rectangle(box, radius=6, fill=fill)
            _draw_centered(draw, box, text, text_fill, fnt)

    caption_top = height - MARGIN_PX - CAPTION_PX
    _draw_centered(draw, (0, caption_top, width, caption_top + CAPTION_PX), CAPTION, FREE_TEXT, fnt)
    return img


def save_seat_map_png(grid, out_path) -> str:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    render_seat_map_image(grid).save(out_path, format="PNG")
    LOG.info("Saved seat map image to %s", out_path)
    return str(out_path)


def setup_output_dir(tmpdir: str) -> str:
    out = Path(tmpdir) / "Output_Zip"
    out.mkdir(parents=True, exist_ok=True)
    return str(out)


def create_final_zip(output_root: str, output_name: str) -> str:
    out_root = Path(output_root)
    out_zip_path = out_root.parent / f"{output_name}.zip"
    shutil.make_archive(str(out_zip_path.with_suffix("")), 'zip', str(out_root))
    return str(out_zip_path)
