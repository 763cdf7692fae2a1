"""Overlay a QR image onto the ticket background template."""

import math
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from app.errors import CompositingError, ResourceMissingError

# Horizontal inset of the QR code from the right edge of the template
RIGHT_INSET = 150
PNG_COMPRESS_LEVEL = 6
# Template modes composited without conversion
CANVAS_MODES = ("RGB", "RGBA", "L", "LA")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def load_template(path) -> Image.Image:
    """Read and decode the background template.

    Raises ResourceMissingError when the file does not exist, and
    CompositingError when it exists but is not a readable image.
    """
    template_path = Path(path)
    if not template_path.is_file():
        raise ResourceMissingError(str(template_path))

    try:
        data = template_path.read_bytes()
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise CompositingError(f"Could not decode ticket template {template_path}: {e}") from e
    return image


def overlay_position(
    background_size: tuple[int, int], overlay_size: tuple[int, int]
) -> tuple[int, int]:
    """Top-left corner for the overlay: right side, vertically centred, clamped to 0."""
    bw, bh = background_size
    ow, oh = overlay_size
    x = _round_half_up(bw - ow - RIGHT_INSET)
    y = _round_half_up((bh - oh) / 2)
    return max(0, x), max(0, y)


def _working_canvas(background: Image.Image) -> Image.Image:
    # Palette and other exotic modes are widened; the channel layout of
    # ordinary templates is kept as is
    if background.mode in CANVAS_MODES:
        return background.copy()
    if background.mode.endswith("A") or "transparency" in background.info:
        return background.convert("RGBA")
    return background.convert("RGB")


def composite(background: Image.Image, overlay: Image.Image) -> bytes:
    """
    Paste ``overlay`` onto ``background`` and return the result as PNG bytes.

    Covered background pixels are replaced outright. If the overlay carries an
    alpha channel it is used as the paste mask, so transparent overlay pixels
    leave the background visible. The output keeps the template's channels:
    an RGB template gives an RGB PNG.
    """
    try:
        canvas = _working_canvas(background)
        position = overlay_position(canvas.size, overlay.size)

        if overlay.mode in ("RGBA", "LA", "PA") or "transparency" in overlay.info:
            layer = overlay.convert("RGBA")
            canvas.paste(layer.convert(canvas.mode), position, layer.getchannel("A"))
        else:
            canvas.paste(overlay.convert(canvas.mode), position)

        buffer = BytesIO()
        canvas.save(buffer, format="PNG", compress_level=PNG_COMPRESS_LEVEL)
    except (ValueError, OSError) as e:
        raise CompositingError(f"Could not composite ticket: {e}") from e

    return buffer.getvalue()
