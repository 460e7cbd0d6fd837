import io

import numpy as np
import pytest
from PIL import Image

try:
    import cairosvg  # noqa: F401

    HAVE_CAIRO = True
except (ImportError, OSError):
    HAVE_CAIRO = False

requires_cairo = pytest.mark.skipif(
    not HAVE_CAIRO, reason="cairosvg or the native cairo library is not available"
)

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def solid(width, height, colour, channels=3):
    """uint8 [H,W,C] filled with colour (alpha 255 when channels == 4)."""
    img = np.zeros((height, width, channels), dtype=np.uint8)
    img[..., :3] = colour[:3]
    if channels == 4:
        img[..., 3] = colour[3] if len(colour) > 3 else 255
    return img


def png_bytes(arr):
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


def svg_doc(size, fill="rgb(0,0,255)", extra_style=""):
    return (
        f'<svg width="{size}" height="{size}" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="{size}" height="{size}" style="fill:{fill};{extra_style}"/>'
        "</svg>"
    ).encode("utf-8")
