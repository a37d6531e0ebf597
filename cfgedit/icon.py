from __future__ import annotations

from PIL import Image

# "CFG" glyph, 32x16; each row is drawn twice to fill a 32x32 icon.
ICON_GLYPH = (
    "00000000000000000000000000000000",
    "00111111100111111100111111111100",
    "00111111100111111100111111111100",
    "00111000000111000000111000000000",
    "00111000000111000000111000000000",
    "00111000000111000000111000000000",
    "00111000000111000000111000000000",
    "00111000000111111100111001111100",
    "00111000000111111100111001111100",
    "00111000000111000000111000011100",
    "00111000000111000000111000011100",
    "00111000000111000000111000011100",
    "00111000000111000000111000011100",
    "00111111100111000000111111111100",
    "00111111100111000000111111111100",
    "00000000000000000000000000000000",
)
ICON_SIZE = 32

def make_icon_image(rgb=(0, 0, 0)) -> Image.Image:
    """Opaque ``rgb`` where the glyph is set, fully transparent elsewhere."""
    img = Image.new("RGBA", (ICON_SIZE, ICON_SIZE), (0, 0, 0, 0))
    ink = tuple(rgb) + (255,)
    for j, line in enumerate(ICON_GLYPH):
        for i, ch in enumerate(line):
            if ch == "1":
                img.putpixel((i, j * 2), ink)
                img.putpixel((i, j * 2 + 1), ink)
    return img
