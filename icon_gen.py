"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

ICON_SIZE = 64
BAND_COLOR = "#0078D4"
BAND_HEIGHT = 16


def _fit_font(draw: ImageDraw.ImageDraw, text: str, box_w: int, box_h: int):
    """Return the largest bold font for which ``text`` fits the box."""
    font_size = 120
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("segoeuib.ttf", font_size)
        except OSError:
            try:
                font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
            except OSError:
                return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= box_w and bbox[3] - bbox[1] <= box_h:
            break
        font_size -= 1
    return font


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA tear-off calendar page showing the day of the month."""
    today = today or date.today()
    size = ICON_SIZE
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)

    # Binding band across the top, like a desk calendar
    draw.rectangle((0, 0, size - 1, BAND_HEIGHT - 1), fill=BAND_COLOR)

    text = str(today.day)
    body_h = size - BAND_HEIGHT
    font = _fit_font(draw, text, size, body_h)

    # Centre the actual visible pixels (compensate for font metric offsets)
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = BAND_HEIGHT + (body_h - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
