"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from PIL import Image, ImageDraw

from presets import Theme


def create_icon_image(theme: Theme) -> Image.Image:
    """Return a 64×64 RGBA image: one month bar over two week bars."""
    size = 64
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    gap = 4
    bar_h = (size - 3 * gap) // 2
    draw.rounded_rectangle((gap, gap, size - gap, gap + bar_h),
                           radius=6, fill=theme.month_fill)

    top = 2 * gap + bar_h
    half = (size - 3 * gap) // 2
    draw.rounded_rectangle((gap, top, gap + half, top + bar_h),
                           radius=6, fill=theme.week_fill)
    draw.rounded_rectangle((2 * gap + half, top, size - gap, top + bar_h),
                           radius=6, fill=theme.week_fill)
    return img
