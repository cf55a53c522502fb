"""Lay out and draw the timeline (PIL Image, in-memory)."""

from __future__ import annotations

import calendar
import functools
import logging
from dataclasses import dataclass
from datetime import date

from PIL import Image, ImageDraw, ImageFont

from presets import Size, Theme, month_label
from timeline_logic import MonthSegment, WeekSegment, segment

logger = logging.getLogger(__name__)

CORNER_RADIUS = 10
MONTH_TEXT_FILL = "#FFFFFF"
WEEK_TEXT_FILL = "#000000"


@dataclass(frozen=True)
class Box:
    x: int
    y: int
    width: int
    height: int
    fill: str
    text: str
    text_fill: str
    font_size: int


def _row_height(font_size: int, size: Size) -> int:
    return font_size + 2 * size.padding


def canvas_size(
    months: list[MonthSegment], weeks: list[WeekSegment], size: Size,
) -> tuple[int, int]:
    """Return the (width, height) in pixels needed for the timeline."""
    days = sum(w.day_count for w in weeks)
    if days == 0:
        return 0, 0
    height = (_row_height(size.font_size_month, size) + size.spacing
              + _row_height(size.font_size_week, size))
    return size.day_width * days, height


def layout(
    months: list[MonthSegment],
    weeks: list[WeekSegment],
    theme: Theme,
    size: Size,
) -> list[Box]:
    """Return one box per month (top row) and per week (bottom row).

    Each segment owns a slot ``day_width * day_count`` wide; the coloured
    box sits inside it with ``spacing`` on both sides.
    """
    boxes: list[Box] = []

    def _row(items, y: int, height: int, fill: str, text_fill: str,
             font_size: int, text_of) -> None:
        x = 0
        for item in items:
            slot = size.day_width * item.day_count
            boxes.append(Box(
                x=x + size.spacing,
                y=y,
                width=max(1, slot - 2 * size.spacing),
                height=height,
                fill=fill,
                text=text_of(item),
                text_fill=text_fill,
                font_size=font_size,
            ))
            x += slot

    month_h = _row_height(size.font_size_month, size)
    week_h = _row_height(size.font_size_week, size)
    _row(months, 0, month_h, theme.month_fill, MONTH_TEXT_FILL,
         size.font_size_month, month_label)
    _row(weeks, month_h + size.spacing, week_h, theme.week_fill, WEEK_TEXT_FILL,
         size.font_size_week, lambda w: f"{w.start_label} - {w.end_label}")
    return boxes


@functools.lru_cache(maxsize=16)
def _load_font(font_size: int) -> ImageFont.ImageFont:
    for name in ("Inter-Medium.ttf", "DejaVuSans.ttf", "arial.ttf"):
        try:
            return ImageFont.truetype(name, font_size)
        except OSError:
            continue
    logger.debug("No TrueType font found, using Pillow's default")
    return ImageFont.load_default(size=font_size)


def draw_boxes(image: Image.Image, boxes: list[Box]) -> None:
    draw = ImageDraw.Draw(image)
    for box in boxes:
        draw.rounded_rectangle(
            (box.x, box.y, box.x + box.width - 1, box.y + box.height - 1),
            radius=CORNER_RADIUS, fill=box.fill,
        )
        font = _load_font(box.font_size)
        # Centre the visible pixels (compensate for font metric offsets)
        bbox = draw.textbbox((0, 0), box.text, font=font)
        tx = box.x + (box.width - (bbox[2] - bbox[0])) / 2 - bbox[0]
        ty = box.y + (box.height - (bbox[3] - bbox[1])) / 2 - bbox[1]
        draw.text((tx, ty), box.text, fill=box.text_fill, font=font)


def render_timeline(
    start: date | str,
    end: date | str,
    theme: Theme,
    size: Size,
    first_weekday: int = calendar.MONDAY,
) -> Image.Image:
    """Return an RGBA image of the timeline for the inclusive range.

    Weeks start on Monday unless *first_weekday* says otherwise; pass
    ``calendar.SUNDAY`` for Sunday-start weeks.
    """
    months, weeks = segment(start, end, first_weekday)
    width, height = canvas_size(months, weeks, size)
    if width == 0:
        return Image.new("RGBA", (1, 1), (0, 0, 0, 0))
    image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw_boxes(image, layout(months, weeks, theme, size))
    return image


def export_png(image: Image.Image, path: str) -> None:
    image.save(path, format="PNG")
    logger.info("Wrote %s (%dx%d)", path, image.width, image.height)
