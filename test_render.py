import calendar
from datetime import date

from PIL import ImageColor

from icon_gen import create_icon_image
from presets import SIZES, THEMES
from render import Box, canvas_size, layout, render_timeline
from timeline_logic import segment

SMALL = SIZES["small"]
PURPLE = THEMES["Purple"]


def test_layout_crossing_month():
    months, weeks = segment(date(2024, 1, 29), date(2024, 2, 4))
    boxes = layout(months, weeks, PURPLE, SMALL)

    assert boxes == [
        Box(x=10, y=0, width=100, height=72, fill="#9747ff",
            text="Jan", text_fill="#FFFFFF", font_size=42),
        Box(x=130, y=0, width=140, height=72, fill="#9747ff",
            text="Feb", text_fill="#FFFFFF", font_size=42),
        Box(x=10, y=82, width=260, height=62, fill="#eadaff",
            text="01/29 - 02/04", text_fill="#000000", font_size=32),
    ]


def test_layout_slots_follow_day_counts():
    months, weeks = segment(date(2024, 5, 2), date(2024, 6, 10))
    boxes = layout(months, weeks, PURPLE, SIZES["medium"])
    week_boxes = boxes[len(months):]
    # Each slot starts where the previous one ended
    x = 0
    for w, box in zip(weeks, week_boxes):
        assert box.x == x + 15
        x += 80 * w.day_count
    assert boxes[0].text == "May"
    assert boxes[1].text == "June"


def test_canvas_size():
    months, weeks = segment(date(2024, 1, 1), date(2024, 1, 7))
    assert canvas_size(months, weeks, SMALL) == (280, 144)
    assert canvas_size([], [], SMALL) == (0, 0)


def test_render_timeline():
    image = render_timeline(date(2024, 1, 29), date(2024, 2, 4), PURPLE, SMALL)
    assert image.mode == "RGBA"
    assert image.size == (280, 144)
    # Left edge of the January box, clear of text and rounded corners
    assert image.getpixel((13, 36)) == ImageColor.getrgb("#9747ff") + (255,)
    assert image.getpixel((13, 82 + 31)) == ImageColor.getrgb("#eadaff") + (255,)
    # Gap between boxes stays transparent
    assert image.getpixel((2, 36))[3] == 0


def test_render_inverted_range_is_blank():
    image = render_timeline("2024-02-10", "2024-02-05", PURPLE, SMALL)
    assert image.size == (1, 1)


def test_icon_image():
    img = create_icon_image(THEMES["Green"])
    assert img.size == (64, 64)
    assert img.mode == "RGBA"
    assert img.getpixel((32, 12)) == ImageColor.getrgb("#36CE1D") + (255,)


def test_render_honours_week_start():
    # Mon 2024-01-01 .. Sun 2024-01-07: one week on Monday-start, 6 + 1 on Sunday-start
    week_row = 82 + 55  # below the label text
    monday = render_timeline(date(2024, 1, 1), date(2024, 1, 7), PURPLE, SMALL)
    sunday = render_timeline(date(2024, 1, 1), date(2024, 1, 7), PURPLE, SMALL,
                             first_weekday=calendar.SUNDAY)
    assert monday.getpixel((240, week_row)) == ImageColor.getrgb("#eadaff") + (255,)
    assert sunday.getpixel((240, week_row))[3] == 0
