# tests/test_palette.py
from loom.palette import COLORS, PALETTE, SCREEN_FILL, color_for, color_name


def test_palette_has_32_distinct_slots():
    assert len(COLORS) == 32
    assert sorted(PALETTE) == list(range(32))


def test_palette_order_is_fixed():
    assert color_for(0) == (0, 0, 0)
    assert color_for(1) == (255, 241, 232)
    assert color_for(12) == (41, 173, 255)
    assert color_for(31) == (255, 255, 255)
    names = [color_name(i) for i in range(32)]
    assert names[:4] == ["Black", "Warm White", "Dark Blue", "Dark Purple"]
    assert names[-2:] == ["Coral", "White"]


def test_startup_fill_is_light_blue():
    assert SCREEN_FILL == 12
    assert color_name(SCREEN_FILL) == "Light Blue"


def test_rgb_components_in_byte_range():
    for r, g, b in COLORS:
        assert 0 <= r <= 255 and 0 <= g <= 255 and 0 <= b <= 255
