# loom/palette.py
# The fixed 32-colour palette. Cell values index into it; only display adapters read it.

from __future__ import annotations
from typing import Dict, Tuple

RGB = Tuple[int, int, int]

PALETTE: Dict[int, Dict[str, object]] = {
    0: {"name": "Black", "rgb": (0, 0, 0)},
    1: {"name": "Warm White", "rgb": (255, 241, 232)},
    2: {"name": "Dark Blue", "rgb": (29, 43, 83)},
    3: {"name": "Dark Purple", "rgb": (126, 37, 83)},
    4: {"name": "Dark Green", "rgb": (0, 135, 81)},
    5: {"name": "Brown", "rgb": (171, 82, 54)},
    6: {"name": "Dark Gray", "rgb": (95, 87, 79)},
    7: {"name": "Light Gray", "rgb": (194, 195, 199)},
    8: {"name": "Red", "rgb": (255, 0, 77)},
    9: {"name": "Orange", "rgb": (255, 163, 0)},
    10: {"name": "Yellow", "rgb": (255, 236, 39)},
    11: {"name": "Green", "rgb": (0, 228, 54)},
    12: {"name": "Light Blue", "rgb": (41, 173, 255)},
    13: {"name": "Blue", "rgb": (129, 118, 171)},
    14: {"name": "Light Purple", "rgb": (255, 119, 168)},
    15: {"name": "Peach", "rgb": (255, 204, 170)},
    16: {"name": "Dark Brown", "rgb": (41, 24, 20)},
    17: {"name": "Navy", "rgb": (17, 29, 53)},
    18: {"name": "Deep Purple", "rgb": (66, 33, 54)},
    19: {"name": "Teal", "rgb": (18, 83, 89)},
    20: {"name": "Rust Red", "rgb": (116, 47, 41)},
    21: {"name": "Muted Purple", "rgb": (73, 51, 59)},
    22: {"name": "Warm Gray", "rgb": (162, 136, 121)},
    23: {"name": "Pale Lime", "rgb": (243, 239, 125)},
    24: {"name": "Dark Pink", "rgb": (190, 18, 80)},
    25: {"name": "Orange-Red", "rgb": (255, 108, 36)},
    26: {"name": "Lime Green", "rgb": (168, 231, 46)},
    27: {"name": "Emerald Green", "rgb": (0, 181, 67)},
    28: {"name": "Cobalt Blue", "rgb": (6, 90, 181)},
    29: {"name": "Dusky Purple", "rgb": (117, 70, 101)},
    30: {"name": "Coral", "rgb": (255, 110, 89)},
    31: {"name": "White", "rgb": (255, 255, 255)},
}

# Startup canvas colour (Light Blue) so an empty run is visibly not black.
SCREEN_FILL = 12

COLORS: Tuple[RGB, ...] = tuple(PALETTE[i]["rgb"] for i in range(32))  # type: ignore[misc]


def color_for(value: int) -> RGB:
    return COLORS[value % 32]


def color_name(value: int) -> str:
    return str(PALETTE[value % 32]["name"])
