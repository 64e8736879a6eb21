"""Grid data model, grid size limits and color validation"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 100
DEFAULT_GRID_SIZE = 64

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")

CSS_NAMED_COLORS = frozenset("""
aliceblue antiquewhite aqua aquamarine azure beige bisque black blanchedalmond
blue blueviolet brown burlywood cadetblue chartreuse chocolate coral
cornflowerblue cornsilk crimson cyan darkblue darkcyan darkgoldenrod darkgray
darkgreen darkgrey darkkhaki darkmagenta darkolivegreen darkorange darkorchid
darkred darksalmon darkseagreen darkslateblue darkslategray darkslategrey
darkturquoise darkviolet deeppink deepskyblue dimgray dimgrey dodgerblue
firebrick floralwhite forestgreen fuchsia gainsboro ghostwhite gold goldenrod
gray green greenyellow grey honeydew hotpink indianred indigo ivory khaki
lavender lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
lightgoldenrodyellow lightgray lightgreen lightgrey lightpink lightsalmon
lightseagreen lightskyblue lightslategray lightslategrey lightsteelblue
lightyellow lime limegreen linen magenta maroon mediumaquamarine mediumblue
mediumorchid mediumpurple mediumseagreen mediumslateblue mediumspringgreen
mediumturquoise mediumvioletred midnightblue mintcream mistyrose moccasin
navajowhite navy oldlace olive olivedrab orange orangered orchid palegoldenrod
palegreen paleturquoise palevioletred papayawhip peru pink plum powderblue
purple rebeccapurple red rosybrown royalblue saddlebrown salmon sandybrown
seagreen seashell sienna silver skyblue slateblue slategray slategrey snow
springgreen steelblue tan teal thistle tomato turquoise violet wheat white
whitesmoke yellow yellowgreen
""".split())


@dataclass(frozen=True)
class GridRecord:
    """One active cell. A color of None means the default color."""
    index: int
    color: Optional[str] = None


@dataclass(frozen=True)
class GridState:
    """Side length of a square grid and its active cells in encounter order."""
    size: int
    records: Tuple[GridRecord, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # accept any iterable of records but store an immutable tuple
        object.__setattr__(self, "records", tuple(self.records))

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def is_empty(self) -> bool:
        return not self.records

    def to_dict(self) -> dict:
        """JSON friendly representation used by the API and the CLI."""
        return {
            "size": self.size,
            "records": [{"index": r.index, "color": r.color} for r in self.records],
        }


def is_valid_color(color) -> bool:
    """True for hex colors (#rgb, #rgba, #rrggbb, #rrggbbaa) and CSS color names."""
    if not isinstance(color, str) or not color:
        return False
    if _HEX_COLOR.fullmatch(color):
        return True
    return color.lower() in CSS_NAMED_COLORS


def normalize_color(color) -> Optional[str]:
    """Return the color unchanged when it is accepted, otherwise None."""
    return color if is_valid_color(color) else None


def try_parse_grid_size(value) -> Optional[int]:
    """Parse a grid size from a query parameter or user input, None if invalid.

    Text is read like a number typed into the size prompt: surrounding spaces,
    a leading '+' and integral decimals such as "16.0" are fine.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        size = value
    else:
        text = str(value).strip()
        if not text or not text.isascii() or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not number.is_integer():
            return None
        size = int(number)
    if size < MIN_GRID_SIZE or size > MAX_GRID_SIZE:
        return None
    return size


def parse_grid_size(value) -> int:
    """Like try_parse_grid_size(), but falls back to the default size.

    The grid resets to its default size when an invalid size is entered.
    """
    size = try_parse_grid_size(value)
    return DEFAULT_GRID_SIZE if size is None else size
