"""Comma-delimited text form of grid records

Two layouts are written:

* index-only ``i0,i1,i2`` when no record has a color
* index-color ``i0,c0,i1,c1`` when at least one record has a color; records
  without one get NO_COLOR_TOKEN in the color slot

The layout is recovered from the text: the second token of an index-color text
is a color, which starts with '#' or a letter, while every token of an
index-only text is a decimal number.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional
from grid_state import GridRecord

DELIMITER = ","
NO_COLOR_TOKEN = "x"


class Layout(Enum):
    INDEX_ONLY = "index-only"
    INDEX_COLOR = "index-color"


def _is_color_token(token: str) -> bool:
    first = token[:1]
    return first == "#" or (first.isascii() and first.isalpha())


def _parse_index(token: str) -> Optional[int]:
    if token.isascii() and token.isdigit():
        return int(token)
    return None


def detect_layout(tokens: List[str]) -> Layout:
    """Pick the layout of a list of non-empty tokens."""
    if len(tokens) >= 2 and _is_color_token(tokens[1]):
        return Layout.INDEX_COLOR
    return Layout.INDEX_ONLY


def encode_text(records: Iterable[GridRecord]) -> str:
    """Flatten records into a single comma-delimited string."""
    records = list(records)
    for record in records:
        if record.color and DELIMITER in record.color:
            raise ValueError(f"Color {record.color!r} contains the delimiter")

    if not any(record.color for record in records):
        return DELIMITER.join(str(record.index) for record in records)

    tokens = []
    for record in records:
        tokens.append(str(record.index))
        tokens.append(record.color or NO_COLOR_TOKEN)
    return DELIMITER.join(tokens)


def decode_text(text: str, layout: Optional[Layout] = None) -> List[GridRecord]:
    """Parse text produced by encode_text().

    Decoding is best effort: empty tokens, indices that aren't non-negative
    integers and a dangling final token in the index-color layout are dropped.
    Colors are returned as found, and indices are not checked against any grid
    size.
    """
    tokens = [t.strip() for t in text.split(DELIMITER)]
    tokens = [t for t in tokens if t]
    if layout is None:
        layout = detect_layout(tokens)

    records = []
    if layout is Layout.INDEX_ONLY:
        for token in tokens:
            index = _parse_index(token)
            if index is None:
                logging.debug("Dropping unparseable index token %r", token)
                continue
            records.append(GridRecord(index))
        return records

    if len(tokens) % 2:
        logging.debug("Dropping dangling token %r", tokens[-1])
        tokens = tokens[:-1]
    for i in range(0, len(tokens), 2):
        index = _parse_index(tokens[i])
        if index is None:
            logging.debug("Dropping record with unparseable index token %r", tokens[i])
            continue
        color = tokens[i + 1]
        records.append(GridRecord(index, None if color == NO_COLOR_TOKEN else color))
    return records
