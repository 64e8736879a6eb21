"""Turns grid states into share tokens and back

A share link carries two query parameters: ``s``, the grid size as plain
decimal text, and ``grid``, the token produced by serialize(). Decoding never
raises on a bad token; a broken link just restores fewer (or no) cells.
"""

import logging
from typing import Iterable, List, Mapping, Optional
from urllib.parse import unquote, urlencode
from compressor import compress, decompress
from exceptions import CorruptInputError, InvalidEncodingError
from grid_state import (
    DEFAULT_GRID_SIZE, GridRecord, GridState,
    normalize_color, parse_grid_size
)
from text_codec import decode_text, encode_text
from transcoder import from_url_safe_text, to_url_safe_text

SIZE_PARAM = "s"
GRID_PARAM = "grid"


def validate_records(records: Iterable[GridRecord], size: int) -> List[GridRecord]:
    """Keep records that fit a size x size grid.

    Out of range indices and repeated indices are dropped (the first
    occurrence wins) and unaccepted colors are replaced with None.
    """
    cell_count = size * size
    seen = set()
    valid = []
    for record in records:
        if not 0 <= record.index < cell_count:
            logging.debug("Dropping index %d outside a %dx%d grid", record.index, size, size)
            continue
        if record.index in seen:
            logging.debug("Dropping duplicate index %d", record.index)
            continue
        seen.add(record.index)
        color = normalize_color(record.color)
        if record.color is not None and color is None:
            logging.debug("Index %d: unaccepted color %r, using default", record.index, record.color)
        valid.append(GridRecord(record.index, color))
    return valid


def serialize(state: GridState) -> str:
    """Encode the active cells of a grid as a URL safe token.

    An empty grid gives the empty token.
    """
    records = validate_records(state.records, state.size)
    if not records:
        return ""

    text = encode_text(records)
    compressed = compress(text.encode("utf-8"))
    token = to_url_safe_text(compressed)
    logging.debug("Serialized %d records (%d chars) into %d char token",
                  len(records), len(text), len(token))
    return token


def deserialize(token: str, size: int = DEFAULT_GRID_SIZE) -> GridState:
    """Decode a token from serialize() for a size x size grid.

    Returns an empty state instead of raising when the token can't be decoded.
    Records that don't fit the requested size are left out.
    """
    token = unquote((token or "").strip())
    if not token:
        return GridState(size)

    try:
        compressed = from_url_safe_text(token)
        text = decompress(compressed).decode("utf-8")
    except (InvalidEncodingError, CorruptInputError, UnicodeDecodeError) as e:
        logging.warning("Discarding undecodable grid token (%s)", e)
        return GridState(size)

    records = validate_records(decode_text(text), size)
    return GridState(size, records)


def build_query(state: GridState, token: Optional[str] = None) -> str:
    """Build the ``s=<size>&grid=<token>`` query string for a share link.

    Pass token when the state was already serialized.
    """
    if token is None:
        token = serialize(state)
    return urlencode({SIZE_PARAM: state.size, GRID_PARAM: token})


def state_from_query(params: Mapping[str, str]) -> GridState:
    """Restore a grid state from already parsed query parameters.

    A missing or invalid size falls back to the default grid size.
    """
    size = parse_grid_size(params.get(SIZE_PARAM))
    return deserialize(params.get(GRID_PARAM, ""), size)
