"""zlib compression of share payloads"""

import zlib
from exceptions import CorruptInputError

# 100x100 cells with long color names stays well below this
MAX_DECOMPRESSED_SIZE = 1024 * 1024


def compress(data: bytes) -> bytes:
    """Compress a byte buffer into a single zlib stream."""
    return zlib.compress(data, zlib.Z_BEST_COMPRESSION)


def decompress(data: bytes, max_size: int = MAX_DECOMPRESSED_SIZE) -> bytes:
    """Inverse of compress().

    Raises CorruptInputError unless data is exactly one complete zlib stream
    whose output fits in max_size bytes.
    """
    decompressor = zlib.decompressobj()
    try:
        # one byte of headroom tells a payload of exactly max_size from a larger one
        output = decompressor.decompress(data, max_size + 1)
    except zlib.error as e:
        raise CorruptInputError(f"Invalid compressed data: {e}") from e

    if len(output) > max_size:
        raise CorruptInputError(f"Decompressed payload exceeds {max_size} bytes")
    if not decompressor.eof:
        raise CorruptInputError("Truncated compressed data")
    if decompressor.unused_data:
        raise CorruptInputError("Trailing bytes after compressed data")
    return output
