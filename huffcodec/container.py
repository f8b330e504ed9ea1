from __future__ import annotations

"""
HuffmanCoder

Self-describing Huffman container: magic value, symbol count, the frequency
table in ascending symbol order, then the packed payload. The decoder needs
nothing but these bytes, since it rebuilds the exact same tree from the table.
"""

import logging
from io import BytesIO
from typing import Dict, Tuple

from .bits import pack, unpack
from .constants import (BYTE_ORDER, ENTRY_SIZE, HEADER_SIZE, INT_WIDTH,
                        MAGIC, MAX_COUNT, MAX_SYMBOLS, SENTINEL)
from .errors import MalformedContainer, NotEncoded
from .frequency import build_frequency_table, validate_frequency_table
from .guard import check_would_shrink
from .tree import build_tree, derive_codes

logger = logging.getLogger(__name__)


def _int(value: int) -> bytes:
    return value.to_bytes(INT_WIDTH, BYTE_ORDER)


def is_container(blob: bytes) -> bool:
    return(len(blob) >= INT_WIDTH
           and int.from_bytes(blob[:INT_WIDTH], BYTE_ORDER) == MAGIC)


#
#Header
#

def write_header(buf: BytesIO, freq: Dict[int, int]) -> None:
    buf.write(_int(MAGIC))
    buf.write(_int(len(freq)))
    for sym, n in freq.items():
        if n > MAX_COUNT:
            raise ValueError(f"count {n} for symbol {sym} does not fit in {INT_WIDTH} bytes")
        buf.write(bytes([sym]))
        buf.write(_int(n))


def read_header(blob: bytes) -> Tuple[Dict[int, int], int]:
    """Parse magic, symbol count and entries; return (table, payload offset)."""
    if not is_container(blob):
        raise NotEncoded()
    if len(blob) < HEADER_SIZE:
        raise MalformedContainer("header truncated")

    mv = memoryview(blob)
    i = INT_WIDTH
    n = int.from_bytes(mv[i:i+INT_WIDTH], BYTE_ORDER); i += INT_WIDTH
    if not 0 < n <= MAX_SYMBOLS:
        raise MalformedContainer(f"header claims {n} symbols")
    if len(blob) < HEADER_SIZE+n*ENTRY_SIZE:
        raise MalformedContainer(f"frequency table truncated ({n} entries claimed)")

    freq: Dict[int, int] ={}
    for _ in range(n):
        sym = mv[i]; i += 1
        if sym in freq:
            raise MalformedContainer(f"symbol {sym} listed twice")
        freq[sym] = int.from_bytes(mv[i:i+INT_WIDTH], BYTE_ORDER); i += INT_WIDTH

    validate_frequency_table(freq)
    return{s: freq[s] for s in sorted(freq)}, i


#
#Public coder interface
#

class HuffmanCoder:
    """Frequency-table Huffman encoder/decoder with an end-of-stream marker.

    encode() refuses to produce a container that would not be smaller than
    its input unless check_size is False.
    """

    name = "Huffman"

    def encode(self, data: bytes, check_size: bool = True) -> bytes:
        freq = build_frequency_table(data)
        if SENTINEL in data:
            logger.warning("input contains byte %d; decoding will stop at its first occurrence", SENTINEL)

        table = derive_codes(build_tree(freq))
        logger.debug("%d symbols, longest codeword %d bits", len(table), table.max_len)

        if check_size:
            check_would_shrink(len(data), freq, table)

        buf = BytesIO()
        write_header(buf, freq)
        buf.write(pack(table, data))
        return buf.getvalue()

    def decode(self, blob: bytes) -> bytes:
        freq, offset = read_header(blob)
        table = derive_codes(build_tree(freq))
        out = unpack(table, memoryview(blob)[offset:])
        logger.debug("decoded %d bytes from %d", len(out), len(blob))
        return out
