from __future__ import annotations

"""
Bit packing for the container payload.

Codewords are concatenated MSB first into whole bytes; the last byte is
zero padded. The unpacker stops at the end-of-stream symbol, so padding bits
are never matched against the code table.
"""

import logging
from typing import Dict

from bitarray import bitarray

from .constants import SENTINEL
from .errors import MalformedContainer
from .tree import CodeTable

logger = logging.getLogger(__name__)


def payload_bits(freq: Dict[int, int], table: CodeTable) -> int:
    #The sentinel's count already includes the terminating codeword
    return sum(n*len(table[s]) for s, n in freq.items())


def pack(table: CodeTable, data: bytes) -> bytes:
    """Encode data followed by the sentinel and return the padded bytes."""
    bits = bitarray(endian="big")
    bits.encode(table.codes, data)
    bits.extend(table[SENTINEL])
    logger.debug("packed %d bits (%d padding)", len(bits), -len(bits) % 8)
    return bits.tobytes()


def unpack(table: CodeTable, payload: bytes) -> bytes:
    """Decode payload until the sentinel symbol is produced."""
    lookup = table.lookup
    out = bytearray()
    length = value = 0

    for byte in payload:
        for shift in range(7, -1, -1):
            value =(value << 1) | ((byte >> shift) & 1)
            length += 1
            sym = lookup.get((length, value))
            if sym is None:
                if length >= table.max_len:
                    raise MalformedContainer("payload contains an unknown codeword")
                continue
            if sym == SENTINEL:
                return bytes(out)
            out.append(sym)
            length = value = 0

    raise MalformedContainer("payload ended before the end-of-stream marker")
