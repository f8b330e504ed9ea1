from __future__ import annotations

from collections import Counter
from typing import Dict

from .constants import MAX_SYMBOLS, SENTINEL
from .errors import MalformedContainer


def build_frequency_table(data: bytes) -> Dict[int, int]:
    """Count each byte of data and add the end-of-stream sentinel.

    The result iterates in ascending symbol order, which is both the tree
    builder's tie-break order and the order entries are written to disk.
    A natural 13 byte in data shares the sentinel's entry.
    """
    freq = Counter(data)
    freq[SENTINEL] += 1
    return{s: freq[s] for s in sorted(freq)}


def validate_frequency_table(freq: Dict[int, int]) -> None:
    #Parsed tables come from untrusted bytes, so check the table invariants
    if not freq or len(freq) > MAX_SYMBOLS:
        raise MalformedContainer(f"bad symbol count {len(freq)}")
    for sym, count in freq.items():
        if not 0 <= sym < MAX_SYMBOLS:
            raise MalformedContainer(f"symbol {sym} out of range")
        if count < 1:
            raise MalformedContainer(f"symbol {sym} has zero count")
    if SENTINEL not in freq:
        raise MalformedContainer("end-of-stream entry missing")
