"""Size check run before any container bytes are produced."""

import logging
from typing import Dict

from .bits import payload_bits
from .constants import ENTRY_SIZE, HEADER_SIZE
from .errors import WouldNotShrink
from .tree import CodeTable

logger = logging.getLogger(__name__)


def estimate_size(freq: Dict[int, int], table: CodeTable) -> int:
    """Exact length of the container encode() would write for this table."""
    nbits = payload_bits(freq, table)
    return HEADER_SIZE+len(freq)*ENTRY_SIZE+(nbits+7)//8


def check_would_shrink(original_size: int, freq: Dict[int, int], table: CodeTable) -> int:
    estimate = estimate_size(freq, table)
    logger.debug("estimated container size %d for %d input bytes", estimate, original_size)
    if estimate >= original_size:
        raise WouldNotShrink(original_size, estimate)
    return estimate
