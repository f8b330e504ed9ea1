from __future__ import annotations

"""
Huffman tree construction and code table derivation.

The decoder rebuilds the tree from the stored frequency table, so the build
must be fully deterministic: equal-weight nodes are ordered by insertion,
leaves first in ascending symbol order, then internal nodes as they are made.
"""

from heapq import heappush, heappop
from itertools import count
from typing import Dict, List, Tuple

from bitarray import bitarray
from bitarray.util import ba2int

#
#Tree node
#

class _Node:
    """A leaf (symbol set) or an internal node owning two children."""
    __slots__ =("weight", "symbol", "left", "right")

    def __init__(self, weight: int, symbol: int | None = None,
                 left: "_Node | None" = None, right: "_Node | None" = None):
        self.weight, self.symbol, self.left, self.right = weight, symbol, left, right

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None


def build_tree(freq: Dict[int, int]) -> _Node:
    """Merge the two lightest nodes until a single root remains."""
    if not freq:
        raise ValueError("cannot build a tree from an empty frequency table")

    order = count()
    heap: List[Tuple[int, int, _Node]] = []
    for sym in sorted(freq):
        heappush(heap,(freq[sym], next(order), _Node(freq[sym], sym)))

    while len(heap) > 1:
        w1, _, n1 = heappop(heap)
        w2, _, n2 = heappop(heap)
        heappush(heap,(w1+w2, next(order), _Node(w1+w2, None, n1, n2)))
    return heap[0][2]


#
#Code table
#

class CodeTable:
    """Symbol -> codeword and the reverse (bit length, value) -> symbol map."""
    __slots__ =("codes", "lookup", "max_len")

    def __init__(self, codes: Dict[int, bitarray]):
        self.codes = codes
        self.lookup: Dict[Tuple[int, int], int] ={
            (len(code), ba2int(code)): sym for sym, code in codes.items()
        }
        self.max_len = max(len(code) for code in codes.values())

    def __len__(self) -> int:
        return len(self.codes)

    def __getitem__(self, symbol: int) -> bitarray:
        return self.codes[symbol]


def derive_codes(root: _Node) -> CodeTable:
    """Walk the tree depth first, 0 for left and 1 for right."""
    codes: Dict[int, bitarray] ={}

    #A lone leaf still needs a one-bit codeword so the payload is non-empty
    if root.is_leaf:
        codes[root.symbol] = bitarray("0")
        return CodeTable(codes)

    stack = [(root, bitarray())]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = path
            continue
        stack.append((node.right, path+bitarray("1")))
        stack.append((node.left,  path+bitarray("0")))
    return CodeTable({s: codes[s] for s in sorted(codes)})
