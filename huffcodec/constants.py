"""
Container format constants shared by the encoder and decoder.

All header integers are unsigned, INT_WIDTH bytes wide, in BYTE_ORDER.
"""

MAGIC = 312341        #identifies a huffcodec container
SENTINEL = 13         #end-of-stream symbol, always present in the table

BYTE_ORDER = "little"
INT_WIDTH = 4
MAX_COUNT = (1 << (8*INT_WIDTH))-1

HEADER_SIZE = 2*INT_WIDTH       #magic + symbol count
ENTRY_SIZE = 1+INT_WIDTH        #symbol byte + count
MAX_SYMBOLS = 256

#CLI exit statuses (1 is an I/O error, 2 an argparse usage error)
EXIT_OK = 0
EXIT_WOULD_NOT_SHRINK = 3
EXIT_NOT_ENCODED = 4
EXIT_MALFORMED = 5
EXIT_VERIFY_FAILED = 6
