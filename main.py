#!/usr/bin/env python3
"""
main.py : compress or restore a single file with the Huffman container codec

The source file is read fully, coded in memory, and the destination is only
written once the whole result is known, so a rejected or damaged input never
leaves a partial output file behind.

Usage:
    python main.py -huff   <source> <destination>   #compress
    python main.py -unhuff <source> <destination>   #decompress
    python main.py -huff a.txt a.huf --verify       #also round-trip check before writing
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from huffcodec.constants import (EXIT_MALFORMED, EXIT_NOT_ENCODED, EXIT_OK,
                                 EXIT_VERIFY_FAILED, EXIT_WOULD_NOT_SHRINK)
from huffcodec.container import HuffmanCoder
from huffcodec.errors import MalformedContainer, NotEncoded, WouldNotShrink

#
#Utility helpers
#

def read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SystemExit(f"[error] cannot read {path}: {exc.strerror}")


def write_destination(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise SystemExit(f"[error] cannot write {path}: {exc.strerror}")


def huff(coder: HuffmanCoder, src: Path, dst: Path, verify: bool, force: bool) -> int:
    data = read_source(src)

    t0 = time.perf_counter()
    try:
        blob = coder.encode(data, check_size=not force)
    except WouldNotShrink as exc:
        print(f"[warn] {exc}")
        return EXIT_WOULD_NOT_SHRINK
    t1 = time.perf_counter()

    #Single byte mismatch means the container is unusable
    if verify and coder.decode(blob) != data:
        print(f"[warn] round trip of {src.name} did not reproduce the input, nothing written")
        return EXIT_VERIFY_FAILED

    write_destination(dst, blob)
    ratio = round(len(data)/len(blob), 3)
    print(f"[info] {src.name}: {len(data)} -> {len(blob)} bytes"
          f" (ratio {ratio}, {round((t1-t0)*1000, 3)} ms)")
    return EXIT_OK


def unhuff(coder: HuffmanCoder, src: Path, dst: Path) -> int:
    blob = read_source(src)
    try:
        data = coder.decode(blob)
    except NotEncoded as exc:
        print(f"[warn] {exc}")
        return EXIT_NOT_ENCODED
    except MalformedContainer as exc:
        print(f"[warn] {src.name} is damaged: {exc}")
        return EXIT_MALFORMED

    write_destination(dst, data)
    print(f"[info] {src.name}: restored {len(data)} bytes")
    return EXIT_OK


#
#Main driver
#

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Huffman compress or decompress one file.")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-huff", dest="mode", action="store_const", const="huff",
                      help="compress <source> into <destination>")
    mode.add_argument("-unhuff", dest="mode", action="store_const", const="unhuff",
                      help="restore <source> container into <destination>")
    parser.add_argument("source", type=Path)
    parser.add_argument("destination", type=Path)
    parser.add_argument(
        "--verify", action="store_true",
        help="decode the new container before writing and confirm output = input"
    )
    parser.add_argument(
        "--force", action="store_true",
        help="write the container even when it is not smaller than the source"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    coder = HuffmanCoder()
    if args.mode == "huff":
        return huff(coder, args.source, args.destination, args.verify, args.force)
    return unhuff(coder, args.source, args.destination)


if __name__ == "__main__":
    sys.exit(main())
