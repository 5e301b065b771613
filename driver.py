"""
Command driver for the Huffman tree

Reads one command per line and runs it against a single HuffmanTree session:

  insert_freq <char> <freq>
  print_heap
  build_tree
  decode <bits>

Blank lines and lines starting with '#' are skipped.

How to run:
  python driver.py commands.txt
  python driver.py < commands.txt
"""

from __future__ import annotations

import argparse
import re
import sys
from typing import Iterable, List, TextIO

from huffman import HuffmanTree, InvalidBitError, InvalidFrequencyError


UNKNOWN_COMMAND = "Error: Unknown command or incorrect arguments."
BAD_CHARACTER = "Error: Character must be a single character."
INVALID_ARGUMENT = "Error: Invalid argument."

FREQUENCY_TOKEN = re.compile(r"[+-]?[0-9]+")


def parse_bits(text: str) -> List[bool]:
    bits: List[bool] = []
    for ch in text:
        if ch not in "01":
            raise InvalidBitError(f"bit must be '0' or '1', got {ch!r}")
        bits.append(ch == '1')
    return bits


def parse_frequency(token: str) -> int:
    # plain ASCII digits with an optional sign; int() alone would also take '1_0' or non-ASCII digits
    if not FREQUENCY_TOKEN.fullmatch(token):
        raise InvalidFrequencyError(f"frequency must be an integer, got {token!r}")
    return int(token)


def run_command(tree: HuffmanTree, args: List[str], out: TextIO) -> None:
    command = args[0]

    if command == "insert_freq" and len(args) == 3:
        if len(args[1]) != 1:
            print(BAD_CHARACTER, file=out)
        else:
            tree.insert_frequency(args[1], parse_frequency(args[2]))
    elif command == "print_heap" and len(args) == 1:
        print(tree.format_heap(), file=out)
    elif command == "build_tree" and len(args) == 1:
        tree.build()
    elif command == "decode" and len(args) == 2:
        bits = parse_bits(args[1])
        if bits: # nothing to decode
            print("".join(tree.decode(bits)), file=out)
    else:
        print(UNKNOWN_COMMAND, file=out)


def run_script(lines: Iterable[str], out: TextIO | None = None, tree: HuffmanTree | None = None) -> HuffmanTree:
    """
    Run every command in lines against tree (a fresh one if None)
    Errors are reported on out (sys.stdout at call time if None) and never stop the script
    """
    if out is None:
        out = sys.stdout
    if tree is None:
        tree = HuffmanTree()

    for line in lines:
        line = line.rstrip("\n")
        if not line or line[0] == '#': # skip comments/empty lines
            continue
        args = line.split()
        if not args:
            continue

        try:
            run_command(tree, args, out)
        except ValueError: # every HuffmanError is a ValueError
            print(INVALID_ARGUMENT, file=out)

    return tree


def main() -> int:
    ap = argparse.ArgumentParser(description="Run Huffman tree commands from a file or stdin")
    ap.add_argument("script", nargs="?", type=str, default=None, help="Command file (default: read stdin)")
    args = ap.parse_args()

    if args.script is None:
        run_script(sys.stdin)
    else:
        with open(args.script, "r", encoding="utf-8") as f:
            run_script(f)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
