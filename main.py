import argparse
import sys

from typing import Hashable, List, Mapping, Optional
from archiver import Archiver
from codec import CompressionResult, compress
from errors import HuffmanError

EMPTY_INPUT_MESSAGE = "[!] Please enter or upload some text!"


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman coding of text: code tables, encoded bits "
                    "and compression statistics"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    comp = subparsers.add_parser(
        "compress", aliases=["c"], help="Build the Huffman code for a text"
    )
    comp.add_argument("text", nargs="?", help="Text to compress")
    comp.add_argument(
        "-f", "--file", help="Read the input from a file instead"
    )
    comp.add_argument(
        "-b",
        "--binary",
        action="store_true",
        help="Treat the input file as raw bytes",
    )
    comp.add_argument(
        "-o", "--output", help="Write a compressed container to this path"
    )
    comp.add_argument(
        "--no-bits",
        action="store_true",
        help="Do not print the encoded bit string",
    )

    decomp = subparsers.add_parser(
        "decompress", aliases=["d"], help="Decode a compressed container"
    )
    decomp.add_argument("archive", help="Container file to decode")
    decomp.add_argument(
        "-o", "--output", help="Write the decoded data to this path"
    )

    return parser


def _fmt_symbol(symbol: Hashable) -> str:
    """Render a symbol for a table cell.

    :param symbol: Character or byte value.
    :returns: Printable representation.
    :rtype: str
    """
    if isinstance(symbol, int):
        return f"0x{symbol:02x}"
    if symbol == " ":
        return "(space)"
    if not symbol.isprintable():
        return repr(symbol)[1:-1]
    return symbol


def _fmt_table(title: str, header: str, table: Mapping[Hashable, object]) -> List[str]:
    """Format a symbol table as aligned text lines, sorted by symbol.

    :param str title: Section heading.
    :param str header: Heading of the value column.
    :param table: Mapping from symbol to the value to show.
    :type table: Mapping[Hashable, object]
    :returns: Lines to print.
    :rtype: List[str]
    """
    rows = [(_fmt_symbol(s), str(table[s])) for s in sorted(table)]
    width = max([len("Character")] + [len(r[0]) for r in rows])
    lines = [title, f"  {'Character':<{width}}  {header}"]
    lines.extend(f"  {sym:<{width}}  {value}" for sym, value in rows)
    return lines


def format_report(result: CompressionResult, show_bits: bool = True) -> str:
    """Build the textual report for one compression run.

    :param result: Output of :func:`codec.compress`.
    :type result: CompressionResult
    :param bool show_bits: Include the encoded bit string.
    :returns: Multi-line report.
    :rtype: str
    """
    lines = _fmt_table("Frequency Table", "Frequency", result.frequency_table)
    lines.append("")
    lines.extend(_fmt_table("Huffman Code Table", "Code", result.code_table))
    if show_bits:
        lines.extend(["", "Encoded Data", result.encoded_stream])
    lines.extend([
        "",
        "File Stats",
        f"  Original Size: {result.original_size_bits} bits",
        f"  Compressed Size: {result.compressed_size_bits} bits",
        f"  Compression Ratio: {result.ratio:.2f}",
        f"  Compression Percentage: {result.savings_percent:.2f}%",
    ])
    return "\n".join(lines)


def _read_input(args):
    """Collect the input selected on the command line.

    :param args: Parsed ``compress`` arguments.
    :type args: argparse.Namespace
    :returns: Text (stripped) or raw bytes.
    :rtype: str | bytes
    :raises FileNotFoundError: If the input file does not exist.
    :raises UnicodeDecodeError: If a text-mode file is not valid UTF-8.
    """
    if args.file:
        if args.binary:
            with open(args.file, "rb") as f:
                return f.read()
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read().strip()
    return (args.text or "").strip()


def run_compress(args) -> int:
    """Handle the ``compress`` subcommand.

    :param args: Parsed arguments.
    :type args: argparse.Namespace
    :returns: Process exit status.
    :rtype: int
    """
    try:
        data = _read_input(args)
    except FileNotFoundError:
        print(f"[!] Input file not found: {args.file}")
        return 1
    except UnicodeDecodeError as e:
        print(f"[!] Input file is not valid UTF-8 text (use -b): {e}")
        return 1
    if not data:
        print(EMPTY_INPUT_MESSAGE)
        return 1

    result = compress(data)
    print(format_report(result, show_bits=not args.no_bits))

    if args.output:
        blob = Archiver().compress(data)
        with open(args.output, "wb") as out:
            out.write(blob)
        print(f"Container written to {args.output} ({len(blob)} bytes)")
    return 0


def run_decompress(args) -> int:
    """Handle the ``decompress`` subcommand.

    :param args: Parsed arguments.
    :type args: argparse.Namespace
    :returns: Process exit status.
    :rtype: int
    """
    try:
        with open(args.archive, "rb") as f:
            blob = f.read()
    except FileNotFoundError:
        print(f"[!] Archive file not found: {args.archive}")
        return 1

    try:
        data = Archiver().decompress(blob)
    except HuffmanError as e:
        print(f"[!] Cannot decode {args.archive}: {e}")
        return 1

    if args.output:
        mode = "w" if isinstance(data, str) else "wb"
        encoding = "utf-8" if isinstance(data, str) else None
        with open(args.output, mode, encoding=encoding) as out:
            out.write(data)
    elif isinstance(data, str):
        print("Decoded Data")
        print(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments to parse; ``sys.argv[1:]`` when ``None``.
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.cmd in ["compress", "c"]:
        return run_compress(args)
    return run_decompress(args)


if __name__ == "__main__":
    sys.exit(main())
