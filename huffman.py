import heapq
import itertools
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from bitops import BitWriter, BitReader
from errors import EmptyInputError, FormatError

#: Code assigned to the only symbol of a single-symbol alphabet.
SINGLE_SYMBOL_CODE = "0"

#: Metadata field widths (bits).
COUNT_BITS = 24
SYMBOL_BITS = 21
LENGTH_BITS = 8


@dataclass(frozen=True, eq=False)
class HuffmanNode:
    """Immutable node of a binary Huffman tree.

    A leaf carries a symbol and has no children. An internal node carries
    no symbol and exclusively owns exactly two children.

    :ivar weight: Total frequency of the symbols below this node.
    :type weight: int
    :ivar symbol: Symbol stored at a leaf; ``None`` for internal nodes.
    :ivar left: Child reached with bit ``'0'``.
    :type left: HuffmanNode | None
    :ivar right: Child reached with bit ``'1'``.
    :type right: HuffmanNode | None
    """

    weight: int
    symbol: Optional[Hashable] = None
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    def __post_init__(self):
        if (self.left is None) != (self.right is None):
            raise ValueError("An internal node needs exactly two children")
        if self.left is not None and self.symbol is not None:
            raise ValueError("An internal node cannot hold a symbol")

    @property
    def is_leaf(self) -> bool:
        """``True`` when the node has no children."""
        return self.left is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol!r}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight}, internal)"


def count_frequencies(symbols: Iterable[Hashable]) -> Dict[Hashable, int]:
    """Count how often each symbol occurs.

    :param symbols: Symbol sequence, e.g. a ``str`` or ``bytes`` object.
    :returns: Mapping from symbol to its occurrence count.
    :rtype: Dict[Hashable, int]
    :raises EmptyInputError: If ``symbols`` is empty.
    """
    frequencies = dict(Counter(symbols))
    if not frequencies:
        raise EmptyInputError()
    return frequencies


def build_tree(frequencies: Dict[Hashable, int]) -> HuffmanNode:
    """Build a Huffman tree by repeatedly merging the two lightest nodes.

    Leaves enter the heap in ascending symbol order and every node pushed
    gets an increasing sequence number, so among equal weights the node
    that entered first is merged first. The first node popped becomes
    the left child.

    :param frequencies: Mapping from symbol to positive count.
    :type frequencies: Dict[Hashable, int]
    :returns: Root of the tree; a bare leaf for a one-symbol table.
    :rtype: HuffmanNode
    :raises EmptyInputError: If ``frequencies`` is empty.
    :raises ValueError: If a count is not positive.
    """
    if not frequencies:
        raise EmptyInputError("Cannot build a Huffman tree from an empty table")

    order = itertools.count()
    heap: List[Tuple[int, int, HuffmanNode]] = []
    for symbol in sorted(frequencies):
        weight = frequencies[symbol]
        if weight <= 0:
            raise ValueError(f"Frequency of {symbol!r} must be positive")
        heap.append((weight, next(order), HuffmanNode(weight, symbol=symbol)))
    heapq.heapify(heap)

    while len(heap) > 1:
        _, _, left = heapq.heappop(heap)
        _, _, right = heapq.heappop(heap)
        merged = HuffmanNode(left.weight + right.weight, left=left, right=right)
        heapq.heappush(heap, (merged.weight, next(order), merged))

    return heap[0][2]


def build_code_table(root: HuffmanNode) -> Dict[Hashable, str]:
    """Assign each leaf the path leading to it (``'0'`` left, ``'1'`` right).

    :param root: Root of a Huffman tree.
    :type root: HuffmanNode
    :returns: Mapping from symbol to its bit string.
    :rtype: Dict[Hashable, str]
    """
    if root.is_leaf:
        return {root.symbol: SINGLE_SYMBOL_CODE}

    table: Dict[Hashable, str] = {}
    stack = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if node.is_leaf:
            table[node.symbol] = prefix
        else:
            stack.append((node.right, prefix + "1"))
            stack.append((node.left, prefix + "0"))
    return table


class CanonicalHuffman:
    """Canonical Huffman code derived from per-symbol code lengths.

    Only the code lengths are needed to reproduce the codes, which is
    what makes them suitable for storage next to an encoded payload.

    :ivar code_lengths: Mapping from symbol to code length (in bits).
    :type code_lengths: Dict[Hashable, int]
    :ivar codes: Mapping from symbol to its canonical bit string.
    :type codes: Dict[Hashable, str]
    :ivar symbols: Symbols with a code, in ascending order.
    :type symbols: List[Hashable]
    """

    def __init__(self):
        self.code_lengths: Dict[Hashable, int] = {}
        self.codes: Dict[Hashable, str] = {}
        self.symbols: List[Hashable] = []

    def build_from_code_table(self, code_table: Dict[Hashable, str]):
        """Keep the code lengths of ``code_table`` and assign canonical codes.

        :param code_table: Any prefix-free code table.
        :type code_table: Dict[Hashable, str]
        :returns: None
        :rtype: None
        """
        self.code_lengths = {s: len(code) for s, code in code_table.items()}
        self._generate_canonical_codes()

    def build_from_frequencies(self, frequencies: Dict[Hashable, int]):
        """Build canonical codes for a symbol frequency table.

        :param frequencies: Mapping from symbol to observed frequency.
        :type frequencies: Dict[Hashable, int]
        :returns: None
        :rtype: None
        :raises EmptyInputError: If ``frequencies`` is empty.
        """
        self.build_from_code_table(build_code_table(build_tree(frequencies)))

    def _generate_canonical_codes(self):
        """Assign codes in ``(length, symbol)`` order from ``code_lengths``.

        :returns: None
        :rtype: None
        :raises FormatError: If a length is not positive or the lengths
            need more codes than the code space holds.
        """
        self.codes = {}
        self.symbols = sorted(self.code_lengths)

        code = 0
        prev_length = 0
        for symbol in sorted(self.symbols, key=lambda s: (self.code_lengths[s], s)):
            length = self.code_lengths[symbol]
            if length < 1:
                raise FormatError(f"Invalid code length {length} for {symbol!r}")
            code <<= (length - prev_length)
            if code >> length:
                raise FormatError("Code lengths over-subscribe the code space")
            self.codes[symbol] = format(code, f"0{length}b")
            code += 1
            prev_length = length

    def build_tree(self) -> HuffmanNode:
        """Rebuild a decoding tree from the canonical codes.

        Code lengths carry no frequencies, so every rebuilt node has
        weight 0.

        :returns: Root of the decoding tree.
        :rtype: HuffmanNode
        :raises FormatError: If there are no codes or they leave a branch
            of the tree unused.
        """
        if not self.codes:
            raise FormatError("No code lengths loaded")
        if len(self.codes) == 1:
            (symbol, code), = self.codes.items()
            if code != SINGLE_SYMBOL_CODE:
                raise FormatError("A single symbol must have a 1-bit code")
            return HuffmanNode(0, symbol=symbol)
        return self._subtree([(code, s) for s, code in self.codes.items()], 0)

    @classmethod
    def _subtree(cls, entries, depth: int) -> HuffmanNode:
        if len(entries) == 1 and len(entries[0][0]) == depth:
            return HuffmanNode(0, symbol=entries[0][1])
        if any(len(code) == depth for code, _ in entries):
            raise FormatError("Code table is not prefix-free")
        left = [e for e in entries if e[0][depth] == "0"]
        right = [e for e in entries if e[0][depth] == "1"]
        if not left or not right:
            raise FormatError("Code lengths do not form a complete prefix code")
        return HuffmanNode(
            0,
            left=cls._subtree(left, depth + 1),
            right=cls._subtree(right, depth + 1),
        )

    def save_metadata(self) -> bytes:
        """Serialize the code lengths.

        Layout: symbol count (24 bits), then per symbol in ascending
        order its value (21 bits, code point for characters) and its
        code length (8 bits).

        :returns: Serialized metadata bytes.
        :rtype: bytes
        :raises ValueError: If a symbol or length does not fit its field.
        """
        data = BitWriter()
        data.write_bits(len(self.symbols), COUNT_BITS)
        for symbol in self.symbols:
            value = ord(symbol) if isinstance(symbol, str) else symbol
            data.write_bits(value, SYMBOL_BITS)
            data.write_bits(self.code_lengths[symbol], LENGTH_BITS)
        return data.flush()

    def load_metadata(self, data: bytes, text: bool = True) -> int:
        """Load code lengths written by :meth:`save_metadata`.

        :param bytes data: Serialized metadata.
        :param bool text: Restore symbols as characters (``True``) or as
            byte values (``False``).
        :returns: Number of bytes consumed from ``data``.
        :rtype: int
        :raises EOFError: If the metadata is truncated.
        :raises FormatError: If a symbol value is out of range or the
            lengths are inconsistent.
        """
        reader = BitReader(data)
        num_symbols = reader.read_bits(COUNT_BITS)
        self.code_lengths = {}
        for _ in range(num_symbols):
            value = reader.read_bits(SYMBOL_BITS)
            length = reader.read_bits(LENGTH_BITS)
            try:
                symbol = chr(value) if text else _byte_symbol(value)
            except ValueError as exc:
                raise FormatError(f"Invalid symbol value {value}") from exc
            self.code_lengths[symbol] = length
        self._generate_canonical_codes()
        return reader.pos


def _byte_symbol(value: int) -> int:
    if value > 0xFF:
        raise ValueError(f"{value} is not a byte value")
    return value
