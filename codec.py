from dataclasses import dataclass
from types import MappingProxyType
from typing import Hashable, Mapping, Sequence, Union

from errors import InvalidBitError, TruncatedStreamError, UnknownSymbolError
from huffman import HuffmanNode, build_code_table, build_tree, count_frequencies
from stats import CompressionStats, compute_stats


@dataclass(frozen=True)
class CompressionResult:
    """Everything produced by :func:`compress`.

    ``encoded_stream`` can only be decoded together with ``tree``. Both
    tables are read-only views.

    :ivar frequency_table: Symbol occurrence counts.
    :type frequency_table: Mapping[Hashable, int]
    :ivar code_table: Symbol to bit string mapping.
    :type code_table: Mapping[Hashable, str]
    :ivar encoded_stream: Concatenated codes of the input, as ``'0'``/``'1'``.
    :type encoded_stream: str
    :ivar tree: Huffman tree the codes were read from.
    :type tree: HuffmanNode
    :ivar stats: Size comparison against 8 bits per symbol.
    :type stats: CompressionStats
    """

    frequency_table: Mapping[Hashable, int]
    code_table: Mapping[Hashable, str]
    encoded_stream: str
    tree: HuffmanNode
    stats: CompressionStats

    @property
    def original_size_bits(self) -> int:
        """Input size at 8 bits per symbol."""
        return self.stats.original_size_bits

    @property
    def compressed_size_bits(self) -> int:
        """Length of ``encoded_stream`` in bits."""
        return self.stats.compressed_size_bits

    @property
    def ratio(self) -> float:
        """Compressed size divided by original size."""
        return self.stats.ratio

    @property
    def savings_percent(self) -> float:
        """Share of the original size saved, in percent."""
        return self.stats.savings_percent


def encode(symbols: Sequence[Hashable], code_table: Mapping[Hashable, str]) -> str:
    """Concatenate the code of every symbol in input order.

    :param symbols: Symbols to encode.
    :param code_table: Mapping from symbol to bit string.
    :type code_table: Mapping[Hashable, str]
    :returns: The encoded bit string.
    :rtype: str
    :raises UnknownSymbolError: If a symbol has no code.
    """
    parts = []
    for position, symbol in enumerate(symbols):
        try:
            parts.append(code_table[symbol])
        except KeyError:
            raise UnknownSymbolError(symbol, position) from None
    return "".join(parts)


def decode(encoded: str, tree: HuffmanNode) -> Union[str, bytes]:
    """Walk ``tree`` bit by bit and emit a symbol at every leaf.

    With a single-leaf tree every bit stands for the only symbol.

    :param str encoded: Bit string produced with codes from ``tree``.
    :param tree: Root of the Huffman tree used for encoding.
    :type tree: HuffmanNode
    :returns: ``str`` for character symbols, ``bytes`` for byte symbols.
    :rtype: str | bytes
    :raises InvalidBitError: If ``encoded`` holds a character other than
        ``'0'`` or ``'1'``.
    :raises TruncatedStreamError: If the stream stops inside a code.
    """
    symbols = []
    node = tree
    for position, bit in enumerate(encoded):
        if bit not in ("0", "1"):
            raise InvalidBitError(f"Invalid bit {bit!r} at position {position}")
        if not tree.is_leaf:
            node = node.left if bit == "0" else node.right
        if node.is_leaf:
            symbols.append(node.symbol)
            node = tree
    if node is not tree:
        raise TruncatedStreamError(
            f"Stream of {len(encoded)} bits ends inside a code"
        )
    return _join(symbols, tree)


def _join(symbols, tree: HuffmanNode) -> Union[str, bytes]:
    node = tree
    while not node.is_leaf:
        node = node.left
    if isinstance(node.symbol, str):
        return "".join(symbols)
    return bytes(symbols)


def compress(text: Union[str, bytes]) -> CompressionResult:
    """Run the whole pipeline: count, build tree and codes, encode.

    :param text: Characters or bytes to compress.
    :type text: str | bytes
    :returns: Tables, encoded stream, tree and size statistics.
    :rtype: CompressionResult
    :raises EmptyInputError: If ``text`` is empty.
    """
    frequency_table = count_frequencies(text)
    tree = build_tree(frequency_table)
    code_table = build_code_table(tree)
    encoded_stream = encode(text, code_table)
    return CompressionResult(
        frequency_table=MappingProxyType(frequency_table),
        code_table=MappingProxyType(code_table),
        encoded_stream=encoded_stream,
        tree=tree,
        stats=compute_stats(len(text), len(encoded_stream)),
    )
