from dataclasses import dataclass

from errors import EmptyInputError

#: Size of one uncompressed symbol (single-byte characters).
BITS_PER_SYMBOL = 8


@dataclass(frozen=True)
class CompressionStats:
    """Size figures of one compression run.

    :ivar original_size_bits: Size of the input at a fixed width per symbol.
    :type original_size_bits: int
    :ivar compressed_size_bits: Length of the encoded bit stream.
    :type compressed_size_bits: int
    """

    original_size_bits: int
    compressed_size_bits: int

    @property
    def ratio(self) -> float:
        """Compressed size divided by original size."""
        return self.compressed_size_bits / self.original_size_bits

    @property
    def savings_percent(self) -> float:
        """Share of the original size saved, in percent."""
        return 100.0 * (1.0 - self.ratio)


def compute_stats(
    symbol_count: int,
    compressed_bits: int,
    bits_per_symbol: int = BITS_PER_SYMBOL,
) -> CompressionStats:
    """Compare the encoded length against a fixed-width encoding.

    :param int symbol_count: Number of symbols in the input.
    :param int compressed_bits: Length of the encoded stream in bits.
    :param int bits_per_symbol: Width of one uncompressed symbol.
    :returns: The computed statistics.
    :rtype: CompressionStats
    :raises EmptyInputError: If ``symbol_count`` is zero.
    """
    if symbol_count <= 0:
        raise EmptyInputError("Cannot compute statistics for empty input")
    return CompressionStats(
        original_size_bits=symbol_count * bits_per_symbol,
        compressed_size_bits=compressed_bits,
    )
