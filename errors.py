class HuffmanError(ValueError):
    """Base class for every error raised by the Huffman codec."""


class EmptyInputError(HuffmanError):
    """Compression was requested on an empty symbol sequence."""

    def __init__(self, message: str = "Cannot compress empty input"):
        super().__init__(message)


class UnknownSymbolError(HuffmanError):
    """A symbol has no entry in the supplied code table.

    :ivar symbol: The symbol that could not be encoded.
    :ivar position: Index of the symbol in the input sequence.
    :type position: int
    """

    def __init__(self, symbol, position: int):
        """Create the error for ``symbol`` found at ``position``.

        :param symbol: Symbol missing from the code table.
        :param int position: Index of the symbol in the input.
        :returns: None
        :rtype: None
        """
        super().__init__(
            f"Symbol {symbol!r} at position {position} has no Huffman code"
        )
        self.symbol = symbol
        self.position = position


class TruncatedStreamError(HuffmanError):
    """The bit stream ended before the last code reached a leaf."""


class InvalidBitError(HuffmanError):
    """The encoded stream holds a character other than ``'0'`` or ``'1'``."""


class FormatError(HuffmanError):
    """Serialized data is malformed or uses an unsupported layout."""
