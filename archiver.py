from typing import Union

from bitops import BitWriter, BitReader
from codec import decode, encode
from errors import FormatError, TruncatedStreamError
from huffman import CanonicalHuffman, count_frequencies

KIND_TEXT = 0
KIND_BYTES = 1


class Archiver:
    """Self-describing container around a canonical Huffman payload.

    Layout (MSB first):

    - Magic: ``HUFP`` (4 bytes)
    - Version: 8 bits
    - Kind: 8 bits (0 = text, 1 = raw bytes)
    - Symbol count: 32 bits, never 0
    - Metadata length: 32 bits, then the byte-aligned code lengths
      written by :meth:`CanonicalHuffman.save_metadata`
    - Payload length in bits: 32 bits
    - Payload, zero padded to a whole byte

    :ivar MAGIC: Container signature.
    :type MAGIC: bytes
    :ivar VERSION: Format version of the encoder/decoder.
    :type VERSION: int
    :ivar huffman: Canonical code of the last processed stream.
    :type huffman: CanonicalHuffman
    """

    MAGIC = b"HUFP"
    VERSION = 1

    def __init__(self):
        self.huffman = CanonicalHuffman()

    def compress(self, data: Union[str, bytes]) -> bytes:
        """Encode ``data`` with canonical Huffman codes into a container.

        :param data: Text or raw bytes to compress.
        :type data: str | bytes
        :returns: Container bytes.
        :rtype: bytes
        :raises EmptyInputError: If ``data`` is empty.
        """
        frequencies = count_frequencies(data)
        kind = KIND_TEXT if isinstance(data, str) else KIND_BYTES

        output = BitWriter()
        output.write_bytes(self.MAGIC)
        output.write_bits(self.VERSION, 8)
        output.write_bits(kind, 8)
        output.write_bits(len(data), 32)

        self.huffman.build_from_frequencies(frequencies)
        metadata = self.huffman.save_metadata()
        output.write_bits(len(metadata), 32)
        output.write_bytes(metadata)

        payload = encode(data, self.huffman.codes)
        output.write_bits(len(payload), 32)
        output.write_bitstring(payload)
        return output.flush()

    def decompress(self, data: bytes) -> Union[str, bytes]:
        """Restore the text or bytes stored by :meth:`compress`.

        :param bytes data: Container bytes.
        :returns: The original data, ``str`` or ``bytes`` as it was stored.
        :rtype: str | bytes
        :raises FormatError: If the magic, version or kind is wrong, if no
            symbols are announced, or if the payload does not hold the
            announced number of symbols.
        :raises TruncatedStreamError: If the container ends early.
        """
        reader = BitReader(data)
        try:
            return self._decompress(reader)
        except EOFError as exc:
            raise TruncatedStreamError("Container ends unexpectedly") from exc

    def _decompress(self, reader: BitReader) -> Union[str, bytes]:
        magic = reader.read_bytes(len(self.MAGIC))
        if magic != self.MAGIC:
            raise FormatError("Invalid container format (bad magic)")
        version = reader.read_bits(8)
        if version != self.VERSION:
            raise FormatError(f"Unsupported version: {version}")
        kind = reader.read_bits(8)
        if kind not in (KIND_TEXT, KIND_BYTES):
            raise FormatError(f"Unknown data kind: {kind}")

        symbol_count = reader.read_bits(32)
        if symbol_count == 0:
            raise FormatError("Container holds no symbols")

        metadata_len = reader.read_bits(32)
        metadata = reader.read_bytes(metadata_len)
        self.huffman.load_metadata(metadata, text=kind == KIND_TEXT)
        tree = self.huffman.build_tree()

        payload_bits = reader.read_bits(32)
        payload = reader.read_bitstring(payload_bits)
        result = decode(payload, tree)
        if len(result) != symbol_count:
            raise FormatError(
                f"Expected {symbol_count} symbols, decoded {len(result)}"
            )
        return result
