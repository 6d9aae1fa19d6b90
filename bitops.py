class BitWriter:
    """MSB-first bit packer.

    Bits are accumulated in an 8-bit scratch register and moved into the
    byte buffer whenever a byte fills up. The last partial byte is padded
    with zero bits on :meth:`flush`.

    :ivar buffer: Completed bytes.
    :type buffer: bytearray
    :ivar bit_buffer: Pending bits of the current byte.
    :type bit_buffer: int
    :ivar bit_count: Number of pending bits in ``bit_buffer`` (0-7).
    :type bit_count: int
    """

    def __init__(self):
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0

    def _push_bit(self, bit: int):
        self.bit_buffer = (self.bit_buffer << 1) | bit
        self.bit_count += 1
        if self.bit_count == 8:
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def _pad(self):
        """Zero-fill the pending byte, if any, and move it to the buffer."""
        if self.bit_count > 0:
            self.bit_buffer <<= (8 - self.bit_count)
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def write_bits(self, value: int, nbits: int):
        """Write the lowest ``nbits`` of ``value``, most significant first.

        :param int value: Integer whose bits are written.
        :param int nbits: Field width in bits.
        :returns: None
        :rtype: None
        :raises ValueError: If ``value`` does not fit into ``nbits`` bits.
        """
        if value < 0 or value >> nbits:
            raise ValueError(f"Value {value} does not fit in {nbits} bits")
        for i in range(nbits - 1, -1, -1):
            self._push_bit((value >> i) & 1)

    def write_bitstring(self, bits: str):
        """Write a string of ``'0'``/``'1'`` characters bit by bit.

        :param str bits: Bit string such as ``"0110"``.
        :returns: None
        :rtype: None
        :raises ValueError: If ``bits`` contains any other character.
        """
        for ch in bits:
            if ch == "0":
                self._push_bit(0)
            elif ch == "1":
                self._push_bit(1)
            else:
                raise ValueError(f"Invalid bit character: {ch!r}")

    def write_bytes(self, data: bytes):
        """Byte-align the stream, then append ``data`` unchanged.

        :param bytes data: Raw bytes to append.
        :returns: None
        :rtype: None
        """
        self._pad()
        self.buffer.extend(data)

    def flush(self) -> bytes:
        """Pad the pending byte with zeros and return everything written.

        :returns: The packed bytes.
        :rtype: bytes
        """
        self._pad()
        return bytes(self.buffer)


class BitReader:
    """MSB-first bit reader over a bytes-like object.

    :ivar data: Source bytes.
    :type data: bytes
    :ivar pos: Index of the next source byte to load.
    :type pos: int
    :ivar bit_buffer: The source byte currently being consumed.
    :type bit_buffer: int
    :ivar bit_count: Unread bits left in ``bit_buffer`` (0-8).
    :type bit_count: int
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0

    def _next_bit(self) -> int:
        if self.bit_count == 0:
            if self.pos >= len(self.data):
                raise EOFError("Unexpected end of data")
            self.bit_buffer = self.data[self.pos]
            self.pos += 1
            self.bit_count = 8
        self.bit_count -= 1
        return (self.bit_buffer >> self.bit_count) & 1

    def read_bits(self, nbits: int) -> int:
        """Read an ``nbits`` wide unsigned field.

        :param int nbits: Field width in bits.
        :returns: The field value, first bit read being the most significant.
        :rtype: int
        :raises EOFError: If the data ends before ``nbits`` bits were read.
        """
        result = 0
        for _ in range(nbits):
            result = (result << 1) | self._next_bit()
        return result

    def read_bitstring(self, nbits: int) -> str:
        """Read ``nbits`` bits and return them as a ``'0'``/``'1'`` string.

        :param int nbits: Number of bits to read.
        :returns: Bit string of length ``nbits``.
        :rtype: str
        :raises EOFError: If the data ends before ``nbits`` bits were read.
        """
        return "".join("1" if self._next_bit() else "0" for _ in range(nbits))

    def read_bytes(self, nbytes: int) -> bytes:
        """Drop any unread bits of the current byte and read raw bytes.

        :param int nbytes: Number of bytes to read.
        :returns: The next ``nbytes`` bytes.
        :rtype: bytes
        :raises EOFError: If fewer than ``nbytes`` bytes remain.
        """
        self.bit_count = 0
        if self.pos + nbytes > len(self.data):
            raise EOFError("Unexpected end of data")
        result = self.data[self.pos:self.pos + nbytes]
        self.pos += nbytes
        return bytes(result)
