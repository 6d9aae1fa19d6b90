import random

import pytest

from codec import compress, decode, encode
from errors import (
    EmptyInputError,
    HuffmanError,
    InvalidBitError,
    TruncatedStreamError,
    UnknownSymbolError,
)
from huffman import HuffmanNode


def test_roundtrip(sample_text):
    result = compress(sample_text)
    assert decode(result.encoded_stream, result.tree) == sample_text


def test_roundtrip_bytes():
    data = bytes(random.Random(7).getrandbits(8) for _ in range(2048))
    result = compress(data)
    out = decode(result.encoded_stream, result.tree)
    assert isinstance(out, bytes)
    assert out == data


def test_compress_abacabad():
    result = compress("abacabad")
    assert result.frequency_table == {"a": 4, "b": 2, "c": 1, "d": 1}
    assert result.code_table == {"a": "0", "b": "10", "c": "110", "d": "111"}
    assert result.encoded_stream == "01001100100111"
    assert result.original_size_bits == 64
    assert result.compressed_size_bits == 14
    assert result.ratio == pytest.approx(14 / 64)
    assert result.savings_percent == pytest.approx(78.125)


def test_compress_single_symbol():
    result = compress("aaaa")
    assert result.code_table == {"a": "0"}
    assert result.encoded_stream == "0000"
    assert result.tree.is_leaf
    assert decode(result.encoded_stream, result.tree) == "aaaa"


def test_single_leaf_decodes_any_bit():
    assert decode("0101", HuffmanNode(4, symbol="a")) == "aaaa"


def test_compress_empty_raises():
    with pytest.raises(EmptyInputError):
        compress("")


def test_skewed_input_shrinks():
    result = compress("a" * 90 + "b" * 7 + "c" * 3)
    assert result.ratio < 1.0
    assert result.compressed_size_bits < result.original_size_bits


def test_uniform_input_stays_within_code_length_bound():
    text = "".join(chr(ord("a") + i) for i in range(16)) * 4
    result = compress(text)
    assert result.compressed_size_bits == len(text) * 4


def test_encode_unknown_symbol_raises():
    with pytest.raises(UnknownSymbolError) as exc_info:
        encode("abz", {"a": "0", "b": "1"})
    assert exc_info.value.symbol == "z"
    assert exc_info.value.position == 2


def test_encode_empty_is_empty():
    assert encode("", {"a": "0"}) == ""


def test_decode_truncated_stream_raises():
    result = compress("abacabad")
    with pytest.raises(TruncatedStreamError):
        decode(result.encoded_stream[:-1], result.tree)


def test_decode_invalid_bit_raises():
    result = compress("abacabad")
    with pytest.raises(InvalidBitError):
        decode("01x", result.tree)


def test_errors_share_a_base_class():
    for exc in (EmptyInputError, UnknownSymbolError, TruncatedStreamError):
        assert issubclass(exc, HuffmanError)
        assert issubclass(exc, ValueError)


def test_decode_empty_stream():
    result = compress("abc")
    assert decode("", result.tree) == ""


def test_result_is_immutable():
    result = compress("abc")
    with pytest.raises(AttributeError):
        result.encoded_stream = ""


def test_result_tables_are_read_only():
    result = compress("abacabad")
    with pytest.raises(TypeError):
        result.code_table["a"] = "111"
    with pytest.raises(TypeError):
        result.frequency_table["a"] = 0
    assert result.code_table["a"] == "0"
    assert result.frequency_table["a"] == 4


def test_result_size_properties_forward_stats():
    result = compress("abacabad")
    assert result.original_size_bits == result.stats.original_size_bits
    assert result.compressed_size_bits == result.stats.compressed_size_bits
    assert result.ratio == result.stats.ratio
    assert result.savings_percent == result.stats.savings_percent
