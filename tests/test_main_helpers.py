from codec import compress


def test_fmt_symbol_renders_special_characters(m):
    assert m._fmt_symbol(" ") == "(space)"
    assert m._fmt_symbol("\n") == "\\n"
    assert m._fmt_symbol("a") == "a"
    assert m._fmt_symbol(10) == "0x0a"


def test_fmt_table_sorted_by_symbol(m):
    lines = m._fmt_table("Frequency Table", "Frequency", {"b": 2, "a": 4})
    assert lines[0] == "Frequency Table"
    assert lines[2].split() == ["a", "4"]
    assert lines[3].split() == ["b", "2"]


def test_format_report_sections(m):
    report = m.format_report(compress("abacabad"))
    assert "Frequency Table" in report
    assert "Huffman Code Table" in report
    assert "01001100100111" in report
    assert "Original Size: 64 bits" in report
    assert "Compressed Size: 14 bits" in report
    assert "Compression Ratio: 0.22" in report
    assert "Compression Percentage: 78.12%" in report


def test_format_report_without_bits(m):
    report = m.format_report(compress("abacabad"), show_bits=False)
    assert "Encoded Data" not in report


def test_cli_parser_accepts_subcommands(m):
    parser = m.get_parser()
    ns = parser.parse_args(["compress", "hello", "-o", "out.huf"])
    assert ns.cmd in ("compress", "c")
    assert ns.text == "hello"
    ns2 = parser.parse_args(["d", "in.huf", "-o", "out.txt"])
    assert ns2.cmd in ("decompress", "d")
    ns3 = parser.parse_args(["c", "-f", "data.bin", "-b", "--no-bits"])
    assert ns3.binary and ns3.no_bits
