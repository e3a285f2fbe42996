import pytest
from Modules.varints import single_varint, multi_varint, encode_varint


def test_single_byte_varints():
    assert single_varint(b"\x00") == (0, 1)
    assert single_varint(b"\x7f") == (127, 1)


def test_multi_byte_varint():
    assert single_varint(b"\x81\x00") == (128, 2)
    assert single_varint(b"\x82\x2c") == (300, 2)


def test_varint_at_offset():
    assert single_varint(b"\x00\x81\x00\x05", 1) == (128, 2)


def test_ninth_byte_uses_all_eight_bits():
    assert single_varint(b"\xff" * 9) == ((1 << 64) - 1, 9)
    # Continuation bit on the 9th byte is data, not a flag
    assert single_varint(b"\x80" * 8 + b"\x80") == (0x80, 9)


def test_truncated_varint_reports_zero_length():
    assert single_varint(b"\x81") == (0, 0)
    assert single_varint(b"\xff" * 8) == (0, 0)
    assert single_varint(b"", 0) == (0, 0)
    assert single_varint(b"\x01", 5) == (0, 0)


@pytest.mark.parametrize("value, width", [
    (0, 1),
    (127, 1),
    (128, 2),
    ((1 << 14) - 1, 2),
    (1 << 14, 3),
    ((1 << 28) + 5, 5),
    ((1 << 56) - 1, 8),
    (1 << 56, 9),
    ((1 << 64) - 1, 9),
])
def test_round_trip_uses_canonical_width(value, width):
    encoded = encode_varint(value)
    assert len(encoded) == width
    assert single_varint(encoded) == (value, width)


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_varint(-1)
    with pytest.raises(ValueError):
        encode_varint(1 << 64)


def test_multi_varint_reads_until_end():
    data = encode_varint(7) + encode_varint(300) + encode_varint(0) + b"tail"
    values, index = multi_varint(data, 0, 4)
    assert values == [7, 300, 0]
    assert index == 4


def test_multi_varint_stops_on_malformed_varint():
    values, index = multi_varint(b"\x05\x81", 0)
    assert values == [5]
    assert index == 1
