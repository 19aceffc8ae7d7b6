import struct
import pytest
from sxstream.char import (
    char_byte_count, lead_byte_count, decode_char, char_name)
from sxstream.stream import Stream, StreamBoundaryError, SxstreamError


def test_char_byte_count():
    table = ((0x00, 1), (0x7f, 1),
             (0x80, 2), (0x7ff, 2),
             (0x800, 3), (0xffff, 3),
             (0x10000, 4), (0x10ffff, 4),)
    for codepoint, count in table:
        assert char_byte_count(codepoint) == count, hex(codepoint)

    for char in ('a', 'é', 'λ', '€', '😀'):
        assert char_byte_count(char) == len(char.encode('utf-8')), char


def test_lead_byte_count():
    assert lead_byte_count(ord('a')) == 1
    assert lead_byte_count(0x80) is None
    assert lead_byte_count(0xbf) is None
    assert lead_byte_count(0xc3) == 2
    assert lead_byte_count(0xe2) == 3
    assert lead_byte_count(0xf0) == 4
    assert lead_byte_count(0xff) is None


def test_decode_char():
    buffer = 'aλ€😀'.encode('utf-8')
    assert decode_char(buffer, 0) == ('a', 1)
    assert decode_char(buffer, 1) == ('λ', 2)
    assert decode_char(buffer, 3) == ('€', 3)
    assert decode_char(buffer, 6) == ('😀', 4)

    # malformed always moves forward one byte
    assert decode_char(b'\xff', 0) == ('\ufffd', 1)
    assert decode_char(b'\x80a', 0) == ('\ufffd', 1)
    assert decode_char(b'\xe2\x82', 0) == ('\ufffd', 1)
    assert decode_char(b'\xe2\x82(', 0) == ('\ufffd', 1)

    with pytest.raises(IndexError):
        decode_char(b'a', 1)


def test_char_name():
    assert char_name('\n') == 'newline'
    assert char_name(' ') == 'space'
    assert char_name(')') == "')'"


def test_construct():
    s = Stream.from_string('(λ)')
    assert (s.position, s.line, s.column) == (0, 1, 1)
    assert s.size == 4
    assert s.buffer == '(λ)'.encode('utf-8')
    assert not s.is_empty()

    e = Stream.from_bytes(b'')
    assert e.is_empty()
    assert e.size == e.remaining == 0

    source = bytearray(b'ab')
    s = Stream.from_bytes(source)
    source[0] = ord('z')
    assert s.get_char() == 'a'


def test_advance():
    s = Stream.from_bytes(b'abcdef')
    s.advance(2)
    assert (s.position, s.line, s.column) == (2, 1, 3)
    s.advance(1, columns=0)
    assert (s.position, s.line, s.column) == (3, 1, 3)
    s.advance_line()
    assert (s.position, s.line, s.column) == (3, 2, 1)
    s.advance(0)
    assert (s.position, s.line, s.column) == (3, 2, 1)
    assert s.remaining == 3

    with pytest.raises(StreamBoundaryError):
        s.advance(4)

    assert s.position == 3

    with pytest.raises(ValueError):
        s.advance(-1)

    s.advance(3)
    assert s.is_empty()


def test_chars():
    s = Stream.from_string('λx😀')
    assert s.get_char() == 'λ'
    assert s.position == 0
    assert s.get_and_advance_char() == 'λ'
    assert (s.position, s.column) == (2, 2)
    assert s.expect_char('x')
    assert not s.expect_and_advance_char('y')
    assert (s.position, s.column) == (2, 2)
    assert s.expect_and_advance_char('x')
    assert s.get_and_advance('char') == '😀'
    assert (s.position, s.column) == (7, 4)
    assert s.is_empty()

    with pytest.raises(StreamBoundaryError):
        s.get_char()


def test_fixed_width():
    values = (-2, 300, -70000, 2 ** 40, 200, 65000, 2 ** 31, 2 ** 63, 1.5, -0.25)
    buffer = struct.pack('<bhiqBHIQfd', *values)
    s = Stream.from_bytes(buffer)

    assert s.get_int8() == -2
    assert s.position == 0
    assert s.get_uint8() == 254
    assert s.get_byte() == 254

    assert s.get_and_advance_int8() == -2
    assert s.get_and_advance_int16() == 300
    assert s.get_and_advance_int32() == -70000
    assert s.get_and_advance_int64() == 2 ** 40
    assert s.get_and_advance_uint8() == 200
    assert s.get_and_advance_uint16() == 65000
    assert s.get_and_advance_uint32() == 2 ** 31
    assert s.get_and_advance_uint64() == 2 ** 63
    assert s.get_and_advance_float32() == 1.5
    assert s.position == 1 + 2 + 4 + 8 + 1 + 2 + 4 + 8 + 4
    assert s.column == s.position + 1
    assert s.get_float64() == -0.25
    assert s.get_and_advance_float64() == -0.25
    assert s.is_empty()


def test_little_endian():
    s = Stream.from_bytes(b'\x01\x00\x02\x00\x00\x00')
    assert s.get_uint16() == 1
    assert s.get_uint32() == 0x00020001
    assert s.get_and_advance_uint16() == 1
    assert s.get_and_advance_uint32() == 2


def test_generic():
    s = Stream.from_bytes(struct.pack('<hI', -5, 7))
    assert s.get('int16') == -5
    assert s.expect('int16', -5)
    assert not s.expect_and_advance('int16', 5)
    assert s.position == 0
    assert s.expect_and_advance('int16', -5)
    assert s.position == 2
    assert s.get_and_advance('uint32') == 7

    for bad in ('int128', 'float16', 'bytes'):
        with pytest.raises(ValueError):
            s.get(bad)

        with pytest.raises(ValueError):
            s.expect_and_advance(bad, 0)

    assert s.position == 6


def test_expect():
    s = Stream.from_bytes(struct.pack('<Bi', 9, -1) + b'end')
    assert s.expect_byte(9)
    assert not s.expect_and_advance_byte(8)
    assert s.expect_and_advance_byte(9)
    assert s.expect_int32(-1)
    assert not s.expect_uint32(-1)
    assert s.expect_and_advance_uint32(2 ** 32 - 1)
    assert not s.expect_bytes(b'and')
    assert not s.expect_and_advance_bytes(b'and')
    assert s.position == 5
    assert s.expect_and_advance_bytes(b'end')
    assert s.is_empty()


def test_bytes():
    s = Stream.from_bytes(b'hello world')
    assert s.get_bytes(0) == b''
    assert s.get_bytes(5) == b'hello'
    assert s.get_and_advance_bytes(6) == b'hello '
    assert (s.position, s.column) == (6, 7)
    assert s.get_bytes(5) == b'world'

    with pytest.raises(ValueError):
        s.get_bytes(-1)

    with pytest.raises(StreamBoundaryError):
        s.get_bytes(6)


def test_boundary():
    s = Stream.from_bytes(b'\x01\x02\x03')
    with pytest.raises(StreamBoundaryError) as excinfo:
        s.get_uint32()

    e = excinfo.value
    assert isinstance(e, IndexError)
    assert isinstance(e, SxstreamError)
    assert (e.position, e.requested, e.size) == (0, 4, 3)
    assert s.position == 0

    s.advance(2)
    for read in (s.get_int16, s.get_and_advance_uint16, s.get_float32,
                 s.get_int64, s.get_and_advance_float64):
        with pytest.raises(StreamBoundaryError):
            read()

    assert s.position == 2
    assert s.get_and_advance_uint8() == 3

    for read in (s.get_byte, s.get_int8, s.get_char):
        with pytest.raises(StreamBoundaryError):
            read()

    with pytest.raises(StreamBoundaryError):
        s.expect_and_advance_char(')')


def test_repr():
    s = Stream.from_string('ab')
    s.advance(1)
    assert repr(s) == '<Stream 1/2 line 1 column 2>'
