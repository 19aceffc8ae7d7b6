""" A byte buffer with a cursor.

The stream knows nothing about s-expressions, it only knows where it
is in the buffer, which line and column that corresponds to, and how
to read typed values at the current position. All fixed width reads
are little endian. """

import struct
from sxstream.char import decode_char


class SxstreamError(Exception): pass


class StreamBoundaryError(SxstreamError, IndexError):
    """ a read or advance would run past the end of the buffer """

    def __init__(self, position, requested, size):
        self.position = position
        self.requested = requested
        self.size = size
        super().__init__(f'cannot read {requested} byte(s) at position '
                         f'{position} of a {size} byte buffer')


# kind -> struct format, width is calcsize
_formats = {
    'byte':    '<B',
    'int8':    '<b',
    'int16':   '<h',
    'int32':   '<i',
    'int64':   '<q',
    'uint8':   '<B',
    'uint16':  '<H',
    'uint32':  '<I',
    'uint64':  '<Q',
    'float32': '<f',
    'float64': '<d',
}

_widths = {kind: struct.calcsize(fmt) for kind, fmt in _formats.items()}

kinds = ('char',) + tuple(_formats)


class Stream:

    @classmethod
    def from_bytes(cls, buffer):
        return cls(buffer)

    @classmethod
    def from_string(cls, text):
        return cls(text.encode('utf-8'))

    def __init__(self, buffer):
        # bytearray and memoryview are copied so nobody can mutate
        # the buffer out from under the cursor
        self._buffer = bytes(buffer)
        self._size = len(self._buffer)
        self._position = 0
        self._line = 1
        self._column = 1

    def __repr__(self):
        return (f'<{self.__class__.__name__} {self._position}/{self._size} '
                f'line {self._line} column {self._column}>')

    @property
    def buffer(self):
        return self._buffer

    @property
    def size(self):
        return self._size

    @property
    def position(self):
        return self._position

    @property
    def line(self):
        return self._line

    @property
    def column(self):
        return self._column

    @property
    def remaining(self):
        return self._size - self._position

    def is_empty(self):
        return self._position == self._size

    def advance(self, byte_count, columns=None):
        """ Move the cursor forward byte_count bytes.

        The column moves by byte_count unless the caller consumed
        characters, in which case it passes the number of characters
        as columns. The line never changes here, see advance_line. """
        if byte_count < 0:
            raise ValueError(f'cannot advance by {byte_count}')

        self._check(byte_count)
        self._position += byte_count
        self._column += byte_count if columns is None else columns

    def advance_line(self):
        """ start a new line, the position is not touched """
        self._line += 1
        self._column = 1

    def _check(self, count):
        if self._position + count > self._size:
            raise StreamBoundaryError(self._position, count, self._size)

    def _unpack(self, kind):
        if kind not in _widths:
            raise ValueError(f'unknown kind {kind!r}, expected one of {kinds}')

        self._check(_widths[kind])
        value, = struct.unpack_from(_formats[kind], self._buffer, self._position)
        return value

    def _char(self):
        self._check(1)
        return decode_char(self._buffer, self._position)

    # generic forms

    def get(self, kind):
        if kind == 'char':
            return self.get_char()

        return self._unpack(kind)

    def get_and_advance(self, kind):
        if kind == 'char':
            return self.get_and_advance_char()

        value = self._unpack(kind)
        self.advance(_widths[kind])
        return value

    def expect(self, kind, expected):
        return self.get(kind) == expected

    def expect_and_advance(self, kind, expected):
        """ advance past the next value only if it equals expected """
        if kind == 'char':
            char, width = self._char()
            if char == expected:
                self.advance(width, columns=1)
                return True

            return False

        if self._unpack(kind) == expected:
            self.advance(_widths[kind])
            return True

        return False

    # chars

    def get_char(self):
        char, _ = self._char()
        return char

    def get_and_advance_char(self):
        char, width = self._char()
        self.advance(width, columns=1)
        return char

    def expect_char(self, expected): return self.get_char() == expected
    def expect_and_advance_char(self, expected): return self.expect_and_advance('char', expected)

    # raw bytes

    def get_bytes(self, count):
        if count < 0:
            raise ValueError(f'cannot read {count} bytes')

        self._check(count)
        return self._buffer[self._position:self._position + count]

    def get_and_advance_bytes(self, count):
        value = self.get_bytes(count)
        self.advance(count)
        return value

    def expect_bytes(self, expected):
        return self.get_bytes(len(expected)) == bytes(expected)

    def expect_and_advance_bytes(self, expected):
        if self.expect_bytes(expected):
            self.advance(len(expected))
            return True

        return False

    # fixed width

    def get_byte   (self): return self._unpack('byte')
    def get_int8   (self): return self._unpack('int8')
    def get_int16  (self): return self._unpack('int16')
    def get_int32  (self): return self._unpack('int32')
    def get_int64  (self): return self._unpack('int64')
    def get_uint8  (self): return self._unpack('uint8')
    def get_uint16 (self): return self._unpack('uint16')
    def get_uint32 (self): return self._unpack('uint32')
    def get_uint64 (self): return self._unpack('uint64')
    def get_float32(self): return self._unpack('float32')
    def get_float64(self): return self._unpack('float64')

    def get_and_advance_byte   (self): return self.get_and_advance('byte')
    def get_and_advance_int8   (self): return self.get_and_advance('int8')
    def get_and_advance_int16  (self): return self.get_and_advance('int16')
    def get_and_advance_int32  (self): return self.get_and_advance('int32')
    def get_and_advance_int64  (self): return self.get_and_advance('int64')
    def get_and_advance_uint8  (self): return self.get_and_advance('uint8')
    def get_and_advance_uint16 (self): return self.get_and_advance('uint16')
    def get_and_advance_uint32 (self): return self.get_and_advance('uint32')
    def get_and_advance_uint64 (self): return self.get_and_advance('uint64')
    def get_and_advance_float32(self): return self.get_and_advance('float32')
    def get_and_advance_float64(self): return self.get_and_advance('float64')

    def expect_byte   (self, expected): return self.expect('byte', expected)
    def expect_int8   (self, expected): return self.expect('int8', expected)
    def expect_int16  (self, expected): return self.expect('int16', expected)
    def expect_int32  (self, expected): return self.expect('int32', expected)
    def expect_int64  (self, expected): return self.expect('int64', expected)
    def expect_uint8  (self, expected): return self.expect('uint8', expected)
    def expect_uint16 (self, expected): return self.expect('uint16', expected)
    def expect_uint32 (self, expected): return self.expect('uint32', expected)
    def expect_uint64 (self, expected): return self.expect('uint64', expected)
    def expect_float32(self, expected): return self.expect('float32', expected)
    def expect_float64(self, expected): return self.expect('float64', expected)

    def expect_and_advance_byte   (self, expected): return self.expect_and_advance('byte', expected)
    def expect_and_advance_int8   (self, expected): return self.expect_and_advance('int8', expected)
    def expect_and_advance_int16  (self, expected): return self.expect_and_advance('int16', expected)
    def expect_and_advance_int32  (self, expected): return self.expect_and_advance('int32', expected)
    def expect_and_advance_int64  (self, expected): return self.expect_and_advance('int64', expected)
    def expect_and_advance_uint8  (self, expected): return self.expect_and_advance('uint8', expected)
    def expect_and_advance_uint16 (self, expected): return self.expect_and_advance('uint16', expected)
    def expect_and_advance_uint32 (self, expected): return self.expect_and_advance('uint32', expected)
    def expect_and_advance_uint64 (self, expected): return self.expect_and_advance('uint64', expected)
    def expect_and_advance_float32(self, expected): return self.expect_and_advance('float32', expected)
    def expect_and_advance_float64(self, expected): return self.expect_and_advance('float64', expected)
