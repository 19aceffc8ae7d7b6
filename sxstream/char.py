# utf-8 bookkeeping for the stream

replacement = '\ufffd'

# ascii whitespace beyond newline tab and space, these mostly show up
# in files that have been near windows or a printer
whitespace_extra = ('\r', '\x0b', '\x0c')


known_names = {
    # the racket char names, used to render chars in error messages
    # so that nobody has to squint at a quoted newline
    '\x08': 'backspace',
    '\x0a': 'newline',
    '\x00': 'nul',
    '\x0c': 'page',
    '\x0d': 'return',
    '\x7f': 'rubout',
    '\x20': 'space',
    '\x09': 'tab',
    '\x0b': 'vtab',
}


def char_byte_count(codepoint):
    """ number of bytes needed to encode codepoint as utf-8

        takes an int or a single charachter str """
    if isinstance(codepoint, str):
        codepoint = ord(codepoint)

    if codepoint <= 0x7f:
        return 1
    elif codepoint <= 0x7ff:
        return 2
    elif codepoint <= 0xffff:
        return 3
    else:
        return 4


def lead_byte_count(byte):
    """ width of the sequence that starts with byte,
        None if byte cannot start a sequence """
    if byte < 0x80:
        return 1
    elif byte < 0xc0:  # continuation
        return None
    elif byte < 0xe0:
        return 2
    elif byte < 0xf0:
        return 3
    elif byte < 0xf8:
        return 4
    else:
        return None


def decode_char(buffer, offset):
    """ Decode one code point from buffer starting at offset.

    Returns (char, width). Malformed or truncated sequences decode to
    U+FFFD with a width of one byte so that callers always move forward.
    Raises IndexError if offset is at or past the end of buffer. """
    byte = buffer[offset]
    width = lead_byte_count(byte)
    if width is None:
        return replacement, 1
    elif width == 1:
        return chr(byte), 1

    chunk = buffer[offset:offset + width]
    if len(chunk) < width:
        return replacement, 1

    try:
        char = bytes(chunk).decode('utf-8')
    except UnicodeDecodeError:
        return replacement, 1

    return char, char_byte_count(char)


def char_name(char):
    """ render a char for diagnostics """
    if char in known_names:
        return known_names[char]

    return repr(char)
