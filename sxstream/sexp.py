# parse
# caste

# TODO classify atoms into numbers and symbols, right now
# both come out as Atom and it is up to the caller to caste

__version__ = '0.1.0'

from sxstream.char import whitespace_extra, char_name
from sxstream.stream import Stream, SxstreamError

debug = False


class SexpSyntaxError(SxstreamError, SyntaxError):

    def __init__(self, message, line, column, error=None):
        super().__init__(message)
        self.lineno = line
        self.offset = column
        self.error = error


class _m:
    """ helper methods"""

    def eq_value(self, other):
        return type(self) == type(other) and self.value == other.value

    def eq_collect(self, other):
        return type(self) == type(other) and self.collect == other.collect

    def eq_fields(self, other):
        return type(self) == type(other) and self._fields() == other._fields()


# abstract syntax tree node types

class Ast:
    """ Nodes are immutable once built. Source bounds are byte
        offsets into the buffer they were read from and do not
        take part in equality. """

    _point_beg = None
    _point_end = None
    _frozen = False

    def __setattr__(self, name, value):
        if self._frozen:
            raise AttributeError(f'{self.__class__.__name__} is immutable')

        super().__setattr__(name, value)

    def _set_bounds(self, beg=None, end=None):
        """ only while building, a frozen node refuses like any other attribute """
        self._point_beg = beg
        self._point_end = end
        return self

    @property
    def point_beg(self):
        return self._point_beg

    @property
    def point_end(self):
        return self._point_end

    def _pts(self):
        return f' ::{self._point_beg}:{self._point_end}' if debug else ''


class Atom(Ast):
    """ Numbers, identifiers, booleans, and more.
        These are left uninterpreted. """

    __eq__ = _m.eq_value

    def __init__(self, value, bounds=(None, None)):
        self.value = value
        self._set_bounds(*bounds)
        self._frozen = True

    def __hash__(self):
        return hash((self.__class__, self.value))

    def __repr__(self):
        return f'<{self.__class__.__name__[:2]} {self.value}{self._pts()}>'

    def caste(self, typef=None):
        return self.value if typef is None else typef(self.value)


class List(Ast):

    __eq__ = _m.eq_collect

    _o, _c = '()'

    @classmethod
    def from_elements(cls, *elements):
        return cls(elements)

    def __init__(self, collect, bounds=(None, None)):
        self.collect = tuple(collect)
        self._set_bounds(*bounds)
        self._frozen = True

    def __hash__(self):
        return hash((self.__class__, self.collect))

    def __repr__(self):
        if not self.collect:
            return f'<{self._o}{self._c}{self._pts()}>'

        inner = ' '.join(repr(c) for c in self.collect)
        return f'<{self._o} {inner} {self._c}{self._pts()}>'

    def __len__(self):
        return len(self.collect)

    def __iter__(self):
        return iter(self.collect)

    def __getitem__(self, index):
        return self.collect[index]

    @property
    def items(self):
        return self.collect

    def caste(self, typef=None):
        """ Recursively caste all nested forms, children first. """
        value = [c.caste(typef) for c in self.collect]
        return value if typef is None else typef(value)


# parse errors are values, the parser returns them instead of raising

class ParseError:

    __eq__ = _m.eq_fields

    def __init__(self, expected, line, column):
        self.expected = expected
        self.line = line
        self.column = column

    def _fields(self):
        return self.expected, self.line, self.column

    def __hash__(self):
        return hash((self.__class__, self._fields()))

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.message!r}>'

    def _where(self):
        return f'line {self.line} column {self.column}'

    def exception(self):
        """ the equivalent exception, for callers who want to raise """
        return SexpSyntaxError(self.message, self.line, self.column, error=self)


class UnexpectedChar(ParseError):

    def __init__(self, expected, found, line, column):
        super().__init__(expected, line, column)
        self.found = found

    def _fields(self):
        return self.expected, self.found, self.line, self.column

    @property
    def message(self):
        return (f'unexpected {char_name(self.found)} at {self._where()}, '
                f'expected {self.expected}')


class UnexpectedEndOfInput(ParseError):

    @property
    def message(self):
        return f'unexpected end of input at {self._where()}, expected {self.expected}'


def configure(additional_whitespace=''.join(whitespace_extra),

              ## tokens

              t_newline='\n',
              t_tab='\t',
              t_space=' ',
              t_beg_list_p='(',
              t_end_list_p=')',):
    """ Returns a top level parse function for streams.

    sexp -> wss (atom | '(' list) wss
    list -> '(' wss sexp* ')'
    atom -> symbol | number """

    toks = (t_newline, t_tab, t_space, t_beg_list_p, t_end_list_p,
            *additional_whitespace)
    bad = [t for t in toks if len(t) != 1]
    if bad:
        raise ValueError(f'tokens must be single charachters: {bad!r}')

    whitespace = (t_newline, t_tab, t_space) + tuple(_ for _ in additional_whitespace)
    atom_ends = (t_beg_list_p, t_end_list_p, *whitespace)
    exp_end = repr(t_end_list_p)

    def skip_whitespace(stream):
        while not stream.is_empty():
            char = stream.get_char()
            if char not in whitespace:
                break

            stream.get_and_advance_char()
            if char == t_newline:
                stream.advance_line()

    def parse_atom(stream):
        line, column = stream.line, stream.column
        point_beg = stream.position
        while not stream.is_empty() and stream.get_char() not in atom_ends:
            stream.get_and_advance_char()

        point_end = stream.position
        if point_end == point_beg:
            return UnexpectedEndOfInput('atom', line, column)

        text = stream.buffer[point_beg:point_end].decode('utf-8', errors='replace')
        return Atom(text, bounds=(point_beg, point_end))

    def parse_list(stream, point_beg):
        collect = []
        skip_whitespace(stream)
        while True:
            skip_whitespace(stream)
            sexp = parse_sexp(stream)
            if isinstance(sexp, ParseError):
                # a failed element just means there are no more elements
                if debug:
                    print('list end:', sexp)
                break

            collect.append(sexp)

        if stream.is_empty():
            return UnexpectedEndOfInput(exp_end, stream.line, stream.column)

        line, column = stream.line, stream.column
        found = stream.get_char()
        if not stream.expect_and_advance_char(t_end_list_p):
            return UnexpectedChar(exp_end, found, line, column)

        return List(collect, bounds=(point_beg, stream.position))

    def parse_sexp(stream):
        skip_whitespace(stream)
        if stream.is_empty():
            return UnexpectedEndOfInput('atom or list', stream.line, stream.column)

        point_beg = stream.position
        if stream.expect_and_advance_char(t_beg_list_p):
            sexp = parse_list(stream, point_beg)
        else:
            sexp = parse_atom(stream)

        skip_whitespace(stream)
        if debug:
            print('sexp:', sexp, stream)

        return sexp

    def parse(stream):
        """ Parse exactly one expression from stream.

        Returns an Atom or List, or a ParseError. Anything left
        over in the stream is an error even if the expression
        itself failed, so a stray close paren is reported as
        the unexpected charachter that it is. """
        sexp = parse_sexp(stream)
        if not stream.is_empty():
            return UnexpectedChar('end of input', stream.get_char(),
                                  stream.line, stream.column)

        return sexp

    return parse


# configs

conf_sexp = {}

conf_strict = dict(
    # only newline tab and space
    additional_whitespace='',)

parse = configure(**conf_sexp)


def from_string(text, parse=parse):
    return parse(Stream.from_string(text))


def from_bytes(buffer, parse=parse):
    return parse(Stream.from_bytes(buffer))


def read(source, parse=parse):
    """ like from_string and from_bytes but raises on failure """
    if isinstance(source, str):
        result = from_string(source, parse=parse)
    else:
        result = from_bytes(source, parse=parse)

    if isinstance(result, ParseError):
        raise result.exception()

    return result


def make_do_path(do):
    """ adapt a function that takes bytes to paths and open files """
    def do_path(path_or_fd):
        if hasattr(path_or_fd, 'read'):  # stdin probably
            data = path_or_fd.read()
            if isinstance(data, str):
                data = data.encode('utf-8')
        else:
            with open(path_or_fd, 'rb') as f:
                data = f.read()

        return do(data)

    return do_path
