from .sexp import (
    configure,
    make_do_path,
    __version__)

# entry points
from .sexp import (
    parse,
    from_string,
    from_bytes,
    read,)

# ast nodes
from .sexp import (
    Atom,
    List,)

# parse errors
from .sexp import (
    ParseError,
    UnexpectedChar,
    UnexpectedEndOfInput,)

# exceptions
from .sexp import SexpSyntaxError
from .stream import (
    SxstreamError,
    StreamBoundaryError,)

# stream
from .stream import Stream
from .char import char_byte_count

# configs
from .sexp import (
    conf_sexp,
    conf_strict,)
