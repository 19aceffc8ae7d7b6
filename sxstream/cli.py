""" sxstream parse s-expressions

Usage:
    sxstream parse [options] [<path>...]

Options:
    --strict       only newline tab and space are whitespace
    --fuzz
    -d --debug
"""

import sys
import pathlib
import clifn
from sxstream import sexp as sexpmod
from sxstream.sexp import (
    configure, conf_sexp, conf_strict, from_bytes, make_do_path, ParseError)

parse_sexp = configure(**conf_sexp)
parse_strict = configure(**conf_strict)


def readFromStdIn(stdin=None):
    from select import select
    if stdin is None:
        from sys import stdin
    if select([stdin], [], [], 0.0)[0]:
        return stdin.buffer


def parse_sources(sources, parse=parse_sexp):
    """ sources are (name, path_or_fd) pairs, name is what gets printed """
    parse_path = make_do_path(lambda data: from_bytes(data, parse=parse))

    sexps, fails = [], []
    for name, source in sources:
        result = parse_path(source)
        if isinstance(result, ParseError):
            fails.append((name, result))
            print(f'{name}: {result.message}', file=sys.stderr)
        else:
            sexps.append(result)
            print(repr(result))

    return sexps, fails


class Options(clifn.Options):

    @property
    def path(self):
        return [pathlib.Path(path).expanduser() for path in self._args['<path>']]


class Main(clifn.Dispatcher):

    def default(self):
        # parse is the only command
        return self.parse()

    def parse(self):
        sexpmod.debug = self.options.debug

        parse = parse_strict if self.options.strict else parse_sexp
        if not self.options.path:
            stdin = readFromStdIn()
            sources = (('<stdin>', stdin),) if stdin is not None else tuple()
        else:
            sources = [(path, path) for path in self.options.path]

        return parse_sources(sources, parse=parse)


def main():
    options, *ad = Options.setup(__doc__, version=f'sxstream {sexpmod.__version__}')

    main = Main(options)

    if main.options.debug:
        print(main.options)

    if options.fuzz:
        import os
        import afl
        while afl.loop(55555):
            out = main()

        os._exit(0)
    else:
        sexps, fails = main()
        if fails:
            sys.exit(1)


if __name__ == '__main__':
    main()
