import argparse
import logging
import sys

from .errors import WhitespaceError
from .parser import parse
from .resolver import resolve
from .vm import execute

logger = logging.getLogger('whitespace')


def init_logger(verbose):
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s - %(message)s"))
    logger.addHandler(handler)

    return handler


def build_parser():
    parser = argparse.ArgumentParser(prog='whitespace', description='Run a whitespace program')
    parser.add_argument('command', nargs='?', choices=['run', 'list'], default='run',
                        help='run the program (default), or list the instructions it contains')
    parser.add_argument('file', metavar='program',
                        help='the whitespace program to read')
    parser.add_argument('--strict-labels', action='store_true',
                        help='reject programs that define the same label twice')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log parsing and execution details')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    handler = init_logger(args.verbose)

    try:
        try:
            with open(args.file, encoding='utf-8', newline='') as f:
                code = f.read()
        except (OSError, UnicodeDecodeError) as error:
            print(f'Error: {error}', file=sys.stderr)
            return 1

        try:
            instructions = parse(code)
            if args.command == 'list':
                for instruction in instructions:
                    print(instruction)
                return 0
            execute(resolve(instructions, strict=args.strict_labels))
        except WhitespaceError as error:
            sys.stdout.flush()
            logger.error('%s: %s', type(error).__name__, error)
            return 1
        return 0
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
