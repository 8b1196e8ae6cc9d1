'''
Command line front end: decode an ECHI file into CSV.

    $ echi-decode [-v|-q] [-p|-n] [-f FORMAT] [-s CHAR] <input chr file> <csv file>

Input and output file names can be dashes (-), in which case the standard
input and output are used. Diagnostics go to the standard error.
'''
import argparse
import logging
import os
import sys

from .decoder import DecoderConfig, RecordStreamDecoder
from .formats import FORMATS, supported_versions
from .streams import ENCODING, Stream, OutputStream
from .exceptions import (
    TruncatedHeader,
    UnsupportedVersion,
    WriteFailure,
)


logger = logging.getLogger('echidecode')

EXIT_OK = 0
EXIT_OPEN_FAILURE = 1
EXIT_USAGE = 2  # what argparse uses
EXIT_UNSUPPORTED_VERSION = 3
EXIT_TRUNCATED_HEADER = 4
EXIT_WRITE_FAILURE = 5


def output_text(value):
    '''Option values end up in the output, they must be encodable.'''
    try:
        value.encode(ENCODING)
    except UnicodeEncodeError as e:
        raise argparse.ArgumentTypeError(f'{value!r} contains characters not representable in {ENCODING}') from e

    return value


def get_parser():
    defaults = DecoderConfig()
    parser = argparse.ArgumentParser(
        prog='echi-decode',
        description='Decode a CMS External Call History (ECHI) binary file into CSV.',
        epilog='Input and output file names can be dashes (-), in which case '
               'the standard input and output are used, respectively.',
    )
    parser.add_argument('-v', dest='verbose', action='store_true', default=None,
                        help='be verbose, print diagnostic line per every chr record')
    parser.add_argument('-q', dest='quiet', action='store_true',
                        help='be quiet even despite -v parameter set')
    parser.add_argument('-p', dest='header', action='store_true', default=None,
                        help='print CSV header line, listing all column names')
    parser.add_argument('-n', dest='no_header', action='store_true',
                        help='don\'t print header, takes precedence over -p')
    parser.add_argument('-f', dest='date_format', metavar='FORMAT', type=output_text,
                        default=defaults.date_format,
                        help='set date format in strftime syntax, an empty string means '
                             'seconds since the epoch (default: %(default)s)')
    parser.add_argument('-s', dest='string_delimiter', metavar='CHAR', type=output_text,
                        default=defaults.string_delimiter,
                        help='set string delimiter character, an empty string disables it '
                             '(default: %(default)s)')
    parser.add_argument('--list-formats', action='store_true',
                        help='list the supported format versions and exit')
    parser.add_argument('input', nargs='?', help='binary input file')
    parser.add_argument('output', nargs='?', help='CSV output file')

    return parser


def get_config(args):
    '''The quiet/no-header switches win over their counterpart.'''
    defaults = DecoderConfig()

    verbose = False if args.quiet else (args.verbose if args.verbose is not None else defaults.verbose)
    print_header = False if args.no_header else (args.header if args.header is not None else defaults.print_header)

    return DecoderConfig(
        verbose=verbose,
        print_header=print_header,
        date_format=args.date_format,
        string_delimiter=args.string_delimiter,
    )


def setup_logging(config):
    if 'DEBUG' in os.environ:
        level = logging.DEBUG
    else:
        level = logging.INFO if config.verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format='%(asctime)s %(message)s',
    )


def list_formats(out):
    for version in supported_versions():
        descriptor = FORMATS[version]
        out.write(f'{version:>4} {descriptor.length:>4} bytes {descriptor.count:>3} fields  {descriptor.description}\n')


def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.list_formats:
        list_formats(sys.stdout)
        return EXIT_OK

    if args.input is None or args.output is None:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    config = get_config(args)
    setup_logging(config)

    if config.verbose:
        logger.info('%s started', parser.prog)

    try:
        input = Stream(args.input)
    except OSError as e:
        logger.error('can\'t open input file %s for reading: %s', args.input, e.strerror or e)
        return EXIT_OPEN_FAILURE

    with input:
        try:
            output = OutputStream(args.output)
        except WriteFailure as e:
            logger.error('can\'t open output file %s for writing: %s', args.output, e.reason)
            return EXIT_OPEN_FAILURE

        try:
            with output:
                RecordStreamDecoder(input, output, config).run()
        except UnsupportedVersion as e:
            logger.error('%s', e)
            return EXIT_UNSUPPORTED_VERSION
        except TruncatedHeader as e:
            logger.error('%s', e)
            return EXIT_TRUNCATED_HEADER
        except WriteFailure as e:
            logger.error('%s', e)
            return EXIT_WRITE_FAILURE

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
