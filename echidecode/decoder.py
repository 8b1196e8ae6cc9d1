"""
Decoding of a whole ECHI file.

The file starts with an 8-byte header carrying the format version and the
sequence number of the file; all the records that follow have the length
given by the format. The decoder goes through three phases

 1. AWAITING_HEADER: the header is read and the format resolved
 2. STREAMING: a record at a time is read, decoded and written as a row
 3. DONE: the input is exhausted, a partial record at the end is discarded
"""
import logging
from typing import List, Optional, Sequence

from . import fields
from .core import Chunk, splice
from .corrections import apply_corrections
from .descriptor import FormatDescriptor
from .enum import DecoderPhase
from .formats import lookup
from .streams import Stream, OutputStream
from .exceptions import (
    TruncatedHeader,
    UnpackException,
    WriteFailure,
)


class DecoderConfig(object):
    '''Presentation settings of the decoder.

    An empty date_format leaves the timestamps as seconds since the epoch,
    an empty string_delimiter leaves the text fields unquoted. The quotes
    of the default date format are part of the format itself.'''

    DATE_FORMAT = '"%d.%m.%Y %H:%M:%S"'
    STRING_DELIMITER = '"'

    def __init__(self, verbose=True, print_header=True, date_format=DATE_FORMAT, string_delimiter=STRING_DELIMITER):
        self.verbose = verbose
        self.print_header = print_header
        self.date_format = date_format
        self.string_delimiter = string_delimiter

    def __repr__(self):
        return '<%s(verbose=%r, print_header=%r, date_format=%r, string_delimiter=%r)>' % (
            self.__class__.__name__,
            self.verbose,
            self.print_header,
            self.date_format,
            self.string_delimiter,
        )

    def __eq__(self, other):
        if not isinstance(other, DecoderConfig):
            return NotImplemented
        return vars(self) == vars(other)

    def replace(self, **kwargs):
        '''Return a copy with some settings changed'''
        settings = dict(vars(self))
        settings.update(kwargs)
        return self.__class__(**settings)


class FileHeader(Chunk):
    version  = fields.StructField('I')
    sequence = fields.StructField('I')


def serialize(values: Sequence) -> str:
    return ','.join(str(_) for _ in values)


class RecordDecoder(object):
    '''Decode the records of a given format, one at a time.'''

    def __init__(self, descriptor: FormatDescriptor, config: DecoderConfig = None):
        self.descriptor = descriptor
        self.config = config or DecoderConfig()

    def unpack(self, raw: bytes) -> tuple:
        '''Raw values with the flags in place, no correction applied'''
        values = self.descriptor.layout.unpack(raw)
        bits = self.descriptor.bits

        return splice(values, bits.extract(raw), bits.index)

    def decode(self, raw: bytes) -> List:
        return apply_corrections(
            self.unpack(raw),
            self.descriptor,
            date_format=self.config.date_format,
            delimiter=self.config.string_delimiter,
        )

    def decode_row(self, raw: bytes) -> str:
        return serialize(self.decode(raw))


class RecordStreamDecoder(object):
    '''Drive the decoding of a file from the header to the last record.

    input can be a path ('-' is the standard input), bytes or a binary file
    object; output a path ('-' is the standard output) or a text file object.
    The streams opened here are closed when run() returns, the ones passed
    in as Stream/OutputStream are left to the caller.'''

    def __init__(self, input, output, config: DecoderConfig = None):
        self.logger = logging.getLogger(__name__)
        self.config = config or DecoderConfig()
        self._owned = []

        if not isinstance(input, Stream):
            input = Stream(input)
            self._owned.append(input)
        self.input = input

        if not isinstance(output, OutputStream):
            try:
                output = OutputStream(output)
            except WriteFailure:
                self.close()
                raise
            self._owned.append(output)
        self.output = output

        self.phase = DecoderPhase.AWAITING_HEADER
        self.header: Optional[FileHeader] = None
        self.descriptor: Optional[FormatDescriptor] = None
        self.record_decoder: Optional[RecordDecoder] = None
        self.processed = 0

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.input.name}, phase={self.phase.name}, processed={self.processed})>'

    def read_header(self) -> FileHeader:
        if self.phase != DecoderPhase.AWAITING_HEADER:
            raise ValueError(f'header already read, phase is {self.phase.name}')

        # whatever happens from now on we are not going back
        self.phase = DecoderPhase.DONE

        size = FileHeader.get_size()
        raw = self.input.read_exact(size)
        try:
            self.header = FileHeader(raw)
        except UnpackException:
            raise TruncatedHeader(len(raw)) from None

        self.descriptor = lookup(self.header.version)
        self.record_decoder = RecordDecoder(self.descriptor, self.config)

        if self.config.verbose:
            self.logger.info('processing file %s, version %d, sequence %d',
                             self.input.name, self.header.version, self.header.sequence)

        if self.config.print_header:
            self.output.write_line(self.descriptor.header)

        self.phase = DecoderPhase.STREAMING

        return self.header

    def step(self) -> Optional[List]:
        '''Decode the next record and write it, None when there is nothing left.'''
        if self.phase == DecoderPhase.AWAITING_HEADER:
            self.read_header()

        if self.phase == DecoderPhase.DONE:
            return None

        length = self.descriptor.length
        raw = self.input.read_exact(length)
        if len(raw) < length:
            if raw:
                self.logger.warning('discarding %d trailing bytes, a record is %d bytes long', len(raw), length)
            self.phase = DecoderPhase.DONE
            return None

        values = self.record_decoder.decode(raw)
        self.output.write_line(serialize(values))
        self.processed += 1

        if self.config.verbose:
            self.logger.info('processed record %d, call id %s, segment %s',
                             self.processed, values[0], values[self.descriptor.segment])

        return values

    def close(self):
        '''Close the streams opened by the decoder itself, output first.'''
        while self._owned:
            self._owned.pop().close()

    def run(self) -> int:
        '''Decode everything, it returns the number of records processed.'''
        try:
            while self.step() is not None:
                pass
        finally:
            self.close()

        if self.config.verbose:
            self.logger.info('file %s processed successfully, found %d records', self.input.name, self.processed)

        return self.processed


def decode_file(input, output, config: DecoderConfig = None) -> int:
    with Stream(input) as stream, OutputStream(output) as out:
        return RecordStreamDecoder(stream, out, config).run()
