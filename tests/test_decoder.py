import io
import sys

import pytest

from echidecode.decoder import (
    DecoderConfig,
    FileHeader,
    RecordDecoder,
    RecordStreamDecoder,
    decode_file,
    serialize,
)
from echidecode.enum import DecoderPhase
from echidecode.exceptions import (
    TruncatedHeader,
    TruncatedRecord,
    UnsupportedVersion,
    WriteFailure,
)
from echidecode.formats import FORMATS, lookup
from echidecode.streams import OutputStream


# a R3V4 record, the values of the layout in order
R3V4_VALUES = [
    # CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART SEGSTOP TALKTIME
    1001, 1, 2, 3, 4, 60, 1000000000, 1000000060, 55,
    # DISPIVECTOR DISPSPLIT FIRSTIVECTOR SPLIT1 SPLIT2 SPLIT3 TKGRP
    5, 0xffff, 7, 1, 0xfffe, 3, 9,
    # ACD DISPOSITION DISPPRIORITY HELD SEGMENT EVENT1-9
    1, 2, 3, 0, 1, 11, 12, 13, 14, 15, 16, 17, 18, 19,
    # DISPVDN EQLOC FIRSTVDN ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTCWC
    '12345', '1A2B3', '67890', '4001', '4002', '', '5551234', '5556789', '1',
]

R3V4_ROW = (
    '1001,1,2,3,4,60,2001-09-09 01:46:40,2001-09-09 01:47:40,55,'
    '5,-1,7,1,-2,3,9,'
    '1,0,1,1,0,0,0,0,'
    '1,2,3,0,1,11,12,13,14,15,16,17,18,"19",'
    '"12345","1A2B3","67890","4001","4002","","5551234","5556789","1"'
)

CONFIG = DecoderConfig(verbose=False, print_header=False, date_format='%Y-%m-%d %H:%M:%S')


@pytest.fixture
def r3v4_record(build_record):
    return build_record(lookup(2), R3V4_VALUES, flags='10110000')


def test_file_header():
    header = FileHeader(b'\x02\x00\x00\x00\x07\x00\x00\x00')

    assert FileHeader.get_size() == 8
    assert header.version == 2
    assert header.sequence == 7


def test_decode_record(r3v4_record):
    decoder = RecordDecoder(lookup(2), CONFIG)

    assert len(r3v4_record) == 189
    assert decoder.decode_row(r3v4_record) == R3V4_ROW


def test_decode_record_raw_values(r3v4_record):
    """Without formatting nor quoting only DURATION and the signed fields change."""
    decoder = RecordDecoder(lookup(2), CONFIG.replace(date_format='', string_delimiter=''))

    values = decoder.decode(r3v4_record)

    assert len(values) == 47
    assert values[6:8] == [1000000000, 1000000060]
    assert values[16:24] == ['1', '0', '1', '1', '0', '0', '0', '0']
    assert values[38:] == R3V4_VALUES[30:]


def test_decode_record_truncated(r3v4_record):
    decoder = RecordDecoder(lookup(2), CONFIG)

    with pytest.raises(TruncatedRecord):
        decoder.decode(r3v4_record[:-1])


def test_decode_duration_quirk(build_record):
    values = list(R3V4_VALUES)
    values[5] = 0x80000001

    decoder = RecordDecoder(lookup(2), CONFIG.replace(date_format=''))
    decoded = decoder.decode(build_record(lookup(2), values, flags='00000000'))

    assert decoded[5] == -2147483647
    assert decoded[6] == 1000000060 + 2147483647


def test_decode_r16_overlapping_flags(build_record, sample_values):
    """From R16 the flags live in the bytes of a 16-bit field."""
    descriptor = lookup(16)
    values = sample_values(descriptor)
    # the 9th 16-bit field sits at offset 76
    assert descriptor.columns[23] == 'ORIG_LOCID'
    values[23] = 0x80a5
    values[6:10] = [0, 3600, 7200, 10800]

    decoder = RecordDecoder(descriptor, CONFIG.replace(date_format='%H:%M'))
    decoded = decoder.decode(build_record(descriptor, values))

    assert len(decoded) == 83
    assert decoded[6:10] == ['00:00', '01:00', '02:00', '03:00']
    assert decoded[23] == 0x80a5
    assert decoded[27:36] == ['1', '0', '1', '0', '0', '1', '0', '1', '1']
    assert decoded[53] == '"T44"'
    assert decoded[78] == '"T69"'
    # the trailing integers are not quoted
    assert decoded[79:83] == [70, 71, 72, 73]


@pytest.mark.parametrize('version', sorted(FORMATS))
def test_decode_every_version(version, build_record, sample_values):
    descriptor = lookup(version)
    values = sample_values(descriptor)
    raw = build_record(descriptor, values)

    decoded = RecordDecoder(descriptor).unpack(raw)

    offset = descriptor.bits.offset
    flags = format(int.from_bytes(raw[offset:offset + 2], 'big'), '016b')[:descriptor.bits.n]
    index = descriptor.bits.index

    assert len(decoded) == len(descriptor.columns)
    assert decoded[:index] == tuple(values[:index])
    assert ''.join(decoded[index:index + descriptor.bits.n]) == flags
    assert decoded[index + descriptor.bits.n:] == tuple(values[index:])


def test_serialize():
    assert serialize([1, '"a"', '0', -1]) == '1,"a",0,-1'


def test_stream_decoder(r3v4_record, file_header):
    """Header line, one record and a final count of one."""
    out = io.StringIO()
    decoder = RecordStreamDecoder(file_header(2, 7) + r3v4_record, out, CONFIG.replace(print_header=True))

    assert decoder.phase == DecoderPhase.AWAITING_HEADER
    assert decoder.run() == 1
    assert decoder.phase == DecoderPhase.DONE
    assert decoder.processed == 1
    assert decoder.header.sequence == 7

    lines = out.getvalue().splitlines()

    assert len(lines) == 2
    assert lines[0] == lookup(2).header
    assert lines[1] == R3V4_ROW
    assert len(lines[1].split(',')) == 47


def test_stream_decoder_no_header_line(r3v4_record, file_header):
    out = io.StringIO()

    RecordStreamDecoder(file_header(2) + r3v4_record * 3, out, CONFIG).run()

    assert out.getvalue() == (R3V4_ROW + '\n') * 3


def test_stream_decoder_step(r3v4_record, file_header):
    out = io.StringIO()
    decoder = RecordStreamDecoder(file_header(2) + r3v4_record * 2, out, CONFIG)

    assert decoder.step()[0] == 1001
    assert decoder.phase == DecoderPhase.STREAMING
    assert decoder.step() is not None
    assert decoder.step() is None
    assert decoder.step() is None
    assert decoder.processed == 2


def test_stream_decoder_partial_record(r3v4_record, file_header, caplog):
    """A partial record at the end is not an error."""
    out = io.StringIO()
    decoder = RecordStreamDecoder(file_header(2) + r3v4_record + r3v4_record[:100], out, CONFIG)

    assert decoder.run() == 1
    assert out.getvalue() == R3V4_ROW + '\n'
    assert 'discarding 100 trailing bytes' in caplog.text


def test_stream_decoder_no_records(file_header):
    out = io.StringIO()
    decoder = RecordStreamDecoder(file_header(170), out, CONFIG.replace(print_header=True))

    assert decoder.run() == 0
    assert out.getvalue() == lookup(170).header + '\n'


def test_stream_decoder_unsupported_version(r3v4_record, file_header):
    out = io.StringIO()
    decoder = RecordStreamDecoder(file_header(99) + r3v4_record, out, CONFIG.replace(print_header=True))

    with pytest.raises(UnsupportedVersion):
        decoder.run()

    assert decoder.processed == 0
    assert decoder.phase == DecoderPhase.DONE
    assert out.getvalue() == ''


@pytest.mark.parametrize('data', [b'', b'\x02\x00\x00'])
def test_stream_decoder_truncated_header(data):
    decoder = RecordStreamDecoder(data, io.StringIO(), CONFIG)

    with pytest.raises(TruncatedHeader):
        decoder.run()


def test_stream_decoder_read_header_once(file_header):
    decoder = RecordStreamDecoder(file_header(2), io.StringIO(), CONFIG)

    decoder.read_header()

    with pytest.raises(ValueError):
        decoder.read_header()


def test_stream_decoder_write_failure(r3v4_record, file_header):
    class Full(io.StringIO):
        def write(self, s):
            raise OSError(28, 'No space left on device')

    decoder = RecordStreamDecoder(file_header(2) + r3v4_record, Full(), CONFIG)

    with pytest.raises(WriteFailure) as excinfo:
        decoder.run()

    assert excinfo.value.reason == 'No space left on device'
    assert decoder.processed == 0


def test_stream_decoder_verbose(r3v4_record, file_header, caplog):
    caplog.set_level('INFO', logger='echidecode')

    RecordStreamDecoder(file_header(2, 7) + r3v4_record, io.StringIO(), CONFIG.replace(verbose=True)).run()

    assert 'version 2, sequence 7' in caplog.text
    assert 'processed record 1, call id 1001, segment 1' in caplog.text
    assert 'found 1 records' in caplog.text


def test_decode_file(tmp_path, r3v4_record, file_header):
    source = tmp_path / 'chr0001'
    source.write_bytes(file_header(2) + r3v4_record)
    target = tmp_path / 'out.csv'

    assert decode_file(str(source), str(target), CONFIG) == 1
    assert target.read_text(encoding='latin-1') == R3V4_ROW + '\n'


def test_config_defaults():
    config = DecoderConfig()

    assert config.verbose
    assert config.print_header
    assert config.date_format == '"%d.%m.%Y %H:%M:%S"'
    assert config.string_delimiter == '"'
    assert config.replace(verbose=False) == DecoderConfig(verbose=False)
    assert config.replace(verbose=False) != config


def test_stream_decoder_to_path(tmp_path, r3v4_record, file_header):
    """A decoder opening its own output leaves a complete file behind."""
    source = tmp_path / 'chr0001'
    source.write_bytes(file_header(2) + r3v4_record * 2)
    target = tmp_path / 'out.csv'

    decoder = RecordStreamDecoder(str(source), str(target), CONFIG.replace(print_header=True))

    assert decoder.run() == 2
    assert decoder.input.obj.closed
    assert decoder.output.obj.closed
    assert target.read_text(encoding='latin-1') == lookup(2).header + '\n' + (R3V4_ROW + '\n') * 2


def test_stream_decoder_to_path_on_error(tmp_path, file_header):
    target = tmp_path / 'out.csv'

    decoder = RecordStreamDecoder(file_header(99), str(target), CONFIG)

    with pytest.raises(UnsupportedVersion):
        decoder.run()

    assert decoder.output.obj.closed


def test_stream_decoder_to_stdout(r3v4_record, file_header, capfd):
    decoder = RecordStreamDecoder(file_header(2) + r3v4_record, '-', CONFIG)

    assert decoder.run() == 1

    out, _ = capfd.readouterr()
    assert out == R3V4_ROW + '\n'
    assert not sys.stdout.closed
    assert not sys.stdout.buffer.closed


def test_stream_decoder_leaves_given_streams_open(r3v4_record, file_header):
    out = io.StringIO()

    with OutputStream(out) as stream:
        RecordStreamDecoder(file_header(2) + r3v4_record, stream, CONFIG).run()

        assert not out.closed
        stream.write_line('still writable')

    assert out.getvalue().endswith('still writable\n')
