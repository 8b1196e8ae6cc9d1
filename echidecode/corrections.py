'''
Corrections applied to the values of a decoded record.

The steps must run in the order of apply_corrections(): the duration fix-up
rewrites SEGSTART before it's formatted as a date. Each step touches only its
own indexes and works in place on a list of values.
'''
import logging
import struct
import time
from typing import List

from .descriptor import FormatDescriptor


logger = logging.getLogger(__name__)

DURATION = 5
SEGSTART = 6

# starting from R16 SEGSTART and SEGSTOP are followed by their UTC copy
UTC_VERSION = 16


def to_signed32(value: int) -> int:
    return struct.unpack('<i', struct.pack('<I', value))[0]


def to_signed16(value: int) -> int:
    return struct.unpack('<h', struct.pack('<H', value))[0]


def segstop_index(version: int) -> int:
    return 8 if version >= UTC_VERSION else 7


def timestamp_range(version: int) -> range:
    '''SEGSTART, SEGSTOP and from R16 their UTC columns.'''
    return range(SEGSTART, 10 if version >= UTC_VERSION else 8)


def fix_duration(values: List, version: int) -> List:
    '''CMS sometimes writes a negative DURATION as an unsigned integer and
    SEGSTART is then wrong too: DURATION is read back as signed and SEGSTART
    is recalculated from SEGSTOP.'''
    if values[DURATION] > 0x7fffffff:
        logger.debug('DURATION quirk for call id %s: 0x%08x', values[0], values[DURATION])
        values[DURATION] = to_signed32(values[DURATION])
        values[SEGSTART] = values[segstop_index(version)] - values[DURATION]

    return values


def format_timestamps(values: List, version: int, date_format: str) -> List:
    '''Render the epoch seconds as UTC dates, nothing happens when date_format is empty.'''
    if not date_format:
        return values

    for idx in timestamp_range(version):
        values[idx] = time.strftime(date_format, time.gmtime(values[idx]))

    return values


def reinterpret_signed(values: List, indexes) -> List:
    for idx in indexes:
        values[idx] = to_signed16(values[idx])

    return values


def delimit_strings(values: List, indexes, delimiter: str) -> List:
    if not delimiter:
        return values

    for idx in indexes:
        values[idx] = f'{delimiter}{values[idx]}{delimiter}'

    return values


def apply_corrections(values, descriptor: FormatDescriptor, date_format='', delimiter='') -> List:
    '''Return a new list with all the corrections applied, in order.'''
    values = list(values)

    fix_duration(values, descriptor.version)
    format_timestamps(values, descriptor.version, date_format)
    reinterpret_signed(values, descriptor.signed)
    delimit_strings(values, descriptor.string_range, delimiter)

    return values
