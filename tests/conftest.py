import struct

import pytest
from bitstring import BitArray, Bits

from echidecode.fields import ArrayField, PaddingField, StringField, StructField


def _pack_slot(slot, values):
    if isinstance(slot, ArrayField):
        return b''.join(_pack_slot(slot.field, values) for _ in range(slot.n))
    if isinstance(slot, PaddingField):
        return b'\x00' * slot.length
    if isinstance(slot, StringField):
        return next(values).encode('latin-1').ljust(slot.length, b' ')
    if isinstance(slot, StructField):
        return struct.pack(slot.get_format(), next(values))

    raise TypeError(f'don\'t know how to pack {slot!r}')


def _build_record(descriptor, values, flags=None):
    '''Synthesize a record from the values of its layout (bits excluded).

    The flags, if any, are written over the bytes at the offset of the bit
    vector after the layout is packed.'''
    values = list(values)
    assert len(values) == descriptor.layout.count

    it = iter(values)
    raw = b''.join(_pack_slot(slot, it) for slot in descriptor.layout)

    if flags is not None:
        bits = BitArray(raw)
        start = descriptor.bits.offset * 8
        bits[start:start + len(flags)] = Bits(bin=flags)
        raw = bits.bytes

    return raw


def _kinds(slot):
    if isinstance(slot, ArrayField):
        for _ in range(slot.n):
            yield from _kinds(slot.field)
    elif isinstance(slot, StringField):
        yield slot
    elif isinstance(slot, StructField):
        yield slot


def _sample_values(descriptor):
    '''Recognizable values for every slot: integers are small, texts are
    tagged with their position and fit their width.'''
    values = []
    for idx, slot in enumerate(_ for s in descriptor.layout for _ in _kinds(s)):
        if isinstance(slot, StringField):
            values.append(f'T{idx}'[:slot.length])
        else:
            values.append(idx % (1 << (8 * slot.size)))

    return values


@pytest.fixture
def build_record():
    return _build_record


@pytest.fixture
def sample_values():
    return _sample_values


@pytest.fixture
def file_header():
    def _file_header(version, sequence=1):
        return struct.pack('<II', version, sequence)

    return _file_header
