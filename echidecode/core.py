"""
Core module for the abstraction of a fixed-length record.

Two ways of describing the bytes are available:

 1. Chunk: a class with named fields declared as class attributes, used for
    small structures like the file header where every slot has a name.

 2. Layout: an ordered sequence of anonymous slots producing a flat sequence
    of values, used for the records themselves where the names are only
    needed to print the header line.
"""
import io
import logging
from typing import List, Sequence, Tuple

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    UnpackException,
    TruncatedRecord,
)


class Chunk(metaclass=MetaChunk):
    """
    A fixed structure made of named fields: the unpacked values are available
    as attributes named like the fields.

        class Header(Chunk):
            version  = fields.StructField('I')
            sequence = fields.StructField('I')

        header = Header(b'\\x02\\x00\\x00\\x00\\x07\\x00\\x00\\x00')
        header.version  # 2
    """

    def __init__(self, stream=None):
        self.logger = logging.getLogger(__name__)

        if stream is not None:
            if not isinstance(stream, Stream):
                stream = Stream(stream)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream.name))
            self.unpack(stream)

    @classmethod
    def get_ordered_fields_name(cls) -> List[str]:
        return cls._meta.fields

    @classmethod
    def get_fields(cls) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, field) for each field.'''
        return [(_, getattr(cls, _)) for _ in cls.get_ordered_fields_name()]

    @classmethod
    def get_size(cls) -> int:
        return sum(field.size for _, field in cls.get_fields())

    def __repr__(self):
        msg = []
        for field_name in self.get_ordered_fields_name():
            msg.append('%s=%r' % (field_name, getattr(self, field_name)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def unpack(self, stream):
        '''Read each field in order of declaration.

        A short read is reported as an UnpackException whose chain contains
        the name of the field.'''
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            try:
                values = field.unpack(stream)
            except UnpackException as e:
                e.chain.append(field_name)
                raise

            setattr(self, field_name, values[0] if len(values) == 1 else values)

        return self


class Layout(object):
    '''Ordered sequence of slots describing a whole record.

    unpack() is pure: the same Layout is shared by all the records.'''

    def __init__(self, slots: Sequence[Field]):
        self.slots = tuple(slots)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(repr(_) for _ in self.slots))

    def __iter__(self):
        return iter(self.slots)

    def __len__(self):
        return len(self.slots)

    @property
    def size(self) -> int:
        '''The sum of the widths of the slots.'''
        return sum(slot.size for slot in self.slots)

    @property
    def count(self) -> int:
        '''The number of values produced by unpack().'''
        return sum(slot.count for slot in self.slots)

    def unpack(self, raw: bytes) -> Tuple:
        '''A buffer of any length other than size is rejected.'''
        if len(raw) < self.size:
            raise TruncatedRecord(self.size, len(raw))
        if len(raw) > self.size:
            raise UnpackException(f'record too long: expected {self.size} bytes, got {len(raw)}', chain=[])

        stream = io.BytesIO(raw)
        values = ()
        for idx, slot in enumerate(self.slots):
            try:
                values += slot.unpack(stream)
            except UnpackException as e:
                e.chain.append(str(idx))
                raise

        return values


def splice(values: Sequence, inserted: Sequence, index: int) -> Tuple:
    '''Return a new tuple with the elements of inserted placed at index,
    the following values are shifted to the right.'''
    if not 0 <= index <= len(values):
        raise IndexError(f'splice index {index} out of range for {len(values)} values')

    return tuple(values[:index]) + tuple(inserted) + tuple(values[index:])
