"""
A Field is a slot of a fixed-length record: something directly unpackable
from the bytes without need of any other information.

Fields here are descriptors, they don't store the unpacked data: unpack()
returns the values and leaves the field untouched so that the same instance
can be shared by all the records of a file.
"""
import logging
import struct

from bitstring import Bits

from .meta import FieldBase
from .exceptions import UnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, default=None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.default = default

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_count(self):
        return 1

    count = property(
        fget=lambda self: self._get_count(),
        doc="number of values produced by unpack()",
    )

    def _read(self, stream):
        raw = stream.read(self.size)
        if len(raw) != self.size:
            self.logger.debug('short read for %r: %d bytes instead of %d', self, len(raw), self.size)
            raise UnpackException(f'expected {self.size} bytes, got {len(raw)}', chain=[])

        return raw

    def unpack(self, stream):
        '''Read size bytes from the stream and return a tuple with the decoded values.'''
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    little-endian integers from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.format)

    def get_format(self):
        return '<%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def unpack(self, stream):
        return struct.unpack(self.get_format(), self._read(stream))


class StringField(Field):
    """Fixed-width text, padded on the right with spaces or NULs.

    The padding is stripped, anything in the middle is preserved as it is."""

    PADDING = b' \x00'

    def __init__(self, n, encoding='latin-1', **kw):
        self.length = n
        self.encoding = encoding
        super().__init__(default='', **kw)

    def __repr__(self):
        return '<%s(%d)>' % (self.__class__.__name__, self.length)

    def __len__(self):
        return self.length

    def _get_size(self):
        return self.length

    def unpack(self, stream):
        return (self._read(stream).rstrip(self.PADDING).decode(self.encoding),)


class PaddingField(Field):
    '''Skip n bytes without producing any value'''

    def __init__(self, n, **kw):
        self.length = n
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%d)>' % (self.__class__.__name__, self.length)

    def _get_size(self):
        return self.length

    def _get_count(self):
        return 0

    def unpack(self, stream):
        self._read(stream)
        return ()


class ArrayField(Field):
    '''Un-pack n consecutive copies of the same field.

    The values are returned flattened, so an array of three integers
    contributes three columns to the record.'''

    def __init__(self, field, n, **kw):
        if not isinstance(n, int) or n < 1:
            raise ValueError('n is \'%s\' must be a positive integer' % n)

        self.field = field
        self.n = n
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.field!r}x{self.n})>'

    def __len__(self):
        return self.n

    def _get_size(self):
        return self.field.size * self.n

    def _get_count(self):
        return self.field.count * self.n

    def unpack(self, stream):
        values = ()
        for idx in range(self.n):
            try:
                values += self.field.unpack(stream)
            except UnpackException as e:
                e.chain.append(str(idx))
                raise

        return values


class BitVectorField(Field):
    '''A packed vector of flags.

    This is not a slot of the layout: it's read independently from the raw
    record starting at the byte indicated by offset, most significant bit
    first, and each bit becomes a "0" or "1" value. The index is the position
    in the decoded sequence where the flags are inserted.'''

    def __init__(self, offset, n, index, **kw):
        self.offset = offset
        self.n = n
        self.index = index
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}(@{self.offset}, {self.n} bits, index={self.index})>'

    def __len__(self):
        return self.n

    def _get_size(self):
        # the bytes touched, bits are not required to fill the last one
        return -(-self.n // 8)

    def _get_count(self):
        return self.n

    def extract(self, raw):
        '''Obtain the flags from a whole record.'''
        start = self.offset * 8
        if len(raw) * 8 < start + self.n:
            raise UnpackException(f'expected {self.n} bits at offset {self.offset}, got {len(raw)} bytes', chain=[])

        return tuple(Bits(raw)[start:start + self.n].bin)
