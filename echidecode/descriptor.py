'''
Description of one version of the ECHI record format.

A FormatDescriptor is pure data: every version behaves the same way and only
the numbers change, so there is no subclass per version. The descriptor checks
its own consistency when built, a broken table can't reach the decoder.
'''
import logging
from typing import Iterable, Optional, Sequence

from .core import Layout
from .fields import Field, BitVectorField
from .exceptions import InconsistentFormat


logger = logging.getLogger(__name__)


class FormatDescriptor(object):
    '''
    The attributes are

     - version: the tag found in the file header
     - length: the exact size in bytes of every record
     - columns: the names of the decoded fields, in order
     - layout: the slots unpacked from the record
     - bits: the packed flags, spliced into the values at bits.index
     - signed: positions (after the splice) holding signed 16-bit values
     - segment: position of the SEGMENT field
     - strstart/strstop: inclusive range of the text fields, strstop
       defaults to the last field
    '''

    def __init__(self, version: int, length: int, columns: Sequence[str], layout: Iterable[Field],
                 bits: BitVectorField, signed: Iterable[int], segment: int, strstart: int,
                 strstop: Optional[int] = None, description: str = ''):
        self.version = version
        self.length = length
        self.columns = tuple(columns)
        self.layout = layout if isinstance(layout, Layout) else Layout(layout)
        self.bits = bits
        self.signed = tuple(signed)
        self.segment = segment
        self.strstart = strstart
        self.strstop = strstop
        self.description = description

        self.validate()

    def __repr__(self):
        return f'<{self.__class__.__name__}(version={self.version}, length={self.length}, fields={self.count})>'

    def __setattr__(self, name, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(f'{self.__class__.__name__} is immutable')
        super().__setattr__(name, value)

    @property
    def count(self) -> int:
        '''Number of values of a decoded record, bits included.'''
        return self.layout.count + self.bits.count

    @property
    def header(self) -> str:
        return ','.join(self.columns)

    @property
    def string_range(self) -> range:
        '''The indexes of the text fields.'''
        stop = self.strstop if self.strstop is not None else self.count - 1
        return range(self.strstart, stop + 1)

    def validate(self):
        size = self.layout.size
        if size != self.length:
            raise InconsistentFormat(f'version {self.version}: layout is {size} bytes instead of {self.length}')

        if len(self.columns) != self.count:
            raise InconsistentFormat(
                f'version {self.version}: {len(self.columns)} columns for {self.count} fields')

        if not 0 <= self.bits.index <= self.layout.count:
            raise InconsistentFormat(f'version {self.version}: bits index {self.bits.index} out of range')

        if self.bits.offset + self.bits.size > self.length:
            raise InconsistentFormat(f'version {self.version}: bits at offset {self.bits.offset} outside the record')

        for index in self.signed + (self.segment, self.strstart):
            if not 0 <= index < self.count:
                raise InconsistentFormat(f'version {self.version}: index {index} out of range')

        if self.strstop is not None and not self.strstart <= self.strstop < self.count:
            raise InconsistentFormat(f'version {self.version}: string range {self.strstart}-{self.strstop} is invalid')

        logger.debug('%r is consistent', self)

        super().__setattr__('_frozen', True)
