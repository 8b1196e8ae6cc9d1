'''
Registry of the supported ECHI format versions.

The mapping is read-only: it's populated once at import time from the
tables in the cms module.
'''
import logging
from types import MappingProxyType
from typing import List

from ..descriptor import FormatDescriptor
from ..exceptions import UnsupportedVersion
from .cms import (
    R3V4,
    R3V5,
    R3V6,
    R3V8,
    R11,
    R12,
    R16,
    R16_3,
    R17,
)


logger = logging.getLogger(__name__)


FORMATS = MappingProxyType({
    descriptor.version: descriptor for descriptor in (
        R3V4,
        R3V5,
        R3V6,
        R3V8,
        R11,
        R12,
        R16,
        R16_3,
        R17,
    )
})


def lookup(version: int) -> FormatDescriptor:
    try:
        descriptor = FORMATS[version]
    except KeyError:
        raise UnsupportedVersion(version) from None

    logger.debug('version %d resolved as %r', version, descriptor)

    return descriptor


def supported_versions() -> List[int]:
    return sorted(FORMATS)
