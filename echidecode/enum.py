from enum import Enum, auto


class DecoderPhase(Enum):
    '''Enum to state the actual phase of a stream decoder'''
    AWAITING_HEADER = 0
    STREAMING       = auto()
    DONE            = auto()
