class EchiException(Exception):
    '''Base class to extend in order to throw exception in echidecode.

    It takes an optional argument that represents the chain of the slots that
    caused the exception.
    '''

    def __init__(self, message='', chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)


class UnpackException(EchiException):
    pass


class TruncatedRecord(UnpackException):
    '''The buffer is shorter than the layout it is unpacked with.'''

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(f'record truncated: expected {expected} bytes, got {actual}', chain=chain)


class TruncatedHeader(UnpackException):
    '''The input ended before the file header could be read.'''

    def __init__(self, actual, chain=None):
        self.actual = actual
        super().__init__(f'file header truncated: got {actual} bytes', chain=chain)


class UnsupportedVersion(EchiException):

    def __init__(self, version):
        self.version = version
        super().__init__(f'unsupported file version {version}, can\'t process')


class WriteFailure(EchiException):
    '''The output stream refused a write: this is not recoverable.'''

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f'cannot write to output: {reason}')


class InconsistentFormat(EchiException):
    pass
