import io
import logging
import sys

from .exceptions import WriteFailure


logger = logging.getLogger(__name__)

# the output is byte-faithful with respect to the text slots
ENCODING = 'latin-1'


class Stream(object):
    '''This is a simple wrapper around path/bytes/file objects to
    uniform its properties: mainly we need a read_exact() method
    that returns a whole record even when the underlying object
    is a pipe returning short reads.

    A path equal to '-' means the standard input.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal binary file object'''
        self._type = type(obj)
        self.obj = obj
        self.owned = False
        self.name = getattr(obj, 'name', '<%s>' % self._type.__name__)

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        self.name = self.obj
        if self.obj == '-':
            logger.debug('reading from the standard input')
            self.obj = sys.stdin.buffer
            return

        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self.owned = True

    init_PosixPath = init_WindowsPath = init_str

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes

    def init_file(self):
        '''A file object: text streams are read through their binary buffer'''
        if isinstance(self.obj, io.TextIOBase):
            self.obj = self.obj.buffer

    def read_exact(self, size):
        '''Read up to size bytes, looping over short reads.

        A result shorter than size means the end of the stream was reached.'''
        data = []
        missing = size
        while missing > 0:
            b = self.obj.read(missing)
            if not b:
                break
            data.append(b)
            missing -= len(b)

        return b''.join(data)

    def close(self):
        if self.owned:
            self.obj.close()


class OutputStream(object):
    '''Line oriented text output.

    Any OSError raised by the underlying object, or text that can't be
    encoded, is converted into a WriteFailure. A path equal to '-' means
    the standard output.'''
    def __init__(self, obj):
        self.obj = obj
        self.owned = False
        self.name = getattr(obj, 'name', '<%s>' % type(obj).__name__)
        self._detach = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        try:
            init_method()
        except OSError as e:
            raise WriteFailure(e.strerror or str(e)) from e

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def init_str(self):
        self.name = self.obj
        if self.obj == '-':
            logger.debug('writing to the standard output')
            self.obj = io.TextIOWrapper(sys.stdout.buffer, encoding=ENCODING, newline='\n')
            self._detach = True
            return

        logger.debug('opening path \'%s\' for writing' % self.obj)
        self.obj = open(self.obj, 'w', encoding=ENCODING, newline='\n')
        self.owned = True

    init_PosixPath = init_WindowsPath = init_str

    def init_file(self):
        pass

    def write_line(self, line):
        try:
            self.obj.write(line + '\n')
        except OSError as e:
            raise WriteFailure(e.strerror or str(e)) from e
        except UnicodeEncodeError as e:
            raise WriteFailure(f'can\'t encode {e.object[e.start:e.end]!r} as {e.encoding}') from e

    def close(self):
        try:
            if self.owned:
                self.obj.close()
            else:
                self.obj.flush()
            if self._detach:
                # leave sys.stdout usable
                self.obj.detach()
        except OSError as e:
            raise WriteFailure(e.strerror or str(e)) from e
