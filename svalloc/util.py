from datetime import datetime
import logging

from .constants import SvallocNamespace


class Log:
    """
    wrapper aroung the builtin logging to make it more readable
    """
    def __init__(self, indent_str='  ', indent_level=0, level=logging.INFO):
        self.indent_str = indent_str
        self.indent_level = indent_level
        self.level = level

    def __call__(self, *pos, time_stamp=False, level=None, indent_level=0, **kwargs):
        if self.level is None:
            return
        elif level is None:
            level = self.level

        stamp = datetime.now().strftime('[%Y-%m-%d %H:%M:%S]') if time_stamp else ' ' * 21
        indent_prefix = self.indent_str * (self.indent_level + indent_level)
        message = '{} {}{}'.format(stamp, indent_prefix, ' '.join([str(p) for p in pos]))
        logging.log(level, message, **kwargs)


LOG = Log()
DEVNULL = Log(level=None)


class WeakSvallocNamespace(SvallocNamespace):

    def is_env_overwritable(self, attr):
        return True


class PeekingIterator:
    """
    iterator wrapper with one element of lookahead
    """
    _EMPTY = object()

    def __init__(self, iterable):
        self._iterator = iter(iterable)
        self._next = self._EMPTY

    def has_next(self):
        if self._next is self._EMPTY:
            try:
                self._next = next(self._iterator)
            except StopIteration:
                return False
        return True

    def peek(self):
        if not self.has_next():
            raise StopIteration()
        return self._next

    def __iter__(self):
        return self

    def __next__(self):
        if not self.has_next():
            raise StopIteration()
        result = self._next
        self._next = self._EMPTY
        return result


