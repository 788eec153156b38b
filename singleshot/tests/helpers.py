# singleshot: a one-request HTTP/1.1 bridge for process-per-request servers
# Copyright (C) 2026 The singleshot Authors
#
# This file is part of `singleshot`.
#
# `singleshot` is free software: you can redistribute it and/or modify it under
# the terms of the GNU Lesser General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# `singleshot` is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE.  See the GNU Lesser General Public License for more
# details.
#
# You should have received a copy of the GNU Lesser General Public License along
# with `singleshot`.  If not, see <http://www.gnu.org/licenses/>.

"""
Unit test helpers.
"""

from io import BytesIO

from dbase32 import random_id


def random_value():
    """
    Return a random header value, safe to use in a request head.
    """
    return random_id()


class TrickleReader:
    """
    A reader that returns at most *size* bytes per call, like a slow pipe.
    """

    def __init__(self, data, size=1):
        self._buf = BytesIO(data)
        self._size = size
        self._calls = []

    def read1(self, size):
        self._calls.append(('read1', size))
        return self._buf.read(min(size, self._size))

    def read(self, size):
        self._calls.append(('read', size))
        return self._buf.read(min(size, self._size))

    def tell(self):
        return self._buf.tell()


class ReadOnlyFile:
    """
    A reader with only a ``read()`` method.
    """

    def __init__(self, data):
        self._buf = BytesIO(data)
        self._calls = []

    def read(self, size):
        self._calls.append(size)
        return self._buf.read(size)


class DummyWriter:
    def __init__(self, fail=False):
        self._calls = []
        self._parts = []
        self._fail = fail

    def write(self, data):
        self._calls.append('write')
        if self._fail:
            raise OSError('write failed')
        self._parts.append(bytes(data))
        return len(data)

    def flush(self):
        self._calls.append('flush')

    def close(self):
        self._calls.append('close')

    def getvalue(self):
        return b''.join(self._parts)


class DummyBody:
    """
    A response body that records when it's closed.
    """

    def __init__(self, chunks):
        self._chunks = chunks
        self._calls = []

    def __iter__(self):
        self._calls.append('__iter__')
        return iter(self._chunks)

    def close(self):
        self._calls.append('close')
