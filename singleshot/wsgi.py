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
Run a PEP 3333 WSGI application as a singleshot app.

A singleshot app returns a ``(status, headers, body)`` tuple, whereas a WSGI
application reports its status and headers through ``start_response()``.
`WSGIAdapter` converts the latter into the former:

>>> def hello(environ, start_response):
...     start_response('200 OK', [('Content-Type', 'text/plain')])
...     return [b'hello']
...
>>> app = WSGIAdapter(hello)
>>> (status, headers, body) = app({})
>>> (status, headers, list(body))
(200, {'Content-Type': 'text/plain'}, [b'hello'])

"""

from urllib.parse import unquote

from .base import TYPE_ERROR


def parse_status(status):
    """
    Return the integer code of a WSGI status line.

    >>> parse_status('404 Not Found')
    404

    """
    if not isinstance(status, str):
        raise TypeError(TYPE_ERROR.format('status', str, type(status), status))
    code = status.split(' ', 1)[0]
    if len(code) != 3 or not code.isdigit():
        raise ValueError('bad status: {!r}'.format(status))
    return int(code)


def merge_headers(header_list):
    """
    Merge a WSGI header list into a dict, joining repeated names with a newline.

    >>> merge_headers([('Set-Cookie', 'a=1'), ('Set-Cookie', 'b=2')])
    {'Set-Cookie': 'a=1\\nb=2'}

    """
    headers = {}
    for (key, value) in header_list:
        if key in headers:
            headers[key] = '\n'.join([headers[key], value])
        else:
            headers[key] = value
    return headers


def _check_chunk(data):
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(TYPE_ERROR.format('chunk', bytes, type(data), data))
    return data


class ResponseBody:
    """
    Iterate through data passed to ``write()``, then through the app iterable.

    *result* is what the WSGI application returned, *source* is the iterator
    still to be consumed (usually ``iter(result)``).
    """

    __slots__ = ('written', 'result', 'source')

    def __init__(self, written, result, source):
        self.written = written
        self.result = result
        self.source = source

    def __iter__(self):
        for data in self.written:
            yield data
        for data in self.source:
            yield _check_chunk(data)

    def close(self):
        close = getattr(self.result, 'close', None)
        if close is not None:
            close()


class StartResponse:
    __slots__ = ('status', 'headers', 'written')

    def __init__(self):
        self.status = None
        self.headers = None
        self.written = []

    def __call__(self, status, headers, exc_info=None):
        # Nothing reaches the wire before the app returns, so with *exc_info*
        # an earlier status and headers are simply replaced:
        if exc_info is None and self.status is not None:
            raise ValueError('start_response() already called')
        self.status = parse_status(status)
        self.headers = merge_headers(headers)
        return self.write

    def write(self, data):
        if self.status is None:
            raise ValueError('write() before start_response()')
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(TYPE_ERROR.format('data', bytes, type(data), data))
        self.written.append(bytes(data))


class WSGIAdapter:
    __slots__ = ('wsgi_app',)

    def __init__(self, wsgi_app):
        if not callable(wsgi_app):
            raise TypeError('wsgi_app: not callable: {!r}'.format(wsgi_app))
        self.wsgi_app = wsgi_app

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.wsgi_app)

    def __call__(self, environ):
        # WSGI apps expect PATH_INFO percent-decoded, as latin-1 "bytes as str":
        if 'PATH_INFO' in environ:
            environ = environ.copy()
            environ['PATH_INFO'] = unquote(
                environ['PATH_INFO'], encoding='latin-1'
            )
        start_response = StartResponse()
        result = self.wsgi_app(environ, start_response)
        source = iter(result)
        if start_response.status is None:
            # A generator app calls start_response() on its first iteration:
            try:
                start_response.written.append(_check_chunk(next(source)))
            except StopIteration:
                pass
            except BaseException:
                ResponseBody([], result, source).close()
                raise
        if start_response.status is None:
            ResponseBody([], result, source).close()
            raise ValueError(
                '{!r} did not call start_response()'.format(self.wsgi_app)
            )
        body = ResponseBody(start_response.written, result, source)
        return (start_response.status, start_response.headers, body)
