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
HTTP/1.1 request parser and response writer.
"""

import logging
from collections import namedtuple
from http import HTTPStatus


CRLF = b'\r\n'
TERMINATOR = CRLF * 2
CHUNK_SIZE = 1024

# Normalized header keys that don't get the 'HTTP_' prefix:
CGI_KEYS = frozenset(['CONTENT_TYPE', 'CONTENT_LENGTH', 'SERVER_NAME'])

# Request methods whose body is only what arrived together with the head:
BUFFERED_METHODS = frozenset(['POST', 'PUT'])

DECIMAL = frozenset(b'0123456789')

REASONS = dict((s.value, s.phrase) for s in HTTPStatus)

# Provide very clear TypeError messages:
TYPE_ERROR = '{}: need a {!r}; got a {!r}: {!r}'

log = logging.getLogger()

Request = namedtuple('Request', 'method uri version headers body')


class ParseError(ValueError):
    def __init__(self, reason):
        self.reason = reason
        super().__init__(reason)


class MalformedRequestLine(ParseError):
    pass


def _getcallable(objname, obj, name):
    attr = getattr(obj, name)
    if not callable(attr):
        raise TypeError('{}.{}() is not callable'.format(objname, name))
    return attr


def _get_read1(rfile):
    if hasattr(rfile, 'read1'):
        return _getcallable('rfile', rfile, 'read1')
    return _getcallable('rfile', rfile, 'read')


################################################################################
# Request parsing:

def drain(rfile, stop_at=TERMINATOR, chunk_size=CHUNK_SIZE):
    """
    Read from *rfile* till *stop_at* is found, return ``(head, extra)``.

    *head* is everything before *stop_at*, *extra* is whatever was read after
    it:

    >>> from io import BytesIO
    >>> drain(BytesIO(b'GET / HTTP/1.1\\r\\n\\r\\nhello'))
    (b'GET / HTTP/1.1', b'hello')

    When end-of-input is reached first, everything read is the *head*:

    >>> drain(BytesIO(b'GET / HTTP/1.1\\r\\n'))
    (b'GET / HTTP/1.1\\r\\n', b'')

    """
    if not stop_at:
        raise ValueError('stop_at cannot be empty')
    if not (isinstance(chunk_size, int) and chunk_size > 0):
        raise ValueError(
            'need chunk_size > 0; got {!r}'.format(chunk_size)
        )
    read1 = _get_read1(rfile)
    buf = bytearray()
    while True:
        chunk = read1(chunk_size)
        if not chunk:
            return (bytes(buf), b'')
        # Only the tail of the previous buffer can start a match:
        start = max(0, len(buf) - len(stop_at) + 1)
        buf.extend(chunk)
        index = buf.find(stop_at, start)
        if index >= 0:
            head = bytes(buf[:index])
            extra = bytes(buf[index + len(stop_at):])
            return (head, extra)


def read_exactly(rfile, size):
    """
    Read up to *size* bytes from *rfile*, stopping early only at end-of-input.
    """
    if size <= 0:
        return b''
    read = _getcallable('rfile', rfile, 'read')
    accum = []
    remaining = size
    while remaining > 0:
        data = read(remaining)
        if not data:
            break
        accum.append(data)
        remaining -= len(data)
    return b''.join(accum)


def parse_request_line(line):
    """
    Split a request line into ``(method, uri, version)``.

    For example:

    >>> parse_request_line('GET /foo?bar=baz HTTP/1.1')
    ('GET', '/foo?bar=baz', 'HTTP/1.1')

    """
    if line.strip() == '':
        raise MalformedRequestLine('request line is empty')
    parts = line.split()
    if len(parts) != 3:
        raise MalformedRequestLine('bad request line: {!r}'.format(line))
    return tuple(parts)


def header_key(key):
    """
    Normalize a header name into its environment key.

    For example:

    >>> header_key('X-Forwarded-For')
    'HTTP_X_FORWARDED_FOR'

    Except for the few names in `CGI_KEYS`:

    >>> header_key('Content-Type')
    'CONTENT_TYPE'

    """
    key = key.upper().replace('-', '_')
    if key in CGI_KEYS:
        return key
    return 'HTTP_' + key


def iter_header_lines(src):
    """
    Yield ``(key, value)`` for each well formed line in the header block *src*.

    Lines without a ``': '`` separator yield ``(None, line)``.
    """
    for line in src.split('\r\n'):
        if line == '':
            continue
        parts = line.split(': ', 1)
        if len(parts) != 2:
            yield (None, line)
            continue
        yield (header_key(parts[0]), parts[1])


def parse_headers(src):
    """
    Parse a raw header block into a dict keyed by normalized names.

    For example:

    >>> parse_headers('Content-Type: text/plain\\r\\nX-Foo: bar')
    {'CONTENT_TYPE': 'text/plain', 'HTTP_X_FOO': 'bar'}

    """
    headers = {}
    for (key, value) in iter_header_lines(src):
        if key is None:
            log.warning('skipping bad header line: %r', value)
            continue
        headers[key] = value
    return headers


def parse_content_length(src):
    if len(src) < 1:
        raise ParseError('content-length is empty')
    if len(src) > 16:
        raise ParseError(
            'content-length too long: {!r}...'.format(src[:16])
        )
    if not DECIMAL.issuperset(src.encode('latin_1')):
        raise ParseError('bad bytes in content-length: {!r}'.format(src))
    return int(src)


def request_body_length(method, headers):
    """
    Return how many body bytes belong to the request, or None.

    None means the body is only what was read together with the head.  This is
    always the case for POST and PUT:

    >>> request_body_length('POST', {'CONTENT_LENGTH': '5'}) is None
    True
    >>> request_body_length('GET', {'CONTENT_LENGTH': '5'})
    5

    """
    if method.upper() in BUFFERED_METHODS:
        return None
    if 'CONTENT_LENGTH' in headers:
        return parse_content_length(headers['CONTENT_LENGTH'])


def parse_request(head, extra, rfile):
    """
    Build a `Request` from *head*, reading any missing body bytes from *rfile*.
    """
    (heading, _, header_block) = head.decode('latin_1').partition('\r\n')
    (method, uri, version) = parse_request_line(heading)
    headers = parse_headers(header_block)
    length = request_body_length(method, headers)
    if length is None:
        body = extra
    elif len(extra) >= length:
        body = extra[:length]
    else:
        body = extra + read_exactly(rfile, length - len(extra))
    return Request(method, uri, version, headers, body)


def read_request(rfile, chunk_size=CHUNK_SIZE):
    (head, extra) = drain(rfile, TERMINATOR, chunk_size)
    return parse_request(head, extra, rfile)


################################################################################
# Response formatting:

def get_reason(status):
    """
    Return the reason phrase for *status*, or ``''`` when it's unknown.

    >>> get_reason(404)
    'Not Found'
    >>> get_reason(299)
    ''

    """
    try:
        return REASONS.get(int(status), '')
    except (TypeError, ValueError):
        return ''


def format_response(status, headers):
    lines = ['HTTP/1.1 {} {}\r\n'.format(status, get_reason(status))]
    for (key, value) in headers.items():
        for sub in str(value).split('\n'):
            lines.append('{}: {}\r\n'.format(key, sub))
    lines.append('\r\n')
    return ''.join(lines).encode('latin_1')


def write_body(wfile, body):
    total = 0
    try:
        for chunk in body:
            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise TypeError(
                    TYPE_ERROR.format('chunk', bytes, type(chunk), chunk)
                )
            wfile.write(chunk)
            if isinstance(chunk, memoryview):
                total += chunk.nbytes
            else:
                total += len(chunk)
    finally:
        close = getattr(body, 'close', None)
        if close is not None:
            close()
    return total


def write_response(wfile, status, headers, body):
    preamble = format_response(status, headers)
    wfile.write(preamble)
    total = len(preamble) + write_body(wfile, body)
    wfile.flush()
    return total
