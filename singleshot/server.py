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
Handle exactly one HTTP request, then exit.
"""

import sys
import logging
from io import BytesIO
from urllib.parse import urlsplit

from .base import (
    CHUNK_SIZE,
    ParseError,
    read_request,
    write_response,
)


log = logging.getLogger()

# Values of the HTTPS key that select the 'https' scheme:
HTTPS_ON = ('yes', 'on', '1')

DEFAULT_HOST = 'localhost'
DEFAULT_PORTS = {'http': 80, 'https': 443}


def _resolve_stream(stream):
    # Text streams like sys.stdin expose the underlying binary stream:
    return getattr(stream, 'buffer', stream)


def get_scheme(headers):
    """
    Return ``'https'`` or ``'http'`` depending on the HTTPS key in *headers*.

    For example:

    >>> get_scheme({'HTTP_HTTPS': 'on'})
    'https'
    >>> get_scheme({'HTTPS': 'off'})
    'http'

    """
    value = headers.get('HTTPS', headers.get('HTTP_HTTPS'))
    if value in HTTPS_ON:
        return 'https'
    return 'http'


def get_host(headers):
    host = headers.get('SERVER_NAME') or headers.get('HTTP_HOST')
    if host:
        return host
    return DEFAULT_HOST


def _netloc_host(netloc):
    # Like SplitResult.hostname, but keeps the case as sent:
    netloc = netloc.rpartition('@')[2]
    if netloc.startswith('['):
        return netloc[1:].partition(']')[0]
    return netloc.partition(':')[0]


def split_uri(scheme, host, uri):
    """
    Return ``(path, query, hostname, port)`` for a request *uri*.

    For example:

    >>> split_uri('http', 'localhost:8080', '/params?foo=bar&baz=bang')
    ('/params', 'foo=bar&baz=bang', 'localhost', '8080')

    The port defaults to the one implied by the scheme:

    >>> split_uri('https', 'example.com', '/')
    ('/', '', 'example.com', '443')

    The host keeps its case:

    >>> split_uri('http', 'Example.COM', '/')
    ('/', '', 'Example.COM', '80')

    """
    parts = urlsplit(''.join([scheme, '://', host, uri]))
    try:
        port = parts.port
    except ValueError:
        raise ParseError('bad port in host: {!r}'.format(host))
    if port is None:
        port = DEFAULT_PORTS[scheme]
    hostname = _netloc_host(parts.netloc) or DEFAULT_HOST
    return (parts.path, parts.query, hostname, str(port))


def build_environ(request, errors):
    """
    Build the environ dict passed to the app from a `base.Request`.
    """
    environ = request.headers.copy()
    scheme = get_scheme(environ)
    host = get_host(environ)
    (path, query, hostname, port) = split_uri(scheme, host, request.uri)
    environ.update({
        'REQUEST_METHOD': request.method,
        'SCRIPT_NAME': '',
        'PATH_INFO': path,
        'QUERY_STRING': query,
        'SERVER_NAME': hostname,
        'SERVER_PORT': port,
        'SERVER_PROTOCOL': request.version,
        'wsgi.version': (1, 0),
        'wsgi.url_scheme': scheme,
        'wsgi.input': BytesIO(request.body),
        'wsgi.errors': errors,
        'wsgi.multithread': False,
        'wsgi.multiprocess': False,
        'wsgi.run_once': True,
    })
    return environ


class SingleShot:
    _allowed_options = ('errors', 'chunk_size')

    def __init__(self, app, rfile, wfile, **options):
        if not callable(app):
            raise TypeError('app: not callable: {!r}'.format(app))
        if not set(options).issubset(self.__class__._allowed_options):
            cls = self.__class__
            unsupported = sorted(set(options) - set(cls._allowed_options))
            raise TypeError(
                'unsupported {} **options: {}'.format(
                    cls.__name__, ', '.join(unsupported)
                )
            )
        self.app = app
        self.rfile = rfile
        self.wfile = wfile
        self.options = options
        self.errors = options.get('errors', sys.stderr)
        self.chunk_size = options.get('chunk_size', CHUNK_SIZE)
        if not (isinstance(self.chunk_size, int) and self.chunk_size > 0):
            raise ValueError(
                'chunk_size: need an int > 0; got {!r}'.format(self.chunk_size)
            )
        self.closed = False

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.app)

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.wfile.close()

    def read_request(self):
        request = read_request(self.rfile, self.chunk_size)
        log.info('%s %s %s', request.method, request.uri, request.version)
        return build_environ(request, self.errors)

    def write_response(self, status, headers, body):
        total = write_response(self.wfile, status, headers, body)
        log.info('%s response, %d bytes', status, total)
        return total

    def run(self):
        try:
            environ = self.read_request()
            (status, headers, body) = self.app(environ)
            self.write_response(status, headers, body)
        finally:
            self.close()


_run_options = ('rfile', 'wfile') + SingleShot._allowed_options


def run(app, **options):
    """
    Handle one request from stdin to stdout with *app*, then exit.

    The ``rfile`` and ``wfile`` options replace stdin and stdout, the others are
    passed to `SingleShot`.
    """
    if not set(options).issubset(_run_options):
        unsupported = sorted(set(options) - set(_run_options))
        raise TypeError(
            'unsupported run() **options: {}'.format(', '.join(unsupported))
        )
    options = options.copy()
    rfile = _resolve_stream(options.pop('rfile', sys.stdin))
    wfile = _resolve_stream(options.pop('wfile', sys.stdout))
    try:
        handler = SingleShot(app, rfile, wfile, **options)
    except Exception:
        log.exception('cannot handle request with %r', app)
        wfile.close()
        raise SystemExit(1)
    try:
        handler.run()
    except Exception:
        log.exception('%r failed to handle request', handler)
        raise SystemExit(1)
    raise SystemExit(0)
