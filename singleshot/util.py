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
A few simple utility functions useful for most singleshot apps.

The module is heavily inspired by the `wsgiref.util` module in the Python3
standard library:

    https://docs.python.org/3/library/wsgiref.html

"""


def shift_path(environ):
    """
    Shift the next PATH_INFO segment onto SCRIPT_NAME in an *environ*.

    For example:

    >>> environ = {'SCRIPT_NAME': '/foo', 'PATH_INFO': '/bar/baz'}
    >>> shift_path(environ)
    'bar'

    And you can see *environ* was updated in place:

    >>> environ['SCRIPT_NAME']
    '/foo/bar'
    >>> environ['PATH_INFO']
    '/baz'

    `IndexError` is raised when there is nothing left to shift.
    """
    path = environ['PATH_INFO']
    if path in ('', '/'):
        raise IndexError('nothing left to shift in {!r}'.format(path))
    (next, sep, rest) = path[1:].partition('/')
    environ['SCRIPT_NAME'] = environ['SCRIPT_NAME'] + '/' + next
    environ['PATH_INFO'] = sep + rest
    return next


def relative_uri(environ):
    """
    Reconstruct a relative URI from an *environ*.

    For example, when there is no query:

    >>> environ = {'SCRIPT_NAME': '/foo', 'PATH_INFO': '/bar', 'QUERY_STRING': ''}
    >>> relative_uri(environ)
    '/bar'

    And when there is a query:

    >>> environ['QUERY_STRING'] = 'stuff=junk'
    >>> relative_uri(environ)
    '/bar?stuff=junk'

    Note that SCRIPT_NAME is ignored by this function.
    """
    uri = environ['PATH_INFO'] or '/'
    if environ['QUERY_STRING']:
        return '?'.join((uri, environ['QUERY_STRING']))
    return uri


def absolute_uri(environ):
    """
    Reconstruct an absolute URI from an *environ*.

    For example:

    >>> environ = {'SCRIPT_NAME': '/foo', 'PATH_INFO': '/bar', 'QUERY_STRING': 'k=v'}
    >>> absolute_uri(environ)
    '/foo/bar?k=v'

    """
    uri = (environ['SCRIPT_NAME'] + environ['PATH_INFO']) or '/'
    if environ['QUERY_STRING']:
        return '?'.join((uri, environ['QUERY_STRING']))
    return uri


def request_url(environ):
    """
    Reconstruct the full URL of the request described by *environ*.

    The port is only included when it isn't the default for the scheme:

    >>> environ = {
    ...     'wsgi.url_scheme': 'http',
    ...     'SERVER_NAME': 'localhost',
    ...     'SERVER_PORT': '8080',
    ...     'SCRIPT_NAME': '',
    ...     'PATH_INFO': '/params',
    ...     'QUERY_STRING': 'foo=bar',
    ... }
    >>> request_url(environ)
    'http://localhost:8080/params?foo=bar'

    """
    scheme = environ['wsgi.url_scheme']
    host = environ['SERVER_NAME']
    port = environ['SERVER_PORT']
    if (scheme, port) not in (('http', '80'), ('https', '443')):
        host = '{}:{}'.format(host, port)
    return '{}://{}{}'.format(scheme, host, absolute_uri(environ))
