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
Validation middleware for singleshot apps.

The `Validator` class wraps an app and verifies that both the environ it is
called with and the ``(status, headers, body)`` tuple it returns follow the
singleshot app contract.

The aim is to be strict and to deliver exceedingly clear error messages when
non-conforming behavior is detected.  Performance is sacrificed for the sake of
clarity, so the `Validator` is meant for development and unit testing, not for
everyday production use.
"""

# Provide very clear TypeError messages:
TYPE_ERROR = '{}: need a {!r}; got a {!r}: {!r}'

# Allowed values for environ['wsgi.url_scheme']:
URL_SCHEMES = ('http', 'https')

# Keys every environ must have, with their required type:
REQUIRED_KEYS = (
    ('REQUEST_METHOD', str),
    ('SCRIPT_NAME', str),
    ('PATH_INFO', str),
    ('QUERY_STRING', str),
    ('SERVER_NAME', str),
    ('SERVER_PORT', str),
    ('SERVER_PROTOCOL', str),
    ('wsgi.version', tuple),
    ('wsgi.url_scheme', str),
    ('wsgi.multithread', bool),
    ('wsgi.multiprocess', bool),
    ('wsgi.run_once', bool),
)

# Expected values of the fixed concurrency flags:
FLAGS = (
    ('wsgi.multithread', False),
    ('wsgi.multiprocess', False),
    ('wsgi.run_once', True),
)

# These belong in CONTENT_TYPE and CONTENT_LENGTH instead:
FORBIDDEN_KEYS = ('HTTP_CONTENT_TYPE', 'HTTP_CONTENT_LENGTH')

# Responses with these status codes can't have a Content-Type header:
NO_CONTENT_STATUSES = frozenset([204, 304])


def _getattr(label, obj, name):
    """
    `getattr()` with a clearer error message when attribute is missing.
    """
    if not hasattr(obj, name):
        raise ValueError(
            '{}: {!r} object has no attribute {!r}'.format(
                label, type(obj).__name__, name
            )
        )
    label = '{}.{}'.format(label, name)
    return (label, getattr(obj, name))


def _ensure_callable_attr(label, obj, name):
    """
    Raise a TypeError if *obj* attribute *name* is not callable.

    For example, when *obj* has the attribute *name*:

    >>> import io
    >>> _ensure_callable_attr("environ['wsgi.input']", io.BytesIO(), 'read')

    Or when *obj* has no attribute *name*:

    >>> _ensure_callable_attr("environ['wsgi.errors']", io.BytesIO(), 'nope')
    Traceback (most recent call last):
      ...
    ValueError: environ['wsgi.errors']: 'BytesIO' object has no attribute 'nope'

    """
    (label, value) = _getattr(label, obj, name)
    if not callable(value):
        raise TypeError('{}() is not callable'.format(label))


def _check_dict(label, obj):
    """
    Ensure that *obj* is a `dict` instance and contains only `str` keys.

    For example, when *obj* isn't a `dict`:

    >>> _check_dict('environ', [('foo', 'bar')])
    Traceback (most recent call last):
      ...
    TypeError: environ: need a <class 'dict'>; got a <class 'list'>: [('foo', 'bar')]

    Or when *obj* contains a non-string key:

    >>> _check_dict('environ', {b'foo': 'bar'})
    Traceback (most recent call last):
      ...
    TypeError: environ: keys must be <class 'str'>; got a <class 'bytes'>: b'foo'

    """
    if not isinstance(obj, dict):
        raise TypeError(TYPE_ERROR.format(label, dict, type(obj), obj))
    for key in obj:
        if not isinstance(key, str):
            raise TypeError('{}: keys must be {!r}; got a {!r}: {!r}'.format(
                    label, str, type(key), key
                )
            )


def _get_path(label, value, *path):
    """
    Return a ``(label, value)`` tuple.

    For example, with an empty path:

    >>> environ = {'wsgi.version': (1, 0)}
    >>> _get_path('environ', environ)
    ('environ', {'wsgi.version': (1, 0)})

    Or with a single value path:

    >>> _get_path('environ', environ, 'wsgi.version')
    ("environ['wsgi.version']", (1, 0))

    Or with a path that is 2 deep:

    >>> _get_path('environ', environ, 'wsgi.version', 1)
    ("environ['wsgi.version'][1]", 0)

    Or when first path item is missing:

    >>> _get_path('environ', environ, 'PATH_INFO')
    Traceback (most recent call last):
      ...
    ValueError: environ['PATH_INFO'] does not exist

    """
    for key in path:
        assert isinstance(key, (str, int))
        label = '{}[{!r}]'.format(label, key)
        try:
            value = value[key]
        except (KeyError, IndexError):
            raise ValueError(
                '{} does not exist'.format(label)
            )
    return (label, value)


def _validate_environ(environ):
    """
    Validate the *environ* argument.
    """
    _check_dict('environ', environ)

    for (key, kind) in REQUIRED_KEYS:
        (label, value) = _get_path('environ', environ, key)
        if not isinstance(value, kind):
            raise TypeError(TYPE_ERROR.format(label, kind, type(value), value))

    for key in FORBIDDEN_KEYS:
        if key in environ:
            raise ValueError(
                'environ: {!r} must not be present, use {!r}'.format(
                    key, key[5:]
                )
            )

    # REQUEST_METHOD:
    (label, value) = _get_path('environ', environ, 'REQUEST_METHOD')
    if value == '':
        raise ValueError('{} cannot be empty'.format(label))

    # SCRIPT_NAME and PATH_INFO:
    (label, value) = _get_path('environ', environ, 'SCRIPT_NAME')
    if value == '/':
        raise ValueError("{} cannot be '/'".format(label))
    if value != '' and not value.startswith('/'):
        raise ValueError(
            "{} must be '' or start with '/'; got {!r}".format(label, value)
        )
    (label, value) = _get_path('environ', environ, 'PATH_INFO')
    if value != '' and not value.startswith('/'):
        raise ValueError(
            "{} must be '' or start with '/'; got {!r}".format(label, value)
        )
    if environ['SCRIPT_NAME'] == '' and value == '':
        raise ValueError(
            "environ: SCRIPT_NAME and PATH_INFO cannot both be ''"
        )

    # SERVER_NAME and SERVER_PORT:
    (label, value) = _get_path('environ', environ, 'SERVER_NAME')
    if value == '':
        raise ValueError('{} cannot be empty'.format(label))
    (label, value) = _get_path('environ', environ, 'SERVER_PORT')
    if not value.isdigit():
        raise ValueError('{} must be digits; got {!r}'.format(label, value))

    # CONTENT_LENGTH:
    if 'CONTENT_LENGTH' in environ:
        (label, value) = _get_path('environ', environ, 'CONTENT_LENGTH')
        if not (isinstance(value, str) and value.isdigit()):
            raise ValueError('{} must be digits; got {!r}'.format(label, value))

    # wsgi.version:
    (label, value) = _get_path('environ', environ, 'wsgi.version')
    if len(value) != 2:
        raise ValueError(
            'len({}) must be 2; got {}: {!r}'.format(label, len(value), value)
        )
    for i in range(len(value)):
        (label, value) = _get_path('environ', environ, 'wsgi.version', i)
        if not isinstance(value, int):
            raise TypeError(TYPE_ERROR.format(label, int, type(value), value))

    # wsgi.url_scheme:
    (label, value) = _get_path('environ', environ, 'wsgi.url_scheme')
    if value not in URL_SCHEMES:
        raise ValueError(
            '{}: value {!r} not in {!r}'.format(label, value, URL_SCHEMES)
        )

    # wsgi.input and wsgi.errors:
    (label, value) = _get_path('environ', environ, 'wsgi.input')
    _ensure_callable_attr(label, value, 'read')
    (label, value) = _get_path('environ', environ, 'wsgi.errors')
    for name in ('write', 'flush'):
        _ensure_callable_attr(label, value, name)

    # Concurrency flags:
    for (key, expected) in FLAGS:
        (label, value) = _get_path('environ', environ, key)
        if value is not expected:
            raise ValueError(
                '{} must be {!r}; got {!r}'.format(label, expected, value)
            )


def _check_headers(label, headers):
    """
    Validate the response *headers* dictionary.
    """
    _check_dict(label, headers)
    for (key, value) in headers.items():
        if key == '' or ':' in key or key != ''.join(key.split()):
            raise ValueError('{}: bad header name: {!r}'.format(label, key))
        if key.lower() == 'status':
            raise ValueError(
                '{}: must not contain a {!r} header'.format(label, key)
            )
        if not isinstance(value, str):
            raise TypeError(
                '{}[{!r}]: need a {!r}; got a {!r}: {!r}'.format(
                    label, key, str, type(value), value
                )
            )
        if '\r' in value:
            raise ValueError(
                '{}[{!r}]: value contains a CR: {!r}'.format(label, key, value)
            )


def _validate_response(response):
    """
    Validate the *response* tuple returned by the app.
    """
    if not isinstance(response, tuple):
        raise TypeError(
            TYPE_ERROR.format('response', tuple, type(response), response)
        )
    if len(response) != 3:
        raise ValueError(
            'len(response) must be 3, got {}'.format(len(response))
        )

    # response[0] (status):
    (label, status) = _get_path('response', response, 0)
    if type(status) is not int:
        raise TypeError(TYPE_ERROR.format(label, int, type(status), status))
    if not (100 <= status <= 599):
        raise ValueError(
            '{}: need 100 <= status <= 599; got {}'.format(label, status)
        )

    # response[1] (headers):
    (label, headers) = _get_path('response', response, 1)
    _check_headers(label, headers)
    if status < 200 or status in NO_CONTENT_STATUSES:
        for key in headers:
            if key.lower() == 'content-type':
                raise ValueError(
                    '{}: Content-Type header not allowed with status {}'.format(
                        label, status
                    )
                )

    # response[2] (body):
    (label, body) = _get_path('response', response, 2)
    if isinstance(body, (str, bytes, bytearray)):
        raise TypeError(
            '{}: must be an iterable of chunks, not a {!r}'.format(
                label, type(body)
            )
        )
    if not hasattr(body, '__iter__'):
        raise TypeError(
            '{}: {!r} object is not iterable'.format(label, type(body).__name__)
        )


class BodyValidator:
    """
    Check each chunk of a response body as it's produced.
    """

    __slots__ = ('body', 'closed')

    def __init__(self, body):
        self.body = body
        self.closed = False

    def __iter__(self):
        if self.closed:
            raise ValueError('response body iterated after close()')
        for (i, chunk) in enumerate(self.body):
            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise TypeError(
                    TYPE_ERROR.format(
                        'response[2] chunk {}'.format(i), bytes, type(chunk), chunk
                    )
                )
            yield chunk

    def close(self):
        if self.closed:
            raise ValueError('response body closed more than once')
        self.closed = True
        close = getattr(self.body, 'close', None)
        if close is not None:
            close()


class Validator:
    __slots__ = ('app',)

    def __init__(self, app):
        if not callable(app):
            raise TypeError('app: not callable: {!r}'.format(app))
        self.app = app

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.app)

    def __call__(self, environ):
        _validate_environ(environ)
        orig_environ = environ.copy()
        response = self.app(environ)
        _validate_response(response)
        if environ['wsgi.input'] is not orig_environ['wsgi.input']:
            raise ValueError("app replaced environ['wsgi.input']")
        (status, headers, body) = response
        return (status, headers, BodyValidator(body))
