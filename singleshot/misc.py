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
In-memory request harness and an echo app, mostly for unit tests.
"""

import json
from io import BytesIO
from hashlib import sha1

from .server import SingleShot


JSON_TYPES = (dict, list, tuple, str, int, float, bool, type(None))


def get_value(value):
    if isinstance(value, JSON_TYPES):
        return value
    return repr(value)


def echo_app(environ):
    """
    Reply with a JSON description of the request.
    """
    obj = {'environ': {}}
    for (key, value) in environ.items():
        obj['environ'][key] = get_value(value)
    data = environ['wsgi.input'].read()
    obj['echo.content_length'] = len(data)
    obj['echo.content_sha1'] = sha1(data).hexdigest()
    body = json.dumps(obj, sort_keys=True, indent=4).encode()
    headers = {
        'Content-Type': 'application/json',
        'Content-Length': str(len(body)),
    }
    if environ['REQUEST_METHOD'] == 'HEAD':
        return (200, headers, [])
    return (200, headers, [body])


class CapturedOutput(BytesIO):
    """
    A `BytesIO` that keeps its value around after it's closed.
    """

    def __init__(self):
        super().__init__()
        self.value = None

    def close(self):
        if not self.closed:
            self.value = self.getvalue()
        super().close()


def run_request(app, data, **options):
    """
    Handle the raw request *data* with *app*, return the raw response.

    For example:

    >>> def app(environ):
    ...     return (200, {'Content-Type': 'text/plain'}, [b'hello'])
    ...
    >>> run_request(app, b'GET / HTTP/1.1\\r\\n\\r\\n')
    b'HTTP/1.1 200 OK\\r\\nContent-Type: text/plain\\r\\n\\r\\nhello'

    """
    wfile = CapturedOutput()
    handler = SingleShot(app, BytesIO(data), wfile, **options)
    handler.run()
    return wfile.value
