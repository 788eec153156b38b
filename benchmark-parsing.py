#!/usr/bin/python3

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

import timeit

setup = """
gc.enable()

from io import BytesIO

from singleshot.base import (
    drain,
    parse_headers,
    parse_content_length,
    parse_request_line,
    read_request,
    format_response,
)
from singleshot.server import build_environ

request = b''.join([
    b'POST /foo/bar?stuff=junk HTTP/1.1\\r\\n',
    b'Content-Type: application/json\\r\\n',
    b'Accept: application/json\\r\\n',
    b'Content-Length: 12\\r\\n',
    b'User-Agent: Microfiber/14.12.0 (Ubuntu 14.04; x86_64)\\r\\n',
    b'X-Token: VVI5KPPRN5VOG9DITDLEOEIB\\r\\n',
    b'\\r\\n',
    b'{"hello": 1}',
])
headers_src = request.split(b'\\r\\n\\r\\n')[0].decode('latin_1').partition('\\r\\n')[2]
parsed = read_request(BytesIO(request))
headers = {
    'Content-Type': 'application/json',
    'Content-Length': '12',
    'Set-Cookie': 'a=1\\nb=2',
}
"""


def run_iter(statement, n):
    for i in range(10):
        t = timeit.Timer(statement, setup)
        yield t.timeit(n)


def run(statement, K=50):
    n = K * 1000
    # Choose fastest of 10 runs:
    elapsed = min(run_iter(statement, n))
    rate = int(n / elapsed)
    print('{:>11,}: {}'.format(rate, statement))
    return rate


print('-' * 80)

print('\nHeader parsing:')
run('parse_headers(headers_src)')
run("parse_headers('Content-Length: 123456')")
run("parse_headers('Content-Length: 123456\\r\\nContent-Type: application/json')")
run("parse_content_length('0')")
run("parse_content_length('9999999999999999')")

print('\nRequest parsing:')
run('drain(BytesIO(request))')
run('drain(BytesIO(request), chunk_size=16)')
run('read_request(BytesIO(request))')
run("read_request(BytesIO(b'GET / HTTP/1.1\\r\\n\\r\\n'))")
run("parse_request_line('GET / HTTP/1.1')")
run("parse_request_line('DELETE /foo/bar?stuff=junk HTTP/1.1')")
run('build_environ(parsed, None)')

print('\nResponse formatting:')
run('format_response(200, {})')
run("format_response(200, {'Content-Length': '17'})")
run('format_response(200, headers)')

print('-' * 80)
