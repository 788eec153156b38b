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

"""
Handle one request from stdin with `singleshot.misc.echo_app()`.

For example:

    $ printf 'GET /foo HTTP/1.1\r\nHost: example.com\r\n\r\n' | ./run-echo-app.py

"""

import logging

from singleshot import run
from singleshot.misc import echo_app


logging.basicConfig(
    level=logging.DEBUG,
    format='\t'.join([
        '%(levelname)s',
        '%(process)d',
        '%(message)s',
    ]),
)

run(echo_app)
