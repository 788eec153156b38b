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
`singleshot` - handle exactly one HTTP/1.1 request per process.
"""

__version__ = '0.1.0'


def run(app, **options):
    """
    Handle one request with *app*, then exit.

    See `singleshot.server.run()`.
    """
    from .server import run
    return run(app, **options)
