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
Unit tests for the `singleshot` package.
"""

from unittest import TestCase
from io import BytesIO

import singleshot
from singleshot.misc import CapturedOutput


class TestConstants(TestCase):
    def test_version(self):
        self.assertIsInstance(singleshot.__version__, str)
        parts = singleshot.__version__.split('.')
        self.assertEqual(len(parts), 3)
        for part in parts:
            p = int(part)
            self.assertTrue(p >= 0)
            self.assertEqual(str(p), part)


class TestFunctions(TestCase):
    def test_run(self):
        def app(environ):
            return (200, {}, [environ['PATH_INFO'].encode()])

        rfile = BytesIO(b'GET /foo HTTP/1.1\r\n\r\n')
        wfile = CapturedOutput()
        with self.assertRaises(SystemExit) as cm:
            singleshot.run(app, rfile=rfile, wfile=wfile)
        self.assertEqual(cm.exception.code, 0)
        self.assertEqual(wfile.value, b'HTTP/1.1 200 OK\r\n\r\n/foo')

        with self.assertRaises(TypeError) as cm:
            singleshot.run(app, bad=True)
        self.assertEqual(str(cm.exception),
            'unsupported run() **options: bad'
        )
