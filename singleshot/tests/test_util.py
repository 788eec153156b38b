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
Unit tests for the `singleshot.util` module.
"""

from unittest import TestCase
from io import StringIO

from singleshot.base import Request
from singleshot.server import build_environ
from singleshot import util


class TestFunctions(TestCase):
    def test_shift_path(self):
        # path is empty:
        environ = {'SCRIPT_NAME': '/foo', 'PATH_INFO': ''}
        with self.assertRaises(IndexError) as cm:
            util.shift_path(environ)
        self.assertEqual(str(cm.exception), "nothing left to shift in ''")
        self.assertEqual(environ, {'SCRIPT_NAME': '/foo', 'PATH_INFO': ''})

        environ = {'SCRIPT_NAME': '', 'PATH_INFO': '/'}
        with self.assertRaises(IndexError) as cm:
            util.shift_path(environ)
        self.assertEqual(str(cm.exception), "nothing left to shift in '/'")
        self.assertEqual(environ, {'SCRIPT_NAME': '', 'PATH_INFO': '/'})

        # start with populated path:
        environ = {'SCRIPT_NAME': '', 'PATH_INFO': '/foo/bar/baz'}
        self.assertEqual(util.shift_path(environ), 'foo')
        self.assertEqual(environ,
            {'SCRIPT_NAME': '/foo', 'PATH_INFO': '/bar/baz'}
        )
        self.assertEqual(util.shift_path(environ), 'bar')
        self.assertEqual(environ,
            {'SCRIPT_NAME': '/foo/bar', 'PATH_INFO': '/baz'}
        )
        self.assertEqual(util.shift_path(environ), 'baz')
        self.assertEqual(environ,
            {'SCRIPT_NAME': '/foo/bar/baz', 'PATH_INFO': ''}
        )
        with self.assertRaises(IndexError):
            util.shift_path(environ)
        self.assertEqual(environ,
            {'SCRIPT_NAME': '/foo/bar/baz', 'PATH_INFO': ''}
        )

        # trailing slash:
        environ = {'SCRIPT_NAME': '', 'PATH_INFO': '/foo/'}
        self.assertEqual(util.shift_path(environ), 'foo')
        self.assertEqual(environ, {'SCRIPT_NAME': '/foo', 'PATH_INFO': '/'})

    def test_relative_uri(self):
        environ = {'SCRIPT_NAME': '', 'PATH_INFO': '', 'QUERY_STRING': ''}
        self.assertEqual(util.relative_uri(environ), '/')
        environ['SCRIPT_NAME'] = '/foo'
        self.assertEqual(util.relative_uri(environ), '/')
        environ['PATH_INFO'] = '/bar/baz'
        self.assertEqual(util.relative_uri(environ), '/bar/baz')
        environ['QUERY_STRING'] = 'k=v'
        self.assertEqual(util.relative_uri(environ), '/bar/baz?k=v')

    def test_absolute_uri(self):
        environ = {'SCRIPT_NAME': '', 'PATH_INFO': '', 'QUERY_STRING': ''}
        self.assertEqual(util.absolute_uri(environ), '/')
        environ['SCRIPT_NAME'] = '/foo'
        self.assertEqual(util.absolute_uri(environ), '/foo')
        environ['PATH_INFO'] = '/bar/baz'
        self.assertEqual(util.absolute_uri(environ), '/foo/bar/baz')
        environ['QUERY_STRING'] = 'k=v'
        self.assertEqual(util.absolute_uri(environ), '/foo/bar/baz?k=v')

    def test_request_url(self):
        def url_for(uri, **headers):
            request = Request('GET', uri, 'HTTP/1.1', headers, b'')
            return util.request_url(build_environ(request, StringIO()))

        self.assertEqual(url_for('/'), 'http://localhost/')
        self.assertEqual(url_for('/foo?bar=baz', HTTP_HOST='example.com'),
            'http://example.com/foo?bar=baz'
        )
        self.assertEqual(url_for('/', HTTP_HOST='example.com:8080'),
            'http://example.com:8080/'
        )
        self.assertEqual(url_for('/', HTTP_HOST='example.com', HTTPS='on'),
            'https://example.com/'
        )
        self.assertEqual(url_for('/', HTTP_HOST='example.com:80', HTTPS='on'),
            'https://example.com:80/'
        )
        self.assertEqual(url_for('/', HTTP_HOST='example.com:443', HTTPS='on'),
            'https://example.com/'
        )

        # Round trip through shift_path():
        request = Request('GET', '/a/b', 'HTTP/1.1', {}, b'')
        environ = build_environ(request, StringIO())
        self.assertEqual(util.shift_path(environ), 'a')
        self.assertEqual(util.request_url(environ), 'http://localhost/a/b')
        self.assertEqual(util.relative_uri(environ), '/b')
