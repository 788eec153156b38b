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
Handle one request from stdin, write the response to stdout.

For example, from inetd or a systemd socket unit with ``Accept=yes``::

    $ python3 -m singleshot --wsgi myproject.wsgi:application

"""

import sys
import logging
import argparse
import importlib

from .base import CHUNK_SIZE
from .server import run


def load_app(target):
    """
    Import the app named by a ``'module:attribute'`` *target*.
    """
    (module_name, sep, attr) = target.partition(':')
    if not (module_name and sep and attr):
        raise ValueError('need a module:attribute; got {!r}'.format(target))
    module = importlib.import_module(module_name)
    obj = module
    for name in attr.split('.'):
        obj = getattr(obj, name)
    return obj


def build_app(args):
    app = load_app(args.app)
    if args.wsgi:
        from .wsgi import WSGIAdapter
        app = WSGIAdapter(app)
    if args.validate:
        from .validate import Validator
        app = Validator(app)
    return app


def build_parser():
    parser = argparse.ArgumentParser(
        prog='singleshot',
        description='Handle one HTTP/1.1 request from stdin, then exit.',
    )
    parser.add_argument('app', help='the app to run, as module:attribute')
    parser.add_argument('--wsgi', action='store_true', default=False,
        help='app is a PEP 3333 WSGI application',
    )
    parser.add_argument('--validate', action='store_true', default=False,
        help='check the app contract on both sides (slow)',
    )
    parser.add_argument('--chunk-size', type=int, default=CHUNK_SIZE,
        help='read size used while looking for the end of the head',
    )
    parser.add_argument('-v', '--verbose', action='store_true', default=False,
        help='log the request and response to stderr',
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.chunk_size < 1:
        parser.error('--chunk-size must be >= 1')
    logging.basicConfig(
        level=(logging.DEBUG if args.verbose else logging.WARNING),
        stream=sys.stderr,
        format='\t'.join([
            '%(levelname)s',
            '%(process)d',
            '%(message)s',
        ]),
    )
    try:
        app = build_app(args)
    except (ImportError, AttributeError, ValueError, TypeError) as e:
        parser.error('cannot load {!r}: {}'.format(args.app, e))
    run(app, chunk_size=args.chunk_size)


if __name__ == '__main__':
    main()
