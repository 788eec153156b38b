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
Run the unit tests and doc tests.
"""

import sys
from os import path
import unittest
import doctest

import singleshot


MODULES = (
    'base',
    'server',
    'wsgi',
    'validate',
    'util',
    'misc',
)


def run_tests():
    pynames = ['singleshot.' + name for name in MODULES]
    suite = unittest.TestSuite()

    # Add unit tests:
    loader = unittest.TestLoader()
    start = path.dirname(path.abspath(__file__))
    top = path.dirname(path.dirname(path.abspath(singleshot.__file__)))
    suite.addTests(loader.discover(start, top_level_dir=top))

    # Add doc tests:
    for pyname in pynames:
        suite.addTest(doctest.DocTestSuite(pyname))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == '__main__':
    if not run_tests():
        sys.exit(2)
