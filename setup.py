#!/usr/bin/env python3

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
Install `singleshot`.
"""

import sys
if sys.version_info < (3, 5):
    sys.exit('ERROR: singleshot requires Python 3.5 or newer')

from setuptools import setup, Command

import singleshot


class Test(Command):
    description = 'run the unit tests and module doctests'

    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        from singleshot.tests.run import run_tests
        if not run_tests():
            raise SystemExit(2)


setup(
    name='singleshot',
    description='a one-request HTTP/1.1 bridge for process-per-request servers',
    version=singleshot.__version__,
    license='LGPLv3+',
    packages=[
        'singleshot',
        'singleshot.tests',
    ],
    python_requires='>=3.5',
    extras_require={
        'test': ['dbase32'],
    },
    entry_points={
        'console_scripts': [
            'singleshot = singleshot.__main__:main',
        ],
    },
    cmdclass={
        'test': Test,
    },
)
