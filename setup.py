#!/usr/bin/python
"""A setuptools-based script for distributing and installing memodigest."""

# Copyright 2026 memodigest authors

# This file is part of memodigest.
# See `License` for details of license and warranty.

from setuptools import setup

with open('README.markdown') as readmeFile:
    long_description = readmeFile.read()

requires = [ line.rstrip('\n') for line in open('requirements.txt') if line.strip() ]

setup(
    name = 'memodigest',
    version = '0.1.dev1',
    description = 'Memoization of functions keyed by digests of their arguments.',
    license = 'BSD 3-clause (see License file)',
    packages = ['memodigest'],
    install_requires = requires,
    python_requires = '>=3.8',
    scripts = ['bin/time_memoized_inv.py'],
    long_description = long_description,
    long_description_content_type = 'text/markdown',
)
