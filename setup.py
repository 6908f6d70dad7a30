#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup


def _read_version() -> str:
    # XXX: importing udigest here would require its dependencies to be installed before the build
    version_file = Path(__file__).parent / 'udigest' / 'version.py'
    match = re.search(r"^__version__ = '([^']+)'$", version_file.read_text(), re.MULTILINE)
    assert match is not None, 'version not found'
    return match.group(1)


setup(
    name='udigest',
    version=_read_version(),
    description='Unambiguous digests of structured data',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('udigest_tests', 'udigest_tests.*')),
    package_data={'udigest': ['py.typed', 'conf/*.yml']},
    install_requires=[
        'cryptography>=42.0',
        'pydantic>=2.0',
        'pyyaml>=6.0',
        'sortedcontainers>=2.4',
        'structlog>=22.3',
        'typing-extensions>=4.8',
    ],
    extras_require={
        'test': [
            'pytest>=8.0',
        ],
    },
)
