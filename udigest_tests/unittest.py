# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import re
import secrets
from contextlib import contextmanager
from random import Random
from typing import Any, Iterator, Optional
from unittest import TestCase as _TestCase

from structlog import get_logger

from udigest.exceptions import UnsupportedTypeError
from udigest.hashing import encode

logger = get_logger()


class TestCase(_TestCase):
    seed_config: Optional[int] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.seed = secrets.randbits(64) if self.seed_config is None else self.seed_config
        self.log.info('set seed', seed=self.seed)
        self.rng = Random(self.seed)

    def assertEncoding(self, value: Any, expected_hex: str, **kwargs: Any) -> None:
        """Assert that the value (with the given tag/type_) encodes to the expected bytes, given in hex."""
        self.assertEqual(encode(value, **kwargs).hex(), expected_hex)

    def assertSameEncoding(self, first: Any, second: Any) -> None:
        self.assertEqual(encode(first), encode(second))

    def assertDifferentEncoding(self, first: Any, second: Any) -> None:
        self.assertNotEqual(encode(first), encode(second))

    @contextmanager
    def assertUnsupported(self, pattern: str | re.Pattern[str] | None = None) -> Iterator[Any]:
        """Assert that an UnsupportedTypeError is raised and its message matches, when a pattern is given.
        """
        with self.assertRaises(UnsupportedTypeError) as cm:
            yield cm

        if pattern is not None:
            actual = str(cm.exception)
            if isinstance(pattern, re.Pattern):
                assert pattern.search(actual), actual
            else:
                self.assertEqual(pattern, actual)
