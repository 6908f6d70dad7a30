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

from udigest.hashing import digest, encode
from udigest.types import U16
from udigest_tests import unittest
from udigest_tests.utils import expected_tree, parse_encoding, random_value

N_VALUES = 300


class EncodingPropertiesTestCase(unittest.TestCase):
    def _random_values(self) -> list:
        return [random_value(self.rng) for _ in range(N_VALUES)]

    def test_encoding_parses_back_to_the_value_tree(self):
        for value in self._random_values():
            self.assertEqual(parse_encoding(encode(value)), [expected_tree(value)], value)

    def test_encoding_is_deterministic(self):
        for value in self._random_values():
            self.assertEqual(encode(value), encode(value))
            self.assertEqual(digest(value), digest(value))

    def test_distinct_trees_have_distinct_encodings(self):
        encodings: dict[bytes, object] = {}
        for value in self._random_values():
            tree = expected_tree(value)
            data = encode(value)
            if data in encodings:
                self.assertEqual(encodings[data], tree, value)
            encodings[data] = tree

    def test_tag_and_value_are_separated(self):
        seen: dict[bytes, tuple] = {}
        for _ in range(N_VALUES):
            tag = self.rng.randbytes(self.rng.randint(0, 3))
            value = random_value(self.rng, depth=1)
            data = encode(value, tag=tag)
            pair = (tag, expected_tree(value))
            self.assertEqual(parse_encoding(data), list(pair))
            self.assertEqual(seen.setdefault(data, pair), pair)

    def test_only_the_shape_is_encoded(self):
        # leaves don't carry their Python type, the declared types are what tell them apart
        self.assertEqual(encode('ab'), encode(b'ab'))
        self.assertEqual(encode(U16(1)), encode(b'\x00\x01'))
        self.assertEqual(encode(['a']), encode(('a',)))
