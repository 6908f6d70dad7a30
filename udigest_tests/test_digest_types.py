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
from collections import OrderedDict, deque
from enum import Enum, StrEnum
from typing import Any, Optional, TypeVar, Union

from sortedcontainers import SortedDict, SortedSet

from udigest.digest_types import DigestType, make_digest_type
from udigest.hashing import encode
from udigest.types import I8, I16, U8, U16, U64
from udigest.utils.result import Err, Ok, Result
from udigest_tests import unittest
from udigest_tests.utils import parse_encoding

T = TypeVar('T')


class Color(Enum):
    RED = 1
    GREEN = 2


class Shade(StrEnum):
    LIGHT = 'light'
    DARK = 'dark'


def _none() -> tuple:
    return (b'variant', b'None')


def _some(tree: Any) -> tuple:
    return (b'variant', b'Some', b'0', tree)


class DigestTypeTestCase(unittest.TestCase):
    def _run_test(self, type_: Any, value: T, expected_tree: Any) -> None:
        digest_type: DigestType[T] = make_digest_type(type_)
        digest_type.check_value(value)
        self.assertEqual(parse_encoding(digest_type.to_bytes(value)), [expected_tree])

    def _assert_check_fails(self, type_: Any, value: Any, error: type[Exception] = TypeError) -> None:
        digest_type = make_digest_type(type_)
        with self.assertRaises(error):
            digest_type.check_value(value)

    def test_bool(self):
        self._run_test(bool, True, b'\x01')
        self._run_test(bool, False, b'\x00')
        self._assert_check_fails(bool, 1)

    def test_str(self):
        self._run_test(str, '', b'')
        self._run_test(str, 'áéíóú', 'áéíóú'.encode('utf-8'))
        self._assert_check_fails(str, b'abc')
        self._assert_check_fails(str, '\ud800', ValueError)

    def test_bytes(self):
        self._run_test(bytes, b'\x00\x01', b'\x00\x01')
        self._run_test(bytes, bytearray(b'\x02'), b'\x02')
        self._run_test(bytearray, b'\x03', b'\x03')
        self._run_test(memoryview, memoryview(b'\x04'), b'\x04')
        self._assert_check_fails(bytes, 'abc')

    def test_sized_ints(self):
        self._run_test(U8, 255, b'\xff')
        self._run_test(U16, 24, b'\x00\x18')
        self._run_test(I8, -1, b'\xff')
        self._run_test(U64, 1, b'\x00' * 7 + b'\x01')
        self._assert_check_fails(U8, 256, ValueError)
        self._assert_check_fails(I8, -129, ValueError)
        self._assert_check_fails(U8, True)
        self._assert_check_fails(U8, '1')

    def test_integer_width_is_part_of_the_encoding(self):
        self.assertNotEqual(make_digest_type(U8).to_bytes(1), make_digest_type(U16).to_bytes(1))
        self.assertNotEqual(make_digest_type(I8).to_bytes(-1), make_digest_type(I16).to_bytes(-1))

    def test_integer_signedness_is_not_part_of_the_encoding(self):
        # only the bytes of the leaf are encoded, the declared type tells them apart
        self.assertEqual(make_digest_type(U8).to_bytes(255), make_digest_type(I8).to_bytes(-1))

    def test_list(self):
        self._run_test(list[str], [], ())
        self._run_test(list[str], ['a', 'b'], (b'a', b'b'))
        self._run_test(list[list[bool]], [[True], []], ((b'\x01',), ()))
        self._assert_check_fails(list[str], ['a', 1])
        self._assert_check_fails(list[str], 'ab')

    def test_sequences_share_the_encoding(self):
        expected = (b'a', b'b')
        self._run_test(list[str], ('a', 'b'), expected)
        self._run_test(deque[str], deque(['a', 'b']), expected)
        self._run_test(tuple[str, ...], ('a', 'b'), expected)
        self._run_test(tuple[str, str], ('a', 'b'), expected)

    def test_tuple(self):
        self._run_test(tuple[str, bool, U8], ('a', True, 2), (b'a', b'\x01', b'\x02'))
        self._assert_check_fails(tuple[str, bool], ('a',))
        self._assert_check_fails(tuple[str, bool], ('a', 'b'))
        self._assert_check_fails(tuple[str, bool], ['a', True])

    def test_optional(self):
        for type_ in [Optional[str], Union[str, None], str | None, None | str]:
            self._run_test(type_, None, _none())
            self._run_test(type_, 'x', _some(b'x'))

    def test_nested_optional(self):
        self._run_test(Optional[list[Optional[str]]], [None, 'a'], _some((_none(), _some(b'a'))))

    def test_optional_is_not_an_absent_value(self):
        self.assertNotEqual(make_digest_type(Optional[str]).to_bytes(None), make_digest_type(str).to_bytes(''))

    def test_result(self):
        type_ = Result[str, U8]
        self._run_test(type_, Ok('done'), (b'variant', b'Ok', b'0', b'done'))
        self._run_test(type_, Err(3), (b'variant', b'Err', b'0', b'\x03'))
        self._run_test(Ok[str] | Err[U8], Ok('done'), (b'variant', b'Ok', b'0', b'done'))
        self._run_test(Err[U8] | Ok[str], Err(3), (b'variant', b'Err', b'0', b'\x03'))
        self._assert_check_fails(type_, 'done')
        self._assert_check_fails(type_, Err('not an int'))

    def test_result_without_args(self):
        self._run_test(Ok | Err, Ok(U8(1)), (b'variant', b'Ok', b'0', b'\x01'))

    def test_enum(self):
        self._run_test(Color, Color.GREEN, (b'variant', b'GREEN'))
        self._assert_check_fails(Color, 2)

    def test_enum_members_are_encoded_by_name(self):
        self._run_test(Shade, Shade.DARK, (b'variant', b'DARK'))
        self._assert_check_fails(Shade, 'dark')
        # the same without a declared type, even if the member is also a str
        self.assertEqual(encode(Shade.DARK), encode(Shade.DARK, type_=Shade))
        self.assertEqual(parse_encoding(encode(Shade.DARK)), [(b'variant', b'DARK')])
        self.assertNotEqual(encode(Shade.DARK), encode('dark'))

    def test_sorted_dict(self):
        value = SortedDict({'b': U8(2), 'a': U8(1)})
        self._run_test(SortedDict[str, U8], value, ((b'a', b'\x01'), (b'b', b'\x02')))
        self._assert_check_fails(SortedDict[str, U8], {'a': 1})

    def test_sorted_dict_insertion_order_is_irrelevant(self):
        digest_type = make_digest_type(SortedDict[str, bool])
        first = SortedDict([('a', True), ('b', False)])
        second = SortedDict([('b', False), ('a', True)])
        self.assertEqual(digest_type.to_bytes(first), digest_type.to_bytes(second))

    def test_sorted_set(self):
        self._run_test(SortedSet[str], SortedSet(['b', 'a', 'b']), (b'a', b'b'))
        self._assert_check_fails(SortedSet[str], {'a'})

    def test_sorted_set_with_key(self):
        value = SortedSet(['a', 'ccc', 'bb'], key=lambda item: -len(item))
        self._run_test(SortedSet[str], value, (b'ccc', b'bb', b'a'))

    def test_ordered_dict(self):
        value = OrderedDict([('b', True), ('a', False)])
        self._run_test(OrderedDict[str, bool], value, ((b'b', b'\x01'), (b'a', b'\x00')))
        self._assert_check_fails(OrderedDict[str, bool], {'a': True})

    def test_mapping_and_list_of_pairs_share_the_encoding(self):
        value = SortedDict({'a': True})
        self.assertEqual(
            make_digest_type(SortedDict[str, bool]).to_bytes(value),
            make_digest_type(list[tuple[str, bool]]).to_bytes([('a', True)]),
        )

    def test_any(self):
        self._run_test(Any, ['a', U8(1), None], (b'a', b'\x01', _none()))
        self._run_test(list[Any], [True, b'x'], (b'\x01', b'x'))
        self._assert_check_fails(Any, [1.5])

    def test_aliased_types(self):
        self._run_test(list[bytearray], [b'a'], (b'a',))
        self._run_test(Optional[memoryview], b'a', _some(b'a'))

    def test_rejected_types(self):
        cases = [
            (dict[str, U8], 'dict has no canonical iteration order, use SortedDict'),
            (dict, 'dict has no canonical iteration order, use SortedDict'),
            (set[str], 'set has no canonical iteration order, use SortedSet'),
            (frozenset[str], 'frozenset has no canonical iteration order, use SortedSet'),
            (int, 'int has no fixed width, use one of U8..U128 or I8..I128'),
            (float, 'float has no canonical encoding'),
            (complex, 'complex has no canonical encoding'),
            (list[int], 'int has no fixed width'),
            (Optional[float], 'float has no canonical encoding'),
            (SortedDict[str, set[str]], 'set has no canonical iteration order'),
        ]
        for type_, reason in cases:
            with self.assertUnsupported(re.compile(re.escape(reason))):
                make_digest_type(type_)

    def test_unsupported_types(self):
        class Plain:
            pass

        for type_ in [Plain, object, str | bytes, Union[str, U8, None], type(None)]:
            with self.assertUnsupported():
                make_digest_type(type_)

    def test_unsupported_shapes(self):
        for type_ in [list, tuple, SortedDict, SortedSet[str, str], tuple[str, ..., str], 'str']:
            with self.assertRaises(TypeError):
                make_digest_type(type_)

    def test_digest_types_are_reusable(self):
        digest_type = make_digest_type(list[str])
        self.assertEqual(digest_type.to_bytes(['a']), digest_type.to_bytes(['a']))
        self.assertNotEqual(digest_type.to_bytes(['a']), digest_type.to_bytes(['b']))
