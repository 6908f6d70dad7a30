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
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, NamedTuple, Optional

from sortedcontainers import SortedDict

from udigest.buffer import Buffer
from udigest.derive import digestable, digestable_union, field, get_record_digest_type, inline_struct
from udigest.digest_types import make_digest_type
from udigest.encoder import EncodeValue
from udigest.encoding.bytes import encode_bytes
from udigest.exceptions import UnsupportedTypeError
from udigest.hashing import encode, encode_into
from udigest.types import I32, U8, U16, U64
from udigest.utils.result import Err, Ok, Result
from udigest_tests import unittest
from udigest_tests.utils import Tagged, parse_encoding


class SomeValue:
    def __init__(self, data: bytes) -> None:
        self.data = data


def encode_some_value(slot: EncodeValue, value: SomeValue) -> None:
    encode_bytes(slot, value.data)


def encode_bar(slot: EncodeValue, value: object) -> None:
    list_ = slot.encode_list()
    list_.add_leaf().chain('foo')
    list_.add_leaf().chain('bar')
    list_.finish()


@digestable
@dataclass
class Person:
    name: str
    age: U16
    job_title: str


@digestable(tag='udigest.example.v1')
@dataclass
class DigestableExample:
    some_string: str
    integer: int = field(as_=U64)
    items: list[str] = field(default_factory=list)
    raw: list[int] = field(as_bytes=True, default_factory=list)
    more_bytes: SomeValue = field(rename='more more bytes', with_=encode_some_value, default=SomeValue(b''))
    ignored: object = field(skip=True, default=None)


@digestable
@dataclass
class WithEncoder:
    foo: object = field(with_=encode_bar)


@digestable
@dataclass
class Scores:
    scores: dict[str, U8] = field(as_=SortedDict)


@digestable
class Point(NamedTuple):
    x: Annotated[int, field(as_=I32)]
    y: Annotated[int, field(as_=I32)]


@digestable
@dataclass
class Node:
    value: str
    children: 'list[Node]'
    parent_name: 'Optional[str]' = None


@digestable
@dataclass
class Outcome:
    result: Result[str, U8]
    fallback: Err[U8] | Ok[str]


@digestable(tag='tone')
class Tone(Enum):
    LOW = 1
    HIGH = 2


@digestable_union(tag='shape')
class Shape:
    pass


@Shape.variant
@dataclass
class Circle(Shape):
    radius: U16


@Shape.variant(name='Rect')
@dataclass
class Rectangle(Shape):
    width: U16
    height: U16


@dataclass
class Undecorated:
    name: str


class UndecoratedTuple(NamedTuple):
    name: str


ALICE_ENCODING = (
    '6e616d65000000040503416c69636500000005050361676500000003050300180000000205036a6f625f7469746c650000000905036372'
    '7970746f677261706865720000000d0503000000060501'
)


class DeriveTestCase(unittest.TestCase):
    def test_person(self):
        alice = Person(name='Alice', age=U16(24), job_title='cryptographer')
        self.assertEncoding(alice, ALICE_ENCODING)

    def test_record_is_a_struct(self):
        alice = Person(name='Alice', age=U16(24), job_title='cryptographer')
        self.assertSameEncoding(alice, inline_struct(name='Alice', age=U16(24), job_title='cryptographer'))
        self.assertDifferentEncoding(alice, inline_struct(age=U16(24), name='Alice', job_title='cryptographer'))

    def test_declared_width_is_used(self):
        # a plain int is accepted when the field declares its width
        self.assertSameEncoding(Person('Alice', 24, 'cryptographer'), Person('Alice', U16(24), 'cryptographer'))
        with self.assertRaises(ValueError):
            encode(Person('Alice', 2**16, 'cryptographer'))

    def test_field_options(self):
        example = DigestableExample(
            some_string='hello',
            integer=5,
            items=['a'],
            raw=[1, 2],
            more_bytes=SomeValue(b'xyz'),
            ignored=object(),
        )
        expected = Tagged(b'udigest.example.v1', (
            b'some_string', b'hello',
            b'integer', (5).to_bytes(8, 'big'),
            b'items', (b'a',),
            b'raw', b'\x01\x02',
            b'more more bytes', b'xyz',
        ))
        self.assertEqual(parse_encoding(encode(example)), [expected])
        self.assertEqual(
            get_record_digest_type(DigestableExample).field_names,
            ('some_string', 'integer', 'items', 'raw', 'more more bytes'),
        )

    def test_field_options_match_inline_struct(self):
        example = DigestableExample('hello', 5, ['a'], [1, 2], SomeValue(b'xyz'))
        same = inline_struct(
            'udigest.example.v1',
            some_string='hello',
            integer=U64(5),
            items=['a'],
            raw=b'\x01\x02',
            **{'more more bytes': b'xyz'},
        )
        self.assertSameEncoding(example, same)

    def test_skipped_field_is_ignored(self):
        first = DigestableExample('hello', 5, ignored='one')
        second = DigestableExample('hello', 5, ignored=2.5)
        self.assertSameEncoding(first, second)

    def test_field_with_encoder(self):
        self.assertEqual(parse_encoding(encode(WithEncoder(foo=None))), [(b'foo', (b'foo', b'bar'))])

    def test_field_as_sorted_dict(self):
        first = Scores({'b': 2, 'a': 1})
        second = Scores({'a': 1, 'b': 2})
        self.assertSameEncoding(first, second)
        self.assertEqual(parse_encoding(encode(first)), [(b'scores', ((b'a', b'\x01'), (b'b', b'\x02')))])

    def test_named_tuple(self):
        self.assertEqual(
            parse_encoding(encode(Point(1, -2))),
            [(b'x', b'\x00\x00\x00\x01', b'y', b'\xff\xff\xff\xfe')],
        )
        self.assertSameEncoding(Point(1, -2), inline_struct(x=I32(1), y=I32(-2)))

    def test_self_referencing_record(self):
        tree = Node('root', [Node('leaf', [], parent_name='root')])
        expected = (
            b'value', b'root',
            b'children', ((
                b'value', b'leaf',
                b'children', (),
                b'parent_name', (b'variant', b'Some', b'0', b'root'),
            ),),
            b'parent_name', (b'variant', b'None'),
        )
        self.assertEqual(parse_encoding(encode(tree)), [expected])
        self.assertEqual(get_record_digest_type(Node).field_names, ('value', 'children', 'parent_name'))

    def test_records_in_annotations(self):
        digest_type = make_digest_type(list[Person])
        alice = Person('Alice', U16(24), 'cryptographer')
        self.assertEqual(digest_type.to_bytes([alice]), encode([alice]))
        with self.assertRaises(TypeError):
            digest_type.check_value([inline_struct(name='Alice')])

    def test_enum_with_tag(self):
        self.assertEqual(parse_encoding(encode(Tone.HIGH)), [Tagged(b'tone', (b'variant', b'HIGH'))])

    def test_union(self):
        self.assertEqual(
            parse_encoding(encode(Circle(U16(1)))),
            [Tagged(b'shape', (b'variant', b'Circle', b'radius', b'\x00\x01'))],
        )
        self.assertEqual(
            parse_encoding(encode(Rectangle(U16(2), U16(3)))),
            [Tagged(b'shape', (b'variant', b'Rect', b'width', b'\x00\x02', b'height', b'\x00\x03'))],
        )
        self.assertSameEncoding(Circle(U16(1)), inline_struct('shape', variant='Circle', radius=U16(1)))

    def test_union_in_annotations(self):
        digest_type = make_digest_type(list[Shape])
        shapes = [Circle(U16(1)), Rectangle(U16(2), U16(3))]
        self.assertEqual(digest_type.to_bytes(shapes), encode(shapes))

    def test_union_rejects_unregistered_classes(self):
        class Triangle(Shape):
            pass

        with self.assertUnsupported('Shape is not a registered variant of Shape'):
            encode(Shape())
        with self.assertUnsupported('Triangle is not a registered variant of Shape'):
            encode(Triangle())

    def test_unregistered_variants_are_rejected_before_writing(self):
        class Triangle(Shape):
            pass

        buffer = Buffer.build_bytes_buffer()
        with self.assertUnsupported('Triangle is not a registered variant of Shape'):
            encode_into(buffer, Triangle(), tag='t')
        with self.assertUnsupported('Triangle is not a registered variant of Shape'):
            encode_into(buffer, [Circle(U16(1)), Triangle()], tag='t', type_=list[Shape])
        self.assertEqual(buffer.finalize(), b'')

    def test_subclasses_of_records_must_be_decorated(self):
        @dataclass
        class Employee(Person):
            salary: U64

        alice = Employee('Alice', U16(24), 'cryptographer', U64(1))
        bob = Employee('Alice', U16(24), 'cryptographer', U64(2))
        for employee in (alice, bob):
            with self.assertUnsupported('Employee is a dataclass, records must be decorated with @digestable'):
                encode(employee)
        with self.assertUnsupported(re.compile('it must be decorated with @digestable too$')):
            make_digest_type(list[Person]).check_value([alice])
        with self.assertUnsupported(re.compile('records must be decorated with @digestable$')):
            make_digest_type(Employee)
        with self.assertRaises(TypeError):
            get_record_digest_type(Person).check_value(alice)

        buffer = Buffer.build_bytes_buffer()
        with self.assertUnsupported():
            encode_into(buffer, [alice], type_=list[Person])
        self.assertEqual(buffer.finalize(), b'')

    def test_decorated_subclasses_encode_their_own_fields(self):
        @digestable
        @dataclass
        class Manager(Person):
            reports: U8

        manager = Manager('Alice', U16(24), 'cryptographer', U8(2))
        self.assertSameEncoding(
            manager,
            inline_struct(name='Alice', age=U16(24), job_title='cryptographer', reports=U8(2)),
        )
        self.assertEqual(make_digest_type(Person).to_bytes(manager), encode(manager))
        self.assertDifferentEncoding(manager, Person('Alice', U16(24), 'cryptographer'))

    def test_result_fields(self):
        self.assertSameEncoding(
            Outcome(Ok('done'), Err(3)),
            inline_struct(result=Ok('done'), fallback=Err(U8(3))),
        )
        self.assertEqual(
            parse_encoding(encode(Outcome(Err(1), Ok('x')))),
            [(
                b'result', (b'variant', b'Err', b'0', b'\x01'),
                b'fallback', (b'variant', b'Ok', b'0', b'x'),
            )],
        )
        with self.assertRaises(TypeError):
            encode(Outcome('done', Err(3)))

    def test_union_variant_errors(self):
        @digestable_union
        class Base:
            pass

        @Base.variant
        @dataclass
        class First(Base):
            value: str

        with self.assertRaises(ValueError):
            @Base.variant(name='First')
            @dataclass
            class Second(Base):
                value: str

        with self.assertRaises(TypeError):
            @Base.variant
            @dataclass
            class Unrelated:
                value: str

        with self.assertUnsupported():
            @Base.variant
            class NotARecord(Base):
                pass

        self.assertSameEncoding(First('x'), inline_struct(variant='First', value='x'))

    def test_unsupported_annotations_are_rejected_when_decorating(self):
        with self.assertUnsupported(re.compile(r'Bad\.count: int: int has no fixed width')):
            @digestable
            @dataclass
            class Bad:
                count: int

        with self.assertUnsupported(re.compile(r'records must be decorated with @digestable$')):
            @digestable
            @dataclass
            class Outer:
                inner: Undecorated

    def test_digestable_requires_a_record_or_enum(self):
        with self.assertUnsupported():
            @digestable
            class Plain:
                pass

    def test_undecorated_records_are_rejected(self):
        with self.assertUnsupported(re.compile('records must be decorated with @digestable')):
            encode(UndecoratedTuple('x'))
        with self.assertUnsupported():
            encode(Undecorated('x'))
        with self.assertUnsupported():
            get_record_digest_type(Undecorated)

    def test_duplicated_field_names(self):
        with self.assertRaises(ValueError):
            @digestable
            @dataclass
            class Duplicated:
                first: str = field(rename='second')
                second: str = ''

    def test_field_options_are_mutually_exclusive(self):
        with self.assertRaises(ValueError):
            field(skip=True, as_bytes=True)
        with self.assertRaises(ValueError):
            field(as_=U64, with_=encode_bar)
        # rename combines with anything
        field(rename='other', as_=U64)

    def test_field_keeps_other_metadata(self):
        @digestable
        @dataclass
        class WithMetadata:
            value: str = field(rename='other', metadata={'doc': 'a value'})

        from dataclasses import fields
        self.assertEqual(fields(WithMetadata)[0].metadata['doc'], 'a value')
        self.assertEqual(get_record_digest_type(WithMetadata).field_names, ('other',))

    def test_inline_struct(self):
        first = inline_struct(a=U8(1), b='x')
        self.assertEqual(first, inline_struct(a=U8(1), b='x'))
        self.assertNotEqual(first, inline_struct('tag', a=U8(1), b='x'))
        self.assertNotEqual(first, inline_struct(b='x', a=U8(1)))
        self.assertEqual(hash(first), hash(inline_struct(a=U8(1), b='x')))
        self.assertEqual(repr(first), "inline_struct(a=U8(1), b='x')")
        self.assertEqual(parse_encoding(encode(first)), [(b'a', b'\x01', b'b', b'x')])
        self.assertEqual(parse_encoding(encode(inline_struct())), [()])

    def test_inline_struct_rejects_unsized_ints(self):
        with self.assertUnsupported():
            encode(inline_struct(a=1))
