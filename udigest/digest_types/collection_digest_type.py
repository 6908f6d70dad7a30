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

from __future__ import annotations

from collections import deque
from collections.abc import Collection
from typing import ClassVar, TypeVar, get_args, get_origin

from sortedcontainers import SortedSet
from typing_extensions import Self, override

from udigest.compound_encoding.collection import encode_collection
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError

T = TypeVar('T')


class _CollectionDigestType(DigestType[Collection[T]]):
    """ Used as base for DigestType classes that represent collections, all of them are encoded as a list.
    """

    __slots__ = ('_item',)

    # XXX: subclass must define the accepted value types
    _value_types: ClassVar[tuple[type, ...]]

    _item: DigestType[T]

    def __init__(self, item_digest_type: DigestType[T], /) -> None:
        self._item = item_digest_type

    @override
    @classmethod
    def _from_type(cls, type_: type[Collection[T]], /, *, type_map: DigestType.TypeMap) -> Self:
        origin_type = get_origin(type_) or type_
        args = get_args(type_)
        if len(args) != 1:
            raise UnsupportedTypeError(f'expected {origin_type.__name__}[<type>]')
        return cls(DigestType.from_type(args[0], type_map=type_map))

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, self._value_types):
            expected = ', '.join(t.__name__ for t in self._value_types)
            raise TypeError(f'expected one of: {expected}')
        if deep:
            for item in value:
                self._item._check_value(item, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: Collection[T], /) -> None:
        encode_collection(slot, value, self._item.encode)


class SequenceDigestType(_CollectionDigestType[T]):
    """ Represents `list[T]`, `collections.deque[T]` and `tuple[T, ...]` values.

    Sequences of the same items encode the same regardless of which of these containers holds them.
    """

    _value_types = (list, tuple, deque)


class SortedSetDigestType(_CollectionDigestType[T]):
    """ Represents `sortedcontainers.SortedSet[T]` values, items are encoded in their sorted order.

    Builtin sets are not accepted, they have no canonical iteration order.
    """

    _value_types = (SortedSet,)
