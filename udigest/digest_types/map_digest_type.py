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

from collections import OrderedDict
from collections.abc import Mapping
from typing import ClassVar, TypeVar, get_args, get_origin

from sortedcontainers import SortedDict
from typing_extensions import Self, override

from udigest.compound_encoding.mapping import encode_mapping
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError

K = TypeVar('K')
V = TypeVar('V')


class _MapDigestType(DigestType[Mapping[K, V]]):
    """ Base class for mappings with a canonical iteration order, encoded as a list of `[key, value]` lists.
    """

    __slots__ = ('_key', '_value')

    # XXX: subclass must define the accepted value type
    _value_type: ClassVar[type[Mapping]]

    _key: DigestType[K]
    _value: DigestType[V]

    def __init__(self, key: DigestType[K], value: DigestType[V], /) -> None:
        self._key = key
        self._value = value

    @override
    @classmethod
    def _from_type(cls, type_: type[Mapping[K, V]], /, *, type_map: DigestType.TypeMap) -> Self:
        origin_type = get_origin(type_) or type_
        args = get_args(type_)
        if len(args) != 2:
            raise UnsupportedTypeError(f'expected {origin_type.__name__}[<key type>, <value type>]')
        key_type, value_type = args
        return cls(
            DigestType.from_type(key_type, type_map=type_map),
            DigestType.from_type(value_type, type_map=type_map),
        )

    @override
    def _check_value(self, value: Mapping[K, V], /, *, deep: bool) -> None:
        if not isinstance(value, self._value_type):
            raise TypeError(f'expected {self._value_type.__name__}')
        if deep:
            for k, v in value.items():
                self._key._check_value(k, deep=True)
                self._value._check_value(v, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: Mapping[K, V], /) -> None:
        encode_mapping(slot, value, self._key.encode, self._value.encode)


class SortedDictDigestType(_MapDigestType[K, V]):
    """ Represents `sortedcontainers.SortedDict[K, V]` values, entries are encoded in sorted key order.
    """

    _value_type = SortedDict


class OrderedDictDigestType(_MapDigestType[K, V]):
    """ Represents `collections.OrderedDict[K, V]` values, entries are encoded in insertion order.

    The insertion order is part of an `OrderedDict` value (it takes part in equality), so two equal values still have
    the same encoding.
    """

    _value_type = OrderedDict
