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

from enum import Enum
from typing import TypeVar

from typing_extensions import Self, override

from udigest.compound_encoding.struct import encode_variant
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError

E = TypeVar('E', bound=Enum)


class EnumDigestType(DigestType[E]):
    """ Represents `enum.Enum` members as unit variants, identified by the member's name.

    The member's value is not encoded, renaming a member changes the encoding while changing its value doesn't.

    >>> class Color(Enum):
    ...     RED = 1
    >>> EnumDigestType(Color).to_bytes(Color.RED).hex()
    '76617269616e74000000070503524544000000030503000000020501'
    """

    __slots__ = ('_enum_class',)

    _enum_class: type[E]

    def __init__(self, enum_class: type[E], /) -> None:
        self._enum_class = enum_class

    @override
    @classmethod
    def _from_type(cls, type_: type[E], /, *, type_map: DigestType.TypeMap) -> Self:
        if not (isinstance(type_, type) and issubclass(type_, Enum)):
            raise UnsupportedTypeError('expected Enum subclass')
        return cls(type_)

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self._enum_class):
            raise TypeError(f'expected {self._enum_class.__name__} member')

    @override
    def _encode(self, slot: EncodeValue, value: E, /) -> None:
        encode_variant(slot, value.name)
