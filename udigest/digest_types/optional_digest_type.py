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

from types import NoneType, UnionType
# XXX: ignore attr-defined because mypy doesn't recognize it, even though all version of python that we support; have
#      this defined, even if it's an internal class
from typing import TypeVar, _UnionGenericAlias as UnionGenericAlias, get_args  # type: ignore[attr-defined]

from typing_extensions import Self, override

from udigest.compound_encoding.optional import encode_optional
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError

V = TypeVar('V')


class OptionalDigestType(DigestType[V | None]):
    """ Represents a digest_type that is either `V` or `None`.
    """

    __slots__ = ('_value',)

    _value: DigestType[V]

    def __init__(self, digest_type: DigestType[V]) -> None:
        self._value = digest_type

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: DigestType.TypeMap) -> Self:
        if not isinstance(type_, (UnionType, UnionGenericAlias)):
            raise UnsupportedTypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if len(args) != 2 or NoneType not in args:
            raise UnsupportedTypeError(f'{type_}: type must be either `None | T` or `T | None`')
        not_none_type, = tuple(arg for arg in args if arg is not NoneType)
        return cls(DigestType.from_type(not_none_type, type_map=type_map))

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        if deep:
            self._value._check_value(value, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: V | None, /) -> None:
        encode_optional(slot, value, self._value.encode)
