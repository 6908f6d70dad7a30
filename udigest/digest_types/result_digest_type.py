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

from types import UnionType
from typing import Any, TypeVar, Union, get_args, get_origin

from typing_extensions import Self, override

from udigest.compound_encoding.result import encode_result
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError
from udigest.utils.result import Err, Ok, OkErr, Result

T = TypeVar('T')
E = TypeVar('E')


class ResultDigestType(DigestType[Result[T, E]]):
    """ Represents `Ok[T] | Err[E]` values, usually annotated as `Result[T, E]`.
    """

    __slots__ = ('_ok', '_err')

    _ok: DigestType[T]
    _err: DigestType[E]

    def __init__(self, ok: DigestType[T], err: DigestType[E], /) -> None:
        self._ok = ok
        self._err = err

    @override
    @classmethod
    def _from_type(cls, type_: type[Result[T, E]], /, *, type_map: DigestType.TypeMap) -> Self:
        # XXX: a union of generic aliases, like `Ok[str] | Err[U8]`, is a typing.Union and not a types.UnionType
        if get_origin(type_) not in (Union, UnionType):
            raise UnsupportedTypeError('expected type union')
        inner_types: dict[type, Any] = {}
        for arg in get_args(type_):
            origin = get_origin(arg) or arg
            inner_args = get_args(arg)
            if len(inner_args) > 1:
                raise UnsupportedTypeError(f'expected {origin.__name__}[<type>]')
            inner_types[origin] = inner_args[0] if inner_args else Any
        if set(inner_types) != {Ok, Err}:
            raise UnsupportedTypeError('expected `Ok[T] | Err[E]`')
        return cls(
            DigestType.from_type(inner_types[Ok], type_map=type_map),
            DigestType.from_type(inner_types[Err], type_map=type_map),
        )

    @override
    def _check_value(self, value: Result[T, E], /, *, deep: bool) -> None:
        if not isinstance(value, OkErr):
            raise TypeError('expected Ok or Err')
        if deep:
            match value:
                case Ok(ok):
                    self._ok._check_value(ok, deep=True)
                case Err(err):
                    self._err._check_value(err, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: Result[T, E], /) -> None:
        encode_result(slot, value, self._ok.encode, self._err.encode)
