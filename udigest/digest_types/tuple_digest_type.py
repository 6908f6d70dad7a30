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

from typing import Any, get_args

from typing_extensions import Self, override

from udigest.compound_encoding.tuple import encode_tuple
from udigest.digest_types.collection_digest_type import SequenceDigestType
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError


class TupleDigestType(DigestType[tuple]):
    """ Represents heterogeneous tuples, `tuple[A, B, C]`, encoded as a list of its items.

    Homogeneous tuples, `tuple[T, ...]`, are delegated to a `SequenceDigestType`, both end up with the same encoding.
    """

    __slots__ = ('_args', '_variable')

    _args: tuple[DigestType, ...]
    _variable: SequenceDigestType | None

    def __init__(self, args: tuple[DigestType, ...], variable: SequenceDigestType | None = None) -> None:
        self._args = args
        self._variable = variable

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: DigestType.TypeMap) -> Self:
        args = get_args(type_)
        if not args:
            raise UnsupportedTypeError('expected tuple[<types>] or tuple[<type>, ...]')
        if len(args) == 2 and args[1] is Ellipsis:
            return cls((), SequenceDigestType(DigestType.from_type(args[0], type_map=type_map)))
        if Ellipsis in args:
            raise UnsupportedTypeError('ellipsis is only allowed as the second argument: tuple[<type>, ...]')
        return cls(tuple(DigestType.from_type(arg, type_map=type_map) for arg in args))

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if self._variable is not None:
            if not isinstance(value, tuple):
                raise TypeError('expected tuple')
            self._variable._check_value(value, deep=deep)
            return
        if not isinstance(value, tuple):
            raise TypeError('expected tuple')
        if len(value) != len(self._args):
            raise TypeError(f'expected tuple of size {len(self._args)}, got {len(value)}')
        if deep:
            for i, arg_digest_type in zip(value, self._args):
                arg_digest_type._check_value(i, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: tuple[Any, ...], /) -> None:
        if self._variable is not None:
            self._variable.encode(slot, value)
        else:
            encode_tuple(slot, value, tuple(arg.encode for arg in self._args))
